"""
URL list reader.

Reads the designated column of a CSV file as opaque URL strings, in file
order, stopping once ``limit`` URLs have been collected.
"""

import csv
import logging
from pathlib import Path
from typing import List, Optional, Union

from url_comparator.exceptions import InputFileError

logger = logging.getLogger(__name__)


def read_urls_from_csv(
    file_path: Union[str, Path],
    limit: Optional[int] = None,
    column: str = "url",
) -> List[str]:
    """
    Read URLs from the ``column`` column of a CSV file.

    Rows whose cell is missing or empty are skipped and do not count
    towards ``limit``.

    Args:
        file_path: CSV file with a header row
        limit: Maximum number of URLs to return, None for all
        column: Header name of the URL column

    Returns:
        URLs in file order

    Raises:
        InputFileError: If the file is missing, unreadable, or lacks the column
    """
    urls: List[str] = []
    try:
        with open(file_path, "r", encoding="utf-8", newline="") as f:
            reader = csv.DictReader(f)
            if reader.fieldnames is None or column not in reader.fieldnames:
                raise InputFileError(
                    f"CSV file {file_path} has no '{column}' column "
                    f"(found: {reader.fieldnames or []})"
                )
            for row in reader:
                if limit is not None and len(urls) >= limit:
                    break
                value = row.get(column)
                if value:
                    urls.append(value)
    except FileNotFoundError as e:
        raise InputFileError(f"URL list file not found: {file_path}") from e
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise InputFileError(f"Failed to read URL list {file_path}: {e}") from e

    logger.info("Read %d URLs from %s", len(urls), file_path)
    return urls
