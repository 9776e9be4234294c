"""
Configuration loader for the URL comparator

Resolves run settings from defaults, an optional YAML file validated against
a JSON schema, environment variables and explicit overrides, and provides a
logging filter that keeps request-header secrets out of the logs.
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import jsonschema
import yaml

from url_comparator.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_FILE_A = os.path.join("data", "file1.csv")
DEFAULT_FILE_B = os.path.join("data", "file2.csv")
DEFAULT_OUTPUT_FILE = os.path.join("output", "comparison_report.txt")
DEFAULT_LIMIT = 1000
DEFAULT_BATCH_SIZE = 100
DEFAULT_URL_COLUMN = "url"

ENV_PREFIX = "URL_COMPARATOR_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

SETTINGS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "file_a": {"type": "string", "minLength": 1},
        "file_b": {"type": "string", "minLength": 1},
        "output_file": {"type": "string", "minLength": 1},
        "json_report_file": {"type": ["string", "null"]},
        "limit": {"type": "integer", "minimum": 1},
        "batch_size": {"type": "integer", "minimum": 1},
        "timeout": {"type": ["number", "null"], "exclusiveMinimum": 0},
        "url_column": {"type": "string", "minLength": 1},
        "log_level": {
            "type": "string",
            "enum": list(LOG_LEVELS),
        },
        "headers": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
    },
}

# env var suffix -> (field name, converter)
_ENV_FIELDS = {
    "FILE_A": ("file_a", str),
    "FILE_B": ("file_b", str),
    "OUTPUT_FILE": ("output_file", str),
    "JSON_REPORT_FILE": ("json_report_file", str),
    "LIMIT": ("limit", int),
    "BATCH_SIZE": ("batch_size", int),
    "TIMEOUT": ("timeout", float),
    "URL_COLUMN": ("url_column", str),
    "LOG_LEVEL": ("log_level", str),
}


class SecretRedactionFilter(logging.Filter):
    """Masks configured request-header values in log messages and their args."""

    MASK = "***REDACTED***"

    def __init__(self, headers: Optional[Mapping[str, Any]] = None):
        super().__init__()
        # Values of three characters or fewer would mask ordinary words
        self.redacted_values = {
            str(value) for value in (headers or {}).values() if len(str(value)) > 3
        }

    def filter(self, record: logging.LogRecord) -> bool:
        if self.redacted_values:
            record.msg = self._redact(str(record.msg))
            if isinstance(record.args, dict):
                record.args = {k: self._redact(str(v)) for k, v in record.args.items()}
            elif record.args:
                record.args = tuple(self._redact(str(arg)) for arg in record.args)
        return True

    def _redact(self, text: str) -> str:
        for value in self.redacted_values:
            text = text.replace(value, self.MASK)
        return text


@dataclass(frozen=True)
class Settings:
    """
    Resolved configuration for one comparison run.

    ``limit`` and ``batch_size`` are the only values the comparison engine
    itself consumes; the rest configure the reader, fetcher, writer and logs.
    """

    file_a: str = DEFAULT_FILE_A
    file_b: str = DEFAULT_FILE_B
    output_file: str = DEFAULT_OUTPUT_FILE
    json_report_file: Optional[str] = None
    limit: int = DEFAULT_LIMIT
    batch_size: int = DEFAULT_BATCH_SIZE
    timeout: Optional[float] = None
    url_column: str = DEFAULT_URL_COLUMN
    log_level: str = "INFO"
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if isinstance(self.limit, bool) or not isinstance(self.limit, int) or self.limit < 1:
            raise ConfigurationError(f"limit must be a positive integer, got {self.limit!r}")
        if (
            isinstance(self.batch_size, bool)
            or not isinstance(self.batch_size, int)
            or self.batch_size < 1
        ):
            raise ConfigurationError(
                f"batch_size must be a positive integer, got {self.batch_size!r}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout!r}")
        if str(self.log_level).upper() not in LOG_LEVELS:
            raise ConfigurationError(
                f"log_level must be one of {list(LOG_LEVELS)}, got {self.log_level!r}"
            )

    @classmethod
    def load(
        cls,
        config_path: Optional[str] = None,
        environ: Optional[Mapping[str, str]] = None,
        **overrides: Any,
    ) -> "Settings":
        """
        Resolve settings with precedence defaults < YAML < environment < overrides.

        Args:
            config_path: Optional YAML configuration file
            environ: Environment mapping (defaults to os.environ)
            **overrides: Explicit values, typically from the command line.
                ``None`` values are ignored.

        Returns:
            Settings instance

        Raises:
            ConfigurationError: If the file is unreadable, fails schema
                validation, or a value is out of range
        """
        values: Dict[str, Any] = {}

        if config_path:
            values.update(load_settings_file(config_path))

        values.update(_read_environment(os.environ if environ is None else environ))
        values.update({key: value for key, value in overrides.items() if value is not None})

        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigurationError(f"Unknown settings: {sorted(unknown)}")

        settings = cls(**values)
        logger.debug(
            "Resolved settings: limit=%s batch_size=%s file_a=%s file_b=%s",
            settings.limit,
            settings.batch_size,
            settings.file_a,
            settings.file_b,
        )
        return settings


def load_settings_file(config_path: str) -> Dict[str, Any]:
    """
    Load settings from a YAML file and validate them against SETTINGS_SCHEMA.

    Args:
        config_path: Path to the YAML configuration file

    Returns:
        Dictionary of settings values (empty for an empty file)

    Raises:
        ConfigurationError: If the file is missing, not valid YAML, or does
            not match the schema
    """
    path = Path(config_path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Configuration file not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not content:
        logger.warning(f"Empty configuration file: {config_path}")
        return {}

    try:
        jsonschema.validate(instance=content, schema=SETTINGS_SCHEMA)
    except jsonschema.ValidationError as e:
        raise ConfigurationError(
            f"Configuration validation failed for {config_path}: {e.message}"
        ) from e

    logger.info(f"Loaded configuration from {config_path}")
    return dict(content)


def _read_environment(environ: Mapping[str, str]) -> Dict[str, Any]:
    values: Dict[str, Any] = {}
    for suffix, (name, convert) in _ENV_FIELDS.items():
        raw = environ.get(ENV_PREFIX + suffix)
        if raw is None or raw == "":
            continue
        try:
            values[name] = convert(raw)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for {ENV_PREFIX + suffix}: {raw!r}"
            ) from e
    return values


def setup_logging_redaction(settings: Settings) -> SecretRedactionFilter:
    """Build the redaction filter for the configured request headers."""
    return SecretRedactionFilter(settings.headers)
