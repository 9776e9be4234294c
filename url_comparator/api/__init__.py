"""HTTP access - JSON document fetching."""

from .fetcher import JsonFetcher, build_session

__all__ = ["JsonFetcher", "build_session"]
