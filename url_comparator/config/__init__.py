"""Configuration - run settings and log redaction."""

from .settings import (
    Settings,
    SecretRedactionFilter,
    load_settings_file,
    setup_logging_redaction,
)

__all__ = [
    "Settings",
    "SecretRedactionFilter",
    "load_settings_file",
    "setup_logging_redaction",
]
