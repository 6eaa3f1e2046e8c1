from __future__ import annotations


class ConfigError(RuntimeError):
    """Raised when configuration is missing or invalid."""


class InputError(RuntimeError):
    """Raised when the Takeout archive or a post file cannot be read."""


class ExportError(RuntimeError):
    """Raised when a converted post or image cannot be written."""
