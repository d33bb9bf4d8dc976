"""Exceptions raised by vitenav."""


class ConfigError(ValueError):
    """Raised when a site configuration or nav entry is malformed."""
