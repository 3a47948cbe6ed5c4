"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class EmailConfigurationError(AdapterError):
    """Email transport is missing required configuration."""

    pass
