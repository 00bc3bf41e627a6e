"""Exception hierarchy for the payload builder."""


class NotifierError(Exception):
    """Base class for every error raised by this package."""


class ConfigError(NotifierError):
    """Raised when the notifier configuration is missing or invalid."""


class PayloadError(NotifierError):
    """Raised when a payload cannot be assembled."""


class PayloadEncodingError(PayloadError):
    """Raised when a payload cannot be serialised to JSON."""


class HashUnavailableError(NotifierError):
    """Raised when the MD5 digest is not provided by the runtime."""
