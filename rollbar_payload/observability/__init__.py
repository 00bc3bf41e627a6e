"""
Observability package: opt-in log output and secret scrubbing.

Provides:
- ``configure_logging``: JSON or plain handler on the package logger
- ``NotifierJsonFormatter``: JSON lines tagged with the notifier identity
- ``SecretScrubber``: redacts access tokens and PII from log records
"""

from .logging import NotifierJsonFormatter, configure_logging
from .scrubbing import SecretScrubber

__all__ = [
    "configure_logging",
    "NotifierJsonFormatter",
    "SecretScrubber",
]
