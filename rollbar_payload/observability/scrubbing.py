"""
Secret scrubbing filter for log records.

Payloads carry the project access token, and the context map routinely
carries auth headers and e-mail addresses.  This filter redacts those
before any log line is emitted.  It is installed on the handler attached
by ``configure_logging``.
"""

import logging
import re
from typing import FrozenSet, List, Pattern, Tuple

_SENSITIVE_PATTERNS: List[Tuple[Pattern, str]] = [
    # Bearer tokens / Authorization headers
    (re.compile(r"(Bearer\s+)[A-Za-z0-9\-._~+/]+=*", re.IGNORECASE), r"\1[REDACTED]"),
    # access_token=..., "access_token": "...", X-Rollbar-Access-Token: ...
    (
        re.compile(
            r"(?i)(access[_-]?token|x-rollbar-access-token|api[_-]?key|token|secret|"
            r"password|authorization|cookie)"
            r"(['\"]?\s*[:=]\s*)"
            r"(['\"]?)([^\s'\",}]{4,})\3"
        ),
        r"\1\2\3[REDACTED]\3",
    ),
    # Email addresses
    (re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+"), "[EMAIL_REDACTED]"),
]

# Record attribute names that are always fully redacted when present.
_REDACT_ATTRS: FrozenSet[str] = frozenset(
    {
        "access_token",
        "token",
        "api_key",
        "secret",
        "password",
    }
)


class SecretScrubber(logging.Filter):
    """Logging filter that scrubs access tokens and PII from records.

    Attach to a handler or logger::

        handler.addFilter(SecretScrubber())
    """

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        msg = record.getMessage()
        record.msg = _scrub_text(msg)
        record.args = None  # prevent double-formatting

        for attr in _REDACT_ATTRS:
            if hasattr(record, attr):
                setattr(record, attr, "[REDACTED]")

        return True


def _scrub_text(text: str) -> str:
    """Apply all sensitive-data patterns to *text* and return the result."""
    for pattern, replacement in _SENSITIVE_PATTERNS:
        text = pattern.sub(replacement, text)
    return text
