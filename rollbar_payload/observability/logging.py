"""
Opt-in log output for the notifier.

Library modules only ever call ``logging.getLogger(__name__)``; nothing is
printed until the host application either configures the root logger or
calls :func:`configure_logging`, which attaches one handler to the
``rollbar_payload`` logger.  Lines are JSON (``LOG_FORMAT=json``) or plain
text, and always pass through :class:`SecretScrubber` first.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import IO, Any, Dict, Optional

from ..constants import NOTIFIER_NAME, NOTIFIER_VERSION
from .scrubbing import SecretScrubber

PACKAGE_LOGGER = "rollbar_payload"

# Set on handlers created here so reconfiguring replaces rather than stacks
_HANDLER_MARK = "_rollbar_payload_handler"

_PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s %(message)s"


class NotifierJsonFormatter(logging.Formatter):
    """One JSON object per line, tagged with the notifier identity."""

    # ``extra`` fields the builder attaches to its records
    _EXTRA_KEYS = ("host", "error_type")

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "notifier": {"name": NOTIFIER_NAME, "version": NOTIFIER_VERSION},
        }

        for key in self._EXTRA_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = self.formatException(record.exc_info)
            entry["error_type"] = record.exc_info[0].__name__

        return json.dumps(entry, default=str, ensure_ascii=False)


def configure_logging(
    level: int = logging.INFO,
    *,
    json_output: Optional[bool] = None,
    stream: Optional[IO[str]] = None,
) -> logging.Logger:
    """Attach a scrubbed handler to the ``rollbar_payload`` logger.

    Args:
        level: Level for the package logger and its handler.
        json_output: JSON lines when ``True``, plain text when ``False``;
            ``None`` follows ``LOG_FORMAT=json``.
        stream: Destination, ``sys.stderr`` by default.

    Returns:
        The package logger.  Calling again replaces the handler.
    """
    if json_output is None:
        json_output = os.environ.get("LOG_FORMAT", "").lower() == "json"

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)
    for existing in list(logger.handlers):
        if getattr(existing, _HANDLER_MARK, False):
            logger.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(NotifierJsonFormatter() if json_output else logging.Formatter(_PLAIN_FORMAT))
    handler.addFilter(SecretScrubber())
    setattr(handler, _HANDLER_MARK, True)
    logger.addHandler(handler)
    return logger
