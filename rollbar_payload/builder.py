"""
Payload builder: the façade that turns an event into a Rollbar item.

Usage::

    builder = NotifyBuilder("token", "production")
    try:
        charge(card)
    except PaymentError as exc:
        payload = builder.build("error", "charge failed", exc, {"person.id": "42"})

``build`` does no I/O.  The only lookup with side effects (the local host
name) happens once in the constructor, and its failure just drops the
``server`` document from every payload.
"""

import copy
import json
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

from .config import BuilderConfig
from .constants import (
    DEFAULT_FRAMEWORK,
    DEFAULT_PLATFORM,
    FRAMEWORK_KEY,
    LANGUAGE,
    PLATFORM_KEY,
    UUID_KEY,
)
from .context import classify
from .documents import (
    build_body,
    build_client,
    build_custom,
    build_person,
    build_request,
    notifier_data,
    server_data,
)
from .errors import HashUnavailableError, PayloadEncodingError
from .fingerprinting import fingerprint, title_of
from .trace import ThrowableLike

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def encode_payload(payload: Dict[str, Any]) -> str:
    """Serialise a payload to a JSON string (UTF-8, non-ASCII kept as-is).

    Raises:
        PayloadEncodingError: If the payload holds values JSON cannot carry.
    """
    try:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise PayloadEncodingError(f"Cannot encode payload: {exc}") from exc


class NotifyBuilder:
    """Builds the JSON document posted to the aggregator for one event."""

    def __init__(
        self,
        access_token: str,
        environment: str,
        rollbar_context: Optional[str] = None,
        *,
        clock: Callable[[], float] = time.time,
        server: Optional[Dict[str, str]] = _UNSET,
    ):
        """
        Args:
            access_token: Project access token, copied into every payload.
            environment: Deployment environment name.
            rollbar_context: Optional ``data.context`` value.
            clock: Returns seconds since the epoch; injectable for tests.
            server: Override for the ``server`` document.  ``None`` drops it;
                when omitted the local host is looked up once.
        """
        self.access_token = access_token
        self.environment = environment
        self.rollbar_context = rollbar_context
        self._clock = clock
        self._notifier = notifier_data()
        self._server = self._lookup_server() if server is _UNSET else server

    @classmethod
    def from_config(cls, config: BuilderConfig, **kwargs: Any) -> "NotifyBuilder":
        return cls(config.access_token, config.environment, config.rollbar_context, **kwargs)

    @property
    def server(self) -> Optional[Dict[str, str]]:
        return self._server

    def _lookup_server(self) -> Optional[Dict[str, str]]:
        try:
            server = server_data()
        except OSError as exc:
            logger.warning(
                "Local host lookup failed, server data omitted: %s",
                exc,
                extra={"error_type": type(exc).__name__},
            )
            return None
        logger.debug("Resolved server identity", extra={"host": server["host"]})
        return server

    def _fingerprint(self, message: Optional[str]) -> Optional[str]:
        if message is None:
            return None
        try:
            return fingerprint(message)
        except HashUnavailableError as exc:
            logger.warning("Fingerprint omitted: %s", exc, extra={"error_type": type(exc).__name__})
            return None

    # ── Public API ───────────────────────────────────────────────

    def build(
        self,
        level: str,
        message: Optional[str],
        throwable: Optional[ThrowableLike] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Build the payload for one event.

        Args:
            level: Severity tag (``"error"``, ``"warning"``...), passed through.
            message: Log message; ``None`` means no message.
            throwable: Exception (or ``Throwable`` adapter) to report.
            context: String-keyed context map; ``None`` is an empty map.

        Returns:
            ``{"access_token": ..., "data": {...}}`` as fresh dicts.
        """
        ctx = classify(context)

        data: Dict[str, Any] = {
            "environment": self.environment,
            "level": level,
            "platform": ctx.get(PLATFORM_KEY, DEFAULT_PLATFORM),
            "framework": ctx.get(FRAMEWORK_KEY, DEFAULT_FRAMEWORK),
            "language": LANGUAGE,
        }
        if self.rollbar_context:
            data["context"] = self.rollbar_context
        data["timestamp"] = int(self._clock())
        data["body"] = build_body(message, throwable)
        data["request"] = build_request(ctx)
        data["title"] = title_of(message)

        person = build_person(ctx)
        if person is not None:
            data["person"] = person

        event_uuid = ctx.get(UUID_KEY)
        if event_uuid is not None:
            data["uuid"] = event_uuid

        fp = self._fingerprint(message)
        if fp is not None:
            data["fingerprint"] = fp

        custom = build_custom(ctx)
        if throwable is not None and message is not None:
            custom["log"] = message
        data["custom"] = custom

        data["client"] = build_client(ctx)
        if self._server is not None:
            data["server"] = copy.deepcopy(self._server)
        data["notifier"] = dict(self._notifier)

        return {"access_token": self.access_token, "data": data}

    def build_json(
        self,
        level: str,
        message: Optional[str],
        throwable: Optional[ThrowableLike] = None,
        context: Optional[Mapping[str, Any]] = None,
    ) -> str:
        """Like :meth:`build`, but returns the encoded JSON document."""
        return encode_payload(self.build(level, message, throwable, context))
