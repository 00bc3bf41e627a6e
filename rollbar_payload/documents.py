"""
Sub-document builders for the ``data`` section of a payload.

Each builder takes the classified context (and, for the body, the message
and throwable) and returns a fresh JSON-ready dict.  Missing values are
left out entirely; the aggregator treats an absent key and ``null`` the
same way, but an empty string would be stored as a value.
"""

import socket
from typing import Any, Dict, Optional

from .constants import NOTIFIER_NAME, NOTIFIER_VERSION, PARAM_METHODS
from .context import ClassifiedContext
from .trace import ThrowableLike, trace_chain


def _put(doc: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        doc[key] = value


def build_request(ctx: ClassifiedContext) -> Dict[str, Any]:
    """Build ``data.request`` from the request metadata, headers and params.

    Params are only attached when the method is exactly ``GET`` or ``POST``,
    under the method name itself.
    """
    request: Dict[str, Any] = {}
    _put(request, "url", ctx.meta.get("url"))
    _put(request, "query_string", ctx.meta.get("query_string"))
    request["headers"] = dict(ctx.headers)

    method = ctx.meta.get("method")
    if method is not None:
        request["method"] = method
        if method in PARAM_METHODS:
            request[method] = dict(ctx.params)

    _put(request, "user_ip", ctx.meta.get("user_ip"))
    return request


def build_person(ctx: ClassifiedContext) -> Optional[Dict[str, Any]]:
    """Build ``data.person``, or ``None`` when no person field was supplied."""
    if not ctx.person:
        return None
    person: Dict[str, Any] = {}
    for name in ("id", "username", "email"):
        _put(person, name, ctx.person.get(name))
    return person


def build_custom(ctx: ClassifiedContext) -> Dict[str, Any]:
    """Build ``data.custom`` from every unreserved context entry."""
    return dict(ctx.custom)


def build_client(ctx: ClassifiedContext) -> Dict[str, Any]:
    """Build ``data.client``; ``javascript`` is present even without a browser."""
    javascript: Dict[str, Any] = {}
    _put(javascript, "browser", ctx.meta.get("user_agent"))
    return {"javascript": javascript}


def build_body(message: Optional[str], throwable: Optional[ThrowableLike]) -> Dict[str, Any]:
    """Build ``data.body``: a trace chain, a message, or nothing."""
    if throwable is not None:
        return {"trace_chain": trace_chain(throwable)}
    if message is not None:
        return {"message": {"body": message}}
    return {}


def notifier_data() -> Dict[str, str]:
    """Static self-identification sent with every payload."""
    return {"name": NOTIFIER_NAME, "version": NOTIFIER_VERSION}


def server_data() -> Dict[str, str]:
    """Resolve the local host name and address.

    Raises:
        OSError: If the host name cannot be resolved.
    """
    host = socket.gethostname()
    ip = socket.gethostbyname(host)
    return {"host": host, "ip": ip}
