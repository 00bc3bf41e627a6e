"""
Flask request → context map.

Produces the ``request.*`` keys the builder classifies, so a Flask error
handler can report the request that failed::

    @app.errorhandler(Exception)
    def _report(exc):
        payload = builder.build("error", str(exc), exc, extract_request_context())
"""

from typing import Dict, Optional

from flask import has_request_context, request as current_request
from werkzeug.wrappers import Request

from .constants import (
    REDACTED_HEADERS,
    REDACTED_VALUE,
    REQUEST_HEADER_PREFIX,
    REQUEST_METHOD,
    REQUEST_PARAM_PREFIX,
    REQUEST_QS,
    REQUEST_REMOTE_ADDR,
    REQUEST_URL,
    REQUEST_USER_AGENT,
)


def extract_request_context(req: Optional[Request] = None) -> Dict[str, str]:
    """Flatten a request into reserved context keys.

    Args:
        req: The request; defaults to Flask's active request.  Outside a
            request context with no explicit request, returns ``{}``.

    Returns:
        A context map ready to merge with caller-supplied entries.
    """
    if req is None:
        if not has_request_context():
            return {}
        req = current_request

    ctx: Dict[str, str] = {
        REQUEST_URL: req.base_url,
        REQUEST_METHOD: req.method,
    }

    query = req.query_string.decode("utf-8", errors="replace")
    if query:
        ctx[REQUEST_QS] = query
    if req.remote_addr:
        ctx[REQUEST_REMOTE_ADDR] = req.remote_addr
    if req.user_agent.string:
        ctx[REQUEST_USER_AGENT] = req.user_agent.string

    for name, value in req.headers.items():
        if name.lower() in REDACTED_HEADERS:
            value = REDACTED_VALUE
        ctx[REQUEST_HEADER_PREFIX + name] = value

    # Query args first; form fields of the same name win
    for source in (req.args, req.form):
        for name in source.keys():
            ctx[REQUEST_PARAM_PREFIX + name] = source.get(name, "")

    return ctx
