"""
Centralised constants for the payload builder.

Reserved context keys, request prefixes and the notifier identity live here
so the classifier, the sub-document builders and the request context
extractor all agree on the same wire strings.
"""

# ── Version ──────────────────────────────────────────────────────
APP_VERSION = "1.0.0"

# ── Notifier identity (wire contract, do not change) ─────────────
NOTIFIER_NAME = "rollbar-java"
NOTIFIER_VERSION = "1.0"
LANGUAGE = "java"
DEFAULT_PLATFORM = "java"
DEFAULT_FRAMEWORK = "java"

# ── Title / fingerprint ──────────────────────────────────────────
# Both the title and the fingerprint use the same message prefix.
TITLE_MAX_LENGTH = 99

# ── Reserved context keys ────────────────────────────────────────
PLATFORM_KEY = "platform"
FRAMEWORK_KEY = "framework"
UUID_KEY = "uuid"

PERSON_ID_KEY = "person.id"
PERSON_USERNAME_KEY = "person.username"
PERSON_EMAIL_KEY = "person.email"

# person.* key -> field name in the person document
PERSON_FIELDS = {
    PERSON_ID_KEY: "id",
    PERSON_USERNAME_KEY: "username",
    PERSON_EMAIL_KEY: "email",
}

# ── Request family (shared with the request context extractor) ───
REQUEST_PREFIX = "request."
REQUEST_URL = REQUEST_PREFIX + "url"
REQUEST_QS = REQUEST_PREFIX + "query"
REQUEST_METHOD = REQUEST_PREFIX + "method"
REQUEST_REMOTE_ADDR = REQUEST_PREFIX + "remoteAddr"
REQUEST_USER_AGENT = REQUEST_PREFIX + "userAgent"
REQUEST_HEADER_PREFIX = REQUEST_PREFIX + "header."
REQUEST_PARAM_PREFIX = REQUEST_PREFIX + "param."

# request.* key -> metadata kind
REQUEST_META_KEYS = {
    REQUEST_URL: "url",
    REQUEST_QS: "query_string",
    REQUEST_METHOD: "method",
    REQUEST_REMOTE_ADDR: "user_ip",
    REQUEST_USER_AGENT: "user_agent",
}

# Methods whose params are duplicated under request.<METHOD>
PARAM_METHODS = frozenset({"GET", "POST"})

# Headers whose values never leave the process
REDACTED_HEADERS = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "proxy-authorization",
        "x-rollbar-access-token",
    }
)
REDACTED_VALUE = "[REDACTED]"

# ── Configuration ────────────────────────────────────────────────
DEFAULT_ENVIRONMENT = "production"
ENV_ACCESS_TOKEN = "ROLLBAR_ACCESS_TOKEN"
ENV_ENVIRONMENT = "ROLLBAR_ENVIRONMENT"
ENV_CONTEXT = "ROLLBAR_CONTEXT"
