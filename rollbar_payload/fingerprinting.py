"""
Fingerprint hashing for error grouping.

The aggregator groups occurrences by the MD5 of the message prefix that is
also used as the title.  MD5 here is an identity, not a security primitive.
"""

import hashlib
from typing import Optional

from .constants import TITLE_MAX_LENGTH
from .errors import HashUnavailableError


def title_of(message: Optional[str]) -> str:
    """Return the first ``TITLE_MAX_LENGTH`` characters of *message*."""
    if message is None:
        return ""
    return message[:TITLE_MAX_LENGTH]


def fingerprint(message: str) -> str:
    """Return the 32-char lowercase hex MD5 of the UTF-8 title prefix.

    Raises:
        HashUnavailableError: If the interpreter's OpenSSL build refuses
            MD5 (e.g. FIPS mode).
    """
    # Lone surrogates become "?" rather than failing the whole payload
    data = title_of(message).encode("utf-8", errors="replace")
    try:
        digest = hashlib.md5(data, usedforsecurity=False)
    except ValueError as exc:
        raise HashUnavailableError(f"MD5 digest unavailable: {exc}") from exc
    return digest.hexdigest()
