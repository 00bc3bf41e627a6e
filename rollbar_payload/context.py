"""
Context classification.

The caller hands the builder a flat string-keyed map.  Every entry is
classified exactly once into a tagged variant by key prefix, and the
sub-document builders only ever look at the resulting buckets.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple, Union

from .constants import (
    PERSON_FIELDS,
    REQUEST_HEADER_PREFIX,
    REQUEST_META_KEYS,
    REQUEST_PARAM_PREFIX,
    REQUEST_PREFIX,
)

# ── Entry variants ───────────────────────────────────────────────


@dataclass(frozen=True)
class Header:
    name: str
    value: str


@dataclass(frozen=True)
class Param:
    name: str
    value: str


@dataclass(frozen=True)
class Meta:
    """Request metadata: url, query_string, method, user_ip or user_agent."""

    kind: str
    value: str


@dataclass(frozen=True)
class Person:
    field: str
    value: str


@dataclass(frozen=True)
class Custom:
    key: str
    value: str


Entry = Union[Header, Param, Meta, Person, Custom]


def classify_entry(key: str, value: str) -> Optional[Entry]:
    """Classify a single context entry.

    Returns ``None`` for request-family keys that match no known request
    field; those are dropped rather than leaking into ``custom``.
    """
    if key.startswith(REQUEST_PREFIX):
        if key.startswith(REQUEST_HEADER_PREFIX):
            return Header(key[len(REQUEST_HEADER_PREFIX):], value)
        if key.startswith(REQUEST_PARAM_PREFIX):
            return Param(key[len(REQUEST_PARAM_PREFIX):], value)
        kind = REQUEST_META_KEYS.get(key)
        if kind is not None:
            return Meta(kind, value)
        return None
    person_field = PERSON_FIELDS.get(key)
    if person_field is not None:
        return Person(person_field, value)
    return Custom(key, value)


# ── Classified buckets ───────────────────────────────────────────


@dataclass
class ClassifiedContext:
    """Disjoint buckets produced by :func:`classify`."""

    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, str] = field(default_factory=dict)
    meta: Dict[str, str] = field(default_factory=dict)
    person: Dict[str, str] = field(default_factory=dict)
    custom: Dict[str, str] = field(default_factory=dict)
    raw: Dict[str, str] = field(default_factory=dict)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Direct lookup of a reserved top-level key (``platform``, ``uuid``...)."""
        return self.raw.get(key, default)

    def add(self, entry: Entry) -> None:
        if isinstance(entry, Header):
            self.headers[entry.name] = entry.value
        elif isinstance(entry, Param):
            self.params[entry.name] = entry.value
        elif isinstance(entry, Meta):
            self.meta[entry.kind] = entry.value
        elif isinstance(entry, Person):
            self.person[entry.field] = entry.value
        else:
            self.custom[entry.key] = entry.value


def _items(context: Optional[Mapping[str, Any]]) -> Iterator[Tuple[str, str]]:
    if not context:
        return
    for key, value in context.items():
        if value is None:
            continue
        yield str(key), value if isinstance(value, str) else str(value)


def classify(context: Optional[Mapping[str, Any]]) -> ClassifiedContext:
    """Split a context map into header, param, meta, person and custom buckets.

    ``None`` values count as missing; other non-string values are coerced
    with ``str()``.
    """
    classified = ClassifiedContext()
    for key, value in _items(context):
        classified.raw[key] = value
        entry = classify_entry(key, value)
        if entry is not None:
            classified.add(entry)
    return classified
