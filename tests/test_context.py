"""Tests for context classification."""

import pytest

from rollbar_payload.context import (
    Custom,
    Header,
    Meta,
    Param,
    Person,
    classify,
    classify_entry,
)


class TestClassifyEntry:
    @pytest.mark.parametrize(
        "key, expected",
        [
            ("request.header.Accept", Header("Accept", "v")),
            ("request.param.page", Param("page", "v")),
            ("request.url", Meta("url", "v")),
            ("request.query", Meta("query_string", "v")),
            ("request.method", Meta("method", "v")),
            ("request.remoteAddr", Meta("user_ip", "v")),
            ("request.userAgent", Meta("user_agent", "v")),
            ("person.id", Person("id", "v")),
            ("person.username", Person("username", "v")),
            ("person.email", Person("email", "v")),
            ("job", Custom("job", "v")),
            ("platform", Custom("platform", "v")),
        ],
    )
    def test_variants(self, key, expected):
        assert classify_entry(key, "v") == expected

    def test_unknown_request_key_dropped(self):
        assert classify_entry("request.somethingElse", "v") is None

    def test_person_prefix_only_matches_known_fields(self):
        assert classify_entry("person.nickname", "v") == Custom("person.nickname", "v")


class TestClassify:
    def test_empty_and_none(self):
        for ctx in ({}, None):
            classified = classify(ctx)
            assert classified.headers == {}
            assert classified.params == {}
            assert classified.meta == {}
            assert classified.person == {}
            assert classified.custom == {}

    def test_buckets_are_disjoint(self):
        classified = classify(
            {
                "request.header.H": "hv",
                "request.param.a": "1",
                "request.method": "GET",
                "person.id": "42",
                "tenant": "acme",
            }
        )
        assert classified.headers == {"H": "hv"}
        assert classified.params == {"a": "1"}
        assert classified.meta == {"method": "GET"}
        assert classified.person == {"id": "42"}
        assert classified.custom == {"tenant": "acme"}

    def test_reserved_lookup(self):
        classified = classify({"platform": "android", "uuid": "abc"})
        assert classified.get("platform") == "android"
        assert classified.get("uuid") == "abc"
        assert classified.get("framework", "java") == "java"

    def test_none_values_are_missing(self):
        classified = classify({"person.id": None, "request.url": None, "job": None})
        assert classified.person == {}
        assert classified.meta == {}
        assert classified.custom == {}
        assert classified.get("job") is None

    def test_non_string_values_coerced(self):
        classified = classify({"attempt": 3, "request.param.n": 7})
        assert classified.custom == {"attempt": "3"}
        assert classified.params == {"n": "7"}
