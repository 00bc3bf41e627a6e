"""Tests for Flask request context extraction."""

import pytest
from flask import Flask

from rollbar_payload.request_context import extract_request_context


@pytest.fixture
def app():
    return Flask(__name__)


class TestExtractRequestContext:
    def test_outside_request_is_empty(self):
        assert extract_request_context() == {}

    def test_post_request(self, app):
        with app.test_request_context(
            "/orders?page=2",
            method="POST",
            data={"sku": "A-1"},
            headers={"User-Agent": "curl/8.0", "X-Trace": "abc"},
            environ_base={"REMOTE_ADDR": "10.0.0.5"},
        ):
            ctx = extract_request_context()

        assert ctx["request.url"] == "http://localhost/orders"
        assert ctx["request.query"] == "page=2"
        assert ctx["request.method"] == "POST"
        assert ctx["request.remoteAddr"] == "10.0.0.5"
        assert ctx["request.userAgent"] == "curl/8.0"
        assert ctx["request.header.X-Trace"] == "abc"
        assert ctx["request.param.page"] == "2"
        assert ctx["request.param.sku"] == "A-1"

    def test_sensitive_headers_redacted(self, app):
        with app.test_request_context(
            "/", headers={"Authorization": "Bearer s3cr3t", "Cookie": "session=xyz"}
        ):
            ctx = extract_request_context()
        assert ctx["request.header.Authorization"] == "[REDACTED]"
        assert ctx["request.header.Cookie"] == "[REDACTED]"

    def test_no_query_string(self, app):
        with app.test_request_context("/health"):
            ctx = extract_request_context()
        assert "request.query" not in ctx
        assert ctx["request.method"] == "GET"

    def test_explicit_request(self, app):
        with app.test_request_context("/explicit?q=1") as rc:
            req = rc.request
        ctx = extract_request_context(req)
        assert ctx["request.url"] == "http://localhost/explicit"
        assert ctx["request.param.q"] == "1"

    def test_feeds_builder(self, app, builder):
        with app.test_request_context(
            "/search?q=cats", headers={"User-Agent": "ua"}, environ_base={"REMOTE_ADDR": "1.2.3.4"}
        ):
            context = extract_request_context()
        context["person.id"] = "42"

        data = builder.build("error", "search failed", ValueError("x"), context)["data"]
        assert data["request"]["url"] == "http://localhost/search"
        assert data["request"]["GET"] == {"q": "cats"}
        assert data["request"]["query_string"] == "q=cats"
        assert data["request"]["user_ip"] == "1.2.3.4"
        assert data["client"] == {"javascript": {"browser": "ua"}}
        assert data["person"] == {"id": "42"}
        assert data["custom"] == {"log": "search failed"}
