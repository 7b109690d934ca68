# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for CorsMiddleware."""

from __future__ import annotations

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from flycors.cors.headers import Method
from flycors.cors.policy import ALL, Policy, Some
from flycors.web.adapters.starlette.middleware import CorsMiddleware

ACME = "https://www.acme.com"

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class _Calls:
    count = 0


async def _hello(request):  # noqa: ANN001
    _Calls.count += 1
    return JSONResponse({"msg": "hello"}, headers={"Vary": "Accept-Encoding"})


async def _explicit_options(request):  # noqa: ANN001
    return PlainTextResponse("custom options", headers={"X-Handled": "yes"})


def _policy(**overrides) -> Policy:
    settings = {
        "allowed_origins": Some([ACME]),
        "allowed_methods": frozenset({Method.GET, Method.POST}),
        "allowed_headers": Some(["Authorization", "Accept"]),
        "allow_credentials": True,
        "max_age": 600,
    }
    settings.update(overrides)
    return Policy(**settings)


def _make_client(policy: Policy | None = None, **kwargs) -> TestClient:
    app = Starlette(
        routes=[
            Route("/hello", _hello),
            Route("/custom", _explicit_options, methods=["OPTIONS"]),
        ],
        middleware=[Middleware(CorsMiddleware, policy=policy or _policy(), **kwargs)],
    )
    return TestClient(app)


def _preflight_headers(origin: str = ACME, method: str = "GET", headers: str | None = None) -> dict[str, str]:
    result = {"Origin": origin, "Access-Control-Request-Method": method}
    if headers is not None:
        result["Access-Control-Request-Headers"] = headers
    return result


@pytest.fixture(autouse=True)
def _reset_calls():
    _Calls.count = 0


# ---------------------------------------------------------------------------
# Actual requests
# ---------------------------------------------------------------------------


class TestActualRequests:
    def test_allowed_origin_gets_cors_headers(self):
        resp = _make_client().get("/hello", headers={"Origin": ACME})

        assert resp.status_code == 200
        assert resp.json() == {"msg": "hello"}
        assert resp.headers["Access-Control-Allow-Origin"] == ACME
        assert resp.headers["Access-Control-Allow-Credentials"] == "true"
        assert "Access-Control-Allow-Methods" not in resp.headers
        assert "Access-Control-Max-Age" not in resp.headers

    def test_non_cors_headers_are_preserved(self):
        resp = _make_client().get("/hello", headers={"Origin": ACME})
        assert resp.headers["Vary"] == "Accept-Encoding"
        assert resp.headers["Content-Type"] == "application/json"

    def test_vary_origin_is_appended_for_echoed_all_origins(self):
        resp = _make_client(_policy(allowed_origins=ALL)).get("/hello", headers={"Origin": "https://other.example"})
        assert resp.headers["Access-Control-Allow-Origin"] == "https://other.example"
        assert resp.headers["Vary"] == "Accept-Encoding, Origin"

    def test_without_origin_no_cors_headers(self):
        resp = _make_client().get("/hello")

        assert resp.status_code == 200
        assert "Access-Control-Allow-Origin" not in resp.headers
        assert _Calls.count == 1

    def test_rejected_origin_never_reaches_handler(self):
        resp = _make_client().get("/hello", headers={"Origin": "https://evil.example"})

        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "OriginNotAllowed"
        assert resp.json()["error"]["path"] == "/hello"
        assert "Access-Control-Allow-Origin" not in resp.headers
        assert _Calls.count == 0

    def test_bad_origin_is_a_bad_request(self):
        resp = _make_client().get("/hello", headers={"Origin": "not a url"})

        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "BadOrigin"
        assert _Calls.count == 0


# ---------------------------------------------------------------------------
# Preflight requests
# ---------------------------------------------------------------------------


class TestPreflightRequests:
    def test_unrouted_preflight_is_answered(self):
        resp = _make_client().options("/hello", headers=_preflight_headers(headers="Authorization"))

        assert resp.status_code == 204
        assert resp.content == b""
        assert resp.headers["Access-Control-Allow-Origin"] == ACME
        assert resp.headers["Access-Control-Allow-Credentials"] == "true"
        assert resp.headers["Access-Control-Allow-Methods"] == "GET, POST"
        assert resp.headers["Access-Control-Allow-Headers"] == "Authorization"
        assert resp.headers["Access-Control-Max-Age"] == "600"
        assert "Vary" not in resp.headers

    def test_preflight_to_unknown_path_is_answered(self):
        resp = _make_client().options("/does-not-exist", headers=_preflight_headers())
        assert resp.status_code == 204
        assert resp.headers["Access-Control-Allow-Origin"] == ACME

    def test_preflight_status_is_configurable(self):
        resp = _make_client(preflight_status=200).options("/hello", headers=_preflight_headers())
        assert resp.status_code == 200
        assert resp.content == b""

    def test_routed_preflight_keeps_handler_response(self):
        resp = _make_client().options("/custom", headers=_preflight_headers())

        assert resp.status_code == 200
        assert resp.text == "custom options"
        assert resp.headers["X-Handled"] == "yes"
        assert resp.headers["Access-Control-Allow-Origin"] == ACME

    def test_method_not_allowed(self):
        resp = _make_client().options("/hello", headers=_preflight_headers(method="DELETE"))

        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "MethodNotAllowed"
        assert resp.json()["error"]["context"] == {"method": "DELETE"}

    def test_headers_not_allowed(self):
        resp = _make_client().options("/hello", headers=_preflight_headers(headers="Foobar"))

        assert resp.status_code == 403
        assert resp.json()["error"]["code"] == "HeadersNotAllowed"
        assert resp.json()["error"]["context"] == {"headers": ["Foobar"]}

    def test_bad_request_method(self):
        resp = _make_client().options("/hello", headers=_preflight_headers(method="NOPE"))
        assert resp.status_code == 400
        assert resp.json()["error"]["code"] == "BadRequestMethod"

    def test_options_without_request_method_is_forwarded(self):
        resp = _make_client().options("/custom", headers={"Origin": ACME})

        assert resp.status_code == 200
        assert resp.text == "custom options"
        assert "Access-Control-Allow-Origin" not in resp.headers


# ---------------------------------------------------------------------------
# Path patterns
# ---------------------------------------------------------------------------


class TestPathPatterns:
    def test_url_patterns_limit_enforcement(self):
        client = _make_client(url_patterns=["/api/*"])
        resp = client.get("/hello", headers={"Origin": "https://evil.example"})

        assert resp.status_code == 200
        assert "Access-Control-Allow-Origin" not in resp.headers

    def test_exclude_patterns_skip_enforcement(self):
        client = _make_client(exclude_patterns=["/hel*"])
        resp = client.get("/hello", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 200

    def test_matching_url_pattern_is_enforced(self):
        client = _make_client(url_patterns=["/hello"])
        resp = client.get("/hello", headers={"Origin": "https://evil.example"})
        assert resp.status_code == 403


class TestShouldNotFilter:
    def test_no_patterns_filters_everything(self):
        middleware = CorsMiddleware(_hello, _policy())
        assert middleware.should_not_filter("/anything") is False

    def test_exclude_wins_over_include(self):
        middleware = CorsMiddleware(_hello, _policy(), url_patterns=["/api/*"], exclude_patterns=["/api/health"])
        assert middleware.should_not_filter("/api/orders") is False
        assert middleware.should_not_filter("/api/health") is True
        assert middleware.should_not_filter("/other") is True
