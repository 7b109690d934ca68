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
"""Tests for CORS error mapping and rendering."""

from datetime import datetime

import pytest

from flycors.kernel.exceptions import (
    BadOriginException,
    BadRequestMethodException,
    CredentialsWithWildcardOriginException,
    FlyCorsException,
    HeadersNotAllowedException,
    InvalidOriginPatternException,
    MethodNotAllowedException,
    MissingOriginException,
    MissingRequestMethodException,
    OpaqueAllowedOriginException,
    OriginNotAllowedException,
)
from flycors.web.adapters.starlette.errors import cors_error_response
from flycors.web.errors import error_response_for, status_for


class TestStatusFor:
    @pytest.mark.parametrize(
        "exc",
        [
            BadOriginException("x", "relative URL without a base"),
            MissingRequestMethodException(),
            BadRequestMethodException("NOPE"),
        ],
    )
    def test_request_format_errors_are_400(self, exc):
        assert status_for(exc) == 400

    @pytest.mark.parametrize(
        "exc",
        [
            MissingOriginException(),
            OriginNotAllowedException("https://evil.example"),
            MethodNotAllowedException("PUT"),
            HeadersNotAllowedException(["X-Foo"]),
        ],
    )
    def test_policy_rejections_are_403(self, exc):
        assert status_for(exc) == 403

    @pytest.mark.parametrize(
        "exc",
        [
            CredentialsWithWildcardOriginException(),
            OpaqueAllowedOriginException(["data:,"]),
            InvalidOriginPatternException("(", "missing ), unterminated subpattern"),
        ],
    )
    def test_policy_errors_are_500(self, exc):
        assert status_for(exc) == 500

    def test_unknown_subclass_defaults_to_500(self):
        assert status_for(FlyCorsException("boom")) == 500


class TestErrorResponseFor:
    def test_body_fields(self):
        body = error_response_for(OriginNotAllowedException("https://evil.example"), "/orders")

        assert body.status == 403
        assert body.code == "OriginNotAllowed"
        assert body.message == "Origin 'https://evil.example' is not allowed to request"
        assert body.path == "/orders"
        assert body.context == {"origin": "https://evil.example"}
        datetime.fromisoformat(body.timestamp)

    def test_code_falls_back_to_class_name(self):
        body = error_response_for(FlyCorsException("boom"), "/")
        assert body.code == "FlyCorsException"

    def test_empty_context_is_omitted(self):
        data = error_response_for(MissingOriginException(), "/").to_dict()
        assert "context" not in data["error"]
        assert data["error"]["code"] == "MissingOrigin"


class TestCorsErrorResponse:
    def test_json_response(self):
        resp = cors_error_response(MethodNotAllowedException("PUT"), "/orders")

        assert resp.status_code == 403
        assert resp.media_type == "application/json"
        assert b'"code":"MethodNotAllowed"' in resp.body
