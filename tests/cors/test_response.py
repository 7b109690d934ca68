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
"""Tests for the Response Builder and header merge semantics."""

from flycors.cors.headers import HeaderName, parse_origin
from flycors.cors.memory import HeaderMap
from flycors.cors.policy import ALL, Policy, Some
from flycors.cors.response import WILDCARD, Echo, ResponseDecision, build_decision
from flycors.cors.validator import Actual, Preflight

ACME = parse_origin("https://www.acme.com")


class TestOriginDirective:
    def test_some_origins_echo_without_vary(self):
        decision = build_decision(Policy(allowed_origins=Some(["https://www.acme.com"])), Actual(ACME))
        assert decision.origin_directive == Echo("https://www.acme.com")
        assert decision.vary_origin is False

    def test_all_origins_echo_with_vary(self):
        decision = build_decision(Policy(allowed_origins=ALL), Actual(ACME))
        assert decision.origin_directive == Echo("https://www.acme.com")
        assert decision.vary_origin is True

    def test_all_origins_with_send_wildcard(self):
        decision = build_decision(Policy(allowed_origins=ALL, send_wildcard=True), Actual(ACME))
        assert decision.origin_directive == WILDCARD
        assert decision.vary_origin is False

    def test_send_wildcard_is_ignored_for_some_origins(self):
        policy = Policy(allowed_origins=Some(["https://www.acme.com"]), send_wildcard=True)
        assert build_decision(policy, Actual(ACME)).origin_directive == Echo("https://www.acme.com")


class TestBuildDecision:
    def test_not_cors_builds_nothing(self):
        from flycors.cors.classifier import NOT_CORS

        assert build_decision(Policy(), NOT_CORS) is None

    def test_preflight_headers(self):
        policy = Policy(
            allowed_origins=Some(["https://www.acme.com"]),
            allowed_methods=frozenset({"POST", "GET"}),
            allow_credentials=True,
            expose_headers=frozenset({"X-Total"}),
            max_age=600,
        )
        decision = build_decision(policy, Preflight(ACME, frozenset({HeaderName("X-Requested-With")})))
        assert decision.to_headers() == {
            "Access-Control-Allow-Origin": "https://www.acme.com",
            "Access-Control-Allow-Credentials": "true",
            "Access-Control-Allow-Methods": "GET, POST",
            "Access-Control-Allow-Headers": "X-Requested-With",
            "Access-Control-Expose-Headers": None,
            "Access-Control-Max-Age": "600",
        }

    def test_preflight_without_requested_headers_omits_allow_headers(self):
        decision = build_decision(Policy(), Preflight(ACME, frozenset()))
        headers = decision.to_headers()
        assert headers["Access-Control-Allow-Headers"] is None
        assert headers["Access-Control-Allow-Credentials"] is None
        assert headers["Access-Control-Max-Age"] is None

    def test_allow_headers_echo_requested_not_configured(self):
        policy = Policy(allowed_headers=Some(["Authorization", "Accept", "X-Other"]))
        decision = build_decision(policy, Preflight(ACME, frozenset({HeaderName("accept")})))
        assert decision.to_headers()["Access-Control-Allow-Headers"] == "accept"

    def test_actual_headers(self):
        policy = Policy(
            allowed_origins=ALL,
            send_wildcard=True,
            expose_headers=frozenset({"X-B", "X-A"}),
            max_age=600,
        )
        headers = build_decision(policy, Actual(ACME)).to_headers()
        assert headers == {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Credentials": None,
            "Access-Control-Allow-Methods": None,
            "Access-Control-Allow-Headers": None,
            "Access-Control-Expose-Headers": "X-A, X-B",
            "Access-Control-Max-Age": None,
        }

    def test_methods_are_listed_in_a_stable_order(self):
        policy = Policy()
        first = build_decision(policy, Preflight(ACME, frozenset())).to_headers()
        second = build_decision(Policy(), Preflight(ACME, frozenset())).to_headers()
        assert first["Access-Control-Allow-Methods"] == second["Access-Control-Allow-Methods"]
        assert first["Access-Control-Allow-Methods"] == "DELETE, GET, HEAD, OPTIONS, PATCH, POST, PUT"


class TestMerge:
    def _decision(self, **kwargs) -> ResponseDecision:
        defaults = {"origin_directive": Echo("https://www.acme.com"), "vary_origin": True, "credentials": False}
        defaults.update(kwargs)
        return ResponseDecision(**defaults)

    def test_overwrites_existing_cors_headers(self):
        response = HeaderMap({"access-control-allow-origin": "https://stale.example"})
        self._decision().merge(response)
        assert response.get_header("Access-Control-Allow-Origin") == "https://www.acme.com"

    def test_removes_cors_headers_that_must_be_absent(self):
        response = HeaderMap(
            {
                "Access-Control-Allow-Credentials": "true",
                "Access-Control-Max-Age": "10",
                "Access-Control-Allow-Methods": "GET",
            }
        )
        self._decision().merge(response)
        assert "Access-Control-Allow-Credentials" not in response
        assert "Access-Control-Max-Age" not in response
        assert "Access-Control-Allow-Methods" not in response

    def test_non_cors_headers_are_untouched(self):
        response = HeaderMap({"Content-Type": "application/json", "X-Request-Id": "abc"})
        self._decision().merge(response)
        assert response.get_header("Content-Type") == "application/json"
        assert response.get_header("X-Request-Id") == "abc"

    def test_vary_is_added(self):
        response = HeaderMap()
        self._decision().merge(response)
        assert response.get_header("Vary") == "Origin"

    def test_vary_is_appended_to_existing_value(self):
        response = HeaderMap({"Vary": "Accept-Encoding"})
        self._decision().merge(response)
        assert response.get_header("Vary") == "Accept-Encoding, Origin"

    def test_vary_origin_is_not_duplicated(self):
        response = HeaderMap({"Vary": "accept-encoding, origin"})
        self._decision().merge(response)
        assert response.get_header("Vary") == "accept-encoding, origin"

    def test_vary_star_already_covers_origin(self):
        response = HeaderMap({"Vary": "*"})
        self._decision().merge(response)
        assert response.get_header("Vary") == "*"

    def test_vary_untouched_without_vary_origin(self):
        response = HeaderMap({"Vary": "Accept"})
        self._decision(vary_origin=False).merge(response)
        assert response.get_header("Vary") == "Accept"

    def test_merge_is_idempotent(self):
        decision = self._decision(credentials=True, max_age=5)
        once = HeaderMap({"Vary": "Accept"})
        decision.merge(once)
        twice = HeaderMap({"Vary": "Accept"})
        decision.merge(twice)
        decision.merge(twice)
        assert once == twice
