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
"""CORS policy engine — framework-independent core.

Control flow per request: Header Parsers -> Classifier -> Validator ->
Response Builder. Hosts call :func:`decide` with a ``RequestView`` and
:func:`apply` with a ``ResponseMutator``.
"""

from flycors.cors.classifier import NOT_CORS, ActualCandidate, NotCors, PreflightCandidate, classify
from flycors.cors.engine import CorsDecision, apply, decide
from flycors.cors.headers import (
    HeaderName,
    Method,
    Origin,
    OriginKind,
    parse_origin,
    parse_request_headers,
    parse_request_method,
)
from flycors.cors.memory import HeaderMap, InMemoryRequest
from flycors.cors.policy import ALL, DEFAULT_ALLOWED_METHODS, All, AllOrSome, Policy, Some
from flycors.cors.ports import RequestView, ResponseMutator
from flycors.cors.properties import CorsProperties, load_policy, policy_from_json, policy_to_json
from flycors.cors.response import WILDCARD, Echo, ResponseDecision, Wildcard, build_decision
from flycors.cors.validator import Actual, Preflight, ValidationResult, validate

__all__ = [
    # Parsers and value types
    "HeaderName",
    "Method",
    "Origin",
    "OriginKind",
    "parse_origin",
    "parse_request_headers",
    "parse_request_method",
    # Policy
    "ALL",
    "All",
    "AllOrSome",
    "DEFAULT_ALLOWED_METHODS",
    "Policy",
    "Some",
    "CorsProperties",
    "load_policy",
    "policy_from_json",
    "policy_to_json",
    # Classifier / Validator
    "NOT_CORS",
    "NotCors",
    "ActualCandidate",
    "PreflightCandidate",
    "classify",
    "Actual",
    "Preflight",
    "ValidationResult",
    "validate",
    # Response Builder
    "WILDCARD",
    "Echo",
    "Wildcard",
    "ResponseDecision",
    "build_decision",
    # Engine and ports
    "CorsDecision",
    "apply",
    "decide",
    "RequestView",
    "ResponseMutator",
    "HeaderMap",
    "InMemoryRequest",
]
