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
"""Validator: checks a classified request against a Policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import structlog

from flycors.cors.classifier import NOT_CORS, ActualCandidate, Classification, NotCors
from flycors.cors.headers import HeaderName, Origin
from flycors.cors.policy import Policy
from flycors.kernel.exceptions import (
    HeadersNotAllowedException,
    MethodNotAllowedException,
    OriginNotAllowedException,
)

logger = structlog.get_logger("flycors.cors.validator")


@dataclass(frozen=True)
class Preflight:
    """A permitted preflight; ``requested_headers`` all passed the policy."""

    origin: Origin
    requested_headers: frozenset[HeaderName]


@dataclass(frozen=True)
class Actual:
    """A permitted actual request."""

    origin: Origin


ValidationResult = Union[NotCors, Preflight, Actual]


def _check_origin(policy: Policy, origin: Origin) -> None:
    if not policy.allows_origin(origin):
        logger.info("cors_origin_rejected", origin=origin.serialized)
        raise OriginNotAllowedException(origin.serialized)


def validate(policy: Policy, candidate: Classification) -> ValidationResult:
    """Validate *candidate* against *policy*.

    Checks run in a fixed order and the first failure is raised, so each
    rejected request reports exactly one error kind.
    """
    if isinstance(candidate, NotCors):
        return NOT_CORS

    policy.validate()
    _check_origin(policy, candidate.origin)

    if isinstance(candidate, ActualCandidate):
        return Actual(candidate.origin)

    if candidate.requested_method not in policy.allowed_methods:
        logger.info("cors_method_rejected", method=str(candidate.requested_method))
        raise MethodNotAllowedException(str(candidate.requested_method))

    if not policy.allows_headers(candidate.requested_headers):
        rejected = sorted(str(h) for h in candidate.requested_headers if h not in policy.allowed_headers)
        logger.info("cors_headers_rejected", headers=rejected)
        raise HeadersNotAllowedException(rejected)

    return Preflight(candidate.origin, candidate.requested_headers)
