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
"""Top-level CORS operations: ``decide`` a request, ``apply`` the decision.

The engine is a pure function of (Policy, request method, request headers).
It holds no state and no locks, so one Policy can serve any number of
concurrent requests.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from flycors.cors.classifier import NotCors, classify
from flycors.cors.policy import Policy
from flycors.cors.ports import RequestView, ResponseMutator
from flycors.cors.response import ResponseDecision, build_decision
from flycors.cors.validator import Actual, Preflight, ValidationResult, validate
from flycors.kernel.exceptions import MissingOriginException

logger = structlog.get_logger("flycors.cors")


@dataclass(frozen=True)
class CorsDecision:
    """Outcome of a successful ``decide`` call, consumed within one request."""

    result: ValidationResult
    response: ResponseDecision | None = None

    @property
    def is_cors(self) -> bool:
        return not isinstance(self.result, NotCors)

    @property
    def is_preflight(self) -> bool:
        return isinstance(self.result, Preflight)

    @property
    def is_actual(self) -> bool:
        return isinstance(self.result, Actual)

    def headers(self) -> dict[str, str | None]:
        """The CORS header set this decision emits (empty for non-CORS requests)."""
        if self.response is None:
            return {}
        return self.response.to_headers()


def decide(policy: Policy, request: RequestView, *, require_origin: bool = False) -> CorsDecision:
    """Classify and validate *request* against *policy*.

    Args:
        policy: The policy to enforce.
        request: Read-only view of the request method and headers.
        require_origin: Reject requests without ``Origin`` instead of
            treating them as non-CORS requests.

    Returns:
        The decision to hand to :func:`apply`.

    Raises:
        FlyCorsException: The subclass names the single reason the request
            was rejected.
    """
    result = validate(policy, classify(request))
    if isinstance(result, NotCors) and require_origin:
        raise MissingOriginException()

    if isinstance(result, (Preflight, Actual)):
        logger.debug(
            "cors_request_allowed",
            preflight=isinstance(result, Preflight),
            origin=result.origin.serialized,
        )
    return CorsDecision(result, build_decision(policy, result))


def apply(decision: CorsDecision, response: ResponseMutator) -> None:
    """Merge *decision* into *response*. Applying it again changes nothing."""
    if decision.response is not None:
        decision.response.merge(response)
