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
"""Per-route CORS enforcement for Starlette endpoints.

``cors_guard`` decorates an endpoint; ``respond`` wraps a handler call made
by hand. Both reject with a JSON error response and merge the decision's
headers into the response the endpoint produced.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Awaitable, Callable

import structlog
from starlette.requests import Request
from starlette.responses import Response

from flycors.cors.engine import CorsDecision, apply, decide
from flycors.cors.policy import Policy
from flycors.kernel.exceptions import FlyCorsException
from flycors.web.adapters.starlette.errors import cors_error_response
from flycors.web.adapters.starlette.request import StarletteRequestView, StarletteResponseHeaders

logger = structlog.get_logger(__name__)

Endpoint = Callable[[Request], Awaitable[Response]]
DecisionHandler = Callable[[CorsDecision], Response | Awaitable[Response]]


def _reject(exc: FlyCorsException, request: Request) -> Response:
    logger.warning(
        "cors_request_rejected",
        path=request.url.path,
        method=request.method,
        code=exc.code,
    )
    return cors_error_response(exc, request.url.path)


async def respond(policy: Policy, request: Request, handler: DecisionHandler) -> Response:
    """Decide *request* and, if permitted, call *handler* with the decision.

    *handler* may be sync or async. Its response gets the CORS headers merged.
    """
    try:
        decision = decide(policy, StarletteRequestView.from_request(request))
    except FlyCorsException as exc:
        return _reject(exc, request)

    result = handler(decision)
    response = await result if inspect.isawaitable(result) else result
    apply(decision, StarletteResponseHeaders(response.headers))
    return response


def cors_guard(policy: Policy) -> Callable[[Endpoint], Endpoint]:
    """Decorator enforcing *policy* on a single Starlette endpoint.

    Usage:
        @cors_guard(policy)
        async def list_orders(request: Request) -> Response:
            ...
    """

    def decorator(endpoint: Endpoint) -> Endpoint:
        @functools.wraps(endpoint)
        async def wrapper(request: Request) -> Response:
            async def call_endpoint(decision: CorsDecision) -> Response:
                return await endpoint(request)

            return await respond(policy, request, call_endpoint)

        return wrapper

    return decorator
