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
"""CORS middleware for Starlette — pure ASGI."""

from __future__ import annotations

from collections.abc import Sequence
from fnmatch import fnmatch
from typing import Any

import structlog
from starlette.datastructures import MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from flycors.cors.engine import CorsDecision, apply, decide
from flycors.cors.policy import Policy
from flycors.kernel.exceptions import FlyCorsException, MissingRequestMethodException
from flycors.web.adapters.starlette.errors import cors_error_response
from flycors.web.adapters.starlette.request import StarletteRequestView, StarletteResponseHeaders
from flycors.web.errors import status_for

logger = structlog.get_logger(__name__)

# Statuses the router answers with when no route handles OPTIONS.
_UNROUTED_STATUSES = frozenset({404, 405})
_BODY_HEADERS = frozenset({b"content-length", b"content-type"})


class CorsMiddleware:
    """Enforces a CORS policy on every HTTP request.

    Rejected requests are answered with a JSON error and never reach the
    application. Permitted preflights that no route handles are answered with
    ``preflight_status`` and an empty body. The decision's headers are merged
    into every response of a CORS request.

    ``url_patterns`` and ``exclude_patterns`` are glob patterns on the request
    path; an empty ``url_patterns`` applies the policy everywhere.

    Uses raw ASGI protocol instead of ``BaseHTTPMiddleware`` so streaming
    responses pass through unbuffered.
    """

    def __init__(
        self,
        app: ASGIApp,
        policy: Policy,
        *,
        url_patterns: Sequence[str] = (),
        exclude_patterns: Sequence[str] = (),
        preflight_status: int = 204,
    ) -> None:
        self.app = app
        self._policy = policy
        self._url_patterns = list(url_patterns)
        self._exclude_patterns = list(exclude_patterns)
        self._preflight_status = preflight_status

    def should_not_filter(self, path: str) -> bool:
        """Return ``True`` if the policy does not apply to *path*."""
        if self._url_patterns and not any(fnmatch(path, p) for p in self._url_patterns):
            return True
        return any(fnmatch(path, p) for p in self._exclude_patterns)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or self.should_not_filter(scope["path"]):
            await self.app(scope, receive, send)
            return

        try:
            decision = decide(self._policy, StarletteRequestView.from_scope(scope))
        except MissingRequestMethodException:
            # Plain OPTIONS request, not a preflight
            await self.app(scope, receive, send)
            return
        except FlyCorsException as exc:
            logger.warning(
                "cors_request_rejected",
                path=scope["path"],
                method=scope["method"],
                code=exc.code,
                status=status_for(exc),
            )
            response = cors_error_response(exc, scope["path"])
            await response(scope, receive, send)
            return

        if not decision.is_cors:
            await self.app(scope, receive, send)
            return

        await self.app(scope, receive, self._sender(decision, send))

    def _sender(self, decision: CorsDecision, send: Send) -> Send:
        preflight_status = self._preflight_status
        swallow_body = False

        async def send_with_cors(message: Any) -> None:
            nonlocal swallow_body
            if message["type"] == "http.response.start":
                if decision.is_preflight and message["status"] in _UNROUTED_STATUSES:
                    swallow_body = True
                    message = {
                        "type": "http.response.start",
                        "status": preflight_status,
                        "headers": [
                            (name, value)
                            for name, value in message.get("headers", [])
                            if name.lower() not in _BODY_HEADERS
                        ],
                    }
                apply(decision, StarletteResponseHeaders(MutableHeaders(scope=message)))
            elif message["type"] == "http.response.body" and swallow_body:
                if message.get("more_body", False):
                    return
                message = {"type": "http.response.body", "body": b""}
            await send(message)

        return send_with_cors
