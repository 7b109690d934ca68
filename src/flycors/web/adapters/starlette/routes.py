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
"""Catch-all ``OPTIONS`` route answering preflights for every path."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route

from flycors.cors.policy import Policy
from flycors.web.adapters.starlette.guard import cors_guard


def catch_all_options_routes(policy: Policy, status_code: int = 204) -> list[Route]:
    """Routes answering ``OPTIONS`` on any path with an empty, CORS-decorated response.

    Mount them after the application's own routes so explicit ``OPTIONS``
    handlers keep precedence.
    """

    @cors_guard(policy)
    async def preflight(request: Request) -> Response:
        return Response(status_code=status_code)

    return [Route("/{path:path}", preflight, methods=["OPTIONS"], name="cors_preflight")]
