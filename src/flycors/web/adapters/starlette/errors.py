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
"""Starlette rendering of CORS errors."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import JSONResponse

from flycors.kernel.exceptions import FlyCorsException
from flycors.web.errors import error_response_for


def cors_error_response(exc: FlyCorsException, path: str) -> JSONResponse:
    """JSON error response for a request rejected by the CORS engine."""
    body = error_response_for(exc, path)
    return JSONResponse(body.to_dict(), status_code=body.status)


async def cors_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Starlette exception handler for ``FlyCorsException`` raised inside endpoints."""
    assert isinstance(exc, FlyCorsException)
    return cors_error_response(exc, request.url.path)
