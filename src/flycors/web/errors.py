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
"""Framework-agnostic mapping of CORS errors to HTTP responses."""

from __future__ import annotations

from datetime import UTC, datetime

from flycors.kernel.exceptions import (
    CorsForbiddenException,
    FlyCorsException,
    InvalidCorsRequestException,
    InvalidPolicyException,
)
from flycors.kernel.types import ErrorResponse

# Exception -> HTTP status code mapping (most specific first)
_STATUS_MAP: dict[type, int] = {
    InvalidCorsRequestException: 400,
    CorsForbiddenException: 403,
    InvalidPolicyException: 500,
}


def status_for(exc: FlyCorsException) -> int:
    """Map a CORS exception to the HTTP status an adapter should answer with."""
    for exc_type, status in _STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return status
    return 500


def error_response_for(exc: FlyCorsException, path: str) -> ErrorResponse:
    """Build the structured error body for *exc* raised while serving *path*."""
    return ErrorResponse(
        timestamp=datetime.now(UTC).isoformat(),
        status=status_for(exc),
        message=str(exc),
        code=exc.code or type(exc).__name__,
        path=path,
        context=exc.context or None,
    )
