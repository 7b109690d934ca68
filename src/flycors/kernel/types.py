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
"""Error kinds and the structured error body rendered by host adapters.

All types use only the Python standard library.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Every distinguishable failure of the CORS engine."""

    MISSING_ORIGIN = "MissingOrigin"
    BAD_ORIGIN = "BadOrigin"
    MISSING_REQUEST_METHOD = "MissingRequestMethod"
    BAD_REQUEST_METHOD = "BadRequestMethod"
    ORIGIN_NOT_ALLOWED = "OriginNotAllowed"
    METHOD_NOT_ALLOWED = "MethodNotAllowed"
    HEADERS_NOT_ALLOWED = "HeadersNotAllowed"
    CREDENTIALS_WITH_WILDCARD_ORIGIN = "CredentialsWithWildcardOrigin"
    OPAQUE_ALLOWED_ORIGIN = "OpaqueAllowedOrigin"
    INVALID_ORIGIN_PATTERN = "InvalidOriginPattern"


@dataclass(frozen=True)
class ErrorResponse:
    """Body of an HTTP error produced when a request fails CORS checks.

    ``context`` is excluded from ``to_dict()`` output when empty.
    """

    timestamp: str
    status: int
    message: str
    code: str
    path: str
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a dict suitable for JSON responses."""
        error: dict[str, Any] = {
            "message": self.message,
            "code": self.code,
            "status": self.status,
            "path": self.path,
            "timestamp": self.timestamp,
        }
        if self.context:
            error["context"] = self.context
        return {"error": error}
