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
"""Unified exception hierarchy for flycors.

All engine exceptions inherit from FlyCorsException, so a host adapter can
catch one type and still tell every error kind apart through ``kind``.

Categories:
- InvalidCorsRequestException: malformed CORS request headers (HTTP 400)
- CorsForbiddenException: well-formed request rejected by the policy (HTTP 403)
- InvalidPolicyException: the policy itself is unusable (HTTP 500)
"""

from __future__ import annotations

from typing import Any, ClassVar

from flycors.kernel.types import ErrorKind

# =============================================================================
# Base Exception
# =============================================================================


class FlyCorsException(Exception):
    """Base exception for all flycors errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code. Defaults to the error kind name.
        context: Arbitrary key-value pairs describing the offending input.
    """

    kind: ClassVar[ErrorKind | None] = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else (str(self.kind) if self.kind else None)
        self.context: dict[str, Any] = context if context is not None else {}


# =============================================================================
# Request format errors
# =============================================================================


class InvalidCorsRequestException(FlyCorsException):
    """A CORS request header is present but malformed, or a required one is missing."""


class BadOriginException(InvalidCorsRequestException):
    """The ``Origin`` header is not a valid absolute URL."""

    kind = ErrorKind.BAD_ORIGIN

    def __init__(self, value: str, detail: str) -> None:
        super().__init__(
            "The request header `Origin` contains an invalid URL",
            context={"origin": value, "detail": detail},
        )
        self.detail = detail


class MissingRequestMethodException(InvalidCorsRequestException):
    """An ``OPTIONS`` request carries no ``Access-Control-Request-Method``."""

    kind = ErrorKind.MISSING_REQUEST_METHOD

    def __init__(self) -> None:
        super().__init__("The request header `Access-Control-Request-Method` is required but is missing")


class BadRequestMethodException(InvalidCorsRequestException):
    """``Access-Control-Request-Method`` is not a method token."""

    kind = ErrorKind.BAD_REQUEST_METHOD

    def __init__(self, value: str) -> None:
        super().__init__(
            "The request header `Access-Control-Request-Method` has an invalid value",
            context={"method": value},
        )


# =============================================================================
# Policy rejections
# =============================================================================


class CorsForbiddenException(FlyCorsException):
    """The request is well-formed but the policy does not permit it."""


class MissingOriginException(CorsForbiddenException):
    """The caller required a CORS request but ``Origin`` is absent."""

    kind = ErrorKind.MISSING_ORIGIN

    def __init__(self) -> None:
        super().__init__("The request header `Origin` is required but is missing")


class OriginNotAllowedException(CorsForbiddenException):
    kind = ErrorKind.ORIGIN_NOT_ALLOWED

    def __init__(self, origin: str) -> None:
        super().__init__(f"Origin '{origin}' is not allowed to request", context={"origin": origin})
        self.origin = origin


class MethodNotAllowedException(CorsForbiddenException):
    kind = ErrorKind.METHOD_NOT_ALLOWED

    def __init__(self, method: str) -> None:
        super().__init__(f"Method '{method}' is not allowed", context={"method": method})
        self.method = method


class HeadersNotAllowedException(CorsForbiddenException):
    kind = ErrorKind.HEADERS_NOT_ALLOWED

    def __init__(self, headers: list[str]) -> None:
        super().__init__("Headers are not allowed", context={"headers": headers})
        self.headers = headers


# =============================================================================
# Configuration errors
# =============================================================================


class InvalidPolicyException(FlyCorsException):
    """The CORS policy is not valid and cannot be used."""


class CredentialsWithWildcardOriginException(InvalidPolicyException):
    kind = ErrorKind.CREDENTIALS_WITH_WILDCARD_ORIGIN

    def __init__(self) -> None:
        super().__init__(
            'Credentials are allowed, but the Origin is set to "*". This is not allowed by W3C'
        )


class OpaqueAllowedOriginException(InvalidPolicyException):
    """Configured exact origins that can never match by equality."""

    kind = ErrorKind.OPAQUE_ALLOWED_ORIGIN

    def __init__(self, origins: list[str]) -> None:
        super().__init__(
            f"The configured Origins '{'; '.join(origins)}' are Opaque Origins. Use patterns instead.",
            context={"origins": origins},
        )
        self.origins = origins


class InvalidOriginPatternException(InvalidPolicyException):
    kind = ErrorKind.INVALID_ORIGIN_PATTERN

    def __init__(self, pattern: str, detail: str) -> None:
        super().__init__(
            f"Origin pattern '{pattern}' is not a valid regular expression: {detail}",
            context={"pattern": pattern, "detail": detail},
        )
