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
"""CORS policy: the immutable configuration every request is checked against."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar, Union

from flycors.cors.headers import (
    HeaderName,
    Method,
    Origin,
    OriginKind,
    parse_origin,
    parse_request_method,
)
from flycors.kernel.exceptions import (
    CredentialsWithWildcardOriginException,
    InvalidOriginPatternException,
    OpaqueAllowedOriginException,
)

T = TypeVar("T")

_MAX_AGE_LIMIT = 0xFFFFFFFF


# =============================================================================
# AllOrSome
# =============================================================================


@dataclass(frozen=True)
class All:
    """Every value is permitted."""

    def __contains__(self, item: object) -> bool:
        return True

    def __repr__(self) -> str:
        return "All"


@dataclass(frozen=True)
class Some(Generic[T]):
    """Exactly the given values are permitted.

    The values are copied into a ``frozenset`` on construction.
    """

    values: frozenset[T]

    def __init__(self, values: Iterable[T]) -> None:
        object.__setattr__(self, "values", frozenset(values))

    def __contains__(self, item: object) -> bool:
        return item in self.values

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


ALL = All()

AllOrSome = Union[All, Some[T]]


# =============================================================================
# Policy
# =============================================================================

DEFAULT_ALLOWED_METHODS: frozenset[Method] = frozenset(
    {
        Method.GET,
        Method.HEAD,
        Method.POST,
        Method.OPTIONS,
        Method.PUT,
        Method.PATCH,
        Method.DELETE,
    }
)


def _require_all_or_some(name: str, value: object) -> None:
    if not isinstance(value, (All, Some)):
        raise TypeError(f"{name} must be ALL or Some(...), got {type(value).__name__}")


def _origins(value: AllOrSome[Any]) -> AllOrSome[Origin]:
    if isinstance(value, All):
        return value
    return Some(parse_origin(o) for o in value)


def _header_names(values: Iterable[str | HeaderName]) -> frozenset[HeaderName]:
    return frozenset(HeaderName(v) for v in values)


@dataclass(frozen=True)
class Policy:
    """Immutable CORS policy, validated once at construction.

    Inputs are copied and normalized: configured origins are parsed, methods
    canonicalized and header names made case-insensitive, so later mutation
    of the caller's collections cannot affect the policy.

    Attributes:
        allowed_origins: ``ALL`` or ``Some`` of acceptable ``Origin`` values.
        allowed_methods: Methods a preflight may request.
        allowed_headers: ``ALL`` or ``Some`` of request headers a preflight may ask for.
        allow_credentials: Emit ``Access-Control-Allow-Credentials: true``.
        expose_headers: Value of ``Access-Control-Expose-Headers`` on actual responses.
        max_age: Value of ``Access-Control-Max-Age`` on preflight responses, in seconds.
        send_wildcard: With ``ALL`` origins, emit ``*`` instead of echoing the origin.
        allowed_origin_patterns: Regular expressions tried against the origin
            serialization when ``allowed_origins`` is ``Some`` and has no exact match.
    """

    allowed_origins: AllOrSome[Origin] = ALL
    allowed_methods: frozenset[Method] = DEFAULT_ALLOWED_METHODS
    allowed_headers: AllOrSome[HeaderName] = ALL
    allow_credentials: bool = False
    expose_headers: frozenset[HeaderName] = frozenset()
    max_age: int | None = None
    send_wildcard: bool = False
    allowed_origin_patterns: tuple[str, ...] = ()
    _compiled_patterns: tuple[re.Pattern[str], ...] = field(
        init=False, repr=False, compare=False, default=()
    )

    def __post_init__(self) -> None:
        if self.max_age is not None and not 0 <= self.max_age <= _MAX_AGE_LIMIT:
            raise ValueError(f"max_age must be between 0 and {_MAX_AGE_LIMIT} seconds, got {self.max_age}")

        _require_all_or_some("allowed_origins", self.allowed_origins)
        _require_all_or_some("allowed_headers", self.allowed_headers)
        self.validate()

        origins = _origins(self.allowed_origins)
        if isinstance(origins, Some):
            opaque = sorted(o.serialized for o in origins if o.kind is OriginKind.OPAQUE)
            if opaque:
                raise OpaqueAllowedOriginException(opaque)

        headers = self.allowed_headers
        if isinstance(headers, Some):
            headers = Some(_header_names(headers))

        compiled: list[re.Pattern[str]] = []
        for pattern in self.allowed_origin_patterns:
            try:
                compiled.append(re.compile(pattern))
            except re.error as exc:
                raise InvalidOriginPatternException(pattern, str(exc)) from None

        object.__setattr__(self, "allowed_origins", origins)
        methods = frozenset(parse_request_method(str(m)) for m in self.allowed_methods)
        object.__setattr__(self, "allowed_methods", methods)
        object.__setattr__(self, "allowed_headers", headers)
        object.__setattr__(self, "expose_headers", _header_names(self.expose_headers))
        object.__setattr__(self, "allowed_origin_patterns", tuple(self.allowed_origin_patterns))
        object.__setattr__(self, "_compiled_patterns", tuple(compiled))

    def validate(self) -> None:
        """Raise if the policy combines credentials with a wildcard origin."""
        if isinstance(self.allowed_origins, All) and self.send_wildcard and self.allow_credentials:
            raise CredentialsWithWildcardOriginException()

    def allows_origin(self, origin: Origin) -> bool:
        """Whether *origin* is acceptable under ``allowed_origins``."""
        if isinstance(self.allowed_origins, All):
            return True
        if origin in self.allowed_origins:
            return True
        return any(p.search(origin.serialized) for p in self._compiled_patterns)

    def allows_headers(self, requested: frozenset[HeaderName]) -> bool:
        """Whether every requested header is acceptable under ``allowed_headers``."""
        if not requested or isinstance(self.allowed_headers, All):
            return True
        return requested <= self.allowed_headers.values
