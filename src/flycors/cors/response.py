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
"""Response Builder: turns a validation result into CORS response headers.

Implements the header synthesis of the W3C CORS resource processing model:
the ``Access-Control-Allow-Origin`` directive, the credentials flag, the
``Vary: Origin`` interaction and the preflight-only / actual-only headers.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Union

from flycors.cors.headers import HeaderName, Method
from flycors.cors.policy import All, Policy
from flycors.cors.ports import ResponseMutator
from flycors.cors.validator import Actual, Preflight, ValidationResult

ACCESS_CONTROL_ALLOW_ORIGIN = "Access-Control-Allow-Origin"
ACCESS_CONTROL_ALLOW_CREDENTIALS = "Access-Control-Allow-Credentials"
ACCESS_CONTROL_ALLOW_METHODS = "Access-Control-Allow-Methods"
ACCESS_CONTROL_ALLOW_HEADERS = "Access-Control-Allow-Headers"
ACCESS_CONTROL_EXPOSE_HEADERS = "Access-Control-Expose-Headers"
ACCESS_CONTROL_MAX_AGE = "Access-Control-Max-Age"
VARY = "Vary"

CORS_RESPONSE_HEADERS: tuple[str, ...] = (
    ACCESS_CONTROL_ALLOW_ORIGIN,
    ACCESS_CONTROL_ALLOW_CREDENTIALS,
    ACCESS_CONTROL_ALLOW_METHODS,
    ACCESS_CONTROL_ALLOW_HEADERS,
    ACCESS_CONTROL_EXPOSE_HEADERS,
    ACCESS_CONTROL_MAX_AGE,
)


# =============================================================================
# Origin directive
# =============================================================================


@dataclass(frozen=True)
class Echo:
    """Send the request origin back in ``Access-Control-Allow-Origin``."""

    origin: str

    @property
    def value(self) -> str:
        return self.origin


@dataclass(frozen=True)
class Wildcard:
    """Send ``*`` in ``Access-Control-Allow-Origin``."""

    @property
    def value(self) -> str:
        return "*"


WILDCARD = Wildcard()

OriginDirective = Union[Echo, Wildcard]


# =============================================================================
# ResponseDecision
# =============================================================================


@dataclass(frozen=True)
class ResponseDecision:
    """Everything needed to emit the CORS headers of one response.

    ``methods``, ``allowed_headers_echoed`` and ``max_age`` are only
    populated for preflights; ``expose_headers`` only for actual requests.
    """

    origin_directive: OriginDirective
    vary_origin: bool
    credentials: bool
    methods: frozenset[Method] = frozenset()
    allowed_headers_echoed: frozenset[HeaderName] = frozenset()
    expose_headers: frozenset[HeaderName] = frozenset()
    max_age: int | None = None

    def to_headers(self) -> dict[str, str | None]:
        """Serialize to a header set; ``None`` means the header must be absent.

        Every CORS response header is present as a key. ``Vary`` is not
        included because it is merged, not overwritten; see ``merge``.
        """
        return {
            ACCESS_CONTROL_ALLOW_ORIGIN: self.origin_directive.value,
            ACCESS_CONTROL_ALLOW_CREDENTIALS: "true" if self.credentials else None,
            ACCESS_CONTROL_ALLOW_METHODS: _join(str(m) for m in sorted(self.methods)),
            ACCESS_CONTROL_ALLOW_HEADERS: _join(str(h) for h in sorted(self.allowed_headers_echoed)),
            ACCESS_CONTROL_EXPOSE_HEADERS: _join(str(h) for h in sorted(self.expose_headers)),
            ACCESS_CONTROL_MAX_AGE: str(self.max_age) if self.max_age is not None else None,
        }

    def merge(self, response: ResponseMutator) -> None:
        """Write this decision into *response*.

        Each CORS header is overwritten or removed; ``Origin`` is added to
        ``Vary`` at most once. Other headers are left untouched, so merging
        the same decision twice equals merging it once.
        """
        for name, value in self.to_headers().items():
            if value is None:
                response.remove_header(name)
            else:
                response.set_header(name, value)

        if self.vary_origin:
            current = response.get_header(VARY)
            if current is None or not current.strip():
                response.set_header(VARY, "Origin")
            elif not _vary_lists(current, "origin"):
                response.set_header(VARY, f"{current}, Origin")


def _join(values: Iterable[str]) -> str | None:
    joined = ", ".join(values)
    return joined or None


def _vary_lists(vary: str, name: str) -> bool:
    tokens = {token.strip().lower() for token in vary.split(",")}
    return name in tokens or "*" in tokens


# =============================================================================
# Builder
# =============================================================================


def _origin_directive(policy: Policy, origin: str) -> tuple[OriginDirective, bool]:
    if isinstance(policy.allowed_origins, All):
        if policy.send_wildcard:
            return WILDCARD, False
        return Echo(origin), True
    return Echo(origin), False


def build_decision(policy: Policy, result: ValidationResult) -> ResponseDecision | None:
    """Map a validation result to a ``ResponseDecision``; ``None`` for non-CORS requests."""
    if isinstance(result, Preflight):
        directive, vary_origin = _origin_directive(policy, result.origin.serialized)
        return ResponseDecision(
            origin_directive=directive,
            vary_origin=vary_origin,
            credentials=policy.allow_credentials,
            methods=policy.allowed_methods,
            allowed_headers_echoed=result.requested_headers,
            max_age=policy.max_age,
        )
    if isinstance(result, Actual):
        directive, vary_origin = _origin_directive(policy, result.origin.serialized)
        return ResponseDecision(
            origin_directive=directive,
            vary_origin=vary_origin,
            credentials=policy.allow_credentials,
            expose_headers=policy.expose_headers,
        )
    return None
