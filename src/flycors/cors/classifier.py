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
"""Classifier: decides whether a request is not CORS, a preflight or an actual request."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import structlog

from flycors.cors.headers import (
    HeaderName,
    Method,
    Origin,
    parse_origin,
    parse_request_headers,
    parse_request_method,
)
from flycors.cors.ports import RequestView
from flycors.kernel.exceptions import MissingRequestMethodException

logger = structlog.get_logger("flycors.cors.classifier")

ORIGIN = "Origin"
ACCESS_CONTROL_REQUEST_METHOD = "Access-Control-Request-Method"
ACCESS_CONTROL_REQUEST_HEADERS = "Access-Control-Request-Headers"


@dataclass(frozen=True)
class NotCors:
    """The request carries no ``Origin`` header."""

    def __repr__(self) -> str:
        return "NotCors"


NOT_CORS = NotCors()


@dataclass(frozen=True)
class PreflightCandidate:
    origin: Origin
    requested_method: Method
    requested_headers: frozenset[HeaderName]


@dataclass(frozen=True)
class ActualCandidate:
    origin: Origin


Classification = Union[NotCors, PreflightCandidate, ActualCandidate]


def classify(request: RequestView) -> Classification:
    """Classify *request* by its method and CORS request headers.

    A missing ``Origin`` short-circuits to ``NOT_CORS`` even for ``OPTIONS``.
    An ``OPTIONS`` request without ``Access-Control-Request-Method`` is not a
    preflight and raises ``MissingRequestMethodException``.
    """
    raw_origin = request.get_header(ORIGIN)
    if raw_origin is None:
        return NOT_CORS

    origin = parse_origin(raw_origin)

    if request.method.upper() != Method.OPTIONS:
        logger.debug("cors_request_classified", kind="actual", origin=origin.serialized)
        return ActualCandidate(origin)

    raw_method = request.get_header(ACCESS_CONTROL_REQUEST_METHOD)
    if raw_method is None:
        raise MissingRequestMethodException()
    requested_method = parse_request_method(raw_method)

    raw_headers = request.get_header(ACCESS_CONTROL_REQUEST_HEADERS)
    requested_headers = parse_request_headers(raw_headers) if raw_headers is not None else frozenset()

    logger.debug(
        "cors_request_classified",
        kind="preflight",
        origin=origin.serialized,
        requested_method=str(requested_method),
        requested_headers=sorted(h.key for h in requested_headers),
    )
    return PreflightCandidate(origin, requested_method, requested_headers)
