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
"""Starlette implementations of the engine's request and response ports."""

from __future__ import annotations

from starlette.datastructures import Headers, MutableHeaders
from starlette.requests import Request


class StarletteRequestView:
    """``RequestView`` over a Starlette request or a raw ASGI scope."""

    __slots__ = ("_method", "_headers")

    def __init__(self, method: str, headers: Headers) -> None:
        self._method = method
        self._headers = headers

    @classmethod
    def from_request(cls, request: Request) -> StarletteRequestView:
        return cls(request.method, request.headers)

    @classmethod
    def from_scope(cls, scope: dict) -> StarletteRequestView:
        return cls(scope["method"], Headers(scope=scope))

    @property
    def method(self) -> str:
        return self._method

    def get_header(self, name: str) -> str | None:
        return self._headers.get(name)


class StarletteResponseHeaders:
    """``ResponseMutator`` over Starlette ``MutableHeaders``."""

    __slots__ = ("_headers",)

    def __init__(self, headers: MutableHeaders) -> None:
        self._headers = headers

    def get_header(self, name: str) -> str | None:
        values = self._headers.getlist(name)
        return ", ".join(values) if values else None

    def set_header(self, name: str, value: str) -> None:
        self._headers[name] = value

    def remove_header(self, name: str) -> None:
        if name in self._headers:
            del self._headers[name]
