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
"""Host adapter ports: what the engine needs from an HTTP framework.

The engine reads a request through ``RequestView`` and writes headers
through ``ResponseMutator``; vendor-specific types stay in the adapter layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class RequestView(Protocol):
    """Read-only view of an incoming request."""

    @property
    def method(self) -> str: ...

    def get_header(self, name: str) -> str | None:
        """Return the value of header *name* (case-insensitive), or ``None``."""
        ...


@runtime_checkable
class ResponseMutator(Protocol):
    """Header access on an outgoing response."""

    def get_header(self, name: str) -> str | None: ...

    def set_header(self, name: str, value: str) -> None:
        """Set *name* to *value*, replacing any existing values."""
        ...

    def remove_header(self, name: str) -> None:
        """Remove every value of *name*; absent headers are ignored."""
        ...
