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
"""In-memory request and response adapters for framework-less use and tests."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field


class HeaderMap:
    """Case-insensitive header collection implementing ``ResponseMutator``.

    Keeps the spelling of the most recent ``set_header`` for each name.
    """

    def __init__(self, headers: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, tuple[str, str]] = {}
        for name, value in (headers or {}).items():
            self.set_header(name, value)

    def get_header(self, name: str) -> str | None:
        item = self._items.get(name.lower())
        return item[1] if item is not None else None

    def set_header(self, name: str, value: str) -> None:
        self._items[name.lower()] = (name, value)

    def remove_header(self, name: str) -> None:
        self._items.pop(name.lower(), None)

    def to_dict(self) -> dict[str, str]:
        """Snapshot as a plain dict keyed by the stored spelling."""
        return dict(self._items.values())

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._items

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return {k: v for k, (_, v) in self._items.items()} == {k: v for k, (_, v) in other._items.items()}

    def __repr__(self) -> str:
        return f"HeaderMap({self.to_dict()!r})"


@dataclass
class InMemoryRequest:
    """A request made of a method and a plain header mapping."""

    method: str = "GET"
    headers: Mapping[str, str] = field(default_factory=dict)

    def get_header(self, name: str) -> str | None:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None
