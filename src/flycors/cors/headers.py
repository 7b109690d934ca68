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
"""CORS request header parsers and the value types they produce.

``Origin`` identity is the ASCII serialization of the parsed URL origin,
compared byte for byte. ``HeaderName`` compares and hashes ASCII
case-insensitively. ``Method`` is a canonical uppercase token.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from urllib.parse import urlsplit

from flycors.kernel.exceptions import BadOriginException, BadRequestMethodException

# Leading/trailing C0 controls and space are not part of a URL.
_C0_CONTROL_OR_SPACE = "".join(chr(i) for i in range(0x21))
_ASCII_WHITESPACE = " \t\n\r\x0b\x0c"
_ASCII_LOWER = str.maketrans("ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz")
_FORBIDDEN_HOST_CHARS = frozenset(" \t\n\r#%/:<>?@[\\]^|")

# Schemes whose origin is a (scheme, host, port) tuple, with their default ports.
_TUPLE_SCHEMES: dict[str, int] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}


def _ascii_lower(value: str) -> str:
    return value.translate(_ASCII_LOWER)


# =============================================================================
# Method
# =============================================================================


class Method(StrEnum):
    """HTTP method in canonical uppercase form."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    CONNECT = "CONNECT"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PATCH = "PATCH"


def parse_request_method(value: str) -> Method:
    """Parse an ``Access-Control-Request-Method`` value, accepting any ASCII case."""
    if not value.isascii():
        raise BadRequestMethodException(value)
    try:
        return Method(value.upper())
    except ValueError:
        raise BadRequestMethodException(value) from None


# =============================================================================
# HeaderName
# =============================================================================


class HeaderName:
    """An HTTP header field name with ASCII case-insensitive equality.

    The spelling it was created with is kept for display, so echoed headers
    go back to the client the way the client wrote them.
    """

    __slots__ = ("_name", "_key")

    def __init__(self, name: str | HeaderName) -> None:
        text = str(name)
        self._name = text
        self._key = _ascii_lower(text)

    @property
    def key(self) -> str:
        """Lowercase form used for comparison, hashing and ordering."""
        return self._key

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HeaderName):
            return self._key == other._key
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._key)

    def __lt__(self, other: HeaderName) -> bool:
        return (self._key, self._name) < (other._key, other._name)

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"HeaderName({self._name!r})"


def parse_request_headers(value: str) -> frozenset[HeaderName]:
    """Parse an ``Access-Control-Request-Headers`` value. Never fails.

    Empty list elements are ignored; duplicates collapse case-insensitively.
    """
    if not value.strip(_ASCII_WHITESPACE):
        return frozenset()
    names: dict[HeaderName, None] = {}
    for part in value.split(","):
        name = part.strip(_ASCII_WHITESPACE)
        if name:
            names.setdefault(HeaderName(name), None)
    return frozenset(names)


# =============================================================================
# Origin
# =============================================================================


class OriginKind(StrEnum):
    """How an ``Origin`` value was understood."""

    TUPLE = "tuple"
    OPAQUE = "opaque"
    NULL = "null"


@dataclass(frozen=True)
class Origin:
    """A parsed request origin.

    ``serialized`` is the ASCII serialization for tuple origins, ``null`` for
    the null origin and the raw input for opaque origins.
    """

    serialized: str
    kind: OriginKind = OriginKind.TUPLE

    @property
    def is_tuple(self) -> bool:
        return self.kind is OriginKind.TUPLE

    def __str__(self) -> str:
        return self.serialized


NULL_ORIGIN = Origin("null", OriginKind.NULL)


def _normalize_host(host: str, raw: str) -> str:
    if ":" in host:
        # IPv6 literal, already validated by urlsplit
        return f"[{host}]"
    if any(ch in _FORBIDDEN_HOST_CHARS for ch in host):
        raise BadOriginException(raw, "invalid domain character")
    if host.isascii():
        return _ascii_lower(host)
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        raise BadOriginException(raw, "invalid international domain name") from None


def parse_origin(value: str | Origin) -> Origin:
    """Parse an ``Origin`` header value or a configured origin.

    The input must be an absolute URL. Path, query and fragment are accepted
    and dropped; only scheme, host and port form the origin.
    """
    if isinstance(value, Origin):
        return value

    raw = value.strip(_C0_CONTROL_OR_SPACE)
    if not raw:
        raise BadOriginException(value, "relative URL without a base")
    if _ascii_lower(raw) == "null":
        return NULL_ORIGIN

    try:
        parts = urlsplit(raw)
    except ValueError as exc:
        raise BadOriginException(value, str(exc)) from None

    if not parts.scheme:
        raise BadOriginException(value, "relative URL without a base")

    scheme = _ascii_lower(parts.scheme)
    default_port = _TUPLE_SCHEMES.get(scheme)
    if default_port is None:
        return Origin(raw, OriginKind.OPAQUE)

    if not parts.hostname:
        raise BadOriginException(value, "empty host")
    try:
        port = parts.port
    except ValueError:
        raise BadOriginException(value, "invalid port number") from None

    host = _normalize_host(parts.hostname, value)
    if port is None or port == default_port:
        return Origin(f"{scheme}://{host}")
    return Origin(f"{scheme}://{host}:{port}")
