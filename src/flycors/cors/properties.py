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
"""Serializable form of a Policy and its binding to configuration.

``AllOrSome`` values use external tagging: ``"All"`` or ``{"Some": [...]}``.

Example (YAML, under ``flycors.cors``)::

    allowed_origins:
      Some: ["https://www.acme.com"]
    allowed_methods: [GET, POST]
    allowed_headers: All
    allow_credentials: true
    max_age: 600
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from flycors.core.config import Config, config_properties
from flycors.cors.policy import ALL, DEFAULT_ALLOWED_METHODS, All, AllOrSome, Policy, Some


class SomeValues(BaseModel):
    """The ``{"Some": [...]}`` arm of an externally tagged ``AllOrSome``."""

    model_config = ConfigDict(extra="forbid")

    Some: list[str]


TaggedValues = Literal["All"] | SomeValues


def _default_methods() -> list[str]:
    return sorted(str(m) for m in DEFAULT_ALLOWED_METHODS)


@config_properties(prefix="flycors.cors")
class CorsProperties(BaseModel):
    """Configuration for a CORS policy (flycors.cors.*)."""

    model_config = ConfigDict(extra="forbid")

    allowed_origins: TaggedValues = "All"
    allowed_methods: list[str] = Field(default_factory=_default_methods)
    allowed_headers: TaggedValues = "All"
    allow_credentials: bool = False
    expose_headers: list[str] = Field(default_factory=list)
    max_age: int | None = Field(default=None, ge=0, le=0xFFFFFFFF)
    send_wildcard: bool = False
    allowed_origin_patterns: list[str] = Field(default_factory=list)

    def to_policy(self) -> Policy:
        """Build and validate the Policy these properties describe."""
        return Policy(
            allowed_origins=_untag(self.allowed_origins),
            allowed_methods=frozenset(self.allowed_methods),
            allowed_headers=_untag(self.allowed_headers),
            allow_credentials=self.allow_credentials,
            expose_headers=frozenset(self.expose_headers),
            max_age=self.max_age,
            send_wildcard=self.send_wildcard,
            allowed_origin_patterns=tuple(self.allowed_origin_patterns),
        )

    @classmethod
    def from_policy(cls, policy: Policy) -> CorsProperties:
        """Describe *policy*; collections are sorted so the output is stable."""
        return cls(
            allowed_origins=_tag(policy.allowed_origins),
            allowed_methods=sorted(str(m) for m in policy.allowed_methods),
            allowed_headers=_tag(policy.allowed_headers),
            allow_credentials=policy.allow_credentials,
            expose_headers=[str(h) for h in sorted(policy.expose_headers)],
            max_age=policy.max_age,
            send_wildcard=policy.send_wildcard,
            allowed_origin_patterns=list(policy.allowed_origin_patterns),
        )


def _untag(value: TaggedValues) -> AllOrSome[str]:
    if isinstance(value, SomeValues):
        return Some(value.Some)
    return ALL


def _tag(value: AllOrSome[object]) -> TaggedValues:
    if isinstance(value, All):
        return "All"
    return SomeValues(Some=sorted(str(v) for v in value))


def policy_to_json(policy: Policy, *, indent: int | None = 2) -> str:
    """Serialize *policy* to JSON."""
    return CorsProperties.from_policy(policy).model_dump_json(indent=indent)


def policy_from_json(text: str | bytes) -> Policy:
    """Deserialize a Policy from JSON; absent fields take their defaults."""
    return CorsProperties.model_validate_json(text).to_policy()


def load_policy(config: Config) -> Policy:
    """Bind ``flycors.cors`` from *config* and build the Policy."""
    return config.bind(CorsProperties).to_policy()
