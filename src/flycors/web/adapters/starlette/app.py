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
"""flycors web application factory built on Starlette."""

from __future__ import annotations

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from flycors.core.config import Config
from flycors.cors.policy import Policy
from flycors.cors.properties import load_policy
from flycors.kernel.exceptions import FlyCorsException
from flycors.web.adapters.starlette.errors import cors_exception_handler
from flycors.web.adapters.starlette.middleware import CorsMiddleware
from flycors.web.properties import CorsWebProperties


def create_app(
    routes: list[BaseRoute] | None = None,
    policy: Policy | None = None,
    config: Config | None = None,
    debug: bool = False,
) -> Starlette:
    """Create a Starlette application with CORS enforced by ``CorsMiddleware``.

    The policy comes from *policy* or, when omitted, from the ``flycors.cors``
    section of *config*. Middleware settings are bound from ``flycors.web``.
    ``FlyCorsException`` raised inside endpoints renders as a JSON error.
    """
    config = config if config is not None else Config()
    if policy is None:
        policy = load_policy(config)
    web = config.bind(CorsWebProperties)

    middleware: list[Middleware] = []
    if web.enabled:
        middleware.append(
            Middleware(
                CorsMiddleware,
                policy=policy,
                url_patterns=web.url_patterns,
                exclude_patterns=web.exclude_patterns,
                preflight_status=web.preflight_status,
            )
        )

    return Starlette(
        debug=debug,
        routes=routes or [],
        middleware=middleware,
        exception_handlers={FlyCorsException: cors_exception_handler},
    )
