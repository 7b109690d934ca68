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
"""Starlette web framework adapter — CORS middleware, route guard and helpers."""

from flycors.web.adapters.starlette.app import create_app
from flycors.web.adapters.starlette.errors import cors_error_response, cors_exception_handler
from flycors.web.adapters.starlette.guard import cors_guard, respond
from flycors.web.adapters.starlette.middleware import CorsMiddleware
from flycors.web.adapters.starlette.request import StarletteRequestView, StarletteResponseHeaders
from flycors.web.adapters.starlette.routes import catch_all_options_routes

__all__ = [
    "CorsMiddleware",
    "StarletteRequestView",
    "StarletteResponseHeaders",
    "catch_all_options_routes",
    "cors_error_response",
    "cors_exception_handler",
    "cors_guard",
    "create_app",
    "respond",
]
