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
"""flycors Kernel — error kinds and exception hierarchy with zero external dependencies."""

from flycors.kernel.exceptions import (
    BadOriginException,
    BadRequestMethodException,
    CorsForbiddenException,
    CredentialsWithWildcardOriginException,
    FlyCorsException,
    HeadersNotAllowedException,
    InvalidCorsRequestException,
    InvalidOriginPatternException,
    InvalidPolicyException,
    MethodNotAllowedException,
    MissingOriginException,
    MissingRequestMethodException,
    OpaqueAllowedOriginException,
    OriginNotAllowedException,
)
from flycors.kernel.types import ErrorKind, ErrorResponse

__all__ = [
    # Types
    "ErrorKind",
    "ErrorResponse",
    # Base
    "FlyCorsException",
    # Request format
    "InvalidCorsRequestException",
    "BadOriginException",
    "MissingRequestMethodException",
    "BadRequestMethodException",
    # Policy rejections
    "CorsForbiddenException",
    "MissingOriginException",
    "OriginNotAllowedException",
    "MethodNotAllowedException",
    "HeadersNotAllowedException",
    # Configuration
    "InvalidPolicyException",
    "CredentialsWithWildcardOriginException",
    "OpaqueAllowedOriginException",
    "InvalidOriginPatternException",
]
