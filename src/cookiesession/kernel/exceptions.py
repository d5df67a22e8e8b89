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
"""Exception hierarchy for cookiesession.

All library exceptions inherit from CookieSessionException so callers can
catch one type. Codec failures are split into decode and encode errors; the
session manager recovers from both and only surfaces them in strict mode.
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class CookieSessionException(Exception):
    """Base exception for all cookiesession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_DECODE_EXPIRED").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class InvalidSecretException(CookieSessionException):
    """The secret key material is missing or unusable."""


# =============================================================================
# Codec Exceptions
# =============================================================================


class CodecException(CookieSessionException):
    """The cookie codec could not process a session value."""


class DecodeException(CodecException):
    """A cookie value failed signature, expiry or payload checks."""


class EncodeException(CodecException):
    """A session record could not be serialized into a cookie value."""
