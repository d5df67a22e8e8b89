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
"""Session subsystem configuration properties."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from cookiesession.core.config import config_properties

DEFAULT_COOKIE_NAME = "_session"
DEFAULT_MAX_AGE = 86400 * 365  # one year


@config_properties(prefix="cookiesession.session")
@dataclass(frozen=True)
class SessionOptions:
    """Configuration for a session manager (cookiesession.session.*).

    Attributes:
        name: Cookie name. Empty means ``"_session"``.
        max_age: Seconds before the cookie expires. ``0`` means one year,
            a negative value disables expiry checks on decode.
        quiet: Suppress the manager's error and warning log records.
        strict: Raise :class:`EncodeException` instead of logging when a
            record cannot be encoded.
        same_site: ``SameSite`` attribute of the session cookie.
    """

    name: str = DEFAULT_COOKIE_NAME
    max_age: int = 0
    quiet: bool = False
    strict: bool = False
    same_site: Literal["lax", "strict", "none"] = "lax"

    @property
    def cookie_name(self) -> str:
        return self.name or DEFAULT_COOKIE_NAME

    @property
    def codec_max_age(self) -> int | None:
        """Max age enforced on decode, or ``None`` when expiry is disabled."""
        if self.max_age < 0:
            return None
        return self.max_age or DEFAULT_MAX_AGE

    @property
    def cookie_max_age(self) -> int:
        """``Max-Age`` written on the cookie; one year unless a positive value is set."""
        return self.max_age if self.max_age > 0 else DEFAULT_MAX_AGE
