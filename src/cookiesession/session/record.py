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
"""SessionRecord — the two-map value carried in the session cookie."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from cookiesession.kernel.exceptions import DecodeException


@dataclass
class SessionRecord:
    """Persistent ``data`` plus read-once ``flashes``.

    Both maps are always dicts; a record is never handed out with a
    missing map.
    """

    data: dict[str, Any] = field(default_factory=dict)
    flashes: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the serializable form handed to the codec."""
        return {"data": self.data, "flashes": self.flashes}

    @classmethod
    def from_payload(cls, payload: Any) -> SessionRecord:
        """Build a record from a decoded payload.

        Raises:
            DecodeException: If the payload or either of its maps is not a mapping.
        """
        if not isinstance(payload, Mapping):
            raise DecodeException(
                "Session payload is not a mapping",
                code="SESSION_DECODE_PAYLOAD",
                context={"type": type(payload).__name__},
            )

        maps: dict[str, dict[str, Any]] = {}
        for key in ("data", "flashes"):
            value = payload.get(key)
            if value is None:
                value = {}
            if not isinstance(value, Mapping):
                raise DecodeException(
                    f"Session payload field '{key}' is not a mapping",
                    code="SESSION_DECODE_PAYLOAD",
                    context={"field": key, "type": type(value).__name__},
                )
            maps[key] = dict(value)

        return cls(data=maps["data"], flashes=maps["flashes"])

    def take_flashes(self) -> dict[str, Any]:
        """Return a copy of the flashes and clear the live dict in place."""
        values = dict(self.flashes)
        self.flashes.clear()
        return values
