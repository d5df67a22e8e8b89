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
"""Cookie codec protocol."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Codec(Protocol):
    """Authenticated encoding of session payloads to and from cookie values.

    ``name`` is the cookie name; implementations bind it into the
    signature so a value issued for one cookie does not verify as another.

    ``encode`` raises :class:`EncodeException` when the payload cannot be
    serialized. ``decode`` raises :class:`DecodeException` on a bad
    signature, an expired value or a corrupt payload.
    """

    def encode(self, name: str, value: Any) -> str: ...

    def decode(self, name: str, value: str) -> Any: ...
