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
"""Logging setup contract for applications that host cookie sessions.

The session modules only ever call ``logging.getLogger(__name__)``. Whatever
implements :class:`LoggingPort` decides how those records are rendered and
which ``cookiesession.*`` loggers are let through.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from cookiesession.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Configures rendering and levels for the ``cookiesession`` loggers."""

    def configure(self, config: Config) -> None:
        """Apply the ``cookiesession.logging`` section (format and levels)."""
        ...

    def get_logger(self, name: str) -> Any:
        """Return a logger bound to *name*, e.g. ``cookiesession.session.manager``."""
        ...

    def set_level(self, name: str, level: str) -> None:
        """Change one logger's level, e.g. silence decode errors in production."""
        ...
