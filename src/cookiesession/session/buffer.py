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
"""Thread-safe pool of reusable response body buffers."""

from __future__ import annotations

import io
import threading

_DEFAULT_MAX_IDLE = 64
_DEFAULT_MAX_BUFFER_SIZE = 1024 * 1024  # 1 MiB


class BufferPool:
    """Recycles ``BytesIO`` buffers across requests.

    A buffer is owned by exactly one request between :meth:`acquire` and
    :meth:`release`. Buffers come out of :meth:`acquire` empty. At most
    ``max_idle`` buffers are kept; buffers that grew past
    ``max_buffer_size`` bytes are dropped on release.
    """

    def __init__(
        self,
        max_idle: int = _DEFAULT_MAX_IDLE,
        max_buffer_size: int = _DEFAULT_MAX_BUFFER_SIZE,
    ) -> None:
        self._idle: list[io.BytesIO] = []
        self._lock = threading.Lock()
        self._max_idle = max_idle
        self._max_buffer_size = max_buffer_size

    def acquire(self) -> io.BytesIO:
        with self._lock:
            buffer = self._idle.pop() if self._idle else None
        if buffer is None:
            return io.BytesIO()
        buffer.seek(0)
        buffer.truncate()
        return buffer

    def release(self, buffer: io.BytesIO) -> None:
        if buffer.seek(0, io.SEEK_END) > self._max_buffer_size:
            return
        with self._lock:
            if len(self._idle) < self._max_idle and buffer not in self._idle:
                self._idle.append(buffer)

    @property
    def idle_count(self) -> int:
        with self._lock:
            return len(self._idle)
