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
"""Tests for BufferPool."""

import threading
from concurrent.futures import ThreadPoolExecutor

from cookiesession.session.buffer import BufferPool


class TestBufferPool:
    def test_acquire_returns_empty_buffer(self):
        assert BufferPool().acquire().getvalue() == b""

    def test_released_buffer_is_reused_and_reset(self):
        pool = BufferPool()
        buffer = pool.acquire()
        buffer.write(b"previous request")
        pool.release(buffer)

        reused = pool.acquire()
        assert reused is buffer
        assert reused.getvalue() == b""
        reused.write(b"ok")
        assert reused.getvalue() == b"ok"

    def test_double_release_is_kept_once(self):
        pool = BufferPool()
        buffer = pool.acquire()
        pool.release(buffer)
        pool.release(buffer)
        assert pool.idle_count == 1

    def test_idle_buffers_are_bounded(self):
        pool = BufferPool(max_idle=2)
        buffers = [pool.acquire() for _ in range(5)]
        for buffer in buffers:
            pool.release(buffer)
        assert pool.idle_count == 2

    def test_oversized_buffers_are_dropped(self):
        pool = BufferPool(max_buffer_size=8)
        buffer = pool.acquire()
        buffer.write(b"x" * 9)
        pool.release(buffer)
        assert pool.idle_count == 0

    def test_concurrent_owners_never_share_a_buffer(self):
        pool = BufferPool(max_idle=4)
        errors: list[str] = []
        barrier = threading.Barrier(8)

        def work(n: int) -> None:
            barrier.wait()
            for i in range(200):
                buffer = pool.acquire()
                payload = f"{n}:{i}".encode()
                buffer.write(payload)
                if buffer.getvalue() != payload:
                    errors.append(f"{n}:{i}")
                pool.release(buffer)

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(work, range(8)))

        assert errors == []
        assert pool.idle_count <= 4
