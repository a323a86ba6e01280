"""Chronologically sortable record keys.

Keys are 20 characters: 8 encode the millisecond timestamp, 12 are random.
The alphabet is in ASCII order, so comparing two keys as strings compares
their creation times. Keys generated within the same millisecond increment
the random suffix instead of drawing a new one, keeping them strictly
increasing within a process.
"""

import secrets
import threading
import time

PUSH_CHARS = "-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"


class PushKeyGenerator:
    """Generates unique, creation-ordered keys."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last_millis = -1
        self._last_random = [0] * 12

    def generate(self, now_ms: int | None = None) -> str:
        millis = int(time.time() * 1000) if now_ms is None else now_ms
        with self._lock:
            duplicate = millis == self._last_millis
            self._last_millis = millis

            if not duplicate:
                self._last_random = [secrets.randbelow(64) for _ in range(12)]
            else:
                # Same millisecond: bump the suffix so ordering stays strict.
                i = 11
                while i >= 0 and self._last_random[i] == 63:
                    self._last_random[i] = 0
                    i -= 1
                if i >= 0:
                    self._last_random[i] += 1

            suffix = "".join(PUSH_CHARS[n] for n in self._last_random)

        prefix = []
        for _ in range(8):
            prefix.append(PUSH_CHARS[millis % 64])
            millis //= 64
        return "".join(reversed(prefix)) + suffix


_default_generator = PushKeyGenerator()


def generate_push_key(now_ms: int | None = None) -> str:
    """Return a new key from the process-wide generator."""
    return _default_generator.generate(now_ms)
