from __future__ import annotations
import itertools
import time


class LayerIdSource:
    """
    Monotonic integer ids seeded from the wall clock in milliseconds.
    Two layers created within the same millisecond still get distinct ids.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))
        self._last = 0

    def __call__(self) -> int:
        now = int(self._clock())
        self._last = now if now > self._last else self._last + 1
        return self._last


_request_tokens = itertools.count(1)

def new_request_token() -> int:
    """Token identifying one generation request."""
    return next(_request_tokens)
