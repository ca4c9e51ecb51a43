"""Element group identifiers.

Identifiers combine a per-generator counter with a millisecond timestamp,
``grp_<n>_<ms>``.  A generator is created per build call (or passed in by the
caller) so no counter state leaks between independent builds.  Uniqueness is
guaranteed within one generator; cross-session stability is not a goal.
"""

from __future__ import annotations

import time
from typing import Callable

__all__ = ["GroupIdGenerator"]


class GroupIdGenerator:
    """Monotonic identifier source for element groups."""

    def __init__(self, prefix: str = "grp", clock: Callable[[], float] | None = None) -> None:
        self._prefix = prefix
        self._clock = clock or time.time
        self._count = 0

    @property
    def issued(self) -> int:
        """Return how many identifiers were handed out."""

        return self._count

    def next_id(self) -> str:
        self._count += 1
        millis = int(self._clock() * 1000)
        return f"{self._prefix}_{self._count}_{millis}"

    __call__ = next_id
