"""Cooperative cancellation for long-running route searches."""

import time
from typing import Optional


class CancellationToken:
    """Flag polled by PathFinder between expansions.

    A caller may cancel explicitly, or give a time budget after which the
    token reports itself cancelled.

    Example:
        token = CancellationToken(time_budget_s=2.0)
        result = finder.find_route(start=a, end=b, cancel_token=token)
    """

    def __init__(self, time_budget_s: Optional[float] = None) -> None:
        self._cancelled = False
        self._deadline = None if time_budget_s is None else time.monotonic() + time_budget_s

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def is_cancelled(self) -> bool:
        if self._cancelled:
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def timed_out(self) -> bool:
        """True when the time budget, not an explicit cancel(), stopped the search."""
        return not self._cancelled and self._deadline is not None and time.monotonic() >= self._deadline
