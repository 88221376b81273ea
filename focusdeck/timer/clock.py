"""Wall-clock source for the timer engine.

The engine only ever asks "what time is it now?" and always in epoch
milliseconds, so any zero-argument callable returning an ``int`` will do.
Tests pass a fake clock they can advance by hand.
"""

from __future__ import annotations

import time
from typing import Callable

Clock = Callable[[], int]


def system_now_ms() -> int:
    """Current wall-clock time as integer epoch milliseconds."""
    return int(time.time() * 1000)
