# utils/clock.py
"""Trusted time source. Callers never supply the time used by guards."""
import time
from typing import Callable

Clock = Callable[[], int]


def system_clock() -> int:
     """Current UNIX time in whole seconds."""
     return int(time.time())


def fixed_clock(now: int) -> Clock:
     """Clock frozen at ``now``; used by tests and replay tooling."""
     return lambda: now
