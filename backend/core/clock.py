"""Providers of the current calendar date.

Core calculations take ``today`` as an argument; only the HTTP layer asks a
clock for it, so tests can pin the date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def today(self) -> date: ...


class SystemClock:
    """Wall-clock date in the portal's timezone."""

    def __init__(self, timezone: str = "America/Bogota") -> None:
        self._zone = ZoneInfo(timezone)

    def today(self) -> date:
        return datetime.now(self._zone).date()


class FixedClock:
    """Always returns the same date."""

    def __init__(self, fixed: date) -> None:
        self._fixed = fixed

    def today(self) -> date:
        return self._fixed
