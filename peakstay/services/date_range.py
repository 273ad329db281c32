"""Check-in/check-out selection state for the stay calendar.

The picker is modelled without any rendering: callers feed it day clicks and
hover events and read back which days are selected, previewed or disabled.
Days are ISO ``YYYY-MM-DD`` strings throughout; zero-padded fields make
string comparison match calendar order.
"""

from __future__ import annotations

import calendar
import threading
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Callable, List, Optional, Tuple

from ..utils.dates import DateLike, parse_iso, to_iso
from ..utils.logging import get_logger

LOGGER = get_logger("services.date_range")

MIN_GUESTS = 1
MAX_GUESTS = 20
DEFAULT_GUESTS = 2

CompleteCallback = Callable[[str, str], None]


class SelectionState(str, Enum):
    EMPTY = "EMPTY"
    START_ONLY = "START_ONLY"
    COMPLETE = "COMPLETE"


@dataclass(frozen=True)
class MonthView:
    year: int
    month: int
    name: str
    # Sunday-first grid: leading None slots pad the first week.
    days: List[Optional[date]] = field(default_factory=list)


class DateRangeSelection:
    def __init__(
        self,
        start: DateLike = None,
        end: DateLike = None,
        guests: int = DEFAULT_GUESTS,
        today: Optional[date] = None,
        on_complete: Optional[CompleteCallback] = None,
        close_delay: float = 0.0,
    ) -> None:
        self._today = today
        self.on_complete = on_complete
        self.close_delay = close_delay
        self.start: Optional[str] = None
        self.end: Optional[str] = None
        self.hover: Optional[str] = None
        self.guests = _clamp_guests(guests)
        self._assign(start, end)
        anchor = parse_iso(self.start) or self.today
        self.view_month = anchor.replace(day=1)

    # ------------------------------------------------------------------
    # State
    @property
    def today(self) -> date:
        return self._today or date.today()

    @property
    def state(self) -> SelectionState:
        if not self.start:
            return SelectionState.EMPTY
        if not self.end:
            return SelectionState.START_ONLY
        return SelectionState.COMPLETE

    @property
    def value(self) -> Tuple[str, str]:
        return self.start or "", self.end or ""

    # ------------------------------------------------------------------
    # Transitions
    def click(self, day: DateLike) -> SelectionState:
        """Apply a click on ``day`` and return the resulting state.

        Past days and unparseable input leave the selection untouched.
        """

        clicked = _normalise(day)
        if clicked is None or self.is_past(clicked):
            return self.state

        current = self.state
        if current in (SelectionState.EMPTY, SelectionState.COMPLETE):
            self.start, self.end = clicked, None
        elif clicked < self.start:
            self.start = clicked
        elif clicked == self.start:
            self.clear()
        else:
            self.end = clicked
            self.hover = None
            self._fire_complete()
        return self.state

    def clear(self) -> SelectionState:
        self.start = None
        self.end = None
        self.hover = None
        return self.state

    def set_range(self, start: DateLike, end: DateLike = None) -> SelectionState:
        """Replace the committed range from outside the picker.

        The view follows the new start only when it shows a different month.
        """

        self._assign(start, end)
        anchor = parse_iso(self.start)
        if anchor is not None and (anchor.year, anchor.month) != (self.view_month.year, self.view_month.month):
            self.view_month = anchor.replace(day=1)
        return self.state

    def hover_over(self, day: DateLike) -> None:
        if self.state is SelectionState.COMPLETE:
            return
        self.hover = _normalise(day)

    def leave_hover(self) -> None:
        self.hover = None

    def adjust_guests(self, delta: int) -> int:
        self.guests = _clamp_guests(self.guests + delta)
        return self.guests

    # ------------------------------------------------------------------
    # Day classification
    def is_past(self, day: DateLike) -> bool:
        parsed = parse_iso(day)
        return parsed is not None and parsed < self.today

    def is_today(self, day: DateLike) -> bool:
        return parse_iso(day) == self.today

    def is_selected(self, day: DateLike) -> bool:
        value = _normalise(day)
        return value is not None and value in (self.start, self.end)

    def is_in_range(self, day: DateLike) -> bool:
        value = _normalise(day)
        if value is None or not self.start:
            return False
        if self.end:
            return self.start < value < self.end
        if self.hover and self.hover > self.start:
            return self.start < value <= self.hover
        return False

    # ------------------------------------------------------------------
    # Navigation
    def next_month(self) -> date:
        self.view_month = _shift_month(self.view_month, 1)
        return self.view_month

    def previous_month(self) -> date:
        self.view_month = _shift_month(self.view_month, -1)
        return self.view_month

    def visible_months(self) -> List[MonthView]:
        return [_month_view(self.view_month), _month_view(_shift_month(self.view_month, 1))]

    # ------------------------------------------------------------------
    def _assign(self, start: DateLike, end: DateLike) -> None:
        self.start = _normalise(start)
        self.end = _normalise(end) if self.start else None
        if self.end is not None and self.end <= self.start:
            self.end = None
        self.hover = None

    def _fire_complete(self) -> None:
        if self.on_complete is None:
            return
        start, end = self.value
        LOGGER.debug("range_complete start=%s end=%s", start, end)
        if self.close_delay > 0:
            timer = threading.Timer(self.close_delay, self.on_complete, args=(start, end))
            timer.daemon = True
            timer.start()
        else:
            self.on_complete(start, end)


def _normalise(value: DateLike) -> Optional[str]:
    parsed = parse_iso(value)
    return to_iso(parsed) if parsed is not None else None


def _clamp_guests(value: int) -> int:
    return max(MIN_GUESTS, min(MAX_GUESTS, int(value)))


def _shift_month(anchor: date, delta: int) -> date:
    index = anchor.year * 12 + (anchor.month - 1) + delta
    return date(index // 12, index % 12 + 1, 1)


def _month_view(first: date) -> MonthView:
    weekday, days_in_month = calendar.monthrange(first.year, first.month)
    leading = (weekday + 1) % 7
    days: List[Optional[date]] = [None] * leading
    days.extend(date(first.year, first.month, day) for day in range(1, days_in_month + 1))
    return MonthView(year=first.year, month=first.month, name=calendar.month_name[first.month], days=days)


__all__ = ["DateRangeSelection", "MonthView", "SelectionState"]
