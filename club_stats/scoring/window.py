"""Year/month filter windows.

A window narrows which games contribute to a ranking. ``"all"`` disables
filtering on an axis, and a month is only meaningful with a specific year.

Example:
    >>> window = Window.parse("2024", "02")
    >>> window.start, window.end
    (datetime.date(2024, 2, 1), datetime.date(2024, 2, 29))
    >>> window.reference_date()
    datetime.date(2024, 2, 29)
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from club_stats.types import InvalidWindowError

ALL = "all"

MIN_YEAR: int = 1900
MAX_YEAR: int = 9999

WindowValue = int | str | None


def _parse_component(
    value: WindowValue, name: str, low: int, high: int
) -> int | None:
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip().lower()
        if text == ALL:
            return None
        if not text.isdigit():
            raise InvalidWindowError(f"Invalid {name}: {value!r}")
        value = int(text)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidWindowError(f"Invalid {name}: {value!r}")
    if not low <= value <= high:
        raise InvalidWindowError(f"{name.capitalize()} out of range: {value}")
    return value


@dataclass(frozen=True)
class Window:
    """Inclusive date window selected by a (year, month) filter pair.

    Attributes:
        year: Selected year, or None for all years.
        month: Selected month (1-12), or None for the whole year.
    """

    year: int | None = None
    month: int | None = None

    @classmethod
    def parse(cls, year: WindowValue = ALL, month: WindowValue = ALL) -> Window:
        """Build a window from filter values.

        Args:
            year: Year as int or numeric string, or "all".
            month: Month as int or numeric string ("03" works), or "all".

        Returns:
            Window. The month is dropped when the year is "all".

        Raises:
            InvalidWindowError: If a value is not numeric or out of range.
        """
        parsed_year = _parse_component(year, "year", MIN_YEAR, MAX_YEAR)
        parsed_month = _parse_component(month, "month", 1, 12)
        if parsed_year is None:
            parsed_month = None
        return cls(year=parsed_year, month=parsed_month)

    @property
    def is_all(self) -> bool:
        return self.year is None

    @property
    def start(self) -> date | None:
        """First day of the window, or None when unbounded."""
        if self.year is None:
            return None
        return date(self.year, self.month or 1, 1)

    @property
    def end(self) -> date | None:
        """Last day of the window, or None when unbounded."""
        if self.year is None:
            return None
        if self.month is None:
            return date(self.year, 12, 31)
        last_day = calendar.monthrange(self.year, self.month)[1]
        return date(self.year, self.month, last_day)

    def contains(self, day: date) -> bool:
        """Check whether a date falls inside the window."""
        if self.year is None:
            return True
        return self.start <= day <= self.end  # type: ignore[operator]

    def reference_date(self, today: date | None = None) -> date:
        """Date used to measure age and membership tenure.

        Args:
            today: Current date, injectable for deterministic results.

        Returns:
            The window end, or today when the window is unbounded.
        """
        if self.year is None:
            return today or date.today()
        return self.end  # type: ignore[return-value]

    @property
    def label(self) -> str:
        """Short human-readable label such as "2024-03", "2024" or "all"."""
        if self.year is None:
            return ALL
        if self.month is None:
            return str(self.year)
        return f"{self.year}-{self.month:02d}"
