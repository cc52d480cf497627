import calendar
import datetime
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from app.core.exceptions import ValidationFailedError

WEEKDAY_HEADERS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

# Weeks start on Sunday
_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


@dataclass
class CalendarCell:
    """A day of the month, or a blank padding cell when day is None."""
    day: Optional[int] = None
    date: Optional[datetime.date] = None
    milestones: List[Any] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return self.day is None


def _milestone_date(milestone: Any) -> Optional[date]:
    value = milestone.get("date") if isinstance(milestone, Mapping) else getattr(milestone, "date", None)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _validate_month(year: int, month: int) -> None:
    if not 1 <= month <= 12:
        raise ValidationFailedError(f"Invalid month: {month}. Must be between 1 and 12")
    if not date.min.year <= year <= date.max.year:
        raise ValidationFailedError(f"Invalid year: {year}")


def build_month_grid(year: int, month: int, milestones: Iterable[Any]) -> List[List[CalendarCell]]:
    """
    Lay a client's milestones onto a Sunday-first month grid.

    Leading blanks equal the weekday offset of the 1st and trailing blanks
    complete the last week, so every row has seven cells. Milestones
    whose date falls outside the month are ignored; several milestones
    on one day all land in that day's cell, in input order.

    Args:
        year: Calendar year
        month: Month number (1-12)
        milestones: ProjectMilestone instances or dicts with a "date" key

    Returns:
        List of week rows, each a list of seven CalendarCell

    Raises:
        ValidationFailedError: If month or year is out of range
    """
    _validate_month(year, month)

    by_day: Dict[int, List[Any]] = {}
    for milestone in milestones:
        when = _milestone_date(milestone)
        if when is not None and when.year == year and when.month == month:
            by_day.setdefault(when.day, []).append(milestone)

    weeks = []
    for week in _CALENDAR.monthdayscalendar(year, month):
        row = []
        for day in week:
            if day == 0:
                row.append(CalendarCell())
            else:
                row.append(CalendarCell(
                    day=day,
                    date=date(year, month, day),
                    milestones=list(by_day.get(day, [])),
                ))
        weeks.append(row)
    return weeks


def leading_blanks(year: int, month: int) -> int:
    """Number of blank cells before the 1st in a Sunday-first week."""
    _validate_month(year, month)
    # calendar.weekday is Monday=0; shift so Sunday=0
    return (calendar.weekday(year, month, 1) + 1) % 7


def shift_month(year: int, month: int, delta: int) -> Tuple[int, int]:
    """Move ``delta`` months forward (negative for back), wrapping years."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def month_start(year: int, month: int) -> Optional[date]:
    """First day of the month, or None when the year is outside the date range."""
    if not date.min.year <= year <= date.max.year:
        return None
    return date(year, month, 1)


def default_month(milestones: Iterable[Any], today: Optional[date] = None) -> Tuple[int, int]:
    """Month of the earliest milestone, else the current month."""
    dates = [d for d in (_milestone_date(m) for m in milestones) if d is not None]
    anchor = min(dates) if dates else (today or date.today())
    return anchor.year, anchor.month
