"""
Week window resolution.
Weeks start on Monday: window = Monday 00:00:00 .. Sunday 23:59:59.999999 in the
current time zone. Every week-scoped lesson query goes through this module.
"""
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from attendance.exceptions import InvalidDateInput


@dataclass(frozen=True)
class WeekWindow:
    start: datetime
    end: datetime

    @property
    def first_day(self) -> date:
        return self.start.date()

    @property
    def last_day(self) -> date:
        return self.end.date()

    @property
    def week_number(self) -> int:
        """ISO week number of the window's Monday."""
        return self.first_day.isocalendar()[1]

    def as_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "weekNumber": self.week_number,
        }


def _local_day(value) -> date:
    if isinstance(value, datetime):
        if timezone.is_aware(value):
            return timezone.localtime(value).date()
        return value.date()
    return value


def parse_week_start(value):
    """
    Parse a weekStart parameter into a calendar day.
    Accepts YYYY-MM-DD or an ISO 8601 datetime. None/blank -> None.
    Raises InvalidDateInput for anything else (no silent fallback to today).
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return _local_day(value)

    raw = str(value).strip()
    if not raw:
        return None
    try:
        parsed = parse_date(raw)
        if parsed is None:
            parsed = parse_datetime(raw)
    except ValueError:
        # Well-formed but impossible, e.g. 2024-02-30
        parsed = None
    if parsed is None:
        raise InvalidDateInput(f"Invalid weekStart '{raw}'. Use YYYY-MM-DD.")
    return _local_day(parsed)


def week_window(reference=None) -> WeekWindow:
    """
    Monday-start week containing reference (date or datetime; default: now).
    """
    day = _local_day(reference) if reference is not None else timezone.localdate()
    monday = day - timedelta(days=day.weekday())
    sunday = monday + timedelta(days=6)
    tz = timezone.get_current_timezone()
    return WeekWindow(
        start=timezone.make_aware(datetime.combine(monday, time.min), tz),
        end=timezone.make_aware(datetime.combine(sunday, time.max), tz),
    )


def resolve_week_window(week_start=None, now=None) -> WeekWindow:
    """
    Window for a raw weekStart parameter; absent -> the week containing now.
    The reference instant is taken once per request.
    A real date whose week runs past the calendar range is InvalidDateInput.
    """
    try:
        day = parse_week_start(week_start)
        if day is None:
            day = now if now is not None else timezone.now()
        return week_window(day)
    except OverflowError:
        raise InvalidDateInput(f"weekStart '{week_start}' is outside the supported date range.")
