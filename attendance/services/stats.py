"""
Attendance statistics: the one reduction used by every timetable view
(student week, teacher week, all-time directory) and by per-lesson summaries.
Pure: no queries, no side effects.
"""
from collections import Counter
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from attendance.models import Attendance


@dataclass(frozen=True)
class AttendanceStats:
    total: int = 0
    present: int = 0
    late: int = 0
    authorized_absence: int = 0
    unauthorized_absence: int = 0
    average_lateness: int = 0

    def as_dict(self) -> dict:
        return {
            "total": self.total,
            "present": self.present,
            "late": self.late,
            "authorizedAbsence": self.authorized_absence,
            "unauthorizedAbsence": self.unauthorized_absence,
            "averageLateness": self.average_lateness,
        }


EMPTY_STATS = AttendanceStats()


def _round_half_up(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def average_lateness(records) -> int:
    """
    Mean minutes_late over LATE records, rounded half up.
    Exactly 0 when there are no LATE records. Missing minutes count as 0.
    """
    minutes = [r.minutes_late or 0 for r in records if r.status == Attendance.STATUS_LATE]
    if not minutes:
        return 0
    return _round_half_up(Decimal(sum(minutes)) / Decimal(len(minutes)))


def compute_attendance_stats(records) -> AttendanceStats:
    """
    records: iterable of objects with .status and .minutes_late (Attendance rows),
    already scoped by the caller (week, lesson set, all time).
    """
    records = list(records)
    counts = Counter(r.status for r in records)
    return AttendanceStats(
        total=len(records),
        present=counts[Attendance.STATUS_PRESENT],
        late=counts[Attendance.STATUS_LATE],
        authorized_absence=counts[Attendance.STATUS_AUTHORIZED],
        unauthorized_absence=counts[Attendance.STATUS_ABSENT],
        average_lateness=average_lateness(records),
    )


def summarize_lesson_attendance(records) -> dict:
    """Class-wide breakdown for one lesson (teacher view badge)."""
    stats = compute_attendance_stats(records)
    return {
        "total": stats.total,
        "present": stats.present,
        "late": stats.late,
        "absent": stats.unauthorized_absence,
        "authorized": stats.authorized_absence,
    }
