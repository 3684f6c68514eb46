"""
Projection of resolved lessons into timetable events.
"""
from django.utils import timezone

from accounts.models import User
from attendance.services.lessons import ResolvedLesson
from attendance.services.stats import summarize_lesson_attendance

# ISO weekday order (Monday first), indexed by date.weekday()
DAY_LABELS = ("MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN")
EVENT_COLOR = "bg-indigo-600"


def day_label(day) -> str:
    return DAY_LABELS[day.weekday()]


def format_clock(value) -> str:
    """Zero-padded 24-hour HH:MM in the current time zone."""
    if timezone.is_aware(value):
        value = timezone.localtime(value)
    return value.strftime("%H:%M")


def project_event(resolved: ResolvedLesson, role: str) -> dict:
    """
    Build the event for one lesson.
    role=STUDENT: "attendance" only when the student has a row on the lesson.
    role=TEACHER: "attendanceSummary" always, over the whole register.
    """
    lesson = resolved.lesson
    event = {
        "id": lesson.id,
        "title": lesson.module.name if lesson.module_id else lesson.topic,
        "topic": lesson.topic,
        "instructor": lesson.teacher.user.name,
        "date": lesson.date.isoformat(),
        "day": day_label(lesson.date),
        "startTime": format_clock(lesson.start_time),
        "endTime": format_clock(lesson.end_time),
        "room": lesson.room,
        "color": EVENT_COLOR,
        "moduleId": lesson.module_id,
        "cohortId": lesson.cohort_id,
    }
    if role == User.ROLE_STUDENT:
        if resolved.attendance:
            record = resolved.attendance[0]
            event["attendance"] = {
                "status": record.status,
                "minutesLate": record.minutes_late,
            }
    elif role == User.ROLE_TEACHER:
        event["attendanceSummary"] = summarize_lesson_attendance(resolved.attendance)
    return event
