"""
Event projection of resolved lessons (unsaved model instances, no database).
"""
from datetime import date, datetime, timezone as dt_timezone

from django.test import SimpleTestCase

from accounts.models import User
from attendance.models import Attendance, Lesson
from attendance.services.events import day_label, format_clock, project_event
from attendance.services.lessons import ResolvedLesson
from core.models import Module
from students.models import TeacherProfile


def _lesson(module=None, **kwargs):
    teacher = TeacherProfile(user=User(name="Dr. Sarah Johnson", role=User.ROLE_TEACHER))
    lesson = Lesson(
        id=7,
        topic="Recursion",
        teacher=teacher,
        module=module,
        cohort_id=3,
        date=date(2024, 3, 14),
        start_time=datetime(2024, 3, 14, 9, 5, tzinfo=dt_timezone.utc),
        end_time=datetime(2024, 3, 14, 10, 30, tzinfo=dt_timezone.utc),
        room="Lab 2",
        **kwargs,
    )
    return lesson


class EventProjectionTests(SimpleTestCase):
    def test_common_fields(self):
        module = Module(id=4, name="Programming Fundamentals", code="SD101")
        event = project_event(ResolvedLesson(lesson=_lesson(module=module)), User.ROLE_STUDENT)
        self.assertEqual(event["id"], 7)
        self.assertEqual(event["title"], "Programming Fundamentals")
        self.assertEqual(event["topic"], "Recursion")
        self.assertEqual(event["instructor"], "Dr. Sarah Johnson")
        self.assertEqual(event["date"], "2024-03-14")
        self.assertEqual(event["day"], "THU")
        self.assertEqual(event["startTime"], "09:05")
        self.assertEqual(event["endTime"], "10:30")
        self.assertEqual(event["room"], "Lab 2")
        self.assertEqual(event["color"], "bg-indigo-600")
        self.assertEqual(event["moduleId"], 4)
        self.assertEqual(event["cohortId"], 3)

    def test_title_falls_back_to_topic(self):
        event = project_event(ResolvedLesson(lesson=_lesson()), User.ROLE_STUDENT)
        self.assertEqual(event["title"], "Recursion")
        self.assertIsNone(event["moduleId"])

    def test_student_event_carries_own_attendance(self):
        row = Attendance(status=Attendance.STATUS_LATE, minutes_late=5)
        event = project_event(ResolvedLesson(lesson=_lesson(), attendance=[row]), User.ROLE_STUDENT)
        self.assertEqual(event["attendance"], {"status": "LATE", "minutesLate": 5})
        self.assertNotIn("attendanceSummary", event)

    def test_student_event_without_row_has_no_attendance(self):
        event = project_event(ResolvedLesson(lesson=_lesson()), User.ROLE_STUDENT)
        self.assertNotIn("attendance", event)
        self.assertNotIn("attendanceSummary", event)

    def test_teacher_event_always_has_summary(self):
        event = project_event(ResolvedLesson(lesson=_lesson()), User.ROLE_TEACHER)
        self.assertEqual(
            event["attendanceSummary"],
            {"total": 0, "present": 0, "late": 0, "absent": 0, "authorized": 0},
        )
        self.assertNotIn("attendance", event)

    def test_teacher_summary_counts_whole_register(self):
        rows = [
            Attendance(status=Attendance.STATUS_PRESENT),
            Attendance(status=Attendance.STATUS_PRESENT),
            Attendance(status=Attendance.STATUS_ABSENT),
            Attendance(status=Attendance.STATUS_LATE, minutes_late=5),
        ]
        event = project_event(ResolvedLesson(lesson=_lesson(), attendance=rows), User.ROLE_TEACHER)
        self.assertEqual(
            event["attendanceSummary"],
            {"total": 4, "present": 2, "late": 1, "absent": 1, "authorized": 0},
        )

    def test_day_labels_follow_iso_weekdays(self):
        self.assertEqual(day_label(date(2024, 3, 11)), "MON")
        self.assertEqual(day_label(date(2024, 3, 17)), "SUN")

    def test_clock_is_zero_padded_24h(self):
        self.assertEqual(format_clock(datetime(2024, 3, 14, 7, 3, tzinfo=dt_timezone.utc)), "07:03")
        self.assertEqual(format_clock(datetime(2024, 3, 14, 18, 45, tzinfo=dt_timezone.utc)), "18:45")
