"""
Lesson scheduling and register marking (the writers of lesson/attendance data).
- schedule_lesson: create a lesson and materialize ABSENT attendance rows in one transaction.
- mark_register: upsert register entries for a lesson.
"""
import logging
from datetime import datetime

from django.db import transaction
from django.utils import timezone

from attendance.models import Attendance, Lesson
from cohorts.services import get_students_for_cohort, is_enrolled
from students.models import StudentProfile

logger = logging.getLogger(__name__)


def _at(lesson_date, clock):
    return timezone.make_aware(datetime.combine(lesson_date, clock), timezone.get_current_timezone())


@transaction.atomic
def schedule_lesson(*, teacher, topic, room, lesson_date, start, end,
                    description=None, module=None, cohort=None, student=None) -> Lesson:
    """
    Create a lesson. Attendance rows are materialized at creation:
    one ABSENT row per cohort student, or one for `student` when no cohort is given.
    start/end are wall-clock times on lesson_date in the current time zone.
    """
    lesson = Lesson.objects.create(
        topic=topic,
        description=description,
        teacher=teacher,
        module=module,
        cohort=cohort,
        date=lesson_date,
        start_time=_at(lesson_date, start),
        end_time=_at(lesson_date, end),
        room=room,
    )

    if cohort is not None:
        rows = [
            Attendance(lesson=lesson, student=sp, status=Attendance.STATUS_ABSENT)
            for sp in get_students_for_cohort(cohort)
        ]
        Attendance.objects.bulk_create(rows)
    elif student is not None:
        rows = [Attendance.objects.create(lesson=lesson, student=student, status=Attendance.STATUS_ABSENT)]
    else:
        rows = []

    logger.info(
        f"[schedule_lesson] lesson_id={lesson.id} teacher_id={teacher.id} cohort_id={lesson.cohort_id} "
        f"date={lesson_date} attendance_rows={len(rows)}"
    )
    return lesson


@transaction.atomic
def mark_register(lesson: Lesson, entries, marked_by=None):
    """
    Upsert register entries for a lesson.
    entries: [{student_id, status, minutes_late?, notes?}] (already validated); student_id is the user id.
    Only students enrolled in the lesson's cohort, or already on the register, are accepted.
    minutes_late is stored only for LATE.
    Returns (saved_count, skipped) where skipped = [{studentId, reason}].
    """
    registered = set(lesson.attendance_records.values_list("student_id", flat=True))
    now = timezone.now()
    saved = 0
    skipped = []

    for entry in entries:
        student_id = entry["student_id"]
        try:
            student = StudentProfile.objects.get(user_id=student_id)
        except StudentProfile.DoesNotExist:
            skipped.append({"studentId": student_id, "reason": "student_not_found"})
            continue
        if student.id not in registered and not is_enrolled(lesson.cohort, student):
            skipped.append({"studentId": student_id, "reason": "not_enrolled"})
            continue

        status_val = entry["status"]
        Attendance.objects.update_or_create(
            lesson=lesson,
            student=student,
            defaults={
                "status": status_val,
                "minutes_late": entry.get("minutes_late") if status_val == Attendance.STATUS_LATE else None,
                "notes": entry.get("notes"),
                "marked_by": marked_by,
                "marked_at": now,
            },
        )
        saved += 1

    logger.info(f"[mark_register] lesson_id={lesson.id} saved={saved} skipped={len(skipped)}")
    return saved, skipped
