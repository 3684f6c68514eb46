"""
Lesson resolution for a timetable view.

The view context is a tagged variant:
- StudentView: lessons of the student's cohort, each with the student's own attendance row (0 or 1).
- TeacherView: lessons the teacher teaches, each with every attendance row of the lesson.
Admins (and users whose profile is missing) have no personal timetable.
"""
import logging
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional, Union

from django.core.exceptions import ObjectDoesNotExist
from django.db.models import Prefetch, Q

from accounts.models import User
from attendance.exceptions import NoCohortAssigned
from attendance.models import Attendance, Lesson
from attendance.services.week import WeekWindow
from students.models import StudentProfile, TeacherProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentView:
    role: ClassVar[str] = User.ROLE_STUDENT
    user: User
    profile: StudentProfile


@dataclass(frozen=True)
class TeacherView:
    role: ClassVar[str] = User.ROLE_TEACHER
    user: User
    profile: TeacherProfile


ViewContext = Union[StudentView, TeacherView]


@dataclass
class ResolvedLesson:
    lesson: Lesson
    attendance: List[Attendance] = field(default_factory=list)


def related_or_none(obj, attr):
    try:
        return getattr(obj, attr)
    except ObjectDoesNotExist:
        return None


def view_context_for(user: User) -> Optional[ViewContext]:
    """Tag the user as a student or teacher view; None when the role has no timetable."""
    if user.role == User.ROLE_STUDENT:
        profile = related_or_none(user, "student_profile")
        if profile is not None:
            return StudentView(user=user, profile=profile)
    elif user.role == User.ROLE_TEACHER:
        profile = related_or_none(user, "teacher_profile")
        if profile is not None:
            return TeacherView(user=user, profile=profile)
    return None


def _lesson_queryset():
    return Lesson.objects.select_related("module", "cohort", "teacher__user").order_by(
        "date", "start_time", "id"
    )


def _attach(lessons) -> List[ResolvedLesson]:
    return [ResolvedLesson(lesson=lesson, attendance=list(lesson.resolved_attendance)) for lesson in lessons]


def resolve_student_lessons(profile: StudentProfile, window: WeekWindow) -> List[ResolvedLesson]:
    """
    Cohort lessons in the window, plus cohort-less (1:1) lessons the student is registered on.
    Raises NoCohortAssigned for a student without cohort.
    """
    if profile.cohort_id is None:
        raise NoCohortAssigned(profile)
    lessons = _lesson_queryset().filter(
        Q(cohort_id=profile.cohort_id)
        | Q(cohort__isnull=True, attendance_records__student=profile),
        date__range=(window.first_day, window.last_day),
    ).distinct().prefetch_related(
        Prefetch(
            "attendance_records",
            queryset=Attendance.objects.filter(student=profile),
            to_attr="resolved_attendance",
        )
    )
    return _attach(lessons)


def resolve_teacher_lessons(profile: TeacherProfile, window: WeekWindow) -> List[ResolvedLesson]:
    lessons = _lesson_queryset().filter(
        teacher=profile,
        date__range=(window.first_day, window.last_day),
    ).prefetch_related(
        Prefetch(
            "attendance_records",
            queryset=Attendance.objects.order_by("student_id"),
            to_attr="resolved_attendance",
        )
    )
    return _attach(lessons)


def resolve_lessons(context: ViewContext, window: WeekWindow) -> List[ResolvedLesson]:
    """
    Lessons visible to the context within the window, ascending by date then start time.
    Raises NoCohortAssigned for a student without cohort.
    """
    if isinstance(context, StudentView):
        resolved = resolve_student_lessons(context.profile, window)
    elif isinstance(context, TeacherView):
        resolved = resolve_teacher_lessons(context.profile, window)
    else:
        raise TypeError(f"Unsupported view context: {context!r}")
    logger.debug(
        "Resolved %d lessons for %s user_id=%s in %s..%s",
        len(resolved), context.role, context.user.pk, window.first_day, window.last_day,
    )
    return resolved


def resolve_single_lesson(lesson_id) -> ResolvedLesson:
    """One lesson with its full register (teacher-view projection of a single lesson)."""
    lesson = _lesson_queryset().prefetch_related(
        Prefetch(
            "attendance_records",
            queryset=Attendance.objects.order_by("student_id"),
            to_attr="resolved_attendance",
        )
    ).get(pk=lesson_id)
    return ResolvedLesson(lesson=lesson, attendance=list(lesson.resolved_attendance))
