"""
Timetable request orchestration.

build_timetable: target user -> week window -> lessons -> stats -> events -> envelope.
Stats and events are derived from the same resolved lesson/attendance set.
list_users_with_stats: user directory with all-time attendance stats.
"""
import logging

from django.db.models import Q

from accounts.models import User
from attendance.exceptions import NoCohortAssigned, Unauthorized, UserNotFound
from attendance.services.events import project_event
from attendance.services.lessons import (
    StudentView,
    TeacherView,
    resolve_lessons,
    view_context_for,
    related_or_none,
)
from attendance.services.stats import compute_attendance_stats
from attendance.services.week import resolve_week_window

logger = logging.getLogger(__name__)


def _user_queryset():
    return User.objects.select_related(
        "student_profile__cohort__teacher__user",
        "teacher_profile",
    )


def resolve_target_user(session_user=None, user_id=None) -> User:
    """
    Explicit user_id wins; otherwise the authenticated session user.
    Raises Unauthorized (no session, no target) or UserNotFound.
    """
    if user_id is not None and str(user_id).strip():
        try:
            pk = int(str(user_id).strip())
        except (TypeError, ValueError):
            raise UserNotFound(f"User '{user_id}' not found")
    elif session_user is not None and getattr(session_user, "is_authenticated", False):
        pk = session_user.pk
    else:
        raise Unauthorized()

    try:
        return _user_queryset().get(pk=pk)
    except User.DoesNotExist:
        raise UserNotFound(f"User '{pk}' not found")


def _department_id(context):
    if isinstance(context, StudentView):
        cohort = context.profile.cohort
        return cohort.department_id if cohort else None
    if isinstance(context, TeacherView):
        return context.profile.department_id
    return None


def _cohort_summary(cohort):
    if cohort is None:
        return None
    teacher = cohort.teacher
    return {
        "id": cohort.id,
        "name": cohort.name,
        "teacher": {
            "id": teacher.id,
            "user": {"id": teacher.user.id, "name": teacher.user.name},
        } if teacher else None,
    }


def _user_summary(user, context, stats) -> dict:
    summary = {
        "id": user.id,
        "name": user.name,
        "role": user.role,
        "avatar": user.avatar,
        "departmentId": _department_id(context),
    }
    if isinstance(context, StudentView):
        summary["cohortId"] = context.profile.cohort_id
        summary["cohort"] = _cohort_summary(context.profile.cohort)
    summary["attendance"] = stats.as_dict()
    return summary


def build_timetable(session_user=None, user_id=None, week_start=None, now=None) -> dict:
    """
    Weekly timetable envelope:
    { user: {id, name, role, avatar, departmentId, cohortId?, cohort?, attendance},
      events: [...], weekInfo: {start, end, weekNumber} }
    session_user: request-scoped authenticated user (or None/anonymous).
    """
    user = resolve_target_user(session_user=session_user, user_id=user_id)
    window = resolve_week_window(week_start, now=now)
    context = view_context_for(user)

    resolved = []
    if context is None:
        logger.info(f"[timetable] user_id={user.pk} role={user.role} has no personal timetable")
    else:
        try:
            resolved = resolve_lessons(context, window)
        except NoCohortAssigned:
            logger.info(f"[timetable] student user_id={user.pk} has no cohort, returning empty timetable")

    stats = compute_attendance_stats(a for r in resolved for a in r.attendance)
    events = [project_event(r, context.role) for r in resolved]

    logger.info(
        f"[timetable] user_id={user.pk} role={user.role} week={window.first_day}..{window.last_day} "
        f"events={len(events)} records={stats.total}"
    )
    return {
        "user": _user_summary(user, context, stats),
        "events": events,
        "weekInfo": window.as_dict(),
    }


def _all_time_records(user):
    student_profile = related_or_none(user, "student_profile")
    if user.role == User.ROLE_STUDENT and student_profile is not None:
        return list(student_profile.attendance_records.all())
    teacher_profile = related_or_none(user, "teacher_profile")
    if user.role == User.ROLE_TEACHER and teacher_profile is not None:
        return [a for lesson in teacher_profile.lessons.all() for a in lesson.attendance_records.all()]
    return []


def list_users_with_stats(role=None, department_id=None) -> list:
    """
    Directory entries {id, name, role, avatar, departmentId, cohortId, attendance}
    with ALL-TIME stats (student: own rows; teacher: rows of taught lessons).
    """
    users = _user_queryset().prefetch_related(
        "student_profile__attendance_records",
        "teacher_profile__lessons__attendance_records",
    ).order_by("name", "id")
    if role:
        users = users.filter(role=role)
    if department_id is not None:
        users = users.filter(
            Q(student_profile__cohort__department_id=department_id)
            | Q(teacher_profile__department_id=department_id)
        ).distinct()

    results = []
    for user in users:
        context = view_context_for(user)
        stats = compute_attendance_stats(_all_time_records(user))
        student_profile = context.profile if isinstance(context, StudentView) else None
        results.append({
            "id": user.id,
            "name": user.name,
            "role": user.role,
            "avatar": user.avatar,
            "departmentId": _department_id(context),
            "cohortId": student_profile.cohort_id if student_profile else None,
            "attendance": stats.as_dict(),
        })
    return results
