"""
Timetable API.
Endpoints:
- GET  /timetable?userId=&weekStart=                    Weekly timetable (explicit user or token user)
- GET  /timetables/users/me?weekStart=                  Weekly timetable of the token user
- GET  /timetables/users/{user_id}?weekStart=           Weekly timetable of a user
- GET  /timetables/users?role=&departmentId=            Directory with all-time attendance stats
- POST /timetables/lessons                              Schedule a lesson (materializes ABSENT rows)
- POST /timetables/lessons/{lesson_id}/attendance       Mark the register
"""

from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied, ValidationError
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from accounts.models import User
from accounts.permissions import IsTeacherOrAdmin
from attendance.models import Lesson
from attendance.serializers import LessonCreateSerializer, RegisterSerializer
from attendance.services.events import project_event
from attendance.services.lessons import resolve_single_lesson
from attendance.services.scheduling import mark_register, schedule_lesson
from attendance.services.timetable import build_timetable, list_users_with_stats
from core.utils import parse_optional_id


VALID_ROLES = {choice for choice, _ in User.ROLE_CHOICES}


def _session_user(request):
    user = getattr(request, "user", None)
    return user if user is not None and user.is_authenticated else None


@api_view(["GET"])
@permission_classes([AllowAny])
def timetable_view(request):
    """
    GET /api/timetable?userId=42&weekStart=2024-03-14
    Absent userId -> the token user (401 without a token). Absent weekStart -> current week.
    """
    data = build_timetable(
        session_user=_session_user(request),
        user_id=request.query_params.get("userId"),
        week_start=request.query_params.get("weekStart"),
    )
    return Response(data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def my_timetable_view(request):
    """GET /api/timetables/users/me?weekStart="""
    data = build_timetable(
        session_user=request.user,
        week_start=request.query_params.get("weekStart"),
    )
    return Response(data)


@api_view(["GET"])
@permission_classes([AllowAny])
def user_timetable_view(request, user_id):
    """GET /api/timetables/users/{user_id}?weekStart="""
    data = build_timetable(
        session_user=_session_user(request),
        user_id=user_id,
        week_start=request.query_params.get("weekStart"),
    )
    return Response(data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def timetable_users_view(request):
    """
    GET /api/timetables/users?role=STUDENT&departmentId=3
    role: ADMIN | TEACHER | STUDENT | all (default all)
    """
    role = (request.query_params.get("role") or "").strip().upper()
    if role == "ALL":
        role = ""
    if role and role not in VALID_ROLES:
        raise ValidationError({"detail": f"role must be one of {', '.join(sorted(VALID_ROLES))} or all"})
    department_id = parse_optional_id(request.query_params.get("departmentId"), "departmentId")

    users = list_users_with_stats(role=role or None, department_id=department_id)
    return Response({"users": users})


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsTeacherOrAdmin])
def lesson_create_view(request):
    """
    POST /api/timetables/lessons
    Body: {topic, room, date, startTime, endTime, description?, moduleId?, cohortId?, studentId?, teacherId?}
    Returns the teacher-view event of the created lesson.
    """
    serializer = LessonCreateSerializer(data=request.data, context={"request": request})
    serializer.is_valid(raise_exception=True)
    payload = serializer.validated_data

    lesson = schedule_lesson(
        teacher=payload["teacher"],
        topic=payload["topic"],
        room=payload["room"],
        lesson_date=payload["date"],
        start=payload["startTime"],
        end=payload["endTime"],
        description=payload.get("description"),
        module=payload["module"],
        cohort=payload["cohort"],
        student=payload["student"],
    )
    event = project_event(resolve_single_lesson(lesson.id), User.ROLE_TEACHER)
    return Response(event, status=status.HTTP_201_CREATED)


@api_view(["POST"])
@permission_classes([IsAuthenticated, IsTeacherOrAdmin])
def lesson_register_view(request, lesson_id):
    """
    POST /api/timetables/lessons/{lesson_id}/attendance
    Body: {records: [{studentId, status, minutesLate?, notes?}]}
    Only the lesson's teacher (or an admin) may mark its register.
    """
    lesson = get_object_or_404(Lesson.objects.select_related("teacher", "cohort"), pk=lesson_id)
    if request.user.role == User.ROLE_TEACHER and lesson.teacher.user_id != request.user.id:
        raise PermissionDenied("Only the lesson's teacher can mark this register")

    serializer = RegisterSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    saved, skipped = mark_register(lesson, serializer.validated_data["records"], marked_by=request.user)
    event = project_event(resolve_single_lesson(lesson.id), User.ROLE_TEACHER)
    return Response({"saved": saved, "skipped": skipped, "event": event})
