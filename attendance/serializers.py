"""
Serializers for attendance app (request payloads for scheduling and register marking)
"""
from rest_framework import serializers

from accounts.models import User
from cohorts.models import Cohort
from core.models import Module
from students.models import StudentProfile, TeacherProfile
from .models import Attendance


class LessonCreateSerializer(serializers.Serializer):
    """
    Body: {topic, room, date, startTime, endTime, description?, moduleId?, cohortId?, studentId?, teacherId?}
    teacherId and studentId are user ids; teacherId defaults to the caller when the caller is a teacher.
    cohortId and studentId are mutually exclusive.
    """
    topic = serializers.CharField(max_length=255)
    room = serializers.CharField(max_length=100)
    date = serializers.DateField()
    startTime = serializers.TimeField()
    endTime = serializers.TimeField()
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    moduleId = serializers.IntegerField(required=False, allow_null=True)
    cohortId = serializers.IntegerField(required=False, allow_null=True)
    studentId = serializers.IntegerField(required=False, allow_null=True)
    teacherId = serializers.IntegerField(required=False, allow_null=True)

    def _resolve_teacher(self, teacher_user_id):
        request = self.context.get("request")
        if teacher_user_id is None and request is not None and request.user.role == User.ROLE_TEACHER:
            teacher_user_id = request.user.id
        if teacher_user_id is None:
            raise serializers.ValidationError({"teacherId": "teacherId is required"})
        teacher = TeacherProfile.objects.select_related("user").filter(user_id=teacher_user_id).first()
        if teacher is None:
            raise serializers.ValidationError({"teacherId": "Teacher not found"})
        if (
            request is not None
            and request.user.role == User.ROLE_TEACHER
            and teacher.user_id != request.user.id
        ):
            raise serializers.ValidationError({"teacherId": "Teachers can only schedule their own lessons"})
        return teacher

    def validate(self, attrs):
        if attrs["endTime"] <= attrs["startTime"]:
            raise serializers.ValidationError({"endTime": "endTime must be after startTime"})

        attrs["teacher"] = self._resolve_teacher(attrs.get("teacherId"))

        module_id = attrs.get("moduleId")
        attrs["module"] = None
        if module_id is not None:
            attrs["module"] = Module.objects.filter(pk=module_id).first()
            if attrs["module"] is None:
                raise serializers.ValidationError({"moduleId": "Module not found"})

        cohort_id = attrs.get("cohortId")
        if cohort_id is not None and attrs.get("studentId") is not None:
            raise serializers.ValidationError({"studentId": "Give either cohortId or studentId, not both"})
        attrs["cohort"] = None
        if cohort_id is not None:
            attrs["cohort"] = Cohort.objects.filter(pk=cohort_id).first()
            if attrs["cohort"] is None:
                raise serializers.ValidationError({"cohortId": "Cohort not found"})

        student_id = attrs.get("studentId")
        attrs["student"] = None
        if student_id is not None:
            attrs["student"] = StudentProfile.objects.filter(user_id=student_id).first()
            if attrs["student"] is None:
                raise serializers.ValidationError({"studentId": "Student not found"})
        return attrs


class RegisterEntrySerializer(serializers.Serializer):
    studentId = serializers.IntegerField(source="student_id")
    status = serializers.ChoiceField(choices=Attendance.STATUS_CHOICES)
    minutesLate = serializers.IntegerField(source="minutes_late", required=False, allow_null=True, min_value=0)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)


class RegisterSerializer(serializers.Serializer):
    """Body: {records: [{studentId, status, minutesLate?, notes?}]}"""
    records = RegisterEntrySerializer(many=True, allow_empty=False)
