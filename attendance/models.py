"""
Lesson and Attendance models.
A lesson belongs to exactly one teacher and at most one cohort.
Attendance: one record per (lesson, student).
"""
from django.db import models
from students.models import StudentProfile, TeacherProfile


class Lesson(models.Model):
    """
    One scheduled class session. Cohort-less lessons (ad hoc 1:1 sessions) are allowed.
    start_time/end_time are full timestamps on the lesson's date.
    """
    topic = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    module = models.ForeignKey(
        "core.Module",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lessons",
    )
    teacher = models.ForeignKey(
        TeacherProfile,
        on_delete=models.CASCADE,
        related_name="lessons",
    )
    cohort = models.ForeignKey(
        "cohorts.Cohort",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="lessons",
    )
    date = models.DateField(db_index=True)
    start_time = models.DateTimeField()
    end_time = models.DateTimeField()
    room = models.CharField(max_length=100)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "lessons"
        verbose_name = "Lesson"
        verbose_name_plural = "Lessons"
        ordering = ["date", "start_time", "id"]
        indexes = [
            models.Index(fields=["cohort", "date"], name="lessons_cohort_date_idx"),
            models.Index(fields=["teacher", "date"], name="lessons_teacher_date_idx"),
        ]

    def __str__(self):
        return f"{self.topic} - {self.date} {self.room}"


class Attendance(models.Model):
    """
    Register entry for one student on one lesson.
    minutes_late is meaningful only when status is LATE.
    """
    STATUS_PRESENT = "PRESENT"
    STATUS_LATE = "LATE"
    STATUS_ABSENT = "ABSENT"
    STATUS_AUTHORIZED = "AUTHORIZED"

    STATUS_CHOICES = [
        (STATUS_PRESENT, "Present"),
        (STATUS_LATE, "Late"),
        (STATUS_ABSENT, "Absent"),
        (STATUS_AUTHORIZED, "Authorized absence"),
    ]

    lesson = models.ForeignKey(
        Lesson,
        on_delete=models.CASCADE,
        related_name="attendance_records",
    )
    student = models.ForeignKey(
        StudentProfile,
        on_delete=models.CASCADE,
        related_name="attendance_records",
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default=STATUS_ABSENT,
    )
    minutes_late = models.PositiveIntegerField(null=True, blank=True)
    notes = models.TextField(blank=True, null=True)
    marked_by = models.ForeignKey(
        "accounts.User",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="marked_attendance",
    )
    marked_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "attendance"
        verbose_name = "Attendance"
        verbose_name_plural = "Attendance"
        ordering = ["lesson", "student"]
        constraints = [
            models.UniqueConstraint(
                fields=["lesson", "student"],
                name="unique_lesson_student_attendance",
            ),
        ]

    def __str__(self):
        return f"{self.student.user.name} - {self.lesson_id} - {self.status}"
