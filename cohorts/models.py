"""
Cohort: a named teaching group owned by a department, led by one primary teacher.
Membership is StudentProfile.cohort (a student belongs to at most one cohort).
"""
from django.db import models


class Cohort(models.Model):
    department = models.ForeignKey(
        'core.Department',
        on_delete=models.CASCADE,
        related_name='cohorts',
    )
    teacher = models.ForeignKey(
        'students.TeacherProfile',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='cohorts',
        help_text="Primary teacher",
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    start_date = models.DateField(blank=True, null=True)
    end_date = models.DateField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'cohorts'
        verbose_name = 'Cohort'
        verbose_name_plural = 'Cohorts'
        ordering = ['name']

    def __str__(self):
        return self.name

    @property
    def student_count(self):
        return self.students.count()
