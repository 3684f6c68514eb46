"""
Cohort services.
Single source of truth for cohort membership queries.
"""
from students.models import StudentProfile


def get_students_for_cohort(cohort):
    """Canonical queryset: students enrolled in the cohort."""
    return StudentProfile.objects.filter(cohort=cohort).select_related('user')


def is_enrolled(cohort, student_profile):
    return cohort is not None and student_profile.cohort_id == cohort.id
