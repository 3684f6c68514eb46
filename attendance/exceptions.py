"""
Timetable errors. APIException subclasses are rendered by config.exceptions.custom_exception_handler.
"""
from rest_framework import status
from rest_framework.exceptions import APIException, NotAuthenticated, NotFound


class Unauthorized(NotAuthenticated):
    """No valid session and no explicit target user."""
    default_detail = 'Authentication credentials were not provided.'
    default_code = 'not_authenticated'


class UserNotFound(NotFound):
    default_detail = 'User not found'
    default_code = 'user_not_found'


class InvalidDateInput(APIException):
    """weekStart (or another date parameter) is present but unparseable."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid date format. Use YYYY-MM-DD.'
    default_code = 'invalid_date'


class NoCohortAssigned(Exception):
    """
    Student has no cohort. Not a request failure: the orchestrator turns it
    into an empty event list with zeroed stats.
    """

    def __init__(self, student_profile):
        self.student_profile = student_profile
        super().__init__(f"Student profile {student_profile.pk} has no cohort")
