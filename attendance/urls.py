"""
Timetable API URLs
"""
from django.urls import path
from .views.timetable import (
    timetable_view,
    my_timetable_view,
    user_timetable_view,
    timetable_users_view,
    lesson_create_view,
    lesson_register_view,
)

app_name = 'attendance'

urlpatterns = [
    path('timetable', timetable_view, name='timetable'),
    path('timetables/users', timetable_users_view, name='timetable-users'),
    path('timetables/users/me', my_timetable_view, name='timetable-me'),
    path('timetables/users/<str:user_id>', user_timetable_view, name='timetable-user'),
    path('timetables/lessons', lesson_create_view, name='lesson-create'),
    path('timetables/lessons/<int:lesson_id>/attendance', lesson_register_view, name='lesson-register'),
]
