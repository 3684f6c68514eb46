"""
Admin configuration for students app
"""
from django.contrib import admin
from .models import StudentProfile, TeacherProfile


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    """Student Profile Admin"""
    list_display = ['user', 'cohort', 'student_number', 'created_at']
    list_filter = ['cohort', 'created_at']
    search_fields = ['user__email', 'user__name', 'student_number']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-created_at']


@admin.register(TeacherProfile)
class TeacherProfileAdmin(admin.ModelAdmin):
    """Teacher Profile Admin"""
    list_display = ['user', 'department', 'display_title', 'created_at']
    list_filter = ['department']
    search_fields = ['user__email', 'user__name']
    readonly_fields = ['created_at', 'updated_at']
