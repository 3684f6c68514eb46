"""
Admin configuration for attendance app
"""
from django.contrib import admin
from .models import Lesson, Attendance


class AttendanceInline(admin.TabularInline):
    model = Attendance
    extra = 0
    fields = ['student', 'status', 'minutes_late', 'notes']
    autocomplete_fields = ['student']


@admin.register(Lesson)
class LessonAdmin(admin.ModelAdmin):
    """Lesson Admin"""
    list_display = ['topic', 'module', 'cohort', 'teacher', 'date', 'start_time', 'room']
    list_filter = ['date', 'cohort', 'module']
    search_fields = ['topic', 'room', 'teacher__user__name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-date', 'start_time']
    inlines = [AttendanceInline]


@admin.register(Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    """Attendance Admin"""
    list_display = ['student', 'lesson', 'status', 'minutes_late', 'marked_at']
    list_filter = ['status', 'lesson__date']
    search_fields = ['student__user__email', 'student__user__name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['-lesson__date']
