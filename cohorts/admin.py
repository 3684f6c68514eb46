"""
Admin configuration for cohorts app
"""
from django.contrib import admin
from .models import Cohort


@admin.register(Cohort)
class CohortAdmin(admin.ModelAdmin):
    """Cohort Admin"""
    list_display = ['name', 'department', 'teacher', 'start_date', 'end_date', 'created_at']
    list_filter = ['department', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']
