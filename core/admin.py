"""
Admin configuration for core app
"""
from django.contrib import admin
from .models import Department, Module


@admin.register(Department)
class DepartmentAdmin(admin.ModelAdmin):
    """Department Admin"""
    list_display = ['name', 'code', 'created_at']
    search_fields = ['name', 'code']
    readonly_fields = ['created_at', 'updated_at']
    ordering = ['name']


@admin.register(Module)
class ModuleAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'department', 'created_at']
    list_filter = ['department']
    search_fields = ['code', 'name']
    ordering = ['code']
