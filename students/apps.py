from django.apps import AppConfig


class StudentsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'students'
    verbose_name = 'Student & Teacher Profiles'

    def ready(self):
        from . import signals  # noqa: F401
