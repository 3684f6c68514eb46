"""
Signals to ensure StudentProfile/TeacherProfile exist when User is created or role changes.
"""
from django.db.models.signals import post_save
from django.dispatch import receiver
from accounts.models import User
from .models import StudentProfile, TeacherProfile


@receiver(post_save, sender=User)
def ensure_profile_exists(sender, instance, created, **kwargs):
    """
    Ensure profile exists when User is created or when role changes to student/teacher.
    Handles admin-created users and role edits. Admins get no profile.
    """
    if instance.role == User.ROLE_STUDENT:
        StudentProfile.objects.get_or_create(user=instance)
    elif instance.role == User.ROLE_TEACHER:
        TeacherProfile.objects.get_or_create(user=instance)
