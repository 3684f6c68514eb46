"""
Management command to seed development data.
Usage: python manage.py seed_dev
"""
import os
import random
from datetime import time, timedelta

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

User = get_user_model()


class Command(BaseCommand):
    help = 'Seed development data: 1 admin, 2 departments, 4 teachers, 2 cohorts of students, this week\'s lessons with attendance'

    def add_arguments(self, parser):
        parser.add_argument('--students', type=int, default=5, help='Students per cohort')
        parser.add_argument('--seed', type=int, default=42, help='Random seed for attendance statuses')

    def handle(self, *args, **options):
        from core.models import Department, Module
        from cohorts.models import Cohort
        from attendance.models import Attendance
        from attendance.services.scheduling import schedule_lesson
        from attendance.services.week import week_window

        rng = random.Random(options['seed'])
        password = os.getenv('SEED_PASSWORD', 'password123')
        self.stdout.write(self.style.SUCCESS('Starting seed data...'))

        with transaction.atomic():
            admin, created = User.objects.get_or_create(
                email=os.getenv('SEED_ADMIN_EMAIL', 'admin@college.test'),
                defaults={'name': 'System Administrator', 'role': User.ROLE_ADMIN, 'is_staff': True, 'is_superuser': True},
            )
            admin.set_password(password)
            admin.save()
            self.stdout.write(self.style.SUCCESS(f'Admin: {admin.email}'))

            departments = {}
            for code, name in [('SD', 'Software Development'), ('ES', 'E-Sports')]:
                departments[code], _ = Department.objects.get_or_create(code=code, defaults={'name': name})

            modules = {}
            for code, name, dep in [
                ('SD101', 'Programming Fundamentals', 'SD'),
                ('SD201', 'Web Development', 'SD'),
                ('ES101', 'Game Strategy', 'ES'),
                ('ES201', 'Team Performance', 'ES'),
            ]:
                modules[code], _ = Module.objects.get_or_create(
                    code=code, defaults={'name': name, 'department': departments[dep]},
                )

            teachers = {}
            for email, name, dep in [
                ('sarah.johnson@college.test', 'Dr. Sarah Johnson', 'SD'),
                ('david.wilson@college.test', 'David Wilson', 'SD'),
                ('michael.chen@college.test', 'Prof. Michael Chen', 'ES'),
                ('anna.smith@college.test', 'Anna Smith', 'ES'),
            ]:
                user, _ = User.objects.get_or_create(email=email, defaults={'name': name, 'role': User.ROLE_TEACHER})
                user.set_password(password)
                user.save()
                profile = user.teacher_profile
                profile.department = departments[dep]
                profile.save(update_fields=['department'])
                teachers[email] = profile
                self.stdout.write(self.style.SUCCESS(f'Teacher: {email}'))

            cohort_plan = [
                ('SD2024A', 'SD', 'sarah.johnson@college.test', ['SD101', 'SD201']),
                ('ES2024A', 'ES', 'michael.chen@college.test', ['ES101', 'ES201']),
            ]
            window = week_window()
            statuses = [
                Attendance.STATUS_PRESENT,
                Attendance.STATUS_PRESENT,
                Attendance.STATUS_PRESENT,
                Attendance.STATUS_LATE,
                Attendance.STATUS_ABSENT,
                Attendance.STATUS_AUTHORIZED,
            ]

            for cohort_name, dep, teacher_email, module_codes in cohort_plan:
                teacher = teachers[teacher_email]
                cohort, _ = Cohort.objects.get_or_create(
                    name=cohort_name,
                    defaults={'department': departments[dep], 'teacher': teacher},
                )
                for i in range(options['students']):
                    user, _ = User.objects.get_or_create(
                        email=f'{cohort_name.lower()}.student{i + 1}@college.test',
                        defaults={'name': f'{dep} Student {i + 1}', 'role': User.ROLE_STUDENT},
                    )
                    user.set_password(password)
                    user.save()
                    profile = user.student_profile
                    profile.cohort = cohort
                    profile.save(update_fields=['cohort'])

                if cohort.lessons.filter(date__range=(window.first_day, window.last_day)).exists():
                    self.stdout.write(self.style.WARNING(f'{cohort_name}: lessons already seeded for this week'))
                    continue

                for offset in range(5):
                    lesson_day = window.first_day + timedelta(days=offset)
                    module = modules[module_codes[offset % len(module_codes)]]
                    lesson = schedule_lesson(
                        teacher=teacher,
                        topic=f'{module.name} - session {offset + 1}',
                        room=f'Room {101 + offset}',
                        lesson_date=lesson_day,
                        start=time(9, 0),
                        end=time(11, 0),
                        module=module,
                        cohort=cohort,
                    )
                    if lesson_day > timezone.localdate():
                        continue
                    for record in lesson.attendance_records.all():
                        record.status = rng.choice(statuses)
                        record.minutes_late = rng.randint(1, 20) if record.status == Attendance.STATUS_LATE else None
                        record.marked_at = timezone.now()
                        record.save(update_fields=['status', 'minutes_late', 'marked_at'])
                self.stdout.write(self.style.SUCCESS(f'Cohort {cohort_name}: {cohort.student_count} students, 5 lessons'))

        self.stdout.write(self.style.SUCCESS('Seed complete.'))
