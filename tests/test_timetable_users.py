"""
GET /api/timetables/users: directory with all-time attendance stats.
"""
from datetime import date, time

from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from attendance.models import Attendance
from attendance.services.scheduling import schedule_lesson
from cohorts.models import Cohort
from core.models import Department


class TimetableUsersTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.sd = Department.objects.create(name="Software Development", code="SD")
        self.es = Department.objects.create(name="E-Sports", code="ES")

        self.teacher = User.objects.create_user(
            email="anna@college.test", password="pass123", name="Anna Smith", role=User.ROLE_TEACHER,
        )
        self.teacher.teacher_profile.department = self.sd
        self.teacher.teacher_profile.save()
        self.es_teacher = User.objects.create_user(
            email="chen@college.test", password="pass123", name="Prof. Michael Chen", role=User.ROLE_TEACHER,
        )
        self.es_teacher.teacher_profile.department = self.es
        self.es_teacher.teacher_profile.save()
        self.admin = User.objects.create_superuser(email="admin@college.test", password="pass123", name="Admin")

        self.cohort = Cohort.objects.create(name="SD2024A", department=self.sd, teacher=self.teacher.teacher_profile)
        self.student = User.objects.create_user(
            email="s1@college.test", password="pass123", name="Bea", role=User.ROLE_STUDENT,
        )
        self.student.student_profile.cohort = self.cohort
        self.student.student_profile.save()

        # Two lessons in different weeks: directory stats are all-time
        first = schedule_lesson(
            teacher=self.teacher.teacher_profile, topic="A", room="R1", lesson_date=date(2024, 3, 11),
            start=time(9, 0), end=time(10, 0), cohort=self.cohort,
        )
        schedule_lesson(
            teacher=self.teacher.teacher_profile, topic="B", room="R1", lesson_date=date(2024, 4, 8),
            start=time(9, 0), end=time(10, 0), cohort=self.cohort,
        )
        Attendance.objects.filter(lesson=first).update(status=Attendance.STATUS_LATE, minutes_late=4)

        self.client.credentials(**self._auth_header(self.admin))

    def _auth_header(self, user: User) -> dict:
        token = str(AccessToken.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    def _users(self, **params):
        return self.client.get("/api/timetables/users", params)

    def _by_id(self, users):
        return {u["id"]: u for u in users}

    def test_all_time_stats(self):
        res = self._users()
        self.assertEqual(res.status_code, 200)
        users = self._by_id(res.data["users"])

        student = users[self.student.id]
        self.assertEqual(
            student["attendance"],
            {
                "total": 2,
                "present": 0,
                "late": 1,
                "authorizedAbsence": 0,
                "unauthorizedAbsence": 1,
                "averageLateness": 4,
            },
        )
        self.assertEqual(student["cohortId"], self.cohort.id)
        self.assertEqual(student["departmentId"], self.sd.id)

        self.assertEqual(users[self.teacher.id]["attendance"], student["attendance"])
        self.assertEqual(users[self.teacher.id]["departmentId"], self.sd.id)
        self.assertIsNone(users[self.teacher.id]["cohortId"])
        self.assertEqual(users[self.es_teacher.id]["attendance"]["total"], 0)
        self.assertEqual(users[self.admin.id]["attendance"]["total"], 0)

    def test_ordered_by_name(self):
        names = [u["name"] for u in self._users().data["users"]]
        self.assertEqual(names, sorted(names))

    def test_role_filter(self):
        users = self._users(role="student").data["users"]
        self.assertEqual([u["id"] for u in users], [self.student.id])
        self.assertEqual(len(self._users(role="all").data["users"]), 4)

    def test_invalid_role_rejected(self):
        res = self._users(role="PARENT")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "validation_error")

    def test_department_filter(self):
        users = self._users(departmentId=self.sd.id).data["users"]
        self.assertEqual({u["id"] for u in users}, {self.teacher.id, self.student.id})
        users = self._users(departmentId=self.es.id, role="TEACHER").data["users"]
        self.assertEqual([u["id"] for u in users], [self.es_teacher.id])

    def test_non_integer_department_rejected(self):
        self.assertEqual(self._users(departmentId="abc").status_code, 400)
