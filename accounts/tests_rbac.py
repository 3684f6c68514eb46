"""
Minimal RBAC tests: role-based access control.
- Student token scheduling a lesson returns 403
- Teacher marking another teacher's register returns 403
- Directory without a token returns 401
- Login returns tokens; /me returns the token user
"""
from datetime import date, time

from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from attendance.services.scheduling import schedule_lesson


class RBACTests(TestCase):
    def setUp(self):
        self.client = APIClient()

        self.teacher = User.objects.create_user(
            email="teacher@college.test",
            password="pass123",
            name="Teacher",
            role=User.ROLE_TEACHER,
        )
        self.other_teacher = User.objects.create_user(
            email="other.teacher@college.test",
            password="pass123",
            name="Other Teacher",
            role=User.ROLE_TEACHER,
        )
        self.student = User.objects.create_user(
            email="student@college.test",
            password="pass123",
            name="Student",
            role=User.ROLE_STUDENT,
        )
        self.admin = User.objects.create_superuser(
            email="admin@college.test",
            password="pass123",
            name="Admin",
        )
        self.lesson = schedule_lesson(
            teacher=self.other_teacher.teacher_profile,
            topic="Intro",
            room="A1",
            lesson_date=date(2024, 3, 11),
            start=time(9, 0),
            end=time(10, 0),
            student=self.student.student_profile,
        )

    def _auth_header(self, user: User) -> dict:
        token = str(AccessToken.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    def _lesson_payload(self):
        return {
            "topic": "Loops",
            "room": "B2",
            "date": "2024-03-12",
            "startTime": "10:00",
            "endTime": "11:00",
        }

    def test_profiles_created_for_roles(self):
        self.assertIsNotNone(self.teacher.teacher_profile)
        self.assertIsNotNone(self.student.student_profile)
        self.assertFalse(hasattr(self.admin, "student_profile") or hasattr(self.admin, "teacher_profile"))

    def test_student_scheduling_lesson_returns_403(self):
        self.client.credentials(**self._auth_header(self.student))
        res = self.client.post("/api/timetables/lessons", self._lesson_payload(), format="json")
        self.assertEqual(res.status_code, 403)
        self.assertEqual(res.data["code"], "permission_denied")

    def test_teacher_scheduling_own_lesson_returns_201(self):
        self.client.credentials(**self._auth_header(self.teacher))
        res = self.client.post("/api/timetables/lessons", self._lesson_payload(), format="json")
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["instructor"], "Teacher")

    def test_teacher_scheduling_for_other_teacher_returns_400(self):
        self.client.credentials(**self._auth_header(self.teacher))
        payload = dict(self._lesson_payload(), teacherId=self.other_teacher.id)
        res = self.client.post("/api/timetables/lessons", payload, format="json")
        self.assertEqual(res.status_code, 400)

    def test_teacher_marking_other_teachers_register_returns_403(self):
        self.client.credentials(**self._auth_header(self.teacher))
        res = self.client.post(
            f"/api/timetables/lessons/{self.lesson.id}/attendance",
            {"records": [{"studentId": self.student.id, "status": "PRESENT"}]},
            format="json",
        )
        self.assertEqual(res.status_code, 403)

    def test_admin_marking_any_register_returns_200(self):
        self.client.credentials(**self._auth_header(self.admin))
        res = self.client.post(
            f"/api/timetables/lessons/{self.lesson.id}/attendance",
            {"records": [{"studentId": self.student.id, "status": "PRESENT"}]},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["saved"], 1)

    def test_directory_without_token_returns_401(self):
        res = self.client.get("/api/timetables/users")
        self.assertEqual(res.status_code, 401)

    def test_login_returns_tokens(self):
        res = self.client.post(
            "/api/auth/login",
            {"email": "student@college.test", "password": "pass123"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertIn("accessToken", res.data)
        self.assertEqual(res.data["user"]["role"], User.ROLE_STUDENT)

    def test_login_wrong_password_returns_401(self):
        res = self.client.post(
            "/api/auth/login",
            {"email": "student@college.test", "password": "nope"},
            format="json",
        )
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.data["code"], "invalid_credentials")

    def test_me_returns_token_user(self):
        self.client.credentials(**self._auth_header(self.teacher))
        res = self.client.get("/api/auth/me")
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["email"], "teacher@college.test")
