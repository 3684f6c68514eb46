"""
Lesson scheduling and register marking.
- Creating a cohort lesson materializes one ABSENT row per cohort student
- A 1:1 lesson (no cohort) materializes one row for the given student
- Register upserts rows; minutesLate is kept only for LATE
- Unknown and unenrolled students are skipped and reported
"""
from django.test import TestCase
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User
from attendance.models import Attendance, Lesson
from cohorts.models import Cohort
from core.models import Department, Module


class LessonSchedulingTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.department = Department.objects.create(name="E-Sports", code="ES")
        self.module = Module.objects.create(name="Game Strategy", code="ES101", department=self.department)
        self.teacher = User.objects.create_user(
            email="chen@college.test", password="pass123", name="Prof. Michael Chen", role=User.ROLE_TEACHER,
        )
        self.admin = User.objects.create_superuser(email="admin@college.test", password="pass123", name="Admin")
        self.cohort = Cohort.objects.create(
            name="ES2024A", department=self.department, teacher=self.teacher.teacher_profile,
        )
        self.students = [self._student(f"es{i}@college.test", f"ES Student {i}", self.cohort) for i in range(3)]
        self.outsider = self._student("out@college.test", "Outsider", None)
        self.client.credentials(**self._auth_header(self.teacher))

    def _student(self, email, name, cohort):
        user = User.objects.create_user(email=email, password="pass123", name=name, role=User.ROLE_STUDENT)
        profile = user.student_profile
        profile.cohort = cohort
        profile.save()
        return user

    def _auth_header(self, user: User) -> dict:
        token = str(AccessToken.for_user(user))
        return {"HTTP_AUTHORIZATION": f"Bearer {token}"}

    def _create(self, **overrides):
        payload = {
            "topic": "Map control",
            "room": "Arena 1",
            "date": "2024-03-13",
            "startTime": "14:00",
            "endTime": "15:30",
            "moduleId": self.module.id,
            "cohortId": self.cohort.id,
        }
        payload.update(overrides)
        return self.client.post("/api/timetables/lessons", payload, format="json")

    def _register(self, lesson_id, records):
        return self.client.post(
            f"/api/timetables/lessons/{lesson_id}/attendance", {"records": records}, format="json",
        )

    def test_cohort_lesson_materializes_absent_rows(self):
        res = self._create()
        self.assertEqual(res.status_code, 201)
        lesson = Lesson.objects.get(pk=res.data["id"])
        rows = Attendance.objects.filter(lesson=lesson)
        self.assertEqual(rows.count(), 3)
        self.assertTrue(all(r.status == Attendance.STATUS_ABSENT for r in rows))
        self.assertEqual(
            res.data["attendanceSummary"],
            {"total": 3, "present": 0, "late": 0, "absent": 3, "authorized": 0},
        )
        self.assertEqual(res.data["title"], "Game Strategy")
        self.assertEqual(res.data["day"], "WED")
        self.assertEqual(res.data["startTime"], "14:00")
        self.assertEqual(res.data["endTime"], "15:30")

    def test_one_to_one_lesson_materializes_single_row(self):
        res = self._create(cohortId=None, studentId=self.outsider.id)
        self.assertEqual(res.status_code, 201)
        rows = Attendance.objects.filter(lesson_id=res.data["id"])
        self.assertEqual([r.student_id for r in rows], [self.outsider.student_profile.id])
        self.assertIsNone(res.data["cohortId"])

    def test_end_before_start_rejected(self):
        res = self._create(startTime="15:00", endTime="14:00")
        self.assertEqual(res.status_code, 400)
        self.assertEqual(res.data["code"], "validation_error")
        self.assertEqual(Lesson.objects.count(), 0)

    def test_topic_and_room_required(self):
        for field in ("topic", "room"):
            with self.subTest(field=field):
                res = self._create(**{field: ""})
                self.assertEqual(res.status_code, 400)

    def test_unknown_cohort_rejected(self):
        res = self._create(cohortId=999999)
        self.assertEqual(res.status_code, 400)
        self.assertIn("errors", res.data)

    def test_cohort_and_student_together_rejected(self):
        res = self._create(studentId=self.outsider.id)
        self.assertEqual(res.status_code, 400)
        self.assertIn("studentId", res.data["errors"])
        self.assertEqual(Lesson.objects.count(), 0)

    def test_admin_must_name_teacher(self):
        self.client.credentials(**self._auth_header(self.admin))
        self.assertEqual(self._create().status_code, 400)
        res = self._create(teacherId=self.teacher.id)
        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["instructor"], "Prof. Michael Chen")

    def test_register_marks_statuses(self):
        lesson_id = self._create().data["id"]
        first, second, third = self.students
        res = self._register(lesson_id, [
            {"studentId": first.id, "status": "LATE", "minutesLate": 7},
            {"studentId": second.id, "status": "PRESENT", "minutesLate": 5},
            {"studentId": third.id, "status": "AUTHORIZED", "notes": "Tournament"},
        ])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["saved"], 3)
        self.assertEqual(res.data["skipped"], [])
        self.assertEqual(
            res.data["event"]["attendanceSummary"],
            {"total": 3, "present": 1, "late": 1, "absent": 0, "authorized": 1},
        )

        late = Attendance.objects.get(lesson_id=lesson_id, student=first.student_profile)
        self.assertEqual(late.minutes_late, 7)
        self.assertEqual(late.marked_by, self.teacher)
        self.assertIsNotNone(late.marked_at)
        present = Attendance.objects.get(lesson_id=lesson_id, student=second.student_profile)
        self.assertIsNone(present.minutes_late)
        self.assertEqual(Attendance.objects.filter(lesson_id=lesson_id).count(), 3)

    def test_register_is_upsert(self):
        lesson_id = self._create().data["id"]
        student = self.students[0]
        self._register(lesson_id, [{"studentId": student.id, "status": "LATE", "minutesLate": 3}])
        self._register(lesson_id, [{"studentId": student.id, "status": "PRESENT"}])
        row = Attendance.objects.get(lesson_id=lesson_id, student=student.student_profile)
        self.assertEqual(row.status, Attendance.STATUS_PRESENT)
        self.assertIsNone(row.minutes_late)

    def test_register_skips_unknown_and_unenrolled(self):
        lesson_id = self._create().data["id"]
        res = self._register(lesson_id, [
            {"studentId": self.outsider.id, "status": "PRESENT"},
            {"studentId": 999999, "status": "PRESENT"},
            {"studentId": self.students[0].id, "status": "PRESENT"},
        ])
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["saved"], 1)
        self.assertEqual(
            res.data["skipped"],
            [
                {"studentId": self.outsider.id, "reason": "not_enrolled"},
                {"studentId": 999999, "reason": "student_not_found"},
            ],
        )
        self.assertFalse(
            Attendance.objects.filter(lesson_id=lesson_id, student=self.outsider.student_profile).exists()
        )

    def test_register_rejects_invalid_payload(self):
        lesson_id = self._create().data["id"]
        student_id = self.students[0].id
        self.assertEqual(self._register(lesson_id, []).status_code, 400)
        self.assertEqual(self._register(lesson_id, [{"studentId": student_id, "status": "MAYBE"}]).status_code, 400)
        self.assertEqual(
            self._register(lesson_id, [{"studentId": student_id, "status": "LATE", "minutesLate": -1}]).status_code,
            400,
        )

    def test_register_unknown_lesson_returns_404(self):
        res = self._register(999999, [{"studentId": self.students[0].id, "status": "PRESENT"}])
        self.assertEqual(res.status_code, 404)

    def test_marked_register_shows_in_student_timetable(self):
        lesson_id = self._create().data["id"]
        student = self.students[1]
        self._register(lesson_id, [{"studentId": student.id, "status": "LATE", "minutesLate": 12}])
        body = self.client.get("/api/timetable", {"userId": student.id, "weekStart": "2024-03-13"}).json()
        self.assertEqual(body["events"][0]["attendance"], {"status": "LATE", "minutesLate": 12})
        self.assertEqual(body["user"]["attendance"]["averageLateness"], 12)
