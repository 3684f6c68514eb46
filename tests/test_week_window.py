"""
Week window resolution.
- Any day maps to the Monday..Sunday week containing it
- weekStart accepts YYYY-MM-DD and ISO datetimes; anything else is InvalidDateInput
- Absent weekStart uses the week of `now`
- Windows are computed in the configured time zone
"""
from datetime import date, datetime, timezone as dt_timezone

from django.test import SimpleTestCase, override_settings

from attendance.exceptions import InvalidDateInput
from attendance.services.week import parse_week_start, resolve_week_window, week_window


class WeekWindowTests(SimpleTestCase):
    def test_midweek_day_maps_to_monday_start(self):
        window = resolve_week_window("2024-03-14")
        self.assertEqual(window.first_day, date(2024, 3, 11))
        self.assertEqual(window.last_day, date(2024, 3, 17))

    def test_window_bounds_are_inclusive_full_days(self):
        window = resolve_week_window("2024-03-14")
        self.assertEqual(
            window.as_dict(),
            {
                "start": "2024-03-11T00:00:00+00:00",
                "end": "2024-03-17T23:59:59.999999+00:00",
                "weekNumber": 11,
            },
        )

    def test_monday_and_sunday_stay_in_their_week(self):
        self.assertEqual(resolve_week_window("2024-03-11").first_day, date(2024, 3, 11))
        self.assertEqual(resolve_week_window("2024-03-17").first_day, date(2024, 3, 11))
        self.assertEqual(resolve_week_window("2024-03-18").first_day, date(2024, 3, 18))

    def test_iso_datetime_accepted(self):
        window = resolve_week_window("2024-03-14T15:30:00Z")
        self.assertEqual(window.first_day, date(2024, 3, 11))

    def test_absent_week_start_uses_now(self):
        now = datetime(2024, 3, 17, 23, 0, tzinfo=dt_timezone.utc)
        self.assertEqual(resolve_week_window(None, now=now).first_day, date(2024, 3, 11))
        self.assertEqual(resolve_week_window("", now=now).first_day, date(2024, 3, 11))

    def test_unparseable_week_start_raises(self):
        for raw in ("not-a-date", "2024-13-01", "2024-02-30", "14/03/2024"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidDateInput):
                    parse_week_start(raw)

    def test_year_boundary(self):
        window = week_window(date(2025, 1, 1))
        self.assertEqual(window.first_day, date(2024, 12, 30))
        self.assertEqual(window.last_day, date(2025, 1, 5))
        self.assertEqual(window.week_number, 1)

    def test_week_past_calendar_end_raises(self):
        # 9999-12-31 is a real day but its week ends in year 10000
        for raw in ("9999-12-27", "9999-12-31", "9999-12-31T12:00:00Z"):
            with self.subTest(raw=raw):
                with self.assertRaises(InvalidDateInput):
                    resolve_week_window(raw)

    def test_last_full_week_of_calendar_resolves(self):
        window = resolve_week_window("9999-12-26")
        self.assertEqual(window.first_day, date(9999, 12, 20))
        self.assertEqual(window.last_day, date(9999, 12, 26))

    @override_settings(TIME_ZONE="America/New_York")
    def test_now_is_read_in_configured_time_zone(self):
        # Monday 02:00 UTC is still Sunday evening in New York
        now = datetime(2024, 3, 18, 2, 0, tzinfo=dt_timezone.utc)
        window = resolve_week_window(None, now=now)
        self.assertEqual(window.first_day, date(2024, 3, 11))
        self.assertEqual(window.start.isoformat(), "2024-03-11T00:00:00-04:00")
