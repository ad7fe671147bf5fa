import unittest
from datetime import date, timedelta

from week_window import FRIDAY, compute_week_window, parse_weekday


class TestComputeWeekWindow(unittest.TestCase):

    MONDAY = date(2026, 10, 12)

    def test_every_weekday_maps_to_same_week(self):
        """周一到周日运行，窗口都是同一周的周一到周五"""
        for offset in range(7):
            today = self.MONDAY + timedelta(days=offset)
            with self.subTest(today=today.isoformat()):
                window = compute_week_window(today)
                self.assertEqual(window.start, date(2026, 10, 12))
                self.assertEqual(window.end, date(2026, 10, 16))
                self.assertEqual(window.start.weekday(), 0)
                self.assertEqual(window.end.weekday(), FRIDAY)

    def test_bounds_are_full_days(self):
        window = compute_week_window(date(2026, 10, 16))
        self.assertEqual(window.since, "2026-10-12 00:00:00")
        self.assertEqual(window.until, "2026-10-16 23:59:59")

    def test_week_crossing_month_and_year(self):
        window = compute_week_window(date(2027, 1, 1))  # 周五
        self.assertEqual(window.start, date(2026, 12, 28))
        self.assertEqual(window.end, date(2027, 1, 1))

    def test_custom_end_day(self):
        window = compute_week_window(date(2026, 10, 18), end_weekday=6)
        self.assertEqual(window.start, date(2026, 10, 12))
        self.assertEqual(window.end, date(2026, 10, 18))

        monday_only = compute_week_window(date(2026, 10, 14), end_weekday=0)
        self.assertEqual(monday_only.start, monday_only.end)


class TestParseWeekday(unittest.TestCase):

    def test_names_and_numbers(self):
        self.assertEqual(parse_weekday("friday"), 4)
        self.assertEqual(parse_weekday("Fri"), 4)
        self.assertEqual(parse_weekday("sat"), 5)
        self.assertEqual(parse_weekday("6"), 6)
        self.assertEqual(parse_weekday(0), 0)

    def test_invalid_values(self):
        for value in ["", "fr", "funday", "7", -1, "s"]:
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_weekday(value)


if __name__ == "__main__":
    unittest.main()
