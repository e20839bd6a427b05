import unittest
from datetime import datetime, timezone

from roundtable.pipeline.window import competition_status, NOT_STARTED, ACTIVE, COMPLETE

START = "2026-03-01"
END = "2027-02-28"


class CompetitionStatusTests(unittest.TestCase):
    def test_before_start(self):
        now = datetime(2026, 2, 28, 23, 59, tzinfo=timezone.utc)
        self.assertEqual(competition_status(now, START, END), NOT_STARTED)

    def test_start_day_is_active(self):
        now = datetime(2026, 3, 1, 0, 0, tzinfo=timezone.utc)
        self.assertEqual(competition_status(now, START, END), ACTIVE)

    def test_end_day_is_active(self):
        now = datetime(2027, 2, 28, 21, 0, tzinfo=timezone.utc)
        self.assertEqual(competition_status(now, START, END), ACTIVE)

    def test_after_end(self):
        now = datetime(2027, 3, 1, 0, 0, tzinfo=timezone.utc)
        self.assertEqual(competition_status(now, START, END), COMPLETE)

    def test_naive_now_is_utc(self):
        self.assertEqual(competition_status(datetime(2026, 6, 1), START, END), ACTIVE)


if __name__ == "__main__":
    unittest.main()
