import unittest
from datetime import datetime

from fitts_capture.utils import format_timestamp


class TestFormatTimestamp(unittest.TestCase):
    def test_afternoon(self):
        self.assertEqual(format_timestamp(datetime(2024, 3, 5, 14, 7, 9, 123456)), "03/05/2024 02:07:09.123 PM")

    def test_midnight(self):
        self.assertEqual(format_timestamp(datetime(2023, 12, 31, 0, 0, 0, 999)), "12/31/2023 12:00:00.000 AM")


if __name__ == "__main__":
    unittest.main()
