import unittest

from formatting import format_duration, quality_label


class TestFormatDuration(unittest.TestCase):

    def test_zero_is_unknown(self):
        self.assertEqual(format_duration(0), "unknown")

    def test_none_is_unknown(self):
        self.assertEqual(format_duration(None), "unknown")

    def test_minutes_and_seconds(self):
        self.assertEqual(format_duration(65), "1:05")

    def test_under_a_minute(self):
        self.assertEqual(format_duration(7), "0:07")

    def test_hours(self):
        self.assertEqual(format_duration(3661), "1:01:01")

    def test_hours_are_not_padded(self):
        self.assertEqual(format_duration(36000), "10:00:00")


class TestQualityLabel(unittest.TestCase):

    def test_known_codes(self):
        self.assertEqual(quality_label(80), "1080P HD")
        self.assertEqual(quality_label(120), "4K Ultra")
        self.assertEqual(quality_label(16), "360P Smooth")

    def test_unknown_code(self):
        self.assertEqual(quality_label(999), "999P")


if __name__ == '__main__':
    unittest.main()
