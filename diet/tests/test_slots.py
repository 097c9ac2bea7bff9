import unittest
from diet.logic.scheduling.slots import (
    find_closest_slot_index, find_slot_index, generate_slots, generate_slots_from_hours,
    hour_to_time_string, parse_time,
)


def _minutes(hhmm):
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


class TestGenerateSlots(unittest.TestCase):
    def test_default_window(self):
        slots = generate_slots(9, 17, 45)
        expected = []
        current = 9 * 60
        while current + 45 <= 17 * 60:
            expected.append(f"{current // 60:02d}:{current % 60:02d}")
            current += 45
        self.assertEqual(slots, expected)
        self.assertEqual(len(slots), 10)
        self.assertEqual(slots[0], "09:00")
        self.assertEqual(slots[-1], "15:45")
        self.assertLessEqual(_minutes(slots[-1]) + 45, 17 * 60)

    def test_strictly_increasing_and_fits(self):
        for start, end, duration in ((8, 18, 30), (10, 12, 50), ("08:30", "12:15", 20), (0, 24, 60)):
            with self.subTest(window=(start, end, duration)):
                slots = generate_slots(start, end, duration)
                minutes = [_minutes(s) for s in slots]
                self.assertEqual(minutes, sorted(set(minutes)))
                self.assertTrue(all(b - a == duration for a, b in zip(minutes, minutes[1:])))
                self.assertLessEqual(minutes[-1] + duration, parse_time(end))

    def test_time_string_bounds(self):
        self.assertEqual(generate_slots("08:30", "10:00", 30), ["08:30", "09:00", "09:30"])

    def test_empty_window(self):
        self.assertEqual(generate_slots(9, 9, 30), [])
        self.assertEqual(generate_slots(17, 9, 30), [])
        self.assertEqual(generate_slots(9, 10, 90), [])

    def test_invalid_duration_falls_back(self):
        with self.assertLogs("diet.logic.scheduling.slots", level="WARNING"):
            self.assertEqual(generate_slots(9, 17, 0), generate_slots(9, 17, 45))
        self.assertEqual(generate_slots(9, 17, -15), generate_slots(9, 17, 45))
        self.assertEqual(generate_slots(9, 17, "abc"), generate_slots(9, 17, 45))

    def test_invalid_bounds_fall_back(self):
        defaults = generate_slots(9, 17, 45)
        self.assertEqual(generate_slots("abc", 17, 30), defaults)
        self.assertEqual(generate_slots(9, "25:00", 30), defaults)
        self.assertEqual(generate_slots(None, 12, 30), defaults)

    def test_profile_hours_default_when_missing(self):
        self.assertEqual(generate_slots_from_hours(None, None, None), generate_slots(9, 17, 45))
        self.assertEqual(generate_slots_from_hours(10, None, 60), ["10:00", "11:00", "12:00", "13:00", "14:00", "15:00", "16:00"])


class TestParseTime(unittest.TestCase):
    def test_values(self):
        self.assertEqual(parse_time(9), 540)
        self.assertEqual(parse_time("9"), 540)
        self.assertEqual(parse_time("09:15"), 555)
        self.assertEqual(parse_time(24), 1440)
        self.assertIsNone(parse_time(25))
        self.assertIsNone(parse_time("10:75"))
        self.assertIsNone(parse_time(True))
        self.assertIsNone(parse_time("sabah"))

    def test_hour_to_time_string_clamps(self):
        self.assertEqual(hour_to_time_string(9), "09:00")
        self.assertEqual(hour_to_time_string(-3), "00:00")
        self.assertEqual(hour_to_time_string(30), "23:00")


class TestSlotLookup(unittest.TestCase):
    def setUp(self):
        self.slots = generate_slots(9, 17, 45)

    def test_exact(self):
        self.assertEqual(find_slot_index("09:45", self.slots), 1)
        self.assertEqual(find_slot_index("09:50", self.slots), -1)
        self.assertEqual(find_slot_index("09:00", []), -1)

    def test_closest(self):
        self.assertEqual(self.slots[find_closest_slot_index("10:05", self.slots)], "09:45")
        self.assertEqual(find_closest_slot_index("10:30", self.slots), self.slots.index("10:30"))
        self.assertEqual(find_closest_slot_index("07:00", self.slots), 0)
        self.assertEqual(find_closest_slot_index("20:00", self.slots), len(self.slots) - 1)

    def test_closest_on_hour_grid(self):
        slots = generate_slots(9, 17, 60)
        self.assertEqual(slots[find_closest_slot_index("10:05", slots)], "10:00")

    def test_tie_goes_to_earliest(self):
        self.assertEqual(find_closest_slot_index("09:30", ["09:00", "10:00"]), 0)

    def test_closest_not_found(self):
        self.assertEqual(find_closest_slot_index("10:00", []), -1)
        self.assertEqual(find_closest_slot_index("later", self.slots), -1)


if __name__ == '__main__':
    unittest.main()
