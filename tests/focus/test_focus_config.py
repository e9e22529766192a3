import unittest

from focus import TimerConfiguration, TimerConfigurationError


class TimerConfigurationTests(unittest.TestCase):
    def test_defaults_match_stock_cycle(self) -> None:
        config = TimerConfiguration()
        self.assertEqual(60, config.focus_minutes)
        self.assertEqual(5, config.short_break_minutes)
        self.assertEqual(10, config.long_break_minutes)
        self.assertEqual(3, config.long_break_interval)
        self.assertFalse(config.auto_start)

    def test_seconds_for_each_mode(self) -> None:
        config = TimerConfiguration(focus_minutes=25, short_break_minutes=5, long_break_minutes=15)
        self.assertEqual(1500, config.seconds_for("focus"))
        self.assertEqual(300, config.seconds_for("shortBreak"))
        self.assertEqual(900, config.seconds_for("longBreak"))

    def test_unknown_mode_is_rejected(self) -> None:
        with self.assertRaises(TimerConfigurationError):
            TimerConfiguration().minutes_for("nap")

    def test_rejects_non_positive_minutes(self) -> None:
        for field in ("focus_minutes", "short_break_minutes", "long_break_minutes"):
            with self.subTest(field=field):
                with self.assertRaises(TimerConfigurationError):
                    TimerConfiguration(**{field: 0})

    def test_rejects_bool_and_float_minutes(self) -> None:
        with self.assertRaises(TimerConfigurationError):
            TimerConfiguration(focus_minutes=True)
        with self.assertRaises(TimerConfigurationError):
            TimerConfiguration(focus_minutes=25.5)

    def test_rejects_interval_below_one(self) -> None:
        with self.assertRaises(TimerConfigurationError):
            TimerConfiguration(long_break_interval=0)

    def test_interval_above_ten_is_allowed(self) -> None:
        self.assertEqual(12, TimerConfiguration(long_break_interval=12).long_break_interval)

    def test_rejects_non_bool_auto_start(self) -> None:
        with self.assertRaises(TimerConfigurationError):
            TimerConfiguration(auto_start="yes")

    def test_with_changes_returns_validated_copy(self) -> None:
        config = TimerConfiguration()
        updated = config.with_changes({"focus_minutes": 25, "auto_start": True})

        self.assertEqual(25, updated.focus_minutes)
        self.assertTrue(updated.auto_start)
        self.assertEqual(60, config.focus_minutes)

    def test_with_changes_rejects_unknown_keys(self) -> None:
        with self.assertRaisesRegex(TimerConfigurationError, "focus_mins"):
            TimerConfiguration().with_changes({"focus_mins": 25})

    def test_with_changes_rejects_invalid_values(self) -> None:
        with self.assertRaises(TimerConfigurationError):
            TimerConfiguration().with_changes({"short_break_minutes": -1})
