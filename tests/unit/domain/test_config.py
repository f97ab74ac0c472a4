import logging
import unittest

from ghost_linter.domain.config import ConfigurationLoader, LinterConfig


class TestConfigurationLoader(unittest.TestCase):
    def test_defaults_without_section(self) -> None:
        """An empty [tool.ghost] yields the default config."""
        self.assertEqual(ConfigurationLoader().build(), LinterConfig(5, False, False))

    def test_file_values_are_used(self) -> None:
        loader = ConfigurationLoader({"max_line_complexity": 8, "ignore_tests": True, "never_fail": True})
        self.assertEqual(loader.build(), LinterConfig(8, True, True))

    def test_explicit_values_override_file(self) -> None:
        loader = ConfigurationLoader({"max_line_complexity": 8, "never_fail": True})
        config = loader.build(max_line_complexity=3, never_fail=False)
        self.assertEqual(config.max_line_complexity, 3)
        self.assertFalse(config.never_fail)

    def test_none_keeps_file_value(self) -> None:
        loader = ConfigurationLoader({"ignore_tests": True})
        self.assertTrue(loader.build(ignore_tests=None).ignore_tests)

    def test_wrong_types_fall_back_to_defaults(self) -> None:
        with self.assertLogs("ghost_linter.domain.config", level=logging.WARNING) as logs:
            loader = ConfigurationLoader({"max_line_complexity": "7", "ignore_tests": 1})
        self.assertEqual(loader.max_line_complexity, 5)
        self.assertFalse(loader.ignore_tests)
        self.assertEqual(len(logs.output), 2)

    def test_boolean_threshold_is_rejected(self) -> None:
        with self.assertLogs("ghost_linter.domain.config", level=logging.WARNING):
            loader = ConfigurationLoader({"max_line_complexity": True})
        self.assertEqual(loader.max_line_complexity, 5)

    def test_unknown_key_warns(self) -> None:
        with self.assertLogs("ghost_linter.domain.config", level=logging.WARNING) as logs:
            loader = ConfigurationLoader({"max_complexity": 3})
        self.assertIn("unknown key 'max_complexity'", logs.output[0])
        self.assertEqual(loader.build(), LinterConfig())

    def test_zero_threshold_is_valid(self) -> None:
        self.assertEqual(ConfigurationLoader({"max_line_complexity": 0}).build().max_line_complexity, 0)
