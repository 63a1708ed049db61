"""
Tests for the configuration module.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from react_lint.config import Config, InvalidOptionsError, normalize_rule_entry, validate_options
from react_lint.rules import RULES


class TestConfig(unittest.TestCase):
    """Test cases for Config."""

    def setUp(self):
        """Run each test from an empty directory with no config variables set."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.cwd = os.getcwd()
        os.chdir(self.temp_dir.name)
        self.env = patch.dict(os.environ)
        self.env.start()
        os.environ.pop("REACT_LINT_CONFIG", None)
        os.environ.pop("REACT_LINT_PRAGMA", None)

    def tearDown(self):
        self.env.stop()
        os.chdir(self.cwd)
        self.temp_dir.cleanup()

    def write_config(self, data, name=".reactlintrc.json"):
        path = Path(self.temp_dir.name) / name
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path

    def test_defaults_without_file(self):
        config = Config()
        self.assertIsNone(config.config_path)
        self.assertEqual(config.settings, {})
        self.assertEqual(config.rule_config(), {})

    def test_default_file_in_working_directory(self):
        self.write_config({"rules": {"jsx-key": "off"}, "settings": {"react": {"pragma": "Preact"}}})
        config = Config()
        self.assertEqual(config.rule_config(), {"jsx-key": "off"})
        self.assertEqual(config.settings["react"]["pragma"], "Preact")

    def test_explicit_path(self):
        path = self.write_config({"rules": {"jsx-no-target-blank": ["warn", {"forms": True}]}}, "custom.json")
        config = Config(config_path=path)
        self.assertEqual(config.config_path, path)
        self.assertEqual(config.rules["jsx-no-target-blank"], ["warn", {"forms": True}])

    def test_path_from_environment(self):
        path = self.write_config({"rules": {"jsx-key": 0}}, "from-env.json")
        os.environ["REACT_LINT_CONFIG"] = str(path)
        self.assertEqual(Config().rules, {"jsx-key": 0})

    def test_dotenv_file_is_loaded(self):
        (Path(self.temp_dir.name) / ".env").write_text("REACT_LINT_PRAGMA=Preact\n")
        self.assertEqual(Config().settings["react"]["pragma"], "Preact")
        os.environ.pop("REACT_LINT_PRAGMA", None)
        self.assertEqual(Config(load_env=False).settings, {})

    def test_pragma_environment_variable(self):
        self.write_config({"settings": {"react": {"fragment": "Frag"}}})
        os.environ["REACT_LINT_PRAGMA"] = "h"
        self.assertEqual(Config().settings["react"], {"fragment": "Frag", "pragma": "h"})

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            Config(config_path=Path(self.temp_dir.name) / "nope.json")

    def test_invalid_json(self):
        path = self.write_config("{not json", "broken.json")
        with self.assertRaises(InvalidOptionsError):
            Config(config_path=path)

    def test_wrong_shape(self):
        for data in ([1, 2], {"rules": []}, {"settings": "react"}):
            path = self.write_config(data, "shape.json")
            with self.assertRaises(InvalidOptionsError):
                Config(config_path=path)


class TestRuleEntries(unittest.TestCase):
    """Test cases for rule entry normalization and option validation."""

    def test_severities(self):
        for entry in ("error", "warn", "ERROR", 1, 2, True):
            self.assertEqual(normalize_rule_entry("jsx-key", entry), (True, None))
        for entry in ("off", 0, False):
            self.assertEqual(normalize_rule_entry("jsx-key", entry), (False, None))

    def test_options_forms(self):
        options = {"warnOnDuplicates": False}
        self.assertEqual(normalize_rule_entry("jsx-key", ["error", options]), (True, options))
        self.assertEqual(normalize_rule_entry("jsx-key", options), (True, options))
        self.assertEqual(normalize_rule_entry("jsx-key", ["warn"]), (True, None))

    def test_bad_entries(self):
        for entry in ("loud", [], ["error", {}, {}], None, 3.5):
            with self.assertRaises(InvalidOptionsError):
                normalize_rule_entry("jsx-key", entry)

    def test_validate_options(self):
        rule = RULES["jsx-no-target-blank"]
        self.assertEqual(validate_options(rule, None), {})
        self.assertEqual(validate_options(rule, {"enforceDynamicLinks": "never"}), {"enforceDynamicLinks": "never"})

        for options in ({"unknown": True}, {"forms": "yes"}, {"enforceDynamicLinks": "sometimes"}, ["forms"]):
            with self.assertRaises(InvalidOptionsError):
                validate_options(rule, options)

    def test_rules_without_options_reject_them(self):
        with self.assertRaises(InvalidOptionsError):
            validate_options(RULES["no-danger-with-children"], {"anything": 1})


if __name__ == '__main__':
    unittest.main()
