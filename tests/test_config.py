import sys
import tempfile
from pathlib import Path
import unittest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from algoviz.config import LayoutConfig, Settings, load_env_file, load_settings


class TestLoadSettings(unittest.TestCase):
    def test_defaults(self):
        settings = load_settings(env={}, env_file=None)
        self.assertEqual(settings, Settings())
        self.assertEqual(settings.layout, LayoutConfig(400, 50, 200, 80))

    def test_environment_overrides(self):
        env = {
            "ALGOVIZ_SPEED": "2.5",
            "ALGOVIZ_ROOT_X": "600",
            "ALGOVIZ_SPACING": "120",
            "ALGOVIZ_LOG_LEVEL": "debug",
            "ALGOVIZ_ASCII": "yes",
        }
        settings = load_settings(env=env, env_file=None)
        self.assertEqual(settings.default_speed, 2.5)
        self.assertEqual(settings.layout.root_x, 600)
        self.assertEqual(settings.layout.horizontal_spacing, 120)
        self.assertEqual(settings.layout.level_height, 80)
        self.assertEqual(settings.log_level, "DEBUG")
        self.assertFalse(settings.unicode)

    def test_malformed_values_fall_back(self):
        env = {"ALGOVIZ_SPEED": "fast", "ALGOVIZ_LOG_LEVEL": "chatty"}
        with self.assertLogs("algoviz.config", level="WARNING") as logs:
            settings = load_settings(env=env, env_file=None)
        self.assertEqual(settings.default_speed, 1.0)
        self.assertEqual(settings.log_level, "WARNING")
        self.assertEqual(len(logs.output), 2)

    def test_non_finite_numbers_fall_back(self):
        env = {"ALGOVIZ_SPEED": "nan", "ALGOVIZ_SPACING": "inf", "ALGOVIZ_ROOT_X": "-Infinity"}
        with self.assertLogs("algoviz.config", level="WARNING") as logs:
            settings = load_settings(env=env, env_file=None)
        self.assertEqual(settings.default_speed, 1.0)
        self.assertEqual(settings.layout, LayoutConfig())
        self.assertEqual(len(logs.output), 3)


class TestEnvFile(unittest.TestCase):
    def test_env_file_never_overrides(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / ".env"
            path.write_text(
                "# comment\n"
                "export ALGOVIZ_SPEED=3\n"
                "ALGOVIZ_ROOT_Y='90'\n"
                'ALGOVIZ_LEVEL_HEIGHT="40"\n'
                "not a pair\n",
                encoding="utf-8",
            )
            env = {"ALGOVIZ_ROOT_Y": "10"}
            settings = load_settings(env=env, env_file=path)
        self.assertEqual(settings.default_speed, 3.0)
        self.assertEqual(settings.layout.root_y, 10)
        self.assertEqual(settings.layout.level_height, 40)

    def test_missing_file_is_ignored(self):
        env = {}
        load_env_file(Path("/nonexistent/algoviz/.env"), env)
        self.assertEqual(env, {})


if __name__ == "__main__":
    unittest.main()
