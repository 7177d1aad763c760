import unittest
from dataclasses import FrozenInstanceError

from tests._test_path import SRC  # noqa: F401

from headshotstudio.app.config import Settings
from headshotstudio.services.transform_client import DEFAULT_MODEL


class TestSettings(unittest.TestCase):
    def test_defaults(self):
        s = Settings.from_env({}, load_env_file=False)
        self.assertEqual(s.api_key, "")
        self.assertEqual(s.model, DEFAULT_MODEL)
        self.assertEqual(s.max_edge, 1536)
        self.assertEqual(s.log_level, "INFO")

    def test_api_key_precedence(self):
        env = {"API_KEY": "c", "GOOGLE_API_KEY": "b", "GEMINI_API_KEY": "a"}
        self.assertEqual(Settings.from_env(env, load_env_file=False).api_key, "a")
        del env["GEMINI_API_KEY"]
        self.assertEqual(Settings.from_env(env, load_env_file=False).api_key, "b")
        del env["GOOGLE_API_KEY"]
        self.assertEqual(Settings.from_env(env, load_env_file=False).api_key, "c")

    def test_overrides(self):
        env = {"HEADSHOT_MODEL": "other-model", "HEADSHOT_MAX_EDGE": "0", "HEADSHOT_LOG_LEVEL": "debug"}
        s = Settings.from_env(env, load_env_file=False)
        self.assertEqual(s.model, "other-model")
        self.assertEqual(s.max_edge, 0)
        self.assertEqual(s.log_level, "DEBUG")

    def test_bad_max_edge_falls_back(self):
        for raw in ("big", "-5", " "):
            with self.subTest(raw=raw):
                s = Settings.from_env({"HEADSHOT_MAX_EDGE": raw}, load_env_file=False)
                self.assertEqual(s.max_edge, 1536)

    def test_frozen(self):
        s = Settings()
        with self.assertRaises(FrozenInstanceError):
            s.model = "x"  # type: ignore[misc]
