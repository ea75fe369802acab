import os
import unittest
from unittest.mock import patch

from candlechart.config import get_settings
from candlechart.providers.loader import get_provider
from candlechart.providers.mock import MockTickSource
from candlechart.providers.quotes_ws import QuotesWsProvider


class TestSettings(unittest.TestCase):
    def test_reads_env(self):
        env = {
            "SYMBOL": " ethusd ",
            "WINDOW_SECONDS": "30",
            "TICKS_PER_WINDOW": "1",
            "MAX_HISTORY": "50",
            "QUOTES_WS_VERIFY_TLS": "true",
        }
        with patch.dict(os.environ, env):
            settings = get_settings()

        self.assertEqual(settings.symbol, "ETHUSD")
        self.assertEqual(settings.window_seconds, 30.0)
        self.assertEqual(settings.ticks_per_window, 1)
        self.assertEqual(settings.max_history, 50)
        self.assertTrue(settings.quotes_ws_verify_tls)

    def test_rejects_bad_window(self):
        for env in ({"WINDOW_SECONDS": "0"}, {"TICKS_PER_WINDOW": "-1"}, {"MAX_HISTORY": "0"}):
            with self.subTest(env=env), patch.dict(os.environ, env):
                with self.assertRaises(ValueError):
                    get_settings()


class TestProviderLoader(unittest.TestCase):
    def test_selects_provider(self):
        with patch.dict(os.environ, {"PROVIDER": "mock"}):
            self.assertIsInstance(get_provider(), MockTickSource)
        with patch.dict(os.environ, {"PROVIDER": "QUOTES"}):
            self.assertIsInstance(get_provider(), QuotesWsProvider)

    def test_unknown_provider(self):
        with patch.dict(os.environ, {"PROVIDER": "NOPE"}):
            with self.assertRaises(ValueError):
                get_provider()


if __name__ == "__main__":
    unittest.main()
