import os
import unittest
from unittest.mock import patch

from settings import Settings


class TestSettings(unittest.TestCase):

    @patch('settings.load_dotenv')
    def test_defaults(self, _):
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.port, 30001)
        self.assertEqual(settings.api_base, "https://api.bilibili.com")
        self.assertEqual(settings.request_timeout, 10.0)

    @patch('settings.load_dotenv')
    def test_overrides(self, _):
        env = {"PORT": "8080", "BILIBILI_API_BASE": "http://localhost:9000/", "REQUEST_TIMEOUT": "2.5", "MAX_RETRIES": "0", "LOG_LEVEL": "debug"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings.from_env()
        self.assertEqual(settings.port, 8080)
        self.assertEqual(settings.api_base, "http://localhost:9000")
        self.assertEqual(settings.request_timeout, 2.5)
        self.assertEqual(settings.max_retries, 0)
        self.assertEqual(settings.log_level, "DEBUG")


if __name__ == '__main__':
    unittest.main()
