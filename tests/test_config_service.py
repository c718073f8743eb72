import json
import os
import tempfile
import unittest
from unittest.mock import patch

from utils.config_service import Config


class TestConfigService(unittest.TestCase):
    def setUp(self):
        """Set up test fixtures"""
        self.temp_dir = tempfile.mkdtemp()
        self.config_path = os.path.join(self.temp_dir, "config.json")

        self.test_config = {
            "server_host": "127.0.0.1",
            "server_port": 9090,
            "store_retry_attempts": "4",
            "store_retry_delay_ms": "fast",
            "log_level": "DEBUG",
        }

        with open(self.config_path, 'w') as f:
            json.dump(self.test_config, f)

    def tearDown(self):
        """Clean up test fixtures"""
        if os.path.exists(self.config_path):
            os.remove(self.config_path)
        if os.path.exists(self.temp_dir):
            os.rmdir(self.temp_dir)

    def test_get_str(self):
        with patch.dict(os.environ, {"CONFIG_PATH": self.config_path}):
            self.assertEqual(Config.get_str("server_host"), "127.0.0.1")
            self.assertEqual(Config.get_str("server_port"), "9090")
            self.assertEqual(Config.get_str("missing", "default"), "default")
            self.assertIsNone(Config.get_str("missing"))

    def test_get_int(self):
        with patch.dict(os.environ, {"CONFIG_PATH": self.config_path}):
            self.assertEqual(Config.get_int("server_port", 8080), 9090)
            self.assertEqual(Config.get_int("store_retry_attempts", 6), 4)
            # Unparseable values fall back to the default
            self.assertEqual(Config.get_int("store_retry_delay_ms", 100), 100)
            self.assertEqual(Config.get_int("missing", 6), 6)

    def test_missing_file_uses_defaults(self):
        with patch.dict(os.environ, {"CONFIG_PATH": os.path.join(self.temp_dir, "nope.json")}):
            self.assertEqual(Config.get_int("server_port", 8080), 8080)
            self.assertEqual(Config.get_str("server_host", "0.0.0.0"), "0.0.0.0")

    def test_unset_config_path_uses_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            self.assertEqual(Config.get_int("store_retry_attempts", 6), 6)


if __name__ == '__main__':
    unittest.main()
