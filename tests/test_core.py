"""
Unit tests for core module components.
"""

import json
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from flatrepo.core.config import (
    Config,
    FlatrepoConfig,
    AcquisitionConfig,
    ProcessingConfig,
    DEFAULT_MAX_BYTES_PER_FILE,
)
from flatrepo.core.exceptions import (
    FlatrepoError,
    FetchError,
    ProcessError,
    InvalidUrlError,
    PathNotFoundError,
    TransportError,
    FetchTimeoutError,
    FileTooBigError,
    EmptyRepositoryError,
    InvalidEncodingError,
)


class TestConfig(unittest.TestCase):
    """Tests for configuration management."""

    def setUp(self):
        Config.reset()

    def tearDown(self):
        Config.reset()

    def test_default_config(self):
        """Test that default configuration is created correctly."""
        config = FlatrepoConfig()

        self.assertIsInstance(config.acquisition, AcquisitionConfig)
        self.assertIsInstance(config.processing, ProcessingConfig)
        self.assertFalse(config.verbose)

    def test_acquisition_config_defaults(self):
        """Test acquisition configuration defaults."""
        config = AcquisitionConfig()

        self.assertIn(".git/", config.ignore_patterns)
        self.assertIn("node_modules/", config.ignore_patterns)
        self.assertIn("flatrepo_*.md", config.ignore_patterns)
        self.assertEqual(config.ignore_file_name, ".gitignore")
        self.assertIsNone(config.request_timeout)
        self.assertIsNone(config.github_token)
        self.assertEqual(config.api_base_url, "https://api.github.com")

    def test_default_patterns_are_not_shared(self):
        """Test that each config gets its own pattern list."""
        first = AcquisitionConfig()
        second = AcquisitionConfig()
        first.ignore_patterns.append("extra/")

        self.assertNotIn("extra/", second.ignore_patterns)

    def test_processing_config_defaults(self):
        """Test processing configuration defaults."""
        config = ProcessingConfig()

        self.assertEqual(config.max_bytes_per_file, 100 * 1024 * 1024)
        self.assertEqual(config.max_bytes_per_file, DEFAULT_MAX_BYTES_PER_FILE)
        self.assertFalse(config.include_binary)
        self.assertEqual(config.ignore_patterns, "")

    def test_config_save_and_load(self):
        """Test configuration serialization and deserialization."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"

            Config.get().processing.max_bytes_per_file = 1234
            Config.get().acquisition.github_token = "secret"
            Config.save_to_file(str(config_path))

            self.assertTrue(config_path.exists())

            with open(config_path) as f:
                data = json.load(f)

            self.assertIn("acquisition", data)
            self.assertIn("processing", data)
            self.assertNotIn("github_token", data["acquisition"])

            Config.reset()
            loaded = Config.load_from_file(str(config_path))

            self.assertEqual(loaded.processing.max_bytes_per_file, 1234)
            self.assertIsNone(loaded.acquisition.github_token)

    def test_load_missing_file(self):
        """Test loading a configuration file that does not exist."""
        with self.assertRaises(FileNotFoundError):
            Config.load_from_file("/nonexistent/flatrepo.json")

    def test_load_from_env(self):
        """Test environment variable overrides."""
        env = {
            "FLATREPO_GITHUB_TOKEN": "tok",
            "FLATREPO_REQUEST_TIMEOUT": "2.5",
            "FLATREPO_MAX_BYTES_PER_FILE": "2048",
            "FLATREPO_VERBOSE": "yes",
        }
        with mock.patch.dict(os.environ, env):
            config = Config.load_from_env()

        self.assertEqual(config.acquisition.github_token, "tok")
        self.assertEqual(config.acquisition.request_timeout, 2.5)
        self.assertEqual(config.processing.max_bytes_per_file, 2048)
        self.assertTrue(config.verbose)

    def test_load_from_env_file(self):
        """Test that .env values are used when the environment is silent."""
        with tempfile.TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text(
                "FLATREPO_READ_WORKERS=3\nFLATREPO_IGNORE_PATTERNS=docs/,*.log\n"
            )
            with mock.patch.dict(os.environ, {"FLATREPO_READ_WORKERS": "5"}):
                config = Config.load_from_env(str(env_file))

        self.assertEqual(config.acquisition.read_workers, 5)
        self.assertEqual(config.processing.ignore_patterns, "docs/,*.log")


class TestExceptions(unittest.TestCase):
    """Tests for custom exceptions."""

    def test_base_error(self):
        """Test base error formatting."""
        error = FlatrepoError("Test error", stage="test", details={"key": "value"})

        self.assertEqual(str(error), "[test] Test error")
        self.assertEqual(error.stage, "test")
        self.assertEqual(error.details, {"key": "value"})

    def test_fetch_error_families(self):
        """Test that acquisition errors share the fetch family."""
        error = PathNotFoundError("/missing")

        self.assertIsInstance(error, FetchError)
        self.assertNotIsInstance(error, ProcessError)
        self.assertEqual(error.code, "PATH_NOT_FOUND")
        self.assertEqual(error.source, {"path": "/missing"})
        self.assertEqual(str(error), "[Fetch] Path not found: /missing")

    def test_invalid_url_error(self):
        """Test invalid URL error."""
        error = InvalidUrlError("not-a-url")

        self.assertEqual(error.code, "INVALID_URL")
        self.assertIn("not-a-url", str(error))

    def test_transport_error_codes(self):
        """Test HTTP and network transport error codes."""
        http_error = TransportError("boom", "https://x", status_code=500)
        cause = ConnectionError("reset")
        network_error = TransportError("boom", "https://x", cause=cause)

        self.assertEqual(http_error.code, "GITHUB_API_ERROR")
        self.assertEqual(http_error.status_code, 500)
        self.assertEqual(network_error.code, "DOWNLOAD_ERROR")
        self.assertIs(network_error.cause, cause)

    def test_timeout_error_carries_duration(self):
        """Test timeout error keeps the configured duration."""
        error = FetchTimeoutError("https://x", 3.0)

        self.assertEqual(error.timeout, 3.0)
        self.assertEqual(error.details["timeout"], 3.0)

    def test_process_errors_name_file(self):
        """Test that processing errors name the offending file."""
        error = FileTooBigError("big.bin", 11, 10)

        self.assertIsInstance(error, ProcessError)
        self.assertEqual(error.file_path, "big.bin")
        self.assertEqual(error.code, "FILE_TOO_BIG")
        self.assertIn("big.bin", str(error))
        self.assertEqual(InvalidEncodingError("x.txt").file_path, "x.txt")

    def test_empty_repository_error(self):
        """Test empty repository error has no file."""
        error = EmptyRepositoryError()

        self.assertIsNone(error.file_path)
        self.assertEqual(error.code, "EMPTY_REPOSITORY")


if __name__ == "__main__":
    unittest.main()
