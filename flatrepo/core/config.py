"""
Configuration management for FlatRepo.

Provides centralized configuration for repository acquisition and
post-acquisition processing with sensible defaults.
"""

import os
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dotenv import dotenv_values


DEFAULT_IGNORE_PATTERNS = [
    # Version control metadata
    ".git/",
    ".svn/",
    ".hg/",
    ".gitignore",
    # Dependency managers
    "node_modules/",
    "package-lock.json",
    # Previously generated documents
    "flatrepo_*.md",
    # OS metadata
    ".DS_Store",
    "Thumbs.db",
    # Build output
    "dist/",
    ".next/",
]

DEFAULT_MAX_BYTES_PER_FILE = 100 * 1024 * 1024  # 100MB


@dataclass
class AcquisitionConfig:
    """Configuration for local and remote repository acquisition."""

    # Built-in patterns applied to every acquisition
    ignore_patterns: List[str] = field(
        default_factory=lambda: list(DEFAULT_IGNORE_PATTERNS)
    )

    # Name of the ignore file looked up in the root and its ancestors
    ignore_file_name: str = ".gitignore"

    # Worker threads used to read local files
    read_workers: int = 8

    # Timeout for archive downloads (seconds, None = no timeout)
    request_timeout: Optional[float] = None

    # GitHub REST API root used for archive downloads
    api_base_url: str = "https://api.github.com"

    # Optional token for private repositories
    github_token: Optional[str] = None

    # Download chunk size (bytes)
    chunk_size: int = 64 * 1024

    user_agent: str = "flatrepo"


@dataclass
class ProcessingConfig:
    """Configuration for filtering acquired files."""

    # Comma-separated caller patterns
    ignore_patterns: str = ""

    max_bytes_per_file: int = DEFAULT_MAX_BYTES_PER_FILE

    include_binary: bool = False


@dataclass
class FlatrepoConfig:
    """Master configuration combining acquisition and processing."""

    acquisition: AcquisitionConfig = field(default_factory=AcquisitionConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)

    # Enable verbose logging
    verbose: bool = False


class Config:
    """
    Central configuration manager providing access to all settings.

    Supports loading from environment variables, .env files and JSON
    configuration files.
    """

    _instance: Optional["Config"] = None
    _config: FlatrepoConfig = None

    ENV_PREFIX = "FLATREPO_"

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = FlatrepoConfig()
        return cls._instance

    @classmethod
    def get(cls) -> FlatrepoConfig:
        """Get the current configuration."""
        if cls._instance is None:
            cls()
        return cls._instance._config

    @classmethod
    def reset(cls) -> FlatrepoConfig:
        """Restore the default configuration."""
        instance = cls()
        instance._config = FlatrepoConfig()
        return instance._config

    @classmethod
    def load_from_file(cls, config_path: str) -> FlatrepoConfig:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            Loaded FlatrepoConfig instance.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r") as f:
            data = json.load(f)

        instance = cls()
        instance._config = cls._dict_to_config(data)
        return instance._config

    @classmethod
    def load_from_env(cls, env_file: Optional[str] = None) -> FlatrepoConfig:
        """
        Load configuration from environment variables.

        Variables are prefixed with FLATREPO_. Values found in
        ``env_file`` are used when the process environment does not
        define them.

        Args:
            env_file: Optional path to a .env file.

        Returns:
            FlatrepoConfig with environment overrides applied.
        """
        instance = cls()
        config = instance._config

        env = {}
        if env_file:
            env.update({k: v for k, v in dotenv_values(env_file).items() if v is not None})
        env.update(os.environ)

        def lookup(name: str) -> Optional[str]:
            return env.get(cls.ENV_PREFIX + name) or None

        if lookup("GITHUB_TOKEN"):
            config.acquisition.github_token = lookup("GITHUB_TOKEN")

        if lookup("REQUEST_TIMEOUT"):
            config.acquisition.request_timeout = float(lookup("REQUEST_TIMEOUT"))

        if lookup("READ_WORKERS"):
            config.acquisition.read_workers = int(lookup("READ_WORKERS"))

        if lookup("API_BASE_URL"):
            config.acquisition.api_base_url = lookup("API_BASE_URL")

        if lookup("MAX_BYTES_PER_FILE"):
            config.processing.max_bytes_per_file = int(lookup("MAX_BYTES_PER_FILE"))

        if lookup("IGNORE_PATTERNS"):
            config.processing.ignore_patterns = lookup("IGNORE_PATTERNS")

        if lookup("VERBOSE"):
            config.verbose = lookup("VERBOSE").lower() in ("true", "1", "yes")

        return config

    @staticmethod
    def _dict_to_config(data: dict) -> FlatrepoConfig:
        """Convert a dictionary to FlatrepoConfig."""
        config = FlatrepoConfig()

        if "acquisition" in data:
            config.acquisition = AcquisitionConfig(**data["acquisition"])

        if "processing" in data:
            config.processing = ProcessingConfig(**data["processing"])

        if "verbose" in data:
            config.verbose = data["verbose"]

        return config

    @classmethod
    def save_to_file(cls, config_path: str) -> None:
        """
        Save current configuration to a JSON file.

        The GitHub token is never written to disk.

        Args:
            config_path: Path to save the configuration file.
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config = cls.get()
        data = cls._config_to_dict(config)

        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def _config_to_dict(config: FlatrepoConfig) -> dict:
        """Convert FlatrepoConfig to a dictionary."""
        return {
            "acquisition": {
                "ignore_patterns": config.acquisition.ignore_patterns,
                "ignore_file_name": config.acquisition.ignore_file_name,
                "read_workers": config.acquisition.read_workers,
                "request_timeout": config.acquisition.request_timeout,
                "api_base_url": config.acquisition.api_base_url,
                "chunk_size": config.acquisition.chunk_size,
                "user_agent": config.acquisition.user_agent,
            },
            "processing": {
                "ignore_patterns": config.processing.ignore_patterns,
                "max_bytes_per_file": config.processing.max_bytes_per_file,
                "include_binary": config.processing.include_binary,
            },
            "verbose": config.verbose,
        }
