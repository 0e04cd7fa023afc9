"""
Configuration file support for graphene-cli.

Loads settings from .graphene-cli.yaml (working directory or a parent) or
~/.graphene-cli.yaml (user home). Project-level config takes precedence
over user-level config. Environment variables (GRAPHENE_URL,
GRAPHENE_TIMEOUT, optionally from a .env file) override the file, and CLI
flags override both.

Configuration Options:
- server_url: Base URL of the Graphene server
- timeout: Request timeout in seconds
- max_retries / retry_delay: Retry policy for engine requests
- workers: Items analyzed concurrently
- fail_fast: Abort the batch on the first engine failure
- log_level / log_file: Logging settings
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog
import yaml

log = structlog.get_logger("graphene_cli.config")

CONFIG_NAMES = (".graphene-cli.yaml", ".graphene-cli.yml")

LOG_LEVELS = ("debug", "info", "warning", "error")


@dataclass
class GrapheneConfig:
    """Configuration settings for graphene-cli.

    Attributes:
        server_url: Base URL of the Graphene REST server
        timeout: Seconds to wait for one engine response
        max_retries: Attempts per engine request
        retry_delay: Base delay between attempts (doubles each retry)
        workers: Number of items analyzed concurrently (1 = sequential)
        fail_fast: Abort the whole batch on the first engine failure
        log_level: Minimum level of emitted log events
        log_file: Append log events to this file instead of stderr
    """

    # Engine
    server_url: str = "http://localhost:8080"
    timeout: float = 60.0
    max_retries: int = 3
    retry_delay: float = 1.0

    # Batch
    workers: int = 1
    fail_fast: bool = True

    # Logging
    log_level: str = "warning"
    log_file: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GrapheneConfig":
        """Create config from dictionary.

        Handles nested 'server', 'batch', 'logging' sections from YAML.
        Nested values win over flat keys.
        """
        config = cls()

        # Handle flat keys (simple format)
        config._apply_server(data)
        config._apply_batch(data)
        if "log_level" in data and data["log_level"]:
            config.log_level = str(data["log_level"]).lower()
        if "log_file" in data:
            config.log_file = str(data["log_file"]) if data["log_file"] else None

        # Handle nested sections (structured format)
        if isinstance(data.get("server"), dict):
            server = dict(data["server"])
            if "url" in server:
                server["server_url"] = server.pop("url")
            config._apply_server(server)

        if isinstance(data.get("batch"), dict):
            config._apply_batch(data["batch"])

        if isinstance(data.get("logging"), dict):
            logging_section = data["logging"]
            if logging_section.get("level"):
                config.log_level = str(logging_section["level"]).lower()
            if "file" in logging_section:
                config.log_file = str(logging_section["file"]) if logging_section["file"] else None

        return config

    def _apply_server(self, data: dict[str, Any]) -> None:
        if data.get("server_url"):
            self.server_url = str(data["server_url"])
        if "timeout" in data:
            self.timeout = float(data["timeout"])
        if "max_retries" in data:
            max_retries = int(data["max_retries"])
            if max_retries < 1:
                raise ValueError(f"max_retries must be at least 1, got {max_retries}")
            self.max_retries = max_retries
        if "retry_delay" in data:
            self.retry_delay = float(data["retry_delay"])

    def _apply_batch(self, data: dict[str, Any]) -> None:
        if "workers" in data:
            self.workers = int(data["workers"])
        if "fail_fast" in data:
            self.fail_fast = bool(data["fail_fast"])

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            "server_url": self.server_url,
            "timeout": self.timeout,
            "max_retries": self.max_retries,
            "retry_delay": self.retry_delay,
            "workers": self.workers,
            "fail_fast": self.fail_fast,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .graphene-cli.yaml config file.

    Search order:
    1. Current directory / start_dir
    2. Parent directories up to filesystem root
    3. User home directory

    Returns:
        Path to config file if found, None otherwise
    """
    current = (start_dir or Path.cwd()).resolve()
    while True:
        for name in CONFIG_NAMES:
            candidate = current / name
            if candidate.exists():
                return candidate
        if current == current.parent:
            break
        current = current.parent

    home = Path.home()
    for name in CONFIG_NAMES:
        home_path = home / name
        if home_path.exists():
            return home_path

    return None


def apply_env(config: GrapheneConfig) -> GrapheneConfig:
    """Override config values from environment variables."""
    url = os.getenv("GRAPHENE_URL")
    if url:
        config.server_url = url

    timeout = os.getenv("GRAPHENE_TIMEOUT")
    if timeout:
        try:
            config.timeout = float(timeout)
        except ValueError:
            log.warning("Ignoring invalid GRAPHENE_TIMEOUT", value=timeout)

    return config


def load_config(config_path: Path | None = None, start_dir: Path | None = None) -> GrapheneConfig:
    """Load configuration from YAML file and environment.

    If config_path is not provided, searches for .graphene-cli.yaml in the
    current directory, parent directories, and user home.

    Returns:
        GrapheneConfig instance (defaults if no usable config is found)
    """
    path = config_path if config_path else find_config_file(start_dir)

    if not path or not path.exists():
        if config_path:
            log.warning("Config file not found", path=str(config_path))
        else:
            log.debug("No config file found, using defaults")
        return apply_env(GrapheneConfig())

    log.info("Loading config", path=str(path))

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        log.error("Failed to load config file", path=str(path), error=str(e))
        return apply_env(GrapheneConfig())

    if not data:
        log.warning("Config file is empty", path=str(path))
        return apply_env(GrapheneConfig())

    if not isinstance(data, dict):
        log.error("Config file must contain a mapping", path=str(path))
        return apply_env(GrapheneConfig())

    try:
        config = GrapheneConfig.from_dict(data)
    except (TypeError, ValueError) as e:
        log.error("Invalid value in config file", path=str(path), error=str(e))
        return apply_env(GrapheneConfig())

    log.debug(
        "Config loaded",
        server_url=config.server_url,
        workers=config.workers,
        fail_fast=config.fail_fast,
    )
    return apply_env(config)


def merge_config_with_args(config: GrapheneConfig, args: Any) -> GrapheneConfig:
    """Merge config file settings with CLI arguments.

    CLI arguments take precedence over config file settings.
    """
    if getattr(args, "server", None):
        config.server_url = args.server

    if getattr(args, "workers", None) is not None:
        config.workers = args.workers

    if getattr(args, "skip_failed", False):
        config.fail_fast = False

    if getattr(args, "log_level", None):
        config.log_level = args.log_level

    if getattr(args, "log_file", None):
        config.log_file = args.log_file

    return config
