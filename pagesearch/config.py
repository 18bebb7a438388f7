"""
Runtime settings: defaults, environment overrides, logging setup.
"""

import argparse
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

from .errors import ConfigurationError

DEFAULT_CORPUS_DIR = Path("pdfs")
DEFAULT_STOP_WORDS = Path("stop-ru.txt")
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8989
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_TOP_K = 10

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

ENV_PREFIX = "PAGESEARCH_"


@dataclass
class Settings:
    corpus_dir: Path = field(default_factory=lambda: DEFAULT_CORPUS_DIR)
    stop_words: Path = field(default_factory=lambda: DEFAULT_STOP_WORDS)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from PAGESEARCH_* environment variables, falling back
        to defaults for anything unset.
        """
        env = os.environ if environ is None else environ
        settings = cls()
        if env.get(ENV_PREFIX + "CORPUS_DIR"):
            settings.corpus_dir = Path(env[ENV_PREFIX + "CORPUS_DIR"])
        if env.get(ENV_PREFIX + "STOP_WORDS"):
            settings.stop_words = Path(env[ENV_PREFIX + "STOP_WORDS"])
        if env.get(ENV_PREFIX + "HOST"):
            settings.host = env[ENV_PREFIX + "HOST"]
        if env.get(ENV_PREFIX + "PORT"):
            settings.port = parse_port(env[ENV_PREFIX + "PORT"])
        if env.get(ENV_PREFIX + "LOG_LEVEL"):
            settings.log_level = parse_log_level(env[ENV_PREFIX + "LOG_LEVEL"])
        return settings


def parse_port(value: str) -> int:
    try:
        port = int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid port: {value!r}") from None
    if not 0 <= port <= 65535:
        raise ConfigurationError(f"Port out of range: {port}")
    return port


def parse_log_level(value: str) -> str:
    level = value.strip().upper()
    if level not in LOG_LEVELS:
        raise ConfigurationError(f"Unknown log level: {value!r}")
    return level


def port_arg(value: str) -> int:
    """argparse type for --port."""
    try:
        return parse_port(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def log_level_arg(value: str) -> str:
    """argparse type for --log-level."""
    try:
        return parse_log_level(value)
    except ConfigurationError as e:
        raise argparse.ArgumentTypeError(str(e)) from None


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Send log records from all pagesearch modules to stderr."""
    level = parse_log_level(level)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root = logging.getLogger("pagesearch")
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)
