"""Configuration management for MP3 Tag Reader."""

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

DEFAULT_CHUNK_SIZE = 8192
DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

logger = logging.getLogger(__name__)


def eprint(*args, **kwargs):
    """Print to stderr."""
    print(*args, file=sys.stderr, **kwargs)


def load_config(env_file: Optional[str] = None) -> dict:
    """
    Load configuration from .env file and the process environment.

    Args:
        env_file: Path to .env file. Defaults to .env in current directory.

    Returns:
        Dictionary of configuration values.
    """
    if env_file is None:
        env_file = ".env"

    env_path = Path(env_file)
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)
        logger.debug("Loaded environment from %s", env_path.resolve())

    return {
        "chunk_size": os.getenv("MP3TAG_CHUNK_SIZE", str(DEFAULT_CHUNK_SIZE)),
        "log_level": os.getenv("MP3TAG_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        "no_color": bool(os.getenv("MP3TAG_NO_COLOR") or os.getenv("NO_COLOR")),
    }


def validate_config(config: dict) -> List[str]:
    """
    Validate configuration and return list of problems.

    Converts chunk_size to an int in place when it is valid.

    Args:
        config: Configuration dictionary from load_config()

    Returns:
        List of problem descriptions (empty if configuration is usable).
    """
    problems = []

    try:
        chunk_size = int(config.get("chunk_size", DEFAULT_CHUNK_SIZE))
    except (TypeError, ValueError):
        problems.append(f"MP3TAG_CHUNK_SIZE is not a number: {config.get('chunk_size')!r}")
    else:
        if chunk_size <= 0:
            problems.append(f"MP3TAG_CHUNK_SIZE must be positive, got {chunk_size}")
        else:
            config["chunk_size"] = chunk_size

    if config.get("log_level") not in LOG_LEVELS:
        problems.append(
            f"MP3TAG_LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, "
            f"got {config.get('log_level')!r}"
        )

    return problems


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Configure console logging on stderr."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )
