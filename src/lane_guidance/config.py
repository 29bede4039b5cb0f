"""Runtime settings read from the environment (and an optional .env file)."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from src.logging_config import LOG_DIR

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = LOG_DIR
DEFAULT_TITLE = "Lane Guidance"


@dataclass(frozen=True)
class Settings:
    """Settings shared by the CLI and logging setup."""

    log_level: int
    log_dir: Path
    title: str


def load_settings() -> Settings:
    """
    Build Settings from environment variables.

    Variables:
        LANE_GUIDANCE_LOG_LEVEL: Console log level name (default: INFO)
        LANE_GUIDANCE_LOG_DIR: Directory for rotating log files (default: logs/)
        LANE_GUIDANCE_TITLE: Default figure title

    Raises:
        ValueError: If LANE_GUIDANCE_LOG_LEVEL is not a known level name
    """
    load_dotenv()

    level_name = os.getenv("LANE_GUIDANCE_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level in LANE_GUIDANCE_LOG_LEVEL: {level_name}")

    log_dir = Path(os.getenv("LANE_GUIDANCE_LOG_DIR", str(DEFAULT_LOG_DIR)))
    title = os.getenv("LANE_GUIDANCE_TITLE", DEFAULT_TITLE)

    return Settings(log_level=level, log_dir=log_dir, title=title)
