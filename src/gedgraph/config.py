"""Runtime settings and logging setup."""

from dataclasses import dataclass
import logging
import os

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class Settings:
    log_level: str = "INFO"
    generations: int = 3  # default traversal depth for CLI queries
    encoding: str = "utf-8-sig"


def load_settings(env_file: str | None = None) -> Settings:
    """
    Load settings from the environment, after reading a .env file if present.

    Recognized variables: GEDGRAPH_LOG_LEVEL, GEDGRAPH_GENERATIONS, GEDGRAPH_ENCODING.
    """
    load_dotenv(env_file)

    generations_raw = os.getenv("GEDGRAPH_GENERATIONS", "3")
    try:
        generations = int(generations_raw)
    except ValueError:
        raise ValueError(f"GEDGRAPH_GENERATIONS must be an integer, got {generations_raw!r}") from None
    if generations < 0:
        raise ValueError(f"GEDGRAPH_GENERATIONS must not be negative, got {generations}")

    return Settings(
        log_level=os.getenv("GEDGRAPH_LOG_LEVEL", "INFO").upper(),
        generations=generations,
        encoding=os.getenv("GEDGRAPH_ENCODING", "utf-8-sig"),
    )


def configure_logging(level: str = "INFO"):
    """Configure root logging with the standard gedgraph format."""
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
