import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

DEFAULT_DB_PATH = "data/ojtech.db"
DEFAULT_LOG_DIR = "logs"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str = "INFO"
    log_dir: Path = Path(DEFAULT_LOG_DIR)
    log_to_file: bool = True
    max_workers: int = 4
    batch_size: int = 5
    job_limit: int = 100
    candidate_limit: int = 100


def load_env() -> None:
    """Load .env from project root if present."""
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path)


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value < 1:
        raise ValueError(f"{name} must be at least 1, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_log_level(name: str, default: str) -> str:
    level = (os.getenv(name) or default).strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"{name} must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    return level


def load_settings() -> Settings:
    """Read OJTECH_* settings from the environment."""
    return Settings(
        db_path=Path(os.getenv("OJTECH_DB_PATH") or DEFAULT_DB_PATH),
        log_level=_env_log_level("OJTECH_LOG_LEVEL", "INFO"),
        log_dir=Path(os.getenv("OJTECH_LOG_DIR") or DEFAULT_LOG_DIR),
        log_to_file=_env_bool("OJTECH_LOG_TO_FILE", True),
        max_workers=_env_int("OJTECH_MAX_WORKERS", 4),
        batch_size=_env_int("OJTECH_BATCH_SIZE", 5),
        job_limit=_env_int("OJTECH_JOB_LIMIT", 100),
        candidate_limit=_env_int("OJTECH_CANDIDATE_LIMIT", 100),
    )
