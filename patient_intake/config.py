import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_data_dir

APP_NAME = "patient-intake"
APP_AUTHOR = "medcare"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_log_level(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip().upper()
    level = logging.getLevelName(raw) if raw else default
    if isinstance(level, int):
        return level
    return default


def _resolve_data_dir() -> Path:
    env_dir = os.getenv("PATIENT_INTAKE_DATA_DIR")
    if env_dir:
        return Path(env_dir)
    return Path(user_data_dir(APP_NAME, APP_AUTHOR))


@dataclass(frozen=True)
class Settings:
    data_dir: Path = field(default_factory=_resolve_data_dir)
    log_level: int = field(default_factory=lambda: _env_log_level("PATIENT_INTAKE_LOG_LEVEL", logging.INFO))
    strict_secondary_phone: bool = field(
        default_factory=lambda: _env_bool("PATIENT_INTAKE_STRICT_SECONDARY_PHONE", False)
    )

    @property
    def log_dir(self) -> Path:
        return self.data_dir / "logs"


def load_settings() -> Settings:
    return Settings()
