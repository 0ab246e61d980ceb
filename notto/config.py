from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BASE_DIR = "~/.notto/notes"
DEFAULT_FILE_NAME_LENGTH = 25


@dataclass(frozen=True)
class Settings:
    base_dir: Path
    log_level: str = "WARNING"
    file_name_length: int = DEFAULT_FILE_NAME_LENGTH
    finder_max_workers: int | None = None

    def __post_init__(self) -> None:
        if self.file_name_length < 1:
            raise ValueError(f"file_name_length must be positive, got {self.file_name_length}")


def _optional_int(raw: str | None) -> int | None:
    if raw is None or not raw.strip():
        return None
    value = int(raw)
    return value if value > 0 else None


def load_settings() -> Settings:
    base_dir = Path(os.environ.get("NOTTO_BASE_DIR", DEFAULT_BASE_DIR)).expanduser().resolve()
    log_level = os.environ.get("NOTTO_LOG_LEVEL", "WARNING").upper()
    file_name_length = int(os.environ.get("NOTTO_FILE_NAME_LENGTH", str(DEFAULT_FILE_NAME_LENGTH)))
    finder_max_workers = _optional_int(os.environ.get("NOTTO_FINDER_MAX_WORKERS"))
    return Settings(
        base_dir=base_dir,
        log_level=log_level,
        file_name_length=file_name_length,
        finder_max_workers=finder_max_workers,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
