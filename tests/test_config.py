from __future__ import annotations

from pathlib import Path

import pytest

from notto import dependencies
from notto.config import DEFAULT_FILE_NAME_LENGTH, Settings, configure_logging, load_settings


@pytest.fixture(autouse=True)
def clear_caches():
    dependencies.clear_caches()
    yield
    dependencies.clear_caches()


def test_load_settings_from_environment(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("NOTTO_BASE_DIR", str(tmp_path / "notes"))
    monkeypatch.setenv("NOTTO_LOG_LEVEL", "debug")
    monkeypatch.setenv("NOTTO_FILE_NAME_LENGTH", "12")
    monkeypatch.setenv("NOTTO_FINDER_MAX_WORKERS", "4")

    settings = load_settings()

    assert settings == Settings(
        base_dir=(tmp_path / "notes").resolve(),
        log_level="DEBUG",
        file_name_length=12,
        finder_max_workers=4,
    )


def test_load_settings_defaults(monkeypatch) -> None:
    monkeypatch.delenv("NOTTO_BASE_DIR", raising=False)
    monkeypatch.delenv("NOTTO_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NOTTO_FILE_NAME_LENGTH", raising=False)
    monkeypatch.setenv("NOTTO_FINDER_MAX_WORKERS", "0")

    settings = load_settings()

    assert settings.base_dir == (Path.home() / ".notto" / "notes").resolve()
    assert settings.log_level == "WARNING"
    assert settings.file_name_length == DEFAULT_FILE_NAME_LENGTH
    assert settings.finder_max_workers is None


def test_components_share_cached_settings(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("NOTTO_BASE_DIR", str(tmp_path))

    writer = dependencies.get_writer()

    assert dependencies.get_writer() is writer
    assert writer.base_dir == tmp_path.resolve()
    assert dependencies.get_browser().base_dir == tmp_path.resolve()
    assert dependencies.get_finder().base_dir == tmp_path.resolve()


def test_configure_logging_uses_settings_level(tmp_path: Path, monkeypatch) -> None:
    calls: list[dict] = []
    monkeypatch.setattr("notto.config.logging.basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging(Settings(base_dir=tmp_path, log_level="DEBUG"))

    assert calls and calls[0]["level"] == "DEBUG"


@pytest.mark.parametrize("raw", ["0", "-3"])
def test_load_settings_rejects_non_positive_file_name_length(tmp_path: Path, monkeypatch, raw: str) -> None:
    monkeypatch.setenv("NOTTO_BASE_DIR", str(tmp_path))
    monkeypatch.setenv("NOTTO_FILE_NAME_LENGTH", raw)

    with pytest.raises(ValueError):
        load_settings()


def test_settings_rejects_non_positive_file_name_length(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        Settings(base_dir=tmp_path, file_name_length=-1)
