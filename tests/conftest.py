from __future__ import annotations

import pytest

from notto.browser import NoteBrowser
from notto.config import Settings
from notto.finder import Finder
from notto.writer import NoteWriter


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(base_dir=tmp_path)


@pytest.fixture()
def writer(settings: Settings) -> NoteWriter:
    return NoteWriter(settings)


@pytest.fixture()
def browser(settings: Settings) -> NoteBrowser:
    return NoteBrowser(settings)


@pytest.fixture()
def finder(settings: Settings) -> Finder:
    return Finder(settings)
