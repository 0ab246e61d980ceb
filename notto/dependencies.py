from functools import lru_cache

from notto.browser import NoteBrowser
from notto.config import load_settings
from notto.finder import Finder
from notto.writer import NoteWriter

@lru_cache()
def get_settings():
    return load_settings()

@lru_cache()
def get_writer():
    return NoteWriter(get_settings())

@lru_cache()
def get_browser():
    return NoteBrowser(get_settings())

@lru_cache()
def get_finder():
    return Finder(get_settings())


def clear_caches() -> None:
    for accessor in (get_settings, get_writer, get_browser, get_finder):
        accessor.cache_clear()
