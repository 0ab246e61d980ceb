from __future__ import annotations

import logging

from .config import Settings
from .models import Note
from .paths import NotePath, PathEntry, entry_sort_key

HIDDEN_PREFIX = "."

logger = logging.getLogger("notto.browser")


class NoteBrowser:
    def __init__(self, settings: Settings) -> None:
        self.base_dir = settings.base_dir

    def list(self, path: NotePath) -> list[PathEntry]:
        """List the visible children of ``path``, directories first."""
        entries: list[PathEntry] = []
        for child in path.to_fs(self.base_dir).iterdir():
            if child.name.startswith(HIDDEN_PREFIX):
                continue
            note_path = NotePath.from_fs(child, self.base_dir)
            if child.is_dir():
                entries.append(PathEntry(name=child.name, path=note_path, is_dir=True))
                continue
            try:
                note = Note.from_text(child.read_text(encoding="utf-8"))
            except (OSError, UnicodeDecodeError):
                logger.debug("entry_unreadable", extra={"path": str(note_path)})
                continue
            entries.append(PathEntry(name=f"{note.title()} [{child.name}]", path=note_path, is_dir=False))

        entries.sort(key=entry_sort_key)
        return entries
