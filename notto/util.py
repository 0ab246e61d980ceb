from __future__ import annotations

import re
import uuid
from pathlib import Path

NOTE_EXTENSION = ".md"

# Characters the note file grammar refuses: whitespace, punctuation,
# path separators, quotes and shell wildcards.
_FORBIDDEN_RE = re.compile(r"[\s:.,;!/\\<>\"'|?*^]+")


def strip_note_extension(name: str) -> str:
    return name.removesuffix(NOTE_EXTENSION)


def with_note_extension(name: str) -> str:
    return name if name.endswith(NOTE_EXTENSION) else f"{name}{NOTE_EXTENSION}"


def safe_filename_stem(title: str, max_length: int) -> str:
    cleaned = _FORBIDDEN_RE.sub("", title).strip()
    return cleaned[:max_length]


def unique_sibling(path: Path) -> Path:
    """Return a hidden, collision-free name next to ``path``."""
    while True:
        candidate = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        if not candidate.exists():
            return candidate
