from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from functools import cmp_to_key
from pathlib import Path, PurePath

from .errors import PathError
from .util import strip_note_extension

PATH_SEPARATOR = "/"
DIR_ROOT_NOTE_STEM = "index"

_INTEGER_RE = re.compile(r"[+-]?\d+")


@dataclass(frozen=True, order=True)
class NotePath:
    """Logical, slash-separated note identifier.

    Independent of whether the note currently lives in ``name.md`` or in
    ``name/index.md``; the filesystem side is only reached through
    :meth:`to_fs` and :meth:`from_fs`.
    """

    segments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        for seg in self.segments:
            check_segment(seg)

    @classmethod
    def parse(cls, raw: str | NotePath) -> NotePath:
        if isinstance(raw, NotePath):
            return raw
        if "\x00" in raw:
            raise PathError("path_contains_nul")
        cleaned = raw.strip().replace("\\", PATH_SEPARATOR)
        return cls(tuple(seg for seg in cleaned.split(PATH_SEPARATOR) if seg))

    @classmethod
    def from_fs(cls, path: PurePath, base_dir: PurePath) -> NotePath:
        try:
            rel = path.relative_to(base_dir)
        except ValueError:
            rel = path
        parts = [p for p in rel.parts if p not in (rel.anchor, ".", "..")]
        return cls(tuple(parts))

    def to_fs(self, base_dir: Path) -> Path:
        return base_dir.joinpath(*self.segments)

    @property
    def is_root(self) -> bool:
        return not self.segments

    @property
    def name(self) -> str:
        return self.segments[-1] if self.segments else ""

    @property
    def parent(self) -> NotePath:
        return NotePath(self.segments[:-1])

    def child(self, other: str | NotePath) -> NotePath:
        return NotePath(self.segments + NotePath.parse(other).segments)

    def prefixes(self) -> list[NotePath]:
        return [NotePath(self.segments[: i + 1]) for i in range(len(self.segments))]

    def __truediv__(self, other: str | NotePath) -> NotePath:
        return self.child(other)

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(self.segments)


def check_segment(seg: str) -> None:
    if not seg:
        raise PathError("path_empty_segment")
    if seg in (".", ".."):
        raise PathError("path_traversal_not_allowed")
    if PATH_SEPARATOR in seg or "\\" in seg:
        raise PathError("path_separator_in_segment")
    if "\x00" in seg:
        raise PathError("path_contains_nul")


def journal_path(today: date, name: str | None = None) -> NotePath:
    note_name = DIR_ROOT_NOTE_STEM
    if name:
        last = NotePath.parse(name).name
        if last:
            note_name = strip_note_extension(last)
    return NotePath((str(today.year), str(today.month), str(today.day), note_name))


@dataclass(frozen=True)
class PathEntry:
    name: str
    path: NotePath
    is_dir: bool = False

    def full_path(self, base_dir: Path) -> Path:
        return self.path.to_fs(base_dir)

    def __str__(self) -> str:
        return f"[{self.name}]" if self.is_dir else self.name


def _as_int(text: str) -> int | None:
    return int(text) if _INTEGER_RE.fullmatch(text) else None


def compare_entries(a: PathEntry, b: PathEntry) -> int:
    if a.is_dir != b.is_dir:
        return -1 if a.is_dir else 1
    left, right = _as_int(a.name), _as_int(b.name)
    if left is not None and right is not None:
        return (left > right) - (left < right)
    return (a.name > b.name) - (a.name < b.name)


entry_sort_key = cmp_to_key(compare_entries)
