from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .config import Settings
from .errors import FileError, NoteAlreadyExists, PathError
from .models import Note, default_id
from .paths import DIR_ROOT_NOTE_STEM, NotePath, check_segment
from .util import NOTE_EXTENSION, safe_filename_stem, strip_note_extension, unique_sibling, with_note_extension

DIR_ROOT_NOTE_NAME = f"{DIR_ROOT_NOTE_STEM}{NOTE_EXTENSION}"

logger = logging.getLogger("notto.writer")


@dataclass(frozen=True)
class NoteFile:
    name: str


@dataclass(frozen=True)
class NoteDirectory:
    name: str


NoteFileType = NoteFile | NoteDirectory


class NoteWriter:
    """Creates, locates and promotes notes below a single base directory.

    A logical note ``P`` lives either in ``P.md`` or in ``P/index.md``.
    Creating a child under a file note turns it into a directory note;
    there is no way back.
    """

    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.base_dir = settings.base_dir

    def full_path(self, path: NotePath) -> Path:
        return path.to_fs(self.base_dir)

    def probe(self, parent: NotePath, name: str) -> NoteFileType | None:
        stem = strip_note_extension(name)
        if not stem:
            return None
        parent_dir = self.full_path(parent)

        file_name = with_note_extension(stem)
        if (parent_dir / file_name).is_file():
            return NoteFile(file_name)

        note_dir = parent_dir / stem
        if note_dir.is_dir() and (note_dir / DIR_ROOT_NOTE_NAME).is_file():
            return NoteDirectory(stem)

        return None

    def as_directory(self, path: NotePath) -> NotePath:
        """Map a note path, possibly a file path handed out by ``save``, to its directory form."""
        segments = list(path.segments)
        if segments and segments[-1] == DIR_ROOT_NOTE_NAME:
            segments.pop()
        segments = [strip_note_extension(seg) for seg in segments]
        for seg in segments:
            check_segment(seg)
        return NotePath(tuple(segments))

    def ensure_dir(self, path: NotePath) -> NotePath:
        path = self.as_directory(path)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        for prefix in path.prefixes():
            fs_path = self.full_path(prefix)
            if fs_path.is_dir():
                continue
            if fs_path.exists():
                self._promote_file(fs_path, fs_path)
                continue
            note_file = fs_path.with_name(with_note_extension(fs_path.name))
            if note_file.is_file():
                self.promote(prefix)
                continue
            fs_path.mkdir()
            logger.debug("dir_create", extra={"path": str(prefix)})
        return path

    def promote(self, leaf: NotePath) -> NotePath:
        if leaf.is_root:
            raise PathError("path_empty")
        stem = strip_note_extension(leaf.name)
        target_dir = self.full_path(leaf.parent) / stem
        source = target_dir.with_name(with_note_extension(stem))
        self._promote_file(source, target_dir)
        return leaf.parent / stem / DIR_ROOT_NOTE_NAME

    def _promote_file(self, source: Path, target_dir: Path) -> None:
        if not source.exists():
            raise FileError(f"expected file {source} not found")
        if not source.is_file():
            raise FileError(f"expected {source} to be a file")
        if target_dir != source and target_dir.exists():
            # A pure container directory may already sit next to the note.
            if not target_dir.is_dir():
                raise FileError(f"expected {target_dir} to be a directory")
            if (target_dir / DIR_ROOT_NOTE_NAME).exists():
                raise FileError(f"{target_dir} already holds a root note")

        # Not crash-atomic: a failure after the first rename leaves the
        # hidden temporary file behind and the note missing.
        tmp_path = unique_sibling(source)
        source.rename(tmp_path)
        target_dir.mkdir(exist_ok=True)
        tmp_path.rename(target_dir / DIR_ROOT_NOTE_NAME)
        logger.info("note_promote", extra={"path": str(target_dir)})

    def save(self, note: Note, parent: NotePath, name: str, overwrite: bool = False) -> NotePath:
        stem = strip_note_extension(name)
        if not stem:
            raise PathError("invalid_note_name")
        try:
            check_segment(stem)
        except PathError as exc:
            raise PathError("invalid_note_name") from exc

        parent = self.ensure_dir(parent)

        existing = self.probe(parent, stem)
        if existing is None:
            target = parent / with_note_extension(stem)
        elif not overwrite:
            raise NoteAlreadyExists(name)
        elif isinstance(existing, NoteFile):
            target = parent / existing.name
        else:
            target = parent / existing.name / DIR_ROOT_NOTE_NAME

        self.full_path(target).write_text(note.to_text(), encoding="utf-8")
        logger.info("note_save", extra={"path": str(target), "overwrite": overwrite})
        return target

    def file_name_for(self, note: Note) -> str:
        length = self.settings.file_name_length
        stem = safe_filename_stem(note.title(), length)
        if not stem:
            stem = safe_filename_stem(note.front_matter.id, length)
        if not stem:
            stem = default_id()[:length]
        return with_note_extension(stem)

    def locate(self, path: NotePath) -> NotePath | None:
        if path.is_root:
            raise PathError("path_empty")
        parent = self.ensure_dir(path.parent)
        existing = self.probe(parent, path.name)
        if existing is None:
            return None
        if isinstance(existing, NoteFile):
            return parent / existing.name
        return parent / existing.name / DIR_ROOT_NOTE_NAME

    def create_or_locate(self, path: NotePath) -> NotePath:
        found = self.locate(path)
        if found is not None:
            return found
        return self.save(Note(), path.parent, path.name, overwrite=False)

    def read(self, path: NotePath) -> Note:
        if path.is_root:
            raise PathError("path_empty")
        parent = self.as_directory(path.parent)
        existing = self.probe(parent, path.name)
        if existing is None:
            raise FileNotFoundError(str(path))
        if isinstance(existing, NoteFile):
            fs_path = self.full_path(parent) / existing.name
        else:
            fs_path = self.full_path(parent) / existing.name / DIR_ROOT_NOTE_NAME
        return Note.from_text(fs_path.read_text(encoding="utf-8"))
