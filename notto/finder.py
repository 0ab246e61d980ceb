"""Parallel full-tree note search.

The directory walk is synchronous; every leaf file found is read, parsed and
tested on its own worker. Matches are put on a queue as they are found and a
single :class:`FindFinish` closes the stream once every worker is done.
"""

from __future__ import annotations

import datetime as dt
import enum
import logging
import threading
from collections.abc import Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from queue import Queue

from .config import Settings
from .models import Note
from .paths import NotePath

logger = logging.getLogger("notto.finder")


class TimeFind(enum.Enum):
    BEFORE = "before"
    AFTER = "after"
    AT = "at"


@dataclass(frozen=True)
class TextCondition:
    text: str

    def matches(self, note: Note) -> bool:
        return self.text.casefold() in note.content.casefold()


@dataclass(frozen=True)
class TagCondition:
    tag: str

    def matches(self, note: Note) -> bool:
        # TODO: compare against Note.tags() once tag matching semantics are settled.
        logger.debug("condition_unimplemented", extra={"condition": "tag"})
        return False


@dataclass(frozen=True)
class DateCondition:
    when: TimeFind
    date: dt.date

    def matches(self, note: Note) -> bool:
        logger.debug("condition_unimplemented", extra={"condition": "date"})
        return False


@dataclass(frozen=True)
class TimeCondition:
    when: TimeFind
    time: dt.time

    def matches(self, note: Note) -> bool:
        logger.debug("condition_unimplemented", extra={"condition": "time"})
        return False


FindCondition = TextCondition | TagCondition | DateCondition | TimeCondition


def matches(note: Note, conditions: Sequence[FindCondition]) -> bool:
    return all(cond.matches(note) for cond in conditions)


@dataclass(frozen=True)
class FindResult:
    note: Note
    path: Path
    note_path: NotePath


@dataclass(frozen=True)
class FindFinish:
    pass


FindMessage = FindResult | FindFinish


class WaitGroup:
    """Counter of outstanding workers; :meth:`wait` blocks until it is zero."""

    def __init__(self) -> None:
        self._count = 0
        self._cond = threading.Condition()

    def add(self, n: int = 1) -> None:
        with self._cond:
            self._count += n

    def done(self) -> None:
        with self._cond:
            if self._count <= 0:
                raise ValueError("WaitGroup counter is already zero")
            self._count -= 1
            if self._count == 0:
                self._cond.notify_all()

    def wait(self, timeout: float | None = None) -> bool:
        with self._cond:
            return self._cond.wait_for(lambda: self._count == 0, timeout=timeout)


class Finder:
    def __init__(self, settings: Settings) -> None:
        self.base_dir = settings.base_dir
        self.max_workers = settings.finder_max_workers

    def find(
        self,
        root: NotePath,
        conditions: Sequence[FindCondition],
        channel: Queue[FindMessage] | None = None,
    ) -> Queue[FindMessage]:
        channel = channel if channel is not None else Queue()
        conditions = tuple(conditions)

        leaves = self._walk(root.to_fs(self.base_dir))
        wg = WaitGroup()
        wg.add(len(leaves))

        if self.max_workers:
            with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="notto-find") as pool:
                for leaf in leaves:
                    pool.submit(self._check_leaf, leaf, conditions, channel, wg)
                wg.wait()
        else:
            for leaf in leaves:
                worker = threading.Thread(
                    target=self._check_leaf,
                    args=(leaf, conditions, channel, wg),
                    name="notto-find-leaf",
                    daemon=True,
                )
                worker.start()
            wg.wait()

        channel.put(FindFinish())
        logger.debug("find_finish", extra={"path": str(root), "leaves": len(leaves)})
        return channel

    def iter_find(self, root: NotePath, conditions: Sequence[FindCondition]) -> Iterator[FindResult]:
        """Yield matches while the search is still running."""
        channel: Queue[FindMessage] = Queue()
        errors: list[Exception] = []

        def produce() -> None:
            try:
                self.find(root, conditions, channel)
            except Exception as exc:
                errors.append(exc)
                channel.put(FindFinish())

        threading.Thread(target=produce, name="notto-find", daemon=True).start()
        while True:
            message = channel.get()
            if isinstance(message, FindFinish):
                break
            yield message
        if errors:
            raise errors[0]

    def _walk(self, directory: Path) -> list[Path]:
        leaves: list[Path] = []
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                try:
                    leaves.extend(self._walk(entry))
                except OSError as exc:
                    logger.error("find_dir_error", extra={"path": str(entry), "error": str(exc)})
            else:
                leaves.append(entry)
        return leaves

    def _check_leaf(
        self,
        path: Path,
        conditions: tuple[FindCondition, ...],
        channel: Queue[FindMessage],
        wg: WaitGroup,
    ) -> None:
        try:
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as exc:
                logger.warning("find_leaf_unreadable", extra={"path": str(path), "error": str(exc)})
                return
            note = Note.from_text(text)
            if matches(note, conditions):
                channel.put(FindResult(note=note, path=path, note_path=NotePath.from_fs(path, self.base_dir)))
        finally:
            wg.done()
