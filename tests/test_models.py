from __future__ import annotations

import datetime as dt

from notto.models import FrontMatter, Note

DEMO = """---
title: test note
date: 2021-03-28
time: 17:08:13
---
```
This is a demo note.
```
With more than one line
"""


def test_detects_front_matter() -> None:
    note = Note.from_text(DEMO)
    assert note.front_matter.title == "test note"
    assert note.front_matter.date == dt.date(2021, 3, 28)
    assert note.front_matter.time == dt.time(17, 8, 13)
    assert note.content == "```\nThis is a demo note.\n```\nWith more than one line\n"


def test_title_falls_back_to_content() -> None:
    note = Note.from_text("```\nThis is a demo note. With two sentences.\n```\n")
    assert note.front_matter.title is None
    assert note.title() == "This is a demo note"


def test_invalid_front_matter_gets_defaults() -> None:
    note = Note.from_text("---\ndate: not-a-date\n---\nBody\n")
    assert note.front_matter.title is None
    assert len(note.front_matter.id) == 32
    assert note.content == "Body\n"


def test_numeric_id_is_kept_as_text() -> None:
    note = Note.from_text("---\nid: 12345\n---\nBody\n")
    assert note.front_matter.id == "12345"


def test_to_text_round_trip_preserves_content_and_metadata() -> None:
    fm = FrontMatter(
        id="123e4567e89b12d3a456426614174000",
        title="test_note",
        date=dt.date(2021, 4, 7),
        time=dt.time(23, 8, 15),
    )
    note = Note(front_matter=fm, content="first line\n\n---\nafter a rule\n")
    text = note.to_text()
    assert text.startswith("---\nid: 123e4567e89b12d3a456426614174000\ntitle: test_note\n")

    again = Note.from_text(text)
    assert again.content == note.content
    assert again.front_matter.id == fm.id
    assert again.front_matter.title == "test_note"
    assert again.front_matter.date == dt.date(2021, 4, 7)
    assert again.front_matter.time == dt.time(23, 8, 15)


def test_extra_keys_survive_round_trip() -> None:
    note = Note.from_text("---\ntitle: x\ntags: [Work]\n---\nSee #home\n")
    assert note.tags() == ["home", "work"]
    assert Note.from_text(note.to_text()).tags() == ["home", "work"]


def test_default_note_has_fresh_metadata() -> None:
    a, b = Note(), Note()
    assert a.front_matter.id != b.front_matter.id
    assert a.front_matter.time.microsecond == 0
    assert a.title() == "untitled"


def test_scalar_title_is_kept_as_text() -> None:
    note = Note.from_text("---\nid: keep-me\ntitle: 2021\ntags: [a]\n---\nbody\n")
    assert note.front_matter.id == "keep-me"
    assert note.front_matter.title == "2021"
    assert note.tags() == ["a"]


def test_bad_field_only_resets_that_field() -> None:
    note = Note.from_text("---\nid: keep-me\ntitle: Plan\ndate: not-a-date\ntime: 17:08:13\naliases: [p]\n---\nbody\n")
    assert note.front_matter.id == "keep-me"
    assert note.front_matter.title == "Plan"
    assert note.front_matter.time == dt.time(17, 8, 13)
    assert isinstance(note.front_matter.date, dt.date)
    assert note.front_matter.model_extra == {"aliases": ["p"]}
