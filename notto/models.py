from __future__ import annotations

import datetime as dt
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator

from .parsing import extract_inline_tags, extract_title, normalize_tag, parse_frontmatter, render_frontmatter

logger = logging.getLogger("notto.models")

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M:%S"


def default_id() -> str:
    return uuid.uuid4().hex


def default_date() -> dt.date:
    return dt.datetime.now(dt.timezone.utc).date()


def default_time() -> dt.time:
    return dt.datetime.now(dt.timezone.utc).time().replace(microsecond=0)


class FrontMatter(BaseModel):
    """Metadata block at the top of a note file.

    Unknown keys (``tags``, ``aliases``, ...) are kept so a note survives a
    read/write cycle unchanged.
    """

    model_config = ConfigDict(extra="allow")

    id: str = Field(default_factory=default_id)
    title: str | None = None
    date: dt.date = Field(default_factory=default_date)
    time: dt.time = Field(default_factory=default_time)

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: Any) -> Any:
        return str(value) if isinstance(value, (int, uuid.UUID)) else value

    @field_validator("title", mode="before")
    @classmethod
    def coerce_title(cls, value: Any) -> Any:
        # Unquoted YAML titles such as 2021 or 2021-03-28 arrive as scalars.
        if isinstance(value, (bool, int, float, dt.date, dt.time)):
            return str(value)
        return value

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value: Any) -> Any:
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, str):
            return dt.datetime.strptime(value.strip(), DATE_FORMAT).date()
        return value

    @field_validator("time", mode="before")
    @classmethod
    def parse_time(cls, value: Any) -> Any:
        # YAML 1.1 reads an unquoted 17:08:13 as a base-60 integer.
        if isinstance(value, int) and not isinstance(value, bool):
            hours, rest = divmod(value, 3600)
            minutes, seconds = divmod(rest, 60)
            return dt.time(hours, minutes, seconds)
        if isinstance(value, str):
            return dt.datetime.strptime(value.strip(), TIME_FORMAT).time()
        return value

    @field_serializer("date")
    def dump_date(self, value: dt.date) -> str:
        return value.strftime(DATE_FORMAT)

    @field_serializer("time")
    def dump_time(self, value: dt.time) -> str:
        return value.strftime(TIME_FORMAT)


@dataclass
class Note:
    front_matter: FrontMatter = field(default_factory=FrontMatter)
    content: str = ""

    @classmethod
    def from_text(cls, text: str) -> Note:
        parsed = parse_frontmatter(text)
        return cls(front_matter=_validate_front_matter(parsed.frontmatter), content=parsed.body)

    def to_text(self) -> str:
        data = self.front_matter.model_dump(mode="json", exclude_none=True)
        return render_frontmatter(data, self.content)

    def title(self) -> str:
        title = self.front_matter.title
        if title and title.strip():
            return title.strip()
        return extract_title(self.content)

    def tags(self) -> list[str]:
        raw = (self.front_matter.model_extra or {}).get("tags")
        if isinstance(raw, str):
            values = [raw]
        elif isinstance(raw, list):
            values = [v for v in raw if isinstance(v, str)]
        else:
            values = []
        tags = {t for t in (normalize_tag(v) for v in values) if t}
        return sorted(tags.union(extract_inline_tags(self.content)))


def _validate_front_matter(data: dict[str, Any]) -> FrontMatter:
    """Validate front matter, replacing only the fields that fail with their defaults."""
    try:
        return FrontMatter.model_validate(data)
    except ValidationError as exc:
        bad = {err["loc"][0] for err in exc.errors() if err["loc"]}
    logger.debug("frontmatter_fields_dropped", extra={"fields": sorted(map(str, bad))})
    try:
        return FrontMatter.model_validate({k: v for k, v in data.items() if k not in bad})
    except ValidationError:
        return FrontMatter()
