from __future__ import annotations

import re
from dataclasses import dataclass

import yaml

DEFAULT_TITLE = "untitled"
FRONTMATTER_DELIMITER = "---"

_SENTENCE_SEPARATORS = ".!?("
_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s*")
_BLOCK_MARKER_RE = re.compile(r"^\s*(?:>\s*|[-*+]\s+|\d+[.)]\s+)+")
_INLINE_MARKUP_RE = re.compile(r"[`*_~]+")


@dataclass(frozen=True)
class FrontmatterParse:
    frontmatter: dict
    body: str
    error: str | None


def parse_frontmatter(markdown: str) -> FrontmatterParse:
    first_newline = markdown.find("\n")
    if first_newline == -1:
        return FrontmatterParse(frontmatter={}, body=markdown, error=None)

    first_line = markdown[:first_newline].rstrip("\r")
    if first_line.strip() != FRONTMATTER_DELIMITER:
        return FrontmatterParse(frontmatter={}, body=markdown, error=None)

    search_from = first_newline + 1
    while search_from <= len(markdown):
        next_newline = markdown.find("\n", search_from)
        line_end = len(markdown) if next_newline == -1 else next_newline
        line = markdown[search_from:line_end].rstrip("\r")
        if line.strip() == FRONTMATTER_DELIMITER:
            yaml_block = markdown[first_newline + 1 : search_from]
            body = "" if next_newline == -1 else markdown[next_newline + 1 :]
            try:
                parsed = yaml.safe_load(yaml_block) or {}
            except yaml.YAMLError:
                return FrontmatterParse(frontmatter={}, body=body, error="frontmatter_yaml_error")
            if not isinstance(parsed, dict):
                return FrontmatterParse(frontmatter={}, body=body, error="frontmatter_not_mapping")
            return FrontmatterParse(frontmatter=parsed, body=body, error=None)
        if next_newline == -1:
            break
        search_from = next_newline + 1

    # Unclosed block: everything is content.
    return FrontmatterParse(frontmatter={}, body=markdown, error=None)


def render_frontmatter(frontmatter: dict, body: str) -> str:
    yaml_text = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
    return f"{FRONTMATTER_DELIMITER}\n{yaml_text}{FRONTMATTER_DELIMITER}\n{body}"


def plain_text(line: str) -> str:
    text = _HEADING_RE.sub("", line)
    text = _BLOCK_MARKER_RE.sub("", text)
    text = _LINK_RE.sub(r"\1", text)
    return _INLINE_MARKUP_RE.sub("", text)


def first_sentence(text: str) -> str:
    start = 0
    while start < len(text) and text[start] in _SENTENCE_SEPARATORS:
        start += 1
    rest = text[start:]
    for idx, ch in enumerate(rest):
        if ch in _SENTENCE_SEPARATORS:
            return rest[:idx].strip()
    return rest.strip()


def extract_title(content: str) -> str:
    for line in content.splitlines():
        sentence = first_sentence(plain_text(line))
        if sentence:
            return sentence
    return DEFAULT_TITLE


def normalize_tag(tag: str) -> str:
    return tag.strip().lstrip("#").strip().lower()


def extract_inline_tags(body: str) -> list[str]:
    tags: set[str] = set()
    in_fence = False
    for line in body.splitlines():
        if line.lstrip().startswith("```"):
            in_fence = not in_fence
            continue
        if in_fence:
            continue
        for match in re.finditer(r"(?:^|(?<=\s))#([\w/-]+)", re.sub(r"`[^`]*`", "", line)):
            tag = normalize_tag(match.group(1))
            if tag:
                tags.add(tag)
    return sorted(tags)
