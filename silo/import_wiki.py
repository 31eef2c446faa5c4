"""Argument handling and file discovery for importing a legacy wiki folder.

A legacy wiki is a tree of Markdown notes. Only ``*.md`` files are taken;
README files are skipped unless asked for. Titles come from a leading
``# Heading`` when present, otherwise from the file name.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass, field

IMPORT_WIKI_USAGE = (
    "Usage: silo import-wiki <path> [--limit N] [--include-readme] "
    "[--dry-run] [--project <name>]"
)

UNTITLED = "Untitled"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_MISSING = object()


@dataclass
class ImportWikiArgs:
    """Parsed ``import-wiki`` arguments. A ``limit`` of 0 means no limit."""

    limit: int = 0
    include_readme: bool = False
    dry_run: bool = False
    project: str = ""
    positional: list[str] = field(default_factory=list)


def parse_non_negative_int(text: str) -> int:
    """Parse a decimal integer that must not be negative."""
    if not text.strip():
        raise ValueError("empty")
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    value = int(text)
    if value < 0:
        raise ValueError("must be >= 0")
    return value


def _parse_limit(value: str) -> int:
    try:
        return parse_non_negative_int(value)
    except ValueError as exc:
        raise ValueError(f'invalid --limit "{value}": {exc}') from exc


def parse_import_wiki_args(args: list[str]) -> ImportWikiArgs:
    """Parse flags placed anywhere around the path; ``--`` ends flag parsing.

    Accepted: ``--limit N``, ``--limit=N``, ``--include-readme``,
    ``--dry-run``, ``--project NAME`` and ``--project=NAME``.
    """
    parsed = ImportWikiArgs()
    words = iter(args)
    for word in words:
        if word == "--limit":
            value = next(words, _MISSING)
            if value is _MISSING:
                raise ValueError("--limit requires a value")
            parsed.limit = _parse_limit(value)
        elif word.startswith("--limit="):
            parsed.limit = _parse_limit(word.removeprefix("--limit="))
        elif word == "--include-readme":
            parsed.include_readme = True
        elif word == "--dry-run":
            parsed.dry_run = True
        elif word == "--project":
            value = next(words, _MISSING)
            if value is _MISSING:
                raise ValueError("--project requires a value")
            parsed.project = value
        elif word.startswith("--project="):
            parsed.project = word.removeprefix("--project=")
        elif word == "--":
            parsed.positional.extend(words)
        elif word.startswith("--"):
            raise ValueError(f"unknown flag: {word}")
        else:
            parsed.positional.append(word)
    return parsed


def _walk_files(root: str | os.PathLike[str]) -> Iterator[os.DirEntry[str]]:
    """Yield every non-directory entry below ``root``; errors propagate."""
    with os.scandir(root) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk_files(entry.path)
            else:
                yield entry


def collect_markdown_files(
    root: str | os.PathLike[str], include_readme: bool
) -> tuple[list[str], int]:
    """Markdown files under ``root`` in sorted order, and how many were skipped.

    Files without a ``.md`` extension count as skipped, as do README files
    (any case) unless ``include_readme`` is set.
    """
    paths: list[str] = []
    skipped = 0
    for entry in _walk_files(root):
        name = entry.name
        if not name.lower().endswith(".md"):
            skipped += 1
            continue
        if not include_readme and name.lower() == "readme.md":
            skipped += 1
            continue
        paths.append(entry.path)
    paths.sort()
    return paths, skipped


def first_h1(markdown: str) -> str:
    """The leading ``# Title`` heading, or ``""``.

    Blank lines are passed over; the first non-blank line that is not an
    H1 ends the search.
    """
    for line in markdown.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("# "):
            return stripped.removeprefix("# ").strip()
        break
    return ""


def _strip_extension(filename: str) -> str:
    for index in range(len(filename) - 1, -1, -1):
        char = filename[index]
        if char in ("/", os.sep):
            break
        if char == ".":
            return filename[:index]
    return filename


def title_from_markdown_or_filename(markdown: str, filename: str) -> str:
    """The leading H1, else the file name without extension, else ``Untitled``."""
    heading = first_h1(markdown)
    if heading:
        return heading
    base = _strip_extension(filename)
    if not base.strip():
        return UNTITLED
    return base