"""Reader for the human-editable ``Curated/`` layer of the vault.

Notes that still hold only placeholders are skipped; notes with real human
prose become synthetic observations whose id is ``curated:<relpath>``.
This module never writes to the vault.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from silo.models import Observation

CURATED_ROOT = "Curated"
CURATED_SOURCE_PREFIX = "curated:"

_BULLET = re.compile(r"[-*+] ")
_NUMBERED = re.compile(r"[0-9]+\.")


@dataclass(frozen=True)
class ParsedNote:
    """A curated note reduced to its title, usable body and usefulness."""

    title: str
    content: str
    useful: bool


def _walk_files(root: str | os.PathLike[str]) -> Iterator[os.DirEntry[str]]:
    """Yield every non-directory entry below ``root``; errors propagate."""
    with os.scandir(root) as entries:
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                yield from _walk_files(entry.path)
            else:
                yield entry


def load_curated(vault_path: str, project: str) -> list[Observation]:
    """Return one observation per useful note under ``<vault>/Curated``.

    An absent ``Curated`` directory yields an empty list. README files are
    skipped. The result is sorted by id.
    """
    if not vault_path or not vault_path.strip():
        raise ValueError("vault path is empty")
    root = Path(vault_path) / CURATED_ROOT
    if not root.exists():
        return []
    if not root.is_dir():
        raise NotADirectoryError(f"curated root is not a directory: {root}")

    out: list[Observation] = []
    for entry in _walk_files(root):
        name = entry.name
        if not name.lower().endswith(".md"):
            continue
        if name.lower() == "readme.md":
            continue
        path = entry.path
        note = parse_note(Path(path).read_text(encoding="utf-8"))
        if not note.useful:
            continue
        try:
            rel = os.path.relpath(path, vault_path)
        except ValueError:
            rel = path
        rel = rel.replace(os.sep, "/")
        out.append(
            Observation(
                id=CURATED_SOURCE_PREFIX + rel,
                title=note.title,
                type="curated",
                content=note.content,
                project=project,
            )
        )

    out.sort(key=lambda o: o.id)
    return out


def parse_note(raw: str) -> ParsedNote:
    """Strip frontmatter and Related Observations, and judge the remaining prose."""
    body = strip_frontmatter(raw)
    title = first_h1(body)
    body = strip_related_observations(body)
    return ParsedNote(title=title, content=body.strip(), useful=has_useful_prose(body))


def strip_frontmatter(text: str) -> str:
    """Remove a leading ``---`` delimited frontmatter block, if any."""
    text = text.lstrip("\ufeff")
    if not (text.startswith("---\n") or text.startswith("---\r\n")):
        return text
    rest = text[4:]
    idx = rest.find("\n---")
    if idx < 0:
        return text
    after = rest[idx + 4 :]
    after = after.removeprefix("\r")
    return after.removeprefix("\n")


def first_h1(text: str) -> str:
    """Text of the first ``# Title`` line, or an empty string."""
    for line in text.split("\n"):
        stripped = line.strip()
        if stripped.startswith("# "):
            return stripped[2:].strip()
    return ""


def _is_related_heading(trimmed: str) -> bool:
    return trimmed.lower().startswith("## related observations")


def strip_related_observations(text: str) -> str:
    """Drop the ``## Related Observations`` section up to the next H1/H2."""
    out: list[str] = []
    in_section = False
    for line in text.split("\n"):
        trimmed = line.strip()
        if not in_section:
            if _is_related_heading(trimmed):
                in_section = True
                continue
            out.append(line)
            continue
        if trimmed.startswith("# ") or trimmed.startswith("## "):
            in_section = False
            out.append(line)
    return "\n".join(out)


def has_useful_prose(body: str) -> bool:
    """Whether any line is real prose rather than a heading, comment or TODO."""
    for line in body.split("\n"):
        stripped = line.strip()
        if not stripped:
            continue
        if stripped.startswith("#") or stripped.startswith("<!--"):
            continue
        if is_todo_line(stripped):
            continue
        unbulleted = strip_bullet_prefix(stripped)
        if not unbulleted or is_todo_line(unbulleted):
            continue
        return True
    return False


def is_todo_line(line: str) -> bool:
    """Whether the line is only a TODO placeholder."""
    low = line.strip().lower()
    if low in ("todo", "todo."):
        return True
    if low.startswith("todo"):
        rest = low[4:].strip()
        if not rest:
            return True
        return rest[0] in ":.-"
    return False


def strip_bullet_prefix(line: str) -> str:
    """Remove a leading ``- ``, ``* ``, ``+ `` or ``N.`` list marker."""
    if _BULLET.match(line):
        return line[2:].strip()
    numbered = _NUMBERED.match(line)
    if numbered:
        return line[numbered.end() :].strip()
    return line