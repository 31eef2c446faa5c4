"""Argument handling and inbox layout for the ``save`` capture command."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

INBOX_OPEN = "Inbox/open"
INBOX_ARCHIVE = "Inbox/archive"

ALLOWED_SOURCE_TYPES = ("article", "video", "course", "book", "paper", "link")
DEFAULT_SOURCE_TYPE = "link"

SAVE_USAGE = (
    'Usage: silo save <text> [--why "..."] [--source "https://..."] '
    "[--source-type article|video|course|book|paper|link] [--project <name>]"
)

INBOX_README = """---
type: inbox-index
generated_by: silo
---

# Inbox

This is the **Seed Inbox** — where Silo drops AI-generated synthesis
proposals for you to triage.

## Layout

- `open/` — fresh seeds waiting for your attention.
- `archive/` — seeds you are done thinking about.

## How to triage

Open a seed in Obsidian. State lives in the frontmatter:

```yaml
status: open | deferred | discarded | approved
```

To defer or discard, edit the field. To get a seed out of the active
list once you are done with it, move the file to `archive/`.

**Promotion to `Curated/` is a human act.** Silo never moves
seeds into Curated automatically. If a seed deserves to become part of
your curated knowledge, copy what matters into a Curated note by hand.

## Why so manual?

Memory is sacred. Synthesis is cheap. Identity is earned. The seed
inbox is the editorial gate between AI proposals and your knowledge.
"""

_VALUE_FLAGS = {
    "--why": "why",
    "--project": "project",
    "--source": "source_url",
    "--source-type": "source_type",
}

_MISSING = object()


@dataclass
class SaveArgs:
    """Parsed ``save`` arguments."""

    why: str = ""
    project: str = ""
    source_url: str = ""
    source_type: str = ""
    positional: list[str] = field(default_factory=list)

    @property
    def text(self) -> str:
        """The captured text: positional words joined by spaces."""
        return " ".join(self.positional)


def normalize_source_args(source_url: str, source_type: str) -> tuple[str, str]:
    """Trim and validate the source pair; a bare URL defaults to ``link``."""
    source_url = source_url.strip()
    source_type = source_type.strip()
    if not source_url:
        if source_type:
            raise ValueError("--source-type requires --source")
        return "", ""
    if not source_type:
        return source_url, DEFAULT_SOURCE_TYPE
    if source_type not in ALLOWED_SOURCE_TYPES:
        raise ValueError(
            f"invalid source-type {source_type!r} (allowed: {', '.join(ALLOWED_SOURCE_TYPES)})"
        )
    return source_url, source_type


def parse_save_args(args: list[str]) -> SaveArgs:
    """Parse flags anywhere among the words; ``--`` ends flag parsing.

    Both ``--key value`` and ``--key=value`` are accepted. Unknown long
    flags are rejected so a typo never ends up in the captured text.
    """
    values = {name: "" for name in _VALUE_FLAGS.values()}
    positional: list[str] = []
    words = iter(args)
    for word in words:
        if word in _VALUE_FLAGS:
            value = next(words, _MISSING)
            if value is _MISSING:
                raise ValueError(f"{word} requires a value")
            values[_VALUE_FLAGS[word]] = value
            continue
        key, sep, value = word.partition("=")
        if sep and key in _VALUE_FLAGS:
            values[_VALUE_FLAGS[key]] = value
        elif word == "--":
            positional.extend(words)
        elif word.startswith("--"):
            raise ValueError(f"unknown flag: {word}")
        else:
            positional.append(word)

    source_url, source_type = normalize_source_args(
        values["source_url"], values["source_type"]
    )
    return SaveArgs(
        why=values["why"],
        project=values["project"],
        source_url=source_url,
        source_type=source_type,
        positional=positional,
    )


def ensure_inbox_layout(vault_path: str | os.PathLike[str] | None) -> None:
    """Create ``Inbox/open`` and ``Inbox/archive`` under the vault."""
    if vault_path is None:
        raise ValueError("vault is nil")
    if not str(vault_path).strip():
        raise ValueError("vault path is empty")
    root = Path(vault_path)
    for subdir in (INBOX_OPEN, INBOX_ARCHIVE):
        try:
            root.joinpath(*subdir.split("/")).mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OSError(f"create {subdir}: {exc}") from exc