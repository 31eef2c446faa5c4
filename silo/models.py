"""Core value types shared across the package."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Observation:
    """One memory record.

    ``why`` is capture context given by the human; it is kept apart from
    ``content`` and never merged into it. ``created_at`` is ``None`` when
    the record carries no timestamp.
    """

    id: str = ""
    title: str = ""
    type: str = ""
    content: str = ""
    project: str = ""
    topic_key: str = ""
    why: str = ""
    created_at: datetime | None = None

    def to_dict(self) -> dict:
        """JSON-ready mapping; empty ``topic_key`` and ``why`` are left out."""
        out = {
            "id": self.id,
            "title": self.title,
            "type": self.type,
            "content": self.content,
            "project": self.project,
        }
        if self.topic_key:
            out["topic_key"] = self.topic_key
        if self.why:
            out["why"] = self.why
        out["created_at"] = (
            self.created_at.isoformat() if self.created_at is not None else None
        )
        return out

    @classmethod
    def from_dict(cls, data: dict) -> Observation:
        """Build an observation from a mapping produced by :meth:`to_dict`."""
        created = data.get("created_at")
        created_at = None
        if isinstance(created, str) and created.strip():
            text = created.strip()
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            created_at = datetime.fromisoformat(text)
        elif isinstance(created, datetime):
            created_at = created
        return cls(
            id=str(data.get("id", "") or ""),
            title=data.get("title", "") or "",
            type=data.get("type", "") or "",
            content=data.get("content", "") or "",
            project=data.get("project", "") or "",
            topic_key=data.get("topic_key", "") or "",
            why=data.get("why", "") or "",
            created_at=created_at,
        )


@dataclass(frozen=True)
class IdentitySignal:
    """A signal extracted from observations."""

    kind: str
    value: str
    source: str