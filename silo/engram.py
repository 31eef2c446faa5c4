"""Memory backend contract and the in-process mock backend."""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timezone

from silo.models import Observation


class EngramError(Exception):
    """Raised when a memory backend call fails."""


class SaveUnsupportedError(EngramError):
    """Raised by backends that cannot persist observations."""

    def __init__(self, message: str = "engram backend does not support Save") -> None:
        super().__init__(message)


class EngramClient(ABC):
    """Contract every memory backend implements."""

    @abstractmethod
    def search(self, query: str) -> list[Observation]:
        """Observations matching ``query``."""

    @abstractmethod
    def context(self, project: str) -> list[Observation]:
        """Every observation of ``project``."""

    @abstractmethod
    def save(self, observation: Observation) -> str:
        """Persist ``observation`` and return the id the backend assigned."""


def _utc(year: int, month: int, day: int, hour: int, minute: int) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def _seed_observations() -> list[Observation]:
    return [
        Observation(
            id="obs-001",
            title="Silo: Engram is the source of truth",
            type="architecture",
            content="Silo projects knowledge from Engram into Markdown notes for Obsidian. Silo must not create another memory store.",
            project="silo2",
            topic_key="architecture/silo-source-of-truth",
            created_at=_utc(2026, 5, 16, 14, 10),
        ),
        Observation(
            id="obs-002",
            title="Identity: Nicolas Peralta profile seed",
            type="identity",
            content="Nicolas Peralta is a software architect focused on developer tooling and knowledge management. Primary language: Go. Also ships SwiftUI macOS/iOS apps.",
            project="silo2",
            created_at=_utc(2026, 5, 16, 14, 15),
        ),
        Observation(
            id="obs-003",
            title="Project: Engram integration plan",
            type="decision",
            content="Start with a mock Engram client and keep an HTTP client stub. Avoid third-party dependencies in MVP.",
            project="silo2",
            created_at=_utc(2026, 5, 16, 14, 20),
        ),
        Observation(
            id="obs-004",
            title="Skills snapshot",
            type="learning",
            content="Skills: Go, architecture, clean design, SwiftUI. Interests: local-first tools, knowledge graphs, developer experience.",
            project="silo2",
            created_at=_utc(2026, 5, 16, 14, 25),
        ),
        # Empty title: filenames must fall back to the id.
        Observation(
            id="obs-005",
            title="",
            type="note",
            content="Untitled thought captured on the fly.",
            project="silo2",
            created_at=_utc(2026, 5, 16, 14, 30),
        ),
        # Punctuation in the title: slugs must sanitize.
        Observation(
            id="obs-006",
            title="Engram & Silo: notes / drafts!",
            type="note",
            content="Punctuation soup. The slug should be safe.",
            project="silo2",
            created_at=_utc(2026, 5, 16, 14, 35),
        ),
        # obs-007 and obs-008 collide after slugging and share a topic key.
        Observation(
            id="obs-007",
            title="Silo Design",
            type="decision",
            content="First design draft for Silo.",
            project="silo2",
            topic_key="architecture/silo-design",
            created_at=_utc(2026, 5, 16, 14, 40),
        ),
        Observation(
            id="obs-008",
            title="  SILO   design  ",
            type="decision",
            content="Same topic, different casing/spacing. Forces collision resolution and topic_key grouping in curated layer.",
            project="silo2",
            topic_key="architecture/silo-design",
            created_at=_utc(2026, 5, 16, 14, 45),
        ),
    ]


class MockClient(EngramClient):
    """Offline backend holding a fixed set of observations in memory.

    ``save`` appends with a generated ``obs-mock-N`` id; it is safe to call
    from several threads.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._observations = _seed_observations()
        self._save_count = 0

    @property
    def observations(self) -> list[Observation]:
        """A copy of every stored observation, in insertion order."""
        with self._lock:
            return [replace(o) for o in self._observations]

    def search(self, query: str) -> list[Observation]:
        q = query.strip().lower()
        with self._lock:
            return [
                replace(o)
                for o in self._observations
                if not q or q in o.title.lower() or q in o.content.lower()
            ]

    def context(self, project: str) -> list[Observation]:
        p = project.strip().lower()
        with self._lock:
            return [
                replace(o)
                for o in self._observations
                if not p or o.project.lower() == p
            ]

    def save(self, observation: Observation) -> str:
        """Store a copy of ``observation``; any id it carries is replaced."""
        with self._lock:
            self._save_count += 1
            stored = replace(observation, id=f"obs-mock-{self._save_count}")
            if stored.created_at is None:
                stored.created_at = datetime.now(timezone.utc)
            self._observations.append(stored)
            return stored.id