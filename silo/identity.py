"""Identity profile built from observations with simple keyword heuristics."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from silo.config import Config
from silo.models import Observation

CV_PROMPT = """You are helping generate a concise CV from an Identity profile.
Use the provided skills, projects, and evidence. Keep it factual and avoid embellishment.
Return Markdown."""

LINKEDIN_PROMPT = """You are helping generate a LinkedIn "About" section from an Identity profile.
Tone: confident, practical, technically credible. Avoid buzzwords.
Return plain text."""

PROFESSIONAL_BIO_PROMPT = """You are helping generate a professional bio from an Identity profile.
Keep it short, specific, and backed by evidence when possible.
Return Markdown."""

DEFAULT_NAME = "Nicolas Peralta"
DEFAULT_ROLE = "Software Architect"

_CURATED_PREFIX = "curated:"

DEFAULT_GOALS = (
    "Keep Engram as the source of truth",
    "Generate readable, editable Markdown notes for Obsidian",
    "Maintain a minimal, dependency-free Go codebase",
)


@dataclass(frozen=True)
class Project:
    """A project the identity is involved in."""

    name: str
    description: str
    status: str


@dataclass(frozen=True)
class Evidence:
    """A pointer to the observation that backs the identity."""

    source: str
    summary: str


@dataclass
class Outputs:
    """Which generated outputs are enabled."""

    identity_profile: bool = False
    cv: bool = False
    linkedin: bool = False
    portfolio: bool = False
    professional_bio: bool = False


def default_outputs() -> Outputs:
    """Every output enabled."""
    return Outputs(
        identity_profile=True,
        cv=True,
        linkedin=True,
        portfolio=True,
        professional_bio=True,
    )


@dataclass
class Identity:
    """A person's professional profile."""

    name: str = ""
    role: str = ""
    areas: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)
    goals: list[str] = field(default_factory=list)
    evidence: list[Evidence] = field(default_factory=list)
    outputs: Outputs = field(default_factory=Outputs)


_OBSIDIAN = Project(
    "Obsidian", "Knowledge workspace used as the human interface.", "external"
)
_ENGRAM = Project("Engram", "Persistent memory store and source of truth.", "active")
_SILO = Project(
    "Silo", "Bridge that projects Engram knowledge into Markdown for Obsidian.", "active"
)


def _evidence_source(obs_id: str) -> str:
    if obs_id.startswith(_CURATED_PREFIX):
        return "Curated " + obs_id.removeprefix(_CURATED_PREFIX)
    return "Engram " + obs_id


def build_identity(
    observations: Iterable[Observation], cfg: Config | None
) -> Identity:
    """Derive an identity from observation titles and contents."""
    ident = Identity(name=DEFAULT_NAME, role=DEFAULT_ROLE, outputs=default_outputs())
    if cfg is not None and cfg.identity_name.strip():
        ident.name = cfg.identity_name.strip()

    skills: set[str] = set()
    areas: set[str] = set()
    interests: set[str] = set()
    projects: dict[str, Project] = {}

    for obs in observations:
        ident.evidence.append(Evidence(_evidence_source(obs.id), obs.title))

        text = (obs.title + "\n" + obs.content).lower()
        if "go" in text:
            skills.add("Go")
        if "swiftui" in text:
            skills.add("SwiftUI")
        if "architecture" in text or "architect" in text:
            skills.add("Architecture")
        if "developer tooling" in text:
            areas.add("Developer Tooling")
        if "knowledge" in text:
            areas.add("Knowledge Management")
        if "local" in text:
            interests.add("Local-first software")
        if "obsidian" in text:
            projects["Obsidian"] = _OBSIDIAN
        if "engram" in text:
            projects["Engram"] = _ENGRAM
        if "silo" in text:
            projects["Silo"] = _SILO

    if not projects:
        projects["Silo"] = _SILO

    ident.skills = sorted(skills)
    ident.areas = sorted(areas)
    ident.interests = sorted(interests)
    ident.projects = [projects[name] for name in sorted(projects)]
    ident.goals = list(DEFAULT_GOALS)
    return ident