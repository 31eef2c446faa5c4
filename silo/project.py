"""Project selection and choice of the observations that feed an identity."""

from __future__ import annotations

from dataclasses import dataclass, field

from silo.config import DEFAULT_PROJECT, Config
from silo.curated import load_curated
from silo.engram import EngramClient, EngramError
from silo.models import Observation

ORIGIN_CURATED = "curated"
ORIGIN_ENGRAM = "raw/engram"


@dataclass
class IdentitySource:
    """Observations chosen to build an identity, and where they came from."""

    observations: list[Observation] = field(default_factory=list)
    origin: str = ""
    cli_label: str = ""


def resolve_project(flag_value: str, config_value: str) -> str:
    """Pick the project: the flag, then the config, then the default.

    Whitespace-only values count as empty; a non-empty value is returned
    exactly as given.
    """
    if flag_value.strip():
        return flag_value
    if config_value.strip():
        return config_value
    return DEFAULT_PROJECT


def plural(n: int) -> str:
    """``"s"`` unless ``n`` is one."""
    return "" if n == 1 else "s"


def load_identity_source(
    cfg: Config, client: EngramClient, project: str
) -> IdentitySource:
    """Curated notes when any are useful, otherwise the backend's observations."""
    curated = load_curated(cfg.vault_path, project)
    if curated:
        count = len(curated)
        return IdentitySource(
            observations=curated,
            origin=ORIGIN_CURATED,
            cli_label=f"source: curated ({count} note{plural(count)})",
        )

    try:
        observations = client.context(project)
    except EngramError as exc:
        raise EngramError(f"engram context: {exc}") from exc
    count = len(observations)
    return IdentitySource(
        observations=observations,
        origin=ORIGIN_ENGRAM,
        cli_label=f"source: raw/engram fallback ({count} observation{plural(count)})",
    )