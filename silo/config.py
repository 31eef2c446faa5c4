"""Loading and saving of the ``silo.config.json`` settings file."""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

DEFAULT_CONFIG_PATH = "./silo.config.json"

#: Seconds allowed for one synthesis call when the config sets none.
DEFAULT_LLM_TIMEOUT = 5.0

#: Fallback project used when neither a flag nor the config names one.
DEFAULT_PROJECT = "silo2"

# Fields written only when they carry a value.
_OMIT_EMPTY = {
    "engram_endpoint",
    "engram_api_key",
    "identity_name",
    "llm_provider",
    "llm_model",
    "llm_api_key",
    "llm_timeout_seconds",
    "project",
}


class ConfigError(ValueError):
    """Raised when the configuration is missing required values or is malformed."""


@dataclass
class Config:
    """Settings read from ``silo.config.json``."""

    vault_path: str = "./vault"
    engram_endpoint: str = ""
    engram_api_key: str = ""
    identity_name: str = ""
    llm_provider: str = ""
    llm_model: str = ""
    llm_api_key: str = ""
    llm_timeout_seconds: int = 0
    project: str = ""

    def synthesis_timeout(self) -> float:
        """Seconds allowed for synthesis; the default when unset or not positive."""
        if self.llm_timeout_seconds <= 0:
            return DEFAULT_LLM_TIMEOUT
        return float(self.llm_timeout_seconds)

    def to_dict(self) -> dict:
        """JSON-ready mapping, leaving out optional fields that are empty."""
        out = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _OMIT_EMPTY and not value:
                continue
            out[f.name] = value
        return out


def config_path() -> str:
    """Path of the configuration file, relative to the working directory."""
    return DEFAULT_CONFIG_PATH


def config_exists() -> bool:
    """Whether the configuration file is present."""
    return Path(config_path()).exists()


def default_config() -> Config:
    """A fresh configuration with default values."""
    return Config()


def _apply(cfg: Config, data: object) -> None:
    if data is None:
        return
    if not isinstance(data, dict):
        raise ConfigError("config must be a JSON object")
    for f in fields(cfg):
        if f.name not in data or data[f.name] is None:
            continue
        value = data[f.name]
        if f.name == "llm_timeout_seconds":
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(f"{f.name} must be an integer")
        elif not isinstance(value, str):
            raise ConfigError(f"{f.name} must be a string")
        setattr(cfg, f.name, value)


def load_config() -> Config:
    """Read the configuration file; a missing file yields the defaults."""
    try:
        raw = Path(config_path()).read_text(encoding="utf-8")
    except FileNotFoundError:
        return default_config()

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"invalid config JSON: {exc}") from exc

    cfg = default_config()
    _apply(cfg, data)
    if not cfg.vault_path:
        raise ConfigError("vault_path must not be empty")
    return cfg


def save_config(cfg: Config | None) -> None:
    """Write ``cfg`` to the configuration file as indented JSON."""
    if cfg is None:
        raise ConfigError("config is nil")
    if not cfg.vault_path:
        raise ConfigError("vault_path must not be empty")
    text = json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False) + "\n"
    Path(config_path()).write_text(text, encoding="utf-8")