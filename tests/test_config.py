import json

import pytest

from silo.config import (
    DEFAULT_LLM_TIMEOUT,
    DEFAULT_PROJECT,
    Config,
    ConfigError,
    config_exists,
    config_path,
    default_config,
    load_config,
    save_config,
)


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_default_llm_timeout_zero():
    cfg = default_config()
    assert cfg.llm_timeout_seconds == 0
    assert cfg.synthesis_timeout() == DEFAULT_LLM_TIMEOUT
    assert DEFAULT_LLM_TIMEOUT == 5.0


@pytest.mark.parametrize(
    "seconds, expected",
    [(0, 5.0), (-1, 5.0), (30, 30.0), (1, 1.0)],
)
def test_synthesis_timeout_from_config(seconds, expected):
    assert Config(llm_timeout_seconds=seconds).synthesis_timeout() == expected


def test_default_project_round_trips_as_silo2(workdir):
    cfg = default_config()
    assert cfg.project == ""
    cfg.project = DEFAULT_PROJECT
    save_config(cfg)
    assert load_config().project == "silo2"


def test_default_vault_path():
    assert default_config().vault_path == "./vault"


def test_load_defaults_keep_llm_fields_optional(workdir):
    got = load_config()
    assert got.llm_provider == ""
    assert got.llm_model == ""
    assert got.llm_api_key == ""


def test_load_reads_optional_llm_fields(workdir):
    (workdir / config_path()).write_text(
        json.dumps(
            {
                "llm_provider": "openai",
                "llm_model": "gpt-4.1-mini",
                "llm_api_key": "placeholder",
            }
        )
    )
    got = load_config()
    assert got.llm_provider == "openai"
    assert got.llm_model == "gpt-4.1-mini"
    assert got.llm_api_key == "placeholder"
    assert got.vault_path == "./vault"


def test_save_persists_optional_llm_fields(workdir):
    cfg = default_config()
    cfg.llm_provider = "openai"
    cfg.llm_model = "gpt-4.1-mini"
    cfg.llm_api_key = "placeholder"
    save_config(cfg)

    got = load_config()
    assert got.llm_provider == cfg.llm_provider
    assert got.llm_model == cfg.llm_model
    assert got.llm_api_key == cfg.llm_api_key


def test_load_round_trip_includes_timeout(workdir):
    cfg = default_config()
    cfg.llm_timeout_seconds = 30
    save_config(cfg)

    got = load_config()
    assert got.llm_timeout_seconds == 30
    assert got.synthesis_timeout() == 30.0


def test_load_omits_timeout_when_absent(workdir):
    (workdir / config_path()).write_text(
        '{\n "vault_path": "./vault",\n "llm_provider": "openai"\n}'
    )
    got = load_config()
    assert got.llm_timeout_seconds == 0
    assert got.synthesis_timeout() == 5.0


def test_save_omits_empty_optional_fields(workdir):
    save_config(default_config())
    data = json.loads((workdir / config_path()).read_text())
    assert data == {"vault_path": "./vault"}


def test_config_exists_after_save(workdir):
    assert config_exists() is False
    save_config(default_config())
    assert config_exists() is True


def test_load_rejects_empty_vault_path(workdir):
    (workdir / config_path()).write_text('{"vault_path": ""}')
    with pytest.raises(ConfigError):
        load_config()


def test_load_rejects_invalid_json(workdir):
    (workdir / config_path()).write_text("not json")
    with pytest.raises(ConfigError):
        load_config()


def test_load_rejects_wrong_field_type(workdir):
    (workdir / config_path()).write_text('{"llm_timeout_seconds": "thirty"}')
    with pytest.raises(ConfigError):
        load_config()


def test_save_rejects_empty_vault_path(workdir):
    with pytest.raises(ConfigError):
        save_config(Config(vault_path=""))
    assert config_exists() is False


def test_save_rejects_none(workdir):
    with pytest.raises(ConfigError):
        save_config(None)