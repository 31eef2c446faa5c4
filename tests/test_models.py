from datetime import datetime, timezone

from silo.models import IdentitySignal, Observation


def test_observation_defaults_are_empty():
    obs = Observation()
    assert obs.id == ""
    assert obs.why == ""
    assert obs.topic_key == ""
    assert obs.created_at is None


def test_to_dict_omits_empty_optional_fields():
    data = Observation(id="obs-001", title="t", content="c").to_dict()
    assert "topic_key" not in data
    assert "why" not in data
    assert data["created_at"] is None
    assert data["id"] == "obs-001"


def test_to_dict_keeps_why_separate_from_content():
    obs = Observation(content="raw content here", why="I keep forgetting this approach.")
    data = obs.to_dict()
    assert data["content"] == "raw content here"
    assert data["why"] == "I keep forgetting this approach."


def test_round_trip_preserves_all_fields():
    obs = Observation(
        id="obs-007",
        title="Silo Design",
        type="decision",
        content="First design draft for Silo.",
        project="silo2",
        topic_key="architecture/silo-design",
        why="reason",
        created_at=datetime(2026, 5, 16, 14, 40, tzinfo=timezone.utc),
    )
    assert Observation.from_dict(obs.to_dict()) == obs


def test_from_dict_accepts_trailing_z():
    obs = Observation.from_dict({"id": "x", "created_at": "2026-05-16T14:10:00Z"})
    assert obs.created_at == datetime(2026, 5, 16, 14, 10, tzinfo=timezone.utc)


def test_from_dict_missing_fields_use_defaults():
    obs = Observation.from_dict({"title": "only title"})
    assert obs == Observation(title="only title")


def test_identity_signal_equality():
    a = IdentitySignal(kind="skill", value="Go", source="obs-004")
    b = IdentitySignal(kind="skill", value="Go", source="obs-004")
    assert a == b
    assert a.value == "Go"