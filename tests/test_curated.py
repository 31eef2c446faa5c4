import pytest

from silo.curated import (
    first_h1,
    has_useful_prose,
    is_todo_line,
    load_curated,
    parse_note,
    strip_bullet_prefix,
    strip_frontmatter,
    strip_related_observations,
)

PRISTINE_SEED = """---
type: curated
generated_by: silo
source: engram
topic_key: architecture/silo-design
---

# Silo Design

## Summary

TODO: Write human-curated summary.

## Related Observations

- [[Raw/Observations/silo-design]]

## Notes

TODO.
"""


def _write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_parse_note_pristine_seed_not_useful():
    note = parse_note(PRISTINE_SEED)
    assert note.useful is False
    assert note.title == "Silo Design"


def test_parse_note_human_prose_is_useful():
    note = parse_note(
        """---
type: curated
---

# Engram HTTP API

## Summary

Silo talks to Engram via /export?project=. Key gotcha: GET /observations
returns 405 because /observations is POST-only.

## Related Observations

- [[Raw/Observations/x]]
- [[Raw/Observations/y]]

## Notes

TODO.
"""
    )
    assert note.useful is True
    assert "Silo talks to Engram" in note.content
    assert "Raw/Observations/x" not in note.content


def test_parse_note_only_related_links_not_useful():
    note = parse_note(
        """---
type: curated
---

# X

## Summary

TODO.

## Related Observations

- [[Raw/Observations/a]]
- [[Raw/Observations/b]]
- [[Raw/Observations/c]]

## Notes

TODO.
"""
    )
    assert note.useful is False


def test_parse_note_bullet_list_is_useful():
    note = parse_note(
        """---
type: curated
---

# Career highlights

## Notes

- shipped Engram MCP integration
- led migration to YOLO detector
"""
    )
    assert note.useful is True


@pytest.mark.parametrize(
    "text",
    [
        "# X\n\nTODO",
        "# X\n\nTODO.",
        "# X\n\nTODO:",
        "# X\n\nTODO: write me",
        "# X\n\ntodo - flesh out",
        "# X\n\n- TODO: bullet placeholder",
    ],
)
def test_parse_note_todo_variants_not_useful(text):
    assert parse_note(text).useful is False


def test_strip_frontmatter():
    assert strip_frontmatter("---\ntype: x\n---\nbody") == "body"
    assert strip_frontmatter("# H\nbody") == "# H\nbody"


def test_strip_frontmatter_tolerates_bom():
    assert strip_frontmatter("\ufeff---\ntype: x\n---\nbody") == "body"


def test_strip_frontmatter_unclosed_is_unchanged():
    assert strip_frontmatter("---\ntype: x\nbody") == "---\ntype: x\nbody"


def test_first_h1():
    assert first_h1("intro\n  # Title here  \n# Other") == "Title here"
    assert first_h1("## Only h2") == ""


def test_strip_related_observations_stops_at_next_heading():
    text = "# T\n## Related Observations\n- a\n- b\n## Notes\nkept"
    assert strip_related_observations(text) == "# T\n## Notes\nkept"


def test_has_useful_prose_ignores_comments_and_headings():
    assert has_useful_prose("# H\n<!-- note -->\n\n## Sub") is False
    assert has_useful_prose("# H\n1. real step") is True


def test_is_todo_line():
    assert is_todo_line("TODO") is True
    assert is_todo_line("todo - flesh this out") is True
    assert is_todo_line("todos are fine") is False
    assert is_todo_line("write something") is False


def test_strip_bullet_prefix():
    assert strip_bullet_prefix("- item") == "item"
    assert strip_bullet_prefix("* item") == "item"
    assert strip_bullet_prefix("12. step") == "step"
    assert strip_bullet_prefix("plain") == "plain"


def test_load_curated_missing_dir_returns_empty(tmp_path):
    assert load_curated(str(tmp_path), "silo2") == []


def test_load_curated_empty_vault_path_raises():
    with pytest.raises(ValueError):
        load_curated("  ", "silo2")


def test_load_curated_only_pristine_seeds_returns_empty(tmp_path):
    _write(
        tmp_path / "Curated/Architecture/silo-design.md",
        """---
type: curated
---

# Silo Design

## Summary

TODO: Write human-curated summary.

## Notes

TODO.
""",
    )
    assert load_curated(str(tmp_path), "silo2") == []


def test_load_curated_skips_readme(tmp_path):
    _write(
        tmp_path / "Curated/Career/README.md",
        """---
type: curated-index
---

# Career

This folder holds notes. Plenty of human-readable text here.
""",
    )
    assert load_curated(str(tmp_path), "silo2") == []


def test_load_curated_human_content_produces_synthetic_observation(tmp_path):
    _write(
        tmp_path / "Curated/Identity/profile.md",
        """---
type: curated
---

# Profile

## Summary

Nicolas is a Go architect focused on Engram and Obsidian tooling.

## Related Observations

- [[Raw/Observations/x]]
""",
    )
    obs = load_curated(str(tmp_path), "silo2")
    assert len(obs) == 1
    o = obs[0]
    assert o.id == "curated:Curated/Identity/profile.md"
    assert o.type == "curated"
    assert o.project == "silo2"
    assert o.title == "Profile"
    assert "Nicolas is a Go architect" in o.content
    assert o.created_at is None


def test_load_curated_deterministic_order(tmp_path):
    for name in ["b.md", "a.md", "c.md"]:
        _write(
            tmp_path / "Curated/Architecture" / name,
            f"---\ntype: curated\n---\n\n# {name}\n\n## Summary\n\nreal text here\n",
        )
    first = load_curated(str(tmp_path), "silo2")
    second = load_curated(str(tmp_path), "silo2")
    assert len(first) == 3
    assert [o.id for o in first] == [o.id for o in second]
    assert [o.id for o in first] == sorted(o.id for o in first)


def test_load_curated_root_is_file_raises(tmp_path):
    (tmp_path / "Curated").write_text("x")
    with pytest.raises(NotADirectoryError):
        load_curated(str(tmp_path), "silo2")