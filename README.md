# silo

`silo` is a library for working with knowledge held in an Engram memory
store and in the human-edited `Curated/` layer of an Obsidian vault. It
reads and saves observations, picks out curated notes that hold real
human prose, and builds an identity profile from either source.

Its guiding rules:

- **Memory is sacred.** Observations are only ever appended; the reason
  a note was captured (`why`) is kept apart from its content.
- **Identity is earned.** Notes under `Curated/` that hold real human
  prose take precedence over raw Engram data.

## Installation

Install the package with pip from a checkout of this project. It has no
runtime dependencies beyond the standard library; the `test` extra adds
pytest.

## Configuration

`silo.config` reads and writes `./silo.config.json` in the working
directory. A missing file gives the defaults: vault at `./vault`, no
Engram endpoint, and a 5-second synthesis timeout. A malformed file or
an empty `vault_path` raises `ConfigError`.

```python
from silo.config import default_config, load_config, save_config

cfg = load_config()
print(cfg.synthesis_timeout())   # 5.0 unless llm_timeout_seconds is set

save_config(default_config())
```

`save_config` writes indented JSON and leaves out optional fields that
are empty.

## Memory backends

`silo.engram.EngramClient` is the backend contract: `search(query)`,
`context(project)` and `save(observation)`.

- `silo.engram.MockClient` holds a fixed set of sample observations in
  memory. `save` stores a copy under a generated `obs-mock-N` id
  (ignoring any id the observation carries) and stamps a creation time
  when none is set.
- `silo.http_client.HTTPClient` talks to a running Engram server:
  `search` uses `GET /search`, `context` reads the `observations` of
  `GET /export`, and `save` upserts a `silo-save-<project>` session with
  `POST /sessions` before `POST /observations`. An empty title is
  derived from the first line of the content (`wire_title`). Failed
  requests raise `EngramError` with the status and body snippet.
- `silo.http_client.new_client(cfg)` returns a `MockClient` when no
  endpoint is configured and an `HTTPClient` otherwise.

`SaveUnsupportedError`, a subclass of `EngramError`, is the error a
backend raises when it cannot store observations.

```python
from silo.engram import MockClient

client = MockClient()
observations = client.context("silo2")
matches = client.search("silo")
```

## Curated notes and identity

```python
from silo.curated import load_curated, parse_note
from silo.identity import build_identity
from silo.project import load_identity_source, resolve_project

project = resolve_project("", cfg.project)
source = load_identity_source(cfg, client, project)
print(source.cli_label)
identity = build_identity(source.observations, cfg)
```

`load_curated` walks `Curated/**/*.md`, skips README files and notes
that hold only headings, comments and TODO placeholders, drops the
`## Related Observations` section, and returns one observation per
useful note with an id of the form `curated:<relative path>`, sorted by
id. A vault without `Curated/` gives an empty list.

`load_identity_source` uses the curated notes when any are useful
(`origin == "curated"`) and otherwise the backend's observations for the
project (`origin == "raw/engram"`).

`build_identity` derives skills, areas, interests and projects from
keywords in observation titles and contents, and records one evidence
entry per observation.

`resolve_project` picks the project name: an explicit value first, then
the configured one, then the default `silo2`. Whitespace-only values
count as empty.

## Capture and import helpers

- `silo.save.parse_save_args` parses capture arguments (`--why`,
  `--project`, `--source`, `--source-type`) anywhere in the list, in
  `--key value` or `--key=value` form, with `--` ending flag parsing.
  Unknown flags raise `ValueError`. Source types are limited to
  `article`, `video`, `course`, `book`, `paper` and `link`; a source
  with no type defaults to `link`.
- `silo.save.ensure_inbox_layout` creates `Inbox/open` and
  `Inbox/archive` under a vault; `silo.save.INBOX_README` holds the text
  of an inbox index note.
- `silo.import_wiki.parse_import_wiki_args` parses `--limit`,
  `--include-readme`, `--dry-run` and `--project`.
- `silo.import_wiki.collect_markdown_files` gathers the Markdown files
  under a folder in sorted order and counts the files it skipped
  (non-Markdown files, and READMEs unless asked for).
- `silo.import_wiki.title_from_markdown_or_filename` takes a note's
  leading `# Title`, else its file name without extension, else
  `Untitled`.

## What this package does not do

- It has no command-line program; every feature is a Python function.
- It does not render or write Markdown notes: no observation notes,
  curated note seeds, seeds for `Inbox/open/`, or CV / LinkedIn / bio
  outputs. The capture and import helpers only parse arguments, prepare
  the inbox folders and find files.
- It has no AI synthesis step.

## Running the tests

Install with the `test` extra and run `pytest` from the project root.