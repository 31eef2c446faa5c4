[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "silo"
version = "0.1.0"
description = "Read Engram observations and curated Obsidian Markdown notes, and build an identity profile from them."
requires-python = ">=3.10"
dependencies = []
keywords = ["markdown", "obsidian", "notes", "knowledge-management", "engram", "vault"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: Markdown",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["silo"]

[tool.hatch.build.targets.sdist]
include = ["silo", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
