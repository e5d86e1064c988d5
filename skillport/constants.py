"""Shared constants for skill generation."""

from __future__ import annotations

DEFAULT_SKILL_NAME = "gsd-codex"

SOURCE_HOST_ROOT = "~/.claude"
TARGET_HOST_ROOT = "~/.codex/skills"
WORKFLOW_DIR_NAME = "get-shit-done"

DOC_EXTENSION = ".md"

TEXT_EXTENSIONS = (
    ".md",
    ".js",
    ".json",
    ".yaml",
    ".yml",
    ".toml",
    ".txt",
    ".sh",
    ".bash",
)

# Manifest fallbacks when provenance cannot be determined.
LOCAL_REPO_SENTINEL = "local-repo"
DEFAULT_REF = "main"
NO_COMMIT_SENTINEL = "local-repo"

REFERENCES_DIR = "references"
INDEX_FILENAME = "INDEX.md"
SKILL_README_FILENAME = "SKILL.md"
MANIFEST_FILENAME = "upstream.json"
INTERFACE_DIR = "agents"
INTERFACE_FILENAME = "openai.yaml"
CONFIG_FILENAME = "skillport.yml"
