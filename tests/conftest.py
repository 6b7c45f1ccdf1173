"""Root conftest: shared fixtures for stackscan tests.

Provides:
- project: an isolated project root (own .git marker) under tmp_path
- scan_settings: default settings, no .env loading
- knowledge_base: the packaged table, loaded once per session
- synthetic_kb: a tiny table for injection tests
"""

from __future__ import annotations

from pathlib import Path

import pytest

from stackscan.config import Settings
from stackscan.services.knowledge import KnowledgeBase, load_default_knowledge_base

SYNTHETIC_TABLE = {
    "version": "test",
    "entries": {
        "stack.lock": {
            "frameworks": ["Acme"],
            "slot_mappings": {"framework": "Acme", "build_tool": "acme"},
            "priority": 40,
            "confidence_tier": "high",
        },
        "notes.txt": {
            "frameworks": ["Acme", "Notes"],
            "slot_mappings": {"framework": "Notes", "docs": "plain"},
            "priority": 10,
            "confidence_tier": "low",
        },
        "*.acme": {
            "frameworks": ["Acme Script"],
            "slot_mappings": {},
            "priority": 5,
            "confidence_tier": "low",
        },
    },
}


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Project root holding its own .git, so the upward walk stays inside it."""
    root = tmp_path / "project"
    (root / ".git").mkdir(parents=True)
    return root


@pytest.fixture
def scan_settings() -> Settings:
    """Default settings, isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture(scope="session")
def knowledge_base() -> KnowledgeBase:
    """The packaged knowledge base table."""
    return load_default_knowledge_base()


@pytest.fixture
def synthetic_kb() -> KnowledgeBase:
    """A three-entry table unrelated to the packaged one."""
    return KnowledgeBase.from_mapping(SYNTHETIC_TABLE)
