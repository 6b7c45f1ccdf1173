"""
Knowledge base package.

Module structure:
- base.py: KnowledgeEntry schema, KnowledgeBase lookup table and loaders
"""

from stackscan.services.knowledge.base import (
    DEFAULT_ENTRY,
    ConfidenceTier,
    KnowledgeBase,
    KnowledgeEntry,
    load_default_knowledge_base,
    load_knowledge_base,
)

__all__ = [
    "ConfidenceTier",
    "DEFAULT_ENTRY",
    "KnowledgeBase",
    "KnowledgeEntry",
    "load_default_knowledge_base",
    "load_knowledge_base",
]
