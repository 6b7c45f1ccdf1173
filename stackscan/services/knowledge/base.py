"""
Knowledge base for format detection.

Maps filenames, relative paths and extension keys (``*.py``) to the
frameworks a file indicates, the context slots it can fill, a priority
weight and a confidence tier. The table is external data: swapping it
changes detection behavior without touching engine code.
"""

import json
import logging
from collections.abc import Iterator, Mapping
from enum import Enum
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stackscan.core.exceptions import KnowledgeBaseError

logger = logging.getLogger(__name__)

DEFAULT_TABLE_RESOURCE = "knowledge_base.json"

# Weight at or above which a format counts as high value
HIGH_VALUE_PRIORITY = 30


class ConfidenceTier(str, Enum):
    """How much a format says about the stack on its own."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    ULTRA_HIGH = "ultra-high"


class KnowledgeEntry(BaseModel):
    """Metadata for one known format."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    frameworks: tuple[str, ...] = Field(
        default=(), description="Frameworks the format indicates, e.g. ('Python',)"
    )
    slot_mappings: Mapping[str, str] = Field(
        default_factory=dict, description="Context slot -> value, e.g. {'main_language': 'Python'}"
    )
    priority: int = Field(ge=0, description="Weight contributed when the file is confirmed")
    confidence_tier: ConfidenceTier = Field(description="Confidence tier of the format")
    confirmation_hints: tuple[str, ...] = Field(
        default=(), description="Companion filenames that usually sit next to this one"
    )


# Used for document-extension files the table doesn't name
DEFAULT_ENTRY = KnowledgeEntry(priority=10, confidence_tier=ConfidenceTier.LOW)


class KnowledgeBase:
    """
    Read-only lookup table of known formats.

    Built once and shared across scans; nothing in stackscan mutates it.
    """

    def __init__(self, entries: Mapping[str, KnowledgeEntry], version: str | None = None) -> None:
        self._entries: Mapping[str, KnowledgeEntry] = MappingProxyType(dict(entries))
        self.version = version
        self._path_keys = tuple(key for key in self._entries if "/" in key)

    # ─────────────────────────────────────────────────────────────
    # Construction
    # ─────────────────────────────────────────────────────────────

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "KnowledgeBase":
        """
        Build a knowledge base from a parsed table.

        Accepts either ``{"version": ..., "entries": {...}}`` or a bare
        ``{key: entry}`` mapping.

        Raises:
            KnowledgeBaseError: If the table shape or any entry is invalid
        """
        if not isinstance(data, Mapping):
            raise KnowledgeBaseError("Knowledge base must be a JSON object")

        raw_entries = data.get("entries", data)
        version = data.get("version") if "entries" in data else None
        if not isinstance(raw_entries, Mapping):
            raise KnowledgeBaseError("Knowledge base 'entries' must be a JSON object")

        entries: dict[str, KnowledgeEntry] = {}
        for key, raw in raw_entries.items():
            try:
                entries[key] = KnowledgeEntry.model_validate(raw)
            except ValidationError as e:
                raise KnowledgeBaseError(f"Invalid knowledge entry: {e}", entry_key=key) from e

        return cls(entries, version=str(version) if version is not None else None)

    @classmethod
    def from_file(cls, path: Path) -> "KnowledgeBase":
        """
        Load a knowledge base from a JSON file.

        Raises:
            KnowledgeBaseError: If the file can't be read, parsed or validated
        """
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except OSError as e:
            raise KnowledgeBaseError(f"Cannot read knowledge base: {e}", path=path) from e
        except json.JSONDecodeError as e:
            raise KnowledgeBaseError(f"Knowledge base is not valid JSON: {e}", path=path) from e

        try:
            kb = cls.from_mapping(data)
        except KnowledgeBaseError as e:
            raise KnowledgeBaseError(e.reason, path=path, entry_key=e.entry_key) from e

        logger.info(f"Loaded knowledge base {kb.version or 'unversioned'} from {path}: {len(kb)} formats")
        return kb

    # ─────────────────────────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────────────────────────

    def get(self, key: str) -> KnowledgeEntry | None:
        """Exact lookup by filename, relative path or ``*.ext`` key."""
        return self._entries.get(key)

    def for_extension(self, extension: str) -> KnowledgeEntry | None:
        """Lookup by extension, with or without the leading dot."""
        if not extension:
            return None
        if not extension.startswith("."):
            extension = f".{extension}"
        return self._entries.get(f"*{extension}")

    @property
    def path_keys(self) -> tuple[str, ...]:
        """Keys naming a relative path such as ``.github/workflows``."""
        return self._path_keys

    def high_value_formats(self) -> list[str]:
        """Formats with priority >= 30."""
        return [key for key, entry in self._entries.items() if entry.priority >= HIGH_VALUE_PRIORITY]

    def formats_by_tier(self, tier: ConfidenceTier | str) -> list[str]:
        """Formats in the given confidence tier."""
        tier = ConfidenceTier(tier)
        return [key for key, entry in self._entries.items() if entry.confidence_tier == tier]

    def formats_for_slot(self, slot: str) -> list[str]:
        """Formats that can fill the given context slot."""
        return [key for key, entry in self._entries.items() if slot in entry.slot_mappings]

    def max_score(self) -> int:
        """Sum of every format's priority."""
        return sum(entry.priority for entry in self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)


def load_default_knowledge_base() -> KnowledgeBase:
    """Load the table shipped in ``stackscan/data``."""
    resource = resources.files("stackscan.data").joinpath(DEFAULT_TABLE_RESOURCE)
    with resources.as_file(resource) as path:
        return KnowledgeBase.from_file(Path(path))


def load_knowledge_base(path: Path | None = None) -> KnowledgeBase:
    """Load the table at ``path``, or the shipped default when None."""
    if path is None:
        return load_default_knowledge_base()
    return KnowledgeBase.from_file(path)
