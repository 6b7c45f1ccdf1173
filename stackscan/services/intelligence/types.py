"""
Extracted intelligence data types.

Intelligence attached to a discovery record is one of two variants:
ManifestIntelligence for parsed package manifests, FileIntelligence for
everything confirmed by a bounded content check.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Literal


class QualityTier(str, Enum):
    """Manifest quality tiers, best first."""

    EXCEPTIONAL = "EXCEPTIONAL"
    PROFESSIONAL = "PROFESSIONAL"
    GOOD = "GOOD"
    BASIC = "BASIC"
    MINIMAL = "MINIMAL"


@dataclass(frozen=True)
class QualityGrade:
    """Tiered quality grade of a manifest."""

    tier: QualityTier
    base_score: int
    criteria: tuple[str, ...] = ()  # Exceptional criteria that held


@dataclass(frozen=True)
class ManifestIntelligence:
    """Structured facts extracted from a package manifest."""

    ecosystem: str  # "node", "python", "rust", "go", "jvm", "php", "ruby"
    name: str | None
    description: str | None
    version: str | None
    scripts: tuple[str, ...]
    dependencies: dict[str, str]  # Union of runtime, dev and peer sets
    dev_dependencies: dict[str, str]
    author: str | None
    license: str | None
    repository: str | None
    frameworks: tuple[str, ...]
    has_tests: bool
    has_build: bool
    has_type_system: bool
    has_linting: bool
    has_styling: bool
    quality: QualityGrade
    kind: Literal["manifest"] = field(default="manifest", init=False)

    @property
    def dependency_count(self) -> int:
        return len(self.dependencies)


@dataclass(frozen=True)
class FileIntelligence:
    """What a bounded content check learned about a non-manifest file."""

    bytes_read: int
    matched_token: str | None = None
    entry_count: int | None = None  # Set for directory formats
    kind: Literal["file"] = field(default="file", init=False)


Intelligence = ManifestIntelligence | FileIntelligence
