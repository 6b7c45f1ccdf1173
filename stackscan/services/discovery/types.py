"""
Discovery data types.

Data classes for discovery records and the analysis result.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from stackscan.services.intelligence.types import Intelligence, QualityGrade
from stackscan.services.knowledge.base import ConfidenceTier


def _utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass
class DiscoveryRecord:
    """A candidate file found by a scanner, annotated with knowledge base metadata."""

    file_name: str
    file_path: Path
    format_key: str  # Knowledge base key used: filename, relative path or "*.ext"
    category: str
    weight: int
    confidence_tier: ConfidenceTier
    frameworks: list[str] = field(default_factory=list)
    slot_mappings: dict[str, str] = field(default_factory=dict)
    confirmed: bool = False
    intelligence: Intelligence | None = None
    file_size: int | None = None
    last_modified: datetime | None = None
    discovered_at: datetime = field(default_factory=_utcnow)
    is_directory: bool = False

    @property
    def extension(self) -> str:
        return self.file_path.suffix


@dataclass
class ProjectContext:
    """Project facts lifted from the highest-priority confirmed manifest."""

    project_name: str | None = None
    project_goal: str | None = None
    main_language: str | None = None
    frameworks: list[str] = field(default_factory=list)
    dependencies: dict[str, str] = field(default_factory=dict)
    has_tests: bool = False
    has_build: bool = False
    has_type_system: bool = False
    manifest_grade: QualityGrade | None = None


@dataclass
class AnalysisResult:
    """Result of a stack analysis. Built fresh for every scan."""

    scan_root: Path
    discoveries: list[DiscoveryRecord] = field(default_factory=list)
    confirmed_discoveries: list[DiscoveryRecord] = field(default_factory=list)
    total_score: int = 0
    framework_confidence: dict[str, int] = field(default_factory=dict)
    recommendations: dict[str, str] = field(default_factory=dict)
    stack_signature: str = "unknown-stack"
    project_context: ProjectContext = field(default_factory=ProjectContext)
    duration_ms: float = 0.0

    @property
    def confirmed_file_names(self) -> set[str]:
        return {r.file_name for r in self.confirmed_discoveries}
