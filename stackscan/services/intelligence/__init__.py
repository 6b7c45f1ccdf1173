"""
Intelligence package for deep manifest extraction.

Module structure:
- manifests.py: Per-format manifest parsers and the extraction entry point
- grading.py: Tiered quality grade
- constants.py: Dependency-to-framework tables, ecosystem groups, thresholds
- types.py: ManifestIntelligence / FileIntelligence variants, QualityGrade
"""

from stackscan.services.intelligence.constants import ECOSYSTEM_PROFILES, TIER_BASE_SCORES
from stackscan.services.intelligence.grading import grade_manifest
from stackscan.services.intelligence.manifests import (
    LIST_STYLE_MANIFESTS,
    MANIFEST_ECOSYSTEMS,
    extract_manifest_intelligence,
    is_manifest,
)
from stackscan.services.intelligence.types import (
    FileIntelligence,
    Intelligence,
    ManifestIntelligence,
    QualityGrade,
    QualityTier,
)

__all__ = [
    # Extraction
    "extract_manifest_intelligence",
    "grade_manifest",
    "is_manifest",
    # Types
    "FileIntelligence",
    "Intelligence",
    "ManifestIntelligence",
    "QualityGrade",
    "QualityTier",
    # Constants
    "ECOSYSTEM_PROFILES",
    "LIST_STYLE_MANIFESTS",
    "MANIFEST_ECOSYSTEMS",
    "TIER_BASE_SCORES",
]
