# Services package

from stackscan.services.discovery import (
    AnalysisResult,
    DiscoveryRecord,
    ProjectContext,
    StackDetector,
    detect_stack,
    format_stack_summary,
    get_top_framework,
)
from stackscan.services.intelligence import (
    FileIntelligence,
    ManifestIntelligence,
    QualityGrade,
    QualityTier,
)
from stackscan.services.knowledge import KnowledgeBase, KnowledgeEntry, load_knowledge_base

__all__ = [
    # Detection
    "StackDetector",
    "detect_stack",
    "format_stack_summary",
    "get_top_framework",
    "AnalysisResult",
    "DiscoveryRecord",
    "ProjectContext",
    # Intelligence
    "FileIntelligence",
    "ManifestIntelligence",
    "QualityGrade",
    "QualityTier",
    # Knowledge base
    "KnowledgeBase",
    "KnowledgeEntry",
    "load_knowledge_base",
]
