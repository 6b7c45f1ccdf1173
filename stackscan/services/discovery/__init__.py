"""
Discovery package for stack detection.

Module structure:
- detector.py: StackDetector engine and the detect_stack wrapper
- scanner.py: Upward directory scanner and downward source file scanner
- categories.py: Category resolution and per-scan deduplication
- confirmation.py: Bounded-read confirmation of candidates
- aggregator.py: Scores, framework confidence, slot recommendations, stack signature
- summary.py: Result helpers (top framework, markdown summary)
- constants.py: Category tables, confirmation tokens, signature aliases
- types.py: DiscoveryRecord, ProjectContext, AnalysisResult
"""

from stackscan.services.discovery.aggregator import (
    aggregate,
    build_recommendations,
    compute_framework_confidence,
    generate_stack_signature,
)
from stackscan.services.discovery.categories import deduplicate, resolve_category
from stackscan.services.discovery.confirmation import confirm_record
from stackscan.services.discovery.detector import StackDetector, detect_stack
from stackscan.services.discovery.scanner import (
    is_scan_root_boundary,
    scan_directories,
    scan_source_files,
)
from stackscan.services.discovery.summary import format_stack_summary, get_top_framework
from stackscan.services.discovery.types import AnalysisResult, DiscoveryRecord, ProjectContext

__all__ = [
    # Engine
    "StackDetector",
    "detect_stack",
    # Pipeline stages
    "scan_directories",
    "scan_source_files",
    "is_scan_root_boundary",
    "resolve_category",
    "deduplicate",
    "confirm_record",
    "aggregate",
    "build_recommendations",
    "compute_framework_confidence",
    "generate_stack_signature",
    # Helpers
    "format_stack_summary",
    "get_top_framework",
    # Types
    "AnalysisResult",
    "DiscoveryRecord",
    "ProjectContext",
]
