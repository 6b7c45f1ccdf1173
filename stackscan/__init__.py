"""stackscan: project technology stack detection."""

from stackscan.core import KnowledgeBaseError, StackScanError, setup_logging
from stackscan.services import (
    AnalysisResult,
    KnowledgeBase,
    StackDetector,
    detect_stack,
    format_stack_summary,
    get_top_framework,
)

__version__ = "0.1.0"

__all__ = [
    "AnalysisResult",
    "KnowledgeBase",
    "KnowledgeBaseError",
    "StackDetector",
    "StackScanError",
    "detect_stack",
    "format_stack_summary",
    "get_top_framework",
    "setup_logging",
]
