"""Core utilities: exceptions and logging."""

from stackscan.core.exceptions import KnowledgeBaseError, StackScanError
from stackscan.core.logging_setup import setup_logging

__all__ = [
    "KnowledgeBaseError",
    "StackScanError",
    "setup_logging",
]
