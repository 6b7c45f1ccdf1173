"""Exceptions for stackscan.

Scans never raise: every per-file failure degrades to "skip" or "not
confirmed". These types cover the work done outside a scan, such as
loading a knowledge base table.
"""

from pathlib import Path


class StackScanError(Exception):
    """Base error for stackscan."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class KnowledgeBaseError(StackScanError):
    """Knowledge base table could not be loaded.

    Raised when the table file is missing, is not valid JSON, or an entry
    fails validation. The offending path (if any) and entry key are kept so
    callers can point at the bad record.
    """

    def __init__(
        self,
        message: str,
        path: Path | None = None,
        entry_key: str | None = None,
    ):
        self.reason = message
        self.path = path
        self.entry_key = entry_key

        if path and entry_key:
            message = f"{message} ({path}: entry {entry_key!r})"
        elif path:
            message = f"{message} ({path})"
        elif entry_key:
            message = f"{message} (entry {entry_key!r})"

        super().__init__(message)
