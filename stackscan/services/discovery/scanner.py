"""
Directory and pattern scanners.

The directory scanner walks upward from the scan root collecting files the
knowledge base knows (plus document-like extensions). The pattern scanner
walks downward collecting a capped number of source files.

Both swallow filesystem errors: an unreadable directory is skipped, a
failed stat leaves size and mtime unset.
"""

import logging
import os
from collections.abc import Collection, Sequence
from datetime import UTC, datetime
from pathlib import Path

from stackscan.config import Settings
from stackscan.services.discovery.categories import resolve_category
from stackscan.services.discovery.types import DiscoveryRecord
from stackscan.services.knowledge.base import DEFAULT_ENTRY, KnowledgeBase, KnowledgeEntry

logger = logging.getLogger(__name__)


def is_scan_root_boundary(directory: Path, markers: Sequence[str]) -> bool:
    """True if the directory holds its own repository marker (e.g. ``.git``)."""
    for marker in markers:
        try:
            if (directory / marker).exists():
                return True
        except OSError:
            continue
    return False


def _extension(file_name: str) -> str:
    return os.path.splitext(file_name)[1]


def make_record(
    file_name: str,
    file_path: Path,
    format_key: str,
    entry: KnowledgeEntry,
    is_directory: bool = False,
) -> DiscoveryRecord:
    """Build an unconfirmed record for a discovered file, with stat info if available."""
    file_size: int | None = None
    last_modified: datetime | None = None
    try:
        stats = file_path.stat()
        file_size = stats.st_size
        last_modified = datetime.fromtimestamp(stats.st_mtime, tz=UTC)
    except OSError as e:
        logger.debug(f"Cannot stat {file_path}: {e}")

    return DiscoveryRecord(
        file_name=file_name,
        file_path=file_path,
        format_key=format_key,
        category=resolve_category(file_name),
        weight=entry.priority,
        confidence_tier=entry.confidence_tier,
        frameworks=list(entry.frameworks),
        slot_mappings=dict(entry.slot_mappings),
        file_size=file_size,
        last_modified=last_modified,
        is_directory=is_directory,
    )


def _collect_level(
    directory: Path,
    knowledge_base: KnowledgeBase,
    document_extensions: Collection[str],
) -> list[DiscoveryRecord]:
    """Collect candidates from a single directory (no recursion)."""
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        logger.debug(f"Skipping unreadable directory {directory}: {e}")
        return []

    records: list[DiscoveryRecord] = []
    for dir_entry in entries:
        name = dir_entry.name
        format_key = name
        entry = knowledge_base.get(name)
        if entry is None:
            extension = _extension(name)
            if extension not in document_extensions:
                continue
            format_key = f"*{extension}"
            entry = knowledge_base.for_extension(extension) or DEFAULT_ENTRY

        try:
            if not dir_entry.is_file():
                continue
        except OSError:
            continue

        records.append(make_record(name, Path(dir_entry.path), format_key, entry))

    # Path-shaped keys such as .github/workflows or .circleci/config.yml
    for key in knowledge_base.path_keys:
        candidate = directory / key
        try:
            if not candidate.exists():
                continue
            is_directory = candidate.is_dir()
        except OSError:
            continue
        entry = knowledge_base.get(key)
        if entry is not None:
            records.append(make_record(key, candidate, key, entry, is_directory=is_directory))

    return records


def scan_directories(
    start: Path,
    knowledge_base: KnowledgeBase,
    settings: Settings,
) -> list[DiscoveryRecord]:
    """
    Collect known files from the start directory and its ancestors.

    Walks at most ``settings.max_parent_depth`` levels, stopping at the
    filesystem root. If the start directory is itself a repository root,
    only the start directory is collected, so a nested project never picks
    up its parent's configuration.

    Args:
        start: Absolute scan root
        knowledge_base: Format table
        settings: Depth bound, boundary markers, document extensions

    Returns:
        Records in discovery order, closest directory first
    """
    single_level = is_scan_root_boundary(start, settings.boundary_markers)
    if single_level:
        logger.debug(f"{start} is a repository root; not scanning ancestors")

    records: list[DiscoveryRecord] = []
    current = start
    for _ in range(settings.max_parent_depth):
        records.extend(_collect_level(current, knowledge_base, settings.document_extensions))

        if single_level:
            break
        parent = current.parent
        if parent == current:
            break
        current = parent

    return records


def scan_source_files(
    start: Path,
    knowledge_base: KnowledgeBase,
    settings: Settings,
    exclude: Collection[Path] = (),
) -> list[DiscoveryRecord]:
    """
    Collect up to ``settings.pattern_file_cap`` source files below the start directory.

    Ignored directories are pruned while walking, so cost is bounded by the
    cap rather than the tree size. Only files whose extension has a
    knowledge base entry become records.
    """
    ignore_dirs = set(settings.ignore_dirs)
    extensions = set(settings.source_extensions)
    cap = settings.pattern_file_cap
    if cap <= 0:
        return []

    collected: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(start):
        # Prune in place: os.walk won't descend into removed entries
        dirnames[:] = sorted(d for d in dirnames if d not in ignore_dirs)

        for name in sorted(filenames):
            if _extension(name) not in extensions:
                continue
            path = Path(dirpath) / name
            if path in exclude:
                continue
            collected.append(path)
            if len(collected) >= cap:
                break
        if len(collected) >= cap:
            break

    records: list[DiscoveryRecord] = []
    for path in collected:
        extension = _extension(path.name)
        entry = knowledge_base.for_extension(extension)
        if entry is None:
            continue
        records.append(make_record(path.name, path, f"*{extension}", entry))

    return records
