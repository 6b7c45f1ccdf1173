"""
Category resolution and per-scan deduplication.

Semantically equivalent files share a category; only the first record
per category survives a scan. The directory scanner walks outward from
the scan root, so "first" means closest to the root.
"""

import logging
from collections.abc import Iterable

from stackscan.services.discovery.constants import (
    EXACT_CATEGORIES,
    FILE_TYPE_CATEGORY_PREFIX,
    MANIFEST_CATEGORY_PREFIX,
    PREFIX_CATEGORIES,
)
from stackscan.services.discovery.types import DiscoveryRecord

logger = logging.getLogger(__name__)


def resolve_category(file_name: str) -> str:
    """
    Map a filename to its canonical category.

    Exact names win, then known prefixes (``.eslintrc*``, ``Dockerfile.*``),
    then ``file-type-<ext>``. A name without a dot is its own extension.
    """
    category = EXACT_CATEGORIES.get(file_name)
    if category:
        return category

    for prefix, prefixed_category in PREFIX_CATEGORIES:
        if file_name.startswith(prefix):
            return prefixed_category

    dot = file_name.rfind(".")
    extension = file_name[dot:] if dot != -1 else file_name
    return f"{FILE_TYPE_CATEGORY_PREFIX}{extension}"


def is_manifest_category(category: str) -> bool:
    return category.startswith(MANIFEST_CATEGORY_PREFIX)


def deduplicate(records: Iterable[DiscoveryRecord]) -> list[DiscoveryRecord]:
    """
    Keep the first record per category, preserving discovery order.

    The category map is local to this call, so concurrent scans never share it.
    """
    kept: dict[str, DiscoveryRecord] = {}
    for record in records:
        if record.category in kept:
            logger.debug(
                f"Dropping {record.file_path}: category {record.category} "
                f"already held by {kept[record.category].file_path}"
            )
            continue
        kept[record.category] = record
    return list(kept.values())
