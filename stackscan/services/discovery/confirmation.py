"""
Confirmation validator.

A candidate is confirmed by a bounded read of its first bytes, checked
against a rule for its format. Manifests are fully parsed instead; their
extracted frameworks and slots are merged into the record.

Every filesystem error results in an unconfirmed record, never an exception.
"""

import logging
import os
from dataclasses import replace

from stackscan.config import Settings
from stackscan.services.discovery.constants import (
    CONFIRMATION_TOKENS,
    EXTENDED_PREFIX_NAMES,
    EXTENDED_PREFIX_SUFFIXES,
    MIN_PYTHON_SOURCE_LENGTH,
    SOURCE_TOKENS,
)
from stackscan.services.discovery.types import DiscoveryRecord
from stackscan.services.intelligence import (
    ECOSYSTEM_PROFILES,
    LIST_STYLE_MANIFESTS,
    FileIntelligence,
    ManifestIntelligence,
    extract_manifest_intelligence,
    is_manifest,
)

logger = logging.getLogger(__name__)


def read_prefix(path: os.PathLike | str, limit: int) -> bytes:
    """Read at most ``limit`` bytes."""
    with open(path, "rb") as f:
        return f.read(limit)


def prefix_limit(file_name: str, settings: Settings) -> int:
    """Structured config formats get the extended read window."""
    if file_name in EXTENDED_PREFIX_NAMES or file_name.endswith(EXTENDED_PREFIX_SUFFIXES):
        return settings.extended_prefix_read_bytes
    return settings.prefix_read_bytes


def has_content_lines(content: str) -> bool:
    """True if any line is neither blank nor a ``#`` / ``//`` comment."""
    for line in content.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith(("#", "//")):
            return True
    return False


def _first_token(content: str, tokens: tuple[str, ...]) -> str | None:
    for token in tokens:
        if token in content:
            return token
    return None


def merge_manifest_intelligence(
    record: DiscoveryRecord,
    intelligence: ManifestIntelligence,
) -> DiscoveryRecord:
    """
    Fold extracted manifest facts into a record.

    Extracted framework labels go first, ahead of the knowledge base's
    generic ones, so a React app's manifest ranks React above Node.js.
    """
    frameworks = list(dict.fromkeys([*intelligence.frameworks, *record.frameworks]))

    slots = dict(record.slot_mappings)
    if intelligence.frameworks:
        slots["framework"] = intelligence.frameworks[0]
    profile = ECOSYSTEM_PROFILES.get(intelligence.ecosystem)
    if intelligence.has_type_system and profile and profile.typed_language:
        slots["main_language"] = profile.typed_language

    return replace(
        record,
        confirmed=True,
        intelligence=intelligence,
        frameworks=frameworks,
        slot_mappings=slots,
    )


def _confirm_manifest(record: DiscoveryRecord, settings: Settings) -> DiscoveryRecord:
    if record.file_name in LIST_STYLE_MANIFESTS:
        raw = read_prefix(record.file_path, prefix_limit(record.file_name, settings))
        if not has_content_lines(raw.decode("utf-8", errors="replace")):
            return replace(record, confirmed=False)

        intelligence = extract_manifest_intelligence(record.file_name, record.file_path)
        if intelligence is None:
            return replace(record, confirmed=True)
        return merge_manifest_intelligence(record, intelligence)

    # Structured manifests are confirmed by parsing successfully
    intelligence = extract_manifest_intelligence(record.file_name, record.file_path)
    if intelligence is None:
        return replace(record, confirmed=False)
    return merge_manifest_intelligence(record, intelligence)


def _confirm_directory(record: DiscoveryRecord) -> DiscoveryRecord:
    with os.scandir(record.file_path) as it:
        entry_count = sum(1 for _ in it)
    return replace(
        record,
        confirmed=entry_count > 0,
        intelligence=FileIntelligence(bytes_read=0, entry_count=entry_count),
    )


def _confirm_content(record: DiscoveryRecord, settings: Settings) -> DiscoveryRecord:
    raw = read_prefix(record.file_path, prefix_limit(record.file_name, settings))
    content = raw.decode("utf-8", errors="replace")

    matched: str | None = None
    tokens = CONFIRMATION_TOKENS.get(record.file_name)
    extension = record.extension
    if tokens is not None:
        matched = _first_token(content, tokens)
        confirmed = matched is not None
    elif extension == ".py":
        confirmed = len(content) > MIN_PYTHON_SOURCE_LENGTH
    elif extension in SOURCE_TOKENS:
        matched = _first_token(content, SOURCE_TOKENS[extension])
        confirmed = matched is not None
    else:
        confirmed = len(content) > 0

    if not confirmed:
        return replace(record, confirmed=False)
    return replace(
        record,
        confirmed=True,
        intelligence=FileIntelligence(bytes_read=len(raw), matched_token=matched),
    )


def confirm_record(record: DiscoveryRecord, settings: Settings) -> DiscoveryRecord:
    """
    Confirm a candidate record.

    Args:
        record: Unconfirmed record from a scanner
        settings: Read windows and the low-priority trust switch

    Returns:
        A new record with ``confirmed`` set, and intelligence when confirmed
    """
    if settings.trust_low_priority and record.weight < settings.low_priority_threshold:
        return replace(record, confirmed=True)

    try:
        if record.is_directory:
            return _confirm_directory(record)
        if is_manifest(record.file_name):
            return _confirm_manifest(record, settings)
        return _confirm_content(record, settings)
    except OSError as e:
        logger.debug(f"Confirmation read failed for {record.file_path}: {e}")
        return replace(record, confirmed=False)
