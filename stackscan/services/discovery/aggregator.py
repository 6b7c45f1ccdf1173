"""
Aggregation of confirmed discoveries into an analysis result.

Pure functions over records; no I/O.
"""

import re
from collections.abc import Iterable, Sequence
from pathlib import Path

from stackscan.services.discovery.constants import (
    CATEGORY_PRIORITY,
    KNOWN_STACKS,
    SLOT_OVERWRITE_WEIGHT,
    STACK_SIGNATURE_SIZE,
    UNKNOWN_STACK,
)
from stackscan.services.discovery.types import AnalysisResult, DiscoveryRecord, ProjectContext
from stackscan.services.intelligence import ManifestIntelligence

_CATEGORY_RANK = {category: rank for rank, category in enumerate(CATEGORY_PRIORITY)}

_NON_ALNUM = re.compile(r"[^a-z0-9]")


def order_by_category_priority(records: Iterable[DiscoveryRecord]) -> list[DiscoveryRecord]:
    """Sort by category priority; unlisted categories keep discovery order at the end."""
    return sorted(records, key=lambda r: _CATEGORY_RANK.get(r.category, len(CATEGORY_PRIORITY)))


def compute_framework_confidence(records: Iterable[DiscoveryRecord]) -> dict[str, int]:
    """Sum, per framework, the weights of the confirmed records that name it."""
    confidence: dict[str, int] = {}
    for record in records:
        if not record.confirmed:
            continue
        for framework in dict.fromkeys(record.frameworks):
            confidence[framework] = confidence.get(framework, 0) + record.weight
    return confidence


def build_recommendations(records: Iterable[DiscoveryRecord]) -> dict[str, str]:
    """
    Fill context slots from confirmed records.

    Records are visited in category priority order. A record heavier than
    SLOT_OVERWRITE_WEIGHT overwrites a slot; a lighter one only fills empty ones.
    """
    recommendations: dict[str, str] = {}
    for record in order_by_category_priority(r for r in records if r.confirmed):
        overwrite = record.weight > SLOT_OVERWRITE_WEIGHT
        for slot, value in record.slot_mappings.items():
            if overwrite or slot not in recommendations:
                recommendations[slot] = value
    return recommendations


def normalize_framework(name: str) -> str:
    """Lowercase and strip everything but letters and digits: 'Next.js' -> 'nextjs'."""
    return _NON_ALNUM.sub("", name.lower())


def generate_stack_signature(framework_confidence: dict[str, int]) -> str:
    """
    Build a short stack identifier from the top frameworks.

    Frameworks are ranked by confidence (ties keep first-seen order), the top
    three are normalized and joined with '-', and the result is mapped
    through the known stack aliases.
    """
    ranked = sorted(framework_confidence.items(), key=lambda item: -item[1])
    tokens = [token for name, _ in ranked if (token := normalize_framework(name))]
    tokens = tokens[:STACK_SIGNATURE_SIZE]
    if not tokens:
        return UNKNOWN_STACK

    signature = "-".join(tokens)
    return KNOWN_STACKS.get(signature, signature)


def extract_project_context(records: Sequence[DiscoveryRecord]) -> ProjectContext:
    """Lift project facts from the highest-priority confirmed manifest, if any."""
    for record in order_by_category_priority(r for r in records if r.confirmed):
        intelligence = record.intelligence
        if not isinstance(intelligence, ManifestIntelligence):
            continue
        return ProjectContext(
            project_name=intelligence.name,
            project_goal=intelligence.description,
            main_language=record.slot_mappings.get("main_language"),
            frameworks=list(intelligence.frameworks),
            dependencies=dict(intelligence.dependencies),
            has_tests=intelligence.has_tests,
            has_build=intelligence.has_build,
            has_type_system=intelligence.has_type_system,
            manifest_grade=intelligence.quality,
        )
    return ProjectContext()


def aggregate(scan_root: Path, records: Sequence[DiscoveryRecord]) -> AnalysisResult:
    """
    Build the analysis result from deduplicated, confirmation-checked records.

    Args:
        scan_root: The directory the scan started from
        records: Every surviving candidate, confirmed or not, in discovery order

    Returns:
        AnalysisResult (duration_ms left for the caller to set)
    """
    confirmed = [r for r in records if r.confirmed]
    framework_confidence = compute_framework_confidence(confirmed)

    return AnalysisResult(
        scan_root=scan_root,
        discoveries=list(records),
        confirmed_discoveries=confirmed,
        total_score=sum(r.weight for r in confirmed),
        framework_confidence=framework_confidence,
        recommendations=build_recommendations(confirmed),
        stack_signature=generate_stack_signature(framework_confidence),
        project_context=extract_project_context(confirmed),
    )
