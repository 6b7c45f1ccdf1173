"""
Tiered quality grading for package manifests.

Six "exceptional" criteria are checked; the grade falls through
EXCEPTIONAL -> PROFESSIONAL -> GOOD -> BASIC -> MINIMAL as fewer of
them (and of the narrower professional subset) hold.
"""

from collections.abc import Collection, Mapping

from stackscan.services.intelligence.constants import (
    BUILD_SCRIPT_NAMES,
    DEV_SCRIPT_NAMES,
    EXCEPTIONAL_CRITERIA_REQUIRED,
    GOOD_DEPENDENCY_COUNT,
    GOOD_SCRIPT_COUNT,
    MODERATE_DEPENDENCY_COUNT,
    MODERN_TOOLCHAIN_CATEGORIES,
    PROFESSIONAL_CRITERIA_REQUIRED,
    PROFESSIONAL_DEPENDENCY_COUNT,
    PROFESSIONAL_SCRIPT_COUNT,
    PROFESSIONAL_TOOLCHAIN_CATEGORIES,
    SOPHISTICATED_FRAMEWORK_POINTS,
    TEST_SCRIPT_NAMES,
    TIER_BASE_SCORES,
    EcosystemProfile,
)
from stackscan.services.intelligence.types import QualityGrade, QualityTier


def count_toolchain_categories(deps: Collection[str], profile: EcosystemProfile) -> int:
    """Count toolchain categories (types, bundler, tests, lint) present in deps."""
    groups = (profile.type_system, profile.bundlers, profile.test_runners, profile.linters)
    return sum(1 for group in groups if any(dep in group for dep in deps))


def framework_sophistication(deps: Collection[str], profile: EcosystemProfile) -> int:
    """Points for a base framework, a meta-framework and a styling framework."""
    points = 0
    if any(dep in profile.base_frameworks for dep in deps):
        points += 1
    if any(dep in profile.meta_frameworks for dep in deps):
        points += 1
    if any(dep in profile.styling for dep in deps):
        points += 1
    return points


def has_lifecycle_scripts(scripts: Collection[str]) -> bool:
    """True when dev, build and test-equivalent scripts are all declared."""
    names = {s.lower() for s in scripts}
    return (
        bool(names & DEV_SCRIPT_NAMES)
        and bool(names & BUILD_SCRIPT_NAMES)
        and bool(names & TEST_SCRIPT_NAMES)
    )


def grade_manifest(
    *,
    name: str | None,
    description: str | None,
    version: str | None,
    scripts: Collection[str],
    dependencies: Mapping[str, str],
    dev_dependencies: Mapping[str, str],
    author: str | None,
    license: str | None,
    repository: str | None,
    profile: EcosystemProfile,
    has_dev_section: bool = False,
) -> QualityGrade:
    """
    Grade a manifest from its extracted facts.

    Args:
        name, description, version: Project metadata
        scripts: Declared lifecycle/task script names
        dependencies: Union of every declared dependency set
        dev_dependencies: Development-only subset
        has_dev_section: True when the manifest declares a development
            dependency section, even an empty one
        author, license, repository: Project metadata
        profile: Ecosystem groups used for toolchain/framework checks

    Returns:
        QualityGrade with the tier, its base score and the criteria met
    """
    criteria: list[str] = []
    deps = list(dependencies)
    total_deps = len(deps)

    # (a) metadata completeness
    if name and description and version:
        criteria.append("Complete project metadata")

    # (b) lifecycle-script completeness
    if has_lifecycle_scripts(scripts):
        criteria.append("Complete dev lifecycle scripts")

    # (c) dependency-count professionalism
    if total_deps >= PROFESSIONAL_DEPENDENCY_COUNT and (dev_dependencies or has_dev_section):
        criteria.append("Professional dependency structure")

    # (d) modern-toolchain presence
    toolchain = count_toolchain_categories(deps, profile)
    if toolchain >= MODERN_TOOLCHAIN_CATEGORIES:
        criteria.append("Modern development toolchain")

    # (e) framework sophistication
    if framework_sophistication(deps, profile) >= SOPHISTICATED_FRAMEWORK_POINTS:
        criteria.append("Sophisticated framework stack")

    # (f) project-metadata professionalism
    if repository and author and license:
        criteria.append("Professional project setup")

    exceptional_count = len(criteria)
    if exceptional_count >= EXCEPTIONAL_CRITERIA_REQUIRED:
        return _grade(QualityTier.EXCEPTIONAL, criteria)

    professional_count = sum(
        [
            bool(name and description),
            total_deps >= MODERATE_DEPENDENCY_COUNT,
            toolchain >= PROFESSIONAL_TOOLCHAIN_CATEGORIES,
            len(scripts) >= PROFESSIONAL_SCRIPT_COUNT,
        ]
    )
    if (
        professional_count >= PROFESSIONAL_CRITERIA_REQUIRED
        or exceptional_count >= PROFESSIONAL_CRITERIA_REQUIRED
    ):
        return _grade(QualityTier.PROFESSIONAL, criteria)

    if name and total_deps >= GOOD_DEPENDENCY_COUNT and len(scripts) >= GOOD_SCRIPT_COUNT:
        return _grade(QualityTier.GOOD, criteria)

    if name and total_deps >= 1:
        return _grade(QualityTier.BASIC, criteria)

    return _grade(QualityTier.MINIMAL, criteria)


def _grade(tier: QualityTier, criteria: list[str]) -> QualityGrade:
    return QualityGrade(tier=tier, base_score=TIER_BASE_SCORES[tier], criteria=tuple(criteria))
