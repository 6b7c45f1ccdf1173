"""
Tests for category resolution and deduplication.

Tests cover:
- Exact, prefix and extension-based categories
- Ecosystem-scoped manifest categories
- First-record-wins deduplication
"""

from pathlib import Path

from stackscan.services.discovery.categories import (
    deduplicate,
    is_manifest_category,
    resolve_category,
)
from tests.helpers.project_tree import make_record


class TestResolveCategory:
    """Tests for resolve_category."""

    def test_manifests_are_ecosystem_scoped(self) -> None:
        """Manifests of one ecosystem share a category; others differ."""
        assert resolve_category("package.json") == "package-manager-node"
        assert resolve_category("requirements.txt") == "package-manager-python"
        assert resolve_category("pyproject.toml") == "package-manager-python"
        assert resolve_category("Pipfile") == "package-manager-python"
        assert resolve_category("Cargo.toml") == "package-manager-rust"
        assert resolve_category("pom.xml") == resolve_category("build.gradle.kts")

    def test_exact_names(self) -> None:
        """Well-known config files map to their named categories."""
        assert resolve_category("README.md") == "documentation"
        assert resolve_category("tsconfig.json") == "typescript-config"
        assert resolve_category("vite.config.ts") == "vite-config"
        assert resolve_category("docker-compose.yml") == "docker-compose-config"
        assert resolve_category(".github/workflows") == "ci-config"
        assert resolve_category("manifest.json") == "chrome-extension"

    def test_prefix_categories(self) -> None:
        """ESLint and Dockerfile variants resolve by prefix."""
        assert resolve_category(".eslintrc.json") == "lint-config"
        assert resolve_category(".eslintrc.cjs") == "lint-config"
        assert resolve_category("Dockerfile.prod") == "docker-config"

    def test_extension_fallback(self) -> None:
        """Unknown names fall back to file-type-<ext>, using the last dot."""
        assert resolve_category("main.py") == "file-type-.py"
        assert resolve_category("archive.tar.gz") == "file-type-.gz"

    def test_name_without_dot(self) -> None:
        """A name without a dot is its own extension."""
        assert resolve_category("Makefile") == "file-type-Makefile"

    def test_is_manifest_category(self) -> None:
        """Only package-manager categories are manifest categories."""
        assert is_manifest_category("package-manager-node")
        assert not is_manifest_category("documentation")
        assert not is_manifest_category("file-type-.json")


class TestDeduplicate:
    """Tests for per-category deduplication."""

    def test_first_record_wins(self) -> None:
        """The first record per category survives."""
        near = make_record("package.json", file_path=Path("/repo/app/package.json"))
        far = make_record("package.json", file_path=Path("/repo/package.json"))

        result = deduplicate([near, far])

        assert result == [near]

    def test_equivalent_manifests_collapse(self) -> None:
        """Two Python manifests in one scan keep only the first."""
        pyproject = make_record("pyproject.toml")
        requirements = make_record("requirements.txt")

        result = deduplicate([pyproject, requirements])

        assert [r.file_name for r in result] == ["pyproject.toml"]

    def test_different_ecosystems_coexist(self) -> None:
        """A Node and a Python manifest both survive."""
        records = [make_record("package.json"), make_record("requirements.txt")]

        result = deduplicate(records)

        assert len(result) == 2

    def test_order_preserved(self) -> None:
        """Survivors keep discovery order."""
        records = [
            make_record("README.md"),
            make_record("package.json"),
            make_record("README.md", file_path=Path("/elsewhere/README.md")),
            make_record("tsconfig.json"),
        ]

        result = deduplicate(records)

        assert [r.file_name for r in result] == ["README.md", "package.json", "tsconfig.json"]
        assert result[0].file_path == Path("/project/README.md")

    def test_calls_are_independent(self) -> None:
        """No state carries over between calls."""
        first = deduplicate([make_record("package.json")])
        second = deduplicate([make_record("package.json")])

        assert len(first) == 1
        assert len(second) == 1

    def test_empty(self) -> None:
        """Deduplicating nothing yields nothing."""
        assert deduplicate([]) == []
