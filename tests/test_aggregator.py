"""
Tests for aggregation.

Tests cover:
- Total score and framework confidence over confirmed records
- Slot recommendations (priority order, overwrite threshold)
- Stack signature ranking, normalization and aliases
- Project context from the highest-priority manifest
"""

from pathlib import Path

from stackscan.services.discovery.aggregator import (
    aggregate,
    build_recommendations,
    compute_framework_confidence,
    extract_project_context,
    generate_stack_signature,
    normalize_framework,
    order_by_category_priority,
)
from stackscan.services.intelligence.manifests import parse_package_json, parse_requirements
from tests.helpers.project_tree import make_record


class TestScores:
    """Tests for total score and framework confidence."""

    def test_total_score_counts_confirmed_only(self) -> None:
        """Unconfirmed records contribute nothing."""
        records = [
            make_record("package.json", weight=35),
            make_record("README.md", weight=25),
            make_record("tsconfig.json", weight=25, confirmed=False),
        ]

        result = aggregate(Path("/project"), records)

        assert result.total_score == 60
        assert len(result.discoveries) == 3
        assert [r.file_name for r in result.confirmed_discoveries] == ["package.json", "README.md"]

    def test_full_weight_per_framework(self) -> None:
        """Each listed framework receives the record's full weight."""
        records = [
            make_record("package.json", weight=35, frameworks=["React", "Node.js"]),
            make_record("app.tsx", weight=15, frameworks=["React", "TypeScript"]),
        ]

        confidence = compute_framework_confidence(records)

        assert confidence == {"React": 50, "Node.js": 35, "TypeScript": 15}

    def test_repeated_label_counted_once(self) -> None:
        """A record naming a framework twice contributes once."""
        confidence = compute_framework_confidence(
            [make_record("package.json", weight=35, frameworks=["React", "React"])]
        )

        assert confidence == {"React": 35}

    def test_unconfirmed_ignored(self) -> None:
        """Unconfirmed records add no confidence."""
        confidence = compute_framework_confidence(
            [make_record("package.json", weight=35, frameworks=["React"], confirmed=False)]
        )

        assert confidence == {}


class TestRecommendations:
    """Tests for slot recommendations."""

    def test_heavy_source_overwrites(self) -> None:
        """Records above weight 20 overwrite earlier values."""
        records = [
            make_record("tsconfig.json", weight=25, slot_mappings={"main_language": "TypeScript"}),
            make_record("package.json", weight=35, slot_mappings={"main_language": "JavaScript"}),
        ]

        # package.json is processed first (manifest), tsconfig.json later overwrites
        assert build_recommendations(records) == {"main_language": "TypeScript"}

    def test_light_source_only_fills(self) -> None:
        """Records at or below weight 20 only fill empty slots."""
        records = [
            make_record("package.json", weight=35, slot_mappings={"main_language": "JavaScript"}),
            make_record(
                "app.py",
                weight=20,
                slot_mappings={"main_language": "Python", "hosting": "Fly"},
            ),
        ]

        assert build_recommendations(records) == {"main_language": "JavaScript", "hosting": "Fly"}

    def test_light_source_never_replaces_heavy(self) -> None:
        """A light record discovered first still loses to a heavy one."""
        records = [
            make_record("notes.md", weight=10, slot_mappings={"framework": "Guess"}),
            make_record("vite.config.ts", weight=30, slot_mappings={"framework": "Vite"}),
        ]

        assert build_recommendations(records) == {"framework": "Vite"}

    def test_unconfirmed_ignored(self) -> None:
        """Unconfirmed records fill nothing."""
        records = [make_record("package.json", slot_mappings={"a": "b"}, confirmed=False)]

        assert build_recommendations(records) == {}

    def test_category_priority_order(self) -> None:
        """Manifests, documentation, language configs, build tools, then the rest."""
        records = [
            make_record("main.py"),
            make_record("vite.config.ts"),
            make_record("tsconfig.json"),
            make_record("README.md"),
            make_record("Dockerfile"),
            make_record("package.json"),
        ]

        ordered = order_by_category_priority(records)

        assert [r.file_name for r in ordered] == [
            "package.json",
            "README.md",
            "tsconfig.json",
            "vite.config.ts",
            "main.py",
            "Dockerfile",
        ]


class TestStackSignature:
    """Tests for stack signature generation."""

    def test_top_three_by_confidence(self) -> None:
        """The three highest-confidence frameworks are joined."""
        signature = generate_stack_signature({"Go": 10, "Svelte": 50, "Vite": 30, "Docker": 40})

        assert signature == "svelte-docker-vite"

    def test_ties_keep_first_seen_order(self) -> None:
        """Equal confidence keeps insertion order."""
        signature = generate_stack_signature(
            {"React": 35, "Node.js": 35, "JavaScript": 35, "TypeScript": 35}
        )

        assert signature == "react-nodejs-javascript"

    def test_alias_substitution(self) -> None:
        """Known combinations map to their canonical alias."""
        signature = generate_stack_signature({"Next.js": 60, "Tailwind CSS": 40, "Vercel": 30})

        assert signature == "next-tailwind-vercel"

    def test_tailwind_aliases_match_normalized_labels(self) -> None:
        """Aliases are keyed by the normalized "Tailwind CSS" label."""
        assert (
            generate_stack_signature({"Svelte": 50, "SvelteKit": 40, "Tailwind CSS": 30})
            == "svelte5-tailwind"
        )
        assert (
            generate_stack_signature({"React": 50, "Next.js": 40, "Tailwind CSS": 30})
            == "next-tailwind"
        )

    def test_empty_is_unknown(self) -> None:
        """No frameworks gives the unknown sentinel."""
        assert generate_stack_signature({}) == "unknown-stack"

    def test_unnormalizable_names_skipped(self) -> None:
        """Names without letters or digits don't produce empty tokens."""
        assert generate_stack_signature({"++": 50}) == "unknown-stack"
        assert generate_stack_signature({"++": 50, "Go": 10}) == "go"

    def test_normalize_framework(self) -> None:
        """Normalization lowercases and strips punctuation and spaces."""
        assert normalize_framework("Next.js") == "nextjs"
        assert normalize_framework("Tailwind CSS") == "tailwindcss"
        assert normalize_framework("C#") == "c"


class TestProjectContext:
    """Tests for project context extraction."""

    def test_from_manifest(self) -> None:
        """Context comes from the manifest's extracted facts."""
        intel = parse_package_json(
            '{"name": "web", "description": "Shop", "dependencies": {"react": "18"}}'
        )
        record = make_record(
            "package.json",
            weight=35,
            intelligence=intel,
            slot_mappings={"main_language": "JavaScript/TypeScript"},
        )

        context = extract_project_context([record])

        assert context.project_name == "web"
        assert context.project_goal == "Shop"
        assert context.main_language == "JavaScript/TypeScript"
        assert context.frameworks == ["React"]
        assert context.dependencies == {"react": "18"}
        assert context.manifest_grade is intel.quality

    def test_priority_order_wins(self) -> None:
        """A Node manifest outranks a Python one discovered earlier."""
        python = make_record("requirements.txt", intelligence=parse_requirements("flask\n"))
        node = make_record("package.json", intelligence=parse_package_json('{"name": "web"}'))

        context = extract_project_context([python, node])

        assert context.project_name == "web"

    def test_no_manifest(self) -> None:
        """Without a manifest the context is empty."""
        context = extract_project_context([make_record("README.md")])

        assert context.project_name is None
        assert context.frameworks == []
        assert context.manifest_grade is None

    def test_aggregate_fills_context(self) -> None:
        """aggregate wires the context into the result."""
        intel = parse_package_json('{"name": "web"}')

        result = aggregate(Path("/project"), [make_record("package.json", intelligence=intel)])

        assert result.project_context.project_name == "web"
        assert result.scan_root == Path("/project")
