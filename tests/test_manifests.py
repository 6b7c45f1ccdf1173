"""
Tests for manifest intelligence extraction.

Tests cover:
- package.json and composer.json
- pyproject.toml (PEP 621 and Poetry), Pipfile, requirements lists
- Cargo.toml, go.mod, Gemfile, pom.xml, build.gradle
- Malformed and unreadable input handling
"""

import json
from pathlib import Path

from stackscan.services.intelligence import QualityTier, extract_manifest_intelligence, is_manifest
from stackscan.services.intelligence.manifests import (
    parse_cargo_toml,
    parse_composer_json,
    parse_gemfile,
    parse_go_mod,
    parse_gradle,
    parse_package_json,
    parse_pipfile,
    parse_pom_xml,
    parse_pyproject_toml,
    parse_requirements,
)


class TestPackageJson:
    """Tests for package.json extraction."""

    def test_full_manifest(self) -> None:
        """Metadata, scripts, frameworks and toolchain flags are extracted."""
        content = """
        {
          "name": "web",
          "description": "Storefront",
          "version": "1.2.0",
          "scripts": {"dev": "next dev", "build": "next build", "test": "vitest"},
          "dependencies": {"react": "^18.0.0", "next": "^14.0.0", "tailwindcss": "^3.4.0"},
          "devDependencies": {"typescript": "^5.0.0", "vitest": "^1.0.0", "eslint": "^8.0.0"}
        }
        """

        intel = parse_package_json(content)

        assert intel is not None
        assert intel.ecosystem == "node"
        assert intel.name == "web"
        assert intel.description == "Storefront"
        assert intel.version == "1.2.0"
        assert intel.scripts == ("dev", "build", "test")
        assert intel.frameworks == ("React", "Next.js", "Tailwind CSS")
        assert intel.dependency_count == 6
        assert "typescript" in intel.dependencies
        assert set(intel.dev_dependencies) == {"typescript", "vitest", "eslint"}
        assert intel.has_tests
        assert intel.has_build
        assert intel.has_type_system
        assert intel.has_linting
        assert intel.has_styling
        assert intel.kind == "manifest"

    def test_peer_dependencies_counted(self) -> None:
        """Peer dependencies join the dependency union."""
        intel = parse_package_json('{"peerDependencies": {"svelte": "^5.0.0"}}')

        assert intel.frameworks == ("Svelte",)
        assert "svelte" in intel.dependencies

    def test_author_object(self) -> None:
        """Object-shaped author and repository fields are flattened."""
        intel = parse_package_json(
            '{"author": {"name": "Ada"}, "repository": {"type": "git", "url": "https://x/y"}}'
        )

        assert intel.author == "Ada"
        assert intel.repository == "https://x/y"

    def test_empty_dev_dependencies_still_declared(self) -> None:
        """An empty devDependencies object counts toward the dependency structure check."""
        deps = json.dumps({f"lib-{i}": "1.0.0" for i in range(15)})

        declared = parse_package_json(f'{{"dependencies": {deps}, "devDependencies": {{}}}}')
        missing = parse_package_json(f'{{"dependencies": {deps}}}')

        assert "Professional dependency structure" in declared.quality.criteria
        assert "Professional dependency structure" not in missing.quality.criteria

    def test_non_object_json(self) -> None:
        """A JSON array isn't a manifest."""
        assert parse_package_json("[]") is None

    def test_composer_json(self) -> None:
        """composer.json require/require-dev are extracted."""
        intel = parse_composer_json(
            '{"name": "acme/app", "require": {"laravel/framework": "^11.0"},'
            ' "require-dev": {"phpunit/phpunit": "^10.0"}}'
        )

        assert intel.ecosystem == "php"
        assert intel.frameworks == ("Laravel",)
        assert intel.has_tests


class TestPythonManifests:
    """Tests for pyproject.toml, Pipfile and requirements lists."""

    def test_pep621_pyproject(self) -> None:
        """PEP 621 dependencies and optional dependencies are extracted."""
        content = """
[project]
name = "api"
description = "Service"
version = "0.1.0"
dependencies = ["fastapi>=0.100", "SQLAlchemy[asyncio]>=2.0"]

[project.optional-dependencies]
dev = ["pytest>=8", "mypy"]

[project.scripts]
serve = "api.main:run"
"""
        intel = parse_pyproject_toml(content)

        assert intel.ecosystem == "python"
        assert intel.name == "api"
        assert intel.frameworks == ("FastAPI",)
        assert intel.dependencies["sqlalchemy"] == ">=2.0"
        assert set(intel.dev_dependencies) == {"pytest", "mypy"}
        assert intel.scripts == ("serve",)
        assert intel.has_tests
        assert intel.has_type_system

    def test_poetry_pyproject(self) -> None:
        """Poetry tables are read; the python constraint is not a dependency."""
        content = """
[tool.poetry]
name = "site"
description = "Blog"

[tool.poetry.dependencies]
python = "^3.11"
Django = "^5.0"

[tool.poetry.group.dev.dependencies]
pytest = "^8.0"
"""
        intel = parse_pyproject_toml(content)

        assert intel.name == "site"
        assert intel.frameworks == ("Django",)
        assert "python" not in intel.dependencies
        assert "pytest" in intel.dev_dependencies

    def test_pipfile(self) -> None:
        """Pipfile packages and dev-packages are extracted."""
        content = """
[packages]
Flask = "*"

[dev-packages]
pytest = "*"
"""
        intel = parse_pipfile(content)

        assert intel.frameworks == ("Flask",)
        assert "pytest" in intel.dev_dependencies

    def test_requirements(self) -> None:
        """Options and comments are skipped; names are normalized."""
        content = "# base\n-r base.txt\n--index-url https://x\nFlask==2.0.0\nrequests>=2  # http\ntyping_extensions\n"

        intel = parse_requirements(content)

        assert intel.dependencies == {
            "flask": "==2.0.0",
            "requests": ">=2",
            "typing-extensions": "*",
        }
        assert intel.frameworks == ("Flask",)
        assert intel.name is None


class TestOtherEcosystems:
    """Tests for Rust, Go, Ruby and JVM manifests."""

    def test_cargo_toml(self) -> None:
        """Cargo dependency tables are extracted, inline tables included."""
        content = """
[package]
name = "svc"
version = "0.1.0"

[dependencies]
axum = "0.7"
tokio = { version = "1", features = ["full"] }

[dev-dependencies]
proptest = "1"
"""
        intel = parse_cargo_toml(content)

        assert intel.ecosystem == "rust"
        assert intel.frameworks == ("Axum",)
        assert intel.dependencies["tokio"] == "1"
        assert intel.has_tests

    def test_go_mod(self) -> None:
        """Module path and require block are extracted."""
        content = """module github.com/acme/api

go 1.22

require (
\tgithub.com/gin-gonic/gin v1.9.1
\tgithub.com/stretchr/testify v1.8.4 // indirect
)
"""
        intel = parse_go_mod(content)

        assert intel.name == "github.com/acme/api"
        assert intel.frameworks == ("Gin",)
        assert intel.dependencies["github.com/stretchr/testify"] == "v1.8.4"
        assert intel.has_tests

    def test_go_mod_single_require(self) -> None:
        """Single-line require directives are read."""
        intel = parse_go_mod("module x\nrequire github.com/gofiber/fiber/v2 v2.52.0\n")

        assert intel.frameworks == ("Fiber",)

    def test_empty_go_mod(self) -> None:
        """A go.mod with neither module nor requirements yields nothing."""
        assert parse_go_mod("// nothing\n") is None

    def test_gemfile(self) -> None:
        """Gems in development/test groups count as dev."""
        content = """source "https://rubygems.org"
gem "rails", "~> 7.1"
gem "pg"

group :development, :test do
  gem "rspec-rails"
end
"""
        intel = parse_gemfile(content)

        assert intel.frameworks == ("Rails",)
        assert intel.dependencies["rails"] == "~> 7.1"
        assert intel.dependencies["pg"] == "*"
        assert set(intel.dev_dependencies) == {"rspec-rails"}
        assert intel.has_tests

    def test_pom_xml(self) -> None:
        """Namespaced pom.xml is parsed; test scope counts as dev."""
        content = """<?xml version="1.0"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <artifactId>shop</artifactId>
  <version>1.0</version>
  <description>Shop backend</description>
  <dependencies>
    <dependency>
      <groupId>org.springframework.boot</groupId>
      <artifactId>spring-boot-starter-web</artifactId>
    </dependency>
    <dependency>
      <groupId>org.junit.jupiter</groupId>
      <artifactId>junit-jupiter</artifactId>
      <version>5.10.0</version>
      <scope>test</scope>
    </dependency>
  </dependencies>
</project>
"""
        intel = parse_pom_xml(content)

        assert intel.ecosystem == "jvm"
        assert intel.name == "shop"
        assert intel.frameworks == ("Spring Boot",)
        assert intel.dev_dependencies == {"junit-jupiter": "5.10.0"}
        assert intel.has_tests

    def test_gradle(self) -> None:
        """Gradle (Groovy and Kotlin DSL) dependency lines are read."""
        content = """
version = '1.0.0'
dependencies {
    implementation("org.springframework.boot:spring-boot-starter-web:3.2.0")
    testImplementation 'org.junit.jupiter:junit-jupiter:5.10.0'
}
"""
        intel = parse_gradle(content)

        assert intel.version == "1.0.0"
        assert intel.frameworks == ("Spring Boot",)
        assert intel.dependencies["spring-boot-starter-web"] == "3.2.0"
        assert "junit-jupiter" in intel.dev_dependencies


class TestExtractManifestIntelligence:
    """Tests for the file-level extraction entry point."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """A manifest file is read and graded."""
        path = tmp_path / "package.json"
        path.write_text('{"name": "x", "dependencies": {"react": "^18.0.0"}}')

        intel = extract_manifest_intelligence("package.json", path)

        assert intel.frameworks == ("React",)
        assert intel.quality.tier == QualityTier.BASIC

    def test_malformed_returns_none(self, tmp_path: Path) -> None:
        """Malformed content yields no result instead of raising."""
        for name, content in {
            "package.json": "{oops",
            "pyproject.toml": "[project\nname=",
            "pom.xml": "<project><unclosed>",
        }.items():
            path = tmp_path / name
            path.write_text(content)

            assert extract_manifest_intelligence(name, path) is None

    def test_deeply_nested_returns_none(self, tmp_path: Path) -> None:
        """Nesting deeper than the parser can recurse yields no result."""
        path = tmp_path / "package.json"
        path.write_text("[" * 200_000 + "]" * 200_000)

        assert extract_manifest_intelligence("package.json", path) is None

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        """An unreadable file yields no result."""
        assert extract_manifest_intelligence("package.json", tmp_path / "package.json") is None

    def test_non_utf8_returns_none(self, tmp_path: Path) -> None:
        """Undecodable bytes yield no result."""
        path = tmp_path / "package.json"
        path.write_bytes(b'{"name": "\xff\xfe"}')

        assert extract_manifest_intelligence("package.json", path) is None

    def test_unknown_manifest(self, tmp_path: Path) -> None:
        """Names without a parser yield no result."""
        path = tmp_path / "pubspec.yaml"
        path.write_text("name: app")

        assert not is_manifest("pubspec.yaml")
        assert extract_manifest_intelligence("pubspec.yaml", path) is None
