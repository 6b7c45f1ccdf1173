"""
Manifest intelligence extraction.

Fully parses package manifests (package.json, pyproject.toml, Cargo.toml,
go.mod, ...) into ManifestIntelligence: metadata, scripts, the union of
declared dependency sets, framework labels and a quality grade.

Malformed content yields None. Nothing here raises past
extract_manifest_intelligence.
"""

import json
import logging
import re
import tomllib
import xml.etree.ElementTree as ET
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from stackscan.services.intelligence.constants import (
    BUILD_SCRIPT_NAMES,
    ECOSYSTEM_PROFILES,
    TEST_SCRIPT_NAMES,
)
from stackscan.services.intelligence.grading import grade_manifest
from stackscan.services.intelligence.types import ManifestIntelligence

logger = logging.getLogger(__name__)

# Manifest filename -> ecosystem
MANIFEST_ECOSYSTEMS: dict[str, str] = {
    "package.json": "node",
    "composer.json": "php",
    "pyproject.toml": "python",
    "Pipfile": "python",
    "requirements.txt": "python",
    "requirements.in": "python",
    "Cargo.toml": "rust",
    "go.mod": "go",
    "Gemfile": "ruby",
    "pom.xml": "jvm",
    "build.gradle": "jvm",
    "build.gradle.kts": "jvm",
}

# Confirmed by the non-blank/non-comment line rule rather than a parse
LIST_STYLE_MANIFESTS = frozenset(
    {"requirements.txt", "requirements.in", "go.mod", "Gemfile", "build.gradle", "build.gradle.kts"}
)

# PEP 508 requirement: leading distribution name, then anything
REQUIREMENT_NAME_PATTERN = re.compile(r"^\s*([A-Za-z0-9][A-Za-z0-9._-]*)(.*)$")
GEM_PATTERN = re.compile(r"""^\s*gem\s+["']([^"']+)["'](?:\s*,\s*["']([^"']+)["'])?""")
GEM_GROUP_PATTERN = re.compile(r"^\s*group\s+(.+?)\s+do\b")
GRADLE_DEPENDENCY_PATTERN = re.compile(
    r"""^\s*(\w+)\s*\(?\s*["']([^:"'\s]+):([^:"'\s]+)(?::([^"'\s]+))?["']"""
)
GRADLE_PROPERTY_PATTERN = re.compile(r"""^\s*(version|description)\s*=\s*["']([^"']*)["']""")


def is_manifest(file_name: str) -> bool:
    """True for filenames the extractor knows how to parse."""
    return file_name in MANIFEST_ECOSYSTEMS


def extract_manifest_intelligence(file_name: str, path: Path) -> ManifestIntelligence | None:
    """
    Fully parse a manifest file.

    Args:
        file_name: Manifest filename, selects the parser
        path: Location of the file

    Returns:
        ManifestIntelligence, or None if the file is unreadable, malformed
        or not a known manifest
    """
    parser = MANIFEST_PARSERS.get(file_name)
    if parser is None:
        return None

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Cannot read manifest {path}: {e}")
        return None

    try:
        return parser(content)
    except (
        json.JSONDecodeError,
        tomllib.TOMLDecodeError,
        ET.ParseError,
        ValueError,
        TypeError,
        AttributeError,
        RecursionError,
    ) as e:
        logger.warning(f"Failed to parse {file_name} at {path}: {e}")
        return None


# ─────────────────────────────────────────────────────────────
# Shared Helpers
# ─────────────────────────────────────────────────────────────


def _str_map(value: Any) -> dict[str, str]:
    """Coerce a dependency table to ``{name: spec}``; non-tables become empty."""
    if not isinstance(value, Mapping):
        return {}
    result: dict[str, str] = {}
    for key, spec in value.items():
        if isinstance(spec, Mapping):
            spec = spec.get("version", "*")
        result[str(key)] = str(spec)
    return result


def _text(value: Any) -> str | None:
    """Coerce person/url/license shapes (str, {name}, {url}, [..]) to a string."""
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, Mapping):
        for key in ("name", "url", "text", "type"):
            if value.get(key):
                return str(value[key])
        return None
    if isinstance(value, list):
        for item in value:
            text = _text(item)
            if text:
                return text
        return None
    return str(value)


def _requirement(line: str) -> tuple[str, str] | None:
    """Split a PEP 508 requirement into (normalized name, spec)."""
    match = REQUIREMENT_NAME_PATTERN.match(line)
    if not match:
        return None
    name = match.group(1).lower().replace("_", "-")
    spec = match.group(2).split(";")[0].strip() or "*"
    # Drop extras, keep the version constraint
    if spec.startswith("["):
        spec = spec[spec.find("]") + 1 :].strip() or "*"
    return name, spec


def _requirements_map(lines: Any) -> dict[str, str]:
    if not isinstance(lines, list):
        return {}
    result: dict[str, str] = {}
    for line in lines:
        if not isinstance(line, str):
            continue
        parsed = _requirement(line)
        if parsed:
            result[parsed[0]] = parsed[1]
    return result


def _build(
    ecosystem: str,
    *,
    name: Any = None,
    description: Any = None,
    version: Any = None,
    scripts: tuple[str, ...] = (),
    dependencies: dict[str, str],
    dev_dependencies: dict[str, str],
    author: Any = None,
    license: Any = None,
    repository: Any = None,
    has_dev_section: bool = False,
) -> ManifestIntelligence:
    """Assemble ManifestIntelligence: framework labels, flags and grade."""
    profile = ECOSYSTEM_PROFILES[ecosystem]
    all_deps = {**dependencies, **dev_dependencies}

    frameworks: list[str] = []
    for dep_name, labels in profile.frameworks.items():
        if dep_name in all_deps:
            frameworks.extend(label for label in labels if label not in frameworks)

    script_names = {s.lower() for s in scripts}
    name_text, description_text, version_text = _text(name), _text(description), _text(version)
    author_text, license_text, repository_text = _text(author), _text(license), _text(repository)

    return ManifestIntelligence(
        ecosystem=ecosystem,
        name=name_text,
        description=description_text,
        version=version_text,
        scripts=scripts,
        dependencies=all_deps,
        dev_dependencies=dev_dependencies,
        author=author_text,
        license=license_text,
        repository=repository_text,
        frameworks=tuple(frameworks),
        has_tests=bool(script_names & TEST_SCRIPT_NAMES)
        or any(dep in profile.test_runners for dep in all_deps),
        has_build=bool(script_names & BUILD_SCRIPT_NAMES)
        or any(dep in profile.bundlers for dep in all_deps),
        has_type_system=any(dep in profile.type_system for dep in all_deps),
        has_linting=any(dep in profile.linters for dep in all_deps),
        has_styling=any(dep in profile.styling for dep in all_deps),
        quality=grade_manifest(
            name=name_text,
            description=description_text,
            version=version_text,
            scripts=scripts,
            dependencies=all_deps,
            dev_dependencies=dev_dependencies,
            author=author_text,
            license=license_text,
            repository=repository_text,
            profile=profile,
            has_dev_section=has_dev_section,
        ),
    )


# ─────────────────────────────────────────────────────────────
# JSON Manifests
# ─────────────────────────────────────────────────────────────


def parse_package_json(content: str) -> ManifestIntelligence | None:
    """Parse package.json (dependencies, devDependencies, peerDependencies)."""
    data = json.loads(content)
    if not isinstance(data, dict):
        return None

    runtime = _str_map(data.get("dependencies"))
    dev = _str_map(data.get("devDependencies"))
    peer = _str_map(data.get("peerDependencies"))

    return _build(
        "node",
        name=data.get("name"),
        description=data.get("description"),
        version=data.get("version"),
        scripts=tuple(_str_map(data.get("scripts"))),
        dependencies={**runtime, **peer},
        dev_dependencies=dev,
        author=data.get("author"),
        license=data.get("license"),
        repository=data.get("repository"),
        has_dev_section=isinstance(data.get("devDependencies"), Mapping),
    )


def parse_composer_json(content: str) -> ManifestIntelligence | None:
    """Parse composer.json (require, require-dev)."""
    data = json.loads(content)
    if not isinstance(data, dict):
        return None

    support = data.get("support") if isinstance(data.get("support"), Mapping) else {}
    return _build(
        "php",
        name=data.get("name"),
        description=data.get("description"),
        version=data.get("version"),
        scripts=tuple(_str_map(data.get("scripts"))),
        dependencies=_str_map(data.get("require")),
        dev_dependencies=_str_map(data.get("require-dev")),
        author=data.get("authors"),
        license=data.get("license"),
        repository=support.get("source") or data.get("homepage"),
        has_dev_section=isinstance(data.get("require-dev"), Mapping),
    )


# ─────────────────────────────────────────────────────────────
# TOML Manifests
# ─────────────────────────────────────────────────────────────


def _pyproject_scripts(data: Mapping[str, Any]) -> tuple[str, ...]:
    tool = data.get("tool", {})
    tables = [
        data.get("project", {}).get("scripts"),
        tool.get("poetry", {}).get("scripts"),
        tool.get("pdm", {}).get("scripts"),
        tool.get("poe", {}).get("tasks"),
        tool.get("taskipy", {}).get("tasks"),
    ]
    for env in tool.get("hatch", {}).get("envs", {}).values():
        if isinstance(env, Mapping):
            tables.append(env.get("scripts"))

    names: list[str] = []
    for table in tables:
        if isinstance(table, Mapping):
            names.extend(str(key) for key in table if str(key) not in names)
    return tuple(names)


def _pyproject_repository(project: Mapping[str, Any], poetry: Mapping[str, Any]) -> str | None:
    urls = project.get("urls")
    if isinstance(urls, Mapping):
        lowered = {str(k).lower(): v for k, v in urls.items()}
        for key in ("repository", "source", "source code", "homepage"):
            if lowered.get(key):
                return str(lowered[key])
    return _text(poetry.get("repository"))


def parse_pyproject_toml(content: str) -> ManifestIntelligence | None:
    """Parse pyproject.toml (PEP 621 and Poetry layouts)."""
    data = tomllib.loads(content)
    project = data.get("project", {})
    poetry = data.get("tool", {}).get("poetry", {})

    runtime = _requirements_map(project.get("dependencies"))
    poetry_runtime = _str_map(poetry.get("dependencies"))
    poetry_runtime.pop("python", None)
    runtime.update({k.lower(): v for k, v in poetry_runtime.items()})

    dev: dict[str, str] = {}
    for extra in (project.get("optional-dependencies") or {}).values():
        dev.update(_requirements_map(extra))
    for group in (data.get("dependency-groups") or {}).values():
        dev.update(_requirements_map(group))
    dev.update({k.lower(): v for k, v in _str_map(poetry.get("dev-dependencies")).items()})
    for group in (poetry.get("group") or {}).values():
        if isinstance(group, Mapping):
            dev.update({k.lower(): v for k, v in _str_map(group.get("dependencies")).items()})
    dev.update(_requirements_map(data.get("build-system", {}).get("requires")))

    return _build(
        "python",
        name=project.get("name") or poetry.get("name"),
        description=project.get("description") or poetry.get("description"),
        version=project.get("version") or poetry.get("version"),
        scripts=_pyproject_scripts(data),
        dependencies=runtime,
        dev_dependencies=dev,
        author=project.get("authors") or poetry.get("authors"),
        license=project.get("license") or poetry.get("license"),
        repository=_pyproject_repository(project, poetry),
    )


def parse_pipfile(content: str) -> ManifestIntelligence | None:
    """Parse a Pipfile (packages, dev-packages)."""
    data = tomllib.loads(content)
    return _build(
        "python",
        scripts=tuple(_str_map(data.get("scripts"))),
        dependencies={k.lower(): v for k, v in _str_map(data.get("packages")).items()},
        dev_dependencies={k.lower(): v for k, v in _str_map(data.get("dev-packages")).items()},
        has_dev_section=isinstance(data.get("dev-packages"), Mapping),
    )


def parse_cargo_toml(content: str) -> ManifestIntelligence | None:
    """Parse Cargo.toml ([dependencies], [dev-dependencies], [build-dependencies])."""
    data = tomllib.loads(content)
    package = data.get("package", {})

    runtime = _str_map(data.get("dependencies"))
    runtime.update(_str_map(data.get("build-dependencies")))
    return _build(
        "rust",
        name=package.get("name"),
        description=package.get("description"),
        version=package.get("version"),
        dependencies=runtime,
        dev_dependencies=_str_map(data.get("dev-dependencies")),
        author=package.get("authors"),
        license=package.get("license"),
        repository=package.get("repository"),
        has_dev_section=isinstance(data.get("dev-dependencies"), Mapping),
    )


# ─────────────────────────────────────────────────────────────
# Line-Based Manifests
# ─────────────────────────────────────────────────────────────


def parse_requirements(content: str) -> ManifestIntelligence | None:
    """Parse a pip requirements list; options (-r, -e, --index-url) are skipped."""
    deps: dict[str, str] = {}
    for raw in content.splitlines():
        line = raw.split(" #", 1)[0].strip()
        if not line or line.startswith("#") or line.startswith("-"):
            continue
        parsed = _requirement(line)
        if parsed:
            deps[parsed[0]] = parsed[1]

    return _build("python", dependencies=deps, dev_dependencies={})


def parse_go_mod(content: str) -> ManifestIntelligence | None:
    """Parse go.mod: module path and require directives (single and block)."""
    module: str | None = None
    deps: dict[str, str] = {}
    in_require = False

    for raw in content.splitlines():
        line = raw.split("//", 1)[0].strip()
        if not line:
            continue
        if in_require:
            if line == ")":
                in_require = False
                continue
            parts = line.split()
            if len(parts) >= 2:
                deps[parts[0]] = parts[1]
        elif line.startswith("module "):
            module = line.split(None, 1)[1].strip().strip('"')
        elif line.startswith("require ("):
            in_require = True
        elif line.startswith("require "):
            parts = line.split()[1:]
            if len(parts) >= 2:
                deps[parts[0]] = parts[1]

    if module is None and not deps:
        return None
    return _build("go", name=module, dependencies=deps, dev_dependencies={})


def parse_gemfile(content: str) -> ManifestIntelligence | None:
    """Parse a Gemfile; gems inside development/test groups count as dev."""
    runtime: dict[str, str] = {}
    dev: dict[str, str] = {}
    group_stack: list[bool] = []

    for raw in content.splitlines():
        line = raw.split("#", 1)[0].rstrip()
        if not line.strip():
            continue
        group = GEM_GROUP_PATTERN.match(line)
        if group:
            groups = group.group(1)
            group_stack.append(":development" in groups or ":test" in groups)
            continue
        if line.strip() == "end" and group_stack:
            group_stack.pop()
            continue
        gem = GEM_PATTERN.match(line)
        if gem:
            target = dev if any(group_stack) else runtime
            target[gem.group(1)] = gem.group(2) or "*"

    return _build("ruby", dependencies=runtime, dev_dependencies=dev)


def parse_gradle(content: str) -> ManifestIntelligence | None:
    """Parse build.gradle / build.gradle.kts dependency declarations."""
    runtime: dict[str, str] = {}
    dev: dict[str, str] = {}
    props: dict[str, str] = {}

    for line in content.splitlines():
        dep = GRADLE_DEPENDENCY_PATTERN.match(line)
        if dep:
            configuration, _group, artifact, version = dep.groups()
            target = dev if configuration.lower().startswith("test") else runtime
            target[artifact] = version or "*"
            continue
        prop = GRADLE_PROPERTY_PATTERN.match(line)
        if prop:
            props[prop.group(1)] = prop.group(2)

    return _build(
        "jvm",
        description=props.get("description"),
        version=props.get("version"),
        dependencies=runtime,
        dev_dependencies=dev,
    )


# ─────────────────────────────────────────────────────────────
# XML Manifests
# ─────────────────────────────────────────────────────────────


def _local(tag: str) -> str:
    """Strip the ``{namespace}`` prefix from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _child(element: ET.Element | None, name: str) -> ET.Element | None:
    if element is None:
        return None
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _child_text(element: ET.Element | None, name: str) -> str | None:
    child = _child(element, name)
    if child is None or child.text is None:
        return None
    return child.text.strip() or None


def parse_pom_xml(content: str) -> ManifestIntelligence | None:
    """Parse a Maven pom.xml; test-scoped dependencies count as dev."""
    root = ET.fromstring(content)
    if _local(root.tag) != "project":
        return None

    runtime: dict[str, str] = {}
    dev: dict[str, str] = {}
    dependencies = _child(root, "dependencies")
    for dep in dependencies if dependencies is not None else []:
        artifact = _child_text(dep, "artifactId")
        if not artifact:
            continue
        target = dev if _child_text(dep, "scope") == "test" else runtime
        target[artifact] = _child_text(dep, "version") or "*"

    licenses = _child(root, "licenses")
    developers = _child(root, "developers")
    return _build(
        "jvm",
        name=_child_text(root, "name") or _child_text(root, "artifactId"),
        description=_child_text(root, "description"),
        version=_child_text(root, "version"),
        dependencies=runtime,
        dev_dependencies=dev,
        author=_child_text(_child(developers, "developer"), "name"),
        license=_child_text(_child(licenses, "license"), "name"),
        repository=_child_text(_child(root, "scm"), "url"),
    )


MANIFEST_PARSERS: dict[str, Callable[[str], ManifestIntelligence | None]] = {
    "package.json": parse_package_json,
    "composer.json": parse_composer_json,
    "pyproject.toml": parse_pyproject_toml,
    "Pipfile": parse_pipfile,
    "requirements.txt": parse_requirements,
    "requirements.in": parse_requirements,
    "Cargo.toml": parse_cargo_toml,
    "go.mod": parse_go_mod,
    "Gemfile": parse_gemfile,
    "pom.xml": parse_pom_xml,
    "build.gradle": parse_gradle,
    "build.gradle.kts": parse_gradle,
}
