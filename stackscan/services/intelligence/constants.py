"""
Intelligence extractor constants.

Dependency-to-framework lookup tables per ecosystem, the toolchain and
framework groups used by the quality grader, and the tier score table.
"""

from dataclasses import dataclass

from stackscan.services.intelligence.types import QualityTier

# ─────────────────────────────────────────────────────────────
# Dependency -> Framework Labels
# ─────────────────────────────────────────────────────────────

# Order matters: labels are reported in table order
JS_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "svelte": ("Svelte",),
    "@sveltejs/kit": ("Svelte", "SvelteKit"),
    "react": ("React",),
    "next": ("React", "Next.js"),
    "vue": ("Vue",),
    "nuxt": ("Vue", "Nuxt"),
    "@angular/core": ("Angular",),
    "astro": ("Astro",),
    "solid-js": ("Solid",),
    "express": ("Express",),
    "@nestjs/core": ("NestJS",),
    "fastify": ("Fastify",),
    "hono": ("Hono",),
    "koa": ("Koa",),
    "tailwindcss": ("Tailwind CSS",),
}

PYTHON_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "fastapi": ("FastAPI",),
    "django": ("Django",),
    "flask": ("Flask",),
    "starlette": ("Starlette",),
    "tornado": ("Tornado",),
    "pyramid": ("Pyramid",),
    "aiohttp": ("aiohttp",),
    "litestar": ("Litestar",),
    "streamlit": ("Streamlit",),
}

RUST_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "actix-web": ("Actix Web",),
    "axum": ("Axum",),
    "rocket": ("Rocket",),
    "tauri": ("Tauri",),
    "leptos": ("Leptos",),
}

GO_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "github.com/gin-gonic/gin": ("Gin",),
    "github.com/labstack/echo": ("Echo",),
    "github.com/labstack/echo/v4": ("Echo",),
    "github.com/gofiber/fiber": ("Fiber",),
    "github.com/gofiber/fiber/v2": ("Fiber",),
}

PHP_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "laravel/framework": ("Laravel",),
    "symfony/framework-bundle": ("Symfony",),
    "slim/slim": ("Slim",),
}

RUBY_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "rails": ("Rails",),
    "sinatra": ("Sinatra",),
    "hanami": ("Hanami",),
}

JVM_DEPENDENCY_FRAMEWORKS: dict[str, tuple[str, ...]] = {
    "spring-boot-starter": ("Spring Boot",),
    "spring-boot-starter-web": ("Spring Boot",),
    "spring-webmvc": ("Spring",),
    "quarkus-core": ("Quarkus",),
    "micronaut-runtime": ("Micronaut",),
    "ktor-server-core": ("Ktor",),
}


# ─────────────────────────────────────────────────────────────
# Quality Grading Groups
# ─────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class EcosystemProfile:
    """Dependency groups the grader looks for in one ecosystem."""

    frameworks: dict[str, tuple[str, ...]]
    type_system: frozenset[str]
    bundlers: frozenset[str]
    test_runners: frozenset[str]
    linters: frozenset[str]
    base_frameworks: frozenset[str]
    meta_frameworks: frozenset[str]
    styling: frozenset[str]
    typed_language: str | None = None  # main_language when a type system is present


ECOSYSTEM_PROFILES: dict[str, EcosystemProfile] = {
    "node": EcosystemProfile(
        frameworks=JS_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset({"typescript", "@types/node"}),
        bundlers=frozenset({"vite", "webpack", "rollup", "esbuild", "parcel", "turbopack"}),
        test_runners=frozenset({"jest", "vitest", "playwright", "@playwright/test", "mocha", "cypress"}),
        linters=frozenset({"eslint", "prettier", "@biomejs/biome"}),
        base_frameworks=frozenset({"svelte", "react", "vue", "next", "nuxt", "@angular/core", "solid-js"}),
        meta_frameworks=frozenset({"@sveltejs/kit", "next", "nuxt", "astro", "@remix-run/react"}),
        styling=frozenset({"tailwindcss", "styled-components", "@emotion/styled", "sass"}),
        typed_language="TypeScript",
    ),
    "python": EcosystemProfile(
        frameworks=PYTHON_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset({"mypy", "pyright", "pytype"}),
        bundlers=frozenset({"build", "hatchling", "setuptools", "poetry-core", "flit-core", "pdm-backend"}),
        test_runners=frozenset({"pytest", "tox", "nox", "hypothesis"}),
        linters=frozenset({"ruff", "flake8", "black", "pylint", "isort"}),
        base_frameworks=frozenset({"django", "flask", "fastapi", "starlette", "litestar", "tornado"}),
        meta_frameworks=frozenset({"djangorestframework", "django-ninja", "flask-restx", "sqlmodel"}),
        styling=frozenset(),
    ),
    "rust": EcosystemProfile(
        frameworks=RUST_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset(),
        bundlers=frozenset({"cc", "cmake", "wasm-bindgen"}),
        test_runners=frozenset({"proptest", "criterion", "rstest", "insta"}),
        linters=frozenset(),
        base_frameworks=frozenset({"actix-web", "axum", "rocket", "warp"}),
        meta_frameworks=frozenset({"leptos", "tauri", "loco-rs"}),
        styling=frozenset(),
    ),
    "go": EcosystemProfile(
        frameworks=GO_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset(),
        bundlers=frozenset(),
        test_runners=frozenset({"github.com/stretchr/testify"}),
        linters=frozenset(),
        base_frameworks=frozenset(GO_DEPENDENCY_FRAMEWORKS),
        meta_frameworks=frozenset(),
        styling=frozenset(),
    ),
    "php": EcosystemProfile(
        frameworks=PHP_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset({"phpstan/phpstan", "vimeo/psalm"}),
        bundlers=frozenset(),
        test_runners=frozenset({"phpunit/phpunit", "pestphp/pest"}),
        linters=frozenset({"friendsofphp/php-cs-fixer", "squizlabs/php_codesniffer", "laravel/pint"}),
        base_frameworks=frozenset({"laravel/framework", "symfony/framework-bundle", "slim/slim"}),
        meta_frameworks=frozenset({"livewire/livewire", "inertiajs/inertia-laravel"}),
        styling=frozenset(),
    ),
    "ruby": EcosystemProfile(
        frameworks=RUBY_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset({"sorbet", "rbs", "steep"}),
        bundlers=frozenset({"webpacker", "jsbundling-rails", "propshaft", "sprockets"}),
        test_runners=frozenset({"rspec", "rspec-rails", "minitest"}),
        linters=frozenset({"rubocop", "standard"}),
        base_frameworks=frozenset({"rails", "sinatra", "hanami"}),
        meta_frameworks=frozenset({"hotwire-rails", "turbo-rails"}),
        styling=frozenset({"tailwindcss-rails", "sassc-rails"}),
    ),
    "jvm": EcosystemProfile(
        frameworks=JVM_DEPENDENCY_FRAMEWORKS,
        type_system=frozenset(),
        bundlers=frozenset(),
        test_runners=frozenset({"junit", "junit-jupiter", "junit-jupiter-api", "spring-boot-starter-test", "mockito-core"}),
        linters=frozenset({"checkstyle", "spotbugs", "ktlint", "detekt"}),
        base_frameworks=frozenset({"spring-webmvc", "spring-boot-starter", "quarkus-core", "micronaut-runtime"}),
        meta_frameworks=frozenset({"spring-boot-starter-web"}),
        styling=frozenset(),
    ),
}


# ─────────────────────────────────────────────────────────────
# Lifecycle Scripts
# ─────────────────────────────────────────────────────────────

DEV_SCRIPT_NAMES = frozenset({"dev", "start", "serve", "develop"})
BUILD_SCRIPT_NAMES = frozenset({"build", "compile", "package"})
TEST_SCRIPT_NAMES = frozenset({"test", "check", "tests"})


# ─────────────────────────────────────────────────────────────
# Grade Thresholds
# ─────────────────────────────────────────────────────────────

TIER_BASE_SCORES: dict[QualityTier, int] = {
    QualityTier.EXCEPTIONAL: 120,
    QualityTier.PROFESSIONAL: 85,
    QualityTier.GOOD: 65,
    QualityTier.BASIC: 45,
    QualityTier.MINIMAL: 25,
}

# Exceptional criteria needed for the top tier
EXCEPTIONAL_CRITERIA_REQUIRED = 5
# Professional subset (or exceptional criteria) needed for the second tier
PROFESSIONAL_CRITERIA_REQUIRED = 3

PROFESSIONAL_DEPENDENCY_COUNT = 15
MODERATE_DEPENDENCY_COUNT = 8
GOOD_DEPENDENCY_COUNT = 5
MODERN_TOOLCHAIN_CATEGORIES = 3
PROFESSIONAL_TOOLCHAIN_CATEGORIES = 2
SOPHISTICATED_FRAMEWORK_POINTS = 2
PROFESSIONAL_SCRIPT_COUNT = 3
GOOD_SCRIPT_COUNT = 2
