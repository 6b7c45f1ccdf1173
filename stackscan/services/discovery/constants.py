"""
Discovery constants and configuration.

Category table used for deduplication, category processing order for slot
recommendations, confirmation token tables and the stack signature aliases.
"""

from stackscan.services.intelligence.manifests import MANIFEST_ECOSYSTEMS

# ─────────────────────────────────────────────────────────────
# Categories
# ─────────────────────────────────────────────────────────────

MANIFEST_CATEGORY_PREFIX = "package-manager-"
FILE_TYPE_CATEGORY_PREFIX = "file-type-"

# Manifests the extractor can't parse still get an ecosystem category
_EXTRA_MANIFEST_ECOSYSTEMS = {
    "pubspec.yaml": "dart",
    "build.zig": "zig",
}

# Exact filename (or relative path) -> category
EXACT_CATEGORIES: dict[str, str] = {
    **{
        name: f"{MANIFEST_CATEGORY_PREFIX}{ecosystem}"
        for name, ecosystem in {**MANIFEST_ECOSYSTEMS, **_EXTRA_MANIFEST_ECOSYSTEMS}.items()
    },
    # Browser extensions
    "manifest.json": "chrome-extension",
    # Documentation
    "README.md": "documentation",
    "README.rst": "documentation",
    "README.txt": "documentation",
    "README": "documentation",
    "REQUIREMENTS.md": "requirements-doc",
    "REQUIREMENTS.rst": "requirements-doc",
    "REQUIREMENTS.txt": "requirements-doc",
    "CLAUDE.md": "claude-context",
    # Language / framework configuration
    "tsconfig.json": "typescript-config",
    "svelte.config.js": "svelte-config",
    "svelte.config.ts": "svelte-config",
    "next.config.js": "next-config",
    "next.config.mjs": "next-config",
    "next.config.ts": "next-config",
    "nuxt.config.js": "nuxt-config",
    "nuxt.config.ts": "nuxt-config",
    "astro.config.mjs": "astro-config",
    "astro.config.js": "astro-config",
    # Build tools
    "vite.config.js": "vite-config",
    "vite.config.ts": "vite-config",
    "webpack.config.js": "bundler-config",
    "rollup.config.js": "bundler-config",
    "esbuild.config.js": "bundler-config",
    "parcel.config.js": "bundler-config",
    "snowpack.config.js": "bundler-config",
    # Testing
    "vitest.config.ts": "test-config",
    "vitest.config.js": "test-config",
    "jest.config.js": "test-config",
    "jest.config.ts": "test-config",
    "playwright.config.js": "test-config",
    "playwright.config.ts": "test-config",
    # Linting
    "eslint.config.js": "lint-config",
    ".prettierrc": "lint-config",
    ".prettierrc.json": "lint-config",
    "prettier.config.js": "lint-config",
    # Deployment
    "Dockerfile": "docker-config",
    "docker-compose.yml": "docker-compose-config",
    "docker-compose.yaml": "docker-compose-config",
    "vercel.json": "vercel-config",
    "netlify.toml": "netlify-config",
    # CI
    ".github/workflows": "ci-config",
    ".gitlab-ci.yml": "ci-config",
    ".circleci/config.yml": "ci-config",
    ".travis.yml": "ci-config",
    "Jenkinsfile": "ci-config",
    "azure-pipelines.yml": "ci-config",
    "bitbucket-pipelines.yml": "ci-config",
}

# Filename prefix -> category, checked after exact matches
PREFIX_CATEGORIES: tuple[tuple[str, str], ...] = (
    (".eslintrc", "lint-config"),
    ("Dockerfile.", "docker-config"),
)

# Slot recommendations are filled in this category order. Categories not
# listed follow in discovery order, which callers must treat as unspecified.
CATEGORY_PRIORITY: tuple[str, ...] = (
    # Manifests
    f"{MANIFEST_CATEGORY_PREFIX}node",
    f"{MANIFEST_CATEGORY_PREFIX}python",
    f"{MANIFEST_CATEGORY_PREFIX}rust",
    f"{MANIFEST_CATEGORY_PREFIX}go",
    f"{MANIFEST_CATEGORY_PREFIX}jvm",
    f"{MANIFEST_CATEGORY_PREFIX}php",
    f"{MANIFEST_CATEGORY_PREFIX}ruby",
    f"{MANIFEST_CATEGORY_PREFIX}dart",
    f"{MANIFEST_CATEGORY_PREFIX}zig",
    # Documentation
    "documentation",
    # Language-specific configuration
    "typescript-config",
    "svelte-config",
    "next-config",
    "nuxt-config",
    "astro-config",
    # Build tools
    "vite-config",
    "bundler-config",
)


# ─────────────────────────────────────────────────────────────
# Confirmation
# ─────────────────────────────────────────────────────────────

# Keyed configs: confirmed if any token appears in the bounded prefix
CONFIRMATION_TOKENS: dict[str, tuple[str, ...]] = {
    "tsconfig.json": ("compilerOptions", "extends", "references"),
    "jsconfig.json": ("compilerOptions",),
    "svelte.config.js": ("svelte", "@sveltejs"),
    "svelte.config.ts": ("svelte", "@sveltejs"),
    "Dockerfile": ("FROM",),
    "docker-compose.yml": ("services", "version"),
    "docker-compose.yaml": ("services", "version"),
    "manifest.json": ("manifest_version",),
    "vite.config.js": ("vite", "defineConfig"),
    "vite.config.ts": ("vite", "defineConfig"),
    "next.config.js": ("module.exports", "export", "nextConfig"),
    "next.config.mjs": ("export", "nextConfig"),
    "next.config.ts": ("export", "NextConfig"),
    "tailwind.config.js": ("content", "theme", "tailwind"),
    "tailwind.config.ts": ("content", "theme", "tailwind"),
    "vercel.json": ("{",),
    "netlify.toml": ("[build]", "[[redirects]]", "[[headers]]", "[context"),
    "fly.toml": ("app", "[build]", "[http_service]"),
    "Procfile": (":",),
    "pubspec.yaml": ("name:",),
    "schema.prisma": ("datasource", "generator", "model"),
    "manage.py": ("django", "DJANGO_SETTINGS_MODULE"),
    "pytest.ini": ("[pytest]",),
    "alembic.ini": ("[alembic]",),
    ".gitlab-ci.yml": ("stage", "script", "image"),
}

# Source files: confirmed if any structural token appears
SOURCE_TOKENS: dict[str, tuple[str, ...]] = {
    ".ts": ("import", "export", "interface"),
    ".tsx": ("import", "export", "interface"),
    ".js": ("function", "const", "import"),
    ".jsx": ("function", "const", "import"),
    ".svelte": ("<script", "<template"),
    ".vue": ("<template", "<script"),
    ".go": ("package ",),
    ".rs": ("fn ", "use ", "mod "),
    ".java": ("class ", "interface ", "package "),
    ".kt": ("fun ", "class ", "package "),
    ".php": ("<?php",),
}

# Python sources only need to be more than trivially non-empty
MIN_PYTHON_SOURCE_LENGTH = 10

# Formats read with the extended prefix window
EXTENDED_PREFIX_SUFFIXES = (".json", ".yaml", ".yml", ".toml")
EXTENDED_PREFIX_NAMES = frozenset({"Dockerfile", "Pipfile", "Gemfile"})


# ─────────────────────────────────────────────────────────────
# Aggregation
# ─────────────────────────────────────────────────────────────

# Sources above this weight overwrite slot recommendations; others only fill
SLOT_OVERWRITE_WEIGHT = 20

STACK_SIGNATURE_SIZE = 3
UNKNOWN_STACK = "unknown-stack"

# Joined top-3 signature -> canonical stack name
KNOWN_STACKS: dict[str, str] = {
    "nextjs-tailwindcss-vercel": "next-tailwind-vercel",
    "svelte-sveltekit-tailwindcss": "svelte5-tailwind",
    "react-nextjs-tailwindcss": "next-tailwind",
    "python-fastapi-postgresql": "fastapi-postgres",
    "python-fastapi-sqlite": "fastapi-sqlite",
    "typescript-nodejs-express": "node-express-ts",
}
