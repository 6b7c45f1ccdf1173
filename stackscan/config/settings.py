from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Detector settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="STACKSCAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Directory scanner - number of levels walked upward from the scan root
    max_parent_depth: int = 10
    # Pattern scanner - maximum number of source files collected per scan
    pattern_file_cap: int = 10

    # Confirmation - bounded prefix reads (never a full-file read)
    prefix_read_bytes: int = 1024
    # JSON-like and multi-line declarative formats get a larger window
    extended_prefix_read_bytes: int = 2048
    # Upper bound on confirmations running at once (thread pool pressure)
    max_concurrent_confirmations: int = 8

    # Accept low-weight files without reading them. Deterministic: every record
    # below the threshold is accepted, none are sampled.
    trust_low_priority: bool = False
    low_priority_threshold: int = 15

    # Knowledge base - None means the table shipped in stackscan/data
    knowledge_base_path: Path | None = None

    # Repository markers that make the scan root a project boundary
    boundary_markers: list[str] = [".git", ".hg", ".svn"]

    # Pruned while walking, never descended into
    ignore_dirs: list[str] = [
        ".git",
        ".hg",
        ".svn",
        "node_modules",
        "bower_components",
        "vendor",
        "dist",
        "build",
        "out",
        "target",
        "coverage",
        ".next",
        ".nuxt",
        ".svelte-kit",
        ".venv",
        "venv",
        "env",
        "__pycache__",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        ".tox",
    ]

    # Pattern scanner whitelist
    source_extensions: list[str] = [
        ".py",
        ".ts",
        ".tsx",
        ".js",
        ".jsx",
        ".svelte",
        ".vue",
        ".go",
        ".rs",
        ".rb",
        ".php",
        ".java",
        ".kt",
        ".swift",
        ".dart",
    ]

    # Directory scanner extension whitelist for files the table doesn't name
    document_extensions: list[str] = [".md", ".json", ".yaml", ".yml", ".toml", ".xml"]

    # Logging
    log_level: str = "INFO"


settings = Settings()
