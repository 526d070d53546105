"""Directories the scanner never descends into.

Tier 0 (HARDCODED_DIRS): Never traversed, not user-configurable.
    - VCS internals, tracemark's own data directory

Tier 1 (DEFAULT_PRUNABLE_DIRS): Skipped by default.
    - Dependencies, caches, build outputs
    - ``scan.excluded_dirs`` in config adds to this set

The combined PRUNABLE_DIRS = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS.
"""

from __future__ import annotations

# =============================================================================
# Tier 0: HARDCODED - Never traverse, not user-configurable
# =============================================================================

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        # VCS internals
        ".git",
        ".svn",
        ".hg",
        ".bzr",
        # Tracemark data
        ".tracemark",
    )
)

# =============================================================================
# Tier 1: DEFAULT_PRUNABLE - Skipped by default
# =============================================================================
# Organized by ecosystem, limited to the languages tracemark parses.

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # JavaScript/TypeScript
        # -------------------------------------------------------------------------
        "node_modules",
        ".npm",
        ".yarn",
        ".pnpm-store",
        "bower_components",
        ".next",
        ".turbo",
        # -------------------------------------------------------------------------
        # Python
        # -------------------------------------------------------------------------
        "venv",
        ".venv",
        "__pycache__",
        ".tox",
        ".nox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "site-packages",
        # -------------------------------------------------------------------------
        # Rust / Go
        # -------------------------------------------------------------------------
        "target",
        "vendor",
        # -------------------------------------------------------------------------
        # JVM (Java)
        # -------------------------------------------------------------------------
        ".gradle",
        ".m2",
        # -------------------------------------------------------------------------
        # C/C++ build trees
        # -------------------------------------------------------------------------
        "cmake-build-debug",
        "cmake-build-release",
        "CMakeFiles",
        ".ccls-cache",
        ".cache",
        # -------------------------------------------------------------------------
        # Generic build/output directories
        # -------------------------------------------------------------------------
        "build",
        "dist",
        "out",
        # -------------------------------------------------------------------------
        # IDE/Editor directories
        # -------------------------------------------------------------------------
        ".idea",
        ".vscode",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def is_hardcoded_dir(dirname: str) -> bool:
    """Check if directory is hardcoded (never traversable, not overridable)."""
    return dirname in HARDCODED_DIRS


def is_default_prunable(dirname: str) -> bool:
    """Check if directory is prunable by default."""
    return dirname in DEFAULT_PRUNABLE_DIRS


def is_pruned(dirname: str, extra: frozenset[str] | set[str] = frozenset()) -> bool:
    """Check if the scanner should skip a directory by name."""
    return dirname in PRUNABLE_DIRS or dirname in extra
