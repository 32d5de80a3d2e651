"""Shared pytest fixtures for the StackForge test suite.

Provides reusable fixtures for:
- The bundled technology catalog
- Package-manager profiles
- Common selections (frontend, backend, monorepo, native)
- A temporary catalog file writer
"""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Callable

import pytest

from stackforge.catalog import Catalog, default_catalog
from stackforge.resolver import PackageManagerProfile, resolve_package_manager


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

@pytest.fixture
def catalog() -> Catalog:
    """The bundled catalog."""
    return default_catalog()


@pytest.fixture
def write_catalog(tmp_path: Path) -> Callable[[str], Path]:
    """Write a YAML catalog snippet to a temp file and return its path."""

    def _write(content: str, name: str = "catalog.yaml") -> Path:
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Package managers
# ---------------------------------------------------------------------------

@pytest.fixture
def npm() -> PackageManagerProfile:
    return resolve_package_manager(frozenset())


@pytest.fixture
def pnpm() -> PackageManagerProfile:
    return resolve_package_manager(frozenset({"pnpm"}))


@pytest.fixture
def bun() -> PackageManagerProfile:
    return resolve_package_manager(frozenset({"bun-pm"}))


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------

@pytest.fixture
def nextjs_selection() -> frozenset[str]:
    return frozenset({"nextjs", "typescript", "tailwindcss", "eslint", "drizzle", "postgresql"})


@pytest.fixture
def express_selection() -> frozenset[str]:
    return frozenset({"express", "typescript", "mongoose", "mongodb", "dotenv"})


@pytest.fixture
def monorepo_selection() -> frozenset[str]:
    return frozenset({"nextjs", "express", "typescript"})


@pytest.fixture
def expo_selection() -> frozenset[str]:
    return frozenset({"expo-uniwind", "typescript", "clerk"})

