"""Catalog loading from YAML."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import Catalog


DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "stack.yaml"


class CatalogError(Exception):
    """Raised when a catalog file is missing or malformed."""

    def __init__(self, path: Path, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


def load_catalog(path: str | Path | None = None) -> Catalog:
    """Load and validate a catalog file.

    Args:
        path: YAML file to read.  Defaults to the bundled ``stack.yaml``.

    Returns:
        A validated :class:`Catalog`.

    Raises:
        CatalogError: If the file cannot be read, parsed or validated.
    """
    catalog_path = Path(path) if path is not None else DEFAULT_CATALOG_PATH
    try:
        raw = catalog_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(catalog_path, f"cannot read catalog ({exc.strerror})") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise CatalogError(catalog_path, f"invalid YAML: {exc}") from exc

    if not isinstance(data, dict):
        raise CatalogError(catalog_path, "top level must be a mapping")

    try:
        catalog = Catalog.model_validate(data)
    except ValidationError as exc:
        raise CatalogError(catalog_path, f"invalid catalog: {exc}") from exc

    seen: set[str] = set()
    for category in catalog.categories:
        for tech in category.technologies:
            if tech.id in seen:
                raise CatalogError(catalog_path, f"duplicate technology id {tech.id!r}")
            seen.add(tech.id)
    return catalog


@lru_cache(maxsize=1)
def default_catalog() -> Catalog:
    """The bundled catalog, parsed once per process."""
    return load_catalog(DEFAULT_CATALOG_PATH)
