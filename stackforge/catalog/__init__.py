"""Technology catalog, presets and selection editing.

Usage::

    from stackforge.catalog import default_catalog, toggle_technology

    catalog = default_catalog()
    selection = toggle_technology(catalog, frozenset(), "nextjs")
"""

from stackforge.catalog.loader import CatalogError, default_catalog, load_catalog
from stackforge.catalog.models import Catalog, Category, Preset, Technology
from stackforge.catalog.selection import (
    IncompatibleTechnologyError,
    PresetNotFoundError,
    SelectionError,
    UnknownTechnologyError,
    apply_toggles,
    get_preset,
    random_selection,
    selection_from_preset,
    selection_from_query,
    toggle_technology,
)

__all__ = [
    "Catalog",
    "CatalogError",
    "Category",
    "IncompatibleTechnologyError",
    "Preset",
    "PresetNotFoundError",
    "SelectionError",
    "Technology",
    "UnknownTechnologyError",
    "apply_toggles",
    "default_catalog",
    "get_preset",
    "load_catalog",
    "random_selection",
    "selection_from_preset",
    "selection_from_query",
    "toggle_technology",
]
