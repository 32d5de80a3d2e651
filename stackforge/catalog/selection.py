"""Building selections: validated toggles, presets and share links.

These are the only places a selection is created or edited.  Single-select
and hard incompatibility constraints are enforced here; the resolver itself
tolerates any set of tokens.
"""

from __future__ import annotations

import random
import re
from collections.abc import Iterable, Mapping
from urllib.parse import parse_qs

from stackforge.resolver.models import Selection, as_selection

from .models import Catalog, Preset


PRESET_PARAM = "preset"


class SelectionError(Exception):
    """Base class for rejected selection edits."""


class UnknownTechnologyError(SelectionError):
    """Raised when a token is not in the catalog."""

    def __init__(self, tech_id: str) -> None:
        self.tech_id = tech_id
        super().__init__(f"Unknown technology: {tech_id!r}")


class IncompatibleTechnologyError(SelectionError):
    """Raised when adding a token that conflicts with the current selection."""

    def __init__(self, tech_id: str, conflicts: list[str]) -> None:
        self.tech_id = tech_id
        self.conflicts = conflicts
        super().__init__(f"{tech_id!r} is incompatible with: {', '.join(conflicts)}")


class PresetNotFoundError(SelectionError):
    """Raised when no preset matches the requested id or name."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Preset not found: {key!r}")


# ---------------------------------------------------------------------------
# Toggle
# ---------------------------------------------------------------------------


def incompatibilities(catalog: Catalog, selection: Selection, tech_id: str) -> list[str]:
    """Selected tokens that cannot coexist with *tech_id*, in sorted order.

    The relation is checked both ways: the candidate's own list and the lists
    of everything already selected.
    """
    tech = catalog.technology(tech_id)
    conflicts: set[str] = set()
    if tech is not None:
        conflicts.update(t for t in tech.incompatible_with if t in selection)
    for selected_id in selection:
        selected = catalog.technology(selected_id)
        if selected is not None and tech_id in selected.incompatible_with:
            conflicts.add(selected_id)
    return sorted(conflicts)


def toggle_technology(catalog: Catalog, selection: Selection, tech_id: str) -> Selection:
    """Return a new selection with *tech_id* toggled.

    A selected token is removed.  Otherwise it is added, after clearing the
    other members of its category when that category is single-select.

    Raises:
        UnknownTechnologyError: If *tech_id* is not in the catalog.
        IncompatibleTechnologyError: If adding it would break an
            incompatibility constraint.
    """
    category = catalog.category_of(tech_id)
    if category is None:
        raise UnknownTechnologyError(tech_id)

    if tech_id in selection:
        return selection - {tech_id}

    conflicts = incompatibilities(catalog, selection, tech_id)
    if conflicts:
        raise IncompatibleTechnologyError(tech_id, conflicts)

    updated = set(selection)
    if category.single_select:
        updated.difference_update(category.technology_ids())
    updated.add(tech_id)
    return frozenset(updated)


def apply_toggles(
    catalog: Catalog, tech_ids: Iterable[str], selection: Selection = frozenset()
) -> Selection:
    """Toggle each of *tech_ids* in turn, starting from *selection*."""
    for tech_id in tech_ids:
        selection = toggle_technology(catalog, selection, tech_id)
    return selection


def random_selection(catalog: Catalog, rng: random.Random | None = None) -> Selection:
    """Pick a random stack that a sequence of valid toggles could have built.

    Categories are visited in catalog order.  Candidates are the category's
    non-``no-*`` technologies compatible with everything picked so far; a
    single-select category contributes one of them, a multi-select category
    one or two.  Categories with no candidate are skipped.

    Args:
        catalog: Catalog to draw from.
        rng: Source of randomness; pass a seeded ``random.Random`` for a
            reproducible pick.
    """
    rng = rng or random.Random()
    picked: set[str] = set()
    for category in catalog.categories:
        candidates = [
            tech.id
            for tech in category.technologies
            if not tech.is_none_option
            and not incompatibilities(catalog, frozenset(picked), tech.id)
        ]
        if not candidates:
            continue

        wanted = 1 if category.single_select else min(rng.randint(1, 2), len(candidates))
        for tech_id in rng.sample(candidates, len(candidates)):
            if wanted == 0:
                break
            # members of the same category may exclude each other
            if incompatibilities(catalog, frozenset(picked), tech_id):
                continue
            picked.add(tech_id)
            wanted -= 1
    return frozenset(picked)


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


def _slug(value: str) -> str:
    return re.sub(r"\s+", "-", value.strip().lower())


def get_preset(catalog: Catalog, key: str) -> Preset:
    """Find a preset by id or by its slugified name (``"SaaS Starter"`` -> ``saas-starter``)."""
    for preset in catalog.presets:
        if preset.id == key or _slug(preset.name) == key:
            return preset
    raise PresetNotFoundError(key)


def selection_from_preset(catalog: Catalog, key: str) -> Selection:
    """Load a preset wholesale; presets replace, they are never merged."""
    return as_selection(get_preset(catalog, key).selections)


# ---------------------------------------------------------------------------
# Share links
# ---------------------------------------------------------------------------


def _param_values(query: str | Mapping[str, str | list[str]]) -> dict[str, list[str]]:
    if isinstance(query, str):
        return parse_qs(query.lstrip("?"), keep_blank_values=True)
    values: dict[str, list[str]] = {}
    for key, value in query.items():
        values[key] = [value] if isinstance(value, str) else list(value)
    return values


def selection_from_query(
    catalog: Catalog, query: str | Mapping[str, str | list[str]]
) -> Selection:
    """Decode a share-link query into a selection.

    A ``preset`` parameter takes precedence over the category parameters;
    an unknown preset decodes to an empty selection.  Category values are comma-separated token lists;
    tokens are trimmed and empty or unknown tokens are dropped silently.

    Args:
        catalog: Catalog providing the category share keys.
        query: Raw query string (``"fe=nextjs&tl=typescript,biome"``) or an
            already-parsed mapping.

    Returns:
        The decoded selection (possibly empty).
    """
    params = _param_values(query)

    preset_keys = params.get(PRESET_PARAM)
    if preset_keys:
        try:
            return selection_from_preset(catalog, preset_keys[0].strip())
        except PresetNotFoundError:
            return frozenset()

    known = catalog.known_ids()
    tokens: list[str] = []
    for key in catalog.share_keys():
        for value in params.get(key, []):
            tokens.extend(t.strip() for t in value.split(","))
    return as_selection(t for t in tokens if t in known)
