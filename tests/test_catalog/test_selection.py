"""Tests for selection editing: toggles, presets and share links."""

from __future__ import annotations

import random

import pytest

from stackforge.catalog import (
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
from stackforge.catalog.models import Catalog, Category, Technology
from stackforge.catalog.selection import incompatibilities


pytestmark = pytest.mark.unit


# ---------------------------------------------------------------------------
# Toggle
# ---------------------------------------------------------------------------


class TestToggle:
    def test_add(self, catalog):
        assert toggle_technology(catalog, frozenset(), "nextjs") == {"nextjs"}

    def test_remove(self, catalog):
        assert toggle_technology(catalog, frozenset({"nextjs", "zod"}), "nextjs") == {"zod"}

    def test_input_not_mutated(self, catalog):
        selection = frozenset({"zod"})
        toggle_technology(catalog, selection, "nextjs")
        assert selection == {"zod"}

    def test_single_select_replaces_sibling(self, catalog):
        selection = frozenset({"nextjs", "typescript"})
        assert toggle_technology(catalog, selection, "nuxt") == {"nuxt", "typescript"}

    def test_single_select_replaces_none_option(self, catalog):
        assert toggle_technology(catalog, frozenset({"no-backend"}), "hono") == {"hono"}

    def test_multi_select_accumulates(self, catalog):
        selection = apply_toggles(catalog, ["drizzle", "prisma"])
        assert selection == {"drizzle", "prisma"}

    def test_unknown(self, catalog):
        with pytest.raises(UnknownTechnologyError) as exc_info:
            toggle_technology(catalog, frozenset(), "vue-cli")
        assert exc_info.value.tech_id == "vue-cli"

    def test_errors_share_a_base_class(self, catalog):
        with pytest.raises(SelectionError):
            toggle_technology(catalog, frozenset(), "vue-cli")


class TestIncompatibility:
    def test_candidate_lists_conflict(self, catalog):
        with pytest.raises(IncompatibleTechnologyError) as exc_info:
            toggle_technology(catalog, frozenset({"postgresql", "mysql"}), "mongoose")
        assert exc_info.value.conflicts == ["mysql", "postgresql"]

    def test_selected_token_lists_conflict(self, catalog):
        assert incompatibilities(catalog, frozenset({"lucia"}), "mongoose") == ["lucia"]

    def test_elysia_and_node(self, catalog):
        with pytest.raises(IncompatibleTechnologyError, match="'elysia' is incompatible with: node"):
            toggle_technology(catalog, frozenset({"node"}), "elysia")

    def test_removal_ignores_conflicts(self, catalog):
        selection = frozenset({"mongoose", "postgresql"})
        assert toggle_technology(catalog, selection, "mongoose") == {"postgresql"}

    def test_compatible(self, catalog):
        assert incompatibilities(catalog, frozenset({"postgresql", "drizzle"}), "neon") == []


class TestRandomSelection:
    SEEDS = range(40)

    def test_same_seed_same_stack(self, catalog):
        first = random_selection(catalog, random.Random(11))
        assert random_selection(catalog, random.Random(11)) == first

    def test_default_rng(self, catalog):
        assert random_selection(catalog)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_category_counts(self, catalog, seed):
        selection = random_selection(catalog, random.Random(seed))
        for category in catalog.categories:
            members = selection & set(category.technology_ids())
            if category.single_select:
                assert len(members) <= 1, category.id
            else:
                assert 1 <= len(members) <= 2, category.id

    @pytest.mark.parametrize("seed", SEEDS)
    def test_never_picks_none_options(self, catalog, seed):
        selection = random_selection(catalog, random.Random(seed))
        assert not any(catalog.technology(t).is_none_option for t in selection)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_result_is_compatible(self, catalog, seed):
        selection = random_selection(catalog, random.Random(seed))
        for tech_id in selection:
            assert incompatibilities(catalog, selection - {tech_id}, tech_id) == []

    @pytest.mark.parametrize("seed", SEEDS)
    def test_reachable_through_toggles(self, catalog, seed):
        selection = random_selection(catalog, random.Random(seed))
        assert apply_toggles(catalog, sorted(selection)) == selection

    def test_category_without_candidates_is_skipped(self):
        catalog = Catalog(
            categories=[
                Category(
                    id="runtime",
                    name="Runtime",
                    single_select=True,
                    technologies=[Technology(id="node", name="Node.js")],
                ),
                Category(
                    id="backend",
                    name="Backend",
                    single_select=True,
                    technologies=[
                        Technology(id="elysia", name="Elysia", incompatible_with=["node"]),
                        Technology(id="no-backend", name="No Backend"),
                    ],
                ),
            ]
        )
        assert random_selection(catalog, random.Random(0)) == {"node"}

    def test_multi_select_respects_mutual_exclusion(self):
        catalog = Catalog(
            categories=[
                Category(
                    id="orm",
                    name="ORM",
                    technologies=[
                        Technology(id="drizzle", name="Drizzle", incompatible_with=["mongoose"]),
                        Technology(id="mongoose", name="Mongoose"),
                    ],
                ),
            ]
        )
        for seed in range(20):
            assert len(random_selection(catalog, random.Random(seed))) == 1


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------


class TestPresets:
    def test_by_id(self, catalog):
        assert get_preset(catalog, "saas").name == "SaaS Starter"

    def test_by_slugified_name(self, catalog):
        assert get_preset(catalog, "most-used-stack").id == "most-used"

    def test_not_found(self, catalog):
        with pytest.raises(PresetNotFoundError, match="Preset not found: 'nope'"):
            get_preset(catalog, "nope")

    def test_selection(self, catalog):
        assert selection_from_preset(catalog, "fullstack-react") == {
            "tanstack-router",
            "hono",
            "typescript",
            "trpc",
            "sqlite",
            "drizzle",
            "better-auth",
        }


# ---------------------------------------------------------------------------
# Share links
# ---------------------------------------------------------------------------


class TestSelectionFromQuery:
    def test_category_params(self, catalog):
        selection = selection_from_query(catalog, "fe=nextjs&tl=typescript,biome&db=postgresql")
        assert selection == {"nextjs", "typescript", "biome", "postgresql"}

    def test_leading_question_mark(self, catalog):
        assert selection_from_query(catalog, "?be=hono") == {"hono"}

    def test_tokens_trimmed_and_blanks_dropped(self, catalog):
        assert selection_from_query(catalog, "tl=typescript,%20prettier,,") == {
            "typescript",
            "prettier",
        }

    def test_unknown_tokens_dropped(self, catalog):
        assert selection_from_query(catalog, "fe=nextjs,angular&ui=bootstrap") == {"nextjs"}

    def test_unknown_params_ignored(self, catalog):
        assert selection_from_query(catalog, "framework=nextjs&utm_source=x") == frozenset()

    def test_preset_wins(self, catalog):
        selection = selection_from_query(catalog, "preset=saas&fe=nuxt")
        assert selection == selection_from_preset(catalog, "saas")

    def test_unknown_preset_is_empty(self, catalog):
        assert selection_from_query(catalog, "preset=nope&fe=nextjs") == frozenset()

    def test_mapping_input(self, catalog):
        query = {"fe": "react-router", "tl": ["typescript", "eslint,prettier"]}
        assert selection_from_query(catalog, query) == {
            "react-router",
            "typescript",
            "eslint",
            "prettier",
        }

    def test_empty(self, catalog):
        assert selection_from_query(catalog, "") == frozenset()
