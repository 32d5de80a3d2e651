"""Tests for layout classification and the post-bootstrap navigation step."""

from __future__ import annotations

import pytest

from stackforge.resolver.layout import (
    classify_layout,
    frontend_capable_tokens,
    frontend_tokens,
    has_standalone_backend,
    navigation_steps,
)
from stackforge.resolver.models import Layout, ResolverProfile


pytestmark = pytest.mark.unit


class TestClassifyLayout:
    @pytest.mark.parametrize(
        "tokens, expected",
        [
            ({"nextjs"}, Layout.FRONTEND_ONLY),
            ({"react-router", "zod"}, Layout.FRONTEND_ONLY),
            ({"express"}, Layout.BACKEND_ONLY),
            ({"hono", "drizzle"}, Layout.BACKEND_ONLY),
            ({"nextjs", "express"}, Layout.MONOREPO),
            ({"tanstack-router", "fastify"}, Layout.MONOREPO),
            ({"react-router", "elysia"}, Layout.MONOREPO),
        ],
    )
    def test_classification(self, tokens, expected):
        assert classify_layout(frozenset(tokens)) is expected

    def test_empty_selection_is_frontend_only(self):
        assert classify_layout(frozenset()) is Layout.FRONTEND_ONLY

    @pytest.mark.parametrize(
        "frontend",
        ["nuxt", "astro", "svelte", "solid", "tanstack-start", "expo-bare", "expo-uniwind"],
    )
    def test_other_frontends_with_backend_are_frontend_only(self, frontend):
        assert classify_layout(frozenset({frontend, "express"})) is Layout.FRONTEND_ONLY

    def test_backend_only_needs_no_frontend_at_all(self):
        assert classify_layout(frozenset({"hono", "zod", "no-frontend"})) is Layout.BACKEND_ONLY

    def test_tanstack_counts_only_in_delegated_profile(self):
        selection = frozenset({"tanstack", "hono"})
        assert classify_layout(selection) is Layout.BACKEND_ONLY
        assert classify_layout(selection, ResolverProfile.DELEGATED) is Layout.MONOREPO

    def test_frontend_capable_tokens(self):
        assert "tanstack" not in frontend_capable_tokens(ResolverProfile.CLASSIC)
        assert "tanstack" in frontend_capable_tokens(ResolverProfile.DELEGATED)

    def test_frontend_tokens_cover_frontend_capable_ones(self):
        for profile in ResolverProfile:
            assert set(frontend_capable_tokens(profile)) <= set(frontend_tokens(profile))

    def test_has_standalone_backend(self):
        assert has_standalone_backend(frozenset({"fastify"}))
        assert not has_standalone_backend(frozenset({"nextjs", "trpc"}))


class TestNavigationSteps:
    def test_skipped_when_bootstrap_already_navigated(self):
        selection = frozenset({"express"})
        assert navigation_steps("my-app", selection, Layout.BACKEND_ONLY, False) == []

    def test_plain_navigate(self):
        steps = navigation_steps("my-app", frozenset({"nextjs"}), Layout.FRONTEND_ONLY, True)
        assert len(steps) == 1
        assert steps[0].label == "Navigate to project"
        assert steps[0].command == "cd my-app"

    def test_monorepo_server_structure(self):
        selection = frozenset({"nextjs", "express"})
        steps = navigation_steps("shop", selection, Layout.MONOREPO, True)
        assert len(steps) == 1
        assert steps[0].label == "Create server folder structure"
        assert steps[0].command == (
            "cd shop && mkdir server && cd server && mkdir src && cd src && "
            "mkdir controllers routes middlewares lib && cd ../.."
        )

    def test_monorepo_with_mongoose_adds_models(self):
        selection = frozenset({"nextjs", "express", "mongoose"})
        steps = navigation_steps("shop", selection, Layout.MONOREPO, True)
        assert "mkdir controllers routes middlewares lib models" in steps[0].command
