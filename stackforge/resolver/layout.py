"""Project layout classification and the navigation step that follows bootstrap."""

from __future__ import annotations

from .bootstrap import EXPO_TOKENS, backend_folders
from .models import CommandStep, Layout, ResolverProfile, Selection


# Frontends that can share a project root with a ``server/`` backend.
FRONTEND_CAPABLE_TOKENS: tuple[str, ...] = ("nextjs", "tanstack-router", "react-router")
DELEGATED_FRONTEND_TOKENS: tuple[str, ...] = ("tanstack",)
STANDALONE_BACKEND_TOKENS: tuple[str, ...] = ("express", "fastify", "hono", "elysia")

# Every token whose bootstrap produces a frontend app.
FRONTEND_TOKENS: tuple[str, ...] = (
    "nextjs",
    "nuxt",
    "astro",
    "svelte",
    "solid",
    "tanstack-start",
    "tanstack-router",
    "react-router",
) + EXPO_TOKENS


def frontend_capable_tokens(profile: ResolverProfile) -> tuple[str, ...]:
    if profile is ResolverProfile.DELEGATED:
        return FRONTEND_CAPABLE_TOKENS + DELEGATED_FRONTEND_TOKENS
    return FRONTEND_CAPABLE_TOKENS


def frontend_tokens(profile: ResolverProfile) -> tuple[str, ...]:
    if profile is ResolverProfile.DELEGATED:
        return FRONTEND_TOKENS + DELEGATED_FRONTEND_TOKENS
    return FRONTEND_TOKENS


def has_standalone_backend(selection: Selection) -> bool:
    return any(t in selection for t in STANDALONE_BACKEND_TOKENS)


def classify_layout(
    selection: Selection, profile: ResolverProfile = ResolverProfile.CLASSIC
) -> Layout:
    """Classify *selection* as frontend-only, backend-only or monorepo.

    Only frontend-capable tokens combine with a backend into a monorepo.  Any
    other frontend (Nuxt, Astro, Expo, ...) keeps the project frontend-only;
    backend-only means no frontend token at all.
    """
    backend = has_standalone_backend(selection)
    if backend and any(t in selection for t in frontend_capable_tokens(profile)):
        return Layout.MONOREPO
    if backend and not any(t in selection for t in frontend_tokens(profile)):
        return Layout.BACKEND_ONLY
    return Layout.FRONTEND_ONLY


def navigation_steps(
    project_name: str,
    selection: Selection,
    layout: Layout,
    needs_separate_navigate: bool,
) -> list[CommandStep]:
    """Steps that move the shell into the project root after bootstrap.

    When the bootstrap command already changed directory nothing is emitted.
    A monorepo gets a ``server/src`` skeleton instead of a plain ``cd``; the
    command ends back in the project root.
    """
    if not needs_separate_navigate:
        return []

    if layout is Layout.MONOREPO:
        command = (
            f"cd {project_name} && mkdir server && cd server && mkdir src && cd src && "
            f"mkdir {backend_folders(selection)} && cd ../.."
        )
        return [
            CommandStep(
                label="Create server folder structure",
                command=command,
                description="Create server folder with recommended structure for monorepo setup",
            )
        ]

    return [
        CommandStep(
            label="Navigate to project",
            command=f"cd {project_name}",
            description="Change to project directory",
        )
    ]
