"""Runtime and development dependency aggregation.

Dependencies are derived from an ordered rule table.  Each rule is keyed by a
technology token and contributes either a fixed pair of package lists or a
computed one (ORM drivers, framework-specific auth bindings, TypeScript
tooling).  Rule order is install order; duplicates keep their first position.

Packages already installed by the bootstrap step's scaffolding CLI are left
out using the :class:`BootstrapCapabilities` record, and tokens handled by a
CLI add-on flow (``capabilities.subsumed_tokens``) are skipped entirely.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from .bootstrap import EXPO_TOKENS
from .layout import DELEGATED_FRONTEND_TOKENS, STANDALONE_BACKEND_TOKENS
from .models import (
    BootstrapCapabilities,
    CommandStep,
    DependencySet,
    PackageManagerProfile,
    ResolverProfile,
    Selection,
)


Packages = tuple[str, ...]
Contribution = tuple[Packages, Packages]

FRAMEWORKS_WITH_TAILWIND: tuple[str, ...] = (
    "nextjs",
    "expo-uniwind",
    "shadcn",
    "tanstack-router",
    "tanstack-start",
    "react-router",
    "astro",
    "svelte",
    "solid",
    "nuxt",
)

# Highest priority first; the first database token found picks the driver.
DRIZZLE_DRIVERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("postgresql", "neon"), "@neondatabase/serverless"),
    (("sqlite", "turso"), "@libsql/client"),
    (("mysql", "planetscale"), "@planetscale/database"),
)

REACT_ROUTER_TOKENS: tuple[str, ...] = ("tanstack-router", "react-router")

CLERK_BINDINGS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("nextjs",), "@clerk/nextjs"),
    (REACT_ROUTER_TOKENS, "@clerk/clerk-react"),
    (EXPO_TOKENS, "@clerk/clerk-expo"),
)

# ``tanstack`` is a React app and only exists under the delegated profile.
DELEGATED_CLERK_BINDINGS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("nextjs",), "@clerk/nextjs"),
    (REACT_ROUTER_TOKENS + DELEGATED_FRONTEND_TOKENS, "@clerk/clerk-react"),
    (EXPO_TOKENS, "@clerk/clerk-expo"),
)


@dataclass(frozen=True)
class DependencyContext:
    selection: Selection
    capabilities: BootstrapCapabilities
    profile: ResolverProfile = ResolverProfile.CLASSIC

    @property
    def delegated(self) -> bool:
        return self.profile is ResolverProfile.DELEGATED

    def has(self, token: str) -> bool:
        return token in self.selection

    def has_any(self, tokens: tuple[str, ...]) -> bool:
        return any(t in self.selection for t in tokens)


@dataclass(frozen=True)
class DependencyRule:
    """Packages contributed by one technology token."""

    token: str
    runtime: Packages = ()
    dev: Packages = ()
    when: Optional[Callable[[DependencyContext], bool]] = None
    compute: Optional[Callable[[DependencyContext], Contribution]] = None

    def contribute(self, ctx: DependencyContext) -> Contribution:
        if not ctx.has(self.token) or self.token in ctx.capabilities.subsumed_tokens:
            return (), ()
        if self.when is not None and not self.when(ctx):
            return (), ()
        if self.compute is not None:
            return self.compute(ctx)
        return self.runtime, self.dev


def _first_match(ctx: DependencyContext, table: tuple[tuple[tuple[str, ...], str], ...]) -> Packages:
    for tokens, package in table:
        if ctx.has_any(tokens):
            return (package,)
    return ()


# ---------------------------------------------------------------------------
# Computed contributions
# ---------------------------------------------------------------------------

def _express(ctx: DependencyContext) -> Contribution:
    dev = ("@types/express",) if ctx.has("typescript") else ()
    return ("express",), dev


def _drizzle(ctx: DependencyContext) -> Contribution:
    return ("drizzle-orm",) + _first_match(ctx, DRIZZLE_DRIVERS), ("drizzle-kit",)


def _clerk(ctx: DependencyContext) -> Contribution:
    bindings = DELEGATED_CLERK_BINDINGS if ctx.delegated else CLERK_BINDINGS
    return _first_match(ctx, bindings), ()


def _typescript(ctx: DependencyContext) -> Contribution:
    caps = ctx.capabilities
    dev: list[str] = []
    if not caps.includes_typescript:
        dev.append("typescript")
    # React Native projects do not use @types/node.
    if not ctx.has_any(EXPO_TOKENS) and not caps.includes_types_node:
        dev.append("@types/node")
    # Only standalone backends execute TypeScript directly.
    if ctx.has_any(STANDALONE_BACKEND_TOKENS):
        dev += ["tsx", "tsc-alias"]
    return (), tuple(dev)


def _prettier(ctx: DependencyContext) -> Contribution:
    dev: Packages = ("prettier",)
    frameworks = FRAMEWORKS_WITH_TAILWIND
    if ctx.delegated:
        frameworks += DELEGATED_FRONTEND_TOKENS
    if ctx.has("tailwindcss") or ctx.has_any(frameworks):
        dev += ("prettier-plugin-tailwindcss",)
    return (), dev


def _without_nextjs(ctx: DependencyContext) -> bool:
    return not ctx.has("nextjs")


# ---------------------------------------------------------------------------
# Rule table
# ---------------------------------------------------------------------------

RULES: tuple[DependencyRule, ...] = (
    # Routers
    DependencyRule(
        "tanstack-router",
        runtime=("@tanstack/react-router",),
        dev=("@tanstack/router-plugin",),
        when=lambda ctx: not ctx.has("tanstack-start"),
    ),
    DependencyRule("react-router", runtime=("react-router-dom",)),
    # Backend frameworks
    DependencyRule(
        "hono",
        runtime=("hono",),
        when=lambda ctx: not ctx.capabilities.includes_backend_framework,
    ),
    DependencyRule("express", compute=_express),
    DependencyRule("fastify", runtime=("fastify",)),
    # API layer
    DependencyRule(
        "trpc",
        runtime=("@trpc/server", "@trpc/client", "@trpc/react-query", "@tanstack/react-query"),
    ),
    DependencyRule(
        "orpc",
        runtime=("@orpc/server", "@orpc/client", "@orpc/react-query", "@tanstack/react-query"),
    ),
    # Database & ORM
    DependencyRule("drizzle", compute=_drizzle),
    DependencyRule("prisma", runtime=("@prisma/client",), dev=("prisma",)),
    DependencyRule("mongoose", runtime=("mongoose",)),
    # Auth
    DependencyRule("better-auth", runtime=("better-auth",)),
    DependencyRule("clerk", compute=_clerk),
    DependencyRule("authjs", runtime=("next-auth",)),
    DependencyRule("lucia", runtime=("lucia", "@lucia-auth/adapter-drizzle")),
    # UI kits
    DependencyRule("shadcn", runtime=("class-variance-authority", "clsx", "tailwind-merge")),
    DependencyRule("heroui", runtime=("@heroui/react", "framer-motion")),
    DependencyRule("radix", runtime=("@radix-ui/themes",)),
    DependencyRule("ark-ui", runtime=("@ark-ui/react",)),
    # Payments
    DependencyRule("stripe", runtime=("stripe", "@stripe/stripe-js")),
    DependencyRule("polar", runtime=("@polar-sh/nextjs",)),
    # Validation
    DependencyRule("zod", runtime=("zod",)),
    DependencyRule("valibot", runtime=("valibot",)),
    # Language tooling
    DependencyRule("typescript", compute=_typescript),
    DependencyRule("tailwindcss", dev=("tailwindcss", "@tailwindcss/vite"), when=_without_nextjs),
    DependencyRule("biome", dev=("@biomejs/biome",), when=_without_nextjs),
    DependencyRule(
        "eslint",
        dev=("eslint", "@eslint/js", "typescript-eslint"),
        when=lambda ctx: not ctx.capabilities.includes_eslint,
    ),
    DependencyRule("prettier", compute=_prettier),
    DependencyRule("husky", dev=("husky", "lint-staged")),
    DependencyRule("lefthook", dev=("lefthook",)),
    # Addons
    DependencyRule("dotenv", runtime=("dotenv",)),
    DependencyRule("ai-sdk", runtime=("ai", "@ai-sdk/openai")),
    # Expo styling
    DependencyRule("expo-uniwind", runtime=("nativewind",), dev=("tailwindcss",)),
    DependencyRule("expo-unistyles", runtime=("react-native-unistyles",)),
)


def _append_unique(target: list[str], packages: Packages) -> None:
    for package in packages:
        if package not in target:
            target.append(package)


def aggregate_dependencies(
    selection: Selection,
    capabilities: BootstrapCapabilities | None = None,
    profile: ResolverProfile = ResolverProfile.CLASSIC,
) -> DependencySet:
    """Collect runtime and dev packages for *selection*.

    Args:
        selection: The current selection.
        capabilities: What the bootstrap step already installed.  Defaults to
            an empty record (nothing pre-installed).
        profile: Generator profile.  Profile-only tokens such as the
            delegated ``tanstack`` are inert under `classic`.

    Returns:
        A :class:`DependencySet` with ordered, unique package names.
    """
    ctx = DependencyContext(
        selection=selection,
        capabilities=capabilities or BootstrapCapabilities(),
        profile=profile,
    )
    runtime: list[str] = []
    dev: list[str] = []
    for rule in RULES:
        rule_runtime, rule_dev = rule.contribute(ctx)
        _append_unique(runtime, rule_runtime)
        _append_unique(dev, rule_dev)
    return DependencySet(runtime=tuple(runtime), dev=tuple(dev))


def install_steps(deps: DependencySet, pm: PackageManagerProfile) -> list[CommandStep]:
    """At most two install steps: runtime first, then dev."""
    steps: list[CommandStep] = []
    if deps.runtime:
        steps.append(
            CommandStep(
                label="Install dependencies",
                command=f"{pm.add_command} {' '.join(deps.runtime)}",
                description="Install project dependencies",
            )
        )
    if deps.dev:
        steps.append(
            CommandStep(
                label="Install dev dependencies",
                command=f"{pm.add_dev_command} {' '.join(deps.dev)}",
                description=(
                    "Install additional development dependencies not included by the framework"
                ),
            )
        )
    return steps
