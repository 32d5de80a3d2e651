"""Selection of the primary project-creation command.

The bootstrap step is chosen from an ordered strategy table: each entry pairs
a predicate over the selection with a builder, and the first matching entry
wins.  Meta-framework CLIs come first, then SPA template generators, then
standalone backend generators, and finally a generic ``mkdir && cd && init``
fallback.  A backend selected alongside a frontend is folded in later as a
``server/`` structure step (see :mod:`stackforge.resolver.layout`).

Builders return a :class:`BootstrapResult` carrying a structured capability
record that tells the dependency aggregator and tool sequencer what the
scaffolding CLI already installed or configured.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .models import (
    BootstrapCapabilities,
    BootstrapResult,
    CommandStep,
    PackageManagerProfile,
    ResolverProfile,
    Selection,
    resolve_project_name,
)


EXPO_TOKENS: tuple[str, ...] = ("expo-bare", "expo-uniwind", "expo-unistyles")
BARE_BACKEND_TOKENS: tuple[str, ...] = ("express", "fastify")

# Present anywhere in the selection, these tokens mean the frontend CLI ships
# TypeScript and @types/node, whichever branch fired.
_BUNDLED_TYPESCRIPT_TOKENS: tuple[str, ...] = ("nuxt", "astro", "tanstack-start")

# token -> add-on name understood by create-tsrouter-app
TANSTACK_ADD_ONS: tuple[tuple[str, str], ...] = (
    ("shadcn", "shadcn"),
    ("trpc", "tRPC"),
    ("orpc", "oRPC"),
    ("drizzle", "drizzle"),
    ("prisma", "prisma"),
    ("better-auth", "better-auth"),
    ("clerk", "clerk"),
)


@dataclass(frozen=True)
class BootstrapContext:
    project_name: str
    selection: Selection
    pm: PackageManagerProfile

    def has(self, token: str) -> bool:
        return token in self.selection

    def has_any(self, tokens: tuple[str, ...]) -> bool:
        return any(t in self.selection for t in tokens)


Builder = Callable[[BootstrapContext], BootstrapResult]


@dataclass(frozen=True)
class BootstrapStrategy:
    """One entry of the priority table."""

    name: str
    matches: Callable[[Selection], bool]
    build: Builder
    profiles: frozenset[ResolverProfile] = frozenset(ResolverProfile)


def _token(token: str) -> Callable[[Selection], bool]:
    return lambda selection: token in selection


def _any_token(*tokens: str) -> Callable[[Selection], bool]:
    return lambda selection: any(t in selection for t in tokens)


def _step(label: str, command: str, description: str) -> CommandStep:
    return CommandStep(label=label, command=command, description=description)


# ---------------------------------------------------------------------------
# Meta-framework builders
# ---------------------------------------------------------------------------

def _nextjs(ctx: BootstrapContext) -> BootstrapResult:
    pm = ctx.pm
    if pm.executor == "npx":
        command = f"npx create-next-app@latest {ctx.project_name}"
    else:
        command = f"{pm.runner} create next-app@latest {ctx.project_name}"

    typescript = ctx.has("typescript")
    flags = [
        "--typescript" if typescript else "--js",
        "--tailwind" if ctx.has("tailwindcss") else "--no-tailwind",
    ]
    if ctx.has("eslint"):
        flags.append("--eslint")
    elif ctx.has("biome"):
        flags.append("--biome")
    else:
        flags.append("--no-eslint")

    return BootstrapResult(
        step=_step(
            "Create Next.js project",
            f"{command} {' '.join(flags)}",
            "Initialize a new Next.js project",
        ),
        capabilities=BootstrapCapabilities(
            includes_typescript=typescript,
            includes_types_node=typescript,
            includes_eslint=ctx.has("eslint"),
        ),
    )


def _nuxt(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create Nuxt project",
            f"{ctx.pm.executor} nuxi@latest init {ctx.project_name}",
            "Initialize a new Nuxt 3 project",
        ),
        capabilities=BootstrapCapabilities(includes_typescript=True, includes_types_node=True),
    )


def _astro(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create Astro project",
            f"{ctx.pm.runner} create astro@latest {ctx.project_name}",
            "Initialize a new Astro project",
        ),
        capabilities=BootstrapCapabilities(includes_typescript=True, includes_types_node=True),
    )


def _svelte(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create Svelte project",
            f"{ctx.pm.executor} sv create {ctx.project_name}",
            "Initialize a new SvelteKit project",
        ),
        capabilities=BootstrapCapabilities(includes_typescript=True),
    )


def _solid(ctx: BootstrapContext) -> BootstrapResult:
    typescript = ctx.has("typescript")
    template = "ts" if typescript else "js"
    description = (
        "Initialize a new Solid project with TypeScript"
        if typescript
        else "Initialize a new Solid project"
    )
    return BootstrapResult(
        step=_step(
            "Create Solid project",
            f"{ctx.pm.executor} degit solidjs/templates/{template} {ctx.project_name}",
            description,
        ),
        capabilities=BootstrapCapabilities(includes_typescript=typescript),
    )


def _tanstack_delegated(ctx: BootstrapContext) -> BootstrapResult:
    """Consolidated TanStack option that hands add-ons to create-tsrouter-app."""
    typescript = ctx.has("typescript")
    flags = ["--template", "file-router" if typescript else "javascript"]
    subsumed: set[str] = set()

    if ctx.has("tailwindcss"):
        flags.append("--tailwind")
        subsumed.add("tailwindcss")

    if ctx.has("eslint"):
        flags += ["--toolchain", "eslint"]
        subsumed.add("eslint")
    elif ctx.has("biome"):
        flags += ["--toolchain", "biome"]
        subsumed.add("biome")

    flags += ["--package-manager", ctx.pm.runner]

    add_ons = [name for token, name in TANSTACK_ADD_ONS if ctx.has(token)]
    subsumed.update(token for token, _ in TANSTACK_ADD_ONS if ctx.has(token))
    if add_ons:
        flags += ["--add-ons", ",".join(add_ons)]

    if not ctx.has("git-init"):
        flags.append("--no-git")

    return BootstrapResult(
        step=_step(
            "Create TanStack project",
            f"{ctx.pm.executor} create-tsrouter-app@latest {ctx.project_name} {' '.join(flags)}",
            "Initialize a new TanStack Router project with the selected add-ons",
        ),
        capabilities=BootstrapCapabilities(
            includes_typescript=typescript,
            includes_types_node=typescript,
            includes_eslint=ctx.has("eslint"),
            manages_git=True,
            subsumed_tokens=frozenset(subsumed),
        ),
    )


def _tanstack_start(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create TanStack Start project",
            f"{ctx.pm.executor} create-tanstack-app@latest {ctx.project_name}",
            "Initialize a new TanStack Start project",
        ),
        capabilities=BootstrapCapabilities(includes_typescript=True, includes_types_node=True),
    )


# ---------------------------------------------------------------------------
# SPA template builders
# ---------------------------------------------------------------------------

def _vite_react(router_label: str) -> Builder:
    def build(ctx: BootstrapContext) -> BootstrapResult:
        typescript = ctx.has("typescript")
        template = "react-ts" if typescript else "react"
        description = (
            "Initialize a new React project with Vite and TypeScript"
            if typescript
            else "Initialize a new React project with Vite"
        )
        return BootstrapResult(
            step=_step(
                f"Create React + Vite project with {router_label}",
                f"{ctx.pm.runner} create vite@latest {ctx.project_name} -- --template {template}",
                description,
            ),
            capabilities=BootstrapCapabilities(includes_typescript=typescript),
        )

    return build


def _expo(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create Expo project",
            f"{ctx.pm.executor} create-expo-app@latest {ctx.project_name} --template default",
            "Initialize a new Expo project",
        ),
    )


# ---------------------------------------------------------------------------
# Backend builders
# ---------------------------------------------------------------------------

def _hono(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create Hono project",
            f"{ctx.pm.runner} create hono@latest {ctx.project_name}",
            "Initialize a new Hono project",
        ),
        capabilities=BootstrapCapabilities(
            includes_types_node=True, includes_backend_framework=True
        ),
    )


def _elysia(ctx: BootstrapContext) -> BootstrapResult:
    return BootstrapResult(
        step=_step(
            "Create Elysia project",
            f"bun create elysia {ctx.project_name}",
            "Initialize a new Elysia project (requires Bun)",
        ),
        capabilities=BootstrapCapabilities(
            includes_types_node=True, includes_backend_framework=True
        ),
    )


def backend_folders(selection: Selection) -> str:
    """Directories created under a backend ``src/`` folder."""
    folders = ["controllers", "routes", "middlewares", "lib"]
    if "mongoose" in selection:
        folders.append("models")
    return " ".join(folders)


def _bare_backend(ctx: BootstrapContext) -> BootstrapResult:
    name = ctx.project_name
    command = (
        f"mkdir {name} && cd {name} && mkdir src && cd src && "
        f"mkdir {backend_folders(ctx.selection)} && cd .. && {ctx.pm.init_command}"
    )
    return BootstrapResult(
        step=_step(
            "Initialize Node.js project",
            command,
            "Create a new Node.js project directory with recommended structure "
            "and initialize package.json",
        ),
        needs_separate_navigate=False,
    )


def _generic(ctx: BootstrapContext) -> BootstrapResult:
    name = ctx.project_name
    return BootstrapResult(
        step=_step(
            "Initialize project",
            f"mkdir {name} && cd {name} && {ctx.pm.init_command}",
            "Create a new project directory and initialize package.json",
        ),
        needs_separate_navigate=False,
    )


# ---------------------------------------------------------------------------
# Priority table
# ---------------------------------------------------------------------------

STRATEGIES: tuple[BootstrapStrategy, ...] = (
    BootstrapStrategy("nextjs", _token("nextjs"), _nextjs),
    BootstrapStrategy("nuxt", _token("nuxt"), _nuxt),
    BootstrapStrategy("astro", _token("astro"), _astro),
    BootstrapStrategy("svelte", _token("svelte"), _svelte),
    BootstrapStrategy("solid", _token("solid"), _solid),
    BootstrapStrategy(
        "tanstack",
        _token("tanstack"),
        _tanstack_delegated,
        profiles=frozenset({ResolverProfile.DELEGATED}),
    ),
    BootstrapStrategy("tanstack-start", _token("tanstack-start"), _tanstack_start),
    BootstrapStrategy("tanstack-router", _token("tanstack-router"), _vite_react("TanStack Router")),
    BootstrapStrategy("react-router", _token("react-router"), _vite_react("React Router")),
    BootstrapStrategy("expo", _any_token(*EXPO_TOKENS), _expo),
    BootstrapStrategy("hono", _token("hono"), _hono),
    BootstrapStrategy("elysia", _token("elysia"), _elysia),
    BootstrapStrategy("node-backend", _any_token(*BARE_BACKEND_TOKENS), _bare_backend),
)


def strategies_for(profile: ResolverProfile) -> tuple[BootstrapStrategy, ...]:
    """The priority table as seen by *profile*."""
    return tuple(s for s in STRATEGIES if profile in s.profiles)


def _implied_capabilities(selection: Selection) -> BootstrapCapabilities:
    if any(t in selection for t in _BUNDLED_TYPESCRIPT_TOKENS):
        return BootstrapCapabilities(includes_typescript=True, includes_types_node=True)
    return BootstrapCapabilities()


def select_bootstrap(
    project_name: str | None,
    selection: Selection,
    pm: PackageManagerProfile,
    profile: ResolverProfile = ResolverProfile.CLASSIC,
) -> BootstrapResult:
    """Build the single project-creation step for *selection*.

    Exactly one strategy fires; when none matches, the generic fallback runs.
    """
    ctx = BootstrapContext(
        project_name=resolve_project_name(project_name), selection=selection, pm=pm
    )
    build: Builder = _generic
    for strategy in strategies_for(profile):
        if strategy.matches(selection):
            build = strategy.build
            break

    result = build(ctx)
    return result.model_copy(
        update={"capabilities": result.capabilities.merge(_implied_capabilities(selection))}
    )
