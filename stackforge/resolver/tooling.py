"""Post-install tool initialisation steps."""

from __future__ import annotations

from .layout import has_standalone_backend
from .models import BootstrapCapabilities, CommandStep, PackageManagerProfile, Selection


def _biome_command(pm: PackageManagerProfile) -> str:
    package = "@biomejs/biome" if pm.executor == "npx" else "biome"
    return f"{pm.executor} {package} init"


def sequence_init(
    selection: Selection,
    pm: PackageManagerProfile,
    capabilities: BootstrapCapabilities | None = None,
) -> list[CommandStep]:
    """Return the tool setup steps for *selection* in their fixed order.

    UI kit, TypeScript config (standalone backends), ORM, linter, git hooks,
    then git itself.  Anything the bootstrap CLI already set up through its
    own add-on flow is skipped.
    """
    caps = capabilities or BootstrapCapabilities()
    subsumed = caps.subsumed_tokens
    steps: list[CommandStep] = []

    if "shadcn" in selection and "shadcn" not in subsumed:
        steps.append(
            CommandStep(
                label="Initialize shadcn/ui",
                command=f"{pm.executor} shadcn@latest init",
                description="Set up shadcn/ui components",
            )
        )

    if "typescript" in selection and has_standalone_backend(selection):
        steps.append(
            CommandStep(
                label="Initialize TypeScript",
                command=f"{pm.executor} tsc --init",
                description="Generate tsconfig.json",
            )
        )

    if "prisma" in selection and "prisma" not in subsumed:
        steps.append(
            CommandStep(
                label="Initialize Prisma",
                command=f"{pm.executor} prisma init",
                description="Set up Prisma ORM",
            )
        )

    if "biome" in selection and "nextjs" not in selection and "biome" not in subsumed:
        steps.append(
            CommandStep(
                label="Initialize Biome",
                command=_biome_command(pm),
                description="Set up Biome configuration",
            )
        )

    if "husky" in selection:
        steps.append(
            CommandStep(
                label="Initialize Husky",
                command=f"{pm.executor} husky init",
                description="Set up Git hooks with Husky",
            )
        )
    elif "lefthook" in selection:
        steps.append(
            CommandStep(
                label="Initialize Lefthook",
                command=f"{pm.executor} lefthook install",
                description="Set up Git hooks with Lefthook",
            )
        )

    if "git-init" in selection and not caps.manages_git:
        steps.append(
            CommandStep(
                label="Initialize Git",
                command="git init",
                description="Initialize Git repository",
            )
        )

    return steps
