"""Package-manager resolution.

The profile is computed once per plan and passed verbatim to every component
that needs to install or execute a package.
"""

from __future__ import annotations

from .models import PackageManagerProfile, Selection


NPM = PackageManagerProfile(
    runner="npm",
    executor="npx",
    add_command="npm install",
    add_dev_command="npm install -D",
)

# Highest priority first.  Only one should be selected, but a crafted share
# link can carry several.
PACKAGE_MANAGERS: tuple[tuple[str, PackageManagerProfile], ...] = (
    (
        "bun-pm",
        PackageManagerProfile(
            runner="bun", executor="bunx", add_command="bun add", add_dev_command="bun add -d"
        ),
    ),
    (
        "pnpm",
        PackageManagerProfile(
            runner="pnpm",
            executor="pnpm exec",
            add_command="pnpm add",
            add_dev_command="pnpm add -D",
        ),
    ),
    (
        "yarn",
        PackageManagerProfile(
            runner="yarn",
            executor="yarn dlx",
            add_command="yarn add",
            add_dev_command="yarn add -D",
        ),
    ),
)


def resolve_package_manager(selection: Selection) -> PackageManagerProfile:
    """Pick the package manager for *selection*, falling back to npm."""
    for token, profile in PACKAGE_MANAGERS:
        if token in selection:
            return profile
    return NPM
