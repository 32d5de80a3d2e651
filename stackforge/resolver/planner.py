"""Command plan generation.

Composes the resolver components into the final ordered plan::

    bootstrap -> navigation / server structure -> installs -> tool setup

Every call recomputes the plan from scratch; identical inputs give identical
output, since all orderings come from fixed tables rather than set iteration.
"""

from __future__ import annotations

from collections.abc import Iterable

from .bootstrap import select_bootstrap
from .dependencies import aggregate_dependencies, install_steps
from .layout import classify_layout, navigation_steps
from .models import (
    CommandStep,
    ResolverProfile,
    StackPlan,
    as_selection,
    resolve_project_name,
)
from .package_manager import resolve_package_manager
from .structure import generate_structure
from .tooling import sequence_init
from .validator import validate_selections


def generate_commands(
    project_name: str | None,
    selection: Iterable[str],
    profile: ResolverProfile = ResolverProfile.CLASSIC,
) -> list[CommandStep]:
    """Build the full ordered list of setup steps.

    Args:
        project_name: Directory / package name.  Blank names fall back to
            ``my-app``.
        selection: Selected technology tokens.  Unknown tokens are ignored.
        profile: Generator profile (see :class:`ResolverProfile`).

    Returns:
        The plan, bootstrap step first.
    """
    name = resolve_project_name(project_name)
    selected = as_selection(selection)
    pm = resolve_package_manager(selected)

    bootstrap = select_bootstrap(name, selected, pm, profile)
    layout = classify_layout(selected, profile)

    steps: list[CommandStep] = [bootstrap.step]
    steps += navigation_steps(name, selected, layout, bootstrap.needs_separate_navigate)
    deps = aggregate_dependencies(selected, bootstrap.capabilities, profile)
    steps += install_steps(deps, pm)
    steps += sequence_init(selected, pm, bootstrap.capabilities)
    return steps


def generate_single_command(
    project_name: str | None,
    selection: Iterable[str],
    profile: ResolverProfile = ResolverProfile.CLASSIC,
) -> str:
    """Return only the project-creation command, for quick copying."""
    selected = as_selection(selection)
    pm = resolve_package_manager(selected)
    return select_bootstrap(project_name, selected, pm, profile).step.command


def build_plan(
    project_name: str | None,
    selection: Iterable[str],
    profile: ResolverProfile = ResolverProfile.CLASSIC,
) -> StackPlan:
    """Everything the presentation layer needs for one configuration."""
    name = resolve_project_name(project_name)
    selected = as_selection(selection)
    steps = generate_commands(name, selected, profile)
    return StackPlan(
        project_name=name,
        profile=profile,
        selection=tuple(sorted(selected)),
        package_manager=resolve_package_manager(selected),
        layout=classify_layout(selected, profile),
        steps=tuple(steps),
        quick_command=steps[0].command,
        warnings=tuple(validate_selections(selected)),
        structure=tuple(generate_structure(name, selected, profile)),
    )
