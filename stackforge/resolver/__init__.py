"""Stack configuration resolver and command-plan generator.

Turns a set of selected technology tokens into an ordered list of shell
commands that scaffold a matching project.  Nothing here executes commands or
touches the filesystem; the output is a data plan only.

Quick usage::

    from stackforge.resolver import generate_commands, validate_selections

    steps = generate_commands("my-app", {"nextjs", "typescript", "drizzle"})
    warnings = validate_selections({"biome", "eslint"})
"""

from stackforge.resolver.bootstrap import select_bootstrap
from stackforge.resolver.dependencies import aggregate_dependencies, install_steps
from stackforge.resolver.layout import classify_layout, navigation_steps
from stackforge.resolver.models import (
    BootstrapCapabilities,
    BootstrapResult,
    CommandStep,
    DependencySet,
    Layout,
    PackageManagerProfile,
    ResolverProfile,
    StackPlan,
    StructureEntry,
    as_selection,
)
from stackforge.resolver.package_manager import resolve_package_manager
from stackforge.resolver.planner import build_plan, generate_commands, generate_single_command
from stackforge.resolver.structure import generate_structure, render_structure
from stackforge.resolver.tooling import sequence_init
from stackforge.resolver.validator import validate_selections

__all__ = [
    "BootstrapCapabilities",
    "BootstrapResult",
    "CommandStep",
    "DependencySet",
    "Layout",
    "PackageManagerProfile",
    "ResolverProfile",
    "StackPlan",
    "StructureEntry",
    "aggregate_dependencies",
    "as_selection",
    "build_plan",
    "classify_layout",
    "generate_commands",
    "generate_single_command",
    "generate_structure",
    "install_steps",
    "navigation_steps",
    "render_structure",
    "resolve_package_manager",
    "select_bootstrap",
    "sequence_init",
    "validate_selections",
]
