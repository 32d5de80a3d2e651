"""StackForge command line.

Usage::

    stackforge plan my-app --select nextjs,typescript,tailwindcss,drizzle
    stackforge plan my-app --preset saas --format script > setup.sh
    stackforge plan my-app --random --seed 7
    stackforge command my-app --query "fe=nextjs&tl=typescript"
    stackforge validate --select biome,eslint
    stackforge tree my-api --select express,typescript,mongoose
    stackforge presets
    stackforge catalog
"""

from __future__ import annotations

import argparse
import random
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from stackforge.catalog import (
    Catalog,
    CatalogError,
    SelectionError,
    apply_toggles,
    load_catalog,
    random_selection,
    selection_from_preset,
    selection_from_query,
)
from stackforge.config import Config, OutputFormat
from stackforge.render import PlanRenderer
from stackforge.resolver import (
    ResolverProfile,
    StackPlan,
    build_plan,
    generate_single_command,
    generate_structure,
    render_structure,
    validate_selections,
)
from stackforge.resolver.models import Selection
from stackforge.utils import (
    console,
    is_safe_name,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    sanitize_name,
)


# ---------------------------------------------------------------------------
# Argument parsing
# ---------------------------------------------------------------------------


def _add_selection_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--select", "-s",
        action="append",
        default=[],
        help="Comma-separated technology ids to toggle (repeatable)",
    )
    parser.add_argument("--preset", "-p", default=None, help="Start from a preset id or name")
    parser.add_argument(
        "--random", action="store_true", help="Start from a random compatible stack"
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for --random")
    parser.add_argument(
        "--query", "-q",
        default=None,
        help="Share-link query string, e.g. 'fe=nextjs&tl=typescript,biome'",
    )
    parser.add_argument(
        "--profile",
        choices=[p.value for p in ResolverProfile],
        default=None,
        help="Generator profile (default: classic)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stackforge",
        description="StackForge -- turn a web-stack selection into setup commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  stackforge plan my-app --select nextjs,typescript,drizzle,postgresql\n"
            "  stackforge plan my-app --preset saas --format script\n"
            "  stackforge plan my-app --random --seed 7\n"
            "  stackforge validate --select biome,eslint\n"
        ),
    )
    parser.add_argument("--config", default=None, help="Load settings from a JSON config file")
    parser.add_argument("--catalog", default=None, help="Custom catalog YAML file")
    sub = parser.add_subparsers(dest="command_name", required=True)

    plan = sub.add_parser("plan", help="Print the full ordered command plan")
    plan.add_argument("name", nargs="?", default=None, help="Project name (default: my-app)")
    _add_selection_args(plan)
    plan.add_argument(
        "--format", "-f",
        choices=[f.value for f in OutputFormat],
        default=None,
        help="Output format (default: table)",
    )

    command = sub.add_parser("command", help="Print only the project-creation command")
    command.add_argument("name", nargs="?", default=None, help="Project name (default: my-app)")
    _add_selection_args(command)

    validate = sub.add_parser("validate", help="List soft compatibility warnings")
    _add_selection_args(validate)

    tree = sub.add_parser("tree", help="Preview the recommended directory layout")
    tree.add_argument("name", nargs="?", default=None, help="Project name (default: my-app)")
    _add_selection_args(tree)

    sub.add_parser("presets", help="List the available presets")
    sub.add_parser("catalog", help="List every selectable technology")
    return parser


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load_config(args: argparse.Namespace) -> Config:
    config = Config.load(Path(args.config)) if args.config else Config.from_env()
    updates: dict[str, object] = {}
    if getattr(args, "name", None):
        updates["project_name"] = args.name
    if getattr(args, "profile", None):
        updates["profile"] = ResolverProfile(args.profile)
    if getattr(args, "format", None):
        updates["output_format"] = OutputFormat(args.format)
    if args.catalog:
        updates["catalog_path"] = Path(args.catalog)
    return Config.model_validate({**config.model_dump(), **updates})


def _selection_from_args(args: argparse.Namespace, catalog: Catalog) -> Selection:
    selection: Selection = frozenset()
    if args.query:
        selection = selection_from_query(catalog, args.query)
    elif args.preset:
        selection = selection_from_preset(catalog, args.preset)
    elif args.random:
        selection = random_selection(catalog, random.Random(args.seed))

    tokens = [t.strip() for chunk in args.select for t in chunk.split(",") if t.strip()]
    return apply_toggles(catalog, tokens, selection)


def _print_plan_table(plan: StackPlan) -> None:
    if not is_safe_name(plan.project_name):
        print_warning(
            f"Project name {plan.project_name!r} is not shell-safe; "
            f"consider {sanitize_name(plan.project_name)!r}."
        )

    print_summary_table(
        {
            "Project": plan.project_name,
            "Layout": plan.layout.value,
            "Package manager": plan.package_manager.runner,
            "Profile": plan.profile.value,
            "Stack": ", ".join(plan.selection) or "(empty)",
        },
        title="Stack",
    )

    for warning in plan.warnings:
        print_warning(f"Warning: {warning}")

    table = Table(title="Setup Commands", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Step", no_wrap=True)
    table.add_column("Command")
    for index, step in enumerate(plan.steps, start=1):
        table.add_row(str(index), escape(step.label), escape(step.command))
    console.print(table)

    console.print(Panel(escape(plan.quick_command), title="Quick start", border_style="green"))


def _print_catalog(catalog: Catalog) -> None:
    table = Table(title="Technologies", show_header=True, header_style="bold cyan")
    table.add_column("Category", style="dim", no_wrap=True)
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Incompatible with")
    for category in catalog.categories:
        label = f"{category.name} (one)" if category.single_select else category.name
        for tech in category.technologies:
            table.add_row(label, tech.id, escape(tech.name), ", ".join(tech.incompatible_with))
    console.print(table)


def _print_presets(catalog: Catalog) -> None:
    table = Table(title="Presets", show_header=True, header_style="bold cyan")
    table.add_column("Id", no_wrap=True)
    table.add_column("Name")
    table.add_column("Technologies")
    for preset in catalog.presets:
        table.add_row(preset.id, preset.name, ", ".join(preset.selections))
    console.print(table)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def run(args: argparse.Namespace) -> None:
    """Execute a parsed command."""
    config = _load_config(args)
    catalog = load_catalog(config.catalog_path)

    if args.command_name == "catalog":
        _print_catalog(catalog)
        return
    if args.command_name == "presets":
        _print_presets(catalog)
        return

    selection = _selection_from_args(args, catalog)

    if args.command_name == "validate":
        warnings = validate_selections(selection)
        if not warnings:
            print_success("No compatibility issues found.")
        for warning in warnings:
            print_warning(warning)
        return

    if args.command_name == "command":
        sys.stdout.write(
            generate_single_command(config.project_name, selection, config.profile) + "\n"
        )
        return

    if args.command_name == "tree":
        entries = generate_structure(config.project_name, selection, config.profile)
        sys.stdout.write(render_structure(entries) + "\n")
        return

    plan = build_plan(config.project_name, selection, config.profile)
    if config.output_format is OutputFormat.JSON:
        sys.stdout.write(plan.model_dump_json(indent=2) + "\n")
    elif config.output_format is OutputFormat.SCRIPT:
        sys.stdout.write(PlanRenderer().render_script(plan))
    elif config.output_format is OutputFormat.MARKDOWN:
        sys.stdout.write(PlanRenderer().render_markdown(plan))
    else:
        _print_plan_table(plan)


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``stackforge`` / ``python -m stackforge``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        run(args)
    except (CatalogError, SelectionError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        sys.exit(1)
    except (OSError, ValidationError) as exc:
        print_error(f"Invalid configuration: {escape(str(exc))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
