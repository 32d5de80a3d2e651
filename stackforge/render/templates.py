"""Jinja2 rendering of command plans.

Provides the PlanRenderer class which loads Jinja2 templates from the
``stackforge/render/templates/`` directory and renders a :class:`StackPlan`
as a runnable shell script or a Markdown document.  Rendering only produces
text; writing it anywhere is the caller's business.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from stackforge.resolver.models import StackPlan
from stackforge.resolver.structure import render_structure


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

SCRIPT_TEMPLATE = "setup.sh.j2"
MARKDOWN_TEMPLATE = "plan.md.j2"


class PlanRenderer:
    """Renders plans through Jinja2 templates.

    Templates receive the plan as ``plan`` and the pre-rendered directory tree
    as ``structure``.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context."""
        template = self.env.get_template(template_path)
        return template.render(**context)

    def _context(self, plan: StackPlan) -> dict[str, Any]:
        return {"plan": plan, "structure": render_structure(list(plan.structure))}

    def render_script(self, plan: StackPlan) -> str:
        """Render *plan* as a POSIX shell script that runs every step in order."""
        return self.render(SCRIPT_TEMPLATE, self._context(plan))

    def render_markdown(self, plan: StackPlan) -> str:
        """Render *plan* as a Markdown document."""
        return self.render(MARKDOWN_TEMPLATE, self._context(plan))
