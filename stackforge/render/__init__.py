"""Text renderers for command plans (shell script, Markdown)."""

from stackforge.render.templates import PlanRenderer

__all__ = ["PlanRenderer"]
