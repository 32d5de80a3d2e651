"""Soft compatibility checks for a selection.

Hard incompatibilities are blocked when the selection is edited (see
``stackforge.catalog.selection``).  The rules here only flag combinations that
are allowed but probably unintended: two linters, two ORMs, two git-hook
managers, an auth library bound to a framework that is not selected, and so on.

Each rule is a plain function ``(selection) -> str | None`` and the rule table
order is the output order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Optional

from .models import Selection, as_selection


ORM_TOKENS: tuple[str, ...] = ("drizzle", "prisma", "mongoose")
ROUTER_TOKENS: tuple[str, ...] = ("tanstack-router", "react-router")

# auth token -> (required framework token, library label, framework label)
FRAMEWORK_BOUND_AUTH: dict[str, tuple[str, str, str]] = {
    "authjs": ("nextjs", "Auth.js (next-auth)", "Next.js"),
}

Rule = Callable[[Selection], Optional[str]]


def _selected(selection: Selection, tokens: Iterable[str]) -> list[str]:
    """Members of *tokens* present in *selection*, in table order."""
    return [t for t in tokens if t in selection]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------

def _linter_conflict(selection: Selection) -> Optional[str]:
    if "biome" in selection and "eslint" in selection:
        return "Biome (biome) and ESLint (eslint) may conflict. Consider choosing only one."
    return None


def _redundant_orms(selection: Selection) -> Optional[str]:
    orms = _selected(selection, ORM_TOKENS)
    if len(orms) > 1:
        return f"Multiple ORMs selected: {', '.join(orms)}. Consider using only one."
    return None


def _redundant_git_hooks(selection: Selection) -> Optional[str]:
    if "husky" in selection and "lefthook" in selection:
        return "Husky and Lefthook are both Git hook managers. Choose only one."
    return None


def _auth_framework_mismatch(selection: Selection) -> Optional[str]:
    messages = [
        f"{library} is designed primarily for {framework}."
        for token, (required, library, framework) in FRAMEWORK_BOUND_AUTH.items()
        if token in selection and required not in selection
    ]
    return " ".join(messages) or None


def _redundant_routers(selection: Selection) -> Optional[str]:
    routers = _selected(selection, ROUTER_TOKENS)
    if len(routers) > 1:
        return f"Multiple routers selected: {', '.join(routers)}. Choose only one."
    return None


def _router_without_host(selection: Selection) -> Optional[str]:
    """TanStack Router without a host framework.

    Never warns: the bootstrap step gives a bare router a React + Vite host.
    """
    return None


RULES: tuple[Rule, ...] = (
    _linter_conflict,
    _redundant_orms,
    _redundant_git_hooks,
    _auth_framework_mismatch,
    _redundant_routers,
    _router_without_host,
)


def validate_selections(selection: Iterable[str]) -> list[str]:
    """Return the soft warnings for *selection*, in rule order.

    Pure and total: never raises, returns ``[]`` when nothing is wrong.
    """
    normalised = as_selection(selection)
    warnings: list[str] = []
    for rule in RULES:
        message = rule(normalised)
        if message:
            warnings.append(message)
    return warnings
