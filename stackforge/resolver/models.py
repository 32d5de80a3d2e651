"""Pydantic v2 models for the stack resolver.

Every model here is a derived value: it is rebuilt from scratch on each call
into the resolver and never mutated afterwards, so most of them are frozen.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


TechnologyId = str
Selection = frozenset[str]

DEFAULT_PROJECT_NAME = "my-app"


def as_selection(tokens: Iterable[str] | None) -> Selection:
    """Normalise any iterable of tokens into a ``Selection``.

    Whitespace is trimmed and empty tokens are dropped.  Unknown tokens are
    kept; they are inert everywhere downstream.
    """
    if not tokens:
        return frozenset()
    return frozenset(t.strip() for t in tokens if t and t.strip())


def resolve_project_name(name: str | None) -> str:
    """Return *name* stripped, or the default project name when blank."""
    if name is None or not name.strip():
        return DEFAULT_PROJECT_NAME
    return name.strip()


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class ResolverProfile(str, Enum):
    """Which generator behaviour to apply.

    ``classic`` emits every setup step explicitly.  ``delegated`` adds the
    consolidated ``tanstack`` option whose scaffolding CLI takes over add-ons,
    toolchain and git setup.
    """
    CLASSIC = "classic"
    DELEGATED = "delegated"


class Layout(str, Enum):
    """Shape of the generated project."""
    FRONTEND_ONLY = "frontend-only"
    BACKEND_ONLY = "backend-only"
    MONOREPO = "monorepo"


class EntryKind(str, Enum):
    FOLDER = "folder"
    FILE = "file"


# ---------------------------------------------------------------------------
# Plan building blocks
# ---------------------------------------------------------------------------

class CommandStep(BaseModel):
    """One line item of a generated plan."""
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Short human-readable title")
    command: str = Field(..., description="Shell command to run")
    description: Optional[str] = Field(default=None, description="What the step does")


class PackageManagerProfile(BaseModel):
    """The four package-manager verbs reused by every step of a plan."""
    model_config = ConfigDict(frozen=True)

    runner: str = Field(..., description="Package manager binary, e.g. 'pnpm'")
    executor: str = Field(..., description="One-off package executor, e.g. 'pnpm exec'")
    add_command: str = Field(..., description="Command that adds runtime dependencies")
    add_dev_command: str = Field(..., description="Command that adds dev dependencies")

    @property
    def init_command(self) -> str:
        """Command that creates a bare ``package.json`` in the current directory."""
        if self.runner in ("npm", "yarn"):
            return f"{self.runner} init -y"
        return f"{self.runner} init"


class BootstrapCapabilities(BaseModel):
    """What the scaffolding CLI of the bootstrap step already took care of."""
    model_config = ConfigDict(frozen=True)

    includes_typescript: bool = False
    includes_types_node: bool = False
    includes_eslint: bool = False
    includes_backend_framework: bool = False
    manages_git: bool = False
    subsumed_tokens: frozenset[str] = Field(
        default_factory=frozenset,
        description="Tokens whose setup is handled by the CLI's own add-on flow",
    )

    def merge(self, other: "BootstrapCapabilities") -> "BootstrapCapabilities":
        """Return the union of two capability records."""
        return BootstrapCapabilities(
            includes_typescript=self.includes_typescript or other.includes_typescript,
            includes_types_node=self.includes_types_node or other.includes_types_node,
            includes_eslint=self.includes_eslint or other.includes_eslint,
            includes_backend_framework=(
                self.includes_backend_framework or other.includes_backend_framework
            ),
            manages_git=self.manages_git or other.manages_git,
            subsumed_tokens=self.subsumed_tokens | other.subsumed_tokens,
        )


class BootstrapResult(BaseModel):
    """Output of the bootstrap selector."""
    model_config = ConfigDict(frozen=True)

    step: CommandStep
    needs_separate_navigate: bool = True
    capabilities: BootstrapCapabilities = Field(default_factory=BootstrapCapabilities)


class DependencySet(BaseModel):
    """Ordered, de-duplicated runtime and development package lists."""
    model_config = ConfigDict(frozen=True)

    runtime: tuple[str, ...] = ()
    dev: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.runtime and not self.dev


class StructureEntry(BaseModel):
    """A row in the directory-layout preview."""
    model_config = ConfigDict(frozen=True)

    name: str
    kind: EntryKind
    depth: int = Field(default=0, ge=0)


class StackPlan(BaseModel):
    """Everything the presentation layer shows for one (name, selection) pair."""
    model_config = ConfigDict(frozen=True)

    project_name: str
    profile: ResolverProfile = ResolverProfile.CLASSIC
    selection: tuple[str, ...] = ()
    package_manager: PackageManagerProfile
    layout: Layout
    steps: tuple[CommandStep, ...] = ()
    quick_command: str
    warnings: tuple[str, ...] = ()
    structure: tuple[StructureEntry, ...] = ()
