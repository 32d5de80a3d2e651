"""StackForge configuration.

Typed defaults for the command-line front end.  All settings use Pydantic v2
models so they are validated at construction time and can be serialised to or
from JSON and environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from stackforge.resolver.models import DEFAULT_PROJECT_NAME, ResolverProfile


class OutputFormat(str, Enum):
    """How the CLI prints a plan."""
    TABLE = "table"
    JSON = "json"
    SCRIPT = "script"
    MARKDOWN = "markdown"


class Config(BaseModel):
    """Global StackForge configuration.

    Created once by the CLI entry point (from defaults, a saved file or the
    environment) and then overridden by command-line flags.
    """

    project_name: str = Field(default=DEFAULT_PROJECT_NAME)
    profile: ResolverProfile = Field(default=ResolverProfile.CLASSIC)
    catalog_path: Optional[Path] = Field(
        default=None, description="Custom catalog YAML; the bundled one when unset"
    )
    output_format: OutputFormat = Field(default=OutputFormat.TABLE)

    @field_validator("project_name")
    @classmethod
    def _default_blank_name(cls, value: str) -> str:
        return value.strip() or DEFAULT_PROJECT_NAME

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            STACKFORGE_PROJECT_NAME, STACKFORGE_PROFILE, STACKFORGE_CATALOG,
            STACKFORGE_FORMAT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("STACKFORGE_PROJECT_NAME"):
            kwargs["project_name"] = os.environ["STACKFORGE_PROJECT_NAME"]
        if os.environ.get("STACKFORGE_PROFILE"):
            kwargs["profile"] = os.environ["STACKFORGE_PROFILE"]
        if os.environ.get("STACKFORGE_CATALOG"):
            kwargs["catalog_path"] = Path(os.environ["STACKFORGE_CATALOG"])
        if os.environ.get("STACKFORGE_FORMAT"):
            kwargs["output_format"] = os.environ["STACKFORGE_FORMAT"]
        return cls(**kwargs)
