"""Pydantic v2 models for the technology catalog.

The catalog is static input data: categories of selectable technologies,
incompatibility lists and named presets.  The resolver never reads it; it is
used to validate selection edits, decode share links and list options.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


NONE_PREFIX = "no-"


class Technology(BaseModel):
    """A selectable technology."""
    id: str = Field(..., description="Token used in selections, e.g. 'nextjs'")
    name: str = Field(..., description="Display name")
    description: str = Field(default="")
    incompatible_with: list[str] = Field(
        default_factory=list, description="Tokens that cannot coexist with this one"
    )

    @property
    def is_none_option(self) -> bool:
        """``no-*`` tokens stand for "nothing selected in this category"."""
        return self.id.startswith(NONE_PREFIX)


class Category(BaseModel):
    """A named group of technologies."""
    id: str
    name: str
    single_select: bool = Field(default=False, description="At most one member may be active")
    share_key: Optional[str] = Field(
        default=None, description="Query parameter name used in share links"
    )
    technologies: list[Technology] = Field(default_factory=list)

    def technology_ids(self) -> list[str]:
        return [t.id for t in self.technologies]


class Preset(BaseModel):
    """A named, fixed selection loaded wholesale."""
    id: str
    name: str
    description: str = Field(default="")
    selections: list[str] = Field(default_factory=list)


class Catalog(BaseModel):
    """The full technology catalog."""
    categories: list[Category] = Field(default_factory=list)
    presets: list[Preset] = Field(default_factory=list)

    def technology(self, tech_id: str) -> Optional[Technology]:
        for category in self.categories:
            for tech in category.technologies:
                if tech.id == tech_id:
                    return tech
        return None

    def category_of(self, tech_id: str) -> Optional[Category]:
        for category in self.categories:
            if tech_id in category.technology_ids():
                return category
        return None

    def known_ids(self) -> set[str]:
        return {t.id for c in self.categories for t in c.technologies}

    def share_keys(self) -> dict[str, Category]:
        """``{share_key: category}``; categories without a key use their id."""
        return {(c.share_key or c.id): c for c in self.categories}
