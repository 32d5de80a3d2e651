"""Recommended directory layout preview.

Produces the flat, depth-annotated tree shown next to the command plan.  The
preview is advisory: it describes what the scaffolding CLIs and the server
structure step roughly produce, it is not a file manifest.
"""

from __future__ import annotations

from .bootstrap import BARE_BACKEND_TOKENS
from .layout import frontend_tokens, has_standalone_backend
from .models import (
    EntryKind,
    ResolverProfile,
    Selection,
    StructureEntry,
    resolve_project_name,
)


# (token, file name) for root-level config files, in display order
CONFIG_FILES: tuple[tuple[str, str], ...] = (
    ("biome", "biome.json"),
    ("eslint", "eslint.config.js"),
    ("prettier", ".prettierrc"),
    ("dotenv", ".env"),
    ("dotenv", ".env.example"),
    ("git-init", ".gitignore"),
)


class _Tree:
    def __init__(self, typescript: bool) -> None:
        self.entries: list[StructureEntry] = []
        self.typescript = typescript

    def ext(self, jsx: bool = False) -> str:
        if self.typescript:
            return ".tsx" if jsx else ".ts"
        return ".jsx" if jsx else ".js"

    def folder(self, name: str, depth: int) -> None:
        self.entries.append(StructureEntry(name=name, kind=EntryKind.FOLDER, depth=depth))

    def file(self, name: str, depth: int) -> None:
        self.entries.append(StructureEntry(name=name, kind=EntryKind.FILE, depth=depth))


def _nextjs_tree(tree: _Tree, selection: Selection) -> None:
    tree.folder("src", 1)
    tree.folder("app", 2)
    tree.file(f"layout{tree.ext(jsx=True)}", 3)
    tree.file(f"page{tree.ext(jsx=True)}", 3)
    tree.file("globals.css", 3)
    if "trpc" in selection or "orpc" in selection:
        tree.folder("api", 3)
        tree.folder("trpc", 4)
        tree.folder("[...trpc]", 5)
        tree.file(f"route{tree.ext()}", 6)
    tree.folder("components", 2)
    tree.folder("ui", 3)
    tree.file(f"button{tree.ext(jsx=True)}", 4)
    tree.folder("lib", 2)
    tree.file(f"utils{tree.ext()}", 3)


def _nuxt_tree(tree: _Tree) -> None:
    tree.folder("pages", 1)
    tree.file("index.vue", 2)
    tree.folder("components", 1)
    tree.folder("layouts", 1)
    tree.file("default.vue", 2)


def _astro_tree(tree: _Tree) -> None:
    tree.folder("src", 1)
    tree.folder("pages", 2)
    tree.file("index.astro", 3)
    tree.folder("components", 2)
    tree.folder("layouts", 2)


def _spa_tree(tree: _Tree) -> None:
    tree.folder("src", 1)
    tree.file(f"index{tree.ext(jsx=True)}", 2)
    tree.file(f"App{tree.ext(jsx=True)}", 2)
    tree.folder("components", 2)
    tree.folder("lib", 2)
    tree.file(f"utils{tree.ext()}", 3)


def _backend_tree(tree: _Tree, selection: Selection, base: int) -> None:
    """``src/`` of a standalone backend rooted at depth *base*."""
    tree.folder("src", base)
    tree.file(f"index{tree.ext()}", base + 1)
    tree.folder("routes", base + 1)
    tree.file(f"index.route{tree.ext()}", base + 2)
    if any(t in selection for t in BARE_BACKEND_TOKENS):
        tree.folder("controllers", base + 1)
        tree.file(f"index.controller{tree.ext()}", base + 2)
    if "mongoose" in selection:
        tree.folder("models", base + 1)
        tree.file(f"index.model{tree.ext()}", base + 2)
    tree.folder("middlewares", base + 1)
    tree.file(f"index{tree.ext()}", base + 2)
    tree.folder("lib", base + 1)
    tree.file(f"utils{tree.ext()}", base + 2)
    if "trpc" in selection or "orpc" in selection:
        tree.folder("trpc", base + 1)
        tree.file(f"router{tree.ext()}", base + 2)
        tree.file(f"context{tree.ext()}", base + 2)


def _database_tree(tree: _Tree, selection: Selection) -> None:
    if "drizzle" in selection:
        tree.folder("db", 1)
        tree.file(f"schema{tree.ext()}", 2)
        tree.file(f"index{tree.ext()}", 2)
        tree.folder("migrations", 2)
        tree.file(f"drizzle.config{tree.ext()}", 1)
    elif "prisma" in selection:
        tree.folder("prisma", 1)
        tree.file("schema.prisma", 2)
        tree.folder("migrations", 2)
    # Mongoose keeps its schemas in the backend models/ folder.


def generate_structure(
    project_name: str | None,
    selection: Selection,
    profile: ResolverProfile = ResolverProfile.CLASSIC,
) -> list[StructureEntry]:
    """Return the recommended directory layout for *selection*."""
    tree = _Tree(typescript="typescript" in selection)
    tree.folder(resolve_project_name(project_name), 0)

    has_frontend = any(t in selection for t in frontend_tokens(profile))
    has_backend = has_standalone_backend(selection)

    if "nextjs" in selection:
        _nextjs_tree(tree, selection)
    elif "nuxt" in selection:
        _nuxt_tree(tree)
    elif "astro" in selection:
        _astro_tree(tree)
    elif has_frontend:
        _spa_tree(tree)

    if has_backend and not has_frontend:
        _backend_tree(tree, selection, base=1)
    elif has_backend:
        tree.folder("server", 1)
        _backend_tree(tree, selection, base=2)

    _database_tree(tree, selection)

    tree.file("package.json", 1)
    tree.file("tsconfig.json", 1)
    for token, name in CONFIG_FILES:
        if token in selection:
            tree.file(name, 1)

    return tree.entries


def render_structure(entries: list[StructureEntry], indent: str = "  ") -> str:
    """Render entries as an indented text tree, folders suffixed with ``/``."""
    lines = []
    for entry in entries:
        suffix = "/" if entry.kind is EntryKind.FOLDER else ""
        lines.append(f"{indent * entry.depth}{entry.name}{suffix}")
    return "\n".join(lines)
