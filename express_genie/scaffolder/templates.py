"""Jinja2 rendering of project template trees.

Each template kind is a directory of ``.j2`` files under
``express_genie/scaffolder/templates/<kind>/``.  :class:`TemplateRenderer`
renders such a directory into a project, keeping the relative layout and
mapping ``dot_`` file names to dotfiles.
"""

from __future__ import annotations

import asyncio
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Packaged templates never contain hidden files; ``dot_env.j2`` renders to ``.env``.
DOTFILE_PREFIX = "dot_"


class TemplateRenderer:
    """Renders the ``.j2`` trees under *template_dir*.

    Args:
        template_dir: Root holding one subdirectory per template kind plus
            any shared partials (``_shared/``).  Defaults to the packaged
            templates.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["snake_case"] = _snake_case_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render *template_path* (relative to the root, e.g. ``"basic/index.js.j2"``)."""
        return self.env.get_template(template_path).render(**context)

    async def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render one template into *output_path*, creating parent directories."""
        content = self.render(template_path, context)
        out = Path(output_path)
        await asyncio.to_thread(_write_file, out, content)
        return out

    async def render_tree(
        self,
        template_prefix: str,
        output_dir: str | Path,
        context: dict[str, Any],
    ) -> list[Path]:
        """Render every template under *template_prefix* into *output_dir*.

        ``chatapp/models/User.js.j2`` rendered with ``template_prefix="chatapp"``
        lands at ``<output_dir>/models/User.js``.  Files are written one at a
        time in sorted order, so a failure leaves the earlier files in place.

        Returns:
            The written paths, in rendering order.
        """
        out_base = Path(output_dir)
        written: list[Path] = []
        for rel_str in self.list_templates(template_prefix):
            rel = Path(rel_str).relative_to(template_prefix)
            written.append(
                await self.render_to_file(rel_str, out_base / output_path_for(rel), context)
            )
        return written

    def list_templates(self, prefix: str) -> list[str]:
        """Sorted ``.j2`` paths under *prefix*, relative to the root, posix-style.

        An absent *prefix* directory yields an empty list.
        """
        search_dir = self.template_dir / prefix
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


def output_path_for(template_rel: Path) -> Path:
    """Map a template path to the file it renders to.

    Strips the ``.j2`` suffix and turns a ``dot_`` filename prefix into a
    leading dot: ``config/dot_env.j2`` -> ``config/.env``.
    """
    name = template_rel.name
    if name.endswith(".j2"):
        name = name[: -len(".j2")]
    if name.startswith(DOTFILE_PREFIX):
        name = "." + name[len(DOTFILE_PREFIX):]
    return template_rel.with_name(name)


def _snake_case_filter(value: str) -> str:
    """``Chat-Server`` / ``chatServer`` -> ``chat_server`` (MongoDB database names)."""
    s1 = re.sub(r"(.)([A-Z][a-z]+)", r"\1_\2", value)
    s2 = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", s1)
    return re.sub(r"[-_\s]+", "_", s2).lower()


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
