"""Template kinds and the templates that render them.

A template is anything that can write a file tree given a target directory
and a project name.  The five built-in kinds are all :class:`JinjaTemplate`
instances rendering the ``.j2`` tree under ``templates/<kind>/``; tests and
callers may register any other object satisfying :class:`Template`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

from jinja2 import TemplateError

from .errors import GenerationError, UnknownTemplateError
from .templates import TemplateRenderer


class TemplateKind(str, Enum):
    """The closed set of backend archetypes the generator can produce."""

    BASIC = "basic"
    CHATAPP = "chatapp"
    ECOM = "ecom"
    BLOG = "blog"
    AICHAT = "aichat"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def values(cls) -> list[str]:
        return [kind.value for kind in cls]


@dataclass(frozen=True)
class TemplateInfo:
    """Display metadata for a template kind."""

    title: str
    description: str
    entry_point: str
    color: str


TEMPLATE_INFO: dict[TemplateKind, TemplateInfo] = {
    TemplateKind.BASIC: TemplateInfo(
        title="Basic Backend",
        description="Simple Express server with organized structure",
        entry_point="index.js",
        color="cyan",
    ),
    TemplateKind.CHATAPP: TemplateInfo(
        title="Chat App Backend",
        description="Real-time chat with Socket.io",
        entry_point="server.js",
        color="blue",
    ),
    TemplateKind.ECOM: TemplateInfo(
        title="E-commerce Backend",
        description="Product management, cart, orders",
        entry_point="server.js",
        color="green",
    ),
    TemplateKind.BLOG: TemplateInfo(
        title="Blog Backend",
        description="Posts, comments, user management",
        entry_point="server.js",
        color="magenta",
    ),
    TemplateKind.AICHAT: TemplateInfo(
        title="AI Chat Backend",
        description="AI-powered chat application",
        entry_point="server.js",
        color="bright_magenta",
    ),
}


@runtime_checkable
class Template(Protocol):
    """Capability every registered template provides."""

    async def generate(self, target_dir: Path, project_name: str) -> list[Path]:
        """Write the template's files beneath *target_dir*; return the files written."""
        ...


ContextFactory = Callable[[str], dict[str, Any]]


class JinjaTemplate:
    """Renders one template kind from its ``.j2`` tree.

    Args:
        kind: The template kind; also the subdirectory of the template root.
        renderer: Shared renderer holding the Jinja2 environment.
        directories: Directories to create before rendering, for folders the
            archetype needs even when no file is rendered into them.
        context_factory: Builds the Jinja2 context for a project name.
            Defaults to ``{"project_name": name}`` plus the kind's metadata.
    """

    def __init__(
        self,
        kind: TemplateKind,
        renderer: TemplateRenderer,
        directories: tuple[str, ...] = (),
        context_factory: ContextFactory | None = None,
    ) -> None:
        self.kind = kind
        self.renderer = renderer
        self.directories = directories
        self.context_factory = context_factory

    @property
    def info(self) -> TemplateInfo:
        return TEMPLATE_INFO[self.kind]

    def build_context(self, project_name: str) -> dict[str, Any]:
        base = (
            self.context_factory(project_name)
            if self.context_factory is not None
            else {"project_name": project_name}
        )
        return {
            **base,
            "template_kind": self.kind.value,
            "template_title": self.info.title,
            "template_description": self.info.description,
            "entry_point": self.info.entry_point,
        }

    async def generate(self, target_dir: Path, project_name: str) -> list[Path]:
        target = Path(target_dir)
        context = self.build_context(project_name)
        try:
            for directory in self.directories:
                await asyncio.to_thread(
                    (target / directory).mkdir, parents=True, exist_ok=True
                )
            written = await self.renderer.render_tree(self.kind.value, target, context)
        except (TemplateError, OSError) as exc:
            raise GenerationError(self.kind.value, target, str(exc)) from exc
        if not written:
            raise GenerationError(
                self.kind.value,
                target,
                f"no templates found under {self.renderer.template_dir / self.kind.value}",
            )
        return written

    def __repr__(self) -> str:
        return f"JinjaTemplate(kind={self.kind.value!r})"


# Folders each archetype creates even if they stay empty.
_EXTRA_DIRECTORIES: dict[TemplateKind, tuple[str, ...]] = {
    TemplateKind.BASIC: ("public",),
    TemplateKind.CHATAPP: (),
    TemplateKind.ECOM: ("uploads",),
    TemplateKind.BLOG: ("uploads",),
    TemplateKind.AICHAT: (),
}


def default_registry(
    renderer: TemplateRenderer | None = None,
    context_factory: ContextFactory | None = None,
) -> dict[TemplateKind, Template]:
    """Build the registry of the five built-in templates.

    Without a *context_factory* templates are rendered with the default
    :class:`~express_genie.config.Config` values.
    """
    if context_factory is None:
        from express_genie.config import Config

        context_factory = Config().template_context
    renderer = renderer or TemplateRenderer()
    return {
        kind: JinjaTemplate(
            kind,
            renderer,
            directories=_EXTRA_DIRECTORIES[kind],
            context_factory=context_factory,
        )
        for kind in TemplateKind
    }


def resolve_template(
    registry: Mapping[TemplateKind, Template], kind: TemplateKind | str
) -> tuple[TemplateKind, Template]:
    """Look up *kind* in *registry*.

    Accepts either a :class:`TemplateKind` or its string value.  Raises
    :class:`UnknownTemplateError` when the value names no known kind or the
    kind is not registered.
    """
    available = [k.value for k in registry]
    try:
        resolved = TemplateKind(kind)
    except ValueError:
        raise UnknownTemplateError(str(kind), available) from None
    template = registry.get(resolved)
    if template is None:
        raise UnknownTemplateError(resolved.value, available)
    return resolved, template
