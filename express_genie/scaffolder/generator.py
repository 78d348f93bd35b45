"""Project materialization.

Takes a project name and a template kind and produces the project directory:
validate the name, refuse an existing directory, resolve the template, create
the directory, let the template write its files, and remove the directory
again if anything after its creation fails.
"""

from __future__ import annotations

import asyncio
import shutil
import warnings
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.console import Console
from rich.markup import escape

from .errors import CleanupWarning, DirectoryExistsError
from .registry import Template, TemplateKind, default_registry, resolve_template
from .validator import validate_project_name


# ---------------------------------------------------------------------------
# Request / outcome models
# ---------------------------------------------------------------------------


class ProjectRequest(BaseModel):
    """A validated request to create one project."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name, also the directory name")
    template: TemplateKind = Field(default=TemplateKind.BASIC)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        validate_project_name(value)
        return value


class GenerationState(str, Enum):
    """Lifecycle of a single ``generate`` call."""

    IDLE = "idle"
    VALIDATING = "validating"
    CREATING = "creating"
    GENERATING = "generating"
    DONE = "done"
    ROLLING_BACK = "rolling_back"
    FAILED = "failed"


@dataclass(frozen=True)
class CleanupOutcome:
    """Result of removing a partially generated project directory."""

    path: Path
    removed: bool
    error: BaseException | None = None


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ProjectGenerator:
    """Creates Express backend projects from registered templates.

    Args:
        registry: Mapping of template kind to template.  Defaults to the five
            built-in Jinja2 templates.
        output_dir: Parent directory for new projects.  ``None`` means the
            current working directory at the time of each call.
        console: Rich console for status messages.  Defaults to the shared
            console in :mod:`express_genie.utils`.
    """

    def __init__(
        self,
        registry: Mapping[TemplateKind, Template] | None = None,
        *,
        output_dir: str | Path | None = None,
        console: Console | None = None,
    ) -> None:
        if console is None:
            from express_genie.utils import console as shared_console

            console = shared_console
        self.registry: Mapping[TemplateKind, Template] = (
            registry if registry is not None else default_registry()
        )
        self.output_dir = Path(output_dir) if output_dir is not None else None
        self.console = console
        self.state = GenerationState.IDLE
        self.last_cleanup: CleanupOutcome | None = None

    def target_for(self, name: str) -> Path:
        """Return the directory a project called *name* would be created in."""
        base = self.output_dir if self.output_dir is not None else Path.cwd()
        return base / name

    async def generate(self, name: str, template_kind: TemplateKind | str) -> Path:
        """Create project *name* from *template_kind* and return its root.

        Raises:
            InvalidNameError: *name* is not a usable project name.
            DirectoryExistsError: The target directory already exists.
            UnknownTemplateError: *template_kind* is not registered.
            Exception: Whatever the template raised, after the partially
                written directory has been removed.
        """
        self.last_cleanup = None
        self.state = GenerationState.VALIDATING
        try:
            validate_project_name(name)
            target = self.target_for(name)
            if await asyncio.to_thread(target.exists):
                raise DirectoryExistsError(target)
            kind, template = resolve_template(self.registry, template_kind)
            request = ProjectRequest(name=name, template=kind)

            self.state = GenerationState.CREATING
            try:
                await asyncio.to_thread(target.mkdir, exist_ok=False)
            except FileExistsError:
                # Lost the race to another process; the directory is not ours.
                raise DirectoryExistsError(target) from None
        except BaseException:
            self.state = GenerationState.FAILED
            raise

        self.state = GenerationState.GENERATING
        try:
            await template.generate(target, request.name)
        except BaseException as exc:
            self.state = GenerationState.ROLLING_BACK
            outcome = await self._rollback(target)
            self.last_cleanup = outcome
            if outcome.error is not None:
                exc.add_note(
                    f"Could not remove incomplete project directory {target}: {outcome.error}"
                )
            self.state = GenerationState.FAILED
            raise

        self.state = GenerationState.DONE
        return target

    def generate_sync(self, name: str, template_kind: TemplateKind | str) -> Path:
        """Blocking wrapper around :meth:`generate`."""
        return asyncio.run(self.generate(name, template_kind))

    async def _rollback(self, target: Path) -> CleanupOutcome:
        # The template may already have removed the directory itself.
        if not await asyncio.to_thread(target.exists):
            return CleanupOutcome(path=target, removed=True)
        try:
            await asyncio.to_thread(shutil.rmtree, target)
        except FileNotFoundError:
            return CleanupOutcome(path=target, removed=True)
        except OSError as err:
            warnings.warn(
                f"Failed to clean up directory {target}: {err}",
                CleanupWarning,
                stacklevel=3,
            )
            self.console.print(
                "[bold yellow]Warning: failed to clean up directory "
                f"{escape(str(target))}: {escape(str(err))}[/bold yellow]"
            )
            return CleanupOutcome(path=target, removed=False, error=err)

        self.console.print("[dim]Cleaned up incomplete project directory[/dim]")
        return CleanupOutcome(path=target, removed=True)


async def generate_project(
    name: str,
    template_kind: TemplateKind | str = TemplateKind.BASIC,
    output_dir: str | Path | None = None,
) -> Path:
    """Create a project with the built-in templates.

    Convenience wrapper for one-off calls; see :class:`ProjectGenerator`.
    """
    generator = ProjectGenerator(output_dir=output_dir)
    return await generator.generate(name, template_kind)
