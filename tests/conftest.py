"""Shared pytest fixtures for the express-genie test suite.

Provides reusable fixtures for:
- Temporary output directories
- A recording Rich console swapped in for the shared one
- Fake templates that write files and optionally fail partway
- Scratch Jinja2 template trees
"""

from __future__ import annotations

import io
import os
from pathlib import Path

import pytest
from rich.console import Console

from express_genie.scaffolder import ProjectGenerator, TemplateKind


# ---------------------------------------------------------------------------
# Environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer EXPRESS_GENIE_* settings out of the tests."""
    for key in list(os.environ):
        if key.startswith("EXPRESS_GENIE_"):
            monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory new projects are generated into."""
    out = tmp_path / "projects"
    out.mkdir()
    return out


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """Empty Jinja2 template root for scratch templates."""
    root = tmp_path / "templates"
    root.mkdir()
    return root


# ---------------------------------------------------------------------------
# Console
# ---------------------------------------------------------------------------

@pytest.fixture
def recording_console(monkeypatch: pytest.MonkeyPatch) -> Console:
    """A wide recording console installed as the shared console.

    Read output with ``recording_console.export_text()``.
    """
    console = Console(record=True, width=200, force_terminal=False, color_system=None)
    monkeypatch.setattr("express_genie.utils.console", console)
    monkeypatch.setattr("express_genie.cli.console", console)
    return console


# ---------------------------------------------------------------------------
# Fake templates
# ---------------------------------------------------------------------------

class FakeTemplate:
    """Writes ``total`` numbered files, raising ``error`` before file ``fail_at``."""

    def __init__(
        self,
        total: int = 10,
        fail_at: int | None = None,
        error: BaseException | None = None,
    ) -> None:
        self.total = total
        self.fail_at = fail_at
        self.error = error or RuntimeError("template exploded")
        self.calls: list[tuple[Path, str]] = []

    async def generate(self, target_dir: Path, project_name: str) -> list[Path]:
        self.calls.append((target_dir, project_name))
        written: list[Path] = []
        for i in range(self.total):
            if self.fail_at is not None and i == self.fail_at:
                raise self.error
            path = target_dir / "src" / f"file_{i}.js"
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(f"// {project_name} {i}\n", encoding="utf-8")
            written.append(path)
        return written


@pytest.fixture
def template_factory() -> type[FakeTemplate]:
    """The ``FakeTemplate`` class, for tests that need custom failure points."""
    return FakeTemplate


@pytest.fixture
def fake_template() -> FakeTemplate:
    """A template that succeeds and writes ten files."""
    return FakeTemplate()


@pytest.fixture
def failing_template() -> FakeTemplate:
    """A template that fails after writing three of ten files."""
    return FakeTemplate(total=10, fail_at=3, error=RuntimeError("disk on fire"))


@pytest.fixture
def quiet_console() -> Console:
    """A console whose output is captured in memory."""
    return Console(file=io.StringIO(), record=True, width=200, color_system=None)


@pytest.fixture
def make_generator(output_dir: Path, quiet_console: Console):
    """Factory building a ``ProjectGenerator`` around a single fake template."""

    def _make(template, kind: TemplateKind = TemplateKind.BASIC) -> ProjectGenerator:
        return ProjectGenerator(
            {kind: template}, output_dir=output_dir, console=quiet_console
        )

    return _make
