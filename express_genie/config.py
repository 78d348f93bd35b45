"""express-genie configuration.

Typed settings for project generation.  Uses a Pydantic v2 model so values
are validated at construction time and can be serialised to/from JSON or read
from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from express_genie.scaffolder.registry import TemplateKind


class Config(BaseModel):
    """Global express-genie configuration.

    Created once by the CLI (usually via :meth:`from_env`) and used to build
    the template registry and the :class:`ProjectGenerator`.
    """

    output_dir: Path | None = Field(
        default=None, description="Parent directory for new projects (None: cwd)"
    )
    default_template: TemplateKind = Field(default=TemplateKind.BASIC)
    template_dir: Path | None = Field(
        default=None, description="Override for the packaged .j2 template tree"
    )
    port: int = Field(default=3000, ge=1, le=65535, description="PORT in the generated .env")
    node_version: str = Field(default=">=16.0.0", description="package.json engines.node")
    author: str = Field(default="")
    license: str = Field(default="MIT")

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def resolved_output_dir(self) -> Path:
        """Directory projects are created in, falling back to the cwd."""
        return self.output_dir if self.output_dir is not None else Path.cwd()

    def template_context(self, project_name: str) -> dict[str, Any]:
        """Variables available to every template for *project_name*."""
        return {
            "project_name": project_name,
            "port": self.port,
            "node_version": self.node_version,
            "author": self.author,
            "license": self.license,
        }

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
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
            EXPRESS_GENIE_OUTPUT_DIR, EXPRESS_GENIE_TEMPLATE,
            EXPRESS_GENIE_TEMPLATE_DIR, EXPRESS_GENIE_PORT,
            EXPRESS_GENIE_NODE_VERSION, EXPRESS_GENIE_AUTHOR,
            EXPRESS_GENIE_LICENSE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("EXPRESS_GENIE_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["EXPRESS_GENIE_OUTPUT_DIR"])
        if os.environ.get("EXPRESS_GENIE_TEMPLATE"):
            kwargs["default_template"] = os.environ["EXPRESS_GENIE_TEMPLATE"]
        if os.environ.get("EXPRESS_GENIE_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["EXPRESS_GENIE_TEMPLATE_DIR"])
        if os.environ.get("EXPRESS_GENIE_PORT"):
            kwargs["port"] = int(os.environ["EXPRESS_GENIE_PORT"])
        if os.environ.get("EXPRESS_GENIE_NODE_VERSION"):
            kwargs["node_version"] = os.environ["EXPRESS_GENIE_NODE_VERSION"]
        if "EXPRESS_GENIE_AUTHOR" in os.environ:
            kwargs["author"] = os.environ["EXPRESS_GENIE_AUTHOR"]
        if os.environ.get("EXPRESS_GENIE_LICENSE"):
            kwargs["license"] = os.environ["EXPRESS_GENIE_LICENSE"]
        return cls(**kwargs)
