"""express-genie scaffolder -- generates Express backend project trees.

Validates a project name, creates ``<output_dir>/<name>`` and renders one of
the five preset templates (basic, chatapp, ecom, blog, aichat) into it.  If
rendering fails partway, the half-written directory is removed again.

Quick usage::

    from express_genie.scaffolder import ProjectGenerator, TemplateKind

    generator = ProjectGenerator(output_dir="/tmp/output")
    project_path = await generator.generate("my-app", TemplateKind.CHATAPP)
"""

from express_genie.scaffolder.errors import (
    CleanupWarning,
    DirectoryExistsError,
    GenerationError,
    InvalidNameError,
    ScaffoldError,
    UnknownTemplateError,
)
from express_genie.scaffolder.generator import (
    CleanupOutcome,
    GenerationState,
    ProjectGenerator,
    ProjectRequest,
    generate_project,
)
from express_genie.scaffolder.registry import (
    TEMPLATE_INFO,
    JinjaTemplate,
    Template,
    TemplateInfo,
    TemplateKind,
    default_registry,
)
from express_genie.scaffolder.templates import TemplateRenderer
from express_genie.scaffolder.validator import validate_project_name

__all__ = [
    "CleanupOutcome",
    "CleanupWarning",
    "DirectoryExistsError",
    "GenerationError",
    "GenerationState",
    "InvalidNameError",
    "JinjaTemplate",
    "ProjectGenerator",
    "ProjectRequest",
    "ScaffoldError",
    "TEMPLATE_INFO",
    "Template",
    "TemplateInfo",
    "TemplateKind",
    "TemplateRenderer",
    "UnknownTemplateError",
    "default_registry",
    "generate_project",
    "validate_project_name",
]
