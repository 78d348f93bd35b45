"""Command-line interface for express-genie.

Usage::

    express-genie create my-api --template chatapp
    express-genie create            # prompts for name and template
    express-genie list
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape
from rich.prompt import Prompt

from express_genie import __version__
from express_genie.config import Config
from express_genie.scaffolder import (
    TEMPLATE_INFO,
    ProjectGenerator,
    TemplateKind,
    TemplateRenderer,
    default_registry,
)
from express_genie.scaffolder.errors import InvalidNameError
from express_genie.scaffolder.validator import validate_project_name
from express_genie.utils import (
    console,
    print_error,
    print_next_steps,
    print_success,
    print_summary_table,
    print_template_table,
    print_troubleshooting,
)


# ---------------------------------------------------------------------------
# Interactive prompts
# ---------------------------------------------------------------------------


def prompt_project_name() -> str:
    """Ask for a project name until a valid one is entered."""
    console.print("[yellow]Let's start by naming your project...[/yellow]\n")
    while True:
        name = Prompt.ask("[cyan]What is your project name?[/cyan]", console=console)
        try:
            validate_project_name(name)
        except InvalidNameError as exc:
            print_error(escape(exc.reason))
            continue
        return name


def prompt_template(default: TemplateKind) -> TemplateKind:
    """Ask which template to use."""
    print_template_table()
    choice = Prompt.ask(
        "[cyan]Select a template[/cyan]",
        choices=TemplateKind.values(),
        default=default.value,
        console=console,
    )
    return TemplateKind(choice)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_create(args: argparse.Namespace, config: Config) -> int:
    """Run ``express-genie create``; return the process exit status."""
    try:
        name = args.project_name or prompt_project_name()
        if args.template:
            kind: TemplateKind | str = args.template
        elif args.project_name:
            kind = config.default_template
        else:
            kind = prompt_template(config.default_template)

        if args.output:
            config = config.model_copy(update={"output_dir": Path(args.output)})

        registry = default_registry(
            TemplateRenderer(config.template_dir),
            context_factory=config.template_context,
        )
        generator = ProjectGenerator(registry, output_dir=config.resolved_output_dir)
        project_path = asyncio.run(generator.generate(name, kind))
    except KeyboardInterrupt:
        print_error("\nAborted.")
        return 1
    except Exception as exc:
        console.print()
        print_error("Oops! Something went wrong:")
        console.print(f"[red]  {escape(str(exc))}[/red]\n")
        print_troubleshooting()
        return 1

    resolved = TemplateKind(kind)
    info = TEMPLATE_INFO[resolved]
    print_success(f"Project \"{name}\" created successfully!")
    print_summary_table(
        {
            "Project": name,
            "Template": f"{info.title} ({resolved.value})",
            "Location": str(project_path),
            "Entry point": info.entry_point,
            "Port": str(config.port),
        },
        title="Project created",
    )
    print_next_steps(project_path)
    return 0


def cmd_list(args: argparse.Namespace, config: Config) -> int:
    """Run ``express-genie list``."""
    print_template_table()
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="express-genie",
        description="Generate Express backend projects with various templates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  express-genie create my-awesome-backend\n"
            "  express-genie create my-shop --template ecom -o ./projects\n"
            "  express-genie create            (prompts for name and template)\n"
            "  express-genie list\n"
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    create = subparsers.add_parser("create", help="Create a new Express backend project")
    create.add_argument("project_name", nargs="?", default=None, metavar="project-name")
    create.add_argument(
        "--template", "-t",
        choices=TemplateKind.values(),
        default=None,
        help="Template to use (prompted for when omitted)",
    )
    create.add_argument(
        "--output", "-o",
        default=None,
        help="Directory to create the project in (default: current directory)",
    )

    subparsers.add_parser("list", help="List the available templates")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``express-genie``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        config = Config.from_env()
    except ValueError as exc:
        console.print(f"[bold red]Error:[/bold red] Invalid configuration: {escape(str(exc))}")
        sys.exit(1)

    handlers = {"create": cmd_create, "list": cmd_list}
    status = handlers[args.command](args, config)
    if status:
        sys.exit(status)


if __name__ == "__main__":
    main()
