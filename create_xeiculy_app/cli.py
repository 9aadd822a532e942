#!/usr/bin/env python3
"""create-xeiculy-app CLI - Scaffold a starter project from a template."""
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from create_xeiculy_app.cli_support import handle_cli_error, print_error, print_warning
from create_xeiculy_app.core.config import get_config
from create_xeiculy_app.core.input_resolver import InputResolver
from create_xeiculy_app.core.logger import get_logger, setup_file_logging
from create_xeiculy_app.core.orchestrator import ScaffoldOrchestrator
from create_xeiculy_app.core.package_manager import detect_from_environment
from create_xeiculy_app.core.prompts import RichPrompter
from create_xeiculy_app.models.settings import PackageManager, RunSettings
from create_xeiculy_app.services.dependency_installer import DependencyInstaller
from create_xeiculy_app.services.git_manager import GitManager
from create_xeiculy_app.services.template_fetcher import TemplateFetcher

__version__ = "1.0.0"

app = typer.Typer(
    name="create-xeiculy-app",
    help="""Create a new project from a Xeiculy template.

Quick start:
  create-xeiculy-app my-app                         # Answer the prompts
  create-xeiculy-app my-app -t nuxt3 --install \\
      --packageManager pnpm --gitInit               # No prompts at all
""",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"create-xeiculy-app v{__version__}")
        raise typer.Exit()


def build_orchestrator(detected: Optional[PackageManager] = None) -> ScaffoldOrchestrator:
    """Wire the orchestrator with the real prompt service and adapters."""
    config = get_config()
    resolver = InputResolver(RichPrompter(console), config=config, detected=detected)
    return ScaffoldOrchestrator(
        resolver,
        TemplateFetcher(config),
        DependencyInstaller(),
        GitManager(),
        console=console,
        config=config,
    )


@app.command()
def create(
    dir: Optional[str] = typer.Argument(None, help="Project directory (prompted if omitted)"),
    cwd: str = typer.Option(".", "--cwd", help="Working directory the project directory is relative to"),
    template: Optional[str] = typer.Option(None, "--template", "-t", help="Template name"),
    install: Optional[bool] = typer.Option(
        None, "--install/--no-install", help="Install dependencies after download (prompted if omitted)"
    ),
    git_init: Optional[bool] = typer.Option(
        None, "--gitInit/--no-gitInit", help="Initialize a git repository (prompted if omitted)"
    ),
    package_manager: Optional[str] = typer.Option(
        None, "--packageManager", help=f"Package manager: {', '.join(PackageManager.names())}"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Also write logs to this file"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
):
    """Download a template, install its dependencies and initialize git."""
    setup_file_logging(log_file=log_file, verbose=verbose)

    manager = PackageManager.parse(package_manager)
    if package_manager and manager is None:
        print_warning(
            console,
            f"Unknown package manager '{escape(package_manager)}' (expected one of: {', '.join(PackageManager.names())})",
        )

    settings = RunSettings(
        working_directory=Path(cwd).expanduser().resolve(),
        project_path=dir or None,
        template_name=template,
        install=install,
        git_init=git_init,
        package_manager=manager,
    )

    try:
        orchestrator = build_orchestrator(detected=detect_from_environment())
        outcome = orchestrator.run(settings)
    except Exception as e:
        logger.debug(f"Unhandled error: {e!r}")
        handle_cli_error(e, console, verbose=verbose)

    if not outcome.ok:
        print_error(console, escape(outcome.message))
        raise typer.Exit(outcome.exit_code)


if __name__ == "__main__":
    app()
