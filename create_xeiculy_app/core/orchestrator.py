"""Scaffold orchestration: inputs, destination check, download, install, git init.

The run is strictly sequential:

    Idle -> PathChecked -> Downloaded -> InstallDecision -> Installed | InstallSkipped
         -> GitDecision -> GitInitialized | GitSkipped | GitFailed -> Done

Any fatal failure moves to Fatal and stops the run. Nothing here exits the
process; run() returns a ScaffoldOutcome and the CLI owns the exit code.
"""
from enum import Enum
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from create_xeiculy_app.cli_support import print_info, print_success, print_warning
from create_xeiculy_app.core.config import ScaffoldConfig, get_config
from create_xeiculy_app.core.destination import (
    display_path,
    ensure_destination_available,
    resolve_destination,
)
from create_xeiculy_app.core.errors import (
    DependencyInstallError,
    PromptCancelled,
    ScaffoldError,
    TemplateDownloadError,
    ValidationError,
)
from create_xeiculy_app.core.input_resolver import InputResolver
from create_xeiculy_app.core.logger import get_logger
from create_xeiculy_app.models.settings import (
    OutcomeStatus,
    RunSettings,
    ScaffoldOutcome,
    TemplateDownloadResult,
)
from create_xeiculy_app.services.package_json import rename_package

logger = get_logger(__name__)


class ScaffoldState(Enum):
    IDLE = "idle"
    PATH_CHECKED = "path_checked"
    DOWNLOADED = "downloaded"
    INSTALL_DECISION = "install_decision"
    INSTALLED = "installed"
    INSTALL_SKIPPED = "install_skipped"
    GIT_DECISION = "git_decision"
    GIT_INITIALIZED = "git_initialized"
    GIT_SKIPPED = "git_skipped"
    GIT_FAILED = "git_failed"
    DONE = "done"
    FATAL = "fatal"


class ScaffoldOrchestrator:
    """Drives one scaffold run through its collaborators.

    Args:
        resolver: Fills unset settings from prompts
        fetcher: Template download adapter (``download(locator, directory)``)
        installer: Dependency install adapter (``install(directory, manager)``)
        git: VCS init adapter (``init_repo(directory)``)
        console: Operator-facing output
        config: Runtime configuration (default: global config)
    """

    def __init__(
        self,
        resolver: InputResolver,
        fetcher,
        installer,
        git,
        console: Optional[Console] = None,
        config: Optional[ScaffoldConfig] = None,
    ):
        self.resolver = resolver
        self.fetcher = fetcher
        self.installer = installer
        self.git = git
        self.console = console or Console()
        self.config = config or get_config()
        self.state = ScaffoldState.IDLE
        self.warnings: List[str] = []

    def run(self, settings: RunSettings) -> ScaffoldOutcome:
        """Run the whole scaffold sequence and report how it ended."""
        self.state = ScaffoldState.IDLE
        self.warnings = []

        try:
            return self._run(settings)
        except PromptCancelled as e:
            return self._fatal(OutcomeStatus.CANCELLED, str(e))
        except ValidationError as e:
            return self._fatal(OutcomeStatus.VALIDATION_FAILED, str(e))
        except ScaffoldError as e:
            return self._fatal(OutcomeStatus.FAILED, str(e))

    def _run(self, settings: RunSettings) -> ScaffoldOutcome:
        settings.project_path = self.resolver.resolve_project_path(settings.project_path)
        destination = resolve_destination(settings.working_directory, settings.project_path)
        shown = display_path(destination, settings.working_directory)

        ensure_destination_available(destination, settings.working_directory)
        self._transition(ScaffoldState.PATH_CHECKED)

        settings.template_name = self.resolver.resolve_template(settings.template_name)
        settings.package_manager = self.resolver.resolve_package_manager(settings.package_manager)

        result = self._download(settings, destination)
        self._transition(ScaffoldState.DOWNLOADED)
        self._rename_package(result, destination.name)

        self._install_step(settings, result)
        self._git_step(settings, result)

        self._transition(ScaffoldState.DONE)
        self._print_summary(settings, result, shown)
        return ScaffoldOutcome(
            status=OutcomeStatus.SUCCESS,
            message=f"Scaffolded {shown} from {result.source}",
            source=result.source,
            directory=result.local_directory,
            warnings=list(self.warnings),
        )

    def _download(self, settings: RunSettings, destination: Path) -> TemplateDownloadResult:
        locator = self.config.template_locator(settings.template_name)
        logger.debug(f"Template locator: {locator}")
        try:
            with self.console.status(f"[cyan]Downloading template {escape(locator)}...[/cyan]", spinner="dots"):
                result = self.fetcher.download(locator, destination)
        except ScaffoldError:
            raise
        except Exception as e:
            raise TemplateDownloadError(f"Failed to download template {locator}: {e}") from e
        print_success(self.console, f"Downloaded template {escape(result.source)}")
        return result

    def _rename_package(self, result: TemplateDownloadResult, name: str) -> None:
        try:
            if rename_package(result.local_directory, name):
                logger.debug(f"Renamed package.json name to {name}")
        except (ValueError, OSError) as e:
            self._warn(f"Could not update package.json: {e}")

    def _install_step(self, settings: RunSettings, result: TemplateDownloadResult) -> None:
        self._transition(ScaffoldState.INSTALL_DECISION)
        explicit_skip = settings.install is False
        settings.install = self.resolver.resolve_install(settings.install)

        if not settings.install:
            if explicit_skip:
                print_info(self.console, "Skipping dependency installation")
            self._transition(ScaffoldState.INSTALL_SKIPPED)
            return

        manager = settings.package_manager
        print_info(self.console, f"Installing dependencies with {manager.command}...")
        try:
            self.installer.install(result.local_directory, manager)
        except ScaffoldError:
            raise
        except Exception as e:
            raise DependencyInstallError(f"{manager.command} install failed: {e}") from e
        print_success(self.console, "Dependencies installed")
        self._transition(ScaffoldState.INSTALLED)

    def _git_step(self, settings: RunSettings, result: TemplateDownloadResult) -> None:
        self._transition(ScaffoldState.GIT_DECISION)
        settings.git_init = self.resolver.resolve_git_init(settings.git_init)

        if not settings.git_init:
            self._transition(ScaffoldState.GIT_SKIPPED)
            return

        try:
            self.git.init_repo(result.local_directory)
        except Exception as e:
            self._warn(f"Failed to initialize git repository: {e}")
            self._transition(ScaffoldState.GIT_FAILED)
            return

        print_success(self.console, "Git repository initialized")
        self._transition(ScaffoldState.GIT_INITIALIZED)

    def _print_summary(self, settings: RunSettings, result: TemplateDownloadResult, shown: str) -> None:
        manager = settings.package_manager
        self.console.print()
        print_success(self.console, f"Done! ✨ Project created from [bold]{escape(result.source)}[/bold]")
        self.console.print("\n[cyan]Next steps:[/cyan]")
        self.console.print(f"  cd {escape(shown)}")
        if not settings.install:
            self.console.print(f"  {' '.join(manager.install_args)}")
        self.console.print(f"  {' '.join(manager.run_args('dev'))}")

    def _warn(self, message: str) -> None:
        self.warnings.append(message)
        logger.debug(message)
        print_warning(self.console, escape(message))

    def _fatal(self, status: OutcomeStatus, message: str) -> ScaffoldOutcome:
        logger.debug(f"Run stopped in state {self.state.value}: {message}")
        self._transition(ScaffoldState.FATAL)
        return ScaffoldOutcome(status=status, message=message, warnings=list(self.warnings))

    def _transition(self, state: ScaffoldState) -> None:
        logger.debug(f"{self.state.value} -> {state.value}")
        self.state = state
