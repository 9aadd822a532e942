"""Run settings and step results for a single scaffold run."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class PackageManager(Enum):
    """Supported JavaScript package managers."""
    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    DENO = "deno"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["PackageManager"]:
        """Return the member named by value, or None for unknown/empty values."""
        if not isinstance(value, str) or not value.strip():
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None

    @classmethod
    def names(cls) -> List[str]:
        return [pm.value for pm in cls]

    @property
    def command(self) -> str:
        """Executable used both for display and for invocation."""
        return self.value

    @property
    def install_args(self) -> List[str]:
        return [self.command, "install"]

    def run_args(self, script: str) -> List[str]:
        """Command line running a package.json script."""
        if self is PackageManager.DENO:
            return [self.command, "task", script]
        return [self.command, "run", script]


@dataclass
class RunSettings:
    """Settings of one run; flags fill it first, prompts fill the gaps.

    project_path, template_name and package_manager are required before the
    destination check. install and git_init stay None until the step that
    needs them asks.
    """
    working_directory: Path = field(default_factory=Path.cwd)
    project_path: Optional[str] = None
    template_name: Optional[str] = None
    install: Optional[bool] = None
    git_init: Optional[bool] = None
    package_manager: Optional[PackageManager] = None


@dataclass
class TemplateDownloadResult:
    """Where a template landed and what it was fetched from."""
    local_directory: Path
    source: str


class OutcomeStatus(Enum):
    SUCCESS = "success"
    VALIDATION_FAILED = "validation_failed"
    CANCELLED = "cancelled"
    FAILED = "failed"


EXIT_CODES = {
    OutcomeStatus.SUCCESS: 0,
    OutcomeStatus.VALIDATION_FAILED: 1,
    OutcomeStatus.FAILED: 1,
    OutcomeStatus.CANCELLED: 130,
}


@dataclass
class ScaffoldOutcome:
    """Result of a run, handed to the CLI which owns the process exit."""
    status: OutcomeStatus
    message: str = ""
    source: Optional[str] = None
    directory: Optional[Path] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_CODES[self.status]

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.SUCCESS
