"""Exception hierarchy for scaffold runs.

Collaborators raise these; the orchestrator catches them in one place and
turns them into a ScaffoldOutcome, so nothing below the CLI exits the process.
"""


class ScaffoldError(Exception):
    """Base class for every failure a scaffold run reports to the operator."""


class ValidationError(ScaffoldError):
    """A required input is missing or invalid."""


class DestinationExistsError(ScaffoldError):
    """The target directory already exists."""

    def __init__(self, path, display: str):
        self.path = path
        self.display = display
        super().__init__(f"Directory {display} already exists. Choose another path or remove it first.")


class PromptCancelled(ScaffoldError):
    """The operator cancelled an interactive prompt."""

    def __init__(self, message: str = "Operation cancelled"):
        super().__init__(message)


class TemplateDownloadError(ScaffoldError):
    """The template could not be fetched or extracted."""


class DependencyInstallError(ScaffoldError):
    """The package manager failed to install dependencies."""


class GitInitError(ScaffoldError):
    """git init failed. Never fatal."""


class ConfigurationError(ScaffoldError):
    """Bundled or user configuration is invalid."""
