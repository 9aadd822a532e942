"""Dependency installation through the selected package manager."""
import subprocess
from pathlib import Path

from create_xeiculy_app.core.errors import DependencyInstallError
from create_xeiculy_app.core.logger import get_logger
from create_xeiculy_app.models.settings import PackageManager

logger = get_logger(__name__)


class DependencyInstaller:
    """Runs ``<manager> install`` inside a project directory.

    Standard I/O is inherited so the operator sees the package manager's own
    output. There is no timeout; the call returns when the tool exits.
    """

    def install(self, directory: Path, manager: PackageManager) -> None:
        """Install dependencies of the project in directory.

        Raises:
            DependencyInstallError: If the tool is missing or exits non-zero
        """
        cmd = manager.install_args
        logger.debug(f"Running {' '.join(cmd)} in {directory}")

        try:
            subprocess.run(cmd, cwd=directory, check=True)
        except FileNotFoundError as e:
            raise DependencyInstallError(
                f"{manager.command} not found. Install it or choose another package manager."
            ) from e
        except subprocess.CalledProcessError as e:
            raise DependencyInstallError(
                f"{manager.command} install failed with exit code {e.returncode}"
            ) from e
        except OSError as e:
            raise DependencyInstallError(f"Could not run {manager.command}: {e}") from e
