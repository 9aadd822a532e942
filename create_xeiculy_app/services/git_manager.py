"""Git repository initialization for scaffolded projects."""
import subprocess
from pathlib import Path
from typing import List

from create_xeiculy_app.core.errors import GitInitError
from create_xeiculy_app.core.logger import get_logger

logger = get_logger(__name__)


class GitManager:
    """Manages git operations on a freshly scaffolded project."""

    def _run_git_command(self, args: List[str], cwd: Path) -> None:
        """Run git with inherited standard I/O, raising on non-zero exit."""
        cmd = ['git'] + args
        logger.debug(f"Running {' '.join(cmd)} in {cwd}")
        try:
            subprocess.run(cmd, cwd=cwd, check=True)
        except FileNotFoundError as e:
            raise GitInitError("Git not found. Please install git first.") from e
        except subprocess.CalledProcessError as e:
            raise GitInitError(f"git {' '.join(args)} exited with code {e.returncode}") from e
        except OSError as e:
            raise GitInitError(f"Could not run git {' '.join(args)}: {e}") from e

    def init_repo(self, directory: Path) -> None:
        """Initialize a git repository in directory.

        Raises:
            GitInitError: If git is missing or fails
        """
        self._run_git_command(['init'], cwd=directory)
        logger.info(f"Initialized git repository in {directory}")
