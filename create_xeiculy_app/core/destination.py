"""Destination path resolution and collision checks."""
import os
from pathlib import Path
from typing import Optional, Union

from create_xeiculy_app.core.errors import DestinationExistsError, ValidationError
from create_xeiculy_app.core.logger import get_logger

logger = get_logger(__name__)

PathLike = Union[str, Path]


def resolve_destination(working_directory: Optional[PathLike], target: Optional[str]) -> Path:
    """Turn a working directory and a target into an absolute path.

    Args:
        working_directory: Base directory for relative targets (default: cwd)
        target: Directory given by the operator, relative or absolute

    Returns:
        Absolute destination path

    Raises:
        ValidationError: If target is empty
    """
    if not target or not str(target).strip():
        raise ValidationError("Project directory must not be empty")

    base = Path(working_directory).expanduser() if working_directory else Path.cwd()
    destination = Path(str(target).strip()).expanduser()
    if not destination.is_absolute():
        destination = base / destination
    return Path(os.path.abspath(destination))


def display_path(path: PathLike, working_directory: Optional[PathLike] = None) -> str:
    """Render path relative to the working directory when that is shorter."""
    absolute = os.path.abspath(path)
    base = os.path.abspath(working_directory) if working_directory else os.getcwd()
    try:
        relative = os.path.relpath(absolute, base)
    except ValueError:
        # Different drives on Windows
        return absolute

    if not relative.startswith(".."):
        relative = f".{os.sep}{relative}" if relative != "." else "."
    return relative if len(relative) < len(absolute) else absolute


def ensure_destination_available(path: Path, working_directory: Optional[PathLike] = None) -> None:
    """Fail if the destination already exists.

    Raises:
        DestinationExistsError: If anything exists at path
    """
    exists = path.exists() or path.is_symlink()
    logger.debug(f"Destination {path} exists: {exists}")
    if exists:
        raise DestinationExistsError(path, display_path(path, working_directory))
