"""Package manager detection from the invoking tool's user agent."""
import os
from typing import Mapping, Optional

from create_xeiculy_app.core.config import USER_AGENT_ENV
from create_xeiculy_app.models.settings import PackageManager


def detect_package_manager(user_agent: Optional[str]) -> Optional[PackageManager]:
    """Guess the invoking package manager from a user agent string.

    Package managers export a signal like ``"pnpm/8.0.0 npm/? node/v18.0.0 linux x64"``.
    Only the name before the first ``/`` is considered.

    Returns:
        The matching PackageManager, or None when the signal is absent or unknown
    """
    if not user_agent:
        return None
    name = user_agent.strip().split("/", 1)[0]
    return PackageManager.parse(name)


def detect_from_environment(environ: Optional[Mapping[str, str]] = None) -> Optional[PackageManager]:
    """Read the user agent signal from environ (default: os.environ)."""
    env = os.environ if environ is None else environ
    return detect_package_manager(env.get(USER_AGENT_ENV))
