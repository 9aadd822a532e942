"""Runtime configuration and settings."""
import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_REGISTRY = "gh:XeicuLy/create-xeiculy-nuxt-app/templates"
DEFAULT_PROJECT_NAME = "xeiculy-app"
USER_AGENT_ENV = "npm_config_user_agent"


@dataclass
class ScaffoldConfig:
    """Runtime configuration for a scaffold run.

    Attributes:
        registry: Base locator every template name is resolved under
        default_project_name: Default answer of the project directory prompt
        auth_token: Bearer token sent with template downloads (private repos)
        download_timeout: Socket timeout in seconds for downloads (None: wait forever)
    """

    registry: str = DEFAULT_REGISTRY
    default_project_name: str = DEFAULT_PROJECT_NAME
    auth_token: Optional[str] = None
    download_timeout: Optional[float] = None

    @classmethod
    def from_env(cls) -> "ScaffoldConfig":
        """Create config from environment variables.

        Environment variables:
            XEICULY_REGISTRY: Registry base locator
            XEICULY_DEFAULT_NAME: Default project directory name
            XEICULY_AUTH: Token for private template repositories
            XEICULY_DOWNLOAD_TIMEOUT: Download timeout in seconds

        Returns:
            ScaffoldConfig instance with values from environment or defaults
        """
        timeout = os.getenv("XEICULY_DOWNLOAD_TIMEOUT")
        return cls(
            registry=os.getenv("XEICULY_REGISTRY", cls.registry).rstrip("/"),
            default_project_name=os.getenv("XEICULY_DEFAULT_NAME", cls.default_project_name),
            auth_token=os.getenv("XEICULY_AUTH") or None,
            download_timeout=float(timeout) if timeout else None,
        )

    def template_locator(self, template_name: str) -> str:
        """Join a template name onto the registry base."""
        return f"{self.registry}/{template_name.strip('/')}"


# Global config instance (can be overridden)
_config: Optional[ScaffoldConfig] = None


def get_config() -> ScaffoldConfig:
    """Get the global configuration (created from environment on first use)."""
    global _config
    if _config is None:
        _config = ScaffoldConfig.from_env()
    return _config


def set_config(config: Optional[ScaffoldConfig]) -> None:
    """Replace the global configuration; None resets it to the environment."""
    global _config
    _config = config
