"""Resolution of run settings from flags and interactive prompts."""
from typing import Optional

from create_xeiculy_app.core.config import ScaffoldConfig, get_config
from create_xeiculy_app.core.errors import ValidationError
from create_xeiculy_app.core.logger import get_logger
from create_xeiculy_app.core.prompts import Prompter, SelectOption, resolve_setting
from create_xeiculy_app.core.template_catalog import TemplateCatalog
from create_xeiculy_app.models.settings import PackageManager

logger = get_logger(__name__)


def _non_empty_string(value) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_bool(value) -> bool:
    return isinstance(value, bool)


class InputResolver:
    """Fills unset RunSettings fields, prompting only where a flag gave nothing usable.

    Args:
        prompter: Prompt service
        catalog: Templates offered by the template prompt (default: bundled catalog)
        config: Runtime configuration (default: global config)
        detected: Package manager hint, used only as the prompt default
    """

    def __init__(
        self,
        prompter: Prompter,
        catalog: Optional[TemplateCatalog] = None,
        config: Optional[ScaffoldConfig] = None,
        detected: Optional[PackageManager] = None,
    ):
        self.prompter = prompter
        self.catalog = catalog
        self.config = config or get_config()
        self.detected = detected

    def resolve_project_path(self, value: Optional[str]) -> str:
        default = self.config.default_project_name
        answer = resolve_setting(
            value,
            lambda: self.prompter.text("Project directory", default=default),
            _non_empty_string,
        )
        if not _non_empty_string(answer):
            raise ValidationError("Project directory must not be empty")
        return answer.strip()

    def resolve_template(self, value: Optional[str]) -> str:
        answer = resolve_setting(value, self._ask_template, _non_empty_string)
        if not _non_empty_string(answer):
            raise ValidationError("Template name is required")
        return answer.strip()

    def resolve_package_manager(self, value: Optional[PackageManager]) -> PackageManager:
        answer = resolve_setting(
            value,
            self._ask_package_manager,
            lambda v: isinstance(v, PackageManager),
        )
        if not isinstance(answer, PackageManager):
            answer = PackageManager.parse(answer)
        if answer is None:
            raise ValidationError(
                f"Package manager must be one of: {', '.join(PackageManager.names())}"
            )
        return answer

    def resolve_install(self, value: Optional[bool]) -> bool:
        """Explicit True/False is honoured; unset asks (default: no)."""
        return resolve_setting(
            value,
            lambda: self.prompter.confirm("Install dependencies?", default=False),
            _is_bool,
        )

    def resolve_git_init(self, value: Optional[bool]) -> bool:
        """Explicit True/False is honoured; unset asks with no default."""
        return resolve_setting(
            value,
            lambda: self.prompter.confirm("Initialize a git repository?"),
            _is_bool,
        )

    def _ask_template(self) -> str:
        catalog = self.catalog or TemplateCatalog.load()
        options = [SelectOption(e.value, e.label, e.hint) for e in catalog.entries]
        return self.prompter.select("Select a template", options)

    def _ask_package_manager(self) -> str:
        options = []
        for pm in PackageManager:
            hint = "current" if pm is self.detected else None
            options.append(SelectOption(pm.value, pm.value, hint))
        initial = (self.detected or PackageManager.NPM).value
        logger.debug(f"Package manager prompt default: {initial}")
        return self.prompter.select("Which package manager would you like to use?", options, initial=initial)
