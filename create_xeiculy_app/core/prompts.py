"""Interactive prompts and the flag-or-prompt resolution helper."""
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, TypeVar

from rich.console import Console
from rich.prompt import Confirm, Prompt

from create_xeiculy_app.core.errors import PromptCancelled

T = TypeVar("T")


@dataclass
class SelectOption:
    """One choice of a select prompt."""
    value: str
    label: str
    hint: Optional[str] = None


class Prompter(Protocol):
    """Prompt service used by the input resolver."""

    def text(self, message: str, default: Optional[str] = None) -> str:
        ...

    def select(self, message: str, options: List[SelectOption], initial: Optional[str] = None) -> str:
        ...

    def confirm(self, message: str, default: Optional[bool] = None) -> bool:
        ...


def resolve_setting(
    value: Optional[T],
    ask: Callable[[], T],
    is_valid: Callable[[Optional[T]], bool] = lambda v: v is not None,
) -> T:
    """Return value when it is valid, otherwise ask the operator.

    Args:
        value: Value taken from a flag (may be None)
        ask: Prompt to run when value is not usable
        is_valid: Predicate deciding whether value can be used as-is

    Returns:
        The flag value or the prompt answer
    """
    if is_valid(value):
        return value
    return ask()


class RichPrompter:
    """Prompter rendering through rich.prompt.

    Ctrl-C and end-of-input surface as PromptCancelled.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def text(self, message: str, default: Optional[str] = None) -> str:
        kwargs = {} if default is None else {"default": default}
        try:
            return Prompt.ask(message, console=self.console, **kwargs)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled() from e

    def select(self, message: str, options: List[SelectOption], initial: Optional[str] = None) -> str:
        if not options:
            raise ValueError("select prompt needs at least one option")

        self.console.print(f"[bold]{message}[/bold]")
        for option in options:
            hint = f" [dim]({option.hint})[/dim]" if option.hint else ""
            self.console.print(f"  [cyan]{option.value:10}[/cyan] {option.label}{hint}")

        default = initial if initial in [o.value for o in options] else options[0].value
        try:
            return Prompt.ask(
                "Choice",
                console=self.console,
                choices=[o.value for o in options],
                default=default,
            )
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled() from e

    def confirm(self, message: str, default: Optional[bool] = None) -> bool:
        kwargs = {} if default is None else {"default": default}
        try:
            return Confirm.ask(message, console=self.console, **kwargs)
        except (KeyboardInterrupt, EOFError) as e:
            raise PromptCancelled() from e
