"""Shared test fixtures for create-xeiculy-app tests."""
from pathlib import Path

import pytest
from rich.console import Console

from create_xeiculy_app.core.config import ScaffoldConfig, set_config
from create_xeiculy_app.core.errors import PromptCancelled
from create_xeiculy_app.core.input_resolver import InputResolver
from create_xeiculy_app.core.orchestrator import ScaffoldOrchestrator
from create_xeiculy_app.core.template_catalog import TemplateCatalog
from create_xeiculy_app.models.settings import TemplateDownloadResult
from create_xeiculy_app.models.template import TemplateEntry

REGISTRY = "gh:XeicuLy/create-xeiculy-nuxt-app/templates"


class FakePrompter:
    """Prompter returning scripted answers and recording every prompt.

    answers maps prompt kind ('text', 'select', 'confirm') to a list of
    answers; an answer of PromptCancelled simulates Ctrl-C.
    """

    def __init__(self, **answers):
        self.answers = {kind: list(values) for kind, values in answers.items()}
        self.calls = []

    def _answer(self, kind, message, **kwargs):
        self.calls.append((kind, message, kwargs))
        queue = self.answers.get(kind)
        if not queue:
            raise AssertionError(f"Unexpected {kind} prompt: {message}")
        answer = queue.pop(0)
        if answer is PromptCancelled:
            raise PromptCancelled()
        return answer

    def text(self, message, default=None):
        return self._answer("text", message, default=default)

    def select(self, message, options, initial=None):
        return self._answer("select", message, options=options, initial=initial)

    def confirm(self, message, default=None):
        return self._answer("confirm", message, default=default)


class FakeFetcher:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def download(self, locator, directory):
        self.calls.append((locator, Path(directory)))
        if self.error:
            raise self.error
        Path(directory).mkdir(parents=True)
        (Path(directory) / "package.json").write_text('{"name": "nuxt-app", "private": true}')
        return TemplateDownloadResult(local_directory=Path(directory), source=locator)


class FakeInstaller:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def install(self, directory, manager):
        self.calls.append((Path(directory), manager))
        if self.error:
            raise self.error


class FakeGit:
    def __init__(self, error=None):
        self.error = error
        self.calls = []

    def init_repo(self, directory):
        self.calls.append(Path(directory))
        if self.error:
            raise self.error


@pytest.fixture
def config():
    cfg = ScaffoldConfig(registry=REGISTRY, default_project_name="xeiculy-app")
    set_config(cfg)
    yield cfg
    set_config(None)


@pytest.fixture
def catalog():
    return TemplateCatalog([TemplateEntry(value="nuxt3", label="Nuxt3")])


@pytest.fixture
def console():
    return Console(record=True, width=200)


@pytest.fixture
def make_orchestrator(config, catalog, console):
    """Build an orchestrator around fakes; returns (orchestrator, prompter, fetcher, installer, git)."""

    def _make(prompter=None, fetcher=None, installer=None, git=None, detected=None):
        prompter = prompter or FakePrompter()
        fetcher = fetcher or FakeFetcher()
        installer = installer or FakeInstaller()
        git = git or FakeGit()
        resolver = InputResolver(prompter, catalog=catalog, config=config, detected=detected)
        orchestrator = ScaffoldOrchestrator(
            resolver, fetcher, installer, git, console=console, config=config
        )
        return orchestrator, prompter, fetcher, installer, git

    return _make
