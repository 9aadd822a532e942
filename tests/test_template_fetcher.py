"""Tests for template locator parsing and tarball extraction."""
import io
import tarfile

import pytest
import requests

from create_xeiculy_app.core.config import ScaffoldConfig
from create_xeiculy_app.core.errors import TemplateDownloadError
from create_xeiculy_app.services.template_fetcher import TemplateFetcher, parse_template_source


def make_tarball(files, top="create-xeiculy-nuxt-app-main"):
    """Build a gzipped tarball; files maps relative path -> (content, mode)."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        directory = tarfile.TarInfo(top)
        directory.type = tarfile.DIRTYPE
        archive.addfile(directory)
        for name, (content, mode) in files.items():
            data = content.encode()
            info = tarfile.TarInfo(f"{top}/{name}" if top else name)
            info.size = len(data)
            info.mode = mode
            archive.addfile(info, io.BytesIO(data))
    return buffer.getvalue()


class FakeResponse:
    def __init__(self, body=b"", status_code=200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def iter_content(self, chunk_size=1):
        for i in range(0, len(self.body), chunk_size):
            yield self.body[i:i + chunk_size]


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response


TEMPLATE_FILES = {
    "README.md": ("# root readme", 0o644),
    "templates/nuxt3/package.json": ('{"name": "nuxt-app"}', 0o644),
    "templates/nuxt3/app.vue": ("<template />", 0o644),
    "templates/nuxt3/scripts/setup.sh": ("#!/bin/sh", 0o755),
    "templates/other/package.json": ("{}", 0o644),
}


class TestParseTemplateSource:
    """Test locator parsing."""

    def test_github_shorthand_with_subdir(self):
        source = parse_template_source("gh:XeicuLy/create-xeiculy-nuxt-app/templates/nuxt3")
        assert source.provider == "github"
        assert source.repo == "XeicuLy/create-xeiculy-nuxt-app"
        assert source.subdir == "templates/nuxt3"
        assert source.ref == "main"
        assert source.tarball_url == "https://github.com/XeicuLy/create-xeiculy-nuxt-app/archive/main.tar.gz"

    def test_ref_suffix(self):
        source = parse_template_source("gitlab:group/project#v2")
        assert source.provider == "gitlab"
        assert source.subdir == ""
        assert source.tarball_url == "https://gitlab.com/group/project/-/archive/v2.tar.gz"

    def test_provider_defaults_to_github(self):
        assert parse_template_source("owner/repo").provider == "github"

    @pytest.mark.parametrize("locator", ["", "gh:owner", "svn:owner/repo", "gh:owner/repo/../etc"])
    def test_invalid_locators(self, locator):
        with pytest.raises(TemplateDownloadError):
            parse_template_source(locator)


class TestTemplateFetcher:
    """Test downloading and extracting."""

    def test_extracts_only_requested_subdir(self, tmp_path):
        session = FakeSession(FakeResponse(make_tarball(TEMPLATE_FILES)))
        fetcher = TemplateFetcher(ScaffoldConfig(), session=session)
        destination = tmp_path / "my-project"

        result = fetcher.download("gh:XeicuLy/create-xeiculy-nuxt-app/templates/nuxt3", destination)

        assert result.local_directory == destination
        assert result.source == "gh:XeicuLy/create-xeiculy-nuxt-app/templates/nuxt3"
        assert (destination / "package.json").read_text() == '{"name": "nuxt-app"}'
        assert (destination / "app.vue").exists()
        assert not (destination / "README.md").exists()
        assert not (destination / "other").exists()
        assert (destination / "scripts" / "setup.sh").stat().st_mode & 0o111

    def test_sends_auth_header_and_timeout(self, tmp_path):
        session = FakeSession(FakeResponse(make_tarball(TEMPLATE_FILES)))
        config = ScaffoldConfig(auth_token="secret", download_timeout=30.0)
        TemplateFetcher(config, session=session).download("gh:o/r/templates/nuxt3", tmp_path / "app")

        url, kwargs = session.requests[0]
        assert url == "https://github.com/o/r/archive/main.tar.gz"
        assert kwargs["headers"]["Authorization"] == "Bearer secret"
        assert kwargs["timeout"] == 30.0
        assert kwargs["stream"] is True

    def test_missing_subdir(self, tmp_path):
        session = FakeSession(FakeResponse(make_tarball(TEMPLATE_FILES)))
        fetcher = TemplateFetcher(ScaffoldConfig(), session=session)

        with pytest.raises(TemplateDownloadError) as exc:
            fetcher.download("gh:o/r/templates/missing", tmp_path / "app")
        assert "templates/missing" in str(exc.value)

    def test_not_found(self, tmp_path):
        session = FakeSession(FakeResponse(status_code=404))
        with pytest.raises(TemplateDownloadError) as exc:
            TemplateFetcher(ScaffoldConfig(), session=session).download("gh:o/r", tmp_path / "app")
        assert "not found" in str(exc.value)

    def test_server_error(self, tmp_path):
        session = FakeSession(FakeResponse(status_code=500))
        with pytest.raises(TemplateDownloadError):
            TemplateFetcher(ScaffoldConfig(), session=session).download("gh:o/r", tmp_path / "app")

    def test_network_error(self, tmp_path):
        session = FakeSession(error=requests.ConnectionError("network error"))
        with pytest.raises(TemplateDownloadError) as exc:
            TemplateFetcher(ScaffoldConfig(), session=session).download("gh:o/r", tmp_path / "app")
        assert "network error" in str(exc.value)

    def test_corrupt_archive(self, tmp_path):
        session = FakeSession(FakeResponse(b"not a tarball"))
        with pytest.raises(TemplateDownloadError):
            TemplateFetcher(ScaffoldConfig(), session=session).download("gh:o/r", tmp_path / "app")

    def test_rejects_path_traversal(self, tmp_path):
        body = make_tarball({"../escape.txt": ("x", 0o644)})
        session = FakeSession(FakeResponse(body))
        with pytest.raises(TemplateDownloadError):
            TemplateFetcher(ScaffoldConfig(), session=session).download("gh:o/r", tmp_path / "app")
        assert not (tmp_path / "escape.txt").exists()

    def test_refuses_non_empty_destination(self, tmp_path):
        (tmp_path / "app").mkdir()
        (tmp_path / "app" / "file").write_text("x")
        session = FakeSession(FakeResponse(make_tarball(TEMPLATE_FILES)))

        with pytest.raises(TemplateDownloadError):
            TemplateFetcher(ScaffoldConfig(), session=session).download("gh:o/r", tmp_path / "app")
        assert session.requests == []

    def test_unwritable_destination_is_download_error(self, tmp_path):
        (tmp_path / "blocker").write_text("a file, not a directory")
        session = FakeSession(FakeResponse(make_tarball(TEMPLATE_FILES)))
        fetcher = TemplateFetcher(ScaffoldConfig(), session=session)

        with pytest.raises(TemplateDownloadError) as exc:
            fetcher.download("gh:o/r/templates/nuxt3", tmp_path / "blocker" / "app")
        assert "Could not write template" in str(exc.value)
