"""Template download from git hosting tarballs.

Locators use the registry shorthand ``[provider:]owner/repo[/sub/dir][#ref]``,
e.g. ``gh:XeicuLy/create-xeiculy-nuxt-app/templates/nuxt3``. The archive of
``ref`` is streamed to a temporary file and only the members under the
requested subdirectory are extracted into the destination.
"""
import tarfile
import tempfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import IO, Optional

import requests

from create_xeiculy_app.core.config import ScaffoldConfig, get_config
from create_xeiculy_app.core.errors import TemplateDownloadError
from create_xeiculy_app.core.logger import get_logger
from create_xeiculy_app.models.settings import TemplateDownloadResult

logger = get_logger(__name__)

TARBALL_URLS = {
    "github": "https://github.com/{repo}/archive/{ref}.tar.gz",
    "gitlab": "https://gitlab.com/{repo}/-/archive/{ref}.tar.gz",
    "bitbucket": "https://bitbucket.org/{repo}/get/{ref}.tar.gz",
    "sourcehut": "https://git.sr.ht/~{repo}/archive/{ref}.tar.gz",
}
PROVIDER_ALIASES = {"gh": "github"}
DEFAULT_PROVIDER = "github"
DEFAULT_REF = "main"
CHUNK_SIZE = 64 * 1024


@dataclass
class TemplateSource:
    """Parsed template locator."""
    provider: str
    repo: str
    subdir: str = ""
    ref: str = DEFAULT_REF

    @property
    def tarball_url(self) -> str:
        return TARBALL_URLS[self.provider].format(repo=self.repo, ref=self.ref)


def parse_template_source(locator: str) -> TemplateSource:
    """Parse ``[provider:]owner/repo[/sub/dir][#ref]``.

    Raises:
        TemplateDownloadError: If the provider is unknown or the locator is malformed
    """
    if not locator or not locator.strip():
        raise TemplateDownloadError("Template locator is empty")

    provider, sep, rest = locator.strip().partition(":")
    if not sep:
        provider, rest = DEFAULT_PROVIDER, locator.strip()
    provider = PROVIDER_ALIASES.get(provider, provider)
    if provider not in TARBALL_URLS:
        raise TemplateDownloadError(
            f"Unsupported template provider '{provider}' "
            f"(supported: {', '.join(sorted(TARBALL_URLS))})"
        )

    path, _, ref = rest.partition("#")
    parts = [p for p in path.split("/") if p]
    if len(parts) < 2:
        raise TemplateDownloadError(f"Invalid template locator '{locator}': expected owner/repo")
    if any(p in (".", "..") for p in parts):
        raise TemplateDownloadError(f"Invalid template locator '{locator}': relative segments not allowed")

    return TemplateSource(
        provider=provider,
        repo="/".join(parts[:2]),
        subdir="/".join(parts[2:]),
        ref=ref or DEFAULT_REF,
    )


class TemplateFetcher:
    """Downloads and extracts templates into a directory."""

    def __init__(self, config: Optional[ScaffoldConfig] = None, session: Optional[requests.Session] = None):
        self.config = config or get_config()
        self.session = session or requests.Session()

    def download(self, locator: str, directory: Path) -> TemplateDownloadResult:
        """Fetch locator into directory.

        Args:
            locator: Registry-qualified template locator
            directory: Destination; must be absent or empty

        Returns:
            TemplateDownloadResult with the directory and the locator used

        Raises:
            TemplateDownloadError: On any network, archive or layout problem
        """
        source = parse_template_source(locator)
        directory = Path(directory)
        if directory.exists() and any(directory.iterdir()):
            raise TemplateDownloadError(f"Destination {directory} is not empty")

        try:
            with tempfile.TemporaryFile() as buffer:
                self._fetch(source, buffer)
                buffer.seek(0)
                extracted = self._extract(buffer, source, directory)
        except OSError as e:
            raise TemplateDownloadError(f"Could not write template into {directory}: {e}") from e

        logger.info(f"Extracted {extracted} entries from {locator} into {directory}")
        return TemplateDownloadResult(local_directory=directory, source=locator)

    def _fetch(self, source: TemplateSource, buffer: IO[bytes]) -> None:
        url = source.tarball_url
        headers = {}
        if self.config.auth_token:
            headers["Authorization"] = f"Bearer {self.config.auth_token}"

        logger.debug(f"Downloading {url}")
        try:
            response = self.session.get(
                url,
                headers=headers,
                stream=True,
                timeout=self.config.download_timeout,
            )
            if response.status_code == 404:
                raise TemplateDownloadError(
                    f"Template repository {source.repo}#{source.ref} not found ({url})"
                )
            response.raise_for_status()
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                if chunk:
                    buffer.write(chunk)
        except requests.RequestException as e:
            raise TemplateDownloadError(f"Failed to download template from {url}: {e}") from e

    def _extract(self, buffer: IO[bytes], source: TemplateSource, directory: Path) -> int:
        prefix = PurePosixPath(source.subdir).parts if source.subdir else ()
        extracted = 0

        try:
            with tarfile.open(fileobj=buffer, mode="r:gz") as archive:
                for member in archive:
                    relative = self._member_path(member.name, prefix)
                    if relative is None:
                        continue

                    target = directory.joinpath(*relative)
                    if member.isdir():
                        target.mkdir(parents=True, exist_ok=True)
                    elif member.isfile():
                        target.parent.mkdir(parents=True, exist_ok=True)
                        data = archive.extractfile(member)
                        with open(target, "wb") as out:
                            out.write(data.read() if data else b"")
                        target.chmod(0o755 if member.mode & 0o111 else 0o644)
                    else:
                        logger.debug(f"Skipping non-regular archive member {member.name}")
                        continue
                    extracted += 1
        except tarfile.TarError as e:
            raise TemplateDownloadError(f"Corrupt template archive for {source.repo}: {e}") from e

        if extracted == 0:
            where = f"'{source.subdir}' in " if source.subdir else ""
            raise TemplateDownloadError(f"Template {where}{source.repo}#{source.ref} is empty or missing")
        return extracted

    @staticmethod
    def _member_path(name: str, prefix: tuple) -> Optional[tuple]:
        """Archive member path below <top>/<prefix>, or None when outside it."""
        path = PurePosixPath(name)
        if path.is_absolute() or ".." in path.parts:
            raise TemplateDownloadError(f"Refusing unsafe path in template archive: {name}")

        # Drop the <repo>-<ref>/ top-level directory
        parts = path.parts[1:]
        if len(parts) <= len(prefix) or parts[:len(prefix)] != prefix:
            return None
        return parts[len(prefix):]
