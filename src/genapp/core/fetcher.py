"""Template retrieval: branch archive download with a git clone fallback."""

from __future__ import annotations

import gzip
import io
import logging
import os
import shutil
import tarfile
import tempfile
import zlib
from enum import Enum
from pathlib import Path, PurePosixPath

import httpx

from genapp.core.config import TemplateSource
from genapp.core.errors import FetchError, TemplateNotFoundError
from genapp.core.runner import CommandRunner, SubprocessRunner

logger = logging.getLogger(__name__)

DOWNLOAD_TIMEOUT = 60.0

# Decompression and tar parsing failures; raised before the destination is touched.
_UNREADABLE = (tarfile.TarError, EOFError, zlib.error, gzip.BadGzipFile)


class FetchMethod(str, Enum):
    """How a template ended up on disk."""

    ARCHIVE = "archive"
    GIT = "git"


def _member_parts(member: tarfile.TarInfo, prefix: tuple[str, ...]) -> tuple[str, ...] | None:
    """Path of *member* relative to *prefix*, or None when it lies outside it.

    GitHub archives wrap everything in a ``<repo>-<branch>/`` folder, which is
    dropped before matching.
    """
    parts = PurePosixPath(member.name).parts[1:]
    if parts[: len(prefix)] != prefix:
        return None
    rest = parts[len(prefix) :]
    if any(p in ("", ".", "..") for p in rest):
        return None
    return rest


def _open_archive(url: str, payload: bytes) -> tarfile.TarFile:
    """Open *payload* as a gzipped tarball and read its full member index."""
    try:
        archive = tarfile.open(fileobj=io.BytesIO(payload), mode="r:gz")
    except _UNREADABLE as exc:
        raise FetchError(f"Could not unpack {url}: {exc}") from exc
    try:
        archive.getmembers()
    except _UNREADABLE as exc:
        archive.close()
        raise FetchError(f"Could not unpack {url}: {exc}") from exc
    return archive


def _inside(root: str, path: Path | str) -> bool:
    """Whether *path*, with symlinks resolved, lies under the resolved *root*."""
    return os.path.commonpath([root, os.path.realpath(path)]) == root


def extract_subtree(archive: tarfile.TarFile, subdir: str, destination: Path) -> int:
    """Extract the members of *archive* below *subdir* into *destination*.

    Symlinks are recreated when their target stays inside *destination*; other
    links and special files are skipped. Returns the number of entries written.
    Raises FetchError when *subdir* is not present in the archive.
    """
    prefix = PurePosixPath(subdir).parts
    selected: list[tuple[tarfile.TarInfo, tuple[str, ...]]] = []
    found = False
    for member in archive.getmembers():
        rest = _member_parts(member, prefix)
        if rest is None:
            continue
        found = True
        if rest:
            selected.append((member, rest))

    if not found:
        raise FetchError(f"'{subdir}' is not present in the downloaded archive.")

    destination.mkdir(parents=True, exist_ok=True)
    root = os.path.realpath(destination)
    written = 0
    for member, rest in selected:
        target = destination.joinpath(*rest)
        if not _inside(root, target.parent):
            logger.warning("Skipping %s: it would be written outside the project", member.name)
            continue
        if member.isdir():
            target.mkdir(parents=True, exist_ok=True)
        elif member.isfile():
            target.parent.mkdir(parents=True, exist_ok=True)
            source = archive.extractfile(member)
            if source is None:
                continue
            with source, open(target, "wb") as out:
                shutil.copyfileobj(source, out)
            os.chmod(target, member.mode & 0o777)
            written += 1
        elif member.issym() and _inside(root, target.parent / member.linkname):
            target.parent.mkdir(parents=True, exist_ok=True)
            os.symlink(member.linkname, target)
            written += 1
        else:
            logger.warning("Skipping %s: unsupported link or special file", member.name)
    return written


class TemplateFetcher:
    """Copies a catalog template into a destination directory.

    The branch archive is tried first. If it cannot be downloaded or read, or
    lacks the template, the whole repository is cloned over SSH into a
    temporary directory and the template folder is copied from there. The clone
    needs credentials already present in the user's environment. Errors writing
    the destination are not retrieval failures and propagate unchanged.
    """

    def __init__(
        self,
        source: TemplateSource | None = None,
        runner: CommandRunner | None = None,
        client: httpx.Client | None = None,
        timeout: float = DOWNLOAD_TIMEOUT,
    ) -> None:
        self.source = source or TemplateSource()
        self.runner = runner or SubprocessRunner()
        self.timeout = timeout
        self._client = client

    def fetch(self, template_id: str, destination: Path) -> FetchMethod:
        """Materialize *template_id* in *destination* and report which method worked."""
        try:
            self.fetch_archive(template_id, destination)
        except FetchError as exc:
            logger.warning("Archive download failed (%s); falling back to git clone", exc)
            self.fetch_git(template_id, destination)
            return FetchMethod.GIT
        return FetchMethod.ARCHIVE

    def fetch_archive(self, template_id: str, destination: Path) -> None:
        url = self.source.archive_url
        archive = _open_archive(url, self._download(url))
        with archive:
            count = extract_subtree(archive, self.source.template_path(template_id), destination)
        logger.info("Extracted %d files of '%s' from %s", count, template_id, url)

    def fetch_git(self, template_id: str, destination: Path) -> None:
        branch = self.source.branch
        subpath = self.source.template_path(template_id)

        with tempfile.TemporaryDirectory(prefix="genapp-tpl-", ignore_cleanup_errors=True) as tmp:
            clone_dir = Path(tmp) / "repo"
            argv = [
                "git",
                "clone",
                "--depth=1",
                "--single-branch",
                "-b",
                branch,
                self.source.ssh_url,
                str(clone_dir),
            ]
            exit_code = self.runner(argv)
            if exit_code != 0:
                raise FetchError(f"git clone of {self.source.ssh_url} exited with code {exit_code}")

            template_dir = clone_dir / subpath
            if not template_dir.is_dir():
                raise TemplateNotFoundError(template_id, subpath, branch)

            destination.mkdir(parents=True, exist_ok=True)
            shutil.copytree(template_dir, destination, dirs_exist_ok=True)
        logger.info("Copied '%s' from a clone of %s", template_id, self.source.ssh_url)

    def _download(self, url: str) -> bytes:
        if self._client is not None:
            return self._get(self._client, url)
        with httpx.Client() as client:
            return self._get(client, url)

    def _get(self, client: httpx.Client, url: str) -> bytes:
        try:
            response = client.get(url, timeout=self.timeout, follow_redirects=True)
        except httpx.HTTPError as exc:
            raise FetchError(f"Request to {url} failed: {exc}") from exc
        if response.status_code != 200:
            raise FetchError(f"{url} returned HTTP {response.status_code}")
        return response.content
