"""Shared fixtures for the genapp test suite."""

from __future__ import annotations

import io
import json
import tarfile
from collections.abc import Callable, Sequence
from pathlib import Path

import httpx
import pytest

from genapp.core.fetcher import FetchMethod

ARCHIVE_ROOT = "generate-app-cli-main"

TEMPLATE_MANIFEST = {"name": "template", "private": True, "scripts": {"dev": "vite"}}


class RecordingRunner:
    """CommandRunner fake that records calls instead of spawning processes.

    ``fail_on`` maps a substring of the joined command to the exit code it
    should return. ``on_call`` runs before the exit code is returned.
    """

    def __init__(
        self,
        fail_on: dict[str, int] | None = None,
        on_call: Callable[[list[str], Path | None], None] | None = None,
    ) -> None:
        self.calls: list[tuple[list[str], Path | None]] = []
        self.fail_on = fail_on or {}
        self.on_call = on_call

    def __call__(self, argv: Sequence[str], cwd: Path | None = None) -> int:
        argv_list = list(argv)
        self.calls.append((argv_list, cwd))
        if self.on_call is not None:
            self.on_call(argv_list, cwd)
        joined = " ".join(argv_list)
        for needle, code in self.fail_on.items():
            if needle in joined:
                return code
        return 0

    @property
    def commands(self) -> list[str]:
        return [" ".join(argv) for argv, _ in self.calls]


class FakeFetcher:
    """Fetcher fake writing a minimal template with a package.json."""

    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[tuple[str, Path]] = []
        self.error = error

    def fetch(self, template_id: str, destination: Path) -> FetchMethod:
        self.calls.append((template_id, destination))
        if self.error is not None:
            raise self.error
        destination.mkdir(parents=True, exist_ok=True)
        (destination / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST, indent=2))
        return FetchMethod.ARCHIVE


def make_archive(
    files: dict[str, str],
    modes: dict[str, int] | None = None,
    links: dict[str, str] | None = None,
) -> bytes:
    """Build a gzipped tarball laid out like a GitHub branch archive.

    ``links`` maps member names to symlink targets.
    """
    modes = modes or {}
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        root = tarfile.TarInfo(ARCHIVE_ROOT)
        root.type = tarfile.DIRTYPE
        root.mode = 0o755
        tar.addfile(root)
        for name, content in files.items():
            data = content.encode()
            info = tarfile.TarInfo(f"{ARCHIVE_ROOT}/{name}")
            info.size = len(data)
            info.mode = modes.get(name, 0o644)
            tar.addfile(info, io.BytesIO(data))
        for name, link_target in (links or {}).items():
            info = tarfile.TarInfo(f"{ARCHIVE_ROOT}/{name}")
            info.type = tarfile.SYMTYPE
            info.linkname = link_target
            tar.addfile(info)
    return buf.getvalue()


def mock_client(status: int = 200, content: bytes = b"") -> tuple[httpx.Client, list[str]]:
    """httpx client answering every request with *status*; also returns the URLs hit."""
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(status, content=content)

    return httpx.Client(transport=httpx.MockTransport(handler)), requested


def clone_creating(*template_ids: str) -> Callable[[list[str], Path | None], None]:
    """``on_call`` hook making ``git clone`` produce a checkout with *template_ids*."""

    def on_call(argv: list[str], cwd: Path | None) -> None:
        if argv[:2] != ["git", "clone"]:
            return
        clone_dir = Path(argv[-1])
        (clone_dir / ".git").mkdir(parents=True)
        for template_id in template_ids:
            tpl = clone_dir / "project-templates" / template_id
            tpl.mkdir(parents=True)
            (tpl / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST))

    return on_call


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A fetched project: directory with the template's package.json."""
    project = tmp_path / "demo"
    project.mkdir()
    (project / "package.json").write_text(json.dumps(TEMPLATE_MANIFEST, indent=2))
    return project
