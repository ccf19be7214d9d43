"""Runs a whole scaffolding pass: resolve, fetch, install, provision."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from genapp.core.catalog import resolve
from genapp.core.config import CONFIG_FILENAME, Answers
from genapp.core.errors import CommandError
from genapp.core.fetcher import FetchMethod, TemplateFetcher
from genapp.core.pkg_manager import PackageManager
from genapp.core.provision import provision
from genapp.core.runner import CommandRunner, SubprocessRunner
from genapp.core.types import Feature

logger = logging.getLogger(__name__)


class Stage(str, Enum):
    """Progress events emitted by :func:`scaffold_project`."""

    FETCH = "fetch"
    INSTALL = "install"
    CONFIG = "config"
    FEATURE = "feature"


Reporter = Callable[[Stage, str], None]


@dataclass(frozen=True, kw_only=True)
class ScaffoldResult:
    project_dir: Path
    template_id: str
    pkg_manager: PackageManager
    fetch_method: FetchMethod
    provisioned: list[Feature]

    @property
    def next_command(self) -> str:
        return f"cd {self.project_dir.name} && {' '.join(self.pkg_manager.run_command('dev'))}"


def write_answers(project_dir: Path, answers: Answers) -> Path:
    """Persist *answers* as pretty-printed JSON in the project root."""
    path = project_dir / CONFIG_FILENAME
    path.write_text(json.dumps(answers.to_dict(), indent=2) + "\n", encoding="utf-8")
    return path


def scaffold_project(
    answers: Answers,
    *,
    base_dir: Path,
    pkg_manager: PackageManager,
    fetcher: TemplateFetcher | None = None,
    runner: CommandRunner | None = None,
    reporter: Reporter | None = None,
) -> ScaffoldResult:
    """Create ``base_dir/<project_name>`` from *answers*.

    Any failure propagates and the partially created project is left on disk.

    Args:
        answers: The user's choices.
        base_dir: Directory the project folder is created in.
        pkg_manager: Package manager used for every install.
        fetcher: Template fetcher; defaults to one sharing *runner*.
        runner: Command runner for installs and feature steps.
        reporter: Called with ``(stage, detail)`` before each stage.

    Returns:
        A summary of what was done.
    """
    runner = runner or SubprocessRunner()
    fetcher = fetcher or TemplateFetcher(runner=runner)

    def report(stage: Stage, detail: str) -> None:
        logger.info("%s: %s", stage.value, detail)
        if reporter is not None:
            reporter(stage, detail)

    project_dir = base_dir / answers.project_name
    template_id = resolve(answers.framework, answers.wants_tailwind)

    report(Stage.FETCH, template_id)
    method = fetcher.fetch(template_id, project_dir)

    install = pkg_manager.install_command()
    report(Stage.INSTALL, " ".join(install))
    exit_code = runner(install, cwd=project_dir)
    if exit_code != 0:
        raise CommandError(install, exit_code)

    report(Stage.CONFIG, CONFIG_FILENAME)
    write_answers(project_dir, answers)

    provisioned = provision(
        project_dir,
        answers.framework,
        answers.features,
        pkg_manager,
        runner,
        on_step=lambda feature: report(Stage.FEATURE, feature.value),
    )

    return ScaffoldResult(
        project_dir=project_dir,
        template_id=template_id,
        pkg_manager=pkg_manager,
        fetch_method=method,
        provisioned=provisioned,
    )
