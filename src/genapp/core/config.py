"""Configuration dataclasses for a scaffolding run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from genapp.core.types import Feature, Framework

CONFIG_FILENAME = "config.cli.json"
DEFAULT_PROJECT_NAME = "my-app"


@dataclass(frozen=True, kw_only=True)
class TemplateSource:
    """
    Location of the template catalog.

    Attributes:
        owner: GitHub account owning the repository.
        repo: Repository name.
        branch: Branch the templates are read from.
        subdir: Folder holding one sub-folder per template.
        host: Git host, used for the SSH fallback address.
    """

    owner: str = "JulianVNuam"
    repo: str = "generate-app-cli"
    branch: str = "main"
    subdir: str = "project-templates"
    host: str = "github.com"

    @property
    def archive_url(self) -> str:
        base = f"https://codeload.{self.host}/{self.owner}/{self.repo}"
        return f"{base}/tar.gz/refs/heads/{self.branch}"

    @property
    def ssh_url(self) -> str:
        return f"git@{self.host}:{self.owner}/{self.repo}.git"

    def template_path(self, template_id: str) -> str:
        """Repository-relative folder of *template_id*."""
        return f"{self.subdir}/{template_id}"


@dataclass(frozen=True, kw_only=True)
class Answers:
    """
    The user's choices for one run.

    Attributes:
        project_name: Name of the project and of its directory.
        framework: Framework the template is built on.
        features: Optional features to provision.
    """

    project_name: str
    framework: Framework
    features: frozenset[Feature] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.project_name.strip():
            raise ValueError("project_name must not be empty.")
        # Accept any iterable of features from callers.
        object.__setattr__(self, "features", frozenset(self.features))

    @property
    def wants_tailwind(self) -> bool:
        return Feature.TAILWIND in self.features

    def ordered_features(self) -> list[Feature]:
        return Feature.in_order(self.features)

    def to_dict(self) -> dict[str, Any]:
        """Payload persisted as ``config.cli.json``."""
        return {
            "projectName": self.project_name,
            "framework": self.framework.value,
            "features": [f.value for f in self.ordered_features()],
        }
