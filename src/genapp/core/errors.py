"""Exceptions raised while scaffolding a project."""

from __future__ import annotations

import shlex
from collections.abc import Sequence

from genapp.core.types import Feature


class ScaffoldError(Exception):
    """Base class for every failure that aborts a scaffolding run."""


class FetchError(ScaffoldError):
    """The template could not be retrieved by any method."""


class TemplateNotFoundError(ScaffoldError):
    """The cloned repository does not contain the requested template."""

    def __init__(self, template_id: str, path: str, branch: str) -> None:
        self.template_id = template_id
        self.path = path
        self.branch = branch
        super().__init__(f"Template folder '{path}' does not exist on branch '{branch}'.")


class CommandError(ScaffoldError):
    """A subprocess exited with a non-zero status."""

    def __init__(self, command: Sequence[str], exit_code: int | None, reason: str = "") -> None:
        self.command = list(command)
        self.exit_code = exit_code
        detail = reason or f"exited with code {exit_code}"
        if self.command:
            detail = f"`{shlex.join(self.command)}` {detail}"
        super().__init__(detail)


class ProvisioningError(CommandError):
    """A feature's provisioning step failed."""

    def __init__(
        self,
        feature: Feature,
        command: Sequence[str],
        exit_code: int | None,
        reason: str = "",
    ) -> None:
        self.feature = feature
        super().__init__(command, exit_code, reason)

    def __str__(self) -> str:
        return f"{self.feature.label}: {super().__str__()}"
