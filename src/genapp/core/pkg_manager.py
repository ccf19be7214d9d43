"""Package-manager detection and command dialects."""

from __future__ import annotations

import os
from collections.abc import Iterable
from enum import Enum

USER_AGENT_ENV = "npm_config_user_agent"


class PackageManager(str, Enum):
    """JavaScript package managers the scaffolder can drive."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    def install_command(self, packages: Iterable[str] = (), *, dev: bool = False) -> list[str]:
        """Build the argv that adds *packages* (or installs the manifest when empty).

        yarn uses ``add [-D]``; npm and pnpm use ``install [-D]``.
        """
        pkgs = list(packages)
        if not pkgs:
            return [self.value, "install"]

        verb = "add" if self is PackageManager.YARN else "install"
        flags = ["-D"] if dev else []
        return [self.value, verb, *flags, *pkgs]

    def exec_command(self, *args: str) -> list[str]:
        return [self.value, "exec", *args]

    def run_command(self, script: str) -> list[str]:
        return [self.value, "run", script]


def detect(user_agent: str | None = None) -> PackageManager:
    """Pick the package manager that launched us.

    Reads ``npm_config_user_agent`` when *user_agent* is not given. A string
    mentioning both pnpm and yarn resolves to pnpm. Anything unrecognised,
    including an empty or missing value, falls back to npm.
    """
    if user_agent is None:
        user_agent = os.environ.get(USER_AGENT_ENV, "")

    if "pnpm" in user_agent:
        return PackageManager.PNPM
    if "yarn" in user_agent:
        return PackageManager.YARN
    return PackageManager.NPM
