"""Per-feature provisioning of a freshly fetched project."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from genapp.core.errors import ProvisioningError
from genapp.core.pkg_manager import PackageManager
from genapp.core.runner import CommandRunner
from genapp.core.types import Feature, Framework

logger = logging.getLogger(__name__)

_LINT_DEPS: list[str] = [
    "eslint",
    "prettier",
    "eslint-config-prettier",
    "eslint-plugin-react",
    "eslint-plugin-react-hooks",
]

_HOOK_DEPS: list[str] = ["husky", "lint-staged"]

_TEST_DEPS: dict[Framework, list[str]] = {
    Framework.REACT: [
        "vitest",
        "@testing-library/react",
        "@testing-library/jest-dom",
        "jsdom",
    ],
    Framework.NEXTJS: [
        "@testing-library/react",
        "@testing-library/jest-dom",
        "jest",
        "jest-environment-jsdom",
        "ts-jest",
    ],
}

_I18N_DEPS: dict[Framework, list[str]] = {
    Framework.REACT: ["react-i18next", "i18next"],
    Framework.NEXTJS: ["next-i18next", "react-i18next", "i18next"],
}

_AUTH_DEPS: dict[Framework, list[str]] = {
    Framework.REACT: ["@auth0/auth0-react"],
    Framework.NEXTJS: ["next-auth"],
}

LINT_STAGED_CONFIG: dict[str, list[str]] = {
    "*.{js,jsx,ts,tsx}": ["eslint --fix", "prettier --write"],
}

PRETTIER_CONFIG: dict[str, bool] = {"semi": True, "singleQuote": False}

PRETTIER_IGNORE = "node_modules\n.next\ndist\nbuild\n"

VITEST_CONFIG = """\
import { defineConfig } from 'vitest/config'
export default defineConfig({ test: { environment: 'jsdom' } })
"""

JEST_CONFIG = """\
/** @type {import('jest').Config} */
const config = {
  testEnvironment: 'jsdom',
  setupFilesAfterEnv: ['<rootDir>/jest.setup.js'],
};
module.exports = config;
"""

JEST_SETUP = "import '@testing-library/jest-dom'\n"


@dataclass(frozen=True, kw_only=True)
class ProvisionContext:
    """
    Everything a provisioning step needs.

    Attributes:
        project_dir: Root of the new project; every command runs here.
        framework: Framework of the fetched template.
        pkg_manager: Package manager used for installs.
        runner: Executes external commands.
    """

    project_dir: Path
    framework: Framework
    pkg_manager: PackageManager
    runner: CommandRunner

    def run(self, feature: Feature, argv: Sequence[str]) -> None:
        exit_code = self.runner(argv, cwd=self.project_dir)
        if exit_code != 0:
            raise ProvisioningError(feature, argv, exit_code)

    def install(self, feature: Feature, packages: Iterable[str], *, dev: bool = False) -> None:
        self.run(feature, self.pkg_manager.install_command(packages, dev=dev))

    def write_text(self, name: str, content: str, *, mode: int | None = None) -> Path:
        path = self.project_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        if mode is not None:
            os.chmod(path, mode)
        logger.debug("Wrote %s", path)
        return path

    def write_json(self, name: str, data: Any) -> Path:
        return self.write_text(name, json.dumps(data, indent=2) + "\n")


Step = Callable[[ProvisionContext], None]


def eslint_config(framework: Framework) -> dict[str, Any]:
    """ESLint rule set for *framework*."""
    is_next = framework is Framework.NEXTJS
    return {
        "extends": [
            "eslint:recommended",
            "next/core-web-vitals" if is_next else "plugin:react/recommended",
            "prettier",
        ],
        "plugins": ["react", "react-hooks"],
        "parserOptions": {"ecmaVersion": "latest", "sourceType": "module"},
        "settings": {} if is_next else {"react": {"version": "detect"}},
    }


def pre_commit_hook(pkg_manager: PackageManager) -> str:
    command = " ".join(pkg_manager.exec_command("lint-staged"))
    return f'#!/bin/sh\n. "$(dirname "$0")/_/husky.sh"\n{command}\n'


def _lint_format(ctx: ProvisionContext) -> None:
    ctx.install(Feature.LINT_FORMAT, _LINT_DEPS, dev=True)
    ctx.write_json(".eslintrc.json", eslint_config(ctx.framework))
    ctx.write_json(".prettierrc", PRETTIER_CONFIG)
    ctx.write_text(".prettierignore", PRETTIER_IGNORE)


def _merge_lint_staged(ctx: ProvisionContext) -> None:
    manifest_path = ctx.project_dir / "package.json"
    try:
        manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise ProvisioningError(
            Feature.GIT_HOOKS, [], None, reason=f"cannot read {manifest_path}: {exc}"
        ) from exc

    manifest["lint-staged"] = LINT_STAGED_CONFIG
    ctx.write_json("package.json", manifest)


def _git_hooks(ctx: ProvisionContext) -> None:
    ctx.install(Feature.GIT_HOOKS, _HOOK_DEPS, dev=True)
    ctx.run(Feature.GIT_HOOKS, ["npx", "husky", "init"])
    ctx.write_text(".husky/pre-commit", pre_commit_hook(ctx.pkg_manager), mode=0o755)
    _merge_lint_staged(ctx)


def _testing(ctx: ProvisionContext) -> None:
    ctx.install(Feature.TESTING, _TEST_DEPS[ctx.framework], dev=True)
    if ctx.framework is Framework.REACT:
        ctx.write_text("vitest.config.js", VITEST_CONFIG)
    else:
        ctx.write_text("jest.config.cjs", JEST_CONFIG)
        ctx.write_text("jest.setup.js", JEST_SETUP)


def _storybook(ctx: ProvisionContext) -> None:
    ctx.run(Feature.STORYBOOK, ["npx", "storybook@latest", "init"])


def _i18n(ctx: ProvisionContext) -> None:
    ctx.install(Feature.I18N, _I18N_DEPS[ctx.framework])


def _auth(ctx: ProvisionContext) -> None:
    ctx.install(Feature.AUTH, _AUTH_DEPS[ctx.framework])


# Tailwind is handled by the template choice.
PROVISIONING_STEPS: dict[Feature, Step | None] = {
    Feature.TAILWIND: None,
    Feature.LINT_FORMAT: _lint_format,
    Feature.GIT_HOOKS: _git_hooks,
    Feature.TESTING: _testing,
    Feature.STORYBOOK: _storybook,
    Feature.I18N: _i18n,
    Feature.AUTH: _auth,
}


def provision(
    project_dir: Path,
    framework: Framework,
    features: Iterable[Feature],
    pkg_manager: PackageManager,
    runner: CommandRunner,
    on_step: Callable[[Feature], None] | None = None,
) -> list[Feature]:
    """Apply every selected feature in declaration order.

    The first failing step raises ProvisioningError and later steps are not
    run. Already applied steps are left in place. Returns the features that
    had a step to run.
    """
    ctx = ProvisionContext(
        project_dir=project_dir,
        framework=framework,
        pkg_manager=pkg_manager,
        runner=runner,
    )

    applied: list[Feature] = []
    for feature in Feature.in_order(set(features)):
        step = PROVISIONING_STEPS[feature]
        if step is None:
            continue
        if on_step is not None:
            on_step(feature)
        logger.info("Provisioning %s", feature.value)
        step(ctx)
        applied.append(feature)
    return applied
