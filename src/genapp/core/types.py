"""Enums shared by the scaffolding core and the CLI."""

from enum import Enum


class Framework(str, Enum):
    """Supported application frameworks."""

    REACT = "react"
    NEXTJS = "nextjs"

    @property
    def label(self) -> str:
        labels: dict[Framework, str] = {
            Framework.REACT: "React (Vite)",
            Framework.NEXTJS: "Next.js",
        }
        return labels[self]


class Feature(str, Enum):
    """Optional features. Declaration order is the provisioning order."""

    TAILWIND = "tailwind"
    LINT_FORMAT = "lint-format"
    GIT_HOOKS = "git-hooks"
    TESTING = "testing"
    STORYBOOK = "storybook"
    I18N = "i18n"
    AUTH = "auth"

    @property
    def label(self) -> str:
        labels: dict[Feature, str] = {
            Feature.TAILWIND: "Tailwind CSS",
            Feature.LINT_FORMAT: "ESLint + Prettier",
            Feature.GIT_HOOKS: "Husky + lint-staged",
            Feature.TESTING: "Testing Library (Vitest / Jest)",
            Feature.STORYBOOK: "Storybook",
            Feature.I18N: "Internationalization (i18n)",
            Feature.AUTH: "Authentication",
        }
        return labels[self]

    @classmethod
    def in_order(cls, selected: "set[Feature] | frozenset[Feature]") -> list["Feature"]:
        """Return *selected* sorted by declaration order."""
        return [f for f in cls if f in selected]
