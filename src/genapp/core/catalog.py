"""Fixed catalog mapping framework and styling choice to a template."""

from __future__ import annotations

from collections.abc import Iterator

from genapp.core.types import Framework

TEMPLATE_CATALOG: dict[tuple[Framework, bool], str] = {
    (Framework.REACT, False): "react",
    (Framework.REACT, True): "react-tailwind",
    (Framework.NEXTJS, False): "nextjs",
    (Framework.NEXTJS, True): "nextjs-tailwind",
}


def resolve(framework: Framework, wants_styling_addon: bool) -> str:
    """Return the template identifier for *framework* with or without Tailwind."""
    return TEMPLATE_CATALOG[(framework, wants_styling_addon)]


def catalog_entries() -> Iterator[tuple[str, Framework, bool]]:
    """Yield ``(template_id, framework, tailwind)`` in framework declaration order."""
    for framework in Framework:
        for addon in (False, True):
            yield TEMPLATE_CATALOG[(framework, addon)], framework, addon
