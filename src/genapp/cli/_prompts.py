"""Clack-style interactive prompts using Rich + simple-term-menu."""

from __future__ import annotations

import sys
from typing import TypeVar

from rich.console import Console
from simple_term_menu import TerminalMenu

from genapp.core.config import DEFAULT_PROJECT_NAME
from genapp.core.types import Feature, Framework

_console = Console()

T = TypeVar("T")


def _print_bar() -> None:
    _console.print("[dim]│[/]")


def _erase(n: int) -> None:
    """Move the cursor up *n* lines and clear everything below it."""
    sys.stdout.write(f"\033[{n}A\033[J")
    sys.stdout.flush()


def _ask(question: str, hint: str | None = None) -> int:
    """Print an open ◆ question; returns how many lines it used."""
    _console.print(f"[bold cyan]◆[/]  {question}")
    if hint:
        _console.print(f"[dim]│  {hint}[/]")
    _print_bar()
    return 3 if hint else 2


def _answer(question: str, lines: list[str]) -> None:
    """Replace the open question with its ◇ settled form."""
    _console.print(f"[bold green]◇[/]  {question}")
    for line in lines:
        _console.print(f"[dim]│[/]  {line}")
    _print_bar()


def _text(question: str, default: str) -> str:
    """Free-text prompt; empty input keeps *default*."""
    used = _ask(question)
    _console.print("[dim]│[/]  ", end="")
    result = input(f"({default}) ").strip() or default

    _erase(used + 1)
    _answer(question, [result])
    return result


def _menu(labels: list[str], **kwargs: object) -> TerminalMenu:
    return TerminalMenu(
        labels,
        menu_cursor_style=("fg_cyan", "bold"),
        menu_highlight_style=("fg_cyan",),
        **kwargs,
    )


def _select(question: str, options: list[T], labels: list[str]) -> T:
    """Single-choice prompt; Escape aborts the program."""
    used = _ask(question)
    choice = _menu(labels, menu_cursor="│  ● ").show()
    if choice is None:
        raise SystemExit(1)

    index = int(choice)
    _erase(used)
    _answer(
        question,
        [
            f"[bold green]●[/] {label}" if i == index else f"  [dim s]{label}[/]"
            for i, label in enumerate(labels)
        ],
    )
    return options[index]


def _multi_select(question: str, options: list[T], labels: list[str]) -> list[T]:
    """Checkbox prompt; an empty selection is allowed, Escape aborts."""
    used = _ask(question, hint="space to toggle, enter to confirm")
    menu = _menu(
        labels,
        menu_cursor="│  ",
        multi_select=True,
        multi_select_select_on_accept=False,
        multi_select_empty_ok=True,
        show_multi_select_hint=False,
        multi_select_cursor="◼ ",
    )
    chosen = menu.show()

    # Escape / Ctrl-C leave no accept key behind; an empty selection does.
    if chosen is None and menu.chosen_accept_key is None:
        raise SystemExit(1)

    indices = sorted(int(i) for i in (chosen or ()))
    _erase(used)
    _answer(question, [f"[bold green]◼[/] {labels[i]}" for i in indices] or ["[dim]none[/]"])
    return [options[i] for i in indices]


def prompt_project_name() -> str:
    """Prompt user for the project (and directory) name."""
    return _text("Project name", DEFAULT_PROJECT_NAME)


def prompt_framework() -> Framework:
    """Prompt user to choose a framework."""
    frameworks = list(Framework)
    labels = [f.label for f in frameworks]
    return _select("Which framework do you want to use?", frameworks, labels)


def prompt_features() -> list[Feature]:
    """Prompt user to tick optional features."""
    features = list(Feature)
    labels = [f.label for f in features]
    return _multi_select("Select optional features", features, labels)
