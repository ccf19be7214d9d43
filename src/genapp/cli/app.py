"""Typer CLI application for genapp."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from rich.console import Console
from rich.markup import escape
from typer import Argument, Exit, Option, Typer

import genapp
from genapp.cli._logging import configure_logging
from genapp.cli._prompts import prompt_features, prompt_framework, prompt_project_name
from genapp.core import (
    Answers,
    Feature,
    Framework,
    ScaffoldError,
    Stage,
    catalog_entries,
    detect,
    scaffold_project,
)

app = Typer(add_completion=False, context_settings={"help_option_names": ["-h", "--help"]})
_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    verbose: Annotated[
        bool, Option("--verbose", "-v", help="Log every command and file operation.")
    ] = False,
) -> None:
    """genapp: starter project generator for React and Next.js."""
    configure_logging(verbose)


_STAGE_MESSAGES: dict[Stage, str] = {
    Stage.FETCH: "Downloading template",
    Stage.INSTALL: "Installing dependencies",
    Stage.CONFIG: "Saving answers to",
    Stage.FEATURE: "Setting up",
}


def _print_templates() -> None:
    _console.print()
    _console.print("[bold cyan]◆[/]  Available templates")
    _console.print("[dim]│[/]")
    for template_id, framework, tailwind in catalog_entries():
        styling = " + Tailwind CSS" if tailwind else ""
        label = f"{framework.label}{styling}"
        _console.print(f"[dim]│[/]  [bold cyan]{template_id:<18}[/] [bold]{label}[/]")
    _console.print("[dim]│[/]")
    _console.print()


def _list_templates_callback(value: bool) -> None:
    if value:
        _print_templates()
        raise Exit()


def _echo_choice(question: str, lines: list[str]) -> None:
    _console.print(f"[bold green]◇[/]  {question}")
    for line in lines or ["none"]:
        _console.print(f"[dim]│[/]  {line}")
    _console.print("[dim]│[/]")


def _report(stage: Stage, detail: str) -> None:
    if stage is Stage.FEATURE:
        detail = Feature(detail).label
    _console.print(f"[bold green]◇[/]  {_STAGE_MESSAGES[stage]} {detail}...")


@app.command()
def create(
    project_name: Annotated[
        str | None,
        Argument(help="Name for the new project directory", show_default=False),
    ] = None,
    framework: Annotated[
        Framework | None, Option("--framework", "-f", help="Framework to build on")
    ] = None,
    features: Annotated[
        list[Feature] | None,
        Option("--feature", "-F", help="Optional feature; repeat for several.", show_default=False),
    ] = None,
    no_features: Annotated[
        bool, Option("--no-features", help="Skip the feature prompt and add none.")
    ] = False,
    list_templates: Annotated[
        bool,
        Option(
            "--list-templates",
            "-l",
            help="List all available templates and exit.",
            callback=_list_templates_callback,
            is_eager=True,
            expose_value=False,
        ),
    ] = False,
) -> None:
    """Create a new React or Next.js project."""
    pkg_manager = detect()

    # Header
    _console.print()
    _console.print(f"[bold cyan]●[/]  genapp v{genapp.__version__}")
    _console.print("[dim]│[/]")

    # Interactive prompts for missing options
    if project_name is None:
        project_name = prompt_project_name()
    else:
        _echo_choice("Project name", [project_name])

    if not project_name.strip():
        _err_console.print("[bold red]Error:[/] Project name must not be empty.")
        raise Exit(code=2)

    project_dir = Path.cwd() / project_name
    if project_dir.exists() and any(project_dir.iterdir()):
        name = escape(project_name)
        _err_console.print(f"[bold red]Error:[/] Directory '{name}' already exists.")
        raise Exit(code=1)

    if framework is None:
        framework = prompt_framework()
    else:
        _echo_choice("Which framework do you want to use?", [framework.label])

    if no_features:
        features = []
    if features is None:
        features = prompt_features()
    else:
        labels = [f.label for f in Feature.in_order(set(features))]
        _echo_choice("Select optional features", labels)

    answers = Answers(project_name=project_name, framework=framework, features=features)

    try:
        result = scaffold_project(
            answers, base_dir=Path.cwd(), pkg_manager=pkg_manager, reporter=_report
        )
    except (ScaffoldError, OSError) as exc:
        _err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
        raise Exit(code=1) from None

    _console.print("[dim]│[/]")
    _console.print(f"[bold cyan]●[/]  Done! Project created in {result.project_dir.name}/")
    _console.print(f"[dim]│[/]  Next step: [bold]{result.next_command}[/]")
    _console.print()
