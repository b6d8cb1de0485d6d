"""
Interactive questions for values missing from the command line.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from rich.console import Console
from rich.prompt import Confirm, Prompt

from typescript_starter.config import Runner, validate_name

_DEFINITIONS = {
    "none": (False, False),
    "node": (False, True),
    "dom": (True, False),
    "both": (True, True),
}

# Config field -> (question, default answer)
_EXTRAS = [
    ("strict", "Enable stricter type-checking?", False),
    ("functional", "Enable eslint-plugin-functional?", True),
    ("cspell", "Include cspell spell checking?", True),
    ("editorconfig", "Include .editorconfig?", True),
    ("vscode", "Include VS Code debugging config?", True),
    ("circleci", "Include CircleCI config?", True),
    ("travis", "Include Travis CI config?", False),
    ("appveyor", "Include AppVeyor config?", False),
    ("install", "Install dependencies now?", True),
]


def _ask_project_name(console: Console) -> str:
    while True:
        name = Prompt.ask("Enter the new package name", console=console).strip()
        if not validate_name(name):
            console.print("[red]Name should be in-kebab-case (for npm).[/red]")
        elif Path(name).exists():
            console.print(f'[red]The "{name}" path already exists in this directory.[/red]')
        else:
            return name


def prompt_for_missing(partial: Mapping[str, Any], console: Console | None = None) -> dict[str, Any]:
    """
    Ask for every value not already in `partial` and return the answers.

    Fields present in `partial` are never asked about; the resolver
    merges the answers underneath them.
    """
    console = console or Console()
    answers: dict[str, Any] = {}

    if "project_name" not in partial:
        answers["project_name"] = _ask_project_name(console)

    if "description" not in partial:
        answers["description"] = Prompt.ask("Enter the package description", default="", console=console)

    if "runner" not in partial:
        choice = Prompt.ask(
            "Will this project use npm or yarn?",
            choices=[r.value for r in Runner],
            default=Runner.Npm.value,
            console=console,
        )
        answers["runner"] = Runner(choice)

    if "dom_definitions" not in partial and "node_definitions" not in partial:
        choice = Prompt.ask(
            "Which global type definitions do you want to include?",
            choices=list(_DEFINITIONS),
            default="none",
            console=console,
        )
        answers["dom_definitions"], answers["node_definitions"] = _DEFINITIONS[choice]

    for field_name, question, default in _EXTRAS:
        if field_name not in partial:
            answers[field_name] = Confirm.ask(question, default=default, console=console)

    return answers
