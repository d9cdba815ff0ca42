"""
Interactive user prompts for the drop CLI application.

Two flows need the user's input:

1. Installable selection: when the requested name is not part of a release,
   the user picks one of the names that are.
2. Settings editing: `drop configure` shows the stored values as defaults
   and saves what the user enters.

Dependencies:
    - inquirer: Interactive terminal prompts
    - rich: Terminal formatting and colors
    - typer: CLI framework integration
"""

from typing import Any

import inquirer  # type: ignore
from inquirer.themes import GreenPassion  # type: ignore
from rich import print as pr
import typer

from core.config import SETTINGS_KEYS


def select_installable(names: list[str]) -> str:
    """
    Prompt the user to pick one of the names available in a release.

    Raises:
        typer.Exit: If there is nothing to pick or the prompt is cancelled.
    """
    if not names:
        pr("[bold red]The release has no assets.[/bold red]")
        raise typer.Exit(code=1)

    pr("\n[bold green]Which one of the release files should drop get?[/bold green]\n")

    questions = [
        inquirer.List(
            "name",
            message="Hit [ENTER] to make your selection",
            choices=names,
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())

    if not answers:
        raise typer.Exit(code=1)

    return answers["name"]


def edit_settings(current: dict[str, Any]) -> dict[str, Any]:
    """
    Prompt for each setting with the stored value prepopulated.

    Blank answers remove the key so the built-in default applies again.

    Raises:
        typer.Exit: If the prompt is cancelled or the timeout is not a
            positive number.
    """
    questions = [
        inquirer.Text(
            "github_token",
            message="GitHub token (blank to use $GITHUB_TOKEN)",
            default=str(current.get("github_token") or ""),
        ),
        inquirer.Text(
            "download_path",
            message="Download directory",
            default=str(current.get("download_path") or ""),
        ),
        inquirer.Text(
            "timeout",
            message="Download timeout in seconds",
            default=str(current.get("timeout") or ""),
        ),
    ]

    answers = inquirer.prompt(questions, theme=GreenPassion())

    if not answers:
        raise typer.Exit(code=1)

    updated: dict[str, Any] = {}
    for key in SETTINGS_KEYS:
        value = (answers.get(key) or "").strip()
        if value:
            updated[key] = value

    if "timeout" in updated:
        try:
            updated["timeout"] = int(updated["timeout"])
        except ValueError:
            updated["timeout"] = 0
        if updated["timeout"] <= 0:
            pr("\n[bold][red]Error:[/bold] The timeout must be a positive number.")
            raise typer.Exit(code=1)

    return updated
