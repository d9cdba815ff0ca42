"""
drop CLI Entry Point.

This module implements the command-line interface of drop, a tool that lists
GitHub releases and downloads the right file of a release for a platform.
Release pages usually publish one program many times (a binary per OS/arch
pair, system packages, archives, signatures), so drop works on installables:
groups of files that are platform variants of the same program.

Commands:

1.  **ls**: Lists a release, grouped into installables (default), as raw
    files (`--all`) or lists the releases of the repository (`--releases`).
2.  **get**: Resolves a request (name, platform, download type) to a single
    file of a release and downloads it under a stable filename.
3.  **configure**: Edits the settings stored in ~/.drop/settings.json.

Usage:
    Run directly as a script or via the installed entry point.

    $ drop ls github.com/sigstore/cosign -l
    $ drop get sigstore/cosign@v2.4.3 --platform linux/arm64 --type package

Dependencies:
    - Typer: CLI argument parsing and app structure.
    - Rich: Terminal UI, colors, and progress visualization.
    - Inquirer: Interactive terminal user prompts.
    - Requests: HTTP access to the GitHub API and release downloads.
"""

import dataclasses
import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich import print as pr

from adapters.downloader import HttpDownloader, resolve_destination
from adapters.github import GitHubClient
from constants import DOWNLOAD_TYPE_SHORTCUTS
from core.config import Settings, get_config_file, load_settings, save_config
from core.exceptions import (
    AssetResolutionError,
    DropError,
    FileIOError,
    InvalidPlatformError,
    InvalidReferenceError,
    NoMatchingNameError,
    NoPlatformVariantError,
    RemoteError,
)
from core.labels import LabelTables
from core.reference import parse_app_reference
from core.selection import choose_asset
from core.system import get_local_platform, get_system_os_family, parse_platform_slug
from models import DownloadType
from ui.progress_display import NoOpProgressDisplay, RichProgressDisplay
from ui.prompts import edit_settings, select_installable
from ui.render import render_assets, render_installables, render_releases
from utils import configure_logging, console

logger = logging.getLogger(__name__)

app = typer.Typer(no_args_is_help=True)

LABELS = LabelTables.from_defaults()

RefArgument = Annotated[
    str,
    typer.Argument(
        help="Release reference, e.g. github.com/org/repo@v1.2.0#name "
        "(version and name are optional)",
    ),
]
VerboseOption = Annotated[
    bool, typer.Option("--verbose", help="Print debug logs to stderr.")
]


@app.command("ls")
def list_release(
    ref: RefArgument,
    long: Annotated[
        bool, typer.Option("--long", "-l", help="Use a long listing format.")
    ] = False,
    all_assets: Annotated[
        bool,
        typer.Option("--all", "-a", help="List every file instead of installables."),
    ] = False,
    releases: Annotated[
        bool,
        typer.Option("--releases", "-r", help="List the releases of the repository."),
    ] = False,
    verbose: VerboseOption = False,
):
    """
    List the contents of a release, or the releases of a repository.

    By default the files of the release are grouped into installables; files
    that are not built for a platform (checksums, notes) are listed as is.
    """
    configure_logging(verbose)

    try:
        reference = parse_app_reference(ref)
    except InvalidReferenceError as e:
        print_resolution_err(e)
        return

    settings = read_settings()
    client = GitHubClient(token=settings.github_token or None)

    try:
        if releases:
            render_releases(console, reference, client.list_releases(reference), long)
        elif all_assets:
            render_assets(
                console,
                reference,
                client.list_release_assets(reference),
                long,
                labels=LABELS,
            )
        else:
            render_installables(
                console,
                reference,
                client.list_release_installables(reference, LABELS),
                long,
                labels=LABELS,
            )
    except RemoteError as e:
        print_remote_err(e)
    except Exception as e:  # noqa: BLE001
        print_unexpected_err(e)


@app.command("get")
def get_release_file(
    ref: RefArgument,
    platform_slug: Annotated[
        Optional[str],
        typer.Option(
            "--platform",
            "-p",
            help="Target platform as os/arch (default: this machine).",
        ),
    ] = None,
    download_type: Annotated[
        Optional[str],
        typer.Option(
            "--type",
            "-t",
            help="Kind of file: binary, package or archive (b, p, a).",
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option(
            "--output",
            "-o",
            help="File or directory to save to (default: the download path).",
        ),
    ] = None,
    timeout: Annotated[
        Optional[int],
        typer.Option(help="Download timeout in seconds."),
    ] = None,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="No prompts and no progress bar."),
    ] = False,
    verbose: VerboseOption = False,
):
    """
    Download the file of a release that fits a platform.

    The request targets the name after '#' in the reference, or the
    repository name. When the release has nothing by that name, the available
    names are offered in a prompt (unless --quiet).
    """
    configure_logging(verbose)

    try:
        wanted_type = normalize_download_type(download_type)
    except ValueError:
        pr(f"\n[red bold]Not a valid download type: {download_type}")
        pr(f"Available types: {', '.join(list(DownloadType))}")
        raise typer.Exit(code=1)

    try:
        reference = parse_app_reference(ref)
        target = (
            parse_platform_slug(platform_slug, LABELS)
            if platform_slug
            else get_local_platform(LABELS)
        )
    except (InvalidReferenceError, InvalidPlatformError) as e:
        print_resolution_err(e)
        return

    settings = read_settings()
    transfer_timeout = timeout if timeout is not None else settings.timeout
    if transfer_timeout <= 0:
        pr("\n[bold][red]Error:[/bold] The timeout must be larger than zero.")
        raise typer.Exit(code=1)

    client = GitHubClient(token=settings.github_token or None)
    os_family = get_system_os_family()
    logger.debug("target platform %s, os family %r", target.slug, os_family)

    try:
        items = client.list_release_installables(reference, LABELS)
        try:
            selection = choose_asset(items, reference, target, wanted_type, os_family)
        except NoMatchingNameError as e:
            if quiet or not e.available:
                raise
            pr(f"\n[yellow]Nothing named '{e.name}' in this release.[/yellow]")
            reference = dataclasses.replace(
                reference, name=select_installable(e.available)
            )
            selection = choose_asset(items, reference, target, wanted_type, os_family)

        logger.debug("selected %s as %s", selection.asset.name, selection.filename)
        destination = resolve_destination(
            Path(settings.download_path), selection.filename, output
        )
        downloader = HttpDownloader(timeout=transfer_timeout)
        display = NoOpProgressDisplay() if quiet else RichProgressDisplay()
        saved = downloader.download_to_file(selection.asset, destination, display)
    except typer.Exit:
        raise
    except AssetResolutionError as e:
        print_resolution_err(e)
        return
    except RemoteError as e:
        print_remote_err(e)
        return
    except FileIOError as e:
        print_file_io_err(e)
        return
    except Exception as e:  # noqa: BLE001
        # Catch-all for any unexpected errors - ensures users always see
        # a friendly message instead of a raw Python stack trace
        print_unexpected_err(e)
        return

    if not quiet:
        pr(f"[green]Saved {selection.asset.name} to {saved}[/green]")


@app.command("configure")
def configure():
    """
    Edit the stored settings (shows current values for editing).
    """
    try:
        current = get_config_file()
    except FileIOError as e:
        print_file_io_err(e)
        return

    pr("\n[bold green]Edit drop settings.[/bold green]\n")
    updated = edit_settings(current)

    try:
        save_config(updated)
    except FileIOError as e:
        print_file_io_err(e)
        return

    pr("[green]Config saved.[/green]\n")


def read_settings() -> Settings:
    """
    Load the settings, exiting with a friendly message if the file is broken.
    """
    try:
        return load_settings()
    except FileIOError as e:
        print_file_io_err(e)
        raise


def normalize_download_type(value: str | None) -> DownloadType | None:
    """
    Normalizes and validates a download type string.

    Matching is case-insensitive and accepts the one-letter shortcuts
    ("b", "p", "a").

    Args:
        value (str | None): The download type as typed by the user.

    Returns:
        DownloadType | None: The matching DownloadType, or None if no type was
        given (any kind of file qualifies).

    Raises:
        ValueError: If the string doesn't match any download type.
    """
    if not value:
        return None

    normalized = value.strip().lower()
    if normalized in DOWNLOAD_TYPE_SHORTCUTS:
        return DOWNLOAD_TYPE_SHORTCUTS[normalized]
    for download_type in DownloadType:
        if str(download_type) == normalized:
            return download_type
    raise ValueError(f"Unsupported download type: {value}")


def print_resolution_err(e: DropError) -> None:
    """
    Displays a user-friendly error message when a request cannot be resolved.

    Covers unparsable references and platform slugs as well as releases that
    have nothing matching the requested name, platform or type.

    Args:
        e (DropError): The exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Resolution Error[/bold red]")
    pr(e.message)

    if isinstance(e, NoMatchingNameError) and e.available:
        pr("\n[yellow]Available in this release:[/yellow]")
        for name in e.available:
            pr(f"  {name}")
    elif isinstance(e, NoPlatformVariantError):
        pr(
            "\n[yellow]Quick Fix:[/yellow] Run `drop ls` on the release to see the "
            "platforms it supports, then pick one with --platform or --type."
        )
    elif isinstance(e, InvalidPlatformError):
        pr("\n[yellow]Quick Fix:[/yellow] Use os/arch, e.g. linux/amd64 or darwin/arm64.")

    raise typer.Exit(code=1) from e


def print_remote_err(e: RemoteError) -> None:
    """
    Displays a user-friendly error message for GitHub and download failures.

    Args:
        e (RemoteError): The exception that was raised, containing error details
            and diagnostic information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Remote Error[/bold red]")
    pr(e.message)
    pr(
        "\n[yellow]Quick Fix:[/yellow] Check your network connection. "
        "If GitHub is rate limiting you, set GITHUB_TOKEN or run `drop configure`."
    )

    pr("\n--- PLEASE REPORT THIS ---")
    pr(f"Error Context: {e}")
    pr(f"Diagnostics: {e.diagnostic_info}")
    raise typer.Exit(code=1) from e


def print_file_io_err(e: FileIOError) -> None:
    """
    Displays a user-friendly error message for file I/O operation failures.

    Args:
        e (FileIOError): The exception that was raised, containing error details
            and file path information.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]File I/O Error[/bold red]")
    pr(f"The app encountered an error while working with files: {e.message}")
    if e.file_path:
        pr(f"File path: [yellow]{e.file_path}[/yellow]")

    pr("\n[yellow]Quick Fix:[/yellow] Check file permissions and available disk space.")
    if e.original_exception:
        pr(f"\nTechnical details: {e.original_exception}")

    raise typer.Exit(code=1) from e


def print_unexpected_err(e: Exception) -> None:
    """
    Displays a user-friendly error message for unexpected errors.

    Args:
        e (Exception): The unexpected exception that was raised.

    Raises:
        typer.Exit: Always raises with exit code 1 to terminate the application.
    """
    pr("❌ [bold red]Unexpected Error[/bold red]")
    pr("An unexpected error occurred while processing your request.")
    pr(f"\n[yellow]Error Type:[/yellow] {type(e).__name__}")
    pr(f"[yellow]Error Message:[/yellow] {str(e)}")

    pr("\n[yellow]What to do:[/yellow]")
    pr("1. Check that the repository and release exist")
    pr("2. Try running the command again with --verbose")
    pr("3. If the problem persists, please report this issue")

    pr("\n--- PLEASE REPORT THIS ---")
    pr(f"Error Type: {type(e).__name__}")
    pr(f"Error Message: {e}")
    if e.__cause__:
        pr(f"Caused by: {e.__cause__}")

    raise typer.Exit(code=1) from e


if __name__ == "__main__":
    app()
