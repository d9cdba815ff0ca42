"""
Terminal rendering of release listings.

Listings come in two flavors, like `ls`:

- Short: names only, laid out in three columns.
- Long: one row per entry with an emoji "permissions" column, the uploader,
  the organization, the size, the date and the name.

The first column of the long format encodes what an entry is:

    📄/💾  plain file / installable (a group of platform variants)
    🐧🍏🪟  linux / macOS / windows variants are available
    📦     the installable has system packages (rpm, deb, dmg, msi, ...)
    🎁     the installable has archives (zip, tar.gz, ...)
"""

from datetime import datetime
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table

from constants import OS_DARWIN, OS_LINUX, OS_WINDOWS
from core.classifier import annotate
from core.labels import LabelTables
from core.models import AppReference, Asset, Installable, Release, ReleaseItem

EMPTY_CELL = "➖"
PERM_CELLS = 8


def perm_string(item: ReleaseItem) -> str:
    """Build the emoji indicator column for one listing entry."""
    cells = [EMPTY_CELL] * PERM_CELLS
    match item:
        case Installable():
            oss = item.os_variants()
            cells[0] = "💾"
            if OS_LINUX in oss:
                cells[1] = "🐧"
            if OS_DARWIN in oss:
                cells[2] = "🍏"
            if OS_WINDOWS in oss:
                cells[3] = "🪟"
            if item.has_packages:
                cells[4] = "📦"
            if item.has_archives:
                cells[5] = "🎁"
        case Asset():
            cells[0] = "📄"
            if item.os == OS_LINUX:
                cells[1] = "🐧"
            if item.os == OS_DARWIN:
                cells[2] = "🍏"
            if item.os == OS_WINDOWS:
                cells[3] = "🪟"
    return "".join(cells)


def format_timestamp(ts: datetime | None, now: datetime | None = None) -> tuple[str, str, str]:
    """
    Split a timestamp into the (month, day, hour) columns.

    The hour column shows the year instead when the timestamp is not from the
    current year, like `ls -l` does.
    """
    if ts is None:
        return "", "", ""
    now = now or datetime.now(ts.tzinfo)
    local = ts.astimezone() if ts.tzinfo else ts
    hour = f"{local.hour:02d}:{local.minute:02d}"
    if local.year != now.year:
        hour = str(local.year)
    return local.strftime("%b"), str(local.day), hour


def _long_table(count: int) -> Table:
    table = Table(
        "perms",
        "owner",
        "org",
        "size",
        "month",
        "day",
        "hour",
        "name",
        box=None,
        title=f"total {count}",
        title_justify="left",
        pad_edge=False,
    )
    table.columns[3].justify = "right"
    return table


def _columns(console: Console, names: Sequence[str], num_cols: int = 3) -> None:
    table = Table(show_header=False, box=None, pad_edge=False)
    for _ in range(num_cols):
        table.add_column()
    for i in range(0, len(names), num_cols):
        row = list(names[i : i + num_cols])
        row += [""] * (num_cols - len(row))
        table.add_row(*row)
    console.print(table)


def _for_display(item: ReleaseItem, labels: Optional[LabelTables]) -> ReleaseItem:
    if labels is not None and isinstance(item, Asset):
        return annotate(item, labels)
    return item


def render_installables(
    console: Console,
    ref: AppReference,
    items: Sequence[ReleaseItem],
    long: bool = False,
    labels: Optional[LabelTables] = None,
) -> None:
    """
    Print an aggregated listing of installables and standalone assets.

    Standalone assets carry no classification of their own. When `labels` is
    given they are classified for display so their OS cell is filled in.
    """
    if not long:
        _columns(console, [item.name for item in items])
        return

    table = _long_table(len(items))
    for item in items:
        month, day, hour = format_timestamp(item.updated_at)
        table.add_row(
            perm_string(_for_display(item, labels)),
            item.author,
            ref.org,
            str(item.size),
            month,
            day,
            hour,
            item.name,
        )
    console.print(table)


def render_assets(
    console: Console,
    ref: AppReference,
    assets: Sequence[Asset],
    long: bool = False,
    labels: Optional[LabelTables] = None,
) -> None:
    """Print every file of a release without grouping them."""
    render_installables(console, ref, assets, long=long, labels=labels)


def render_releases(
    console: Console,
    ref: AppReference,
    releases: Sequence[Release],
    long: bool = False,
) -> None:
    """Print the releases of a repository."""
    if not long:
        _columns(console, [r.version for r in releases])
        return

    table = _long_table(len(releases))
    for r in releases:
        month, day, hour = format_timestamp(r.created_at)
        table.add_row("release", r.author, ref.org, "0", month, day, hour, r.version)
    console.print(table)

