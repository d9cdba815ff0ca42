"""
Progress bar construction for file transfers using Rich.

The bars show a spinner, the file being fetched, a bar, the transferred and
total byte counts and the transfer speed. The color of the description
reflects the state of the transfer.
"""

from enum import StrEnum
from typing import Optional

from rich.progress import (
    BarColumn,
    DownloadColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TransferSpeedColumn,
)


class ProgressState(StrEnum):
    """
    Transfer states with their Rich color.

    Attributes:
        IN_PROGRESS: Magenta while bytes are flowing.
        COMPLETE: Green once the file is saved.
        WARNING: Yellow for recoverable issues.
        ERROR: Red for failed transfers.
    """

    IN_PROGRESS = "magenta"
    COMPLETE = "green"
    WARNING = "yellow"
    ERROR = "red"


def create_progress() -> Progress:
    """Create a Rich Progress configured for byte transfers."""
    return Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        DownloadColumn(),
        TransferSpeedColumn(),
    )


def create_task(progress: Progress, description: str, total: Optional[int]) -> TaskID:
    """
    Add a transfer task to `progress` in the IN_PROGRESS state.

    Args:
        progress: The Rich Progress instance.
        description: Text shown next to the bar, usually the filename.
        total: Expected number of bytes, or None when the size is unknown.
    """
    return progress.add_task(f"[{ProgressState.IN_PROGRESS}]{description}", total=total)


def update_progress(
    progress: Progress,
    task: TaskID,
    progress_state: Optional[ProgressState] = None,
    total: Optional[float] = None,
    completed: Optional[float] = None,
    advance: Optional[float] = None,
    description: Optional[str] = None,
) -> None:
    """
    Update a transfer task.

    `progress_state` and `description` go together: the state only colors
    the description.

    Raises:
        ValueError: If only one of progress_state and description is given.
    """
    if bool(progress_state) != bool(description):
        raise ValueError("progress_state and description must be provided together.")

    # Rich treats description=None as "clear", so it is only passed when set
    if description:
        progress.update(
            task,
            total=total,
            completed=completed,
            advance=advance,
            description=f"[{progress_state}]{description}",
        )
    else:
        progress.update(task, total=total, completed=completed, advance=advance)
