"""
Progress reporting protocol for decoupling the UI from transfers.

The downloader reports through a `ProgressDisplay`, so it never imports
Rich directly and tests can pass `NoOpProgressDisplay()`.
"""

from types import TracebackType
from typing import Protocol

from rich.progress import Progress, TaskID

from ui.progress import (
    ProgressState,
    create_progress,
    create_task,
    update_progress,
)


class ProgressDisplay(Protocol):
    """
    Protocol for progress reporting.

    The lifecycle is:
    1. Context manager entry (__enter__)
    2. on_start() - once, with the expected byte count
    3. on_update() - once per chunk received
    4. on_complete() - once, when the file is saved
    5. Context manager exit (__exit__)
    """

    def __enter__(self) -> "ProgressDisplay":
        """Enter the progress context."""

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit the progress context."""

    def on_start(self, description: str, total: int | None) -> None:
        """
        Start reporting a transfer.

        Args:
            description: Text to display, usually the filename.
            total: Expected number of bytes. None when the size is unknown.
        """

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """Advance the byte counter, change the description, or both."""

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        """Mark the transfer as finished with `completed` bytes."""


class RichProgressDisplay:
    """
    Rich implementation of ProgressDisplay.

    Must be used as a context manager: `with RichProgressDisplay() as rpd:`.
    """

    def __init__(self) -> None:
        self._progress: Progress | None = None
        self._task: TaskID | None = None

    def __enter__(self) -> "RichProgressDisplay":
        self._progress = create_progress()
        self._progress.__enter__()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._progress:
            self._progress.__exit__(exc_type, exc_val, exc_tb)

    def _require_progress(self) -> Progress:
        if not self._progress:
            raise RuntimeError(
                "RichProgressDisplay must be used as a context manager. "
                "Use: with RichProgressDisplay() as rpd:"
            )
        return self._progress

    def on_start(self, description: str, total: int | None) -> None:
        """
        Create the Rich task for the transfer.

        Raises:
            RuntimeError: If not used as a context manager.
        """
        progress = self._require_progress()
        self._task = create_task(progress, description, total=total)

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        """
        Advance the transfer and/or update its description.

        Raises:
            RuntimeError: If not used as a context manager or if on_start()
                was not called first.
            ValueError: If neither advance nor description is provided.
        """
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_update()")

        if not (advance or description):
            raise ValueError(
                "At least one of 'advance' or 'description' must be provided to on_update()"
            )

        if description:
            update_progress(
                progress,
                self._task,
                ProgressState.IN_PROGRESS,
                advance=advance,
                description=description,
            )
        else:
            update_progress(progress, self._task, advance=advance)

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        """
        Show the transfer as complete.

        Raises:
            RuntimeError: If not used as a context manager or if on_start()
                was not called first.
        """
        progress = self._require_progress()
        if self._task is None:
            raise RuntimeError("on_start() must be called before on_complete()")

        update_progress(
            progress,
            self._task,
            ProgressState.COMPLETE,
            completed=completed,
            total=total,
            description=description,
        )


class NoOpProgressDisplay:
    """ProgressDisplay that reports nothing. Used by --quiet and by tests."""

    def __enter__(self) -> "NoOpProgressDisplay":
        return self

    def __exit__(self, *args) -> None:
        pass

    def on_start(self, description: str, total: int | None) -> None:
        pass

    def on_update(
        self, *, advance: int | None = None, description: str | None = None
    ) -> None:
        pass

    def on_complete(
        self, description: str, completed: int, total: int | None = None
    ) -> None:
        pass
