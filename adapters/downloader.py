"""
HTTP download adapter.

Streams a chosen release file to disk with a progress bar. Downloads never
overwrite an existing file, and a failed transfer leaves no partial file
behind.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from constants import DEFAULT_TIMEOUT, DOWNLOAD_CHUNK_SIZE
from core.exceptions import DownloadError, FileExistsConflictError, FileWriteError
from core.models import Asset
from ui.progress_display import ProgressDisplay, RichProgressDisplay

logger = logging.getLogger(__name__)


def resolve_destination(
    download_path: Path, filename: str, output: Optional[Path] = None
) -> Path:
    """
    Decide where a download is saved.

    Args:
        download_path: Default directory for downloads.
        filename: Filename computed by the selector.
        output: Optional user supplied path. An existing directory receives
            the computed filename, anything else is used as the file path.
    """
    if output is None:
        return download_path / filename
    if output.is_dir():
        return output / filename
    return output


class HttpDownloader:
    """
    Downloads release files over HTTP(S).

    Attributes:
        timeout: Seconds after which a stalled request is abandoned.
        session: The requests session used for transfers.
    """

    def __init__(
        self,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        if timeout <= 0:
            raise ValueError("transfer timeout must be larger than zero")
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()

    def download_to_file(
        self,
        asset: Asset,
        destination: Path,
        progress_display: ProgressDisplay | None = None,
    ) -> Path:
        """
        Download `asset` to `destination`.

        Returns:
            The path of the saved file.

        Raises:
            DownloadError: If the asset has no URL or the transfer fails.
            FileExistsConflictError: If `destination` already exists.
            FileWriteError: If the file cannot be written.
        """
        if not asset.download_url:
            raise DownloadError(message=f"Asset {asset.name} has no download URL")
        if destination.exists():
            raise FileExistsConflictError(str(destination))

        display = progress_display if progress_display is not None else RichProgressDisplay()
        logger.debug("downloading %s to %s", asset.download_url, destination)

        written = 0
        try:
            with self.session.get(
                asset.download_url, stream=True, timeout=self.timeout
            ) as response:
                response.raise_for_status()
                total = int(response.headers.get("content-length") or asset.size or 0)

                with display as pd, destination.open("xb") as f:
                    pd.on_start(destination.name, total=total or None)
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if not chunk:
                            continue
                        f.write(chunk)
                        written += len(chunk)
                        pd.on_update(advance=len(chunk))
                    pd.on_complete(f"Saved {destination.name}", completed=written)
        except requests.RequestException as e:
            _discard(destination)
            raise DownloadError(
                message=f"Failed to download {asset.name}",
                original_exception=e,
            ) from e
        except FileExistsError as e:
            raise FileExistsConflictError(str(destination)) from e
        except OSError as e:
            _discard(destination)
            raise FileWriteError(
                message=f"Failed to write {destination}",
                file_path=str(destination),
                original_exception=e,
            ) from e

        logger.debug("saved %d bytes to %s", written, destination)
        return destination


def _discard(path: Path) -> None:
    try:
        path.unlink(missing_ok=True)
    except OSError:
        logger.warning("could not remove partial download %s", path)
