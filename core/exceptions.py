"""
Custom exception classes for the drop CLI.

This module defines application-specific exceptions raised while resolving
release assets, talking to the release host, downloading files and handling
the local settings file. Every exception carries a human-readable `message`
with a sensible default so the CLI can present it without extra formatting.
"""

import os
from typing import Optional


class DropError(Exception):
    """
    Base exception for every error raised by drop.

    Attributes:
        message: A human-readable error message describing what went wrong.
    """

    def __init__(self, message: Optional[str] = None):
        self.message = message or "An error occurred in drop"
        super().__init__(self.message)


class LabelTableError(DropError):
    """
    Raised when the platform label tables are inconsistent.

    An alias listed under two canonical labels of the same axis, or an
    extension registered both as a package and as an archive, would make
    classification depend on table order, so the tables are rejected.
    """

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Invalid platform label tables")


class AssetResolutionError(DropError):
    """Base exception for failures choosing a file from a release."""

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or "Unable to locate a suitable asset")


class NoMatchingNameError(AssetResolutionError):
    """
    Raised when the requested name is neither an asset nor an installable.

    Attributes:
        name: The name that was looked up.
        available: Names of the assets and installables present in the release,
            so callers can offer them to the user.
    """

    def __init__(
        self,
        name: str,
        available: Optional[list[str]] = None,
        message: Optional[str] = None,
    ):
        self.name = name
        self.available = available or []
        super().__init__(message or f"No asset or installable named '{name}'")


class NoPlatformVariantError(AssetResolutionError):
    """
    Raised when an installable has no variant for the requested platform.

    Attributes:
        name: Name of the installable.
        platform: Platform slug that was requested (e.g. "linux/x86_64").
        download_type: The requested download type, if any.
    """

    def __init__(
        self,
        name: str,
        platform: str,
        download_type: Optional[str] = None,
        message: Optional[str] = None,
    ):
        self.name = name
        self.platform = platform
        self.download_type = download_type
        if message is None:
            message = f"No variant of '{name}' found for {platform}"
            if download_type:
                message += f" (type: {download_type})"
        super().__init__(message)


class InvalidPlatformError(DropError):
    """
    Raised when a platform slug cannot be resolved to a known OS and arch.

    Attributes:
        slug: The slug as typed by the user.
    """

    def __init__(self, slug: str, message: Optional[str] = None):
        self.slug = slug
        super().__init__(message or f"Invalid platform slug: '{slug}'")


class InvalidReferenceError(DropError):
    """
    Raised when an app reference cannot be parsed.

    Attributes:
        reference: The reference string as typed by the user.
    """

    def __init__(self, reference: str, message: Optional[str] = None):
        self.reference = reference
        super().__init__(message or f"Unable to parse app reference: '{reference}'")


class RemoteError(DropError):
    """
    Base exception for errors talking to the release host.

    It includes diagnostic information about the operating system and the
    original exception that caused the error.

    Attributes:
        message: A human-readable error message describing what went wrong.
        original_exception: The underlying exception that caused this error, if any.
        diagnostic_info: A dictionary containing diagnostic information including
            exception type, details, and OS name.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message or "An error occurred talking to the release host")
        self.original_exception = original_exception
        self.diagnostic_info = {
            "type": (
                type(original_exception).__name__ if original_exception else "Unknown"
            ),
            "details": str(original_exception) if original_exception else "No details",
            "os_name": os.name,
        }


class GitHubAPIError(RemoteError):
    """Raised when a GitHub API request fails or returns an error status."""

    def __init__(
        self,
        message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message or "GitHub API request failed",
            original_exception=original_exception,
        )


class ReleaseNotFoundError(RemoteError):
    """
    Raised when the requested release does not exist in the repository.

    Attributes:
        version: The release tag that was requested, empty for "latest".
    """

    def __init__(self, version: str = "", message: Optional[str] = None):
        self.version = version
        super().__init__(
            message=message or f"Release {version or 'latest'} not found",
        )


class DownloadError(RemoteError):
    """Raised when a release file cannot be transferred."""

    def __init__(
        self,
        message: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message or "Failed to download asset",
            original_exception=original_exception,
        )


class FileIOError(DropError):
    """
    Base exception for local file I/O errors.

    Attributes:
        message: A human-readable error message describing what went wrong.
        file_path: The file path involved in the failed operation, if any.
        original_exception: The underlying exception that caused this error, if any.
    """

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message or "A file I/O error occurred")
        self.file_path = file_path
        self.original_exception = original_exception


class FileReadError(FileIOError):
    """Raised when a local file cannot be read or parsed."""

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message or "Failed to read file",
            file_path=file_path,
            original_exception=original_exception,
        )


class FileWriteError(FileIOError):
    """Raised when data cannot be written to a local file."""

    def __init__(
        self,
        message: Optional[str] = None,
        file_path: Optional[str] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(
            message=message or "Failed to write file",
            file_path=file_path,
            original_exception=original_exception,
        )


class FileExistsConflictError(FileIOError):
    """Raised when a download would overwrite an existing file."""

    def __init__(self, file_path: str, message: Optional[str] = None):
        super().__init__(
            message=message or f"File {file_path!r} already exists, will not overwrite",
            file_path=file_path,
        )
