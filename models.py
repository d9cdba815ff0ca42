"""
Type definitions and data models used across the drop CLI application.

This module contains shared type definitions including enums and TypedDict
structures that are used throughout the codebase for type safety and consistency.
"""

from datetime import datetime
from enum import StrEnum
from typing import NotRequired, TypedDict


class DownloadType(StrEnum):
    """
    Kind of file the user wants from an installable.

    A binary is a bare executable, a package is a system package (rpm, deb,
    dmg, ...) and an archive is a compressed bundle (tar.gz, zip, ...).
    """

    BINARY = "binary"
    PACKAGE = "package"
    ARCHIVE = "archive"


class OSFamily(StrEnum):
    """
    Operating system families that have a native package format.

    The values match what `core.system.get_system_os_family` reports and are
    used as keys in PREFERRED_PACKAGES.
    """

    ALPINE = "alpine"
    WOLFI = "wolfi"
    DEBIAN = "debian"
    UBUNTU = "ubuntu"
    ALMA = "alma"
    ARCH = "arch"
    FEDORA = "fedora"
    ROCKY = "rocky"
    RHEL = "rhel"
    DISTROLESS = "distroless"
    MACOS = "macos"
    WINDOWS = "windows"


class AssetRecord(TypedDict):
    """
    One release file as reported by the release-listing collaborator.

    Attributes:
        name: Filename of the asset as published in the release.
        download_url: Direct URL to fetch the file.
        size: Size in bytes.
        author: Login of the uploader.
        created_at: Upload timestamp.
        updated_at: Last modification timestamp.
        host: Hosting provider (e.g. "github.com").
        org: Organization or user owning the repository.
        repo: Repository name.
        version: Tag of the release the file belongs to.
        label: Optional display label set by the uploader.
    """

    name: str
    download_url: str
    size: int
    author: str
    created_at: datetime | None
    updated_at: datetime | None
    host: str
    org: str
    repo: str
    version: str
    label: NotRequired[str]
