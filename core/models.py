"""
Core data models for release listing and asset resolution.

This module defines the records exchanged between the release-listing
collaborator, the classification engine, the selector and the renderers:
release files (`Asset`), clusters of platform variants (`Installable`) and
the small value objects describing a platform, a release and a user request.
"""

from dataclasses import dataclass, field
from datetime import datetime

from models import AssetRecord


@dataclass(frozen=True)
class Classification:
    """
    Labels inferred from a release filename.

    Every field is an empty string when the filename carries no recognizable
    token for it.
    """

    arch: str = ""
    os: str = ""
    package_type: str = ""
    archive_type: str = ""

    @property
    def is_package(self) -> bool:
        return self.package_type != ""

    @property
    def is_archive(self) -> bool:
        return self.archive_type != ""

    @property
    def is_binary(self) -> bool:
        return not (self.is_package or self.is_archive)


@dataclass
class Asset:
    """
    One file published in a release.

    The provenance fields (host, org, repo, version) tie the file back to its
    release. The platform fields (os, arch, package_type, archive_type) are
    derived by the classifier and stay empty on raw assets.
    """

    name: str
    download_url: str = ""
    size: int = 0
    author: str = ""
    created_at: datetime | None = None
    updated_at: datetime | None = None
    host: str = ""
    org: str = ""
    repo: str = ""
    version: str = ""
    label: str = ""
    os: str = ""
    arch: str = ""
    package_type: str = ""
    archive_type: str = ""

    @classmethod
    def from_record(cls, record: AssetRecord) -> "Asset":
        """Build an asset from a release-listing record."""
        return cls(
            name=record["name"],
            download_url=record["download_url"],
            size=record["size"],
            author=record["author"],
            created_at=record["created_at"],
            updated_at=record["updated_at"],
            host=record["host"],
            org=record["org"],
            repo=record["repo"],
            version=record["version"],
            label=record.get("label", ""),
        )

    @property
    def classification(self) -> Classification:
        return Classification(
            arch=self.arch,
            os=self.os,
            package_type=self.package_type,
            archive_type=self.archive_type,
        )


@dataclass
class Installable:
    """
    A named cluster of assets that are platform variants of one product.

    Installables group together binaries, packages and archives for every
    OS/arch combination, along with the security metadata published next to
    them (signatures, certificates, SBOMs). The file level accessors (size,
    author, dates, download URL) read from the first variant so an installable
    can be listed next to plain assets.

    Attributes:
        name: Canonical name shared by all variants (e.g. "cosign").
        variants: The grouped assets, annotated with their classification, in
            the order they were listed.
        save_filename: Filename computed by the selector when one variant is
            chosen for download. Empty until then.
    """

    name: str
    host: str = ""
    org: str = ""
    repo: str = ""
    version: str = ""
    variants: list[Asset] = field(default_factory=list)
    save_filename: str = ""

    def _representative(self) -> Asset | None:
        return self.variants[0] if self.variants else None

    @property
    def size(self) -> int:
        v = self._representative()
        return v.size if v else 0

    @property
    def author(self) -> str:
        v = self._representative()
        return v.author if v else ""

    @property
    def created_at(self) -> datetime | None:
        v = self._representative()
        return v.created_at if v else None

    @property
    def updated_at(self) -> datetime | None:
        v = self._representative()
        return v.updated_at if v else None

    @property
    def download_url(self) -> str:
        v = self._representative()
        return v.download_url if v else ""

    def os_variants(self) -> list[str]:
        """Distinct operating systems of the variants, in listing order."""
        return _distinct(v.os for v in self.variants)

    def arch_variants(self) -> list[str]:
        """Distinct architectures of the variants, in listing order."""
        return _distinct(v.arch for v in self.variants)

    def package_types(self) -> list[str]:
        return _distinct(v.package_type for v in self.variants)

    def archive_types(self) -> list[str]:
        return _distinct(v.archive_type for v in self.variants)

    @property
    def has_packages(self) -> bool:
        return any(v.package_type for v in self.variants)

    @property
    def has_archives(self) -> bool:
        return any(v.archive_type for v in self.variants)


# An entry of an aggregated release listing: either a standalone file or a
# cluster of variants. Consumers dispatch on it with `match`.
ReleaseItem = Asset | Installable


def _distinct(values) -> list[str]:
    ret: list[str] = []
    for value in values:
        if value and value not in ret:
            ret.append(value)
    return ret


@dataclass(frozen=True)
class Platform:
    """A target operating system and CPU architecture, in canonical labels."""

    os: str
    arch: str

    @property
    def slug(self) -> str:
        return f"{self.os}/{self.arch}"


@dataclass(frozen=True)
class Selection:
    """
    The file chosen for download and the name to save it under.

    Attributes:
        asset: The standalone asset or the chosen variant.
        filename: Stable save filename computed by the selector.
    """

    asset: Asset
    filename: str


@dataclass
class Release:
    """A release of a repository, identified by its tag."""

    host: str
    org: str
    repo: str
    version: str
    id: int = 0
    prerelease: bool = False
    created_at: datetime | None = None
    author: str = ""


@dataclass(frozen=True)
class AppReference:
    """
    A user request pointing at a repository, a release and optionally a name.

    Attributes:
        host: Hosting provider, "github.com" by default.
        org: Organization or user.
        repo: Repository name.
        version: Release tag, empty for the latest release.
        name: Asset or installable name. When empty the repository name is used.
    """

    host: str
    org: str
    repo: str
    version: str = ""
    name: str = ""

    @property
    def target_name(self) -> str:
        return self.name or self.repo

    @property
    def repo_url(self) -> str:
        return f"https://{self.host}/{self.org}/{self.repo}"
