"""
Application-wide constants and label tables.

This module defines the platform vocabulary used throughout drop: the
canonical operating system and CPU architecture labels with every alias they
are published under, the package and archive file extensions that classify a
release file, and the defaults of the command line tool.

The tables here are plain data. They are turned into an immutable
`core.labels.LabelTables` object once at startup and handed to the classifier,
the aggregator and the selector.
"""

from typing import Final, Mapping

from models import DownloadType, OSFamily

# Canonical operating system labels
OS_LINUX: Final = "linux"
OS_WINDOWS: Final = "windows"
OS_DARWIN: Final = "darwin"
OS_FREEBSD: Final = "freebsd"
OS_NETBSD: Final = "netbsd"
OS_ILLUMOS: Final = "illumos"
OS_SOLARIS: Final = "solaris"
OS_OPENBSD: Final = "openbsd"

# Canonical architecture labels
ARCH_X86_64: Final = "x86_64"
ARCH_386: Final = "386"
ARCH_ARM: Final = "arm"
ARCH_ARM64: Final = "arm64"
ARCH_RISCV64: Final = "riscv64"
ARCH_S390X: Final = "s390x"  # IBM Z
ARCH_PPC64LE: Final = "ppc64le"  # IBM Power

# Every spelling of an OS seen in release filenames, keyed by the canonical
# label. The canonical label is always listed as its own first alias.
OS_ALIASES: Final[Mapping[str, tuple[str, ...]]] = {
    OS_LINUX: (OS_LINUX,),
    OS_WINDOWS: (OS_WINDOWS,),
    OS_DARWIN: (OS_DARWIN, "macos", "osx"),
    OS_FREEBSD: (OS_FREEBSD,),
    OS_NETBSD: (OS_NETBSD,),
    OS_ILLUMOS: (OS_ILLUMOS,),
    OS_SOLARIS: (OS_SOLARIS,),
    OS_OPENBSD: (OS_OPENBSD,),
}

# Same as OS_ALIASES, for CPU architectures. Aliases must not be shared
# between two canonical labels.
ARCH_ALIASES: Final[Mapping[str, tuple[str, ...]]] = {
    ARCH_X86_64: (ARCH_X86_64, "amd64", "64bit", "x64"),
    ARCH_ARM64: (ARCH_ARM64, "aarch64"),
    ARCH_ARM: (ARCH_ARM, "armhf", "armv7", "armv7hl"),
    ARCH_386: (ARCH_386, "i686", "x86", "i386", "32bit"),
    ARCH_RISCV64: (ARCH_RISCV64,),
    ARCH_S390X: (ARCH_S390X,),
    ARCH_PPC64LE: (ARCH_PPC64LE, "ppc64el", "ppc64"),
}

# Characters that separate the tokens of a release filename
FILENAME_SEPARATORS: Final[tuple[str, ...]] = ("-", ".", "_")

# Package types
PACKAGE_RPM: Final = "rpm"
PACKAGE_DEB: Final = "deb"
PACKAGE_APK: Final = "apk"
PACKAGE_DMG: Final = "dmg"
PACKAGE_MSI: Final = "msi"
PACKAGE_WHL: Final = "whl"

# Archive types
ARCHIVE_ZIP: Final = "zip"
ARCHIVE_TAR: Final = "tar"
ARCHIVE_BZ2: Final = "bz2"
ARCHIVE_GZ: Final = "gz"
ARCHIVE_XZ: Final = "xz"
ARCHIVE_RAR: Final = "rar"
ARCHIVE_L7: Final = "l7"
ARCHIVE_TGZ: Final = "tgz"
ARCHIVE_7Z: Final = "7z"

# File extensions (without the leading dot) registered for each package type.
PACKAGE_EXTENSIONS: Final[Mapping[str, tuple[str, ...]]] = {
    PACKAGE_RPM: ("rpm",),
    PACKAGE_DEB: ("deb",),
    PACKAGE_APK: ("apk",),
    PACKAGE_DMG: ("dmg",),
    PACKAGE_MSI: ("msi",),
    PACKAGE_WHL: ("whl",),
}

# File extensions registered for each archive type. Compound extensions are
# allowed, the classifier always prefers the longest matching suffix.
ARCHIVE_EXTENSIONS: Final[Mapping[str, tuple[str, ...]]] = {
    ARCHIVE_ZIP: ("zip",),
    ARCHIVE_TAR: ("tar",),
    ARCHIVE_BZ2: ("bz2", "bz"),
    ARCHIVE_GZ: ("gz",),
    ARCHIVE_XZ: ("xz",),
    ARCHIVE_RAR: ("rar",),
    ARCHIVE_L7: ("l7",),
    ARCHIVE_TGZ: ("tar.gz", "tgz"),
    ARCHIVE_7Z: ("7z",),
}

# Extensions that pin a file to one OS even when its name has no OS token.
OS_FALLBACK_EXTENSIONS: Final[Mapping[str, str]] = {
    ".rpm": OS_LINUX,
    ".deb": OS_LINUX,
    ".apk": OS_LINUX,
    ".exe": OS_WINDOWS,
    ".msi": OS_WINDOWS,
    ".dmg": OS_DARWIN,
}

# Security and provenance files published next to the artifacts. They are
# grouped with their installable but never downloaded as the payload.
METADATA_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {
        ".sig",
        ".pem",
        ".asc",
        ".cert",
        ".crt",
        ".pub",
        ".sha256",
        ".sha512",
        ".sbom",
        ".json",
        ".jsonl",
        ".spdx",
        ".txt",
        ".bundle",
        ".intoto.jsonl",
    }
)

# Native package format of each OS family
PREFERRED_PACKAGES: Final[Mapping[OSFamily, str]] = {
    OSFamily.ALPINE: PACKAGE_APK,
    OSFamily.WOLFI: PACKAGE_APK,
    OSFamily.DEBIAN: PACKAGE_DEB,
    OSFamily.UBUNTU: PACKAGE_DEB,
    OSFamily.ALMA: PACKAGE_RPM,
    OSFamily.ARCH: PACKAGE_RPM,
    OSFamily.FEDORA: PACKAGE_RPM,
    OSFamily.ROCKY: PACKAGE_RPM,
    OSFamily.RHEL: PACKAGE_RPM,
    OSFamily.MACOS: PACKAGE_DMG,
    OSFamily.WINDOWS: PACKAGE_MSI,
}

# Value of the ID key in /etc/os-release for each known family
OS_RELEASE_IDS: Final[Mapping[str, OSFamily]] = {
    "alpine": OSFamily.ALPINE,
    "almalinux": OSFamily.ALMA,
    "arch": OSFamily.ARCH,
    "fedora": OSFamily.FEDORA,
    "debian": OSFamily.DEBIAN,
    "distroless": OSFamily.DISTROLESS,
    "rocky": OSFamily.ROCKY,
    "rhel": OSFamily.RHEL,
    "ubuntu": OSFamily.UBUNTU,
    "wolfi": OSFamily.WOLFI,
}

OS_RELEASE_PATH: Final = "/etc/os-release"

# Short spellings accepted by `drop get --type`
DOWNLOAD_TYPE_SHORTCUTS: Final[Mapping[str, DownloadType]] = {
    "b": DownloadType.BINARY,
    "p": DownloadType.PACKAGE,
    "a": DownloadType.ARCHIVE,
}

DEFAULT_HOST: Final = "github.com"
GITHUB_API_URL: Final = "https://api.github.com"
DEFAULT_TIMEOUT: Final = 900  # seconds
RELEASES_PER_PAGE: Final = 100
DOWNLOAD_CHUNK_SIZE: Final = 64 * 1024
