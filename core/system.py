"""
Local system detection.

Reads what the selector needs to know about the machine drop runs on: its
platform in canonical labels and, on Linux, the distribution family that
decides which package format is native.
"""

import platform
from pathlib import Path
from typing import Iterable

from constants import OS_RELEASE_IDS, OS_RELEASE_PATH, PREFERRED_PACKAGES
from core.exceptions import InvalidPlatformError
from core.labels import LabelTables
from core.models import Platform
from models import OSFamily


def get_local_platform(labels: LabelTables) -> Platform:
    """
    Return the platform of the running interpreter in canonical labels.

    `platform.system()` and `platform.machine()` spell things their own way
    ("Windows", "AMD64", "aarch64"); the label tables map them to the same
    labels the classifier assigns to release files. Labels the tables do
    not know are kept lowercased.
    """
    system = platform.system()
    machine = platform.machine()
    return Platform(
        os=labels.resolve_os(system) or system.lower(),
        arch=labels.resolve_arch(machine) or machine.lower(),
    )


def parse_platform_slug(slug: str, labels: LabelTables) -> Platform:
    """
    Parse an "os/arch" slug such as "linux/amd64" into canonical labels.

    Raises:
        InvalidPlatformError: If the slug is malformed or either half is not
            a known alias.
    """
    os_part, sep, arch_part = slug.strip().partition("/")
    if not sep:
        raise InvalidPlatformError(slug, "Platform slug must look like os/arch")

    os_label = labels.resolve_os(os_part)
    if not os_label:
        raise InvalidPlatformError(slug, f"Invalid OS in platform slug: '{os_part}'")

    arch_label = labels.resolve_arch(arch_part)
    if not arch_label:
        raise InvalidPlatformError(
            slug, f"Invalid arch in platform slug: '{arch_part}'"
        )

    return Platform(os=os_label, arch=arch_label)


def parse_os_release_for_family(lines: Iterable[str]) -> str:
    """
    Return the OS family named by the ID key of os-release content, or "".

    Args:
        lines: Lines of an /etc/os-release file.
    """
    for line in lines:
        key, sep, value = line.strip().partition("=")
        if not sep or key != "ID":
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
            value = value[1:-1]
        family = OS_RELEASE_IDS.get(value)
        return str(family) if family else ""
    return ""


def get_system_os_family(os_release: Path = Path(OS_RELEASE_PATH)) -> str:
    """
    Return the OS family of the local machine, or "" if unknown.

    Windows and macOS have a single family each; everything else is read from
    the os-release file.
    """
    match platform.system():
        case "Windows":
            return str(OSFamily.WINDOWS)
        case "Darwin":
            return str(OSFamily.MACOS)

    try:
        with os_release.open("r", encoding="utf-8") as f:
            return parse_os_release_for_family(f)
    except OSError:
        return ""


def preferred_package(family: str) -> str:
    """Native package type of an OS family, or "" if it has none."""
    try:
        return PREFERRED_PACKAGES.get(OSFamily(family), "")
    except ValueError:
        return ""
