"""
Filename classification module.

This module infers the target platform and the kind of a release file purely
from its name. It never looks at file contents. Each filename is classified
along four axes:

- Architecture: the canonical arch label of the longest arch token found.
- Operating system: the canonical OS label of the longest OS token found,
  falling back to single-platform extensions (.deb, .exe, .dmg, ...).
- Package type: the package format matched by the longest registered suffix.
- Archive type: the archive format matched by the longest registered suffix.

Tokens only count when followed by a separator ("-", "_", ".") or by the end
of the name. When several tokens of one axis appear, the longest alias text
wins: "cosign-2.4.3-1.x86_64.rpm" contains both "x86_64" and "x86_", and it is
an x86_64 file. If the longest length is shared by two different canonical
labels the name is ambiguous on that axis and the label is left empty.

A filename without any recognizable token is not an error. It simply gets
empty labels, and the aggregator treats it as a standalone asset.
"""

import dataclasses
import re
from typing import Iterator, Mapping

from constants import METADATA_EXTENSIONS, OS_FALLBACK_EXTENSIONS
from core.labels import LabelTables
from core.models import Asset, Classification


def classify(filename: str, labels: LabelTables) -> Classification:
    """
    Infer the platform and file kind of a release file from its name.

    Args:
        filename: The release filename (no directory components).
        labels: The platform label tables.

    Returns:
        A Classification whose fields are empty where nothing was recognized.

    Example:
        >>> labels = LabelTables.from_defaults()
        >>> classify("cosign_2.4.3_amd64.deb", labels)
        Classification(arch='x86_64', os='linux', package_type='deb', archive_type='')
    """
    return Classification(
        arch=detect_arch(filename, labels),
        os=detect_os(filename, labels),
        package_type=detect_type(filename, labels.package_extensions),
        archive_type=detect_type(filename, labels.archive_extensions),
    )


def annotate(asset: Asset, labels: LabelTables) -> Asset:
    """Return a copy of `asset` carrying the classification of its name."""
    c = classify(asset.name, labels)
    return dataclasses.replace(
        asset,
        os=c.os,
        arch=c.arch,
        package_type=c.package_type,
        archive_type=c.archive_type,
    )


def detect_arch(filename: str, labels: LabelTables) -> str:
    """Return the canonical architecture named in `filename`, or ""."""
    return _longest_label(filename, labels.arch_patterns())


def detect_os(filename: str, labels: LabelTables) -> str:
    """
    Return the canonical operating system named in `filename`, or "".

    When the name carries no OS token, packages and installers that only
    exist on one platform give it away by their extension.
    """
    os_label = _longest_label(filename, labels.os_patterns())
    if os_label:
        return os_label

    lower = filename.lower()
    for ext, fallback in OS_FALLBACK_EXTENSIONS.items():
        if lower.endswith(ext):
            return fallback
    return ""


def detect_type(filename: str, extensions: Mapping[str, tuple[str, ...]]) -> str:
    """
    Return the type whose registered extension is the longest suffix of `filename`.

    Extensions are compared case-insensitively and must be preceded by a dot,
    so "file.tar.gz" is "tgz" (via "tar.gz") rather than "gz".
    """
    file_type, _ = detect_type_extension(filename, extensions)
    return file_type


def detect_type_extension(
    filename: str, extensions: Mapping[str, tuple[str, ...]]
) -> tuple[str, str]:
    """Like `detect_type` but also return the extension that matched."""
    lower = filename.lower()
    file_type = ""
    matched = ""
    for candidate_type, exts in extensions.items():
        for ext in exts:
            if len(ext) > len(matched) and lower.endswith("." + ext.lower()):
                file_type = candidate_type
                matched = ext
    return file_type, matched


def is_package(filename: str, labels: LabelTables) -> bool:
    return detect_type(filename, labels.package_extensions) != ""


def is_archive(filename: str, labels: LabelTables) -> bool:
    return detect_type(filename, labels.archive_extensions) != ""


def is_metadata(filename: str) -> bool:
    """
    True for signatures, certificates, checksums and SBOMs.

    These ride along with the artifacts of a release and are grouped with
    them, but they are never the file a user means to download.
    """
    lower = filename.lower()
    return any(lower.endswith(ext) for ext in METADATA_EXTENSIONS)


def _longest_label(
    filename: str, patterns: Iterator[tuple[str, re.Pattern[str]]]
) -> str:
    best_label = ""
    best_len = 0
    ambiguous = False

    for label, pattern in patterns:
        length = max((len(m.group(1)) for m in pattern.finditer(filename)), default=0)
        if length == 0:
            continue
        if length > best_len:
            best_label, best_len, ambiguous = label, length, False
        elif length == best_len and label != best_label:
            ambiguous = True

    return "" if ambiguous else best_label
