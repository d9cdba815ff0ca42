"""
Aggregation of release assets into installables.

Release pages usually publish the same program many times: one binary per
OS/arch pair, system packages, archives, and the signatures and SBOMs of
each. This module partitions such a flat asset list into:

- Installables: clusters of assets sharing the same base name, i.e. the text
  before the first OS or arch token of the filename, with the release version
  stripped off (e.g. "cosign-linux-amd64" and "cosign_2.4.3_arm64.deb" are
  both variants of "cosign").
- Standalone assets: files whose name has no platform token at all
  (e.g. "cosign_checksums.txt").

Grouping uses filename text only. Every input asset ends up in the result
exactly once, either as a standalone asset or as one variant of exactly one
installable.
"""

import re
from typing import Iterable

from core.classifier import annotate
from core.labels import LabelTables
from core.models import Asset, Installable, ReleaseItem

# RPM filenames append a numeric release to the version: name-1.2.3-1.arch.rpm
_RPM_RELEASE = re.compile(r"-\d+$")


def aggregate(assets: Iterable[Asset], labels: LabelTables) -> list[ReleaseItem]:
    """
    Organize release assets into installables and standalone assets.

    Args:
        assets: The assets of one release, in listing order.
        labels: The platform label tables.

    Returns:
        Standalone assets and installables, sorted by name. Variants keep the
        order in which they were listed and carry their classification.

    Example:
        >>> labels = LabelTables.from_defaults()
        >>> names =["cosign-linux-amd64", "cosign-darwin-arm64", "cosign_checksums.txt"]
        >>> [item.name for item in aggregate([Asset(n) for n in names], labels)]
        ['cosign', 'cosign_checksums.txt']
    """
    splitter = labels.global_split_pattern()
    standalone: list[ReleaseItem] = []
    installables: dict[str, Installable] = {}

    for asset in assets:
        parts = splitter.split(asset.name)

        # No OS or arch token anywhere: not a variant of anything
        if len(parts) == 1:
            standalone.append(asset)
            continue

        base = trim_separator_suffix(parts[0], labels.separators)
        name = normalize_base_name(
            base,
            asset.version,
            is_rpm=parts[-1].lower().startswith(".rpm"),
            separators=labels.separators,
        )

        # The name starts with a platform token, fall back to the repository
        if not name:
            name = asset.repo
        if not name:
            standalone.append(asset)
            continue

        if name not in installables:
            installables[name] = Installable(
                name=name,
                host=asset.host,
                org=asset.org,
                repo=asset.repo,
                version=asset.version,
            )

        installables[name].variants.append(annotate(asset, labels))

    items = standalone + list(installables.values())
    items.sort(key=lambda item: item.name)
    return items


def trim_separator_suffix(name: str, separators: Iterable[str] = ("-", "_", ".")) -> str:
    """
    Trim one trailing filename separator from `name`.

    Trimming is idempotent on names that do not end in a separator:
    "binary" stays "binary" and "binary-" becomes "binary".
    """
    if name and name[-1] in tuple(separators):
        return name[:-1]
    return name


def normalize_base_name(
    name: str,
    version: str,
    is_rpm: bool = False,
    separators: Iterable[str] = ("-", "_", "."),
) -> str:
    """
    Strip the release version from the end of a candidate base name.

    Projects often bake the version into their filenames
    ("tool_1.2.0_linux_amd64.tar.gz"). The version is removed when it is a
    literal suffix of the name, with or without its leading "v", or, for RPM
    files, when it is followed by a numeric release ("tool-1.2.0-1").

    If stripping would leave nothing, the name is returned unchanged so that
    no installable ends up with an empty key.
    """
    if not version or not name:
        return name

    seps = tuple(separators)
    bare = version[1:] if version.startswith("v") else ""
    stripped = name

    if name.endswith(version):
        stripped = trim_separator_suffix(name[: -len(version)], seps)
    elif bare and name.endswith(bare):
        stripped = trim_separator_suffix(name[: -len(bare)], seps)
    elif is_rpm and _RPM_RELEASE.search(name):
        stripped = _trim_rpm_release(name, version, bare, seps)

    return stripped or name


def _trim_rpm_release(name: str, version: str, bare: str, seps: tuple[str, ...]) -> str:
    match = _RPM_RELEASE.search(name)
    if match is None:
        return name
    digits = match.group(0)

    for candidate in (version, bare):
        if candidate and name.endswith(candidate + digits):
            return trim_separator_suffix(name[: -len(candidate + digits)], seps)
    return name
