"""
Variant selection module.

Given the aggregated contents of a release and a request (name, platform and
optional download type), this module picks the single file to download and
computes the filename it should be saved under.

Selection rules for an installable:

1. Keep the variants built for the requested OS and arch. Signatures,
   certificates and SBOMs never qualify.
2. Apply the requested type: "binary" drops packages and archives,
   "package" keeps only packages, "archive" keeps only archives.
3. With several candidates left, prefer archives, then packages, then bare
   binaries. Among packages the native format of the local OS family wins
   (deb on Debian, rpm on Fedora, ...). Remaining ties go to the first
   variant in listing order.

Saved filenames are stable: a bare binary is saved under the installable
name (plus ".exe" on windows), packages and archives keep their own name.
"""

from core.classifier import is_metadata
from core.exceptions import NoMatchingNameError, NoPlatformVariantError
from core.models import (
    AppReference,
    Asset,
    Installable,
    Platform,
    ReleaseItem,
    Selection,
)
from core.system import preferred_package
from constants import OS_WINDOWS
from models import DownloadType


def choose_asset(
    items: list[ReleaseItem],
    reference: AppReference,
    platform: Platform,
    download_type: DownloadType | None = None,
    os_family: str = "",
) -> Selection:
    """
    Find the file to download for a request.

    The request targets `reference.name`, or the repository name when no name
    was given. A standalone asset with that exact name is returned as is; the
    platform and type filters only apply to installables.

    Args:
        items: Aggregated release contents (see `core.aggregation.aggregate`).
        reference: The user request.
        platform: Target OS and arch, in canonical labels.
        download_type: Optional kind of file wanted.
        os_family: Local OS family, used to prefer the native package format.

    Returns:
        The chosen asset and its save filename.

    Raises:
        NoMatchingNameError: If nothing in the release has the target name.
        NoPlatformVariantError: If the installable has no variant for the
            requested platform and type.
    """
    name = reference.target_name
    for item in items:
        if item.name != name:
            continue
        match item:
            case Installable():
                return select_variant(item, platform, download_type, os_family)
            case Asset():
                return Selection(asset=item, filename=item.name)

    raise NoMatchingNameError(name, available=[item.name for item in items])


def select_variant(
    installable: Installable,
    platform: Platform,
    download_type: DownloadType | None = None,
    os_family: str = "",
) -> Selection:
    """
    Pick the variant of an installable that matches a platform and type.

    On success the computed save filename is also recorded on the installable
    (`installable.save_filename`).

    Raises:
        NoPlatformVariantError: If no variant qualifies.
    """
    candidates = [
        v
        for v in installable.variants
        if v.os == platform.os and v.arch == platform.arch and not is_metadata(v.name)
    ]

    match download_type:
        case DownloadType.BINARY:
            candidates = [v for v in candidates if not (v.package_type or v.archive_type)]
        case DownloadType.PACKAGE:
            candidates = [v for v in candidates if v.package_type]
        case DownloadType.ARCHIVE:
            candidates = [v for v in candidates if v.archive_type]

    if not candidates:
        raise NoPlatformVariantError(
            installable.name,
            platform.slug,
            str(download_type) if download_type else None,
        )

    variant = _pick(candidates, os_family)
    filename = compute_filename(installable, variant, platform)
    installable.save_filename = filename
    return Selection(asset=variant, filename=filename)


def compute_filename(installable: Installable, variant: Asset, platform: Platform) -> str:
    """
    Filename to save a chosen variant under.

    Bare binaries take the installable name so the saved file is the same
    whatever platform was downloaded; windows binaries get ".exe" appended.
    Packages and archives keep their published filename.
    """
    if variant.package_type or variant.archive_type:
        return variant.name
    if platform.os == OS_WINDOWS:
        return installable.name + ".exe"
    return installable.name


def _pick(candidates: list[Asset], os_family: str) -> Asset:
    if len(candidates) == 1:
        return candidates[0]

    archives = [v for v in candidates if v.archive_type]
    if archives:
        return archives[0]

    packages = [v for v in candidates if v.package_type]
    if packages:
        native = preferred_package(os_family)
        for v in packages:
            if native and v.package_type == native:
                return v
        return packages[0]

    return candidates[0]
