"""
Tests for the filename classifier.

Tests cover:
- detect_arch / detect_os: longest token precedence, boundaries, fallbacks
- detect_type: package and archive suffixes
- classify / annotate: the combined classification
- is_metadata: signature, certificate and SBOM files
"""

import pytest

from core.classifier import (
    annotate,
    classify,
    detect_arch,
    detect_os,
    detect_type,
    detect_type_extension,
    is_archive,
    is_metadata,
    is_package,
)
from core.models import Asset, Classification


# ============================================================================
# Tests for detect_arch
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,expected",
    [
        ("cosign-2.4.3-1.aarch64.rpm", "arm64"),
        ("cosign-2.4.3-1.aarch64.rpm-keyless.pem", "arm64"),
        ("cosign-2.4.3-1.armv7hl.rpm", "arm"),
        ("cosign-2.4.3-1.ppc64le.rpm-keyless.sig", "ppc64le"),
        ("cosign-2.4.3-1.riscv64.rpm", "riscv64"),
        ("cosign-2.4.3-1.s390x.rpm", "s390x"),
        ("cosign-2.4.3-1.x86_64.rpm", "x86_64"),
        ("cosign-darwin-amd64", "x86_64"),
        ("cosign-darwin-amd64_2.4.3_darwin_amd64.sbom.json", "x86_64"),
        ("cosign-darwin-arm64.sig", "arm64"),
        ("cosign-linux-arm", "arm"),
        ("cosign-linux-arm-keyless.pem", "arm"),
        ("cosign-linux-arm_2.4.3_linux_arm.sbom.json", "arm"),
        ("cosign-linux-pivkey-pkcs11key-amd64", "x86_64"),
        ("cosign-linux-ppc64le", "ppc64le"),
        ("cosign-windows-amd64.exe", "x86_64"),
        ("cosign_2.4.3_aarch64.apk", "arm64"),
        ("cosign_2.4.3_armhf.deb", "arm"),
        ("cosign_2.4.3_armv7.apk", "arm"),
        ("cosign_2.4.3_ppc64el.deb", "ppc64le"),
        ("cosign_2.4.3_x86_64.apk", "x86_64"),
        ("tool-i686.tar.gz", "386"),
        ("tool_Linux_x86_64.tar.gz", "x86_64"),
        ("cosign_checksums.txt", ""),
        ("cosign_checksums.txt-keyless.sig", ""),
        ("release-cosign.pub", ""),
    ],
)
def test_detect_arch(labels, filename, expected):
    assert detect_arch(filename, labels) == expected


@pytest.mark.unit
def test_detect_arch_longest_token_wins(labels):
    """"x86_64" beats the "x86" alias found at the same position."""
    assert detect_arch("tool-x86_64", labels) == "x86_64"
    assert detect_arch("tool-x86", labels) == "386"


@pytest.mark.unit
def test_detect_arch_ambiguous_tokens_return_empty(labels):
    """Two different labels with tokens of the same length cancel out."""
    assert detect_arch("tool-amd64-arm64", labels) == ""


@pytest.mark.unit
def test_detect_arch_repeated_label_is_not_ambiguous(labels):
    assert detect_arch("tool-amd64_1.0_x86_64.deb", labels) == "x86_64"


@pytest.mark.unit
def test_detect_arch_needs_boundary(labels):
    """Aliases embedded in a longer word are not tokens."""
    assert detect_arch("armory-linux", labels) == ""


# ============================================================================
# Tests for detect_os
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,expected",
    [
        ("bom-amd64-darwin.sig", "darwin"),
        ("bom-amd64-linux.sig", "linux"),
        ("bom-amd64-windows.exe.sig", "windows"),
        ("bom-arm-linux.sig", "linux"),
        ("bom-ppc64le-linux.sig", "linux"),
        ("bom.json.spdx.sig", ""),
        ("checksums.txt", ""),
        ("checksums.txt.pem", ""),
        ("bom-amd64-darwin", "darwin"),
        ("bom-amd64-windows.exe", "windows"),
        ("bom-s390x-linux", "linux"),
        ("bom.json.spdx", ""),
        ("bom-arm64-darwin.pem", "darwin"),
        ("tool_macOS_arm64.zip", "darwin"),
        ("tool-osx-x64.tar.gz", "darwin"),
    ],
)
def test_detect_os(labels, filename, expected):
    assert detect_os(filename, labels) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,expected",
    [
        ("cosign_2.4.3_amd64.deb", "linux"),
        ("cosign-2.4.3-1.x86_64.rpm", "linux"),
        ("cosign_2.4.3_x86_64.apk", "linux"),
        ("tool-amd64.exe", "windows"),
        ("tool-x64.msi", "windows"),
        ("Tool-arm64.DMG", "darwin"),
    ],
)
def test_detect_os_falls_back_to_extension(labels, filename, expected):
    """Platform specific formats give the OS away."""
    assert detect_os(filename, labels) == expected


@pytest.mark.unit
def test_detect_os_token_beats_extension(labels):
    assert detect_os("tool-windows-amd64.deb", labels) == "windows"


# ============================================================================
# Tests for detect_type
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,expected",
    [
        ("file.zip", "zip"),
        ("file.tar.gz", "tgz"),
        ("file.tgz", "tgz"),
        ("file.other.gz", "gz"),
        ("file.other.bz", "bz2"),
        ("file.other.bz2", "bz2"),
        ("FILE.TAR.GZ", "tgz"),
        ("file.tar.xz", "xz"),
        ("file", ""),
        ("filezip", ""),
    ],
)
def test_detect_archive_type(labels, filename, expected):
    assert detect_type(filename, labels.archive_extensions) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,expected",
    [
        ("cosign-2.4.3-1.armv7hl.rpm", "rpm"),
        ("cosign_2.4.3_amd64.deb", "deb"),
        ("cosign_2.4.3_armv7.apk", "apk"),
        ("Tool.dmg", "dmg"),
        ("tool-x64.msi", "msi"),
        ("tool-1.0-py3-none-any.whl", "whl"),
        ("cosign_2.4.3_amd64.deb-keyless.pem", ""),
    ],
)
def test_detect_package_type(labels, filename, expected):
    assert detect_type(filename, labels.package_extensions) == expected


@pytest.mark.unit
def test_detect_type_extension_reports_longest_match(labels):
    assert detect_type_extension("file.tar.gz", labels.archive_extensions) == (
        "tgz",
        "tar.gz",
    )
    assert detect_type_extension("file.bin", labels.archive_extensions) == ("", "")


@pytest.mark.unit
def test_is_package_and_is_archive(labels):
    assert is_package("tool_1.0_amd64.deb", labels)
    assert not is_package("tool_1.0_amd64.tar.gz", labels)
    assert is_archive("tool_1.0_amd64.tar.gz", labels)
    assert not is_archive("tool-linux-amd64", labels)


# ============================================================================
# Tests for classify and annotate
# ============================================================================


@pytest.mark.unit
def test_classify_package(labels):
    assert classify("cosign_2.4.3_amd64.deb", labels) == Classification(
        arch="x86_64", os="linux", package_type="deb", archive_type=""
    )


@pytest.mark.unit
def test_classify_archive(labels):
    c = classify("gh_2.63.0_macOS_arm64.zip", labels)

    assert c == Classification(arch="arm64", os="darwin", archive_type="zip")
    assert c.is_archive
    assert not c.is_package
    assert not c.is_binary


@pytest.mark.unit
def test_classify_unrecognized_name(labels):
    """Nothing recognized is not an error, every label is simply empty."""
    c = classify("README", labels)

    assert c == Classification()
    assert c.is_binary


@pytest.mark.unit
def test_annotate_returns_classified_copy(labels):
    asset = Asset(name="cosign-linux-arm64", size=42, version="v2.4.3")

    annotated = annotate(asset, labels)

    assert annotated is not asset
    assert (annotated.os, annotated.arch) == ("linux", "arm64")
    assert annotated.size == 42
    assert annotated.version == "v2.4.3"
    assert asset.os == ""
    assert annotated.classification == classify(asset.name, labels)


# ============================================================================
# Tests for is_metadata
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "filename,expected",
    [
        ("cosign-linux-amd64.sig", True),
        ("cosign-linux-amd64-keyless.pem", True),
        ("cosign-linux-amd64_2.4.3_linux_amd64.sbom.json", True),
        ("cosign_checksums.txt", True),
        ("release-cosign.pub", True),
        ("tool.intoto.jsonl", True),
        ("cosign-linux-amd64", False),
        ("cosign_2.4.3_amd64.deb", False),
        ("cosign-windows-amd64.exe", False),
    ],
)
def test_is_metadata(filename, expected):
    assert is_metadata(filename) is expected
