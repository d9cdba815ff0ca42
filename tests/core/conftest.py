"""
Shared fixtures for core module tests.

This module provides reusable pytest fixtures for testing the classification
engine: the default label tables, an asset factory and the file listing of a
real release (sigstore/cosign v2.4.3).
"""

import pytest

from core.labels import LabelTables
from core.models import Asset, Platform


COSIGN_RELEASE_FILES = [
    "cosign-2.4.3-1.aarch64.rpm",
    "cosign-2.4.3-1.aarch64.rpm-keyless.pem",
    "cosign-2.4.3-1.aarch64.rpm-keyless.sig",
    "cosign-2.4.3-1.armv7hl.rpm",
    "cosign-2.4.3-1.armv7hl.rpm-keyless.pem",
    "cosign-2.4.3-1.armv7hl.rpm-keyless.sig",
    "cosign-2.4.3-1.ppc64le.rpm",
    "cosign-2.4.3-1.riscv64.rpm",
    "cosign-2.4.3-1.s390x.rpm",
    "cosign-2.4.3-1.x86_64.rpm",
    "cosign-2.4.3-1.x86_64.rpm-keyless.pem",
    "cosign-2.4.3-1.x86_64.rpm-keyless.sig",
    "cosign-darwin-amd64",
    "cosign-darwin-amd64-keyless.pem",
    "cosign-darwin-amd64-keyless.sig",
    "cosign-darwin-amd64.sig",
    "cosign-darwin-amd64_2.4.3_darwin_amd64.sbom.json",
    "cosign-darwin-arm64",
    "cosign-darwin-arm64.sig",
    "cosign-linux-amd64",
    "cosign-linux-amd64-keyless.pem",
    "cosign-linux-amd64-keyless.sig",
    "cosign-linux-amd64.sig",
    "cosign-linux-amd64_2.4.3_linux_amd64.sbom.json",
    "cosign-linux-arm",
    "cosign-linux-arm64",
    "cosign-linux-arm64.sig",
    "cosign-linux-ppc64le",
    "cosign-linux-riscv64",
    "cosign-linux-s390x",
    "cosign-windows-amd64.exe",
    "cosign-windows-amd64.exe-keyless.pem",
    "cosign-windows-amd64.exe-keyless.sig",
    "cosign-windows-amd64.exe.sig",
    "cosign_2.4.3_aarch64.apk",
    "cosign_2.4.3_amd64.deb",
    "cosign_2.4.3_amd64.deb-keyless.pem",
    "cosign_2.4.3_amd64.deb-keyless.sig",
    "cosign_2.4.3_arm64.deb",
    "cosign_2.4.3_armhf.deb",
    "cosign_2.4.3_armv7.apk",
    "cosign_2.4.3_ppc64el.deb",
    "cosign_2.4.3_x86_64.apk",
    "cosign_checksums.txt",
    "cosign_checksums.txt-keyless.pem",
    "cosign_checksums.txt-keyless.sig",
    "release-cosign.pub",
]


@pytest.fixture
def labels():
    """Default label tables."""
    return LabelTables.from_defaults()


@pytest.fixture
def make_asset():
    """Factory for assets of the sigstore/cosign v2.4.3 release."""

    def _factory(name, version="v2.4.3", repo="cosign", **kwargs):
        return Asset(
            name=name,
            download_url=f"https://github.com/sigstore/{repo}/releases/download/{version}/{name}",
            size=kwargs.pop("size", 1024),
            author=kwargs.pop("author", "github-actions[bot]"),
            host="github.com",
            org="sigstore",
            repo=repo,
            version=version,
            **kwargs,
        )

    return _factory


@pytest.fixture
def cosign_assets(make_asset):
    """Every file of the cosign release, in listing order."""
    return [make_asset(name) for name in COSIGN_RELEASE_FILES]


@pytest.fixture
def small_release(make_asset):
    """A small release: three binaries and a checksum file."""
    return [
        make_asset(name)
        for name in [
            "cosign-linux-amd64",
            "cosign-linux-arm64",
            "cosign-darwin-amd64",
            "cosign_checksums.txt",
        ]
    ]


@pytest.fixture
def linux_amd64():
    return Platform(os="linux", arch="x86_64")
