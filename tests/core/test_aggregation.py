"""
Tests for the installable aggregator.

Tests cover:
- trim_separator_suffix: trailing separator removal
- normalize_base_name: version stripping, RPM releases, empty guard
- aggregate: grouping, standalone assets, conservation and ordering
"""

import pytest

from core.aggregation import aggregate, normalize_base_name, trim_separator_suffix
from core.models import Asset, Installable


# ============================================================================
# Tests for trim_separator_suffix
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,expected",
    [
        ("binary", "binary"),
        ("binary.", "binary"),
        ("binary_", "binary"),
        ("binary-", "binary"),
        ("binary--", "binary-"),
        ("", ""),
    ],
)
def test_trim_separator_suffix(name, expected):
    assert trim_separator_suffix(name) == expected


@pytest.mark.unit
def test_trim_separator_suffix_is_idempotent_on_clean_names():
    once = trim_separator_suffix("binary-")
    assert trim_separator_suffix(once) == once


@pytest.mark.unit
def test_trim_separator_suffix_custom_separators():
    assert trim_separator_suffix("binary+", separators=("+",)) == "binary"
    assert trim_separator_suffix("binary-", separators=("+",)) == "binary-"


# ============================================================================
# Tests for normalize_base_name
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "name,version,expected",
    [
        ("tool_v1.2.0", "v1.2.0", "tool"),
        ("tool_1.2.0", "v1.2.0", "tool"),
        ("tool-1.2.0", "1.2.0", "tool"),
        ("tool", "v1.2.0", "tool"),
        ("tool-1.2.0-beta", "v1.2.0", "tool-1.2.0-beta"),
        ("tool", "", "tool"),
    ],
)
def test_normalize_base_name(name, version, expected):
    assert normalize_base_name(name, version) == expected


@pytest.mark.unit
def test_normalize_base_name_rpm_release():
    """RPM names carry a numeric release after the version."""
    assert normalize_base_name("cosign-2.4.3-1", "v2.4.3", is_rpm=True) == "cosign"
    assert normalize_base_name("cosign-v2.4.3-12", "v2.4.3", is_rpm=True) == "cosign"


@pytest.mark.unit
def test_normalize_base_name_rpm_release_only_for_rpms():
    assert normalize_base_name("cosign-2.4.3-1", "v2.4.3") == "cosign-2.4.3-1"


@pytest.mark.unit
def test_normalize_base_name_never_returns_empty():
    """A name that is only the version is kept as is."""
    assert normalize_base_name("1.2.0", "1.2.0") == "1.2.0"
    assert normalize_base_name("v1.2.0", "v1.2.0") == "v1.2.0"


# ============================================================================
# Tests for aggregate
# ============================================================================


@pytest.mark.unit
def test_aggregate_groups_small_release(labels, small_release):
    """Three binaries form one installable, the checksum file stands alone."""
    items = aggregate(small_release, labels)

    assert [item.name for item in items] == ["cosign", "cosign_checksums.txt"]

    cosign, checksums = items
    assert isinstance(cosign, Installable)
    assert isinstance(checksums, Asset)
    assert [(v.os, v.arch) for v in cosign.variants] == [
        ("linux", "x86_64"),
        ("linux", "arm64"),
        ("darwin", "x86_64"),
    ]
    assert cosign.os_variants() == ["linux", "darwin"]
    assert cosign.arch_variants() == ["x86_64", "arm64"]
    assert not cosign.has_packages
    assert not cosign.has_archives


@pytest.mark.unit
def test_aggregate_full_release(labels, cosign_assets):
    """Binaries, packages and their metadata all group under one name."""
    items = aggregate(cosign_assets, labels)

    assert [item.name for item in items] == [
        "cosign",
        "cosign_checksums.txt",
        "cosign_checksums.txt-keyless.pem",
        "cosign_checksums.txt-keyless.sig",
        "release-cosign.pub",
    ]

    cosign = items[0]
    assert isinstance(cosign, Installable)
    assert len(cosign.variants) == len(cosign_assets) - 4
    assert cosign.package_types() == ["rpm", "apk", "deb"]
    assert cosign.has_packages
    assert set(cosign.os_variants()) == {"linux", "darwin", "windows"}
    assert (cosign.host, cosign.org, cosign.repo, cosign.version) == (
        "github.com",
        "sigstore",
        "cosign",
        "v2.4.3",
    )


@pytest.mark.unit
def test_aggregate_conserves_assets(labels, cosign_assets):
    """Every asset appears exactly once in the output."""
    items = aggregate(cosign_assets, labels)

    seen = []
    for item in items:
        match item:
            case Installable():
                seen.extend(v.name for v in item.variants)
            case Asset():
                seen.append(item.name)

    assert sorted(seen) == sorted(a.name for a in cosign_assets)


@pytest.mark.unit
def test_aggregate_keeps_listing_order_of_variants(labels, cosign_assets):
    cosign = aggregate(cosign_assets, labels)[0]
    grouped = [a.name for a in cosign_assets if a.name in {v.name for v in cosign.variants}]
    assert [v.name for v in cosign.variants] == grouped


@pytest.mark.unit
def test_aggregate_does_not_modify_input(labels, small_release):
    aggregate(small_release, labels)
    assert all(a.os == "" and a.arch == "" for a in small_release)


@pytest.mark.unit
def test_aggregate_strips_version_from_archives(labels, make_asset):
    assets = [
        make_asset("gh_2.63.0_linux_amd64.tar.gz", version="v2.63.0", repo="cli"),
        make_asset("gh_2.63.0_macOS_arm64.zip", version="v2.63.0", repo="cli"),
        make_asset("gh_2.63.0_windows_amd64.msi", version="v2.63.0", repo="cli"),
    ]

    items = aggregate(assets, labels)

    assert len(items) == 1
    gh = items[0]
    assert gh.name == "gh"
    assert gh.archive_types() == ["tgz", "zip"]
    assert gh.package_types() == ["msi"]


@pytest.mark.unit
def test_aggregate_separate_products(labels, make_asset):
    assets = [
        make_asset("server-linux-amd64"),
        make_asset("client-linux-amd64"),
        make_asset("server-darwin-arm64"),
    ]

    items = aggregate(assets, labels)

    assert [item.name for item in items] == ["client", "server"]
    assert len(items[1].variants) == 2


@pytest.mark.unit
def test_aggregate_name_starting_with_token_uses_repository(labels, make_asset):
    """Files named only after their platform belong to the repository."""
    items = aggregate([make_asset("linux-amd64"), make_asset("darwin-arm64")], labels)

    assert len(items) == 1
    assert items[0].name == "cosign"
    assert len(items[0].variants) == 2


@pytest.mark.unit
def test_aggregate_name_starting_with_token_without_repository(labels, make_asset):
    items = aggregate([make_asset("linux-amd64", repo="")], labels)

    assert len(items) == 1
    assert isinstance(items[0], Asset)
    assert items[0].name == "linux-amd64"


@pytest.mark.unit
def test_aggregate_empty_listing(labels):
    assert aggregate([], labels) == []
