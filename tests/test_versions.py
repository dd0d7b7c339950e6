from __future__ import annotations

import pytest

from release_prep.errors import (
    DuplicateReleaseVersionError,
    NonSequentialReleaseError,
    PromotionErrorKind,
)
from release_prep.versions import (
    PrereleaseIdentifier,
    SemanticVersion,
    check_sequential_release,
    extract_semantic_version,
    is_prerelease,
    is_sequential_upgrade,
    parse_semantic_version,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("0.2.0", "0.2.0"),
        ("v0.2.0", "0.2.0"),
        ("release/0.2.0+77dd7cf1", "0.2.0+77dd7cf1"),
        ("[1.0.0-next]", "1.0.0-next"),
        ("v2.3.4-alpha.0+e58c6301", "2.3.4-alpha.0+e58c6301"),
        ("[11.0.2-beta.2+7b93b61c]", "11.0.2-beta.2+7b93b61c"),
        ("release/10.4.1-rc.0", "10.4.1-rc.0"),
    ],
)
def test_extract_semantic_version_finds_embedded_version(value: str, expected: str) -> None:
    assert extract_semantic_version(value) == expected


@pytest.mark.parametrize("value", ["0", "1.1", "77dd7cf1", "1.0-SNAPSHOT", "next", "v2", "release/2", "[]", ""])
def test_extract_semantic_version_rejects_non_versions(value: str) -> None:
    assert extract_semantic_version(value) is None


def test_parse_requires_the_whole_string() -> None:
    assert SemanticVersion.parse("1.2.3-beta.4+sha") == SemanticVersion(1, 2, 3, "beta.4", "sha")
    assert parse_semantic_version("v1.2.3") is None
    with pytest.raises(ValueError, match="Expected a semantic version string"):
        SemanticVersion.parse("1.2")


def test_version_renders_back_to_its_text() -> None:
    assert str(SemanticVersion.parse("10.12.9-beta.6+20231116153649")) == "10.12.9-beta.6+20231116153649"


@pytest.mark.parametrize(
    ("value", "label", "delimiter", "increment"),
    [
        ("beta.3", "beta", ".", 3),
        ("rc-12", "rc", "-", 12),
        ("alpha", "alpha", "", None),
        ("7", "", "", 7),
        ("x.7.1", "x.7", ".", 1),
    ],
)
def test_prerelease_identifier_decomposition(
    value: str,
    label: str,
    delimiter: str,
    increment: int | None,
) -> None:
    assert PrereleaseIdentifier.parse(value) == PrereleaseIdentifier(label, delimiter, increment)


@pytest.mark.parametrize(
    ("version", "expected"),
    [
        ("1.0.0", False),
        ("1.0.0-beta.1", True),
        ("2.0.0+69c1219f", True),
        ("1.0.0-7", True),
    ],
)
def test_is_prerelease(version: str, expected: bool) -> None:
    assert is_prerelease(version) is expected


@pytest.mark.parametrize(
    ("current", "candidate"),
    [
        ("1.2.3", "1.2.4"),
        ("1.2.3", "1.3.0"),
        ("1.2.3", "2.0.0"),
        ("1.2.3", "2.0.0-beta.0"),
        ("1.2.3", "1.2.4-rc.0"),
        ("1.0.0-beta.1", "1.0.0-beta.2"),
        ("1.0.0-beta.1", "1.0.0"),
        ("1.0.0-beta.1", "1.0.0-rc.0"),
        ("1.0.0-beta.1", "1.0.0-rc"),
        ("1.0.0-beta", "1.0.0-beta.0"),
        ("1.0.0-beta+a", "1.0.0-beta+b"),
        ("1.0.0-beta.1+a", "1.0.0-beta.1+b"),
        ("1.0.0+a", "1.0.0+b"),
        ("0.9.9-beta.3", "0.10.0"),
        ("1.0.0-1", "1.0.1"),
        ("1.0.0-1+a", "1.0.0-1+b"),
    ],
)
def test_sequential_upgrades(current: str, candidate: str) -> None:
    assert is_sequential_upgrade(current, candidate)


@pytest.mark.parametrize(
    ("current", "candidate"),
    [
        ("1.2.3", "1.2.5"),
        ("1.2.3", "1.4.0"),
        ("1.2.3", "3.0.0"),
        ("1.2.3", "1.2.2"),
        ("1.2.3", "1.3.1"),
        ("1.2.3", "2.0.0-beta.1"),
        ("1.2.3", "1.2.3+sha"),
        ("1.0.0-beta.1", "1.0.1"),
        ("1.0.0-beta.1", "1.0.0-beta.3"),
        ("1.0.0-beta.1", "1.0.0-beta-2"),
        ("1.0.0-beta.1", "1.0.0-rc.1"),
        ("1.0.0-beta", "1.0.0-beta.1"),
        ("1.0.0+a", "1.0.1"),
        ("1.0.0+a", "1.0.0+a"),
        ("1.0.0-1", "1.0.0-2"),
        ("1.0.0-1", "1.0.0-beta.0"),
    ],
)
def test_non_sequential_upgrades(current: str, candidate: str) -> None:
    assert not is_sequential_upgrade(current, candidate)


def test_check_sequential_release_without_prior_versions_passes() -> None:
    check_sequential_release("3.1.4", [])


def test_check_sequential_release_uses_most_recent_prior() -> None:
    check_sequential_release("1.1.0", ["1.0.1", "1.0.0"])

    with pytest.raises(NonSequentialReleaseError) as excinfo:
        check_sequential_release("1.2.0", ["1.0.1", "1.0.0"])

    assert excinfo.value.kind is PromotionErrorKind.NON_SEQUENTIAL_RELEASE
    assert excinfo.value.message == "has latest release version 1.0.1, but was set to update to 1.2.0"


def test_check_sequential_release_detects_duplicates_anywhere() -> None:
    with pytest.raises(DuplicateReleaseVersionError) as excinfo:
        check_sequential_release("1.0.0", ["10.0.0", "1.0.0"])

    assert excinfo.value.kind is PromotionErrorKind.DUPLICATE_RELEASE_VERSION
    assert str(excinfo.value) == "already contains release version 1.0.0"


def test_duplicate_detection_compares_full_version_strings() -> None:
    check_sequential_release("1.0.0+b", ["1.0.0+a", "0.9.0"])
    check_sequential_release("1.0.0+b", ["1.0.0-rc.1+a"])
