from __future__ import annotations

import re
from datetime import date

import pytest

from release_prep.errors import (
    DuplicateReleaseVersionError,
    MissingVersionFieldError,
    NonSequentialReleaseError,
    PromotionErrorKind,
)
from release_prep.models import Release, ReleaseCheck
from release_prep.promoters import promote_manifest_version

SEQUENTIAL = (ReleaseCheck.SEQUENTIAL,)


def _manifest(version: str, spacing: str = " ") -> str:
    return (
        "{\n"
        '\t"$schema": "https://json.schemastore.org/package.json",\n'
        '\t"name": "@owner/package",\n'
        f'\t"version":{spacing}"{version}",\n'
        '\t"files": ["dist"],\n'
        '\t"packageManager": "pnpm@9.1.0+sha256.22e36fba7f4880ecf749a5ca128b8435da085ecd"\n'
        "}"
    )


def _promote(text: str, version: str, checks: tuple[ReleaseCheck, ...] = ()) -> str:
    return promote_manifest_version(text, Release.of(version, date(2023, 10, 1)), checks)


def test_missing_version_field() -> None:
    text = '{\n\t"private": true,\n\t"type": "module"\n}'

    with pytest.raises(MissingVersionFieldError) as excinfo:
        _promote(text, "1.0.0")

    assert excinfo.value.kind is PromotionErrorKind.MISSING_VERSION_FIELD
    assert excinfo.value.message == "must have a 'version' field"


@pytest.mark.parametrize(
    ("current", "new"),
    [
        ("1.0.0", "1.0.1"),
        ("7.1.3-beta.7", "7.1.3"),
        ("9.0.5-rc.0+3a1c790f", "9.0.5"),
    ],
)
def test_updates_only_the_version_value(current: str, new: str) -> None:
    assert _promote(_manifest(current), new) == _manifest(new) + "\n"


@pytest.mark.parametrize("spacing", ["", "     ", "\n\t\t"])
def test_preserves_whitespace_before_the_value(spacing: str) -> None:
    assert _promote(_manifest("2.0.0", spacing), "2.1.0") == _manifest("2.1.0", spacing) + "\n"


def test_replaces_first_version_field_only() -> None:
    text = '{"version": "1.0.0", "engines": {"version": "9.9.9"}}\n\n\n'

    assert _promote(text, "1.0.1") == '{"version": "1.0.1", "engines": {"version": "9.9.9"}}\n'


@pytest.mark.parametrize(
    ("current", "new"),
    [
        ("1.0.0", "1.1.1"),
        ("7.1.3-beta.7", "7.1.3-beta.4"),
        ("9.0.5-rc.0+3a1c790f", "9.0.4"),
    ],
)
def test_sequential_check_rejects_skipped_versions(current: str, new: str) -> None:
    with pytest.raises(NonSequentialReleaseError) as excinfo:
        _promote(_manifest(current), new, SEQUENTIAL)

    assert str(excinfo.value) == f"has latest release version {current}, but was set to update to {new}"


@pytest.mark.parametrize("current", ["1.0.0", "7.1.3-beta.7", "9.0.5-rc.0+3a1c790f"])
def test_sequential_check_rejects_existing_version(current: str) -> None:
    with pytest.raises(DuplicateReleaseVersionError, match=re.escape(f"already contains release version {current}")):
        _promote(_manifest(current), current, SEQUENTIAL)


@pytest.mark.parametrize("current", ["latest", "workspace:*", "v1.0.0"])
def test_sequential_check_is_skipped_for_unparseable_versions(current: str) -> None:
    text = _manifest(current)

    assert _promote(text, "3.0.0", SEQUENTIAL) == _manifest("3.0.0") + "\n"
