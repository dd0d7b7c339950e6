"""Semantic version parsing and sequential-release rules.

Versions follow ``major.minor.patch[-prerelease][+build]``. A prerelease
identifier is decomposed into a textual label, a delimiter, and a trailing
numeric increment so that successive prereleases can be compared::

    beta.3  -> label "beta", delimiter ".", increment 3
    rc-12   -> label "rc",   delimiter "-", increment 12
    alpha   -> label "alpha", no delimiter, no increment
    7       -> empty label,   no delimiter, increment 7

Build metadata never orders versions; it only acts as the final tie-breaker
between two otherwise identical versions, which are accepted as sequential when
the build strings differ.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from .errors import DuplicateReleaseVersionError, NonSequentialReleaseError

_VERSION_PATTERN = (
    r"(?P<major>\d+)\.(?P<minor>\d+)\.(?P<patch>\d+)"
    r"(?:-(?P<prerelease>[-\w]+(?:\.[-\w]+)*))?"
    r"(?:\+(?P<build>[-\w]+(?:\.[-\w]+)*))?"
)
_VERSION_RE = re.compile(_VERSION_PATTERN, re.ASCII)
_INCREMENT_RE = re.compile(r"(?:^|[-.])(?P<increment>\d+)$")


@dataclass(frozen=True, slots=True)
class PrereleaseIdentifier:
    label: str
    delimiter: str
    increment: int | None

    @classmethod
    def parse(cls, value: str) -> PrereleaseIdentifier:
        match = _INCREMENT_RE.search(value)
        if match is None:
            return cls(label=value, delimiter="", increment=None)
        prefix = value[: match.start("increment")]
        return cls(
            label=prefix[:-1],
            delimiter=prefix[-1:],
            increment=int(match.group("increment")),
        )

    @property
    def is_initial(self) -> bool:
        return self.increment is None or self.increment == 0


@dataclass(frozen=True, slots=True)
class SemanticVersion:
    """An immutable ``major.minor.patch[-prerelease][+build]`` value."""

    major: int
    minor: int
    patch: int
    prerelease: str | None = None
    build: str | None = None

    @classmethod
    def parse(cls, value: str) -> SemanticVersion:
        """Parse ``value`` as a whole; raise ``ValueError`` when it is not a version."""

        match = _VERSION_RE.fullmatch(value.strip())
        if match is None:
            raise ValueError(f"Expected a semantic version string, but it was '{value}'")
        return cls._from_match(match)

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> SemanticVersion:
        return cls(
            major=int(match.group("major")),
            minor=int(match.group("minor")),
            patch=int(match.group("patch")),
            prerelease=match.group("prerelease"),
            build=match.group("build"),
        )

    @property
    def prerelease_identifier(self) -> PrereleaseIdentifier | None:
        if self.prerelease is None:
            return None
        return PrereleaseIdentifier.parse(self.prerelease)

    @property
    def is_prerelease(self) -> bool:
        return self.prerelease is not None or self.build is not None

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease is not None:
            text += f"-{self.prerelease}"
        if self.build is not None:
            text += f"+{self.build}"
        return text


VersionLike = str | SemanticVersion


def extract_semantic_version(value: str) -> str | None:
    """Return the first semantic version embedded in ``value`` (``v1.2.3``, ``release/1.2.3``)."""

    match = _VERSION_RE.search(value)
    if match is None:
        return None
    return str(SemanticVersion._from_match(match))


def parse_semantic_version(value: str) -> SemanticVersion | None:
    """Return ``value`` as a :class:`SemanticVersion`, or ``None`` when it is not one."""

    try:
        return SemanticVersion.parse(value)
    except ValueError:
        return None


def is_prerelease(version: VersionLike) -> bool:
    """True when ``version`` carries a prerelease or build segment."""

    return _coerce(version).is_prerelease


def is_sequential_upgrade(current: VersionLike, next_version: VersionLike) -> bool:
    """Return True when ``next_version`` directly succeeds ``current``.

    Examples::

        1.2.3        -> 1.2.4         True
        1.2.3        -> 1.4.0         False (skips 1.3.0)
        1.0.0-beta.1 -> 1.0.0-beta.2  True
        1.0.0-beta.1 -> 1.0.1         False (finalize 1.0.0 first)
    """

    current_version = _coerce(current)
    candidate = _coerce(next_version)

    if candidate.major == current_version.major + 1:
        return _is_initial_minor(candidate)
    if candidate.major == current_version.major:
        return _is_sequential_minor(current_version, candidate)
    return False


def check_sequential_release(
    new_version: VersionLike,
    prior_versions: Sequence[VersionLike],
) -> None:
    """Validate ``new_version`` against prior versions ordered most recent first.

    Raises :class:`DuplicateReleaseVersionError` when the version has already been
    released and :class:`NonSequentialReleaseError` when it does not directly
    succeed the most recent prior version.
    """

    if not prior_versions:
        return

    candidate = _coerce(new_version)
    priors = [_coerce(version) for version in prior_versions]

    if any(str(prior) == str(candidate) for prior in priors):
        raise DuplicateReleaseVersionError(str(candidate))

    latest = priors[0]
    if not is_sequential_upgrade(latest, candidate):
        raise NonSequentialReleaseError(str(latest), str(candidate))


def _coerce(version: VersionLike) -> SemanticVersion:
    if isinstance(version, SemanticVersion):
        return version
    return SemanticVersion.parse(version)


def _is_initial_minor(version: SemanticVersion) -> bool:
    return version.minor == 0 and _is_initial_patch(version)


def _is_sequential_minor(current: SemanticVersion, candidate: SemanticVersion) -> bool:
    if candidate.minor == current.minor + 1:
        return _is_initial_patch(candidate)
    if candidate.minor == current.minor:
        return _is_sequential_patch(current, candidate)
    return False


def _is_initial_patch(version: SemanticVersion) -> bool:
    return version.patch == 0 and _is_initial_prerelease(version)


def _is_sequential_patch(current: SemanticVersion, candidate: SemanticVersion) -> bool:
    if candidate.patch == current.patch + 1:
        # A prerelease must be finalized before the next patch.
        return not _is_unfinished(current) and _is_initial_prerelease(candidate)
    if candidate.patch == current.patch:
        return _is_sequential_prerelease(current, candidate)
    return False


def _prerelease_label(version: SemanticVersion) -> str:
    identifier = version.prerelease_identifier
    return identifier.label if identifier is not None else ""


def _is_unfinished(version: SemanticVersion) -> bool:
    # A numeric-only prerelease (1.0.0-3) has no label and does not count here.
    return bool(_prerelease_label(version)) or version.build is not None


def _is_initial_prerelease(version: SemanticVersion) -> bool:
    identifier = version.prerelease_identifier
    return identifier is None or identifier.is_initial


def _is_sequential_prerelease(current: SemanticVersion, candidate: SemanticVersion) -> bool:
    current_identifier = current.prerelease_identifier
    candidate_identifier = candidate.prerelease_identifier

    if current_identifier is None or not current_identifier.label:
        return not _prerelease_label(candidate) and _is_sequential_build(current, candidate)

    if candidate_identifier is None or candidate_identifier.label != current_identifier.label:
        return _is_initial_prerelease(candidate)

    if current_identifier.increment is None:
        return candidate_identifier.increment == 0 or (
            candidate_identifier.increment is None and _is_sequential_build(current, candidate)
        )

    if candidate_identifier.increment is None:
        return True
    if candidate_identifier.delimiter != current_identifier.delimiter:
        return False
    if candidate_identifier.increment == current_identifier.increment + 1:
        return True
    return candidate_identifier.increment == current_identifier.increment and _is_sequential_build(
        current, candidate
    )


def _is_sequential_build(current: SemanticVersion, candidate: SemanticVersion) -> bool:
    return current.build is not None and candidate.build != current.build


__all__ = [
    "PrereleaseIdentifier",
    "SemanticVersion",
    "VersionLike",
    "check_sequential_release",
    "extract_semantic_version",
    "is_prerelease",
    "is_sequential_upgrade",
    "parse_semantic_version",
]
