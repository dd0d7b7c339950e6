"""Data structures shared across release_prep modules."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .versions import SemanticVersion


class ReleaseCheck(str, Enum):
    """Optional validations requested for a promotion."""

    SEQUENTIAL = "sequential"

    @classmethod
    def collect(cls, checks: Iterable[ReleaseCheck | str]) -> frozenset[ReleaseCheck]:
        return frozenset(cls(check) for check in checks)


class ChangelogDialect(str, Enum):
    """Surface syntaxes of Keep a Changelog documents."""

    ASCIIDOC = "asciidoc"
    MARKDOWN = "markdown"


@dataclass(frozen=True, slots=True)
class Release:
    """A version paired with its release date."""

    version: SemanticVersion
    date: date

    @classmethod
    def of(cls, version: str | SemanticVersion, release_date: date | str) -> Release:
        if isinstance(version, str):
            version = SemanticVersion.parse(version)
        if isinstance(release_date, str):
            release_date = date.fromisoformat(release_date)
        return cls(version=version, date=release_date)

    @property
    def date_string(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True, slots=True)
class ChangelogSection:
    """One changelog section, most recent first in document order.

    ``release`` is ``None`` for the Unreleased section. ``previous_version``
    names the release that the section's compare link starts from; it is the
    version of the next section in document order, or ``None`` for the oldest.
    """

    repository_url: str | None
    previous_version: str | None
    release: Release | None
    body: str = ""

    @property
    def is_unreleased(self) -> bool:
        return self.release is None


__all__ = ["ChangelogDialect", "ChangelogSection", "Release", "ReleaseCheck"]
