"""Release preparation error hierarchy."""

from __future__ import annotations

from enum import Enum
from typing import ClassVar


class PromotionErrorKind(str, Enum):
    """Machine-readable reason a single document could not be promoted."""

    MISSING_UNRELEASED_SECTION = "missing-unreleased-section"
    EMPTY_UNRELEASED_SECTION = "empty-unreleased-section"
    MISSING_REPOSITORY_LINK = "missing-repository-link"
    NON_SEQUENTIAL_RELEASE = "non-sequential-release"
    DUPLICATE_RELEASE_VERSION = "duplicate-release-version"
    MISSING_VERSION_FIELD = "missing-version-field"


class ReleasePrepError(Exception):
    """Base class for release-prep specific exceptions."""


class PromotionError(ReleasePrepError):
    """Raised when a document fails validation during promotion.

    The message is phrased to follow the document's path, e.g.
    ``CHANGELOG.md must have an 'Unreleased' section.``
    """

    kind: ClassVar[PromotionErrorKind]
    default_message: ClassVar[str] = ""

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingUnreleasedSectionError(PromotionError):
    kind = PromotionErrorKind.MISSING_UNRELEASED_SECTION
    default_message = "must have an 'Unreleased' section"


class EmptyUnreleasedSectionError(PromotionError):
    kind = PromotionErrorKind.EMPTY_UNRELEASED_SECTION
    default_message = "must have at least one item in the 'Unreleased' section"


class MissingRepositoryLinkError(PromotionError):
    kind = PromotionErrorKind.MISSING_REPOSITORY_LINK
    default_message = "must have a link to the GitHub repository in the 'Unreleased' section"


class MissingVersionFieldError(PromotionError):
    kind = PromotionErrorKind.MISSING_VERSION_FIELD
    default_message = "must have a 'version' field"


class NonSequentialReleaseError(PromotionError):
    kind = PromotionErrorKind.NON_SEQUENTIAL_RELEASE

    def __init__(self, latest_version: str, new_version: str) -> None:
        self.latest_version = latest_version
        self.new_version = new_version
        super().__init__(
            f"has latest release version {latest_version}, but was set to update to {new_version}"
        )


class DuplicateReleaseVersionError(PromotionError):
    kind = PromotionErrorKind.DUPLICATE_RELEASE_VERSION

    def __init__(self, new_version: str) -> None:
        self.new_version = new_version
        super().__init__(f"already contains release version {new_version}")


class UnsupportedFileFormatError(ReleasePrepError):
    """Raised when a matched file has no promoter for its filename."""

    def __init__(self, message: str = "is not a supported file format") -> None:
        self.message = message
        super().__init__(message)


class FileAccessError(ReleasePrepError):
    """Raised when a file cannot be read or written."""


__all__ = [
    "DuplicateReleaseVersionError",
    "EmptyUnreleasedSectionError",
    "FileAccessError",
    "MissingRepositoryLinkError",
    "MissingUnreleasedSectionError",
    "MissingVersionFieldError",
    "NonSequentialReleaseError",
    "PromotionError",
    "PromotionErrorKind",
    "ReleasePrepError",
    "UnsupportedFileFormatError",
]
