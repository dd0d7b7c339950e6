"""release_prep: changelog and package version promotion for upcoming releases."""

from __future__ import annotations

from importlib import metadata as _metadata

from .errors import (
    DuplicateReleaseVersionError,
    EmptyUnreleasedSectionError,
    MissingRepositoryLinkError,
    MissingUnreleasedSectionError,
    MissingVersionFieldError,
    NonSequentialReleaseError,
    PromotionError,
    PromotionErrorKind,
)
from .models import ChangelogDialect, ChangelogSection, Release, ReleaseCheck
from .promoters import promote_changelog, promote_manifest_version
from .versions import (
    SemanticVersion,
    check_sequential_release,
    extract_semantic_version,
    is_prerelease,
    is_sequential_upgrade,
)

try:  # pragma: no cover - executed when package metadata is available
    __version__ = _metadata.version("release-prep")
except _metadata.PackageNotFoundError:  # pragma: no cover - local source tree fallback
    __version__ = "0.0.0"

__all__ = [
    "ChangelogDialect",
    "ChangelogSection",
    "DuplicateReleaseVersionError",
    "EmptyUnreleasedSectionError",
    "MissingRepositoryLinkError",
    "MissingUnreleasedSectionError",
    "MissingVersionFieldError",
    "NonSequentialReleaseError",
    "PromotionError",
    "PromotionErrorKind",
    "Release",
    "ReleaseCheck",
    "SemanticVersion",
    "__version__",
    "check_sequential_release",
    "extract_semantic_version",
    "is_prerelease",
    "is_sequential_upgrade",
    "promote_changelog",
    "promote_manifest_version",
]
