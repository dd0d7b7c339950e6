"""Pure text promoters for changelogs and package manifests."""

from .changelog import list_release_versions, promote_changelog
from .layout import ensure_trailing_newline, normalize_layout
from .manifest import promote_manifest_version
from .syntax import ChangelogSyntax, syntax_for

__all__ = [
    "ChangelogSyntax",
    "ensure_trailing_newline",
    "list_release_versions",
    "normalize_layout",
    "promote_changelog",
    "promote_manifest_version",
    "syntax_for",
]
