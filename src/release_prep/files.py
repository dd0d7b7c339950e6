"""File discovery, classification and text I/O helpers."""

from __future__ import annotations

import glob
import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path, PurePath, PurePosixPath

from .errors import FileAccessError, UnsupportedFileFormatError
from .logging import log_context

logger = logging.getLogger(__name__)


class FileKind(str, Enum):
    """Document types that can be promoted, detected from the filename."""

    ASCIIDOC_CHANGELOG = "asciidoc-changelog"
    MARKDOWN_CHANGELOG = "markdown-changelog"
    PACKAGE_JSON = "package-json"


_EXACT_FILENAMES: dict[str, FileKind] = {
    "CHANGELOG.adoc": FileKind.ASCIIDOC_CHANGELOG,
    "CHANGELOG.md": FileKind.MARKDOWN_CHANGELOG,
    "package.json": FileKind.PACKAGE_JSON,
}

_CHANGELOG_SUFFIXES: dict[str, tuple[FileKind, str]] = {
    ".adoc": (FileKind.ASCIIDOC_CHANGELOG, "CHANGELOG.adoc"),
    ".md": (FileKind.MARKDOWN_CHANGELOG, "CHANGELOG.md"),
}


def list_matching_files(patterns: Iterable[str], root: Path) -> list[Path]:
    """Return regular files matching ``patterns`` relative to ``root``.

    Patterns support ``**`` and match hidden files. Results keep pattern order,
    each pattern's matches are sorted, and a file matched by several patterns is
    listed once.
    """

    seen: set[Path] = set()
    matches: list[Path] = []
    for pattern in patterns:
        found = glob.glob(pattern, root_dir=root, recursive=True, include_hidden=True)
        for entry in sorted(found):
            path = Path(entry)
            if path in seen or not (root / path).is_file():
                continue
            seen.add(path)
            matches.append(path)
    return matches


def rename_suggestion(path: PurePath) -> PurePosixPath | None:
    """Return the supported filename for a changelog that is not named ``CHANGELOG.*``."""

    if path.name in _EXACT_FILENAMES:
        return None
    suffix = _CHANGELOG_SUFFIXES.get(path.suffix)
    if suffix is None:
        return None
    return PurePosixPath(path.as_posix()).with_name(suffix[1])


def classify_file(path: PurePath) -> FileKind:
    """Return the :class:`FileKind` for ``path`` from its filename alone."""

    kind = _EXACT_FILENAMES.get(path.name)
    if kind is not None:
        return kind

    suffix = _CHANGELOG_SUFFIXES.get(path.suffix)
    if suffix is None:
        raise UnsupportedFileFormatError()

    logger.warning(
        "files.classify.unsupported_filename",
        extra=log_context(path=path, expected_path=rename_suggestion(path)),
    )
    return suffix[0]


def read_text_file(path: Path) -> str:
    try:
        with path.open("r", encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise FileAccessError(f"Failed to read {path.as_posix()}: {_reason(exc)}.") from exc


def write_text_file(path: Path, content: str) -> None:
    try:
        with path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
    except OSError as exc:
        raise FileAccessError(f"Failed to write changes to {path.as_posix()}: {_reason(exc)}.") from exc


def _reason(exc: Exception) -> str:
    if isinstance(exc, OSError) and exc.strerror:
        return exc.strerror
    return str(exc)


__all__ = [
    "FileKind",
    "classify_file",
    "list_matching_files",
    "read_text_file",
    "rename_suggestion",
    "write_text_file",
]
