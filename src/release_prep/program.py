"""Batch promotion of matched files for one release."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from .errors import FileAccessError, ReleasePrepError
from .files import (
    FileKind,
    classify_file,
    list_matching_files,
    read_text_file,
    rename_suggestion,
    write_text_file,
)
from .logging import log_context
from .models import ChangelogDialect, Release, ReleaseCheck
from .promoters import promote_changelog, promote_manifest_version

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


@dataclass(slots=True)
class PromotionReport:
    """Outcome of :func:`run_promotion`; the CLI prints it and exits with ``exit_code``."""

    messages: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    written_paths: list[Path] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return EXIT_FAILURE if self.errors else EXIT_SUCCESS


def promote_text(
    kind: FileKind,
    text: str,
    release: Release,
    checks: Iterable[ReleaseCheck | str] = (),
) -> str:
    """Promote ``text`` with the promoter registered for ``kind``."""

    if kind is FileKind.PACKAGE_JSON:
        return promote_manifest_version(text, release, checks)
    if kind is FileKind.ASCIIDOC_CHANGELOG:
        return promote_changelog(ChangelogDialect.ASCIIDOC, text, release, checks)
    return promote_changelog(ChangelogDialect.MARKDOWN, text, release, checks)


def run_promotion(
    patterns: Sequence[str],
    release: Release,
    checks: Iterable[ReleaseCheck | str] = (),
    root: Path = Path("."),
) -> PromotionReport:
    """Promote every file matching ``patterns`` to ``release``.

    Files are only written when every matched file promoted successfully;
    otherwise the report lists each failure and the disk is left untouched.
    """

    report = PromotionReport()
    checks = ReleaseCheck.collect(checks)
    version = release.version

    if not patterns:
        qualifier = "a prerelease" if version.is_prerelease else "not a prerelease"
        report.messages.append(
            f"No files set to be updated in release version {version}, as it is {qualifier}."
        )
        return report

    paths = list_matching_files(patterns, root)
    if not paths:
        report.warnings.append(f"{', '.join(patterns)} did not match any files.")
        return report

    logger.info(
        "promotion.start",
        extra=log_context(version=version, files=len(paths), checks=sorted(check.value for check in checks)),
    )

    promoted: list[tuple[Path, str]] = []
    for path in paths:
        display = path.as_posix()
        try:
            kind = classify_file(path)
            suggestion = rename_suggestion(path)
            if suggestion is not None:
                report.warnings.append(
                    f"{display} is not a supported filename and should be renamed to {suggestion}."
                )
            text = read_text_file(root / path)
            promoted.append((path, promote_text(kind, text, release, checks)))
        except FileAccessError as exc:
            report.errors.append(str(exc))
            logger.warning("promotion.file.failed", extra=log_context(path=path, error=str(exc)))
        except ReleasePrepError as exc:
            report.errors.append(f"{display} {exc}.")
            logger.warning("promotion.file.failed", extra=log_context(path=path, error=str(exc)))
        else:
            logger.info("promotion.file.promoted", extra=log_context(path=path, version=version, kind=kind.value))

    if report.errors:
        logger.info("promotion.aborted", extra=log_context(version=version, errors=len(report.errors)))
        return report

    for path, content in promoted:
        try:
            write_text_file(root / path, content)
        except FileAccessError as exc:
            report.errors.append(str(exc))
            logger.error("promotion.file.write_failed", extra=log_context(path=path, error=str(exc)))
            continue
        report.written_paths.append(path)

    logger.info(
        "promotion.complete",
        extra=log_context(version=version, written=len(report.written_paths)),
    )
    return report


__all__ = ["EXIT_FAILURE", "EXIT_SUCCESS", "PromotionReport", "promote_text", "run_promotion"]
