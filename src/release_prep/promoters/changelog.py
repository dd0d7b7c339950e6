"""Promote the Unreleased section of a Keep a Changelog document.

Promotion turns::

    ## [Unreleased](https://github.com/owner/repo/compare/v1.0.0...HEAD)

    - A new shower mode.

    ## [1.0.0](https://github.com/owner/repo/releases/tag/v1.0.0) - 2024-01-31

into::

    ## [Unreleased](https://github.com/owner/repo/compare/v1.1.0...HEAD)

    ## [1.1.0](https://github.com/owner/repo/compare/v1.0.0...v1.1.0) - 2024-03-01

    - A new shower mode.

    ## [1.0.0](https://github.com/owner/repo/releases/tag/v1.0.0) - 2024-01-31

Everything outside the Unreleased section (and the Markdown reference link for
it) is carried over untouched apart from blank-line normalization.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass

from ..errors import (
    EmptyUnreleasedSectionError,
    MissingRepositoryLinkError,
    MissingUnreleasedSectionError,
)
from ..logging import log_context
from ..models import ChangelogDialect, ChangelogSection, Release, ReleaseCheck
from ..versions import check_sequential_release, extract_semantic_version
from .layout import normalize_layout
from .syntax import ChangelogSyntax, syntax_for

logger = logging.getLogger(__name__)

_RELEASE_PATH_RE = re.compile(r"/(?:compare|releases/tag)/v\S+$", re.IGNORECASE)
_UNRELEASED_KEY = "unreleased"


@dataclass(frozen=True, slots=True)
class _UnreleasedSpan:
    start: int
    end: int
    link: str | None


def promote_changelog(
    dialect: ChangelogDialect | str,
    original_text: str,
    new_release: Release,
    checks: Iterable[ReleaseCheck | str] = (),
) -> str:
    """Return ``original_text`` with its Unreleased section promoted to ``new_release``.

    Raises a :class:`~release_prep.errors.PromotionError` subclass when the
    document has no Unreleased section, the section is empty, no repository link
    can be found, or a requested check fails.
    """

    syntax = syntax_for(dialect)
    lines = original_text.split("\n")

    references_start = _reference_block_start(lines, syntax)
    span = _find_unreleased_section(lines, syntax, references_start)
    if span is None:
        raise MissingUnreleasedSectionError()

    body = _strip_blank_edges(lines[span.start + 1 : span.end])
    if not "\n".join(body).strip():
        raise EmptyUnreleasedSectionError()

    reference_index = _find_unreleased_reference(lines, syntax, references_start)
    if reference_index is not None:
        link = syntax.reference_line.match(lines[reference_index]).group("url")
    else:
        link = span.link
    if link is None:
        raise MissingRepositoryLinkError()

    if ReleaseCheck.SEQUENTIAL in ReleaseCheck.collect(checks):
        check_sequential_release(new_release.version, list_release_versions(syntax.dialect, original_text))

    repository_url = _RELEASE_PATH_RE.sub("", link)
    new_version = str(new_release.version)
    unreleased = ChangelogSection(
        repository_url=repository_url,
        previous_version=new_version,
        release=None,
    )
    released = ChangelogSection(
        repository_url=repository_url,
        previous_version=_release_version_at(lines, span.end, syntax),
        release=new_release,
        body="\n".join(body),
    )

    reference_style = reference_index is not None
    replacement = [
        _render_heading(unreleased, syntax, reference_style),
        "",
        _render_heading(released, syntax, reference_style),
        released.body,
    ]
    promoted = [*lines[: span.start], *replacement, *lines[span.end :]]

    if reference_index is not None:
        # The reference block always follows the section, so its index shifts
        # by the change in section length.
        shifted = reference_index + len(replacement) - (span.end - span.start)
        promoted[shifted : shifted + 1] = [
            syntax.reference(_UNRELEASED_KEY, _section_url(unreleased, syntax)),
            syntax.reference(new_version, _section_url(released, syntax)),
        ]

    logger.debug(
        "changelog.promoted",
        extra=log_context(
            version=new_version,
            dialect=syntax.dialect.value,
            previous_version=released.previous_version,
            reference_links=reference_style,
        ),
    )
    return normalize_layout("\n".join(promoted), syntax)


def list_release_versions(dialect: ChangelogDialect | str, text: str) -> list[str]:
    """Versions of the released sections of ``text``, most recent first."""

    syntax = syntax_for(dialect)
    versions: list[str] = []
    for line in text.split("\n"):
        match = syntax.release_heading.match(line)
        if match is None:
            continue
        version = extract_semantic_version(match.group("version"))
        if version is not None:
            versions.append(version)
    return versions


def _reference_block_start(lines: list[str], syntax: ChangelogSyntax) -> int:
    """Index of the first line of the trailing reference link block, if any."""

    start = len(lines)
    if not syntax.supports_reference_links:
        return start
    for index in range(len(lines) - 1, -1, -1):
        line = lines[index]
        if not line.strip():
            continue
        if not syntax.is_reference_line(line):
            break
        start = index
    return start


def _find_unreleased_section(
    lines: list[str],
    syntax: ChangelogSyntax,
    limit: int,
) -> _UnreleasedSpan | None:
    for index in range(limit):
        match = syntax.unreleased_heading.match(lines[index])
        if match is None:
            continue
        end = next(
            (position for position in range(index + 1, limit) if syntax.is_section_heading(lines[position])),
            limit,
        )
        return _UnreleasedSpan(start=index, end=end, link=match.group("link"))
    return None


def _find_unreleased_reference(
    lines: list[str],
    syntax: ChangelogSyntax,
    references_start: int,
) -> int | None:
    if syntax.reference_line is None:
        return None
    for index in range(references_start, len(lines)):
        match = syntax.reference_line.match(lines[index])
        if match is not None and match.group("key").lower() == _UNRELEASED_KEY:
            return index
    return None


def _release_version_at(lines: list[str], index: int, syntax: ChangelogSyntax) -> str | None:
    if index >= len(lines):
        return None
    match = syntax.release_heading.match(lines[index])
    if match is None:
        return None
    token = match.group("version")
    return extract_semantic_version(token) or token


def _strip_blank_edges(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def _section_url(section: ChangelogSection, syntax: ChangelogSyntax) -> str:
    if section.repository_url is None:
        raise MissingRepositoryLinkError()
    if section.is_unreleased:
        return syntax.compare_url(section.repository_url, f"v{section.previous_version}", "HEAD")
    version = f"v{section.release.version}"
    if section.previous_version is None:
        return f"{section.repository_url}/releases/tag/{version}"
    return syntax.compare_url(section.repository_url, f"v{section.previous_version}", version)


def _render_heading(section: ChangelogSection, syntax: ChangelogSyntax, reference_style: bool) -> str:
    url = None if reference_style else _section_url(section, syntax)
    if section.is_unreleased:
        return syntax.heading("Unreleased", url)
    return f"{syntax.heading(str(section.release.version), url)} - {section.release.date_string}"


__all__ = ["list_release_versions", "promote_changelog"]
