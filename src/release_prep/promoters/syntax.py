"""Surface syntax of the supported changelog dialects.

Both dialects follow the Keep a Changelog conventions and differ only in how
headings and links are written:

Markdown::

    ## [Unreleased](https://github.com/owner/repo/compare/v1.0.0...HEAD)
    ## [1.0.0](https://github.com/owner/repo/releases/tag/v1.0.0) - 2024-01-31

    or with reference links declared at the end of the document:

    ## [Unreleased]
    ## [1.0.0] - 2024-01-31

    [unreleased]: https://github.com/owner/repo/compare/v1.0.0...HEAD
    [1.0.0]: https://github.com/owner/repo/releases/tag/v1.0.0

AsciiDoc::

    == https://github.com/owner/repo/compare/v1.0.0\\...HEAD[Unreleased]
    == https://github.com/owner/repo/releases/tag/v1.0.0[1.0.0] - 2024-01-31
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..models import ChangelogDialect


@dataclass(frozen=True, slots=True)
class ChangelogSyntax:
    dialect: ChangelogDialect
    section_marker: str
    subsection_marker: str
    unreleased_heading: re.Pattern[str]
    release_heading: re.Pattern[str]
    compare_separator: str
    linked_heading: str
    reference_heading: str | None = None
    reference_definition: str | None = None
    reference_line: re.Pattern[str] | None = None

    @property
    def supports_reference_links(self) -> bool:
        return self.reference_line is not None

    def is_section_heading(self, line: str) -> bool:
        return line.startswith(self.section_marker)

    def is_subsection_heading(self, line: str) -> bool:
        return line.startswith(self.subsection_marker)

    def is_reference_line(self, line: str) -> bool:
        return self.reference_line is not None and self.reference_line.match(line) is not None

    def compare_url(self, repository_url: str, start: str, end: str) -> str:
        return f"{repository_url}/compare/{start}{self.compare_separator}{end}"

    def heading(self, label: str, url: str | None) -> str:
        if url is None:
            if self.reference_heading is None:
                raise ValueError(f"{self.dialect.value} headings require a link")
            return self.reference_heading.format(label=label)
        return self.linked_heading.format(label=label, url=url)

    def reference(self, key: str, url: str) -> str:
        if self.reference_definition is None:
            raise ValueError(f"{self.dialect.value} changelogs do not support reference links")
        return self.reference_definition.format(key=key, url=url)


MARKDOWN = ChangelogSyntax(
    dialect=ChangelogDialect.MARKDOWN,
    section_marker="## ",
    subsection_marker="### ",
    unreleased_heading=re.compile(
        r"^## (?:\[unreleased\](?:\((?P<link>\S+)\))?|unreleased)\s*$",
        re.IGNORECASE,
    ),
    release_heading=re.compile(r"^## \[(?P<version>[^\]\s]+)\]"),
    compare_separator="...",
    linked_heading="## [{label}]({url})",
    reference_heading="## [{label}]",
    reference_definition="[{key}]: {url}",
    reference_line=re.compile(r"^\[(?P<key>[^\]\s]+)\]: (?P<url>\S+)\s*$"),
)

ASCIIDOC = ChangelogSyntax(
    dialect=ChangelogDialect.ASCIIDOC,
    section_marker="== ",
    subsection_marker="=== ",
    unreleased_heading=re.compile(
        r"^== (?:(?P<link>\S+)\[unreleased\]|unreleased)\s*$",
        re.IGNORECASE,
    ),
    release_heading=re.compile(r"^== \S*?\[(?P<version>[^\[\]\s]+)\]"),
    compare_separator="\\...",
    linked_heading="== {url}[{label}]",
)

SYNTAXES: dict[ChangelogDialect, ChangelogSyntax] = {
    ChangelogDialect.MARKDOWN: MARKDOWN,
    ChangelogDialect.ASCIIDOC: ASCIIDOC,
}


def syntax_for(dialect: ChangelogDialect | str) -> ChangelogSyntax:
    return SYNTAXES[ChangelogDialect(dialect)]


__all__ = ["ASCIIDOC", "MARKDOWN", "SYNTAXES", "ChangelogSyntax", "syntax_for"]
