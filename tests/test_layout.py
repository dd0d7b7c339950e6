from __future__ import annotations

import pytest

from release_prep.promoters import ensure_trailing_newline, normalize_layout, syntax_for
from release_prep.promoters.syntax import ASCIIDOC, MARKDOWN


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("", "\n"),
        ("line", "line\n"),
        ("line\n\n\n", "line\n"),
        ("\n\nline", "\nline\n"),
        ("\nline", "\nline\n"),
        ("\n\n\n", "\n"),
        ("a\n\n\n\nb", "a\n\nb\n"),
        ("a\nb", "a\nb\n"),
    ],
)
def test_blank_line_collapsing(text: str, expected: str) -> None:
    assert normalize_layout(text, MARKDOWN) == expected


def test_markdown_heading_spacing() -> None:
    text = "# Title\n## [Unreleased]\n\n\n### Added\n- item\n### Fixed\n- fix\n## [1.0.0] - 2024-01-31\n- old"

    assert normalize_layout(text, MARKDOWN) == (
        "# Title\n\n## [Unreleased]\n### Added\n- item\n\n### Fixed\n- fix\n\n## [1.0.0] - 2024-01-31\n- old\n"
    )


def test_asciidoc_heading_spacing() -> None:
    text = "= Title\n== Unreleased\n\n=== Added\n* item\n=== Fixed\n* fix\n== 1.0.0\n* old\n\n\n"

    assert normalize_layout(text, ASCIIDOC) == (
        "= Title\n\n== Unreleased\n=== Added\n* item\n\n=== Fixed\n* fix\n\n== 1.0.0\n* old\n"
    )


def test_reference_lines_are_grouped_after_one_blank_line() -> None:
    text = "- item\n[unreleased]: https://x/compare/v1.0.0...HEAD\n\n\n[1.0.0]: https://x/releases/tag/v1.0.0\n"

    assert normalize_layout(text, MARKDOWN) == (
        "- item\n\n[unreleased]: https://x/compare/v1.0.0...HEAD\n[1.0.0]: https://x/releases/tag/v1.0.0\n"
    )


def test_asciidoc_has_no_reference_lines() -> None:
    text = "* item\n[unreleased]: https://x\n\n\n[1.0.0]: https://y\n"

    assert normalize_layout(text, ASCIIDOC) == "* item\n[unreleased]: https://x\n\n[1.0.0]: https://y\n"


@pytest.mark.parametrize("dialect", ["markdown", "asciidoc"])
def test_normalize_layout_is_idempotent(dialect: str) -> None:
    syntax = syntax_for(dialect)
    text = (
        "\n\n# Title\n== x\n## [Unreleased]\n### Added\n\n\n- a\n=== Fixed\n"
        "[a]: https://a\n\n[b]: https://b\n\n\n"
    )

    once = normalize_layout(text, syntax)

    assert normalize_layout(once, syntax) == once


def test_ensure_trailing_newline() -> None:
    assert ensure_trailing_newline('{"version": "1.0.0"}') == '{"version": "1.0.0"}\n'
    assert ensure_trailing_newline('{}\n\n\n') == "{}\n"
