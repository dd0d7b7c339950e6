"""Blank-line normalization applied to promoted documents."""

from __future__ import annotations

from .syntax import ChangelogSyntax


def normalize_layout(text: str, syntax: ChangelogSyntax) -> str:
    """Return ``text`` with the changelog's blank-line conventions applied.

    - runs of blank lines collapse to one blank line,
    - every section and subsection heading follows exactly one blank line,
    - a subsection heading directly under a section heading follows none,
    - the first reference link follows exactly one blank line and consecutive
      reference links follow none,
    - the document ends with exactly one newline.

    Blank lines at the start of the document collapse to one like any other
    run. Applying the function to its own output returns the output unchanged.
    """

    output: list[str] = []
    previous: str | None = None
    pending_blank = False

    for line in text.split("\n"):
        if line == "":
            pending_blank = True
            continue

        if previous is None:
            if pending_blank:
                output.append("")
            output.append(line)
        elif syntax.is_subsection_heading(line) and syntax.is_section_heading(previous):
            output.append(line)
        elif syntax.is_section_heading(line) or syntax.is_subsection_heading(line):
            output.extend(("", line))
        elif syntax.is_reference_line(line):
            if not syntax.is_reference_line(previous):
                output.append("")
            output.append(line)
        else:
            if pending_blank:
                output.append("")
            output.append(line)

        previous = line
        pending_blank = False

    return ensure_trailing_newline("\n".join(output))


def ensure_trailing_newline(text: str) -> str:
    """Replace any trailing newlines with exactly one."""

    return text.rstrip("\n") + "\n"


__all__ = ["ensure_trailing_newline", "normalize_layout"]
