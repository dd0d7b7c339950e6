"""Command-line entrypoint for release-prep.

Example::

    release-prep --release-version v1.2.0 \\
        --files "CHANGELOG.md" \\
        --release-files "package.json" \\
        --check-sequential-release
"""

from __future__ import annotations

from typing import Annotated

import typer
from pydantic import ValidationError

from release_prep import __version__
from release_prep.logging import setup_logging
from release_prep.models import Release, ReleaseCheck
from release_prep.program import PromotionReport, run_promotion
from release_prep.settings import Settings, get_settings
from release_prep.versions import SemanticVersion, extract_semantic_version

EXIT_USAGE = 2

app = typer.Typer(
    add_completion=False,
    help=(
        "Promote the Unreleased section of changelogs and the version of package "
        "manifests to a new release.\n\n"
        "Each file option takes whitespace-separated glob patterns and may be repeated."
    ),
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _usage_error(message: str) -> typer.Exit:
    typer.echo(f"error: {message}", err=True)
    return typer.Exit(code=EXIT_USAGE)


def split_patterns(values: list[str] | None) -> list[str]:
    """Flatten repeated option values holding whitespace-separated patterns."""

    return [pattern for value in values or [] for pattern in value.split()]


def select_patterns(
    version: SemanticVersion,
    *,
    files: list[str],
    release_files: list[str],
    prerelease_files: list[str],
) -> list[str]:
    """Return the patterns that apply to ``version``."""

    return [*files, *(prerelease_files if version.is_prerelease else release_files)]


def print_report(report: PromotionReport) -> None:
    for message in report.messages:
        typer.echo(message)
    for warning in report.warnings:
        typer.echo(f"warning: {warning}", err=True)
    for error in report.errors:
        typer.echo(f"error: {error}", err=True)


@app.command()
def promote(
    release_version: Annotated[
        str,
        typer.Option(
            "--release-version",
            help="Version to release, e.g. 1.2.0, v1.2.0-beta.1 or release/1.2.0+sha.",
            show_default=False,
        ),
    ],
    files: Annotated[
        list[str] | None,
        typer.Option("--files", help="Files to update in every release."),
    ] = None,
    release_files: Annotated[
        list[str] | None,
        typer.Option("--release-files", help="Files to update only in non-prereleases."),
    ] = None,
    prerelease_files: Annotated[
        list[str] | None,
        typer.Option("--prerelease-files", help="Files to update only in prereleases."),
    ] = None,
    check_sequential_release: Annotated[
        bool,
        typer.Option(
            "--check-sequential-release",
            help="Fail unless the release version directly follows the latest release.",
        ),
    ] = False,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Print the release-prep version and exit.",
        ),
    ] = False,
) -> None:
    """Promote matched files to the release version."""

    try:
        settings: Settings = get_settings()
    except ValidationError as exc:
        raise _usage_error(str(exc)) from exc
    setup_logging(settings)

    extracted = extract_semantic_version(release_version)
    if extracted is None:
        raise _usage_error(f"--release-version has an invalid value '{release_version}'.")

    if files is None and release_files is None and prerelease_files is None:
        raise _usage_error("--files, --release-files, or --prerelease-files is required.")

    release = Release.of(extracted, settings.effective_release_date())
    patterns = select_patterns(
        release.version,
        files=split_patterns(files),
        release_files=split_patterns(release_files),
        prerelease_files=split_patterns(prerelease_files),
    )
    checks = [ReleaseCheck.SEQUENTIAL] if check_sequential_release or settings.check_sequential_release else []

    report = run_promotion(patterns, release, checks, root=settings.root_dir)
    print_report(report)
    raise typer.Exit(code=report.exit_code)


def main(args: list[str] | None = None) -> None:
    """Entrypoint used by console scripts and ``python -m release_prep``."""
    app(args=args)


__all__ = ["app", "main", "print_report", "select_patterns", "split_patterns"]
