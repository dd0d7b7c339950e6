"""GitHub Action entrypoint.

GitHub passes action inputs as ``INPUT_<NAME>`` environment variables with the
input name upper-cased and hyphens kept, e.g. ``INPUT_RELEASE-VERSION``. The
inputs are translated into ``release-prep`` arguments and the CLI runs with them.
"""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from release_prep.cli import main as cli_main

TRUTHY_INPUTS = frozenset({"true", "yes", "y", "on"})


def _input_alias(name: str) -> AliasChoices:
    env_name = f"INPUT_{name.upper()}"
    return AliasChoices(env_name, env_name.replace("-", "_"))


class ActionInputs(BaseSettings):
    """Action inputs loaded from INPUT_* env vars."""

    model_config = SettingsConfigDict(
        case_sensitive=False,
        extra="ignore",
        env_ignore_empty=True,
        enable_decoding=False,
        populate_by_name=True,
    )

    check_sequential_release: bool = Field(
        default=False,
        validation_alias=_input_alias("check-sequential-release"),
    )
    files: list[str] = Field(default_factory=list, validation_alias=_input_alias("files"))
    prerelease_files: list[str] = Field(
        default_factory=list,
        validation_alias=_input_alias("prerelease-files"),
    )
    release_files: list[str] = Field(
        default_factory=list,
        validation_alias=_input_alias("release-files"),
    )
    release_version: str | None = Field(
        default=None,
        validation_alias=_input_alias("release-version"),
    )

    @field_validator("check_sequential_release", mode="before")
    @classmethod
    def _parse_boolean(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() in TRUTHY_INPUTS
        return value

    @field_validator("files", "prerelease_files", "release_files", mode="before")
    @classmethod
    def _split_patterns(cls, value: object) -> object:
        if isinstance(value, str):
            return value.split()
        return value

    @field_validator("release_version", mode="before")
    @classmethod
    def _blank_to_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def to_args(self) -> list[str]:
        """Translate the inputs into ``release-prep`` command-line arguments."""

        args: list[str] = []
        if self.check_sequential_release:
            args.append("--check-sequential-release")
        for option, patterns in (
            ("--files", self.files),
            ("--prerelease-files", self.prerelease_files),
            ("--release-files", self.release_files),
        ):
            for pattern in patterns:
                args.extend((option, pattern))
        if self.release_version is not None:
            args.extend(("--release-version", self.release_version))
        return args


def main() -> None:
    """Entrypoint used by the ``release-prep-action`` console script."""
    cli_main(ActionInputs().to_args())


__all__ = ["ActionInputs", "main"]
