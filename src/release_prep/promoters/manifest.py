"""Promote the ``version`` field of a package manifest (``package.json``)."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ..errors import MissingVersionFieldError
from ..logging import log_context
from ..models import Release, ReleaseCheck
from ..versions import check_sequential_release, parse_semantic_version
from .layout import ensure_trailing_newline

logger = logging.getLogger(__name__)

_VERSION_FIELD_RE = re.compile(r'"version":(?P<spacing>\s*)"(?P<value>[^"]+)"')


def promote_manifest_version(
    original_text: str,
    new_release: Release,
    checks: Iterable[ReleaseCheck | str] = (),
) -> str:
    """Replace the first ``"version"`` value in ``original_text``.

    The manifest is treated as opaque text: only the value of the matched field
    changes and the document is given exactly one trailing newline. When the
    sequential check is requested the existing value is the sole prior release;
    an existing value that is not a semantic version skips the check.
    """

    match = _VERSION_FIELD_RE.search(original_text)
    if match is None:
        raise MissingVersionFieldError()

    existing = match.group("value")
    if ReleaseCheck.SEQUENTIAL in ReleaseCheck.collect(checks):
        current = parse_semantic_version(existing)
        if current is None:
            logger.debug(
                "manifest.sequential_check.skipped",
                extra=log_context(existing_version=existing),
            )
        else:
            check_sequential_release(new_release.version, [current])

    new_version = str(new_release.version)
    promoted = (
        original_text[: match.start("value")]
        + new_version
        + original_text[match.end("value") :]
    )
    logger.debug(
        "manifest.promoted",
        extra=log_context(version=new_version, previous_version=existing),
    )
    return ensure_trailing_newline(promoted)


__all__ = ["promote_manifest_version"]
