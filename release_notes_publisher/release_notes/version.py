"""Version resolution for release notes."""

from urllib.parse import quote

import structlog

from ..utils.constants import (
    RELEASE_NOTES_TOPIC_TEMPLATE,
    TOC_ELEMENT_TEMPLATE,
    WHATS_NEW_TOC_ANCHOR,
)
from .exceptions import MalformedVersionError
from .models import ReleaseIdentity, ReleaseType

logger = structlog.get_logger(__name__)

UNASSIGNED_BUILD_NUMBER = "0"


def _release_notes_toc_line(*components: str) -> str:
    topic = RELEASE_NOTES_TOPIC_TEMPLATE.format(slug="-".join(components))
    return TOC_ELEMENT_TEMPLATE.format(topic=topic)


def split_version_input(version_input: str) -> tuple[str, str | None]:
    """Split `"2025.03 (124153)"` into the short version and the build number."""
    parts = version_input.strip().split(" ")
    if len(parts) == 1:
        return parts[0], None
    if len(parts) == 2:
        return parts[0], parts[1].replace("(", "").replace(")", "")
    raise MalformedVersionError(version_input, "only 'xxxx.xx', 'xxxx.xx.x' and 'xxxx.xx.x (xxxxx)' formats are supported")


def classify_short_version(version_input: str, short_version: str) -> tuple[ReleaseType, str, str]:
    """Return the release type, TOC anchor line and TOC line to insert for a short version."""
    components = short_version.split(".")
    if not all(component.isascii() and component.isdigit() for component in components):
        raise MalformedVersionError(version_input, "version components must be numeric")

    if len(components) == 2:
        year, major = components
        return ReleaseType.MAJOR, WHATS_NEW_TOC_ANCHOR, _release_notes_toc_line(year, major)

    if len(components) == 3:
        year, major, minor = components
        minor_version = int(minor)
        if minor_version > 1:
            return (
                ReleaseType.BUGFIX,
                _release_notes_toc_line(year, major, str(minor_version - 1)),
                _release_notes_toc_line(year, major, str(minor_version)),
            )
        if minor_version == 1:
            return (
                ReleaseType.FIRST_BUGFIX,
                _release_notes_toc_line(year, major),
                _release_notes_toc_line(year, major, str(minor_version)),
            )
        raise MalformedVersionError(version_input, "bugfix number must be 1 or greater")

    raise MalformedVersionError(version_input, f"expected 2 or 3 version components, got {len(components)}")


def build_full_version(short_version: str, build_number: str) -> str:
    """Return the version as the tracker spells it: `2025.03` or `{2025.03 (124153)}`."""
    if build_number == UNASSIGNED_BUILD_NUMBER:
        return short_version
    return f"{{{short_version} ({build_number})}}"


def default_doc_file_name(short_version: str) -> str:
    """Return the default release notes article name for a short version."""
    return RELEASE_NOTES_TOPIC_TEMPLATE.format(slug=short_version.replace(".", "-"))


def resolve_release_identity(
    version_input: str,
    build_number: str | None = None,
    file_name: str | None = None,
) -> ReleaseIdentity:
    """Resolve a free-form version string into a ReleaseIdentity.

    Args:
        version_input: Version as entered, e.g. `2025.03`, `2025.03.2` or `2025.03 (124153)`
        build_number: Build number to use when the version string carries none
        file_name: Explicit release notes article name, overriding the default

    Returns:
        The resolved, immutable release identity

    Raises:
        MalformedVersionError: If the version cannot be classified
    """
    short_version, parsed_build_number = split_version_input(version_input)
    if parsed_build_number is None:
        parsed_build_number = build_number.strip() if build_number and build_number.strip() else UNASSIGNED_BUILD_NUMBER

    release_type, toc_anchor_line, toc_insert_line = classify_short_version(version_input, short_version)
    full_version = build_full_version(short_version, parsed_build_number)

    identity = ReleaseIdentity(
        raw_version_input=version_input,
        short_version=short_version,
        build_number=parsed_build_number,
        full_version=full_version,
        full_version_escaped=quote(full_version, safe=""),
        release_type=release_type,
        toc_anchor_line=toc_anchor_line,
        toc_insert_line=toc_insert_line,
        doc_file_name=file_name or default_doc_file_name(short_version),
    )
    logger.info(
        "Resolved release identity",
        short_version=identity.short_version,
        build_number=identity.build_number,
        release_type=identity.release_type.value,
        full_version=identity.full_version,
        doc_file_name=identity.doc_file_name,
    )
    return identity
