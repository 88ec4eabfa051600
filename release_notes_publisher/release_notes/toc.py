"""Table of contents manipulation for release notes."""

from typing import NamedTuple

import structlog

from .exceptions import AnchorNotFoundError

logger = structlog.get_logger(__name__)


class TocUpdate(NamedTuple):
    """Table of contents text after an insertion attempt."""

    text: str
    modified: bool


def _line_ending(line: str) -> str:
    stripped = line.rstrip("\r\n")
    return line[len(stripped) :]


def insert_toc_entry(tree_text: str, anchor_line: str, new_line: str) -> TocUpdate:
    """Insert a line after every occurrence of an anchor line, unless already present.

    The inserted line takes the indentation of the anchor line. An occurrence
    already followed by the new line is left alone, so repeated runs are
    no-ops.

    Args:
        tree_text: Table of contents file content
        anchor_line: Text to look for in each trimmed line
        new_line: Line to insert after the anchor

    Returns:
        The updated text and whether anything was inserted

    Raises:
        AnchorNotFoundError: If no line contains the anchor
    """
    anchor = anchor_line.strip()
    entry = new_line.strip()
    lines = tree_text.splitlines(keepends=True)
    file_ending = next((_line_ending(line) for line in lines if _line_ending(line)), "\n")

    updated: list[str] = []
    found = False
    modified = False
    for index, line in enumerate(lines):
        if anchor not in line.strip():
            updated.append(line)
            continue

        found = True
        indentation = line[: len(line) - len(line.lstrip())]
        if index + 1 < len(lines) and lines[index + 1].strip() == entry:
            logger.info("Skipping insertion, entry already follows anchor", entry=entry, anchor=anchor, line_number=index + 1)
            updated.append(line)
            continue

        ending = _line_ending(line)
        if ending:
            updated.append(line)
            updated.append(f"{indentation}{entry}{ending}")
        else:
            # The anchor is the last line and has no line break.
            updated.append(f"{line}{file_ending}")
            updated.append(f"{indentation}{entry}")
        modified = True
        logger.info("Inserted entry after anchor", entry=entry, anchor=anchor, line_number=index + 1)

    if not found:
        logger.error("Anchor not found in table of contents", anchor=anchor)
        raise AnchorNotFoundError(anchor_line)

    if not modified:
        return TocUpdate(tree_text, False)
    return TocUpdate("".join(updated), True)
