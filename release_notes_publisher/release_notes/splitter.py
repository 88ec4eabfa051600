"""Splits a raw tracker response into one field per line."""

from collections.abc import Sequence

from ..utils.constants import FIELD_MARKERS


def split_on_markers(raw_text: str, markers: Sequence[str] = FIELD_MARKERS) -> str:
    """Re-flow raw text so that every marker occurrence starts a new line.

    The text is never parsed as JSON: at each step the earliest remaining
    marker is located, everything before it is kept as-is and a newline is
    placed in front of the marker.
    """
    pieces: list[str] = []
    emitted = False
    start = 0
    while start < len(raw_text):
        closest = len(raw_text)
        found: str | None = None
        for marker in markers:
            index = raw_text.find(marker, start)
            if index != -1 and index < closest:
                closest = index
                found = marker

        if found is None:
            pieces.append(raw_text[start:])
            break

        chunk = raw_text[start:closest]
        pieces.append(chunk)
        emitted = emitted or bool(chunk)
        if emitted:
            pieces.append("\n")
        pieces.append(found)
        emitted = True
        start = closest + len(found)

    return "".join(pieces)
