import re

WHITESPACE = re.compile(r"\s+")
SENSE_MARKER = re.compile(r"^\s*\[(?:\*|\d[\w\s,.\-–]*)\]\s*")
SENSE_MARKERS = re.compile(r"\[(?:\*|\d[\w\s,.\-–]*)\]")


def shorten(value: str, length: int = 24, remove_chars: bool = True) -> str:
    if remove_chars:
        BROKEN_HYPERLINK = ["[", "]", "(", ")"]
        for char in BROKEN_HYPERLINK:
            value = value.replace(char, "")

    value = value.replace("\n", " ")

    if len(value) <= length:
        return value

    return value[: length - 2] + ".."


def collapse(value: str) -> str:
    """Collapse runs of whitespace (including non-breaking spaces) into one space."""

    return WHITESPACE.sub(" ", value.replace("\xa0", " ")).strip()


def strip_sense_marker(value: str) -> str:
    """Drop a leading sense reference such as ``[1]``, ``[2a]`` or ``[1, 3]``."""

    return SENSE_MARKER.sub("", value, count=1).strip()


def drop_sense_markers(value: str) -> str:
    """Remove every sense reference from ``value``, not only a leading one."""

    return collapse(SENSE_MARKERS.sub(" ", value))
