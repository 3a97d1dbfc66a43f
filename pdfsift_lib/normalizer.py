# --- pdfsift_lib/normalizer.py ---
"""
pdfsift_lib/normalizer.py: Line-level text clean-up.

Merges hyphenated and soft-wrapped lines into paragraph lines, collapses
table-of-contents dot leaders and finds paragraph bounds around a line.
"""
import logging
import re

from .constants import LAYOUT_PLAIN

log_normalize = logging.getLogger("pdfsift.normalize")

_DOT_RUN = re.compile(r"\.{3,}")
_SPACED_DOT_RUN = re.compile(r"(\.\s+){3,}")
_LEADER_STRAY_DOT = re.compile(r" … \.")
_TRAILING_DOT = re.compile(r"\s+\.\s*$")
_MULTI_SPACE = re.compile(r" {2,}")
ELLIPSIS = " … "


def normalize_lines(lines, layout) -> list[str]:
    """Merges wrapped lines into paragraph lines unless the layout is plain.

    Blank lines are kept as paragraph separators. A line ending in "-" is
    joined directly with the next line when that line starts lowercase; a
    line followed by one indented by two or more spaces is joined to it with
    a single space.
    """
    lines = list(lines)
    if layout == LAYOUT_PLAIN:
        return lines

    result, idx, merges = [], 0, 0
    while idx < len(lines):
        line = lines[idx]
        if not line.strip():
            result.append(line)
            idx += 1
            continue

        if idx + 1 < len(lines):
            next_line = lines[idx + 1]
            next_trim = next_line.strip()
            if line.endswith("-") and next_trim[:1].islower():
                result.append(line[:-1] + next_trim)
                idx, merges = idx + 2, merges + 1
                continue
            if next_trim and next_line.startswith("  "):
                result.append(f"{line} {next_trim}")
                idx, merges = idx + 2, merges + 1
                continue

        result.append(line)
        idx += 1

    log_normalize.debug("Normalized %d lines into %d (%d merges).", len(lines), len(result), merges)
    return result


def collapse_dot_leaders(line) -> str:
    """Replaces dot leaders with a single ellipsis and tidies spacing."""
    text = _DOT_RUN.sub(ELLIPSIS, line)
    text = _SPACED_DOT_RUN.sub(ELLIPSIS, text)
    text = _LEADER_STRAY_DOT.sub(ELLIPSIS, text)
    text = _TRAILING_DOT.sub("", text)
    text = _MULTI_SPACE.sub(" ", text)
    return text.strip()


def paragraph_bounds(lines, index):
    """Returns the non-blank lines before and after `index` within its paragraph.

    The walk in each direction stops at the first blank line or at the page
    edge; the line at `index` is not part of either result.
    """
    before = []
    i = index - 1
    while i >= 0 and lines[i].strip():
        before.append(lines[i])
        i -= 1
    before.reverse()

    after = []
    j = index + 1
    while j < len(lines) and lines[j].strip():
        after.append(lines[j])
        j += 1
    return before, after
