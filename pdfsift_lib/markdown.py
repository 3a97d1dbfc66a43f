# --- pdfsift_lib/markdown.py ---
"""
pdfsift_lib/markdown.py: Contains the Markdownifier, a heuristic structural renderer.

Every line is classified by an ordered cascade of ASCII heuristics (blank,
existing markdown fence or pipe row, table row, heading, bullet, code,
plain) and rendered by a single switch that also tracks open code fences
and buffered table rows.
"""
import logging
import re

from .constants import (
    BULLET_GLYPHS,
    CODE_CHARS,
    HEADING_MAX_CHARS,
    LABEL_MAX_WORDS,
)

log_render = logging.getLogger("pdfsift.render")

# --- LINE KINDS ---
BLANK = "blank"
TABLE_ROW = "table_row"
HEADING = "heading"
BULLET = "bullet"
CODE = "code"
PLAIN = "plain"
FENCE_LINE = "fence"
PIPE_ROW = "pipe_row"

FENCE = "```"
_COLUMN_GAP = re.compile(r" {2,}")
_NUMBERED = re.compile(r"^\d+[.)]\s+")


def split_table_fields(trimmed):
    """Splits a line on runs of 2+ spaces; returns None unless 2+ fields result."""
    fields = [f.strip() for f in _COLUMN_GAP.split(trimmed)]
    fields = [f for f in fields if f]
    return fields if len(fields) >= 2 else None


def heading_case(text) -> str:
    """Lowercases the text, then capitalizes the first letter of each token."""
    return " ".join(tok[:1].upper() + tok[1:] for tok in text.lower().split(" ") if tok)


def detect_heading(trimmed):
    """Returns the heading text for all-caps lines or short 'Label:' lines."""
    if len(trimmed) > HEADING_MAX_CHARS:
        return None
    if not any(ch.isalpha() for ch in trimmed):
        return None
    is_all_caps = trimmed == trimmed.upper()
    is_label = trimmed.endswith(":") and len(trimmed.split()) <= LABEL_MAX_WORDS
    if not (is_all_caps or is_label):
        return None
    return heading_case(trimmed.rstrip(":"))


def detect_bullet(trimmed):
    """Returns the bullet content with its glyph or number marker removed."""
    for glyph in BULLET_GLYPHS:
        if trimmed.startswith(glyph + " "):
            return trimmed[len(glyph) + 1 :]
    m = _NUMBERED.match(trimmed)
    if m:
        return trimmed[m.end() :]
    return None


def is_code_line(line, trimmed):
    if line.startswith("    ") or line.startswith("\t"):
        return True
    return any(ch in trimmed for ch in CODE_CHARS)


def classify_line(line):
    """Classifies one line; returns a (kind, payload) pair.

    The payload is the field list for table rows, the rendered text for
    headings and bullets, and the trimmed text otherwise. Fence lines and
    pipe-delimited rows are already markdown and pass through unchanged.
    """
    trimmed = line.strip()
    if not trimmed:
        return BLANK, ""
    if trimmed == FENCE:
        return FENCE_LINE, trimmed
    if len(trimmed) > 1 and trimmed.startswith("|") and trimmed.endswith("|"):
        return PIPE_ROW, trimmed
    fields = split_table_fields(trimmed)
    if fields:
        return TABLE_ROW, fields
    heading = detect_heading(trimmed)
    if heading is not None:
        return HEADING, heading
    bullet = detect_bullet(trimmed)
    if bullet is not None:
        return BULLET, bullet
    if is_code_line(line, trimmed):
        return CODE, trimmed
    return PLAIN, trimmed


def _table_row(fields) -> str:
    return f"| {' | '.join(f.strip() for f in fields)} |"


class Markdownifier:
    """Renders normalized page lines as structured markdown."""

    def __init__(self):
        self._output = []
        self._in_code = False
        self._table = []
        self._verbatim = False

    def render(self, lines) -> str:
        """Renders the lines and returns a single markdown string."""
        self._output, self._in_code, self._table = [], False, []
        self._verbatim = False
        for line in lines:
            if self._verbatim:
                self._pass_fenced(line)
                continue
            kind, payload = classify_line(line)
            if kind == TABLE_ROW:
                self._table.append(payload)
                continue
            self._flush_table()

            if kind == FENCE_LINE:
                self._toggle_fence()
            elif kind == PIPE_ROW:
                self._close_code()
                self._output.append(payload)
            elif kind == BLANK:
                self._close_code()
                self._output.append("")
            elif kind == HEADING:
                self._close_code()
                self._output.append(f"### {payload}")
            elif kind == BULLET:
                self._close_code()
                self._output.append(f"- {payload}")
            elif kind == CODE:
                self._open_code()
                self._output.append(payload)
            else:
                self._close_code()
                self._output.append(payload)

        self._flush_table()
        self._close_code()
        return "\n".join(self._output)

    def _open_code(self):
        if not self._in_code:
            self._output.append(FENCE)
            self._in_code = True

    def _close_code(self):
        if self._in_code:
            self._output.append(FENCE)
            self._in_code = False
            self._verbatim = False

    def _toggle_fence(self):
        """An input fence closes an open block or opens a verbatim one."""
        if self._in_code:
            self._close_code()
            return
        self._output.append(FENCE)
        self._in_code = self._verbatim = True

    def _pass_fenced(self, line):
        if line.strip() == FENCE:
            self._close_code()
        else:
            self._output.append(line)

    def _flush_table(self):
        """Emits buffered rows as a pipe table, or as plain lines if too few."""
        if not self._table:
            return
        rows, self._table = self._table, []
        self._close_code()
        if len(rows) < 2:
            self._output.extend(" ".join(fields) for fields in rows)
            return
        log_render.debug("Rendering table with %d rows, %d columns.", len(rows), len(rows[0]))
        self._output.append(_table_row(rows[0]))
        self._output.append(_table_row(["---"] * len(rows[0])))
        self._output.extend(_table_row(fields) for fields in rows[1:])
