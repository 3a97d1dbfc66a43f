# --- pdfsift_lib/renderer.py ---
"""
pdfsift_lib/renderer.py: Output renderers for the text and search views.

This module contains:
- PageFormatter: Turns one page of a word source into plain or markdown text.
- TextMatchRenderer: Streams search matches as `C:`/`M:` prefixed lines.
- render_markdown_matches / render_json_matches: Deferred renderers for a
  complete match list.
"""
import json
import logging
import sys

from .cleaner import PageCleaner
from .columns import ColumnExtractor
from .constants import (
    DEFAULT_PUBLISHERS,
    FORMAT_JSON,
    FORMAT_MARKDOWN,
    FORMAT_TEXT,
    LAYOUT_COLUMNS,
    LAYOUT_PLAIN,
    NO_MATCHES_MARKDOWN,
)
from .markdown import Markdownifier
from .normalizer import collapse_dot_leaders, normalize_lines

log_render = logging.getLogger("pdfsift.render")


class PageFormatter:
    """
    Renders single pages through the layout, normalization and cleaning stages.

    Args:
        layout (str): One of 'plain', 'smart' or 'columns'.
        text_format (str): 'text' or 'markdown'.
        publishers (iterable): Publisher tokens used for footer removal.
    """

    def __init__(self, layout=LAYOUT_PLAIN, text_format=FORMAT_TEXT, publishers=DEFAULT_PUBLISHERS):
        self.layout = layout
        self.text_format = text_format
        self.column_extractor = ColumnExtractor()
        self.cleaner = PageCleaner(publishers)

    def raw_lines(self, source, page_number) -> list[str]:
        """Gets the page's lines in reading order for the configured layout."""
        if self.layout == LAYOUT_COLUMNS:
            words = source.page_words(page_number)
            if words:
                return self.column_extractor.extract_lines(words)
            log_render.debug("Page %d has no word geometry; using page text.", page_number)
        return (source.page_text(page_number) or "").splitlines()

    def format_lines(self, raw_lines, page_number, include_header) -> str:
        """Normalizes, cleans and renders already-extracted page lines."""
        normalized = normalize_lines(raw_lines, self.layout)
        collapsed = [collapse_dot_leaders(line) for line in normalized]
        cleaned = self.cleaner.clean(collapsed, page_number, include_header)

        if self.text_format == FORMAT_MARKDOWN:
            rendered = Markdownifier().render(cleaned)
        else:
            rendered = "\n".join(cleaned)

        if not include_header:
            return rendered
        if self.text_format == FORMAT_MARKDOWN:
            return f"## Page {page_number}\n\n{rendered}"
        return f"--- PAGE {page_number} ---\n{rendered}"

    def format_page(self, source, page_number, include_header=True) -> str:
        """Returns the rendered text of a single 1-based page."""
        log_render.debug("Formatting page %d (%s/%s).", page_number, self.layout, self.text_format)
        return self.format_lines(self.raw_lines(source, page_number), page_number, include_header)


class TextMatchRenderer:
    """Prints matches as they are discovered, one page header per page."""

    def __init__(self, headers=True, stream=None):
        self.headers = headers
        self.stream = stream or sys.stdout
        self._last_page = None

    def __call__(self, match):
        out = []
        if self.headers and match.page != self._last_page:
            out.append(f"--- PAGE {match.page} ---")
        self._last_page = match.page
        out.extend(f"C: {line}" for line in match.contextBefore)
        out.append(f"M: {match.text}")
        out.extend(f"C: {line}" for line in match.contextAfter)
        print("\n".join(out), file=self.stream, flush=True)


def render_markdown_matches(matches, context=0, headers=True, block_context=False) -> str:
    """Renders a full match list as markdown grouped by page."""
    if not matches:
        return NO_MATCHES_MARKDOWN
    show_context = context > 0 or block_context
    output, current_page = [], None
    for match in matches:
        if headers and match.page != current_page:
            current_page = match.page
            output.append(f"## Page {match.page}")
        output.append(f"- line {match.line}: {match.text}")
        if show_context:
            output.extend(f"  - before: {line.strip()}" for line in match.contextBefore)
            output.extend(f"  - after: {line.strip()}" for line in match.contextAfter)
    return "\n".join(output)


def render_json_matches(matches) -> str:
    """Dumps every Match record, including empty context arrays."""
    return json.dumps([m.to_dict() for m in matches], indent=2, ensure_ascii=False)


def render_matches(matches, output_format, context=0, headers=True, block_context=False) -> str:
    """Final, deferred rendering step; text output is streamed instead."""
    if output_format == FORMAT_JSON:
        return render_json_matches(matches)
    if output_format == FORMAT_MARKDOWN:
        return render_markdown_matches(matches, context, headers, block_context)
    return ""
