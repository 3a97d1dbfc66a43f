# --- pdfsift_lib/api.py ---
"""
pdfsift_lib/api.py: High-level entry points for the text and search views.
"""
import logging

from .constants import (
    DEFAULT_KEYWORDS,
    DEFAULT_PUBLISHERS,
    FORMAT_TEXT,
    LAYOUT_PLAIN,
)
from .errors import InvalidContextError, InvalidPageSpecError
from .extractor import PDFWordSource
from .renderer import PageFormatter, TextMatchRenderer, render_matches
from .search import PatternMatcher, SearchSession, build_keywords, load_search_terms

log = logging.getLogger("pdfsift.api")


def parse_page_selection(pages_str, page_count) -> list[int]:
    """Parses a page selection string (e.g., '1,3,5-7') into sorted page numbers.

    An empty selection or 'all' selects every page. Pages beyond the
    document are dropped; a selection with nothing left is an error.
    """
    if not pages_str or pages_str.strip().lower() == "all":
        return list(range(1, page_count + 1))

    pages = set()
    for segment in pages_str.split(","):
        part = segment.strip()
        if not part:
            continue
        try:
            if "-" in part:
                s, e = (int(v) for v in part.split("-", 1))
                if s <= 0 or e < s:
                    raise ValueError(part)
                pages.update(range(s, e + 1))
            else:
                page = int(part)
                if page <= 0:
                    raise ValueError(part)
                pages.add(page)
        except ValueError as e:
            raise InvalidPageSpecError(pages_str, page_count) from e

    valid = sorted(p for p in pages if p <= page_count)
    if not valid:
        raise InvalidPageSpecError(pages_str, page_count)
    return valid


def format_pages(
    pdf_path,
    pages_str=None,
    layout=LAYOUT_PLAIN,
    text_format=FORMAT_TEXT,
    headers=True,
    publishers=DEFAULT_PUBLISHERS,
    source=None,
):
    """
    Renders the selected pages of a PDF. This is a generator function that
    yields one rendered string per page, in ascending page order.
    """
    source = source or PDFWordSource(pdf_path)
    page_numbers = parse_page_selection(pages_str, source.page_count)
    formatter = PageFormatter(layout, text_format, publishers)
    log.info("Formatting %d page(s) with layout '%s'.", len(page_numbers), layout)
    for page_number in page_numbers:
        yield formatter.format_page(source, page_number, include_header=headers)


def search_pdf(
    pdf_path,
    terms=None,
    terms_file=None,
    pages_str=None,
    regex=False,
    case_sensitive=False,
    context=0,
    block_context=False,
    output_format=FORMAT_TEXT,
    max_matches=None,
    use_defaults=True,
    default_keywords=DEFAULT_KEYWORDS,
    headers=True,
    stream=None,
    source=None,
):
    """
    Searches a PDF and renders the result.

    Text output is streamed to `stream` while the scan runs. Markdown and JSON
    output is rendered once the scan ends (or stops at `max_matches`) and is
    returned as a string.
    """
    source = source or PDFWordSource(pdf_path)
    page_numbers = parse_page_selection(pages_str, source.page_count)
    if context < 0:
        raise InvalidContextError(context)

    loaded = load_search_terms(terms, terms_file)
    keywords = build_keywords(loaded, default_keywords, use_defaults)
    matcher = PatternMatcher(keywords, regex=regex, case_sensitive=case_sensitive)

    on_match = TextMatchRenderer(headers, stream) if output_format == FORMAT_TEXT else None
    session = SearchSession(matcher, context, block_context, max_matches, on_match)
    matches = session.run(source, page_numbers)
    return render_matches(matches, output_format, context, headers, block_context)
