# --- pdfsift_lib/cleaner.py ---
"""
pdfsift_lib/cleaner.py: Removes running footers and bare folio lines from a page.
"""
import logging

from .constants import COPYRIGHT_MARKERS, DEFAULT_PUBLISHERS, PAGE_NUMBER_MAX_CHARS

log_layout = logging.getLogger("pdfsift.layout")


class PageCleaner:
    """
    Filters boilerplate lines out of a page's normalized lines.

    Args:
        publishers (iterable): Lowercase publisher tokens that, together with
            a copyright marker, identify a footer line.
    """

    def __init__(self, publishers=DEFAULT_PUBLISHERS):
        self.publishers = tuple(p.lower() for p in publishers if p)

    def clean(self, lines, page_number, include_header) -> list[str]:
        """Returns the lines that are neither footers nor bare page numbers."""
        kept = [
            line
            for line in lines
            if not self.is_footer(line)
            and not self.is_page_number_line(line, page_number, include_header)
        ]
        if len(kept) != len(lines):
            log_layout.debug(
                "Page %d: removed %d footer/folio line(s).", page_number, len(lines) - len(kept)
            )
        return kept

    def is_footer(self, line):
        lower = line.lower()
        has_marker = any(m in lower for m in COPYRIGHT_MARKERS)
        return has_marker and any(p in lower for p in self.publishers)

    @staticmethod
    def is_page_number_line(line, page_number, include_header):
        """True for a short standalone number equal to the page, when headers are off."""
        if include_header:
            return False
        trimmed = line.strip()
        if len(trimmed) > PAGE_NUMBER_MAX_CHARS:
            return False
        try:
            return int(trimmed) == page_number
        except ValueError:
            return False
