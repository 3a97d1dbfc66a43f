# --- pdfsift_lib/extractor.py ---
"""
pdfsift_lib/extractor.py: The word geometry provider backed by pdfminer.six.

PDFWordSource exposes a document page by page, either as flat reading-order
text or as a list of PositionedWord records in PDF user-space coordinates
(origin bottom-left, y growing upward).
"""
import logging
import os

from pdfminer.high_level import extract_pages
from pdfminer.layout import LAParams, LTChar, LTTextContainer, LTTextLine
from pdfminer.pdfpage import PDFPage
from pdfminer.psparser import PSException

from .columns import synthesize_words
from .constants import CHAR_GAP_LIMIT
from .errors import UnreadableSourceError
from .models import PositionedWord, Rect

log_source = logging.getLogger("pdfsift.source")


def find_elements_by_type(obj, t):
    """Recursively finds all layout elements of a specific type."""
    e = []
    if isinstance(obj, t):
        e.append(obj)
    if hasattr(obj, "_objs"):
        for child in obj:
            e.extend(find_elements_by_type(child, t))
    return e


def words_from_line(line) -> list[PositionedWord]:
    """Extracts individual words (and their boxes) from an LTTextLine.

    A word ends at a whitespace character or at a horizontal gap wider than
    CHAR_GAP_LIMIT between consecutive characters.
    """
    words, chars = [], []

    def flush():
        if chars:
            rect = Rect(
                min(c.x0 for c in chars),
                max(c.x1 for c in chars),
                min(c.y0 for c in chars),
                max(c.y1 for c in chars),
            )
            words.append(PositionedWord("".join(c.get_text() for c in chars), rect))
            chars.clear()

    for char in line:
        if not isinstance(char, LTChar):
            continue
        if not char.get_text().strip():
            flush()
            continue
        if chars and char.x0 - chars[-1].x1 > CHAR_GAP_LIMIT:
            flush()
        chars.append(char)
    flush()
    return words


class PDFWordSource:
    """
    Reads text and word geometry from a PDF file, one page at a time.

    Args:
        pdf_path (str): The file path to the PDF.
        laparams (LAParams): Optional pdfminer layout parameters.
    """

    def __init__(self, pdf_path, laparams=None):
        self.pdf_path = pdf_path
        self.laparams = laparams or LAParams()
        self._layouts = {}
        if not os.path.exists(self.pdf_path):
            raise FileNotFoundError(f"PDF file not found: {self.pdf_path}")
        self.page_count = self._count_pages()
        log_source.info("Opened '%s' (%d pages).", self.pdf_path, self.page_count)

    def _count_pages(self):
        try:
            with open(self.pdf_path, "rb") as fp:
                return sum(1 for _ in PDFPage.get_pages(fp))
        except PSException as e:
            raise UnreadableSourceError(self.pdf_path, str(e)) from e
        except OSError as e:
            raise UnreadableSourceError(self.pdf_path, e.strerror or str(e)) from e

    def _page_layout(self, page_number):
        """Returns the LTPage for a 1-based page number, or None.

        Only the last parsed page stays cached, so text and words of the same
        page share one parse without holding the whole document in memory.
        """
        if page_number not in self._layouts:
            if not 1 <= page_number <= self.page_count:
                return None
            log_source.debug("Parsing layout of page %d.", page_number)
            try:
                pages = extract_pages(
                    self.pdf_path, page_numbers=[page_number - 1], laparams=self.laparams
                )
                self._layouts = {page_number: next(iter(pages), None)}
            except PSException as e:
                raise UnreadableSourceError(self.pdf_path, str(e)) from e
        return self._layouts[page_number]

    def page_text(self, page_number) -> str:
        """Returns the page's text boxes in reading order, separated by blank lines."""
        layout = self._page_layout(page_number)
        if layout is None:
            return ""
        boxes = [el.get_text() for el in layout if isinstance(el, LTTextContainer)]
        return "\n".join(box for box in boxes if box.strip())

    def page_words(self, page_number) -> list[PositionedWord]:
        """Returns every word on the page with its bounding box."""
        layout = self._page_layout(page_number)
        if layout is None:
            return []
        words = []
        for line in find_elements_by_type(layout, LTTextLine):
            line_words = words_from_line(line)
            if not line_words and line.get_text().strip():
                bounds = Rect(line.x0, line.x1, line.y0, line.y1)
                line_words = synthesize_words(line.get_text(), bounds)
            words.extend(line_words)
        log_source.debug("Page %d: %d positioned words.", page_number, len(words))
        return words
