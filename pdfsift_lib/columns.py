# --- pdfsift_lib/columns.py ---
"""
pdfsift_lib/columns.py: Contains the ColumnExtractor for word-level layout analysis.

The extractor clusters positioned words into vertical bands (columns) by
looking for wide horizontal gutters, then orders each band top-to-bottom and
groups its words into text lines.
"""
import bisect
import functools
import logging
import statistics

from .constants import (
    GUTTER_MAX,
    GUTTER_MEDIAN_FACTOR,
    GUTTER_MIN,
    GUTTER_SPAN_FACTOR,
    LINE_GAP_LIMIT,
    LINE_Y_TOLERANCE,
    MIN_SYNTH_WORD_WIDTH,
    ROW_SORT_TOLERANCE,
)
from .models import PositionedWord, Rect

log_layout = logging.getLogger("pdfsift.layout")


def synthesize_words(text, bounds):
    """Builds approximate word boxes for a line that has no per-word geometry.

    Each token gets a width proportional to its length using the line's
    average character width; tokens that would start past the right edge of
    the line are dropped.
    """
    text = (text or "").strip()
    if not text:
        return []
    tokens = text.split(" ")
    if len(tokens) < 2:
        return [PositionedWord(text, bounds)]

    avg_char_w = bounds.width / max(len(text), 1)
    x, words = bounds.min_x, []
    for token in tokens:
        if not token:
            continue
        token_w = max(avg_char_w * len(token), MIN_SYNTH_WORD_WIDTH)
        rect = Rect(x, x + token_w, bounds.min_y, bounds.max_y)
        words.append(PositionedWord(token, rect))
        x += token_w + avg_char_w
        if x > bounds.max_x:
            break
    return words


def _reading_order_cmp(a, b):
    """Top-to-bottom, with words on (nearly) the same row ordered left-to-right."""
    if abs(a.bounds.min_y - b.bounds.min_y) < ROW_SORT_TOLERANCE:
        if a.bounds.min_x < b.bounds.min_x:
            return -1
        return 1 if a.bounds.min_x > b.bounds.min_x else 0
    return -1 if a.bounds.min_y > b.bounds.min_y else 1


class ColumnExtractor:
    """
    Orders the positioned words of a single page into reading-order lines.

    Args:
        min_gutter (float): Lower clamp for the gutter threshold.
        max_gutter (float): Upper clamp for the gutter threshold.
    """

    def __init__(self, min_gutter=GUTTER_MIN, max_gutter=GUTTER_MAX):
        self.min_gutter = min_gutter
        self.max_gutter = max_gutter

    def extract_lines(self, words) -> list[str]:
        """Returns the page's lines in global reading order."""
        words = list(words)
        if len(words) < 2:
            return [w.text for w in words]

        buckets = [self.sort_reading_order(b) for b in self.cluster_columns(words) if b]
        buckets.sort(key=lambda b: b[0].bounds.min_x)
        log_layout.debug("Detected %d column(s) from %d words.", len(buckets), len(words))

        lines = []
        for i, bucket in enumerate(buckets):
            col_lines = self.group_into_lines(bucket)
            log_layout.debug("  - Column %d: %d line(s).", i + 1, len(col_lines))
            lines.extend(col_lines)
        return lines

    def gutter_threshold(self, words):
        """Computes the minimum horizontal gap that separates two columns.

        Returns None when the words offer no positive start-x spacing, which
        means the page is treated as a single column.
        """
        starts = sorted({w.bounds.min_x for w in words})
        gaps = [b - a for a, b in zip(starts, starts[1:]) if b - a > 0]
        if not gaps:
            return None
        median_gap = statistics.median(gaps)
        if median_gap <= 0:
            return None

        span = max(w.bounds.max_x for w in words) - min(w.bounds.min_x for w in words)
        dynamic = median_gap * GUTTER_MEDIAN_FACTOR
        scaled = max(dynamic, span * GUTTER_SPAN_FACTOR) if span > 0 else dynamic
        threshold = max(self.min_gutter, min(scaled, self.max_gutter))
        log_layout.debug(
            "Gutter threshold: median=%.2f span=%.2f -> %.2f", median_gap, span, threshold
        )
        return threshold

    def find_splits(self, words, threshold):
        """Returns sorted x positions of the detected gutters.

        Words are scanned in ascending start-x order (stable, so words sharing
        a start-x keep their input order) and a split is recorded at the
        midpoint of every gap wider than the threshold.
        """
        ordered = sorted(words, key=lambda w: w.bounds.min_x)
        splits = []
        for prev, word in zip(ordered, ordered[1:]):
            gap = word.bounds.min_x - prev.bounds.max_x
            if gap > threshold:
                splits.append(prev.bounds.max_x + gap / 2)
        return sorted(splits)

    def cluster_columns(self, words):
        """Partitions words into column buckets, left to right."""
        threshold = self.gutter_threshold(words)
        if threshold is None:
            return [list(words)]
        splits = self.find_splits(words, threshold)
        if not splits:
            return [list(words)]

        buckets = [[] for _ in range(len(splits) + 1)]
        for word in words:
            buckets[bisect.bisect_left(splits, word.bounds.mid_x)].append(word)
        return buckets

    @staticmethod
    def sort_reading_order(words):
        """Sorts a bucket top-to-bottom, breaking same-row ties by x."""
        return sorted(words, key=functools.cmp_to_key(_reading_order_cmp))

    @staticmethod
    def group_into_lines(words) -> list[str]:
        """Groups reading-ordered words into space-joined lines."""
        lines = []
        for word in words:
            if not lines:
                lines.append([word])
                continue
            anchor = lines[-1][-1]
            same_row = abs(anchor.bounds.mid_y - word.bounds.mid_y) <= LINE_Y_TOLERANCE
            gap = word.bounds.min_x - anchor.bounds.max_x
            if same_row and gap <= LINE_GAP_LIMIT:
                lines[-1].append(word)
            else:
                lines.append([word])
        return [" ".join(w.text for w in line) for line in lines]
