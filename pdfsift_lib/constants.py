# --- pdfsift_lib/constants.py ---
"""
pdfsift_lib/constants.py: Layout thresholds, output modes and keyword presets.
"""

# --- MODES ---
LAYOUT_PLAIN = "plain"
LAYOUT_SMART = "smart"
LAYOUT_COLUMNS = "columns"
LAYOUT_MODES = (LAYOUT_PLAIN, LAYOUT_SMART, LAYOUT_COLUMNS)

FORMAT_TEXT = "text"
FORMAT_MARKDOWN = "markdown"
FORMAT_JSON = "json"
VIEW_FORMATS = (FORMAT_TEXT, FORMAT_MARKDOWN)
SEARCH_FORMATS = (FORMAT_TEXT, FORMAT_MARKDOWN, FORMAT_JSON)

# --- COLUMN CLUSTERING (page units) ---
GUTTER_MEDIAN_FACTOR = 0.8
GUTTER_SPAN_FACTOR = 0.04
GUTTER_MIN = 24.0
GUTTER_MAX = 180.0
ROW_SORT_TOLERANCE = 1.0
LINE_Y_TOLERANCE = 3.0
LINE_GAP_LIMIT = 80.0
MIN_SYNTH_WORD_WIDTH = 10.0
CHAR_GAP_LIMIT = 1.0

# --- MARKDOWN HEURISTICS ---
HEADING_MAX_CHARS = 80
LABEL_MAX_WORDS = 8
BULLET_GLYPHS = ("•", "∙", "-", "–", "—")
CODE_CHARS = ("{", "}", "=", ";")

# --- PAGE CLEANING ---
COPYRIGHT_MARKERS = ("copyright", "©")
DEFAULT_PUBLISHERS = ("apple",)
PAGE_NUMBER_MAX_CHARS = 3

# --- SEARCH ---
DEFAULT_KEYWORDS = (
    "delete",
    "deleted",
    "undelete",
    "snapshot",
    "snapshots",
    "history",
    "historical",
    "previous",
    "checkpoint",
    "checkpoints",
    "transaction",
    "transactions",
    "rollback",
    "extent",
    "extents",
    "block",
    "journal",
    "object map",
)
NO_MATCHES_MARKDOWN = "_No matches found._"
