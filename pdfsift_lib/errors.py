# --- pdfsift_lib/errors.py ---
"""
pdfsift_lib/errors.py: Exceptions raised by the pdfsift library.
"""


class PdfSiftError(Exception):
    """Base class for all reportable pdfsift errors."""


class InvalidPageSpecError(PdfSiftError):
    """A page selection resolved to an empty or out-of-bounds set."""

    def __init__(self, spec, max_page):
        self.spec, self.max_page = spec, max_page
        super().__init__(
            f'Invalid page list "{spec}". Pages must be between 1 and {max_page}.'
        )


class InvalidPatternError(PdfSiftError):
    """A regex-mode keyword failed to compile."""

    def __init__(self, keyword, reason=""):
        self.keyword = keyword
        detail = f" ({reason})" if reason else ""
        super().__init__(f'Invalid pattern "{keyword}"{detail}.')


class InvalidContextError(PdfSiftError):
    """A negative context width was requested."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Context must be zero or positive. Received {value}.")


class NoKeywordsError(PdfSiftError):
    """The effective keyword set is empty."""

    def __init__(self):
        super().__init__(
            "No keywords provided. Supply --term/--terms-file or keep the default list."
        )


class InvalidTermsFileError(PdfSiftError):
    """A search terms file is missing or cannot be read."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Unable to read search terms from {path}")


class UnreadableSourceError(PdfSiftError):
    """The document exists but could not be opened or parsed."""

    def __init__(self, path, reason=""):
        self.path = path
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to read PDF at {path}{detail}")
