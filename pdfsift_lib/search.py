# --- pdfsift_lib/search.py ---
"""
pdfsift_lib/search.py: Keyword/regex matching over page text with context windows.
"""
import logging
import os
import re

from .errors import InvalidContextError, InvalidPatternError, InvalidTermsFileError, NoKeywordsError
from .models import Match
from .normalizer import paragraph_bounds

log_search = logging.getLogger("pdfsift.search")


class PatternMatcher:
    """
    Tests lines against a set of substrings or regular expressions.

    Args:
        keywords (list[str]): Terms or patterns; a line matches if any does.
        regex (bool): Compile the keywords as regular expressions.
        case_sensitive (bool): Disable case folding. Defaults to False.
    """

    def __init__(self, keywords, regex=False, case_sensitive=False):
        self.regex = regex
        self.case_sensitive = case_sensitive
        self.substrings, self.patterns = [], []
        if regex:
            flags = 0 if case_sensitive else re.IGNORECASE
            for kw in keywords:
                try:
                    self.patterns.append(re.compile(kw, flags))
                except re.error as e:
                    raise InvalidPatternError(kw, str(e)) from e
        else:
            self.substrings = list(keywords) if case_sensitive else [k.lower() for k in keywords]

    def matches(self, line) -> bool:
        if self.regex:
            return any(p.search(line) for p in self.patterns)
        haystack = line if self.case_sensitive else line.lower()
        return any(s in haystack for s in self.substrings)


def context_window(lines, index, context=0, block_context=False):
    """Returns the (before, after) context lists for the line at `index`.

    Block mode returns the whole surrounding paragraph and takes precedence
    over a fixed width.
    """
    if block_context:
        return paragraph_bounds(lines, index)
    if context < 0:
        raise InvalidContextError(context)
    if context == 0:
        return [], []
    before = lines[max(0, index - context) : index]
    after = lines[index + 1 : index + 1 + context]
    return before, after


def _split_terms(text):
    return text.replace("\n", ",").split(",")


def load_search_terms(cli_terms=None, terms_file=None) -> list[str]:
    """Collects terms from a terms file and the CLI, file terms first."""
    terms = []
    if terms_file:
        if not os.path.isfile(terms_file):
            raise InvalidTermsFileError(terms_file)
        try:
            with open(terms_file, "r", encoding="utf-8") as f:
                terms.extend(_split_terms(f.read()))
        except (OSError, UnicodeDecodeError) as e:
            raise InvalidTermsFileError(terms_file) from e
    for term in cli_terms or []:
        terms.extend(_split_terms(term))
    return [t.strip() for t in terms if t.strip()]


def build_keywords(terms, defaults=(), use_defaults=True) -> list[str]:
    """Merges loaded terms with the default list, dropping duplicates in order."""
    merged = list(terms) + (list(defaults) if use_defaults else [])
    keywords = list(dict.fromkeys(k for k in merged if k))
    if not keywords:
        raise NoKeywordsError()
    log_search.debug("Searching for %d keyword(s): %s", len(keywords), ", ".join(keywords))
    return keywords


class SearchSession:
    """
    Scans pages in order and accumulates Match records for the whole document.

    Args:
        matcher (PatternMatcher): The line matcher.
        context (int): Fixed number of context lines on each side.
        block_context (bool): Use the surrounding paragraph as context.
        max_matches (int | None): Stop the scan once this many matches exist.
        on_match (callable | None): Called with each Match as it is found.
    """

    def __init__(self, matcher, context=0, block_context=False, max_matches=None, on_match=None):
        if context < 0:
            raise InvalidContextError(context)
        self.matcher = matcher
        self.context = context
        self.block_context = block_context
        self.max_matches = max_matches
        self.on_match = on_match
        self.matches: list[Match] = []
        self.emitted = 0

    @property
    def exhausted(self) -> bool:
        return self.max_matches is not None and self.emitted >= self.max_matches

    def scan_page(self, page_number, text) -> bool:
        """Scans one page's raw text; returns False once the match cap is hit.

        Line numbers count only non-empty lines. Fixed-width context is taken
        from the non-empty lines; block context walks the page's lines with
        blanks kept so that a paragraph ends at the first blank line.
        """
        if self.exhausted:
            return False
        all_lines = [line.strip() for line in text.splitlines()]
        positions = [i for i, line in enumerate(all_lines) if line]
        lines = [all_lines[i] for i in positions]

        for idx, line in enumerate(lines):
            if not self.matcher.matches(line):
                continue
            if self.block_context:
                before, after = context_window(all_lines, positions[idx], block_context=True)
            else:
                before, after = context_window(lines, idx, self.context)
            match = Match(page_number, idx + 1, line, before, after)
            self.matches.append(match)
            self.emitted += 1
            log_search.debug("Match on page %d line %d: %s", page_number, idx + 1, line)
            if self.on_match:
                self.on_match(match)
            if self.exhausted:
                log_search.info("Reached match cap of %d; stopping scan.", self.max_matches)
                return False
        return True

    def run(self, source, page_numbers) -> list[Match]:
        """Scans the given pages of a word source in ascending order."""
        for page_number in sorted(page_numbers):
            if self.exhausted:
                break
            text = source.page_text(page_number)
            if not text or not text.strip():
                log_search.debug("Page %d has no extractable text; skipping.", page_number)
                continue
            if not self.scan_page(page_number, text):
                break
        log_search.info("Search finished with %d match(es).", len(self.matches))
        return self.matches
