import pytest

from pdfsift_lib.models import PositionedWord, Rect


def make_word(text, x, y, w=40, h=10):
    """Builds a PositionedWord whose box starts at (x, y)."""
    return PositionedWord(text, Rect(x, x + w, y, y + h))


class FakeSource:
    """In-memory word source that records which pages were read."""

    def __init__(self, texts=None, words=None):
        self.texts = texts or {}
        self.words = words or {}
        self.page_count = max(len(self.texts), len(self.words))
        self.text_requests = []

    def page_text(self, page_number):
        self.text_requests.append(page_number)
        return self.texts.get(page_number, "")

    def page_words(self, page_number):
        return self.words.get(page_number, [])


@pytest.fixture
def word():
    return make_word


@pytest.fixture
def fake_source():
    return FakeSource
