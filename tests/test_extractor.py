from unittest.mock import MagicMock

import pytest
from pdfminer.layout import LTAnno, LTChar, LTFigure, LTTextBoxHorizontal, LTTextLineHorizontal
from pdfminer.pdfparser import PDFSyntaxError

from pdfsift_lib.errors import UnreadableSourceError
from pdfsift_lib.extractor import PDFWordSource, find_elements_by_type, words_from_line
from pdfsift_lib.models import Rect
from pdfsift_lib.search import PatternMatcher, SearchSession


class FakePage:
    """Minimal stand-in for an LTPage: iterable, with an _objs list."""

    def __init__(self, objs):
        self._objs = objs

    def __iter__(self):
        return iter(self._objs)


def make_char(text, x0, x1, y0=700, y1=710):
    char = MagicMock(spec=LTChar)
    char.x0, char.x1, char.y0, char.y1 = x0, x1, y0, y1
    char.get_text.return_value = text
    return char


def make_line(chars, text="", bounds=(0, 100, 700, 710)):
    line = MagicMock(spec=LTTextLineHorizontal)
    line.__iter__.side_effect = lambda: iter(chars)
    line.get_text.return_value = text
    line.x0, line.x1, line.y0, line.y1 = bounds
    return line


def make_box(text):
    box = MagicMock(spec=LTTextBoxHorizontal)
    box.get_text.return_value = text
    return box


@pytest.fixture
def pdf_file(tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"%PDF-1.4\n%%EOF")
    return str(path)


@pytest.fixture
def three_pages(mocker):
    return mocker.patch(
        "pdfsift_lib.extractor.PDFPage.get_pages", return_value=iter([object()] * 3)
    )


# --- words_from_line ---
def test_words_split_on_spaces_and_gaps():
    chars = [
        make_char("A", 0, 5),
        make_char("B", 5, 10),
        make_char(" ", 10, 13),
        make_char("C", 13, 18),
        make_char("D", 25, 30, 698, 712),
    ]
    words = words_from_line(chars)
    assert [w.text for w in words] == ["AB", "C", "D"]
    assert words[0].bounds == Rect(0, 10, 700, 710)
    assert words[2].bounds == Rect(25, 30, 698, 712)


def test_words_ignore_non_char_objects():
    anno = MagicMock(spec=LTAnno)
    anno.get_text.return_value = " "
    chars = [make_char("o", 0, 4), anno, make_char("k", 4, 8)]
    assert [w.text for w in words_from_line(chars)] == ["ok"]


def test_find_elements_by_type_recurses():
    line = make_line([])
    figure = MagicMock(spec=LTFigure)
    figure._objs = [line]
    figure.__iter__.side_effect = lambda: iter([line])
    page = FakePage([figure, make_box("x")])
    assert find_elements_by_type(page, LTTextLineHorizontal) == [line]


# --- PDFWordSource ---
def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        PDFWordSource(str(tmp_path / "missing.pdf"))


def test_page_count(pdf_file, three_pages):
    assert PDFWordSource(pdf_file).page_count == 3


def test_unparseable_file(pdf_file, mocker):
    mocker.patch(
        "pdfsift_lib.extractor.PDFPage.get_pages", side_effect=PDFSyntaxError("No /Root object!")
    )
    with pytest.raises(UnreadableSourceError) as exc:
        PDFWordSource(pdf_file)
    assert "No /Root object!" in str(exc.value)


def test_page_text_joins_text_boxes(pdf_file, three_pages, mocker):
    page = FakePage(
        [make_box("Hello world\n"), MagicMock(spec=LTFigure), make_box("  \n"), make_box("Second\n")]
    )
    extract = mocker.patch(
        "pdfsift_lib.extractor.extract_pages", side_effect=lambda *a, **k: iter([page])
    )
    source = PDFWordSource(pdf_file)
    assert source.page_text(2) == "Hello world\n\nSecond\n"
    assert source.page_text(2) == "Hello world\n\nSecond\n"
    extract.assert_called_once()
    assert extract.call_args.kwargs["page_numbers"] == [1]


def test_out_of_range_page_is_empty(pdf_file, three_pages, mocker):
    extract = mocker.patch("pdfsift_lib.extractor.extract_pages")
    source = PDFWordSource(pdf_file)
    assert source.page_text(4) == ""
    assert source.page_words(0) == []
    extract.assert_not_called()


def test_page_words_from_chars(pdf_file, three_pages, mocker):
    line = make_line(
        [make_char("h", 10, 15), make_char("i", 15, 18), make_char("y", 40, 45)], text="hi y"
    )
    mocker.patch(
        "pdfsift_lib.extractor.extract_pages", side_effect=lambda *a, **k: iter([FakePage([line])])
    )
    words = PDFWordSource(pdf_file).page_words(1)
    assert [(w.text, w.bounds.min_x) for w in words] == [("hi", 10), ("y", 40)]


def test_page_words_synthesized_without_chars(pdf_file, three_pages, mocker):
    line = make_line([], text="alpha beta\n", bounds=(0, 100, 500, 510))
    mocker.patch(
        "pdfsift_lib.extractor.extract_pages", side_effect=lambda *a, **k: iter([FakePage([line])])
    )
    words = PDFWordSource(pdf_file).page_words(1)
    assert [w.text for w in words] == ["alpha", "beta"]
    assert words[0].bounds == Rect(0, 50, 500, 510)
    assert words[1].bounds == Rect(60, 100, 500, 510)


def test_only_the_last_page_layout_is_retained(pdf_file, mocker):
    mocker.patch(
        "pdfsift_lib.extractor.PDFPage.get_pages", return_value=iter([object()] * 50)
    )
    extract = mocker.patch(
        "pdfsift_lib.extractor.extract_pages",
        side_effect=lambda *a, **k: iter(
            [FakePage([make_box(f"page {k['page_numbers'][0]}\n")])]
        ),
    )
    source = PDFWordSource(pdf_file)
    session = SearchSession(PatternMatcher(["page"]))
    matches = session.run(source, range(1, 51))

    assert len(matches) == 50
    assert extract.call_count == 50
    assert list(source._layouts) == [50]
    assert source.page_text(50) == "page 49\n"
    assert extract.call_count == 50
