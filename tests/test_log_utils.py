import logging

import pytest

from core.log_utils import ContextFilter, RichLogFormatter, setup_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    for name in ("source", "layout", "normalize", "render", "search", "config", "api"):
        logging.getLogger(f"pdfsift.{name}").setLevel(logging.NOTSET)


def make_record(name, msg, level=logging.INFO):
    return logging.LogRecord(name, level, __file__, 1, msg, None, None)


def test_formatter_prefixes_every_line():
    record = make_record("pdfsift.search", "first\nsecond")
    ContextFilter("search").filter(record)
    out = RichLogFormatter().format(record)
    assert out.splitlines() == [
        "INFO :search[search]: first",
        "INFO :search[search]: second",
    ]


def test_formatter_colors_levels():
    out = RichLogFormatter(use_color=True).format(make_record("pdfsift.api", "x", logging.ERROR))
    assert out.startswith(RichLogFormatter.LEVEL_COLORS[logging.ERROR])
    assert "\033[0m" in out


def test_setup_logging_enables_topic_prefixes(restore_logging, tmp_path):
    log_file = tmp_path / "run.log"
    enabled = setup_logging("pdfsift", debug_topics="se,lay", log_file=str(log_file))
    assert enabled == ["layout", "search"]
    assert logging.getLogger("pdfsift.search").level == logging.DEBUG
    assert logging.getLogger("pdfsift.render").level == logging.NOTSET
    assert logging.getLogger("pdfminer").level == logging.WARNING
    assert len(logging.getLogger().handlers) == 2


def test_setup_logging_all_topics(restore_logging):
    enabled = setup_logging("pdfsift", debug_topics="all")
    assert "normalize" in enabled and "source" in enabled
    assert setup_logging("pdfsift") == []
