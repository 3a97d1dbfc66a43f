#!/usr/bin/env python3
"""
pdfsift: A terminal PDF reader for agents and humans.

This script streams page-delimited text from PDF files or searches it for
keywords and regular expressions. Page text is rebuilt from word geometry
(multi-column pages, wrapped paragraphs, dot leaders) so that line output is
predictable, and can be rendered as plain text or heuristic markdown.
"""

import argparse
import logging
import sys

# --- Dependency Imports ---
try:
    from rich.console import Console
    from rich.markdown import Markdown
    from rich.theme import Theme
except ImportError as e:
    print(f"Error: Missing required library. -> {e}")
    print("Please install all core dependencies with:")
    print("pip install pdfminer.six rich")
    sys.exit(1)

# --- Local Application Imports ---
from core.config_service import ConfigService
from core.log_utils import ContextFilter, setup_logging
from pdfsift_lib.api import format_pages, parse_page_selection, search_pdf
from pdfsift_lib.constants import (
    FORMAT_MARKDOWN,
    FORMAT_TEXT,
    LAYOUT_MODES,
    SEARCH_FORMATS,
    VIEW_FORMATS,
)
from pdfsift_lib.errors import PdfSiftError
from pdfsift_lib.extractor import PDFWordSource

# --- LOGGING SETUP ---
log = logging.getLogger("pdfsift")

COMMANDS = ("text", "search", "filter")


# --- CUSTOM ARGPARSE FORMATTER ---
class CustomHelpFormatter(
    argparse.ArgumentDefaultsHelpFormatter, argparse.RawTextHelpFormatter
):
    """
    A custom argparse formatter that combines showing default values with
    preserving newline formatting in help text.
    """

    pass


def _non_negative_int(value):
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be zero or positive, got {number}")
    return number


class Application:
    """Orchestrates the text and search workflows based on command-line arguments."""

    def __init__(self, args, stdout=None):
        self.args = args
        self.stdout = stdout or sys.stdout
        self.config = ConfigService(args.config)
        self.settings = None

    def run(self):
        """Main entry point for the application logic."""
        setup_logging(
            project_name="pdfsift",
            level=logging.INFO if self.args.verbose else logging.WARNING,
            color_logs=self.args.color_logs,
            debug_topics=self.args.debug_topics,
            log_file=self.args.log_file,
        )
        log_filter = ContextFilter(self.args.command)
        handlers = logging.getLogger().handlers
        for handler in handlers:
            handler.addFilter(log_filter)

        try:
            self.settings = self.config.get_settings()
            if self.args.save_config:
                self.config.save_settings(self.settings)

            if self.args.command == "text":
                self._run_text()
            else:
                self._run_search()
        finally:
            for handler in handlers:
                handler.removeFilter(log_filter)

    def _run_text(self):
        """Streams the selected pages as plain text or markdown."""
        view = self.settings["view"]
        layout = self.args.layout or view["layout"]
        text_format = self.args.format or view["format"]
        headers = view["headers"] if self.args.headers is None else self.args.headers

        source = PDFWordSource(self.args.pdf_file)
        parse_page_selection(self.args.pages, source.page_count)
        if self.args.show_count:
            self._emit(f"pageCount={source.page_count}")

        pages = format_pages(
            self.args.pdf_file,
            pages_str=self.args.pages,
            layout=layout,
            text_format=text_format,
            headers=headers,
            publishers=self.settings["cleaner"]["publishers"],
            source=source,
        )
        for body in pages:
            self._emit(body, as_markdown=text_format == FORMAT_MARKDOWN)

    def _run_search(self):
        """Runs a keyword search and prints deferred output if any."""
        search = self.settings["search"]
        output_format = self.args.format or search["format"]
        context = search["context"] if self.args.context is None else self.args.context

        rendered = search_pdf(
            self.args.pdf_file,
            terms=self.args.term,
            terms_file=self.args.terms_file,
            pages_str=self.args.pages,
            regex=self.args.regex,
            case_sensitive=self.args.case_sensitive,
            context=context,
            block_context=self.args.block_context,
            output_format=output_format,
            max_matches=self.args.max_matches,
            use_defaults=not self.args.no_defaults,
            default_keywords=search["default_keywords"],
            headers=self.args.headers is not False,
            stream=self.stdout,
        )
        if output_format != FORMAT_TEXT:
            self._emit(rendered, as_markdown=output_format == FORMAT_MARKDOWN)

    def _emit(self, text, as_markdown=False):
        """Writes rendered output, through rich when requested for markdown."""
        if as_markdown and self.args.rich:
            self._rich_console().print(Markdown(text))
        else:
            print(text, file=self.stdout)

    def _rich_console(self):
        custom_theme = Theme(
            {
                "markdown.h2": "bold sky_blue2",
                "markdown.h3": "bold sky_blue2",
                "markdown.code": "grey74",
                "markdown.item.bullet": "turquoise2",
                "markdown.text": "grey93",
            }
        )
        return Console(theme=custom_theme, file=self.stdout)

    @staticmethod
    def parse_arguments(args=None):
        """Parses command-line arguments for the script."""
        args = list(sys.argv[1:] if args is None else args)
        if args and args[0] not in COMMANDS and args[0] not in ("-h", "--help"):
            args.insert(0, "text")

        examples = [
            "\nExamples:",
            "  python pdfsift.py manual.pdf -p 1,4-6 --layout columns",
            "  python pdfsift.py text manual.pdf --format markdown --no-headers",
            '  python pdfsift.py search manual.pdf -t keybag --context 2 --no-defaults',
            "  python pdfsift.py search manual.pdf -t 'snap.*' --regex --format json",
        ]
        parser = argparse.ArgumentParser(
            description="A terminal PDF reader with page-delimited, line-stable output.",
            formatter_class=CustomHelpFormatter,
            epilog="\n".join(examples),
        )
        subparsers = parser.add_subparsers(dest="command", metavar="COMMAND", required=True)

        common = argparse.ArgumentParser(add_help=False)
        g_main = common.add_argument_group("Main Options")
        g_main.add_argument("pdf_file", help="Path to the input PDF file.")
        g_main.add_argument(
            "-p",
            "--pages",
            default=None,
            metavar="PAGES",
            help="Pages to include (e.g., '1,3,5-7'). (default: all)",
        )
        g_main.add_argument(
            "--headers",
            action=argparse.BooleanOptionalAction,
            default=None,
            help="Show a header before each page. (default: from config, on)",
        )
        g_main.add_argument(
            "--rich",
            action="store_true",
            help="Render markdown output in the terminal with rich.",
        )

        g_log = common.add_argument_group("Logging & Configuration")
        g_log.add_argument(
            "--config",
            metavar="FILE",
            default=None,
            help="Settings file. (default: $PDFSIFT_CONFIG or ~/.pdfsift.cfg)",
        )
        g_log.add_argument(
            "--save-config",
            action="store_true",
            help="Write the effective settings back to the config file.",
        )
        g_log.add_argument(
            "--log-file",
            metavar="FILE",
            default=None,
            help="Redirect all logging output to a specified file.",
        )
        g_log.add_argument(
            "--color-logs",
            action="store_true",
            help="Enable colored logging output.",
        )
        g_log.add_argument(
            "-v",
            "--verbose",
            action="store_true",
            help="Enable INFO logging for detailed progress.",
        )
        g_log.add_argument(
            "-d",
            "--debug",
            nargs="?",
            const="all",
            dest="debug_topics",
            metavar="TOPICS",
            help="Enable DEBUG logging (all,source,layout,normalize,render,search,config).",
        )

        p_text = subparsers.add_parser(
            "text",
            parents=[common],
            formatter_class=CustomHelpFormatter,
            help="Emit page text for all or selected pages.",
        )
        p_text.add_argument(
            "--format",
            choices=VIEW_FORMATS,
            default=None,
            help="Output format. (default: from config, text)",
        )
        p_text.add_argument(
            "--layout",
            choices=LAYOUT_MODES,
            default=None,
            help=(
                "Layout handling: plain keeps lines as extracted, smart joins\n"
                "wrapped lines/hyphens, columns rebuilds lines from word\n"
                "geometry. (default: from config, plain)"
            ),
        )
        p_text.add_argument(
            "--show-count",
            action="store_true",
            help="Print pageCount=<n> before content.",
        )

        p_search = subparsers.add_parser(
            "search",
            aliases=["filter"],
            parents=[common],
            formatter_class=CustomHelpFormatter,
            help="Search page text for terms or regex patterns.",
        )
        p_search.add_argument(
            "-t",
            "--term",
            action="extend",
            nargs="+",
            default=[],
            metavar="TERM",
            help="Search terms or patterns. Repeatable or comma-separated.",
        )
        p_search.add_argument(
            "--terms-file",
            metavar="FILE",
            default=None,
            help="File containing search terms (newline or comma separated).",
        )
        p_search.add_argument(
            "--regex", action="store_true", help="Treat search terms as regular expressions."
        )
        p_search.add_argument(
            "--case-sensitive",
            action="store_true",
            help="Match with case sensitivity (off by default).",
        )
        p_search.add_argument(
            "--context",
            type=int,
            default=None,
            metavar="N",
            help="Lines of context before and after each match. (default: from config, 0)",
        )
        p_search.add_argument(
            "--block-context",
            action="store_true",
            help="Emit the entire non-empty block surrounding each hit.",
        )
        p_search.add_argument(
            "--format",
            choices=SEARCH_FORMATS,
            default=None,
            help="Output format. (default: from config, text)",
        )
        p_search.add_argument(
            "--max-matches",
            type=_non_negative_int,
            default=None,
            metavar="N",
            help="Stop after emitting N matches.",
        )
        p_search.add_argument(
            "--no-defaults",
            action="store_true",
            help="Omit the built-in default keyword list.",
        )

        parsed = parser.parse_args(args)
        if parsed.command == "filter":
            parsed.command = "search"
        return parsed


def main():
    """Main entry point for the script."""
    # Basic logging config for early errors before full setup
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    try:
        args = Application.parse_arguments(sys.argv[1:])
        app = Application(args)
        app.run()
    except (PdfSiftError, FileNotFoundError) as e:
        log.critical(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        log.info("\nProcess interrupted by user. Exiting.")
        sys.exit(0)
    except Exception as e:
        log.critical("\nAn unexpected error occurred: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
