import argparse
import logging
import sys
from pathlib import Path

from .constants import DEFAULT_OUTPUT_PATH
from .errors import PDFBuildError
from .version import __version__
from .writer import create_pdf


log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="textpdf",
        description="Write a one-page PDF 1.4 document showing a line of text.",
        formatter_class=argparse.RawTextHelpFormatter,
        epilog="""
Examples:
  textpdf "Hello"                        # writes ./manual.pdf
  textpdf "Hello" -o out/hello.pdf
  echo "Hello" | textpdf --stdin
        """,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"textpdf {__version__}"
    )
    parser.add_argument(
        "text",
        nargs="?",
        default=None,
        help="Text to show on the page (ASCII only)",
    )
    parser.add_argument(
        "--stdin",
        action="store_true",
        help="Read the text from standard input instead",
    )
    parser.add_argument(
        "-o", "--output",
        default=DEFAULT_OUTPUT_PATH,
        help=f"Output PDF path (default: ./{DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging level (default: INFO)",
    )
    return parser


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        stream=sys.stdout,
    )
    # Keep reportlab quiet unless explicitly debugging.
    logging.getLogger("reportlab").setLevel(logging.WARNING)


def _read_text(args: argparse.Namespace, parser: argparse.ArgumentParser) -> str:
    if args.stdin:
        if args.text is not None:
            parser.error("pass TEXT or --stdin, not both")
        return sys.stdin.read().rstrip("\r\n")
    if args.text is None:
        parser.error("TEXT is required unless --stdin is given")
    return args.text


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    _configure_logging(args.log_level)
    text = _read_text(args, parser)

    try:
        create_pdf(text, Path(args.output))
    except PDFBuildError as exc:
        log.error("Error: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
