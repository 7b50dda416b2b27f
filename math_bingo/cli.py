from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from math_bingo.config import (
    DEFAULT_CONFIG,
    DEFAULT_OUTPUT_NAME,
    BingoConfig,
    default_data_path,
    default_font_path,
)
from math_bingo.core.output import save_pdf
from math_bingo.core.parser import read_pool_source


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="math-bingo",
        description="Generate printable bingo cards from a list of answers.",
    )
    parser.add_argument("rows", type=float, nargs="?", help="Rows per card (the last row holds the header)")
    parser.add_argument("cols", type=float, nargs="?", help="Columns per card")
    parser.add_argument("num_cards", type=float, nargs="?", help="Total number of cards")
    parser.add_argument("cards_per_page", type=float, nargs="?", help="Cards on each page")
    parser.add_argument("header", nargs="?", help="Header phrase spread over the last row")
    parser.add_argument(
        "--data",
        default=None,
        help="Path to the answers file (default: $MATH_BINGO_DATA or data.txt)",
    )
    parser.add_argument("--output", "-o", default=DEFAULT_OUTPUT_NAME, help="Output file name without .pdf")
    parser.add_argument("--copies", type=int, default=1, help="Write this many numbered copies of the PDF")
    parser.add_argument("--font", default=None, help="TrueType font file (default: $MATH_BINGO_FONT or Helvetica)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible cards")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress")
    return parser


def _config_from_args(args: argparse.Namespace) -> BingoConfig:
    positionals = (args.rows, args.cols, args.num_cards, args.cards_per_page, args.header)
    if all(value is None for value in positionals):
        return BingoConfig.from_values(
            rows=DEFAULT_CONFIG.rows,
            cols=DEFAULT_CONFIG.cols,
            num_cards=DEFAULT_CONFIG.num_cards,
            cards_per_page=DEFAULT_CONFIG.cards_per_page,
            header=DEFAULT_CONFIG.header,
            seed=args.seed,
        )

    base = BingoConfig()
    return BingoConfig.from_values(
        rows=base.rows if args.rows is None else args.rows,
        cols=base.cols if args.cols is None else args.cols,
        num_cards=base.num_cards if args.num_cards is None else args.num_cards,
        cards_per_page=base.cards_per_page if args.cards_per_page is None else args.cards_per_page,
        header=args.header,
        seed=args.seed,
    )


def main(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.copies <= 0:
        raise ValueError("--copies must be > 0")
    config = _config_from_args(args)
    data_path = Path(args.data).expanduser() if args.data else default_data_path()
    font_path = Path(args.font).expanduser() if args.font else default_font_path()
    logger.debug("Using %s with %s", data_path, config)

    # Heavy import deferred until the arguments are known to be valid.
    from math_bingo.core.pdf import render_bingo_pdf

    text = read_pool_source(data_path)
    pdf = render_bingo_pdf(text, config, font_path=font_path)
    paths = save_pdf(pdf, args.output, copies=args.copies)

    for path in paths:
        print(f"Wrote {path}")
    return 0


def run() -> None:
    try:
        raise SystemExit(main(sys.argv[1:]))
    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        raise SystemExit(130)
    except Exception as exc:
        msg = str(exc).rstrip() or repr(exc)
        if "\n" in msg:
            first, rest = msg.split("\n", 1)
            print(f"ERROR: {first}", file=sys.stderr)
            print(rest, file=sys.stderr)
        else:
            print(f"ERROR: {msg}", file=sys.stderr)
        raise SystemExit(2)


if __name__ == "__main__":
    run()
