import argparse
import json
import logging
import sys
from typing import NoReturn

import json_pretty_compact
from json_pretty_compact import (
    ConfigurationError,
    EolStyle,
    FormatterConfig,
    _get_version,
    dump,
    dumps,
)

logger = logging.getLogger(json_pretty_compact.__name__)


def command_line_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Format JSON keeping lists and dicts on one line where they fit",
    )
    parser.add_argument("-V", "--version", action="store_true")

    parser.add_argument(
        "--output",
        "-o",
        action="append",
        help="The output file name(s). The number of output file names must match "
        "the number of input files.",
    )
    parser.add_argument(
        "--crlf",
        default=False,
        action="store_true",
        help="Use Windows-style CRLF line endings",
    )
    parser.add_argument(
        "--debug",
        default=False,
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--east-asian-chars",
        default=False,
        action="store_true",
        help="Measure line widths using East Asian character widths",
    )
    parser.add_argument(
        "--indent",
        "-i",
        metavar="N",
        type=int,
        default=2,
        help="Indent N spaces (default=2)",
    )
    parser.add_argument(
        "--max-width",
        "-l",
        metavar="N",
        type=int,
        default=80,
        help="Keep a list or dict on one line if that line, including "
        "indentation and property name, is at most N chars (default=80)",
    )
    parser.add_argument(
        "--no-compact",
        default=False,
        action="store_true",
        help="Never keep a non-empty list or dict on one line",
    )
    parser.add_argument(
        "--no-ensure-ascii",
        default=False,
        action="store_true",
        help="Characters will be output as-is without ASCII conversion",
    )
    parser.add_argument(
        "--tab-indent",
        default=False,
        action="store_true",
        help="Use tabs to indent",
    )

    parser.add_argument(
        "json",
        nargs="*",
        type=argparse.FileType("r", encoding="utf-8"),
        help='JSON file(s) to parse (or stdin with "-")',
    )
    return parser


def main() -> None:
    parser = command_line_parser()

    def die(message: str) -> NoReturn:
        print(f"{parser.prog}: {message}", file=sys.stderr)
        sys.exit(1)

    args = parser.parse_args()
    if args.version:
        print(_get_version())
        return
    if len(args.json) == 0:
        parser.print_help()
        return

    hdlr = logging.StreamHandler()
    hdlr.setFormatter(logging.Formatter("%(levelname)s:%(name)s:%(message)s"))
    logger.addHandler(hdlr)
    if args.debug:
        logger.setLevel("DEBUG")
    else:
        logger.setLevel("ERROR")

    try:
        config = FormatterConfig(
            max_width=None if args.no_compact else args.max_width,
            eol_style=EolStyle.CRLF if args.crlf else EolStyle.LF,
            ensure_ascii=not args.no_ensure_ascii,
            east_asian_string_widths=args.east_asian_chars,
        )
        config = config.with_indent("\t" if args.tab_indent else args.indent)
    except ConfigurationError as e:
        die(str(e))

    in_files = args.json
    out_files = args.output

    if out_files is None:
        for fh in in_files:
            obj = json.load(fh)
            json_string = dumps(obj, config)
            print(json_string, end=config.eol)
        return

    if len(in_files) != len(out_files):
        die("the numbers of input and output file names do not match")

    for fn_in, fn_out in zip(in_files, out_files):
        obj = json.load(fn_in)
        dump(obj, fn_out, config)


if __name__ == "__main__":  # pragma: no cover
    # execute only if run as a script
    main()
