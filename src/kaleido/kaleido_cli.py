"""
Kaleido CLI Entrypoint.

This module provides the command-line interface for the Kaleido front-end. It reads
source text, parses it into top-level units and prints each unit in the selected
output format.

Features:
    - Read source from `.ks` files, from stdin (`-`), or from inline strings (`-s`).
    - Print units as an indented tree, as JSON, or re-rendered as Kaleido source.
    - Output to console or file.
    - Stop at the first error (default) or report it and skip to the next unit (`-k`).
    - Launch an interactive REPL with optional verbosity.

Example usage:
    kaleido program.ks
    kaleido -s "def foo(a b) a+b*2" -f json
    kaleido - -f source < program.ks
    kaleido --repl --verbose

Functions:
    run_kaleido(source: str, is_string: bool = False, fmt: str = "tree", out: str | None = None,
                keep_going: bool = False, pretty: bool = False) -> int:
        Runs lex → parse → render and returns the number of reported errors.

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or batch run).
"""

import argparse
import sys

from kaleido.kaleido_ast import TopLevelUnit
from kaleido.kaleido_errors import FrontendError
from kaleido.kaleido_lexer import Lexer
from kaleido.kaleido_parser import Parser
from kaleido.kaleido_render import OUTPUT_FORMATS, Renderer


def report_error(err: FrontendError) -> None:
    print(f"[error] >>> {err}", file=sys.stderr)


def parse_units(parser: Parser, keep_going: bool = False) -> tuple[list[TopLevelUnit], int]:
    """
    Drive `parser` over its whole input.

    Args:
        parser (Parser): The parser to drive.
        keep_going (bool): If True, report each error and resume at the next unit
            boundary; otherwise the first error is re-raised.

    Returns:
        tuple[list[TopLevelUnit], int]: The units parsed and the number of errors reported.
    """
    units: list[TopLevelUnit] = []
    errors = 0
    while True:
        try:
            unit = parser.parse_unit()
        except FrontendError as err:
            if not keep_going:
                raise
            report_error(err)
            errors += 1
            parser.synchronize()
            continue
        if unit is None:
            return units, errors
        units.append(unit)


def run_kaleido(
    source: str,
    is_string: bool = False,
    fmt: str = "tree",
    out: str | None = None,
    keep_going: bool = False,
    pretty: bool = False,
) -> int:
    """
    Run the Kaleido front-end: lex, parse, and print or write the rendered units.

    Args:
        source (str): Kaleido source code, a path to a `.ks` file, or "-" for stdin.
        is_string (bool): If True, treats `source` as raw code instead of a path. Defaults to False.
        fmt (str): Output format ('tree', 'json' or 'source'). Defaults to 'tree'.
        out (str | None): Optional path to write the rendered output. If None, prints to stdout.
        keep_going (bool): If True, skip past malformed units instead of stopping. Defaults to False.
        pretty (bool): If True, prints a banner around the output. Defaults to False.

    Returns:
        int: The number of errors reported. Without `keep_going` this is 0 or 1.

    Raises:
        ValueError: If `is_string` is False and the source is neither "-" nor a `.ks` path.
    """
    if not is_string and source != "-" and not source.endswith(".ks"):
        raise ValueError("Only .ks files are supported.")
    # 1. Read source
    if is_string:
        lexer = Lexer.from_source(source)
    elif source == "-":
        lexer = Lexer.from_source(sys.stdin)
    else:
        with open(source, "rb") as f:
            lexer = Lexer.from_source(f)

    # 2. Parsing
    parser = Parser(lexer)
    try:
        units, errors = parse_units(parser, keep_going=keep_going)
    except FrontendError as err:
        report_error(err)
        return 1

    # 3. Rendering
    code = Renderer(fmt).render(list(units))

    # 4. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(code + "\n")
        if pretty:
            print(f"(wrote {len(units)} units to {out})")
    elif pretty:
        banner = "=" * 20
        print(f"{banner}\nParsed {len(units)} units ({fmt})\n{banner}\n{code}\n{banner}")
    elif code:
        print(code)

    return errors


def main() -> None:
    """
    Entry point for the Kaleido CLI.

    Parses command-line arguments and dispatches to the appropriate mode:
    - Launches the REPL if no arguments are passed or `--repl` is specified.
    - Otherwise, runs the front-end over the given source and exits with status 1
      if any error was reported.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-f`, `--format`: Output format ('tree', 'json' or 'source'), default is 'tree'.
        - `-o`, `--out`: Write rendered output to a file.
        - `-k`, `--keep-going`: Report errors and continue with the next unit.
        - `-p`, `--pretty`: Show a banner around the output.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Enable verbose REPL mode.
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from kaleido.kaleido_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="kaleido")
    parser.add_argument(
        "source", nargs="?", help="Filename, '-' for stdin, or raw source (with -s)"
    )
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-f",
        "--format",
        dest="fmt",
        choices=OUTPUT_FORMATS,
        default="tree",
        help="Output format (default: tree)",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-k",
        "--keep-going",
        action="store_true",
        help="Report errors and resume at the next top-level unit",
    )
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing a source",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from kaleido.kaleido_repl import start_repl

        start_repl(fmt=args.fmt, verbose=args.verbose)
        return

    errors = run_kaleido(
        source=args.source,
        is_string=args.string,
        fmt=args.fmt,
        out=args.out,
        keep_going=args.keep_going,
        pretty=args.pretty,
    )
    if errors:
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
