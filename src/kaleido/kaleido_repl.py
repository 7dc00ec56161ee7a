"""
Interactive read-parse-print loop for the Kaleido front-end.

Each entry is parsed into top-level units which are printed in the selected output
format. An entry keeps reading continuation lines (`... `) while its parentheses
are unbalanced. Errors are reported and the loop carries on with the next entry.

Commands:
    exit, quit      leave the REPL
    verbose-mode    toggle printing the token stream of each entry
"""

import io
import traceback

from kaleido.kaleido_errors import FrontendError
from kaleido.kaleido_lexer import Lexer, tokenize
from kaleido.kaleido_parser import Parser
from kaleido.kaleido_render import Renderer


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_entry() -> str | None:
    """Reads one entry, following continuation lines. Returns None on exit commands."""
    src_lines: list[str] = []
    depth = 0
    while True:
        prompt = ">>> " if not src_lines else "... "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        code = line.split("#", 1)[0]
        depth += code.count("(") - code.count(")")
        if depth <= 0:
            return "\n".join(src_lines).strip()


def eval_entry(src: str, fmt: str = "tree", verbose: bool = False) -> bool:
    """Parses and prints one entry. Returns False if an error was reported."""
    try:
        if verbose:
            print(f"[tokens] >>> {tokenize(src)}")
        units = Parser(Lexer.from_source(src)).parse()
    except FrontendError as err:
        print(f"[error] >>> {err}")
        return False
    if not units:
        return True
    try:
        print(Renderer(fmt).render(list(units)))
    except Exception:
        print_traceback()
        return False
    return True


def start_repl(fmt: str = "tree", verbose: bool = False) -> None:
    print(f"Kaleido REPL [format={fmt}]. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Kaleido REPL.")
                return
            if not src or src.startswith("#"):
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue
            eval_entry(src, fmt=fmt, verbose=verbose)
        except (KeyboardInterrupt, EOFError):
            print("\nExiting Kaleido REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
