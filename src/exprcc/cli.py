"""Command-line front-end.

Usage:
    exprcc [--mode {x86,token,ast,dot,run}] [--overflow {error,wrap}]
           [--entry-point NAME] [--color | --no-color] [-v] EXPR

Modes:
    x86    Print the generated assembly (default)
    token  Print one line per token
    ast    Print the expression tree, one node per line
    dot    Print the expression tree as a Graphviz digraph
    run    Interpret the generated assembly and print its value
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from exprcc import __version__
from exprcc.analysis import dump_tokens, dump_tree, render_dot
from exprcc.environment import (
    CompileError,
    Environment,
    InternalCompilerError,
    MachineError,
)
from exprcc.machine import StackMachine

logger = logging.getLogger(__name__)

MODES = ("x86", "token", "ast", "dot", "run")

EXIT_OK = 0
EXIT_COMPILE_ERROR = 1
EXIT_INTERNAL_ERROR = 70


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprcc",
        description="Compile an arithmetic expression to x86-64 assembly.",
    )
    parser.add_argument("expression", metavar="EXPR", help="Input expression.")
    parser.add_argument("--mode", choices=MODES, default="x86")
    parser.add_argument("--overflow", choices=("error", "wrap"), default="error")
    parser.add_argument("--entry-point", default="main", help="Global label of the routine.")
    parser.add_argument("--color", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _emit(env: Environment, mode: str, source: str) -> str:
    if mode == "token":
        return dump_tokens(env.tokenize(source))
    if mode == "ast":
        return dump_tree(env.parse(source))
    if mode == "dot":
        return render_dot(env.parse(source)).rstrip("\n")
    assembly = env.compile(source)
    if mode == "run":
        return str(StackMachine(env.entry_point).run(assembly))
    return assembly.rstrip("\n")


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        env = Environment(
            overflow=args.overflow, entry_point=args.entry_point, colors=args.color
        )
    except ValueError as e:
        print(f"exprcc: {e}", file=sys.stderr)
        return EXIT_COMPILE_ERROR

    reporter = env.reporter()
    try:
        output = _emit(env, args.mode, args.expression)
    except InternalCompilerError as e:
        logger.debug("internal error", exc_info=True)
        print(e.format_compact(), file=sys.stderr)
        return EXIT_INTERNAL_ERROR
    except CompileError as e:
        reporter.report_error(e, args.expression)
        return EXIT_COMPILE_ERROR
    except MachineError as e:
        print(str(e), file=sys.stderr)
        return EXIT_COMPILE_ERROR

    print(output)
    return EXIT_OK
