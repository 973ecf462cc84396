"""
HolyC command line host.

Workflow:
1. The source is read from the script named on the command line, from
   ``-e``, or line by line from the interactive prompt (REPL).
2. The Lexer tokenizes the source, awaiting ``#include`` fetches.
3. The Parser builds the AST, resolving every name as it goes.
4. The Interpreter walks the AST and streams its output to stdout.

Set ``HOLYCDEBUG`` in the environment to dump the tokens and AST of each run.


File: cli.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import argparse
import logging
import os
import subprocess
import sys
from typing import Optional

from termcolor import colored

from holyc.exceptions import HolyCError, ParseError, RuntimeFailure
from holyc.fetchers import FileFetcher
from holyc.interpreter import Interpreter

logger = logging.getLogger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the command line argument parser.
    """
    arg_parser = argparse.ArgumentParser(
        prog="holyc",
        description="HolyC Language Interpreter. Run with no arguments to enter interactive mode (REPL).",
    )
    arg_parser.add_argument("script", nargs="?", help="path to a HolyC source file to execute")
    arg_parser.add_argument("-e", "--execute", metavar="CODE", help="execute CODE instead of a file")
    arg_parser.add_argument("--node", action="store_true", help="execute js blocks with Node.js")
    arg_parser.add_argument("-v", "--verbose", action="count", default=0,
                            help="log pipeline activity (repeat for debug records)")
    return arg_parser


def write_output(text: str) -> None:
    """
    Stream interpreter output to stdout.
    """
    sys.stdout.write(text)
    sys.stdout.flush()


def run_node(code: str) -> str:
    """
    Execute the body of a ``js`` block with Node.js and return its stdout.
    """
    try:
        result = subprocess.run(["node", "-e", code], capture_output=True, text=True, check=False)
    except OSError as e:
        raise RuntimeFailure("node", reason="could not be started", detail=str(e)) from e
    if result.returncode != 0:
        logger.warning("node exited with status %d: %s", result.returncode, result.stderr.strip())
    return result.stdout


def print_error(error: HolyCError) -> None:
    """
    Print a pipeline error in red.
    """
    print(colored(str(error), "red"), file=sys.stderr)
    if error.detail:
        print(colored(f"  ({error.detail})", "red", attrs=["dark"]), file=sys.stderr)


def debug_print_tokens_ast(interpreter: Interpreter) -> None:
    """
    Print the tokens and AST of the most recent run.
    """
    print("\nTokens:\n")
    print(interpreter.tokens)
    print("\nAST:\n")
    print(interpreter.ast)
    print(" ")


def make_interpreter(file: str, base_dir: str, node: bool) -> Interpreter:
    """
    Build an interpreter wired to the terminal.
    """
    return Interpreter(
        file,
        fetch=FileFetcher(base_dir),
        js_executor=run_node if node else None,
        on_output=write_output,
    )


def run_source(source: str, file: str, base_dir: str, node: bool = False) -> int:
    """
    Run a complete source text and return the process exit status.
    """
    interpreter = make_interpreter(file, base_dir, node)
    try:
        interpreter.run(source)
    except HolyCError as e:
        print_error(e)
        return 1
    finally:
        if os.environ.get('HOLYCDEBUG'):
            debug_print_tokens_ast(interpreter)
    return 0


def run_script(script_name: str, node: bool = False) -> int:
    """
    Run a HolyC script file.
    """
    try:
        with open(script_name, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(colored(f"cannot read {script_name}: {e.strerror}", "red"), file=sys.stderr)
        return 1
    base_dir = os.path.dirname(os.path.abspath(script_name))
    return run_source(code, script_name, base_dir, node)


def run_repl(node: bool = False) -> None:
    """
    Run the interactive REPL.

    Each entry runs in idle mode, so declarations persist between entries.
    Input keeps buffering while the parser stops at the end of it.
    """
    print("HolyC Language Interpreter - REPL")
    print("Type `exit` or `quit` to leave.")
    interpreter = make_interpreter("<stdin>", os.getcwd(), node)
    buffer: list[str] = []
    while True:
        try:
            prompt = ">>> " if not buffer else "... "
            line = input(prompt)
            if not buffer and line.strip() in {"exit", "quit"}:
                break
            buffer.append(line)
            source = "\n".join(buffer)
            try:
                output = interpreter.run_idle(source)
                if output and not output.endswith("\n"):
                    print()
                buffer.clear()
            except ParseError as e:
                # Ran out of input: assume the entry is incomplete
                if e.token.kind == 'EOF':
                    continue
                print_error(e)
                buffer.clear()
            except HolyCError as e:
                print_error(e)
                buffer.clear()
            if os.environ.get('HOLYCDEBUG'):
                debug_print_tokens_ast(interpreter)
        except KeyboardInterrupt:
            print("\nInterrupted.")
            break
        except EOFError:
            print()
            break


def main(argv: Optional[list[str]] = None) -> int:
    """
    Entry point for the CLI.

    Behaviour:
    - No arguments: enter the REPL.
    - ``-e CODE``: run CODE.
    - A path: run the script at that path.
    """
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose > 1 else logging.INFO,
            format="%(levelname)s %(name)s: %(message)s",
        )

    if args.execute is not None:
        return run_source(args.execute, "<string>", os.getcwd(), args.node)
    if args.script is not None:
        return run_script(args.script, args.node)
    run_repl(args.node)
    return 0


if __name__ == "__main__":
    sys.exit(main())
