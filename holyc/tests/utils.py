"""
Utility functions shared across HolyC tests.
"""
from pathlib import Path
import sys

from holyc.interpreter import Interpreter
from holyc.lexer import tokenize
from holyc.parser import Parser

# Ensure the project root is on the Python path
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.append(str(PROJECT_ROOT))


def parse_source(source: str, tables=None):
    """
    Parse source code and return the AST.
    """
    tokens = tokenize(source)
    parser = Parser(tokens, tables, "<test>")
    return parser.parse()


def run_source(source: str, **hooks) -> str:
    """
    Run source code with fresh tables and return its output.
    """
    interpreter = Interpreter("<test>", **hooks)
    return interpreter.run(source)
