# Monkey language package
# This package provides a lexer, parser and tree-walking evaluator for Monkey.
from .environment import Environment
from .errors import MonkeyError, ParseError
from .evaluator import Evaluator, evaluate, run_program
from .lexer import Lexer, tokenize
from .parser import Parser, parse_program

__all__ = [
    'Environment',
    'Evaluator',
    'Lexer',
    'MonkeyError',
    'ParseError',
    'Parser',
    'evaluate',
    'parse_program',
    'run_program',
    'tokenize',
]
