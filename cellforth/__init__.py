"""
cellforth — a small stack language with cell-addressed variables.

  from cellforth import run
  run(': double 2 * ; 4 double')      # -> [8]

Source is tokenized, parsed into a list of statements and walked by the
Interpreter against a Machine (stack, variables, functions).
"""

from .errors import CellForthError, ExecutionError, ParseError
from .interpreter import Interpreter, run
from .machine import Machine
from .parser import Parser, parse

__version__ = '0.1.0'

__all__ = [
    'CellForthError', 'ExecutionError', 'ParseError',
    'Interpreter', 'Machine', 'Parser', 'parse', 'run',
]
