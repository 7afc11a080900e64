"""Exceptions raised by the parser and the interpreter."""


class CellForthError(Exception):
    pass


class ParseError(CellForthError):
    """Raised on the first malformed construct; no AST is produced."""


class ExecutionError(CellForthError):
    """Raised when a statement's precondition fails at run time."""
