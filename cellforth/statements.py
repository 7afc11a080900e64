"""
statements.py — the AST.

One frozen dataclass per statement kind. A Program, and the body of a
function, IF branch or WHILE loop, is an ordered sequence of these.
Bodies are tuples and are shared, never copied, when a function runs.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class Declaration:
    name: str
    cells: int = 1


@dataclass(frozen=True)
class Function:
    name: str
    body: Tuple = ()


@dataclass(frozen=True)
class PushNumber:
    value: int


@dataclass(frozen=True)
class Call:
    name: str


@dataclass(frozen=True)
class Math:
    op: str


@dataclass(frozen=True)
class Compare:
    op: str


@dataclass(frozen=True)
class Drop:
    pass


@dataclass(frozen=True)
class Dup:
    pass


@dataclass(frozen=True)
class Swap:
    pass


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Get:
    pass


@dataclass(frozen=True)
class Store:
    pass


@dataclass(frozen=True)
class If:
    body: Tuple = ()
    else_body: Optional[Tuple] = None


@dataclass(frozen=True)
class While:
    body: Tuple = ()


@dataclass(frozen=True)
class Quit:
    pass


STATEMENT_TYPES = (
    Declaration, Function, PushNumber, Call, Math, Compare,
    Drop, Dup, Swap, Comment, Get, Store, If, While, Quit,
)
