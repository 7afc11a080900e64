"""
parser.py — recursive-descent parser.

Grammar:

  Program      := { TopLevel } EOF
  TopLevel     := Common | VariableDecl | FunctionDecl
  VariableDecl := VARIABLE IDENT [ NUMBER CELLS ]
  FunctionDecl := ':' IDENT { Common } ';'
  Common       := NUMBER | IDENT | + - * / MOD | = < > <= >=
                | DROP | DUP | SWAP | ( comment ) | @ | !
                | If | While | QUIT
  If           := IF { Common } [ ELSE { Common } ] THEN
  While        := WHILE { Common } REPEAT

_common() reads one token. If the token starts a common statement the
statement is returned; otherwise the token is pushed back and None comes
out, so the enclosing construct can treat it as its own terminator.
"""

import logging

from . import statements as st
from .errors import ParseError
from .lexer import tokenize
from .machine import INT_MAX, INT_MIN
from .reader import PushbackReader

log = logging.getLogger(__name__)

MATH_TOKENS = {
    'PLUS': '+', 'MINUS': '-', 'MULTIPLY': '*', 'DIVIDE': '/', 'MOD': 'MOD',
}
COMPARE_TOKENS = {
    'EQ': '=', 'LT': '<', 'GT': '>', 'LTE': '<=', 'GTE': '>=',
}
SIMPLE = {
    'DROP':  st.Drop,
    'DUP':   st.Dup,
    'SWAP':  st.Swap,
    'GET':   st.Get,
    'STORE': st.Store,
    'QUIT':  st.Quit,
}


def parse_number(text: str) -> int:
    n = int(text, 10)
    if not INT_MIN <= n <= INT_MAX:
        raise ParseError(f'number out of range: {text}')
    return n


def parse(source: str) -> list:
    return Parser(source).parse()


class Parser:
    def __init__(self, source: str):
        self.r = PushbackReader(tokenize(source))

    def parse(self) -> list:
        prog = []
        while True:
            stmt = self._common()
            if stmt is not None:
                prog.append(stmt)
                continue

            kind, _ = self.r.next()
            if kind == 'EOF':
                log.debug('parsed %d top-level statements', len(prog))
                return prog
            elif kind == 'VARIABLE':
                prog.append(self._variable())
            elif kind == 'START_FUNC':
                prog.append(self._function())
            else:
                raise ParseError(f'found invalid token: {kind}')

    # ── Common statements ─────────────────────────────────────────────────────

    def _common(self):
        kind, text = self.r.next()

        if kind == 'NUMBER':
            return st.PushNumber(parse_number(text))
        if kind == 'IDENT':
            return st.Call(text)
        if kind in MATH_TOKENS:
            return st.Math(MATH_TOKENS[kind])
        if kind in COMPARE_TOKENS:
            return st.Compare(COMPARE_TOKENS[kind])
        if kind in SIMPLE:
            return SIMPLE[kind]()
        if kind == 'COMMENT':
            return st.Comment(text[1:-1])
        if kind == 'IF':
            return self._if()
        if kind == 'WHILE':
            return self._while()

        self.r.pushback()
        return None

    def _body(self, *terminators):
        """Collect common statements up to one of `terminators`.

        Returns (statements, terminator kind). Any other token is an error.
        """
        body = []
        while True:
            stmt = self._common()
            if stmt is not None:
                body.append(stmt)
                continue
            kind, _ = self.r.next()
            if kind not in terminators:
                raise ParseError(f'found invalid token: {kind}')
            return body, kind

    # ── Top-level only ────────────────────────────────────────────────────────

    def _variable(self) -> st.Declaration:
        kind, name = self.r.next()
        if kind != 'IDENT':
            raise ParseError('expected variable identifier')

        # two tokens of lookahead: NUMBER CELLS
        size_kind, size = self.r.next()
        cells_kind, _ = self.r.next()
        if size_kind == 'NUMBER' and cells_kind == 'CELLS':
            cells = parse_number(size)
            if cells <= 0:
                raise ParseError('array cannot have less than 1 cell')
            return st.Declaration(name, cells)

        self.r.pushback()
        self.r.pushback()
        return st.Declaration(name)

    def _function(self) -> st.Function:
        kind, name = self.r.next()
        if kind != 'IDENT':
            raise ParseError('expected function identifier')
        body, _ = self._body('END_FUNC')
        return st.Function(name, tuple(body))

    # ── Control flow ──────────────────────────────────────────────────────────

    def _if(self) -> st.If:
        body, end = self._body('ELSE', 'THEN')
        if end == 'THEN':
            return st.If(tuple(body))

        else_body, end = self._body('ELSE', 'THEN')
        if end == 'ELSE':
            raise ParseError('already in else')
        return st.If(tuple(body), tuple(else_body))

    def _while(self) -> st.While:
        body, _ = self._body('REPEAT')
        return st.While(tuple(body))
