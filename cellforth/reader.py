"""
reader.py — token reader with pushback.

Every token pulled from the lexer is recorded in a fixed-size ring. The
parser can step the read cursor back over recorded tokens and read them
again; the lexer is never asked twice for the same token.
"""

from typing import Iterable, Iterator

from .lexer import EOF, Token

PUSHBACK_CAPACITY = 100


class PushbackOverflow(RuntimeError):
    pass


class PushbackReader:
    def __init__(self, tokens: Iterable[Token], capacity: int = PUSHBACK_CAPACITY):
        if capacity < 2:
            raise ValueError('capacity must be at least 2')
        self._tokens: Iterator[Token] = iter(tokens)
        self._buf: list = [None] * capacity
        self._latest = 0     # slot the next fresh token goes into
        self._actual = 0     # slot the next read comes from
        self._filled = 0     # recorded tokens, capped at capacity - 1

    def next(self) -> Token:
        cap = len(self._buf)
        if self._actual != self._latest:
            tok = self._buf[self._actual]
            self._actual = (self._actual + 1) % cap
            return tok

        tok = next(self._tokens, EOF)
        while tok.kind == 'WS':
            tok = next(self._tokens, EOF)

        self._buf[self._latest] = tok
        self._latest = (self._latest + 1) % cap
        self._actual = self._latest
        self._filled = min(self._filled + 1, cap - 1)
        return tok

    def pushback(self):
        cap = len(self._buf)
        pending = (self._latest - self._actual) % cap
        if pending >= self._filled:
            raise PushbackOverflow(f'cannot push back more than {self._filled} tokens')
        self._actual = (self._actual - 1) % cap
