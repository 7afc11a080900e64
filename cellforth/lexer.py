"""
lexer.py — turn source text into (kind, text) tokens.

Kinds are plain upper-case strings. Whitespace runs are kept as WS tokens;
it is the reader's job to skip them. The stream always ends with one EOF.
"""

from typing import Iterator, NamedTuple


class Token(NamedTuple):
    kind: str
    text: str


WHITESPACE = ' \t\r\n'
DIGITS = '0123456789'

KEYWORDS = {
    'VARIABLE': 'VARIABLE',
    'CELLS':    'CELLS',
    'IF':       'IF',
    'ELSE':     'ELSE',
    'THEN':     'THEN',
    'WHILE':    'WHILE',
    'REPEAT':   'REPEAT',
    'QUIT':     'QUIT',
    'MOD':      'MOD',
    'DROP':     'DROP',
    'DUP':      'DUP',
    'SWAP':     'SWAP',
}

SINGLE = {
    '+': 'PLUS',
    '*': 'MULTIPLY',
    '/': 'DIVIDE',
    ':': 'START_FUNC',
    ';': 'END_FUNC',
    '@': 'GET',
    '!': 'STORE',
    '=': 'EQ',
}

EOF = Token('EOF', '')


def _is_letter(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


def tokenize(src: str) -> Iterator[Token]:
    i, n = 0, len(src)
    while i < n:
        ch = src[i]

        if ch in WHITESPACE:
            j = i
            while j < n and src[j] in WHITESPACE:
                j += 1
            yield Token('WS', src[i:j])
            i = j
            continue

        # '-' only starts a number when a digit follows it directly
        if ch in DIGITS or (ch == '-' and i + 1 < n and src[i+1] in DIGITS):
            j = i + 1
            while j < n and src[j] in DIGITS:
                j += 1
            yield Token('NUMBER', src[i:j])
            i = j
            continue

        if ch == '-':
            yield Token('MINUS', ch)
            i += 1
            continue

        if _is_letter(ch):
            j = i + 1
            while j < n and (_is_letter(src[j]) or src[j] in DIGITS or src[j] == '_'):
                j += 1
            word = src[i:j]
            yield Token(KEYWORDS.get(word.upper(), 'IDENT'), word)
            i = j
            continue

        if ch == '(':
            j = src.find(')', i)
            j = (j + 1) if j >= 0 else n
            yield Token('COMMENT', src[i:j])
            i = j
            continue

        if ch in '<>':
            if src[i+1:i+2] == '=':
                yield Token('LTE' if ch == '<' else 'GTE', src[i:i+2])
                i += 2
            else:
                yield Token('LT' if ch == '<' else 'GT', ch)
                i += 1
            continue

        yield Token(SINGLE.get(ch, 'ILLEGAL'), ch)
        i += 1

    yield EOF
