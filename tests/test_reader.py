"""Tests for the pushback reader."""

import pytest

from cellforth.lexer import Token, tokenize
from cellforth.reader import PushbackOverflow, PushbackReader


class CountingStream:
    def __init__(self, tokens):
        self._it = iter(tokens)
        self.pulled = 0

    def __iter__(self):
        return self

    def __next__(self):
        tok = next(self._it)
        self.pulled += 1
        return tok


class TestPushbackReader:

    def test_skips_whitespace(self):
        r = PushbackReader(tokenize('  1   2 '))
        assert r.next() == Token('NUMBER', '1')
        assert r.next() == Token('NUMBER', '2')
        assert r.next().kind == 'EOF'

    def test_eof_repeats(self):
        r = PushbackReader(tokenize(''))
        assert r.next().kind == 'EOF'
        assert r.next().kind == 'EOF'

    def test_two_token_pushback(self):
        r = PushbackReader(tokenize('a b c'))
        assert r.next().text == 'a'
        assert r.next().text == 'b'
        assert r.next().text == 'c'
        r.pushback()
        r.pushback()
        assert r.next().text == 'b'
        assert r.next().text == 'c'
        assert r.next().kind == 'EOF'

    def test_pushback_does_not_pull_again(self):
        stream = CountingStream(tokenize('1 2'))
        r = PushbackReader(stream)
        r.next()
        r.next()
        pulled = stream.pulled
        r.pushback()
        r.pushback()
        r.next()
        r.next()
        assert stream.pulled == pulled

    def test_pushback_past_start_fails(self):
        r = PushbackReader(tokenize('1'))
        r.next()
        r.pushback()
        with pytest.raises(PushbackOverflow):
            r.pushback()

    def test_pushback_limited_by_capacity(self):
        r = PushbackReader(tokenize('1 2 3 4 5'), capacity=3)
        for _ in range(5):
            r.next()
        r.pushback()
        r.pushback()
        with pytest.raises(PushbackOverflow):
            r.pushback()
        assert r.next().text == '4'
        assert r.next().text == '5'

    def test_ring_wraps(self):
        r = PushbackReader(tokenize('1 2 3 4 5 6 7'), capacity=3)
        seen = []
        for _ in range(7):
            seen.append(r.next().text)
            r.pushback()
            assert r.next().text == seen[-1]
        assert seen == ['1', '2', '3', '4', '5', '6', '7']

    def test_capacity_too_small(self):
        with pytest.raises(ValueError):
            PushbackReader([], capacity=1)
