"""
machine.py — run-time state: evaluation stack, variables, functions.

Memory is one linear address space built by concatenating the cells of
every declared variable in declaration order. Addresses start at 0, are
handed out once and never reused. Variables and functions share a single
namespace.

Integers are 64-bit two's complement; arithmetic wraps.
"""

import logging
from dataclasses import dataclass, field

from .errors import ExecutionError

log = logging.getLogger(__name__)

INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


def wrap(n: int) -> int:
    n &= (1 << INT_BITS) - 1
    return n - (1 << INT_BITS) if n > INT_MAX else n


def trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return wrap(q if (a < 0) == (b < 0) else -q)


def trunc_mod(a: int, b: int) -> int:
    # sign follows the dividend
    r = abs(a) % abs(b)
    return -r if a < 0 else r


@dataclass
class Variable:
    """`size` cells, all 0 until written. Only written cells are stored."""
    name: str
    size: int
    data: dict = field(default_factory=dict)

    def read(self, idx: int) -> int:
        return self.data.get(idx, 0)

    def write(self, idx: int, value: int):
        self.data[idx] = value


class Machine:
    def __init__(self):
        self.stack:     list = []
        self.variables: list = []
        self.addresses: dict = {}
        self.functions: dict = {}
        self._next_addr = 0

    # ── Stack ─────────────────────────────────────────────────────────────────

    def need(self, n: int, message: str):
        if len(self.stack) < n:
            raise ExecutionError(message)

    def push(self, value: int):
        self.stack.append(wrap(value))

    def pop(self) -> int:
        return self.stack.pop()

    # ── Symbols ───────────────────────────────────────────────────────────────

    def declare_variable(self, name: str, cells: int = 1) -> int:
        if name in self.addresses:
            raise ExecutionError(f'cannot redeclare variable "{name}"')
        if name in self.functions:
            raise ExecutionError(
                f'cannot declare variable "{name}", function already exists with that name')

        addr = self._next_addr
        self.variables.append(Variable(name, cells))
        self.addresses[name] = addr
        self._next_addr += cells
        log.debug('variable %s: %d cell(s) at %d', name, cells, addr)
        return addr

    def declare_function(self, function):
        name = function.name
        if name in self.addresses:
            raise ExecutionError(
                f'cannot define function "{name}", variable with this name already exists')
        if name in self.functions:
            raise ExecutionError(f'cannot redefine function "{name}"')

        self.functions[name] = function
        log.debug('function %s: %d statement(s)', name, len(function.body))

    # ── Memory ────────────────────────────────────────────────────────────────

    def resolve_variable(self, addr: int):
        """Find the variable holding `addr`.

        Returns (variable, index of the cell within it).
        """
        base = 0
        for v in self.variables:
            if base <= addr < base + v.size:
                return v, addr - base
            base += v.size
        raise ExecutionError(f'could not resolve address {addr}')

    resolve_address = resolve_variable

    def fetch(self, addr: int) -> int:
        v, idx = self.resolve_variable(addr)
        return v.read(idx)

    def store(self, addr: int, value: int):
        v, idx = self.resolve_variable(addr)
        v.write(idx, value)
