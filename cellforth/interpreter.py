"""
interpreter.py — tree-walking execution engine.

Statements run one at a time against a Machine. Function calls are inline:
the body runs on the caller's stack and memory with no frame of its own.
Every precondition is checked before the statement touches any state; the
first failure aborts the run and leaves earlier effects in place.

Comments are inert except for debug directives:

  (debug stack [text])          log the whole stack
  (debug var <name> [text])     log the first cell of <name>

The body is split on single spaces, so the directive must start right
after the opening parenthesis: `( debug stack )` is an ordinary comment.

Directive output goes to the `cellforth.debug` logger at INFO level.
"""

import logging

from . import statements as st
from .errors import ExecutionError
from .machine import Machine, trunc_div, trunc_mod
from .parser import parse

log = logging.getLogger(__name__)
debug_log = logging.getLogger('cellforth.debug')


def _math(op: str, a: int, b: int) -> int:
    if op == '+':   return a + b
    if op == '-':   return a - b
    if op == '*':   return a * b
    if op == '/':
        if b == 0: raise ExecutionError('division by zero')
        return trunc_div(a, b)
    if op == 'MOD':
        if b == 0: raise ExecutionError('modulus by zero')
        return trunc_mod(a, b)
    raise ExecutionError(f'bad math operation: {op}')


def _compare(op: str, a: int, b: int) -> bool:
    if op == '=':   return a == b
    if op == '<':   return a < b
    if op == '>':   return a > b
    if op == '<=':  return a <= b
    if op == '>=':  return a >= b
    raise ExecutionError(f'bad compare operation: {op}')


class Interpreter:
    def __init__(self, machine: Machine = None):
        self.m = machine if machine is not None else Machine()

    def run(self, program) -> list:
        self._block(program)
        return self.m.stack

    def _block(self, body):
        for stmt in body:
            self.execute(stmt)

    # ── Dispatch ──────────────────────────────────────────────────────────────

    def execute(self, stmt):
        m = self.m

        if isinstance(stmt, st.PushNumber):
            m.push(stmt.value)

        elif isinstance(stmt, st.Call):
            self._call(stmt.name)

        elif isinstance(stmt, st.Math):
            m.need(2, 'cannot perform math operation, stack does not have 2 items')
            a, b = m.stack[-2], m.stack[-1]
            res = _math(stmt.op, a, b)
            del m.stack[-2:]
            m.push(res)

        elif isinstance(stmt, st.Compare):
            m.need(2, 'cannot perform compare operation, stack does not have 2 items')
            res = _compare(stmt.op, m.stack[-2], m.stack[-1])
            del m.stack[-2:]
            m.push(1 if res else 0)

        elif isinstance(stmt, st.Drop):
            m.need(1, 'cannot drop, stack empty')
            m.pop()

        elif isinstance(stmt, st.Dup):
            m.need(1, 'cannot dup, stack empty')
            m.push(m.stack[-1])

        elif isinstance(stmt, st.Swap):
            m.need(2, 'cannot perform swap operation, stack does not have 2 items')
            m.stack[-1], m.stack[-2] = m.stack[-2], m.stack[-1]

        elif isinstance(stmt, st.Get):
            m.need(1, 'cannot perform get operation, stack empty')
            m.stack[-1] = m.fetch(m.stack[-1])

        elif isinstance(stmt, st.Store):
            # ( value addr -- )
            m.need(2, 'cannot perform store operation, stack does not have 2 items')
            m.store(m.stack[-1], m.stack[-2])
            del m.stack[-2:]

        elif isinstance(stmt, st.If):
            m.need(1, 'cannot perform if, stack empty')
            if m.pop() != 0:
                self._block(stmt.body)
            elif stmt.else_body:
                self._block(stmt.else_body)

        elif isinstance(stmt, st.While):
            while True:
                m.need(1, 'cannot perform while, stack empty')
                if m.pop() == 0:
                    break
                self._block(stmt.body)

        elif isinstance(stmt, st.Declaration):
            m.declare_variable(stmt.name, stmt.cells)

        elif isinstance(stmt, st.Function):
            m.declare_function(stmt)

        elif isinstance(stmt, st.Comment):
            self._debug(stmt.text)

        elif isinstance(stmt, st.Quit):
            log.debug('QUIT has no effect; continuing')

        else:
            raise ExecutionError(f'bad statement: {stmt!r}')

    def _call(self, name: str):
        m = self.m
        if name in m.addresses:
            m.push(m.addresses[name])
        elif name in m.functions:
            self._block(m.functions[name].body)
        else:
            raise ExecutionError(f'cannot resolve identifier "{name}"')

    # ── Debug directives ──────────────────────────────────────────────────────

    def _debug(self, text: str):
        parts = text.split(' ')
        if len(parts) < 2 or parts[0] != 'debug':
            return

        m = self.m
        if parts[1] == 'stack':
            stack = '[' + ' '.join(str(x) for x in m.stack) + ']'
            debug_log.info(' '.join([stack] + parts[2:]))

        elif parts[1] == 'var':
            if len(parts) < 3:
                return
            name = parts[2]
            if name not in m.addresses:
                raise ExecutionError(f'invalid variable {name}')
            v, idx = m.resolve_address(m.addresses[name])
            debug_log.info(' '.join([v.name, str(v.read(idx))] + parts[3:]))


def run(source: str, machine: Machine = None) -> list:
    """Parse and execute `source`; return a copy of the final stack."""
    interp = Interpreter(machine)
    return list(interp.run(parse(source)))
