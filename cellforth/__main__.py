#!/usr/bin/env python3
"""
Run a cellforth program and print the final stack as JSON.

  cellforth program.cf
  cellforth < program.cf

On success the stack is written to stdout, bottom first, as one JSON
array. On failure a single diagnostic goes to stderr, nothing is written
to stdout and the exit status is 1.
"""

import argparse
import json
import logging
import sys
import threading

from .errors import CellForthError
from .interpreter import run

log = logging.getLogger('cellforth')

# Inline calls recurse through the tree-walker, about five frames each.
RECURSION_LIMIT = 200_000
THREAD_STACK_SIZE = 512 * 1024 * 1024


def _configure_logging(verbose: bool):
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter('%(message)s'))
    log.handlers[:] = [handler]
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.propagate = False


def run_deep(src: str) -> list:
    """run() on a worker thread with a large stack and recursion limit.

    Exceptions raised by the program are re-raised in the caller.
    """
    result = {}

    def target():
        try:
            result['stack'] = run(src)
        except Exception as e:
            result['error'] = e

    old_limit = sys.getrecursionlimit()
    old_size = threading.stack_size(THREAD_STACK_SIZE)
    sys.setrecursionlimit(RECURSION_LIMIT)
    try:
        t = threading.Thread(target=target, name='cellforth-run')
        t.start()
        t.join()
    finally:
        threading.stack_size(old_size)
        sys.setrecursionlimit(old_limit)

    if 'error' in result:
        raise result['error']
    return result['stack']


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(prog='cellforth', description=__doc__.strip().splitlines()[0])
    ap.add_argument('source', nargs='?', default='-',
                    help="program file; '-' or nothing reads stdin")
    ap.add_argument('-v', '--verbose', action='store_true', help='log declarations and parsing')
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.source == '-':
            src = sys.stdin.read()
        else:
            with open(args.source, encoding='utf-8') as f:
                src = f.read()
        stack = run_deep(src)
    except (OSError, CellForthError) as e:
        log.error('error: %s', e)
        return 1
    except RecursionError:
        log.error('error: recursion too deep')
        return 1

    sys.stdout.write(json.dumps(stack) + '\n')
    return 0


if __name__ == '__main__':
    sys.exit(main())
