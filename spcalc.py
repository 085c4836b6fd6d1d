#!/usr/bin/env python
"""The main calculator command-line interface"""

BANNER = """
Enter an expression to be evaluated!
Valid operators are + - * /
Valid operands are integers or floating point numbers.
Operands and operators must be space-separated.
Type quit and hit enter when you are finished.
"""

PROMPT = 'Input expression: '
QUIT_COMMAND = 'quit'

import sys
import logging
import argparse

def stderr(*args):
    # look sys.stderr up on every call so redirection is honoured
    print(*args, file=sys.stderr)

import spcalclib

def build_parser():
    parser = argparse.ArgumentParser(
        prog='spcalc',
        description="Evaluate space-separated arithmetic expressions")
    parser.add_argument(
        'expression',
        nargs='*',
        help="Expression to evaluate once, e.g. 2 + 3 '*' 4 (omit for a prompt)")
    parser.add_argument(
        '-d', '--debug',
        help="Log each step of the evaluation",
        action='store_true')
    parser.add_argument(
        '-q', '--quiet',
        help="Don't print the banner",
        action='store_true')
    return parser

def run_once(expr):
    try:
        res = spcalclib.evaluate(expr)
    except spcalclib.CalcError as ex:
        stderr('error:', ex)
        return 1
    print(spcalclib.format_result(res))
    return 0

def repl(quiet=False):
    if not quiet:
        stderr(BANNER)
    try:
        while True:
            line = input(PROMPT)
            if line == QUIT_COMMAND:
                break
            expr = line.strip()
            if not expr:
                continue
            try:
                res = spcalclib.evaluate(expr)
            except spcalclib.CalcError as ex:
                stderr('error:', ex)
            else:
                print('Result: %s' % spcalclib.format_result(res))
    except EOFError:
        stderr('\ncaught EOF')
    except KeyboardInterrupt:
        stderr('\ninterrupted')
    stderr('Goodbye!')
    return 0

def main(argv=None):
    args = build_parser().parse_args(argv)
    if args.debug:
        logging.basicConfig(level=logging.DEBUG)
    if args.expression:
        return run_once(' '.join(args.expression))
    return repl(args.quiet)

if __name__ == '__main__':
    sys.exit(main())
