#!/usr/bin/env python
"""spcalclib - Stuff used by spcalc"""

# ---------------------------
#  The Process in a Nutshell
# ---------------------------
#
#             +------------+     +---------+     +--------+
# [input] >>> | tokenize() | >>> | parse() | >>> | fold() | >>> [result]
#          |  +------------+  |  +---------+  |  +--------+  |
#          |                  |               |              |
#        string         list of tokens   operands and     number
#                                         operators

import re
import sys
import string
import logging
import operator

__all__ = [
    'Token', 'Number', 'Operator', 'binary', 'precedence_tiers',
    'CalcError', 'CalcSyntaxError', 'InvalidOperandError',
    'InvalidOperatorError', 'MissingOperandError', 'DivisionByZeroError',
    'tokenize', 'valid_operand', 'valid_operator', 'parse', 'fold',
    'evaluate', 'format_result',
]

logger = logging.getLogger(__name__)

DECIMAL_PLACES = 10

class Token(str):
    def __new__(cls, value, pos=None):
        self = str.__new__(Token, value)
        self.pos = pos
        return self

class Number(float):
    def __new__(cls, value, pos=None):
        self = float.__new__(Number, value)
        self.pos = pos
        return self

class CalcError(ValueError):
    """Base class for everything that can go wrong in an evaluation."""
    message = None

    def __init__(self, token=None):
        self.token = token
        self.pos = getattr(token, 'pos', None)
        if token is None:
            ValueError.__init__(self, self.message)
        else:
            ValueError.__init__(self, "%s: %s" % (self.message, token))

class CalcSyntaxError(CalcError):
    message = "syntax error"

class InvalidOperandError(CalcSyntaxError):
    message = "invalid operand"

class InvalidOperatorError(CalcSyntaxError):
    message = "invalid operator"

class MissingOperandError(CalcSyntaxError):
    message = "missing final operand"

class DivisionByZeroError(CalcError, ZeroDivisionError):
    message = "division by zero"

class Operator(object):
    """The base class for operators.

    Do not instantiate this class directly; either inherit from this
    class and override the attributes or use create_operator_class().
    Operators with a lower rank bind tighter.
    """
    symbol = None
    rank = None
    func = None

    def __init__(self, pos=None):
        if self.__class__ is Operator:
            raise NotImplementedError("Operator class is abstract; it cannot be called directly")
        self.pos = pos

    def __call__(self, a, b):
        """Apply the operator to its two operands."""
        return self.__class__.func(a, b)

    def __repr__(self):
        return self.__class__.__name__

    def __str__(self):
        return self.__class__.symbol

def divide(a, b):
    """Division that refuses divisors too close to zero to be trusted."""
    if abs(b) < sys.float_info.epsilon:
        raise DivisionByZeroError()
    return operator.truediv(a, b)

def create_operator_class(clsname, symbol_, rank_, func_):
    """Factory function for creating a new operator class."""
    class newop(Operator):
        symbol = symbol_
        rank = rank_
        func = staticmethod(func_)
    newop.__name__ = clsname
    return newop

binary = {
    '*': create_operator_class('Multiplication', '*', 1, operator.mul),
    '/': create_operator_class('Division',       '/', 1, divide),
    '+': create_operator_class('Addition',       '+', 2, operator.add),
    '-': create_operator_class('Subtraction',    '-', 2, operator.sub),
}

def precedence_tiers(operators=binary):
    """Group operator symbols by rank, tightest-binding tier first.

    Operators sharing a tier associate to the left.
    """
    tiers = {}
    for symbol, cls in operators.items():
        tiers.setdefault(cls.rank, set()).add(symbol)
    return [frozenset(tiers[rank]) for rank in sorted(tiers)]

token_re = re.compile(r"\S+", re.UNICODE)

def tokenize(s):
    """Split a line into whitespace-delimited tokens."""
    return [Token(m.group(), m.start()) for m in token_re.finditer(s)]

def valid_operand(token):
    """An operand is ASCII digits with at most one decimal point.

    Note that a token made only of a decimal point passes this check.
    """
    if not token:
        return False
    for ch in token:
        if ch not in string.digits and ch != '.':
            return False
    return token.count('.') <= 1

def valid_operator(token):
    """An operator is exactly one of + - * /"""
    return len(token) == 1 and token in binary

def to_number(token):
    # a bare '.' has no digits to read; treat it as zero
    if token.strip('.'):
        return Number(token, getattr(token, 'pos', None))
    return Number(0.0, getattr(token, 'pos', None))

def parse(tokens):
    """Split a token stream into its operands and operators.

    Tokens must alternate operand, operator, operand, ... and the stream
    must end on an operand. The first token in the wrong shape for its
    position stops the parse.
    """
    operands = []
    operators = []

    for i, token in enumerate(tokens):
        if i % 2 == 0:
            if not valid_operand(token):
                raise InvalidOperandError(token)
            operands.append(to_number(token))
        else:
            if not valid_operator(token):
                raise InvalidOperatorError(token)
            operators.append(binary[token](getattr(token, 'pos', None)))

    if len(operands) - len(operators) != 1:
        raise MissingOperandError()
    return operands, operators

def next_in_tier(operators, tier):
    """Index of the leftmost pending operator in the tier, or -1."""
    for i, op in enumerate(operators):
        if op is not None and op.symbol in tier:
            return i
    return -1

def fold(operands, operators):
    """Reduce the operands to a single value, tier by tier.

    Each application writes its result into every operand slot of the
    group it belongs to, i.e. the run of merged slots joined by operators
    that have already been applied. The next operator touching either end
    of the group therefore sees the up-to-date value.
    """
    if len(operands) != len(operators) + 1:
        raise MissingOperandError()

    values = [float(x) for x in operands]
    pending = list(operators)
    merged = [False] * len(values)

    for tier in precedence_tiers():
        while True:
            i = next_in_tier(pending, tier)
            if i == -1:
                break
            op = pending[i]
            result = op(values[i], values[i+1])
            logger.debug("%s %s %s = %s", values[i], op, values[i+1], result)

            merged[i] = merged[i+1] = True
            pending[i] = None

            # Walk out to both edges of the group
            lo = i
            while lo > 0 and pending[lo-1] is None and merged[lo-1]:
                lo -= 1
            hi = i + 1
            while hi < len(values) - 1 and pending[hi] is None and merged[hi+1]:
                hi += 1
            for j in range(lo, hi+1):
                values[j] = result

    return values[0]

def evaluate(expression):
    """Evaluate a space-separated expression such as '2 + 3 * 4'."""
    operands, operators = parse(tokenize(expression))
    return fold(operands, operators)

def format_result(value, places=DECIMAL_PLACES):
    """Render a result without trailing zeros or a dangling decimal point."""
    s = '%.*f' % (places, value)
    if '.' in s:
        s = s.rstrip('0').rstrip('.')
    return s
