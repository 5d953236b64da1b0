# This library is free software; you can redistribute it and/or modify
# it under the terms of the GNU Lesser General Public License as
# published by the Free Software Foundation; either version 3 of the
# License, or (at your option) any later version.
#
# This library is distributed in the hope that it will be useful, but
# WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.
#
# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, see
# <http://www.gnu.org/licenses/>.


"""
cpstco.operators

The fixed set of trivial primitive operators. An operation over
trivial operands never needs a continuation, so each operator here
knows how many operands it accepts, how to evaluate itself directly,
and how to render itself as a Python expression.

license: LGPL v.3
"""


import operator

from functools import reduce


__all__ = (
    "Operator", "get_operator", "is_trivial_operator",
    "OPERATORS",
)


class Operator(object):

    def __init__(self, name, evaluate, render, minargs=1, maxargs=None):
        self.name = name
        self.evaluate = evaluate
        self.render = render
        self.minargs = minargs
        self.maxargs = maxargs


    def accepts(self, count):
        if count < self.minargs:
            return False
        return self.maxargs is None or count <= self.maxargs


    def __call__(self, *args):
        return self.evaluate(*args)


    def __repr__(self):
        return "<operator %s>" % self.name


def _folding(binop):
    def fold(*args):
        return reduce(binop, args)
    return fold


def _infix(sym):
    joiner = " %s " % sym

    def render(*sources):
        return "(%s)" % joiner.join(sources)
    return render


def _template(fmt):
    def render(*sources):
        return fmt % sources
    return render


def _minus(first, *rest):
    if rest:
        return reduce(operator.sub, rest, first)
    else:
        return -first


def _render_minus(first, *rest):
    if rest:
        return _infix("-")(first, *rest)
    else:
        return "(-%s)" % first


def _setup():
    ops = (
        Operator("+", _folding(operator.add), _infix("+")),
        Operator("-", _minus, _render_minus),
        Operator("*", _folding(operator.mul), _infix("*")),
        Operator("/", _folding(operator.truediv), _infix("/"), 2),
        Operator("quot", operator.floordiv, _infix("//"), 2, 2),
        Operator("mod", operator.mod, _infix("%"), 2, 2),

        Operator("<", operator.lt, _infix("<"), 2, 2),
        Operator("<=", operator.le, _infix("<="), 2, 2),
        Operator(">", operator.gt, _infix(">"), 2, 2),
        Operator(">=", operator.ge, _infix(">="), 2, 2),
        Operator("=", operator.eq, _infix("=="), 2, 2),
        Operator("not=", operator.ne, _infix("!="), 2, 2),

        Operator("not", operator.not_, _template("(not %s)"), 1, 1),

        Operator("zero?", lambda x: x == 0, _template("(%s == 0)"), 1, 1),
        Operator("inc", lambda x: x + 1, _template("(%s + 1)"), 1, 1),
        Operator("dec", lambda x: x - 1, _template("(%s - 1)"), 1, 1),
    )

    return dict((op.name, op) for op in ops)


OPERATORS = _setup()
del _setup


def get_operator(name):
    """
    The `Operator` registered under name, or None
    """

    return OPERATORS.get(name)


def is_trivial_operator(name):
    return name in OPERATORS


#
# The end.
