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
cpstco, a continuation-passing tail-call optimizing compiler

license: LGPL v.3
"""


__all__ = (
    "CompilerException",
    "MalformedExpression", "InternalInvariantViolation",
)


class CompilerException(Exception):
    """
    Base class for error-driven Exceptions raised while compiling. The
    offending node, when there is one, is available as `expr`
    """

    def __init__(self, message, expr=None):
        super().__init__(message, expr)
        self.message = message
        self.expr = expr


    def __str__(self):
        if self.expr is None:
            return self.message
        else:
            return "%s: %r" % (self.message, self.expr)


class MalformedExpression(CompilerException):
    """
    An expression outside of the fixed grammar was given to one of the
    compiler passes
    """
    pass


class InternalInvariantViolation(CompilerException):
    """
    A pass was handed a shape which its prior stage should never have
    produced. This indicates a compiler bug rather than bad input.
    """
    pass


#
# The end.
