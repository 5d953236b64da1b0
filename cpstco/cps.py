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
cpstco.cps

Continuation-passing style conversion. Trivial expressions are values
and are passed inline; every serious expression is rewritten so that it
delivers its result by invoking an explicit continuation.

license: LGPL v.3
"""


from . import MalformedExpression, InternalInvariantViolation
from .ast import (
    Node, Variable, Operation, ConvertedConditional,
    Abstraction, Definition, Continuation, ContinuationApplication,
    Application, rename,
)
from .dispatch import Dispatch
from .names import NameSource


__all__ = ("is_trivial", "CPSConverter", "cps", "cps_definition", )


def is_trivial(expr):
    """
    True if expr is a value requiring no continuation threading. Never
    raises, whatever expr is.
    """

    return isinstance(expr, Node) and expr.is_trivial()


class CPSConverter(Dispatch):
    """
    Converts expressions into continuation-passing style, drawing any
    new identifiers from `names`
    """

    def __init__(self, names=None):
        self.names = names if names is not None else NameSource()


    def cps(self, expr, k=None):
        """
        Without `k`, converts the trivial expr, leaving it a value.

        With `k`, an expression naming a one-argument function,
        converts expr such that its result is passed to `k`.
        """

        if not isinstance(expr, Node):
            return self.default(expr, k)

        if k is None:
            if not expr.is_trivial():
                msg = "serious expression in trivial position"
                raise MalformedExpression(msg, expr)
            return self.dispatch(expr)

        if not isinstance(k, (Variable, Continuation)):
            raise InternalInvariantViolation("not a continuation", k)

        if expr.is_trivial():
            return ContinuationApplication(k, self.dispatch(expr))
        else:
            return self.dispatch(expr, k)


    def cps_definition(self, defn):
        """
        Converts a top-level definition. Self-references in the body
        are renamed to a fresh local name, and the body is converted
        against a new continuation formal.
        """

        if not isinstance(defn, Definition):
            raise MalformedExpression("not a definition", defn)

        local = self.names.new_var(defn.name)
        k = self.names.new_var("k")

        body = defn.body
        if defn.name not in defn.params:
            body = rename(body, defn.name, local)

        body = self.cps(body, Variable(k))
        return Definition(defn.name, defn.params + (k, ), body, local)


    def _bind(self, exprs, finish):
        # serious expressions are each bound to a fresh variable by a
        # continuation, evaluated left to right, before finish is
        # applied to the all-trivial results
        parts = []
        pending = []

        for expr in exprs:
            if is_trivial(expr):
                parts.append(self.cps(expr))
            else:
                s = self.names.new_var("s")
                parts.append(Variable(s))
                pending.append((s, expr))

        result = finish(tuple(parts))
        for s, expr in reversed(pending):
            result = self.cps(expr, Continuation(s, result))

        return result


    def dispatchLiteral(self, expr):
        return expr


    def dispatchVariable(self, expr):
        return expr


    def dispatchOperation(self, expr, k=None):
        if k is None:
            return expr.walk(self.cps)

        def finish(operands):
            return ContinuationApplication(k, Operation(expr.op, operands))

        return self._bind(expr.operands, finish)


    def dispatchTrivialConditional(self, expr):
        return expr.walk(self.cps, ConvertedConditional)


    def dispatchSeriousConditional(self, expr, k):
        conseq = self.cps(expr.conseq, k)
        alt = self.cps(expr.alt, k)

        test = expr.test
        if is_trivial(test):
            return ConvertedConditional(self.cps(test), conseq, alt)

        s = self.names.new_var("s")
        body = ConvertedConditional(Variable(s), conseq, alt)
        return self.cps(test, Continuation(s, body))


    def dispatchConvertedConditional(self, expr):
        return expr


    def dispatchAbstraction(self, expr):
        k = self.names.new_var("k")
        body = self.cps(expr.body, Variable(k))
        return Abstraction(expr.params + (k, ), body)


    def dispatchContinuation(self, expr):
        # produced by this converter, so the body is already converted
        return expr


    def dispatchApplication(self, expr, k):
        def finish(parts):
            return Application(parts[0], parts[1:] + (k, ))

        return self._bind((expr.rator, ) + expr.rands, finish)


    def dispatchDefinition(self, expr, k=None):
        raise MalformedExpression("definition outside of top level", expr)


def cps(expr, k=None, names=None):
    return CPSConverter(names).cps(expr, k)


def cps_definition(defn, names=None):
    return CPSConverter(names).cps_definition(defn)


#
# The end.
