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
cpstco.emit

Renders a compiled Program as the source of a Python module

license: LGPL v.3
"""


from keyword import iskeyword
from math import isfinite

from . import InternalInvariantViolation
from .ast import Literal
from .dispatch import Dispatch
from .operators import get_operator
from .runtime import RUNTIME_ROLES


__all__ = ("mangle", "Emitter", "emit", "emit_program", )


_MANGLE = {
    "-": "_",
    "?": "_p",
    "!": "_b",
    "*": "_star",
    "+": "_plus",
    "/": "_slash",
    "<": "_lt",
    ">": "_gt",
    "=": "_eq",
    ".": "_dot",
}


def mangle(name):
    """
    A python identifier for the given name
    """

    ident = "".join(_MANGLE.get(c, c) for c in name)

    if not ident.isidentifier():
        ident = "".join(c if ("_" + c).isidentifier() else
                        "_x%02x" % ord(c) for c in ident)
        if not ident.isidentifier():
            ident = "_" + ident

    if iskeyword(ident):
        ident += "_"

    return ident


class Emitter(Dispatch):

    indent = "    "


    def __init__(self, runtime=None):
        if runtime is None:
            runtime = dict((role, role) for role in RUNTIME_ROLES)
        self.runtime = dict(runtime)


    def emit(self, expr):
        return self.dispatch(expr)


    def _helper(self, role):
        return mangle(self.runtime[role])


    def dispatchLiteral(self, expr):
        value = expr.value
        if isinstance(value, float) and not isfinite(value):
            # repr gives the bare names inf and nan
            return "float(%r)" % repr(value)
        return repr(value)


    def dispatchVariable(self, expr):
        return mangle(expr.name)


    def dispatchOperation(self, expr):
        render = get_operator(expr.op).render
        return expr.walk(self.emit, render)


    def dispatchConvertedConditional(self, expr):
        def render(test, conseq, alt):
            return "(%s if %s else %s)" % (conseq, test, alt)

        return expr.walk(self.emit, render)


    def dispatchAbstraction(self, expr):
        params = ", ".join(map(mangle, expr.params))

        def render(body):
            if params:
                return "(lambda %s: %s)" % (params, body)
            else:
                return "(lambda: %s)" % body

        return expr.walk(self.emit, render)


    def dispatchApplication(self, expr):
        def render(rator, *rands):
            if isinstance(expr.rator, Literal):
                rator = "(%s)" % rator
            return "%s(%s)" % (rator, ", ".join(rands))

        return expr.walk(self.emit, render)


    def dispatchDefinition(self, expr):
        params = ", ".join(map(mangle, expr.params))

        def render(body):
            return ["def %s(%s):" % (mangle(expr.name), params),
                    self.indent + "return " + body]

        return expr.walk(self.emit, render)


    def dispatchTrampolinedDefinition(self, expr):
        params = list(map(mangle, expr.params))
        k = mangle(expr.k)
        flag = mangle(expr.flag)
        local = mangle(expr.local.name)

        formals = params + ["%s=%s" % (k, self._helper("identity"))]
        actuals = params + [flag]

        def render(local_lines):
            lines = ["def %s(%s):" % (mangle(expr.name), ", ".join(formals))]
            body = ["%s = %s(%s)" % (flag, self._helper("flag"), k)]
            body.extend(local_lines)
            body.append("return %s(%s(%s), %s)" %
                        (self._helper("trampoline"), local,
                         ", ".join(actuals), flag))
            lines.extend(self.indent + line for line in body)
            return lines

        return expr.walk(self.emit, render)


    def dispatchProgram(self, expr, runtime_module="cpstco.runtime"):
        self.runtime = dict(expr.runtime)

        lines = ["# compiled by cpstco", ""]

        lines.append("from %s import (" % runtime_module)
        for role, name in expr.runtime:
            lines.append("%s%s as %s," %
                         (self.indent, RUNTIME_ROLES[role], mangle(name)))
        lines.append(")")

        for defn_lines in expr.walk(self.emit, lambda *defns: defns):
            lines.extend(("", ""))
            lines.extend(defn_lines)

        lines.append("")
        return "\n".join(lines)


    def _stranded(self, expr):
        msg = "%s cannot be emitted" % type(expr).__name__
        raise InternalInvariantViolation(msg, expr)


    dispatchTrivialConditional = _stranded
    dispatchSeriousConditional = _stranded
    dispatchContinuation = _stranded
    dispatchContinuationApplication = _stranded


def emit(expr, runtime=None):
    """
    Python source for a single compiled expression or definition
    """

    result = Emitter(runtime).emit(expr)
    if isinstance(result, list):
        result = "\n".join(result) + "\n"
    return result


def emit_program(program, runtime_module="cpstco.runtime"):
    """
    Python module source for a compiled Program
    """

    return Emitter().dispatch(program, runtime_module)


#
# The end.
