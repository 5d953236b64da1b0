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
cpstco.thunkify

Takes an expression, assumed to be CPS converted with its
continuations abstracted, and returns it such that every function
returns a function of no arguments (a thunk) instead of a value.
Invoking the thunk performs one step of the original computation,
producing either the final value or another thunk.

license: LGPL v.3
"""


from . import InternalInvariantViolation
from .ast import Abstraction, Definition
from .dispatch import Dispatch


__all__ = ("Thunkifier", "thunkify", )


def _suspend(body):
    return Abstraction((), body)


class Thunkifier(Dispatch):


    def thunkify(self, expr):
        return self.dispatch(expr)


    def dispatchLiteral(self, expr):
        return expr


    def dispatchVariable(self, expr):
        return expr


    def dispatchOperation(self, expr):
        return expr.walk(self.thunkify)


    def dispatchConvertedConditional(self, expr):
        # the test is only ever rewritten, never wrapped, so that the
        # branch is selected eagerly
        return expr.walk(self.thunkify)


    def dispatchAbstraction(self, expr):
        return expr.walk(self.thunkify,
                         lambda body: Abstraction(expr.params,
                                                  _suspend(body)))


    def dispatchDefinition(self, expr):
        return expr.walk(self.thunkify,
                         lambda body: Definition(expr.name, expr.params,
                                                 _suspend(body),
                                                 expr.local))


    def dispatchApplication(self, expr):
        return expr.walk(self.thunkify)


    def _unconverted(self, expr):
        msg = "%s should not survive to thunkification" % \
            type(expr).__name__
        raise InternalInvariantViolation(msg, expr)


    dispatchTrivialConditional = _unconverted
    dispatchSeriousConditional = _unconverted
    dispatchContinuation = _unconverted
    dispatchContinuationApplication = _unconverted


def thunkify(expr):
    return Thunkifier().thunkify(expr)


#
# The end.
