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
cpstco.eval

Direct evaluation of surface expressions, without any conversion.
Recursion in the evaluated program is recursion in python, so this is
only suitable for shallow programs. It serves as the reference the
compiled output must agree with.

license: LGPL v.3
"""


from collections import ChainMap

from .dispatch import Dispatch
from .operators import get_operator


__all__ = ("Evaluator", "evaluate", )


class Evaluator(Dispatch):

    def __init__(self, env=None):
        self.globals = dict(env) if env else {}


    def evaluate(self, expr, env=None):
        if env is None:
            env = ChainMap(self.globals)
        return self.dispatch(expr, env)


    def dispatchLiteral(self, expr, env):
        return expr.value


    def dispatchVariable(self, expr, env):
        try:
            return env[expr.name]
        except KeyError:
            raise NameError("name %r is not defined" % expr.name)


    def dispatchOperation(self, expr, env):
        op = get_operator(expr.op)
        return op(*[self.evaluate(o, env) for o in expr.operands])


    def dispatchConditional(self, expr, env):
        if self.evaluate(expr.test, env):
            return self.evaluate(expr.conseq, env)
        else:
            return self.evaluate(expr.alt, env)


    def _closure(self, name, params, body, env):
        def closure(*args):
            if len(args) != len(params):
                raise TypeError("%s takes %d arguments, %d given" %
                                (name, len(params), len(args)))
            return self.evaluate(body, env.new_child(dict(zip(params,
                                                              args))))

        closure.__name__ = name
        return closure


    def dispatchAbstraction(self, expr, env):
        return self._closure("fn", expr.params, expr.body, env)


    def dispatchDefinition(self, expr, env):
        fun = self._closure(expr.name, expr.params, expr.body, env)
        self.globals[expr.name] = fun
        return fun


    def dispatchApplication(self, expr, env):
        rator = self.evaluate(expr.rator, env)
        rands = [self.evaluate(r, env) for r in expr.rands]
        return rator(*rands)


def evaluate(exprs, env=None):
    """
    Evaluates each of exprs in turn, returning the value of the last
    """

    evaluator = Evaluator(env)
    result = None
    for expr in exprs:
        result = evaluator.evaluate(expr)
    return result


#
# The end.
