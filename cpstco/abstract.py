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
cpstco.abstract

Rewrites continuations into ordinary one-parameter functions, and
continuation applications into calls of a shared dispatcher

license: LGPL v.3
"""


from .ast import Variable, Abstraction, Application
from .dispatch import Dispatch


__all__ = ("ContinuationAbstractor", "abstract_k", )


class ContinuationAbstractor(Dispatch):

    def __init__(self, apply_k):
        self.apply_k = Variable(apply_k)


    def abstract(self, expr):
        return self.dispatch(expr)


    def dispatchNode(self, expr):
        return expr.walk(self.abstract)


    def dispatchContinuation(self, expr):
        return expr.walk(self.abstract,
                         lambda body: Abstraction((expr.arg, ), body))


    def dispatchContinuationApplication(self, expr):
        return expr.walk(self.abstract,
                         lambda k, arg: Application(self.apply_k, (k, arg)))


def abstract_k(expr, apply_k):
    """
    Returns expr with every Continuation replaced by an Abstraction,
    and every ContinuationApplication by an Application of the variable
    named `apply_k`
    """

    return ContinuationAbstractor(apply_k).abstract(expr)


#
# The end.
