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
cpstco.tramp

Trampoline insertion. Each thunkified definition becomes an entry
function which allocates a completion flag, takes the first step of
its renamed local copy, and hands the resulting suspension and the
flag to the shared trampoline driver.

license: LGPL v.3
"""


from . import InternalInvariantViolation
from .ast import Abstraction, Definition, TrampolinedDefinition, Program
from .dispatch import Dispatch
from .names import NameSource
from .runtime import RUNTIME_ROLES


__all__ = (
    "Trampoliner", "runtime_names", "wrap_entry",
)


def runtime_names(names):
    """
    Allocates a fresh name for each of the shared runtime helpers a
    compiled program refers to
    """

    return dict((role, names.new_var(role)) for role in sorted(RUNTIME_ROLES))


def wrap_entry(expr, entry="main"):
    """
    A top-level expression which isn't already a definition becomes
    the body of a parameterless definition named `entry`
    """

    if isinstance(expr, Definition):
        return expr
    else:
        return Definition(entry, (), expr)


class Trampoliner(Dispatch):

    def __init__(self, runtime, names=None):
        self.runtime = dict(runtime)
        self.names = names if names is not None else NameSource()


    def tramp(self, defn):
        return self.dispatch(defn)


    def program(self, definitions):
        return Program(map(self.tramp, definitions), self.runtime)


    def dispatchDefinition(self, defn):
        if defn.local is None or not defn.params:
            msg = "definition was not CPS converted"
            raise InternalInvariantViolation(msg, defn)

        body = defn.body
        if not (isinstance(body, Abstraction) and not body.params):
            msg = "definition was not thunkified"
            raise InternalInvariantViolation(msg, defn)

        flag = self.names.new_var("done")
        local = Definition(defn.local, defn.params, body)

        return TrampolinedDefinition(defn.name, defn.params[:-1],
                                     defn.params[-1], flag, local)


    def dispatchTrampolinedDefinition(self, defn):
        msg = "definition is already trampolined"
        raise InternalInvariantViolation(msg, defn)


#
# The end.
