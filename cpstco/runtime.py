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
cpstco.runtime

Flag-driven trampoline support imported by compiled programs

license: LGPL v.3
"""


__all__ = (
    "trampoline", "apply_k", "make_flag", "identity",
    "RUNTIME_ROLES",
)


def setup():
    # every step of every compiled program passes through these, so
    # they're kept small. The Flag class stays hidden in here, so that
    # nothing but make_flag can produce a value which ends a
    # trampoline.

    class Flag(object):
        # the completion flag of a single activation. It also wraps the
        # continuation which the activation's final answer belongs to.

        __slots__ = ("k", "done")


        def __init__(self, k):
            self.k = k
            self.done = False


        def __repr__(self):
            state = "done" if self.done else "running"
            return "<flag %s at 0x%x>" % (state, id(self))


    Flag.__qualname__ = "Flag"


    def make_flag(k):
        return Flag(k)


    def trampoline(work, flag):
        # the driving loop. work starts as the suspension produced by
        # the first step of an activation; so long as flag is unset,
        # whatever work is must be another suspension.

        while not flag.done:
            work = work()
        return work


    def apply_k(k, value):
        # a flag as the continuation means the value is the final
        # answer of that flag's activation. Flags may wrap the flags of
        # enclosing activations, each of which is finished by the same
        # answer.

        while k.__class__ is Flag:
            k.done = True
            k = k.k
        return k(value)


    def identity(value):
        return value


    return trampoline, apply_k, make_flag, identity


trampoline, apply_k, make_flag, identity = setup()
del setup


# role in a compiled Program -> name of the helper in this module
RUNTIME_ROLES = {
    "apply_k": "apply_k",
    "flag": "make_flag",
    "identity": "identity",
    "trampoline": "trampoline",
}


#
# The end.
