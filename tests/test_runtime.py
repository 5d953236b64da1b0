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
unittest for cpstco.runtime

license: LGPL v.3
"""


from sys import getrecursionlimit
from unittest import TestCase

from cpstco.runtime import (
    trampoline, apply_k, make_flag, identity, RUNTIME_ROLES,
)

import cpstco.runtime


def _countdown(n, k):
    # hand-written in the shape the compiler produces
    if n == 0:
        return lambda: apply_k(k, "done")
    else:
        return lambda: _countdown(n - 1, k)


class TestTrampoline(TestCase):

    def test_countdown(self):
        count = getrecursionlimit() * 10

        flag = make_flag(identity)
        self.assertFalse(flag.done)

        self.assertEqual(trampoline(_countdown(count, flag), flag), "done")
        self.assertTrue(flag.done)


    def test_function_result(self):
        # a final value which is itself callable is not forced
        def thunky():
            return "should not be called"

        flag = make_flag(identity)
        result = trampoline(lambda: apply_k(flag, thunky), flag)
        self.assertIs(result, thunky)


    def test_outer_continuation(self):
        seen = []

        def k(value):
            seen.append(value)
            return "next step"

        flag = make_flag(k)
        result = trampoline(lambda: apply_k(flag, 5), flag)

        self.assertEqual(seen, [5])
        self.assertEqual(result, "next step")


    def test_nested_flags(self):
        outer = make_flag(identity)
        inner = make_flag(outer)

        self.assertEqual(apply_k(inner, 9), 9)
        self.assertTrue(inner.done)
        self.assertTrue(outer.done)


    def test_intermediate(self):
        flag = make_flag(identity)
        kont = lambda v: (lambda: apply_k(flag, v * 2))

        step = apply_k(kont, 4)
        self.assertTrue(callable(step))
        self.assertFalse(flag.done)
        self.assertEqual(step(), 8)
        self.assertTrue(flag.done)


    def test_errors_propagate(self):
        flag = make_flag(identity)

        def boom():
            return 1 / 0

        self.assertRaises(ZeroDivisionError, trampoline,
                          lambda: boom, flag)
        self.assertFalse(flag.done)


    def test_independent_flags(self):
        a = make_flag(identity)
        b = make_flag(identity)
        apply_k(a, 1)
        self.assertTrue(a.done)
        self.assertFalse(b.done)
        self.assertIn("running", repr(b))
        self.assertIn("done", repr(a))


    def test_roles(self):
        for role, attr in RUNTIME_ROLES.items():
            self.assertTrue(callable(getattr(cpstco.runtime, attr)), role)


#
# The end.
