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
unittest for cpstco.compiler

license: LGPL v.3
"""


from math import factorial
from os.path import exists, join
from tempfile import TemporaryDirectory
from unittest import TestCase

from cpstco import MalformedExpression
from cpstco.ast import Program, TrampolinedDefinition
from cpstco.compiler import (
    compile_str, compile_to_source, compile_to_file, load_str,
)
from cpstco.parse import ReaderSyntaxError

from . import compile_expr, evaluate_expr, recursionlimit


COUNTDOWN = """
(defn countdown (n)
  (if (zero? n) 0 (countdown (dec n))))
"""

FACT = """
(defn fact (n)
  (if (zero? n) 1 (* n (fact (dec n)))))
"""

EVEN_ODD = """
(defn even? (n) (if (zero? n) true (odd? (dec n))))
(defn odd? (n) (if (zero? n) false (even? (dec n))))
"""


class TestAgreement(TestCase):
    """
    compiled programs produce the same value as direct evaluation
    """

    def agree(self, src_str, expected):
        self.assertEqual(evaluate_expr(src_str), expected)

        main, env = compile_expr(src_str)
        self.assertEqual(main(), expected)


    def test_values(self):
        self.agree("42", 42)
        self.agree("(+ 1 2 3)", 6)
        self.agree("(- 10)", -10)
        self.agree("(quot 7 2)", 3)
        self.agree("(if (< 1 2) (* 2 3) 0)", 6)


    def test_higher_order(self):
        src = """
        (defn twice (f x) (f (f x)))
        (twice (fn (y) (* y 3)) 2)
        """
        self.agree(src, 18)


    def test_curried(self):
        self.agree("(((fn (x) (fn (y) (+ x y))) 3) 4)", 7)


    def test_serious_test(self):
        src = """
        (defn id (x) x)
        (if (id true) 10 20)
        """
        self.agree(src, 10)

        src = """
        (defn id (x) x)
        (if (id false) 10 (id 20))
        """
        self.agree(src, 20)


    def test_serious_operands(self):
        src = """
        (defn sq (x) (* x x))
        (+ (sq 3) (sq 4) 1)
        """
        self.agree(src, 26)


    def test_factorial(self):
        self.agree(FACT + "(fact 10)", 3628800)


    def test_mutual(self):
        self.agree(EVEN_ODD + "(even? 10)", True)
        self.agree(EVEN_ODD + "(odd? 7)", True)


    def test_short_circuit(self):
        self.agree("(and false (/ 1 0))", False)
        self.agree("(or 7 (/ 1 0))", 7)
        self.agree("(and 1 2 3)", 3)
        self.agree("(or false false)", False)

        inv = "(defn inv (x) (/ 1 x))"
        self.agree(inv + "(and false (inv 0))", False)
        self.agree(inv + "(or true (inv 0))", True)
        self.agree(inv + "(and (inv 2) (inv 4))", 0.25)
        self.agree(inv + "(or (inv 2) (inv 0))", 0.5)


    def test_short_circuit_errors(self):
        main, env = compile_expr("(defn inv (x) (/ 1 x)) (and true (inv 0))")
        self.assertRaises(ZeroDivisionError, main)


    def test_infinite_literal(self):
        self.agree("1e999", float("inf"))
        self.agree("(- 1e999)", float("-inf"))


    def test_shadowed_operator(self):
        # a lambda parameter named like an operator is a variable
        # everywhere but head position
        self.agree("((fn (inc) (+ inc 1)) 5)", 6)


class TestConstantStack(TestCase):

    def test_countdown(self):
        main, env = compile_expr(COUNTDOWN + "(countdown 100000)")
        self.assertEqual(main(), 0)

        countdown = env["countdown"]
        with recursionlimit():
            self.assertEqual(countdown(50000), 0)


    def test_countdown_eval(self):
        with recursionlimit():
            self.assertRaises(RecursionError, evaluate_expr,
                              COUNTDOWN + "(countdown 100000)")


    def test_factorial(self):
        main, env = compile_expr(FACT + "(fact 5000)")
        self.assertEqual(main(), factorial(5000))


    def test_direct_call(self):
        main, env = compile_expr(FACT)
        self.assertIsNone(main)

        fact = env["fact"]
        self.assertEqual(fact(5), 120)
        self.assertEqual(fact(6, lambda v: v + 1), 721)


    def test_errors_propagate(self):
        main, env = compile_expr("(defn f (x) (/ 1 x)) (f 0)")
        self.assertRaises(ZeroDivisionError, main)


    def test_mutual_depth(self):
        # each call into another top-level definition nests that
        # definition's own trampoline, so mutual recursion consumes
        # python stack in proportion to its depth
        main, env = compile_expr(EVEN_ODD)
        even = env["even_p"]

        with recursionlimit():
            self.assertTrue(even(10))
            self.assertRaises(RecursionError, even, 2000)


class TestCompiler(TestCase):

    def test_program(self):
        program = compile_str(COUNTDOWN + "(countdown 3)")
        self.assertIsInstance(program, Program)

        names = [d.name for d in program.definitions]
        self.assertEqual(names, ["countdown", "main"])
        for defn in program.definitions:
            self.assertIsInstance(defn, TrampolinedDefinition)


    def test_deterministic(self):
        src = FACT + "(fact 3)"
        self.assertEqual(compile_to_source(src), compile_to_source(src))


    def test_entry(self):
        env = load_str("(+ 1 2)", entry="start")
        self.assertNotIn("main", env)
        self.assertEqual(env["start"](), 3)


    def test_runtime(self):
        source = compile_to_source("1", runtime="cpstco.runtime")
        self.assertIn("from cpstco.runtime import (", source)


    def test_unknown_param(self):
        self.assertRaises(TypeError, compile_str, "1", frob=True)
        self.assertRaises(TypeError, load_str, "1", frob=True)


    def test_duplicate(self):
        self.assertRaises(MalformedExpression, compile_str,
                          "(defn f (x) x) (defn f (y) y)")
        self.assertRaises(MalformedExpression, compile_str,
                          "(+ 1 2) (+ 3 4)")


    def test_malformed(self):
        self.assertRaises(MalformedExpression, compile_str, "(if 1 2)")
        self.assertRaises(MalformedExpression, compile_str,
                          "(fn (x) (defn g (y) y))")
        self.assertRaises(ReaderSyntaxError, compile_str, "(+ 1 2")


    def test_to_file(self):
        with TemporaryDirectory() as tmpdir:
            src = join(tmpdir, "fact.lisp")
            dest = join(tmpdir, "fact.py")

            with open(src, "wt") as fd:
                fd.write(FACT + "(fact 5)")

            compile_to_file(src, dest)

            with open(dest, "rt") as fd:
                source = fd.read()

            env = {}
            exec(compile(source, dest, "exec"), env)
            self.assertEqual(env["main"](), 120)


    def test_to_file_malformed(self):
        with TemporaryDirectory() as tmpdir:
            src = join(tmpdir, "bad.lisp")
            dest = join(tmpdir, "bad.py")

            with open(src, "wt") as fd:
                fd.write("(defn f (x) x)\n(if 1 2)\n")

            self.assertRaises(MalformedExpression,
                              compile_to_file, src, dest)
            self.assertFalse(exists(dest))


#
# The end.
