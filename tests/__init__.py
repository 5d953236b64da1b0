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


from contextlib import contextmanager
from sys import getrecursionlimit, setrecursionlimit

from cpstco.ast import Node
from cpstco.compiler import load_str
from cpstco.eval import evaluate
from cpstco.parse import read_all


@contextmanager
def recursionlimit(limit=(getrecursionlimit() // 2)):
    original = getrecursionlimit()
    setrecursionlimit(limit)
    try:
        yield
    finally:
        setrecursionlimit(original)
    assert getrecursionlimit() == original, "could not reset recursion limit"


def compile_expr(src_str, **base):
    """
    Compiles and loads src_str, returning the entry function and the
    resulting namespace
    """

    env = load_str(src_str, base)
    return env.get("main"), env


def evaluate_expr(src_str, **base):
    return evaluate(read_all(src_str), base)


def iter_nodes(expr):
    """
    Every node of the tree expr, parents before children
    """

    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        children = []
        node.walk(children.append, lambda *_: None)
        stack.extend(reversed(children))


def count_nodes(expr, klass):
    return sum(1 for node in iter_nodes(expr) if isinstance(node, klass))


def all_nodes(expr):
    return all(isinstance(node, Node) for node in iter_nodes(expr))


#
# The end.
