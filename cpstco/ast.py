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
Abstract Syntax Tree for cpstco

Every node is an immutable value. The children of a node are exposed
through `_children` in a fixed positional order, and `_rebuild`
creates a node of the same kind from replacement children. `walk`
combines the two and is the single traversal primitive every compiler
pass is written against.

license: LGPL v.3
"""


from functools import partial
from numbers import Number

from . import MalformedExpression
from .operators import is_trivial_operator


__all__ = (
    "Node", "Literal", "Variable", "Operation",
    "Conditional", "TrivialConditional", "SeriousConditional",
    "ConvertedConditional",
    "Abstraction", "Definition",
    "Continuation", "ContinuationApplication",
    "Application",
    "TrampolinedDefinition", "Program",
    "conditional", "rename",
)


class Node(object):
    """
    Base class for all AST node types
    """

    _fields = ()


    def _init(self, **fields):
        for key, val in fields.items():
            object.__setattr__(self, key, val)


    def __setattr__(self, key, val):
        raise AttributeError("%s is immutable" % type(self).__name__)


    def __delattr__(self, key):
        raise AttributeError("%s is immutable" % type(self).__name__)


    def _children(self):
        return ()


    def _rebuild(self, *children):
        return self


    def walk(self, fn, build=None):
        """
        Applies `fn` to each child of this node, in order, and passes
        the results positionally to `build`. When `build` is omitted
        a node of this same kind is reconstructed from the results.
        """

        if build is None:
            build = self._rebuild
        return build(*[fn(child) for child in self._children()])


    def is_trivial(self):
        return False


    def _key(self):
        return tuple(getattr(self, f) for f in self._fields)


    def __eq__(self, other):
        return ((type(self) is type(other)) and
                (self._key() == other._key()))


    def __ne__(self, other):
        return not (self == other)


    def __hash__(self):
        return hash((type(self), self._key()))


    def __repr__(self):
        data = ", ".join("%s=%r" % (f, getattr(self, f))
                         for f in self._fields)
        return "%s(%s)" % (type(self).__name__, data)


def _trivial(expr):
    return isinstance(expr, Node) and expr.is_trivial()


def _names(names):
    names = tuple(names)
    for name in names:
        if not isinstance(name, str):
            raise MalformedExpression("parameter must be a name", name)
    return names


class Literal(Node):

    _fields = ("value", )


    def __init__(self, value):
        if not isinstance(value, Number):
            raise MalformedExpression("literal must be boolean or number",
                                      value)
        self._init(value=value)


    def is_trivial(self):
        return True


    def _key(self):
        # True == 1 in python, but not here
        return (type(self.value), self.value)


class Variable(Node):

    _fields = ("name", )


    def __init__(self, name):
        if not isinstance(name, str):
            raise MalformedExpression("variable must be a name", name)
        self._init(name=name)


    def is_trivial(self):
        return True


class Operation(Node):

    _fields = ("op", "operands")


    def __init__(self, op, operands):
        if not is_trivial_operator(op):
            raise MalformedExpression("not a trivial operator", op)
        self._init(op=op, operands=tuple(operands))


    def _children(self):
        return self.operands


    def _rebuild(self, *operands):
        return Operation(self.op, operands)


    def is_trivial(self):
        return all(map(_trivial, self.operands))


class Conditional(Node):

    _fields = ("test", "conseq", "alt")


    def __init__(self, test, conseq, alt):
        self._init(test=test, conseq=conseq, alt=alt)


    def _children(self):
        return (self.test, self.conseq, self.alt)


    def _rebuild(self, test, conseq, alt):
        return type(self)(test, conseq, alt)


class TrivialConditional(Conditional):
    """
    A conditional whose test and branches are all trivial, and which
    is therefore itself a value
    """

    def is_trivial(self):
        return True


class SeriousConditional(Conditional):
    """
    A conditional with at least one part requiring evaluation
    """
    pass


class ConvertedConditional(Conditional):
    """
    A conditional whose parts have all been CPS converted
    """

    def is_trivial(self):
        return True


class Abstraction(Node):

    _fields = ("params", "body")


    def __init__(self, params, body):
        self._init(params=_names(params), body=body)


    def _children(self):
        return (self.body, )


    def _rebuild(self, body):
        return Abstraction(self.params, body)


    def is_trivial(self):
        return True


class Definition(Node):
    """
    A named top-level abstraction. Once CPS converted, `local` holds
    the fresh name that self-references in the body were renamed to.
    """

    _fields = ("name", "params", "body", "local")


    def __init__(self, name, params, body, local=None):
        if not isinstance(name, str):
            raise MalformedExpression("definition must be named", name)
        self._init(name=name, params=_names(params), body=body,
                   local=local)


    def _children(self):
        return (self.body, )


    def _rebuild(self, body):
        return Definition(self.name, self.params, body, self.local)


class Continuation(Node):
    """
    The reified rest of a computation, binding exactly one name
    """

    _fields = ("arg", "body")


    def __init__(self, arg, body):
        if not isinstance(arg, str):
            raise MalformedExpression("continuation must bind a name", arg)
        self._init(arg=arg, body=body)


    def _children(self):
        return (self.body, )


    def _rebuild(self, body):
        return Continuation(self.arg, body)


    def is_trivial(self):
        return True


class ContinuationApplication(Node):

    _fields = ("k", "arg")


    def __init__(self, k, arg):
        self._init(k=k, arg=arg)


    def _children(self):
        return (self.k, self.arg)


    def _rebuild(self, k, arg):
        return ContinuationApplication(k, arg)


class Application(Node):

    _fields = ("rator", "rands")


    def __init__(self, rator, rands):
        self._init(rator=rator, rands=tuple(rands))


    def _children(self):
        return (self.rator, ) + self.rands


    def _rebuild(self, rator, *rands):
        return Application(rator, rands)


class TrampolinedDefinition(Node):
    """
    The entry point for a trampolined definition. Invoking it
    allocates `flag`, calls the thunkified `local` definition once with
    the formals, and drives the resulting suspension to completion.
    """

    _fields = ("name", "params", "k", "flag", "local")


    def __init__(self, name, params, k, flag, local):
        self._init(name=name, params=_names(params), k=k, flag=flag,
                   local=local)


    def _children(self):
        return (self.local, )


    def _rebuild(self, local):
        return TrampolinedDefinition(self.name, self.params, self.k,
                                     self.flag, local)


class Program(Node):
    """
    A compiled unit. `runtime` pairs each shared runtime role with the
    name it is bound to for the definitions of this program.
    """

    _fields = ("definitions", "runtime")


    def __init__(self, definitions, runtime):
        if isinstance(runtime, dict):
            runtime = runtime.items()
        self._init(definitions=tuple(definitions),
                   runtime=tuple(sorted(runtime)))


    def _children(self):
        return self.definitions


    def _rebuild(self, *definitions):
        return Program(definitions, self.runtime)


    def runtime_name(self, role):
        return dict(self.runtime)[role]


def conditional(test, conseq, alt):
    """
    Creates a TrivialConditional when all three parts are trivial, and
    a SeriousConditional otherwise
    """

    if _trivial(test) and _trivial(conseq) and _trivial(alt):
        return TrivialConditional(test, conseq, alt)
    else:
        return SeriousConditional(test, conseq, alt)


def rename(expr, old, new):
    """
    Replaces free occurrences of the variable `old` in expr with
    `new`. Binders which shadow `old` are left alone.
    """

    if not isinstance(expr, Node):
        raise MalformedExpression("cannot rename within", expr)

    elif isinstance(expr, Variable):
        return Variable(new) if expr.name == old else expr

    elif isinstance(expr, (Abstraction, Definition)) and old in expr.params:
        return expr

    elif isinstance(expr, Continuation) and expr.arg == old:
        return expr

    else:
        return expr.walk(partial(rename, old=old, new=new))


#
# The end.
