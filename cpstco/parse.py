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
cpstco.parse

Simple event-emitting s-expression reader, and the translation of the
resulting forms into surface AST nodes.

license: LGPL v.3
"""


from io import StringIO
from re import compile as regex

from . import CompilerException, MalformedExpression
from .ast import (
    Literal, Variable, Operation, Abstraction, Definition, Application,
    conditional,
)
from .operators import get_operator


__all__ = (
    "ReaderSyntaxError", "Symbol", "Form",
    "parse", "compose", "translate",
    "read", "read_all", "read_stream",
)


# these are the events that can be emitted.
E_ATOM = "atom"
E_OPEN = "open-paren"
E_CLOSE = "close-paren"
E_COMMENT = "comment"
E_NEWLINE = "newline"


_CLOSING = {"(": ")", "[": "]"}
_DELIMITERS = "()[];\""


_integer_re = regex(r"-?\d+$").match
_hex_re = regex(r"-?0x[\da-fA-F]+$").match
_float_re = regex(r"-?((\d*\.\d+|\d+\.\d*)(e-?\d+)?|(\d+e-?\d+))$").match


class ReaderSyntaxError(CompilerException):
    """
    An error in the syntax of the source text, at a (line, column)
    position
    """

    def __init__(self, message, position=None):
        super().__init__(message)
        self.position = position


    def __str__(self):
        if self.position is None:
            return self.message
        else:
            return "%s at line %d, column %d" % ((self.message, ) +
                                                 tuple(self.position))


class Symbol(str):
    """
    A symbol read from source, remembering where it was found
    """

    position = None


class Form(list):
    """
    A parenthesized or bracketed list of forms
    """

    def __init__(self, position, bracket="(", members=()):
        super().__init__(members)
        self.position = position
        self.bracket = bracket


def parse(stream):
    """
    Generates (event, position, *data) tuples from the characters of
    the text stream
    """

    text = stream.read()
    line, col = 1, 0
    index = 0
    length = len(text)

    while index < length:
        c = text[index]
        position = (line, col)

        if c == "\n":
            yield (E_NEWLINE, position)
            line += 1
            col = 0
            index += 1
            continue

        elif c.isspace():
            width = 1

        elif c in "([":
            yield (E_OPEN, position, c)
            width = 1

        elif c in ")]":
            yield (E_CLOSE, position, c)
            width = 1

        elif c == ";":
            end = text.find("\n", index)
            end = length if end < 0 else end
            yield (E_COMMENT, position, text[index:end])
            width = end - index

        elif c == "\"":
            raise ReaderSyntaxError("strings are not supported", position)

        else:
            end = index
            while end < length:
                n = text[end]
                if n.isspace() or n in _DELIMITERS:
                    break
                end += 1
            yield (E_ATOM, position, text[index:end])
            width = end - index

        index += width
        col += width


def _as_atom(token, position):
    if token == "true":
        return True
    elif token == "false":
        return False
    elif _integer_re(token):
        return int(token)
    elif _hex_re(token):
        return int(token, 16)
    elif _float_re(token):
        return float(token)
    else:
        sym = Symbol(token)
        sym.position = position
        return sym


def compose(events):
    """
    Composes a single form from the event stream. Returns None if the
    stream is exhausted.
    """

    stack = []

    for event, position, *data in events:

        if event in (E_NEWLINE, E_COMMENT):
            # let the parser count lines for us, and don't bother
            # keeping comments
            continue

        elif event == E_OPEN:
            stack.append(Form(position, data[0]))
            continue

        elif event == E_CLOSE:
            if not stack:
                raise ReaderSyntaxError("unexpected %s" % data[0], position)
            node = stack.pop()
            if _CLOSING[node.bracket] != data[0]:
                msg = "%s closed by %s" % (node.bracket, data[0])
                raise ReaderSyntaxError(msg, position)

        else:
            node = _as_atom(data[0], position)

        if stack:
            stack[-1].append(node)
        else:
            return node

    if stack:
        raise ReaderSyntaxError("unterminated list", stack[-1].position)

    return None


def _malformed(message, form):
    position = getattr(form, "position", None)
    if position:
        message = "%s at line %d, column %d" % ((message, ) + position)
    return MalformedExpression(message, form)


def _params(form, special):
    if not isinstance(form, Form) or \
       not all(isinstance(p, Symbol) for p in form):
        raise _malformed("%s parameters must be a list of symbols" %
                         special, form)
    return tuple(map(str, form))


def translate(form):
    """
    Converts a composed form into a surface AST node
    """

    if isinstance(form, Symbol):
        return Variable(str(form))

    elif isinstance(form, Form):
        if not form:
            raise _malformed("empty application", form)
        head, *rest = form

        if isinstance(head, Symbol):
            special = _specials.get(head)
            if special:
                return special(form, *rest)

            op = get_operator(head)
            if op:
                if not op.accepts(len(rest)):
                    msg = "wrong number of operands to %s" % head
                    raise _malformed(msg, form)
                return Operation(str(head), map(translate, rest))

        return Application(translate(head), map(translate, rest))

    elif isinstance(form, (bool, int, float)):
        return Literal(form)

    else:
        raise _malformed("cannot translate", form)


def _translate_if(form, *rest):
    if len(rest) != 3:
        raise _malformed("if requires test, consequent and alternative",
                         form)
    return conditional(*map(translate, rest))


def _translate_fn(form, *rest):
    if len(rest) != 2:
        raise _malformed("%s requires parameters and a body" % form[0],
                         form)
    params, body = rest
    return Abstraction(_params(params, form[0]), translate(body))


def _translate_defn(form, *rest):
    if len(rest) != 3 or not isinstance(rest[0], Symbol):
        raise _malformed("defn requires a name, parameters and a body",
                         form)
    name, params, body = rest
    return Definition(str(name), _params(params, "defn"), translate(body))


def _variables(expr, found=None):
    # every variable name appearing anywhere in expr
    if found is None:
        found = set()
    if isinstance(expr, Variable):
        found.add(expr.name)
    expr.walk(lambda child: _variables(child, found), lambda *_: None)
    return found


def _short_circuit(form, rest, pick):
    # (and a b ...) and (or a b ...) become nested conditionals, so an
    # operand is only evaluated when every operand before it failed to
    # decide the result. A serious operand is bound once, to a name
    # not free in the remaining operands.

    if not rest:
        raise _malformed("%s requires at least one operand" % form[0], form)

    first = translate(rest[0])
    if len(rest) == 1:
        return first

    remainder = _short_circuit(form, rest[1:], pick)

    if first.is_trivial():
        return conditional(first, *pick(first, remainder))

    taken = _variables(remainder)
    name = "%s__" % form[0]
    while name in taken:
        name += "_"

    test = Variable(name)
    body = conditional(test, *pick(test, remainder))
    return Application(Abstraction((name, ), body), (first, ))


def _translate_and(form, *rest):
    return _short_circuit(form, rest, lambda test, more: (more, test))


def _translate_or(form, *rest):
    return _short_circuit(form, rest, lambda test, more: (test, more))


_specials = {
    "and": _translate_and,
    "or": _translate_or,
    "if": _translate_if,
    "fn": _translate_fn,
    "lambda": _translate_fn,
    "defn": _translate_defn,
}


def read_stream(stream):
    """
    Generates the surface AST nodes of each top-level form in stream
    """

    events = parse(stream)
    while True:
        form = compose(events)
        if form is None:
            break
        yield translate(form)


def read_all(src_str):
    return list(read_stream(StringIO(src_str)))


def read(src_str):
    """
    The surface AST node of the single form in src_str
    """

    nodes = read_all(src_str)
    if len(nodes) != 1:
        raise ReaderSyntaxError("expected exactly one form, found %d" %
                                len(nodes))
    return nodes[0]


#
# The end.
