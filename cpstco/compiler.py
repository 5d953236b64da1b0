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
cpstco.compiler

The compiler pipeline. Each top-level form is CPS converted, has its
continuations abstracted, is thunkified, and is finally trampolined
into an entry function of the resulting Program.

license: LGPL v.3
"""


import logging

from . import MalformedExpression
from .abstract import abstract_k
from .cps import CPSConverter
from .emit import emit_program
from .names import NameSource
from .parse import read_all, read_stream
from .thunkify import thunkify
from .tramp import Trampoliner, runtime_names, wrap_entry


__all__ = (
    "DEFAULT_PARAMS",
    "compile_forms", "compile_str", "compile_to_source",
    "compile_to_file", "load_str",
)


_log = logging.getLogger(__name__)


DEFAULT_PARAMS = {
    # name given to a top-level expression which isn't a definition
    "entry": "main",

    # module the emitted source imports the runtime helpers from
    "runtime": "cpstco.runtime",
}


def _params(params):
    unknown = set(params).difference(DEFAULT_PARAMS)
    if unknown:
        raise TypeError("unknown compiler parameters: %s" %
                        ", ".join(sorted(unknown)))

    result = dict(DEFAULT_PARAMS)
    result.update(params)
    return result


def compile_forms(forms, names=None, **params):
    """
    Compiles a sequence of surface AST nodes into a Program. A fresh
    NameSource is used unless `names` is given.

    Raises a CompilerException subclass if any form cannot be
    compiled; no partial Program is ever returned.
    """

    params = _params(params)
    if names is None:
        names = NameSource()

    runtime = runtime_names(names)
    converter = CPSConverter(names)

    seen = set()
    definitions = []

    for form in forms:
        defn = wrap_entry(form, params["entry"])
        if defn.name in seen:
            raise MalformedExpression("duplicate definition", defn)
        seen.add(defn.name)

        _log.debug("compiling %s", defn.name)

        defn = converter.cps_definition(defn)
        _log.debug("cps: %r", defn)

        defn = abstract_k(defn, runtime["apply_k"])
        _log.debug("abstract-k: %r", defn)

        defn = thunkify(defn)
        _log.debug("thunkify: %r", defn)

        definitions.append(defn)

    program = Trampoliner(runtime, names).program(definitions)
    _log.debug("trampolined %d definitions", len(program.definitions))

    return program


def compile_str(src_str, names=None, **params):
    return compile_forms(read_all(src_str), names, **params)


def compile_to_source(src_str, **params):
    """
    Python module source for the program in src_str
    """

    params = _params(params)
    program = compile_str(src_str, **params)
    return emit_program(program, params["runtime"])


def compile_to_file(filename, destname, **params):
    """
    Compiles the cpstco source file `filename` and writes the python
    module source to `destname`
    """

    params = _params(params)

    with open(filename, "rt") as source:
        program = compile_forms(read_stream(source), **params)

    _log.info("writing %s", destname)
    with open(destname, "wt") as dest:
        dest.write(emit_program(program, params["runtime"]))


def load_str(src_str, env=None, filename="<cpstco>", **params):
    """
    Compiles and executes the program in src_str, returning the
    resulting namespace
    """

    source = compile_to_source(src_str, **params)
    code = compile(source, filename, "exec")

    namespace = dict(env) if env else {}
    exec(code, namespace)
    return namespace


#
# The end.
