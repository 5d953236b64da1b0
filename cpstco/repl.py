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
Read-Eval-Print-Loop for cpstco

license: LGPL v.3
"""


import sys

from traceback import format_exception, format_exception_only

from . import CompilerException
from .ast import Definition
from .compiler import compile_forms
from .emit import emit_program
from .parse import read_all


REPL_ENTRY = "repl_entry"


def eval_line(line, env):
    """
    Compiles and runs every form in line within the namespace env.
    Definitions are bound into env; if line holds an expression, its
    value is returned.
    """

    forms = read_all(line)
    if not forms:
        return None

    program = compile_forms(forms, entry=REPL_ENTRY)
    code = compile(emit_program(program), "<repl>", "exec")
    exec(code, env)

    if any(not isinstance(form, Definition) for form in forms):
        return env[REPL_ENTRY]()
    else:
        return None


def repl(env=None, stdin=sys.stdin, stdout=sys.stdout, stderr=sys.stderr):
    """
    enter into a read-eval-print-loop, using stdin, stdout, and stderr
    for user I/O.

    returns the resulting global name space when the repl completes.
    """

    if env is None:
        env = {}

    while True:
        try:
            if stdin is sys.stdin:
                line = input("cpstco > ")
            else:
                line = stdin.readline()
                if not line:
                    raise EOFError()

            result = eval_line(line, env)
            env['_'] = result
            if result is not None:
                print(result, file=stdout)

        except KeyboardInterrupt as ki:
            print(ki, file=stderr)
            stderr.flush()
            break

        except EOFError:
            print(file=stderr)
            stderr.flush()
            break

        except CompilerException:
            show_compile_error(file=stderr)
            stderr.flush()

        except Exception:
            show_traceback(file=stderr)
            stderr.flush()

        stdout.flush()

    return env


def show_compile_error(file=sys.stderr):
    type_, value, tb = sys.exc_info()
    lines = format_exception_only(type_, value)
    print(''.join(lines), file=file)


def show_traceback(skip=1, file=sys.stderr):
    sys.last_type, sys.last_value, last_tb = ei = sys.exc_info()
    sys.last_traceback = last_tb

    while skip > 0 and last_tb.tb_next is not None:
        last_tb = last_tb.tb_next
        skip -= 1

    try:
        lines = format_exception(ei[0], ei[1], last_tb)
        print(''.join(lines), file=file)

    finally:
        last_tb = ei = None


#
# The end.
