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
cpstco.cli

Command-line interface for compiling cpstco source files into python
modules, for running them, or for entering the repl

license: LGPL v.3
"""


import logging
import sys

from appdirs import AppDirs
from argparse import ArgumentParser
from os import makedirs
from os.path import basename, dirname, join, splitext

from . import CompilerException
from .compiler import compile_to_file, load_str, DEFAULT_PARAMS
from .repl import repl


_APPDIR = AppDirs("cpstco")

DEFAULT_HISTFILE = join(_APPDIR.user_config_dir, "history")


_log = logging.getLogger(__name__)


class CLIException(Exception):
    pass


def cli_compile(options):

    filename = options.filename
    if not filename:
        raise CLIException("--compile requires that FILENAME is specified")

    destname = options.output
    if not destname:
        destname = splitext(filename)[0] + ".py"

    compile_to_file(filename, destname, entry=options.entry)


def cli_run(options, env):
    with open(options.filename, "rt") as source:
        src_str = source.read()

    env.update(load_str(src_str, env, options.filename,
                        entry=options.entry))

    entry = env.get(options.entry)
    if entry is not None:
        result = entry()
        if result is not None:
            print(result)


def cli_repl(options, env):
    histfile = options.histfile

    try:
        import readline
    except ImportError:
        readline = None

    if readline is not None and histfile:
        try:
            readline.read_history_file(histfile)
        except OSError:
            _log.debug("no history read from %s", histfile)

    try:
        repl(env)

    finally:
        if readline is not None and histfile:
            makedirs(dirname(histfile), exist_ok=True)
            readline.write_history_file(histfile)


def cli(options):
    """
    Run as from the command line, with the given options argument
    """

    if options.compile:
        return cli_compile(options)

    env = {}

    if options.filename:
        cli_run(options, env)

        if not options.interactive:
            return

    cli_repl(options, env)


def cli_option_parser(name):
    """
    Create an `ArgumentParser` instance with the options requested by
    the `cli` function
    """

    parser = ArgumentParser(prog=basename(name))

    parser.add_argument("filename", nargs="?", default=None)

    parser.add_argument("--histfile", dest="histfile",
                        action="store", default=DEFAULT_HISTFILE,
                        help="REPL history file")

    parser.add_argument("--entry", dest="entry",
                        action="store", default=DEFAULT_PARAMS["entry"],
                        help="Name of the function a top-level"
                        " expression is compiled into")

    parser.add_argument("-o", "--output", dest="output",
                        action="store", default=None,
                        help="Destination of a compiled python module")

    parser.add_argument("-v", "--verbose", dest="verbose",
                        action="store_true", default=False,
                        help="Log each stage of compilation")

    g = parser.add_mutually_exclusive_group()

    g.add_argument("-i", "--interactive", dest="interactive",
                   action="store_true", default=False,
                   help="Enter interactive mode after executing the"
                   " given script")

    g.add_argument("-C", "--compile", dest="compile",
                   action="store_true", default=False,
                   help="Compile the specified file into a python"
                   " module rather than running it")

    return parser


def main(args=sys.argv):
    """
    Entry point for the command line
    """

    name, *args = args

    parser = cli_option_parser(name)
    options = parser.parse_args(args)

    if options.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        cli(options)

    except KeyboardInterrupt:
        print(file=sys.stderr)
        return 130

    except (CompilerException, CLIException) as exc:
        print("%s: %s" % (basename(name), exc), file=sys.stderr)
        return 1

    else:
        return 0


if __name__ == "__main__":
    sys.exit(main())


#
# The end.
