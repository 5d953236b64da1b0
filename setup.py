#! /usr/bin/env python3


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
cpstco, a continuation-passing tail-call optimizing compiler

:license: LGPL v.3
"""


def config():
    return {
        "name": "cpstco",
        "version": "0.1.0",
        "description": "CPS conversion and trampolining compiler for a"
                       " small functional language",
        "license": "LGPL v.3",

        "packages": [
            "cpstco",
        ],

        "python_requires": ">=3.5",

        "install_requires": [
            "appdirs",
        ],

        "extras_require": {
            "test": [
                "pytest",
            ],
        },

        "zip_safe": False,

        "entry_points": {
            "console_scripts": [
                "cpstco=cpstco.cli:main",
            ],
        },
    }


def setup():
    from setuptools import setup

    setup(**config())


if __name__ == "__main__":
    setup()


#
# The end.
