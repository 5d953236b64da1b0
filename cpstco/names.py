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
cpstco.names

Fresh identifier generation for the compiler passes

license: LGPL v.3
"""


from itertools import count

from .operators import is_trivial_operator


__all__ = ("NameSource", "is_trivial_operator", )


class NameSource(object):
    """
    A deterministic counter handing out unique identifiers. Each
    compilation should own its own instance; sharing one across
    threads requires outside locking.
    """

    def __init__(self, start=1):
        self._start = start
        self._counter = count(start)


    def new_var(self, base="v"):
        """
        A new identifier derived from base, which is never equal to
        any other identifier produced by this source
        """

        return "%s__%d" % (base, next(self._counter))


    def reset(self):
        self._counter = count(self._start)


    def __call__(self, base="v"):
        return self.new_var(base)


#
# The end.
