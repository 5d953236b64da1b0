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
cpstco.dispatch

Node-kind dispatch for the compiler passes. A pass is a subclass of
`Dispatch` with one `dispatch<Kind>` method per node kind it
rewrites, where a rule for a base kind (eg. `dispatchConditional`)
also covers every kind derived from it.

license: LGPL v.3
"""


from . import MalformedExpression


__all__ = ("Dispatch", )


class Dispatch(object):

    _dispatch_prefix = "dispatch"


    @classmethod
    def _rule_name(cls, kind):
        """
        Name of the method of this pass handling nodes of kind, or
        None if neither kind nor any of its bases has a rule
        """

        # resolved per pass class rather than per instance, as the
        # rules of a pass never vary between its instances
        rules = cls.__dict__.get("_dispatch_rules")
        if rules is None:
            rules = {}
            setattr(cls, "_dispatch_rules", rules)

        try:
            return rules[kind]
        except KeyError:
            pass

        found = None
        for base in kind.__mro__:
            name = cls._dispatch_prefix + base.__name__
            if callable(getattr(cls, name, None)):
                found = name
                break

        rules[kind] = found
        return found


    def dispatch(self, obj, *args, **kwds):
        """
        Applies the rule for the kind of `obj`, passing along any
        further arguments. Falls back to `default` when the pass has
        no rule for the kind.
        """

        name = self._rule_name(type(obj))
        if name is None:
            return self.default(obj, *args, **kwds)
        return getattr(self, name)(obj, *args, **kwds)


    def handles(self, kind):
        return self._rule_name(kind) is not None


    def default(self, obj, *args, **kwds):
        """
        Raises a `MalformedExpression` naming this pass and the kind of
        the offending object
        """

        msg = "%s has no rule for %s" % (type(self).__name__,
                                         type(obj).__name__)
        raise MalformedExpression(msg, obj)


#
# The end.
