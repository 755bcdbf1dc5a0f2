# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Here are some extra stuff based on python only built-in ones.
"""

#pylint: disable=invalid-name

from collections.abc import Mapping
maptype = Mapping

stringtype = str # pragma: no cover

def struct(typename, attrnames, frozen = False):
    """
    Generate simple and fast data class.
    Objects of a 'frozen' class cannot be changed after construction.
    """

    attrnames = tuple(attrnames.replace(',', ' ').split())
    reprfmt = '(' + ', '.join(name + '=%r' for name in attrnames) + ')'

    def _set(self, name, value):
        object.__setattr__(self, name, value)

    def __init__(self, *args, **kwargs):
        if len(args) > len(attrnames):
            msg = "__init__() takes %d positional arguments but %d were given" \
                % (len(attrnames) + 1, len(args) + 1)
            raise AttributeError(msg)
        for name in attrnames:
            _set(self, name, None)
        for name, value in zip(attrnames, args):
            _set(self, name, value)
        for name, value in kwargs.items():
            if name not in attrnames:
                msg = "__init__() got an unexpected keyword argument '%s'" % name
                raise TypeError(msg)
            _set(self, name, value)

    def __repr__(self):
        """ Return a nicely formatted representation string """
        return self.__class__.__name__ + \
                reprfmt % tuple(getattr(self, x) for x in attrnames)

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            return NotImplemented
        return all(getattr(self, x) == getattr(other, x) for x in attrnames)

    def __getattr__(self, name):
        """
        It will only get called for undefined attributes
        and exists here mostly to mute pylint 'no-member' warning
        """
        raise self.__getattribute__(name)

    def _replace(self, **kwargs):
        """ Make new object with some attributes replaced """
        values = { x:getattr(self, x) for x in attrnames }
        values.update(kwargs)
        return self.__class__(**values)

    def _asdict(self):
        """ Return attributes as a dict """
        return { x:getattr(self, x) for x in attrnames }

    namespace = {
        '__doc__'    : '%s(%s)' % (typename, attrnames),
        '__slots__'  : attrnames,
        '__init__'   : __init__,
        '__repr__'   : __repr__,
        '__eq__'     : __eq__,
        '__getattr__': __getattr__,
        '_replace'   : _replace,
        '_asdict'    : _asdict,
        '_fields'    : attrnames,
    }

    if frozen:
        def __setattr__(self, name, value):
            raise AttributeError("%s object is read-only" % typename)

        def __delattr__(self, name):
            raise AttributeError("%s object is read-only" % typename)

        def __hash__(self):
            values = []
            for name in attrnames:
                value = getattr(self, name)
                if isinstance(value, list):
                    value = tuple(value)
                elif isinstance(value, dict):
                    value = tuple(sorted(value.items()))
                values.append(value)
            return hash(tuple(values))

        namespace['__setattr__'] = __setattr__
        namespace['__delattr__'] = __delattr__
        namespace['__hash__'] = __hash__
    else:
        namespace['__hash__'] = None

    result = type(typename, (object,), namespace)

    return result
