# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from capimake.error import CapiMakeConfError, CapiMakeConfTypeError, \
                           CapiMakeConfValueError
from capimake.pyutils import maptype, stringtype
from capimake.manifest.scheme import capischeme, packagescheme

class CapiMakeConfSubTypeError(CapiMakeConfTypeError):
    """Invalid manifest param type error"""

class Validator(object):
    """
    Validator for structure of the 'package' and 'capi' tables of a manifest.
    Unknown keys are allowed for forward compatibility but known keys must
    have valid types.
    """

    __slots__ = ('_conf', '_confpath')

    _typeHandlerNames = {
        'bool' : '_handleBool',
        'int'  : '_handleInt',
        'str'  : '_handleStr',
        'dict' : '_handleDict',
        'list' : '_handleList',
        'complex' : '_handleComplex',
        'list-of-strs' : '_handleListOfStrs',
    }

    def __init__(self, conf, confpath = None):
        self._conf = conf
        self._confpath = confpath

    @staticmethod
    def _getHandler(typeName):
        if not isinstance(typeName, stringtype):
            typeName = 'complex' if len(typeName) > 1 else typeName[0]
        return getattr(Validator, Validator._typeHandlerNames[typeName])

    @staticmethod
    def _getAttrValue(attrs, key, typename, **kwargs):
        value = attrs.get(key, attrs.get('%s-%s' % (typename, key), None))
        if value is None:
            if 'default' in kwargs:
                return kwargs['default']
            raise KeyError(key) # pragma: no cover
        return value

    def _checkAllowed(self, value, schemeAttrs, typename, fullkey):
        allowed = Validator._getAttrValue(schemeAttrs, 'allowed', typename,
                                          default = None)
        if allowed is None:
            return

        if callable(allowed):
            allowed(self._conf, value, fullkey)
        elif value not in allowed:
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg = '%s Allowed values: %s' %(msg, str(list(allowed))[1:-1])
            raise CapiMakeConfValueError(msg)

    def _handleComplex(self, node, key, schemeAttrs, fullkey):

        types = schemeAttrs['type']

        failed = True
        for _type in types:
            _schemeAttrs = schemeAttrs.get(_type, schemeAttrs)
            try:
                handler = Validator._getHandler(_type)
                handler(self, node, key, _schemeAttrs, fullkey)
            except CapiMakeConfSubTypeError:
                # it's an error from a sub type
                raise
            except CapiMakeConfTypeError:
                pass
            else:
                failed = False
                break

        if failed:
            typeswitch = {
                'str'         : 'string',
                'list-of-strs': 'list of strings',
                'dict'        : 'dict/another map type',
            }
            typeNames = [ typeswitch.get(_type, _type) for _type in types ]

            cnode = node[key]
            msg = "Value `%r` is invalid for the param %r." % (cnode, fullkey)
            msg += " It should be %s." % " or ".join(typeNames)
            raise CapiMakeConfTypeError(msg)

    def _handleBool(self, node, key, _, fullkey):
        if not isinstance(node[key], bool):
            msg = "Param %r should be bool" % fullkey
            raise CapiMakeConfTypeError(msg)

    def _handleInt(self, node, key, schemeAttrs, fullkey):
        cnode = node[key]
        # bool is a subclass of int in python but not here
        if isinstance(cnode, bool) or not isinstance(cnode, int):
            msg = "Param %r should be integer" % fullkey
            raise CapiMakeConfTypeError(msg)
        self._checkAllowed(cnode, schemeAttrs, 'int', fullkey)

    def _handleStr(self, node, key, schemeAttrs, fullkey):
        cnode = node[key]
        if not isinstance(cnode, stringtype):
            msg = "Param %r should be string" % fullkey
            raise CapiMakeConfTypeError(msg)
        self._checkAllowed(cnode, schemeAttrs, 'str', fullkey)

    def _handleList(self, node, key, schemeAttrs, fullkey):

        cnode = node[key]

        if not isinstance(cnode, (list, tuple)):
            msg = "Value `%r` is invalid for the param %r." % (cnode, fullkey)
            msg += " It should be list"
            raise CapiMakeConfTypeError(msg)

        varsType = schemeAttrs.get('vars-type')
        if not varsType:
            return

        handler = Validator._getHandler(varsType)
        _schemeAttrs = schemeAttrs.copy()
        _schemeAttrs['type'] = varsType

        for i, _ in enumerate(cnode):
            try:
                handler(self, cnode, i, _schemeAttrs, '%s.[%d]' % (fullkey, i))
            except CapiMakeConfTypeError as ex:
                raise CapiMakeConfSubTypeError(ex = ex) from ex

    def _handleListOfStrs(self, node, key, schemeAttrs, fullkey):

        cnode = node[key]

        def raiseInvalidTypeErr(value):
            msg = "Value `%r` is invalid for the param %r." % (value, fullkey)
            msg += " It should be list of strings"
            raise CapiMakeConfTypeError(msg)

        if not isinstance(cnode, (list, tuple)):
            raiseInvalidTypeErr(cnode)

        for elem in cnode:
            if not isinstance(elem, stringtype):
                raiseInvalidTypeErr(elem)

    def _handleDict(self, node, key, schemeAttrs, fullkey):

        cnode = node[key]

        if not isinstance(cnode, maptype):
            msg = "Param %r should be dict or another map type." % fullkey
            raise CapiMakeConfTypeError(msg)

        _getAttrValue = Validator._getAttrValue
        subscheme = _getAttrValue(schemeAttrs, 'vars', 'dict', default = None)
        if subscheme is None:
            # don't validate keys
            return

        required = _getAttrValue(schemeAttrs, 'required', 'dict', default = ())
        for name in required:
            if name not in cnode:
                msg = "Param %r must have the key %r." % (fullkey, name)
                raise CapiMakeConfError(msg)

        try:
            self._process(cnode, subscheme, fullkey)
        except CapiMakeConfTypeError as ex:
            raise CapiMakeConfSubTypeError(ex = ex) from ex

    @staticmethod
    def _genFullKey(keyprefix, key):
        return '.'.join((keyprefix, key)) if keyprefix else key

    def _process(self, node, scheme, keyprefix):

        for key, schemeAttrs in scheme.items():
            if node.get(key) is None:
                continue
            fullKey = Validator._genFullKey(keyprefix, key)
            typeName = schemeAttrs['type']
            Validator._getHandler(typeName)(self, node, key, schemeAttrs, fullKey)

    def _run(self, scheme, keyprefix):
        try:
            self._process(self._conf, scheme, keyprefix)
        except CapiMakeConfError as ex:
            if not self._confpath:
                raise
            errcls = type(ex)
            if isinstance(ex, CapiMakeConfTypeError):
                errcls = CapiMakeConfTypeError
            raise errcls(ex.msg, confpath = self._confpath) from ex

    def validateCapi(self, keyprefix = 'capi'):
        """
        Validate the conf as the 'capi' table
        """
        self._run(capischeme, keyprefix)

    def validatePackage(self, keyprefix = 'package'):
        """
        Validate the conf as the 'package' table
        """
        self._run(packagescheme, keyprefix)
