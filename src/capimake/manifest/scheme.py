# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Scheme of the 'capi' table of a manifest. Only known keys are described,
 unknown keys are always allowed.
"""

from capimake.error import CapiMakeConfValueError
from capimake.version import checkFormat as checkVersionFormat

def _checkSemVer(_, value, fullkey):
    if not checkVersionFormat(value):
        msg = "Value %r is invalid semantic version" % value
        msg += " for the param %r." % fullkey
        raise CapiMakeConfValueError(msg)

def _checkNotNegative(_, value, fullkey):
    if value < 0:
        msg = "Value %r cannot be negative" % value
        msg += " for the param %r." % fullkey
        raise CapiMakeConfValueError(msg)

def _checkSuffixComponents(_, value, fullkey):
    if value < 1:
        msg = "Value %r is invalid for the param %r." % (value, fullkey)
        msg += " It should be at least 1."
        raise CapiMakeConfValueError(msg)

def _checkNotEmpty(_, value, fullkey):
    if not value:
        msg = "Value cannot be empty for the param %r." % fullkey
        raise CapiMakeConfValueError(msg)

_INSTALL_TARGET_SCHEME = {
    'type' : 'list',
    'vars-type' : 'dict',
    'dict-vars' : {
        'from' : { 'type': 'str', 'allowed' : _checkNotEmpty },
        'to'   : { 'type': 'str' },
    },
    'dict-required' : ('from', ),
}

_INSTALL_TARGETS_SCHEME = {
    'type' : 'dict',
    'vars' : {
        'asset'     : _INSTALL_TARGET_SCHEME,
        'generated' : _INSTALL_TARGET_SCHEME,
    },
}

capischeme = {
    'min_version' : { 'type': 'str', 'allowed' : _checkSemVer },
    'header_name' : { 'type': 'str' },
    'header' : {
        'type' : 'dict',
        'vars' : {
            'name'         : { 'type': 'str', 'allowed' : _checkNotEmpty },
            'subdirectory' : { 'type': ('bool', 'str') },
            'generation'   : { 'type': 'bool' },
            'enabled'      : { 'type': 'bool' },
        },
    },
    'pkg_config' : {
        'type' : 'dict',
        'vars' : {
            'name'             : { 'type': 'str' },
            'filename'         : { 'type': 'str', 'allowed' : _checkNotEmpty },
            'description'      : { 'type': 'str' },
            'version'          : { 'type': 'str' },
            'requires'         : { 'type': ('str', 'list-of-strs') },
            'requires_private' : { 'type': ('str', 'list-of-strs') },
            'strip_include_path_components' : {
                'type': 'int', 'allowed' : _checkNotNegative,
            },
        },
    },
    'library' : {
        'type' : 'dict',
        'vars' : {
            'name'           : { 'type': 'str', 'allowed' : _checkNotEmpty },
            'version'        : { 'type': 'str', 'allowed' : _checkSemVer },
            'install_subdir' : { 'type': 'str' },
            'versioning'     : { 'type': 'bool' },
            'version_suffix_components' : {
                'type': 'int', 'allowed' : _checkSuffixComponents,
            },
            'rustflags'      : { 'type': ('str', 'list-of-strs') },
            'import_library' : { 'type': 'bool' },
        },
    },
    'install' : {
        'type' : 'dict',
        'vars' : {
            'include' : _INSTALL_TARGETS_SCHEME,
            'data'    : _INSTALL_TARGETS_SCHEME,
        },
    },
}

packagescheme = {
    'name'        : { 'type': 'str', 'allowed' : _checkNotEmpty },
    'version'     : { 'type': 'str' },
    'description' : { 'type': 'str' },
    'license'     : { 'type': 'str' },
    'requires'         : { 'type': ('str', 'list-of-strs') },
    'requires_private' : { 'type': ('str', 'list-of-strs') },
    'metadata'    : { 'type': 'dict' },
}
