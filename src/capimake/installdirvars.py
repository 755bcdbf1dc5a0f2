# coding=utf-8
#

"""
 Copyright (c) 2022 Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os

from capimake.pyutils import struct
from capimake.pathutils import toPosixPath

VarConfig = struct('VarConfig', 'name, envname, desc')

CONFIG = (
    VarConfig(
        'destdir', 'DESTDIR',
        'staging directory prepended to every install destination',
    ),
    VarConfig(
        'prefix', 'PREFIX',
        'installation prefix',
    ),
    VarConfig(
        'libdir', 'LIBDIR',
        'installation directory for object code libraries',
    ),
    VarConfig(
        'includedir', 'INCLUDEDIR',
        'installation directory for C header files',
    ),
    VarConfig(
        'datadir', 'DATADIR',
        'installation directory for read-only architecture-independent data',
    ),
    VarConfig(
        'bindir', 'BINDIR',
        'installation directory for DLLs on windows',
    ),
    VarConfig(
        'pkgconfigdir', 'PKGCONFIGDIR',
        'installation directory for pkg-config files',
    ),
    VarConfig(
        'target', 'CAPI_TARGET',
        'explicit target triple',
    ),
)

VAR_NAMES = tuple(x.name for x in CONFIG)
VAR_ENVNAMES = tuple(x.envname for x in CONFIG)

# names of vars which are params of layout.resolvePaths
PATH_VAR_NAMES = tuple(x for x in VAR_NAMES if x != 'target')

class DirVars(object):
    """
    Provides install directory variables.
    Value of a variable is taken from explicit values, then from the
    environment. Variables without values are None, so defaults of the
    target platform are used for them.
    """

    def __init__(self, clivars = None, getenv = os.environ.get):

        clivars = clivars or {}

        for item in CONFIG:
            val = clivars.get(item.name)
            # We must check val after clivars.get because this method uses 'default'
            # value only if an item doesn't exist while variable can exist but
            # can be None
            if val is None:
                val = getenv(item.envname)
            if not val:
                val = None
            elif item.name != 'target':
                val = toPosixPath(val)

            setattr(self, item.name, val)

    def __getattr__(self, name):
        """
        It will only get called for undefined attributes
        and exists here mostly to mute pylint 'no-member' warning
        """
        raise self.__getattribute__(name)

    def get(self, name, default = None):
        """
        Get value by string name
        """
        val = self.__dict__.get(name)
        return default if val is None else val

    @property
    def isTargetOverridden(self):
        """ True if a target triple was set explicitly """
        return self.get('target') is not None

    def pathVars(self):
        """
        Get dict of path variables to use as kwargs for layout.resolvePaths
        """
        return { name:self.get(name) for name in PATH_VAR_NAMES }

    def setAllTo(self, cont):
        """
        Copy all set dir vars into a containter
        """

        for item in CONFIG:
            val = self.get(item.name)
            if val is not None:
                cont[item.envname] = val
