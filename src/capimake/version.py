# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import re
import os
from functools import total_ordering

from capimake.pyutils import stringtype

VERSION_FILE_NAME = 'version'
VERSION_FILE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)),
                                 VERSION_FILE_NAME)

#pylint: disable=line-too-long
# from https://semver.org/
SEMVER_RE = r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
#pylint: enable=line-too-long

_SEMVER_RE_COMPILED = re.compile(SEMVER_RE)

def parseVersion(ver):
    """ Return result of re.match """
    return _SEMVER_RE_COMPILED.match(ver)

def checkFormat(ver):
    """ check format of version """
    return bool(parseVersion(ver))

@total_ordering
class SemVer(object):
    """
    Semantic version: major.minor.patch with optional pre-release and
    build metadata. Objects are read-only.
    """

    __slots__ = ('major', 'minor', 'patch', 'pre', 'build')

    def __init__(self, major, minor, patch, pre = None, build = None):
        object.__setattr__(self, 'major', major)
        object.__setattr__(self, 'minor', minor)
        object.__setattr__(self, 'patch', patch)
        object.__setattr__(self, 'pre', pre or None)
        object.__setattr__(self, 'build', build or None)

    def __setattr__(self, name, value):
        raise AttributeError("SemVer object is read-only")

    @classmethod
    def parse(cls, ver):
        """
        Make SemVer from a string.
        Raises ValueError if the string is not a valid semantic version.
        """

        if not isinstance(ver, stringtype):
            raise ValueError("Version %r is not a string" % (ver, ))

        match = parseVersion(ver.strip())
        if not match:
            raise ValueError("Version %r has invalid format" % ver)

        major, minor, patch, pre, build = match.groups()
        return cls(int(major), int(minor), int(patch), pre, build)

    @property
    def components(self):
        """ Numeric components as a tuple """
        return (self.major, self.minor, self.patch)

    def _preKey(self):
        # A version without pre-release has higher precedence
        if self.pre is None:
            return (1, )

        key = []
        for ident in self.pre.split('.'):
            if ident.isdigit():
                key.append((0, int(ident), ''))
            else:
                key.append((1, 0, ident))
        return (0, tuple(key))

    def _key(self):
        return (self.components, self._preKey())

    def __eq__(self, other):
        if not isinstance(other, SemVer):
            return NotImplemented
        # build metadata does not figure in precedence but it's a part of identity
        return self._key() == other._key() and self.build == other.build

    def __lt__(self, other):
        if not isinstance(other, SemVer):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash((self._key(), self.build))

    def __str__(self):
        result = '%d.%d.%d' % self.components
        if self.pre:
            result += '-%s' % self.pre
        if self.build:
            result += '+%s' % self.build
        return result

    def __repr__(self):
        return 'SemVer(%r)' % str(self)

def _readLastSaved():
    verFile = VERSION_FILE_PATH
    if not os.path.isfile(verFile):
        raise RuntimeError('File with version %r is not found' % verFile)

    ver = None
    with open(verFile, 'r', encoding = 'utf-8') as file:
        lines = file.readlines()

    for line in lines:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        ver = line
        break

    if not ver:
        raise RuntimeError('Version in file %r was not found' % verFile)

    if not checkFormat(ver):
        raise RuntimeError('Version %r has invalid format' % ver)

    return ver

_LAST_SAVED_VERSION = _readLastSaved()

def current():
    """ Get current version """
    return _LAST_SAVED_VERSION
