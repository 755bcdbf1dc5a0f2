# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Build fingerprint: hash of produced artifacts and install paths with the
 native libs reported by the build tool. The build tool doesn't report
 native libs again when nothing was rebuilt so they are taken from here.
"""

import os

from capimake import log
from capimake.constants import CACHE_FILENAME_PATTERN
from capimake.error import CapiMakeConfError
from capimake.manifest import yaml
from capimake.utils import hashFiles

class Fingerprint(object):
    """
    Fingerprint of a build saved into YAML file in the build directory.
    Not thread safe.
    """

    __slots__ = ('_pathname', 'hash', 'systemLibs', 'staticLibs', 'outputs')

    def __init__(self, name, builddir):
        self._pathname = os.path.join(builddir, CACHE_FILENAME_PATTERN % name)
        self.hash = None
        self.systemLibs = []
        self.staticLibs = []
        self.outputs = []

    @property
    def path(self):
        """ Get real path """
        return self._pathname

    def exists(self):
        """ Return True if the cache file exists """
        return os.path.isfile(self._pathname)

    @staticmethod
    def calcHash(files, paths, config = None):
        """
        Calculate hash of files, install paths and resolved config.
        Returns None if some file cannot be read.
        """
        extra = (sorted(paths._asdict().items()), repr(config))
        return hashFiles(sorted(files), extra = extra)

    def load(self):
        """
        Load data from the file. Returns False if there is no valid cache.
        """

        if not self.exists():
            return False

        try:
            data = yaml.load(self._pathname)
        except (CapiMakeConfError, OSError) as ex:
            log.warn("Build cache %r is invalid, it will be rebuilt: %s",
                     self._pathname, ex)
            return False

        self.hash = data.get('hash')
        self.systemLibs = list(data.get('system-libs') or [])
        self.staticLibs = list(data.get('static-libs') or [])
        self.outputs = list(data.get('outputs') or [])
        return True

    def save(self):
        """ Save data to the file """

        data = {
            'hash' : self.hash,
            'system-libs' : list(self.systemLibs),
            'static-libs' : list(self.staticLibs),
            'outputs' : list(self.outputs),
        }

        pathname = self._pathname
        tmppathname = pathname + '.tmp'
        yaml.dump(data, tmppathname)
        os.replace(tmppathname, pathname)

    def matches(self, newHash):
        """ Check that the saved hash is the same """
        return newHash is not None and self.hash == newHash
