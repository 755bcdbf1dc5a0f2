# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Install layout: install directories and the plan of installation.
 Nothing here touches the file system.
"""

import posixpath

from capimake.constants import CWD, DEFAULT_INCLUDEDIRNAME, DEFAULT_DATADIRNAME, \
                               DEFAULT_BINDIRNAME, PKGCONFIG_DIRNAME, \
                               LIB_KIND_LINK, LIB_KIND_DEF, LIB_KIND_DEBUGINFO
from capimake.error import CapiMakeLogicError
from capimake.naming import buildOutputName
from capimake.pathutils import canonicalize, joinPath, appendToDestdir, \
                               matchFiles, toPosixPath
from capimake.target import defaultPrefix, defaultLibdirName
from capimake.types import InstallPaths, InstallEntry

_joinpath = posixpath.join

# artifacts which are installed only if the build tool made them
OPTIONAL_ROLES = frozenset((LIB_KIND_DEF, LIB_KIND_DEBUGINFO))

def resolvePaths(config, platform, destdir = None, prefix = None, libdir = None,
                 includedir = None, datadir = None, bindir = None,
                 pkgconfigdir = None):
    """
    Resolve install directories. Relative values are joined onto the prefix
    and absolute values are used as is. Returned paths don't contain destdir.
    """

    # pylint: disable = too-many-arguments, unused-argument

    prefix = canonicalize(toPosixPath(prefix or defaultPrefix(platform)))

    def resolveDir(value, default, base = prefix):
        return canonicalize(joinPath(base, value or default))

    libdir = resolveDir(libdir, defaultLibdirName(platform))

    return InstallPaths(
        destdir = canonicalize(toPosixPath(destdir)) if destdir else None,
        prefix = prefix,
        libdir = libdir,
        includedir = resolveDir(includedir, DEFAULT_INCLUDEDIRNAME),
        datadir = resolveDir(datadir, DEFAULT_DATADIRNAME),
        bindir = resolveDir(bindir, DEFAULT_BINDIRNAME),
        pkgconfigdir = canonicalize(joinPath(prefix, pkgconfigdir)) if pkgconfigdir \
                        else _joinpath(libdir, PKGCONFIG_DIRNAME),
    )

def staged(paths, path):
    """ Get path with destdir """
    return appendToDestdir(paths.destdir, path)

def headerDir(config, paths):
    """ Get directory for the header without destdir """
    subdir = config.header.subdirectory
    if not subdir:
        return paths.includedir
    return canonicalize(_joinpath(paths.includedir, subdir))

def libDir(config, paths):
    """ Get directory for libraries without destdir """
    subdir = config.library.installSubdir
    if not subdir:
        return paths.libdir
    return canonicalize(_joinpath(paths.libdir, toPosixPath(subdir)))

class InstallPlan(object):
    """
    Ordered list of InstallEntry objects. No two entries can have the
    same destination.
    """

    __slots__ = ('_entries', '_byDst')

    def __init__(self, entries = None):
        self._entries = []
        self._byDst = {}
        for entry in entries or ():
            self.add(entry)

    def add(self, entry):
        """
        Add InstallEntry object.
        Raises CapiMakeLogicError if the destination is used already.
        """

        dst = entry.dst
        other = self._byDst.get(dst)
        if other is not None:
            msg = "Install destination %r is used twice: " % dst
            msg += "from %r and from %r" % (other.src or other.linkTo,
                                            entry.src or entry.linkTo)
            raise CapiMakeLogicError(msg)

        self._byDst[dst] = entry
        self._entries.append(entry)

    @property
    def entries(self):
        """ Tuple of all entries """
        return tuple(self._entries)

    def files(self):
        """ Entries of regular files """
        return [x for x in self._entries if x.kind == 'file']

    def links(self):
        """ Entries of symlinks """
        return [x for x in self._entries if x.kind == 'symlink']

    def dirs(self):
        """ Sorted list of destination directories """
        return sorted(set(posixpath.dirname(x.dst) for x in self._entries))

    def get(self, dst):
        """ Get entry by destination or None """
        return self._byDst.get(dst)

    def __iter__(self):
        return iter(self._entries)

    def __len__(self):
        return len(self._entries)

    def __eq__(self, other):
        if not isinstance(other, InstallPlan):
            return NotImplemented
        # pylint: disable = protected-access
        return self._entries == other._entries

    __hash__ = None

    def __repr__(self):
        return 'InstallPlan(%r)' % self._entries

def _fileEntry(src, dst, role):
    return InstallEntry(kind = 'file', src = src, dst = dst, linkTo = None,
                        role = role)

def _patternEntries(targets, basedir, defaultTo, roots, candidates, role):
    """
    Make entries for install targets with glob patterns
    """

    result = []
    for target in targets:
        files = candidates.get(target.kind) or ()
        root = roots[target.kind]
        to = target.dst

        for path, subpath in matchFiles(target.src, files):
            if subpath:
                dst = _joinpath(basedir, defaultTo if to is None else to, subpath)
            elif to is None:
                # the same name in the default dir
                dst = _joinpath(basedir, defaultTo, posixpath.basename(path))
            else:
                # pattern without wildcards renames the file
                dst = _joinpath(basedir, to)
            result.append((_joinpath(root, path), canonicalize(dst), role))
    return result

def planInstall(config, platform, paths, libraryPlan, builddir,
                assetFiles = None, generatedFiles = None, pcFilename = None,
                rootdir = None):
    """
    Make InstallPlan.
    Params 'assetFiles' and 'generatedFiles' are lists of relative POSIX
    paths of existing files in 'rootdir' and in 'builddir' respectively.
    They are candidates for patterns of install targets.
    """

    # pylint: disable = too-many-arguments, too-many-locals

    builddir = toPosixPath(builddir)
    rootdir = toPosixPath(rootdir or CWD)
    roots = { 'asset' : rootdir, 'generated' : builddir }
    candidates = {
        'asset' : sorted(toPosixPath(x) for x in assetFiles or ()),
        'generated' : sorted(toPosixPath(x) for x in generatedFiles or ()),
    }

    plan = InstallPlan()
    add = plan.add
    stage = lambda path: staged(paths, path)

    pcFilename = pcFilename or '%s.pc' % config.pkgconfig.filename
    add(_fileEntry(_joinpath(builddir, pcFilename),
                   stage(_joinpath(paths.pkgconfigdir, pcFilename)), 'pkgconfig'))

    header = config.header
    if header.enabled:
        hdir = headerDir(config, paths)
        hname = '%s.h' % header.name
        add(_fileEntry(_joinpath(builddir, hname),
                       stage(_joinpath(hdir, hname)), 'header'))

        entries = _patternEntries(config.install.include, paths.includedir,
                                  header.subdirectory, roots, candidates,
                                  'include')
        for src, dst, role in entries:
            add(_fileEntry(src, stage(dst), role))

    entries = _patternEntries(config.install.data, paths.datadir, '',
                              roots, candidates, 'data')
    for src, dst, role in entries:
        add(_fileEntry(src, stage(dst), role))

    libdir = libDir(config, paths)
    for artifact in libraryPlan:
        dstdir = paths.bindir if artifact.location == 'bin' else libdir
        dst = stage(_joinpath(dstdir, artifact.filename))
        if artifact.kind == LIB_KIND_LINK:
            add(InstallEntry(kind = 'symlink', src = None, dst = dst,
                             linkTo = artifact.linkTo, role = artifact.kind))
            continue

        src = _joinpath(builddir, buildOutputName(config, platform, artifact))
        add(_fileEntry(src, dst, artifact.kind))

    return plan
