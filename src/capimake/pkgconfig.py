# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Building and rendering of pkg-config (.pc) files.
"""

import posixpath

from capimake.constants import LIB_KIND_STATIC, LIB_KIND_SHARED
from capimake.naming import findArtifact
from capimake.pathutils import canonicalize, splitPath, toPosixPath
from capimake.types import PkgConfigDescriptor

def _relToPrefix(path, prefix, var):
    """
    Express path with a variable if the path is inside the prefix
    """

    path = canonicalize(path)
    prefix = canonicalize(prefix)
    if path == prefix:
        return var
    base = prefix if prefix.endswith('/') else prefix + '/'
    if path.startswith(base):
        return '%s/%s' % (var, path[len(base):])
    return path

def includeFlag(config):
    """
    Get -I flag for Cflags. The last 'strip_include_path_components'
    components of the header subdirectory are removed from it.
    Returns None if headers are disabled.
    """

    if not config.header.enabled:
        return None

    parts = splitPath(toPosixPath(config.header.subdirectory or ''))
    strip = config.pkgconfig.stripIncludePathComponents or 0
    # too many components leave the flag at ${includedir}, never at empty -I
    if strip > 0:
        parts = parts[:max(len(parts) - strip, 0)]

    path = posixpath.join('${includedir}', *parts) if parts else '${includedir}'
    return '-I%s' % canonicalize(path)

def buildPkgConfig(config, libraryPlan, paths, systemLibs = (), staticLibs = ()):
    """
    Make PkgConfigDescriptor.
    Param 'systemLibs' is list of native libs reported for the shared
    library and 'staticLibs' is the same for the static library.
    """

    pcconf = config.pkgconfig
    library = config.library

    libdir = '${libdir}'
    if library.installSubdir:
        libdir = posixpath.join(libdir, toPosixPath(library.installSubdir))

    libs = ['-L%s' % canonicalize(libdir), '-l%s' % library.name]
    libsPrivate = []

    hasShared = findArtifact(libraryPlan, LIB_KIND_SHARED) is not None
    hasStatic = findArtifact(libraryPlan, LIB_KIND_STATIC) is not None

    if hasShared:
        libs.extend(systemLibs)
        if hasStatic:
            libsPrivate.extend(staticLibs)
    elif hasStatic:
        # nothing else to link with
        libs.extend(staticLibs)

    cflags = []
    flag = includeFlag(config)
    if flag:
        cflags.append(flag)

    prefix = canonicalize(paths.prefix)
    return PkgConfigDescriptor(
        prefix = prefix,
        execPrefix = '${prefix}',
        libdir = _relToPrefix(paths.libdir, prefix, '${exec_prefix}'),
        includedir = _relToPrefix(paths.includedir, prefix, '${prefix}'),
        name = pcconf.name,
        filename = pcconf.filename,
        description = pcconf.description or '',
        version = pcconf.version,
        cflags = tuple(cflags),
        libs = tuple(libs),
        libsPrivate = tuple(libsPrivate),
        requires = tuple(pcconf.requires or ()),
        requiresPrivate = tuple(pcconf.requiresPrivate or ()),
    )

def uninstalled(descriptor, builddir):
    """
    Make descriptor of the '-uninstalled' variant to use the library
    from the build directory.
    """

    libs = list(descriptor.libs)
    # the first item is always the search path
    libs[0] = '-L${prefix}'

    return descriptor._replace(
        prefix = canonicalize(toPosixPath(builddir)),
        includedir = '${prefix}/include',
        libdir = '${prefix}',
        libs = tuple(libs),
    )

def pcFilename(descriptor, isUninstalled = False):
    """ Get name of the .pc file """
    if isUninstalled:
        return '%s-uninstalled.pc' % descriptor.filename
    return '%s.pc' % descriptor.filename

def render(descriptor):
    """
    Render descriptor into text of a .pc file
    """

    lines = [
        'prefix=%s' % descriptor.prefix,
        'exec_prefix=%s' % descriptor.execPrefix,
        'libdir=%s' % descriptor.libdir,
        'includedir=%s' % descriptor.includedir,
        '',
        'Name: %s' % descriptor.name,
        'Description: %s' % descriptor.description.replace('\n', ' '),
        'Version: %s' % descriptor.version,
        'Libs: %s' % ' '.join(descriptor.libs),
        'Cflags: %s' % ' '.join(descriptor.cflags),
    ]

    if descriptor.libsPrivate:
        lines.append('Libs.private: %s' % ' '.join(descriptor.libsPrivate))
    if descriptor.requires:
        lines.append('Requires: %s' % ', '.join(descriptor.requires))
    if descriptor.requiresPrivate:
        lines.append('Requires.private: %s' % ', '.join(descriptor.requiresPrivate))

    return ''.join(x + '\n' for x in lines)
