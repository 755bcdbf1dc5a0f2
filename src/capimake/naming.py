# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Platform specific file names of library artifacts and versioned link chains.
"""

import os

from capimake.constants import LIB_KIND_STATIC, LIB_KIND_SHARED, LIB_KIND_LINK, \
                               LIB_KIND_IMPORT, LIB_KIND_DEF, LIB_KIND_DEBUGINFO
from capimake.error import CapiMakeConfValueError, CapiMakeLogicError, \
                           CapiMakeVersionSuffixTooLong
from capimake.types import LibraryArtifact

def sonameVersion(version, suffixComponents = None):
    """
    Get version string used in SONAME of a shared library.
    By default it's 'M' for M > 0, '0.m' for m > 0 and '0.0.p' otherwise.
    With suffixComponents = N it's the first N components of the version.
    """

    major, minor, patch = version.components

    if suffixComponents is None:
        if major > 0:
            return str(major)
        if minor > 0:
            return '0.%d' % minor
        return '0.0.%d' % patch

    if suffixComponents < 1:
        msg = "Param 'version_suffix_components' should be at least 1"
        raise CapiMakeConfValueError(msg)
    if suffixComponents > len(version.components):
        raise CapiMakeVersionSuffixTooLong(suffixComponents, version)

    return '.'.join(str(x) for x in version.components[:suffixComponents])

def fullVersion(version):
    """ Version string of the real shared library file: always 'M.m.p' """
    return '%d.%d.%d' % version.components

def _sover(library):
    return sonameVersion(library.version, library.versionSuffixComponents)

def _linkChain(library, subdir, bare, withVersion):
    """
    Make chain of shared library artifacts: real file, soname link and
    bare link. Param withVersion is a function to make file name with
    a version string.
    """

    if not library.versioning:
        return [LibraryArtifact(LIB_KIND_SHARED, bare, 'lib', subdir, None)]

    full = withVersion(fullVersion(library.version))
    soname = withVersion(_sover(library))

    chain = [LibraryArtifact(LIB_KIND_SHARED, full, 'lib', subdir, None)]
    if soname != full:
        chain.append(LibraryArtifact(LIB_KIND_LINK, soname, 'lib', subdir, full))
        chain.append(LibraryArtifact(LIB_KIND_LINK, bare, 'lib', subdir, soname))
    else:
        chain.append(LibraryArtifact(LIB_KIND_LINK, bare, 'lib', subdir, full))
    return chain

def _elfNames(config, platform, kinds, subdir):
    name = config.library.name
    result = []
    if LIB_KIND_STATIC in kinds:
        result.append(LibraryArtifact(LIB_KIND_STATIC, 'lib%s.a' % name,
                                      'lib', subdir, None))
    if LIB_KIND_SHARED in kinds:
        bare = 'lib%s.so' % name
        result.extend(_linkChain(config.library, subdir, bare,
                                 lambda ver: '%s.%s' % (bare, ver)))
    return result

def _machoNames(config, platform, kinds, subdir):
    name = config.library.name
    result = []
    if LIB_KIND_STATIC in kinds:
        result.append(LibraryArtifact(LIB_KIND_STATIC, 'lib%s.a' % name,
                                      'lib', subdir, None))
    if LIB_KIND_SHARED in kinds:
        result.extend(_linkChain(config.library, subdir, 'lib%s.dylib' % name,
                                 lambda ver: 'lib%s.%s.dylib' % (name, ver)))
    return result

def _peNames(config, platform, kinds, subdir):
    library = config.library
    name = library.name
    msvc = platform.abi == 'msvc'

    result = []
    if LIB_KIND_STATIC in kinds:
        filename = '%s.lib' % name if msvc else 'lib%s.a' % name
        result.append(LibraryArtifact(LIB_KIND_STATIC, filename,
                                      'lib', subdir, None))
    if LIB_KIND_SHARED not in kinds:
        return result

    # plugins go to the libdir subdirectory, other DLLs go to bindir
    dllLocation = 'lib' if library.installSubdir else 'bin'

    result.append(LibraryArtifact(LIB_KIND_SHARED, '%s.dll' % name,
                                  dllLocation, subdir, None))
    if library.importLibrary:
        filename = '%s.dll.lib' % name if msvc else 'lib%s.dll.a' % name
        result.append(LibraryArtifact(LIB_KIND_IMPORT, filename,
                                      'lib', subdir, None))
    result.append(LibraryArtifact(LIB_KIND_DEF, '%s.def' % name,
                                  'lib', subdir, None))
    if msvc:
        result.append(LibraryArtifact(LIB_KIND_DEBUGINFO, '%s.pdb' % name,
                                      dllLocation, subdir, None))
    return result

_NAMERS = {
    'elf'   : _elfNames,
    'macho' : _machoNames,
    'pe'    : _peNames,
}

def planNames(config, platform, feasibleKinds):
    """
    Get list of LibraryArtifact objects for feasible library kinds.
    Order of the list: static library, shared library, links (each link
    goes after its target), windows extra files.
    """

    subdir = config.library.installSubdir or ''
    namer = _NAMERS[platform.binFormat]
    return namer(config, platform, frozenset(feasibleKinds), subdir)

def findArtifact(artifacts, kind):
    """ Get the first artifact of the kind or None """
    for artifact in artifacts:
        if artifact.kind == kind:
            return artifact
    return None

def resolveLink(artifacts, filename):
    """
    Follow links in the list of artifacts until a real file.
    Returns filename of the real file.
    """

    byName = { x.filename:x for x in artifacts }
    visited = set()
    while True:
        artifact = byName.get(filename)
        if artifact is None or artifact.linkTo is None:
            return filename
        if filename in visited:
            raise CapiMakeLogicError("Cyclic link %r" % filename)
        visited.add(filename)
        filename = artifact.linkTo

def sharedObjectLinkArgs(config, platform, libdir, targetdir):
    """
    Get linker args for a shared library to pass to the build tool
    """

    library = config.library
    name = library.name
    args = []

    if platform.binFormat == 'elf':
        if platform.os == 'android' or not library.versioning:
            args.append('-Wl,-soname,lib%s.so' % name)
        else:
            args.append('-Wl,-soname,lib%s.so.%s' % (name, _sover(library)))
    elif platform.binFormat == 'macho':
        if library.versioning:
            sover = _sover(library)
            args.append('-Wl,-install_name,%s/lib%s.%s.dylib,-current_version,%s,'
                        '-compatibility_version,%s' % (libdir, name, sover,
                                    fullVersion(library.version), sover))
        else:
            args.append('-Wl,-install_name,%s/lib%s.dylib' % (libdir, name))
        # larger LC_RPATH and install_name entries
        args.append('-Wl,-headerpad_max_install_names')
    elif platform.binFormat == 'pe' and platform.abi == 'gnu':
        defpath = os.path.join(targetdir, '%s.def' % name)
        args.append('-Wl,--output-def,%s' % defpath)

    return args

def buildOutputName(config, platform, artifact):
    """
    Get name of the file produced by the build tool for an artifact.
    The build tool doesn't add versions to shared libraries, real files of
    the versioned chains are made from the unversioned output.
    """

    if artifact.kind != LIB_KIND_SHARED or platform.binFormat == 'pe':
        return artifact.filename

    name = config.library.name
    if platform.binFormat == 'macho':
        return 'lib%s.dylib' % name
    return 'lib%s.so' % name
