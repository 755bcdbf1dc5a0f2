# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Records shared by all stages of planning and execution.
"""

from capimake.pyutils import struct

PackageMetadata = struct('PackageMetadata',
    'name, libname, version, description, license, requires, requiresPrivate',
    frozen = True)

TargetPlatform = struct('TargetPlatform',
    'triple, arch, vendor, os, osFamily, abi, binFormat, supportsDynamic, '
    'isMultiarchHost, multiarchTriplet, isTargetOverridden',
    frozen = True)

HeaderConfig = struct('HeaderConfig',
    'name, subdirectory, generation, enabled', frozen = True)

PkgConfigConfig = struct('PkgConfigConfig',
    'name, filename, description, version, requires, requiresPrivate, '
    'stripIncludePathComponents', frozen = True)

LibraryConfig = struct('LibraryConfig',
    'name, version, installSubdir, versioning, versionSuffixComponents, '
    'rustflags, importLibrary', frozen = True)

# kind: 'asset' or 'generated'
InstallTarget = struct('InstallTarget', 'kind, src, dst', frozen = True)

InstallConfig = struct('InstallConfig', 'include, data', frozen = True)

ResolvedConfig = struct('ResolvedConfig',
    'package, header, pkgconfig, library, install', frozen = True)

# 'linkTo' is a filename of the artifact that a link points to or None for
# real files. 'location' is 'lib' or 'bin'.
LibraryArtifact = struct('LibraryArtifact',
    'kind, filename, location, subdir, linkTo', frozen = True)

PkgConfigDescriptor = struct('PkgConfigDescriptor',
    'prefix, execPrefix, libdir, includedir, name, filename, description, '
    'version, cflags, libs, libsPrivate, requires, requiresPrivate',
    frozen = True)

InstallPaths = struct('InstallPaths',
    'destdir, prefix, libdir, includedir, datadir, bindir, pkgconfigdir',
    frozen = True)

# kind: 'file' or 'symlink'; for symlinks 'src' is None and 'linkTo'
# is the link's content
InstallEntry = struct('InstallEntry', 'kind, src, dst, linkTo, role',
                      frozen = True)

BuildResult = struct('BuildResult', 'systemLibs, staticLibs, outdir')
