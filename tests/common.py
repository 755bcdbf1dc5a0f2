# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from capimake.config import resolve
from capimake.target import fromTriple, HostInfo
from capimake.types import PackageMetadata
from capimake.version import SemVer

TOOL_VERSION = '1.0.0'

LINUX_GNU = 'x86_64-unknown-linux-gnu'
LINUX_MUSL = 'x86_64-unknown-linux-musl'
MACOS = 'x86_64-apple-darwin'
WINDOWS_GNU = 'x86_64-pc-windows-gnu'
WINDOWS_MSVC = 'x86_64-pc-windows-msvc'

DEBIAN_HOST = HostInfo(arch = 'x86_64', os = 'linux', isDebianLike = True,
                       multiarchTriplet = 'x86_64-linux-gnu')
OTHER_HOST = HostInfo(arch = 'x86_64', os = 'linux', isDebianLike = False,
                      multiarchTriplet = None)

def makeMetadata(name = 'foo', version = '1.2.3', **kwargs):
    params = dict(
        name = name,
        libname = name.replace('-', '_'),
        version = SemVer.parse(version),
        description = 'Foo library',
        license = 'MIT',
        requires = (),
        requiresPrivate = (),
    )
    params.update(kwargs)
    return PackageMetadata(**params)

def makeConfig(overrides = None, invocation = None, **kwargs):
    metadata = makeMetadata(**kwargs)
    return resolve(metadata, overrides or {}, TOOL_VERSION, invocation)

def makePlatform(triple = LINUX_GNU, **kwargs):
    return fromTriple(triple, **kwargs)
