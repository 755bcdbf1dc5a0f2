# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Target triples and facts about the host.
"""

from capimake import log
from capimake.constants import DEFAULT_PREFIX, DEFAULT_WINDOWS_PREFIX, \
                               DEFAULT_LIBDIRNAME, CPU_ARCH
from capimake.error import CapiMakePlatformUnsupported
from capimake.pyutils import struct
from capimake.types import TargetPlatform
from capimake import utils

# raw os from a triple -> OS family
_OS_FAMILIES = {
    'linux'     : 'linux',
    'android'   : 'linux',
    'androideabi' : 'linux',
    'illumos'   : 'linux',
    'solaris'   : 'linux',
    'haiku'     : 'linux',
    'hurd'      : 'linux',
    'emscripten': 'linux',
    # bare-metal targets produce ELF objects and can have only static libs
    'none'      : 'linux',
    'freebsd'   : 'bsd',
    'netbsd'    : 'bsd',
    'openbsd'   : 'bsd',
    'dragonfly' : 'bsd',
    'darwin'    : 'macos',
    'macos'     : 'macos',
    'ios'       : 'macos',
    'tvos'      : 'macos',
    'watchos'   : 'macos',
    'visionos'  : 'macos',
    'windows'   : 'windows',
    'cygwin'    : 'windows',
}

_BIN_FORMATS = {
    'linux'   : 'elf',
    'bsd'     : 'elf',
    'macos'   : 'macho',
    'windows' : 'pe',
}

# rustc names of host OS
_HOST_OS_NAMES = {
    'macos' : 'darwin',
}

HostInfo = struct('HostInfo', 'arch, os, isDebianLike, multiarchTriplet',
                  frozen = True)

_cache = {}

def hostInfo():
    """
    Gather facts about the host. It's done only once.
    """

    info = _cache.get('host')
    if info is not None:
        return info

    isDebianLike = utils.isDebianLike()
    triplet = utils.debianMultiarch() if isDebianLike else None

    info = HostInfo(
        arch = CPU_ARCH,
        os = _HOST_OS_NAMES.get(utils.hostOS(), utils.hostOS()),
        isDebianLike = isDebianLike,
        multiarchTriplet = triplet,
    )
    log.debug('target: host info %r', info)

    _cache['host'] = info
    return info

def splitTriple(triple):
    """
    Split target triple into (arch, vendor, os, env).
    Triples have form 'arch-vendor-os[-env]' but the vendor can be omitted
    in 3-component ones like 'aarch64-linux-android'.
    """

    parts = triple.strip().split('-')
    if len(parts) < 3 or not all(parts):
        raise CapiMakePlatformUnsupported("Invalid target triple %r" % triple,
                                          triple = triple)

    arch = parts[0]
    if len(parts) == 3:
        if parts[1] not in _OS_FAMILIES:
            return arch, parts[1], parts[2], ''
        osname, env = parts[1], parts[2]
        if env.startswith('android'):
            # target os of 'aarch64-linux-android' is android
            osname, env = env, ''
        return arch, 'unknown', osname, env

    return arch, parts[1], parts[2], '-'.join(parts[3:])

def _abiFamily(osname, env):
    if env.startswith('musl'):
        return 'musl'
    if env.startswith('msvc'):
        return 'msvc'
    if osname == 'none':
        return 'none'
    return 'gnu'

def _triplet(arch, osname, env):
    # the same form as Debian multiarch triplets: arch-os-env
    parts = [arch, osname]
    if env:
        parts.append(env)
    return '-'.join(parts)

def fromTriple(triple, isTargetOverridden = False, hostInfo = None,
               forceDynamic = False):
    """
    Make TargetPlatform from a target triple.
    Param 'hostInfo' is a HostInfo object or None if facts about the host
    must not be used.
    """

    arch, vendor, osname, env = splitTriple(triple)

    family = _OS_FAMILIES.get(osname)
    if family is None:
        msg = "The target %r is not supported yet" % triple
        raise CapiMakePlatformUnsupported(msg, triple = triple)

    abi = _abiFamily(osname, env)

    supportsDynamic = forceDynamic or abi not in ('musl', 'none')

    isMultiarchHost = False
    multiarchTriplet = None
    if hostInfo is not None and hostInfo.isDebianLike and family == 'linux':
        isMultiarchHost = True
        multiarchTriplet = hostInfo.multiarchTriplet
    if not multiarchTriplet:
        multiarchTriplet = _triplet(arch, osname, env)

    return TargetPlatform(
        triple = triple,
        arch = arch,
        vendor = vendor,
        os = osname,
        osFamily = family,
        abi = abi,
        binFormat = _BIN_FORMATS[family],
        supportsDynamic = supportsDynamic,
        isMultiarchHost = isMultiarchHost,
        multiarchTriplet = multiarchTriplet,
        isTargetOverridden = isTargetOverridden,
    )

def hostTriple(info = None):
    """
    Guess target triple of the host
    """

    if info is None:
        info = hostInfo()

    osname = info.os
    if osname == 'linux':
        return '%s-unknown-linux-gnu' % info.arch
    if osname == 'darwin':
        arch = 'aarch64' if info.arch == 'arm64' else info.arch
        return '%s-apple-darwin' % arch
    if osname == 'windows':
        arch = 'x86_64' if info.arch.lower() == 'amd64' else info.arch
        return '%s-pc-windows-msvc' % arch
    return '%s-unknown-%s' % (info.arch, osname)

def defaultPrefix(platform):
    """
    Get default install prefix for a target platform
    """
    if platform.osFamily == 'windows':
        return DEFAULT_WINDOWS_PREFIX
    return DEFAULT_PREFIX

def defaultLibdirName(platform):
    """
    Get default libdir relative to the prefix.
    Multiarch hosts use 'lib/<triplet>' unless the target was set explicitly.
    """

    if platform.isTargetOverridden or not platform.isMultiarchHost:
        return DEFAULT_LIBDIRNAME
    return '%s/%s' % (DEFAULT_LIBDIRNAME, platform.multiarchTriplet)
