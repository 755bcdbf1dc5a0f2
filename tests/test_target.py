# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import pytest

from capimake import target
from capimake.error import CapiMakePlatformUnsupported
from capimake.target import HostInfo
import tests.common as cmn

def testSplitTriple():
    assert target.splitTriple('x86_64-unknown-linux-gnu') == \
        ('x86_64', 'unknown', 'linux', 'gnu')
    assert target.splitTriple('aarch64-apple-darwin') == \
        ('aarch64', 'apple', 'darwin', '')
    assert target.splitTriple('aarch64-linux-android') == \
        ('aarch64', 'unknown', 'android', '')
    assert target.splitTriple('thumbv7em-none-eabihf') == \
        ('thumbv7em', 'unknown', 'none', 'eabihf')
    assert target.splitTriple('armv7-unknown-linux-gnueabihf') == \
        ('armv7', 'unknown', 'linux', 'gnueabihf')
    assert target.splitTriple('x86_64-unknown-freebsd') == \
        ('x86_64', 'unknown', 'freebsd', '')

    for triple in ('', 'x86_64', 'x86_64-linux', 'x86_64--linux'):
        with pytest.raises(CapiMakePlatformUnsupported):
            target.splitTriple(triple)

@pytest.mark.parametrize("triple, family, abi, binFormat, dynamic", [
    (cmn.LINUX_GNU, 'linux', 'gnu', 'elf', True),
    (cmn.LINUX_MUSL, 'linux', 'musl', 'elf', False),
    ('aarch64-linux-android', 'linux', 'gnu', 'elf', True),
    ('x86_64-unknown-freebsd', 'bsd', 'gnu', 'elf', True),
    (cmn.MACOS, 'macos', 'gnu', 'macho', True),
    ('aarch64-apple-ios', 'macos', 'gnu', 'macho', True),
    (cmn.WINDOWS_GNU, 'windows', 'gnu', 'pe', True),
    (cmn.WINDOWS_MSVC, 'windows', 'msvc', 'pe', True),
    ('thumbv7em-none-eabihf', 'linux', 'none', 'elf', False),
])
def testFromTriple(triple, family, abi, binFormat, dynamic):
    platform = target.fromTriple(triple)
    assert platform.triple == triple
    assert platform.osFamily == family
    assert platform.abi == abi
    assert platform.binFormat == binFormat
    assert platform.supportsDynamic is dynamic
    assert platform.isMultiarchHost is False
    assert platform.isTargetOverridden is False

def testForceDynamic():
    platform = target.fromTriple(cmn.LINUX_MUSL, forceDynamic = True)
    assert platform.supportsDynamic is True

def testUnsupportedOs():
    with pytest.raises(CapiMakePlatformUnsupported) as excinfo:
        target.fromTriple('wasm32-unknown-unknown')
    assert excinfo.value.triple == 'wasm32-unknown-unknown'

def testMultiarch():
    platform = target.fromTriple(cmn.LINUX_GNU, hostInfo = cmn.DEBIAN_HOST)
    assert platform.isMultiarchHost is True
    assert platform.multiarchTriplet == 'x86_64-linux-gnu'
    assert target.defaultLibdirName(platform) == 'lib/x86_64-linux-gnu'

    platform = target.fromTriple(cmn.LINUX_GNU, isTargetOverridden = True,
                                 hostInfo = cmn.DEBIAN_HOST)
    assert target.defaultLibdirName(platform) == 'lib'

    platform = target.fromTriple(cmn.LINUX_GNU, hostInfo = cmn.OTHER_HOST)
    assert platform.isMultiarchHost is False
    assert target.defaultLibdirName(platform) == 'lib'

    platform = target.fromTriple('x86_64-unknown-freebsd',
                                 hostInfo = cmn.DEBIAN_HOST)
    assert platform.isMultiarchHost is False
    assert target.defaultLibdirName(platform) == 'lib'

    # triplet is made from the triple if the host doesn't know it
    host = HostInfo(arch = 'aarch64', os = 'linux', isDebianLike = True,
                    multiarchTriplet = None)
    platform = target.fromTriple('aarch64-unknown-linux-gnu', hostInfo = host)
    assert target.defaultLibdirName(platform) == 'lib/aarch64-linux-gnu'

def testHostTriple():
    info = HostInfo(arch = 'x86_64', os = 'linux', isDebianLike = False,
                    multiarchTriplet = None)
    assert target.hostTriple(info) == 'x86_64-unknown-linux-gnu'

    info = HostInfo(arch = 'arm64', os = 'darwin', isDebianLike = False,
                    multiarchTriplet = None)
    assert target.hostTriple(info) == 'aarch64-apple-darwin'

    info = HostInfo(arch = 'AMD64', os = 'windows', isDebianLike = False,
                    multiarchTriplet = None)
    assert target.hostTriple(info) == 'x86_64-pc-windows-msvc'

def testHostInfoCached(mocker):
    mocker.patch.dict(target._cache, clear = True)
    mocker.patch('capimake.utils.isDebianLike', return_value = True)
    mocker.patch('capimake.utils.debianMultiarch', return_value = 'x86_64-linux-gnu')

    info = target.hostInfo()
    assert info.isDebianLike is True
    assert info.multiarchTriplet == 'x86_64-linux-gnu'
    assert target.hostInfo() is info

def testDefaultPrefix():
    assert target.defaultPrefix(target.fromTriple(cmn.LINUX_GNU)) == '/usr/local'
    assert target.defaultPrefix(target.fromTriple(cmn.MACOS)) == '/usr/local'
    assert target.defaultPrefix(target.fromTriple(cmn.WINDOWS_MSVC)) == 'c:/'
