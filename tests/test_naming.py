# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import pytest

from capimake import naming
from capimake.error import CapiMakeConfValueError, CapiMakeLogicError, \
                           CapiMakeVersionSuffixTooLong
from capimake.types import LibraryArtifact
from capimake.version import SemVer
import tests.common as cmn

def _names(artifacts):
    return [(x.kind, x.filename, x.linkTo) for x in artifacts]

def _plan(triple = cmn.LINUX_GNU, kinds = ('static', 'shared'),
          overrides = None, **kwargs):
    config = cmn.makeConfig(overrides, **kwargs)
    return naming.planNames(config, cmn.makePlatform(triple), kinds)

def testSonameVersion():
    ver = SemVer.parse
    assert naming.sonameVersion(ver('1.2.3')) == '1'
    assert naming.sonameVersion(ver('0.3.1')) == '0.3'
    assert naming.sonameVersion(ver('0.0.5')) == '0.0.5'
    assert naming.sonameVersion(ver('1.2.3'), 1) == '1'
    assert naming.sonameVersion(ver('1.2.3'), 2) == '1.2'
    assert naming.sonameVersion(ver('0.3.1'), 3) == '0.3.1'
    assert naming.fullVersion(ver('0.3.1-beta.1+abc')) == '0.3.1'

    with pytest.raises(CapiMakeVersionSuffixTooLong):
        naming.sonameVersion(ver('1.2.3'), 4)
    with pytest.raises(CapiMakeConfValueError):
        naming.sonameVersion(ver('1.2.3'), 0)

def testElfNames():
    artifacts = _plan()
    assert _names(artifacts) == [
        ('static', 'libfoo.a', None),
        ('shared', 'libfoo.so.1.2.3', None),
        ('shared-versioned-link', 'libfoo.so.1', 'libfoo.so.1.2.3'),
        ('shared-versioned-link', 'libfoo.so', 'libfoo.so.1'),
    ]
    assert all(x.location == 'lib' and x.subdir == '' for x in artifacts)

    assert _names(_plan(version = '0.3.1', kinds = ('shared', ))) == [
        ('shared', 'libfoo.so.0.3.1', None),
        ('shared-versioned-link', 'libfoo.so.0.3', 'libfoo.so.0.3.1'),
        ('shared-versioned-link', 'libfoo.so', 'libfoo.so.0.3'),
    ]

    # soname is the same as the full version
    assert _names(_plan(version = '0.0.5', kinds = ('shared', ))) == [
        ('shared', 'libfoo.so.0.0.5', None),
        ('shared-versioned-link', 'libfoo.so', 'libfoo.so.0.0.5'),
    ]

    overrides = { 'library' : { 'version_suffix_components' : 3 } }
    assert _names(_plan(overrides = overrides, kinds = ('shared', ))) == [
        ('shared', 'libfoo.so.1.2.3', None),
        ('shared-versioned-link', 'libfoo.so', 'libfoo.so.1.2.3'),
    ]

    overrides = { 'library' : { 'version_suffix_components' : 1 } }
    assert _names(_plan(overrides = overrides, version = '2.0.0',
                        kinds = ('shared', ))) == [
        ('shared', 'libfoo.so.2.0.0', None),
        ('shared-versioned-link', 'libfoo.so.2', 'libfoo.so.2.0.0'),
        ('shared-versioned-link', 'libfoo.so', 'libfoo.so.2'),
    ]

def testNoVersioning():
    overrides = { 'library' : { 'versioning' : False } }
    assert _names(_plan(overrides = overrides)) == [
        ('static', 'libfoo.a', None),
        ('shared', 'libfoo.so', None),
    ]

def testInstallSubdir():
    overrides = { 'library' : { 'install_subdir' : 'gstreamer-1.0' } }
    artifacts = _plan(overrides = overrides)
    assert all(x.subdir == 'gstreamer-1.0' for x in artifacts)

def testMachoNames():
    assert _names(_plan(cmn.MACOS)) == [
        ('static', 'libfoo.a', None),
        ('shared', 'libfoo.1.2.3.dylib', None),
        ('shared-versioned-link', 'libfoo.1.dylib', 'libfoo.1.2.3.dylib'),
        ('shared-versioned-link', 'libfoo.dylib', 'libfoo.1.dylib'),
    ]

def testWindowsGnuNames():
    artifacts = _plan(cmn.WINDOWS_GNU)
    assert [(x.kind, x.filename, x.location) for x in artifacts] == [
        ('static', 'libfoo.a', 'lib'),
        ('shared', 'foo.dll', 'bin'),
        ('import', 'libfoo.dll.a', 'lib'),
        ('def', 'foo.def', 'lib'),
    ]

def testWindowsMsvcNames():
    artifacts = _plan(cmn.WINDOWS_MSVC)
    assert [(x.kind, x.filename, x.location) for x in artifacts] == [
        ('static', 'foo.lib', 'lib'),
        ('shared', 'foo.dll', 'bin'),
        ('import', 'foo.dll.lib', 'lib'),
        ('def', 'foo.def', 'lib'),
        ('debug-info', 'foo.pdb', 'bin'),
    ]

    overrides = { 'library' : { 'install_subdir' : 'plugins',
                                'import_library' : False } }
    artifacts = _plan(cmn.WINDOWS_MSVC, overrides = overrides)
    assert [(x.kind, x.filename, x.location) for x in artifacts] == [
        ('static', 'foo.lib', 'lib'),
        ('shared', 'foo.dll', 'lib'),
        ('def', 'foo.def', 'lib'),
        ('debug-info', 'foo.pdb', 'lib'),
    ]

def testStaticOnly():
    assert _names(_plan(kinds = ('static', ))) == [('static', 'libfoo.a', None)]
    assert _names(_plan(kinds = ())) == []

def testFindArtifact():
    artifacts = _plan()
    assert naming.findArtifact(artifacts, 'shared').filename == 'libfoo.so.1.2.3'
    assert naming.findArtifact(artifacts, 'import') is None

def testResolveLink():
    artifacts = _plan()
    assert naming.resolveLink(artifacts, 'libfoo.so') == 'libfoo.so.1.2.3'
    assert naming.resolveLink(artifacts, 'libfoo.so.1') == 'libfoo.so.1.2.3'
    assert naming.resolveLink(artifacts, 'libfoo.a') == 'libfoo.a'

    cyclic = [
        LibraryArtifact('shared-versioned-link', 'a', 'lib', '', 'b'),
        LibraryArtifact('shared-versioned-link', 'b', 'lib', '', 'a'),
    ]
    with pytest.raises(CapiMakeLogicError):
        naming.resolveLink(cyclic, 'a')

def testSharedObjectLinkArgs():
    config = cmn.makeConfig()
    libdir = '/usr/local/lib'

    args = naming.sharedObjectLinkArgs(config, cmn.makePlatform(), libdir, 'target')
    assert args == ['-Wl,-soname,libfoo.so.1']

    platform = cmn.makePlatform('aarch64-linux-android')
    args = naming.sharedObjectLinkArgs(config, platform, libdir, 'target')
    assert args == ['-Wl,-soname,libfoo.so']

    noVersioning = cmn.makeConfig({ 'library' : { 'versioning' : False } })
    args = naming.sharedObjectLinkArgs(noVersioning, cmn.makePlatform(),
                                       libdir, 'target')
    assert args == ['-Wl,-soname,libfoo.so']

    args = naming.sharedObjectLinkArgs(config, cmn.makePlatform(cmn.MACOS),
                                       libdir, 'target')
    assert args == [
        '-Wl,-install_name,/usr/local/lib/libfoo.1.dylib,-current_version,1.2.3,'
        '-compatibility_version,1',
        '-Wl,-headerpad_max_install_names',
    ]

    args = naming.sharedObjectLinkArgs(config, cmn.makePlatform(cmn.WINDOWS_GNU),
                                       libdir, 'target')
    assert args == ['-Wl,--output-def,%s' % os.path.join('target', 'foo.def')]

    args = naming.sharedObjectLinkArgs(config, cmn.makePlatform(cmn.WINDOWS_MSVC),
                                       libdir, 'target')
    assert args == []

def testBuildOutputName():
    config = cmn.makeConfig()

    platform = cmn.makePlatform()
    artifacts = naming.planNames(config, platform, ('static', 'shared'))
    assert [naming.buildOutputName(config, platform, x) for x in artifacts[:2]] \
        == ['libfoo.a', 'libfoo.so']

    platform = cmn.makePlatform(cmn.MACOS)
    artifact = naming.findArtifact(naming.planNames(config, platform, ('shared', )),
                                   'shared')
    assert naming.buildOutputName(config, platform, artifact) == 'libfoo.dylib'

    platform = cmn.makePlatform(cmn.WINDOWS_MSVC)
    artifact = naming.findArtifact(naming.planNames(config, platform, ('shared', )),
                                   'shared')
    assert naming.buildOutputName(config, platform, artifact) == 'foo.dll'
