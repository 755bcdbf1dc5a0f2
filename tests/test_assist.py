# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import time
import pytest

from capimake import assist
from capimake.error import CapiMakeError
from capimake.installdirvars import DirVars
from capimake.tools import CargoBuildTool, CbindgenHeaderGenerator
import tests.common as cmn
from tests.test_executor import FakeBuildTool, FakeHeaderGenerator, CARGO_TOML

def testMakePlatforms():
    dirvars = DirVars(getenv = {}.get)

    platforms = assist.makePlatforms(dirvars = dirvars, hostInfo = cmn.DEBIAN_HOST)
    assert [x.triple for x in platforms] == [cmn.LINUX_GNU]
    assert not platforms[0].isTargetOverridden
    assert platforms[0].isMultiarchHost

    platforms = assist.makePlatforms([cmn.LINUX_MUSL, cmn.MACOS], dirvars,
                                     hostInfo = cmn.DEBIAN_HOST)
    assert [x.triple for x in platforms] == [cmn.LINUX_MUSL, cmn.MACOS]
    assert all(x.isTargetOverridden for x in platforms)

    dirvars = DirVars({ 'target' : cmn.WINDOWS_GNU }, getenv = {}.get)
    platforms = assist.makePlatforms(dirvars = dirvars, hostInfo = cmn.OTHER_HOST)
    assert [x.triple for x in platforms] == [cmn.WINDOWS_GNU]
    assert platforms[0].isTargetOverridden

    platforms = assist.makePlatforms([cmn.LINUX_MUSL], dirvars,
                                     forceDynamic = True, hostInfo = cmn.OTHER_HOST)
    assert platforms[0].supportsDynamic

def testMakeInvocation():
    assert assist.makeInvocation() == {}
    assert assist.makeInvocation(['-Clto']) == {
        'library' : { 'rustflags' : ['-Clto'] },
    }

def testMakeExecutor(tmpdir):
    tmpdir.join('Cargo.toml').write(CARGO_TOML)
    manifest = assist.loader.load(str(tmpdir))
    dirvars = DirVars({ 'prefix' : '/opt' }, getenv = {}.get)

    executor = assist.makeExecutor(manifest, cmn.makePlatform(), dirvars,
                                   kinds = ['static'], profile = 'dev')
    assert isinstance(executor.buildTool, CargoBuildTool)
    assert executor.buildTool.profile == 'dev'
    assert isinstance(executor.headerGenerator, CbindgenHeaderGenerator)
    assert executor.requestedKinds == ['static']
    assert executor.pathVars['prefix'] == '/opt'
    assert executor.targetdir == str(tmpdir.join('target'))

def testRunForTargetsOrder():

    def func(triple):
        # later targets finish first
        time.sleep(0.05 if triple == 'a' else 0)
        return triple.upper()

    assert assist.runForTargets(func, ['a', 'b', 'c']) == ['A', 'B', 'C']
    assert assist.runForTargets(func, ['a', 'b', 'c'], jobs = 1) == ['A', 'B', 'C']
    assert assist.runForTargets(func, []) == []

def testRunForTargetsFailed():
    done = []

    def func(triple):
        if triple in ('b', 'c'):
            raise CapiMakeError('failed %s' % triple)
        done.append(triple)
        return triple

    with pytest.raises(CapiMakeError) as excinfo:
        assist.runForTargets(func, ['a', 'b', 'c', 'd'], jobs = 2)
    assert excinfo.value.msg == 'failed b'
    # other targets are not cancelled
    assert sorted(done) == ['a', 'd']

def testBuildTargets(tmpdir):
    tmpdir.join('Cargo.toml').write(CARGO_TOML)
    dirvars = DirVars({
        'destdir' : str(tmpdir.join('stage')),
        'prefix' : '/usr',
    }, getenv = {}.get)

    outcomes = assist.buildTargets(str(tmpdir), [cmn.LINUX_GNU, cmn.LINUX_MUSL],
                                   install = True, dirvars = dirvars,
                                   buildTool = FakeBuildTool(),
                                   headerGenerator = FakeHeaderGenerator())

    assert [x.classification.feasible for x in outcomes] == [
        ('static', 'shared'), ('static', ),
    ]
    assert tmpdir.join('stage', 'usr', 'lib', 'libfoo.so.1.2.3').isfile()
    assert tmpdir.join('target', cmn.LINUX_MUSL, 'release', 'foo.pc').isfile()
