# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys

import pytest

from capimake import utils
from capimake.error import CapiMakeError

def testToList():
    assert utils.toList('') == []
    assert utils.toList('a b  c') == ['a', 'b', 'c']
    assert utils.toList('a "b c" d') == ['a', 'b c', 'd']
    assert utils.toList(['x', 'y']) == ['x', 'y']

def testStripQuotes():
    assert utils.stripQuotes('"abc"') == 'abc'
    assert utils.stripQuotes("'abc'") == 'abc'
    assert utils.stripQuotes('"abc\'') == '"abc\''
    assert utils.stripQuotes('a') == 'a'
    assert utils.stripQuotes('') == ''

def testUniqueListWithOrder():
    assert utils.uniqueListWithOrder([3, 1, 3, 2, 1]) == [3, 1, 2]

def testEnvValToBool():
    assert utils.envValToBool('1')
    assert utils.envValToBool('true')
    assert utils.envValToBool('yes')
    assert not utils.envValToBool('0')
    assert not utils.envValToBool('no')
    assert not utils.envValToBool(None)

def testNormalizeForDefine():
    assert utils.normalizeForDefine('foo-bar.h') == 'FOO_BAR_H'
    assert utils.normalizeForDefine('9lib') == '_9LIB'

def testHashFiles(tmpdir):
    file1 = tmpdir.join('file1')
    file1.write('abc')
    file2 = tmpdir.join('file2')
    file2.write('def')

    paths = [str(file1), str(file2)]
    hash1 = utils.hashFiles(paths)
    assert hash1 == utils.hashFiles(paths)
    assert hash1 != utils.hashFiles(paths, extra = 'x')
    assert hash1 != utils.hashFiles(list(reversed(paths)))

    file2.write('xyz')
    assert hash1 != utils.hashFiles(paths)

    assert utils.hashFiles([str(tmpdir.join('nonexistent'))]) is None

@pytest.mark.skipif(utils.PLATFORM == 'windows',
                    reason = 'symlinks need extra rights on windows')
def testMksymlink(tmpdir):
    target = tmpdir.join('target')
    target.write('data')
    link = str(tmpdir.join('link'))

    utils.mksymlink('target', link)
    assert os.readlink(link) == 'target'

    # the second time it must replace the link
    utils.mksymlink('other', link)
    assert os.readlink(link) == 'other'

def testRunCmd():
    result = utils.runCmd([sys.executable, '-c', 'print("hello")'],
                          captureOutput = True)
    assert result.exitcode == 0
    assert result.stdout.strip() == 'hello'

    result = utils.runCmd([sys.executable, '-c', 'import sys; sys.exit(3)'],
                          captureOutput = True)
    assert result.exitcode == 3

    result = utils.runCmd([sys.executable, '-c', 'import sys; sys.stderr.write("oops")'],
                          stdErrToOut = True)
    assert result.stdout == 'oops'
    assert result.stderr is None

    with pytest.raises(CapiMakeError):
        utils.runCmd(['some-nonexistent-command-for-capimake'])

def testDebianMultiarch(mocker):
    mocker.patch('capimake.utils.isDebianLike', return_value = False)
    assert utils.debianMultiarch() is None

    mocker.patch('capimake.utils.isDebianLike', return_value = True)
    runCmd = mocker.patch('capimake.utils.runCmd')
    runCmd.return_value = utils.ProcCmdResult(0, 'x86_64-linux-gnu\n', None)
    assert utils.debianMultiarch() == 'x86_64-linux-gnu'

    runCmd.return_value = utils.ProcCmdResult(2, '', None)
    assert utils.debianMultiarch() is None

    runCmd.side_effect = CapiMakeError('not found')
    assert utils.debianMultiarch() is None
