# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import re
import subprocess
from hashlib import sha1

from capimake.pyutils import stringtype, struct
from capimake.error import CapiMakeError

_RE_TOLIST = re.compile(r"""((?:[^\s"']|"[^"]*"|'[^']*')+)""", re.ASCII)
_RE_DEFINE_NAME = re.compile(r'[^a-zA-Z0-9]', re.ASCII)
_RE_VERSIONED_PLATFORM = re.compile(r'\d+$')

def platform():
    """
    Return current system platform. It is always 'windows' for MS Windows.
    """

    result = sys.platform
    if result not in ('win32', 'os2'):
        result = _RE_VERSIONED_PLATFORM.split(result)[0]
    if result.startswith('win32'):
        result = 'windows' # pragma: no cover
    return result

PLATFORM = platform()

def hostOS():
    """
    Return current host operating system base name.
    It is 'windows' for MS Windows, MSYS2 and cygwin;
    'linux' for GNU/Linux; 'macos' for Mac OS, etc.
    """

    selector = {
        'cygwin' : 'windows',
        'msys'   : 'windows',
        'darwin' : 'macos',
    }

    return selector.get(PLATFORM, PLATFORM)

def isDebianLike():
    """
    Detect Debian, Ubuntu, etc. These distributions use multiarch lib dirs.
    """
    return PLATFORM == 'linux' and os.path.isfile('/etc/debian_version')

def debianMultiarch():
    """
    Return Debian multiarch triplet of the host like 'x86_64-linux-gnu'.
    Returns None if it cannot be detected.
    """

    if not isDebianLike():
        return None

    try:
        result = runCmd(['dpkg-architecture', '-qDEB_HOST_MULTIARCH'],
                        captureOutput = True)
    except CapiMakeError:
        return None

    if result.exitcode != 0:
        return None
    triplet = result.stdout.strip()
    return triplet if triplet else None

def stripQuotes(val):
    """
    Strip quotes ' or " from the begin and the end of a string but do it only
    if they are the same on both sides.
    """

    if not val:
        return val

    if len(val) < 2:
        return val

    first = val[0]
    last = val[-1]
    if first == last and first in ("'", '"'):
        return val[1:-1]

    return val

def toList(val):
    """
    Converts a string argument to a list by splitting it by spaces.
    Quoted substrings with spaces are preserved.
    Returns the object if not a string
    """
    if not isinstance(val, stringtype):
        return val

    if not ('"' in val or "'" in val): # optimization
        return val.split()

    return [stripQuotes(x) for x in _RE_TOLIST.split(val)[1::2]]

def uniqueListWithOrder(lst):
    """
    Return new list with preserved the original order of the list.
    Each element in lst must be hashable.
    """

    # pylint: disable = simplifiable-condition

    used = set()
    return [x for x in lst if x not in used and (used.add(x) or True)]

def envValToBool(rawVal):
    """
    Return env val as native bool value.
    Returns False if not recognized.
    """

    result = False
    if rawVal:
        try:
            # value from os.environ is a string but it may be a digit
            result = bool(int(rawVal))
        except ValueError:
            result = rawVal in ('true', 'True', 'yes')

    return result

def normalizeForDefine(s):
    """
	Converts a string into an identifier suitable for C defines.
    """
    if s[0].isdigit():
        s = '_%s' % s
    return _RE_DEFINE_NAME.sub('_', s).upper()

def hashFiles(paths, extra = None):
    """
    Hash files from paths by using sha1.
    Order of paths must be constant.
    Returns hex digest or None if some file cannot be read.
    """

    _hash = sha1()
    if extra is not None:
        _hash.update(repr(extra).encode('utf-8'))

    for path in paths:
        try:
            with open(path, 'rb') as file:
                result = True
                while result:
                    result = file.read(200000)
                    _hash.update(result)
        except OSError:
            return None
    return _hash.hexdigest()

def mksymlink(src, dst, force = True):
    """
    Make symlink, force delete if destination exists already
    """
    if force and os.path.lexists(dst):
        os.unlink(dst)

    _mksymlink = getattr(os, "symlink", None)
    if callable(_mksymlink):
        _mksymlink(src, dst)
        return

    raise NotImplementedError

ProcCmdResult = struct('ProcCmdResult', 'exitcode, stdout, stderr')

class ProcCmd(object):
    """
    Class to run external command in a subprocess
    """

    def __init__(self, cmdLine, captureOutput = False, stdErrToOut = True):
        """
        Param 'cmdLine' is a list of args. If stdErrToOut is True it means
        that captureOutput is True as well.
        """

        self._cmdLine = list(cmdLine)
        self._popenArgs = {
            'stdout' : None,
            'stderr' : None,
            'universal_newlines' : True,
        }

        if captureOutput:
            self._popenArgs['stdout'] = subprocess.PIPE
            self._popenArgs['stderr'] = subprocess.PIPE

        if stdErrToOut:
            self._popenArgs['stdout'] = subprocess.PIPE
            self._popenArgs['stderr'] = subprocess.STDOUT

    def run(self, cwd = None, env = None):
        """
        Run command.
        Returns ProcCmdResult.
        """

        kwargs = self._popenArgs
        kwargs.update({
            'cwd' : cwd,
            'env' : env,
        })

        try:
            with subprocess.Popen(self._cmdLine, **kwargs) as proc:
                stdout, stderr = proc.communicate()
        except (OSError, subprocess.SubprocessError) as ex:
            raise CapiMakeError(str(ex)) from ex

        return ProcCmdResult(proc.returncode, stdout, stderr)

def runCmd(cmdLine, cwd = None, env = None, captureOutput = False,
           stdErrToOut = False):
    """
    Run external command in a subprocess.
    If stdErrToOut is True it means that captureOutput is True as well.
    Returns ProcCmdResult.
    """

    procCmd = ProcCmd(cmdLine, captureOutput, stdErrToOut)
    return procCmd.run(cwd, env)
