# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import traceback

verbose = 1

class CapiMakeError(Exception):
    """Base class for all CapiMake errors"""

    def __init__(self, msg = None, ex = None):
        if msg is None:
            msg = ''
        if ex and not msg:
            msg = str(ex)
        super().__init__(msg)
        self.msg = msg
        self.ex = ex

        fullmsg = msg
        if ex is not None and verbose > 0:
            trace = ''.join(traceback.format_exception(type(ex), ex, ex.__traceback__))
            fullmsg = '%s\n%s' % (msg, trace.rstrip())
        self.fullmsg = fullmsg

    def __str__(self):
        return str(self.msg)

class CapiMakeLogicError(CapiMakeError):
    """Some logic/programming error"""

class CapiMakeConfError(CapiMakeError):
    """Invalid manifest or capi configuration error"""

    def __init__(self, msg = None, ex = None, confpath = None):
        if msg is None:
            msg = ''
        if ex and not msg:
            msg = str(ex)
        if confpath and msg:
            _msg = "Error in the file %r:" % confpath
            for line in msg.splitlines():
                _msg += "\n  %s" % line
            msg = _msg
        self.confpath = confpath
        super().__init__(msg, ex)

class CapiMakeConfTypeError(CapiMakeConfError):
    """Invalid manifest param type error"""

class CapiMakeConfValueError(CapiMakeConfError):
    """Invalid manifest param value error"""

class CapiMakeUnsupportedToolVersion(CapiMakeConfError):
    """ The manifest requires a newer version of the tool """

    def __init__(self, required, current, msg = None):
        self.required = required
        self.current = current
        if not msg:
            msg = "Minimum required capimake version is %s" % required
            msg += " but using capimake version %s" % current
        super().__init__(msg)

class CapiMakeVersionSuffixTooLong(CapiMakeConfError):
    """ Param 'version_suffix_components' is longer than the version """

    def __init__(self, components, version, msg = None):
        self.components = components
        self.version = version
        if not msg:
            msg = "Param 'version_suffix_components' = %d is too big" % components
            msg += " for the version %r" % str(version)
        super().__init__(msg)

class CapiMakePlatformUnsupported(CapiMakeError):
    """ Library kind or target is not supported by a platform """

    def __init__(self, msg = None, kind = None, triple = None):
        self.kind = kind
        self.triple = triple
        if not msg:
            msg = "Library kind %r is not supported" % kind
            if triple:
                msg += " for the target %r" % triple
        super().__init__(msg)

class CapiMakeIOError(CapiMakeError):
    """ File operation failed """

    def __init__(self, path, msg = None, ex = None):
        self.path = path
        if not msg:
            msg = "I/O error with the path %r" % path
            if ex is not None:
                msg += ": %s" % ex
        super().__init__(msg, ex)

class CapiMakePathNotFoundError(CapiMakeIOError):
    """ Path doesn't exist """

    def __init__(self, path, msg = None):
        if not msg:
            msg = "Path %r doesn't exist." % path
        super().__init__(path, msg)

class CapiMakeProcessFailed(CapiMakeError):
    """ Process failed with exitcode """

    def __init__(self, cmd, exitcode, output = None, msg = None):
        self.cmd = cmd
        self.exitcode = exitcode
        self.output = output
        if not msg:
            msg = "Command %r failed with exit code %d." % (cmd, exitcode)
            if output:
                msg += '\nCaptured output:\n'
                msg += output.rstrip()
        super().__init__(msg)
