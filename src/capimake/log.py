# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import sys
import logging

from capimake.constants import HOST_OS, APPNAME
from capimake.utils import envValToBool

colorSettings = {
    'USE' : 1,
    'BOLD'  :'\x1b[01;1m',
    'RED'   :'\x1b[01;31m',
    'GREEN' :'\x1b[32m',
    'YELLOW':'\x1b[33m',
    'PINK'  :'\x1b[35m',
    'BLUE'  :'\x1b[01;34m',
    'CYAN'  :'\x1b[36m',
    'GREY'  :'\x1b[37m',
    'NORMAL':'\x1b[0m',
}

class _Colors(object):
    """
    Access to color codes as attributes or by call with a name.
    Returns empty strings when colors are disabled.
    """

    def __call__(self, name):
        if not colorSettings['USE']:
            return ''
        return colorSettings.get(name, '')

    def __getattr__(self, name):
        if name.startswith('__'):
            raise AttributeError(name)
        return self(name)

colors = _Colors()

_verbose = 0

class _Formatter(logging.Formatter):

    def format(self, record):
        # other handlers get the same record
        msg = record.getMessage()

        c1 = getattr(record, 'c1', None)
        c2 = getattr(record, 'c2', None)
        if c1 is None:
            if record.levelno >= logging.ERROR:
                c1 = colors.RED
            elif record.levelno >= logging.WARNING:
                c1 = colors.YELLOW
            else:
                c1 = ''
        if c2 is None:
            c2 = colors.NORMAL if c1 else ''

        if record.levelno == logging.DEBUG:
            return '%s%s: %s%s' % (c1, record.levelname, msg, c2)
        return '%s%s%s' % (c1, msg, c2)

def _makeLogger():
    logger = logging.getLogger(APPNAME)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(_Formatter())
        logger.addHandler(handler)
        logger.propagate = False
    logger.setLevel(logging.INFO)
    return logger

_logger = _makeLogger()

def debug(*args, **kwargs):
    """ Log a debug message, shown only with verbose output """
    if _verbose > 0:
        _logger.debug(*args, **kwargs)

error  = _logger.error
warn   = _logger.warning
info   = _logger.info

def pprint(col, msg, label = '', sep = '\n'):
    """
    Print messages in color immediately on stderr
    """
    info('%s%s%s %s', colors(col), msg, colors.NORMAL, label,
            extra = { 'c1': '', 'c2': '' })
    if sep != '\n':
        sys.stderr.write(sep) # pragma: no cover

def enableColorsByCli(colorArg):
    """
    Set up log colors by arg from CLI
    """

    setting = {'yes' : 2, 'auto' : 1, 'no' : 0}[colorArg]
    if setting == 1:
        onTTY = os.environ.get('CAPIMAKE_ON_TTY')
        if onTTY:
            onTTY = envValToBool(onTTY)
        else:
            onTTY = sys.stderr.isatty() or sys.stdout.isatty()
        if not onTTY:
            setting = 0

    if setting == 1:
        defaultTerm = 'dumb'
        if HOST_OS == 'windows':
            defaultTerm = ''
        if os.environ.get('TERM', defaultTerm) in ('dumb', 'emacs'):
            setting = 0

    if setting == 1:
        setting = 2

    colorSettings['USE'] = setting

def verbose():
    """ Get current verbose level """
    return _verbose

def setVerbose(value):
    """ Set verbose level """

    # pylint: disable = global-statement
    global _verbose
    _verbose = value
    _logger.setLevel(logging.DEBUG if value > 0 else logging.INFO)

def printStep(*args, **kwargs):
    """
    Log some step in capimake command
    """

    extra = kwargs.get('extra', {})
    if 'c1' not in extra:
        extra.update({ 'c1': colors.CYAN })
        kwargs.update({'extra' : extra})
    info(*args, **kwargs)

enableColorsByCli('auto')
