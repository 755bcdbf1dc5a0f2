# coding=utf-8
#

# pylint: disable = missing-docstring, invalid-name

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import logging
import pytest

from capimake import log
from capimake.constants import APPNAME

class RecordsHandler(logging.Handler):

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)

@pytest.fixture
def records():
    handler = RecordsHandler()
    logger = logging.getLogger(APPNAME)
    logger.addHandler(handler)
    yield handler.records
    logger.removeHandler(handler)

def testFormatterKeepsRecord(records):
    log.warn('library %r is %s', 'foo', 'built')

    assert len(records) == 1
    record = records[0]
    assert record.msg == 'library %r is %s'
    assert record.args == ('foo', 'built')
    assert record.getMessage() == "library 'foo' is built"

def testFormat():
    formatter = log._Formatter()

    record = logging.LogRecord(APPNAME, logging.INFO, __file__, 1,
                               'installed %d file(s)', (3, ), None)
    assert formatter.format(record) == 'installed 3 file(s)'
    assert record.args == (3, )

    record = logging.LogRecord(APPNAME, logging.DEBUG, __file__, 1,
                               'executor: %r', ('x', ), None)
    assert formatter.format(record) == "DEBUG: executor: 'x'"

def testPprint(records):
    log.pprint('GREEN', 'Installed 2 file(s)')
    assert records[0].getMessage() == 'Installed 2 file(s) '
