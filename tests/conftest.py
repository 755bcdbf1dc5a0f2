# coding=utf-8
#

# pylint: skip-file

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import platform as _platform
import pytest

from capimake import log
from capimake.installdirvars import VAR_ENVNAMES

@pytest.hookimpl(hookwrapper = True, tryfirst = True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    rep = outcome.get_result()
    setattr(item, "rep_" + rep.when, rep)

@pytest.fixture(scope = "session", autouse = True)
def beforeAllTests(request):
    # Additional check for pyenv
    if 'PYENV_VERSION' in os.environ:
        realVersion = _platform.python_version()
        envVersion = os.environ['PYENV_VERSION']
        assert envVersion in (realVersion, 'system')

    log.enableColorsByCli('no')

@pytest.fixture
def unsetEnviron(monkeypatch):
    for name in VAR_ENVNAMES + ('CAPIMAKE_ON_TTY', ):
        monkeypatch.delenv(name, raising = False)

@pytest.fixture
def verbose(monkeypatch):
    origin = log.verbose()
    log.setVerbose(2)
    yield
    log.setVerbose(origin)
