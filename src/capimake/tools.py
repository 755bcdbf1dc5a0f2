# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 External tools: the library build tool and the header generator.
"""

import os
import io

from capimake import log
from capimake.constants import CRATE_TYPES, LIB_KIND_STATIC, DEFAULT_PROFILE
from capimake.error import CapiMakeProcessFailed, CapiMakeIOError
from capimake.types import BuildResult
from capimake.utils import runCmd, normalizeForDefine

_joinpath = os.path.join

NATIVE_STATIC_LIBS_MARK = 'native-static-libs:'

class BuildTool(object):
    """
    Base class for tools which compile a library
    """

    def outputDir(self, platform, targetdir):
        """ Get directory where the tool puts its outputs """
        raise NotImplementedError

    def build(self, platform, kinds, flags, targetdir):
        """
        Build library kinds for the target platform passing flags to the
        compiler. Returns BuildResult.
        Raises CapiMakeProcessFailed if the tool failed.
        """
        raise NotImplementedError

def parseNativeLibs(output):
    """
    Get list of native libs from 'native-static-libs:' notes of rustc output
    """

    result = []
    for line in (output or '').splitlines():
        pos = line.find(NATIVE_STATIC_LIBS_MARK)
        if pos < 0:
            continue
        result = line[pos + len(NATIVE_STATIC_LIBS_MARK):].split()
    return result

class CargoBuildTool(BuildTool):
    """
    Build with 'cargo rustc'
    """

    def __init__(self, rootdir, profile = DEFAULT_PROFILE, extraArgs = None,
                 cargo = None, env = None):

        self.rootdir = rootdir
        self.profile = profile
        self.extraArgs = list(extraArgs or [])
        self.cargo = cargo or os.environ.get('CARGO', 'cargo')
        self.env = env

    def outputDir(self, platform, targetdir):
        # cargo puts 'dev' and 'test' profiles into 'debug'
        profileDir = self.profile
        if profileDir in ('dev', 'test'):
            profileDir = 'debug'
        return _joinpath(targetdir, platform.triple, profileDir)

    def makeCmd(self, platform, kinds, flags, targetdir):
        """ Make command line as a list """

        cmd = [self.cargo, 'rustc', '--lib']
        cmd.extend(['--manifest-path', _joinpath(self.rootdir, 'Cargo.toml')])
        cmd.extend(['--target', platform.triple])
        cmd.extend(['--target-dir', targetdir])
        if self.profile == 'release':
            cmd.append('--release')
        elif self.profile != 'dev':
            cmd.extend(['--profile', self.profile])
        for kind in kinds:
            cmd.extend(['--crate-type', CRATE_TYPES[kind]])
        cmd.extend(self.extraArgs)
        cmd.append('--')
        cmd.extend(flags)
        if LIB_KIND_STATIC in kinds:
            cmd.extend(['--print', 'native-static-libs'])
        return cmd

    def build(self, platform, kinds, flags, targetdir):

        cmd = self.makeCmd(platform, kinds, flags, targetdir)
        log.debug('tools: running %r', cmd)

        env = dict(os.environ) if self.env is None else dict(self.env)
        result = runCmd(cmd, cwd = self.rootdir, env = env,
                        captureOutput = True, stdErrToOut = True)
        if result.exitcode != 0:
            raise CapiMakeProcessFailed(cmd, result.exitcode, result.stdout)

        if log.verbose() > 1 and result.stdout:
            log.info(result.stdout.rstrip())

        outdir = self.outputDir(platform, targetdir)

        staticLibs = []
        if LIB_KIND_STATIC in kinds:
            staticLibs = parseNativeLibs(result.stdout)

        return BuildResult(systemLibs = [], staticLibs = staticLibs,
                           outdir = outdir)

def versionDefines(name, version):
    """ Get text with version defines for a header """

    name = normalizeForDefine(name)
    major, minor, patch = version.components
    lines = [
        '',
        '#define %s_MAJOR %d' % (name, major),
        '#define %s_MINOR %d' % (name, minor),
        '#define %s_PATCH %d' % (name, patch),
        '',
    ]
    return '\n'.join(lines)

class HeaderGenerator(object):
    """
    Base class for tools which generate C header
    """

    def generate(self, outpath, config, version):
        """
        Generate header file 'outpath'.
        Raises CapiMakeProcessFailed if the tool failed.
        """
        raise NotImplementedError

class CbindgenHeaderGenerator(HeaderGenerator):
    """
    Generate header with cbindgen
    """

    def __init__(self, rootdir, cbindgen = 'cbindgen'):
        self.rootdir = rootdir
        self.cbindgen = cbindgen

    def generate(self, outpath, config, version):

        cmd = [self.cbindgen, '--output', outpath]
        configPath = _joinpath(self.rootdir, 'cbindgen.toml')
        if os.path.isfile(configPath):
            cmd.extend(['--config', configPath])
        cmd.append(self.rootdir)

        log.debug('tools: running %r', cmd)
        result = runCmd(cmd, cwd = self.rootdir, captureOutput = True,
                        stdErrToOut = True)
        if result.exitcode != 0:
            raise CapiMakeProcessFailed(cmd, result.exitcode, result.stdout)

        try:
            with io.open(outpath, 'rt', encoding = 'utf-8') as file:
                text = file.read()
            with io.open(outpath, 'wt', encoding = 'utf-8') as file:
                file.write(versionDefines(config.header.name, version))
                file.write(text)
        except OSError as ex:
            raise CapiMakeIOError(outpath, ex = ex) from ex
