# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Executor runs the whole pipeline for one target: it's the only place
 where the build tool is invoked and files are created or removed.
"""

import os
import io
import shutil
import threading

from capimake import log, version
from capimake.classify import classify
from capimake.config import resolve
from capimake.constants import DEFAULT_TARGETDIR, ASSETS_DIRNAME, \
                               LIB_KIND_STATIC, LIB_KIND_SHARED, LIB_KIND_LINK, \
                               LIB_KIND_IMPORT, LIB_KIND_DEF, LIB_KIND_DEBUGINFO
from capimake.error import CapiMakeError, CapiMakeIOError, CapiMakeLogicError, \
                           CapiMakePathNotFoundError, CapiMakePlatformUnsupported, \
                           CapiMakeProcessFailed
from capimake.fingerprint import Fingerprint
from capimake.layout import resolvePaths, planInstall, libDir, staged, \
                            OPTIONAL_ROLES
from capimake.manifest.loader import readMetadata
from capimake.naming import planNames, sharedObjectLinkArgs, buildOutputName
from capimake.pathutils import getNativePath, toPosixPath, patternPrefix
from capimake.pkgconfig import buildPkgConfig, uninstalled, render, pcFilename
from capimake.pyutils import struct
from capimake.utils import mksymlink

joinpath = os.path.join
dirname = os.path.dirname
isfile = os.path.isfile
isdir = os.path.isdir
islink = os.path.islink
pathexists = os.path.exists
pathlexists = os.path.lexists

# suffix of files replaced during installation
BACKUP_SUFFIX = '.capimake-old'

BuildOutcome = struct('BuildOutcome',
    'config, classification, artifacts, paths, builddir, descriptor, '
    'buildResult, plan, upToDate')

_ROLE_NAMES = {
    'pkgconfig' : 'pkg-config file',
    'header'    : 'header file',
    'include'   : 'include files',
    'data'      : 'data files',
    LIB_KIND_STATIC : 'static library',
    LIB_KIND_SHARED : 'shared library',
    LIB_KIND_LINK   : 'shared library',
    LIB_KIND_IMPORT : 'import library',
    LIB_KIND_DEF    : 'module definition file',
    LIB_KIND_DEBUGINFO : 'debugging information',
}

_destLocks = {}
_destLocksGuard = threading.Lock()

def _destinationLock(path):
    with _destLocksGuard:
        lock = _destLocks.get(path)
        if lock is None:
            lock = _destLocks[path] = threading.Lock()
    return lock

def _writeText(path, text):
    try:
        with io.open(path, 'wt', encoding = 'utf-8', newline = '\n') as file:
            file.write(text)
    except OSError as ex:
        raise CapiMakeIOError(path, ex = ex) from ex

def collectFiles(basedir, patterns):
    """
    Get sorted list of relative POSIX paths of files which can match
    patterns. Only directories of fixed prefixes of patterns are walked.
    """

    result = set()
    for pattern in patterns:
        prefix = patternPrefix(pattern)
        start = joinpath(basedir, getNativePath(prefix)) if prefix else basedir
        if isfile(start):
            result.add(prefix)
            continue
        if not isdir(start):
            continue
        for root, _, files in os.walk(start):
            for name in files:
                path = os.path.relpath(joinpath(root, name), basedir)
                result.add(toPosixPath(path))
    return sorted(result)

class Executor(object):
    """
    Build, install and clean a library for one target platform
    """

    # pylint: disable = too-many-instance-attributes

    def __init__(self, manifest, platform, buildTool, headerGenerator = None,
                 requestedKinds = None, forced = False, pathVars = None,
                 invocation = None, targetdir = None, toolVersion = None):

        # pylint: disable = too-many-arguments

        self.manifest = manifest
        self.rootdir = dirname(manifest.path)
        self.platform = platform
        self.buildTool = buildTool
        self.headerGenerator = headerGenerator
        self.requestedKinds = requestedKinds
        self.forced = forced
        self.pathVars = pathVars or {}
        self.invocation = invocation
        self.targetdir = targetdir or joinpath(self.rootdir, DEFAULT_TARGETDIR)
        self.toolVersion = toolVersion or version.current()
        self._outcome = None

    @property
    def outcome(self):
        """ BuildOutcome of the last build or None """
        return self._outcome

    def prepare(self):
        """
        Resolve config, classify library kinds, plan names and install paths.
        Returns BuildOutcome without results of the build.
        """

        metadata = readMetadata(self.manifest)
        config = resolve(metadata, self.manifest.capi, self.toolVersion,
                         self.invocation)

        platform = self.platform
        classification = classify(config, platform, self.requestedKinds,
                                  self.forced)
        if not classification.feasible:
            msg = "There is no library kind to build for the target %r" % \
                    platform.triple
            raise CapiMakePlatformUnsupported(msg, triple = platform.triple)

        artifacts = planNames(config, platform, classification.feasible)
        paths = resolvePaths(config, platform, **self.pathVars)
        builddir = self.buildTool.outputDir(platform, self.targetdir)

        return BuildOutcome(
            config = config,
            classification = classification,
            artifacts = artifacts,
            paths = paths,
            builddir = builddir,
        )

    def _reportBuilt(self, outcome):
        for artifact in outcome.artifacts:
            if artifact.kind == LIB_KIND_LINK:
                continue
            name = buildOutputName(outcome.config, self.platform, artifact)
            if isfile(joinpath(outcome.builddir, name)):
                log.info('Built %s library %r', artifact.kind, name)
            else:
                log.error('Not built %s library %r', artifact.kind, name)

    def _adoptOutputs(self, outcome):
        """
        The build tool names outputs after the crate but the library name
        can be different.
        """

        config = outcome.config
        crateName = config.package.libname
        if crateName == config.library.name:
            return

        crateConfig = config._replace(
            library = config.library._replace(name = crateName))
        crateArtifacts = planNames(crateConfig, self.platform,
                                   outcome.classification.feasible)

        for orig, renamed in zip(crateArtifacts, outcome.artifacts):
            if orig.kind == LIB_KIND_LINK:
                continue
            src = joinpath(outcome.builddir,
                           buildOutputName(crateConfig, self.platform, orig))
            if not isfile(src):
                continue
            dst = joinpath(outcome.builddir,
                           buildOutputName(config, self.platform, renamed))
            log.debug('executor: copying %r to %r', src, dst)
            try:
                shutil.copy2(src, dst)
            except OSError as ex:
                raise CapiMakeIOError(dst, ex = ex) from ex

    def _libraryOutputs(self, outcome):
        result = []
        for artifact in outcome.artifacts:
            if artifact.kind == LIB_KIND_LINK:
                continue
            name = buildOutputName(outcome.config, self.platform, artifact)
            result.append(joinpath(outcome.builddir, name))
        return result

    def _headerSource(self, config):
        return joinpath(self.rootdir, ASSETS_DIRNAME, '%s.h' % config.header.name)

    def _headerInputs(self, outcome):
        """
        Files of the header which must be covered by the build hash.
        A generated header is taken from the build dir.
        """

        header = outcome.config.header
        if not header.enabled:
            return []
        if header.generation:
            return [joinpath(outcome.builddir, '%s.h' % header.name)]
        return [self._headerSource(outcome.config)]

    def _buildHeader(self, outcome):
        config = outcome.config
        header = config.header
        outpath = joinpath(outcome.builddir, '%s.h' % header.name)

        if header.generation:
            if self.headerGenerator is None:
                raise CapiMakeLogicError("Header generator is not set")
            log.printStep('Building header file %r', outpath)
            self.headerGenerator.generate(outpath, config, config.library.version)
            return outpath

        log.printStep('Building pre-built header file %r', outpath)
        srcpath = self._headerSource(config)
        if not isfile(srcpath):
            raise CapiMakePathNotFoundError(srcpath)
        try:
            shutil.copyfile(srcpath, outpath)
        except OSError as ex:
            raise CapiMakeIOError(outpath, ex = ex) from ex
        return outpath

    def _buildPcFiles(self, outcome, descriptor):
        log.printStep('Building pkg-config files')

        builddir = outcome.builddir
        result = []
        for desc, isUninstalled in ((descriptor, False),
                                    (uninstalled(descriptor, builddir), True)):
            path = joinpath(builddir, pcFilename(desc, isUninstalled))
            _writeText(path, render(desc))
            result.append(path)
        return result

    def _makePlan(self, outcome):
        install = outcome.config.install
        targets = install.include + install.data
        assetFiles = collectFiles(self.rootdir,
                        [x.src for x in targets if x.kind == 'asset'])
        generatedFiles = collectFiles(outcome.builddir,
                        [x.src for x in targets if x.kind == 'generated'])

        return planInstall(outcome.config, self.platform, outcome.paths,
                           outcome.artifacts, outcome.builddir,
                           assetFiles, generatedFiles,
                           rootdir = self.rootdir)

    def build(self):
        """
        Build library, header and pkg-config files.
        Returns BuildOutcome.
        """

        outcome = self.prepare()
        config = outcome.config
        platform = self.platform
        kinds = list(outcome.classification.feasible)

        flags = []
        if LIB_KIND_SHARED in kinds:
            flags.extend(sharedObjectLinkArgs(config, platform,
                                libDir(config, outcome.paths), outcome.builddir))
        flags.extend(config.library.rustflags)

        log.printStep('Building %s library %r for %r', ', '.join(kinds),
                      config.library.name, platform.triple)
        try:
            buildResult = self.buildTool.build(platform, kinds, flags,
                                               self.targetdir)
        except CapiMakeProcessFailed:
            self._reportBuilt(outcome)
            raise

        if buildResult.outdir:
            outcome = outcome._replace(builddir = buildResult.outdir)
        self._adoptOutputs(outcome)

        builddir = outcome.builddir
        libOutputs = [x for x in self._libraryOutputs(outcome) if isfile(x)]

        fingerprint = Fingerprint(config.library.name, builddir)
        fingerprint.load()

        systemLibs = list(buildResult.systemLibs or fingerprint.systemLibs)
        staticLibs = list(buildResult.staticLibs or fingerprint.staticLibs)
        descriptor = buildPkgConfig(config, outcome.artifacts, outcome.paths,
                                    systemLibs, staticLibs)

        hashedFiles = libOutputs + self._headerInputs(outcome)
        newHash = Fingerprint.calcHash(hashedFiles, outcome.paths, config)
        auxOutputs = [x for x in fingerprint.outputs if x not in libOutputs]
        upToDate = fingerprint.matches(newHash) and \
                    all(isfile(x) for x in auxOutputs)

        if upToDate:
            log.info('Library %r is up to date', config.library.name)
        else:
            auxOutputs = []
            if config.header.enabled:
                auxOutputs.append(self._buildHeader(outcome))
            auxOutputs.extend(self._buildPcFiles(outcome, descriptor))

            # the header could be regenerated
            fingerprint.hash = Fingerprint.calcHash(hashedFiles, outcome.paths,
                                                    config)
            fingerprint.systemLibs = systemLibs
            fingerprint.staticLibs = staticLibs
            fingerprint.outputs = libOutputs + auxOutputs
            try:
                fingerprint.save()
            except OSError as ex:
                raise CapiMakeIOError(fingerprint.path, ex = ex) from ex

        outcome = outcome._replace(
            descriptor = descriptor,
            buildResult = buildResult,
            upToDate = upToDate,
        )
        outcome = outcome._replace(plan = self._makePlan(outcome))

        self._outcome = outcome
        return outcome

    def materializeLinks(self, dirpath, artifacts):
        """
        Create links of artifacts in the directory. Existing files are
        removed before. Returns list of created links.
        """

        result = []
        for artifact in artifacts:
            if artifact.linkTo is None:
                continue
            path = joinpath(dirpath, artifact.filename)
            self._makeLink(artifact.linkTo, path)
            result.append(path)
        return result

    @staticmethod
    def _makeLink(linkTo, path):
        log.debug('executor: link %r -> %r', path, linkTo)
        try:
            mksymlink(linkTo, path, force = True)
        except (OSError, NotImplementedError) as ex:
            raise CapiMakeIOError(path, ex = ex) from ex

    def _planOrLast(self, plan):
        if plan is not None:
            return plan
        if self._outcome is None or self._outcome.plan is None:
            raise CapiMakeLogicError("There is no install plan: run build first")
        return self._outcome.plan

    @staticmethod
    def _checkSources(plan):
        for entry in plan.files():
            if isfile(entry.src) or entry.role in OPTIONAL_ROLES:
                continue
            raise CapiMakePathNotFoundError(entry.src)

    @staticmethod
    def _checkWritable(dirs):
        for path in dirs:
            probe = getNativePath(path)
            while not pathexists(probe):
                parent = dirname(probe)
                if parent == probe:
                    break
                probe = parent

            if not isdir(probe):
                msg = "Destination %r cannot be created: " % path
                msg += "%r is not a directory" % probe
                raise CapiMakeIOError(path, msg)
            if not os.access(probe, os.W_OK | os.X_OK):
                msg = "Destination %r is not writable" % path
                raise CapiMakeIOError(path, msg)

    @staticmethod
    def _makedirs(path, created):
        missing = []
        probe = path
        while not pathexists(probe):
            missing.append(probe)
            parent = dirname(probe)
            if parent == probe:
                break
            probe = parent

        for dirpath in reversed(missing):
            try:
                os.mkdir(dirpath)
            except OSError as ex:
                raise CapiMakeIOError(dirpath, ex = ex) from ex
            created.append(dirpath)

    @staticmethod
    def _rollback(created, backups):
        for path in reversed(created):
            try:
                if isdir(path) and not islink(path):
                    os.rmdir(path)
                elif pathlexists(path):
                    os.remove(path)
            except OSError as ex:
                log.error("Cannot remove %r during rollback: %s", path, ex)

        for path, backup in reversed(backups):
            try:
                os.replace(backup, path)
            except OSError as ex:
                log.error("Cannot restore %r from %r: %s", path, backup, ex)

    @staticmethod
    def _removeBackups(backups):
        for _, backup in backups:
            try:
                os.remove(backup)
            except OSError as ex:
                log.warn("Cannot remove backup %r: %s", backup, ex)

    def _installEntry(self, entry, created, backups):
        dst = getNativePath(entry.dst)
        self._makedirs(dirname(dst), created)

        if pathlexists(dst):
            # existing file is kept until the whole installation is done
            backup = dst + BACKUP_SUFFIX
            try:
                os.replace(dst, backup)
            except OSError as ex:
                raise CapiMakeIOError(entry.dst, ex = ex) from ex
            backups.append((dst, backup))
        created.append(dst)

        if entry.kind == 'symlink':
            self._makeLink(entry.linkTo, dst)
            return
        try:
            shutil.copy2(getNativePath(entry.src), dst)
        except OSError as ex:
            raise CapiMakeIOError(entry.dst, ex = ex) from ex

    def install(self, plan = None):
        """
        Install files from InstallPlan or from the plan of the last build.
        Nothing is copied if some destination is not writable. All created
        paths are removed and replaced files are restored if installation
        failed.
        Returns list of installed destinations.
        """

        plan = self._planOrLast(plan)

        # sorted order of locks prevents deadlocks
        locks = [_destinationLock(x) for x in plan.dirs()]
        for lock in locks:
            lock.acquire()

        try:
            self._checkSources(plan)
            self._checkWritable(plan.dirs())

            installed = []
            created = []
            backups = []
            lastLabel = None
            try:
                for entry in plan:
                    if entry.kind == 'file' and entry.role in OPTIONAL_ROLES \
                            and not isfile(entry.src):
                        log.debug('executor: absent %r', entry.src)
                        continue
                    label = _ROLE_NAMES.get(entry.role, entry.role)
                    if label != lastLabel:
                        log.printStep('Installing %s', label)
                        lastLabel = label
                    self._installEntry(entry, created, backups)
                    installed.append(entry.dst)
            except CapiMakeError:
                self._rollback(created, backups)
                raise
            self._removeBackups(backups)
        finally:
            for lock in reversed(locks):
                lock.release()

        log.pprint('GREEN', 'Installed %d file(s)' % len(installed))
        return installed

    def _removeEmptyDirs(self, dirs, bases):
        """
        Remove directories which are empty and inside some of base dirs
        """

        bases = [getNativePath(x).rstrip(os.sep) + os.sep for x in bases]
        for path in sorted(set(dirs), key = len, reverse = True):
            while any(path.startswith(x) for x in bases):
                if not isdir(path) or os.listdir(path):
                    break
                log.debug('executor: removing dir %r', path)
                os.rmdir(path)
                path = dirname(path)

    def clean(self, plan = None):
        """
        Remove installed paths of the plan (the plan of the last build by
        default) and outputs of the last build.
        Returns list of removed paths.
        """

        outcome = self._outcome or self.prepare()
        if plan is None:
            plan = outcome.plan if outcome.plan is not None \
                                else self._makePlan(outcome)

        removed = []

        def remove(path):
            if isdir(path) and not islink(path):
                log.warn("Path %r is a directory, it is not removed", path)
                return
            if not pathlexists(path):
                return
            log.debug('executor: removing %r', path)
            try:
                os.remove(path)
            except OSError as ex:
                raise CapiMakeIOError(path, ex = ex) from ex
            removed.append(path)

        for entry in reversed(plan.entries):
            remove(getNativePath(entry.dst))

        paths = outcome.paths
        bases = [staged(paths, x) for x in (paths.libdir, paths.includedir,
                        paths.datadir, paths.bindir, paths.pkgconfigdir)]
        try:
            self._removeEmptyDirs([dirname(x) for x in removed], bases)
        except OSError as ex:
            raise CapiMakeIOError(ex.filename, ex = ex) from ex

        builddir = outcome.builddir
        fingerprint = Fingerprint(outcome.config.library.name, builddir)
        if fingerprint.load():
            base = os.path.abspath(builddir) + os.sep
            for path in fingerprint.outputs:
                # never touch anything outside of the build dir
                if os.path.abspath(path).startswith(base):
                    remove(path)
            remove(fingerprint.path)

        return removed
