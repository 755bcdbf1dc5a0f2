# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 There are functions to wire all stages together for one or several targets.
"""

import os
from concurrent.futures import ThreadPoolExecutor

from capimake import log, target
from capimake.executor import Executor
from capimake.installdirvars import DirVars
from capimake.manifest import loader
from capimake.tools import CargoBuildTool, CbindgenHeaderGenerator

def makePlatforms(triples = None, dirvars = None, forceDynamic = False,
                  hostInfo = None):
    """
    Make list of TargetPlatform objects. If no triple was given then
    the target from the environment or the host target is used.
    """

    if dirvars is None:
        dirvars = DirVars()
    if hostInfo is None:
        hostInfo = target.hostInfo()

    triples = list(triples or [])
    overridden = bool(triples)
    if not triples:
        envTarget = dirvars.get('target')
        if envTarget:
            triples = [envTarget]
            overridden = True
        else:
            triples = [target.hostTriple(hostInfo)]

    return [target.fromTriple(x, isTargetOverridden = overridden,
                              hostInfo = hostInfo, forceDynamic = forceDynamic)
            for x in triples]

def makeInvocation(rustflags = None):
    """
    Make map of values from invocation flags which have the highest
    priority in the config resolving.
    """

    invocation = {}
    if rustflags:
        invocation['library'] = { 'rustflags' : rustflags }
    return invocation

def makeExecutor(manifest, platform, dirvars = None, kinds = None,
                 forced = False, profile = 'release', targetdir = None,
                 invocation = None, buildTool = None, headerGenerator = None):
    """
    Make Executor with default tools for a loaded manifest
    """

    # pylint: disable = too-many-arguments

    rootdir = os.path.dirname(manifest.path)
    if buildTool is None:
        buildTool = CargoBuildTool(rootdir, profile = profile)
    if headerGenerator is None:
        headerGenerator = CbindgenHeaderGenerator(rootdir)
    if dirvars is None:
        dirvars = DirVars()

    return Executor(manifest, platform, buildTool,
                    headerGenerator = headerGenerator,
                    requestedKinds = kinds, forced = forced,
                    pathVars = dirvars.pathVars(), invocation = invocation,
                    targetdir = targetdir)

def runForTargets(func, triples, jobs = None):
    """
    Run func(triple) for each triple in a thread pool.
    Returns list of results in the order of triples. If some call failed
    then the first failure in that order is raised after all calls finished.
    """

    triples = list(triples)
    if not triples:
        return []

    if not jobs or jobs < 1:
        jobs = len(triples)
    jobs = min(jobs, len(triples))

    with ThreadPoolExecutor(max_workers = jobs) as pool:
        futures = [pool.submit(func, x) for x in triples]

    results = []
    failure = None
    for triple, future in zip(triples, futures):
        ex = future.exception()
        if ex is None:
            results.append(future.result())
            continue
        if failure is None:
            failure = ex
        else:
            log.error('Target %r failed: %s', triple, ex)

    if failure is not None:
        raise failure
    return results

def buildTargets(path, triples = None, jobs = None, install = False,
                 dirvars = None, **kwargs):
    """
    Load manifest from path and build (and install) library for all targets.
    Returns list of BuildOutcome objects in the order of targets.
    """

    manifest = loader.load(path)
    if dirvars is None:
        dirvars = DirVars()
    platforms = makePlatforms(triples, dirvars,
                              forceDynamic = kwargs.pop('forceDynamic', False))
    byTriple = { x.triple:x for x in platforms }

    def run(triple):
        executor = makeExecutor(manifest, byTriple[triple], dirvars, **kwargs)
        outcome = executor.build()
        if install:
            executor.install()
        return outcome

    return runForTargets(run, [x.triple for x in platforms], jobs)
