# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

from capimake import log
from capimake.constants import LIB_KIND_STATIC, LIB_KIND_SHARED, \
                               REQUESTABLE_LIB_KINDS
from capimake.error import CapiMakeConfValueError, CapiMakePlatformUnsupported
from capimake.pyutils import struct, stringtype
from capimake.utils import uniqueListWithOrder

_ClassificationBase = struct('Classification', 'feasible, infeasible',
                             frozen = True)

class Classification(_ClassificationBase):
    """
    Result of classification: tuple of feasible kinds in requested order and
    dict of infeasible kinds with reasons.
    """

    __slots__ = ()

    def require(self, kinds):
        """
        Raise CapiMakePlatformUnsupported if some of kinds is infeasible
        """

        if isinstance(kinds, stringtype):
            kinds = [kinds]
        for kind in kinds:
            reason = self.infeasible.get(kind)
            if reason is not None:
                raise CapiMakePlatformUnsupported(reason, kind = kind)
            if kind not in self.feasible:
                msg = "Library kind %r was not requested" % kind
                raise CapiMakePlatformUnsupported(msg, kind = kind)

def defaultKinds(platform):
    """
    Get library kinds to build when nothing was requested
    """
    if not platform.supportsDynamic:
        return [LIB_KIND_STATIC]
    return [LIB_KIND_STATIC, LIB_KIND_SHARED]

def classify(config, platform, requestedKinds = None, forced = False):
    """
    Split requested library kinds into feasible and infeasible ones.
    A dynamic library for a platform without dynamic libraries is infeasible
    unless 'forced' is True.
    """

    if not requestedKinds:
        requestedKinds = defaultKinds(platform)

    feasible = []
    infeasible = {}
    for kind in uniqueListWithOrder(requestedKinds):
        if kind not in REQUESTABLE_LIB_KINDS:
            msg = "Unknown library kind %r. Allowed values: %s" % \
                    (kind, str(list(REQUESTABLE_LIB_KINDS))[1:-1])
            raise CapiMakeConfValueError(msg)

        if kind == LIB_KIND_SHARED and not (platform.supportsDynamic or forced):
            reason = "Target %r doesn't support dynamic libraries" % platform.triple
            log.warn("%s: skipping the %r library %r",
                     reason, kind, config.library.name)
            infeasible[kind] = reason
            continue

        feasible.append(kind)

    return Classification(tuple(feasible), infeasible)
