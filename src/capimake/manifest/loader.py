# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

__all__ = [
    'findManifest',
    'load',
    'readMetadata',
]

import os
import io
import tomllib

from capimake import log
from capimake.constants import MANIFEST_FILENAMES, MANIFEST_YAML_NAMES
from capimake.error import CapiMakeConfError, CapiMakeConfValueError, \
                           CapiMakePathNotFoundError
from capimake.pyutils import struct, maptype
from capimake.types import PackageMetadata
from capimake.utils import toList
from capimake.version import SemVer
from capimake.manifest import yaml
from capimake.manifest.validator import Validator

isfile = os.path.isfile
joinpath = os.path.join

Manifest = struct('Manifest', 'path, package, capi, lib')

def findManifest(dpath, fname = None):
    """
    Try to find manifest file.
    Returns filename if found or None
    """
    if fname:
        if isfile(joinpath(dpath, fname)):
            return fname
        return None

    for name in MANIFEST_FILENAMES:
        if isfile(joinpath(dpath, name)):
            return name
    return None

def _loadToml(filepath):

    with io.open(filepath, 'rb') as stream:
        try:
            data = tomllib.load(stream)
        except tomllib.TOMLDecodeError as ex:
            raise CapiMakeConfError(ex = ex, confpath = filepath) from ex
        except UnicodeDecodeError as ex:
            raise CapiMakeConfError(ex = ex, confpath = filepath) from ex

    return data

def _getTable(data, key, filepath):
    table = data.get(key, {})
    if not isinstance(table, maptype):
        msg = "The %r should be a table/map." % key
        raise CapiMakeConfError(msg, confpath = filepath)
    return table

def load(path):
    """
    Load manifest from a file or from a directory with a manifest file.
    Returns Manifest object with validated tables.
    """

    if os.path.isdir(path):
        fname = findManifest(path)
        if fname is None:
            raise CapiMakePathNotFoundError(path,
                "No manifest file was found in the directory %r" % path)
        path = joinpath(path, fname)
    elif not isfile(path):
        raise CapiMakePathNotFoundError(path)

    filepath = os.path.abspath(path)
    log.debug('manifest: loading %r', filepath)

    if os.path.basename(filepath) in MANIFEST_YAML_NAMES or \
        filepath.endswith(('.yaml', '.yml')):
        data = yaml.load(filepath)
        package = _getTable(data, 'package', filepath)
        capi = data.get('capi')
        if capi is None:
            capi = _getTable(package, 'metadata', filepath).get('capi', {})
    else:
        data = _loadToml(filepath)
        package = _getTable(data, 'package', filepath)
        capi = _getTable(package, 'metadata', filepath).get('capi', {})

    if not isinstance(capi, maptype):
        raise CapiMakeConfError("The 'capi' should be a table/map.",
                                confpath = filepath)

    lib = _getTable(data, 'lib', filepath)

    validator = Validator(package, filepath)
    validator.validatePackage()
    validator = Validator(capi, filepath)
    validator.validateCapi()

    return Manifest(filepath, package, capi, lib)

def _requiresList(value):
    if not value:
        return ()
    if isinstance(value, str):
        # pkg-config style: comma separated
        if ',' in value:
            return tuple(x.strip() for x in value.split(',') if x.strip())
        return (value.strip(), )
    return tuple(toList(value))

def readMetadata(manifest):
    """
    Make PackageMetadata from the 'package' table of a loaded manifest
    """

    package = manifest.package
    filepath = manifest.path

    name = package.get('name')
    if not name:
        raise CapiMakeConfError("The 'package.name' is required.",
                                confpath = filepath)

    rawVersion = package.get('version')
    if rawVersion is None:
        raise CapiMakeConfError("The 'package.version' is required.",
                                confpath = filepath)
    try:
        version = SemVer.parse(rawVersion)
    except ValueError as ex:
        raise CapiMakeConfValueError(str(ex), confpath = filepath) from ex

    libname = manifest.lib.get('name') if manifest.lib else None
    if not libname:
        # the same way as cargo makes crate name of a lib target
        libname = name.replace('-', '_')

    return PackageMetadata(
        name = name,
        libname = libname,
        version = version,
        description = package.get('description', ''),
        license = package.get('license', ''),
        requires = _requiresList(package.get('requires')),
        requiresPrivate = _requiresList(package.get('requires_private')),
    )
