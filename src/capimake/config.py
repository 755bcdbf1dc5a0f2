# coding=utf-8
#

"""
 Copyright (c) 2019, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Resolving of crate metadata and capi overrides into one normalized config.

 Every field is taken from the first layer that has it:
 invocation flags > manifest overrides > crate defaults > global defaults.
"""

from capimake import log
from capimake.constants import DEFAULT_ASSET_INCLUDE_PATTERN, \
                               DEFAULT_GENERATED_INCLUDE_PATTERN
from capimake.error import CapiMakeConfValueError, CapiMakeUnsupportedToolVersion, \
                           CapiMakeVersionSuffixTooLong
from capimake.manifest.validator import Validator
from capimake.pyutils import stringtype
from capimake.types import HeaderConfig, PkgConfigConfig, LibraryConfig, \
                           InstallConfig, InstallTarget, ResolvedConfig
from capimake.utils import toList
from capimake.version import SemVer

GLOBAL_DEFAULTS = {
    'header' : {
        'generation' : True,
        'enabled' : True,
    },
    'pkg_config' : {
        'description' : '',
        'strip_include_path_components' : 0,
    },
    'library' : {
        'versioning' : True,
        'import_library' : True,
    },
    'install' : {},
}

def lookup(layers, key, default = None):
    """
    Get value of the key from the first layer where it is set.
    Layers are maps or None. A value of None means 'not set'.
    """

    for layer in layers:
        if not layer:
            continue
        value = layer.get(key)
        if value is not None:
            return value
    return default

def _facetLayers(facet, invocation, overrides, crateDefaults):
    return [
        invocation.get(facet),
        overrides.get(facet),
        crateDefaults.get(facet),
        GLOBAL_DEFAULTS.get(facet),
    ]

def checkToolVersion(overrides, toolVersion):
    """
    Check 'min_version' from overrides against version of the tool
    """

    minVersion = overrides.get('min_version')
    if minVersion is None:
        return

    try:
        required = SemVer.parse(minVersion)
        current = SemVer.parse(str(toolVersion))
    except ValueError as ex:
        raise CapiMakeConfValueError(str(ex)) from ex

    if required > current:
        raise CapiMakeUnsupportedToolVersion(str(required), str(current))

def _crateDefaults(metadata):
    name = metadata.libname
    return {
        'header' : {
            'name' : name,
            'subdirectory' : name,
        },
        'pkg_config' : {
            'name' : name,
            'description' : metadata.description,
            'version' : str(metadata.version),
            'requires' : metadata.requires,
            'requires_private' : metadata.requiresPrivate,
        },
        'library' : {
            'name' : name,
            'version' : metadata.version,
        },
    }

def _toTuple(value):
    if not value:
        return ()
    if isinstance(value, stringtype):
        return tuple(x.strip() for x in value.split(',') if x.strip())
    return tuple(value)

def _resolveHeader(layers, overrides, defaults):

    name = lookup(layers, 'name')
    legacyName = overrides.get('header_name')
    if legacyName and not lookup(layers[:2], 'name'):
        name = legacyName

    subdir = lookup(layers, 'subdirectory')
    if subdir is True:
        subdir = defaults['header']['subdirectory']
    elif subdir is False:
        subdir = ''

    return HeaderConfig(
        name = name,
        subdirectory = subdir.strip('/'),
        generation = lookup(layers, 'generation'),
        enabled = lookup(layers, 'enabled'),
    )

def _resolveLibrary(layers):

    version = lookup(layers, 'version')
    if isinstance(version, stringtype):
        try:
            version = SemVer.parse(version)
        except ValueError as ex:
            msg = "Param 'library.version': %s" % ex
            raise CapiMakeConfValueError(msg) from ex

    suffixComponents = lookup(layers, 'version_suffix_components')
    if suffixComponents is not None:
        if suffixComponents < 1:
            msg = "Param 'library.version_suffix_components' should be at least 1"
            raise CapiMakeConfValueError(msg)
        if suffixComponents > len(version.components):
            raise CapiMakeVersionSuffixTooLong(suffixComponents, version)

    rustflags = lookup(layers, 'rustflags', ())
    rustflags = tuple(toList(rustflags))

    return LibraryConfig(
        name = lookup(layers, 'name'),
        version = version,
        installSubdir = lookup(layers, 'install_subdir') or None,
        versioning = lookup(layers, 'versioning'),
        versionSuffixComponents = suffixComponents,
        rustflags = rustflags,
        importLibrary = lookup(layers, 'import_library'),
    )

def _resolvePkgConfig(layers, library):

    # filename of the .pc file defaults to the library name
    filename = lookup(layers[:2], 'filename') or library.name

    return PkgConfigConfig(
        name = lookup(layers, 'name'),
        filename = filename,
        description = lookup(layers, 'description'),
        version = lookup(layers, 'version'),
        requires = _toTuple(lookup(layers, 'requires')),
        requiresPrivate = _toTuple(lookup(layers, 'requires_private')),
        stripIncludePathComponents = lookup(layers, 'strip_include_path_components'),
    )

def _installTargets(kind, items):
    # destination None means the default one
    return [InstallTarget(kind, item['from'], item.get('to'))
            for item in items or ()]

def _resolveInstall(layers, header):

    subdir = header.subdirectory

    include = [
        InstallTarget('asset', DEFAULT_ASSET_INCLUDE_PATTERN, subdir),
        InstallTarget('generated', DEFAULT_GENERATED_INCLUDE_PATTERN, subdir),
    ]
    data = []

    includeTable = lookup(layers, 'include') or {}
    dataTable = lookup(layers, 'data') or {}
    for kind in ('asset', 'generated'):
        include.extend(_installTargets(kind, includeTable.get(kind)))
        data.extend(_installTargets(kind, dataTable.get(kind)))

    return InstallConfig(include = tuple(include), data = tuple(data))

def resolve(metadata, overrides, toolVersion, invocation = None):
    """
    Merge crate metadata with capi overrides into ResolvedConfig.
    Param 'overrides' is the 'capi' table of a manifest.
    Param 'invocation' is optional map of per-facet values from the
    invocation flags, they have the highest priority.
    """

    overrides = overrides or {}
    invocation = invocation or {}

    Validator(overrides).validateCapi()
    Validator(invocation).validateCapi(keyprefix = 'invocation')

    checkToolVersion(overrides, toolVersion)

    defaults = _crateDefaults(metadata)

    def layers(facet):
        return _facetLayers(facet, invocation, overrides, defaults)

    header = _resolveHeader(layers('header'), overrides, defaults)
    library = _resolveLibrary(layers('library'))
    pkgconfig = _resolvePkgConfig(layers('pkg_config'), library)
    install = _resolveInstall(layers('install'), header)

    config = ResolvedConfig(
        package = metadata,
        header = header,
        pkgconfig = pkgconfig,
        library = library,
        install = install,
    )

    log.debug('config: resolved %r', config)
    return config
