# coding=utf-8
#

"""
 Copyright (c) 2019 Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

import os
import platform
from capimake import utils

APPNAME = 'capimake'

MANIFEST_TOML_NAME = 'Cargo.toml'
MANIFEST_YAML_NAMES = ['capi.yaml', 'capi.yml']
MANIFEST_FILENAMES = [MANIFEST_TOML_NAME] + MANIFEST_YAML_NAMES

LIB_KIND_STATIC = 'static'
LIB_KIND_SHARED = 'shared'
LIB_KIND_LINK = 'shared-versioned-link'
LIB_KIND_IMPORT = 'import'
LIB_KIND_DEF = 'def'
LIB_KIND_DEBUGINFO = 'debug-info'

# kinds which can be requested for a build
REQUESTABLE_LIB_KINDS = (LIB_KIND_STATIC, LIB_KIND_SHARED)

# names of kinds in terms of rustc --crate-type
CRATE_TYPES = {
    LIB_KIND_STATIC : 'staticlib',
    LIB_KIND_SHARED : 'cdylib',
}

DEFAULT_PREFIX = '/usr/local'
DEFAULT_WINDOWS_PREFIX = 'c:/'
DEFAULT_LIBDIRNAME = 'lib'
DEFAULT_INCLUDEDIRNAME = 'include'
DEFAULT_DATADIRNAME = 'share'
DEFAULT_BINDIRNAME = 'bin'
PKGCONFIG_DIRNAME = 'pkgconfig'

DEFAULT_PROFILE = 'release'
DEFAULT_TARGETDIR = 'target'

ASSETS_DIRNAME = 'assets'
DEFAULT_ASSET_INCLUDE_PATTERN = 'assets/capi/include/**/*'
DEFAULT_GENERATED_INCLUDE_PATTERN = 'capi/include/**/*'

CACHE_FILENAME_PATTERN = 'capimake-%s.cache'

CWD = os.getcwd()
PLATFORM = utils.PLATFORM
HOST_OS = utils.hostOS()
CPU_ARCH = platform.machine()
