# coding=utf-8
#

"""
 Copyright (c) 2021, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.
"""

__all__ = [
    'load',
    'dump',
]

import io

import yaml as pyyaml

from capimake.error import CapiMakeConfError
from capimake.pyutils import maptype, stringtype

try:
    YamlLoader = pyyaml.CSafeLoader
except AttributeError:
    YamlLoader = pyyaml.SafeLoader

try:
    YamlDumper = pyyaml.CSafeDumper
except AttributeError:
    YamlDumper = pyyaml.SafeDumper

class StringIO(io.StringIO):
    """
    Customized StringIO
    """

    def __init__(self, data, name = '<file>'):
        super().__init__(data)
        # it's used in pyyaml for error reports
        self.name = name

def loads(text, filepath = '<string>'):
    """
    Load YAML data from a string. Top level value must be a map.
    """

    stream = StringIO(text, filepath)
    try:
        data = pyyaml.load(stream, YamlLoader)
    except pyyaml.YAMLError as ex:
        raise CapiMakeConfError(ex = ex, confpath = filepath) from ex

    if data is None:
        raise CapiMakeConfError("File %r has no config data" % filepath)

    if not isinstance(data, maptype):
        raise CapiMakeConfError("File %r has invalid structure" % filepath)

    for k in data:
        if not isinstance(k, stringtype):
            msg = "File %r:\n" % filepath
            msg += "  The variable %r is not string" % k
            raise CapiMakeConfError(msg)

    return data

def load(filepath):
    """
    Load YAML manifest
    """

    # manifest file should not be very big so it's loaded completely in memory
    with io.open(filepath, 'rt', encoding = 'utf-8') as fstream:
        text = fstream.read()

    return loads(text, filepath)

def dump(data, filepath):
    """
    Save python map as YAML file
    """

    with io.open(filepath, 'wt', encoding = 'utf-8') as fstream:
        pyyaml.dump(data, fstream, Dumper = YamlDumper, default_flow_style = False)
