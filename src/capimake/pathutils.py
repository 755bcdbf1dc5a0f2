# coding=utf-8
#

"""
 Copyright (c) 2020, Alexander Magola. All rights reserved.
 license: BSD 3-Clause License, see LICENSE for more details.

 Paths in plans are always POSIX paths and they are converted to native
 ones only when files are touched.
"""

import os
import re
import posixpath
from fnmatch import fnmatchcase

_normpath = posixpath.normpath
_joinpath = posixpath.join

_RE_DRIVE = re.compile(r'^[a-zA-Z]:')
_WILDCARD_CHARS = ('*', '?', '[')

_patternsCache = {}

def getNativePath(path):
    """
    Return native path from POSIX path
    """
    if not path:
        return path
    return path.replace('/', os.sep) if os.sep != '/' else path

def toPosixPath(path):
    """
    Return POSIX path from native path
    """
    if not path:
        return path
    return path.replace('\\', '/')

def splitPath(path):
    """ Split POSIX path into list of components without empty ones """
    return [x for x in path.split('/') if x]

def canonicalize(path):
    """
    Collapse '.', '..' and duplicated separators in a path.
    It doesn't touch the file system.
    """

    if not path:
        return path

    path = _normpath(toPosixPath(path))
    if path.startswith('//'):
        # posixpath keeps two leading slashes
        path = '/' + path.lstrip('/')
    elif _RE_DRIVE.fullmatch(path):
        # root of a windows drive
        path += '/'
    return path

def isAbsPath(path):
    """ Detect absolute path for POSIX and windows styles """
    path = toPosixPath(path)
    return path.startswith('/') or bool(_RE_DRIVE.match(path))

def joinPath(base, path):
    """
    Join path to base. An absolute path wins as is.
    """
    if not base or isAbsPath(path):
        return toPosixPath(path)
    return _joinpath(toPosixPath(base), toPosixPath(path))

def appendToDestdir(destdir, path):
    """
    Put an absolute path under destdir dropping root and drive of the path
    """

    path = toPosixPath(path)
    if not destdir:
        return path

    path = _RE_DRIVE.sub('', path).lstrip('/')
    return _joinpath(toPosixPath(destdir), path)

def isWildcard(component):
    """ Detect glob component """
    return any(x in component for x in _WILDCARD_CHARS)

def patternPrefix(pattern):
    """
    Get fixed part of a glob pattern: components before the first
    component with a wildcard.
    """

    prefix = []
    for part in splitPath(toPosixPath(pattern)):
        if isWildcard(part):
            break
        prefix.append(part)
    return '/'.join(prefix)

def _matchParts(patternParts, pathParts):
    if not patternParts:
        return not pathParts

    head = patternParts[0]
    if head == '**':
        rest = patternParts[1:]
        return any(_matchParts(rest, pathParts[i:])
                   for i in range(len(pathParts) + 1))

    if not pathParts or not fnmatchcase(pathParts[0], head):
        return False
    return _matchParts(patternParts[1:], pathParts[1:])

def matchPattern(pattern, path):
    """
    Check that POSIX relative path matches glob pattern.
    The '**' component matches zero or more directories.
    """

    parts = _patternsCache.get(pattern)
    if parts is None:
        parts = tuple(splitPath(toPosixPath(pattern)))
        _patternsCache[pattern] = parts
    return _matchParts(parts, splitPath(toPosixPath(path)))

def matchFiles(pattern, files):
    """
    Select files matching the pattern from the list of relative POSIX paths.
    Returns list of tuples (path, subpath) where subpath is the path
    relative to the fixed prefix of the pattern. For patterns without
    wildcards subpath of the matched file itself is '' and files beneath
    a matched directory get their path relative to it.
    """

    pattern = toPosixPath(pattern).strip('/')
    result = []

    if not isWildcard(pattern):
        for path in files:
            path = toPosixPath(path)
            if path == pattern:
                result.append((path, ''))
            elif path.startswith(pattern + '/'):
                result.append((path, path[len(pattern) + 1:]))
        return result

    prefix = patternPrefix(pattern)
    for path in files:
        path = toPosixPath(path)
        if not matchPattern(pattern, path):
            continue
        subpath = posixpath.relpath(path, prefix) if prefix else path
        result.append((path, subpath))
    return result
