#! /usr/bin/env python
"""Normalization of path names

The functions in this module work on plain strings with a configurable
separator so they can be used for URI paths (always '/') as well as
file system style path names, e.g., with '\\' as the separator."""

from .rfc2396 import is_alpha


def prefix_length(path, sep='/'):
    """Returns the length of the prefix of *path*

    path
        A path name string

    sep
        The separator character, defaults to '/'

    The prefix is the part of a path that identifies its root and is
    never touched by normalization.  It may be:

    *   empty, for a relative path

    *   a drive letter (US-ASCII only) followed by a colon, e.g., "C:"

    *   a leading separator, e.g., "/" or a doubled leading separator
        indicating a UNC root, e.g., "//"

    In the first two cases a single separator directly following the
    prefix is considered part of it.  For example::

        prefix_length("C:/Program Files") == 3
        prefix_length("C:relative") == 2
        prefix_length("//host/share") == 2"""
    path_len = len(path)
    plen = 0
    if path_len and path[0] == sep:
        # leading separator or first character of a UNC root
        plen = 1
    elif path_len > 1 and path[1] == ':' and is_alpha(path[0]):
        # drive designation
        plen = 2
    if path_len > plen and path[plen] == sep:
        plen += 1
    return plen


class PathNormalizer(object):

    """Normalizes path names with a given separator

    sep
        The separator character, defaults to '/'

    Instances hold no state between calls and can be shared."""

    def __init__(self, sep='/'):
        if len(sep) != 1:
            raise ValueError("Separator must be a single character: %s" %
                             repr(sep))
        self.sep = sep

    def normalize(self, path):
        """Returns the normalized form of *path*

        All redundant separators, dot segments (".") and dot-dot
        segments ("..") that can be collapsed with a preceding segment
        are removed.  A dot-dot segment that has nothing to its left to
        cancel is preserved, e.g., "../a" is unchanged.

        If present, a single trailing separator is retained.  A
        separator is also left after the last segment of the result if
        a segment to its right was collapsed::

            normalize("a/b/") == "a/b/"
            normalize("a/b/..") == "a/"
            normalize("a/../b/../..") == "../"

        A result that consists of a single dot segment is truncated to
        the empty string.  The prefix (see :func:`prefix_length`) is
        copied to the result unchanged.

        If path is already in normal form then path itself is
        returned."""
        sep = self.sep
        plen = prefix_length(path, sep)
        # Segments are matched from the right: each dot-dot raises the
        # number of pending collapses and each named segment seen while
        # collapses are pending is dropped.
        frames = []
        collapse = 0
        for segment in reversed(path[plen:].split(sep)):
            if not segment or segment == '.':
                continue
            elif segment == '..':
                frames.append(segment)
                collapse += 1
            elif collapse:
                frames.append(None)
                collapse -= 1
            else:
                frames.append(segment)
        # Output runs left to right; pending is the number of collapses
        # that found nothing to their left, each one keeps a dot-dot.
        pending = collapse
        result = []
        for segment in reversed(frames):
            if segment == '..':
                if not pending:
                    continue
                pending -= 1
            self._slashify(result)
            if segment is not None:
                result.append(segment)
        result.insert(0, path[:plen])
        if path.endswith(sep) or path.endswith(sep + '.'):
            self._slashify(result)
        result = ''.join(result)
        if result == path:
            return path
        return result

    def _slashify(self, result):
        # appends a separator unless result is empty or ends with one
        for s in reversed(result):
            if s:
                if not s.endswith(self.sep):
                    result.append(self.sep)
                break


_normalizers = {}


def normalize(path, sep='/'):
    """Returns the normalized form of *path*

    A convenience function, see :meth:`PathNormalizer.normalize`."""
    normalizer = _normalizers.get(sep, None)
    if normalizer is None:
        normalizer = _normalizers[sep] = PathNormalizer(sep)
    return normalizer.normalize(path)
