#! /usr/bin/env python
"""Composing URI from their components

The :class:`URIBuilder` escapes each component for its position in the
URI and checks that the components can be combined into a valid URI
(RFC 2396 updated by RFC 2732 for IPv6 literals)."""

from .rfc2396 import (
    EncodingContext,
    split_uri,
    StructuralViolation,
    URIComponents,
    URIDecoder,
    URIEncoder,
    URIStateError,
    URISyntaxError,
    validate_scheme)


class URIBuilder(object):

    """A mutable object for composing URI

    raw
        If True, the '%' character is not escaped.  Use this if the
        component values you set are already escaped.  Defaults to
        False.

    codec
        The character encoding used to escape characters outside
        US-ASCII, defaults to 'utf-8'.  See
        :class:`urikit.rfc2396.URIEncoder` for details.

    Each URI is composed of the five components scheme, authority,
    path, query and fragment.  Each component is either None (absent)
    or a string, the difference between None and an empty string is
    significant, e.g., an empty query results in a trailing '?'.

    The setter methods return the builder itself so they can be
    chained::

        u = URIBuilder().scheme('http').authority('example.com')\\
            .path('/a b').query('x=1').to_string()
        # u == 'http://example.com/a%20b?x=1'

    The URI can then be composed with :meth:`build_string`,
    :meth:`build_uri`, :meth:`to_string`, :meth:`to_uri` or by
    converting the builder to a string.

    Identities: for any valid URI string u::

        URIBuilder(raw=True).string(u).to_string() == u

    and for any URI string u composed by a (non-raw) URIBuilder::

        URIBuilder().string(u).to_string() == u

    A builder can be reused after calling :meth:`clear` but it is not
    safe to use the same builder from multiple threads."""

    def __init__(self, raw=False, codec='utf-8'):
        self.encoder = URIEncoder(codec, raw)
        self.decoder = URIDecoder(codec or 'utf-8')
        self.raw = raw
        self.clear()

    def clear(self):
        """Sets all components to None

        Returns the builder."""
        self._scheme = None
        self._authority = None
        self._path = None
        self._query = None
        self._fragment = None
        return self

    def components(self):
        """Returns the (unescaped) component values

        The result is a :class:`urikit.rfc2396.URIComponents`
        instance containing the values exactly as they were set."""
        return URIComponents(
            self._scheme, self._authority, self._path, self._query,
            self._fragment)

    def scheme(self, scheme):
        """Sets the scheme component

        Schemes are never escaped, the scheme is validated when the URI
        is composed."""
        self._scheme = scheme
        return self

    def authority(self, authority):
        """Sets the authority component"""
        self._authority = authority
        return self

    def path(self, path):
        """Sets the path component

        For opaque URI this is the scheme specific part.  A path that
        begins with "//" requires an authority, otherwise it would be
        read back as one."""
        self._path = path
        return self

    def query(self, query):
        """Sets the query component"""
        self._query = query
        return self

    def path_query(self, path_query):
        """Sets the path and query components

        path_query
            A string containing the path and query separated by the
            first occurrence of '?'.  If there is no '?' then the query
            is set to None.  If path_query is None both components are
            set to None."""
        if path_query is not None:
            pos = path_query.find('?')
            if pos >= 0:
                self._path = path_query[:pos]
                self._query = path_query[pos + 1:]
                return self
        self._path = path_query
        self._query = None
        return self

    def fragment(self, fragment):
        """Sets the fragment component"""
        self._fragment = fragment
        return self

    def uri(self, uri):
        """Sets all components from *uri*

        uri
            A :class:`urikit.rfc2396.URIComponents` instance (or any
            object with the five component attributes) holding escaped
            component values.

        Unless the builder is raw the components (other than the scheme)
        are unescaped first.  Raises
        :class:`urikit.rfc2396.URISyntaxError` if a component contains
        an invalid escape sequence."""
        if self.raw:
            def component(value):
                return value
        else:
            def component(value):
                if value is None:
                    return None
                return self.decoder.decode(value)
        self._scheme = uri.scheme
        self._authority = component(uri.authority)
        self._path = component(uri.path)
        self._query = component(uri.query)
        self._fragment = component(uri.fragment)
        return self

    def string(self, src):
        """Sets all components from the URI string *src*

        Equivalent to::

            builder.uri(split_uri(src))"""
        return self.uri(split_uri(src))

    def build_string(self):
        """Returns the composed URI string

        Raises :class:`urikit.rfc2396.StructuralViolation` if the
        components can't be combined into a valid URI:

        *   the scheme is empty or contains illegal characters

        *   the path is relative but there is an authority

        *   the path begins with "//" but there is no authority

        *   there is a query but the URI is opaque

        *   the scheme specific part of an absolute URI is empty

        The error holds the composed string and the index at which
        the problem was detected."""
        encoder = self.encoder
        result = []
        rlen = 0
        err_index = -1
        err_msg = None
        scheme = self._scheme
        authority = self._authority
        path = self._path
        query = self._query
        fragment = self._fragment
        if scheme is not None:
            result.append(scheme)
            result.append(':')
            rlen += len(scheme) + 1
        # index of the scheme specific part
        ssp = rlen
        if authority is not None:
            result.append('//')
            rlen += 2
            result.append(
                encoder.encode(EncodingContext.AUTHORITY, authority))
            rlen += len(result[-1])
        abs_path = False
        if path:
            if path.startswith('/'):
                abs_path = True
                if authority is None and path.startswith('//'):
                    # would be read back as an authority
                    err_index = rlen
                    err_msg = ("Path begins with '//' but there is no "
                               "authority")
                result.append(
                    encoder.encode(EncodingContext.ABSOLUTE_PATH, path))
            elif authority is not None:
                abs_path = True
                err_index = rlen
                err_msg = "Relative path with non-empty authority"
                result.append(
                    encoder.encode(EncodingContext.ABSOLUTE_PATH, path))
            elif scheme is not None:
                # opaque part
                result.append(encoder.encode(EncodingContext.QUERY, path))
            else:
                result.append(encoder.encode(EncodingContext.PATH, path))
            rlen += len(result[-1])
        if query is not None:
            result.append('?')
            rlen += 1
            if scheme is not None and authority is None and not abs_path:
                err_index = rlen
                err_msg = "Query in opaque URI"
            result.append(encoder.encode(EncodingContext.QUERY, query))
            rlen += len(result[-1])
        if scheme is not None and ssp >= rlen:
            err_index = rlen
            err_msg = "Empty scheme specific part in absolute URI"
        if fragment is not None:
            result.append('#')
            result.append(encoder.encode(EncodingContext.FRAGMENT, fragment))
        result = ''.join(result)
        if scheme is not None:
            validate_scheme(scheme, result)
        if err_index >= 0:
            raise StructuralViolation(result, err_msg, err_index)
        return result

    def build_uri(self):
        """Returns the composed URI as a URIComponents instance

        The components of the result are escaped.  Raises the same
        errors as :meth:`build_string`."""
        return split_uri(self.build_string())

    def to_string(self):
        """Returns the composed URI string

        Like :meth:`build_string` but raises
        :class:`urikit.rfc2396.URIStateError` if the URI can't be
        composed."""
        try:
            return self.build_string()
        except URISyntaxError as err:
            raise URIStateError(str(err)) from err

    def to_uri(self):
        """Returns the composed URI as a URIComponents instance

        Like :meth:`build_uri` but raises
        :class:`urikit.rfc2396.URIStateError` if the URI can't be
        composed."""
        try:
            return self.build_uri()
        except URISyntaxError as err:
            raise URIStateError(str(err)) from err

    def __str__(self):
        return self.to_string()


def parse_uri(src):
    """Splits and unescapes a URI string

    Returns a :class:`urikit.rfc2396.URIComponents` instance containing
    the decoded components of *src*, in other words, the values you
    would pass to the setters of a :class:`URIBuilder` to recreate
    src."""
    return URIBuilder().string(src).components()
