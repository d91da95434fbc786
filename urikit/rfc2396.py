#! /usr/bin/env python
"""This module implements URI escaping as defined in RFC 2396

Updated by RFC 2732 to allow literal IPv6 addresses (in square
brackets) in the authority component.

Escaping is driven by an :class:`EncodingContext`, the URI component
that the escaped text is destined for.  Each context has a fixed set of
US-ASCII characters that may appear unescaped, everything else is
replaced by %-escaped octets.  Characters outside US-ASCII are first
encoded with a character encoding, UTF-8 by default, and each of the
resulting octets is escaped."""

import codecs
import collections
import unicodedata

from .charclass import CharClass
from .enumeration import Enumeration


class URIException(Exception):

    """Base class for URI-related exceptions"""
    pass


class URISyntaxError(URIException, ValueError):

    """Raised when a string cannot be escaped, unescaped or assembled

    source
        The offending input string.

    reason
        A string explaining why the input could not be processed.

    index
        The index in *source* at which the error occurred or -1 if no
        specific index applies.

    The following attributes are defined:

    input
        The offending input in double quotes

    reason
        As passed to the constructor

    index
        As passed to the constructor

    The string representation of the exception combines all three, for
    example::

        Illegal escape sequence at index 1: "a%ZZ"

    URISyntaxError is a subclass of ValueError."""

    def __init__(self, source, reason, index=-1):
        self.source = source
        self.input = '"%s"' % source
        self.reason = reason
        self.index = index
        if index > -1:
            msg = "%s at index %i: %s" % (reason, index, self.input)
        else:
            msg = "%s: %s" % (reason, self.input)
        ValueError.__init__(self, msg)


class MalformedEscape(URISyntaxError):

    """A '%' that is not followed by two hex digits"""
    pass


class InvalidByteSequence(URISyntaxError):

    """Escaped octets that can't be decoded with the character encoding"""
    pass


class UnencodableCharacter(URISyntaxError):

    """A character that can't be encoded with the character encoding

    Can't happen with UTF-8 except for unpaired surrogates."""
    pass


class StructuralViolation(URISyntaxError):

    """The URI components can't be combined into a valid URI"""
    pass


class URIStateError(URIException, RuntimeError):

    """Raised by methods that have no way of reporting a syntax error

    The :class:`URISyntaxError` that caused the problem is chained as
    the exception's __cause__."""
    pass


upalpha = CharClass(('A', 'Z'))
is_upalpha = upalpha.test

lowalpha = CharClass(('a', 'z'))
is_lowalpha = lowalpha.test

alpha = CharClass(upalpha, lowalpha)
is_alpha = alpha.test

digit = CharClass(('0', '9'))
is_digit = digit.test

alphanum = CharClass(upalpha, lowalpha, digit)
is_alphanum = alphanum.test

reserved = CharClass(";/?:@&=+$,[]")
is_reserved = reserved.test

mark = CharClass("-_.!~*'()")
is_mark = mark.test

unreserved = CharClass(alphanum, mark)
is_unreserved = unreserved.test

hex_char = CharClass(digit, ('a', 'f'), ('A', 'F'))
is_hex = hex_char.test

control = CharClass(('\x00', '\x1f'), '\x7f')
is_control = control.test


def is_space(c):
    """Tests production: space"""
    return c is not None and ord(c) == 0x20


scheme_char = CharClass(alphanum, "+-.")
is_scheme_char = scheme_char.test

#: characters that are legal, unescaped, in every component except
#: the scheme
common_legal = CharClass(unreserved, ",;$&+=@")


class EncodingContext(Enumeration):

    """The URI components that text can be escaped for

    ANY
        Can be used safely for any URI component except the scheme
        (which does not allow escape sequences).  May produce redundant
        escape sequences.

    AUTHORITY
        The authority component, allows the square brackets and colons
        of IPv6 literals.

    PATH
        A path component that may contain arbitrary characters.  The
        colon is escaped so that a relative path can't be mistaken for
        a scheme.

    ABSOLUTE_PATH
        A path component that starts with '/'.

    QUERY
        The query component.  Also used for the scheme specific part of
        opaque URI.

    FRAGMENT
        The fragment component."""

    decode = {
        'ANY': 0,
        'AUTHORITY': 1,
        'PATH': 2,
        'ABSOLUTE_PATH': 3,
        'QUERY': 4,
        'FRAGMENT': 5
    }


_legal = {
    EncodingContext.ANY: common_legal,
    EncodingContext.AUTHORITY: CharClass(common_legal, ":[]/"),
    EncodingContext.PATH: CharClass(common_legal, "/"),
    EncodingContext.ABSOLUTE_PATH: CharClass(common_legal, ":/"),
    EncodingContext.QUERY: CharClass(common_legal, ":/?"),
    EncodingContext.FRAGMENT: CharClass(common_legal, ":/?"),
}


def quote_octets(data):
    """Returns a string of upper-case %-escapes, one per octet in data"""
    return ''.join("%%%02X" % b for b in bytearray(data))


def _make_escapes(legal):
    return tuple(None if legal.test(chr(i)) else quote_octets((i, ))
                 for i in range(0x80))


# indexed by context then by character code, None for legal characters
_escapes = tuple(_make_escapes(_legal[context])
                 for context in EncodingContext.values())


def _context_escapes(context):
    if isinstance(context, bool) or context not in EncodingContext.encode:
        raise ValueError("Not an EncodingContext: %s" % repr(context))
    return _escapes[context]


def is_legal(context, c):
    """Returns True if c may appear unescaped in *context*

    context
        One of the :class:`EncodingContext` values.

    c
        A character.  Characters outside US-ASCII are never legal."""
    escapes = _context_escapes(context)
    code = ord(c)
    return code < 0x80 and escapes[code] is None


def escape_sequence(context, c):
    """Returns the escape sequence for US-ASCII character c

    The result is a string of the form "%XX" or None if c is legal in
    *context*.  ValueError is raised if c is not a US-ASCII
    character."""
    code = ord(c)
    if code >= 0x80:
        raise ValueError("Not a US-ASCII character: %s" % repr(c))
    return _context_escapes(context)[code]


def _is_preserved(c):
    # ISO control characters and unicode separators are always escaped
    code = ord(c)
    if code < 0xA0:
        return False
    return unicodedata.category(c) not in ('Zs', 'Zl', 'Zp')


def _lookup_codec(codec):
    if codec is None:
        return None
    return codecs.lookup(codec).name


class URIEncoder(object):

    """Escapes characters that are illegal in URI components

    codec
        The name of the character encoding used for characters outside
        US-ASCII, defaults to 'utf-8'.  LookupError is raised if the
        codec is not known.

        If codec is None, characters outside US-ASCII are preserved
        (not escaped) unless they are ISO control characters
        (U+0080-U+009F) or space, line or paragraph separators, in which
        case they are escaped using UTF-8.  This is useful when creating
        human readable IRI-like strings.

        Note that providing any other value than None or 'utf-8' will
        void interoperability with most applications.

    raw
        If True, the '%' character is not escaped so that strings that
        have already been escaped are passed through untouched.

    Instances hold no state between calls and can be shared."""

    def __init__(self, codec='utf-8', raw=False):
        self.codec = _lookup_codec(codec)
        self.raw = raw

    def encode(self, context, src):
        """Escapes all characters in *src* that are illegal in *context*

        context
            One of the :class:`EncodingContext` values.

        src
            The (decoded) character string to escape.

        Returns the escaped string.  If src contains no characters that
        require escaping then src itself is returned.

        Note that calling this method on an already escaped string
        escapes any escape sequences again, that is, each occurrence of
        '%' is replaced with "%25" (unless the encoder is raw).

        Raises :class:`UnencodableCharacter` if a character can't be
        encoded by the codec, this can't happen with UTF-8 except for
        unpaired surrogates."""
        escapes = _context_escapes(context)
        result = None
        pos = 0
        src_len = len(src)
        while pos < src_len:
            c = src[pos]
            code = ord(c)
            clen = 1
            if code < 0x80:
                escape = escapes[code]
                if escape is None or (code == 0x25 and self.raw):
                    escape = None
            elif self.codec is None and _is_preserved(c):
                escape = None
            else:
                if (0xD800 <= code <= 0xDBFF and pos + 1 < src_len and
                        0xDC00 <= ord(src[pos + 1]) <= 0xDFFF):
                    # a surrogate pair forms a single character
                    c = chr(0x10000 + ((code - 0xD800) << 10) +
                            ord(src[pos + 1]) - 0xDC00)
                    clen = 2
                escape = self._quote_char(src, pos, c)
            if escape is None:
                if result is not None:
                    result.append(c)
            else:
                if result is None:
                    # prefix up to the current character
                    result = [src[:pos]]
                result.append(escape)
            pos += clen
        if result is None:
            return src
        return ''.join(result)

    def _quote_char(self, src, pos, c):
        try:
            data = c.encode(self.codec or 'utf-8')
        except UnicodeEncodeError as err:
            raise UnencodableCharacter(src, err.reason, pos)
        return quote_octets(data)


def _dequote(src, pos):
    # returns the octet value of the escape at pos or -1
    digits = src[pos + 1:pos + 3]
    if len(digits) == 2 and is_hex(digits[0]) and is_hex(digits[1]):
        return int(digits, 16)
    return -1


class URIDecoder(object):

    """Unescapes %-escaped octets in URI components

    codec
        The name of the character encoding used to decode runs of
        escaped octets, defaults to 'utf-8'.  LookupError is raised if
        the codec is not known.

        Note that providing any other value than 'utf-8' will void
        interoperability with most applications."""

    def __init__(self, codec='utf-8'):
        self.codec = _lookup_codec(codec)

    def decode(self, src):
        """Removes all escape sequences from *src*

        Each occurrence of "%XX", where X is a hexadecimal digit in
        either case, is replaced by the octet it represents.  Adjacent
        escapes are collected together and decoded as a single octet
        string using the codec.  Other characters are copied unchanged.

        Returns the decoded string, or src itself if it contains no
        escapes.

        Raises :class:`MalformedEscape` if a '%' is not followed by two
        hex digits and :class:`InvalidByteSequence` if a run of escaped
        octets does not decode, the index of the error is the position
        of the offending '%'.  No replacement characters are ever
        substituted."""
        if '%' not in src:
            return src
        result = []
        octets = bytearray()
        run_start = -1
        pos = 0
        src_len = len(src)
        while pos < src_len:
            c = src[pos]
            if ord(c) == 0x25:
                value = _dequote(src, pos)
                if value < 0:
                    raise MalformedEscape(src, "Illegal escape sequence", pos)
                if not octets:
                    run_start = pos
                octets.append(value)
                pos += 3
            else:
                if octets:
                    result.append(self._decode_octets(src, octets, run_start))
                    octets = bytearray()
                result.append(c)
                pos += 1
        if octets:
            result.append(self._decode_octets(src, octets, run_start))
        return ''.join(result)

    def _decode_octets(self, src, octets, run_start):
        try:
            return bytes(octets).decode(self.codec)
        except UnicodeDecodeError as err:
            # each octet occupies three characters of src
            raise InvalidByteSequence(src, err.reason,
                                      run_start + 3 * err.start)


_encoder = URIEncoder()
_raw_encoder = URIEncoder(raw=True)
_decoder = URIDecoder()


def escape(context, src, raw=False):
    """Escapes *src* for *context* using UTF-8

    See :meth:`URIEncoder.encode` for details."""
    if raw:
        return _raw_encoder.encode(context, src)
    else:
        return _encoder.encode(context, src)


def unescape(src):
    """Unescapes *src* using UTF-8

    See :meth:`URIDecoder.decode` for details."""
    return _decoder.decode(src)


def validate_scheme(scheme, source=None):
    """Checks that *scheme* conforms to the RFC 2396 scheme syntax

    scheme
        The string to validate.

    source
        Optional string that *scheme* is a prefix of, used in the
        error, defaults to scheme itself.

    A scheme must start with a letter followed by any number of letters,
    digits, '+', '-' or '.'.  Schemes never contain escape sequences.

    Raises :class:`StructuralViolation` if the scheme is not valid, the
    index of the error is the position of the first illegal character
    (or -1 if the scheme is empty)."""
    if source is None:
        source = scheme
    if not scheme:
        raise StructuralViolation(source, "Empty URI scheme", -1)
    for pos, c in enumerate(scheme):
        if not (is_alpha(c) or (pos and is_scheme_char(c))):
            raise StructuralViolation(
                source, "Illegal character in URI scheme", pos)


def _is_scheme(src):
    if not src or not is_alpha(src[0]):
        return False
    for c in src[1:]:
        if not is_scheme_char(c):
            return False
    return True


class URIComponents(collections.namedtuple(
        'URIComponents', ('scheme', 'authority', 'path', 'query',
                          'fragment'))):

    """The five components of a URI reference

    Each component is a string or None if it is absent, the difference
    between None and an empty string is significant.  For example::

        str(URIComponents(None, None, 'a', '', None)) == 'a?'

    The components hold the escaped text as it appears in the URI.  For
    an opaque URI (one with a scheme and a scheme specific part that
    does not start with '/') the entire scheme specific part is held in
    *path*, including any '?'.

    Instances are normally obtained from :func:`split_uri` or
    :meth:`urikit.builder.URIBuilder.build_uri`."""

    __slots__ = ()

    def __str__(self):
        return self.to_string()

    def to_string(self):
        """Returns the URI as a string"""
        result = []
        if self.scheme is not None:
            result.append(self.scheme)
            result.append(':')
        result.append(self.scheme_specific_part)
        if self.fragment is not None:
            result.append('#')
            result.append(self.fragment)
        return ''.join(result)

    @property
    def scheme_specific_part(self):
        """The URI without its scheme and fragment"""
        result = []
        if self.authority is not None:
            result.append('//')
            result.append(self.authority)
        if self.path is not None:
            result.append(self.path)
        if self.query is not None:
            result.append('?')
            result.append(self.query)
        return ''.join(result)

    def is_absolute(self):
        """Returns True if this URI has a scheme"""
        return self.scheme is not None

    def is_opaque(self):
        """Returns True if this is an opaque URI

        An opaque URI has a scheme, no authority and a path that does
        not start with '/', e.g., mailto:someone@example.com"""
        return (self.scheme is not None and self.authority is None and
                not (self.path or '').startswith('/'))


def split_uri(src):
    """Splits a URI reference into its components

    src
        A URI reference string in its escaped form.

    Returns a :class:`URIComponents` instance.  There is no unescaping
    and no validation beyond what is required to find the component
    boundaries, the fragment starts at the first '#', the scheme is
    anything before the first ':' that is a valid scheme.  For
    hierarchical URI the path is always a string (possibly empty).

    For any string s::

        str(split_uri(s)) == s"""
    fragment = None
    pos = src.find('#')
    if pos >= 0:
        fragment = src[pos + 1:]
        src = src[:pos]
    scheme = None
    pos = src.find(':')
    if pos > 0 and _is_scheme(src[:pos]):
        scheme = src[:pos]
        src = src[pos + 1:]
    authority = query = None
    if scheme is not None and not src.startswith('/'):
        path = src
    else:
        if src.startswith('//'):
            pos = 2
            while pos < len(src) and src[pos] not in '/?':
                pos += 1
            authority = src[2:pos]
            src = src[pos:]
        pos = src.find('?')
        if pos >= 0:
            query = src[pos + 1:]
            src = src[:pos]
        path = src
    return URIComponents(scheme, authority, path, query, fragment)
