#! /usr/bin/env python
"""Character classes over the US-ASCII range

URI grammars are defined entirely in terms of US-ASCII characters so
the classes in this module are restricted to the 128 code points
0x00-0x7F.  Characters outside that range are never members of any
class."""

#: the number of code points a :class:`CharClass` can hold
ASCII_LIMIT = 0x80


class CharClass(object):

    """Represents a class of US-ASCII characters.

    A class of characters is represented internally by a 128-bit integer
    with one bit per code point.  Membership tests are therefore a
    shift and a mask regardless of how complex the class is.

    For the constructor, multiple arguments can be provided.

    String arguments add all characters in the string to the class.  For
    example, CharClass('abcxyz') creates a class comprising two ranges:
    a-c and x-z.

    Tuple/List arguments can be used to pass pairs of characters that
    define a range.  For example, CharClass(('a','z')) creates a class
    comprising the letters a-z.

    Instances of CharClass can also be used in the constructor to add an
    existing class.

    Instances support Python's repr function::

        >>> c = CharClass('abcxyz')
        >>> print(repr(c))
        CharClass(('a','c'), ('x','z'))

    Passing a character outside the US-ASCII range to any of the methods
    that add or subtract characters raises ValueError."""

    def __init__(self, *args):
        self.bits = 0
        for arg in args:
            if isinstance(arg, str):
                # Each character in the string is put in the class
                for c in arg:
                    self.add_char(c)
            elif type(arg) in (tuple, list):
                self.add_range(arg[0], arg[1])
            elif isinstance(arg, CharClass):
                self.add_class(arg)
            else:
                raise ValueError(repr(arg))

    def __repr__(self):
        result = ['CharClass(']
        first_range = True
        for a, z in self.ranges():
            if first_range:
                first_range = False
            else:
                result.append(', ')
            if a == z:
                result.append(repr(a))
            else:
                result.append('(')
                result.append(repr(a))
                result.append(',')
                result.append(repr(z))
                result.append(')')
        result.append(')')
        return ''.join(result)

    def __eq__(self, other):
        """Compares two character classes for equality."""
        if not isinstance(other, CharClass):
            return NotImplemented
        return self.bits == other.bits

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = None

    def __len__(self):
        return bin(self.bits).count('1')

    def __contains__(self, c):
        return self.test(c)

    def __iter__(self):
        for i in range(ASCII_LIMIT):
            if self.bits >> i & 1:
                yield chr(i)

    @staticmethod
    def _code(c):
        code = ord(c)
        if code >= ASCII_LIMIT:
            raise ValueError("Not a US-ASCII character: %s" % repr(c))
        return code

    def ranges(self):
        """Returns a list of (first, last) character pairs

        The pairs are in code point order and adjacent characters are
        always merged into a single range."""
        result = []
        start = None
        for i in range(ASCII_LIMIT + 1):
            if i < ASCII_LIMIT and self.bits >> i & 1:
                if start is None:
                    start = i
            elif start is not None:
                result.append((chr(start), chr(i - 1)))
                start = None
        return result

    def add_range(self, a, z):
        """Adds a range of characters from a to z to the class"""
        a = self._code(a)
        z = self._code(z)
        if z < a:
            a, z = z, a
        self.bits |= ((1 << (z - a + 1)) - 1) << a

    def subtract_range(self, a, z):
        """Subtracts a range of characters from the character class"""
        a = self._code(a)
        z = self._code(z)
        if z < a:
            a, z = z, a
        self.bits &= ~(((1 << (z - a + 1)) - 1) << a)

    def add_char(self, c):
        """Adds a single character to the character class"""
        self.bits |= 1 << self._code(c)

    def subtract_char(self, c):
        """Subtracts a single character from the character class"""
        self.bits &= ~(1 << self._code(c))

    def add_class(self, c):
        """Adds all the characters in c to the character class

        This is effectively a union operation."""
        self.bits |= c.bits

    def subtract_class(self, c):
        """Subtracts all the characters in c from the character class"""
        self.bits &= ~c.bits

    def negate(self):
        """Negates this character class

        The result is the complement with respect to US-ASCII.  As a
        convenience returns the object as the result enabling this
        method to be used in construction, e.g.::

            c = CharClass('\\x0a\\x0d').negate()

        Results in the class of all US-ASCII characters *except* line
        feed and carriage return."""
        self.bits = ~self.bits & ((1 << ASCII_LIMIT) - 1)
        return self

    def test(self, c):
        """Test a character.

        Returns True if the character is in the class.

        If c is None, or is not a US-ASCII character, False is
        returned."""
        if c is None:
            return False
        code = ord(c)
        if code >= ASCII_LIMIT:
            return False
        return bool(self.bits >> code & 1)
