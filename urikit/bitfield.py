#! /usr/bin/env python
"""Immutable sets of enumeration constants"""


class BitField(object):

    """An immutable set of values from an :class:`Enumeration`

    enum_class
        The :class:`urikit.enumeration.Enumeration` class the values
        are taken from.

    bits
        An integer bit vector, bit *n* is set if the value with ordinal
        *n* is in the set.  Defaults to 0, the empty set.

    You won't normally use the constructor directly, use one of the
    class methods instead::

        contexts = BitField.of(EncodingContext, EncodingContext.ANY,
                               EncodingContext.PATH)
        for context in contexts:
            ...

    Instances are immutable, all of the "modifying" methods return a new
    instance (or the same instance if the result would be equal).  They
    can be compared and hashed.  Two BitFields compare equal if they
    have the same enum_class and the same members."""

    def __init__(self, enum_class, bits=0):
        self.enum_class = enum_class
        self._mask = (1 << len(enum_class.encode)) - 1
        if bits & ~self._mask:
            raise ValueError("Bits out of range for %s: %s" %
                             (enum_class.__name__, bin(bits)))
        self.bits = bits

    @classmethod
    def none_of(cls, enum_class):
        """Returns the empty set"""
        return cls(enum_class)

    @classmethod
    def all_of(cls, enum_class):
        """Returns the set of all values in *enum_class*"""
        return cls(enum_class, (1 << len(enum_class.encode)) - 1)

    @classmethod
    def of(cls, enum_class, *values):
        """Returns the set containing *values*"""
        return cls.copy_of(enum_class, values)

    @classmethod
    def copy_of(cls, enum_class, values):
        """Returns the set containing the values in iterable *values*"""
        bits = 0
        for v in values:
            bits |= cls._bit(enum_class, v)
        return cls(enum_class, bits)

    @classmethod
    def from_str(cls, enum_class, src):
        """Parses a '|' separated list of value names

        For example::

            BitField.from_str(EncodingContext, "ANY|PATH")

        Names are resolved with the enumeration's from_str method so
        ValueError is raised for unknown names.  An empty string is
        the empty set."""
        if not src:
            return cls(enum_class)
        return cls.copy_of(
            enum_class, enum_class.list_from_str(enum_class.from_str,
                                                 src, '|'))

    @staticmethod
    def _bit(enum_class, value):
        if value not in enum_class.encode:
            raise ValueError("%s is not a value of %s" %
                             (repr(value), enum_class.__name__))
        return 1 << value

    def _new(self, bits):
        if bits == self.bits:
            return self
        return self.__class__(self.enum_class, bits)

    def is_empty(self):
        return not self.bits

    def cardinality(self):
        """Returns the number of values in the set"""
        return bin(self.bits).count('1')

    __len__ = cardinality

    def is_set(self, value):
        """Returns True if *value* is in this set"""
        return bool(self.bits & self._bit(self.enum_class, value))

    def __contains__(self, value):
        return value in self.enum_class.encode and self.is_set(value)

    def set(self, value, flag=True):
        """Returns a set with *value* added (or removed if flag is False)"""
        if flag:
            return self._new(self.bits | self._bit(self.enum_class, value))
        else:
            return self.clear(value)

    def clear(self, value):
        """Returns a set with *value* removed"""
        return self._new(self.bits & ~self._bit(self.enum_class, value))

    def _check(self, other):
        if not isinstance(other, BitField):
            raise TypeError("Expected BitField: %s" % repr(other))
        if other.enum_class is not self.enum_class:
            raise ValueError("Can't combine %s with %s" %
                             (self.enum_class.__name__,
                              other.enum_class.__name__))

    def not_(self):
        """Returns the complement of this set"""
        return self._new(~self.bits & self._mask)

    __invert__ = not_

    def and_(self, other):
        """Returns the intersection of this set and *other*"""
        self._check(other)
        return self._new(self.bits & other.bits)

    __and__ = and_

    def or_(self, other):
        """Returns the union of this set and *other*"""
        self._check(other)
        return self._new(self.bits | other.bits)

    __or__ = or_

    def __iter__(self):
        for v in self.enum_class.values():
            if self.bits >> v & 1:
                yield v

    def __eq__(self, other):
        if not isinstance(other, BitField):
            return NotImplemented
        return (self.enum_class is other.enum_class and
                self.bits == other.bits)

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.enum_class, self.bits))

    def __str__(self):
        return self.enum_class.list_to_str(self, '|')

    def __repr__(self):
        return "BitField.from_str(%s, %s)" % (self.enum_class.__name__,
                                               repr(str(self)))
