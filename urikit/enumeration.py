#! /usr/bin/env python
"""Named integer constants"""

import logging


class EnumMetaClass(type):

    """Metaclass for :class:`Enumeration`

    Initialises the Enumeration immediately after the class is
    defined."""

    def __init__(self, name, bases, dct):
        super(EnumMetaClass, self).__init__(name, bases, dct)
        # self is a class here!
        self._init_enum()


class Enumeration(object, metaclass=EnumMetaClass):

    """Abstract class for defining enumerations

    The class is not designed to be instantiated but to act as a method
    of defining constants to represent the values of an enumeration and
    for converting between those constants and the appropriate string
    representations.

    The basic usage of this class is to derive a class from it with a
    single class member called 'decode' which is a mapping from
    canonical strings to simple integers.  The integers must be the
    consecutive values 0, 1, 2... as they are used as ordinals, for
    example, by :class:`urikit.bitfield.BitField`.

    Once defined, the class will be automatically populated with a
    reverse mapping dictionary (called encode) and the enumeration
    strings will be added as attributes of the class itself.  For
    example::

        class Fruit(Enumeration):
            decode = {
                'Apple': 0,
                'Pear': 1,
                'Orange': 2}

        Fruit.Apple == 0    # True thanks to metaclass"""

    @classmethod
    def _init_enum(cls):
        if 'decode' not in cls.__dict__:
            # Skip initialisation for Enumeration itself
            return
        cls.decode = dict(cls.decode)
        cls.encode = dict((v, k) for k, v in cls.decode.items())
        if sorted(cls.encode) != list(range(len(cls.encode))):
            raise ValueError(
                "%s: values must be the ordinals 0..%i" %
                (cls.__name__, len(cls.encode) - 1))
        for k, v in cls.decode.items():
            if hasattr(cls, k):
                logging.error("Illegal name for Enumeration: %s" % repr(k))
            else:
                setattr(cls, k, v)

    @classmethod
    def values(cls):
        """Returns the list of values in ordinal order"""
        return sorted(cls.encode)

    @classmethod
    def from_str(cls, src):
        """Decodes a string returning a value in this enumeration.

        If no legal value can be decoded then ValueError is raised."""
        try:
            src = src.strip()
            return cls.decode[src]
        except KeyError:
            raise ValueError("Can't decode %s from %s" % (cls.__name__, src))

    @classmethod
    def to_str(cls, value):
        """Encodes one of the enumeration constants returning a string.

        If value is not one of the constants then None is returned."""
        return cls.encode.get(value, None)

    @classmethod
    def list_from_str(cls, decoder, src, sep=None):
        """Decodes a list of values

        decoder
            A function that decodes a single value, usually from_str.

        src
            A string of values separated by *sep* (white space by
            default)

        The result is an ordered list of values (possibly containing
        duplicates)."""
        return [decoder(s) for s in src.split(sep)]

    @classmethod
    def list_to_str(cls, value_list, sep=' '):
        """Encodes a list of enumeration constants

        value_list
            An iterable of integer values corresponding to enumeration
            constants.

        Returns a string joined with *sep*.  If value_list is empty then
        an empty string is returned."""
        return sep.join(cls.to_str(s) for s in value_list)
