"""
A Field is the "fundamental" datatype a record cell is made of: the tag
written in a schema selects one of them and the field knows how many bytes it
takes and how to unpack its value from a cursor.

The tags are the ones of the param layouts

    u8 s8 x8 u16 s16 x16 u32 s32 x32 f32   numbers (x* are displayed as hex)
    b8 b32                                  single bits packed in a shared byte/dword
    fixstr[N] fixstrW[N]                    fixed width Shift-JIS/UTF-16 strings
    dummy8[N]                               opaque bytes

where the variable width ones take their size in bytes between brackets.
"""
import logging
import re
import struct
from functools import lru_cache
from typing import Union

from bitstring import BitArray

from .exceptions import UnsupportedFieldTypeError


logger = logging.getLogger(__name__)

CellValue = Union[int, float, bool, str, bytes]

TAG_PATTERN = re.compile(r'^(?P<kind>[A-Za-z][A-Za-z0-9]*)(?:\[(?P<count>\d+)\])?$')


class Field(object):
    """Base class to subclass from"""

    def __init__(self, tag):
        self.tag = tag

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, self.tag)

    @property
    def size(self) -> int:
        raise NotImplementedError(f"property {self.__class__.__name__}.size not implemented")

    def unpack(self, cursor):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """Mimic the struct module: the format is a single struct character."""

    def __init__(self, tag, format):
        super().__init__(tag)
        self.format = format

    @property
    def size(self):
        return struct.calcsize('<%s' % self.format)

    def unpack(self, cursor) -> Union[int, float]:
        return cursor.read_struct(self.format)


class StringField(Field):
    """Fixed width string, padded with nulls."""

    def __init__(self, tag, n, wide=False):
        super().__init__(tag)
        self.length = n
        self.wide = wide

    @property
    def size(self):
        return self.length

    def unpack(self, cursor) -> str:
        if self.wide:
            return cursor.read_fixstr_w(self.length)

        return cursor.read_fixstr(self.length)


class PaddingField(Field):
    '''Bytes with no known meaning, kept as they are.'''

    def __init__(self, tag, n):
        super().__init__(tag)
        self.length = n

    @property
    def size(self):
        return self.length

    def unpack(self, cursor) -> bytes:
        return cursor.read_bytes(self.length)


class BitField(Field):
    """A single flag: up to `width` consecutive fields with the same tag share
    `width` bits of storage, bit j being the j-th least significant bit of
    byte j // 8."""

    def __init__(self, tag, width):
        super().__init__(tag)
        self.width = width

    @property
    def size(self):
        return self.width // 8

    def unpack(self, cursor) -> BitArray:
        '''Read the whole storage shared by the run of flags.'''
        return BitArray(bytes=cursor.read_bytes(self.size))

    @staticmethod
    def bit(bits: BitArray, index: int) -> bool:
        # bitstring counts from the most significant bit of each byte
        return bool(bits[(index // 8) * 8 + 7 - index % 8])


FIXED_FIELDS = {
    's8': lambda tag: StructField(tag, 'b'),
    'u8': lambda tag: StructField(tag, 'B'),
    'x8': lambda tag: StructField(tag, 'B'),
    's16': lambda tag: StructField(tag, 'h'),
    'u16': lambda tag: StructField(tag, 'H'),
    'x16': lambda tag: StructField(tag, 'H'),
    's32': lambda tag: StructField(tag, 'i'),
    'u32': lambda tag: StructField(tag, 'I'),
    'x32': lambda tag: StructField(tag, 'I'),
    'f32': lambda tag: StructField(tag, 'f'),
    'b8': lambda tag: BitField(tag, 8),
    'b32': lambda tag: BitField(tag, 32),
}

VARIABLE_FIELDS = {
    'fixstr': lambda tag, n: StringField(tag, n),
    'fixstrW': lambda tag, n: StringField(tag, n, wide=True),
    'dummy8': lambda tag, n: PaddingField(tag, n),
}


@lru_cache(maxsize=None)
def get_field(tag: str) -> Field:
    '''Return the field for the given tag, failing for tags we don't know
    how to interpret.'''
    match = TAG_PATTERN.match(tag)
    if not match:
        raise UnsupportedFieldTypeError(tag)

    kind, count = match.group('kind'), match.group('count')

    if kind in FIXED_FIELDS and count is None:
        return FIXED_FIELDS[kind](tag)

    if kind in VARIABLE_FIELDS and count is not None:
        return VARIABLE_FIELDS[kind](tag, int(count))

    logger.debug('no field for tag \'%s\'', tag)
    raise UnsupportedFieldTypeError(tag)
