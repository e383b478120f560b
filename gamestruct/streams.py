import logging
import struct
from contextlib import contextmanager

from .assertions import AssertMixin
from .exceptions import (
    FormatValidationError,
    OutOfBoundsError,
    StackImbalanceError,
)


logger = logging.getLogger(__name__)

ASCII = 'ascii'
SHIFT_JIS = 'shift_jis'
UTF16 = 'utf-16-le'
UTF16BE = 'utf-16-be'


class Cursor(AssertMixin):
    '''Wrapper around a byte buffer with a single position used both to read
    and to write; the endianess applies to every numeric value.

    Sub-structures located at an absolute offset are accessed with step_in()
    and step_out(): the former saves the current position on a stack and jumps,
    the latter restores it. Prefer the stepped() context manager so the
    position is restored even when the decoding of the sub-structure fails.

    A cursor that is writing (because it was built with writing=True or because
    something was already written) grows the buffer with zeros when skipping
    past the end, a reading one raises OutOfBoundsError.

    A cursor belongs to a single decode (or encode) pass, don't share it.
    '''

    def __init__(self, obj=b'', big_endian=False, writing=False):
        self.big_endian = big_endian
        self.writing = writing
        self.saved_positions = []
        self.reservations = {}
        self._position = 0

        init_method_name = 'init_%s' % obj.__class__.__name__
        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('cannot build a cursor from \'%s\'' % obj.__class__.__name__)

        self.buffer = init_method(obj)

    def init_str(self, obj):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % obj)
        with open(obj, 'rb') as f:
            return bytearray(f.read())

    init_PosixPath = init_str
    init_WindowsPath = init_str

    def init_bytes(self, obj):
        return bytearray(obj)

    init_bytearray = init_bytes
    init_memoryview = init_bytes

    def __len__(self):
        return len(self.buffer)

    def __repr__(self):
        return '<%s(position=0x%x, length=0x%x, depth=%d)>' % (
            self.__class__.__name__,
            self._position,
            len(self.buffer),
            len(self.saved_positions),
        )

    @property
    def position(self):
        return self._position

    @property
    def remaining(self):
        return len(self.buffer) - self._position

    def tell(self):
        return self._position

    def seek(self, offset):
        if not 0 <= offset <= len(self.buffer):
            raise OutOfBoundsError(offset, 0, len(self.buffer))

        self._position = offset

    def _check_bounds(self, offset, size):
        if offset < 0 or size < 0 or offset + size > len(self.buffer):
            raise OutOfBoundsError(offset, size, len(self.buffer))

    def get_format(self, fmt):
        return '%s%s' % ('>' if self.big_endian else '<', fmt)

    # navigation

    def step_in(self, offset):
        '''Save the current position and move to the absolute offset.'''
        saved = self._position
        self.seek(offset)  # it fails before touching the stack
        self.saved_positions.append(saved)
        logger.debug('step in 0x%x (depth %d)', offset, len(self.saved_positions))

    def step_out(self):
        '''Restore the position saved by the matching step_in().'''
        if not self.saved_positions:
            raise StackImbalanceError('cursor is already stepped all the way out')

        self._position = self.saved_positions.pop()
        logger.debug('step out to 0x%x (depth %d)', self._position, len(self.saved_positions))

    @contextmanager
    def stepped(self, offset):
        self.step_in(offset)
        try:
            yield self
        finally:
            self.step_out()

    def skip(self, count):
        end = self._position + count
        if self.writing and count > 0 and end > len(self.buffer):
            self.buffer.extend(b'\x00' * (end - len(self.buffer)))

        self._check_bounds(self._position, count)
        self._position += count

    def pad(self, align):
        '''Advance the position until it meets the given alignment.'''
        if self._position % align:
            self.skip(align - self._position % align)

    # reading

    def read_bytes(self, size):
        self._check_bounds(self._position, size)
        raw = bytes(self.buffer[self._position:self._position + size])
        self._position += size

        return raw

    def get_bytes(self, offset, size):
        '''Absolute read: it neither depends on nor moves the current position.'''
        self._check_bounds(offset, size)

        return bytes(self.buffer[offset:offset + size])

    def _unpack(self, fmt):
        fmt = self.get_format(fmt)

        return struct.unpack(fmt, self.read_bytes(struct.calcsize(fmt)))

    def read_struct(self, fmt):
        '''Read a single value described by a struct format character.'''
        return self._unpack(fmt)[0]

    def read_byte(self):
        return self.read_struct('B')

    def read_sbyte(self):
        return self.read_struct('b')

    def read_boolean(self):
        offset = self._position
        value = self.read_byte()
        # any non-zero value being true is too lax
        if value not in (0, 1):
            raise FormatValidationError(offset, (0, 1), value)

        return value == 1

    def read_int16(self):
        return self.read_struct('h')

    def read_uint16(self):
        return self.read_struct('H')

    def read_int32(self):
        return self.read_struct('i')

    def read_uint32(self):
        return self.read_struct('I')

    def read_int64(self):
        return self.read_struct('q')

    def read_uint64(self):
        return self.read_struct('Q')

    def read_single(self):
        return self.read_struct('f')

    def read_double(self):
        return self.read_struct('d')

    def read_vector3(self):
        return self._unpack('3f')

    def _decode(self, raw, encoding, offset):
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            raise FormatValidationError(offset, f'{encoding} text', raw)

    def read_text(self, encoding, length=None):
        '''Read a string of the given length in bytes or, without a length,
        up to a null terminator that is consumed but not returned.'''
        offset = self._position

        if length is not None:
            return self._decode(self.read_bytes(length), encoding, offset)

        end = self.buffer.find(b'\x00', offset)
        if end == -1:
            raise OutOfBoundsError(offset, len(self.buffer) - offset + 1, len(self.buffer))

        raw = self.read_bytes(end - offset)
        self.skip(1)

        return self._decode(raw, encoding, offset)

    def read_ascii(self, length=None):
        return self.read_text(ASCII, length)

    def read_shift_jis(self, length=None):
        return self.read_text(SHIFT_JIS, length)

    def read_utf16(self):
        '''Null terminated UTF-16, the terminator is two bytes wide.'''
        offset = self._position
        chars = []
        pair = self.read_bytes(2)
        while pair != b'\x00\x00':
            chars.append(pair)
            pair = self.read_bytes(2)

        return self._decode(b''.join(chars), UTF16BE if self.big_endian else UTF16, offset)

    def read_fixstr(self, length):
        '''Shift-JIS string in a fixed width field, anything after the first null is discarded.'''
        offset = self._position
        raw = self.read_bytes(length)

        return self._decode(raw.split(b'\x00', 1)[0], SHIFT_JIS, offset)

    def read_fixstr_w(self, length):
        '''UTF-16 string in a fixed width field, cut at the first null character.'''
        offset = self._position
        raw = self.read_bytes(length)

        chars = []
        for index in range(0, len(raw) - 1, 2):
            pair = raw[index:index + 2]
            if pair == b'\x00\x00':
                break
            chars.append(pair)

        return self._decode(b''.join(chars), UTF16BE if self.big_endian else UTF16, offset)

    def get_ascii(self, offset):
        with self.stepped(offset):
            return self.read_ascii()

    def get_shift_jis(self, offset):
        with self.stepped(offset):
            return self.read_shift_jis()

    # writing

    def write_bytes(self, raw):
        self.writing = True
        end = self._position + len(raw)
        if end > len(self.buffer):
            self.buffer.extend(b'\x00' * (end - len(self.buffer)))

        self.buffer[self._position:end] = raw
        self._position = end

    def write_struct(self, fmt, *values):
        self.write_bytes(struct.pack(self.get_format(fmt), *values))

    def write_byte(self, value):
        self.write_struct('B', value)

    def write_sbyte(self, value):
        self.write_struct('b', value)

    def write_boolean(self, value):
        self.write_struct('B', 1 if value else 0)

    def write_int16(self, value):
        self.write_struct('h', value)

    def write_uint16(self, value):
        self.write_struct('H', value)

    def write_int32(self, value):
        self.write_struct('i', value)

    def write_uint32(self, value):
        self.write_struct('I', value)

    def write_int64(self, value):
        self.write_struct('q', value)

    def write_uint64(self, value):
        self.write_struct('Q', value)

    def write_single(self, value):
        self.write_struct('f', value)

    def write_double(self, value):
        self.write_struct('d', value)

    def write_vector3(self, vector):
        self.write_struct('3f', *vector)

    def write_text(self, text, encoding, terminate=False):
        self.write_bytes(text.encode(encoding) + (b'\x00' if terminate else b''))

    def write_ascii(self, text, terminate=False):
        self.write_text(text, ASCII, terminate=terminate)

    def write_shift_jis(self, text, terminate=False):
        self.write_text(text, SHIFT_JIS, terminate=terminate)

    def write_null(self, count):
        self.write_bytes(b'\x00' * count)

    def reserve(self, name, fmt):
        '''Write a placeholder for a value known only later, see fill().'''
        if name in self.reservations:
            raise ValueError(f'name \'{name}\' is already reserved')

        self.reservations[name] = (self._position, fmt)
        self.write_null(struct.calcsize(self.get_format(fmt)))

    def fill(self, name, value):
        if name not in self.reservations:
            raise KeyError(f'name \'{name}\' is not reserved')

        offset, fmt = self.reservations.pop(name)
        with self.stepped(offset):
            self.write_struct(fmt, value)

    def reserve_int32(self, name):
        self.reserve(name, 'i')

    def fill_int32(self, name, value):
        self.fill(name, value)

    def getvalue(self):
        if self.reservations:
            raise ValueError('reservations not filled: %s' % ', '.join(sorted(self.reservations)))

        return bytes(self.buffer)
