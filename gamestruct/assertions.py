'''
Structural validation on top of the cursor primitives.

Every read has a companion assert_X(*options) that reads one value and checks
that it's one of the accepted options, so a sequence of asserts at the start
of a structure works like a magic check done field by field: when something
diverges the exception tells exactly which field and where.
'''
import logging

from .exceptions import FormatValidationError


logger = logging.getLogger(__name__)


class AssertMixin(object):
    '''Mixed into the Cursor; it needs position and the read_*() methods.'''

    def _assert_value(self, read, options):
        if not options:
            raise ValueError('at least one option must be indicated')

        offset = self.position
        value = read()

        if value not in options:
            expected = options[0] if len(options) == 1 else options
            logger.debug('assertion failed at offset 0x%x: %r not in %r', offset, value, options)
            raise FormatValidationError(offset, expected, value)

        return value

    def assert_byte(self, *options):
        return self._assert_value(self.read_byte, options)

    def assert_sbyte(self, *options):
        return self._assert_value(self.read_sbyte, options)

    def assert_boolean(self, option):
        return self._assert_value(self.read_boolean, (option,))

    def assert_int16(self, *options):
        return self._assert_value(self.read_int16, options)

    def assert_uint16(self, *options):
        return self._assert_value(self.read_uint16, options)

    def assert_int32(self, *options):
        return self._assert_value(self.read_int32, options)

    def assert_uint32(self, *options):
        return self._assert_value(self.read_uint32, options)

    def assert_int64(self, *options):
        return self._assert_value(self.read_int64, options)

    def assert_single(self, *options):
        return self._assert_value(self.read_single, options)

    def _assert_text(self, text, encoding):
        expected = text.encode(encoding)
        offset = self.position
        raw = self.read_bytes(len(expected))

        if raw != expected:
            actual = raw.decode(encoding, errors='backslashreplace')
            logger.debug('text assertion failed at offset 0x%x: %r != %r', offset, actual, text)
            raise FormatValidationError(offset, text, actual)

        return text

    def assert_ascii(self, text):
        '''Read as many bytes as the encoded text and check they are the same.'''
        return self._assert_text(text, 'ascii')

    def assert_shift_jis(self, text):
        return self._assert_text(text, 'shift_jis')

    def assert_zero_region(self, length):
        '''Reserved or padding bytes: all of them must be zero.'''
        offset = self.position
        raw = self.read_bytes(length)

        for index, byte in enumerate(raw):
            if byte:
                raise FormatValidationError(offset + index, 0, byte)
