class GamestructException(Exception):
    '''Base class to extend in order to throw exception in gamestruct.

    It carries the chain of the structures that were being decoded when the
    exception was raised: each layer that lets the exception propagate appends
    its own name to it, so the innermost structure comes first.
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    def __str__(self):
        if not self.chain:
            return self.message

        path = '.'.join(reversed(self.chain))
        return f'{path}: {self.message}'


class FormatValidationError(GamestructException):
    '''An asserted value didn't match what the format requires.'''

    def __init__(self, field_offset, expected, actual, chain=None):
        self.field_offset = field_offset
        self.expected = expected
        self.actual = actual
        super().__init__(
            f'at offset 0x{field_offset:x} read {actual!r}, expected {expected!r}',
            chain=chain)


class OutOfBoundsError(GamestructException):
    '''A read or an absolute fetch falls outside the buffer.'''

    def __init__(self, offset, size, length, chain=None):
        self.offset = offset
        self.size = size
        self.length = length
        super().__init__(
            f'cannot access 0x{size:x} bytes at offset 0x{offset:x} (buffer is 0x{length:x} bytes)',
            chain=chain)


class StackImbalanceError(GamestructException):
    '''step_out() without a matching step_in(), or a decode leaving saved positions behind.'''
    pass


class SchemaParseError(GamestructException):

    def __init__(self, line_number, line, chain=None):
        self.line_number = line_number
        self.line = line
        super().__init__(f'line {line_number}: expected "<type> <name>", got {line!r}', chain=chain)


class UnsupportedFieldTypeError(GamestructException):
    '''The schema references a type tag the record decoder cannot interpret.'''

    def __init__(self, tag, chain=None):
        self.tag = tag
        super().__init__(f'unsupported field type {tag!r}', chain=chain)
