"""
Capabilities a format can have.

A format mixes in Decodable when it can be read and Encodable when it can be
written: each one implements only what it supports, there is no default
behaviour inherited for the missing one.
"""
import logging

from .exceptions import GamestructException, StackImbalanceError
from .streams import Cursor


logger = logging.getLogger(__name__)


class Decodable(object):

    @classmethod
    def decode(cls, cursor):
        '''Build an instance reading from the current position of the cursor.'''
        raise NotImplementedError(f'{cls.__name__}.decode() not implemented')

    @classmethod
    def read(cls, source, big_endian=False):
        '''Decode the format from raw bytes or from the path of a file.'''
        cursor = Cursor(source, big_endian=big_endian)
        logger.debug('decoding \'%s\' from %r', cls.__name__, cursor)

        try:
            instance = cls.decode(cursor)
        except GamestructException as e:
            e.chain.append(cls.__name__)
            raise

        if cursor.saved_positions:
            raise StackImbalanceError(
                f'{len(cursor.saved_positions)} positions left on the stack', chain=[cls.__name__])

        return instance


class Encodable(object):

    def encode(self, cursor):
        '''Write the instance at the current position of the cursor.'''
        raise NotImplementedError(f'{self.__class__.__name__}.encode() not implemented')

    def write(self, path=None):
        '''Return the encoded bytes, writing them also to path if indicated.'''
        cursor = Cursor(b'', writing=True)
        self.encode(cursor)

        if cursor.saved_positions:
            raise StackImbalanceError(
                f'{len(cursor.saved_positions)} positions left on the stack', chain=[self.__class__.__name__])

        raw = cursor.getvalue()

        if path is not None:
            logger.debug('writing %d bytes to \'%s\'', len(raw), path)
            with open(path, 'wb') as f:
                f.write(raw)

        return raw
