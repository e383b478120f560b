'''
# BND0 binder

File container: a fixed header followed by a table of entries, each one
pointing to the data of a file with an absolute offset.

  .--------------------------------------.
  | header (0x28 bytes)                  |
  | entry 1: offset, size, id            |
  | ...                                  |
  | entry N                              |
  | data of the files                    |
  '--------------------------------------'

Most of the header is constant, the only unknown value (unk1) is kept as it
is and written back unchanged.
'''
import logging
from typing import List

from ..core import Decodable, Encodable
from ..exceptions import GamestructException
from ..streams import Cursor


logger = logging.getLogger(__name__)

MAGIC = 'BND\x00'


class BinderFile(object):
    '''A file inside the binder: the data is sliced from the container.'''

    def __init__(self, id: int, raw: bytes):
        self.id = id
        self.raw = raw

    def __repr__(self):
        return f'<{self.__class__.__name__}(id={self.id},size=0x{len(self.raw):x})>'

    def __eq__(self, other):
        if not isinstance(other, BinderFile):
            return NotImplemented

        return (self.id, self.raw) == (other.id, other.raw)

    @classmethod
    def decode(cls, cursor):
        offset = cursor.read_int32()
        size = cursor.read_int32()
        id = cursor.read_int32()

        return cls(id, cursor.get_bytes(offset, size))


class BND0(Decodable, Encodable):

    def __init__(self, files: List[BinderFile] = None, unk1: int = 0):
        self.files = files if files is not None else []
        self.unk1 = unk1

    def __repr__(self):
        return f'<{self.__class__.__name__}(unk1=0x{self.unk1:x},files={self.files!r})>'

    def __eq__(self, other):
        if not isinstance(other, BND0):
            return NotImplemented

        return (self.unk1, self.files) == (other.unk1, other.files)

    @classmethod
    def is_format(cls, source) -> bool:
        cursor = Cursor(source)
        return cursor.remaining >= len(MAGIC) and cursor.read_bytes(len(MAGIC)) == MAGIC.encode('ascii')

    @classmethod
    def decode(cls, cursor):
        cursor.assert_ascii(MAGIC)
        cursor.assert_int32(0xF7FF)
        cursor.assert_int32(0xD3)
        unk1 = cursor.read_int32()
        file_count = cursor.read_int32()
        cursor.assert_int32(0)
        cursor.assert_int32(0x30800)
        cursor.assert_int32(0)
        cursor.assert_int32(0)
        cursor.assert_int32(0)

        logger.debug('binder with %d files', file_count)

        files = []
        for index in range(file_count):
            try:
                files.append(BinderFile.decode(cursor))
            except GamestructException as e:
                e.chain.append(f'files[{index}]')
                raise

        return cls(files, unk1=unk1)

    def encode(self, cursor):
        cursor.write_ascii(MAGIC)
        cursor.write_int32(0xF7FF)
        cursor.write_int32(0xD3)
        cursor.write_int32(self.unk1)
        cursor.write_int32(len(self.files))
        cursor.write_int32(0)
        cursor.write_int32(0x30800)
        cursor.write_int32(0)
        cursor.write_int32(0)
        cursor.write_int32(0)

        for index, binder_file in enumerate(self.files):
            cursor.reserve_int32(f'file_offset_{index}')
            cursor.write_int32(len(binder_file.raw))
            cursor.write_int32(binder_file.id)

        for index, binder_file in enumerate(self.files):
            cursor.fill_int32(f'file_offset_{index}', cursor.position)
            cursor.write_bytes(binder_file.raw)
