'''
# PARAM

Table of rows whose layout is not stored in the file: the header indicates
the name of the format (e.g. "EQUIP_PARAM_WEAPON_ST") and the rows are only
id, offset and name, the cells can be decoded only by supplying the schema
from outside.

  .----------------------------------.
  | header (0x40 bytes)              |
  | row header 1: id, offset, name   |
  | ...                              |
  | row header N                     |
  | row data                         |
  | strings                          |
  '----------------------------------'

All the offsets are absolute. Writing is not supported.
'''
import logging
from typing import List, Optional

from ..core import Decodable
from ..exceptions import GamestructException
from ..records import Row, decode_record
from ..schema import Schema
from ..streams import Cursor


logger = logging.getLogger(__name__)


class RowHeader(object):

    def __init__(self, id: int, offset: int, name: str):
        self.id = id
        self.offset = offset
        self.name = name

    def __repr__(self):
        return f'<{self.__class__.__name__}(id={self.id},offset=0x{self.offset:x},name={self.name!r})>'

    @classmethod
    def decode(cls, cursor):
        id = cursor.read_int64()
        offset = cursor.read_int64()
        name_offset = cursor.read_int64()
        name = cursor.get_shift_jis(name_offset)

        return cls(id, offset, name)


class Param(Decodable):

    def __init__(self, format: str, row_headers: List[RowHeader], raw: bytes,
                 unk1: int = 0, unk2: int = 0, data_start: int = 0, detected_size: Optional[int] = None,
                 big_endian: bool = False):
        self.format = format
        self.row_headers = row_headers
        self.unk1 = unk1
        self.unk2 = unk2
        self.data_start = data_start
        self.detected_size = detected_size
        self.rows = None
        self._raw = raw
        self.big_endian = big_endian

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.format!r},rows={len(self.row_headers)})>'

    @classmethod
    def read(cls, source, big_endian=False, schema: Schema = None):
        '''Like the other formats but if the schema is indicated also the rows
        are decoded.'''
        param = super().read(source, big_endian=big_endian)

        if schema is not None:
            param.read_rows(schema)

        return param

    @classmethod
    def decode(cls, cursor):
        name_offset = cursor.read_int32()
        cursor.assert_int16(0)
        unk1 = cursor.read_int16()
        unk2 = cursor.read_int16()
        row_count = cursor.read_uint16()
        cursor.assert_int32(0)
        cursor.assert_int32(name_offset)
        cursor.assert_int32(0)
        cursor.assert_int32(0)
        cursor.assert_int32(0)

        cursor.assert_int32(0)
        cursor.assert_int32(0)
        cursor.assert_int32(0)
        cursor.assert_int32(0x00078500)
        data_start = cursor.read_int32()
        cursor.assert_int32(0)
        cursor.assert_int32(0)
        cursor.assert_int32(0)

        row_headers = []
        for index in range(row_count):
            try:
                row_headers.append(RowHeader.decode(cursor))
            except GamestructException as e:
                e.chain.append(f'row_headers[{index}]')
                raise

        format = cursor.get_ascii(name_offset)

        detected_size = None
        if len(row_headers) > 1:
            detected_size = row_headers[1].offset - row_headers[0].offset
        elif row_headers:
            detected_size = name_offset - row_headers[0].offset

        logger.debug('param \'%s\' with %d rows (detected size %r)', format, row_count, detected_size)

        return cls(format, row_headers, cursor.getvalue(),
                   unk1=unk1, unk2=unk2, data_start=data_start, detected_size=detected_size,
                   big_endian=cursor.big_endian)

    def read_rows(self, schema: Schema) -> List[Row]:
        '''Decode the cells of every row with the given schema; the rows are
        also stored in the "rows" attribute.'''
        cursor = Cursor(self._raw, big_endian=self.big_endian)

        rows = []
        for header in self.row_headers:
            try:
                rows.append(decode_record(cursor, header.offset, schema, id=header.id, name=header.name))
            except GamestructException as e:
                e.chain.append(self.__class__.__name__)
                raise

        if rows and schema.size != self.detected_size:
            logger.warning('schema size 0x%x differs from the detected row size 0x%x for \'%s\'',
                           schema.size, self.detected_size, self.format)

        self.rows = rows

        return rows

    def encode(self, cursor):
        raise NotImplementedError(f'writing {self.__class__.__name__} is not supported')

    def write(self, path=None):
        raise NotImplementedError(f'writing {self.__class__.__name__} is not supported')
