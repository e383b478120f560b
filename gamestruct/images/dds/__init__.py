'''
# DirectDraw Surface

Only the header is parsed, the pixel data that follows it is kept as raw bytes.

  .-----------------------------------.
  | "DDS "                            |
  | header (124 bytes)                |
  |   ...                             |
  |   pixel format (32 bytes)         |
  |   ...                             |
  | DX10 header (20 bytes), optional  |
  | data                              |
  '-----------------------------------'

The DX10 header is present only when the FourCC of the pixel format is
"DX10", otherwise it's completely absent.

Reference <https://learn.microsoft.com/en-us/windows/win32/direct3ddds/dds-header>.
'''
import logging
from typing import Optional

from ...core import Decodable, Encodable
from ...exceptions import GamestructException
from ...streams import Cursor
from .enum import DDSD, DDPF, DDSCAPS, DDSCAPS2


logger = logging.getLogger(__name__)

MAGIC = 'DDS '
HEADER_SIZE = 124
PIXELFORMAT_SIZE = 32
DX10 = 'DX10'


class PixelFormat(object):

    def __init__(self, flags=0, fourcc='\x00\x00\x00\x00', rgb_bit_count=0,
                 r_bit_mask=0, g_bit_mask=0, b_bit_mask=0, a_bit_mask=0):
        self.flags = flags
        self.fourcc = fourcc
        self.rgb_bit_count = rgb_bit_count
        self.r_bit_mask = r_bit_mask
        self.g_bit_mask = g_bit_mask
        self.b_bit_mask = b_bit_mask
        self.a_bit_mask = a_bit_mask

    def _key(self):
        return (self.flags, self.fourcc, self.rgb_bit_count,
                self.r_bit_mask, self.g_bit_mask, self.b_bit_mask, self.a_bit_mask)

    def __repr__(self):
        return f'<{self.__class__.__name__}(flags=0x{self.flags:x},fourcc={self.fourcc!r})>'

    def __eq__(self, other):
        if not isinstance(other, PixelFormat):
            return NotImplemented

        return self._key() == other._key()

    @classmethod
    def decode(cls, cursor):
        cursor.assert_int32(PIXELFORMAT_SIZE)
        flags = cursor.read_uint32()
        fourcc = cursor.read_text('latin-1', 4)
        rgb_bit_count = cursor.read_int32()
        r_bit_mask = cursor.read_uint32()
        g_bit_mask = cursor.read_uint32()
        b_bit_mask = cursor.read_uint32()
        a_bit_mask = cursor.read_uint32()

        return cls(flags, fourcc, rgb_bit_count, r_bit_mask, g_bit_mask, b_bit_mask, a_bit_mask)

    def encode(self, cursor):
        cursor.write_int32(PIXELFORMAT_SIZE)
        cursor.write_uint32(self.flags)
        # always four characters
        cursor.write_text(self.fourcc.ljust(4)[:4], 'latin-1')
        cursor.write_int32(self.rgb_bit_count)
        cursor.write_uint32(self.r_bit_mask)
        cursor.write_uint32(self.g_bit_mask)
        cursor.write_uint32(self.b_bit_mask)
        cursor.write_uint32(self.a_bit_mask)


class HeaderDXT10(object):

    def __init__(self, dxgi_format=0, resource_dimension=0, misc_flag=0, array_size=0, misc_flags2=0):
        self.dxgi_format = dxgi_format
        self.resource_dimension = resource_dimension
        self.misc_flag = misc_flag
        self.array_size = array_size
        self.misc_flags2 = misc_flags2

    def _key(self):
        return (self.dxgi_format, self.resource_dimension, self.misc_flag, self.array_size, self.misc_flags2)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(str(_) for _ in self._key()))

    def __eq__(self, other):
        if not isinstance(other, HeaderDXT10):
            return NotImplemented

        return self._key() == other._key()

    @classmethod
    def decode(cls, cursor):
        return cls(*[cursor.read_uint32() for _ in range(5)])

    def encode(self, cursor):
        for value in self._key():
            cursor.write_uint32(value)


class DDS(Decodable, Encodable):

    def __init__(self, flags=0, height=0, width=0, pitch_or_linear_size=0, depth=0, mipmap_count=0,
                 pixel_format: PixelFormat = None, caps=0, caps2=0,
                 header10: Optional[HeaderDXT10] = None, data: bytes = b''):
        self.flags = flags
        self.height = height
        self.width = width
        self.pitch_or_linear_size = pitch_or_linear_size
        self.depth = depth
        self.mipmap_count = mipmap_count
        self.pixel_format = pixel_format if pixel_format is not None else PixelFormat()
        self.caps = caps
        self.caps2 = caps2
        self.header10 = header10
        self.data = data

    def _key(self):
        return (self.flags, self.height, self.width, self.pitch_or_linear_size, self.depth,
                self.mipmap_count, self.pixel_format, self.caps, self.caps2, self.header10, self.data)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.width}x{self.height},{self.pixel_format!r},header10={self.header10!r})>'

    def __eq__(self, other):
        if not isinstance(other, DDS):
            return NotImplemented

        return self._key() == other._key()

    @property
    def is_cubemap(self):
        return bool(self.caps2 & DDSCAPS2.CUBEMAP)

    @property
    def has_mipmaps(self):
        return bool(self.flags & DDSD.MIPMAPCOUNT) and bool(self.caps & DDSCAPS.MIPMAP)

    @property
    def is_compressed(self):
        return bool(self.pixel_format.flags & DDPF.FOURCC)

    @classmethod
    def is_format(cls, source) -> bool:
        cursor = Cursor(source)
        return cursor.remaining >= len(MAGIC) and cursor.read_bytes(len(MAGIC)) == MAGIC.encode('ascii')

    @classmethod
    def decode(cls, cursor):
        cursor.assert_ascii(MAGIC)
        cursor.assert_int32(HEADER_SIZE)
        flags = cursor.read_int32()
        height = cursor.read_int32()
        width = cursor.read_int32()
        pitch_or_linear_size = cursor.read_int32()
        depth = cursor.read_int32()
        mipmap_count = cursor.read_int32()

        # dwReserved1
        cursor.skip(4 * 11)

        try:
            pixel_format = PixelFormat.decode(cursor)
        except GamestructException as e:
            e.chain.append('pixel_format')
            raise

        caps = cursor.read_int32()
        caps2 = cursor.read_int32()

        # dwCaps3, dwCaps4, dwReserved2
        cursor.skip(4 * 3)

        header10 = None
        if pixel_format.fourcc == DX10:
            logger.debug('found DX10 extended header')
            try:
                header10 = HeaderDXT10.decode(cursor)
            except GamestructException as e:
                e.chain.append('header10')
                raise

        data = cursor.read_bytes(cursor.remaining)

        return cls(flags, height, width, pitch_or_linear_size, depth, mipmap_count,
                   pixel_format, caps, caps2, header10=header10, data=data)

    def encode(self, cursor):
        if self.pixel_format.fourcc == DX10 and self.header10 is None:
            raise ValueError('the pixel format indicates a DX10 header but header10 is missing')

        if self.pixel_format.fourcc != DX10 and self.header10 is not None:
            raise ValueError(f'header10 is present but the FourCC is {self.pixel_format.fourcc!r}, not \'{DX10}\'')

        cursor.write_ascii(MAGIC)
        cursor.write_int32(HEADER_SIZE)
        cursor.write_int32(self.flags)
        cursor.write_int32(self.height)
        cursor.write_int32(self.width)
        cursor.write_int32(self.pitch_or_linear_size)
        cursor.write_int32(self.depth)
        cursor.write_int32(self.mipmap_count)
        cursor.write_null(4 * 11)

        self.pixel_format.encode(cursor)

        cursor.write_int32(self.caps)
        cursor.write_int32(self.caps2)
        cursor.write_null(4 * 3)

        if self.pixel_format.fourcc == DX10:
            self.header10.encode(cursor)

        cursor.write_bytes(self.data)
