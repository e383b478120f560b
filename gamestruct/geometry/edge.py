'''
# EDGE

List of edges of a mesh; the format can be read and written back byte for
byte: every constant and padding checked while decoding is written again
while encoding, in the same order.

Each edge takes 0x40 bytes

    v1       3 x float32, followed by 1.0
    v2       3 x float32, followed by 1.0
    0x10 bytes of zeros
    unk30    int32
    unk34..36  three bytes
    a zero byte and other 8 bytes of zeros
'''
import logging
import struct
from typing import List, Tuple

from ..core import Decodable, Encodable
from ..exceptions import GamestructException


logger = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]


def as_float32(vector) -> Vector3:
    '''The file stores single precision values, round them the same way.'''
    return struct.unpack('<3f', struct.pack('<3f', *vector))


class Edge(object):

    def __init__(self, v1: Vector3 = (0.0, 0.0, 0.0), v2: Vector3 = (0.0, 0.0, 0.0),
                 unk30: int = 0, unk34: int = 0, unk35: int = 0, unk36: int = 0):
        self.v1 = as_float32(v1)
        self.v2 = as_float32(v2)
        self.unk30 = unk30
        self.unk34 = unk34
        self.unk35 = unk35
        self.unk36 = unk36

    def _key(self):
        return (self.v1, self.v2, self.unk30, self.unk34, self.unk35, self.unk36)

    def __repr__(self):
        return f'<{self.__class__.__name__}(v1={self.v1},v2={self.v2},unk30=0x{self.unk30:x})>'

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return NotImplemented

        return self._key() == other._key()

    @classmethod
    def decode(cls, cursor):
        v1 = cursor.read_vector3()
        cursor.assert_single(1.0)
        v2 = cursor.read_vector3()
        cursor.assert_single(1.0)
        cursor.assert_zero_region(0x10)
        unk30 = cursor.read_int32()
        unk34 = cursor.read_byte()
        unk35 = cursor.read_byte()
        unk36 = cursor.read_byte()
        cursor.assert_byte(0)
        cursor.assert_zero_region(8)

        return cls(v1, v2, unk30=unk30, unk34=unk34, unk35=unk35, unk36=unk36)

    def encode(self, cursor):
        cursor.write_vector3(self.v1)
        cursor.write_single(1.0)
        cursor.write_vector3(self.v2)
        cursor.write_single(1.0)
        cursor.write_null(0x10)
        cursor.write_int32(self.unk30)
        cursor.write_byte(self.unk34)
        cursor.write_byte(self.unk35)
        cursor.write_byte(self.unk36)
        cursor.write_byte(0)
        cursor.write_null(8)


class EdgeFile(Decodable, Encodable):

    def __init__(self, id: int = 0, edges: List[Edge] = None):
        self.id = id
        self.edges = edges if edges is not None else []

    def __repr__(self):
        return f'<{self.__class__.__name__}(id={self.id},edges={self.edges!r})>'

    def __eq__(self, other):
        if not isinstance(other, EdgeFile):
            return NotImplemented

        return (self.id, self.edges) == (other.id, other.edges)

    @classmethod
    def decode(cls, cursor):
        cursor.big_endian = False
        cursor.assert_int32(4)
        edge_count = cursor.read_int32()
        id = cursor.read_int32()
        cursor.assert_int32(0)

        logger.debug('edge file %d with %d edges', id, edge_count)

        edges = []
        for index in range(edge_count):
            try:
                edges.append(Edge.decode(cursor))
            except GamestructException as e:
                e.chain.append(f'edges[{index}]')
                raise

        return cls(id, edges)

    def encode(self, cursor):
        cursor.big_endian = False
        cursor.write_int32(4)
        cursor.write_int32(len(self.edges))
        cursor.write_int32(self.id)
        cursor.write_int32(0)

        for edge in self.edges:
            edge.encode(cursor)
