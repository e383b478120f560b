import struct

import pytest

from gamestruct.exceptions import FormatValidationError
from gamestruct.geometry.edge import Edge, EdgeFile


EDGES = [
    ((1.0, 2.0, 3.0), (-1.5, 0.25, 100.0), 0x1234, (1, 2, 3)),
    ((0.0, 0.0, 0.0), (0.5, 0.5, 0.5), -1, (0xff, 0, 0x80)),
]


def test_read(edge_builder):
    edge_file = EdgeFile.read(edge_builder(42, EDGES))

    assert edge_file.id == 42
    assert edge_file.edges == [
        Edge((1.0, 2.0, 3.0), (-1.5, 0.25, 100.0), unk30=0x1234, unk34=1, unk35=2, unk36=3),
        Edge((0.0, 0.0, 0.0), (0.5, 0.5, 0.5), unk30=-1, unk34=0xff, unk35=0, unk36=0x80),
    ]


def test_write(edge_builder):
    raw = edge_builder(42, EDGES)

    assert EdgeFile.read(raw).write() == raw
    assert len(raw) == 0x10 + 0x40 * len(EDGES)


def test_roundtrip():
    edge_file = EdgeFile(7, [Edge((1.0, 1.0, 1.0), (2.0, 2.0, 2.0), unk30=3, unk36=9)])

    raw = edge_file.write()
    decoded = EdgeFile.read(raw)

    assert decoded == edge_file
    assert decoded.write() == raw


def test_empty():
    assert EdgeFile.read(EdgeFile(1).write()) == EdgeFile(1)


def test_wrong_version(edge_builder):
    raw = bytearray(edge_builder(1, EDGES))
    raw[0:4] = struct.pack('<i', 5)

    with pytest.raises(FormatValidationError) as e:
        EdgeFile.read(bytes(raw))

    assert e.value.field_offset == 0
    assert e.value.expected == 4
    assert e.value.actual == 5


def test_wrong_w_component(edge_builder):
    raw = bytearray(edge_builder(1, EDGES))
    # w of v2 of the second edge
    offset = 0x10 + 0x40 + 0x1c
    raw[offset:offset + 4] = struct.pack('<f', 0.0)

    with pytest.raises(FormatValidationError) as e:
        EdgeFile.read(bytes(raw))

    assert e.value.field_offset == offset
    assert e.value.chain == ['edges[1]', 'EdgeFile']


def test_non_zero_padding(edge_builder):
    raw = bytearray(edge_builder(1, EDGES))
    raw[0x10 + 0x25] = 1

    with pytest.raises(FormatValidationError) as e:
        EdgeFile.read(bytes(raw))

    assert e.value.field_offset == 0x10 + 0x25
    assert e.value.actual == 1


def test_non_zero_byte_after_unknowns(edge_builder):
    raw = bytearray(edge_builder(1, EDGES))
    raw[0x10 + 0x37] = 2

    with pytest.raises(FormatValidationError) as e:
        EdgeFile.read(bytes(raw))

    assert e.value.field_offset == 0x10 + 0x37


def test_roundtrip_double_precision():
    edge_file = EdgeFile(1, [Edge((0.1, 0.2, 0.3), (1, 2, 3))])

    decoded = EdgeFile.read(edge_file.write())

    assert decoded == edge_file
    assert edge_file.edges[0].v1 == (0.10000000149011612, 0.20000000298023224, 0.30000001192092896)
