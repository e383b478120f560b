import logging
import os
import struct

import pytest


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


def build_bnd0(entries, unk1=0, data_offset=None):
    '''entries is a list of (id, data); the data follows the entry table.'''
    header = b'BND\x00' + struct.pack('<9i', 0xF7FF, 0xD3, unk1, len(entries), 0, 0x30800, 0, 0, 0)
    offset = data_offset if data_offset is not None else len(header) + 12 * len(entries)

    table, data = b'', b''
    for id, raw in entries:
        table += struct.pack('<3i', offset + len(data), len(raw), id)
        data += raw

    return header + table + data


def build_edge(id, edges):
    '''edges is a list of (v1, v2, unk30, (unk34, unk35, unk36))'''
    raw = struct.pack('<4i', 4, len(edges), id, 0)
    for v1, v2, unk30, unks in edges:
        raw += struct.pack('<4f', *v1, 1.0)
        raw += struct.pack('<4f', *v2, 1.0)
        raw += b'\x00' * 0x10
        raw += struct.pack('<i3BB', unk30, *unks, 0)
        raw += b'\x00' * 8

    return raw


def build_dds(fourcc=b'DXT1', header10=None, data=b'', flags=0x81007, height=256, width=128):
    raw = b'DDS ' + struct.pack('<7i', 124, flags, height, width, 0x4000, 0, 9)
    raw += b'\x00' * 44
    raw += struct.pack('<iI4si4I', 32, 0x4, fourcc, 0, 0, 0, 0, 0)
    raw += struct.pack('<2i', 0x401008, 0)
    raw += b'\x00' * 12
    if header10 is not None:
        raw += struct.pack('<5I', *header10)

    return raw + data


def build_param(name, rows, unk1=1, unk2=2, big_endian=False):
    '''rows is a list of (id, data, row name)'''
    order = '>' if big_endian else '<'
    header_size = 0x40
    data_start = header_size + 24 * len(rows)

    offsets, data = [], b''
    for _, raw, _ in rows:
        offsets.append(data_start + len(data))
        data += raw

    name_offset = data_start + len(data)
    strings = name.encode('ascii') + b'\x00'

    name_offsets = []
    for _, _, row_name in rows:
        name_offsets.append(name_offset + len(strings))
        strings += row_name.encode('shift_jis') + b'\x00'

    header = struct.pack(order + 'ihhhH', name_offset, 0, unk1, unk2, len(rows))
    header += struct.pack(order + '5i', 0, name_offset, 0, 0, 0)
    header += struct.pack(order + '3i', 0, 0, 0)
    header += struct.pack(order + '2i', 0x00078500, data_start)
    header += struct.pack(order + '3i', 0, 0, 0)

    row_headers = b''
    for (id, _, _), offset, row_name_offset in zip(rows, offsets, name_offsets):
        row_headers += struct.pack(order + '3q', id, offset, row_name_offset)

    return header + row_headers + data + strings


@pytest.fixture
def bnd0_builder():
    return build_bnd0


@pytest.fixture
def edge_builder():
    return build_edge


@pytest.fixture
def dds_builder():
    return build_dds


@pytest.fixture
def param_builder():
    return build_param
