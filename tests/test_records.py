import struct

import pytest

from gamestruct.exceptions import OutOfBoundsError, UnsupportedFieldTypeError
from gamestruct.records import Cell, decode_record
from gamestruct.schema import compile_schema
from gamestruct.streams import Cursor


def test_decode_record():
    cursor = Cursor(b'\xff\xff\x05\x07\xff')
    cursor.skip(1)

    row = decode_record(cursor, 2, compile_schema('u8 HP\nu8 MP'), id=10, name='Dagger')

    assert cursor.position == 1
    assert cursor.saved_positions == []
    assert row.id == 10
    assert row.name == 'Dagger'
    assert row.cells == [
        Cell('u8', 'HP', 5),
        Cell('u8', 'MP', 7),
    ]


def test_decode_all_types():
    schema = compile_schema('''
s8 a
u8 b
x8 c
s16 d
u16 e
x16 f
s32 g
u32 h
x32 i
f32 j
fixstr[8] k
fixstrW[8] l
dummy8[3] m
''')
    raw = struct.pack('<bBBhHHiIIf', -1, 0xff, 0x10, -2, 0xffff, 0x1234, -3, 0xffffffff, 0xcafe, 0.5)
    raw += b'sword\x00\x00\x00'
    raw += 'ab'.encode('utf-16-le') + b'\x00' * 4
    raw += b'\x01\x02\x03'

    row = decode_record(Cursor(raw), 0, schema)

    assert row.as_dict() == {
        'a': -1,
        'b': 0xff,
        'c': 0x10,
        'd': -2,
        'e': 0xffff,
        'f': 0x1234,
        'g': -3,
        'h': 0xffffffff,
        'i': 0xcafe,
        'j': 0.5,
        'k': 'sword',
        'l': 'ab',
        'm': b'\x01\x02\x03',
    }
    assert len(row) == len(schema)
    assert [_.name for _ in row] == [_.name for _ in schema]
    assert [_.type_tag for _ in row] == [_.type_tag for _ in schema]


def test_decode_bitfields():
    # 9 flags: the first eight share a byte, the last one starts a new one
    schema = compile_schema('\n'.join('b8 flag%d' % _ for _ in range(9)) + '\nu8 after')

    row = decode_record(Cursor(b'\x05\x01\x2a'), 0, schema)

    assert [row['flag%d' % _] for _ in range(9)] == [
        True, False, True, False, False, False, False, False,
        True,
    ]
    assert row['after'] == 0x2a
    assert all(isinstance(_.value, bool) for _ in row.cells[:9])


def test_decode_b32():
    schema = compile_schema('b32 a\nb32 b\nb32 c\nb32 d')
    # bit 0 of the first byte and bit 1 of the second (that is flag 9) are set
    row = decode_record(Cursor(b'\x01\x02\x00\x00'), 0, schema)

    assert [_.value for _ in row] == [True, False, False, False]

    schema = compile_schema('\n'.join('b32 f%d' % _ for _ in range(10)))
    row = decode_record(Cursor(b'\x01\x02\x00\x00'), 0, schema)

    assert row['f0'] is True
    assert row['f9'] is True
    assert [_.name for _ in row if _.value] == ['f0', 'f9']


@pytest.mark.parametrize('tag', ['f64', 'fixstr', 'u8[2]', 'dummy8[]', '[3]'])
def test_unsupported_type(tag):
    cursor = Cursor(b'\x00' * 0x10)
    cursor.skip(3)

    with pytest.raises(UnsupportedFieldTypeError) as e:
        decode_record(cursor, 4, compile_schema('u8 ok\n%s bad' % tag), id=1)

    assert e.value.tag == tag
    assert e.value.chain == ['row[1]']
    assert cursor.position == 3
    assert cursor.saved_positions == []


def test_failure_keeps_position():
    cursor = Cursor(b'\x00' * 6)
    cursor.skip(2)

    with pytest.raises(OutOfBoundsError):
        decode_record(cursor, 4, compile_schema('u32 too large'))

    assert cursor.position == 2
    assert cursor.saved_positions == []

    # and the siblings can still be decoded
    row = decode_record(cursor, 0, compile_schema('u32 fine'))
    assert row['fine'] == 0


def test_row_access():
    row = decode_record(Cursor(b'\x05\x07'), 0, compile_schema('u8 HP\nu8 MP'))

    assert row['MP'] == 7
    assert list(row.as_dict().keys()) == ['HP', 'MP']

    with pytest.raises(KeyError):
        row['SP']


def test_cell_repr():
    assert repr(Cell('x16', 'flags', 0x12)) == '<Cell(flags=0x12)>'
    assert repr(Cell('u8', 'HP', 5)) == '<Cell(HP=5)>'
