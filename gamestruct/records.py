'''
Decoding of records whose layout is given by a Schema.
'''
import logging
from collections import OrderedDict
from typing import List, Optional

from .exceptions import GamestructException
from .fields import BitField, CellValue
from .schema import Schema


logger = logging.getLogger(__name__)


class Cell(object):
    '''A value together with the type tag and the name that produced it.'''

    def __init__(self, type_tag: str, name: str, value: CellValue):
        self.type_tag = type_tag
        self.name = name
        self.value = value

    def __repr__(self):
        if self.type_tag.startswith('x'):
            return f'<{self.__class__.__name__}({self.name}=0x{self.value:x})>'

        return f'<{self.__class__.__name__}({self.name}={self.value!r})>'

    def __eq__(self, other):
        if not isinstance(other, Cell):
            return NotImplemented

        return (self.type_tag, self.name, self.value) == (other.type_tag, other.name, other.value)


class Row(object):

    def __init__(self, id: int, cells: List[Cell], name: Optional[str] = None):
        self.id = id
        self.name = name
        self.cells = cells

    def __repr__(self):
        return '<%s(id=%d,%s)>' % (self.__class__.__name__, self.id, ','.join(repr(_) for _ in self.cells))

    def __len__(self):
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)

    def __getitem__(self, name: str) -> CellValue:
        '''Value of the first cell with the given name.'''
        for cell in self.cells:
            if cell.name == name:
                return cell.value

        raise KeyError(name)

    def as_dict(self):
        return OrderedDict((cell.name, cell.value) for cell in self.cells)


def decode_record(cursor, offset: int, schema: Schema, id: int = 0, name: Optional[str] = None) -> Row:
    '''Decode the record stored at the absolute offset; the position of the
    cursor is the same before and after the call, also when it fails.'''
    logger.debug('decoding record %d at 0x%x', id, offset)

    cells = []
    with cursor.stepped(offset):
        try:
            for field, descriptors in schema.groups():
                value = field.unpack(cursor)

                if isinstance(field, BitField):
                    for index, descriptor in enumerate(descriptors):
                        cells.append(Cell(descriptor.type_tag, descriptor.name, BitField.bit(value, index)))
                    continue

                descriptor, = descriptors
                cells.append(Cell(descriptor.type_tag, descriptor.name, value))
        except GamestructException as e:
            e.chain.append(f'row[{id}]')
            raise

    return Row(id, cells, name=name)
