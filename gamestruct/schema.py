'''
# Schema language

Some formats don't fix the layout of their records, it's supplied from
outside when decoding. The textual description is line oriented, one field
per line in on-disk order

    u8 HP
    u8 MP
    fixstr[16] Display name

the first whitespace-delimited token is the type tag and the rest of the line
is the field name (so names can contain spaces). Blank lines are ignored.

The tags are not checked here: the record decoder does it, so schemas using
tags introduced later still compile.
'''
import logging
import re
from typing import Iterator, List, Tuple
from xml.etree import ElementTree

from .exceptions import SchemaParseError
from .fields import BitField, Field, VARIABLE_FIELDS, get_field


logger = logging.getLogger(__name__)

LINE_TERMINATOR = re.compile(r'\r\n|\r|\n')


class FieldDescriptor(object):

    def __init__(self, type_tag: str, name: str):
        self.type_tag = type_tag
        self.name = name

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.type_tag} {self.name!r})>'

    def __eq__(self, other):
        if not isinstance(other, FieldDescriptor):
            return NotImplemented

        return (self.type_tag, self.name) == (other.type_tag, other.name)

    @property
    def field(self) -> Field:
        return get_field(self.type_tag)


class Schema(list):
    '''Ordered list of FieldDescriptor, compiled once and reused for every record.'''

    @classmethod
    def from_text(cls, text: str) -> 'Schema':
        return compile_schema(text)

    @classmethod
    def from_xml(cls, text: str) -> 'Schema':
        '''Build the schema from a layout like

            <layout>
              <entry><name>HP</name><type>u8</type><default>0</default></entry>
              <entry><name>Label</name><type>fixstr</type><size>16</size><default/></entry>
            </layout>

        defaults are not used since we don't write records.'''
        root = ElementTree.fromstring(text)
        schema = cls()

        for index, entry in enumerate(root.findall('entry'), start=1):
            name = entry.findtext('name')
            type_tag = entry.findtext('type')

            if not name or not type_tag:
                raise SchemaParseError(index, ElementTree.tostring(entry, encoding='unicode'))

            if type_tag in VARIABLE_FIELDS:
                size = entry.findtext('size')
                if size is None:
                    raise SchemaParseError(index, ElementTree.tostring(entry, encoding='unicode'))
                type_tag = f'{type_tag}[{size.strip()}]'

            schema.append(FieldDescriptor(type_tag.strip(), name.strip()))

        logger.debug('compiled %d fields from xml layout', len(schema))

        return schema

    def groups(self) -> Iterator[Tuple[Field, List[FieldDescriptor]]]:
        '''Iterate over the fields as they are stored: each element of a run of
        consecutive flags with the same tag gets its own descriptor but they
        share a single field.'''
        index = 0
        while index < len(self):
            descriptor = self[index]
            field = descriptor.field

            count = 1
            if isinstance(field, BitField):
                while (count < field.width and index + count < len(self)
                       and self[index + count].type_tag == descriptor.type_tag):
                    count += 1

            yield field, self[index:index + count]

            index += count

    @property
    def size(self) -> int:
        '''Size in bytes of a record with this layout.'''
        return sum(field.size for field, _ in self.groups())


def compile_schema(text: str) -> Schema:
    schema = Schema()

    for line_number, line in enumerate(LINE_TERMINATOR.split(text), start=1):
        stripped = line.strip()
        if not stripped:
            continue

        tokens = stripped.split(None, 1)
        if len(tokens) != 2:
            raise SchemaParseError(line_number, line)

        type_tag, name = tokens
        schema.append(FieldDescriptor(type_tag, name.strip()))

    logger.debug('compiled %d fields', len(schema))

    return schema
