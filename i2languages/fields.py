"""
A Field is "fundamental" datatype from the format point of view, something directly
packable/unpackable without need of sub-components.
"""
import copy
import logging
import struct
from enum import Enum
from typing import Dict

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency, PropertyDescriptor
from .streams import Stream
from .exceptions import (
    UnpackException,
    PackException,
    MalformedStringError,
    MalformedCountError,
    UnknownEnumValueError,
    StringEncodingError,
    ValueRangeError,
    FixedSizeError,
)


ALIGNMENT = 4


def padding_for(offset: int, alignment: int = ALIGNMENT) -> int:
    '''Number of bytes needed to bring an absolute offset to the alignment.'''
    return (alignment - offset % alignment) % alignment


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, field_name=None, father=None, default=None, offset=None,
                 endianess=Endianess.LITTLE_ENDIAN, compliant=Compliant.INHERIT):
        super().__init__()
        self.logger = logging.getLogger(__name__)
        self.field_name = field_name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return copy.copy(self.default)

    def __str__(self):
        return str(self.value)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def get_dependencies(self) -> Dict[str, Dependency]:
        """Return the dictionary containing as key the attribute depending on another field"""
        return {_k: _v for _k, _v in self.__dict__.items() if isinstance(_v, Dependency)}

    def is_compliant(self, level):
        '''Walk up the hierarchy until a field not inheriting the compliance is found'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_value(self):
        return self._value

    def _set_value(self, value) -> None:
        self._value = value

    value = property(
        fget=lambda self: self._get_value(),
        fset=lambda self, value: self._set_value(value))

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def _get_raw(self) -> bytes:
        '''Encoding of this field alone, as if it started at offset zero.

        The packing moves the offsets, they are put back afterwards so that the
        layout of the enclosing chunk is not affected.'''
        offset = self.offset
        stream = Stream()
        self._update_value()
        try:
            self.pack(stream)
        finally:
            self.offset = offset

        if offset is not None:
            self.relayout(offset)

        return stream.getvalue()

    def _set_raw(self, raw: bytes) -> None:
        self.unpack(Stream(raw))

    raw = property(
        fget=lambda self: self._get_raw(),
        fset=lambda self, value: self._set_raw(value),
    )

    def relayout(self, offset=0):
        self.offset = offset

        return self.size

    def _update_value(self):
        '''This is used to update the fields this one depends on before packing'''
        pass

    def pack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')

    def to_python(self):
        '''Plain python representation of the value (used by the document model).'''
        return self.value

    def from_python(self, value):
        self.value = value


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module packing/unpacking
    integers to/from bytes.

    The main advantage is the possibility to indicate via the "enum" argument some subclass
    of enum.Enum so to have directly a representation of the integer value of the field itself.
    When the integer is not a member of the enum the raw integer is kept, unless the field
    is compliant with Compliant.ENUM.
    """

    def __init__(self, format, default=0, enum=None, **kw):
        self.format = format
        self.enum = enum
        super().__init__(default=default, **kw)

    def __repr__(self):
        if not self.enum or not isinstance(self.value, Enum):
            return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

        return f'<{self.__class__.__name__}({self.value!r})>'

    def value_from_default(self):
        if not self.enum:
            return super().value_from_default()

        return self.enum(self.default)

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def _unpack_enum(self, value: int):
        try:
            return self.enum(value)
        except ValueError:
            if self.is_compliant(Compliant.ENUM):
                raise UnknownEnumValueError(f'{self.enum.__name__} doesn\'t have element with value 0x{value:x}')

            self.logger.warning(f'enum {self.enum.__name__} doesn\'t have element with value 0x{value:x} in it, keeping the raw value')

            return value

    def _unpack(self, raw: bytes):
        value = struct.unpack(self.get_format(), raw)[0]
        if self.enum:
            value = self._unpack_enum(value)

        return value

    def _pack(self) -> bytes:
        value = self.value.value if isinstance(self.value, Enum) else self.value
        try:
            return struct.pack(self.get_format(), value)
        except struct.error as e:
            raise ValueRangeError(f'{value!r} doesn\'t fit format \'{self.format}\': {e}')

    def unpack(self, stream):
        self.offset = stream.tell()
        self.value = self._unpack(stream.read(self.size))

    def pack(self, stream):
        self.offset = stream.tell()
        stream.write(self._pack())


class StringField(Field):
    """Represent a contiguous chunk of bytes.

    The length is fixed, unless it's a Dependency: in that case the length is read from
    the field the dependency refers to and it's written back there when packing."""

    length = PropertyDescriptor('length', int)

    def __init__(self, n=None, **kw):
        if n is None and kw.get('default') is None:
            raise ValueError(f"StringField must have 'n' or 'default' indicated!")

        self.length = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def value_from_default(self):
        if self.default is not None:
            return bytes(self.default)

        if 'length' in self.get_dependencies():
            return b''

        return b'\x00' * self.length

    def _get_size(self):
        return len(self.value)

    def _set_value(self, value) -> None:
        if not isinstance(value, (bytes, bytearray)):
            raise FixedSizeError(f'{self.__class__.__name__} accepts only bytes, not {value.__class__.__name__}')

        if 'length' not in self.get_dependencies() and len(value) != self.length:
            raise FixedSizeError(
                f'you are trying to set a value with the wrong size ({len(value)} bytes instead of {self.length})')

        self._value = bytes(value)

    def _update_value(self):
        dependency = self.get_dependencies().get('length')
        if dependency:
            dependency.resolve_and_set(self, len(self.value))

    def unpack(self, stream):
        self.offset = stream.tell()

        length = self.length
        if length < 0:
            raise MalformedCountError(f'negative length {length}')

        self.value = stream.read(length)

    def pack(self, stream):
        self.offset = stream.tell()
        stream.write(self.value)


class AlignmentField(Field):
    '''Zero bytes needed to reach the next 4-bytes boundary.

    The amount depends on the absolute position in the stream, so the size
    of this field is known only after a relayout.'''

    def __init__(self, alignment=ALIGNMENT, **kw):
        self.alignment = alignment
        super().__init__(**kw)

    def value_from_default(self):
        return None

    def _get_size(self):
        return padding_for(self.offset or 0, self.alignment)

    def unpack(self, stream):
        self.offset = stream.tell()
        padding = stream.read(padding_for(self.offset, self.alignment))
        if padding.strip(b'\x00'):
            self.logger.warning(f'non zero padding {padding!r} at offset {self.offset}')

    def pack(self, stream):
        self.offset = stream.tell()
        stream.write(b'\x00' * padding_for(self.offset, self.alignment))


class AlignedStringField(Field):
    '''A text string: 4 bytes of signed length followed by the UTF-8 encoded
    bytes, followed by the padding to the 4-bytes boundary.'''

    def __init__(self, default='', **kw):
        super().__init__(default=default, **kw)

    def encoded(self) -> bytes:
        if not isinstance(self.value, str):
            raise StringEncodingError(f'expected a string, not {self.value.__class__.__name__}')

        try:
            return self.value.encode('utf-8')
        except UnicodeEncodeError as e:
            raise StringEncodingError(f'{self.value!r} cannot be encoded as UTF-8: {e}')

    def _get_size(self):
        size = 4 + len(self.encoded())
        return size + padding_for((self.offset or 0) + size)

    def unpack(self, stream):
        self.offset = stream.tell()

        length = struct.unpack('<i', stream.read(4))[0]
        if length < 0:
            raise MalformedStringError(f'negative string length {length} at offset {self.offset}')

        data = stream.read(length)
        try:
            self.value = data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise MalformedStringError(f'invalid UTF-8 at offset {self.offset}: {e}')

        stream.read(padding_for(stream.tell()))

    def pack(self, stream):
        self.offset = stream.tell()

        data = self.encoded()
        stream.write(struct.pack('<i', len(data)) + data)
        stream.write(b'\x00' * padding_for(stream.tell()))


class ArrayField(Field):
    '''Un/Pack an array of fields.

    You can indicate an explicit number of elements via the parameter named "n",
    usually as a Dependency from the field containing the count.

    This class must behave like a list in python, obviously cannot implement all the methods
    since, for example, slicing what should mean?
    '''

    n = PropertyDescriptor('n', int)

    def __init__(self, field_cls, n=0, **kw):
        self.field_cls = field_cls
        self.n = n

        super().__init__(**kw)

    def __getitem__(self, item):
        return self.value[item]

    def __len__(self):
        return len(self.value)

    def __iter__(self):
        return iter(self.value)

    def value_from_default(self):
        if 'n' in self.get_dependencies():
            return []

        return [self.instance_element() for _ in range(self.n)]

    def _set_value(self, value):
        for element in value:
            element.father = self
        self._value = list(value)

    def clear(self):
        self.value.clear()

    def create(self, father):
        instance = super().create(father)
        instance._value = [_.create(father=instance) for _ in self.value]

        return instance

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def append(self, element):
        element.father = self
        self.value.append(element)

    def _get_size(self):
        return self.relayout(self.offset or 0)

    def relayout(self, offset=0):
        self.offset = offset
        size = 0
        for field in self.value:
            size += field.relayout(offset=offset + size)

        return size

    def _update_value(self):
        dependency = self.get_dependencies().get('n')
        if dependency:
            dependency.resolve_and_set(self, len(self.value))

    def unpack(self, stream):
        self.offset = stream.tell()

        n = self.n
        if n < 0:
            raise MalformedCountError(f'negative count {n} at offset {self.offset}')

        self.logger.debug('unpacking %d elements of %s' % (n, self.field_cls.__class__.__name__))

        elements = []
        for idx in range(n):
            element = self.instance_element()
            try:
                element.unpack(stream)
            except UnpackException as e:
                e.chain.append(f'[{idx}]')
                raise
            elements.append(element)

        self.value = elements

    def pack(self, stream):
        self.offset = stream.tell()
        for idx, element in enumerate(self.value):
            try:
                element.pack(stream)
            except PackException as e:
                e.chain.append(f'[{idx}]')
                raise

    def to_python(self):
        return [_.to_python() for _ in self.value]

    def from_python(self, values):
        elements = []
        for idx, value in enumerate(values):
            element = self.instance_element()
            try:
                element.from_python(value)
            except PackException as e:
                e.chain.append(f'[{idx}]')
                raise
            elements.append(element)

        self.value = elements
