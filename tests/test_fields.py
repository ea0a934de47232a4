from enum import Enum, auto

import pytest

from i2languages.enum import Compliant
from i2languages.exceptions import (
    UnknownEnumValueError,
    FixedSizeError,
    MalformedStringError,
    StringEncodingError,
    TruncatedInputError,
    ValueRangeError,
)
from i2languages.fields import (
    StructField,
    StringField,
    ArrayField,
    AlignedStringField,
    AlignmentField,
    padding_for,
)


def test_structfield_conversion_raw_value():
    """Check that the attributes "value" and "raw" are the analogous
    of the integers and bytes representation for a field."""
    field = StructField('I')

    assert field.size == 4
    assert field.raw == b'\x00\x00\x00\x00'
    assert field.value == 0

    field.value = 0xcafe

    assert field.value == 0xcafe
    assert field.raw == b'\xfe\xca\x00\x00'


def test_structfield_set_raw():
    field = StructField('I')

    field.raw = b'\x01\x02\x03\x04'
    assert field.value == 0x04030201


def test_structfield_out_of_range():
    field = StructField('I', default=-1)

    with pytest.raises(ValueRangeError):
        field.raw


def test_structfield_enum():
    class DummyEnum(Enum):
        NONE = 0
        FIRST = auto()
        SECOND = auto()

    field = StructField('I', enum=DummyEnum, compliant=Compliant.ENUM)

    assert field.value == DummyEnum.NONE

    field.value = DummyEnum.SECOND

    assert field.value == DummyEnum.SECOND
    assert field.raw == b'\x02\x00\x00\x00'

    with pytest.raises(UnknownEnumValueError):
        field.raw = b'\x04\x00\x00\x00'


def test_structfield_enum_lenient():
    """Without compliance the unknown values are kept as integers and packed back."""
    class DummyEnum(Enum):
        NONE = 0

    field = StructField('I', enum=DummyEnum)

    field.raw = b'\x04\x00\x00\x00'

    assert field.value == 4
    assert field.raw == b'\x04\x00\x00\x00'


def test_stringfield():
    field = StringField(0x10)

    assert field.size == 0x10
    assert len(field.raw) == field.size
    assert field.raw == b'\x00' * field.size

    with pytest.raises(FixedSizeError):
        field.value = b'kebab'

    data = b''.join([bytes([_]) for _ in range(0x10)])

    field.value = data

    assert field.value == data
    assert field.raw == data


def test_stringfield_truncated():
    field = StringField(0x10)

    with pytest.raises(TruncatedInputError):
        field.raw = b'\x00' * 0x0f


@pytest.mark.parametrize('offset,padding', [
    (0, 0),
    (1, 3),
    (2, 2),
    (3, 1),
    (4, 0),
    (0x1d, 3),
])
def test_padding_for(offset, padding):
    assert padding_for(offset) == padding


def test_alignmentfield_depends_on_offset():
    field = AlignmentField()

    assert field.relayout(offset=4) == 0
    assert field.relayout(offset=5) == 3
    assert field.relayout(offset=7) == 1


def test_alignedstringfield():
    field = AlignedStringField(default='abc')

    assert field.raw == b'\x03\x00\x00\x00abc\x00'
    assert field.size == 8

    field.value = ''

    assert field.raw == b'\x00\x00\x00\x00'
    assert field.size == 4


def test_alignedstringfield_length_is_in_bytes():
    field = AlignedStringField(default='città')

    # 'à' takes two bytes
    assert field.raw == b'\x06\x00\x00\x00citt\xc3\xa0\x00\x00'


def test_alignedstringfield_unpack():
    field = AlignedStringField()

    field.raw = b'\x05\x00\x00\x00hello\x00\x00\x00'

    assert field.value == 'hello'


def test_alignedstringfield_negative_length():
    field = AlignedStringField()

    with pytest.raises(MalformedStringError):
        field.raw = b'\xff\xff\xff\xff'


def test_alignedstringfield_invalid_utf8():
    field = AlignedStringField()

    with pytest.raises(MalformedStringError):
        field.raw = b'\x02\x00\x00\x00\xff\xfe\x00\x00'


def test_alignedstringfield_truncated():
    field = AlignedStringField()

    with pytest.raises(TruncatedInputError):
        field.raw = b'\x05\x00\x00\x00hel'


def test_alignedstringfield_not_encodable():
    field = AlignedStringField(default='\ud800')

    with pytest.raises(StringEncodingError):
        field.raw

    field.value = None

    with pytest.raises(StringEncodingError):
        field.raw


def test_arrayfield():
    length = 10
    array = ArrayField(StructField('I'), n=length)
    array.relayout()

    # check some basic property
    assert isinstance(array.value, list)
    assert len(array.value) == length
    assert len(array) == length

    # check that the elements are not duplicated
    assert array[0] is not array[1]

    # check the offsets make sens
    assert array[0].offset == 0
    assert array[1].offset == 4
    assert array[9].offset == 36

    # check the value are all zero
    for _ in range(len(array)):
        field = array[_]
        assert field.value == 0

    # set one and check is actually changed
    array[3].value = 0xcafebabe
    assert [_.value for _ in array] == [
        0, 0, 0, 0xcafebabe, 0, 0, 0, 0, 0, 0,
    ]

    array.clear()

    assert len(array) == 0

    array.append(StructField('I', default=7))

    assert array[0].father is array
    assert array.raw == b'\x07\x00\x00\x00'


def test_arrayfield_of_strings_python_conversion():
    array = ArrayField(AlignedStringField())

    array.from_python(['a', 'bcde'])

    assert array.to_python() == ['a', 'bcde']
    assert all(_.father is array for _ in array)
    assert array.raw == (
        b'\x01\x00\x00\x00a\x00\x00\x00'
        b'\x04\x00\x00\x00bcde'
    )
