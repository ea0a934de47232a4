import pytest

from i2languages.exceptions import TruncatedInputError
from i2languages.streams import Stream


def test_stream_read():
    stream = Stream(b'\x01\x02\x03\x04\x05')

    assert len(stream) == 5
    assert stream.tell() == 0

    assert stream.read(2) == b'\x01\x02'
    assert stream.tell() == 2
    assert stream.remaining() == 3

    assert stream.read(0) == b''
    assert stream.read_all() == b'\x03\x04\x05'
    assert stream.remaining() == 0


def test_stream_read_past_the_end():
    stream = Stream(b'\x01\x02\x03')
    stream.read(2)

    with pytest.raises(TruncatedInputError):
        stream.read(2)


def test_stream_seek():
    stream = Stream(bytearray(b'abcdef'))

    stream.seek(4)

    assert stream.read(2) == b'ef'

    with pytest.raises(ValueError):
        stream.seek('4')


def test_stream_from_memoryview():
    stream = Stream(memoryview(b'kebab'))

    assert stream.read_all() == b'kebab'


def test_stream_write():
    stream = Stream()

    assert stream.write(b'abc') == 3
    assert stream.tell() == 3

    stream.write(b'')
    stream.write(b'\x00')

    assert stream.tell() == 4
    assert stream.getvalue() == b'abc\x00'


def test_stream_wrong_type():
    with pytest.raises(ValueError):
        Stream('kebab')
