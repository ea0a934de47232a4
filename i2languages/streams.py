import logging

from bitstring import BitStream, Bits, ReadError

from .exceptions import TruncatedInputError


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around a bitstring's BitStream in order to
    have a file-like object working with byte positions.

    Reads never go past the end of the buffer, writes are always appended
    so that the position is the cumulative count of bytes written.'''
    def __init__(self, obj=b''):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        self._type = type(obj)
        self.obj = obj

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as stream' % self._type.__name__)

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}(pos={self.tell()}, size={len(self)})>'

    def __len__(self):
        return self.obj.len // 8

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = BitStream(bytes=self.obj)

    def init_bytearray(self):
        self.obj = BitStream(bytes=bytes(self.obj))

    def init_memoryview(self):
        self.obj = BitStream(bytes=self.obj.tobytes())

    def tell(self) -> int:
        return self.obj.pos // 8

    def seek(self, offset: int):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        self.obj.pos = offset * 8

    def remaining(self) -> int:
        return len(self) - self.tell()

    def read(self, size: int) -> bytes:
        if size == 0:
            return b''

        if size > self.remaining():
            raise TruncatedInputError(
                f'trying to read {size} bytes at offset {self.tell()} but only {self.remaining()} are available')

        try:
            return self.obj.read(f'bytes:{size}')
        except ReadError as e:
            raise TruncatedInputError(str(e)) from e

    def read_all(self) -> bytes:
        return self.read(self.remaining())

    def write(self, data: bytes) -> int:
        if data:
            self.obj.append(Bits(bytes=data))
        self.obj.pos = self.obj.len

        return len(data)

    def getvalue(self) -> bytes:
        return self.obj.tobytes()
