class I2Exception(Exception):
    '''Base class to extend in order to throw exception in i2languages.

    It takes an optional argument that represents the chain of the layers
    that caused the exception: the innermost field comes first, every
    enclosing chunk appends its own name while the exception bubbles up.
    '''

    def __init__(self, message='', chain=None):
        self.message = message
        self.chain = chain if chain is not None else []
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(reversed(self.chain)).replace('.[', '[')

    def __str__(self):
        if not self.chain:
            return self.message

        return f'{self.message} (at {self.path})'


class UnpackException(I2Exception):
    pass


class TruncatedInputError(UnpackException):
    '''A read would run past the end of the buffer.'''
    pass


class MalformedStringError(UnpackException):
    '''Negative string length or bytes that are not valid UTF-8.'''
    pass


class MalformedCountError(UnpackException):
    pass


class UnknownEnumValueError(UnpackException):
    pass


class TrailingDataError(UnpackException):
    pass


class PackException(I2Exception):
    pass


class StringEncodingError(PackException):
    pass


class ValueRangeError(PackException):
    pass


class StructureError(PackException):
    '''The document doesn't have the shape the format requires.'''
    pass


class InconsistentLanguageCountError(StructureError):
    pass


class FixedSizeError(StructureError):
    pass


class ProjectError(I2Exception):
    pass


class InterchangeError(I2Exception):
    pass
