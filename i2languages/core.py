"""
Core module for the abstraction of a file format

"""
import dataclasses
from typing import Tuple, List, Dict

from .fields import Field, AlignmentField
from .meta import MetaChunk
from .streams import Stream
from .exceptions import (
    UnpackException,
    PackException,
)
from .properties import (
    get_root_from_chunk,
    Dependency,
)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: its main attributes
    are offset and size that identify a Chunk.

    A Chunk can contain sub-chunks; the fields are (un)packed one after the other
    in the order they are declared.

    If the class attribute "model" is set, the chunk converts to and from instances of
    it: the fields named like the model's attributes are copied, the others (counts,
    paddings) are derived by the format itself.
    """
    model = None

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        # now we have setup all the fields necessary and we can unpack if
        # some data is passed with the constructor
        if data is not None:
            stream = Stream(data)
            self.logger.debug('unpacking \'%s\' from %s' % (self.__class__.__name__, stream))
            self.unpack(stream)
        else:
            self.relayout()

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def get_dependencies(self) -> Dict[str, Dependency]:
        dep = super().get_dependencies()

        for field_name, field in self.get_fields():
            for key, value in field.get_dependencies().items():
                dep.update({f'{field_name}.{key}': value})

        return dep

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def init(self):
        for _, field in self.get_fields():
            field.init()

    def create(self, father):
        instance = super().create(father)
        for name, field in self.get_fields():
            instance.__dict__[name] = field.create(father=instance)

        return instance

    def _get_value(self):
        return self

    def _set_value(self, value):
        self.from_python(value)

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        return self.relayout(self.offset or 0)

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        self.relayout(self.offset or 0)

        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def relayout(self, offset=0):
        '''This method triggers the chunk's children to reset the offsets,
        in practice it's like packing() but it's only interested in the sizes
        of the chunks.'''
        self.offset = offset

        size = 0
        for field_name, field_instance in self.get_fields():
            size += field_instance.relayout(offset=offset + size)

        return size

    def _update_fields(self):
        for _, field in self.get_fields():
            field._update_value()

    def pack(self, stream=None):
        '''Encode the fields one after the other into the stream (a new one
        if not passed); when the stream is created here the bytes of the whole
        stream are returned.

        The fields depending on others (like arrays with their count) are asked
        to write back their actual sizes before anything is written.'''

        own_stream = stream is None
        stream = Stream() if own_stream else stream

        self._update_fields()

        self.offset = stream.tell()
        for field_name, field_instance in self.get_fields():
            self.logger.debug('packing %s.%s at offset %08x' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field_instance.pack(stream)
            except PackException as e:
                e.chain.append(field_name)
                raise

        return stream.getvalue() if own_stream else None

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        The fields are read sequentially, the exceptions raised by a sub-field
        get the name of the field appended to their chain so that the caller
        knows the exact path of the failure.
        '''
        self.offset = stream.tell()
        for field_name, field in self.get_fields():
            self.logger.debug('unpacking %s.%s at offset %08x' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except UnpackException as e:
                e.chain.append(field_name)
                raise

        if hasattr(self, 'validate'):
            self.validate()

    def to_python(self):
        values = {
            name: field.to_python()
            for name, field in self.get_fields()
            if not isinstance(field, AlignmentField)
        }

        if self.model is None:
            return values

        names = [_.name for _ in dataclasses.fields(self.model)]

        return self.model(**{_: values[_] for _ in names if _ in values})

    def from_python(self, obj):
        for name, field in self.get_fields():
            if isinstance(obj, dict):
                if name not in obj:
                    continue
                value = obj[name]
            elif hasattr(obj, name):
                value = getattr(obj, name)
            else:
                continue

            try:
                field.from_python(value)
            except PackException as e:
                e.chain.append(name)
                raise
