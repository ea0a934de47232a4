import copy
import logging
from enum import Enum, auto


logger = logging.getLogger(__name__)


class Endianess(Enum):
    LITTLE_ENDIAN = auto()
    BIG_ENDIAN    = auto()


class FieldDescriptor(object):
    """Give to each chunk instance its own copy of the field declared in the class.

    The copy is made at the first access, so that a chunk used as prototype
    (for example the element type of an array) is never shared."""

    def __init__(self, field_instance: "Field", field_name: str):
        self.field = field_instance
        self.field.field_name = field_name

    def __get__(self, instance, owner=None):
        # from the class we give back the prototype
        if instance is None:
            return self.field

        field_name = self.field.field_name
        try:
            return instance.__dict__[field_name]
        except KeyError:
            field = instance.__dict__[field_name] = self.field.create(father=instance)
            return field

    def __set__(self, instance, value):
        field_name = self.field.field_name

        # a field of the right kind replaces the actual one, anything else is a value for it
        if isinstance(value, self.field.__class__):
            value.father = instance
            value.field_name = field_name
            instance.__dict__[field_name] = value
        else:
            self.__get__(instance).value = value


class FieldBase(object):

    def contribute_to_chunk(self, cls, name):
        setattr(cls, name, FieldDescriptor(self, name))

    def create(self, father):
        '''Copy of this field attached to "father".

        The copy is shallow: the containers override this to copy their sub-fields.'''
        instance = copy.copy(self)
        instance.father = father
        return instance


class Meta(object):
    """What the metaclass knows about a chunk: the names of its fields in (un)packing order."""

    def __init__(self, fields=None):
        self.fields = list(fields or [])


class MetaChunk(type):
    """Metaclass collecting the fields of a Chunk.

    The fields declared in the class body are replaced by descriptors, the inherited
    ones come first, in the order of the bases; redeclaring an inherited field
    replaces it in place."""

    def __new__(mcs, name, bases, attrs):
        declared = {_k: attrs.pop(_k) for _k in list(attrs) if isinstance(attrs[_k], FieldBase)}

        new_cls = super().__new__(mcs, name, bases, attrs)

        inherited = []
        for parent in bases:
            if not isinstance(parent, MetaChunk):
                continue
            inherited += [_ for _ in parent._meta.fields if _ not in inherited]

        new_cls._meta = Meta(inherited)

        for field_name, field in declared.items():
            new_cls.add_field(field_name, field)

        return new_cls

    def add_field(cls, name, field):
        if name not in cls._meta.fields and hasattr(cls, name):
            raise AttributeError(f'field \'{name}\' would hide the attribute with the same name of {cls.__name__}')

        logger.debug('adding field \'%s\' to %s' % (name, cls.__name__))

        field.contribute_to_chunk(cls, name)

        if name not in cls._meta.fields:
            cls._meta.fields.append(name)
