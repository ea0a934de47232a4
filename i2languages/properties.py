import logging


def get_root_from_chunk(instance):
    while instance.father is not None:
        instance = instance.father

    return instance


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            length = fields.StructField('i')
            data = fields.StringField(Dependency('.length'))

    and have the (internal) length of the string contained in the field named 'data'
    strictly connected to the field named 'length'.

    The relation is defined in the unpacking direction (the count drives the
    field) and is reversed during the packing phase, when the field writes its
    actual length back into the count.

    The syntax for the expression is inspired from module resolution:

     - '.' as first char indicates we refer to a field at the same level
     - otherwise the first component is resolved from the root chunk
    '''
    def __init__(self, expression):
        self.expression = expression
        self.logger = logging.getLogger(__name__)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        self.logger.debug('trying to resolve \'%s\' for \'%s\'' % (
            self.expression,
            instance.__class__.__name__,
        ))

        fields_path = self.expression.split('.')
        # '.count'.split(".") -> ['', 'count']
        # 'count'.split(".") -> ['count']
        if fields_path[0] == '':
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f"'{self.expression}' cannot be resolved from a field without father")

        for component_name in fields_path:
            field = getattr(field, component_name)

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        value = self.resolve_field(instance).value

        self.logger.debug(' resolved with value %s' % value)

        return value

    def resolve_and_set(self, instance, value):
        self.resolve_field(instance).value = value


class PropertyDescriptor(object):
    """This the glue for dependency management: the attribute can be a plain
    value or a Dependency that is resolved on access."""

    def __init__(self, name: str, _type: type):
        self.name = name
        self.type = _type

    def __get__(self, instance, owner):
        if instance is None:
            return self

        data = instance.__dict__
        if self.name not in data:
            raise AttributeError(f"no '{self.name}' here!")

        value = data[self.name]

        if isinstance(value, Dependency):
            return value.resolve(instance)

        return value

    def __set__(self, instance, value):
        if not isinstance(value, (self.type, Dependency)):
            raise ValueError(f"A property must be of type {self.type} or a Dependency")

        instance.__dict__[self.name] = value

