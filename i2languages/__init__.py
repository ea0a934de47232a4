"""
# I2 Languages source codec.

The localization of many games is stored as a binary dump of a single asset
containing every term with its translations, the list of the languages and the
settings of the localization system. This package converts between that binary
dump and a typed document (see document.py) that can be edited, saved as a
directory of JSON files (project.py) or bulk edited as a table (interchange.py).

The binary format is described declaratively, like a small ORM:

 1. a Field is something with a direct binary representation (an integer,
    a blob of bytes, a length-prefixed string, the padding to the next
    4-bytes boundary)
 2. a Chunk is a class whose attributes are fields or other chunks, (un)packed
    in the order they are declared

Two main operations are defined for every component:

 1. unpack(): read the binary data from a stream and build the high-level
    representation of it
 2. pack(): encode the high-level representation into binary data

to these we add one more

 3. relayout(): compute offset and size of each component without writing
    anything, the size of a padding depending on where it falls.

Two incompatible revisions of the format exist and nothing in the data tells
which one was used, so the codec always wants it from the caller:

    >>> from i2languages.codec import decode, encode, Revision
    >>> document = decode(data, Revision.V2)
    >>> encode(document, Revision.V2) == data
    True
"""
