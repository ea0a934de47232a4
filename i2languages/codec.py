'''
Entry points to convert between the binary container and the document model.

The revision must always be indicated by the caller: the two layouts are not
self-describing and a buffer of one revision can be partially parsed as the
other one without failing immediately, giving garbage instead.
'''
import logging
from enum import Enum

from .enum import Compliant
from .document import FileDocument
from .streams import Stream
from .source import LanguageSourceV1, LanguageSourceV2
from .exceptions import InconsistentLanguageCountError, TrailingDataError


logger = logging.getLogger(__name__)


class Revision(Enum):
    V1 = 1
    V2 = 2

    @property
    def chunk_class(self):
        return _REVISION_TO_CHUNK[self]

    @classmethod
    def from_name(cls, name: str) -> "Revision":
        '''Parse a revision as written by a human: "1", "v1", "legacy", "2" or "v2".'''
        normalized = str(name).strip().lower()
        aliases = {
            '1': cls.V1,
            'v1': cls.V1,
            'legacy': cls.V1,
            '2': cls.V2,
            'v2': cls.V2,
        }

        if normalized not in aliases:
            raise ValueError(f'unknown revision \'{name}\', use one of {", ".join(aliases)}')

        return aliases[normalized]


_REVISION_TO_CHUNK = {
    Revision.V1: LanguageSourceV1,
    Revision.V2: LanguageSourceV2,
}


def decode(data: bytes, revision: Revision, compliant: Compliant = Compliant.NONE) -> FileDocument:
    '''Build the document from the binary data using the layout of the given revision.

    With Compliant.ENUM the unknown enum values raise UnknownEnumValueError instead of
    being kept as integers, with Compliant.EOF data left after the end of the
    structure raises TrailingDataError instead of being discarded.'''
    if not isinstance(revision, Revision):
        raise TypeError(f'revision must be a Revision, not {revision.__class__.__name__}')

    stream = Stream(data)
    source = revision.chunk_class(compliant=compliant)

    logger.debug('decoding %d bytes as %s' % (len(stream), revision))
    source.unpack(stream)

    remaining = stream.remaining()
    if remaining:
        if compliant & Compliant.EOF:
            raise TrailingDataError(f'{remaining} bytes left after offset {stream.tell()}')

        logger.warning(f'discarding {remaining} bytes after offset {stream.tell()}')

    return source.to_python()


def encode(document: FileDocument, revision: Revision) -> bytes:
    '''Serialize the document with the layout of the given revision.

    The document is only read, the output is built from scratch so that the
    paddings depend only on what is actually written.'''
    if not isinstance(revision, Revision):
        raise TypeError(f'revision must be a Revision, not {revision.__class__.__name__}')

    n_languages = len(document.language_table)
    for idx, term in enumerate(document.terms):
        if len(term.languages) != n_languages:
            raise InconsistentLanguageCountError(
                f'term \'{term.key}\' has {len(term.languages)} translations but there are {n_languages} languages',
                chain=['languages', f'[{idx}]', 'terms'],
            )

    source = revision.chunk_class()
    source.from_python(document)

    logger.debug('encoding %d terms and %d languages as %s' % (len(document.terms), n_languages, revision))

    return source.pack()


def load(path, revision: Revision, compliant: Compliant = Compliant.NONE) -> FileDocument:
    with open(path, 'rb') as f:
        data = f.read()

    return decode(data, revision, compliant=compliant)


def save(document: FileDocument, path, revision: Revision) -> None:
    data = encode(document, revision)

    with open(path, 'wb') as f:
        f.write(data)
