'''
# First revision

The terms have no description, the flags are a fixed block of 16 bytes preceded
by the number of languages, and the list of the touched languages is reduced to
its size. The file ends with a word whose meaning is unknown.
'''
from ..core import Chunk
from .. import fields
from ..properties import Dependency
from ..document import (
    LEGACY_FLAGS_SIZE,
    LEGACY_TRAILER_SIZE,
    FileDocument,
    Term,
    TermType,
    OnMissingTranslation,
    AllowUnloadingLanguages,
)
from .common import (
    HeaderChunk,
    GlobalFlagsChunk,
    LanguageCodeChunk,
    RemoteSyncChunk,
    LanguageSourceMixin,
)


class TermV1(Chunk):
    model = Term

    key                  = fields.AlignedStringField()
    term_type            = fields.StructField('I', enum=TermType)
    languages_count      = fields.StructField('i')
    languages            = fields.ArrayField(fields.AlignedStringField(), n=Dependency('.languages_count'))
    flags_languages      = fields.StructField('I')
    flags                = fields.StringField(LEGACY_FLAGS_SIZE)
    languages_touch_size = fields.StructField('I')

    def from_python(self, obj):
        super().from_python(obj)
        self.flags_languages.value = len(self.languages)

    def validate(self):
        if self.flags_languages.value != self.languages_count.value:
            self.logger.warning(
                f'term \'{self.key.value}\' declares {self.flags_languages.value} languages for its flags '
                f'instead of {self.languages_count.value}, it will be rewritten')


class LanguageSourceV1(LanguageSourceMixin, Chunk):
    model = FileDocument

    header                    = HeaderChunk()
    header_padding            = fields.AlignmentField()
    global_flags              = GlobalFlagsChunk()
    terms_count               = fields.StructField('i')
    terms                     = fields.ArrayField(TermV1(), n=Dependency('.terms_count'))
    case_insensitive_terms    = fields.StructField('I')
    on_missing_translation    = fields.StructField('I', enum=OnMissingTranslation)
    term_app_name             = fields.AlignedStringField()
    language_table_count      = fields.StructField('i')
    language_table            = fields.ArrayField(LanguageCodeChunk(), n=Dependency('.language_table_count'))
    ignore_device_language    = fields.StructField('I')
    allow_unloading_languages = fields.StructField('I', enum=AllowUnloadingLanguages)
    remote_sync               = RemoteSyncChunk()
    legacy_trailer            = fields.StringField(LEGACY_TRAILER_SIZE)
