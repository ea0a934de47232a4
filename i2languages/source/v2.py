'''
# Second revision

The terms gain a description, the flags become a proper array (count, bytes and
padding) and the touched languages are stored as strings. Instead of the unknown
trailing word the file ends with the list of the referenced assets.
'''
from ..core import Chunk
from .. import fields
from ..properties import Dependency
from ..document import (
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
    AssetRefChunk,
    LanguageSourceMixin,
)


class TermV2(Chunk):
    model = Term

    key                   = fields.AlignedStringField()
    term_type             = fields.StructField('I', enum=TermType)
    description           = fields.AlignedStringField()
    languages_count       = fields.StructField('i')
    languages             = fields.ArrayField(fields.AlignedStringField(), n=Dependency('.languages_count'))
    flags_count           = fields.StructField('i')
    flags                 = fields.StringField(Dependency('.flags_count'))
    flags_padding         = fields.AlignmentField()
    languages_touch_count = fields.StructField('i')
    languages_touch       = fields.ArrayField(fields.AlignedStringField(), n=Dependency('.languages_touch_count'))


class LanguageSourceV2(LanguageSourceMixin, Chunk):
    model = FileDocument

    header                    = HeaderChunk()
    header_padding            = fields.AlignmentField()
    global_flags              = GlobalFlagsChunk()
    terms_count               = fields.StructField('i')
    terms                     = fields.ArrayField(TermV2(), n=Dependency('.terms_count'))
    case_insensitive_terms    = fields.StructField('I')
    on_missing_translation    = fields.StructField('I', enum=OnMissingTranslation)
    term_app_name             = fields.AlignedStringField()
    language_table_count      = fields.StructField('i')
    language_table            = fields.ArrayField(LanguageCodeChunk(), n=Dependency('.language_table_count'))
    ignore_device_language    = fields.StructField('I')
    allow_unloading_languages = fields.StructField('I', enum=AllowUnloadingLanguages)
    remote_sync               = RemoteSyncChunk()
    assets_count              = fields.StructField('i')
    assets                    = fields.ArrayField(AssetRefChunk(), n=Dependency('.assets_count'))
