'''
Chunks shared by both revisions of the container.
'''
from ..core import Chunk
from .. import fields
from ..document import (
    HEADER_BLOB_SIZE,
    Header,
    GlobalFlags,
    LanguageCode,
    RemoteSyncConfig,
    AssetRef,
    UpdateFrequency,
    UpdateSynchronization,
)


class HeaderChunk(Chunk):
    '''The first 28 bytes have an unknown meaning (probably the reference to
    the game object and the script owning the asset), we keep them as they are.'''
    model = Header

    unknown_blob = fields.StringField(HEADER_BLOB_SIZE)
    name         = fields.AlignedStringField()


class GlobalFlagsChunk(Chunk):
    model = GlobalFlags

    agrees_on_scene          = fields.StructField('I')
    agrees_in_plugins_folder = fields.StructField('I')
    live_sync_up_to_date     = fields.StructField('I')


class LanguageCodeChunk(Chunk):
    model = LanguageCode

    code  = fields.AlignedStringField()
    name  = fields.AlignedStringField()
    flags = fields.StructField('I')


class RemoteSyncChunk(Chunk):
    '''Settings of the spreadsheet the terms can be synchronized with.'''
    model = RemoteSyncConfig

    webservice_url            = fields.AlignedStringField()
    spreadsheet_key           = fields.AlignedStringField()
    spreadsheet_name          = fields.AlignedStringField()
    last_updated_version      = fields.AlignedStringField()
    update_frequency          = fields.StructField('I', enum=UpdateFrequency)
    in_editor_check_frequency = fields.StructField('I')
    update_synchronization    = fields.StructField('I', enum=UpdateSynchronization)
    update_delay              = fields.StructField('I')


class AssetRefChunk(Chunk):
    '''Reference to an object living in another asset file, never interpreted.'''
    model = AssetRef

    file_id = fields.StructField('I')
    path_id = fields.StructField('Q')


class LanguageSourceMixin:

    def validate(self):
        '''Each term should have a translation for each language, we don't fail
        here but the document won't be encodable as it is.'''
        n_languages = self.language_table_count.value
        for term in self.terms:
            if term.languages_count.value != n_languages:
                self.logger.warning(
                    f'term \'{term.key.value}\' has {term.languages_count.value} translations '
                    f'but there are {n_languages} languages')
