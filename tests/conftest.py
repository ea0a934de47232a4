import pytest

from i2languages.document import (
    FileDocument,
    Header,
    GlobalFlags,
    Term,
    TermType,
    LanguageCode,
    RemoteSyncConfig,
    AssetRef,
    OnMissingTranslation,
    AllowUnloadingLanguages,
    UpdateFrequency,
    UpdateSynchronization,
)


@pytest.fixture
def hello_document():
    '''The smallest meaningful document: one language, one term.'''
    return FileDocument(
        language_table=[LanguageCode(code='en', name='English')],
        terms=[Term(key='hello', languages=['Hello'])],
    )


@pytest.fixture
def document():
    return FileDocument(
        header=Header(unknown_blob=bytes(range(0x1c)), name='I2Languages'),
        global_flags=GlobalFlags(agrees_on_scene=1, live_sync_up_to_date=1),
        terms=[
            Term(
                key='menu/start',
                term_type=TermType.TEXT,
                languages=['Start', 'Inizia', 'Démarrer'],
                flags=b'\x00\x01\x00' + b'\x00' * 13,
            ),
            Term(
                key='menu/logo',
                term_type=TermType.SPRITE,
                languages=['logo_en', 'logo_it', ''],
            ),
        ],
        case_insensitive_terms=1,
        on_missing_translation=OnMissingTranslation.FALLBACK,
        term_app_name='Game',
        language_table=[
            LanguageCode(code='en', name='English'),
            LanguageCode(code='it', name='Italian', flags=1),
            LanguageCode(code='fr', name='French'),
        ],
        ignore_device_language=1,
        allow_unloading_languages=AllowUnloadingLanguages.ONLY_IN_DEVICE,
        remote_sync=RemoteSyncConfig(
            webservice_url='https://example.com/exec',
            spreadsheet_key='1a2b3c',
            spreadsheet_name='Localization',
            last_updated_version='7',
            update_frequency=UpdateFrequency.WEEKLY,
            update_synchronization=UpdateSynchronization.ON_SCENE_LOADED,
            update_delay=5,
        ),
    )


@pytest.fixture
def document_v2(document):
    '''Same document with the fields only the second revision carries.'''
    document.terms[0].description = 'label of the start button'
    document.terms[0].languages_touch = ['en', 'it']
    document.terms[1].flags = b'\x02\x00\x00'
    document.assets = [AssetRef(file_id=0, path_id=0x1122334455667788), AssetRef(file_id=3, path_id=7)]

    return document
