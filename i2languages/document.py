'''
# Document model

Typed in-memory representation of a decoded localization container. It is the
only thing the project and interchange layers see: raw bytes never leave the
codec.

The enumerated fields hold a member of their enum or, when the file contained
a value the enum doesn't know and the decoding was lenient, the raw integer.
Integers given for known values are converted to the members on construction.
'''
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


HEADER_BLOB_SIZE = 0x1C
LEGACY_FLAGS_SIZE = 0x10
LEGACY_TRAILER_SIZE = 0x04


class TermType(Enum):
    TEXT             = 0
    FONT             = 1
    TEXTURE          = 2
    AUDIO_CLIP       = 3
    GAME_OBJECT      = 4
    SPRITE           = 5
    MATERIAL         = 6
    CHILD            = 7
    MESH             = 8
    TEXTMESHPRO_FONT = 9
    OBJECT           = 10
    VIDEO            = 11


class OnMissingTranslation(Enum):
    EMPTY        = 0
    FALLBACK     = 1
    SHOW_WARNING = 2
    SHOW_TERM    = 3


class AllowUnloadingLanguages(Enum):
    NEVER             = 0
    ONLY_IN_DEVICE    = 1
    EDITOR_AND_DEVICE = 2


class UpdateFrequency(Enum):
    ALWAYS          = 0
    NEVER           = 1
    DAILY           = 2
    WEEKLY          = 3
    MONTHLY         = 4
    ONLY_ONCE       = 5
    EVERY_OTHER_DAY = 6


class UpdateSynchronization(Enum):
    MANUAL                = 0
    ON_SCENE_LOADED       = 1
    AS_SOON_AS_DOWNLOADED = 2


def enum_to_int(value: Union[Enum, int]) -> int:
    return value.value if isinstance(value, Enum) else value


def int_to_enum(enum, value: int) -> Union[Enum, int]:
    '''Inverse of enum_to_int(), unknown values are kept as they are.'''
    try:
        return enum(value)
    except ValueError:
        return value


@dataclass
class Header:
    unknown_blob: bytes = b'\x00' * HEADER_BLOB_SIZE
    name: str = ''


@dataclass
class GlobalFlags:
    agrees_on_scene: int = 0
    agrees_in_plugins_folder: int = 0
    live_sync_up_to_date: int = 0


@dataclass
class Term:
    '''A key with its translation for each language of the table, in the same order.

    "description" and "languages_touch" exist only in the second revision,
    "languages_touch_size" only in the first one.'''
    key: str = ''
    term_type: Union[TermType, int] = TermType.TEXT
    description: str = ''
    languages: List[str] = field(default_factory=list)
    flags: bytes = b'\x00' * LEGACY_FLAGS_SIZE
    languages_touch: List[str] = field(default_factory=list)
    languages_touch_size: int = 0

    def __post_init__(self):
        self.term_type = int_to_enum(TermType, self.term_type)


@dataclass
class LanguageCode:
    code: str = ''
    name: str = ''
    flags: int = 0


@dataclass
class RemoteSyncConfig:
    webservice_url: str = ''
    spreadsheet_key: str = ''
    spreadsheet_name: str = ''
    last_updated_version: str = ''
    update_frequency: Union[UpdateFrequency, int] = UpdateFrequency.ALWAYS
    in_editor_check_frequency: int = 0
    update_synchronization: Union[UpdateSynchronization, int] = UpdateSynchronization.MANUAL
    update_delay: int = 0

    def __post_init__(self):
        self.update_frequency = int_to_enum(UpdateFrequency, self.update_frequency)
        self.update_synchronization = int_to_enum(UpdateSynchronization, self.update_synchronization)


@dataclass
class AssetRef:
    file_id: int = 0
    path_id: int = 0


@dataclass
class FileDocument:
    header: Header = field(default_factory=Header)
    global_flags: GlobalFlags = field(default_factory=GlobalFlags)
    terms: List[Term] = field(default_factory=list)
    case_insensitive_terms: int = 0
    on_missing_translation: Union[OnMissingTranslation, int] = OnMissingTranslation.EMPTY
    term_app_name: str = ''
    language_table: List[LanguageCode] = field(default_factory=list)
    ignore_device_language: int = 0
    allow_unloading_languages: Union[AllowUnloadingLanguages, int] = AllowUnloadingLanguages.NEVER
    remote_sync: RemoteSyncConfig = field(default_factory=RemoteSyncConfig)
    assets: List[AssetRef] = field(default_factory=list)
    legacy_trailer: bytes = b'\x00' * LEGACY_TRAILER_SIZE

    def __post_init__(self):
        self.on_missing_translation = int_to_enum(OnMissingTranslation, self.on_missing_translation)
        self.allow_unloading_languages = int_to_enum(AllowUnloadingLanguages, self.allow_unloading_languages)

    @property
    def language_codes(self) -> List[str]:
        return [_.code for _ in self.language_table]

    def inconsistent_terms(self) -> List[Term]:
        '''Terms that don't have exactly one translation for each language.'''
        n_languages = len(self.language_table)

        return [_ for _ in self.terms if len(_.languages) != n_languages]

    def get_term(self, key: str) -> Term:
        for term in self.terms:
            if term.key == key:
                return term

        raise KeyError(key)

    def translation(self, key: str, code: str) -> str:
        return self.get_term(key).languages[self.language_codes.index(code)]
