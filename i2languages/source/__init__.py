'''
# I2 Languages source

Binary dump of the asset holding the localization of a game: the list of the
terms with a translation for each language, the languages themselves and
the settings of the localization system (fallbacks, spreadsheet synchronization).

All the integers are little-endian, the strings are prefixed by their length and
followed by the padding to the 4-bytes boundary.

Two revisions of the format exist and nothing in the data tells them apart,
see v1 and v2 for the differences.
'''
from .common import (
    HeaderChunk,
    GlobalFlagsChunk,
    LanguageCodeChunk,
    RemoteSyncChunk,
    AssetRefChunk,
)
from .v1 import TermV1, LanguageSourceV1
from .v2 import TermV2, LanguageSourceV2
