'''
Directory based representation of a document, meant to be edited by hand or
by other tools:

    <path>/
        metadata.json     everything that is not a term nor a language
        terms.json        the terms without their translations
        languages.json    the language table
        locales/
            <code>.json   the translations of a language, by term key

Bytes are stored as base64 strings and the enumerations as integers.
'''
import base64
import json
import logging
from dataclasses import dataclass, field, fields as dataclass_fields
from pathlib import Path
from typing import Any, Dict, List

from .document import (
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
    enum_to_int,
    int_to_enum,
)
from .exceptions import ProjectError


logger = logging.getLogger(__name__)


METADATA_FILENAME = 'metadata.json'
TERMS_FILENAME = 'terms.json'
LANGUAGES_FILENAME = 'languages.json'
LOCALES_DIRNAME = 'locales'

ENUMS = {
    'on_missing_translation': OnMissingTranslation,
    'allow_unloading_languages': AllowUnloadingLanguages,
    'update_frequency': UpdateFrequency,
    'update_synchronization': UpdateSynchronization,
    'term_type': TermType,
}


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode('ascii')


def b64decode(data: str) -> bytes:
    return base64.b64decode(data.encode('ascii'), validate=True)


def _dump(obj, path: Path):
    with path.open('w', encoding='utf-8') as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)


def _load(path: Path):
    try:
        with path.open('r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise ProjectError(f'missing file \'{path}\'') from e
    except json.JSONDecodeError as e:
        raise ProjectError(f'\'{path}\' is not valid JSON: {e}') from e


def _plain(obj) -> Dict[str, Any]:
    '''Flat dictionary from a dataclass, with the enums as integers.'''
    return {_.name: enum_to_int(getattr(obj, _.name)) for _ in dataclass_fields(obj)}


def _build(cls, values: Dict[str, Any]):
    '''Inverse of _plain(): missing entries take the default of the dataclass.'''
    kwargs = {}
    for _field in dataclass_fields(cls):
        if _field.name not in values:
            continue

        value = values[_field.name]
        if _field.name in ENUMS:
            value = int_to_enum(ENUMS[_field.name], value)

        kwargs[_field.name] = value

    return cls(**kwargs)


@dataclass
class Project:
    metadata: Dict[str, Any] = field(default_factory=dict)
    terms: List[Dict[str, Any]] = field(default_factory=list)
    languages: List[Dict[str, Any]] = field(default_factory=list)
    translations: Dict[str, Dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_document(cls, document: FileDocument) -> "Project":
        inconsistent = document.inconsistent_terms()
        if inconsistent:
            raise ProjectError(f'term \'{inconsistent[0].key}\' doesn\'t have a translation for each language')

        translations = {}
        for idx, language in enumerate(document.language_table):
            if language.code in translations:
                raise ProjectError(f'language \'{language.code}\' is present more than once')

            entries = {}
            for term in document.terms:
                if term.key in entries:
                    raise ProjectError(f'term \'{term.key}\' is present more than once')
                entries[term.key] = term.languages[idx]

            translations[language.code] = entries

        metadata = {
            'header_unknown': b64encode(document.header.unknown_blob),
            'header_name': document.header.name,
            **_plain(document.global_flags),
            'case_insensitive_terms': document.case_insensitive_terms,
            'on_missing_translation': enum_to_int(document.on_missing_translation),
            'term_app_name': document.term_app_name,
            'ignore_device_language': document.ignore_device_language,
            'allow_unloading_languages': enum_to_int(document.allow_unloading_languages),
            **_plain(document.remote_sync),
            'assets': [_plain(_) for _ in document.assets],
            'legacy_trailer': b64encode(document.legacy_trailer),
        }

        terms = []
        for term in document.terms:
            terms.append({
                'key': term.key,
                'term_type': enum_to_int(term.term_type),
                'description': term.description,
                'flags': b64encode(term.flags),
                'languages_touch': list(term.languages_touch),
                'languages_touch_size': term.languages_touch_size,
            })

        return cls(
            metadata=metadata,
            terms=terms,
            languages=[_plain(_) for _ in document.language_table],
            translations=translations,
        )

    def reconstruct(self) -> FileDocument:
        '''Rebuild the document: each term gets the translation of every language
        of the table, in the table's order.'''
        metadata = dict(self.metadata)

        try:
            header = Header(
                unknown_blob=b64decode(metadata['header_unknown']),
                name=metadata.get('header_name', ''),
            )
            legacy_trailer = b64decode(metadata['legacy_trailer']) if 'legacy_trailer' in metadata else None
        except (KeyError, ValueError) as e:
            raise ProjectError(f'invalid header in metadata: {e!r}') from e

        languages = [_build(LanguageCode, _) for _ in self.languages]

        terms = []
        for entry in self.terms:
            if 'key' not in entry:
                raise ProjectError(f'term without key: {entry!r}')

            term = _build(Term, {_k: _v for _k, _v in entry.items() if _k != 'flags'})
            if 'flags' in entry:
                try:
                    term.flags = b64decode(entry['flags'])
                except ValueError as e:
                    raise ProjectError(f'invalid flags for term \'{term.key}\': {e}') from e

            for language in languages:
                locale = self.translations.get(language.code)
                if locale is None:
                    raise ProjectError(f'no translations for language \'{language.code}\'')
                if term.key not in locale:
                    raise ProjectError(f'term \'{term.key}\' not found in language \'{language.code}\'')

                term.languages.append(locale[term.key])

            terms.append(term)

        document = _build(FileDocument, {
            _k: _v for _k, _v in metadata.items()
            if _k not in ('header_unknown', 'header_name', 'legacy_trailer', 'assets')
        })
        document.header = header
        document.global_flags = _build(GlobalFlags, metadata)
        document.remote_sync = _build(RemoteSyncConfig, metadata)
        document.assets = [_build(AssetRef, _) for _ in metadata.get('assets', [])]
        if legacy_trailer is not None:
            document.legacy_trailer = legacy_trailer
        document.language_table = languages
        document.terms = terms

        return document

    def save(self, path) -> None:
        path = Path(path)
        locales_path = path / LOCALES_DIRNAME

        # each code names a file inside the locales directory
        for code in self.translations:
            if code in ('', '.', '..') or '/' in code or '\\' in code:
                raise ProjectError(f'language code \'{code}\' cannot be used as a file name')

        locales_path.mkdir(parents=True, exist_ok=True)

        _dump(self.metadata, path / METADATA_FILENAME)
        _dump(self.terms, path / TERMS_FILENAME)
        _dump(self.languages, path / LANGUAGES_FILENAME)

        for code, entries in self.translations.items():
            _dump(entries, locales_path / f'{code}.json')

        logger.info(f'saved {len(self.terms)} terms in {len(self.translations)} languages at \'{path}\'')

    @classmethod
    def open(cls, path) -> "Project":
        path = Path(path)
        locales_path = path / LOCALES_DIRNAME

        if not locales_path.is_dir():
            raise ProjectError(f'\'{path}\' doesn\'t contain the \'{LOCALES_DIRNAME}\' directory')

        translations = {}
        for locale in sorted(locales_path.glob('*.json')):
            translations[locale.stem] = _load(locale)

        return cls(
            metadata=_load(path / METADATA_FILENAME),
            terms=_load(path / TERMS_FILENAME),
            languages=_load(path / LANGUAGES_FILENAME),
            translations=translations,
        )
