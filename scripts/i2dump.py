#!/usr/bin/env python3
import sys
import os
import logging
from enum import Enum

from i2languages.codec import load, Revision
from i2languages.enum import Compliant
from i2languages.exceptions import I2Exception


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <revision> <file> [strict]

The revision is one of 1, v1, legacy, 2, v2; with "strict" unknown enum values
and trailing data are errors.''')
    sys.exit(1)


def _name(value):
    return value.name if isinstance(value, Enum) else f'{value} (unknown)'


def dump_header(document):
    flags = document.global_flags
    print(f'''Header:
  Name:                              {document.header.name}
  Unknown:                           {document.header.unknown_blob.hex()}
  Agrees on scene:                   {flags.agrees_on_scene}
  Agrees in plugins folder:          {flags.agrees_in_plugins_folder}
  Live sync up to date:              {flags.live_sync_up_to_date}
  Case insensitive terms:            {document.case_insensitive_terms}
  On missing translation:            {_name(document.on_missing_translation)}
  Term app name:                     {document.term_app_name}
  Ignore device language:            {document.ignore_device_language}
  Allow unloading languages:         {_name(document.allow_unloading_languages)}''')


def dump_remote_sync(remote):
    print(f'''Remote sync:
  Webservice URL:                    {remote.webservice_url}
  Spreadsheet key:                   {remote.spreadsheet_key}
  Spreadsheet name:                  {remote.spreadsheet_name}
  Last updated version:              {remote.last_updated_version}
  Update frequency:                  {_name(remote.update_frequency)}
  In editor check frequency:         {remote.in_editor_check_frequency}
  Update synchronization:            {_name(remote.update_synchronization)}
  Update delay:                      {remote.update_delay}''')


def dump_languages(document):
    print(f'Languages ({len(document.language_table)} entries):')
    print('  [Nr] Code       Flags      Name')
    for idx, language in enumerate(document.language_table):
        print(f'  [{idx: >2d}] {language.code:<10} 0x{language.flags:08x} {language.name}')


def dump_terms(document):
    codes = document.language_codes
    print(f'Terms ({len(document.terms)} entries):')
    for term in document.terms:
        print(f'  {term.key} [{_name(term.term_type)}] flags={term.flags.hex()}')
        if term.description:
            print(f'    # {term.description}')
        for code, text in zip(codes, term.languages):
            print(f'    {code:<10} {text!r}')


def dump_assets(document):
    print(f'Assets ({len(document.assets)} entries):')
    for asset in document.assets:
        print(f'  file_id={asset.file_id} path_id=0x{asset.path_id:016x}')


if __name__ == '__main__':
    if len(sys.argv) < 3:
        usage(sys.argv[0])

    try:
        revision = Revision.from_name(sys.argv[1])
    except ValueError as e:
        logger.error(e)
        usage(sys.argv[0])

    path = sys.argv[2]
    compliant = Compliant.STRICT if sys.argv[3:4] == ['strict'] else Compliant.NONE

    try:
        document = load(path, revision, compliant=compliant)
    except I2Exception as e:
        logger.error(f'failed to decode \'{path}\': {e}')
        sys.exit(2)

    dump_header(document)
    dump_remote_sync(document.remote_sync)
    dump_languages(document)
    dump_terms(document)
    if revision == Revision.V2:
        dump_assets(document)
