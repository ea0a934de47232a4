'''
Bulk editing of the translations through flat tables and merging of locale files.

The table has a row for each term and a column for each language code,
the first column being the key:

    Key,en,it
    hello,Hello,Ciao

Files with the ".tsv" extension are tab separated, all the others are CSV.
'''
import csv
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from .exceptions import InterchangeError


logger = logging.getLogger(__name__)


KEY_COLUMN = 'Key'


def _dialect_for(path: Path) -> str:
    return 'excel-tab' if path.suffix.lower() == '.tsv' else 'excel'


def export_table(project, path) -> None:
    path = Path(path)
    codes = [_['code'] for _ in project.languages]

    for code in codes:
        if code not in project.translations:
            raise InterchangeError(f'no translations for language \'{code}\'')

        missing = [_['key'] for _ in project.terms if _['key'] not in project.translations[code]]
        if missing:
            raise InterchangeError(f'Key {missing[0]} not found in language {code}')

    with path.open('w', encoding='utf-8', newline='') as f:
        writer = csv.writer(f, dialect=_dialect_for(path))
        writer.writerow([KEY_COLUMN, *codes])

        for term in project.terms:
            key = term['key']
            writer.writerow([key, *[project.translations[_][key] for _ in codes]])

    logger.info(f'exported {len(project.terms)} terms to \'{path}\'')


def import_table(project, path) -> int:
    '''Update the translations of the project with the values in the table.

    The columns not corresponding to a language of the project are ignored; a row
    without key or with a key unknown to the project makes the import fail
    before anything is changed. It returns the number of records read.'''
    path = Path(path)
    updates: List[Tuple[str, str, str]] = []

    with path.open('r', encoding='utf-8-sig', newline='') as f:
        reader = csv.DictReader(f, dialect=_dialect_for(path))

        if reader.fieldnames is None or KEY_COLUMN not in reader.fieldnames:
            raise InterchangeError(f'\'{path}\' has no \'{KEY_COLUMN}\' column')

        skipped = [_ for _ in reader.fieldnames if _ != KEY_COLUMN and _ not in project.translations]
        if skipped:
            logger.warning(f'ignoring columns {", ".join(skipped)}: not languages of the project')

        records = 0
        for idx, record in enumerate(reader):
            records += 1
            key = record.get(KEY_COLUMN)

            for code, value in record.items():
                if code == KEY_COLUMN or code not in project.translations or value is None:
                    continue

                if not key:
                    raise InterchangeError(f'Key is empty in language {code} (record #{idx})')

                if key not in project.translations[code]:
                    raise InterchangeError(f'Key {key} not found in language {code} (record #{idx})')

                updates.append((code, key, value))

    for code, key, value in updates:
        project.translations[code][key] = value

    logger.info(f'imported {len(updates)} translations from \'{path}\'')

    return records


@dataclass
class MergeReport:
    # keys of the template without a value to take
    missing: List[str] = field(default_factory=list)
    # keys with a value but not present in the template
    unknown: List[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.missing and not self.unknown


def merge(template: Dict[str, str], values: Dict[str, str]) -> Tuple[Dict[str, str], MergeReport]:
    '''Copy the values into the template wherever the keys match, useful to migrate
    the translations to a new version of the file. The template's keys and
    their order are kept, the mismatches are only reported.'''
    merged = {_k: values.get(_k, _v) for _k, _v in template.items()}

    report = MergeReport(
        missing=[_ for _ in template if _ not in values],
        unknown=[_ for _ in values if _ not in template],
    )

    if report.missing:
        logger.warning(f'{len(report.missing)} keys of the template have no value: {", ".join(report.missing)}')
    if report.unknown:
        logger.warning(f'{len(report.unknown)} keys are not in the template: {", ".join(report.unknown)}')

    return merged, report


def _load_table(path: Path) -> Dict[str, str]:
    try:
        with path.open('r', encoding='utf-8') as f:
            table = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InterchangeError(f'failed to load \'{path}\': {e}') from e

    if not isinstance(table, dict):
        raise InterchangeError(f'\'{path}\' doesn\'t contain a key/value object')

    return table


def merge_files(template_path, values_path, output_path) -> MergeReport:
    merged, report = merge(_load_table(Path(template_path)), _load_table(Path(values_path)))

    with Path(output_path).open('w', encoding='utf-8') as f:
        json.dump(merged, f, indent=2, ensure_ascii=False)

    return report
