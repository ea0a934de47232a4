import json

import pytest

from i2languages.exceptions import InterchangeError
from i2languages.interchange import (
    export_table,
    import_table,
    merge,
    merge_files,
    MergeReport,
)
from i2languages.project import Project


@pytest.fixture
def project(document):
    return Project.from_document(document)


def test_export_csv(tmp_path, project):
    path = tmp_path / 'table.csv'

    export_table(project, path)

    assert path.read_text(encoding='utf-8').splitlines() == [
        'Key,en,it,fr',
        'menu/start,Start,Inizia,Démarrer',
        'menu/logo,logo_en,logo_it,',
    ]


def test_export_tsv(tmp_path, project):
    path = tmp_path / 'table.tsv'

    export_table(project, path)

    assert path.read_text(encoding='utf-8').splitlines()[0] == 'Key\ten\tit\tfr'


@pytest.mark.parametrize('filename', ['table.csv', 'table.tsv'])
def test_export_import(tmp_path, project, filename):
    path = tmp_path / filename
    export_table(project, path)

    other = Project.from_document(project.reconstruct())
    other.translations['it']['menu/start'] = 'changed'

    assert import_table(other, path) == 2
    assert other.translations == project.translations


def test_import(tmp_path, project):
    path = tmp_path / 'table.csv'
    path.write_text(
        'Key,it,de\n'
        'menu/logo,"logo, italiano",Logo\n',
        encoding='utf-8',
    )

    assert import_table(project, path) == 1

    assert project.translations['it']['menu/logo'] == 'logo, italiano'
    # untouched
    assert project.translations['it']['menu/start'] == 'Inizia'
    assert project.translations['en']['menu/logo'] == 'logo_en'
    assert 'de' not in project.translations


def test_import_w_bom(tmp_path, project):
    path = tmp_path / 'table.csv'
    path.write_bytes('Key,fr\nmenu/logo,logo_fr\n'.encode('utf-8-sig'))

    import_table(project, path)

    assert project.translations['fr']['menu/logo'] == 'logo_fr'


def test_import_unknown_key(tmp_path, project):
    path = tmp_path / 'table.csv'
    path.write_text(
        'Key,en\n'
        'menu/start,Begin\n'
        'menu/quit,Quit\n',
        encoding='utf-8',
    )

    with pytest.raises(InterchangeError) as excinfo:
        import_table(project, path)

    assert 'menu/quit' in str(excinfo.value)
    assert 'record #1' in str(excinfo.value)
    # nothing is applied
    assert project.translations['en']['menu/start'] == 'Start'


def test_import_empty_key(tmp_path, project):
    path = tmp_path / 'table.csv'
    path.write_text('Key,en\n,Begin\n', encoding='utf-8')

    with pytest.raises(InterchangeError):
        import_table(project, path)


def test_import_without_key_column(tmp_path, project):
    path = tmp_path / 'table.csv'
    path.write_text('Term,en\nmenu/start,Begin\n', encoding='utf-8')

    with pytest.raises(InterchangeError):
        import_table(project, path)


def test_merge():
    merged, report = merge({'a': 'X', 'b': 'Y'}, {'a': 'Z'})

    assert merged == {'a': 'Z', 'b': 'Y'}
    assert report == MergeReport(missing=['b'], unknown=[])
    assert not report.is_complete


def test_merge_keeps_template_order():
    merged, report = merge({'b': '1', 'a': '2'}, {'a': 'A', 'b': 'B', 'c': 'C'})

    assert list(merged.items()) == [('b', 'B'), ('a', 'A')]
    assert report.unknown == ['c']


def test_merge_complete():
    _, report = merge({'a': 'X'}, {'a': 'Z'})

    assert report.is_complete


def test_merge_files(tmp_path):
    template = tmp_path / 'template.json'
    values = tmp_path / 'values.json'
    output = tmp_path / 'output.json'

    template.write_text(json.dumps({'a': 'X', 'b': 'Y'}), encoding='utf-8')
    values.write_text(json.dumps({'a': 'Z'}), encoding='utf-8')

    report = merge_files(template, values, output)

    assert json.loads(output.read_text(encoding='utf-8')) == {'a': 'Z', 'b': 'Y'}
    assert report.missing == ['b']


def test_merge_files_not_an_object(tmp_path):
    template = tmp_path / 'template.json'
    values = tmp_path / 'values.json'

    template.write_text('["a"]', encoding='utf-8')
    values.write_text('{}', encoding='utf-8')

    with pytest.raises(InterchangeError):
        merge_files(template, values, tmp_path / 'output.json')


def test_merge_files_missing(tmp_path):
    with pytest.raises(InterchangeError):
        merge_files(tmp_path / 'nope.json', tmp_path / 'nope.json', tmp_path / 'output.json')


def test_export_missing_locale(tmp_path, project):
    del project.translations['en']

    with pytest.raises(InterchangeError):
        export_table(project, tmp_path / 'table.csv')

    assert not (tmp_path / 'table.csv').exists()


def test_export_missing_key(tmp_path, project):
    del project.translations['it']['menu/logo']

    with pytest.raises(InterchangeError) as excinfo:
        export_table(project, tmp_path / 'table.csv')

    assert 'menu/logo' in str(excinfo.value)
