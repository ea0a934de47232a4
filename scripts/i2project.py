#!/usr/bin/env python3
'''
Convert between the binary container and the project directory, and bulk edit
the translations of a project.
'''
import os
import sys
import logging

from i2languages.codec import load, save, Revision
from i2languages.exceptions import I2Exception
from i2languages.interchange import export_table, import_table, merge_files
from i2languages.project import Project


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)
logger = logging.getLogger(__name__)


def usage(progname):
    print(f'''usage: {progname} <command> [arguments...]

commands:
  unpack <revision> <file.dat> <directory>    save the container as a project
  pack <revision> <directory> <file.dat>      build the container from a project
  export <directory> <table.csv|table.tsv>    dump the translations as a table
  import <directory> <table.csv|table.tsv>    update the translations from a table
  merge <template.json> <values.json> <output.json>
                                              copy the values with matching keys into the template

The revision is one of 1, v1, legacy, 2, v2.''')
    sys.exit(1)


def unpack(revision, path, directory):
    document = load(path, Revision.from_name(revision))
    Project.from_document(document).save(directory)


def pack(revision, directory, path):
    document = Project.open(directory).reconstruct()
    save(document, path, Revision.from_name(revision))


def export(directory, path):
    export_table(Project.open(directory), path)


def import_(directory, path):
    project = Project.open(directory)
    import_table(project, path)
    project.save(directory)


def merge(template, values, output):
    report = merge_files(template, values, output)
    if not report.is_complete:
        logger.info(f'{len(report.missing)} keys without value, {len(report.unknown)} keys not in the template')


COMMANDS = {
    'unpack': (unpack, 3),
    'pack': (pack, 3),
    'export': (export, 2),
    'import': (import_, 2),
    'merge': (merge, 3),
}


if __name__ == '__main__':
    if len(sys.argv) < 2 or sys.argv[1] not in COMMANDS:
        usage(sys.argv[0])

    command, n_args = COMMANDS[sys.argv[1]]
    args = sys.argv[2:]

    if len(args) != n_args:
        usage(sys.argv[0])

    try:
        command(*args)
    except (I2Exception, ValueError, OSError) as e:
        logger.error(f'{sys.argv[1]} failed: {e}')
        sys.exit(2)
