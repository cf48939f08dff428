"""
CLI commands for csvrecord (Click implementation).
"""

import click
import importlib
import json
import sys
from pathlib import Path

from csvrecord.core.exceptions import CSVRecordError
from csvrecord.core.fields import record_fields
from csvrecord.csv_processor.reader import parse_rows
from csvrecord.records.files import (
    load_object_file,
    load_objects_file,
    save_object_file,
    save_objects_file,
)
from csvrecord.records.frames import records_to_frame


def resolve_record_type(ctx, param, value: str) -> type:
    """Turn a 'package.module:ClassName' reference into a record class."""
    module_name, sep, class_name = value.partition(':')
    if not sep or not module_name or not class_name:
        raise click.BadParameter("expected the form 'package.module:ClassName'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise click.BadParameter(f"cannot import module '{module_name}': {e}")

    record_type = getattr(module, class_name, None)
    if not isinstance(record_type, type):
        raise click.BadParameter(f"'{class_name}' is not a class in '{module_name}'")

    try:
        record_fields(record_type)
    except CSVRecordError as e:
        raise click.BadParameter(str(e))
    return record_type


def _fail(message: str) -> None:
    click.echo(f"❌ Error: {message}", err=True)
    sys.exit(1)


@click.command('rows')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.pass_obj
def dump_rows(config, csv_file: str):
    """Print each raw CSV row as a JSON list."""
    try:
        with open(csv_file, 'r', encoding=config.encoding) as stream:
            for row in parse_rows(stream):
                click.echo(json.dumps(row))
    except (CSVRecordError, UnicodeDecodeError) as e:
        _fail(str(e))


@click.command('show')
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--record', '-r', 'record_type', required=True, callback=resolve_record_type,
              help='Record class as package.module:ClassName')
@click.option('--single', is_flag=True,
              help='Read the file in single-record (field,value) form')
@click.pass_obj
def show_records(config, csv_file: str, record_type: type, single: bool):
    """Load records from a CSV file and print them as a table."""
    try:
        if single:
            records = [load_object_file(csv_file, record_type(), encoding=config.encoding,
                                        strict=config.strict)]
        else:
            records = load_objects_file(csv_file, record_type, encoding=config.encoding,
                                        strict=config.strict)
    except (CSVRecordError, UnicodeDecodeError) as e:
        _fail(str(e))

    frame = records_to_frame(records, record_type)
    if frame.empty:
        click.echo("No records found")
        return
    click.echo(frame.to_string(index=False))


@click.command('convert')
@click.argument('input_file', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_file', type=click.Path(dir_okay=False))
@click.option('--record', '-r', 'record_type', required=True, callback=resolve_record_type,
              help='Record class as package.module:ClassName')
@click.option('--to', 'target', required=True, type=click.Choice(['single', 'multi']),
              help='Layout to write: single (field,value rows) or multi (header + rows)')
@click.pass_obj
def convert_layout(config, input_file: str, output_file: str, record_type: type, target: str):
    """Convert a CSV file between single-record and multi-record layouts."""
    try:
        if target == 'single':
            records = load_objects_file(input_file, record_type, encoding=config.encoding,
                                        strict=config.strict)
            if len(records) != 1:
                _fail(f"Single-record layout needs exactly one record, found {len(records)}")
            save_object_file(records[0], output_file, encoding=config.encoding)
        else:
            record = load_object_file(input_file, record_type(), encoding=config.encoding,
                                      strict=config.strict)
            save_objects_file([record], output_file, encoding=config.encoding)
    except (CSVRecordError, UnicodeDecodeError) as e:
        _fail(str(e))

    click.echo(f"✅ Wrote {target}-record layout to {Path(output_file)}")
