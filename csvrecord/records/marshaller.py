"""Record marshaller: loads typed records from CSV streams and saves them back.

Two layouts are supported:

* single-record form, one ``field,value[,comment...]`` row per field,
  optionally preceded by ``#`` annotation rows;
* multi-record form, a header row of column names followed by one data row
  per record. Header columns starting with ``#`` are ignored.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Sequence, TextIO, Type, TypeVar

from csvrecord.core.fields import FieldDescriptor, record_fields
from csvrecord.csv_processor.reader import parse_rows
from csvrecord.csv_processor.writer import CSVRowWriter


logger = logging.getLogger(__name__)

T = TypeVar('T')

COMMENT_PREFIX = '#'


def _is_annotation(value: str) -> bool:
    return value.lstrip().startswith(COMMENT_PREFIX)


def _descriptor_map(record_type: type) -> Dict[str, FieldDescriptor]:
    return {descriptor.name: descriptor for descriptor in record_fields(record_type)}


def load_object(stream: TextIO, record: T, strict: bool = False) -> T:
    """Populate a record in place from a single-record CSV document.

    Args:
        stream: Readable text stream
        record: Record instance to update
        strict: Log a warning for every field name the record does not have

    Returns:
        The same record instance

    Raises:
        CSVParseError: If the document has an unterminated quoted field
        CSVConversionError: If a value cannot be coerced; fields set before
            the failing row keep their new values
    """
    descriptors = _descriptor_map(type(record))
    in_header = True
    assigned = 0

    for row in parse_rows(stream):
        if in_header:
            if _is_annotation(row[0]):
                continue
            in_header = False

        if len(row) < 2:
            logger.debug(f"Skipping row without a value: {row!r}")
            continue

        name = row[0].strip()
        descriptor = descriptors.get(name)
        if descriptor is None:
            if strict:
                logger.warning(f"Field '{name}' not found on {type(record).__name__}, ignoring")
            continue

        if descriptor.assign(record, row[1]):
            assigned += 1

    logger.debug(f"Loaded {assigned} fields into {type(record).__name__}")
    return record


def load_objects(stream: TextIO, record_type: Type[T], strict: bool = False) -> List[T]:
    """Load one record per data row from a multi-record CSV document.

    Args:
        stream: Readable text stream
        record_type: Record class; must be constructible with no arguments
        strict: Log a warning for header columns the record does not have

    Returns:
        Records in input order (empty for an empty document)

    Raises:
        CSVParseError: If the document has an unterminated quoted field
        CSVConversionError: If a value cannot be coerced
    """
    descriptors = _descriptor_map(record_type)
    rows = parse_rows(stream)

    header = next(rows, None)
    if header is None:
        return []

    # Column index -> descriptor, for columns that map onto a field
    columns: List[Optional[FieldDescriptor]] = []
    for name in (column.strip() for column in header):
        if name.startswith(COMMENT_PREFIX):
            columns.append(None)
            continue
        descriptor = descriptors.get(name)
        if descriptor is None and strict:
            logger.warning(f"Column '{name}' not found on {record_type.__name__}, ignoring")
        columns.append(descriptor)

    records = []
    for row in rows:
        record = record_type()
        for descriptor, value in zip(columns, row):
            if descriptor is not None:
                descriptor.assign(record, value, skip_blank=True)
        records.append(record)

    logger.debug(f"Loaded {len(records)} {record_type.__name__} records")
    return records


def _value_row(record: Any, descriptors: Sequence[FieldDescriptor]) -> List[str]:
    return [descriptor.stringify(descriptor.get(record)) for descriptor in descriptors]


def save_object(record: Any, stream: TextIO) -> None:
    """Write a record in single-record form, one field per line.

    Args:
        record: Record instance to save
        stream: Writable text stream
    """
    writer = CSVRowWriter(stream)
    for descriptor in record_fields(type(record)):
        writer.write_row([descriptor.name, descriptor.stringify(descriptor.get(record))])


def save_objects(records: Iterable[Any], stream: TextIO,
                 record_type: Optional[type] = None) -> None:
    """Write records in multi-record form: a header row, then one row each.

    Args:
        records: Records to save, all of the same shape
        stream: Writable text stream
        record_type: Record class; defaults to the type of the first record.
            With no records and no record_type nothing is written.
    """
    records = list(records)
    if record_type is None:
        if not records:
            logger.debug("No records and no record type, nothing to save")
            return
        record_type = type(records[0])

    descriptors = record_fields(record_type)
    writer = CSVRowWriter(stream)
    writer.write_row([descriptor.name for descriptor in descriptors])
    for record in records:
        writer.write_row(_value_row(record, descriptors))

    logger.debug(f"Saved {len(records)} {record_type.__name__} records")
