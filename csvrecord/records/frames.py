"""Conversion between record lists and pandas DataFrames."""

import logging
from typing import Any, Iterable, List, Optional, Type, TypeVar

import pandas as pd

from csvrecord.core.fields import FieldDescriptor, FieldKind, record_fields
from csvrecord.records.marshaller import COMMENT_PREFIX


logger = logging.getLogger(__name__)

T = TypeVar('T')


def _frame_value(descriptor: FieldDescriptor, value: Any) -> Any:
    if descriptor.kind is FieldKind.ENUM and value is not None:
        return descriptor.enum_table.name_of(value)
    return value


def records_to_frame(records: Iterable[Any], record_type: Optional[type] = None) -> pd.DataFrame:
    """Build a DataFrame with one row per record.

    Args:
        records: Records of a single shape
        record_type: Record class; defaults to the type of the first record

    Returns:
        DataFrame with columns in field declaration order. Enum columns hold
        member names.
    """
    records = list(records)
    if record_type is None:
        if not records:
            return pd.DataFrame()
        record_type = type(records[0])

    descriptors = record_fields(record_type)
    columns = [descriptor.name for descriptor in descriptors]
    rows = [
        [_frame_value(descriptor, descriptor.get(record)) for descriptor in descriptors]
        for record in records
    ]
    return pd.DataFrame(rows, columns=columns)


def _cell_text(descriptor: FieldDescriptor, cell: Any) -> str:
    # Integer columns with missing values come back from pandas as floats
    if descriptor.kind is FieldKind.INT and isinstance(cell, float) and cell.is_integer():
        return str(int(cell))
    return str(cell)


def frame_to_records(frame: pd.DataFrame, record_type: Type[T]) -> List[T]:
    """Create one record per DataFrame row.

    Columns are matched to fields by name as in a multi-record CSV header;
    missing (NaN) cells leave the field at its default.

    Args:
        frame: Source DataFrame
        record_type: Record class; must be constructible with no arguments

    Returns:
        Records in row order

    Raises:
        CSVConversionError: If a cell cannot be coerced
    """
    descriptors = {descriptor.name: descriptor for descriptor in record_fields(record_type)}
    columns = []
    for column in frame.columns:
        name = str(column).strip()
        if name.startswith(COMMENT_PREFIX) or name not in descriptors:
            continue
        columns.append((column, descriptors[name]))

    records = []
    for position in range(len(frame)):
        record = record_type()
        for column, descriptor in columns:
            cell = frame[column].iloc[position]
            if pd.isna(cell):
                continue
            if descriptor.kind is FieldKind.ENUM and isinstance(cell, descriptor.enum_table.enum_type):
                descriptor.set(record, cell)
                continue
            descriptor.assign(record, _cell_text(descriptor, cell), skip_blank=True)
        records.append(record)

    logger.debug(f"Converted {len(records)} DataFrame rows to {record_type.__name__}")
    return records
