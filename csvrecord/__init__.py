"""csvrecord

Loads typed records from CSV text and saves them back, in either a
one-field-per-line layout for a single record or a header-plus-rows layout
for many records.
"""

from csvrecord.core.exceptions import (
    CSVRecordError,
    CSVParseError,
    CSVConversionError,
    ConfigurationError,
    RecordTypeError,
)
from csvrecord.core.fields import FieldDescriptor, FieldKind, record_fields, register_record
from csvrecord.records.marshaller import load_object, load_objects, save_object, save_objects

__version__ = "0.1.0"
__description__ = "Typed record marshalling to and from CSV text"

__all__ = [
    'CSVRecordError', 'CSVParseError', 'CSVConversionError', 'ConfigurationError',
    'RecordTypeError', 'FieldDescriptor', 'FieldKind', 'record_fields', 'register_record',
    'load_object', 'load_objects', 'save_object', 'save_objects',
]
