"""
Custom exceptions for csvrecord.
"""

from typing import Optional


class CSVRecordError(Exception):
    """Base exception for all csvrecord errors."""
    pass


class ConfigurationError(CSVRecordError):
    """Raised when there's an error in configuration loading or validation."""
    pass


class CSVParseError(CSVRecordError):
    """Raised when CSV text cannot be tokenized (e.g. an unterminated quote)."""

    def __init__(self, message: str, line_num: Optional[int] = None):
        if line_num is not None:
            message = f"{message} (line {line_num})"
        super().__init__(message)
        self.line_num = line_num


class CSVConversionError(CSVRecordError):
    """Raised when a raw value cannot be coerced into a field's declared type."""

    def __init__(self, field_name: str, raw_value: str, expected: str):
        super().__init__(
            f"Cannot convert {raw_value!r} for field '{field_name}' to {expected}"
        )
        self.field_name = field_name
        self.raw_value = raw_value
        self.expected = expected


class RecordTypeError(CSVRecordError):
    """Raised when a class cannot be used as a record shape."""
    pass
