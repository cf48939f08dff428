"""CSV processor package for csvrecord."""

from .reader import CSVTokenizer, parse_rows, parse_text
from .writer import CSVRowWriter, format_row, quote_value, write_rows

__all__ = [
    'CSVTokenizer', 'parse_rows', 'parse_text',
    'CSVRowWriter', 'format_row', 'quote_value', 'write_rows',
]
