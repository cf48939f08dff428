"""CSV writer module for csvrecord."""

import logging
from typing import Iterable, Sequence, TextIO

from csvrecord.csv_processor.reader import DELIMITER, QUOTE


logger = logging.getLogger(__name__)


def quote_value(value: str) -> str:
    """Wrap a value in quotes if it contains the delimiter.

    Only the delimiter triggers quoting; quotes and newlines are written as-is.
    """
    if DELIMITER in value:
        return f'{QUOTE}{value}{QUOTE}'
    return value


def format_row(values: Sequence[str]) -> str:
    """Format one raw row as a CSV line without a line terminator.

    Args:
        values: Field values in column order

    Returns:
        CSV line text
    """
    return DELIMITER.join(quote_value(value) for value in values)


class CSVRowWriter:
    """Writes raw rows to a text stream, newline-separated.

    No newline follows the last row written. The writer does not close the
    stream.
    """

    def __init__(self, stream: TextIO):
        """Initialize CSV row writer.

        Args:
            stream: Writable text stream
        """
        self._stream = stream
        self.rows_written = 0

    def write_row(self, values: Sequence[str]) -> None:
        """Write a single row.

        Args:
            values: Field values in column order
        """
        if self.rows_written:
            self._stream.write('\n')
        self._stream.write(format_row(values))
        self.rows_written += 1

    def write_rows(self, rows: Iterable[Sequence[str]]) -> None:
        """Write several rows in order."""
        for row in rows:
            self.write_row(row)


def write_rows(stream: TextIO, rows: Iterable[Sequence[str]]) -> int:
    """Write rows to a stream.

    Args:
        stream: Writable text stream
        rows: Raw rows to write

    Returns:
        Number of rows written
    """
    writer = CSVRowWriter(stream)
    writer.write_rows(rows)
    logger.debug(f"Wrote {writer.rows_written} rows")
    return writer.rows_written
