"""CSV tokenizer module for csvrecord."""

import io
import logging
from typing import Iterator, List, TextIO

from csvrecord.core.exceptions import CSVParseError


logger = logging.getLogger(__name__)

DELIMITER = ','
QUOTE = '"'


class CSVTokenizer:
    """Splits a character stream into raw rows of string fields.

    Rows are produced lazily and the stream is consumed once. The tokenizer
    never closes the stream it reads from.
    """

    def __init__(self, stream: TextIO):
        """Initialize the tokenizer.

        Args:
            stream: Readable text stream positioned at the start of the document
        """
        self._stream = stream
        self._rows = self._tokenize()
        self.line_num = 0
        self.row_count = 0

    def __iter__(self) -> 'CSVTokenizer':
        return self

    def __next__(self) -> List[str]:
        return next(self._rows)

    def _tokenize(self) -> Iterator[List[str]]:
        """Yield one list of fields per logical line.

        Raises:
            CSVParseError: If a quoted field is still open at end of stream
        """
        fields: List[str] = []
        buf: List[str] = []
        in_quotes = False
        field_started = False
        quote_line = 0

        for line in self._stream:
            self.line_num += 1

            # Outside a quote every physical line starts a new row
            if not in_quotes and not line.strip():
                continue

            i = 0
            n = len(line)
            while i < n:
                ch = line[i]
                if in_quotes:
                    if ch == QUOTE:
                        if i + 1 < n and line[i + 1] == QUOTE:
                            buf.append(QUOTE)
                            i += 2
                            continue
                        in_quotes = False
                    else:
                        buf.append(ch)
                elif ch == DELIMITER:
                    fields.append(''.join(buf))
                    buf = []
                    field_started = False
                elif (ch == ' ' or ch == '\t') and not field_started and not fields:
                    # Row indentation; kept unless a quote opens the field
                    buf.append(ch)
                elif ch == QUOTE and not field_started:
                    buf = []
                    in_quotes = True
                    field_started = True
                    quote_line = self.line_num
                elif ch == '\r' or ch == '\n':
                    break
                else:
                    buf.append(ch)
                    field_started = True
                i += 1

            if in_quotes:
                continue

            fields.append(''.join(buf))
            self.row_count += 1
            yield fields
            fields = []
            buf = []
            field_started = False

        if in_quotes:
            raise CSVParseError("Unterminated quoted field", quote_line)

        logger.debug(f"Tokenized {self.row_count} rows from {self.line_num} lines")


def parse_rows(stream: TextIO) -> Iterator[List[str]]:
    """Lazily tokenize a text stream into raw rows.

    Args:
        stream: Readable text stream

    Returns:
        Iterator over rows; each row is a list of unconverted field strings
    """
    return CSVTokenizer(stream)


def parse_text(text: str) -> List[List[str]]:
    """Tokenize a complete CSV document held in a string."""
    return list(CSVTokenizer(io.StringIO(text)))
