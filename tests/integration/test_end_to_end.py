"""End-to-end integration tests for csvrecord."""

import io
import logging
import pytest
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from csvrecord.core.config import Config
from csvrecord.records.files import (
    load_object_file,
    load_objects_file,
    save_object_file,
    save_objects_file,
)
from csvrecord.records.frames import frame_to_records, records_to_frame
from csvrecord.records.marshaller import load_object, load_objects, save_object, save_objects
from csvrecord.utils.logging_config import setup_logging, get_logger


class Colour(Enum):
    Red = 1
    Green = 2
    Blue = 3
    Purple = 15


@dataclass
class Item:
    StringField: str = ''
    IntField: int = 0
    FloatField: float = 0.0
    EnumField: Colour = Colour.Red


class TestEndToEndIntegration:
    """End-to-end tests covering load, save and file handling."""

    @pytest.fixture
    def workdir(self):
        """Temporary directory for file-backed tests."""
        with tempfile.TemporaryDirectory() as temp_dir:
            yield Path(temp_dir)

    @pytest.fixture
    def items(self):
        """Records with awkward string content."""
        return [
            Item("Hello there", 123, 300.2, Colour.Blue),
            Item("This,has,commas", 42, 12.123, Colour.Purple),
            Item(" padded ", -7, -75.2, Colour.Green),
        ]

    def test_multi_load_save_load_single(self, items):
        """Test a record loaded from multi form survives single-form save and load."""
        multi = io.StringIO()
        save_objects(items, multi)
        loaded = load_objects(io.StringIO(multi.getvalue()), Item)

        single = io.StringIO()
        save_object(loaded[1], single)
        restored = load_object(io.StringIO(single.getvalue()), Item())

        assert restored.StringField == "This,has,commas"
        assert restored.IntField == 42
        assert restored.FloatField == pytest.approx(12.123)
        assert restored.EnumField is Colour.Purple

    def test_padded_values_round_trip(self, items):
        """Test leading and trailing spaces survive both layouts."""
        single = io.StringIO()
        save_object(items[2], single)
        restored = load_object(io.StringIO(single.getvalue()), Item())

        assert restored.StringField == " padded "

    def test_file_helpers_round_trip(self, workdir, items):
        """Test saving and loading through files in nested directories."""
        multi_path = workdir / 'nested' / 'items.csv'
        single_path = workdir / 'nested' / 'item.csv'

        save_objects_file(items, multi_path)
        save_object_file(items[0], single_path)

        assert load_objects_file(multi_path, Item) == items
        assert load_object_file(single_path, Item()).StringField == "Hello there"
        assert not multi_path.read_text().endswith('\n')

    def test_file_helpers_use_encoding(self, workdir):
        """Test the configured encoding is used on both sides."""
        path = workdir / 'latin.csv'
        save_objects_file([Item("café", 1)], path, encoding='latin-1')

        assert path.read_bytes().splitlines()[1].startswith(b'caf\xe9')
        assert load_objects_file(path, Item, encoding='latin-1')[0].StringField == "café"

    def test_save_objects_file_empty_with_type(self, workdir):
        """Test an empty list writes only the header when the type is known."""
        path = workdir / 'empty.csv'

        save_objects_file([], path, record_type=Item)

        assert path.read_text() == "StringField,IntField,FloatField,EnumField"
        assert load_objects_file(path, Item) == []

    def test_missing_input_file(self, workdir):
        """Test loading from a missing file."""
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            load_objects_file(workdir / 'missing.csv', Item)

        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            load_object_file(workdir / 'missing.csv', Item())

    def test_csv_to_frame_and_back(self, items):
        """Test records pass through CSV text and a DataFrame unchanged."""
        multi = io.StringIO()
        save_objects(items, multi)
        loaded = load_objects(io.StringIO(multi.getvalue()), Item)

        frame = records_to_frame(loaded)

        assert frame_to_records(frame, Item) == loaded

    def test_config_drives_file_helpers(self, workdir, monkeypatch):
        """Test config values feed the file helpers."""
        config_path = workdir / 'config.yaml'
        config_path.write_text("csv:\n  encoding: utf-16\n  strict: true\n")
        monkeypatch.delenv('CSVRECORD_CONFIG', raising=False)
        config = Config(str(config_path))
        path = workdir / 'wide.csv'

        save_objects_file([Item("wide", 2)], path, encoding=config.encoding)
        records = load_objects_file(path, Item, encoding=config.encoding, strict=config.strict)

        assert records[0].StringField == "wide"
        assert path.read_bytes()[:2] in (b'\xff\xfe', b'\xfe\xff')


class TestLoggingConfig:
    """Test logging setup."""

    def teardown_method(self):
        """Restore the package logger."""
        logger = get_logger()
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            handler.close()
        logger.propagate = True
        logger.setLevel(logging.NOTSET)

    def test_console_only_by_default(self):
        """Test no file handler without a log file."""
        logger = setup_logging({'level': 'debug'})

        assert logger.name == 'csvrecord'
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert logger.propagate is False

    def test_file_handler(self, tmp_path):
        """Test a rotating file handler is added for a log file."""
        log_file = tmp_path / 'logs' / 'csvrecord.log'

        logger = setup_logging({'level': 'INFO', 'file': str(log_file)})
        get_logger('csvrecord.records.files').info("hello from the file helpers")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "hello from the file helpers" in log_file.read_text()

    def test_repeated_setup_does_not_duplicate_handlers(self):
        """Test handlers are replaced, not stacked."""
        setup_logging({'level': 'INFO'})
        logger = setup_logging({'level': 'WARNING'})

        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING
