"""Path-based wrappers around the stream load/save functions.

Each helper opens the file, hands the stream to the marshaller and closes it
again before returning.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Type, TypeVar, Union

from csvrecord.records.marshaller import load_object, load_objects, save_object, save_objects


logger = logging.getLogger(__name__)

T = TypeVar('T')

PathLike = Union[str, Path]


def _input_path(path: PathLike) -> Path:
    input_path = Path(path)
    if not input_path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")
    return input_path


def _output_path(path: PathLike) -> Path:
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    return output_path


def load_object_file(path: PathLike, record: T, encoding: str = 'utf-8',
                     strict: bool = False) -> T:
    """Load a single-record CSV file into ``record``.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    input_path = _input_path(path)
    logger.info(f"Loading {type(record).__name__} from {input_path}")
    with input_path.open('r', encoding=encoding) as stream:
        return load_object(stream, record, strict=strict)


def load_objects_file(path: PathLike, record_type: Type[T], encoding: str = 'utf-8',
                      strict: bool = False) -> List[T]:
    """Load every record from a multi-record CSV file.

    Raises:
        FileNotFoundError: If the file doesn't exist
    """
    input_path = _input_path(path)
    logger.info(f"Loading {record_type.__name__} records from {input_path}")
    with input_path.open('r', encoding=encoding) as stream:
        records = load_objects(stream, record_type, strict=strict)
    logger.info(f"Loaded {len(records)} records from {input_path}")
    return records


def save_object_file(record: Any, path: PathLike, encoding: str = 'utf-8') -> None:
    """Save ``record`` to a file in single-record form."""
    output_path = _output_path(path)
    logger.info(f"Saving {type(record).__name__} to {output_path}")
    with output_path.open('w', encoding=encoding) as stream:
        save_object(record, stream)


def save_objects_file(records: Iterable[Any], path: PathLike, encoding: str = 'utf-8',
                      record_type: Optional[type] = None) -> None:
    """Save ``records`` to a file in multi-record form."""
    records = list(records)
    output_path = _output_path(path)
    logger.info(f"Saving {len(records)} records to {output_path}")
    with output_path.open('w', encoding=encoding) as stream:
        save_objects(records, stream, record_type=record_type)
