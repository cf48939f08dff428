"""Field descriptors for record shapes.

A record shape is described by an ordered table of :class:`FieldDescriptor`
objects. The table is built once per class, either from the class's
dataclass fields or from an explicit :func:`register_record` call, and is
cached for every later load or save.
"""

import dataclasses
import re
import types
import typing
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Type

from csvrecord.core.exceptions import CSVConversionError, RecordTypeError


class FieldKind(Enum):
    """Declared type of a record field."""
    STRING = 'string'
    INT = 'int'
    FLOAT = 'float'
    ENUM = 'enum'
    BOOL = 'bool'


_INT_PATTERN = re.compile(r'[+-]?[0-9]+')
_FLOAT_PATTERN = re.compile(
    r'[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)',
    re.IGNORECASE,
)

_KIND_BY_TYPE = {
    str: FieldKind.STRING,
    int: FieldKind.INT,
    float: FieldKind.FLOAT,
    bool: FieldKind.BOOL,
}


@dataclass(frozen=True)
class EnumTable:
    """Bidirectional name/member table for an enum-typed field."""
    enum_type: Type[Enum]
    by_name: Dict[str, Enum]
    by_member: Dict[Enum, str]

    @classmethod
    def from_enum(cls, enum_type: Type[Enum]) -> 'EnumTable':
        """Build the table from an Enum class.

        Aliases resolve to their canonical member on load; a member always
        saves under its canonical name.
        """
        by_name = dict(enum_type.__members__)
        by_member = {member: member.name for member in enum_type}
        return cls(enum_type=enum_type, by_name=by_name, by_member=by_member)

    def lookup(self, name: str) -> Enum:
        return self.by_name[name]

    def name_of(self, member: Enum) -> str:
        return self.by_member[member]


def _attribute_getter(name: str) -> Callable[[Any], Any]:
    def getter(record: Any) -> Any:
        return getattr(record, name)
    return getter


def _attribute_setter(name: str) -> Callable[[Any, Any], None]:
    def setter(record: Any, value: Any) -> None:
        setattr(record, name, value)
    return setter


@dataclass(frozen=True)
class FieldDescriptor:
    """Static metadata for one named, typed slot on a record shape."""
    name: str
    kind: FieldKind
    enum_table: Optional[EnumTable] = None
    getter: Optional[Callable[[Any], Any]] = field(default=None, compare=False, repr=False)
    setter: Optional[Callable[[Any, Any], None]] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        """Fill in attribute access and validate the enum table."""
        if self.kind is FieldKind.ENUM and self.enum_table is None:
            raise RecordTypeError(f"Enum field '{self.name}' needs an enum table")
        if self.getter is None:
            object.__setattr__(self, 'getter', _attribute_getter(self.name))
        if self.setter is None:
            object.__setattr__(self, 'setter', _attribute_setter(self.name))

    @classmethod
    def for_attribute(cls, name: str, kind: FieldKind,
                      enum_type: Optional[Type[Enum]] = None) -> 'FieldDescriptor':
        """Create a descriptor reading and writing the attribute ``name``.

        Args:
            name: Attribute name, also used as the CSV field/column name
            kind: Declared type of the field
            enum_type: Enum class, required when kind is ENUM

        Returns:
            FieldDescriptor instance
        """
        enum_table = EnumTable.from_enum(enum_type) if enum_type is not None else None
        return cls(name=name, kind=kind, enum_table=enum_table)

    def get(self, record: Any) -> Any:
        return self.getter(record)

    def set(self, record: Any, value: Any) -> None:
        self.setter(record, value)

    def coerce(self, raw: str) -> Any:
        """Convert raw CSV text into this field's declared type.

        Args:
            raw: Unconverted token from the CSV row

        Returns:
            Typed value

        Raises:
            CSVConversionError: If the text is not valid for the declared type
        """
        if self.kind is FieldKind.STRING:
            return raw

        text = raw.strip()
        # ASCII digits only; int() and float() also take underscores and Unicode digits
        if self.kind is FieldKind.INT:
            if not _INT_PATTERN.fullmatch(text):
                raise CSVConversionError(self.name, raw, self._expected())
            return int(text, 10)
        if self.kind is FieldKind.FLOAT:
            if not _FLOAT_PATTERN.fullmatch(text):
                raise CSVConversionError(self.name, raw, self._expected())
            return float(text)
        if self.kind is FieldKind.ENUM:
            try:
                return self.enum_table.lookup(text)
            except KeyError:
                raise CSVConversionError(self.name, raw, self._expected()) from None

        lowered = text.lower()
        if lowered == 'true':
            return True
        if lowered == 'false':
            return False
        raise CSVConversionError(self.name, raw, self._expected())

    def assign(self, record: Any, raw: str, skip_blank: bool = False) -> bool:
        """Coerce ``raw`` and store it on ``record``.

        Args:
            record: Record instance to update
            raw: Unconverted token from the CSV row
            skip_blank: Leave a non-string field untouched when ``raw`` is
                blank instead of failing the conversion

        Returns:
            True if the field was set

        Raises:
            CSVConversionError: If the text is not valid for the declared type
        """
        if skip_blank and self.kind is not FieldKind.STRING and not raw.strip():
            return False
        self.set(record, self.coerce(raw))
        return True

    def stringify(self, value: Any) -> str:
        """Render a field value as CSV text (before quoting)."""
        if value is None:
            return ''
        if self.kind is FieldKind.STRING:
            return str(value)
        if self.kind is FieldKind.INT:
            return str(int(value))
        if self.kind is FieldKind.FLOAT:
            # repr gives the shortest text that round-trips, e.g. 300.2
            text = repr(float(value))
            return text[:-2] if text.endswith('.0') else text
        if self.kind is FieldKind.ENUM:
            try:
                return self.enum_table.name_of(value)
            except (KeyError, TypeError):
                raise CSVConversionError(self.name, repr(value), self._expected()) from None
        return 'True' if value else 'False'

    def _expected(self) -> str:
        if self.kind is FieldKind.ENUM:
            return self.enum_table.enum_type.__name__
        return self.kind.value


_REGISTRY: Dict[type, Tuple[FieldDescriptor, ...]] = {}


def _check_unique(record_type: type, descriptors: Sequence[FieldDescriptor]) -> None:
    seen = set()
    for descriptor in descriptors:
        if descriptor.name in seen:
            raise RecordTypeError(
                f"Duplicate field name '{descriptor.name}' on {record_type.__name__}"
            )
        seen.add(descriptor.name)


def _unwrap_optional(hint: Any) -> Any:
    """Return X for Optional[X], otherwise the hint unchanged."""
    origin = typing.get_origin(hint)
    if origin is typing.Union or origin is getattr(types, 'UnionType', None):
        args = [arg for arg in typing.get_args(hint) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return hint


def _kind_for(record_type: type, name: str, hint: Any) -> Tuple[FieldKind, Optional[Type[Enum]]]:
    hint = _unwrap_optional(hint)
    if isinstance(hint, type) and issubclass(hint, Enum):
        return FieldKind.ENUM, hint
    kind = _KIND_BY_TYPE.get(hint)
    if kind is None:
        raise RecordTypeError(
            f"Field '{name}' on {record_type.__name__} has unsupported type {hint!r}"
        )
    return kind, None


def _build_from_dataclass(record_type: type) -> Tuple[FieldDescriptor, ...]:
    if not dataclasses.is_dataclass(record_type):
        raise RecordTypeError(
            f"{record_type.__name__} is not a dataclass and has no registered fields"
        )
    hints = typing.get_type_hints(record_type)
    descriptors = []
    for dc_field in dataclasses.fields(record_type):
        kind, enum_type = _kind_for(record_type, dc_field.name, hints[dc_field.name])
        descriptors.append(FieldDescriptor.for_attribute(dc_field.name, kind, enum_type))
    return tuple(descriptors)


def register_record(record_type: type, descriptors: Sequence[FieldDescriptor]) -> None:
    """Register an explicit descriptor table for a record class.

    Args:
        record_type: Class whose instances are loaded and saved
        descriptors: Field descriptors in save order

    Raises:
        RecordTypeError: If two descriptors share a name
    """
    _check_unique(record_type, descriptors)
    _REGISTRY[record_type] = tuple(descriptors)


def record_fields(record_type: type) -> Tuple[FieldDescriptor, ...]:
    """Get the descriptor table for a record class, building it on first use.

    Args:
        record_type: Registered class or dataclass

    Returns:
        Descriptors in declaration order

    Raises:
        RecordTypeError: If the class cannot be described
    """
    descriptors = _REGISTRY.get(record_type)
    if descriptors is None:
        descriptors = _build_from_dataclass(record_type)
        _REGISTRY[record_type] = descriptors
    return descriptors
