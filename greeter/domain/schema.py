"""
Declarative field schemas for event validation.

A Schema is an ordered, immutable collection of FieldSchema entries.
Handlers declare one at module load and hand it to the validator.
"""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldType(Enum):
    """Runtime types a field value may take."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"

    def matches(self, value: Any) -> bool:
        """Check whether a value is an instance of this type."""
        if self is FieldType.STRING:
            return isinstance(value, str)
        if self is FieldType.NUMBER:
            # bool is an int subclass, but never a number here
            return isinstance(value, (int, float)) and not isinstance(value, bool)
        if self is FieldType.BOOLEAN:
            return isinstance(value, bool)
        if self is FieldType.OBJECT:
            return isinstance(value, Mapping)
        return isinstance(value, (list, tuple))


@dataclass(frozen=True)
class FieldSchema:
    """Validation rule for a single field."""

    name: str
    type: FieldType
    required: bool = False
    allowed_values: frozenset | None = None
    nested: "Schema | None" = None
    nullable: bool = False
    min_length: int | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name cannot be empty")
        if self.nested is not None and self.type is not FieldType.OBJECT:
            raise ValueError(f"Field '{self.name}' declares nested rules but is not an object")
        if self.min_length is not None and self.type not in (FieldType.STRING, FieldType.ARRAY):
            raise ValueError(f"Field '{self.name}' declares min_length but is not a string or array")
        if self.allowed_values is not None and not isinstance(self.allowed_values, frozenset):
            object.__setattr__(self, "allowed_values", frozenset(self.allowed_values))

    def allows_null(self) -> bool:
        return self.nullable or (
            self.allowed_values is not None and None in self.allowed_values
        )


@dataclass(frozen=True)
class Schema:
    """Ordered collection of field rules describing a valid event."""

    fields: tuple[FieldSchema, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.fields, tuple):
            object.__setattr__(self, "fields", tuple(self.fields))
        if not self.fields:
            raise ValueError("Schema must declare at least one field")

        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field names in schema: {', '.join(duplicates)}")

    @classmethod
    def of(cls, *fields: FieldSchema) -> "Schema":
        return cls(fields=fields)

    def __iter__(self) -> Iterator[FieldSchema]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)
