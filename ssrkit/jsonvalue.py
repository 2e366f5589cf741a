"""The tree of values produced by the JSON parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class JsonType(Enum):
    """The kind of a parsed JSON value."""

    NONE = 0
    OBJECT = 1
    ARRAY = 2
    INTEGER = 3
    DOUBLE = 4
    STRING = 5
    BOOLEAN = 6
    NULL = 7


@dataclass
class JsonValue:
    """A parsed JSON value.

    Objects hold a list of ``(name, JsonValue)`` pairs in document order,
    arrays a list of ``JsonValue``; scalars hold the Python value.
    """

    type: JsonType = JsonType.NONE
    value: Any = None
    parent: "JsonValue | None" = field(default=None, compare=False, repr=False)

    def __getitem__(self, key: int | str) -> "JsonValue":
        """Look up an array index or object member; missing gives JSON_VALUE_NONE."""
        if isinstance(key, bool):
            return JSON_VALUE_NONE
        if isinstance(key, int):
            if self.type is not JsonType.ARRAY or not 0 <= key < len(self.value):
                return JSON_VALUE_NONE
            return self.value[key]
        if isinstance(key, str) and self.type is JsonType.OBJECT:
            return next((item for name, item in self.value if name == key),
                        JSON_VALUE_NONE)
        return JSON_VALUE_NONE

    def __len__(self) -> int:
        if self.type in (JsonType.ARRAY, JsonType.OBJECT, JsonType.STRING):
            return len(self.value)
        return 0

    def __str__(self) -> str:
        return self.value if self.type is JsonType.STRING else ""

    def __int__(self) -> int:
        if self.type is JsonType.INTEGER:
            return self.value
        if self.type is JsonType.DOUBLE:
            return int(self.value)
        return 0

    def __float__(self) -> float:
        if self.type in (JsonType.INTEGER, JsonType.DOUBLE):
            return float(self.value)
        return 0.0

    def __bool__(self) -> bool:
        return self.type is JsonType.BOOLEAN and bool(self.value)

    def to_python(self) -> Any:
        """Convert to plain dicts, lists, strings, numbers, booleans and None."""
        if self.type is JsonType.OBJECT:
            return {name: item.to_python() for name, item in self.value}
        if self.type is JsonType.ARRAY:
            return [item.to_python() for item in self.value]
        if self.type in (JsonType.NONE, JsonType.NULL):
            return None
        if self.type is JsonType.BOOLEAN:
            return bool(self.value)
        return self.value


JSON_VALUE_NONE = JsonValue()