# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Access helpers for parsed YAML trees.

A tree is what ``yaml.safe_load`` produces: ``dict``, ``list``, ``str``,
``int``, ``float``, ``bool`` or ``None``. Every helper reports failures as
:class:`SchemaError` located at the ``path`` it was given.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional, Sequence, TypeVar

from ..exceptions import (
    ROOT_PATH,
    ExtraField,
    FieldMissing,
    MalformedField,
    SchemaError,
    WrongType,
    join_name,
)

T = TypeVar("T")


class _BadValue:
    """Sentinel for a value that is absent, distinct from YAML null."""

    _instance: Optional["_BadValue"] = None

    def __new__(cls) -> "_BadValue":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "BAD_VALUE"

    def __bool__(self) -> bool:
        return False


BAD_VALUE = _BadValue()

# bool must be matched before int.
_TYPE_NAMES = (
    (bool, "boolean"),
    (int, "integer"),
    (float, "real"),
    (str, "string"),
    (list, "array"),
    (dict, "hash"),
    (type(None), "null"),
    (_BadValue, "bad_value"),
)


def type_to_str(value: Any) -> str:
    """Return a stable human-readable tag for the tree type of *value*."""
    for python_type, name in _TYPE_NAMES:
        if isinstance(value, python_type):
            return name
    return type(value).__name__


# ---- casts ------------------------------------------------------------------
# A cast returns the converted value or None when the value has the wrong type.


def as_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def as_i64(value: Any) -> Optional[int]:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


def as_number(value: Any) -> Optional[float]:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return None


def as_bool(value: Any) -> Optional[bool]:
    return value if isinstance(value, bool) else None


def as_list(value: Any) -> Optional[list]:
    return value if isinstance(value, list) else None


def as_hash(value: Any) -> Optional[dict]:
    return value if isinstance(value, dict) else None


# ---- helpers ----------------------------------------------------------------


def as_type(value: Any, expected: str, cast: Callable[[Any], Optional[T]], path: str = ROOT_PATH) -> T:
    """Apply *cast* to *value*, raising ``WrongType`` when it does not fit."""
    result = cast(value)
    if result is None:
        raise SchemaError(WrongType(expected, type_to_str(value)), path)
    return result


def get_field(tree: Any, field: str) -> Any:
    """Index a hash by key, yielding ``BAD_VALUE`` when the key or the hash is absent."""
    if not isinstance(tree, dict):
        return BAD_VALUE
    return tree.get(field, BAD_VALUE)


def lookup(tree: Any, field: str, expected: str, cast: Callable[[Any], Optional[T]], path: str = ROOT_PATH) -> T:
    """Fetch *field* from a hash and cast it.

    A missing or null field is reported at *path* (the hash itself); a field of
    the wrong type is reported at the field's own path.
    """
    value = get_field(tree, field)
    if value is BAD_VALUE or value is None:
        raise SchemaError(FieldMissing(field), path)
    return as_type(value, expected, cast, join_name(path, field))


def lookup_optional(
    tree: Dict[Any, Any], field: str, expected: str, cast: Callable[[Any], Optional[T]], path: str = ROOT_PATH
) -> Optional[T]:
    """Like :func:`lookup` but an absent field yields None."""
    value = get_field(tree, field)
    if value is BAD_VALUE or value is None:
        return None
    return as_type(value, expected, cast, join_name(path, field))


def strict_contents(
    tree: Any,
    required: Sequence[str],
    optional: Sequence[str] = (),
    path: str = ROOT_PATH,
) -> Dict[Any, Any]:
    """Assert that *tree* is a hash holding all of *required* and nothing beyond *optional*.

    Missing fields are reported first in the order of *required*, then extra
    fields in the hash's own order.
    """
    contents = as_type(tree, "hash", as_hash, path)

    errors = [SchemaError(FieldMissing(field), path) for field in required if field not in contents]
    errors.extend(
        SchemaError(ExtraField(str(key)), path)
        for key in contents
        if key not in required and key not in optional
    )

    SchemaError.collect(errors, path)
    return contents


def check_exclusive_fields(tree: Any, exclusive_keys: Sequence[str], path: str = ROOT_PATH) -> None:
    """Fail when more than one of *exclusive_keys* is present in the hash."""
    contents = as_type(tree, "hash", as_hash, path)

    conflicts = [key for key in exclusive_keys if key in contents]
    if len(conflicts) > 1:
        raise SchemaError(
            MalformedField(f"conflicting constraints: {', '.join(conflicts)} cannot be used at the same time"),
            path,
        )
