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

"""Constraint nodes of the schema language and their parsers.

A schema element is a hash whose ``type`` key selects the node variant:

    type: string      [min_length, max_length]
    type: number      [min | exclusive_min, max | exclusive_max, integral]
    type: boolean
    type: list        inner
    type: dictionary  [value]
    type: object      fields
    type: reference   uri

Elements inside a ``fields`` list additionally carry a ``name``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from ..exceptions import (
    ROOT_PATH,
    ExtraField,
    MalformedField,
    SchemaError,
    UnknownType,
    join_index,
    join_name,
)
from ..utils.limits import REAL_UNIT, Limit
from ..utils.tree_utils import (
    as_bool,
    as_hash,
    as_i64,
    as_list,
    as_number,
    as_str,
    as_type,
    check_exclusive_fields,
    lookup,
    lookup_optional,
    strict_contents,
)


@dataclass(frozen=True)
class StringNode:
    min_length: Optional[Limit] = None
    max_length: Optional[Limit] = None

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "StringNode":
        _check_element(tree, "string", ("type",), ("min_length", "max_length"), path)

        min_length = _length_limit(tree, "min_length", path)
        max_length = _length_limit(tree, "max_length", path)

        if min_length is not None and max_length is not None and not min_length.has_span(max_length):
            raise SchemaError(
                MalformedField(
                    f"min_length {min_length.value} and max_length {max_length.value} leave no valid string length"
                ),
                path,
            )
        return cls(min_length=min_length, max_length=max_length)


@dataclass(frozen=True)
class NumberNode:
    min: Optional[Limit] = None
    max: Optional[Limit] = None
    integral: bool = False

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "NumberNode":
        _check_element(
            tree,
            "number",
            ("type",),
            ("min", "max", "exclusive_min", "exclusive_max", "integral"),
            path,
        )
        check_exclusive_fields(tree, ("min", "exclusive_min"), path)
        check_exclusive_fields(tree, ("max", "exclusive_max"), path)

        lower = _number_limit(tree, "min", "exclusive_min", path)
        upper = _number_limit(tree, "max", "exclusive_max", path)
        integral = lookup_optional(tree, "integral", "boolean", as_bool, path) or False

        # Real-valued ranges only need some number strictly between exclusive bounds.
        unit = None if integral else REAL_UNIT
        if lower is not None and upper is not None and not lower.has_span(upper, unit):
            raise SchemaError(
                MalformedField(f"lower bound {lower.value} and upper bound {upper.value} leave no valid number"),
                path,
            )
        return cls(min=lower, max=upper, integral=integral)


@dataclass(frozen=True)
class BooleanNode:
    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "BooleanNode":
        _check_element(tree, "boolean", ("type",), (), path)
        return cls()


@dataclass(frozen=True)
class ListNode:
    inner: "TypeNode"

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "ListNode":
        _check_element(tree, "list", ("type", "inner"), (), path)
        return cls(inner=parse_type_node(tree["inner"], join_name(path, "inner")))


@dataclass(frozen=True)
class DictionaryNode:
    # None accepts any value.
    value: Optional["TypeNode"] = None

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "DictionaryNode":
        _check_element(tree, "dictionary", ("type",), ("value",), path)
        if tree.get("value") is None:
            return cls()
        return cls(value=parse_type_node(tree["value"], join_name(path, "value")))


@dataclass(frozen=True)
class ObjectNode:
    fields: Tuple[Tuple[str, "TypeNode"], ...] = ()

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "ObjectNode":
        _check_element(tree, "object", ("type", "fields"), (), path)
        return cls(fields=parse_fields(tree["fields"], join_name(path, "fields")))

    @property
    def field_names(self) -> List[str]:
        return [name for name, _ in self.fields]


@dataclass(frozen=True)
class ReferenceNode:
    uri: str

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "ReferenceNode":
        _check_element(tree, "reference", ("type", "uri"), (), path)
        return cls(uri=lookup(tree, "uri", "string", as_str, path))


TypeNode = Union[StringNode, NumberNode, BooleanNode, ListNode, DictionaryNode, ObjectNode, ReferenceNode]

_PARSERS: Dict[str, Callable[[Any, str], TypeNode]] = {
    "string": StringNode.from_tree,
    "number": NumberNode.from_tree,
    "boolean": BooleanNode.from_tree,
    "list": ListNode.from_tree,
    "dictionary": DictionaryNode.from_tree,
    "object": ObjectNode.from_tree,
    "reference": ReferenceNode.from_tree,
}


def parse_type_node(tree: Any, path: str = ROOT_PATH) -> TypeNode:
    """Parse one schema element into the node variant named by its ``type`` key."""
    if not isinstance(tree, dict):
        raise SchemaError(MalformedField("schema element is not an object"), path)

    type_name = lookup(tree, "type", "string", as_str, path)
    parser = _PARSERS.get(type_name)
    if parser is None:
        raise SchemaError(UnknownType(type_name), join_name(path, "type"))
    return parser(tree, path)


def parse_fields(tree: Any, path: str = ROOT_PATH) -> Tuple[Tuple[str, TypeNode], ...]:
    """Parse a list of named schema elements, reporting every broken element."""
    elements = as_type(tree, "array", as_list, path)

    fields: List[Tuple[str, TypeNode]] = []
    seen = set()
    errors: List[SchemaError] = []
    for index, element in enumerate(elements):
        element_path = join_index(path, index)
        try:
            contents = as_type(element, "hash", as_hash, element_path)
            name = lookup(contents, "name", "string", as_str, element_path)
            if name in seen:
                raise SchemaError(MalformedField(f"duplicate field name '{name}'"), join_name(element_path, "name"))
            node = parse_type_node({k: v for k, v in contents.items() if k != "name"}, element_path)
        except SchemaError as exc:
            errors.append(exc)
            continue
        seen.add(name)
        fields.append((name, node))

    SchemaError.collect(errors, path)
    return tuple(fields)


def _check_element(tree: Any, variant: str, required: Sequence[str], optional: Sequence[str], path: str) -> None:
    if not isinstance(tree, dict):
        raise SchemaError(MalformedField(f"{variant} element is not an object"), path)

    try:
        strict_contents(tree, required, optional, path)
    except SchemaError as exc:
        if any(isinstance(error.kind, ExtraField) for error in exc.flatten()):
            raise SchemaError(
                MalformedField(f"{variant} element contains superfluous elements"), path
            ) from exc
        raise


def _length_limit(tree: Dict[Any, Any], field: str, path: str) -> Optional[Limit]:
    length = lookup_optional(tree, field, "i64", as_i64, path)
    if length is None:
        return None
    if length < 0:
        raise SchemaError(MalformedField("must be a non-negative integer value"), join_name(path, field))
    return Limit.inclusive_of(length)


def _number_limit(tree: Dict[Any, Any], inclusive_key: str, exclusive_key: str, path: str) -> Optional[Limit]:
    value = lookup_optional(tree, inclusive_key, "number", as_number, path)
    if value is not None:
        return Limit.inclusive_of(value)

    value = lookup_optional(tree, exclusive_key, "number", as_number, path)
    if value is not None:
        return Limit.exclusive_of(value)
    return None
