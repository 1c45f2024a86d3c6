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

"""Validation of parsed YAML documents against schema nodes.

Validation walks the schema node and the document side by side. Failures are
raised as :class:`SchemaError`; sibling failures inside a list, dictionary or
object are all collected before raising. References are looked up in the
context when they are reached, never earlier.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Union

from .config import validator_config
from .exceptions import (
    ROOT_PATH,
    ContextRequiredError,
    NumberValidationError,
    ReferenceDepthExceeded,
    ReferenceNotFound,
    SchemaError,
    StringValidationError,
    join_index,
    join_name,
)
from .models.context import Context
from .models.schema_document import SchemaDocument
from .models.type_nodes import (
    BooleanNode,
    DictionaryNode,
    ListNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    StringNode,
    TypeNode,
)
from .parsers.yaml_parser import yaml_parser
from .utils.limits import Limit
from .utils.tree_utils import as_bool, as_hash, as_list, as_number, as_str, as_type, strict_contents

logger = logging.getLogger(__name__)

Validatable = Union[TypeNode, SchemaDocument]


def validate(
    schema: Validatable,
    value: Any,
    context: Optional[Context] = None,
    *,
    max_reference_depth: Optional[int] = None,
) -> None:
    """Validate one parsed document.

    Args:
        schema: A type node or a schema document (validated as an object)
        value: The parsed YAML tree
        context: Registry used to resolve references; required only when a
            reference is reached
        max_reference_depth: Number of nested reference hops allowed;
            defaults to the configured limit. Nesting that exhausts the
            interpreter stack first is reported the same way, with the depth
            reached as the limit.

    Raises:
        SchemaError: If the document does not conform
        ContextRequiredError: If a reference is reached without a context
    """
    limit = validator_config.max_reference_depth if max_reference_depth is None else max_reference_depth
    node = schema.as_object() if isinstance(schema, SchemaDocument) else schema
    _validate_node(node, value, context, ROOT_PATH, 0, limit)


def validate_documents(
    schema: Validatable,
    values: Iterable[Any],
    context: Optional[Context] = None,
    *,
    stop_at_first: Optional[bool] = None,
    max_reference_depth: Optional[int] = None,
) -> None:
    """Validate several parsed documents against the same schema.

    With ``stop_at_first`` the first failing document's error is raised as is;
    otherwise every failure is collected. Defaults to the configured policy.
    ``max_reference_depth`` applies to each document, as in :func:`validate`.
    """
    if stop_at_first is None:
        stop_at_first = validator_config.stop_at_first_failure

    errors: List[SchemaError] = []
    for index, value in enumerate(values):
        try:
            validate(schema, value, context, max_reference_depth=max_reference_depth)
        except SchemaError as exc:
            logger.debug(f"Document {index} failed validation:\n{exc}")
            if stop_at_first:
                raise
            errors.append(exc)
        else:
            logger.debug(f"Document {index} is valid")

    SchemaError.collect(errors)


def validate_str(
    schema: Validatable,
    source: str,
    context: Optional[Context] = None,
    *,
    stop_at_first: Optional[bool] = None,
    max_reference_depth: Optional[int] = None,
) -> None:
    """Parse a (multi-document) YAML string and validate every document in it."""
    documents = yaml_parser.load_documents_from_string(source)
    validate_documents(
        schema, documents, context, stop_at_first=stop_at_first, max_reference_depth=max_reference_depth
    )


def _validate_node(node: TypeNode, value: Any, context: Optional[Context], path: str, depth: int, limit: int) -> None:
    if isinstance(node, StringNode):
        _validate_string(node, value, path)
    elif isinstance(node, NumberNode):
        _validate_number(node, value, path)
    elif isinstance(node, BooleanNode):
        as_type(value, "boolean", as_bool, path)
    elif isinstance(node, ListNode):
        items = as_type(value, "array", as_list, path)
        checks = [(node.inner, item, join_index(path, index)) for index, item in enumerate(items)]
        errors = _collect(checks, context, depth, limit)
        SchemaError.collect(errors, path)
    elif isinstance(node, DictionaryNode):
        contents = as_type(value, "hash", as_hash, path)
        if node.value is None:
            return
        checks = [(node.value, item, join_name(path, key)) for key, item in contents.items()]
        errors = _collect(checks, context, depth, limit)
        SchemaError.collect(errors, path)
    elif isinstance(node, ObjectNode):
        contents = strict_contents(value, node.field_names, (), path)
        checks = [(field_node, contents[name], join_name(path, name)) for name, field_node in node.fields]
        errors = _collect(checks, context, depth, limit)
        SchemaError.collect(errors, path)
    elif isinstance(node, ReferenceNode):
        _validate_reference(node, value, context, path, depth, limit)
    else:
        raise TypeError(f"Internal error: unknown schema node {node!r}")


def _collect(checks, context: Optional[Context], depth: int, limit: int) -> List[SchemaError]:
    errors: List[SchemaError] = []
    for node, value, path in checks:
        try:
            _validate_node(node, value, context, path, depth, limit)
        except SchemaError as exc:
            errors.append(exc)
    return errors


def _validate_string(node: StringNode, value: Any, path: str) -> None:
    length = len(as_type(value, "string", as_str, path))

    too_long = node.max_length is not None and not node.max_length.is_lesser(length)
    too_short = node.min_length is not None and not node.min_length.is_greater(length)

    if too_long:
        raise SchemaError(
            StringValidationError(f"string too long, {_bound('max', node.max_length)}, but string is {length}"),
            path,
        )
    if too_short:
        raise SchemaError(
            StringValidationError(f"string too short, {_bound('min', node.min_length)}, but string is {length}"),
            path,
        )


def _validate_number(node: NumberNode, value: Any, path: str) -> None:
    number = as_type(value, "number", as_number, path)

    if node.integral and isinstance(number, float) and not number.is_integer():
        raise SchemaError(
            NumberValidationError(f"expected an integral value, but number is {number}"),
            path,
        )

    too_large = node.max is not None and not node.max.is_lesser(number)
    too_small = node.min is not None and not node.min.is_greater(number)

    if too_large:
        raise SchemaError(
            NumberValidationError(f"number too large, {_bound('max', node.max)}, but number is {number}"),
            path,
        )
    if too_small:
        raise SchemaError(
            NumberValidationError(f"number too small, {_bound('min', node.min)}, but number is {number}"),
            path,
        )


def _validate_reference(
    node: ReferenceNode, value: Any, context: Optional[Context], path: str, depth: int, limit: int
) -> None:
    if context is None:
        raise ContextRequiredError(
            f"A context is required to resolve the reference to '{node.uri}' at {path}"
        )

    if depth >= limit:
        raise SchemaError(ReferenceDepthExceeded(node.uri, limit), path)

    schema = context.get_schema(node.uri)
    if schema is None:
        raise SchemaError(ReferenceNotFound(node.uri), path)

    try:
        _validate_node(schema.as_object(), value, context, path, depth + 1, limit)
    except RecursionError:
        # Interpreter stack exhausted before the configured limit.
        logger.debug(f"Interpreter recursion limit hit at reference depth {depth} ({path})")
        raise SchemaError(ReferenceDepthExceeded(node.uri, depth), path) from None


def _bound(name: str, limit: Limit) -> str:
    if limit.inclusive:
        return f"{name} is {limit.value}"
    return f"exclusive {name} is {limit.value}"
