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

import pytest
import yaml

from yaml_schema_validator.exceptions import (
    FieldMissing,
    MalformedField,
    Multiple,
    SchemaError,
    UnknownType,
    WrongType,
)
from yaml_schema_validator.models.type_nodes import (
    BooleanNode,
    DictionaryNode,
    ListNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    StringNode,
    parse_fields,
    parse_type_node,
)
from yaml_schema_validator.utils.limits import Limit


def load_simple(source):
    return yaml.safe_load(source)


def parse_error(parser, source):
    with pytest.raises(SchemaError) as excinfo:
        parser(load_simple(source))
    return excinfo.value


def test_string_from_integer_is_malformed():
    error = parse_error(StringNode.from_tree, "20")
    assert error.kind == MalformedField("string element is not an object")


def test_string_with_non_integer_max_length():
    error = parse_error(StringNode.from_tree, "type: string\nmax_length: hello\n")
    assert error.kind == WrongType("i64", "string")
    assert error.path == "$.max_length"


def test_string_with_extra_fields():
    error = parse_error(StringNode.from_tree, "type: string\nextra_field: hello\n")
    assert error.kind == MalformedField("string element contains superfluous elements")


def test_string_limits_are_inclusive():
    node = StringNode.from_tree(load_simple("type: string\nmin_length: 10\nmax_length: 20\n"))
    assert node == StringNode(min_length=Limit.inclusive_of(10), max_length=Limit.inclusive_of(20))


def test_string_zero_width_length_span_is_allowed():
    node = StringNode.from_tree(load_simple("type: string\nmin_length: 3\nmax_length: 3\n"))
    assert node.min_length == node.max_length


def test_string_infeasible_length_span():
    error = parse_error(StringNode.from_tree, "type: string\nmin_length: 20\nmax_length: 10\n")
    assert isinstance(error.kind, MalformedField)


def test_string_negative_length():
    error = parse_error(StringNode.from_tree, "type: string\nmin_length: -1\n")
    assert error.kind == MalformedField("must be a non-negative integer value")
    assert error.path == "$.min_length"


def test_number_bounds():
    node = NumberNode.from_tree(load_simple("type: number\nexclusive_min: 0\nmax: 10.5\nintegral: true\n"))
    assert node == NumberNode(min=Limit.exclusive_of(0), max=Limit.inclusive_of(10.5), integral=True)


def test_number_defaults():
    assert NumberNode.from_tree({"type": "number"}) == NumberNode()


def test_number_conflicting_lower_bounds():
    error = parse_error(NumberNode.from_tree, "type: number\nmin: 1\nexclusive_min: 2\n")
    assert error.kind == MalformedField(
        "conflicting constraints: min, exclusive_min cannot be used at the same time"
    )


def test_number_bound_must_be_numeric():
    error = parse_error(NumberNode.from_tree, "type: number\nmax: lots\n")
    assert error.kind == WrongType("number", "string")
    assert error.path == "$.max"


def test_number_integral_must_be_boolean():
    error = parse_error(NumberNode.from_tree, "type: number\nintegral: 'yes'\n")
    assert error.kind == WrongType("boolean", "string")


def test_integral_number_infeasible_exclusive_span():
    error = parse_error(
        NumberNode.from_tree, "type: number\nexclusive_min: 10\nexclusive_max: 11\nintegral: true\n"
    )
    assert error.kind == MalformedField("lower bound 10 and upper bound 11 leave no valid number")


def test_integral_number_exclusive_span_with_room():
    node = NumberNode.from_tree(load_simple("type: number\nexclusive_min: 10\nexclusive_max: 12\nintegral: true\n"))
    assert node.min == Limit.exclusive_of(10)
    assert node.max == Limit.exclusive_of(12)


def test_real_number_exclusive_span_between_integers():
    node = NumberNode.from_tree(load_simple("type: number\nexclusive_min: 0\nexclusive_max: 1\n"))
    assert node == NumberNode(min=Limit.exclusive_of(0), max=Limit.exclusive_of(1))


def test_real_number_empty_exclusive_span():
    error = parse_error(NumberNode.from_tree, "type: number\nexclusive_min: 1\nexclusive_max: 1\n")
    assert isinstance(error.kind, MalformedField)


def test_boolean_has_no_options():
    assert BooleanNode.from_tree({"type": "boolean"}) == BooleanNode()
    error = parse_error(BooleanNode.from_tree, "type: boolean\ndefault: true\n")
    assert error.kind == MalformedField("boolean element contains superfluous elements")


def test_list_requires_inner():
    error = parse_error(ListNode.from_tree, "type: list\n")
    assert error.kind == FieldMissing("inner")
    assert error.path == "$"


def test_list_inner_error_path():
    error = parse_error(ListNode.from_tree, "type: list\ninner:\n  type: string\n  max_length: x\n")
    assert str(error) == "$.inner.max_length: wrong type, expected 'i64' got 'string'"


def test_dictionary_value_is_optional():
    assert DictionaryNode.from_tree({"type": "dictionary"}) == DictionaryNode(value=None)
    node = DictionaryNode.from_tree(load_simple("type: dictionary\nvalue:\n  type: number\n"))
    assert node.value == NumberNode()


def test_object_fields_keep_order():
    node = ObjectNode.from_tree(
        load_simple(
            """
type: object
fields:
  - name: inside1
    type: string
  - name: inside2
    type: number
"""
        )
    )
    assert node.field_names == ["inside1", "inside2"]
    assert node.fields[0] == ("inside1", StringNode())


def test_object_nested_error_path():
    error = parse_error(
        ObjectNode.from_tree,
        """
type: object
fields:
  - name: ok
    type: boolean
  - name: broken
    type: string
    max_length: x
""",
    )
    assert str(error) == "$.fields[1].max_length: wrong type, expected 'i64' got 'string'"


def test_reference_requires_string_uri():
    assert ReferenceNode.from_tree({"type": "reference", "uri": "a/v1"}) == ReferenceNode("a/v1")
    error = parse_error(ReferenceNode.from_tree, "type: reference\nuri: 3\n")
    assert error.kind == WrongType("string", "integer")


def test_unknown_type():
    error = parse_error(parse_type_node, "type: datetime\n")
    assert error.kind == UnknownType("datetime")
    assert error.path == "$.type"


def test_element_without_type():
    error = parse_error(parse_type_node, "max_length: 3\n")
    assert error.kind == FieldMissing("type")


def test_element_must_be_hash():
    error = parse_error(parse_type_node, "- type: string\n")
    assert error.kind == MalformedField("schema element is not an object")


def test_fields_aggregate_errors():
    error = parse_error(
        parse_fields,
        """
- name: a
  type: nope
- type: string
""",
    )
    assert isinstance(error.kind, Multiple)
    assert str(error).splitlines() == [
        "$[0].type: unknown type specified: 'nope'",
        "$[1]: missing field, 'name' not found",
    ]


def test_fields_reject_duplicate_names():
    error = parse_error(
        parse_fields,
        """
- name: a
  type: string
- name: a
  type: number
""",
    )
    assert error.kind == MalformedField("duplicate field name 'a'")
    assert error.path == "$[1].name"
