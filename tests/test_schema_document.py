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
    ExtraField,
    FieldMissing,
    MalformedField,
    SchemaError,
    WrongType,
)
from yaml_schema_validator.models.schema_document import SchemaDocument
from yaml_schema_validator.models.type_nodes import (
    DictionaryNode,
    NumberNode,
    ObjectNode,
    StringNode,
)

DIFFERENT_TYPES = """---
schema:
  - name: somestring
    type: string

  - name: counter
    type: number

  - name: somedict
    type: dictionary
    value:
      type: dictionary
      value:
        type: string
  - name: someobject
    type: object
    fields:
      - name: inside1
        type: string
      - name: inside2
        type: number
"""


def test_deserialize_many_types():
    schema = SchemaDocument.from_str(DIFFERENT_TYPES)

    assert schema.uri is None
    assert schema.field_names == ["somestring", "counter", "somedict", "someobject"]
    fields = dict(schema.fields)
    assert fields["counter"] == NumberNode()
    assert fields["somedict"] == DictionaryNode(value=DictionaryNode(value=StringNode()))
    assert fields["someobject"] == ObjectNode(fields=(("inside1", StringNode()), ("inside2", NumberNode())))


def test_load_from_tree():
    for document in yaml.safe_load_all(DIFFERENT_TYPES):
        schema = SchemaDocument.from_tree(document)
        assert len(schema.fields) == 4


def test_uri_is_parsed():
    schema = SchemaDocument.from_str("uri: myuri/v1\nschema:\n  - name: testproperty\n    type: number\n")
    assert schema.uri == "myuri/v1"
    assert schema.as_object() == ObjectNode(fields=(("testproperty", NumberNode()),))


def test_empty_schema_list():
    schema = SchemaDocument.from_tree({"schema": []})
    assert schema.fields == ()


def test_schema_key_is_required():
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_tree({"uri": "a/v1"})
    assert excinfo.value.kind == FieldMissing("schema")


def test_unknown_top_level_key():
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_tree({"schema": [], "version": 2})
    assert excinfo.value.kind == ExtraField("version")


def test_uri_must_be_string():
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_tree({"schema": [], "uri": 12})
    assert str(excinfo.value) == "$.uri: wrong type, expected 'string' got 'integer'"


def test_document_must_be_hash():
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_tree(["schema"])
    assert excinfo.value.kind == MalformedField("schema document is not an object")


def test_schema_must_be_list():
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_tree({"schema": {"name": "a", "type": "string"}})
    assert excinfo.value.kind == WrongType("array", "hash")
    assert excinfo.value.path == "$.schema"


def test_nested_parse_error_path():
    source = """
schema:
  - name: first
    type: string
  - name: second
    type: string
    max_length: hello
"""
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_str(source)
    assert str(excinfo.value) == "$.schema[1].max_length: wrong type, expected 'i64' got 'string'"


def test_from_str_requires_single_document():
    with pytest.raises(SchemaError) as excinfo:
        SchemaDocument.from_str("schema: []\n---\nschema: []\n")
    assert excinfo.value.kind == MalformedField("expected exactly one schema document, found 2")


def test_schema_documents_are_immutable():
    schema = SchemaDocument.from_tree({"schema": []})
    with pytest.raises(AttributeError):
        schema.uri = "changed"
