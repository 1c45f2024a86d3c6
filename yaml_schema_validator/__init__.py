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

"""Validate YAML documents against schemas written in YAML.

Usage:
    from yaml_schema_validator import Context, SchemaDocument

    context = Context.from_schemas([SchemaDocument.from_str(person_schema)])
    schema = context.require_schema("person/v1")
    schema.validate_str(document_text, context)
"""

from .exceptions import (
    ContextRequiredError,
    DocumentLoadError,
    SchemaError,
    SchemaNotFoundError,
    YamlValidatorError,
)
from .models import (
    BooleanNode,
    Context,
    DictionaryNode,
    ListNode,
    NumberNode,
    ObjectNode,
    ReferenceNode,
    SchemaDocument,
    StringNode,
    parse_type_node,
)
from .utils.limits import Limit
from .validator import validate, validate_documents, validate_str

__version__ = "0.1.0"
__all__ = [
    "BooleanNode",
    "Context",
    "ContextRequiredError",
    "DictionaryNode",
    "DocumentLoadError",
    "Limit",
    "ListNode",
    "NumberNode",
    "ObjectNode",
    "ReferenceNode",
    "SchemaDocument",
    "SchemaError",
    "SchemaNotFoundError",
    "StringNode",
    "YamlValidatorError",
    "parse_type_node",
    "validate",
    "validate_documents",
    "validate_str",
    "__version__",
]
