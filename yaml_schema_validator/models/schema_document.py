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

"""Top-level schema documents.

A schema document is a hash with a ``schema`` list of named elements and an
optional ``uri`` under which other schemas can reference it:

    uri: myuri/v1
    schema:
      - name: testproperty
        type: number
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from ..exceptions import ROOT_PATH, MalformedField, SchemaError, join_name
from ..utils.tree_utils import as_str, lookup_optional, strict_contents
from .type_nodes import ObjectNode, TypeNode, parse_fields

if TYPE_CHECKING:
    from .context import Context

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaDocument:
    """A parsed schema, equivalent to an object node that may be addressed by uri."""

    fields: Tuple[Tuple[str, TypeNode], ...] = ()
    uri: Optional[str] = None

    @classmethod
    def from_tree(cls, tree: Any, path: str = ROOT_PATH) -> "SchemaDocument":
        """Parse a schema document from a YAML tree.

        Raises:
            SchemaError: If the tree is not a well-formed schema document.
        """
        if not isinstance(tree, dict):
            raise SchemaError(MalformedField("schema document is not an object"), path)

        contents = strict_contents(tree, ("schema",), ("uri",), path)
        uri = lookup_optional(contents, "uri", "string", as_str, path)
        fields = parse_fields(contents["schema"], join_name(path, "schema"))

        logger.debug(f"Parsed schema document (uri={uri!r}) with {len(fields)} field(s)")
        return cls(fields=fields, uri=uri)

    @classmethod
    def from_str(cls, source: str) -> "SchemaDocument":
        """Parse a single-document YAML string into a schema document."""
        from ..parsers.yaml_parser import yaml_parser

        documents = yaml_parser.load_documents_from_string(source)
        if len(documents) != 1:
            raise SchemaError(
                MalformedField(f"expected exactly one schema document, found {len(documents)}")
            )
        return cls.from_tree(documents[0])

    def as_object(self) -> ObjectNode:
        return ObjectNode(fields=self.fields)

    @property
    def field_names(self) -> List[str]:
        return [name for name, _ in self.fields]

    def validate(self, value: Any, context: Optional["Context"] = None) -> None:
        """Validate a parsed document against this schema. See :func:`validator.validate`."""
        from ..validator import validate

        validate(self, value, context)

    def validate_str(
        self,
        source: str,
        context: Optional["Context"] = None,
        stop_at_first: Optional[bool] = None,
        max_reference_depth: Optional[int] = None,
    ) -> None:
        """Validate every document of a YAML string. See :func:`validator.validate_str`."""
        from ..validator import validate_str

        validate_str(self, source, context, stop_at_first=stop_at_first, max_reference_depth=max_reference_depth)
