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

"""Registry of schema documents addressable by uri."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from ..exceptions import ROOT_PATH, SchemaError, SchemaNotFoundError
from .schema_document import SchemaDocument

logger = logging.getLogger(__name__)


class Context:
    """Immutable uri -> schema document registry used to resolve references.

    References are not checked here; they are resolved when a document is
    validated, so schemas may refer to each other in any order.
    When two schemas share a uri the first one registered wins.
    """

    def __init__(self, schemas: Sequence[SchemaDocument] = ()):
        self._schemas = tuple(schemas)

        registry: Dict[str, SchemaDocument] = {}
        for schema in self._schemas:
            if schema.uri is None:
                logger.debug("Schema without uri added to context; it cannot be referenced")
                continue
            if schema.uri in registry:
                logger.warning(f"Duplicate schema uri '{schema.uri}' ignored; keeping the first registration")
                continue
            registry[schema.uri] = schema
            logger.debug(f"Registered schema '{schema.uri}'")

        self._registry: Mapping[str, SchemaDocument] = MappingProxyType(registry)

    @classmethod
    def from_schemas(cls, schemas: Iterable[SchemaDocument]) -> "Context":
        return cls(tuple(schemas))

    @classmethod
    def from_trees(cls, trees: Iterable[Any]) -> "Context":
        """Parse every tree as a schema document and register the results.

        Raises:
            SchemaError: With every document's parse error when any fails.
        """
        schemas: List[SchemaDocument] = []
        errors: List[SchemaError] = []
        for tree in trees:
            try:
                schemas.append(SchemaDocument.from_tree(tree))
            except SchemaError as exc:
                errors.append(exc)

        SchemaError.collect(errors, ROOT_PATH)
        return cls(schemas)

    @property
    def schemas(self) -> Sequence[SchemaDocument]:
        return self._schemas

    @property
    def registry(self) -> Mapping[str, SchemaDocument]:
        return self._registry

    def get_schema(self, uri: str) -> Optional[SchemaDocument]:
        return self._registry.get(uri)

    def require_schema(self, uri: str) -> SchemaDocument:
        """Like :meth:`get_schema` but an unknown uri raises :class:`SchemaNotFoundError`."""
        schema = self.get_schema(uri)
        if schema is None:
            raise SchemaNotFoundError(f"Schema referenced by uri `{uri}` not found in context")
        return schema

    def __contains__(self, uri: object) -> bool:
        return uri in self._registry

    def __len__(self) -> int:
        return len(self._registry)
