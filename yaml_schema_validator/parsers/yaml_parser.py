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

"""YAML document loader with caching and source-location support."""

import yaml
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..config import validator_config
from ..exceptions import DocumentLoadError, ROOT_PATH, join_index, join_name

logger = logging.getLogger(__name__)

SourceMap = Dict[str, Dict[str, int]]

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class TreeLoader(yaml.SafeLoader):
    """Safe loader that keeps dates and times as plain strings."""


TreeLoader.yaml_implicit_resolvers = {
    first_char: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first_char, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


class YamlParser:
    """Loads every document of a YAML stream as a plain Python tree."""

    def __init__(self, cache_enabled: Optional[bool] = None):
        """Initialize YAML parser.

        Args:
            cache_enabled: Whether to enable caching. If None, uses global config.
        """
        self.cache_enabled = cache_enabled if cache_enabled is not None else validator_config.cache_enabled
        self._cache: Dict[Path, List[Any]] = {}
        self._source_cache: Dict[Path, List[SourceMap]] = {}

    @classmethod
    def _build_source_maps(cls, content: str) -> List[SourceMap]:
        """Build, per document, a mapping from ``$``-style paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose_all) so locations are tracked
        without changing the data returned by the loader.
        """
        source_maps: List[SourceMap] = []

        try:
            roots = list(yaml.compose_all(content, Loader=TreeLoader))
        except yaml.YAMLError:
            # Parsing errors are reported by the loader itself.
            return source_maps

        def _record(source_map: SourceMap, path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1, "column": int(mark.column) + 1}

        def _walk(source_map: SourceMap, node, path: str) -> None:
            _record(source_map, path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    _walk(source_map, value_node, join_name(path, key))
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(source_map, item_node, join_index(path, idx))

        for root in roots:
            source_map: SourceMap = {}
            if root is not None:
                _walk(source_map, root, ROOT_PATH)
            source_maps.append(source_map)
        return source_maps

    @staticmethod
    def _load_all(content: str) -> List[Any]:
        return list(yaml.load_all(content, Loader=TreeLoader))

    def _read(self, file_path: Union[str, Path]) -> Tuple[Path, str]:
        path = Path(file_path)

        if not path.exists():
            raise DocumentLoadError(f"File not found: {path}")

        if not path.is_file():
            raise DocumentLoadError(f"Path is not a file: {path}")

        try:
            return path, path.read_bytes().decode("utf-8", errors="replace")
        except OSError as exc:
            raise DocumentLoadError(f"Failed to read file {path}: {exc}")

    def load_documents(self, file_path: Union[str, Path]) -> List[Any]:
        """Load every YAML document from a file.

        Args:
            file_path: Path to YAML file

        Returns:
            Parsed documents, in stream order

        Raises:
            DocumentLoadError: If file cannot be read or parsed
        """
        documents, _ = self.load_documents_with_source(file_path)
        return documents

    def load_documents_with_source(self, file_path: Union[str, Path]) -> Tuple[List[Any], List[SourceMap]]:
        """Load every YAML document from a file and return (documents, source_maps)."""
        path = Path(file_path)

        if self.cache_enabled and path in self._cache:
            logger.debug(f"Loading documents from cache: {path}")
            return self._cache[path], self._source_cache[path]

        path, content = self._read(path)
        logger.debug(f"Loading YAML file: {path}")
        try:
            documents = self._load_all(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML file {path}: {exc}")
        source_maps = self._build_source_maps(content)

        if self.cache_enabled:
            self._cache[path] = documents
            self._source_cache[path] = source_maps

        return documents, source_maps

    def load_documents_from_string(self, content: str) -> List[Any]:
        """Load every YAML document from string content.

        Raises:
            DocumentLoadError: If content cannot be parsed
        """
        try:
            return self._load_all(content)
        except yaml.YAMLError as exc:
            raise DocumentLoadError(f"Failed to parse YAML content: {exc}")

    def load_documents_from_string_with_source(self, content: str) -> Tuple[List[Any], List[SourceMap]]:
        """Load every YAML document from string content and return (documents, source_maps)."""
        return self.load_documents_from_string(content), self._build_source_maps(content)

    def clear_cache(self):
        """Clear the document cache."""
        self._cache.clear()
        self._source_cache.clear()
        logger.debug("Document cache cleared")


# Global parser instance
yaml_parser = YamlParser()
