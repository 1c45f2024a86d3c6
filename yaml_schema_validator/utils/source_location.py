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

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..exceptions import ROOT_PATH

# Last ".name" or "[index]" segment of a path.
_LAST_SEGMENT_RE = re.compile(r"(\.[^.\[]*|\[\d+\])$")


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def parent_path(path: str) -> Optional[str]:
    """Return the enclosing path of *path*, or None at the root."""
    if not path or path == ROOT_PATH:
        return None
    parent = _LAST_SEGMENT_RE.sub("", path)
    if parent == path:
        return None
    return parent


def lookup_source(
    source_map: Optional[Dict[str, Dict[str, int]]],
    path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Locate *path* in a source map, falling back to the closest enclosing node."""
    if not source_map or not path:
        return SourceLocation(file_path=file_path, path=path)

    current: Optional[str] = path
    while current is not None:
        entry = source_map.get(current)
        if entry:
            return SourceLocation(
                file_path=file_path,
                path=path,
                line=entry.get("line"),
                column=entry.get("column"),
            )
        current = parent_path(current)

    return SourceLocation(file_path=file_path, path=path)


def format_source(loc: Optional[SourceLocation]) -> str:
    if not loc or loc.file_path is None:
        return ""

    if loc.line is not None and loc.column is not None:
        return f" ({loc.file_path}:{loc.line}:{loc.column})"
    if loc.line is not None:
        return f" ({loc.file_path}:{loc.line})"
    return f" ({loc.file_path})"
