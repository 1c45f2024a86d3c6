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

"""Per-file result container for the command-line validator."""

from pathlib import Path
from typing import Any, Dict, List, Optional


class ValidationReport:
    """Container for validation results for a single file."""

    def __init__(self, file_path: Path):
        """Initialize validation report.

        Args:
            file_path: Path to the file being validated
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.valid_documents: List[int] = []

    @property
    def ok(self) -> bool:
        return not self.errors

    def add_valid(self, document: int):
        self.valid_documents.append(document)

    def add_error(
        self,
        message: str,
        document: Optional[int] = None,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ):
        """Add an error message.

        Args:
            message: Rendered error, ``"<path>: <message>"`` for document errors
            document: Index of the document within the file
            path: Location of the error inside the document
            line: Optional line number where error occurred
            column: Optional column number where error occurred
        """
        error: Dict[str, Any] = {'message': message}
        if document is not None:
            error['document'] = document
        if path is not None:
            error['path'] = path
        if line is not None:
            error['line'] = line
        if column is not None:
            error['column'] = column
        self.errors.append(error)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'valid_documents': self.valid_documents,
            'errors': self.errors,
        }
