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

"""Custom exceptions and the structured error model of the YAML schema validator.

Schema-parsing and document-validation failures are both reported as
:class:`SchemaError`, a path-aware exception wrapping one of the error kinds
below. Caller misuse (no context for a reference, unknown target uri) and
loader failures use their own exception classes so they never get mixed into
a document's error report.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple, Union


class YamlValidatorError(Exception):
    """Base exception for yaml-schema-validator related errors."""
    pass


class ContextRequiredError(YamlValidatorError):
    """Exception raised when a reference is validated without a context."""
    pass


class SchemaNotFoundError(YamlValidatorError):
    """Exception raised when a requested schema uri is not in the context."""
    pass


class DocumentLoadError(YamlValidatorError):
    """Exception raised when a YAML source cannot be read or parsed."""
    pass


# ---- error kinds ------------------------------------------------------------


@dataclass(frozen=True)
class WrongType:
    expected: str
    actual: str

    @property
    def message(self) -> str:
        return f"wrong type, expected '{self.expected}' got '{self.actual}'"


@dataclass(frozen=True)
class FieldMissing:
    field: str

    @property
    def message(self) -> str:
        return f"missing field, '{self.field}' not found"


@dataclass(frozen=True)
class ExtraField:
    field: str

    @property
    def message(self) -> str:
        return f"extra field, '{self.field}' is not allowed"


@dataclass(frozen=True)
class MalformedField:
    detail: str

    @property
    def message(self) -> str:
        return f"malformed field: {self.detail}"


@dataclass(frozen=True)
class UnknownType:
    name: str

    @property
    def message(self) -> str:
        return f"unknown type specified: '{self.name}'"


@dataclass(frozen=True)
class StringValidationError:
    detail: str

    @property
    def message(self) -> str:
        return f"string validation error: {self.detail}"


@dataclass(frozen=True)
class NumberValidationError:
    detail: str

    @property
    def message(self) -> str:
        return f"number validation error: {self.detail}"


@dataclass(frozen=True)
class ReferenceNotFound:
    uri: str

    @property
    def message(self) -> str:
        return f"reference not found, no schema with uri '{self.uri}' in context"


@dataclass(frozen=True)
class ReferenceDepthExceeded:
    uri: str
    limit: int

    @property
    def message(self) -> str:
        return f"reference depth exceeded, limit is {self.limit} while resolving '{self.uri}'"


@dataclass(frozen=True)
class Multiple:
    errors: Tuple["SchemaError", ...]

    @property
    def message(self) -> str:
        return "\n".join(str(error) for error in self.errors)


ErrorKind = Union[
    WrongType,
    FieldMissing,
    ExtraField,
    MalformedField,
    UnknownType,
    StringValidationError,
    NumberValidationError,
    ReferenceNotFound,
    ReferenceDepthExceeded,
    Multiple,
]

ROOT_PATH = "$"


class SchemaError(YamlValidatorError):
    """A structured, path-aware schema or validation failure.

    ``str(error)`` renders ``"<path>: <message>"``. A ``Multiple`` error renders
    every child on its own line, each with the child's own path.
    """

    def __init__(self, kind: ErrorKind, path: str = ROOT_PATH) -> None:
        self.kind = kind
        self.path = path
        super().__init__(str(self))

    def __str__(self) -> str:
        if isinstance(self.kind, Multiple):
            return self.kind.message
        return f"{self.path}: {self.kind.message}"

    def __repr__(self) -> str:
        return f"SchemaError({self.kind!r}, path={self.path!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SchemaError):
            return NotImplemented
        return self.kind == other.kind and self.path == other.path

    def __hash__(self) -> int:
        return hash((self.kind, self.path))

    @property
    def message(self) -> str:
        return self.kind.message

    def flatten(self) -> Iterator["SchemaError"]:
        """Yield leaf errors depth-first, unwrapping nested ``Multiple`` errors."""
        if isinstance(self.kind, Multiple):
            for child in self.kind.errors:
                yield from child.flatten()
        else:
            yield self

    @classmethod
    def collect(cls, errors: Iterable["SchemaError"], path: str = ROOT_PATH) -> None:
        """Raise nothing for no errors, the error itself for one, ``Multiple`` for more."""
        collected: List[SchemaError] = list(errors)
        if not collected:
            return
        if len(collected) == 1:
            raise collected[0]
        raise cls(Multiple(tuple(collected)), path)


def join_name(path: str, name: object) -> str:
    return f"{path}.{name}"


def join_index(path: str, index: int) -> str:
    return f"{path}[{index}]"
