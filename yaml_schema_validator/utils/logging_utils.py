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

import logging
import sys
from typing import IO, Optional, Union

PACKAGE_LOGGER = "yaml_schema_validator"
DEFAULT_FORMAT = "%(name)s - %(levelname)s - %(message)s"

Level = Union[int, str]


def resolve_level(level: Level, default: int) -> int:
    """Turn a level name such as ``"debug"`` (or a numeric level) into a logging level.

    Unknown names fall back to *default*, so a mistyped environment variable
    never stops a validation run.
    """
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else default


class _BelowLevelFilter(logging.Filter):
    """Pass only records strictly below a threshold."""

    def __init__(self, threshold: int) -> None:
        super().__init__()
        self.threshold = threshold

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno < self.threshold


def _stream_handler(
    stream: IO[str], level: int, formatter: logging.Formatter, below: Optional[int] = None
) -> logging.Handler:
    handler = logging.StreamHandler(stream=stream)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    if below is not None:
        handler.addFilter(_BelowLevelFilter(below))
    return handler


def configure_split_stream_logging(
    *,
    level: Level = logging.INFO,
    print_level: Level = logging.ERROR,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Route validator diagnostics to stdout and problems to stderr.

    Records below ``print_level`` (per-document progress, debug traces) go to
    stdout; ``print_level`` and above go to stderr. Root handlers from an
    earlier call are replaced, so repeated CLI runs in one process do not
    print twice.

    Returns:
        The package logger.
    """
    root_level = resolve_level(level, logging.INFO)
    split_level = max(resolve_level(print_level, logging.ERROR), logging.DEBUG)
    formatter = logging.Formatter(fmt)

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    root.addHandler(_stream_handler(sys.stdout, logging.DEBUG, formatter, below=split_level))
    root.addHandler(_stream_handler(sys.stderr, split_level, formatter))

    return logging.getLogger(PACKAGE_LOGGER)
