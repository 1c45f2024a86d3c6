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

"""Runtime configuration for the yaml schema validator."""

import os
import logging
from dataclasses import dataclass

from .utils.logging_utils import configure_split_stream_logging

ENV_PREFIX = "YAML_SCHEMA_VALIDATOR_"


def _env(name: str, default: str) -> str:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


@dataclass
class ValidatorConfig:
    """Configuration class for validation runs."""
    log_level: str = "INFO"
    print_level: str = "ERROR"
    max_reference_depth: int = 64
    stop_at_first_failure: bool = True
    cache_enabled: bool = False

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=_env('LOG_LEVEL', 'INFO'),
            print_level=_env('PRINT_LEVEL', 'ERROR'),
            max_reference_depth=int(_env('MAX_REFERENCE_DEPTH', '64')),
            stop_at_first_failure=_env('STOP_AT_FIRST_FAILURE', 'true').lower() == 'true',
            cache_enabled=_env('CACHE_ENABLED', 'false').lower() == 'true',
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        return configure_split_stream_logging(level=self.log_level, print_level=self.print_level)


# Global configuration instance
validator_config = ValidatorConfig.from_env()
