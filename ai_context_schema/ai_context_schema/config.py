# Copyright 2025 TIER IV, inc.
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

"""Configuration management for the context schema validator."""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from . import SCHEMA_FORMAT_VERSION
from .utils.logging_utils import configure_cli_logging


@dataclass
class ValidatorConfig:
    """Configuration class for schema validation and compatibility checks."""
    log_level: str = "INFO"
    print_level: str = "WARNING"

    # schema definition
    schema_version: str = SCHEMA_FORMAT_VERSION
    schema_path: Optional[str] = None

    # content heuristics
    min_content_length: int = 50
    size_limit: int = 6000
    size_overhead: int = 200

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv('AI_CONTEXT_SCHEMA_LOG_LEVEL', 'INFO'),
            print_level=os.getenv('AI_CONTEXT_SCHEMA_PRINT_LEVEL', 'WARNING'),
            schema_version=os.getenv('AI_CONTEXT_SCHEMA_SCHEMA_VERSION', SCHEMA_FORMAT_VERSION),
            schema_path=os.getenv('AI_CONTEXT_SCHEMA_SCHEMA_PATH') or None,
            min_content_length=int(os.getenv('AI_CONTEXT_SCHEMA_MIN_CONTENT_LENGTH', '50')),
            size_limit=int(os.getenv('AI_CONTEXT_SCHEMA_SIZE_LIMIT', '6000')),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.WARNING)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_cli_logging(level=level, stderr_level=stderr_level, formatter=formatter)


# Global configuration instance
validator_config = ValidatorConfig.from_env()
