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

"""Schema validation package for context documents."""

from pathlib import Path
from typing import List, Optional, Union

from ..config import ValidatorConfig
from ..file_io.schema_files import find_schema_files
from .report import BatchValidation, Severity, ValidationIssue, ValidationResult, ValidationSummary
from .schema_validator import SchemaValidator

__all__ = [
    'validate_paths',
    'SchemaValidator',
    'BatchValidation',
    'Severity',
    'ValidationIssue',
    'ValidationResult',
    'ValidationSummary',
]


def validate_paths(
    paths: List[Union[str, Path]],
    config: Optional[ValidatorConfig] = None,
) -> BatchValidation:
    """Validate every context document found under the given paths.

    Args:
        paths: Files or directories to validate
        config: Optional validator settings

    Returns:
        BatchValidation with one result per discovered file

    Raises:
        ValidationError: If a path does not exist
    """
    validator = SchemaValidator(config)
    return validator.validate_files(find_schema_files(paths))
