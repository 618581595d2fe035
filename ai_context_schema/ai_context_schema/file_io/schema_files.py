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

"""Discovery of context document files."""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = ('.yaml', '.yml')


def find_schema_files(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """Find all context document files in the given paths.

    A file path is taken as-is; directories are searched recursively for
    ``.yaml`` / ``.yml`` files.

    Raises:
        ValidationError: If a given path does not exist
    """
    schema_files: List[Path] = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            raise ValidationError(f"Path does not exist: {path}")

        if path.is_file():
            schema_files.append(path)
        elif path.is_dir():
            for ext in SCHEMA_EXTENSIONS:
                schema_files.extend(p for p in path.rglob(f'*{ext}') if p.is_file())
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(schema_files))
