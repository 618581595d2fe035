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

"""JSON Schema loader for context document validation."""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

import jsonschema
from jsonschema.exceptions import SchemaError

from .. import SCHEMA_FORMAT_VERSION
from ..exceptions import SchemaLoadError
from ..utils.format_version import parse_format_version

logger = logging.getLogger(__name__)

SCHEMA_FILE_NAME = "context_schema.json"

# resolved schema path -> loaded definition
_SCHEMA_CACHE: Dict[str, dict] = {}


def get_schema_dir() -> Path:
    """Directory holding one sub-directory per bundled schema version."""
    return Path(__file__).parent.parent / "schema"


def get_schema_path(version: str) -> Path:
    """Bundled definition file for *version* (which may not exist)."""
    return get_schema_dir() / version / SCHEMA_FILE_NAME


def resolve_schema_version(version: str) -> str:
    """Map a requested format version to a bundled one.

    An exact match wins. Otherwise, within the same major version, the highest
    patch of the same minor is used, then the highest minor. Unparseable
    versions and versions with no bundled major are returned unchanged so that
    loading reports the missing file.
    """
    try:
        parsed_version = parse_format_version(version)
    except ValueError:
        return version

    if get_schema_path(version).exists():
        return version

    available_versions = []
    schema_dir = get_schema_dir()
    for version_dir in schema_dir.iterdir():
        if not version_dir.is_dir():
            continue
        try:
            dir_version = parse_format_version(version_dir.name)
        except ValueError:
            continue
        if dir_version.major == parsed_version.major and (version_dir / SCHEMA_FILE_NAME).exists():
            available_versions.append(dir_version)

    if not available_versions:
        return version

    same_minor_versions = [v for v in available_versions if v.minor == parsed_version.minor]
    if same_minor_versions:
        return str(max(same_minor_versions, key=lambda v: v.patch))

    return str(max(available_versions, key=lambda v: (v.minor, v.patch)))


def load_schema(version: Optional[str] = None, path: Optional[Union[str, Path]] = None) -> dict:
    """Load a JSON Schema definition.

    Args:
        version: Bundled format version to load (defaults to the tool's version)
        path: Explicit schema file; takes precedence over ``version``

    Returns:
        Schema dictionary

    Raises:
        SchemaLoadError: If the schema file doesn't exist or is invalid JSON
    """
    if path is not None:
        schema_path = Path(path)
    else:
        requested = version or SCHEMA_FORMAT_VERSION
        resolved_version = resolve_schema_version(requested)
        schema_path = get_schema_path(resolved_version)
        if resolved_version != requested:
            logger.debug(f"Schema version {requested} resolved to {resolved_version}")

    cache_key = str(schema_path.resolve())
    if cache_key in _SCHEMA_CACHE:
        return _SCHEMA_CACHE[cache_key]

    if not schema_path.exists():
        raise SchemaLoadError(f"Schema file not found: {schema_path}")

    try:
        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON in schema file {schema_path}: {e.msg}") from e
    except OSError as e:
        raise SchemaLoadError(f"Failed to read schema file {schema_path}: {e}") from e

    logger.debug(f"Loaded JSON Schema: {schema_path}")
    _SCHEMA_CACHE[cache_key] = schema

    return schema


def compile_schema(schema: dict) -> jsonschema.Draft7Validator:
    """Check *schema* against the draft-07 meta-schema and build a reusable validator.

    Raises:
        SchemaLoadError: If the schema itself is not a valid draft-07 schema
    """
    try:
        jsonschema.Draft7Validator.check_schema(schema)
    except SchemaError as e:
        raise SchemaLoadError(f"Invalid JSON Schema definition: {e.message}") from e
    return jsonschema.Draft7Validator(schema, format_checker=jsonschema.FormatChecker())


def clear_cache() -> None:
    """Clear the schema cache. Useful for testing."""
    _SCHEMA_CACHE.clear()
