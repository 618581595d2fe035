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

"""Custom exceptions for the AI context schema validator."""


class ContextSchemaError(Exception):
    """Base exception for context-schema related errors."""
    pass


class ParseError(ContextSchemaError):
    """Exception raised when a context document cannot be parsed."""
    pass


class FormatError(ParseError):
    """Exception raised when the YAML frontmatter delimiters are missing."""
    pass


class SchemaLoadError(ContextSchemaError):
    """Exception raised when the JSON Schema definition cannot be loaded."""
    pass


class ValidationError(ContextSchemaError):
    """Exception raised for batch-level validation failures."""
    pass
