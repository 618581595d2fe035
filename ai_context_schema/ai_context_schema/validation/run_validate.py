#!/usr/bin/env python3
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

"""CLI entry point for validating context schema documents."""

import argparse
import json
import sys
from dataclasses import replace
from typing import List, Optional

from ..config import validator_config
from ..exceptions import ContextSchemaError
from ..file_io.schema_files import find_schema_files
from ..utils.source_location import SourceLocation, format_source
from .report import BatchValidation
from .schema_validator import SchemaValidator


def _where(file_path, issue) -> str:
    if issue.line is None:
        return ""
    return format_source(SourceLocation(file_path=file_path, line=issue.line, column=issue.column))


def print_results(
    batch: BatchValidation,
    verbose: bool = False,
    show_warnings: bool = False,
    platform: Optional[str] = None,
) -> None:
    """Print validation results in human-readable form.

    With *platform*, the detailed section only lists documents declaring that
    platform; files that could not be parsed are always listed.
    """
    summary = batch.summary

    print("\n=== Validation Summary ===")
    print(f"Total files: {summary.total}")
    print(f"Valid: {summary.valid}")
    print(f"Invalid: {summary.invalid}")
    print(f"Errors: {summary.errors}")
    print(f"Warnings: {summary.warnings}")

    if summary.invalid > 0 or verbose:
        print("\n=== Detailed Results ===")

        for result in batch.results:
            if result.valid and not verbose:
                continue
            if platform and result.document is not None and platform not in result.document.platforms:
                continue

            print(f"\n📄 {result.file_path}")
            print(f"Status: {'✅ Valid' if result.valid else '❌ Invalid'}")

            if result.document is not None:
                print(f"ID: {result.document.id}")
                print(f"Title: {result.document.title}")
                print(f"Version: {result.document.version}")

            if result.errors:
                print("\nErrors:")
                for error in result.errors:
                    print(f"  ❌ {error.type}: {error.message}{_where(result.file_path, error)}")
                    if error.path:
                        print(f"     Path: {error.path}")

            if show_warnings and result.warnings:
                print("\nWarnings:")
                for warning in result.warnings:
                    print(f"  ⚠️  {warning.type}: {warning.message}{_where(result.file_path, warning)}")
                    if warning.path:
                        print(f"     Path: {warning.path}")

    if summary.error_types:
        print("\n=== Error Types ===")
        for error_type, count in summary.error_types.items():
            print(f"{error_type}: {count}")

    if show_warnings and summary.warning_types:
        print("\n=== Warning Types ===")
        for warning_type, count in summary.warning_types.items():
            print(f"{warning_type}: {count}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the schema validator CLI."""
    parser = argparse.ArgumentParser(
        description='Validate AI context schema documents',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        'target',
        help='Schema file or directory to validate',
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output results as JSON',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show detailed output for every file',
    )
    parser.add_argument(
        '--warnings',
        action='store_true',
        help='Show warnings in addition to errors',
    )
    parser.add_argument(
        '--schema',
        default=None,
        help='JSON Schema definition to validate against (default: bundled schema)',
    )
    parser.add_argument(
        '--platform',
        default=None,
        help='Only show details for documents declaring this platform',
    )

    args = parser.parse_args(argv)

    config = validator_config
    if args.json:
        # Keep stdout machine-readable.
        config = replace(config, log_level='WARNING')
    config.set_logging()

    try:
        file_paths = find_schema_files([args.target])
        validator = SchemaValidator(config, schema_path=args.schema)
    except ContextSchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if not file_paths:
        print("No schema files found", file=sys.stderr)
        sys.exit(1)

    if not args.json:
        print(f"Validating {len(file_paths)} schema file(s)...")

    batch = validator.validate_files(file_paths)

    if args.json:
        print(json.dumps(batch.to_dict(), indent=2, default=str))
    else:
        print_results(batch, verbose=args.verbose, show_warnings=args.warnings, platform=args.platform)

    # Exit with error code if validation failed
    sys.exit(1 if batch.summary.invalid > 0 else 0)


if __name__ == '__main__':
    main()
