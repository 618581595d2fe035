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

"""CLI entry point for platform compatibility analysis."""

import argparse
import json
import sys
from dataclasses import replace
from typing import List, Optional

from ..config import validator_config
from ..exceptions import ContextSchemaError
from .checker import CompatibilityChecker
from .report import CompatibilityReport


def print_report(report: CompatibilityReport, verbose: bool = False, platform: Optional[str] = None) -> None:
    """Print a compatibility report in human-readable form."""
    summary = report.summary

    print("\n=== Compatibility Summary ===")
    print(f"Total schemas: {summary.schemas_total}")
    print(f"High compatibility (>=80%): {summary.high_compatibility}")
    print(f"Medium compatibility (50-79%): {summary.medium_compatibility}")
    print(f"Low compatibility (<50%): {summary.low_compatibility}")
    print(f"Issues: {summary.issues_total}")

    print("\n=== Platform Compatibility ===")
    for name, data in report.platforms.items():
        if platform and name != platform:
            continue
        print(f"\n{name}:")
        print(f"  Compatible: {data.compatible}/{data.total} ({data.compatibility_rate}%)")
        print(f"  Declared by: {data.referenced} ({data.referenced_rate}% compatible)")
        if data.features.used:
            print(f"  Features used: {', '.join(data.features.used)}")
        if data.features.limitations:
            print(f"  Limitations: {', '.join(data.features.limitations)}")
        if data.issues:
            print(f"  Issues: {len(data.issues)}")
            if verbose:
                for issue in data.issues:
                    schema_id = (issue.data or {}).get('schema', '')
                    print(f"    [{issue.severity}] {schema_id}: {issue.message}")

    if platform and platform not in report.platforms:
        print(f"\nNo schema declares platform '{platform}'")

    if verbose:
        print("\n=== Schema Scores ===")
        for schema_id, data in report.schemas.items():
            print(f"{schema_id}: {data.score}% ({data.tier})")
            for issue in data.issues:
                print(f"  ⚠️  {issue.message}")

    if summary.issues_by_type:
        print("\n=== Issue Types ===")
        for issue_type, count in summary.issues_by_type.items():
            print(f"{issue_type}: {count}")

    if summary.errors:
        print("\n=== Excluded Files ===")
        for error in summary.errors:
            print(f"  ❌ {error['type']}: {error['filePath']}")
            print(f"     {error['message']}")


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the compatibility checker CLI."""
    parser = argparse.ArgumentParser(
        description='Check cross-platform compatibility of AI context schema documents',
    )
    parser.add_argument(
        'directory',
        help='Directory containing schema files',
    )
    parser.add_argument(
        '--json',
        action='store_true',
        help='Output the full report as JSON',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Show per-issue and per-schema details',
    )
    parser.add_argument(
        '--platform',
        default=None,
        help='Only display results for this platform',
    )

    args = parser.parse_args(argv)

    config = validator_config
    if args.json:
        config = replace(config, log_level='WARNING')
    config.set_logging()

    try:
        checker = CompatibilityChecker(config=config)
        report = checker.check_compatibility(args.directory)
    except ContextSchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    if args.json:
        print(json.dumps(report.to_dict(), indent=2, default=str))
    else:
        print_report(report, verbose=args.verbose, platform=args.platform)

    sys.exit(1 if report.has_errors else 0)


if __name__ == '__main__':
    main()
