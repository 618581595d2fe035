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

"""Schema validator for context documents.

Validation of one document runs three passes whose findings accumulate:

1. structural validation against the JSON Schema definition;
2. business rules (dependency cycles, platform field rules, id and version
   format, requires/conflicts disjointness);
3. content heuristics (warnings only).

Batch validation adds a cross-document pass once every document has been
validated: duplicate ids, and existence of ``requires``/``suggests``/
``supersedes`` targets.
"""

import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from ..config import ValidatorConfig
from ..exceptions import ParseError
from ..models.document import ContextDocument, PlatformName
from ..models.json_schema_loader import compile_schema, load_schema
from ..models.parsing.frontmatter_parser import FrontmatterParser
from ..models.yaml_schema import validate_against_schema
from ..utils.format_version import is_semantic_version
from ..utils.source_location import lookup_source
from .dependency_graph import DependencyGraph
from .platform_rules import get_platform_profile
from .report import BatchValidation, Severity, ValidationIssue, ValidationResult, ValidationSummary

logger = logging.getLogger(__name__)

ID_RE = re.compile(r'^[a-z0-9-]+$')

PathLike = Union[str, Path]


class SchemaValidator:
    """Validate context documents against the context schema definition."""

    def __init__(
        self,
        config: Optional[ValidatorConfig] = None,
        schema_path: Optional[PathLike] = None,
        json_schema: Optional[dict] = None,
    ):
        """Load and compile the JSON Schema definition once.

        Args:
            config: Validator settings (defaults to ``ValidatorConfig()``)
            schema_path: Explicit JSON Schema file, overrides the bundled one
            json_schema: Already-loaded JSON Schema, overrides both of the above

        Raises:
            SchemaLoadError: If the schema cannot be loaded or is not valid draft-07
        """
        self.config = config or ValidatorConfig()
        if json_schema is None:
            json_schema = load_schema(self.config.schema_version, schema_path or self.config.schema_path)
        self.json_schema = json_schema
        self.validator = compile_schema(json_schema)
        self.parser = FrontmatterParser()

    # ---- parsing ------------------------------------------------------------

    def parse(self, raw_text: str) -> ContextDocument:
        """Parse document text; raises FormatError / ParseError."""
        return self.parser.parse(raw_text)

    # ---- single document ----------------------------------------------------

    def validate_document(
        self,
        document: ContextDocument,
        source_label: Optional[PathLike] = None,
        graph: Optional[DependencyGraph] = None,
    ) -> ValidationResult:
        """Validate one parsed document.

        Args:
            document: Parsed document
            source_label: File path or other label reported in the result
            graph: Dependency graph of the whole batch; defaults to a graph of
                this document alone

        Returns:
            ValidationResult; ``valid`` is True when no error-severity issue was found
        """
        result = ValidationResult(source_label, document)

        issues: List[ValidationIssue] = []
        issues.extend(self.validate_structure(document))
        issues.extend(self.validate_business_rules(document, graph))
        issues.extend(self.validate_content(document))

        result.add_issues([self._locate(issue, document) for issue in issues])
        return result

    def validate_text(self, raw_text: str, source_label: Optional[PathLike] = None) -> ValidationResult:
        """Parse and validate document text; parse failures become a result entry."""
        try:
            document = self.parse(raw_text)
        except ParseError as e:
            return self._parse_error_result(source_label, e)
        return self.validate_document(document, source_label)

    def validate_file(self, file_path: PathLike) -> ValidationResult:
        """Read, parse and validate one file; never raises for per-file failures."""
        try:
            document = self.parser.parse_file(file_path)
        except ParseError as e:
            return self._parse_error_result(file_path, e)
        return self.validate_document(document, file_path)

    def validate_structure(self, document: ContextDocument) -> List[ValidationIssue]:
        return [
            ValidationIssue(
                type='schema_validation',
                severity=Severity.ERROR,
                path=issue.yaml_path,
                message=f"{issue.yaml_path} {issue.message}" if issue.yaml_path else issue.message,
                data=issue.data,
            )
            for issue in validate_against_schema(document.raw, self.validator)
        ]

    def validate_business_rules(
        self,
        document: ContextDocument,
        graph: Optional[DependencyGraph] = None,
    ) -> List[ValidationIssue]:
        """Validate business rules beyond JSON Schema."""
        issues: List[ValidationIssue] = []

        if graph is None:
            graph = DependencyGraph.from_documents([document])
        cycle = graph.cycle_for(document.id)
        if cycle:
            issues.append(ValidationIssue(
                type='cyclic_dependency',
                severity=Severity.ERROR,
                path='requires',
                message=f"Cyclic dependency detected in requires field (involving: {', '.join(cycle)})",
                data={'cycle': cycle},
            ))

        for name, platform_config in document.platforms.items():
            issues.extend(get_platform_profile(name).check_fields(platform_config, document, self.config))

        raw_id = document.raw.get('id')
        if raw_id and not ID_RE.fullmatch(str(raw_id)):
            issues.append(ValidationIssue(
                type='invalid_id',
                severity=Severity.ERROR,
                path='id',
                message='ID must be kebab-case (lowercase letters, numbers, and hyphens only)',
            ))

        version = document.version
        if version and not is_semantic_version(version):
            issues.append(ValidationIssue(
                type='invalid_version',
                severity=Severity.ERROR,
                path='version',
                message='Version must follow semantic versioning format (e.g., 1.0.0)',
            ))

        issues.extend(self.find_relationship_conflicts(document))
        return issues

    @staticmethod
    def find_relationship_conflicts(document: ContextDocument) -> List[ValidationIssue]:
        """Report ids that are both required and declared as conflicts."""
        conflicts = set(str(c) for c in document.conflicts)
        intersection: List[str] = []
        for required in document.requires:
            required = str(required)
            if required in conflicts and required not in intersection:
                intersection.append(required)

        if not intersection:
            return []
        return [ValidationIssue(
            type='conflicting_relationships',
            severity=Severity.ERROR,
            path='requires/conflicts',
            message=f"Schemas cannot be both required and conflicted: {', '.join(intersection)}",
            data={'ids': intersection},
        )]

    def validate_content(self, document: ContextDocument) -> List[ValidationIssue]:
        """Heuristic content checks; every finding is a warning."""
        issues: List[ValidationIssue] = []
        content = document.content

        if len(content) < self.config.min_content_length:
            issues.append(ValidationIssue(
                type='insufficient_content',
                severity=Severity.WARNING,
                path='content',
                message='Content appears too short to be useful',
            ))

        if '#' not in content:
            issues.append(ValidationIssue(
                type='missing_headers',
                severity=Severity.WARNING,
                path='content',
                message='Content should include markdown headers for organization',
            ))

        if '```' not in content:
            issues.append(ValidationIssue(
                type='missing_examples',
                severity=Severity.WARNING,
                path='content',
                message='Content should include code examples',
            ))

        estimated = document.estimated_size(self.config.size_overhead)
        if estimated > self.config.size_limit and document.is_compatible_with(PlatformName.WINDSURF):
            issues.append(ValidationIssue(
                type='windsurf_size_warning',
                severity=Severity.WARNING,
                path='content',
                message=(
                    f"Content may be too large for Windsurf "
                    f"(estimated {estimated} chars, limit {self.config.size_limit})"
                ),
            ))

        return issues

    # ---- batches ------------------------------------------------------------

    def validate_individually(self, file_paths: Sequence[PathLike]) -> List[ValidationResult]:
        """Parse every file, then validate each document against the batch's dependency graph.

        Relationship targets are not resolved here; see :meth:`validate_files`.
        """
        parsed: List[Union[ContextDocument, ValidationResult]] = []
        for file_path in file_paths:
            try:
                parsed.append(self.parser.parse_file(file_path))
            except ParseError as e:
                logger.debug(f"Failed to parse {file_path}: {e}")
                parsed.append(self._parse_error_result(file_path, e))

        graph = DependencyGraph.from_documents(
            entry for entry in parsed if isinstance(entry, ContextDocument)
        )

        results: List[ValidationResult] = []
        for file_path, entry in zip(file_paths, parsed):
            if isinstance(entry, ValidationResult):
                results.append(entry)
            else:
                results.append(self.validate_document(entry, file_path, graph))
        return results

    def validate_files(self, file_paths: Sequence[PathLike]) -> BatchValidation:
        """Validate several files together.

        Args:
            file_paths: Files to validate

        Returns:
            BatchValidation with one result per input path, in input order
        """
        file_paths = list(file_paths)
        logger.debug(f"Validating {len(file_paths)} schema file(s)")

        results = self.validate_individually(file_paths)

        # Relationship resolution only starts once every document has been validated.
        known: Dict[str, ValidationResult] = {}
        for result in results:
            if result.valid and result.document is not None and result.document.id is not None:
                known.setdefault(result.document.id, result)

        for result in results:
            if result.valid and result.document is not None:
                issues = self.validate_relationships(result.document, known)
                result.add_issues([self._locate(issue, result.document) for issue in issues])

        for result in results:
            if result.document is not None:
                issues = self.find_duplicate_ids(result, results)
                result.add_issues([self._locate(issue, result.document) for issue in issues])

        summary = self.generate_summary(results)
        logger.debug(f"Validated {summary.total} file(s): {summary.valid} valid, {summary.invalid} invalid")
        return BatchValidation(results=results, summary=summary)

    @staticmethod
    def validate_relationships(
        document: ContextDocument,
        known_ids: Dict[str, object],
    ) -> List[ValidationIssue]:
        """Check that relationship targets exist in the batch."""
        issues: List[ValidationIssue] = []

        for required_id in document.requires:
            if str(required_id) not in known_ids:
                issues.append(ValidationIssue(
                    type='missing_dependency',
                    severity=Severity.ERROR,
                    path='requires',
                    message=f"Required schema not found: {required_id}",
                ))

        for suggested_id in document.suggests:
            if str(suggested_id) not in known_ids:
                issues.append(ValidationIssue(
                    type='missing_suggestion',
                    severity=Severity.WARNING,
                    path='suggests',
                    message=f"Suggested schema not found: {suggested_id}",
                ))

        for superseded_id in document.supersedes:
            if str(superseded_id) not in known_ids:
                issues.append(ValidationIssue(
                    type='missing_superseded',
                    severity=Severity.WARNING,
                    path='supersedes',
                    message=f"Superseded schema not found: {superseded_id}",
                ))

        return issues

    @staticmethod
    def find_duplicate_ids(result: ValidationResult, results: Sequence[ValidationResult]) -> List[ValidationIssue]:
        """Report other documents in the batch that declare the same id."""
        if result.document is None or result.document.id is None:
            return []
        doc_id = result.document.id
        others = [
            str(other.file_path)
            for other in results
            if other is not result and other.document is not None and other.document.id == doc_id
        ]
        if not others:
            return []
        return [ValidationIssue(
            type='duplicate_id',
            severity=Severity.ERROR,
            path='id',
            message=f"Schema id '{doc_id}' is also declared in: {', '.join(others)}",
            data={'files': others},
        )]

    @staticmethod
    def generate_summary(results: Sequence[ValidationResult]) -> ValidationSummary:
        return ValidationSummary.from_results(list(results))

    # ---- helpers ------------------------------------------------------------

    @staticmethod
    def _parse_error_result(file_path: Optional[PathLike], error: Exception) -> ValidationResult:
        result = ValidationResult(file_path)
        result.add_issue(ValidationIssue(
            type='parse_error',
            severity=Severity.ERROR,
            path=None,
            message=f"Failed to parse file: {error}",
        ))
        return result

    @staticmethod
    def _locate(issue: ValidationIssue, document: ContextDocument) -> ValidationIssue:
        loc = lookup_source(document.source_map, issue.path)
        if loc.line is None:
            return issue
        return replace(issue, line=loc.line, column=loc.column)
