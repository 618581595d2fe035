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

"""Issue and result containers for schema validation."""

from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..models.document import ContextDocument


class Severity:
    """Issue severities."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"

    @classmethod
    def get_all(cls) -> List[str]:
        return [cls.ERROR, cls.WARNING, cls.INFO]


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding about a document."""
    type: str
    severity: str
    path: Optional[str]
    message: str
    data: Any = None
    line: Optional[int] = None
    column: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR

    def to_dict(self) -> Dict[str, Any]:
        issue = {
            'type': self.type,
            'severity': self.severity,
            'path': self.path,
            'message': self.message,
        }
        if self.data is not None:
            issue['data'] = self.data
        if self.line is not None:
            issue['line'] = self.line
        if self.column is not None:
            issue['column'] = self.column
        return issue


class ValidationResult:
    """Container for validation results for a single document."""

    def __init__(self, file_path: Union[str, Path, None], document: Optional[ContextDocument] = None):
        """Initialize validation result.

        Args:
            file_path: Path (or label) of the validated document
            document: Parsed document, None if parsing failed
        """
        self.file_path = file_path
        self.document = document
        self.errors: List[ValidationIssue] = []
        self.warnings: List[ValidationIssue] = []

    @property
    def valid(self) -> bool:
        return len(self.errors) == 0

    def add_issue(self, issue: ValidationIssue) -> None:
        """Route an issue by severity; info-level findings are kept with warnings."""
        if issue.is_error:
            self.errors.append(issue)
        else:
            self.warnings.append(issue)

    def add_issues(self, issues: List[ValidationIssue]) -> None:
        for issue in issues:
            self.add_issue(issue)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'valid': self.valid,
            'filePath': str(self.file_path) if self.file_path is not None else None,
            'schema': self.document.to_dict() if self.document is not None else None,
            'errors': [e.to_dict() for e in self.errors],
            'warnings': [w.to_dict() for w in self.warnings],
        }


@dataclass
class ValidationSummary:
    """Aggregate statistics over a batch of validation results."""
    total: int = 0
    valid: int = 0
    invalid: int = 0
    errors: int = 0
    warnings: int = 0
    error_types: Dict[str, int] = field(default_factory=dict)
    warning_types: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def from_results(cls, results: List[ValidationResult]) -> 'ValidationSummary':
        error_types: Counter = Counter()
        warning_types: Counter = Counter()
        for result in results:
            error_types.update(e.type for e in result.errors)
            warning_types.update(w.type for w in result.warnings)

        return cls(
            total=len(results),
            valid=sum(1 for r in results if r.valid),
            invalid=sum(1 for r in results if not r.valid),
            errors=sum(len(r.errors) for r in results),
            warnings=sum(len(r.warnings) for r in results),
            error_types=dict(error_types),
            warning_types=dict(warning_types),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'valid': self.valid,
            'invalid': self.invalid,
            'errors': self.errors,
            'warnings': self.warnings,
            'errorTypes': dict(self.error_types),
            'warningTypes': dict(self.warning_types),
        }


@dataclass
class BatchValidation:
    """Results of validating several documents together."""
    results: List[ValidationResult]
    summary: ValidationSummary

    def to_dict(self) -> Dict[str, Any]:
        return {
            'results': [r.to_dict() for r in self.results],
            'summary': self.summary.to_dict(),
        }
