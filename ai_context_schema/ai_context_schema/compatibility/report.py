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

"""Result containers for platform compatibility checks."""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..validation.report import Severity, ValidationIssue

HIGH_COMPATIBILITY = 80
MEDIUM_COMPATIBILITY = 50


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when *whole* is 0."""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


@dataclass
class PlatformFeatures:
    supported: List[str] = field(default_factory=list)
    unsupported: List[str] = field(default_factory=list)
    limitations: List[str] = field(default_factory=list)
    used: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'supported': list(self.supported),
            'unsupported': list(self.unsupported),
            'limitations': list(self.limitations),
            'used': list(self.used),
        }


@dataclass
class PlatformCompatibility:
    """Compatibility of the whole corpus with one platform."""
    platform: str
    # number of valid documents in the corpus
    total: int = 0
    compatible: int = 0
    incompatible: int = 0
    # number of valid documents declaring the platform at all
    referenced: int = 0
    issues: List[ValidationIssue] = field(default_factory=list)
    features: PlatformFeatures = field(default_factory=PlatformFeatures)

    @property
    def compatibility_rate(self) -> int:
        return percent(self.compatible, self.total)

    @property
    def referenced_rate(self) -> int:
        return percent(self.compatible, self.referenced)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'platform': self.platform,
            'total': self.total,
            'compatible': self.compatible,
            'incompatible': self.incompatible,
            'referenced': self.referenced,
            'issues': [i.to_dict() for i in self.issues],
            'features': self.features.to_dict(),
        }


@dataclass
class PlatformStatus:
    compatible: bool
    issues: List[ValidationIssue] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'compatible': self.compatible,
            'issues': [i.to_dict() for i in self.issues],
        }


@dataclass
class DocumentCompatibility:
    """Compatibility of one document across the platforms it declares."""
    id: str
    platforms: Dict[str, PlatformStatus] = field(default_factory=dict)
    issues: List[ValidationIssue] = field(default_factory=list)
    score: int = 0

    @property
    def tier(self) -> str:
        if self.score >= HIGH_COMPATIBILITY:
            return 'high'
        if self.score >= MEDIUM_COMPATIBILITY:
            return 'medium'
        return 'low'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'platforms': {name: status.to_dict() for name, status in self.platforms.items()},
            'issues': [i.to_dict() for i in self.issues],
            'score': self.score,
        }


@dataclass
class CompatibilitySummary:
    schemas_total: int = 0
    high_compatibility: int = 0
    medium_compatibility: int = 0
    low_compatibility: int = 0
    platform_details: Dict[str, Dict[str, int]] = field(default_factory=dict)
    issues_total: int = 0
    issues_by_type: Dict[str, int] = field(default_factory=dict)
    issues_by_severity: Dict[str, int] = field(
        default_factory=lambda: {severity: 0 for severity in Severity.get_all()}
    )
    # documents excluded from the analysis (parse errors, invalid schemas)
    errors: List[Dict[str, Any]] = field(default_factory=list)

    def count_issue(self, issue: ValidationIssue) -> None:
        self.issues_total += 1
        self.issues_by_type[issue.type] = self.issues_by_type.get(issue.type, 0) + 1
        self.issues_by_severity[issue.severity] = self.issues_by_severity.get(issue.severity, 0) + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'schemas': {
                'total': self.schemas_total,
                'highCompatibility': self.high_compatibility,
                'mediumCompatibility': self.medium_compatibility,
                'lowCompatibility': self.low_compatibility,
            },
            'platforms': {
                'total': len(self.platform_details),
                'details': {name: dict(details) for name, details in self.platform_details.items()},
            },
            'issues': {
                'total': self.issues_total,
                'byType': dict(self.issues_by_type),
                'bySeverity': dict(self.issues_by_severity),
            },
            'errors': list(self.errors),
        }


@dataclass
class CompatibilityReport:
    platforms: Dict[str, PlatformCompatibility]
    schemas: Dict[str, DocumentCompatibility]
    summary: CompatibilitySummary

    @property
    def has_errors(self) -> bool:
        """True if any error-severity issue was found or a document had to be excluded."""
        return self.summary.issues_by_severity.get(Severity.ERROR, 0) > 0 or bool(self.summary.errors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'platforms': {name: p.to_dict() for name, p in self.platforms.items()},
            'schemas': {doc_id: s.to_dict() for doc_id, s in self.schemas.items()},
            'summary': self.summary.to_dict(),
        }
