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

"""Platform compatibility checker for a corpus of context documents."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..config import ValidatorConfig
from ..exceptions import ValidationError
from ..file_io.schema_files import find_schema_files
from ..models.document import ContextDocument, PlatformName
from ..validation.platform_rules import get_platform_profile
from ..validation.report import Severity, ValidationIssue
from ..validation.schema_validator import SchemaValidator
from .report import (
    HIGH_COMPATIBILITY,
    MEDIUM_COMPATIBILITY,
    CompatibilityReport,
    CompatibilitySummary,
    DocumentCompatibility,
    PlatformCompatibility,
    PlatformFeatures,
    PlatformStatus,
    percent,
)

logger = logging.getLogger(__name__)

# Config flags whose use is reported in ``features.used``: (config key, feature name)
_FEATURE_USAGE: Dict[str, Tuple[Tuple[str, str], ...]] = {
    PlatformName.CLAUDE_CODE: (('memory', 'memory'), ('command', 'commands')),
}


class CompatibilityChecker:
    """Score how well a directory of documents supports each platform."""

    def __init__(self, validator: Optional[SchemaValidator] = None, config: Optional[ValidatorConfig] = None):
        if config is None:
            config = validator.config if validator is not None else ValidatorConfig()
        self.config = config
        self.validator = validator or SchemaValidator(config)

    def find_schema_files(self, directory: Union[str, Path]) -> List[Path]:
        return find_schema_files([directory])

    def check_compatibility(self, directory: Union[str, Path]) -> CompatibilityReport:
        """Check compatibility for all platforms and documents under *directory*.

        Raises:
            ValidationError: If *directory* does not exist
        """
        root = Path(directory)
        if not root.is_dir():
            raise ValidationError(f"Directory not found: {root}")

        files = self.find_schema_files(root)
        logger.debug(f"Checking compatibility of {len(files)} file(s) in {root}")

        documents, errors = self._load_documents(files)

        platforms: Dict[str, PlatformCompatibility] = {}
        for platform in self.extract_platforms(documents):
            platforms[platform] = self.check_platform_compatibility(platform, documents)

        schemas: Dict[str, DocumentCompatibility] = {}
        for document in documents:
            schemas[document.id] = self.check_schema_compatibility(document)

        summary = self.generate_summary(platforms, schemas, errors)
        return CompatibilityReport(platforms=platforms, schemas=schemas, summary=summary)

    def _load_documents(self, files: List[Path]) -> Tuple[List[ContextDocument], List[Dict[str, str]]]:
        documents: List[ContextDocument] = []
        errors: List[Dict[str, str]] = []
        seen: Dict[str, str] = {}

        for result in self.validator.validate_individually(files):
            file_path = str(result.file_path)
            if result.document is None:
                errors.append({
                    'type': 'parse_error',
                    'filePath': file_path,
                    'message': result.errors[0].message if result.errors else 'Failed to parse file',
                })
            elif not result.valid:
                errors.append({
                    'type': 'invalid_schema',
                    'filePath': file_path,
                    'message': 'Schema validation failed: ' + ', '.join(sorted({e.type for e in result.errors})),
                })
            elif result.document.id in seen:
                errors.append({
                    'type': 'duplicate_id',
                    'filePath': file_path,
                    'message': f"Schema id '{result.document.id}' already declared in {seen[result.document.id]}",
                })
            else:
                seen[result.document.id] = file_path
                documents.append(result.document)

        for error in errors:
            logger.warning(f"Skipping {error['filePath']}: {error['message']}")
        return documents, errors

    @staticmethod
    def extract_platforms(documents: List[ContextDocument]) -> List[str]:
        """All platform names mentioned by the documents, in first-seen order."""
        platforms: Dict[str, None] = {}
        for document in documents:
            for name in document.platforms:
                platforms.setdefault(name, None)
        return list(platforms)

    def check_platform_compatibility(self, platform: str, documents: List[ContextDocument]) -> PlatformCompatibility:
        compatible_documents = [d for d in documents if d.is_compatible_with(platform)]

        result = PlatformCompatibility(platform=platform)
        result.total = len(documents)
        result.compatible = len(compatible_documents)
        result.incompatible = result.total - result.compatible
        result.referenced = sum(1 for d in documents if platform in d.platforms)

        profile = get_platform_profile(platform)
        for document in compatible_documents:
            result.issues.extend(profile.check_features(document.platforms[platform], document, self.config))

        result.features = self.analyze_platform_features(platform, compatible_documents)
        return result

    @staticmethod
    def analyze_platform_features(platform: str, documents: List[ContextDocument]) -> PlatformFeatures:
        profile = get_platform_profile(platform)
        features = PlatformFeatures(
            supported=list(profile.supported_features),
            limitations=list(profile.limitations),
        )

        configs = [d.platforms[platform] for d in documents]
        for key, feature in _FEATURE_USAGE.get(platform, ()):
            if any(config.get(key) for config in configs):
                features.used.append(feature)
        return features

    def check_schema_compatibility(self, document: ContextDocument) -> DocumentCompatibility:
        result = DocumentCompatibility(id=document.id)

        platforms = document.platforms
        compatible_count = 0
        for name, config in platforms.items():
            status = PlatformStatus(compatible=config.compatible)
            if config.compatible:
                compatible_count += 1
                status.issues = get_platform_profile(name).check_features(config, document, self.config)
            result.platforms[name] = status

        result.score = percent(compatible_count, len(platforms))
        if compatible_count < len(platforms):
            # 100 is reserved for documents compatible with every declared platform.
            result.score = min(result.score, 99)
        result.issues.extend(self.check_cross_platform_issues(document))
        return result

    def check_cross_platform_issues(self, document: ContextDocument) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []

        estimated = document.estimated_size(self.config.size_overhead, include_description=True)
        if document.is_compatible_with(PlatformName.WINDSURF) and estimated > self.config.size_limit:
            issues.append(ValidationIssue(
                type='cross_platform_issue',
                severity=Severity.WARNING,
                path=f'platforms.{PlatformName.WINDSURF}',
                message='Content may be truncated on Windsurf due to character limit',
                data={'schema': document.id},
            ))

        cursor = document.platform(PlatformName.CURSOR)
        if cursor is not None and cursor.get('activation') == 'always' and cursor.has('globs'):
            issues.append(ValidationIssue(
                type='cross_platform_issue',
                severity=Severity.WARNING,
                path=f'platforms.{PlatformName.CURSOR}.globs',
                message='Always activation with globs may cause conflicts',
                data={'schema': document.id},
            ))

        return issues

    @staticmethod
    def generate_summary(
        platforms: Dict[str, PlatformCompatibility],
        schemas: Dict[str, DocumentCompatibility],
        errors: List[Dict[str, str]],
    ) -> CompatibilitySummary:
        summary = CompatibilitySummary(errors=list(errors))

        scores = [s.score for s in schemas.values()]
        summary.schemas_total = len(scores)
        summary.high_compatibility = sum(1 for s in scores if s >= HIGH_COMPATIBILITY)
        summary.medium_compatibility = sum(1 for s in scores if MEDIUM_COMPATIBILITY <= s < HIGH_COMPATIBILITY)
        summary.low_compatibility = sum(1 for s in scores if s < MEDIUM_COMPATIBILITY)

        for name, data in platforms.items():
            summary.platform_details[name] = {
                'compatible': data.compatible,
                'compatibility_rate': data.compatibility_rate,
                'referenced_rate': data.referenced_rate,
                'issues': len(data.issues),
            }
            for issue in data.issues:
                summary.count_issue(issue)

        for data in schemas.values():
            for issue in data.issues:
                summary.count_issue(issue)

        return summary
