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

"""Platform rule registry shared by the schema validator and the compatibility checker.

Each platform name maps to a :class:`PlatformProfile` holding two rule sets:

* ``field_rules``: configuration requirements checked during schema
  validation (business rules);
* ``feature_rules``: additional feature checks run by the compatibility
  checker on top of the field rules.

Rules are plain functions ``(config, document, settings) -> [ValidationIssue]``.
Both rule sets only run for platforms declared ``compatible: true``.
"""

import re
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional, Tuple

from ..config import ValidatorConfig
from ..models.document import (
    ClaudeCodeConfig,
    ContextDocument,
    CursorConfig,
    GithubCopilotConfig,
    PlatformConfig,
    PlatformName,
    WindsurfConfig,
)
from .report import Severity, ValidationIssue


PlatformRule = Callable[[PlatformConfig, ContextDocument, ValidatorConfig], List[ValidationIssue]]

CURSOR_PRIORITIES = ('high', 'medium', 'low')
WINDSURF_MODES = ('global', 'workspace')
COPILOT_REVIEW_TYPES = ('security', 'performance', 'code-quality', 'style', 'general')
COPILOT_SCOPES = ('repository', 'organization')
COPILOT_PRIORITY_RANGE = (1, 10)

XML_TAG_RE = re.compile(r'^[a-zA-Z][a-zA-Z0-9-]*$')


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _issue(
    issue_type: str,
    severity: str,
    config: PlatformConfig,
    field_name: Optional[str],
    message: str,
) -> ValidationIssue:
    path = f"platforms.{config.name}"
    if field_name:
        path = f"{path}.{field_name}"
    return ValidationIssue(type=issue_type, severity=severity, path=path, message=message)


# ---- claude-code -------------------------------------------------------------


def _claude_namespace_for_command(config: ClaudeCodeConfig, document, settings) -> List[ValidationIssue]:
    if config.command and not config.namespace:
        return [_issue('missing_namespace', Severity.WARNING, config, 'namespace',
                       'Namespace recommended when command is enabled')]
    return []


def _claude_memory_declared(config: ClaudeCodeConfig, document, settings) -> List[ValidationIssue]:
    if 'memory' not in config.raw:
        return [_issue('missing_feature', Severity.INFO, config, 'memory',
                       'Memory configuration not specified')]
    return []


def _claude_tools_for_mcp(config: ClaudeCodeConfig, document, settings) -> List[ValidationIssue]:
    if config.mcp_integration and not config.allowed_tools:
        return [_issue('incomplete_config', Severity.INFO, config, 'allowedTools',
                       'MCP integration enabled but no tools specified')]
    return []


# ---- cursor ------------------------------------------------------------------


def _cursor_globs_for_auto_attached(config: CursorConfig, document, settings) -> List[ValidationIssue]:
    if config.activation == 'auto-attached' and not (isinstance(config.globs, list) and config.globs):
        return [_issue('missing_globs', Severity.ERROR, config, 'globs',
                       'Globs required for auto-attached activation')]
    return []


def _cursor_glob_patterns(config: CursorConfig, document, settings) -> List[ValidationIssue]:
    if not isinstance(config.globs, list):
        return []
    return [
        _issue('invalid_config', Severity.ERROR, config, f'globs.{idx}',
               f'Invalid glob pattern: {glob!r}')
        for idx, glob in enumerate(config.globs)
        if not isinstance(glob, str) or not glob
    ]


def _cursor_priority(config: CursorConfig, document, settings) -> List[ValidationIssue]:
    if config.priority and config.priority not in CURSOR_PRIORITIES:
        return [_issue('invalid_config', Severity.ERROR, config, 'priority',
                       f'Invalid priority: {config.priority}')]
    return []


# ---- windsurf ----------------------------------------------------------------


def _windsurf_character_limit(config: WindsurfConfig, document, settings) -> List[ValidationIssue]:
    if _is_number(config.character_limit) and config.character_limit > settings.size_limit:
        return [_issue('character_limit_exceeded', Severity.WARNING, config, 'characterLimit',
                       f'Character limit exceeds Windsurf maximum ({settings.size_limit})')]
    return []


def _windsurf_content_size(config: WindsurfConfig, document, settings) -> List[ValidationIssue]:
    estimated = document.estimated_size(settings.size_overhead, include_description=True)
    if estimated > settings.size_limit:
        return [_issue('size_warning', Severity.WARNING, config, None,
                       f'Content may exceed Windsurf limit (estimated {estimated} chars)')]
    return []


def _windsurf_mode(config: WindsurfConfig, document, settings) -> List[ValidationIssue]:
    if config.mode and config.mode not in WINDSURF_MODES:
        return [_issue('invalid_config', Severity.ERROR, config, 'mode',
                       f'Invalid mode: {config.mode}')]
    return []


def _windsurf_xml_tag(config: WindsurfConfig, document, settings) -> List[ValidationIssue]:
    if config.xml_tag and not (isinstance(config.xml_tag, str) and XML_TAG_RE.match(config.xml_tag)):
        return [_issue('invalid_config', Severity.ERROR, config, 'xmlTag',
                       f'Invalid XML tag: {config.xml_tag}')]
    return []


# ---- github-copilot ----------------------------------------------------------


def _copilot_priority_range(config: GithubCopilotConfig, document, settings) -> List[ValidationIssue]:
    low, high = COPILOT_PRIORITY_RANGE
    if _is_number(config.priority) and not low <= config.priority <= high:
        return [_issue('invalid_priority', Severity.ERROR, config, 'priority',
                       f'Priority must be between {low} and {high}, got: {config.priority}')]
    return []


def _copilot_review_type(config: GithubCopilotConfig, document, settings) -> List[ValidationIssue]:
    if config.review_type and config.review_type not in COPILOT_REVIEW_TYPES:
        return [_issue('invalid_config', Severity.ERROR, config, 'reviewType',
                       f'Invalid review type: {config.review_type}')]
    return []


def _copilot_scope(config: GithubCopilotConfig, document, settings) -> List[ValidationIssue]:
    if config.scope and config.scope not in COPILOT_SCOPES:
        return [_issue('invalid_config', Severity.ERROR, config, 'scope',
                       f'Invalid scope: {config.scope}')]
    return []


# ---- generic -----------------------------------------------------------------


def _generic_minimal_config(config: PlatformConfig, document, settings) -> List[ValidationIssue]:
    if config.raw == {'compatible': True}:
        return [_issue('minimal_config', Severity.INFO, config, None,
                       'Platform has minimal configuration (compatible only)')]
    return []


@dataclass(frozen=True)
class PlatformProfile:
    """Rules and static feature description of one platform."""
    name: Optional[str]
    field_rules: Tuple[PlatformRule, ...] = ()
    feature_rules: Tuple[PlatformRule, ...] = ()
    supported_features: Tuple[str, ...] = ()
    limitations: Tuple[str, ...] = ()

    def check_fields(
        self,
        config: PlatformConfig,
        document: ContextDocument,
        settings: ValidatorConfig,
    ) -> List[ValidationIssue]:
        """Business-rule checks used by schema validation."""
        if not config.compatible:
            return []
        issues: List[ValidationIssue] = []
        for rule in self.field_rules:
            issues.extend(rule(config, document, settings))
        return issues

    def check_features(
        self,
        config: PlatformConfig,
        document: ContextDocument,
        settings: ValidatorConfig,
    ) -> List[ValidationIssue]:
        """Field rules plus feature checks; every issue names the owning document."""
        if not config.compatible:
            return []
        issues = self.check_fields(config, document, settings)
        for rule in self.feature_rules:
            issues.extend(rule(config, document, settings))
        return [replace(issue, data={'schema': document.id}) for issue in issues]


GENERIC_PROFILE = PlatformProfile(
    name=None,
    feature_rules=(_generic_minimal_config,),
)

_REGISTRY: Dict[str, PlatformProfile] = {}


def register_platform_profile(profile: PlatformProfile) -> None:
    """Register (or replace) the profile for ``profile.name``."""
    if not profile.name:
        raise ValueError("Platform profile must have a name")
    _REGISTRY[profile.name] = profile


def get_platform_profile(name: str) -> PlatformProfile:
    """Return the profile registered for *name*, or the generic profile."""
    return _REGISTRY.get(name, GENERIC_PROFILE)


def registered_platforms() -> List[str]:
    return list(_REGISTRY)


register_platform_profile(PlatformProfile(
    name=PlatformName.CLAUDE_CODE,
    field_rules=(_claude_namespace_for_command,),
    feature_rules=(_claude_memory_declared, _claude_tools_for_mcp),
    supported_features=('memory', 'commands', 'mcp-integration', 'namespaces'),
))

register_platform_profile(PlatformProfile(
    name=PlatformName.CURSOR,
    field_rules=(_cursor_globs_for_auto_attached,),
    feature_rules=(_cursor_glob_patterns, _cursor_priority),
    supported_features=('auto-attachment', 'file-patterns', 'priority-system'),
    limitations=('vs-code-dependency',),
))

register_platform_profile(PlatformProfile(
    name=PlatformName.WINDSURF,
    field_rules=(_windsurf_character_limit,),
    feature_rules=(_windsurf_content_size, _windsurf_mode, _windsurf_xml_tag),
    supported_features=('workspace-context', 'xml-formatting'),
    limitations=('6k-character-limit',),
))

register_platform_profile(PlatformProfile(
    name=PlatformName.GITHUB_COPILOT,
    field_rules=(_copilot_priority_range,),
    feature_rules=(_copilot_review_type, _copilot_scope),
    supported_features=('review-integration', 'priority-system', 'repository-scope'),
    limitations=('github-dependency',),
))
