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

"""Context document model.

A context document is a YAML frontmatter mapping followed by a markdown body.
The frontmatter is kept verbatim in ``raw`` (this is what the JSON Schema
validates); typed accessors read from it without mutating it.

Platform entries are typed per platform name. Unknown platform names fall
back to :class:`GenericPlatformConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type


class PlatformName:
    """Platform names with dedicated configuration shapes."""
    CLAUDE_CODE = "claude-code"
    CURSOR = "cursor"
    WINDSURF = "windsurf"
    GITHUB_COPILOT = "github-copilot"


@dataclass
class PlatformConfig:
    """Common part of every platform entry."""
    name: str
    compatible: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, name: str, raw: Dict[str, Any]) -> "PlatformConfig":
        return cls(name=name, compatible=raw.get("compatible") is True, raw=raw)

    def get(self, key: str, default: Any = None) -> Any:
        return self.raw.get(key, default)

    def has(self, key: str) -> bool:
        return key in self.raw and self.raw[key] is not None


@dataclass
class ClaudeCodeConfig(PlatformConfig):
    memory: Any = None
    command: Any = None
    namespace: Any = None
    allowed_tools: Any = None
    mcp_integration: Any = None

    @classmethod
    def from_mapping(cls, name: str, raw: Dict[str, Any]) -> "ClaudeCodeConfig":
        return cls(
            name=name,
            compatible=raw.get("compatible") is True,
            raw=raw,
            memory=raw.get("memory"),
            command=raw.get("command"),
            namespace=raw.get("namespace"),
            allowed_tools=raw.get("allowedTools"),
            mcp_integration=raw.get("mcpIntegration"),
        )


@dataclass
class CursorConfig(PlatformConfig):
    activation: Any = None
    globs: Any = None
    priority: Any = None

    @classmethod
    def from_mapping(cls, name: str, raw: Dict[str, Any]) -> "CursorConfig":
        return cls(
            name=name,
            compatible=raw.get("compatible") is True,
            raw=raw,
            activation=raw.get("activation"),
            globs=raw.get("globs"),
            priority=raw.get("priority"),
        )


@dataclass
class WindsurfConfig(PlatformConfig):
    mode: Any = None
    xml_tag: Any = None
    character_limit: Any = None

    @classmethod
    def from_mapping(cls, name: str, raw: Dict[str, Any]) -> "WindsurfConfig":
        return cls(
            name=name,
            compatible=raw.get("compatible") is True,
            raw=raw,
            mode=raw.get("mode"),
            xml_tag=raw.get("xmlTag"),
            character_limit=raw.get("characterLimit"),
        )


@dataclass
class GithubCopilotConfig(PlatformConfig):
    priority: Any = None
    review_type: Any = None
    scope: Any = None

    @classmethod
    def from_mapping(cls, name: str, raw: Dict[str, Any]) -> "GithubCopilotConfig":
        return cls(
            name=name,
            compatible=raw.get("compatible") is True,
            raw=raw,
            priority=raw.get("priority"),
            review_type=raw.get("reviewType"),
            scope=raw.get("scope"),
        )


@dataclass
class GenericPlatformConfig(PlatformConfig):
    """Any platform without a dedicated configuration shape."""
    pass


_PLATFORM_CONFIG_TYPES: Dict[str, Type[PlatformConfig]] = {
    PlatformName.CLAUDE_CODE: ClaudeCodeConfig,
    PlatformName.CURSOR: CursorConfig,
    PlatformName.WINDSURF: WindsurfConfig,
    PlatformName.GITHUB_COPILOT: GithubCopilotConfig,
}


def platform_config_from_mapping(name: str, raw: Any) -> PlatformConfig:
    """Build the typed configuration variant for platform *name*."""
    if not isinstance(raw, dict):
        # Structural validation reports the shape problem; treat as incompatible here.
        return GenericPlatformConfig(name=name, compatible=False, raw={})
    config_type = _PLATFORM_CONFIG_TYPES.get(name, GenericPlatformConfig)
    return config_type.from_mapping(name, raw)


def _list_field(raw: Dict[str, Any], key: str) -> List[Any]:
    value = raw.get(key)
    if isinstance(value, list):
        return list(value)
    return []


def _optional_str(raw: Dict[str, Any], key: str) -> Optional[str]:
    value = raw.get(key)
    if value is None:
        return None
    return str(value)


@dataclass
class ContextDocument:
    """One parsed context document (frontmatter + markdown body)."""
    raw: Dict[str, Any]
    content: str = ""
    source_map: Dict[str, Dict[str, int]] = field(default_factory=dict)

    @property
    def id(self) -> Optional[str]:
        return _optional_str(self.raw, "id")

    @property
    def title(self) -> Optional[str]:
        return _optional_str(self.raw, "title")

    @property
    def description(self) -> Optional[str]:
        return _optional_str(self.raw, "description")

    @property
    def version(self) -> Any:
        return self.raw.get("version")

    @property
    def category(self) -> Optional[str]:
        return _optional_str(self.raw, "category")

    @property
    def tags(self) -> List[Any]:
        return _list_field(self.raw, "tags")

    @property
    def author(self) -> Optional[str]:
        return _optional_str(self.raw, "author")

    @property
    def contributors(self) -> List[Any]:
        return _list_field(self.raw, "contributors")

    @property
    def requires(self) -> List[Any]:
        return _list_field(self.raw, "requires")

    @property
    def suggests(self) -> List[Any]:
        return _list_field(self.raw, "suggests")

    @property
    def conflicts(self) -> List[Any]:
        return _list_field(self.raw, "conflicts")

    @property
    def supersedes(self) -> List[Any]:
        return _list_field(self.raw, "supersedes")

    @property
    def platforms(self) -> Dict[str, PlatformConfig]:
        raw_platforms = self.raw.get("platforms")
        if not isinstance(raw_platforms, dict):
            return {}
        return {
            str(name): platform_config_from_mapping(str(name), config)
            for name, config in raw_platforms.items()
        }

    def platform(self, name: str) -> Optional[PlatformConfig]:
        return self.platforms.get(name)

    def is_compatible_with(self, name: str) -> bool:
        config = self.platform(name)
        return config is not None and config.compatible

    def estimated_size(self, overhead: int = 200, include_description: bool = False) -> int:
        """Estimate the rendered size of the document in characters."""
        size = len(self.content) + len(self.title or "") + overhead
        if include_description:
            size += len(self.description or "")
        return size

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.raw)
        data["_content"] = self.content
        return data
