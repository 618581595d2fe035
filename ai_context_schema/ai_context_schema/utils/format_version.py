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

"""Semantic version utilities.

Two kinds of versions are handled here:
  * the ``version`` field of a context document, which must be a full
    semantic version with optional pre-release and build suffixes
    (e.g. ``1.2.0-beta+build1``);
  * the version of the bundled JSON Schema definition, used to pick a
    schema directory (``schema/2.1.0``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional


# ---- version string → tuple ------------------------------------------------

_VERSION_RE = re.compile(
    r"^(\d+)\.(\d+)\.(\d+)(?:-([a-zA-Z0-9-]+))?(?:\+([a-zA-Z0-9-]+))?$"
)


@dataclass(frozen=True)
class SemanticVersion:
    """A parsed semantic version."""

    major: int
    minor: int
    patch: int
    prerelease: Optional[str] = None
    build: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        if self.build:
            text += f"+{self.build}"
        return text


def parse_version(raw: str) -> SemanticVersion:
    """Parse a version string like ``1.0.0`` or ``2.1.0-rc1+abc``.

    Raises:
        ValueError: If the string is not a semantic version.
    """
    if not isinstance(raw, str):
        raise ValueError(
            f"Version must be a string, got {type(raw).__name__}: {raw!r}"
        )

    m = _VERSION_RE.fullmatch(raw)
    if m is None:
        raise ValueError(
            f"Invalid version string: '{raw}'. "
            "Expected 'MAJOR.MINOR.PATCH' (e.g. '1.0.0')."
        )
    return SemanticVersion(
        int(m.group(1)),
        int(m.group(2)),
        int(m.group(3)),
        m.group(4),
        m.group(5),
    )


def is_semantic_version(raw: Any) -> bool:
    """Return True if *raw*, rendered as text, is a semantic version."""
    if isinstance(raw, bool):
        return False
    return _VERSION_RE.fullmatch(str(raw)) is not None


def parse_format_version(raw: str) -> SemanticVersion:
    """Parse a bundled schema version (``MAJOR.MINOR.PATCH``, optional 'v' prefix)."""
    if isinstance(raw, str) and raw.startswith("v"):
        raw = raw[1:]
    return parse_version(raw)
