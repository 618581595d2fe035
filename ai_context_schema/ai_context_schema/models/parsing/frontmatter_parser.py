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

"""Parser for YAML-frontmatter + markdown context documents."""

import re
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from ..document import ContextDocument
from ...exceptions import FormatError, ParseError

logger = logging.getLogger(__name__)


# Opening `---`, YAML block, closing `---` on its own line, markdown body.
FRONTMATTER_RE = re.compile(r"^---\s*\n(.*?)\n---\s*\n(.*)$", re.DOTALL)


class FrontmatterParser:
    """Split a document into frontmatter and body and parse the frontmatter."""

    @staticmethod
    def _json_pointer_escape(token: str) -> str:
        # JSON Pointer escaping: "~" -> "~0", "/" -> "~1"
        return token.replace("~", "~0").replace("/", "~1")

    @classmethod
    def _build_source_map_from_yaml(cls, content: str, line_offset: int = 0) -> Dict[str, Dict[str, int]]:
        """Build a mapping from JSON-pointer-like paths to 1-based line/column.

        This uses PyYAML's node tree (yaml.compose) so we can track locations without
        changing the parsed data shapes returned by safe_load.
        """
        source_map: Dict[str, Dict[str, int]] = {}

        try:
            root = yaml.compose(content, Loader=yaml.SafeLoader)
        except yaml.YAMLError:
            # Parsing errors are reported by parse(); no locations in that case.
            return source_map

        if root is None:
            return source_map

        def _record(path: str, node) -> None:
            mark = getattr(node, "start_mark", None)
            if mark is None:
                return
            # PyYAML uses 0-based line/column
            source_map[path] = {"line": int(mark.line) + 1 + line_offset, "column": int(mark.column) + 1}

        def _walk(node, path: str) -> None:
            _record(path, node)

            if isinstance(node, yaml.nodes.MappingNode):
                for key_node, value_node in node.value:
                    key = getattr(key_node, "value", None)
                    if key is None:
                        continue
                    child_path = f"{path}/{cls._json_pointer_escape(str(key))}"
                    _walk(value_node, child_path)
            elif isinstance(node, yaml.nodes.SequenceNode):
                for idx, item_node in enumerate(node.value):
                    _walk(item_node, f"{path}/{idx}")

        _walk(root, "")
        return source_map

    def parse(self, raw_text: str) -> ContextDocument:
        """Parse document text into a :class:`ContextDocument`.

        Args:
            raw_text: Full document text

        Returns:
            Parsed document with the trimmed markdown body in ``content``

        Raises:
            FormatError: If the frontmatter delimiters are missing
            ParseError: If the frontmatter is not valid YAML or not a mapping
        """
        match = FRONTMATTER_RE.match(raw_text)
        if not match:
            raise FormatError("Invalid format: YAML frontmatter not found")

        frontmatter, body = match.group(1), match.group(2)

        try:
            data = yaml.safe_load(frontmatter)
        except yaml.YAMLError as exc:
            raise ParseError(f"Invalid YAML frontmatter: {exc}") from exc

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ParseError(
                f"Invalid YAML frontmatter: expected a mapping, got {type(data).__name__}"
            )

        line_offset = raw_text[:match.start(1)].count("\n")
        source_map = self._build_source_map_from_yaml(frontmatter, line_offset=line_offset)

        return ContextDocument(raw=data, content=body.strip(), source_map=source_map)

    def parse_file(self, file_path: Union[str, Path]) -> ContextDocument:
        """Read and parse a document file.

        Raises:
            ParseError: If the file cannot be read or parsed
        """
        path = Path(file_path)
        logger.debug(f"Loading context document: {path}")
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ParseError(f"Failed to read file {path}: {exc}") from exc
        return self.parse(content)

    @staticmethod
    def serialize(frontmatter: Dict[str, Any], body: str) -> str:
        """Render a frontmatter mapping and markdown body as document text."""
        dumped = yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
        return f"---\n{dumped}---\n\n{body}"

