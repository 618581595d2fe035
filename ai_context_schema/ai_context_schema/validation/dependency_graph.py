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

"""Dependency graph over the ``requires`` edges of a batch of documents.

The graph is assembled from the whole batch first and cycle detection runs
once over the finished graph, so the outcome does not depend on the order in
which documents are validated.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..models.document import ContextDocument

logger = logging.getLogger(__name__)


class DependencyGraph:
    """Directed graph: document id -> ids it requires."""

    def __init__(self):
        self._edges: Dict[str, List[str]] = {}
        self._cycles: Optional[List[List[str]]] = None

    @classmethod
    def from_documents(cls, documents: Iterable[ContextDocument]) -> 'DependencyGraph':
        graph = cls()
        for document in documents:
            graph.add_document(document)
        logger.debug(f"Built dependency graph with {len(graph)} node(s)")
        return graph

    def add_document(self, document: ContextDocument) -> None:
        if document.id is None:
            return
        self.add_node(document.id, [str(dep) for dep in document.requires])

    def add_node(self, node_id: str, requires: Iterable[str] = ()) -> None:
        edges = self._edges.setdefault(node_id, [])
        for dep in requires:
            if dep not in edges:
                edges.append(dep)
            self._edges.setdefault(dep, [])
        self._cycles = None

    def successors(self, node_id: str) -> List[str]:
        return self._edges.get(node_id, [])

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def _strongly_connected_components(self) -> List[List[str]]:
        # Iterative Tarjan's algorithm, so long dependency chains do not hit the recursion limit.
        index = 0
        indices: Dict[str, int] = {}
        lowlink: Dict[str, int] = {}
        stack: List[str] = []
        on_stack = set()
        components: List[List[str]] = []

        for root in self._edges:
            if root in indices:
                continue

            indices[root] = lowlink[root] = index
            index += 1
            stack.append(root)
            on_stack.add(root)
            work: List[Tuple[str, Iterator[str]]] = [(root, iter(self.successors(root)))]

            while work:
                node, children = work[-1]
                descended = False
                for child in children:
                    if child not in indices:
                        indices[child] = lowlink[child] = index
                        index += 1
                        stack.append(child)
                        on_stack.add(child)
                        work.append((child, iter(self.successors(child))))
                        descended = True
                        break
                    if child in on_stack:
                        lowlink[node] = min(lowlink[node], indices[child])
                if descended:
                    continue

                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])

                if lowlink[node] == indices[node]:
                    component = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    components.append(component)

        return components

    def find_cycles(self) -> List[List[str]]:
        """Return every dependency cycle as a sorted list of member ids."""
        if self._cycles is None:
            cycles = []
            for component in self._strongly_connected_components():
                if len(component) > 1:
                    cycles.append(sorted(component))
                elif component[0] in self.successors(component[0]):
                    # self-dependency
                    cycles.append(component)
            self._cycles = sorted(cycles)
        return self._cycles

    def cycle_for(self, node_id: Optional[str]) -> Optional[List[str]]:
        """Return the cycle *node_id* belongs to, or None."""
        if node_id is None:
            return None
        for cycle in self.find_cycles():
            if node_id in cycle:
                return cycle
        return None

    def has_cycle(self, node_id: Optional[str]) -> bool:
        return self.cycle_for(node_id) is not None
