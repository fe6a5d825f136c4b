"""Definition extraction from parsed syntax trees."""
from dataclasses import dataclass
from typing import Iterator, List, Optional
from tree_sitter import Tree, Node


# Every finding currently carries the same kind and heuristic score
CODE_TYPE = "function/class"
DEFAULT_CONFIDENCE = 80


@dataclass
class DefinitionRecord:
    """A single site where a function or class is declared."""
    name: str
    file: str
    line: int  # 1-based line of the def/class keyword
    size: int = 0  # byte length of the definition, decorators included


@dataclass
class Finding:
    """A definition whose name is never referenced anywhere in the corpus."""
    file: str
    line: int
    name: str
    code_type: str = CODE_TYPE
    confidence: int = DEFAULT_CONFIDENCE
    size: int = 0


class DefinitionExtractor:
    """Collect function and class definition sites from syntax trees."""

    # Nodes that declare a name
    DEFINITION_TYPES = ('function_definition', 'class_definition')

    # Wrapper around a definition carrying its decorators
    DECORATED_TYPE = 'decorated_definition'

    def extract_definitions(self, tree: Tree, file_path: str) -> List[DefinitionRecord]:
        """Walk the whole tree pre-order and record every definition.

        Nested definitions (methods, inner functions) are found too, and a
        decorated definition yields exactly one record for its inner name.

        Args:
            tree: Parsed tree-sitter Tree
            file_path: Path the tree was parsed from

        Returns:
            DefinitionRecords in source order
        """
        records = []

        for node in traverse(tree.root_node):
            if node.type not in self.DEFINITION_TYPES:
                continue

            name = self._extract_name(node)
            if not name:
                continue

            records.append(DefinitionRecord(
                name=name,
                file=str(file_path),
                line=node.start_point[0] + 1,
                size=self._measure(node),
            ))

        return records

    def _extract_name(self, node: Node) -> Optional[str]:
        """Return the declared name, or None for incomplete definitions."""
        name_node = node.child_by_field_name('name')
        if name_node is None:
            return None
        return name_node.text.decode('utf-8', errors='ignore')

    def _measure(self, node: Node) -> int:
        """Byte span of a definition, widened to its decorator wrapper."""
        outer = node
        if node.parent is not None and node.parent.type == self.DECORATED_TYPE:
            outer = node.parent
        return outer.end_byte - outer.start_byte


def traverse(node: Node) -> Iterator[Node]:
    """Iteratively traverse tree using a stack and yield all nodes pre-order.

    Args:
        node: Root node to start traversal

    Yields:
        All nodes in tree
    """
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        # Add children in reverse order to maintain left-to-right traversal
        stack.extend(reversed(current.children))
