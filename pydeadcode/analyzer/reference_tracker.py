"""Corpus-wide name usage tracking and dead symbol detection.

Usage is purely textual: a definition counts as referenced when its exact name
shows up as an identifier or dotted attribute token anywhere in the scanned
files. There is no scoping and no import resolution, so an unrelated local
variable sharing the name hides a dead definition.
"""
from collections import Counter
from typing import Dict, List
from tree_sitter import Node, Tree

from pydeadcode.analyzer.extractor import (
    DEFAULT_CONFIDENCE,
    DefinitionExtractor,
    DefinitionRecord,
    Finding,
)


class ReferenceTracker:
    """Accumulate definition sites and identifier occurrences across files."""

    USAGE_TYPES = ('identifier', 'attribute')

    def __init__(self):
        # name -> every site declaring it, in the order they were added
        self.defined_names: Dict[str, List[DefinitionRecord]] = {}
        self.used_names: Counter = Counter()

    def add_definition(self, record: DefinitionRecord):
        """Register one definition site."""
        self.defined_names.setdefault(record.name, []).append(record)

    def extract_usages(self, tree: Tree):
        """Count every identifier and attribute token in a tree.

        Attribute nodes are counted under their full dotted text ('obj.f'),
        and their child identifiers ('obj', 'f') are counted as well. The name
        being declared by a def/class statement is skipped.

        Args:
            tree: Parsed tree-sitter Tree
        """
        stack = [tree.root_node]
        while stack:
            node = stack.pop()

            if node.type in self.USAGE_TYPES:
                self.add_reference(node.text.decode('utf-8', errors='ignore'))

            children = node.children
            if node.type in DefinitionExtractor.DEFINITION_TYPES:
                children = self._without_declared_name(node, children)

            stack.extend(reversed(children))

    def _without_declared_name(self, node: Node, children: List[Node]) -> List[Node]:
        name_node = node.child_by_field_name('name')
        if name_node is None:
            return children
        span = (name_node.start_byte, name_node.end_byte)
        return [c for c in children if (c.start_byte, c.end_byte) != span]

    def add_reference(self, text: str):
        """Record one occurrence of an identifier-like token."""
        self.used_names[text] += 1

    def is_referenced(self, name: str) -> bool:
        return name in self.used_names

    def find_dead_symbols(self, min_confidence: int = 0) -> List[Finding]:
        """Report every definition site whose name is never referenced.

        Names starting with an underscore are treated as intentionally private
        and never reported. One Finding is produced per definition site, so a
        name declared in three files yields three findings.

        Args:
            min_confidence: Findings scoring below this are dropped

        Returns:
            Findings in definition order (callers sort for display)
        """
        if DEFAULT_CONFIDENCE < min_confidence:
            return []

        results = []
        for name, records in self.defined_names.items():
            if name.startswith('_') or self.is_referenced(name):
                continue
            for record in records:
                results.append(Finding(
                    file=record.file,
                    line=record.line,
                    name=name,
                    confidence=DEFAULT_CONFIDENCE,
                    size=record.size,
                ))

        return results

    def get_stats(self) -> Dict[str, int]:
        """Summary counts for verbose output."""
        return {
            'definition_sites': sum(len(records) for records in self.defined_names.values()),
            'distinct_names': len(self.defined_names),
            'distinct_usages': len(self.used_names),
            'usage_occurrences': sum(self.used_names.values()),
        }
