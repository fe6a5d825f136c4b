"""Name usage collector: the single analysis pass behind every scan.

Each file is parsed once and walked twice, first for definition sites, then for
identifier occurrences. Both tables live on the collector instance and are
queried with collect_findings() after analyze() has run.
"""
import logging
import os
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from pydeadcode.analyzer.extractor import DefinitionExtractor, Finding
from pydeadcode.analyzer.parser import LanguageParser, ReadError
from pydeadcode.analyzer.reference_tracker import ReferenceTracker

logger = logging.getLogger(__name__)


class NameUsageCollector:
    """Flag definitions whose names never appear as a usage in the corpus."""

    def __init__(self, min_confidence: int = 60, exclude_patterns: Optional[Iterable[str]] = None):
        """Initialize an empty collector.

        Args:
            min_confidence: Findings scoring below this are not reported
            exclude_patterns: Glob patterns; files found by directory
                expansion whose path or name matches one are skipped
        """
        self.min_confidence = min_confidence
        self.exclude_patterns = [p for p in (exclude_patterns or []) if p]
        self.parser = LanguageParser('python')
        self.extractor = DefinitionExtractor()
        self.tracker = ReferenceTracker()
        self.files_analyzed = 0

    def analyze(self, paths: Iterable[str | Path]):
        """Analyze every file and directory in order.

        Raises:
            ReadError: On the first unreadable or missing path
            ParseError: If a file yields no syntax tree
        """
        for path in paths:
            self.analyze_path(path)

    def analyze_path(self, path: str | Path):
        """Analyze a single file, or every source file under a directory."""
        path = Path(path)

        if path.is_file():
            self.analyze_file(path)
        elif path.is_dir():
            for file_path in self.discover_files(path):
                self.analyze_file(file_path)
        else:
            raise ReadError(f"Path does not exist: {path}")

    def discover_files(self, directory: Path) -> Iterator[Path]:
        """Yield source files under a directory, recursively and in sorted order.

        Symlinked directories are not followed and unlistable directories are
        skipped silently.
        """
        for root, dirs, files in os.walk(directory):
            dirs.sort()
            for name in sorted(files):
                file_path = Path(root) / name
                if not LanguageParser.is_source_file(file_path):
                    continue
                if self.is_excluded(file_path):
                    logger.debug("Excluded %s", file_path)
                    continue
                yield file_path

    def is_excluded(self, file_path: Path) -> bool:
        """Check a file against the exclude globs (full path or bare name)."""
        path_str = file_path.as_posix()
        return any(
            fnmatch(path_str, pattern) or fnmatch(file_path.name, pattern)
            for pattern in self.exclude_patterns
        )

    def analyze_file(self, file_path: str | Path):
        """Parse one file and fold its definitions and usages into the tables.

        Raises:
            ReadError: If the file cannot be read
            ParseError: If parsing produced no tree
        """
        tree, _ = self.parser.parse_file(file_path)

        records = self.extractor.extract_definitions(tree, str(file_path))
        for record in records:
            self.tracker.add_definition(record)

        self.tracker.extract_usages(tree)
        self.files_analyzed += 1

        logger.debug("Analyzed %s: %d definitions", file_path, len(records))

    def collect_findings(self) -> List[Finding]:
        """Return the unreferenced definition sites found so far.

        Pure read of the accumulated tables; repeated calls return the same
        content. Not sorted.
        """
        return self.tracker.find_dead_symbols(self.min_confidence)

    get_results = collect_findings
