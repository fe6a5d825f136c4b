"""Tree-sitter parser for Python source analysis."""
from pathlib import Path
from typing import Tuple
from tree_sitter import Language, Parser, Tree
import tree_sitter_python as tspython


class AnalysisError(Exception):
    """Base class for failures that abort a scan."""


class ReadError(AnalysisError, OSError):
    """A source file could not be read or decoded."""


class ParseError(AnalysisError, ValueError):
    """The grammar failed to produce any syntax tree."""


class LanguageParser:
    """Python parser using the tree-sitter v0.22+ API."""

    # Extension match is case-sensitive: 'module.PY' is not a source file
    SUPPORTED_LANGUAGES = {
        '.py': 'python',
    }

    def __init__(self, language: str = 'python'):
        """Initialize parser for the given language.

        Args:
            language: Only 'python' is supported

        Raises:
            ValueError: If language is not supported
        """
        self.language = language
        self.parser = self._create_parser()

    def _create_parser(self) -> Parser:
        """Build a tree-sitter Parser bound to the language grammar.

        Returns:
            Configured Parser instance

        Raises:
            ValueError: If language is not supported
        """
        if self.language == 'python':
            lang = Language(tspython.language())
        else:
            raise ValueError(f"Unsupported language: {self.language}")

        return Parser(lang)

    def read_source(self, file_path: str | Path) -> bytes:
        """Read a source file and check that it decodes as UTF-8 text.

        Args:
            file_path: Path to source file

        Returns:
            Raw source bytes, ready for tree-sitter

        Raises:
            ReadError: If the file is missing, unreadable or not valid UTF-8
        """
        file_path = Path(file_path)

        try:
            source_code = file_path.read_bytes()
            source_code.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ReadError(f"Failed to read {file_path}: not valid UTF-8 ({e.reason})") from e
        except OSError as e:
            raise ReadError(f"Failed to read {file_path}: {e.strerror or e}") from e

        return source_code

    def parse_source(self, source_code: bytes) -> Tree:
        """Parse source bytes into a syntax tree.

        Malformed code still yields a tree (with ERROR nodes); only a parser
        that returns nothing at all is treated as a failure.

        Raises:
            ParseError: If no tree could be produced
        """
        tree = self.parser.parse(source_code)
        if tree is None:
            raise ParseError(f"Failed to parse {self.language} source")
        return tree

    def parse_file(self, file_path: str | Path) -> Tuple[Tree, bytes]:
        """Read and parse a file.

        Args:
            file_path: Path to source file to parse

        Returns:
            (tree, source_code) pair

        Raises:
            ReadError: If the file cannot be read
            ParseError: If parsing produced no tree
        """
        source_code = self.read_source(file_path)
        try:
            tree = self.parse_source(source_code)
        except ParseError as e:
            raise ParseError(f"{e} in {file_path}") from e
        return tree, source_code

    @classmethod
    def is_source_file(cls, file_path: str | Path) -> bool:
        """Check whether a path carries a supported source extension."""
        return Path(file_path).suffix in cls.SUPPORTED_LANGUAGES

