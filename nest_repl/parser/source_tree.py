"""TreeSitter source tree for one buffer snapshot."""

from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING

import tree_sitter

from nest_repl.logger import get_logger
from nest_repl.parser.language_config import LanguageConfig, LanguageRegistry
from nest_repl.utils.exceptions import (
    ParseFailureError,
    ParserUnavailableError,
    QueryCompileError,
)

if TYPE_CHECKING:
    from types import ModuleType

QueryMatch = tuple[int, dict[str, list[tree_sitter.Node]]]

GRAMMAR_MODULE = "tree_sitter_typescript"

logger = get_logger(__name__)


def _grammar_module() -> ModuleType:
    try:
        return import_module(GRAMMAR_MODULE)
    except ImportError as e:
        msg = (
            "TypeScript or JavaScript parser not available. "
            "Install with: pip install tree-sitter-typescript"
        )
        raise ParserUnavailableError(msg) from e


def load_language(language: str) -> tuple[LanguageConfig, tree_sitter.Language]:
    """Resolve a language hint and load its grammar."""
    config = LanguageRegistry.get_language(language)
    if config is None:
        msg = f"No grammar registered for language: {language}"
        raise ParserUnavailableError(msg, language=language)

    module = _grammar_module()
    grammar = getattr(module, config.grammar_function, None)
    if grammar is None:
        msg = f"{GRAMMAR_MODULE} does not provide {config.grammar_function}"
        raise ParserUnavailableError(msg, language=config.name)

    return config, tree_sitter.Language(grammar())


class SourceTree:
    """Parser plus the syntax tree of the text it last parsed.

    The tree always corresponds to ``content``: ``update`` re-parses whenever
    the text changes, so queries never run against a stale tree.
    """

    def __init__(self, language: str = "typescript") -> None:
        self.config, self.language = load_language(language)
        self.parser = tree_sitter.Parser(self.language)
        self.content: bytes = b""
        self.tree: tree_sitter.Tree | None = None

    @classmethod
    def build(cls, text: str, language: str = "typescript") -> SourceTree:
        """Parse ``text`` into a new source tree."""
        source_tree = cls(language)
        source_tree.update(text)
        return source_tree

    @property
    def language_name(self) -> str:
        return self.config.name

    def update(self, text: str) -> tree_sitter.Tree:
        """Parse ``text`` unless it is identical to the last parsed text."""
        content = text.encode("utf-8")
        if self.tree is not None and content == self.content:
            return self.tree

        try:
            tree = self.parser.parse(content)
        except (ValueError, TypeError) as e:
            msg = "Can't parse the buffer with tree-sitter"
            raise ParseFailureError(
                msg, language=self.language_name, source_length=len(content)
            ) from e

        if tree is None or tree.root_node is None:
            msg = "Can't find the tree root with tree-sitter"
            raise ParseFailureError(
                msg, language=self.language_name, source_length=len(content)
            )

        self.content = content
        self.tree = tree
        logger.debug(
            "Parsed buffer",
            language=self.language_name,
            bytes=len(content),
            has_error=tree.root_node.has_error,
        )
        return tree

    @property
    def root(self) -> tree_sitter.Node:
        if self.tree is None:
            msg = "Source tree has not been built"
            raise ParseFailureError(msg, language=self.language_name)
        return self.tree.root_node

    def node_text(self, node: tree_sitter.Node) -> str:
        """Get text content of a node."""
        return self.content[node.start_byte : node.end_byte].decode(
            "utf-8", errors="ignore"
        )

    def compile_query(self, source: str) -> tree_sitter.Query:
        """Compile a query pattern, raising QueryCompileError on failure."""
        try:
            return tree_sitter.Query(self.language, source)
        except (tree_sitter.QueryError, ValueError) as e:
            msg = f"Failed to compile query: {e}"
            raise QueryCompileError(
                msg, pattern=source, language=self.language_name
            ) from e

    def query(self, source: str) -> tree_sitter.Query | None:
        """Compile a query pattern, returning None when it is malformed."""
        try:
            return self.compile_query(source)
        except QueryCompileError as e:
            logger.warning(
                "Query compilation failed",
                language=self.language_name,
                error=e.message,
            )
            return None

    def matches(
        self, query: tree_sitter.Query, node: tree_sitter.Node | None = None
    ) -> list[QueryMatch]:
        """Run ``query`` over ``node`` (the root by default)."""
        cursor = tree_sitter.QueryCursor(query)
        return cursor.matches(node if node is not None else self.root)
