"""Syntax-tree queries over TypeScript and JavaScript sources."""

from nest_repl.parser.class_resolver import find_class_names
from nest_repl.parser.language_config import LanguageConfig, LanguageRegistry
from nest_repl.parser.method_locator import find_enclosing_method
from nest_repl.parser.signature_extractor import find_methods_in_range
from nest_repl.parser.source_tree import SourceTree

__all__ = [
    "LanguageConfig",
    "LanguageRegistry",
    "SourceTree",
    "find_class_names",
    "find_enclosing_method",
    "find_methods_in_range",
]
