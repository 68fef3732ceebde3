"""REPL-facing glue: extraction policy, invocation text and project lookup."""

from nest_repl.repl.extraction import MethodExtractor, language_for_path
from nest_repl.repl.invocation import (
    Invocation,
    argument_prompt,
    build_invocation,
    collect_arguments,
)
from nest_repl.repl.project import find_nest_root, is_nest_project

__all__ = [
    "Invocation",
    "MethodExtractor",
    "argument_prompt",
    "build_invocation",
    "collect_arguments",
    "find_nest_root",
    "is_nest_project",
    "language_for_path",
]
