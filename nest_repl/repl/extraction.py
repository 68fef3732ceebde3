"""Resolve the class and method a REPL invocation should target."""

from pathlib import Path

from nest_repl.config import Settings, get_settings
from nest_repl.logger import get_logger
from nest_repl.models import ExtractionResult, LineRange, NoticeLevel
from nest_repl.parser.class_resolver import find_class_names
from nest_repl.parser.language_config import LanguageRegistry
from nest_repl.parser.method_locator import find_enclosing_method
from nest_repl.parser.signature_extractor import find_methods_in_range
from nest_repl.parser.source_tree import SourceTree
from nest_repl.utils.exceptions import (
    ParseFailureError,
    ParserUnavailableError,
    ValidationError,
)

logger = get_logger(__name__)

NOT_TYPESCRIPT = "Not a TypeScript/JavaScript file"
NO_CLASS = "Could not find class name in file"
NO_METHOD = "Could not extract method name from selection"
MANY_METHODS = "Found more than one method inside the selection"
NO_METHOD_AT_CURSOR = "No method found at cursor position"
UNREADABLE_FILE = "Could not read file as UTF-8 text"


def language_for_path(path: str | Path) -> str | None:
    """Language hint for a file, or None if it is not TypeScript/JavaScript."""
    config = LanguageRegistry.get_language_for_path(path)
    return config.name if config else None


class MethodExtractor:
    """Runs the parse/query pipeline for one selection or cursor position.

    Every failed attempt yields exactly one error or warning notice on the
    returned result; nothing is raised for missing classes or methods.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    def extract_file(
        self,
        path: str | Path,
        selection: LineRange | None = None,
        cursor_line: int | None = None,
    ) -> ExtractionResult:
        """Read ``path`` and extract from its contents."""
        language = language_for_path(path)
        if language is None:
            result = ExtractionResult()
            result.add(NoticeLevel.ERROR, NOT_TYPESCRIPT)
            return result

        try:
            text = Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read source file", path=str(path), error=str(e))
            result = ExtractionResult()
            result.add(NoticeLevel.ERROR, UNREADABLE_FILE)
            return result
        return self.extract(text, language, selection=selection, cursor_line=cursor_line)

    def extract(
        self,
        text: str,
        language: str | None = None,
        selection: LineRange | None = None,
        cursor_line: int | None = None,
    ) -> ExtractionResult:
        """Find the single class and method targeted by a selection or cursor."""
        if selection is None and cursor_line is None:
            msg = "Either a selection or a cursor line is required"
            raise ValidationError(msg, field="selection")

        language = language or self.settings.parser.default_language
        log = logger.bind(language=language)
        result = ExtractionResult()

        try:
            tree = SourceTree.build(text, language)
        except (ParserUnavailableError, ParseFailureError) as e:
            log.warning("Source tree unavailable", error=e.message, code=e.code)
            result.add(NoticeLevel.ERROR, e.message)
            return result

        line_range = selection
        if line_range is None:
            line_range = find_enclosing_method(tree, cursor_line)
            if line_range is None:
                result.add(NoticeLevel.WARNING, NO_METHOD_AT_CURSOR)
                return result
        result.range = line_range

        result.class_names = find_class_names(tree)
        if not result.class_names:
            result.add(NoticeLevel.ERROR, NO_CLASS)
            return result

        # One class per file is assumed; the first declared class wins.
        class_name = result.class_names[0]

        result.methods = find_methods_in_range(
            tree,
            line_range.start_line,
            line_range.end_line,
            include_pattern_parameters=self.settings.parser.include_pattern_parameters,
        )
        if not result.methods:
            result.add(NoticeLevel.ERROR, NO_METHOD)
            return result
        if len(result.methods) > 1:
            result.add(NoticeLevel.WARNING, MANY_METHODS)
            return result

        result.class_name = class_name
        result.method = result.methods[0]
        if len(result.class_names) > 1:
            result.add(
                NoticeLevel.WARNING,
                f"Found more than one class in file, using {class_name}",
            )
        log.debug(
            "Extracted method",
            class_name=class_name,
            method=result.method.name,
            line=result.method.line,
        )
        return result
