"""Language configuration for the TypeScript-family grammars."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar

from nest_repl.logger import get_logger

logger = get_logger(__name__)


@dataclass
class LanguageConfig:
    """Configuration for a supported language."""

    name: str
    display_name: str
    extensions: list[str]
    # Name of the function in tree_sitter_typescript returning the grammar
    grammar_function: str
    aliases: list[str] = field(default_factory=list)


class LanguageRegistry:
    """Registry for supported languages.

    JavaScript files are parsed with the TypeScript grammars, which accept
    plain JavaScript as well.
    """

    _languages: ClassVar[dict[str, LanguageConfig]] = {
        "typescript": LanguageConfig(
            name="typescript",
            display_name="TypeScript",
            extensions=[".ts", ".mts", ".cts", ".js", ".mjs", ".cjs"],
            grammar_function="language_typescript",
            aliases=["ts", "javascript", "js"],
        ),
        "tsx": LanguageConfig(
            name="tsx",
            display_name="TSX",
            extensions=[".tsx", ".jsx"],
            grammar_function="language_tsx",
            aliases=["jsx", "typescriptreact", "javascriptreact"],
        ),
    }

    @classmethod
    def get_language(cls, name: str) -> LanguageConfig | None:
        """Get language configuration by name or alias."""
        key = name.lower()
        if key in cls._languages:
            return cls._languages[key]
        for config in cls._languages.values():
            if key in config.aliases:
                return config
        return None

    @classmethod
    def get_language_for_extension(cls, extension: str) -> LanguageConfig | None:
        """Get language configuration for a file extension."""
        ext = extension.lower()
        if not ext.startswith("."):
            ext = f".{ext}"
        for config in cls._languages.values():
            if ext in config.extensions:
                return config
        return None

    @classmethod
    def get_language_for_path(cls, path: str | Path) -> LanguageConfig | None:
        """Get language configuration for a file path."""
        config = cls.get_language_for_extension(Path(path).suffix)
        if config is None:
            logger.debug("No language for file", path=str(path))
        return config

