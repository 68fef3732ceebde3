"""Data models for extracted methods and line ranges."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from nest_repl.utils.exceptions import ValidationError

DEFAULT_PARAMETER_TYPE = "any"


@dataclass(frozen=True)
class Parameter:
    """A declared method parameter."""

    name: str
    type: str = DEFAULT_PARAMETER_TYPE
    optional: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {"name": self.name, "type": self.type, "optional": self.optional}


@dataclass(frozen=True)
class MethodInfo:
    """Normalized descriptor of a located method."""

    name: str
    args: tuple[Parameter, ...] = ()
    line: int = 1  # 1-based
    is_async: bool = False

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "name": self.name,
            "args": [arg.to_dict() for arg in self.args],
            "line": self.line,
            "is_async": self.is_async,
        }


@dataclass(frozen=True)
class LineRange:
    """Inclusive 1-based line range."""

    start_line: int
    end_line: int

    def __post_init__(self) -> None:
        if self.start_line < 1:
            msg = f"Line numbers are 1-based, got {self.start_line}"
            raise ValidationError(msg, field="start_line", value=self.start_line)
        if self.start_line > self.end_line:
            msg = f"Invalid range: {self.start_line} > {self.end_line}"
            raise ValidationError(msg, field="end_line", value=self.end_line)

    @classmethod
    def ordered(cls, first: int, second: int) -> "LineRange":
        """Build a range from two lines in either order (e.g. a visual selection)."""
        return cls(min(first, second), max(first, second))

    @property
    def start_row(self) -> int:
        """0-based first row."""
        return self.start_line - 1

    @property
    def end_row(self) -> int:
        """0-based last row."""
        return self.end_line - 1

    def contains(self, line: int) -> bool:
        return self.start_line <= line <= self.end_line

    def within(self, other: "LineRange") -> bool:
        """True when this range is nested in (or equal to) ``other``."""
        return self.start_line >= other.start_line and self.end_line <= other.end_line


class NoticeLevel(Enum):
    """Severity of a message for the user."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Notice:
    """A message the calling layer shows to the user."""

    level: NoticeLevel
    message: str


@dataclass
class ExtractionResult:
    """Outcome of one extraction attempt."""

    class_name: str | None = None
    method: MethodInfo | None = None
    class_names: list[str] = field(default_factory=list)
    methods: list[MethodInfo] = field(default_factory=list)
    range: LineRange | None = None
    notices: list[Notice] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Check if a class and exactly one method were found."""
        return self.class_name is not None and self.method is not None

    @property
    def errors(self) -> list[Notice]:
        return [n for n in self.notices if n.level == NoticeLevel.ERROR]

    @property
    def warnings(self) -> list[Notice]:
        return [n for n in self.notices if n.level == NoticeLevel.WARNING]

    def add(self, level: NoticeLevel, message: str) -> None:
        self.notices.append(Notice(level, message))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "class_name": self.class_name,
            "class_names": list(self.class_names),
            "method": self.method.to_dict() if self.method else None,
            "range": (
                {"start_line": self.range.start_line, "end_line": self.range.end_line}
                if self.range
                else None
            ),
            "notices": [
                {"level": n.level.value, "message": n.message} for n in self.notices
            ],
        }
