"""Locate the innermost function-like node around a line."""

from nest_repl.logger import get_logger
from nest_repl.models import LineRange
from nest_repl.parser.queries import FUNCTIONS_QUERY
from nest_repl.parser.source_tree import SourceTree
from nest_repl.utils.exceptions import ValidationError

logger = get_logger(__name__)


def find_enclosing_method(tree: SourceTree, cursor_line: int) -> LineRange | None:
    """Range of the innermost function, method or arrow function containing a line.

    ``cursor_line`` is 1-based. Returns None when no function-like node
    contains the line.
    """
    if cursor_line < 1:
        msg = f"Line numbers are 1-based, got {cursor_line}"
        raise ValidationError(msg, field="cursor_line", value=cursor_line)

    query = tree.query(FUNCTIONS_QUERY)
    if query is None:
        return None

    nodes = [
        node
        for _, captures in tree.matches(query)
        for node in captures.get("function", [])
    ]
    # Outer functions before the functions nested in them
    nodes.sort(key=lambda n: (n.start_byte, -n.end_byte))

    found: LineRange | None = None
    for node in nodes:
        span = LineRange(node.start_point[0] + 1, node.end_point[0] + 1)
        if not span.contains(cursor_line):
            continue
        if found is None or span.within(found):
            found = span

    if found is None:
        logger.debug("No function encloses line", line=cursor_line)
        return None

    logger.debug(
        "Found enclosing function",
        line=cursor_line,
        start_line=found.start_line,
        end_line=found.end_line,
    )
    return found
