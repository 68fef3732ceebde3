"""Class name resolution."""

from nest_repl.logger import get_logger
from nest_repl.parser.queries import CLASS_NAMES_QUERY
from nest_repl.parser.source_tree import SourceTree

logger = get_logger(__name__)


def find_class_names(tree: SourceTree) -> list[str]:
    """Names of all declared classes, in declaration order.

    Returns an empty list when the file declares no class or the query
    cannot be compiled.
    """
    query = tree.query(CLASS_NAMES_QUERY)
    if query is None:
        return []

    name_nodes = [
        node
        for _, captures in tree.matches(query)
        for node in captures.get("class_name", [])
    ]
    name_nodes.sort(key=lambda n: n.start_byte)

    class_names = [tree.node_text(node) for node in name_nodes]
    logger.debug("Resolved class names", class_names=class_names)
    return class_names
