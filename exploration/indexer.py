"""
Type index over extracted node trees.

Walks every node reachable through ``context`` children and groups the
tagged ones by ``node_type``, in pre-order.
"""

import logging
import sys
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Set, TextIO, Tuple

from documents.errors import CyclicStructureError
from documents.models import Node, TypeIndex, nodes_from_list

logger = logging.getLogger(__name__)


def index_nodes(roots: Iterable[Node]) -> TypeIndex:
    """Group every node reachable from ``roots`` by its type tag.

    Nodes are visited depth-first, parent before children, children in
    sequence order. Untagged nodes add no entry but their children are
    still visited.

    Args:
        roots: Root nodes, traversed independently in the order given.

    Returns:
        Mapping of type tag to the nodes carrying it, in visitation order.

    Raises:
        CyclicStructureError: If the same node object is reached twice.
    """
    index: TypeIndex = {}
    visited: Set[int] = set()
    visited_count = 0

    for root in roots:
        stack: List[Tuple[Node, int]] = [(root, 0)]
        while stack:
            node, depth = stack.pop()
            if id(node) in visited:
                raise CyclicStructureError(node.node_type, depth)
            visited.add(id(node))
            visited_count += 1

            if node.is_tagged:
                index.setdefault(node.node_type, []).append(node)

            if node.children:
                for child in reversed(node.children):
                    stack.append((child, depth + 1))

    logger.debug(
        "Indexed %d nodes into %d types", visited_count, len(index)
    )
    return index


def index_raw_nodes(raw_nodes: Sequence[Mapping[str, Any]], source: str = "<nodes>") -> TypeIndex:
    """Build nodes from decoded JSON objects and index them."""
    return index_nodes(nodes_from_list(raw_nodes, source=source))


def project_field(index: TypeIndex, node_type: str, field: str) -> List[Optional[Any]]:
    """Return ``field`` from every node in one bucket.

    A node without the field yields None; an unknown bucket yields [].
    """
    return [node.get(field) for node in index.get(node_type, [])]


def print_field(
    index: TypeIndex,
    node_type: str,
    field: str,
    out: Optional[TextIO] = None,
) -> int:
    """Print ``field`` of every node in one bucket, one per line.

    Returns:
        Number of lines printed.
    """
    stream = out if out is not None else sys.stdout
    values = project_field(index, node_type, field)
    for value in values:
        print(value, file=stream)
    return len(values)
