"""
Data models for extraction documents and their nodes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple, Union

from documents.config import CHILDREN_KEY, NODE_TYPE_KEY
from documents.errors import CyclicStructureError, MalformedDocumentError

# A document maps field names (macros, functions, ...) to ordered sequences.
Document = Mapping[str, Any]

# Type tag -> nodes carrying that tag, in traversal order.
TypeIndex = Dict[str, List["Node"]]


@dataclass(eq=False)
class Node:
    """One extracted program entity (macro, function, enum value, ...).

    Only the type tag and the children are interpreted; every other key the
    front-end emitted is carried through untouched in ``payload``.

    Attributes:
        node_type: Type tag from the ``node_type`` key, or None when untagged.
        children: Nested nodes from the ``context`` key, or None for leaves.
        payload: All remaining keys (name, location, signature, ...).
    """

    node_type: Optional[str] = None
    children: Optional[List["Node"]] = None
    payload: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_tagged(self) -> bool:
        return bool(self.node_type)

    def get(self, name: str, default: Any = None) -> Any:
        """Return a field by its document key, or ``default`` when absent."""
        if name == NODE_TYPE_KEY:
            return self.node_type if self.node_type is not None else default
        if name == CHILDREN_KEY:
            if self.children is None:
                return default
            return self.to_dict()[CHILDREN_KEY]
        return self.payload.get(name, default)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the node tree back to a JSON-serializable dictionary.

        Returns:
            Dictionary with the same key set the node was built from.

        Raises:
            CyclicStructureError: If a node is reached twice below this one.
        """
        root: Dict[str, Any] = {}
        visited: Set[int] = set()
        stack: List[Tuple[Node, Dict[str, Any], int]] = [(self, root, 0)]
        while stack:
            node, result, depth = stack.pop()
            if id(node) in visited:
                raise CyclicStructureError(node.node_type, depth)
            visited.add(id(node))

            if node.node_type is not None:
                result[NODE_TYPE_KEY] = node.node_type
            result.update(node.payload)
            if node.children is not None:
                converted: List[Dict[str, Any]] = [{} for _ in node.children]
                result[CHILDREN_KEY] = converted
                for child, target in zip(node.children, converted):
                    stack.append((child, target, depth + 1))
        return root

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], source: str = "<node>") -> "Node":
        """Build a node tree from a raw JSON object.

        Args:
            raw: Decoded JSON object for one entity.
            source: Label used in error messages.

        Returns:
            The node with all nested ``context`` children converted.

        Raises:
            MalformedDocumentError: If the object, its type tag or its
                children are not of the expected JSON shape.
            CyclicStructureError: If the same raw object is reached twice.
        """
        visited: Set[int] = set()
        root: Optional[Node] = None
        # (raw object, label, depth, parent children list, slot in that list)
        stack: List[Tuple[Any, str, int, Optional[List[Any]], int]] = [
            (raw, source, 0, None, 0)
        ]
        while stack:
            item, label, depth, siblings, slot = stack.pop()
            if not isinstance(item, Mapping):
                raise MalformedDocumentError(label, None, type(item).__name__)

            node_type = item.get(NODE_TYPE_KEY)
            if node_type is not None and not isinstance(node_type, str):
                raise MalformedDocumentError(
                    label, NODE_TYPE_KEY, type(node_type).__name__
                )
            if id(item) in visited:
                raise CyclicStructureError(node_type, depth)
            visited.add(id(item))

            children: Optional[List[Node]] = None
            raw_children = item.get(CHILDREN_KEY)
            if raw_children is not None:
                if not isinstance(raw_children, list):
                    raise MalformedDocumentError(
                        label, CHILDREN_KEY, type(raw_children).__name__
                    )
                children = [None] * len(raw_children)
                for idx, child in enumerate(raw_children):
                    stack.append(
                        (child, f"{label}.{CHILDREN_KEY}[{idx}]", depth + 1, children, idx)
                    )

            payload = {
                key: value
                for key, value in item.items()
                if key not in (NODE_TYPE_KEY, CHILDREN_KEY)
            }
            node = cls(node_type=node_type, children=children, payload=payload)
            if siblings is None:
                root = node
            else:
                siblings[slot] = node
        return root


def nodes_from_list(
    raw_nodes: Sequence[Union[Mapping[str, Any], Node]],
    source: str = "<nodes>",
) -> List[Node]:
    """Convert a list of raw JSON objects into nodes, keeping existing nodes."""
    return [
        item if isinstance(item, Node) else Node.from_dict(item, source=f"{source}[{idx}]")
        for idx, item in enumerate(raw_nodes)
    ]


@dataclass
class LoadedDocument:
    """An extraction document read from disk.

    Attributes:
        name: Short label (file stem for fixed-name resources, else the path).
        path: Path the document was read from.
        payload: Decoded top-level JSON value (an object for merge inputs).
    """

    name: str
    path: str
    payload: Any
