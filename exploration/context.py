"""Explicit holder for the documents loaded into an exploration session."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Sequence, TextIO, Union

from documents.config import DEFAULT_EXPLORE_RESOURCES
from documents.loader import load_named_documents
from documents.models import LoadedDocument, Node, TypeIndex, nodes_from_list
from exploration.indexer import index_nodes, print_field, project_field

logger = logging.getLogger(__name__)

NodeSource = Union[str, Sequence[Any]]


def _node_objects(values: Iterable[Any]) -> list[Any]:
    # Scalars in a field (e.g. merged name lists) are not nodes.
    return [v for v in values if isinstance(v, (dict, Node))]


@dataclass
class ExplorationContext:
    """Named documents available to an exploration session."""

    documents: dict[str, Any] = field(default_factory=dict)
    paths: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_loaded(cls, loaded: Iterable[LoadedDocument]) -> "ExplorationContext":
        ctx = cls()
        for doc in loaded:
            ctx.add(doc.name, doc.payload, path=doc.path)
        return ctx

    def add(self, name: str, payload: Any, path: Optional[str] = None) -> None:
        if name in self.documents:
            logger.warning("Replacing loaded document '%s'", name)
        self.documents[name] = payload
        if path is not None:
            self.paths[name] = path

    def names(self) -> list[str]:
        return list(self.documents)

    def document(self, name: str) -> Any:
        try:
            return self.documents[name]
        except KeyError:
            raise KeyError(
                f"No document named '{name}'; loaded: {', '.join(self.names()) or '(none)'}"
            ) from None

    def roots(self, name: str, field_name: Optional[str] = None) -> list[Node]:
        """Root nodes of a loaded document.

        With ``field_name`` only that field's entries are used. Otherwise a
        list document yields its items and a mapping document yields the
        concatenation of its list-valued fields in key order.
        """
        payload = self.document(name)
        if field_name is not None:
            if not isinstance(payload, dict):
                raise TypeError(f"Document '{name}' has no fields")
            values = payload.get(field_name) or []
            if not isinstance(values, list):
                raise TypeError(
                    f"Field '{field_name}' of '{name}' is {type(values).__name__}, not a list"
                )
            raw = _node_objects(values)
        elif isinstance(payload, list):
            raw = _node_objects(payload)
        elif isinstance(payload, dict):
            raw = []
            for key, values in payload.items():
                if isinstance(values, list):
                    raw.extend(_node_objects(values))
                else:
                    logger.debug("Skipping non-list field '%s' of '%s'", key, name)
        else:
            raw = []
        return nodes_from_list(raw, source=name)

    def types(self, target: NodeSource, field_name: Optional[str] = None) -> TypeIndex:
        """Type index for a loaded document (by name) or an explicit node list."""
        if isinstance(target, str):
            return index_nodes(self.roots(target, field_name))
        return index_nodes(nodes_from_list(_node_objects(target)))

    def project_field(self, index: TypeIndex, node_type: str, field_name: str) -> list[Any]:
        return project_field(index, node_type, field_name)

    def print_field(
        self,
        index: TypeIndex,
        node_type: str,
        field_name: str,
        out: Optional[TextIO] = None,
    ) -> int:
        return print_field(index, node_type, field_name, out=out)


def load_exploration_context(
    directory: str = ".",
    resources: Sequence[str] = DEFAULT_EXPLORE_RESOURCES,
    strict: bool = False,
) -> ExplorationContext:
    """Build a context preloaded with ``<resource>.json`` files from ``directory``."""
    loaded = load_named_documents(directory, resources, strict=strict)
    ctx = ExplorationContext.from_loaded(loaded)
    logger.info(
        "Exploration context ready: %d of %d resources loaded",
        len(ctx.documents),
        len(resources),
    )
    return ctx
