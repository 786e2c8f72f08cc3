"""Errors raised while loading, merging and indexing extraction documents."""

from __future__ import annotations

from typing import Optional


class DocumentError(Exception):
    """Base class for all extraction document failures."""


class DocumentReadError(DocumentError):
    """Raised when a document path exists but cannot be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read document {path}: {reason}")


class DocumentNotFoundError(DocumentReadError, FileNotFoundError):
    """Raised when a document path does not exist."""

    def __init__(self, path: str):
        super().__init__(path, "no such file")


class DocumentParseError(DocumentError):
    """Raised when a document is not well-formed JSON."""

    def __init__(self, path: str, message: str, line: int = 0, column: int = 0):
        self.path = path
        self.line = line
        self.column = column
        super().__init__(
            f"Invalid JSON in {path} at line {line} column {column}: {message}"
        )


class MalformedDocumentError(DocumentError):
    """Raised when a document's structure does not match what is read from it.

    ``field`` is ``None`` when the document itself is not a JSON object.
    """

    def __init__(self, source: str, field: Optional[str], actual_type: str):
        self.source = source
        self.field = field
        self.actual_type = actual_type
        if field is None:
            msg = f"Document {source} must be an object, got {actual_type}"
        else:
            msg = (
                f"Document {source}: field '{field}' must be a list, "
                f"got {actual_type}"
            )
        super().__init__(msg)


class CyclicStructureError(DocumentError):
    """Raised when a node is reached twice while walking a node tree."""

    def __init__(self, node_type: Optional[str], depth: int):
        self.node_type = node_type
        self.depth = depth
        super().__init__(
            f"Node of type {node_type!r} revisited at depth {depth}; "
            "node graph is not a tree"
        )
