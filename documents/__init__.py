"""
Extraction documents

Models, loading and field-wise merging of the per-translation-unit JSON
documents produced by the C/C++ front-end plugin.
"""

from documents.errors import (
    CyclicStructureError,
    DocumentError,
    DocumentNotFoundError,
    DocumentParseError,
    DocumentReadError,
    MalformedDocumentError,
)
from documents.models import Document, LoadedDocument, Node, TypeIndex, nodes_from_list
from documents.loader import (
    dump_document,
    load_document,
    load_documents,
    load_named_documents,
    resource_path,
)
from documents.merger import MergeStats, merge_documents, merge_documents_with_stats

__all__ = [
    # Errors
    "DocumentError",
    "DocumentNotFoundError",
    "DocumentReadError",
    "DocumentParseError",
    "MalformedDocumentError",
    "CyclicStructureError",
    # Data models
    "Document",
    "LoadedDocument",
    "Node",
    "TypeIndex",
    "nodes_from_list",
    # Loading
    "load_document",
    "load_documents",
    "load_named_documents",
    "resource_path",
    "dump_document",
    # Merging
    "MergeStats",
    "merge_documents",
    "merge_documents_with_stats",
]
