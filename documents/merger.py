"""
Field-wise merge of per-translation-unit extraction documents.

Each configured field of the aggregate is the concatenation, in input
order, of that field across all input documents. Fields outside the
configured set are dropped.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Iterable, List, Optional, Tuple

from documents.config import DEFAULT_STRICT_FIELDS
from documents.errors import MalformedDocumentError
from documents.models import Document

logger = logging.getLogger(__name__)


class MergeStats:
    """Statistics for a merge operation."""

    def __init__(self, fields: Iterable[str] = ()):
        self.documents_merged = 0
        self.field_counts: Dict[str, int] = {name: 0 for name in fields}
        self.missing_fields: Dict[str, int] = {name: 0 for name in fields}

    @property
    def total_elements(self) -> int:
        return sum(self.field_counts.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "documents_merged": self.documents_merged,
            "field_counts": dict(self.field_counts),
            "missing_fields": dict(self.missing_fields),
            "total_elements": self.total_elements,
        }

    def __str__(self) -> str:
        """String representation of stats."""
        return (
            f"MergeStats(documents={self.documents_merged}, "
            f"elements={self.total_elements}, fields={self.field_counts})"
        )


def _ordered_fields(fields: Iterable[str]) -> List[str]:
    """Caller order, duplicates collapsed."""
    ordered: List[str] = []
    for name in fields:
        if name not in ordered:
            ordered.append(name)
    return ordered


def _is_sequence(value: Any) -> bool:
    # str and bytes are Sequences but never a list of entries
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def merge_documents_with_stats(
    documents: Sequence[Document],
    fields: Iterable[str],
    sources: Optional[Sequence[str]] = None,
    strict_fields: bool = DEFAULT_STRICT_FIELDS,
) -> Tuple[Dict[str, List[Any]], MergeStats]:
    """Merge documents and report per-field counts.

    Args:
        documents: Documents in the order their entries should appear.
        fields: Field names to aggregate; all other fields are dropped.
        sources: Optional labels (usually file paths) parallel to
            ``documents``, used in error messages.
        strict_fields: Treat a configured field missing from a document
            as malformed instead of empty.

    Returns:
        Tuple of (aggregate document, statistics).

    Raises:
        MalformedDocumentError: If a document is not a mapping, or a
            configured field holds something other than a list.
        ValueError: If ``sources`` does not match ``documents`` in length.
    """
    if sources is not None and len(sources) != len(documents):
        raise ValueError(
            f"Got {len(sources)} source labels for {len(documents)} documents"
        )

    ordered = _ordered_fields(fields)
    aggregate: Dict[str, List[Any]] = {name: [] for name in ordered}
    stats = MergeStats(ordered)

    for position, document in enumerate(documents):
        source = sources[position] if sources is not None else f"#{position}"
        if not isinstance(document, Mapping):
            raise MalformedDocumentError(source, None, type(document).__name__)

        for name in ordered:
            value = document.get(name)
            if value is None:
                if strict_fields:
                    raise MalformedDocumentError(source, name, "missing")
                logger.debug("Document %s has no '%s'; treating as empty", source, name)
                stats.missing_fields[name] += 1
                continue
            if not _is_sequence(value):
                raise MalformedDocumentError(source, name, type(value).__name__)
            aggregate[name].extend(value)
            stats.field_counts[name] += len(value)

        stats.documents_merged += 1

    logger.info("Merged %s", stats)
    return aggregate, stats


def merge_documents(
    documents: Sequence[Document],
    fields: Iterable[str],
    sources: Optional[Sequence[str]] = None,
    strict_fields: bool = DEFAULT_STRICT_FIELDS,
) -> Dict[str, List[Any]]:
    """Merge documents into one aggregate document.

    See ``merge_documents_with_stats`` for arguments and errors.
    """
    aggregate, _ = merge_documents_with_stats(
        documents, fields, sources=sources, strict_fields=strict_fields
    )
    return aggregate
