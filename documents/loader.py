"""
Reading and writing persisted extraction documents.

Each document is one JSON object per file, as written by the front-end
plugin. Every failure is mapped to an error from ``documents.errors`` so
callers can report the offending path and abort.
"""

import json
import logging
import os
from typing import Any, Dict, Iterable, List, Mapping, TextIO

from documents.config import DOCUMENT_SUFFIX, JSON_INDENT
from documents.errors import (
    DocumentNotFoundError,
    DocumentParseError,
    DocumentReadError,
    MalformedDocumentError,
)
from documents.models import LoadedDocument

logger = logging.getLogger(__name__)


def _read_text(path: str) -> str:
    if not os.path.exists(path):
        raise DocumentNotFoundError(path)
    if os.path.isdir(path):
        raise DocumentReadError(path, "is a directory")
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as exc:
        raise DocumentReadError(path, f"not valid UTF-8 ({exc.reason})") from exc
    except OSError as exc:
        raise DocumentReadError(path, exc.strerror or str(exc)) from exc


def load_document(path: str) -> Dict[str, Any]:
    """Read one extraction document.

    Args:
        path: Path to a JSON file holding a single top-level object.

    Returns:
        The decoded object.

    Raises:
        DocumentNotFoundError: If the path does not exist.
        DocumentReadError: If the path cannot be read.
        DocumentParseError: If the content is not well-formed JSON.
        MalformedDocumentError: If the top-level value is not an object.
    """
    text = _read_text(path)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise DocumentParseError(path, exc.msg, exc.lineno, exc.colno) from exc

    if not isinstance(payload, dict):
        raise MalformedDocumentError(path, None, type(payload).__name__)

    logger.debug("Loaded document %s (%d fields)", path, len(payload))
    return payload


def load_documents(paths: Iterable[str]) -> List[LoadedDocument]:
    """Read documents in order, aborting on the first failure."""
    loaded: List[LoadedDocument] = []
    for path in paths:
        payload = load_document(path)
        loaded.append(LoadedDocument(name=path, path=path, payload=payload))
    logger.info("Loaded %d documents", len(loaded))
    return loaded


def resource_path(directory: str, name: str) -> str:
    """Path of the fixed-name document ``<name>.json`` inside ``directory``."""
    return os.path.join(directory, f"{name}{DOCUMENT_SUFFIX}")


def load_named_documents(
    directory: str,
    names: Iterable[str],
    strict: bool = False,
) -> List[LoadedDocument]:
    """Read fixed-name documents (``macros.json``, ``functions.json``, ...).

    Fixed-name resources may legitimately hold any JSON value (the plugin
    writes ``macros.json`` as a bare mapping of name -> definition list), so
    the top-level shape is not checked here.

    In non-strict mode a missing file is skipped with a warning. In strict
    mode it raises ``DocumentNotFoundError``. Parse and read errors are
    always raised.
    """
    loaded: List[LoadedDocument] = []
    for name in names:
        path = resource_path(directory, name)
        try:
            text = _read_text(path)
        except DocumentNotFoundError:
            if strict:
                raise
            logger.warning("Resource '%s' not found at %s; skipping", name, path)
            continue
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise DocumentParseError(path, exc.msg, exc.lineno, exc.colno) from exc
        loaded.append(LoadedDocument(name=name, path=path, payload=payload))
        logger.info("Loaded resource '%s' from %s", name, path)
    return loaded


def dump_document(document: Mapping[str, Any], stream: TextIO) -> None:
    """Write a document as indented JSON followed by a newline."""
    json.dump(document, stream, indent=JSON_INDENT, ensure_ascii=False)
    stream.write("\n")
