"""
Configuration constants for extraction documents.

Defines the JSON keys the front-end plugin emits and the default field
sets used by the merge and exploration tools.
"""

from typing import Tuple

# Key holding a node's type tag
NODE_TYPE_KEY: str = "node_type"

# Key holding a node's nested child nodes
CHILDREN_KEY: str = "context"

# Fields aggregated by the merge tool
DEFAULT_MERGE_FIELDS: Tuple[str, ...] = (
    "macros",
    "functions",
    "enums",
)

# Fixed-name documents preloaded into the exploration shell
DEFAULT_EXPLORE_RESOURCES: Tuple[str, ...] = (
    "macros",
    "functions",
    "structs",
    "typedefs",
)

# Extension of persisted extraction documents
DOCUMENT_SUFFIX: str = ".json"

# Indentation of merged output
JSON_INDENT: int = 2

# Merge policy defaults
DEFAULT_STRICT_FIELDS: bool = False
