"""
Exploration

Type indexing of extracted node trees and the interactive console used to
inspect loaded extraction documents.
"""

from exploration.indexer import index_nodes, index_raw_nodes, print_field, project_field
from exploration.context import ExplorationContext, load_exploration_context
from exploration.shell import build_namespace, start_shell

__all__ = [
    # Indexing
    "index_nodes",
    "index_raw_nodes",
    "project_field",
    "print_field",
    # Session
    "ExplorationContext",
    "load_exploration_context",
    "build_namespace",
    "start_shell",
]
