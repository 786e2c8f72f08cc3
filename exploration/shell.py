"""Interactive console for ad hoc inspection of loaded extraction documents."""

from __future__ import annotations

import code
import keyword
import logging
from typing import Any, Callable, Optional

from exploration.context import ExplorationContext

logger = logging.getLogger(__name__)

RESERVED_NAMES = ("ctx", "types", "print_field", "project_field")


def build_namespace(ctx: ExplorationContext) -> dict[str, Any]:
    """Console globals: each loaded document by name plus the index helpers."""
    namespace: dict[str, Any] = {}
    for name, payload in ctx.documents.items():
        if not name.isidentifier() or keyword.iskeyword(name) or name in RESERVED_NAMES:
            logger.warning(
                "Document '%s' is not a usable variable name; use ctx.document(%r)",
                name,
                name,
            )
            continue
        namespace[name] = payload
    namespace["ctx"] = ctx
    namespace["types"] = ctx.types
    namespace["print_field"] = ctx.print_field
    namespace["project_field"] = ctx.project_field
    return namespace


def make_banner(ctx: ExplorationContext) -> str:
    loaded = ", ".join(ctx.names()) or "(none)"
    return (
        f"Loaded documents: {loaded}\n"
        "  types(name_or_nodes, field_name=None) -> {node_type: [nodes]}\n"
        "  print_field(index, node_type, field_name)\n"
        "  project_field(index, node_type, field_name) -> [values]"
    )


def start_shell(
    ctx: ExplorationContext,
    banner: Optional[str] = None,
    console_factory: Callable[..., code.InteractiveConsole] = code.InteractiveConsole,
) -> None:
    """Run an interactive console until EOF."""
    console = console_factory(locals=build_namespace(ctx))
    console.interact(
        banner=banner if banner is not None else make_banner(ctx),
        exitmsg="",
    )
