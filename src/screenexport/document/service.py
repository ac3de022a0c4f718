"""Screen extraction from the design document tree."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from screenexport.document.views import (
    FRAME_NODE_TYPE,
    DocumentNode,
    ScreenRecord,
    TargetDimensions,
)

logger = logging.getLogger(__name__)


def iter_nodes(nodes: Sequence[DocumentNode]) -> Iterator[DocumentNode]:
    """Yield every node of the forest in depth-first pre-order (document order)."""
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def is_screen(
    node: DocumentNode,
    target_dimensions: TargetDimensions | None = None,
    node_type: str = FRAME_NODE_TYPE,
) -> bool:
    """Check whether a node is a screen that should be exported."""
    if node.type != node_type:
        return False
    if target_dimensions is None:
        return True
    return target_dimensions.matches(node.bounding_box)


def extract_screen_nodes(
    nodes: Sequence[DocumentNode],
    target_dimensions: TargetDimensions | None = None,
    node_type: str = FRAME_NODE_TYPE,
) -> list[ScreenRecord]:
    """
    Collect the screens (FRAME nodes) of a document tree.

    The whole tree is walked, not just the top level, and traversal always
    continues into the children of a matched node. A matching frame nested in
    another matching frame therefore yields two records.

    Args:
        nodes: Root nodes to walk (usually the document pages)
        target_dimensions: Exact size filter, or None to keep every frame
        node_type: Node type tag to select

    Returns:
        Matched screens in document order
    """
    screens = [
        ScreenRecord.from_node(node)
        for node in iter_nodes(nodes)
        if is_screen(node, target_dimensions, node_type)
    ]
    logger.debug(f'Extracted {len(screens)} {node_type} node(s)')
    return screens
