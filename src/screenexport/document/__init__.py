"""Design document module: tree models and screen extraction."""

from .service import extract_screen_nodes, is_screen, iter_nodes
from .views import (
    FRAME_NODE_TYPE,
    BoundingBox,
    DocumentNode,
    FigmaFile,
    ScreenRecord,
    TargetDimensions,
    format_dimension,
)

__all__ = [
    "FRAME_NODE_TYPE",
    "BoundingBox",
    "DocumentNode",
    "FigmaFile",
    "ScreenRecord",
    "TargetDimensions",
    "extract_screen_nodes",
    "format_dimension",
    "is_screen",
    "iter_nodes",
]
