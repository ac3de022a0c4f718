"""Design document models.

The Figma files endpoint returns a deeply nested JSON tree. Only a few keys
matter here, so every model tolerates (and keeps) unknown keys.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

FRAME_NODE_TYPE = 'FRAME'


def format_dimension(value: float) -> str:
    """Render a pixel dimension the way Figma shows it: 375.0 -> '375', 375.5 -> '375.5'."""
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


class BoundingBox(BaseModel):
    """Axis-aligned rectangle describing a node's rendered extent."""

    model_config = ConfigDict(frozen=True, extra='ignore')

    x: float = 0.0
    y: float = 0.0
    width: float
    height: float

    @property
    def size_label(self) -> str:
        return f'{format_dimension(self.width)}x{format_dimension(self.height)}'


class TargetDimensions(BaseModel):
    """Exact width/height a screen must have to be exported."""

    model_config = ConfigDict(frozen=True)

    width: float
    height: float

    def matches(self, box: BoundingBox | None) -> bool:
        # Exact float equality, no tolerance
        if box is None:
            return False
        return box.width == self.width and box.height == self.height

    def __str__(self) -> str:
        return f'{format_dimension(self.width)}x{format_dimension(self.height)}'


class DocumentNode(BaseModel):
    """A node of the design document tree."""

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    id: str
    name: str = ''
    type: str
    bounding_box: BoundingBox | None = Field(default=None, alias='absoluteBoundingBox')
    children: list[DocumentNode] = Field(default_factory=list)

    # Styling metadata, carried through to ScreenRecord untouched
    background_color: dict[str, Any] | None = Field(default=None, alias='backgroundColor')
    effects: list[dict[str, Any]] | None = None
    constraints: dict[str, Any] | None = None


class FigmaFile(BaseModel):
    """Response envelope of the files endpoint."""

    model_config = ConfigDict(extra='allow', populate_by_name=True)

    name: str = ''
    last_modified: str | None = Field(default=None, alias='lastModified')
    version: str | None = None
    document: DocumentNode

    @property
    def pages(self) -> list[DocumentNode]:
        return self.document.children


class ScreenRecord(BaseModel):
    """A matched FRAME node, projected for export."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str = FRAME_NODE_TYPE
    bounding_box: BoundingBox | None = None
    background_color: dict[str, Any] | None = None
    effects: list[dict[str, Any]] | None = None
    constraints: dict[str, Any] | None = None

    @classmethod
    def from_node(cls, node: DocumentNode) -> ScreenRecord:
        return cls(
            id=node.id,
            name=node.name,
            type=node.type,
            bounding_box=node.bounding_box,
            background_color=node.background_color,
            effects=node.effects,
            constraints=node.constraints,
        )


DocumentNode.model_rebuild()
FigmaFile.model_rebuild()
