from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schematicia.schemas.circuit import Position


class IconKey(str, Enum):
    SUPPLY = "supply"
    LED = "led"
    TRANSISTOR = "transistor"
    SWITCH = "switch"
    RESISTOR = "resistor"
    GROUND = "ground"
    GENERIC = "generic"


class LayoutConfig(BaseModel):
    """Canvas constants for the layout engine, in layout units."""

    model_config = ConfigDict(frozen=True)

    node_width: float = Field(default=200, gt=0)
    node_height: float = Field(default=120, gt=0)
    top_padding: float = Field(default=160, ge=0)
    side_padding: float = Field(default=140, ge=0)
    column_gap: float = Field(default=140, ge=0)
    row_gap: float = Field(default=150, ge=0)
    canvas_min_width: float = Field(default=640, gt=0)
    canvas_min_height: float = Field(default=480, gt=0)
    canvas_max_width: float = Field(default=1280, gt=0)
    canvas_max_height: float = Field(default=960, gt=0)

    @model_validator(mode="after")
    def _check_canvas_bounds(self) -> LayoutConfig:
        if self.canvas_min_width > self.canvas_max_width:
            raise ValueError("canvas_min_width must not exceed canvas_max_width")
        if self.canvas_min_height > self.canvas_max_height:
            raise ValueError("canvas_min_height must not exceed canvas_max_height")
        return self


class RouterConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    min_offset: float = Field(default=60, ge=0)
    max_offset: float = Field(default=180, ge=0)
    distance_factor: float = Field(default=0.35, ge=0)
    label_lift: float = 0.25  # fraction of the curvature applied to the label anchor
    label_gap: float = 6
    description_gap: float = 12


class SchematicLayout(BaseModel):
    positions: dict[str, Position] = Field(default_factory=dict)
    width: float
    height: float
    scale: float = Field(default=1.0, gt=0, le=1)


class ConnectionRoute(BaseModel):
    path: str  # "M x y Q cx cy x y"
    start: Position
    end: Position
    control: Position
    label_anchor: Position
    label_position: Position
    description_position: Position
    curvature: float


class SchematicNode(BaseModel):
    id: str
    label: str
    type: str
    icon: IconKey
    center: Position
    origin: Position  # top-left corner of the node box
    width: float
    height: float
    tooltip: str


class SchematicEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str = Field(..., alias="from")
    target: str = Field(..., alias="to")
    label: str | None = None
    description: str | None = None
    tooltip: str
    route: ConnectionRoute


class SchematicScene(BaseModel):
    """Renderable geometry for one circuit plan."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    summary: str
    width: float
    height: float
    scale: float
    nodes: list[SchematicNode] = Field(default_factory=list)
    edges: list[SchematicEdge] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
