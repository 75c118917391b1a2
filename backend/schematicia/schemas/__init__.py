from schematicia.schemas.circuit import (
    CircuitComponent,
    CircuitConnection,
    CircuitDesignResponse,
    CircuitPlan,
    Position,
)
from schematicia.schemas.chat import ChatMessage, ChatRole, DesignRequest, DesignResult
from schematicia.schemas.schematic import (
    IconKey,
    LayoutConfig,
    RouterConfig,
    SchematicLayout,
    SchematicScene,
)

__all__ = [
    "CircuitComponent",
    "CircuitConnection",
    "CircuitDesignResponse",
    "CircuitPlan",
    "Position",
    "ChatMessage",
    "ChatRole",
    "DesignRequest",
    "DesignResult",
    "IconKey",
    "LayoutConfig",
    "RouterConfig",
    "SchematicLayout",
    "SchematicScene",
]
