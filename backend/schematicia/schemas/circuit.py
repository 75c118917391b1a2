from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLE = "Esquema propuesto"
DEFAULT_SUMMARY = "Sin resumen disponible."


class Position(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    x: float
    y: float


class CircuitComponent(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    label: str
    type: str  # free text, e.g. "LED", "Resistencia", "Fuente DC"
    description: str | None = None
    pins: int | None = None  # informational pin count
    position: Position | None = None


class CircuitConnection(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str | None = None
    source: str = Field(..., alias="from")
    target: str = Field(..., alias="to")
    label: str | None = None
    description: str | None = None

    def resolved_id(self, index: int) -> str:
        """Explicit id, or one derived from the endpoints and list position."""
        if self.id is not None:
            return self.id
        return f"{self.source}-{self.target}-{index}"


class CircuitPlan(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    summary: str = DEFAULT_SUMMARY
    components: list[CircuitComponent] = Field(default_factory=list)
    connections: list[CircuitConnection] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)
    assumptions: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    def component_ids(self) -> frozenset[str]:
        return frozenset(c.id for c in self.components)

    def to_json(self) -> dict[str, Any]:
        """Interchange shape: JSON keys, optional fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CircuitDesignResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    response: str
    circuit: CircuitPlan

    def to_json(self) -> dict[str, Any]:
        return {"response": self.response, "circuit": self.circuit.to_json()}
