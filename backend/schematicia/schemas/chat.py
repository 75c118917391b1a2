from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

from schematicia.schemas.circuit import CircuitPlan
from schematicia.schemas.schematic import SchematicScene


class ChatRole(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseModel):
    role: ChatRole
    content: str


class DesignRequest(BaseModel):
    input: str = Field(..., min_length=1, description="Natural language circuit request")
    history: list[ChatMessage] = Field(default_factory=list)
    model: str | None = None
    temperature: float | None = Field(default=None, ge=0.0, le=2.0)


class DesignResult(BaseModel):
    response: str
    circuit: CircuitPlan
    scene: SchematicScene
