"""Design router — generation, parsing and layout endpoints."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from schematicia.ai.llm_schemas import CIRCUIT_DESIGN_SCHEMA, OutputParserError
from schematicia.ai.orchestrator import (
    CompletionError,
    create_client,
    generate_circuit_design,
)
from schematicia.ai.output_parser import circuit_design_parser, validate
from schematicia.schemas.chat import DesignRequest, DesignResult
from schematicia.schemas.circuit import CircuitDesignResponse, CircuitPlan
from schematicia.schemas.schematic import SchematicScene
from schematicia.services.schematic import build_scene

router = APIRouter()


class ParseRequest(BaseModel):
    text: str = Field(..., description="Raw model completion, possibly fenced")


class FormatInstructions(BaseModel):
    instructions: str
    json_schema: dict[str, Any]


def get_completion_client() -> Any:
    try:
        return create_client()
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))


def _unprocessable(error: OutputParserError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail={"error": type(error).__name__, "message": str(error)},
    )


@router.post("/generate", response_model=DesignResult)
async def generate(
    request: DesignRequest,
    client: Any = Depends(get_completion_client),
):
    """NL request → model completion → validated circuit → schematic scene."""
    try:
        design = await generate_circuit_design(
            request.input,
            request.history,
            client=client,
            model=request.model,
            temperature=request.temperature,
        )
    except OutputParserError as e:
        raise _unprocessable(e)
    except CompletionError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))

    return DesignResult(
        response=design.response,
        circuit=design.circuit,
        scene=build_scene(design.circuit),
    )


@router.post("/parse", response_model=CircuitDesignResponse)
async def parse_only(request: ParseRequest):
    """Validate raw completion text without calling the model."""
    try:
        return validate(request.text)
    except OutputParserError as e:
        raise _unprocessable(e)


@router.post("/layout", response_model=SchematicScene)
async def layout_only(plan: CircuitPlan):
    """Compute schematic geometry for an existing plan. Stateless."""
    return build_scene(plan)


@router.get("/format-instructions", response_model=FormatInstructions)
async def format_instructions():
    return FormatInstructions(
        instructions=circuit_design_parser.get_format_instructions(),
        json_schema=CIRCUIT_DESIGN_SCHEMA,
    )
