"""Structured output validation for circuit design completions.

The model returns loosely shaped JSON. Validation is fail-hard at the
structural level and fail-soft at the leaves:

1. The root must be an object with a string ``response`` and an object
   ``circuit``; anything else raises ``SchemaError``.
2. Inside ``circuit`` every field is probed with a small combinator that
   returns ``None`` on a mismatch. Bad components and connections are
   dropped one by one, bad scalars fall back to their defaults.

Connections are checked against the component ids that survived step 2,
so every returned connection references an existing component.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Callable, TypeVar

from schematicia.schemas.circuit import (
    DEFAULT_SUMMARY,
    DEFAULT_TITLE,
    CircuitComponent,
    CircuitConnection,
    CircuitDesignResponse,
    CircuitPlan,
    Position,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Explicit positions beyond this magnitude are dropped like malformed ones
MAX_COORDINATE = 1e9


# ─── Format Instructions ───

FORMAT_INSTRUCTIONS = (
    'Devuelve un objeto JSON con la forma { "response": string, "circuit": '
    '{ "title": string, "summary": string, "components": Array<Component>, '
    '"connections": Array<Connection>, "notes": string[], "assumptions": string[], '
    '"warnings": string[] } }. Cada Component debe tener id, label, type y '
    "opcionalmente description, pins, position (con x e y numéricos). Cada "
    "Connection requiere from y to que coincidan con ids de componentes y puede "
    "incluir label, description e id."
)

CIRCUIT_DESIGN_SCHEMA: dict[str, Any] = CircuitDesignResponse.model_json_schema(
    by_alias=True
)


# ─── Errors ───


class OutputParserError(Exception):
    """Base class for completions that cannot be turned into a design."""

    def __init__(self, message: str, raw_output: str = ""):
        self.raw_output = raw_output
        super().__init__(message)


class ParseError(OutputParserError):
    """Completion text is not valid JSON after fence stripping."""


class SchemaError(OutputParserError):
    """Required top-level fields are absent or have the wrong type."""

    def __init__(self, reason: str, raw_output: str = ""):
        self.reason = reason
        super().__init__(reason, raw_output)


# ─── Field Combinators ───


def _string(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _number(value: Any) -> float | None:
    # bool is an int subclass, JSON true/false are not numbers here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        as_float = float(value)
    except OverflowError:
        return None
    if not math.isfinite(as_float):
        return None
    return value


def _integer(value: Any) -> int | None:
    number = _number(value)
    if number is None or not float(number).is_integer():
        return None
    return int(number)


def _record(value: Any) -> dict[str, Any] | None:
    return value if isinstance(value, dict) else None


def _array(value: Any) -> list[Any] | None:
    return value if isinstance(value, list) else None


def _string_list(value: Any) -> list[str]:
    items = _array(value)
    if items is None:
        return []
    return [item for item in items if isinstance(item, str)]


def _position(value: Any) -> Position | None:
    data = _record(value)
    if data is None:
        return None
    x = _number(data.get("x"))
    y = _number(data.get("y"))
    if x is None or y is None:
        return None
    if abs(x) > MAX_COORDINATE or abs(y) > MAX_COORDINATE:
        return None
    return Position(x=x, y=y)


def _collect(items: list[Any], build: Callable[[Any], T | None], kind: str) -> list[T]:
    """Build every element, dropping the ones that fail."""
    result: list[T] = []
    for index, item in enumerate(items):
        built = build(item)
        if built is None:
            logger.debug("Dropped malformed %s at index %d", kind, index)
            continue
        result.append(built)
    return result


# ─── Record Builders ───


def validate_component(value: Any) -> CircuitComponent | None:
    """Return a component, or None if id/label/type are missing or mistyped."""
    data = _record(value)
    if data is None:
        return None

    component_id = _string(data.get("id"))
    label = _string(data.get("label"))
    component_type = _string(data.get("type"))
    if not component_id or label is None or component_type is None:
        return None

    pins = _integer(data.get("pins"))
    if pins is None:
        pins = _integer(data.get("pinCount"))

    return CircuitComponent(
        id=component_id,
        label=label,
        type=component_type,
        description=_string(data.get("description")),
        pins=pins,
        position=_position(data.get("position")),
    )


def validate_connection(
    value: Any, component_ids: frozenset[str] | set[str]
) -> CircuitConnection | None:
    """Return a connection whose endpoints are both known component ids."""
    data = _record(value)
    if data is None:
        return None

    source = _string(data.get("from"))
    target = _string(data.get("to"))
    if source is None or target is None:
        return None
    if source not in component_ids or target not in component_ids:
        return None

    return CircuitConnection(
        id=_string(data.get("id")),
        source=source,
        target=target,
        label=_string(data.get("label")),
        description=_string(data.get("description")),
    )


def _unique_components(components: list[CircuitComponent]) -> list[CircuitComponent]:
    """Keep the first component seen for each id."""
    seen: set[str] = set()
    unique: list[CircuitComponent] = []
    for component in components:
        if component.id in seen:
            logger.warning("Dropped duplicate component id '%s'", component.id)
            continue
        seen.add(component.id)
        unique.append(component)
    return unique


def validate_circuit_plan(value: Any) -> CircuitPlan:
    """Build a plan from an untyped value. Never raises.

    A non-object yields the default empty plan.
    """
    data = _record(value)
    if data is None:
        return CircuitPlan()

    title = _string(data.get("title"))
    summary = _string(data.get("summary"))

    raw_components = _array(data.get("components")) or []
    components = _unique_components(
        _collect(raw_components, validate_component, "component")
    )
    component_ids = frozenset(c.id for c in components)

    raw_connections = _array(data.get("connections")) or []
    connections = _collect(
        raw_connections,
        lambda item: validate_connection(item, component_ids),
        "connection",
    )

    return CircuitPlan(
        title=title if title is not None else DEFAULT_TITLE,
        summary=summary if summary is not None else DEFAULT_SUMMARY,
        components=components,
        connections=connections,
        notes=_string_list(data.get("notes")),
        assumptions=_string_list(data.get("assumptions")),
        warnings=_string_list(data.get("warnings")),
    )


def validate_circuit_design(value: Any) -> CircuitDesignResponse:
    """Validate a parsed completion as ``{response, circuit}``.

    Raises:
        SchemaError: root is not an object, ``response`` is not a string,
            or ``circuit`` is not an object.
    """
    data = _record(value)
    if data is None:
        raise SchemaError("invalid root")

    response = _string(data.get("response"))
    if response is None:
        raise SchemaError("missing response")

    circuit = _record(data.get("circuit"))
    if circuit is None:
        raise SchemaError("missing circuit")

    return CircuitDesignResponse(
        response=response,
        circuit=validate_circuit_plan(circuit),
    )
