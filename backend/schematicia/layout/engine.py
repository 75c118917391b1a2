"""Schematic Layout Engine

Places every component of a plan on a bounded 2-D canvas:

  1. Components with an explicit position keep it.
  2. The rest go on a grid whose column count grows with the component count.
  3. All centers are scaled (never enlarged) into the canvas budget,
     then centered inside the clamped canvas.

Pure and deterministic: same components and config give the same output.
"""

from __future__ import annotations

import math
import sys
from collections.abc import Sequence

from schematicia.schemas.circuit import CircuitComponent, Position
from schematicia.schemas.schematic import LayoutConfig, SchematicLayout


def column_count(component_count: int) -> int:
    if component_count > 6:
        return 4
    if component_count > 4:
        return 3
    return 2


def _grid_position(index: int, columns: int, config: LayoutConfig) -> Position:
    column_width = config.node_width + config.column_gap
    column = index % columns
    row = index // columns
    return Position(
        x=config.side_padding + column * column_width + config.node_width / 2,
        y=config.top_padding + row * config.row_gap,
    )


def place_components(
    components: Sequence[CircuitComponent],
    config: LayoutConfig,
) -> dict[str, Position]:
    """Raw (unscaled) centers keyed by component id, in component order.

    A repeated id keeps the first component's position.
    """
    columns = column_count(len(components))
    positions: dict[str, Position] = {}

    for index, component in enumerate(components):
        if component.id in positions:
            continue
        if component.position is not None:
            positions[component.id] = component.position
        else:
            positions[component.id] = _grid_position(index, columns, config)

    if len(components) == 1 and components[0].position is None:
        positions[components[0].id] = Position(
            x=config.side_padding + config.node_width / 2,
            y=config.top_padding,
        )

    return positions


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def _fit(available: float, low: float, high: float) -> float:
    span = high - low
    if math.isinf(span):
        # extreme finite coordinates overflow the span, halve both sides
        return (available / 2) / (high / 2 - low / 2)
    return available / max(span, 1)


def _scaled(value: float, origin: float, scale: float) -> float:
    delta = value - origin
    if math.isinf(delta):
        return value * scale - origin * scale
    return delta * scale


def layout(
    components: Sequence[CircuitComponent],
    config: LayoutConfig | None = None,
) -> SchematicLayout:
    """Compute final coordinates and canvas size for ``components``."""
    config = config or LayoutConfig()
    raw = place_components(components, config)

    if not raw:
        return SchematicLayout(
            positions={},
            width=config.canvas_min_width,
            height=config.canvas_min_height,
            scale=1.0,
        )

    min_x = min(p.x for p in raw.values())
    max_x = max(p.x for p in raw.values())
    min_y = min(p.y for p in raw.values())
    max_y = max(p.y for p in raw.values())

    available_width = max(config.canvas_max_width - config.side_padding * 2, 1)
    available_height = max(
        config.canvas_max_height - config.top_padding - config.node_height, 1
    )
    scale = min(
        _fit(available_width, min_x, max_x),
        _fit(available_height, min_y, max_y),
        1,
    )
    scale = max(scale, sys.float_info.min)

    content_width = _scaled(max_x, min_x, scale)
    content_height = _scaled(max_y, min_y, scale)
    raw_width = content_width + config.side_padding * 2
    raw_height = content_height + config.top_padding + config.node_height
    width = _clamp(raw_width, config.canvas_min_width, config.canvas_max_width)
    height = _clamp(raw_height, config.canvas_min_height, config.canvas_max_height)

    # Content smaller than the minimum canvas is centered in the slack
    offset_x = config.side_padding + max(0, (width - raw_width) / 2)
    offset_y = config.top_padding + max(0, (height - raw_height) / 2)

    positions = {
        component_id: Position(
            x=_scaled(p.x, min_x, scale) + offset_x,
            y=_scaled(p.y, min_y, scale) + offset_y,
        )
        for component_id, p in raw.items()
    }

    return SchematicLayout(
        positions=positions,
        width=width,
        height=height,
        scale=float(scale),
    )
