"""Connection Router — one quadratic curve per connection.

The bend grows with the distance between endpoints (clamped), and its
direction follows the sign of dy, or of dx for level endpoints, so aligned
nodes never get a straight overlapping line.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from decimal import Decimal

from schematicia.schemas.circuit import CircuitConnection, CircuitPlan, Position
from schematicia.schemas.schematic import ConnectionRoute, RouterConfig


def _fmt(value: float) -> str:
    value = float(value)
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text:
        # path data is plain decimal, 1e-05 becomes 0.00001
        text = format(Decimal(text), "f")
    return text


def _sign(value: float) -> float:
    return math.copysign(1.0, value)


def curvature_for(dx: float, dy: float, config: RouterConfig) -> float:
    offset = min(
        config.max_offset,
        max(config.min_offset, math.hypot(dx, dy) * config.distance_factor),
    )
    if dy == 0:
        return offset * _sign(dx or 1)
    return offset * _sign(dy)


def route(
    start: Position,
    end: Position,
    config: RouterConfig | None = None,
) -> ConnectionRoute:
    config = config or RouterConfig()
    dx = end.x - start.x
    dy = end.y - start.y
    curvature = curvature_for(dx, dy, config)

    control = Position(x=start.x + dx / 2, y=start.y + dy / 2 - curvature)
    label_anchor = Position(
        x=(start.x + end.x) / 2,
        y=(start.y + end.y) / 2 - curvature * config.label_lift,
    )

    path = (
        f"M {_fmt(start.x)} {_fmt(start.y)} "
        f"Q {_fmt(control.x)} {_fmt(control.y)} {_fmt(end.x)} {_fmt(end.y)}"
    )

    return ConnectionRoute(
        path=path,
        start=start,
        end=end,
        control=control,
        label_anchor=label_anchor,
        label_position=Position(x=label_anchor.x, y=label_anchor.y - config.label_gap),
        description_position=Position(
            x=label_anchor.x, y=label_anchor.y + config.description_gap
        ),
        curvature=curvature,
    )


def route_connections(
    plan: CircuitPlan,
    positions: Mapping[str, Position],
    config: RouterConfig | None = None,
) -> list[tuple[str, CircuitConnection, ConnectionRoute]]:
    """Route every connection as ``(resolved_id, connection, route)``.

    Connections with an endpoint missing from ``positions`` are skipped.
    """
    config = config or RouterConfig()
    routed: list[tuple[str, CircuitConnection, ConnectionRoute]] = []
    for index, connection in enumerate(plan.connections):
        start = positions.get(connection.source)
        end = positions.get(connection.target)
        if start is None or end is None:
            continue
        routed.append((connection.resolved_id(index), connection, route(start, end, config)))
    return routed
