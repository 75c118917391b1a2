"""Schematic scene builder

Runs layout and routing for a plan and returns renderable geometry:
node boxes with icons, curved edges with label anchors, canvas size.
"""

from __future__ import annotations

from schematicia.layout.engine import layout
from schematicia.layout.icons import IconClassifier, default_classifier
from schematicia.layout.router import route_connections
from schematicia.schemas.circuit import CircuitPlan, Position
from schematicia.schemas.schematic import (
    LayoutConfig,
    RouterConfig,
    SchematicEdge,
    SchematicNode,
    SchematicScene,
)


def build_scene(
    plan: CircuitPlan,
    layout_config: LayoutConfig | None = None,
    router_config: RouterConfig | None = None,
    classifier: IconClassifier | None = None,
) -> SchematicScene:
    layout_config = layout_config or LayoutConfig()
    classifier = classifier or default_classifier

    result = layout(plan.components, layout_config)

    nodes: list[SchematicNode] = []
    seen: set[str] = set()
    for component in plan.components:
        center = result.positions.get(component.id)
        if center is None or component.id in seen:
            continue
        seen.add(component.id)
        nodes.append(
            SchematicNode(
                id=component.id,
                label=component.label,
                type=component.type,
                icon=classifier.classify(component.type),
                center=center,
                origin=Position(
                    x=center.x - layout_config.node_width / 2,
                    y=center.y - layout_config.node_height / 2,
                ),
                width=layout_config.node_width,
                height=layout_config.node_height,
                tooltip=component.description or component.type,
            )
        )

    edges = [
        SchematicEdge(
            id=edge_id,
            source=connection.source,
            target=connection.target,
            label=connection.label,
            description=connection.description,
            tooltip=(
                connection.description
                or connection.label
                or f"{connection.source} → {connection.target}"
            ),
            route=connection_route,
        )
        for edge_id, connection, connection_route in route_connections(
            plan, result.positions, router_config
        )
    ]

    return SchematicScene(
        title=plan.title,
        summary=plan.summary,
        width=result.width,
        height=result.height,
        scale=result.scale,
        nodes=nodes,
        edges=edges,
        notes=list(plan.notes),
        assumptions=list(plan.assumptions),
        warnings=list(plan.warnings),
    )
