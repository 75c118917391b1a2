"""Unit tests for curved connection routing."""

import pytest

from schematicia.layout.router import route, route_connections
from schematicia.schemas.circuit import CircuitConnection, CircuitPlan, Position
from schematicia.schemas.schematic import RouterConfig


def _p(x: float, y: float) -> Position:
    return Position(x=x, y=y)


class TestRoute:
    def test_horizontal_left_to_right(self):
        r = route(_p(0, 0), _p(200, 0))
        assert r.curvature == 70
        assert r.control == _p(100, -70)
        assert r.label_anchor == _p(100, -17.5)
        assert r.label_position == _p(100, -23.5)
        assert r.description_position == _p(100, -5.5)
        assert r.path == "M 0 0 Q 100 -70 200 0"

    def test_horizontal_right_to_left_bends_the_other_way(self):
        r = route(_p(200, 0), _p(0, 0))
        assert r.curvature == -70
        assert r.control == _p(100, 70)

    def test_vertical_downward(self):
        r = route(_p(0, 0), _p(0, 100))
        assert r.curvature == 60  # 35 clamped up to the minimum
        assert r.control == _p(0, -10)

    def test_vertical_upward(self):
        r = route(_p(0, 100), _p(0, 0))
        assert r.curvature == -60
        assert r.control == _p(0, 110)

    def test_far_endpoints_clamped(self):
        r = route(_p(0, 0), _p(1000, 0))
        assert r.curvature == 180

    def test_coincident_endpoints(self):
        r = route(_p(10, 10), _p(10, 10))
        assert r.curvature == 60
        assert r.control == _p(10, -50)

    def test_fractional_path(self):
        r = route(_p(0, 0), _p(3, 1))
        assert r.path == "M 0 0 Q 1.5 -59.5 3 1"

    def test_tiny_values_without_exponent(self):
        r = route(_p(0, 0), _p(0.00001, 0))
        assert r.path == "M 0 0 Q 0.000005 -60 0.00001 0"

    @pytest.mark.parametrize("value", [1e-7, 1.5e-10, -2.5e-6, 1e22, 123456.789])
    def test_plain_decimal_numbers(self, value):
        r = route(_p(value, value), _p(0, 0))
        assert "e" not in r.path.lower()
        assert float(r.path.split()[1]) == value

    def test_label_off_the_curve_midpoint(self):
        r = route(_p(0, 0), _p(100, 50))
        midpoint_y = 25
        assert r.label_anchor.y != midpoint_y
        # label sits between the chord midpoint and the control point
        assert r.control.y < r.label_anchor.y < midpoint_y

    def test_custom_config(self):
        config = RouterConfig(min_offset=10, max_offset=20, distance_factor=1)
        assert route(_p(0, 0), _p(0, 5), config).curvature == 10
        assert route(_p(0, 0), _p(0, 15), config).curvature == 15
        assert route(_p(0, 0), _p(0, 500), config).curvature == 20

    @pytest.mark.parametrize("end", [(300, 0), (0, 300), (-120, 40), (5, -400)])
    def test_offset_within_bounds(self, end):
        r = route(_p(0, 0), _p(*end))
        assert 60 <= abs(r.curvature) <= 180


class TestRouteConnections:
    positions = {"a": _p(0, 0), "b": _p(200, 0)}

    def _plan(self, *connections: CircuitConnection) -> CircuitPlan:
        return CircuitPlan(connections=list(connections))

    def test_synthetic_ids(self):
        plan = self._plan(
            CircuitConnection(source="a", target="b"),
            CircuitConnection(id="w1", source="b", target="a"),
            CircuitConnection(source="a", target="b"),
        )
        routed = route_connections(plan, self.positions)
        assert [edge_id for edge_id, _, _ in routed] == ["a-b-0", "w1", "a-b-2"]

    def test_dangling_endpoint_skipped(self):
        plan = self._plan(
            CircuitConnection(source="a", target="ghost"),
            CircuitConnection(source="a", target="b"),
        )
        routed = route_connections(plan, self.positions)
        assert len(routed) == 1
        assert routed[0][0] == "a-b-1"

    def test_empty(self):
        assert route_connections(CircuitPlan(), {}) == []
