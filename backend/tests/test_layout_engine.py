"""Unit tests for the schematic layout engine."""

import pytest

from schematicia.layout.engine import column_count, layout, place_components
from schematicia.schemas.circuit import CircuitComponent, Position
from schematicia.schemas.schematic import LayoutConfig


# ─── Fixtures ───


def _component(component_id: str, x: float | None = None, y: float | None = None) -> CircuitComponent:
    position = Position(x=x, y=y) if x is not None and y is not None else None
    return CircuitComponent(id=component_id, label=component_id, type="generic", position=position)


def _components(count: int) -> list[CircuitComponent]:
    return [_component(f"U{i}") for i in range(count)]


def _assert_canvas_bounds(result, config: LayoutConfig):
    assert config.canvas_min_width <= result.width <= config.canvas_max_width
    assert config.canvas_min_height <= result.height <= config.canvas_max_height
    assert 0 < result.scale <= 1


# ═══════════════════════════════════════════════════════════
# Grid placement
# ═══════════════════════════════════════════════════════════


class TestColumnCount:
    @pytest.mark.parametrize(
        "count, columns",
        [(0, 2), (1, 2), (4, 2), (5, 3), (6, 3), (7, 4), (20, 4)],
    )
    def test_step_function(self, count, columns):
        assert column_count(count) == columns


class TestPlaceComponents:
    config = LayoutConfig()

    def test_two_columns(self):
        raw = place_components(_components(3), self.config)
        assert raw["U0"] == Position(x=240, y=160)
        assert raw["U1"] == Position(x=580, y=160)
        assert raw["U2"] == Position(x=240, y=310)

    def test_three_columns(self):
        raw = place_components(_components(5), self.config)
        assert raw["U2"] == Position(x=920, y=160)
        assert raw["U3"] == Position(x=240, y=310)

    def test_four_columns(self):
        raw = place_components(_components(7), self.config)
        assert raw["U3"] == Position(x=1260, y=160)
        assert raw["U4"] == Position(x=240, y=310)

    def test_explicit_position_passes_through(self):
        components = [_component("A"), _component("B", 999, -5), _component("C")]
        raw = place_components(components, self.config)
        assert raw["B"] == Position(x=999, y=-5)
        # auto-placed components keep their list index in the grid
        assert raw["C"] == Position(x=240, y=310)

    def test_single_component_anchor(self):
        raw = place_components([_component("solo")], self.config)
        assert raw == {"solo": Position(x=240, y=160)}

    def test_single_explicit_component_kept(self):
        raw = place_components([_component("solo", 7, 8)], self.config)
        assert raw == {"solo": Position(x=7, y=8)}

    def test_duplicate_id_keeps_first(self):
        components = [_component("A", 1, 1), _component("A", 50, 50), _component("B")]
        raw = place_components(components, self.config)
        assert list(raw) == ["A", "B"]
        assert raw["A"] == Position(x=1, y=1)


# ═══════════════════════════════════════════════════════════
# Scale-to-fit and canvas sizing
# ═══════════════════════════════════════════════════════════


class TestLayout:
    config = LayoutConfig()

    def test_empty(self):
        result = layout([])
        assert result.positions == {}
        assert result.width == self.config.canvas_min_width
        assert result.height == self.config.canvas_min_height
        assert result.scale == 1

    def test_single_component_centered(self):
        result = layout([_component("solo")])
        assert result.positions == {"solo": Position(x=320, y=260)}
        assert (result.width, result.height) == (640, 480)

    def test_small_content_not_enlarged(self):
        result = layout(_components(2))
        assert result.scale == 1
        assert result.positions["U0"] == Position(x=150, y=260)
        assert result.positions["U1"] == Position(x=490, y=260)
        # raw spacing is preserved, only padding grows
        assert result.positions["U1"].x - result.positions["U0"].x == 340
        _assert_canvas_bounds(result, self.config)

    def test_wide_content_shrinks(self):
        result = layout([_component("A", 0, 0), _component("B", 5000, 0)])
        assert result.scale == pytest.approx(0.2)
        assert result.width == 1280
        assert result.height == 480
        assert result.positions["A"] == Position(x=140, y=260)
        assert result.positions["B"].x == pytest.approx(1140)
        _assert_canvas_bounds(result, self.config)

    def test_tall_content_shrinks(self):
        result = layout([_component("A", 0, 0), _component("B", 0, 3400)])
        assert result.scale == pytest.approx(0.2)
        assert result.height == 960
        assert result.width == 640
        assert result.positions["A"] == Position(x=320, y=160)
        assert result.positions["B"].y == pytest.approx(840)

    def test_negative_explicit_positions_normalized(self):
        result = layout([_component("A", -300, -300), _component("B", -100, -200)])
        xs = [p.x for p in result.positions.values()]
        ys = [p.y for p in result.positions.values()]
        assert min(xs) >= self.config.side_padding
        assert min(ys) >= self.config.top_padding

    def test_mixed_explicit_and_auto(self):
        components = [_component("A"), _component("B", 2000, 2000), _component("C")]
        result = layout(components)
        assert set(result.positions) == {"A", "B", "C"}
        assert result.scale < 1
        _assert_canvas_bounds(result, self.config)

    @pytest.mark.parametrize("count", [1, 2, 5, 7, 12, 40])
    def test_invariants(self, count):
        components = _components(count)
        result = layout(components)
        assert set(result.positions) == {c.id for c in components}
        _assert_canvas_bounds(result, self.config)

    @pytest.mark.parametrize(
        "coordinates",
        [
            [(1e308, 0), (-1e308, 0)],
            [(0, 1e308), (0, -1e308)],
            [(1.7976931348623157e308, 1e308), (-1.7976931348623157e308, -1e308)],
            [(1e9, 0), (-1e9, 0)],
            [(5e-324, 5e-324), (0, 0)],
        ],
    )
    def test_extreme_coordinates(self, coordinates):
        components = [
            _component(f"P{i}", x, y) for i, (x, y) in enumerate(coordinates)
        ]
        result = layout(components)
        _assert_canvas_bounds(result, self.config)
        for p in result.positions.values():
            assert 0 <= p.x <= result.width
            assert 0 <= p.y <= result.height

    def test_infinite_position_rejected(self):
        with pytest.raises(ValueError):
            Position(x=float("inf"), y=0)

    def test_content_fits_canvas(self):
        result = layout(_components(40))
        for p in result.positions.values():
            assert 0 <= p.x <= result.width
            assert 0 <= p.y <= result.height

    def test_idempotent(self):
        components = [_component("A"), _component("B", 33, 44), _component("C")]
        assert layout(components) == layout(components)

    def test_custom_config(self):
        config = LayoutConfig(
            canvas_min_width=100,
            canvas_min_height=100,
            canvas_max_width=400,
            canvas_max_height=400,
        )
        result = layout(_components(12), config)
        assert result.scale < 1
        _assert_canvas_bounds(result, config)

    def test_invalid_config_rejected(self):
        with pytest.raises(ValueError):
            LayoutConfig(canvas_min_width=2000)
