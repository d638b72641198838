"""
Tests for the Dash app shell.

Tests cover:
1. create_app wiring and startup failures
2. Label click callback body
3. Hover tooltip callback body
4. Layout of the rotated Y labels and the session store
5. The data preparation script
"""

from dataclasses import replace
from types import SimpleNamespace

import pytest
from dash.exceptions import PreventUpdate

from app import Y_LABEL_STYLE, build_layout, create_app, handle_label_click, parse_args, tooltip_view
from health_scatter.config import TRANSITION_MS, X_RANGE, Y_RANGE
from health_scatter.errors import IngestionError
from health_scatter.labels import label_id
from health_scatter.metrics import Axis, Metric
from health_scatter.renderer import PlotRenderer
from health_scatter.state import build_state
from prepare_state_data import prepare_state_data


HEADER = "regionCode,regionName,smoker,physicalActivity,income,depression,diabetes,heartAttack"
ROWS = "AL,Alabama,23,49,44000,22,13,6\nCA,California,12,60,55000,18,10,4\n"

DEFAULT_STORE = {"x": "smoker", "y": "heartAttack"}


@pytest.fixture
def csv_path(tmp_path):
    path = tmp_path / "data.csv"
    path.write_text(HEADER + "\n" + ROWS)
    return path


@pytest.fixture
def frozen_time(monkeypatch):
    """Wall clock seen by PlotRenderer, in ms, moved by hand."""
    frozen = SimpleNamespace(now=1_000_000.0)
    monkeypatch.setattr("health_scatter.renderer.time", SimpleNamespace(time=lambda: frozen.now / 1000.0))
    return frozen


def slowed(update, duration_ms):
    def wrapper(self, *args):
        return [replace(c, duration_ms=duration_ms) for c in update(self, *args)]
    return wrapper


def find_parent(component, class_name):
    """The component whose direct child carries `class_name`."""
    children = getattr(component, "children", None)
    if children is None or isinstance(children, str):
        return None
    if not isinstance(children, (list, tuple)):
        children = [children]
    for child in children:
        if getattr(child, "className", None) == class_name:
            return component
        hit = find_parent(child, class_name)
        if hit is not None:
            return hit
    return None


class TestCreateApp:
    """Test the app factory."""

    def test_builds_layout_and_callbacks(self, csv_path):
        app = create_app(csv_path)
        assert app.title == "Health Risks by State"
        assert app.layout is not None
        assert len(app.callback_map) == 2

    def test_bad_data_aborts_startup(self, tmp_path):
        """No layout is built from a table missing a metric."""
        path = tmp_path / "data.csv"
        path.write_text("regionCode,regionName,smoker,heartAttack\nAL,Alabama,23,6\n")
        with pytest.raises(IngestionError):
            create_app(path)

    def test_parse_args(self):
        args = parse_args(["--data", "x.csv", "--port", "9000"])
        assert str(args.data) == "x.csv"
        assert args.port == 9000
        assert not args.debug


class TestLayout:
    """Test build_layout."""

    def test_y_labels_read_away_from_axis(self, two_state_table):
        """Depression sits furthest from the Y axis, diabetes closest."""
        layout = build_layout(None, two_state_table)
        holder = find_parent(layout, "yAxisLabels")
        assert holder.style == Y_LABEL_STYLE
        assert holder.style["flexDirection"] == "column"
        assert "rotate(-90deg)" in holder.style["transform"]
        group = holder.children
        assert [span.id["metric"] for span in group.children] == ["depression", "heartAttack", "diabetes"]

    def test_initial_store_has_no_transition(self, two_state_table):
        layout = build_layout(None, two_state_table)
        store = layout.children[-1]
        assert store.id == "axis-state"
        assert store.data == {"x": "smoker", "y": "heartAttack", "transition": None}


class TestLabelClick:
    """Test handle_label_click."""

    def test_click_inactive_label(self, two_state_table, frozen_time):
        store, fig, x_classes, y_classes = handle_label_click(
            two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.INCOME)
        )
        assert {k: store[k] for k in ("x", "y")} == {"x": "income", "y": "heartAttack"}
        assert store["transition"]["startedAt"] == frozen_time.now
        assert tuple(fig.layout.xaxis.range) == X_RANGE
        assert tuple(fig.layout.yaxis.range) == Y_RANGE
        assert fig.layout.transition.duration == TRANSITION_MS
        assert x_classes == ["axis-label inactive", "axis-label inactive", "axis-label active"]
        assert y_classes == ["axis-label inactive", "axis-label active", "axis-label inactive"]

    def test_figure_comes_from_renderer(self, two_state_table, frozen_time):
        _, fig, _, _ = handle_label_click(
            two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.INCOME)
        )
        state = build_state(two_state_table, {"x": "income", "y": "heartAttack"})
        assert list(fig.data[0].x) == [m.cx for m in state.renderer.target]
        assert list(fig.data[0].y) == [m.cy for m in state.renderer.target]

    def test_figure_follows_transition_plan(self, two_state_table, monkeypatch):
        """The tween duration sent to the browser is the one the renderer planned."""
        _, fast, _, _ = handle_label_click(
            two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.INCOME)
        )
        monkeypatch.setattr(PlotRenderer, "update", slowed(PlotRenderer.update, 900))
        _, slow, _, _ = handle_label_click(
            two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.INCOME)
        )
        assert fast.layout.transition.duration == TRANSITION_MS
        assert slow.layout.transition.duration == 900
        assert fast.to_dict() != slow.to_dict()

    def test_second_click_mid_flight_interrupts(self, two_state_table, frozen_time, monkeypatch):
        plans = []

        def recording(update):
            def wrapper(self, *args):
                calls = update(self, *args)
                plans.append(calls)
                return calls
            return wrapper

        monkeypatch.setattr(PlotRenderer, "update", recording(PlotRenderer.update))
        store, _, _, _ = handle_label_click(
            two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.INCOME)
        )
        frozen_time.now += TRANSITION_MS / 2
        store, _, _, _ = handle_label_click(
            two_state_table, store, label_id(Axis.Y, Metric.DIABETES)
        )
        assert {c.attribute for c in plans[0] if c.element == "circle"} == {"cx"}
        assert {c.attribute for c in plans[1] if c.element == "circle"} == {"cx", "cy"}
        assert store["transition"]["startedAt"] == frozen_time.now

    def test_click_active_label_prevents_update(self, two_state_table):
        with pytest.raises(PreventUpdate):
            handle_label_click(two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.SMOKER))

    def test_no_trigger(self, two_state_table):
        with pytest.raises(PreventUpdate):
            handle_label_click(two_state_table, DEFAULT_STORE, None)

    def test_store_is_not_mutated(self, two_state_table):
        store = dict(DEFAULT_STORE)
        handle_label_click(two_state_table, store, label_id(Axis.Y, Metric.DIABETES))
        assert store == DEFAULT_STORE


class TestTooltipView:
    """Test tooltip_view."""

    def test_hover_shows_lines(self, two_state_table):
        hover = {"points": [{"customdata": "CA", "bbox": {"x0": 300, "x1": 324, "y0": 200, "y1": 224}}]}
        children, style = tooltip_view(two_state_table, {"x": "income", "y": "depression"}, hover)
        assert [c.children for c in children] == ["California", "income: $55000", "depression: 18%"]
        assert style == {"display": "block", "top": "240px", "left": "230px"}

    def test_unhover_hides(self, two_state_table):
        children, style = tooltip_view(two_state_table, DEFAULT_STORE, None)
        assert children == []
        assert style == {"display": "none"}

    def test_point_without_region_hides(self, two_state_table):
        children, style = tooltip_view(two_state_table, DEFAULT_STORE, {"points": [{"x": 1.0}]})
        assert children == []
        assert style == {"display": "none"}

    def test_hover_during_transition(self, two_state_table, frozen_time):
        store, _, _, _ = handle_label_click(
            two_state_table, DEFAULT_STORE, label_id(Axis.X, Metric.INCOME)
        )
        children, _ = tooltip_view(two_state_table, store, {"points": [{"customdata": "AL"}]})
        assert [c.children for c in children] == ["Alabama", "income: $44000", "heartAttack: 6%"]


class TestPrepareStateData:
    """Test the data preparation script."""

    def test_writes_normalized_csv(self, tmp_path):
        raw = tmp_path / "raw.csv"
        raw.write_text(
            "stateAbbr,stateName,smoker,physicalActivity,income,depression,diabetes,heartAttack,obesity\n"
            "AL,Alabama,23,49,44000,22,13,6,33.5\n"
        )
        out = tmp_path / "data.csv"
        table = prepare_state_data(str(raw), str(out))
        assert list(table.columns) == HEADER.split(",")
        assert out.read_text().splitlines()[0] == HEADER

    def test_missing_input(self, tmp_path):
        assert prepare_state_data(str(tmp_path / "none.csv"), str(tmp_path / "out.csv")) is None
