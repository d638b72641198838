"""
Health Metrics Scatterplot (Dash)
- Single CSV source: data/data.csv (one row per state)
- Click an axis label to re-plot that axis with a 500 ms transition
- Hover a circle for the state's values on the active metrics
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import dash
import pandas as pd
from dash import ALL, Input, Output, State, dcc, html
from dash.exceptions import PreventUpdate

from health_scatter.config import (
    DATA_CSV,
    MARGIN,
    PLOT_HEIGHT,
    SVG_HEIGHT,
    SVG_WIDTH,
    configure_logging,
)
from health_scatter.data import load_dataset, record_for
from health_scatter.labels import LABEL_TYPE, LabelPanel
from health_scatter.metrics import Axis
from health_scatter.state import build_state, click_label, make_figure, store_data

logger = logging.getLogger(__name__)

# rotated -90deg: the first label (depression) ends up furthest from the axis
Y_LABEL_STYLE = {
    "position": "absolute",
    "left": f"{MARGIN['left'] - 100}px",
    "top": f"{MARGIN['top'] + PLOT_HEIGHT / 2}px",
    "transform": "translate(-50%, -50%) rotate(-90deg)",
    "display": "flex",
    "flexDirection": "column",
    "alignItems": "center",
    "gap": "6px",
    "whiteSpace": "nowrap",
}


# ======================
# Callback bodies
# ======================

def handle_label_click(
    df: pd.DataFrame,
    store: Optional[Dict[str, object]],
    triggered: Optional[dict],
) -> Tuple[Dict[str, object], dict, List[str], List[str]]:
    """
    Apply a label click against the stored axis state.

    Returns:
        new store, figure, X label classes, Y label classes
    Raises:
        PreventUpdate: when nothing was clicked or the label was already active.
    """
    if not triggered or triggered.get("type") != LABEL_TYPE:
        raise PreventUpdate

    state = build_state(df, store)
    transitions = click_label(state, triggered["axis"], triggered["metric"])
    if not transitions:
        raise PreventUpdate

    return (
        store_data(state),
        make_figure(state, transitions),
        state.labels.class_names(Axis.X),
        state.labels.class_names(Axis.Y),
    )


def tooltip_view(
    df: pd.DataFrame,
    store: Optional[Dict[str, object]],
    hover_data: Optional[dict],
) -> Tuple[list, dict]:
    """Tooltip children and style for the current hover state."""
    state = build_state(df, store)
    points = (hover_data or {}).get("points") or []
    point = points[0] if points else {}
    if point.get("customdata") is None:
        state.tooltip.hide()
    else:
        state.tooltip.show(record_for(df, point["customdata"]))

    content = state.tooltip.current
    if content is None:
        return [], {"display": "none"}
    logger.debug("Tooltip %s: %s", content.region_code, content.text)
    style = {"display": "block"}
    bbox = point.get("bbox")
    if bbox:
        top, left = content.offset
        style.update({"top": f"{bbox['y0'] + top}px", "left": f"{bbox['x0'] + left}px"})
    return [html.Div(line) for line in content.lines], style


# ======================
# Layout
# ======================

def build_layout(app: dash.Dash, df: pd.DataFrame) -> html.Div:
    """Construct the static Dash layout."""
    state = build_state(df)
    panel = LabelPanel(state.selector)

    chart = html.Div([
        dcc.Graph(
            id="scatter",
            figure=make_figure(state),
            clear_on_unhover=True,
            config={"displayModeBar": False},
            style={"width": f"{SVG_WIDTH}px", "height": f"{SVG_HEIGHT}px"},
        ),
        html.Div(id="tooltip", className="d3-tip", style={"display": "none"}),
        html.Div(
            panel.build_label_group(Axis.Y),
            style=Y_LABEL_STYLE,
        ),
    ], style={"position": "relative", "width": f"{SVG_WIDTH}px"})

    x_labels = html.Div(
        panel.build_label_group(Axis.X),
        style={
            "width": f"{SVG_WIDTH}px",
            "paddingLeft": f"{MARGIN['left']}px",
            "textAlign": "center",
            "display": "flex",
            "flexDirection": "column",
            "gap": "6px",
        },
    )

    return html.Div(
        style={"fontFamily": "Inter, system-ui, -apple-system, Segoe UI, Roboto, Helvetica, Arial, sans-serif",
               "margin": "0 auto", "maxWidth": "1000px", "padding": "18px"},
        children=[
            html.Div([
                html.Div("Health Risks by State", className="brand",
                         style={"fontSize": "28px", "fontWeight": 700, "color": "#2b6cb0", "marginBottom": "2px"}),
                html.Div("Click an axis label to compare a different pair of metrics.", className="brand-sub",
                         style={"color": "#6b7280", "fontSize": "16px"}),
            ], className="header", style={"marginBottom": "18px"}),
            html.Div(id="chart", children=[chart, x_labels]),
            dcc.Store(id="axis-state", data=store_data(state)),
        ],
    )


def register_callbacks(app: dash.Dash, df: pd.DataFrame):
    """Wire all Dash callbacks."""

    @app.callback(
        Output("axis-state", "data"),
        Output("scatter", "figure"),
        Output({"type": LABEL_TYPE, "axis": Axis.X.value, "metric": ALL}, "className"),
        Output({"type": LABEL_TYPE, "axis": Axis.Y.value, "metric": ALL}, "className"),
        Input({"type": LABEL_TYPE, "axis": ALL, "metric": ALL}, "n_clicks"),
        State("axis-state", "data"),
        prevent_initial_call=True,
    )
    def on_label_click(_n_clicks, store):
        return handle_label_click(df, store, dash.ctx.triggered_id)

    @app.callback(
        Output("tooltip", "children"),
        Output("tooltip", "style"),
        Input("scatter", "hoverData"),
        State("axis-state", "data"),
    )
    def on_hover(hover_data, store):
        return tooltip_view(df, store, hover_data)


def create_app(csv_path: Path = DATA_CSV) -> dash.Dash:
    """
    App factory. Loads data, builds layout, and registers callbacks.
    Returns a ready-to-run Dash app.
    """
    df = load_dataset(csv_path)

    app = dash.Dash(__name__)
    app.title = "Health Risks by State"
    app.layout = build_layout(app, df)
    register_callbacks(app, df)
    return app


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the health metrics scatterplot.")
    parser.add_argument("--data", type=Path, default=DATA_CSV, help="CSV with one row per region")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8050)
    parser.add_argument("--debug", action="store_true")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


# ======================
# Main
# ======================

if __name__ == "__main__":
    args = parse_args()
    configure_logging(args.log_level)
    app = create_app(args.data)
    app.run(host=args.host, port=args.port, debug=args.debug)
