"""
Static configuration for the health metrics scatterplot.
- Paths and environment overrides
- Chart geometry (a 960x500 page with axis-label margins)
- Animation and padding constants
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Optional, Tuple


# ======================
# Config / Paths
# ======================

DATA_CSV = Path(os.environ.get("HEALTH_SCATTER_DATA", "data/data.csv"))
LOG_LEVEL = os.environ.get("HEALTH_SCATTER_LOG_LEVEL", "INFO")


# ======================
# Chart geometry
# ======================

SVG_WIDTH = 960
SVG_HEIGHT = 500
MARGIN: Dict[str, int] = {"top": 20, "right": 20, "bottom": 70, "left": 115}

PLOT_WIDTH = SVG_WIDTH - MARGIN["left"] - MARGIN["right"]
PLOT_HEIGHT = SVG_HEIGHT - MARGIN["top"] - MARGIN["bottom"]

# Pixel ranges; Y is inverted so larger values sit higher on screen.
X_RANGE: Tuple[float, float] = (0.0, float(PLOT_WIDTH))
Y_RANGE: Tuple[float, float] = (float(PLOT_HEIGHT), 0.0)

POINT_RADIUS = 12
LABEL_FONT_SIZE = 10
# dx="-0.65em", dy="0.4em" at a 10px font
LABEL_OFFSET: Tuple[float, float] = (-0.65 * LABEL_FONT_SIZE, 0.4 * LABEL_FONT_SIZE)
# (top, left) pixel offset from the hovered mark
TOOLTIP_OFFSET: Tuple[int, int] = (40, -70)


# ======================
# Scales / animation
# ======================

PADDING_LOW = 0.9
PADDING_HIGH = 1.1
# Narrower padded domains (an all-zero column) are widened to +/- DEGENERATE_HALF_WIDTH.
MIN_DOMAIN_WIDTH = 1e-9
DEGENERATE_HALF_WIDTH = 1.0
TICK_COUNT = 10

TRANSITION_MS = 500
TRANSITION_EASE = "cubic-in-out"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger once for the whole app."""
    logging.basicConfig(
        level=(level or LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
