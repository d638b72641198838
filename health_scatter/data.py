"""
Data ingestion for the scatterplot.
- Single CSV source, one row per region
- Accepts the CDC column names (stateAbbr, stateName) as aliases
- Produces a read-only DataFrame indexed by position, plus Record views
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping

import numpy as np
import pandas as pd

from .errors import IngestionError
from .metrics import Metric

logger = logging.getLogger(__name__)


REGION_CODE = "regionCode"
REGION_NAME = "regionName"

COLUMN_ALIASES: Dict[str, str] = {
    "stateAbbr": REGION_CODE,
    "abbr": REGION_CODE,
    "stateName": REGION_NAME,
    "state": REGION_NAME,
}

METRIC_COLUMNS = [m.value for m in Metric]
REQUIRED_COLUMNS = [REGION_CODE, REGION_NAME] + METRIC_COLUMNS


@dataclass(frozen=True)
class Record:
    """One region's row: identifying labels plus metric values."""

    region_code: str
    region_name: str
    metrics: Mapping[Metric, float] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "metrics", MappingProxyType(dict(self.metrics)))

    def value(self, metric: Metric) -> float:
        return self.metrics[Metric(metric)]


# ======================
# Utilities
# ======================

def coerce_num(x):
    """Safely coerce to float; return NaN on failure."""
    try:
        return float(x)
    except (TypeError, ValueError):
        return np.nan


def normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Strip header whitespace and map known aliases onto canonical names."""
    df = df.rename(columns={c: c.strip() for c in df.columns})
    renames = {}
    for alias, canonical in COLUMN_ALIASES.items():
        if alias in df.columns and canonical not in df.columns and canonical not in renames.values():
            renames[alias] = canonical
    return df.rename(columns=renames)


def validate_table(df: pd.DataFrame) -> pd.DataFrame:
    """
    Check required columns and coerce metric columns to floats.

    Raises:
        IngestionError: on a missing column, a blank region code, or any
            metric value that is not a finite number.
    """
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise IngestionError(f"CSV is missing required columns: {missing}")
    if df.empty:
        raise IngestionError("CSV has no data rows")

    out = df[REQUIRED_COLUMNS].copy()
    out[REGION_CODE] = out[REGION_CODE].astype(str).str.strip()
    out[REGION_NAME] = out[REGION_NAME].astype(str).str.strip()
    blank = out[REGION_CODE].isin(["", "nan"])
    if blank.any():
        rows = list(out.index[blank])
        raise IngestionError(f"Blank {REGION_CODE} in rows: {rows}")

    for c in METRIC_COLUMNS:
        out[c] = out[c].map(coerce_num).astype(float)
        bad = ~np.isfinite(out[c])
        if bad.any():
            codes = out.loc[bad, REGION_CODE].tolist()
            raise IngestionError(f"Column {c!r} has non-numeric values for: {codes}")

    return out.reset_index(drop=True)


# ======================
# Data Loaders
# ======================

def load_dataset(csv_path: Path) -> pd.DataFrame:
    """
    Load the per-region CSV and prepare it for plotting.
    Expects columns:
        regionCode (or stateAbbr), regionName (or stateName), smoker,
        physicalActivity, income, depression, diabetes, heartAttack
    Any other columns are dropped.
    """
    csv_path = Path(csv_path)
    if not csv_path.exists():
        raise IngestionError(f"Data file not found: {csv_path}")

    df = pd.read_csv(csv_path, dtype=str)
    table = validate_table(normalize_columns(df))
    logger.info("Loaded %d regions from %s", len(table), csv_path)
    return table


def table_from_records(rows) -> pd.DataFrame:
    """Build a validated table from an iterable of plain dicts."""
    return validate_table(normalize_columns(pd.DataFrame(list(rows))))


def row_to_record(row: Mapping) -> Record:
    return Record(
        region_code=str(row[REGION_CODE]),
        region_name=str(row[REGION_NAME]),
        metrics={m: float(row[m.value]) for m in Metric},
    )


def record_for(df: pd.DataFrame, region_code: str) -> Record:
    """Look up a region by its code; the first match wins."""
    hits = df[df[REGION_CODE] == region_code]
    if hits.empty:
        raise KeyError(region_code)
    return row_to_record(hits.iloc[0])
