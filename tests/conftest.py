"""
Shared pytest fixtures for the scatterplot tests.

Provides small region tables, a manual clock for animation timing, and a
ready-built ScatterState.
"""

import pytest

from health_scatter.data import table_from_records
from health_scatter.state import build_state


# ==============================================================================
# Table Fixtures
# ==============================================================================

def make_row(code, name, smoker, physical, income, depression, diabetes, heart):
    return {
        "regionCode": code,
        "regionName": name,
        "smoker": smoker,
        "physicalActivity": physical,
        "income": income,
        "depression": depression,
        "diabetes": diabetes,
        "heartAttack": heart,
    }


@pytest.fixture
def two_state_rows():
    """Alabama and California with the values used in the worked example."""
    return [
        make_row("AL", "Alabama", 23, 49, 44000, 22, 13, 6),
        make_row("CA", "California", 12, 60, 55000, 18, 10, 4),
    ]


@pytest.fixture
def two_state_table(two_state_rows):
    return table_from_records(two_state_rows)


@pytest.fixture
def sample_table():
    """Five regions with distinct values on every metric."""
    return table_from_records([
        make_row("AL", "Alabama", 21.1, 48.9, 44758, 22.5, 13.8, 6.1),
        make_row("CA", "California", 11.3, 60.2, 64500, 17.8, 10.1, 3.4),
        make_row("KY", "Kentucky", 24.6, 47.5, 45215, 24.9, 12.9, 6.3),
        make_row("UT", "Utah", 8.8, 63.1, 62912, 21.9, 7.6, 3.1),
        make_row("WV", "West Virginia", 24.8, 43.6, 42019, 26.7, 15.0, 7.1),
    ])


# ==============================================================================
# Timing Fixtures
# ==============================================================================

class ManualClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start=0.0):
        self.now = float(start)

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scatter_state(sample_table, clock):
    return build_state(sample_table, clock=clock)
