"""
Tests for data ingestion.

Tests cover:
1. Loading a CSV with canonical and aliased column names
2. Required-column and numeric validation
3. Record views over the table
"""

import pytest
import pandas as pd

from health_scatter.data import (
    load_dataset,
    record_for,
    table_from_records,
)
from health_scatter.errors import IngestionError
from health_scatter.metrics import Metric


HEADER = "regionCode,regionName,smoker,physicalActivity,income,depression,diabetes,heartAttack"


class TestLoadDataset:
    """Test load_dataset on CSV files."""

    def test_loads_canonical_columns(self, tmp_path):
        """A well-formed CSV loads with float metric columns."""
        path = tmp_path / "data.csv"
        path.write_text(
            HEADER + "\n"
            "AL,Alabama,23,49,44000,22,13,6\n"
            "CA,California,12,60,55000,18,10,4\n"
        )
        df = load_dataset(path)
        assert list(df["regionCode"]) == ["AL", "CA"]
        assert df["income"].dtype == float
        assert df.loc[1, "income"] == 55000.0

    def test_accepts_cdc_aliases_and_drops_extra_columns(self, tmp_path):
        """stateAbbr/stateName map onto regionCode/regionName."""
        path = tmp_path / "data.csv"
        path.write_text(
            "id,stateAbbr,stateName,smoker,physicalActivity,income,depression,diabetes,heartAttack,incomeMoe\n"
            "1,AL,Alabama,23,49,44000,22,13,6,230\n"
        )
        df = load_dataset(path)
        assert df.loc[0, "regionCode"] == "AL"
        assert df.loc[0, "regionName"] == "Alabama"
        assert "incomeMoe" not in df.columns
        assert "id" not in df.columns

    def test_missing_file(self, tmp_path):
        """A missing file is an ingestion error."""
        with pytest.raises(IngestionError, match="not found"):
            load_dataset(tmp_path / "nope.csv")


class TestValidation:
    """Test validation through table_from_records."""

    def test_missing_metric_column_fails(self):
        """A table without diabetes never reaches the plot."""
        rows = [{"regionCode": "AL", "regionName": "Alabama", "smoker": 23, "heartAttack": 6}]
        with pytest.raises(IngestionError, match="diabetes"):
            table_from_records(rows)

    def test_non_numeric_value_fails(self, two_state_rows):
        """Unparseable metric values name the region."""
        two_state_rows[1]["income"] = "n/a"
        with pytest.raises(IngestionError, match="CA"):
            table_from_records(two_state_rows)

    def test_blank_region_code_fails(self, two_state_rows):
        two_state_rows[0]["regionCode"] = "  "
        with pytest.raises(IngestionError, match="regionCode"):
            table_from_records(two_state_rows)

    def test_empty_table_fails(self):
        df = pd.DataFrame(columns=["regionCode", "regionName"] + [m.value for m in Metric])
        with pytest.raises(IngestionError):
            table_from_records(df.to_dict("records"))

    def test_ingestion_error_is_value_error(self):
        """Callers catching ValueError still see ingestion failures."""
        assert issubclass(IngestionError, ValueError)


class TestRecords:
    """Test Record views."""

    def test_record_for(self, two_state_table):
        record = record_for(two_state_table, "CA")
        assert record.region_name == "California"

    def test_record_for_unknown_code(self, two_state_table):
        with pytest.raises(KeyError):
            record_for(two_state_table, "ZZ")

    def test_record_metrics_are_read_only(self, two_state_table):
        record = record_for(two_state_table, "AL")
        with pytest.raises(TypeError):
            record.metrics[Metric.SMOKER] = 0.0
