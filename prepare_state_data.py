#!/usr/bin/env python3
"""
Script to prepare a raw state health CSV for the scatterplot.
Renames the CDC column names (stateAbbr/abbr, stateName/state) to
regionCode/regionName and keeps only the columns the chart plots.
"""

import argparse
import os

import pandas as pd

from health_scatter.data import REQUIRED_COLUMNS, normalize_columns, validate_table


def prepare_state_data(input_file="data/raw_state_data.csv", output_file="data/data.csv"):
    """
    Normalize and validate the raw CSV, then write the plotting columns.
    """
    # Check if input file exists
    if not os.path.exists(input_file):
        print(f"Error: Input file {input_file} not found!")
        return None

    print(f"Reading data from {input_file}...")
    df = pd.read_csv(input_file, dtype=str)

    print(f"Raw dataset shape: {df.shape}")
    print(f"Columns in raw dataset: {list(df.columns)}")

    # Raises IngestionError with the offending columns/regions
    normalized = normalize_columns(df)
    table = validate_table(normalized)

    dropped = [c for c in normalized.columns if c not in REQUIRED_COLUMNS]
    print(f"Dropped columns: {dropped}")
    print(f"Final dataset shape: {table.shape}")

    table.to_csv(output_file, index=False)
    print(f"Prepared dataset saved to {output_file}")

    print("\nSummary of the prepared dataset:")
    print(f"Number of regions: {len(table)}")
    print(table.describe().loc[["min", "max"]].T)
    return table


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("input_file", nargs="?", default="data/raw_state_data.csv")
    parser.add_argument("output_file", nargs="?", default="data/data.csv")
    args = parser.parse_args()
    prepare_state_data(args.input_file, args.output_file)
