"""Shared fixtures for Table Explorer tests."""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture()
def sales_df() -> pd.DataFrame:
    """Small mixed-type frame with a null in each kind of column."""
    return pd.DataFrame(
        {
            "region": ["north", "south", "north", "east", None],
            "product": ["a", "b", "b", "a", "c"],
            "units": [10, 5, 7, 3, 8],
            "price": [1.5, 2.0, np.nan, 4.0, 2.5],
        },
    )


@pytest.fixture()
def regions_df() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "region": ["north", "south", "west"],
            "manager": ["ann", "bob", "cy"],
            "units": [100, 200, 300],
        },
    )


@pytest.fixture()
def csv_file(tmp_path, sales_df):
    path = tmp_path / "sales.csv"
    sales_df.to_csv(path, index=False)
    return path
