"""State for one open dataframe and its transformation panels."""

import logging
from dataclasses import dataclass, field

import pandas as pd

from .transforms import (
    AggFunc,
    FilterOp,
    JoinHow,
    aggregate_dataframe,
    describe_dataframe,
    dtypes_frame,
    filter_dataframe,
    melt_dataframe,
)

logger = logging.getLogger(__name__)


def _with_str_columns(data: pd.DataFrame) -> pd.DataFrame:
    """Return ``data`` with every column label as a string, e.g. Excel year headers."""
    if all(isinstance(col, str) for col in data.columns):
        return data
    return data.rename(columns=str)


def _add_unique(values: list[str], value: str) -> bool:
    if not value or value in values:
        return False
    values.append(value)
    return True


@dataclass
class FilterState:
    column: str = ""
    operation: FilterOp = FilterOp.EQUAL_NUM
    value: str = ""
    inplace: bool = False


@dataclass
class AggregateState:
    group_by: list[str] = field(default_factory=list)
    agg_columns: list[str] = field(default_factory=list)
    func: AggFunc = AggFunc.COUNT
    result: pd.DataFrame | None = None


@dataclass
class MeltState:
    id_vars: list[str] = field(default_factory=list)
    value_vars: list[str] = field(default_factory=list)
    result: pd.DataFrame | None = None


@dataclass
class JoinState:
    other: str = ""
    left_on: str = ""
    right_on: str = ""
    how: JoinHow = JoinHow.INNER
    inplace: bool = False


class DataFrameContainer:
    """An open dataframe together with the selections made in its window."""

    def __init__(self, data: pd.DataFrame, title: str) -> None:
        """Initialize the container.

        Args:
            data: The dataframe to hold
            title: Unique title, also used as the window title

        """
        self.title = title
        self.data = _with_str_columns(data)
        self._summary: pd.DataFrame | None = None
        self.filter = FilterState()
        self.aggregate = AggregateState()
        self.melt = MeltState()
        self.join = JoinState()

    def __repr__(self) -> str:
        return f"DataFrameContainer(title={self.title!r}, shape={self.shape})"

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    @property
    def columns(self) -> list[str]:
        return list(self.data.columns)

    def summary(self) -> pd.DataFrame:
        """Describe table for the current data, computed on first use."""
        if self._summary is None:
            self._summary = describe_dataframe(self.data)
        return self._summary

    def dtypes(self) -> pd.DataFrame:
        return dtypes_frame(self.data)

    def replace_data(self, data: pd.DataFrame) -> None:
        """Swap in new data and drop anything computed from the old data."""
        logger.info("Replacing data of %s: %s -> %s", self.title, self.shape, data.shape)
        self.data = _with_str_columns(data)
        self._summary = None

    # Filter

    def apply_filter(self) -> pd.DataFrame | None:
        """Run the configured filter.

        Returns:
            The filtered frame when a new frame should be opened, or None
            when the filter replaced this container's data in place.

        """
        state = self.filter
        filtered = filter_dataframe(self.data, state.column, state.operation, state.value)
        if state.inplace:
            self.replace_data(filtered)
            return None
        return filtered

    # Aggregate

    def add_group_by(self, column: str) -> bool:
        return _add_unique(self.aggregate.group_by, column)

    def add_agg_column(self, column: str) -> bool:
        return _add_unique(self.aggregate.agg_columns, column)

    def clear_aggregate(self) -> None:
        self.aggregate.group_by.clear()
        self.aggregate.agg_columns.clear()
        self.aggregate.result = None

    def apply_aggregate(self) -> pd.DataFrame:
        state = self.aggregate
        state.result = aggregate_dataframe(self.data, state.group_by, state.agg_columns, state.func)
        return state.result

    # Melt

    def add_id_var(self, column: str) -> bool:
        return _add_unique(self.melt.id_vars, column)

    def add_value_var(self, column: str) -> bool:
        return _add_unique(self.melt.value_vars, column)

    def clear_melt(self) -> None:
        self.melt.id_vars.clear()
        self.melt.value_vars.clear()
        self.melt.result = None

    def apply_melt(self) -> pd.DataFrame:
        state = self.melt
        state.result = melt_dataframe(self.data, state.id_vars, state.value_vars)
        return state.result
