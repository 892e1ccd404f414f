"""Dataframe transformations behind the Filter, Aggregate, Melt and Join panels.

Every function here takes a pandas DataFrame and returns a new one; the
source frame is never modified. Validation failures and pandas errors are
reported as :class:`~table_explorer.exceptions.TransformError` so the GUI
can show a single kind of error dialog.
"""

import logging
import operator
from collections.abc import Callable, Sequence
from enum import Enum

import pandas as pd

from .constants import (
    DTYPES_COLUMN_NAME,
    DTYPES_TYPE_NAME,
    ERROR_MSG_NO_COLUMN,
    JOIN_RIGHT_SUFFIX,
    MELT_VALUE_NAME,
    MELT_VARIABLE_NAME,
    NULL_COUNT_STAT,
    SUMMARY_STAT_COLUMN,
)
from .exceptions import TransformError

logger = logging.getLogger(__name__)


class FilterOp(Enum):
    """Row filter operations offered by the Filter panel."""

    EQUAL_NUM = "EqualNum"
    EQUAL_STR = "EqualStr"
    GREATER_THAN = "GreaterThan"
    GREATER_EQUAL = "GreaterEqualThan"
    LOWER_THAN = "LowerThan"
    LOWER_EQUAL = "LowerEqualThan"
    IS_NULL = "Null"
    IS_NOT_NULL = "IsNotNull"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "FilterOp":
        for op in cls:
            if op.value == label:
                return op
        raise TransformError(f"Unknown filter operation: {label}")


_NUMERIC_COMPARISONS: dict[FilterOp, Callable[[pd.Series, float], pd.Series]] = {
    FilterOp.EQUAL_NUM: operator.eq,
    FilterOp.GREATER_THAN: operator.gt,
    FilterOp.GREATER_EQUAL: operator.ge,
    FilterOp.LOWER_THAN: operator.lt,
    FilterOp.LOWER_EQUAL: operator.le,
}


class AggFunc(Enum):
    """Aggregation metrics offered by the Aggregate panel."""

    COUNT = "Count"
    SUM = "Sum"
    MEAN = "Mean"
    MEDIAN = "Median"
    MIN = "Min"
    MAX = "Max"

    @property
    def label(self) -> str:
        return self.value

    @property
    def method(self) -> str:
        """Name of the pandas groupby aggregation."""
        return self.name.lower()


class JoinHow(Enum):
    """Join strategies offered by the Join panel."""

    INNER = "Inner"
    LEFT = "Left"
    OUTER = "Outer"
    CROSS = "Cross"

    @property
    def label(self) -> str:
        return self.value

    @property
    def method(self) -> str:
        """Value for the ``how`` argument of :func:`pandas.merge`."""
        return self.name.lower()


_NUMERIC_AGGREGATES = frozenset({AggFunc.SUM, AggFunc.MEAN, AggFunc.MEDIAN})


def _require_columns(df: pd.DataFrame, columns: Sequence[str]) -> None:
    missing = [col for col in columns if col not in df.columns]
    if missing:
        raise TransformError(f"Unknown column(s): {', '.join(map(str, missing))}")


def _free_name(name: str, taken: set) -> str:
    if name not in taken:
        return name
    n = 1
    while f"{name}_{n}" in taken:
        n += 1
    return f"{name}_{n}"


def filter_dataframe(
    df: pd.DataFrame,
    column: str,
    op: FilterOp,
    value: str = "",
) -> pd.DataFrame:
    """Keep the rows of ``df`` where ``column`` satisfies ``op``.

    Args:
        df: Source dataframe
        column: Column to test
        op: Filter operation
        value: Text from the value entry. Parsed as a float for numeric
            operations, compared verbatim for ``EQUAL_STR`` and ignored for
            the null checks.

    Returns:
        pd.DataFrame: Matching rows with a fresh 0..n-1 index

    Raises:
        TransformError: If the column is unknown, the value is not a number
            for a numeric operation, or the column is not numeric
    """
    if not column:
        raise TransformError(ERROR_MSG_NO_COLUMN)
    _require_columns(df, [column])
    series = df[column]

    if op is FilterOp.IS_NULL:
        mask = series.isna()
    elif op is FilterOp.IS_NOT_NULL:
        mask = series.notna()
    elif op is FilterOp.EQUAL_STR:
        mask = series.astype("string").eq(value).fillna(False).astype(bool)
    else:
        try:
            number = float(value)
        except ValueError as e:
            raise TransformError(f"'{value}' is not a number") from e
        if not pd.api.types.is_numeric_dtype(series):
            raise TransformError(
                f"Column '{column}' has type {series.dtype} and cannot be compared to a number",
            )
        mask = _NUMERIC_COMPARISONS[op](series, number)

    result = df.loc[mask].reset_index(drop=True)
    logger.debug("Filter %s %s %r kept %d of %d rows", column, op.label, value, len(result), len(df))
    return result


def aggregate_dataframe(
    df: pd.DataFrame,
    group_by: Sequence[str],
    agg_columns: Sequence[str],
    func: AggFunc,
) -> pd.DataFrame:
    """Group ``df`` by ``group_by`` and reduce ``agg_columns`` with ``func``.

    Null keys form their own group. The group keys are returned as
    ordinary columns ahead of the aggregated ones.
    """
    if not group_by:
        raise TransformError("Select at least one group-by column")
    if not agg_columns:
        raise TransformError("Select at least one column to aggregate")
    _require_columns(df, [*group_by, *agg_columns])
    overlap = set(group_by) & set(agg_columns)
    if overlap:
        raise TransformError(
            f"Column(s) used both as key and value: {', '.join(sorted(map(str, overlap)))}",
        )

    if func in _NUMERIC_AGGREGATES:
        non_numeric = [col for col in agg_columns if not pd.api.types.is_numeric_dtype(df[col])]
        if non_numeric:
            raise TransformError(
                f"{func.label} cannot be applied to non-numeric column(s): {', '.join(map(str, non_numeric))}",
            )

    grouped = df.groupby(list(group_by), dropna=False, sort=True)[list(agg_columns)]
    try:
        result = grouped.agg(func.method)
    except (TypeError, ValueError) as e:
        raise TransformError(f"{func.label} cannot be applied: {e}") from e
    return result.reset_index()


def melt_dataframe(
    df: pd.DataFrame,
    id_vars: Sequence[str],
    value_vars: Sequence[str],
) -> pd.DataFrame:
    """Unpivot ``df`` from wide to long format.

    An empty ``value_vars`` melts every column that is not an id column.
    The output columns are named ``variable`` and ``value``, or ``value_1``
    and so on when ``df`` already has a column of that name.
    """
    _require_columns(df, [*id_vars, *value_vars])
    taken = set(df.columns)
    var_name = _free_name(MELT_VARIABLE_NAME, taken)
    value_name = _free_name(MELT_VALUE_NAME, taken | {var_name})
    try:
        return df.melt(
            id_vars=list(id_vars) or None,
            value_vars=list(value_vars) or None,
            var_name=var_name,
            value_name=value_name,
        )
    except (TypeError, ValueError, KeyError) as e:
        raise TransformError(f"Melt failed: {e}") from e


def join_dataframes(
    left: pd.DataFrame,
    right: pd.DataFrame,
    left_on: str,
    right_on: str,
    how: JoinHow,
) -> pd.DataFrame:
    """Join two dataframes on a single key column each.

    Right-hand columns whose name clashes with a left-hand column get the
    ``_right`` suffix. Cross joins ignore the keys.
    """
    suffixes = ("", JOIN_RIGHT_SUFFIX)
    try:
        if how is JoinHow.CROSS:
            return pd.merge(left, right, how="cross", suffixes=suffixes)

        if not left_on or not right_on:
            raise TransformError("Select a key column on both sides of the join")
        _require_columns(left, [left_on])
        _require_columns(right, [right_on])
        return pd.merge(
            left,
            right,
            how=how.method,
            left_on=left_on,
            right_on=right_on,
            suffixes=suffixes,
        )
    except (TypeError, ValueError, KeyError) as e:
        raise TransformError(f"Join failed: {e}") from e


def describe_dataframe(df: pd.DataFrame) -> pd.DataFrame:
    """Summary statistics with one row per statistic.

    The first column, ``statistic``, names the row (count, null_count,
    mean, std, min, quartiles, max and, for non-numeric data, unique, top
    and freq).
    """
    if df.shape[1] == 0:
        return pd.DataFrame({SUMMARY_STAT_COLUMN: []})

    null_counts = df.isna().sum().to_frame(NULL_COUNT_STAT).T
    if df.empty:
        counts = df.count().to_frame("count").T
        summary = pd.concat([counts, null_counts])
    else:
        described = df.describe(include="all")
        summary = pd.concat([described.iloc[:1], null_counts, described.iloc[1:]])

    summary.index.name = SUMMARY_STAT_COLUMN
    return summary.reset_index()


def dtypes_frame(df: pd.DataFrame) -> pd.DataFrame:
    """Two-column table of column names and their dtypes."""
    return pd.DataFrame(
        {
            DTYPES_COLUMN_NAME: [str(col) for col in df.columns],
            DTYPES_TYPE_NAME: [str(dtype) for dtype in df.dtypes],
        },
    )
