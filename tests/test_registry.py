"""Tests for container.py and registry.py modules."""

from pathlib import Path

import pandas as pd
import pytest

from table_explorer.container import DataFrameContainer
from table_explorer.exceptions import FrameNotFoundError, TransformError
from table_explorer.file_utils import DataReader
from table_explorer.registry import FrameRegistry
from table_explorer.transforms import AggFunc, FilterOp, JoinHow


class TestDataFrameContainer:
    """Test cases for DataFrameContainer."""

    def test_init(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        assert container.title == "sales.csv"
        assert container.shape == (5, 4)
        assert container.columns == ["region", "product", "units", "price"]
        assert container.filter.inplace is False
        assert container.join.how is JoinHow.INNER

    def test_summary_is_cached_until_data_replaced(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        first = container.summary()
        assert container.summary() is first

        container.replace_data(sales_df.head(2))
        second = container.summary()
        assert second is not first
        assert second.set_index("statistic").loc["count", "units"] == 2

    def test_apply_filter_new(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        container.filter.column = "units"
        container.filter.operation = FilterOp.GREATER_THAN
        container.filter.value = "5"

        result = container.apply_filter()
        assert result is not None
        assert len(result) == 3
        assert container.shape == (5, 4)

    def test_apply_filter_inplace(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        container.filter.column = "price"
        container.filter.operation = FilterOp.IS_NOT_NULL
        container.filter.inplace = True

        assert container.apply_filter() is None
        assert container.shape == (4, 4)

    def test_selection_lists_do_not_duplicate(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        assert container.add_group_by("product") is True
        assert container.add_group_by("product") is False
        assert container.add_group_by("") is False
        container.add_agg_column("units")
        container.add_agg_column("units")
        assert container.aggregate.group_by == ["product"]
        assert container.aggregate.agg_columns == ["units"]

        container.add_id_var("product")
        container.add_value_var("units")
        container.add_value_var("units")
        assert container.melt.value_vars == ["units"]

    def test_apply_aggregate_and_clear(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        container.add_group_by("product")
        container.add_agg_column("units")
        container.aggregate.func = AggFunc.MIN

        result = container.apply_aggregate()
        assert result["units"].tolist() == [3, 5, 8]
        assert container.aggregate.result is result

        container.clear_aggregate()
        assert container.aggregate.group_by == []
        assert container.aggregate.result is None

    def test_apply_melt_and_clear(self, sales_df: pd.DataFrame) -> None:
        container = DataFrameContainer(sales_df, "sales.csv")
        container.add_id_var("product")
        container.add_value_var("units")

        result = container.apply_melt()
        assert len(result) == 5
        container.clear_melt()
        assert container.melt.id_vars == []
        assert container.melt.result is None

    def test_apply_melt_with_value_column(self) -> None:
        container = DataFrameContainer(pd.DataFrame({"id": [1, 2], "value": [3, 4]}), "t")
        container.add_id_var("id")

        result = container.apply_melt()
        assert list(result.columns) == ["id", "variable", "value_1"]
        assert result["value_1"].tolist() == [3, 4]

    def test_non_string_labels_become_strings(self) -> None:
        container = DataFrameContainer(pd.DataFrame({2020: [5, 7], "name": ["a", "b"]}), "years")
        assert container.columns == ["2020", "name"]

        container.replace_data(pd.DataFrame({2021: [1]}))
        assert container.columns == ["2021"]


class TestFrameRegistry:
    """Test cases for FrameRegistry."""

    @pytest.fixture()
    def registry(self, sales_df: pd.DataFrame, regions_df: pd.DataFrame) -> FrameRegistry:
        registry = FrameRegistry()
        registry.add(sales_df, "sales.csv")
        registry.add(regions_df, "regions.csv")
        return registry

    def test_add_keeps_order(self, registry: FrameRegistry) -> None:
        assert registry.titles() == ["sales.csv", "regions.csv"]
        assert len(registry) == 2
        assert "sales.csv" in registry
        assert [c.title for c in registry] == ["sales.csv", "regions.csv"]

    def test_add_duplicate_title(self, registry: FrameRegistry, sales_df: pd.DataFrame) -> None:
        assert registry.add(sales_df, "sales.csv").title == "sales.csv (2)"
        assert registry.add(sales_df, "sales.csv").title == "sales.csv (3)"

    def test_get_and_remove(self, registry: FrameRegistry) -> None:
        assert registry.get("regions.csv").shape == (3, 3)
        registry.remove("regions.csv")
        assert registry.titles() == ["sales.csv"]
        with pytest.raises(FrameNotFoundError):
            registry.get("regions.csv")
        with pytest.raises(FrameNotFoundError):
            registry.remove("regions.csv")

    def test_columns_of(self, registry: FrameRegistry) -> None:
        assert registry.columns_of("regions.csv") == ["region", "manager", "units"]
        assert registry.columns_of("missing.csv") == []

    def test_derived_title(self, registry: FrameRegistry) -> None:
        assert registry.derived_title("filtered_", "sales.csv") == "filtered_sales.csv2"

    def test_filter_opens_new_frame(self, registry: FrameRegistry) -> None:
        sales = registry.get("sales.csv")
        sales.filter.column = "region"
        sales.filter.operation = FilterOp.EQUAL_STR
        sales.filter.value = "north"

        new = registry.filter("sales.csv")
        assert new is not None
        assert new.title == "filtered_sales.csv2"
        assert new.shape == (2, 4)
        assert registry.titles()[-1] == new.title
        assert sales.shape == (5, 4)

    def test_filter_inplace(self, registry: FrameRegistry) -> None:
        sales = registry.get("sales.csv")
        sales.filter.column = "units"
        sales.filter.operation = FilterOp.LOWER_EQUAL
        sales.filter.value = "5"
        sales.filter.inplace = True

        assert registry.filter("sales.csv") is None
        assert len(registry) == 2
        assert sales.shape == (2, 4)

    def test_filter_error_leaves_data(self, registry: FrameRegistry) -> None:
        sales = registry.get("sales.csv")
        sales.filter.column = "units"
        sales.filter.operation = FilterOp.GREATER_THAN
        sales.filter.value = "many"
        with pytest.raises(TransformError):
            registry.filter("sales.csv")
        assert sales.shape == (5, 4)
        assert len(registry) == 2

    def test_join_opens_new_frame(self, registry: FrameRegistry) -> None:
        sales = registry.get("sales.csv")
        sales.join.other = "regions.csv"
        sales.join.left_on = "region"
        sales.join.right_on = "region"
        sales.join.how = JoinHow.LEFT

        new = registry.join("sales.csv")
        assert new is not None
        assert new.title == "joined_sales.csv2"
        assert new.shape[0] == 5
        assert "manager" in new.columns

    def test_join_inplace_refreshes_summary(self, registry: FrameRegistry) -> None:
        sales = registry.get("sales.csv")
        before = sales.summary()
        sales.join.other = "regions.csv"
        sales.join.left_on = "region"
        sales.join.right_on = "region"
        sales.join.inplace = True

        assert registry.join("sales.csv") is None
        assert sales.shape[0] == 3
        assert "manager" in sales.columns
        assert sales.summary() is not before
        assert "manager" in sales.summary().columns

    def test_filter_on_excel_year_header(self, tmp_path: Path) -> None:
        path = tmp_path / "years.xlsx"
        pd.DataFrame({2020: [5, 7], "name": ["a", "b"]}).to_excel(path, index=False)
        registry = FrameRegistry()
        years = registry.add(DataReader.read_file(path), path.name)
        years.filter.column = years.columns[0]
        years.filter.operation = FilterOp.GREATER_THAN
        years.filter.value = "6"

        new = registry.filter("years.xlsx")
        assert new is not None
        assert new.columns == ["2020", "name"]
        assert new.data["name"].tolist() == ["b"]

    def test_join_without_target(self, registry: FrameRegistry) -> None:
        with pytest.raises(TransformError, match="No dataframe selected"):
            registry.join("sales.csv")

    def test_join_unknown_target(self, registry: FrameRegistry) -> None:
        registry.get("sales.csv").join.other = "gone.csv"
        with pytest.raises(FrameNotFoundError, match="gone.csv"):
            registry.join("sales.csv")
