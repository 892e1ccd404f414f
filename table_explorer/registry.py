"""The collection of open dataframes, keyed by title."""

import logging
from collections.abc import Iterator

import pandas as pd

from .constants import FILTERED_PREFIX, JOINED_PREFIX
from .container import DataFrameContainer
from .exceptions import FrameNotFoundError, TransformError
from .transforms import join_dataframes

logger = logging.getLogger(__name__)


class FrameRegistry:
    """Open dataframes in the order they were opened."""

    def __init__(self) -> None:
        self._frames: dict[str, DataFrameContainer] = {}

    def __len__(self) -> int:
        return len(self._frames)

    def __iter__(self) -> Iterator[DataFrameContainer]:
        return iter(list(self._frames.values()))

    def __contains__(self, title: object) -> bool:
        return title in self._frames

    def titles(self) -> list[str]:
        return list(self._frames)

    def unique_title(self, title: str) -> str:
        """Return ``title``, or ``title (n)`` if it is already taken."""
        if title not in self._frames:
            return title
        n = 2
        while f"{title} ({n})" in self._frames:
            n += 1
        return f"{title} ({n})"

    def derived_title(self, prefix: str, title: str) -> str:
        """Title for a frame derived from ``title``, e.g. ``filtered_data.csv3``."""
        return self.unique_title(f"{prefix}{title}{len(self)}")

    def add(self, data: pd.DataFrame, title: str) -> DataFrameContainer:
        container = DataFrameContainer(data, self.unique_title(title))
        self._frames[container.title] = container
        logger.info("Opened %s with shape %s", container.title, container.shape)
        return container

    def get(self, title: str) -> DataFrameContainer:
        try:
            return self._frames[title]
        except KeyError:
            raise FrameNotFoundError(title) from None

    def remove(self, title: str) -> DataFrameContainer:
        container = self.get(title)
        del self._frames[title]
        logger.info("Closed %s", title)
        return container

    def columns_of(self, title: str) -> list[str]:
        """Columns of an open frame, or an empty list if it is not open."""
        if title not in self._frames:
            return []
        return self._frames[title].columns

    def filter(self, title: str) -> DataFrameContainer | None:
        """Apply the filter configured on ``title``.

        Returns:
            The newly opened container, or None when filtered in place.

        """
        container = self.get(title)
        filtered = container.apply_filter()
        if filtered is None:
            return None
        return self.add(filtered, self.derived_title(FILTERED_PREFIX, container.title))

    def join(self, title: str) -> DataFrameContainer | None:
        """Join ``title`` with the frame selected in its join state.

        Returns:
            The newly opened container, or None when joined in place.

        Raises:
            FrameNotFoundError: If either frame is not open
            TransformError: If no target is selected or the join fails

        """
        container = self.get(title)
        state = container.join
        if not state.other:
            raise TransformError("No dataframe selected to join with")
        other = self.get(state.other)

        joined = join_dataframes(
            container.data, other.data, state.left_on, state.right_on, state.how,
        )
        logger.info(
            "%s join of %s and %s produced shape %s",
            state.how.label, container.title, other.title, joined.shape,
        )
        if state.inplace:
            container.replace_data(joined)
            return None
        return self.add(joined, self.derived_title(JOINED_PREFIX, container.title))
