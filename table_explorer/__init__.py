"""Table Explorer: a desktop viewer for filtering, aggregating, melting and joining tables."""

from .constants import APP_VERSION
from .container import DataFrameContainer
from .registry import FrameRegistry

__version__ = APP_VERSION

__all__ = ["DataFrameContainer", "FrameRegistry", "__version__"]
