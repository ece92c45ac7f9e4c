"""
Built-in sample datasets for the dataset browser.

The datasets ship with plotly (``plotly.express.data``), so the browser
works offline.
"""

import io
import logging
from functools import lru_cache
from typing import List

import pandas as pd
import plotly.express as px

from .config import SAMPLE_DATASETS

logger = logging.getLogger(__name__)


def dataset_names() -> List[str]:
    """Sorted names of the datasets offered in the select input."""
    return sorted(name for name in SAMPLE_DATASETS if hasattr(px.data, name))


@lru_cache(maxsize=None)
def _load(name: str) -> pd.DataFrame:
    logger.info("Loading sample dataset %s", name)
    return getattr(px.data, name)()


def load_dataset(name: str) -> pd.DataFrame:
    """
    Return a copy of the named sample dataset.

    Raises
    ------
    KeyError
        If ``name`` is not one of :func:`dataset_names`.
    """
    if name not in dataset_names():
        raise KeyError(f"Unknown dataset {name!r}")
    return _load(name).copy()


def summarise_dataset(df: pd.DataFrame) -> str:
    """Printable summary: shape, column types and descriptive statistics."""
    buffer = io.StringIO()
    buffer.write(f"{len(df)} rows x {len(df.columns)} columns\n\n")
    buffer.write("Column types:\n")
    buffer.write(df.dtypes.to_string())
    buffer.write("\n\n")
    if df.columns.empty:
        return buffer.getvalue()
    buffer.write(df.describe(include="all").to_string())
    return buffer.getvalue()
