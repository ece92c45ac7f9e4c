"""Paging, search and ordering helpers for the interactive tables app."""

import math
from typing import List, Optional

import pandas as pd


def search_rows(
    df: pd.DataFrame, query: Optional[str], columns: Optional[List[str]] = None
) -> pd.DataFrame:
    """
    Keep rows where any of ``columns`` contains ``query``.

    Matching is a case-insensitive substring test on the string form of
    each cell.  A blank query returns ``df`` unchanged.
    """
    if query is None or not query.strip():
        return df
    cols = columns if columns is not None else list(df.columns)
    missing = [col for col in cols if col not in df.columns]
    if missing:
        raise KeyError(f"Missing expected columns: {missing}")

    needle = query.strip().lower()
    mask = pd.Series(False, index=df.index, dtype=bool)
    for col in cols:
        mask |= df[col].astype(str).str.lower().str.contains(needle, regex=False)
    return df.loc[mask]


def page_count(total_rows: int, page_size: int) -> int:
    """Number of pages needed for ``total_rows``; never less than one."""
    if page_size < 1:
        raise ValueError(f"page_size must be at least 1, got {page_size}")
    return max(1, math.ceil(total_rows / page_size))


def page_rows(df: pd.DataFrame, page: int, page_size: int) -> pd.DataFrame:
    """Rows on the 1-based ``page``; out-of-range pages are clamped."""
    pages = page_count(len(df), page_size)
    page = min(max(1, int(page)), pages)
    start = (page - 1) * page_size
    return df.iloc[start : start + page_size]


def sort_rows(
    df: pd.DataFrame, column: Optional[str], descending: bool = False
) -> pd.DataFrame:
    # None means ordering is switched off
    if not column:
        return df
    if column not in df.columns:
        raise KeyError(f"Missing expected columns: {[column]}")
    return df.sort_values(column, ascending=not descending, kind="stable")
