"""Core pipeline logic for the injury dashboard.

The dashboard works on three tables:

* ``injuries``: one row per sampled emergency-room visit, with a
  survey ``weight`` that scales it to a national estimate.
* ``products``: the lookup from ``prod_code`` to a product title.
* ``population``: population counts by ``age`` and ``sex``.

Every function here is a plain DataFrame transformation so the app in
``app.py`` only wires widget values into them.  The main entry points
are :func:`filter_product`, :func:`count_top` and
:func:`summarise_by_age_sex`; the narrative helpers support sampling
and stepping through the free-text case descriptions.
"""

from __future__ import annotations

from typing import Dict, List, Optional

import logging
import pandas as pd

from .config import OTHER_LABEL, RATE_PER

# Module‑level logger
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def ensure_columns(df: pd.DataFrame, required: List[str]) -> None:
    """Raise an error if the DataFrame lacks any of the required columns."""
    missing = [col for col in required if col not in df.columns]
    if missing:
        raise KeyError(f"Missing expected columns: {missing}")


def product_choices(products: pd.DataFrame) -> Dict[str, str]:
    """Map product codes (as strings) to titles, ordered by title.

    Select inputs send their values back as strings, so the keys are
    strings and :func:`filter_product` converts them back.
    """
    ensure_columns(products, ["prod_code", "title"])
    ordered = products.dropna(subset=["prod_code"]).sort_values("title")
    return {
        str(int(code)): str(title)
        for code, title in zip(ordered["prod_code"], ordered["title"])
    }


# ---------------------------------------------------------------------------
# Filtering and summaries
# ---------------------------------------------------------------------------


def filter_product(injuries: pd.DataFrame, code: int | str | None) -> pd.DataFrame:
    """Return the injuries involving one product.

    Parameters
    ----------
    injuries : pd.DataFrame
        The injuries table; must contain ``prod_code``.
    code : int or str
        The product code, either as stored or as the string value a
        select input hands back.

    Returns
    -------
    pd.DataFrame
        A copy of the matching rows.  Unknown codes give an empty frame.
    """
    if code is None or (isinstance(code, str) and not code.strip()):
        raise ValueError("A product code is required.")
    ensure_columns(injuries, ["prod_code"])
    try:
        code_int = int(code)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Product code must be numeric, got {code!r}") from exc

    mask = injuries["prod_code"].eq(code_int).fillna(False).astype(bool)
    selected = injuries.loc[mask].copy()
    logger.debug("Product %s matched %d injuries", code_int, len(selected))
    return selected


def available_levels(df: pd.DataFrame, var: str) -> int:
    """Number of distinct non-missing values of ``var``."""
    ensure_columns(df, [var])
    return int(df[var].nunique(dropna=True))


def row_limit_ok(requested: Optional[int], available: int) -> bool:
    """True when ``requested`` rows can be shown out of ``available``."""
    if requested is None:
        return False
    return 1 <= requested <= available


def count_top(
    df: pd.DataFrame,
    var: str,
    n: int = 5,
    *,
    weight: str = "weight",
    other: str = OTHER_LABEL,
) -> pd.DataFrame:
    """Weighted counts of the ``n`` most frequent levels of ``var``.

    Levels are ranked by how many rows they appear in (unweighted),
    ties broken by level name.  Every level whose rank is within ``n``
    is kept (so ties at the cut-off keep all tied levels); the rest are
    lumped into ``other``, which appears once and always last, even when
    the data already holds a level with that name.

    Parameters
    ----------
    df : pd.DataFrame
        Rows to count, typically the output of :func:`filter_product`.
    var : str
        Column to summarise, e.g. ``"diag"``.
    n : int, default 5
        Number of levels to keep before lumping.
    weight : str, default "weight"
        Column summed to give the estimated count.
    other : str, default "Other"
        Label of the lumped level.

    Returns
    -------
    pd.DataFrame
        Columns ``[var, "n"]`` with ``n`` the integer part of the
        weight sum.
    """
    if n < 1:
        raise ValueError(f"n must be at least 1, got {n}")
    ensure_columns(df, [var, weight])

    data = df.loc[df[var].notna(), [var, weight]]
    if data.empty:
        return pd.DataFrame({var: pd.Series(dtype=object), "n": pd.Series(dtype=int)})

    levels = data[var].astype(object)
    freq = levels.value_counts()
    order = sorted(freq.index, key=lambda level: (-freq[level], str(level)))
    ranks = freq.reindex(order).rank(method="min", ascending=False)
    # An existing level named like the lumped one merges into it
    keep = [level for level in order if ranks[level] <= n and level != other]

    lumped = levels.where(levels.isin(keep), other)
    totals = data[weight].groupby(lumped).sum()

    labels = keep + ([other] if (lumped == other).any() else [])
    return pd.DataFrame(
        {var: labels, "n": [int(totals[label]) for label in labels]}
    )


def summarise_by_age_sex(
    selected: pd.DataFrame, population: pd.DataFrame
) -> pd.DataFrame:
    """Estimated injuries and rate per person by age and sex.

    The weighted count per ``(age, sex)`` is joined to the population
    table on the same keys, and ``rate`` is expressed per
    ``RATE_PER`` people.  Groups without a population match (or with a
    zero population) get a missing rate.
    """
    ensure_columns(selected, ["age", "sex", "weight"])
    ensure_columns(population, ["age", "sex", "population"])

    counts = (
        selected.dropna(subset=["age", "sex"])
        .groupby(["age", "sex"], as_index=False)["weight"]
        .sum()
        .rename(columns={"weight": "n"})
    )
    summary = counts.merge(
        population[["age", "sex", "population"]], on=["age", "sex"], how="left"
    )
    denom = summary["population"].where(summary["population"] > 0)
    summary["rate"] = summary["n"] / denom * RATE_PER
    return summary.sort_values(["sex", "age"]).reset_index(drop=True)


# ---------------------------------------------------------------------------
# Narratives
# ---------------------------------------------------------------------------


def sample_narrative(selected: pd.DataFrame, rng=None) -> str:
    """Draw one narrative uniformly at random.

    ``rng`` is handed to :meth:`pandas.Series.sample` as its
    ``random_state`` and may be an int seed or a numpy generator.
    """
    ensure_columns(selected, ["narrative"])
    narratives = selected["narrative"].dropna()
    if narratives.empty:
        raise ValueError("No narratives to sample from.")
    return str(narratives.sample(n=1, random_state=rng).iloc[0])


def step_narrative(index: int, delta: int, total: int) -> int:
    """Move ``delta`` positions from ``index``, wrapping at both ends."""
    if total <= 0:
        raise ValueError("Cannot step through an empty set of narratives.")
    return (index + delta) % total


def narrative_at(selected: pd.DataFrame, index: int) -> str:
    """Narrative at ``index`` in data order, wrapping out-of-range positions."""
    ensure_columns(selected, ["narrative"])
    narratives = selected["narrative"].dropna()
    if narratives.empty:
        raise ValueError("No narratives to show.")
    return str(narratives.iloc[index % len(narratives)])
