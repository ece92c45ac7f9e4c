"""
Tests for the injury pipeline: filtering, top-n counts, rates and narratives.
"""

from __future__ import annotations

import math

import pandas as pd
import pytest

from shiny_exercises.pipeline import (
    available_levels,
    count_top,
    ensure_columns,
    filter_product,
    narrative_at,
    product_choices,
    row_limit_ok,
    sample_narrative,
    step_narrative,
    summarise_by_age_sex,
)

from .conftest import STAIRS, TOILETS


def test_ensure_columns_names_missing_columns() -> None:
    df = pd.DataFrame({"a": [1]})
    with pytest.raises(KeyError, match="'b'"):
        ensure_columns(df, ["a", "b"])


def test_product_choices_keyed_by_string_code_sorted_by_title(products) -> None:
    choices = product_choices(products)
    assert list(choices) == [str(STAIRS), str(TOILETS)]
    assert choices[str(TOILETS)] == "toilets"


def test_filter_product_accepts_string_codes(injuries) -> None:
    selected = filter_product(injuries, str(TOILETS))
    assert len(selected) == 9
    assert (selected["prod_code"] == TOILETS).all()


def test_filter_product_unknown_code_is_empty(injuries) -> None:
    assert filter_product(injuries, 1).empty


@pytest.mark.parametrize("code", [None, "", "  "])
def test_filter_product_requires_a_code(injuries, code) -> None:
    with pytest.raises(ValueError):
        filter_product(injuries, code)


def test_filter_product_rejects_non_numeric_code(injuries) -> None:
    with pytest.raises(ValueError, match="numeric"):
        filter_product(injuries, "toilets")


def test_count_top_lumps_remaining_levels_into_other(toilets) -> None:
    result = count_top(toilets, "diag", n=1)
    assert list(result["diag"]) == ["Fracture", "Other"]
    # 10 + 5 + 5 + 4 + 4 + 1.5 + 2.7 truncated
    assert list(result["n"]) == [30, 22]


def test_count_top_keeps_ties_at_the_cutoff(toilets) -> None:
    result = count_top(toilets, "diag", n=2)
    # Contusion and Laceration both appear twice; ties ordered by name
    assert list(result["diag"]) == ["Fracture", "Contusion", "Laceration", "Other"]
    assert list(result["n"]) == [30, 8, 10, 4]


def test_count_top_without_lumping_has_no_other_row(toilets) -> None:
    result = count_top(toilets, "diag", n=5)
    assert "Other" not in set(result["diag"])
    assert result["n"].sum() == 30 + 8 + 10 + 1 + 2


def test_count_top_merges_existing_other_level_into_one_row() -> None:
    df = pd.DataFrame(
        {
            "location": ["Home", "Home", "Home", "Other", "Other", "Street", "School"],
            "weight": [1.0] * 7,
        }
    )
    result = count_top(df, "location", n=2)
    assert list(result["location"]) == ["Home", "Other"]
    assert list(result["n"]) == [3, 4]
    assert result["n"].sum() == 7


def test_count_top_existing_other_level_alone_is_not_duplicated() -> None:
    df = pd.DataFrame({"location": ["Home", "Other"], "weight": [2.0, 1.0]})
    result = count_top(df, "location", n=5)
    assert list(result["location"]) == ["Home", "Other"]
    assert list(result["n"]) == [2, 1]


def test_count_top_rejects_non_positive_n(toilets) -> None:
    with pytest.raises(ValueError):
        count_top(toilets, "diag", n=0)


def test_count_top_empty_selection() -> None:
    empty = pd.DataFrame({"diag": [], "weight": []})
    result = count_top(empty, "diag")
    assert result.empty
    assert list(result.columns) == ["diag", "n"]


def test_row_limit_guard(toilets) -> None:
    levels = available_levels(toilets, "location")
    assert levels == 3
    assert row_limit_ok(3, levels)
    assert not row_limit_ok(5, levels)
    assert not row_limit_ok(0, levels)
    assert not row_limit_ok(None, levels)


def test_summarise_by_age_sex_counts_and_rates(toilets, population) -> None:
    summary = summarise_by_age_sex(toilets, population)
    assert list(summary.columns) == ["age", "sex", "n", "population", "rate"]
    assert list(zip(summary["sex"], summary["age"])) == [
        ("female", 30),
        ("female", 80),
        ("male", 30),
        ("male", 80),
    ]

    female_80 = summary[(summary["sex"] == "female") & (summary["age"] == 80)].iloc[0]
    assert female_80["n"] == pytest.approx(29.0)
    assert female_80["rate"] == pytest.approx(29.0 / 1_000_000 * 10_000)

    male_30 = summary[(summary["sex"] == "male") & (summary["age"] == 30)].iloc[0]
    assert male_30["rate"] == pytest.approx(19.0 / 1_900_000 * 10_000)


def test_summarise_by_age_sex_zero_population_has_missing_rate(
    toilets, population
) -> None:
    summary = summarise_by_age_sex(toilets, population)
    male_80 = summary[(summary["sex"] == "male") & (summary["age"] == 80)].iloc[0]
    assert male_80["n"] == pytest.approx(2.7)
    assert math.isnan(male_80["rate"])


def test_sample_narrative_draws_from_selection(toilets) -> None:
    story = sample_narrative(toilets, rng=0)
    assert story in set(toilets["narrative"])
    assert sample_narrative(toilets, rng=0) == story


def test_sample_narrative_empty_selection_raises() -> None:
    with pytest.raises(ValueError):
        sample_narrative(pd.DataFrame({"narrative": []}))


def test_step_narrative_wraps_both_ways() -> None:
    assert step_narrative(0, 1, 9) == 1
    assert step_narrative(8, 1, 9) == 0
    assert step_narrative(0, -1, 9) == 8
    with pytest.raises(ValueError):
        step_narrative(0, 1, 0)


def test_narrative_at_follows_data_order(toilets) -> None:
    assert narrative_at(toilets, 0) == "N1"
    assert narrative_at(toilets, 10) == "N2"
