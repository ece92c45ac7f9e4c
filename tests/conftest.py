"""
Shared fixtures: a tiny injury dataset covering two products.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest

TOILETS = 649
STAIRS = 1842


@pytest.fixture
def injuries() -> pd.DataFrame:
    rows = [
        # diag, age, sex, weight, body_part, location
        ("Fracture", 80, "female", 10.0, "Hip", "Home"),
        ("Fracture", 80, "female", 10.0, "Hip", "Home"),
        ("Fracture", 30, "male", 10.0, "Wrist", "Home"),
        ("Laceration", 30, "male", 5.0, "Head", "Home"),
        ("Laceration", 80, "female", 5.0, "Head", "Public"),
        ("Contusion", 30, "male", 4.0, "Knee", "Home"),
        ("Contusion", 80, "female", 4.0, "Knee", "Home"),
        ("Strain", 30, "female", 1.5, "Lower Trunk", "Home"),
        ("Burn", 80, "male", 2.7, "Hand", "Unknown"),
    ]
    records = [
        {
            "trmt_date": f"2017-01-{i + 1:02d}",
            "age": age,
            "sex": sex,
            "race": "white",
            "body_part": body_part,
            "diag": diag,
            "location": location,
            "prod_code": TOILETS,
            "weight": weight,
            "narrative": f"N{i + 1}",
        }
        for i, (diag, age, sex, weight, body_part, location) in enumerate(rows)
    ]
    records += [
        {
            "trmt_date": "2017-02-01",
            "age": 20,
            "sex": "male",
            "race": "white",
            "body_part": "Ankle",
            "diag": "Fracture",
            "location": "Home",
            "prod_code": STAIRS,
            "weight": 7.0,
            "narrative": "S1",
        },
        {
            "trmt_date": "2017-02-02",
            "age": 20,
            "sex": "female",
            "race": "white",
            "body_part": "Ankle",
            "diag": "Sprain",
            "location": "Public",
            "prod_code": STAIRS,
            "weight": 3.0,
            "narrative": "S2",
        },
    ]
    return pd.DataFrame(records)


@pytest.fixture
def products() -> pd.DataFrame:
    return pd.DataFrame(
        {"prod_code": [TOILETS, STAIRS], "title": ["toilets", "stairs or steps"]}
    )


@pytest.fixture
def population() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "age": [20, 20, 30, 30, 80, 80],
            "sex": ["female", "male", "female", "male", "female", "male"],
            "population": [2_100_000, 2_200_000, 2_000_000, 1_900_000, 1_000_000, 0],
        }
    )


@pytest.fixture
def toilets(injuries: pd.DataFrame) -> pd.DataFrame:
    return injuries[injuries["prod_code"] == TOILETS].copy()


@pytest.fixture
def remote_dir(
    tmp_path: Path,
    injuries: pd.DataFrame,
    products: pd.DataFrame,
    population: pd.DataFrame,
) -> Path:
    """A directory laid out like the remote source."""
    remote = tmp_path / "remote"
    remote.mkdir()
    injuries.to_csv(
        remote / "injuries.tsv.gz", sep="\t", index=False, compression="gzip"
    )
    products.to_csv(remote / "products.tsv", sep="\t", index=False)
    population.to_csv(remote / "population.tsv", sep="\t", index=False)
    return remote
