"""
Configuration constants for the Shiny exercise apps.
"""

from typing import Dict, List, Tuple

# ======================================================
#  INJURY DATA SOURCES / CONSTANTS
# ======================================================
# Raw files live next to each other under one base URL; override with
# the ``NEISS_SOURCE`` environment variable.
NEISS_SOURCE: str = (
    "https://raw.githubusercontent.com/hadley/mastering-shiny/main/neiss"
)

NEISS_SEP: str = "\t"

NEISS_FILES: Dict[str, str] = {
    "injuries": "injuries.tsv.gz",
    "products": "products.tsv",
    "population": "population.tsv",
}

# Columns each table must carry after loading
NEISS_COLUMNS: Dict[str, List[str]] = {
    "injuries": [
        "trmt_date",
        "age",
        "sex",
        "body_part",
        "diag",
        "location",
        "prod_code",
        "weight",
        "narrative",
    ],
    "products": ["prod_code", "title"],
    "population": ["age", "sex", "population"],
}

# Injury rates are reported per this many people
RATE_PER: int = 10_000

OTHER_LABEL: str = "Other"

# ======================================================
#  INJURY DASHBOARD DEFAULTS
# ======================================================
DEFAULT_PROD_CODE: str = "649"  # toilets
DEFAULT_N_ROWS: int = 5
MAX_N_ROWS: int = 20

Y_OPTIONS: List[Tuple[str, str]] = [
    ("Injuries per 10,000 people", "rate"),
    ("Estimated number of injuries", "count"),
]
DEFAULT_Y: str = "rate"

SUMMARY_VARIABLES: List[Tuple[str, str]] = [
    ("Diagnosis", "diag"),
    ("Body part", "body_part"),
    ("Location", "location"),
]

# ======================================================
#  SMALL EXAMPLE DEFAULTS
# ======================================================
SLIDER_MIN: int = 1
SLIDER_MAX: int = 50
DEFAULT_X: int = 30
DEFAULT_Y_FACTOR: int = 5
TIMES_FACTOR: int = 5

DEFAULT_DATASET: str = "iris"
DATASET_PREVIEW_ROWS: int = 10

# plotly.express.data loaders exposed in the dataset browser
SAMPLE_DATASETS: List[str] = [
    "carshare",
    "election",
    "experiment",
    "gapminder",
    "iris",
    "medals_long",
    "medals_wide",
    "stocks",
    "tips",
    "wind",
]

TABLE_DATASET: str = "tips"
PAGE_SIZE: int = 5
