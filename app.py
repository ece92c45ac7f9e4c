from shiny import reactive, render, req
from shiny.express import input, ui
from shinywidgets import render_plotly
from pathlib import Path

# Import organized modules
from shiny_exercises.config import (
    DEFAULT_N_ROWS,
    DEFAULT_PROD_CODE,
    DEFAULT_Y,
    MAX_N_ROWS,
    SUMMARY_VARIABLES,
    Y_OPTIONS,
)
from shiny_exercises.data_manager import load_payload
from shiny_exercises.pipeline import (
    available_levels,
    count_top,
    filter_product,
    narrative_at,
    product_choices,
    row_limit_ok,
    sample_narrative,
    step_narrative,
    summarise_by_age_sex,
)
from shiny_exercises.plotting import create_injury_plot

# ======================================================
#  REACTIVE STATE
# ======================================================
# Load once on startup; values stay in-memory until app restart.
PAYLOAD = load_payload()
payload_store = reactive.Value(PAYLOAD)

# Helpers for UI mapping
PRODUCT_CHOICES = product_choices(PAYLOAD["products"])
Y_MAPPING = {value: label for label, value in Y_OPTIONS}
SUMMARY_TITLES = {value: label for label, value in SUMMARY_VARIABLES}

DEFAULT_CODE = (
    DEFAULT_PROD_CODE
    if DEFAULT_PROD_CODE in PRODUCT_CHOICES
    else next(iter(PRODUCT_CHOICES), None)
)

narrative_index = reactive.Value(0)
narrative_text = reactive.Value("")


@reactive.calc
def selected():
    code = input.code()
    req(code)
    return filter_product(payload_store.get()["injuries"], code)


@reactive.calc
def n_rows():
    n = input.n_rows()
    req(n is not None)
    return int(n)


@reactive.calc
def summary():
    return summarise_by_age_sex(selected(), payload_store.get()["population"])


def top_table(var: str):
    df = selected()
    n = n_rows()
    # Suspend the table while more rows are requested than levels exist
    req(row_limit_ok(n, available_levels(df, var)))
    return count_top(df, var, n).rename(columns={var: SUMMARY_TITLES[var]})


def narrative_count() -> int:
    return int(selected()["narrative"].notna().sum())


# ======================================================
#  UI LAYOUT
# ======================================================
css_file = Path(__file__).parent / "css" / "theme.css"

ui.include_css(css_file)

ui.page_opts(
    title="Injury explorer",
    fillable=False,
    full_width=True,
    id="page",
    lang="en",
)

with ui.sidebar(open="always"):
    ui.input_select(
        "code",
        "Product",
        PRODUCT_CHOICES,
        selected=DEFAULT_CODE,
        width="100%",
    )
    ui.input_select("y", "Y axis", Y_MAPPING, selected=DEFAULT_Y)
    ui.input_numeric(
        "n_rows",
        "Rows in summary tables",
        DEFAULT_N_ROWS,
        min=1,
        max=MAX_N_ROWS,
        step=1,
    )
    ui.input_action_button(
        "reset_filters",
        "Reset filters",
        class_="btn-primary mt-3",
    )

    @render.download_button(
        label="Download selected rows",
        filename=lambda: f"injuries_{input.code()}.csv",
    )
    def download_selected():
        yield selected().to_csv(index=False)


@reactive.effect
@reactive.event(input.reset_filters)
def _reset_filters():
    ui.update_select("code", selected=DEFAULT_CODE)
    ui.update_select("y", selected=DEFAULT_Y)
    ui.update_numeric("n_rows", value=DEFAULT_N_ROWS)


with ui.layout_columns(col_widths=[4, 4, 4]):
    with ui.card():
        with ui.card_header():
            SUMMARY_TITLES["diag"]

        @render.table
        def diag():
            return top_table("diag")

    with ui.card():
        with ui.card_header():
            SUMMARY_TITLES["body_part"]

        @render.table
        def body_part():
            return top_table("body_part")

    with ui.card():
        with ui.card_header():
            SUMMARY_TITLES["location"]

        @render.table
        def location():
            return top_table("location")


with ui.card():

    @render_plotly
    def age_sex_plot():
        return create_injury_plot(
            summary(),
            input.y(),
            title=PRODUCT_CHOICES.get(input.code()),
        )


# ======================================================
#  NARRATIVES
# ======================================================
@reactive.effect
@reactive.event(selected)
def _reset_narrative_position():
    narrative_index.set(0)


@reactive.effect
@reactive.event(input.story, selected)
def _tell_story():
    df = selected()
    req(narrative_count() > 0)
    narrative_text.set(sample_narrative(df))


def _step_story(delta: int) -> None:
    total = narrative_count()
    req(total > 0)
    index = step_narrative(narrative_index.get(), delta, total)
    narrative_index.set(index)
    narrative_text.set(narrative_at(selected(), index))


@reactive.effect
@reactive.event(input.prev_story)
def _previous_story():
    _step_story(-1)


@reactive.effect
@reactive.event(input.next_story)
def _next_story():
    _step_story(1)


with ui.card():
    with ui.layout_columns(col_widths=[2, 2, 2, 6]):
        ui.input_action_button("story", "Tell me a story")
        ui.input_action_button("prev_story", "Previous")
        ui.input_action_button("next_story", "Next")

        @render.text
        def narrative():
            return narrative_text.get()
