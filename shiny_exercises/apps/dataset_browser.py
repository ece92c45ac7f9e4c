from shiny import App, reactive, render, req, ui
from shinywidgets import output_widget, render_plotly

from shiny_exercises.config import DATASET_PREVIEW_ROWS, DEFAULT_DATASET
from shiny_exercises.plotting import create_dataset_plot
from shiny_exercises.sample_data import dataset_names, load_dataset, summarise_dataset

app_ui = ui.page_sidebar(
    ui.sidebar(
        ui.input_select(
            "dataset",
            label="Dataset",
            choices=dataset_names(),
            selected=DEFAULT_DATASET,
        ),
    ),
    ui.card(
        ui.card_header("Summary"),
        ui.output_text_verbatim("summary"),
    ),
    ui.card(
        ui.card_header(f"First {DATASET_PREVIEW_ROWS} rows"),
        ui.output_table("table"),
    ),
    ui.card(
        ui.card_header("Plot"),
        output_widget("plot"),
    ),
    title="Dataset browser",
)


def server(input, output, session):

    @reactive.calc
    def dataset():
        req(input.dataset())
        return load_dataset(input.dataset())

    @render.code
    def summary():
        return summarise_dataset(dataset())

    @render.table
    def table():
        return dataset().head(DATASET_PREVIEW_ROWS)

    @render_plotly
    def plot():
        return create_dataset_plot(dataset(), title=input.dataset())


app = App(app_ui, server)
