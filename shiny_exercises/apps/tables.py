from shiny import App, reactive, render, ui

from shiny_exercises.config import PAGE_SIZE, TABLE_DATASET
from shiny_exercises.sample_data import load_dataset
from shiny_exercises.tables import page_count, page_rows, search_rows, sort_rows

# Loaded once; every session reads the same frame
DATA = load_dataset(TABLE_DATASET)
ORDER_CHOICES = {"": "(data order)", **{col: col for col in DATA.columns}}
PLAIN_PAGES = page_count(len(DATA), PAGE_SIZE)

# Both outputs are static HTML tables: paging, searching and ordering
# happen in the server, so the browser cannot re-sort a single page.
app_ui = ui.page_sidebar(
    ui.sidebar(
        ui.input_checkbox("searching", "Enable search", True),
        ui.input_text("search", "Search"),
        ui.input_checkbox("ordering", "Enable ordering", True),
        ui.input_select("order_by", "Order by", ORDER_CHOICES),
        ui.input_checkbox("descending", "Descending", False),
        ui.input_numeric("page", "Page", 1, min=1, step=1),
    ),
    ui.card(
        ui.card_header(f"{TABLE_DATASET} ({PAGE_SIZE} rows per page)"),
        ui.output_table("grid"),
        ui.output_text("page_info"),
    ),
    ui.card(
        ui.card_header("Search and ordering disabled"),
        ui.input_numeric(
            "plain_page", "Page", 1, min=1, max=PLAIN_PAGES, step=1
        ),
        ui.output_table("plain"),
    ),
    title="Interactive tables",
)


def server(input, output, session):

    @reactive.calc
    def matched():
        df = DATA
        if input.searching():
            df = search_rows(df, input.search())
        if input.ordering():
            df = sort_rows(df, input.order_by() or None, input.descending())
        return df

    @reactive.calc
    def pages():
        return page_count(len(matched()), PAGE_SIZE)

    @reactive.effect
    def _sync_page_bounds():
        # Keep the page input inside the current number of pages
        ui.update_numeric("page", max=pages())

    @reactive.calc
    def current_page():
        page = input.page()
        if page is None:
            return 1
        return min(max(1, int(page)), pages())

    @render.table
    def grid():
        return page_rows(matched(), current_page(), PAGE_SIZE)

    @render.text
    def page_info():
        return f"Page {current_page()} of {pages()} ({len(matched())} matching rows)"

    @render.table
    def plain():
        page = input.plain_page()
        return page_rows(DATA, 1 if page is None else page, PAGE_SIZE)


app = App(app_ui, server)
