from shiny import App, reactive, render, ui

from shiny_exercises import basics
from shiny_exercises.config import DEFAULT_X, DEFAULT_Y_FACTOR, SLIDER_MAX, SLIDER_MIN

app_ui = ui.page_fluid(
    ui.h2("Reactive expression reuse"),
    ui.input_slider("x", "If x is", SLIDER_MIN, SLIDER_MAX, DEFAULT_X),
    ui.input_slider("y", "and y is", SLIDER_MIN, SLIDER_MAX, DEFAULT_Y_FACTOR),
    ui.p("then, (x * y) is"),
    ui.output_text("product"),
    ui.p("and, (x * y) + 5 is"),
    ui.output_text("product_plus5"),
    ui.p("and (x * y) + 10 is"),
    ui.output_text("product_plus10"),
)


def server(input, output, session):

    # Computed once per slider change and shared by all three outputs
    @reactive.calc
    def family():
        return basics.product_family(input.x(), input.y())

    @render.text
    def product():
        return str(family()["product"])

    @render.text
    def product_plus5():
        return str(family()["product_plus5"])

    @render.text
    def product_plus10():
        return str(family()["product_plus10"])


app = App(app_ui, server)
