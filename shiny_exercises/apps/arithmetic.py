from shiny import App, render, ui

from shiny_exercises import basics
from shiny_exercises.config import (
    DEFAULT_X,
    DEFAULT_Y_FACTOR,
    SLIDER_MAX,
    SLIDER_MIN,
    TIMES_FACTOR,
)

app_ui = ui.page_fluid(
    ui.h2("Slider arithmetic"),
    ui.input_slider("x", "If x is", SLIDER_MIN, SLIDER_MAX, DEFAULT_X),
    ui.p(f"then x times {TIMES_FACTOR} is"),
    ui.output_text("times_five"),

    ui.input_slider("y", "and y is", SLIDER_MIN, SLIDER_MAX, DEFAULT_Y_FACTOR),
    ui.output_text("product"),
)


def server(input, output, session):

    @render.text
    def times_five():
        return str(basics.times(input.x(), TIMES_FACTOR))

    @render.text
    def product():
        return f"then, {basics.describe_product(input.x(), input.y())}"


app = App(app_ui, server)
