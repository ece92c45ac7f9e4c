from shiny import App, render, ui

from shiny_exercises import basics

app_ui = ui.page_fluid(
    ui.h2("Greetings"),
    ui.input_text("name", "What's your name?"),
    ui.output_text("greeting"),
)


def server(input, output, session):

    @render.text
    def greeting():
        return basics.greeting(input.name())


app = App(app_ui, server)
