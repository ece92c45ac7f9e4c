"""Small example apps, one module per exercise.

Each module exposes ``app_ui``, ``server`` and ``app`` (a ``shiny.App``)
and can be started with ``shiny run shiny_exercises/apps/<name>.py`` or
``python -m shiny_exercises run <name>``.
"""

from typing import Dict

APPS: Dict[str, str] = {
    "greeting": "shiny_exercises.apps.greeting",
    "arithmetic": "shiny_exercises.apps.arithmetic",
    "reactive_reuse": "shiny_exercises.apps.reactive_reuse",
    "dataset_browser": "shiny_exercises.apps.dataset_browser",
    "tables": "shiny_exercises.apps.tables",
}
