"""shiny_exercises package initializer.

This package holds the data and helper modules behind a collection of
small Shiny for Python apps: greeting text, slider arithmetic, reactive
expression reuse, a dataset browser, interactive tables and the injury
data dashboard in ``app.py``.  See individual module docstrings for
details.
"""

__version__ = "0.1.0"
