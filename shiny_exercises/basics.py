"""Text and arithmetic helpers behind the first three example apps."""

from typing import Dict

from .config import TIMES_FACTOR


def greeting(name: str | None) -> str:
    """Greet ``name``; an empty or blank name gives an empty string."""
    if name is None or not name.strip():
        return ""
    return f"Hello {name}"


def times(x: int, y: int = TIMES_FACTOR) -> int:
    return x * y


def describe_product(x: int, y: int) -> str:
    return f"{x} times {y} is {times(x, y)}"


def product_family(x: int, y: int) -> Dict[str, int]:
    """The product of ``x`` and ``y`` plus the two offsets derived from it."""
    product = times(x, y)
    return {
        "product": product,
        "product_plus5": product + 5,
        "product_plus10": product + 10,
    }
