"""User interface preferences."""

from enum import StrEnum


class Theme(StrEnum):
    """Colour theme of the client."""

    LIGHT = "light"
    DARK = "dark"
