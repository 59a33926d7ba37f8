"""Subtitle parsing, settings, Anki field guessing and mpv seeking for vocabulary mining."""

__version__ = "0.3.8"

__all__ = [
    "dialogs",
    "field_guess",
    "mpv",
    "parser",
    "persistence",
    "settings",
    "theme",
]