"""Colour palettes for the application's light and dark looks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field


@dataclass(frozen=True)
class Color:
    """An 8-bit RGBA colour."""

    r: int
    g: int
    b: int
    a: int = 255

    @classmethod
    def from_hex(cls, text: str) -> Color:
        """Parse ``#RGB``, ``#RGBA``, ``#RRGGBB`` or ``#RRGGBBAA``."""
        if not text.startswith("#"):
            raise ValueError(f"Hex colour must start with '#': {text!r}")
        digits = text[1:]
        if len(digits) in (3, 4):
            digits = "".join(ch * 2 for ch in digits)
        if len(digits) not in (6, 8):
            raise ValueError(f"Invalid hex colour length: {text!r}")
        try:
            channels = [int(digits[i : i + 2], 16) for i in range(0, len(digits), 2)]
        except ValueError as exc:
            raise ValueError(f"Invalid hex colour: {text!r}") from exc
        return cls(*channels)


def _rgb(r: int, g: int, b: int) -> Color:
    return Color(r, g, b)


@dataclass(frozen=True)
class ThemeDetails:
    """One complete palette."""

    background: Color
    foreground: Color
    selection: Color
    comment: Color
    red: Color
    orange: Color
    yellow: Color
    green: Color
    blue: Color
    purple: Color
    cyan: Color
    pink: Color
    background_darker: Color
    background_dark: Color
    background_light: Color
    background_lighter: Color

    @classmethod
    def dracula(cls) -> ThemeDetails:
        return cls(
            background=_rgb(0x28, 0x2A, 0x36),
            foreground=_rgb(0xF8, 0xF8, 0xF2),
            selection=_rgb(0x44, 0x47, 0x5A),
            comment=_rgb(0x62, 0x72, 0xA4),
            red=_rgb(0xFF, 0x55, 0x55),
            orange=_rgb(0xFF, 0xB8, 0x6C),
            yellow=_rgb(0xF1, 0xFA, 0x8C),
            green=_rgb(0x50, 0xFA, 0x7B),
            blue=_rgb(98, 160, 234),
            purple=_rgb(189, 147, 249),
            cyan=_rgb(139, 233, 253),
            pink=_rgb(255, 121, 198),
            background_darker=_rgb(25, 26, 33),
            background_dark=_rgb(33, 35, 53),
            background_light=_rgb(52, 54, 66),
            background_lighter=_rgb(66, 69, 80),
        )

    @classmethod
    def dracula_light(cls) -> ThemeDetails:
        return cls(
            background=_rgb(248, 248, 242),
            foreground=_rgb(40, 42, 54),
            selection=_rgb(200, 200, 220),
            comment=_rgb(120, 130, 160),
            red=_rgb(200, 80, 80),
            orange=_rgb(220, 150, 90),
            yellow=_rgb(220, 230, 120),
            green=_rgb(80, 200, 120),
            blue=_rgb(70, 130, 180),
            purple=_rgb(150, 120, 220),
            cyan=_rgb(80, 190, 230),
            pink=_rgb(230, 130, 200),
            background_darker=_rgb(235, 235, 230),
            background_dark=_rgb(245, 245, 240),
            background_light=_rgb(255, 255, 250),
            background_lighter=_rgb(255, 255, 255),
        )

    @classmethod
    def tokyo_night_storm(cls) -> ThemeDetails:
        return cls(
            background=_rgb(23, 24, 38),
            foreground=_rgb(204, 204, 204),
            selection=_rgb(68, 71, 90),
            comment=_rgb(98, 114, 164),
            red=_rgb(255, 121, 121),
            orange=_rgb(255, 161, 90),
            yellow=_rgb(241, 250, 140),
            green=_rgb(86, 209, 123),
            blue=_rgb(77, 140, 191),
            purple=_rgb(189, 147, 249),
            cyan=_rgb(97, 175, 239),
            pink=_rgb(255, 85, 255),
            background_darker=_rgb(19, 20, 32),
            background_dark=_rgb(27, 29, 45),
            background_light=_rgb(42, 44, 66),
            background_lighter=_rgb(56, 58, 78),
        )

    @classmethod
    def tokyo_night_light(cls) -> ThemeDetails:
        return cls(
            background=_rgb(240, 240, 250),
            foreground=_rgb(40, 40, 40),
            selection=_rgb(200, 200, 230),
            comment=_rgb(150, 160, 200),
            red=_rgb(200, 80, 80),
            orange=_rgb(220, 140, 60),
            yellow=_rgb(220, 230, 100),
            green=_rgb(80, 180, 100),
            blue=_rgb(65, 130, 170),
            purple=_rgb(150, 120, 200),
            cyan=_rgb(80, 160, 200),
            pink=_rgb(200, 100, 200),
            background_darker=_rgb(220, 220, 240),
            background_dark=_rgb(230, 230, 245),
            background_light=_rgb(245, 245, 255),
            background_lighter=_rgb(255, 255, 255),
        )


@dataclass(frozen=True)
class Theme:
    """A pair of palettes, one for dark mode and one for light mode."""

    dark: ThemeDetails | None = field(default_factory=ThemeDetails.tokyo_night_storm)
    light: ThemeDetails | None = field(default_factory=ThemeDetails.tokyo_night_light)

    @classmethod
    def tokyo(cls) -> Theme:
        return cls(
            dark=ThemeDetails.tokyo_night_storm(),
            light=ThemeDetails.tokyo_night_light(),
        )

    @classmethod
    def dracula(cls) -> Theme:
        return cls(dark=ThemeDetails.dracula(), light=ThemeDetails.dracula_light())

    def palette(self, dark_mode: bool) -> ThemeDetails:
        """Return the palette for the given mode; raise if the theme lacks it."""
        details = self.dark if dark_mode else self.light
        if details is None:
            mode = "dark" if dark_mode else "light"
            raise ValueError(f"Theme has no {mode} palette")
        return details


def _blend_channel(a: int, b: int, t: float) -> int:
    value = (1.0 - t) * a + t * b
    rounded = math.floor(value + 0.5) if value >= 0 else math.ceil(value - 0.5)
    return max(0, min(255, rounded))


def blend_colors(color_a: Color, color_b: Color, t: float) -> Color:
    """Linearly interpolate every channel from ``color_a`` (t=0) to ``color_b`` (t=1)."""
    return Color(
        _blend_channel(color_a.r, color_b.r, t),
        _blend_channel(color_a.g, color_b.g, t),
        _blend_channel(color_a.b, color_b.b, t),
        _blend_channel(color_a.a, color_b.a, t),
    )