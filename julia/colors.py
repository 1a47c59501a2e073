"""Map escape strengths onto a blend of two gradient palettes."""

from __future__ import annotations

from bisect import bisect_right

import numpy as np

from .palettes import RGB, STOPS, GradientPalette

_LAST_SEGMENT = len(STOPS) - 2
_STOPS_ARRAY = np.asarray(STOPS, dtype=np.float64)


class GradientRangeError(RuntimeError):
    """Raised when a strength falls outside every gradient segment."""


def lerp(start, end, t):
    """Step ``t`` of the way from ``start`` to ``end``; exactly ``start`` when the two are equal."""

    return start + t * (end - start)


def find_segment(strength: float) -> int:
    """Index ``i`` of the segment ``STOPS[i] <= strength <= STOPS[i + 1]``.

    A strength sitting exactly on an interior stop belongs to the later of
    the two segments sharing it.
    """

    if not STOPS[0] <= strength <= STOPS[-1]:
        raise GradientRangeError(f"strength {strength!r} is outside [{STOPS[0]}, {STOPS[-1]}]")
    return min(bisect_right(STOPS, strength) - 1, _LAST_SEGMENT)


def _segment_fraction(strength, segment):
    return (strength - STOPS[segment]) / (STOPS[segment + 1] - STOPS[segment])


def color_at(strength: float, blend: float, palette_a: GradientPalette, palette_b: GradientPalette) -> RGB:
    """Colour for ``strength``, cross-faded from ``palette_a`` (blend 0) to ``palette_b`` (blend 1)."""

    i = find_segment(strength)
    amt = _segment_fraction(strength, i)
    rgb = []
    for channel in range(3):
        p1 = lerp(float(palette_a.colors[i][channel]), float(palette_a.colors[i + 1][channel]), amt)
        p2 = lerp(float(palette_b.colors[i][channel]), float(palette_b.colors[i + 1][channel]), amt)
        rgb.append(int(lerp(p1, p2, blend)))
    return rgb[0], rgb[1], rgb[2]


def interpolate(palette: GradientPalette, strength: float) -> RGB:
    """Colour for ``strength`` within a single palette."""

    return color_at(strength, 0.0, palette, palette)


def colorize(strengths: np.ndarray, blend: float, palette_a: GradientPalette, palette_b: GradientPalette) -> np.ndarray:
    """Vectorised :func:`color_at` over a grid of strengths.

    Returns a ``uint8`` array with a trailing RGB axis.
    """

    s = np.asarray(strengths, dtype=np.float64)
    outside = ~((s >= STOPS[0]) & (s <= STOPS[-1]))
    if np.any(outside):
        bad = s[outside].flat[0]
        raise GradientRangeError(f"strength {bad!r} is outside [{STOPS[0]}, {STOPS[-1]}]")

    segments = np.minimum(np.searchsorted(_STOPS_ARRAY, s, side="right") - 1, _LAST_SEGMENT)
    lower = _STOPS_ARRAY[segments]
    upper = _STOPS_ARRAY[segments + 1]
    amt = ((s - lower) / (upper - lower))[..., np.newaxis]

    colors_a = np.asarray(palette_a.colors, dtype=np.float64)
    colors_b = np.asarray(palette_b.colors, dtype=np.float64)
    p1 = lerp(colors_a[segments], colors_a[segments + 1], amt)
    p2 = lerp(colors_b[segments], colors_b[segments + 1], amt)
    # astype truncates toward zero, same as int()
    return lerp(p1, p2, blend).astype(np.uint8)
