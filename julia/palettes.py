"""Named five-stop gradient palettes."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType

RGB = tuple[int, int, int]

# Gradient positions shared by every palette.
STOPS: tuple[float, ...] = (0.0, 0.32, 0.44, 0.8, 1.0)


@dataclass(frozen=True)
class GradientPalette:
    """Five RGB colours pinned to ``STOPS``."""

    name: str
    colors: tuple[RGB, RGB, RGB, RGB, RGB]

    def __post_init__(self) -> None:
        if len(self.colors) != len(STOPS):
            raise ValueError(f"palette {self.name!r} needs {len(STOPS)} colours, got {len(self.colors)}")
        for color in self.colors:
            if len(color) != 3 or any(not 0 <= channel <= 255 for channel in color):
                raise ValueError(f"palette {self.name!r} has an invalid colour {color!r}")


DEFAULT_PALETTE = GradientPalette(
    "grayscale",
    ((0, 0, 0), (100, 100, 100), (150, 150, 150), (200, 200, 200), (255, 255, 255)),
)

PALETTES = MappingProxyType({
    palette.name: palette
    for palette in (
        # cool and plasma are the two gradients of the first animation renderer
        GradientPalette("cool", ((0, 0, 0), (60, 0, 90), (128, 238, 255), (0, 100, 200), (0, 0, 0))),
        GradientPalette("plasma", ((0, 0, 0), (0, 60, 150), (240, 255, 128), (200, 0, 128), (0, 0, 0))),
        # the rest were designed for this package on the same stops
        GradientPalette("crystal", ((0, 0, 0), (20, 40, 110), (190, 235, 255), (90, 150, 220), (255, 255, 255))),
        GradientPalette("sapling", ((0, 0, 0), (30, 70, 20), (170, 220, 90), (60, 140, 50), (250, 250, 210))),
        GradientPalette("firelotus", ((0, 0, 0), (120, 0, 40), (255, 200, 80), (230, 70, 20), (0, 0, 0))),
        GradientPalette("underwater", ((0, 10, 30), (0, 60, 90), (60, 200, 190), (0, 90, 140), (0, 10, 30))),
        DEFAULT_PALETTE,
    )
})


def get_palette(name: str) -> GradientPalette:
    """Return the palette called ``name``, or the grayscale ramp when unknown."""

    return PALETTES.get(name.strip().lower(), DEFAULT_PALETTE)


def list_palette_names() -> list[str]:
    return sorted(PALETTES)
