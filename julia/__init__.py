"""Public API for Julia set animation rendering."""

from .colors import GradientRangeError, color_at, colorize, find_segment, interpolate
from .config import (
    CIRCULAR,
    LINEAR,
    ComplexParseError,
    ConfigWarning,
    RenderConfig,
    build_config,
    parse_complex,
    parse_size,
)
from .palettes import DEFAULT_PALETTE, PALETTES, STOPS, GradientPalette, get_palette, list_palette_names
from .renderer import (
    RenderResult,
    SamplingMetadata,
    compute_metadata,
    escape_strengths,
    evaluate,
    pixel_to_complex,
    render_frame,
)
from .scheduler import FrameParameters, orbit_center_radius, parameter_for

__all__ = [
    "CIRCULAR",
    "DEFAULT_PALETTE",
    "LINEAR",
    "PALETTES",
    "STOPS",
    "ComplexParseError",
    "ConfigWarning",
    "FrameParameters",
    "GradientPalette",
    "GradientRangeError",
    "RenderConfig",
    "RenderResult",
    "SamplingMetadata",
    "build_config",
    "color_at",
    "colorize",
    "compute_metadata",
    "escape_strengths",
    "evaluate",
    "find_segment",
    "get_palette",
    "interpolate",
    "list_palette_names",
    "orbit_center_radius",
    "parameter_for",
    "parse_complex",
    "parse_size",
    "pixel_to_complex",
    "render_frame",
]
