"""Per-frame animation of the Julia parameter and the palette blend."""

from __future__ import annotations

import cmath
import math
from dataclasses import dataclass

from .config import CIRCULAR, RenderConfig


def _mix(start: float, end: float, t: float) -> float:
    """Linear interpolation that lands exactly on ``start`` and ``end`` at t = 0 and 1."""

    return (1.0 - t) * start + t * end


@dataclass(frozen=True)
class FrameParameters:
    """Map parameter and palette blend used for one frame."""

    c: complex
    blend: float


def orbit_center_radius(c_init: complex, c_final: complex) -> tuple[complex, float]:
    """Circle through which ``c`` travels in circular mode."""

    center = (c_init + c_final) / 2.0
    radius = abs(c_final - c_init) / 2.0
    return center, radius


def parameter_for(frame_index: int, config: RenderConfig) -> FrameParameters:
    """Compute ``c`` and the palette blend for ``frame_index``."""

    frames = config.frames
    if not 0 <= frame_index < frames:
        raise IndexError(f"frame {frame_index} out of range for {frames} frames")

    # The blend never reaches 1.0, while the transition below does.
    blend = frame_index / frames

    if frames == 1:
        return FrameParameters(c=config.c_init, blend=blend)

    transition = frame_index / (frames - 1)
    if config.mode == CIRCULAR:
        center, radius = orbit_center_radius(config.c_init, config.c_final)
        c = center + cmath.rect(radius, transition * 2.0 * math.pi)
    else:
        c = complex(
            _mix(config.c_init.real, config.c_final.real, transition),
            _mix(config.c_init.imag, config.c_final.imag, transition),
        )
    return FrameParameters(c=c, blend=blend)
