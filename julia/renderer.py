"""Rendering primitives for Julia set frames."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np
import tensorflow as tf

from .colors import colorize
from .config import RenderConfig
from .palettes import get_palette
from .scheduler import FrameParameters, parameter_for

HORIZON = 2.0
# Iteration counts are always normalised against 255, whatever max_iter is.
NORMALIZATION = 255


@dataclass(frozen=True)
class SamplingMetadata:
    """Mapping from pixel indices to points of the complex plane."""

    width: int
    height: int
    scale: float
    half_width: float
    half_height: float
    center: complex


@dataclass(frozen=True)
class RenderResult:
    """A finished frame together with the numbers that produced it."""

    pixels: np.ndarray
    strengths: np.ndarray
    parameters: FrameParameters
    metadata: SamplingMetadata


def evaluate(z0: complex, c: complex, max_iter: int) -> float:
    """Escape strength of ``z0`` under ``z <- z**2 + c``, in ``[0, max_iter / 255]``.

    The count is the index of the last iteration that did not escape, so a
    point outside the horizon from the start scores 0 and a point that never
    escapes scores ``max_iter - 1``.
    """

    x, y = z0.real, z0.imag
    horizon_sq = HORIZON * HORIZON
    count = 0
    for i in range(max_iter):
        if x * x + y * y > horizon_sq:
            break
        x, y = x * x - y * y + c.real, 2.0 * x * y + c.imag
        count = i
    return count / NORMALIZATION


@tf.function
def _julia_step(xs: tf.Tensor, ys: tf.Tensor, ns: tf.Tensor, active: tf.Tensor, c_re: tf.Tensor, c_im: tf.Tensor) -> tuple[tf.Tensor, tf.Tensor, tf.Tensor, tf.Tensor]:
    """Retire escaped points, then advance the rest by one iteration."""

    horizon_sq = tf.constant(HORIZON * HORIZON, dtype=xs.dtype)
    active = tf.logical_and(active, xs * xs + ys * ys <= horizon_sq)
    xs_new = xs * xs - ys * ys + c_re
    ys_new = tf.constant(2.0, dtype=xs.dtype) * xs * ys + c_im
    xs = tf.where(active, xs_new, xs)
    ys = tf.where(active, ys_new, ys)
    ns = ns + tf.cast(active, tf.int32)
    return xs, ys, ns, active


@tf.function
def _julia_run(xs: tf.Tensor, ys: tf.Tensor, c_re: tf.Tensor, c_im: tf.Tensor, max_iterations: tf.Tensor) -> tf.Tensor:
    """Iterate every sample and return how many updates each one received."""

    max_iterations = tf.cast(max_iterations, tf.int32)
    i = tf.constant(0, dtype=tf.int32)
    ns = tf.zeros_like(xs, dtype=tf.int32)
    active = tf.ones_like(ns, tf.bool)

    def cond(i, xs, ys, ns, active):
        return tf.logical_and(tf.less(i, max_iterations), tf.reduce_any(active))

    def body(i, xs, ys, ns, active):
        xs, ys, ns, active = _julia_step(xs, ys, ns, active, c_re, c_im)
        return i + 1, xs, ys, ns, active

    _, _, _, ns, _ = tf.while_loop(cond, body, (i, xs, ys, ns, active))
    return ns


def compute_metadata(config: RenderConfig) -> SamplingMetadata:
    return SamplingMetadata(
        width=config.width,
        height=config.height,
        scale=config.scale,
        half_width=config.window_width / 2.0,
        half_height=config.window_height / 2.0,
        center=config.center,
    )


def pixel_to_complex(metadata: SamplingMetadata, row: int, col: int) -> complex:
    """Plane point sampled by pixel ``(col, row)``; row 0 is the top of the window."""

    real = col * metadata.scale - metadata.half_width + metadata.center.real
    imag = (metadata.height - row) * metadata.scale - metadata.half_height + metadata.center.imag
    return complex(real, imag)


def sample_grid(metadata: SamplingMetadata) -> tuple[np.ndarray, np.ndarray]:
    """Real and imaginary parts of every sample, each shaped ``(height, width)``."""

    cols = np.arange(metadata.width, dtype=np.float64)
    rows = np.arange(metadata.height, dtype=np.float64)
    real = cols * metadata.scale - metadata.half_width + metadata.center.real
    imag = (metadata.height - rows) * metadata.scale - metadata.half_height + metadata.center.imag
    return np.meshgrid(real, imag)


def escape_strengths(metadata: SamplingMetadata, c: complex, max_iter: int, *, device: Optional[str] = None) -> np.ndarray:
    """:func:`evaluate` for every sample of the frame at once."""

    real, imag = sample_grid(metadata)
    with tf.device(device if device is not None else "/CPU:0"):
        xs = tf.convert_to_tensor(real, dtype=tf.float64)
        ys = tf.convert_to_tensor(imag, dtype=tf.float64)
        c_re = tf.constant(c.real, dtype=tf.float64)
        c_im = tf.constant(c.imag, dtype=tf.float64)
        ns = _julia_run(xs, ys, c_re, c_im, tf.constant(max_iter, dtype=tf.int32))

    counts = np.maximum(ns.numpy() - 1, 0)
    return counts.astype(np.float64) / NORMALIZATION


def render_frame(frame_index: int, config: RenderConfig, *, device: Optional[str] = None) -> RenderResult:
    """Render frame ``frame_index`` of the animation described by ``config``."""

    metadata = compute_metadata(config)
    parameters = parameter_for(frame_index, config)
    strengths = escape_strengths(metadata, parameters.c, config.max_iter, device=device)
    pixels = colorize(
        strengths,
        parameters.blend,
        get_palette(config.palette1),
        get_palette(config.palette2),
    )
    return RenderResult(pixels=pixels, strengths=strengths, parameters=parameters, metadata=metadata)
