"""Render configuration and the keyword/value parser that builds it."""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterable

LINEAR = "linear"
CIRCULAR = "circular"
MODES = (LINEAR, CIRCULAR)

MAX_ITERATIONS_LIMIT = 255

_NUMBER = r"(?:\d+(?:\.\d*)?|\.\d+)"
_COMPLEX_RE = re.compile(rf"^\[([+-]?{_NUMBER})([+-]{_NUMBER})i\]$")
_RATIO_RE = re.compile(r"^(\d+):(\d+)$")
_DIMENSIONS_RE = re.compile(r"^(\d+)[xX](\d+)$")


class ConfigWarning(UserWarning):
    """A configuration value was ignored and its default kept."""


class ComplexParseError(ValueError):
    """Text is not a ``[a+bi]`` complex literal."""


@dataclass(frozen=True)
class RenderConfig:
    """Everything needed to render an animation. Never mutated once built."""

    max_iter: int = 255
    width: int = 1920
    height: int = 1080
    window_width: float = 0.64
    center: complex = complex(-0.385, 0.297)
    frames: int = 1
    mode: str = LINEAR
    c_init: complex = complex(-0.747, 0.2)
    c_final: complex = complex(-0.747, 0.2)
    title: str = "fractal"
    palette1: str = "cool"
    palette2: str = "plasma"

    @property
    def window_height(self) -> float:
        return self.window_width * self.height / self.width

    @property
    def scale(self) -> float:
        """Plane units per pixel."""
        return self.window_width / self.width

    @property
    def animated(self) -> bool:
        return self.frames > 1

    def frame_name(self, frame_index: int) -> str:
        if self.animated:
            return f"{self.title}{frame_index:04d}.png"
        return f"{self.title}.png"


def parse_complex(text: str) -> complex:
    """Parse a literal such as ``[-0.385+0.297i]``."""

    match = _COMPLEX_RE.match(text.strip())
    if match is None:
        raise ComplexParseError(f"expected a complex literal like [-0.747+0.2i], got {text!r}")
    return complex(float(match.group(1)), float(match.group(2)))


def parse_size(text: str, width: int) -> tuple[int, int]:
    """Resolve ``W:H`` (aspect ratio against ``width``) or ``WxH`` to ``(width, height)``."""

    text = text.strip()
    match = _DIMENSIONS_RE.match(text)
    if match is not None:
        new_width, new_height = int(match.group(1)), int(match.group(2))
    else:
        match = _RATIO_RE.match(text)
        if match is None:
            raise ValueError(f"expected W:H or WxH, got {text!r}")
        ratio_w, ratio_h = int(match.group(1)), int(match.group(2))
        if ratio_w == 0:
            raise ValueError(f"aspect ratio {text!r} has a zero width")
        new_width, new_height = width, width * ratio_h // ratio_w
    if new_width <= 0 or new_height <= 0:
        raise ValueError(f"{text!r} gives an empty image")
    return new_width, new_height


def _positive(convert: Callable[[str], Any]) -> Callable[[str], Any]:
    def parse(text: str) -> Any:
        value = convert(text)
        if not value > 0:
            raise ValueError(f"{text!r} must be positive")
        return value
    return parse


def _iterations(text: str) -> int:
    value = int(text)
    if not 0 <= value <= MAX_ITERATIONS_LIMIT:
        raise ValueError(f"{text!r} is outside 0-{MAX_ITERATIONS_LIMIT}")
    return value


def _mode(text: str) -> str:
    mode = text.strip().lower()
    if mode not in MODES:
        raise ValueError(f"{text!r} is not one of {', '.join(MODES)}")
    return mode


def _title(text: str) -> str:
    if not text:
        raise ValueError("title is empty")
    return text


_FIELDS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "iter": ("max_iter", _iterations),
    "width": ("width", _positive(int)),
    "window": ("window_width", _positive(float)),
    "center": ("center", parse_complex),
    "frames": ("frames", _positive(int)),
    "mode": ("mode", _mode),
    "cinit": ("c_init", parse_complex),
    "cfinal": ("c_final", parse_complex),
    "title": ("title", _title),
    "palette1": ("palette1", str),
    "palette2": ("palette2", str),
}

KEYWORDS = tuple(sorted([*_FIELDS, "ratio"]))


def _warn(message: str) -> None:
    warnings.warn(message, ConfigWarning, stacklevel=3)


def build_config(tokens: Iterable[str], base: RenderConfig | None = None) -> RenderConfig:
    """Build a :class:`RenderConfig` from ``keyword value`` pairs.

    Problems never abort: they are reported as :class:`ConfigWarning` and the
    affected field keeps its default.
    """

    config = base if base is not None else RenderConfig()
    tokens = list(tokens)
    values: dict[str, Any] = {}
    size_text: str | None = None

    for index in range(0, len(tokens), 2):
        keyword = tokens[index].lower()
        if index + 1 >= len(tokens):
            _warn(f"keyword {tokens[index]!r} has no value")
            break
        text = tokens[index + 1]

        if keyword == "ratio":
            size_text = text
            continue
        if keyword not in _FIELDS:
            _warn(f"unrecognized keyword {tokens[index]!r} ignored")
            continue

        field, convert = _FIELDS[keyword]
        try:
            values[field] = convert(text)
        except ValueError as exc:
            _warn(f"bad value for {keyword}: {exc}; keeping {getattr(config, field)!r}")

    before = config
    config = replace(config, **values)

    size = None
    if size_text is not None:
        try:
            size = parse_size(size_text, config.width)
        except ValueError as exc:
            _warn(f"bad value for ratio: {exc}; keeping the current aspect ratio")

    if size is not None:
        config = replace(config, width=size[0], height=size[1])
    elif "width" in values:
        # keep the aspect ratio when only the width changes
        config = replace(config, height=max(1, config.width * before.height // before.width))

    return config
