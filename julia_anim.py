import os
import sys
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf
import numpy as np

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")

import PIL.Image
import imageio

from julia import (
    PALETTES,
    ConfigWarning,
    RenderConfig,
    RenderResult,
    build_config,
    render_frame,
)
from julia.config import KEYWORDS

log("TensorFlow version: %s" % tf.__version__)

# Rendering always stays on the CPU so results match the scalar evaluator.
DEVICE = '/CPU:0'

from argparse import ArgumentParser, RawDescriptionHelpFormatter


def build_parser():
    parser = ArgumentParser(
        formatter_class=RawDescriptionHelpFormatter,
        epilog="settings are KEYWORD VALUE pairs, keywords: " + ", ".join(KEYWORDS)
        + "\nexample: iter 255 width 960 ratio 16:9 frames 48 mode circular"
        + " cinit [-0.747+0.2i] cfinal [-0.747+0.3i] palette1 crystal palette2 firelotus",
    )

    parser.add_argument('settings', nargs='*', metavar='KEYWORD VALUE',
                        help='render settings as keyword/value pairs (keywords are case-insensitive)')

    parser.add_argument('--out-dir', type=str,
                        dest='out_dir', help='directory in which PNG frames are written',
                        metavar='OUT_DIR', default='.')

    parser.add_argument('--gif', type=str, dest='gif', default=None, metavar='GIF_PATH',
                        help='also assemble every frame into an animated GIF at this path')

    parser.add_argument('--gif-frame-duration', type=float, dest='gif_frame_duration', default=0.1,
                        help='seconds each frame is shown in the GIF')

    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def frame_path(out_dir: Path, config: RenderConfig, index: int) -> Path:
    return out_dir / config.frame_name(index)


def write_frame(pixels: np.ndarray, path: Path) -> Path:
    """Encode ``pixels`` as an 8-bit RGB PNG at ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    PIL.Image.fromarray(pixels).save(str(path), format="PNG")
    return path


@dataclass
class OutputWriters:
    out_dir: Path
    config: RenderConfig
    gif_path: Path | None = None
    gif_frame_duration: float = 0.1

    def __post_init__(self) -> None:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        self._gif_writer: Any = None
        if self.gif_path is not None:
            self.gif_path.parent.mkdir(parents=True, exist_ok=True)
            self._gif_writer = imageio.get_writer(
                str(self.gif_path), mode='I', duration=self.gif_frame_duration, loop=0
            )

    def write(self, index: int, result: RenderResult) -> Path:
        path = write_frame(result.pixels, frame_path(self.out_dir, self.config, index))
        if self._gif_writer is not None:
            self._gif_writer.append_data(result.pixels)
        return path

    def close(self) -> None:
        if self._gif_writer is not None:
            self._gif_writer.close()
            self._gif_writer = None


def render_animation(config: RenderConfig, writers: OutputWriters, *, device: str = DEVICE) -> list[Path]:
    """Render every frame in order, writing each before starting the next."""

    written = []
    for i in range(config.frames):
        print("frame {0} out of {1}".format(i, config.frames), end='\r')
        result = render_frame(i, config, device=device)
        log("frame {0}: c={1.real:+.6f}{1.imag:+.6f}i blend={2:.4f}".format(
            i, result.parameters.c, result.parameters.blend))
        written.append(writers.write(i, result))
    print()
    return written


def main(argv: Sequence[str] | None = None):
    parser = build_parser()
    opt = parser.parse_intermixed_args(argv)

    global VERBOSE
    VERBOSE = bool(opt.verbose)

    warnings.simplefilter("always", ConfigWarning)
    config = build_config(opt.settings)
    log(config)

    for name in (config.palette1, config.palette2):
        if name.strip().lower() not in PALETTES:
            log("unknown palette %r, using grayscale" % name)

    writers = OutputWriters(
        Path(opt.out_dir).expanduser().resolve(),
        config,
        gif_path=Path(opt.gif).expanduser().resolve() if opt.gif else None,
        gif_frame_duration=opt.gif_frame_duration,
    )
    try:
        written = render_animation(config, writers)
    finally:
        writers.close()

    log("wrote %d frame(s) to %s" % (len(written), writers.out_dir))
    return written


if __name__ == '__main__':
    main()
