from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

EXAMPLES_ROOT = Path("examples/cli-options")
BASE_SETTINGS = ["width", "160", "ratio", "1:1"]


@dataclass
class Expected:
    path: Path


@dataclass
class Example:
    name: str
    settings: list[str]
    expected: list[str]
    options: list[str] | None = None

    @property
    def out_dir(self) -> Path:
        return EXAMPLES_ROOT / self.name

    def full_args(self) -> list[str]:
        return ["python", "julia_anim.py", "--out-dir", str(self.out_dir), *(self.options or []), *self.settings]

    def expected_paths(self) -> list[Expected]:
        return [Expected(self.out_dir / name) for name in self.expected]


EXAMPLES: list[Example] = [
    Example(
        name="iter",
        settings=[*BASE_SETTINGS, "iter", "64", "title", "low-iterations"],
        expected=["low-iterations.png"],
    ),
    Example(
        name="ratio",
        settings=["width", "240", "ratio", "16:9", "title", "widescreen"],
        expected=["widescreen.png"],
    ),
    Example(
        name="dimensions",
        settings=["ratio", "200x120", "title", "explicit-size"],
        expected=["explicit-size.png"],
    ),
    Example(
        name="window",
        settings=[*BASE_SETTINGS, "window", "0.2", "title", "narrow-window"],
        expected=["narrow-window.png"],
    ),
    Example(
        name="center",
        settings=[*BASE_SETTINGS, "center", "[0.1-0.2i]", "window", "2.5", "title", "recentred"],
        expected=["recentred.png"],
    ),
    Example(
        name="palettes",
        settings=[*BASE_SETTINGS, "palette1", "crystal", "palette2", "crystal", "title", "crystal"],
        expected=["crystal.png"],
    ),
    Example(
        name="unknown-palette",
        settings=[*BASE_SETTINGS, "palette1", "nosuchpalette", "title", "grayscale"],
        expected=["grayscale.png"],
    ),
    Example(
        name="linear",
        settings=[
            *BASE_SETTINGS,
            "frames", "4",
            "cinit", "[-0.747+0.2i]",
            "cfinal", "[-0.747+0.3i]",
            "title", "linear",
        ],
        expected=[f"linear{i:04d}.png" for i in range(4)],
    ),
    Example(
        name="circular",
        settings=[
            *BASE_SETTINGS,
            "frames", "4",
            "mode", "circular",
            "cinit", "[-0.8+0.156i]",
            "cfinal", "[-0.7+0.27i]",
            "palette1", "firelotus",
            "palette2", "underwater",
            "title", "orbit",
        ],
        expected=[f"orbit{i:04d}.png" for i in range(4)],
    ),
    Example(
        name="gif",
        settings=[*BASE_SETTINGS, "frames", "6", "cfinal", "[-0.747+0.26i]", "title", "gif"],
        expected=[f"gif{i:04d}.png" for i in range(6)] + ["movie.gif"],
        options=["--gif", str(EXAMPLES_ROOT / "gif" / "movie.gif"), "--gif-frame-duration", "0.2"],
    ),
    Example(
        name="warnings",
        settings=[*BASE_SETTINGS, "CENTER", "abc", "cinit", "[1+2]", "colour", "red", "title", "defaults"],
        expected=["defaults.png"],
    ),
    Example(
        name="verbose",
        settings=[*BASE_SETTINGS, "title", "diagnostic"],
        expected=["diagnostic.png"],
        options=["--verbose"],
    ),
]


def _ensure_clean(paths: Iterable[Path]) -> None:
    for path in paths:
        if path.exists():
            if path.is_dir():
                shutil.rmtree(path)
            else:
                path.unlink()


def _verify(example: Example) -> None:
    for expected in example.expected_paths():
        if not expected.path.is_file():
            raise RuntimeError(f"Expected file {expected.path} was not created")


def main() -> None:
    EXAMPLES_ROOT.mkdir(parents=True, exist_ok=True)
    for example in EXAMPLES:
        print(f"\n[cli-example] {example.name}")
        _ensure_clean([example.out_dir])
        subprocess.run(example.full_args(), check=True)
        _verify(example)
    print("\nAll CLI examples generated successfully.")


if __name__ == "__main__":
    main()
