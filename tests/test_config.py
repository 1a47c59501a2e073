import dataclasses
import sys
import unittest
import warnings
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from julia.config import (
    CIRCULAR,
    LINEAR,
    ComplexParseError,
    ConfigWarning,
    RenderConfig,
    build_config,
    parse_complex,
    parse_size,
)


class ParseComplexTests(unittest.TestCase):
    def test_valid_literals(self):
        self.assertEqual(parse_complex("[-0.385+0.297i]"), complex(-0.385, 0.297))
        self.assertEqual(parse_complex("[1-2i]"), complex(1, -2))
        self.assertEqual(parse_complex("[+.5-0.25i]"), complex(0.5, -0.25))
        self.assertEqual(parse_complex(" [0.0+0.0i] "), 0j)

    def test_malformed_literals(self):
        for text in ("abc", "[1+2]", "-0.3+0.2i", "[1+2i", "[1 + 2i]", "[+2i]", "[1.2.3+1i]"):
            with self.assertRaises(ComplexParseError, msg=text):
                parse_complex(text)

    def test_parse_error_is_value_error(self):
        self.assertTrue(issubclass(ComplexParseError, ValueError))


class ParseSizeTests(unittest.TestCase):
    def test_aspect_ratio(self):
        self.assertEqual(parse_size("16:9", 1920), (1920, 1080))
        self.assertEqual(parse_size("1:1", 4), (4, 4))

    def test_explicit_dimensions(self):
        self.assertEqual(parse_size("640x480", 1920), (640, 480))
        self.assertEqual(parse_size("64X48", 1), (64, 48))

    def test_bad_sizes(self):
        for text in ("16/9", "0:1", "0x10", "4:0", "wide"):
            with self.assertRaises(ValueError, msg=text):
                parse_size(text, 100)


class RenderConfigTests(unittest.TestCase):
    def test_defaults(self):
        config = RenderConfig()
        self.assertEqual(config.max_iter, 255)
        self.assertEqual((config.width, config.height), (1920, 1080))
        self.assertEqual(config.frames, 1)
        self.assertEqual(config.mode, LINEAR)
        self.assertAlmostEqual(config.window_height, 0.36)

    def test_frozen(self):
        with self.assertRaises(dataclasses.FrozenInstanceError):
            RenderConfig().frames = 3

    def test_frame_names(self):
        self.assertEqual(RenderConfig(title="julia").frame_name(0), "julia.png")
        animated = RenderConfig(title="julia", frames=12)
        self.assertEqual(animated.frame_name(3), "julia0003.png")
        self.assertEqual(animated.frame_name(11), "julia0011.png")


class BuildConfigTests(unittest.TestCase):
    def test_empty_gives_defaults(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConfigWarning)
            self.assertEqual(build_config([]), RenderConfig())

    def test_full_scenario(self):
        tokens = [
            "ITER", "255", "Width", "4", "ratio", "1:1", "window", "0.64",
            "center", "[-0.385+0.297i]", "frames", "1", "mode", "Circular",
            "cinit", "[-0.747+0.2i]", "cfinal", "[-0.747+0.2i]",
            "title", "scenario", "palette1", "crystal", "palette2", "crystal",
        ]
        with warnings.catch_warnings():
            warnings.simplefilter("error", ConfigWarning)
            config = build_config(tokens)
        self.assertEqual(config.max_iter, 255)
        self.assertEqual((config.width, config.height), (4, 4))
        self.assertEqual(config.window_width, 0.64)
        self.assertEqual(config.center, complex(-0.385, 0.297))
        self.assertEqual(config.mode, CIRCULAR)
        self.assertEqual(config.c_init, complex(-0.747, 0.2))
        self.assertEqual(config.title, "scenario")
        self.assertEqual((config.palette1, config.palette2), ("crystal", "crystal"))

    def test_ratio_applies_to_width_given_later(self):
        config = build_config(["ratio", "4:3", "width", "800"])
        self.assertEqual((config.width, config.height), (800, 600))

    def test_width_alone_keeps_aspect(self):
        config = build_config(["width", "960"])
        self.assertEqual((config.width, config.height), (960, 540))

    def test_malformed_complex_keeps_default(self):
        for text in ("abc", "[1+2]"):
            with self.assertWarns(ConfigWarning):
                config = build_config(["center", text, "cinit", text])
            self.assertEqual(config.center, RenderConfig().center)
            self.assertEqual(config.c_init, RenderConfig().c_init)

    def test_unrecognized_keyword_is_skipped(self):
        with self.assertWarns(ConfigWarning) as caught:
            config = build_config(["colour", "red", "iter", "100"])
        self.assertIn("colour", str(caught.warning))
        self.assertEqual(config.max_iter, 100)

    def test_keyword_without_value(self):
        with self.assertWarns(ConfigWarning):
            config = build_config(["frames", "10", "iter"])
        self.assertEqual(config.frames, 10)
        self.assertEqual(config.max_iter, 255)

    def test_out_of_range_values(self):
        bad = [
            ["iter", "300"], ["iter", "-1"], ["width", "0"], ["frames", "0"],
            ["window", "-1.0"], ["mode", "spiral"], ["ratio", "16/9"], ["iter", "many"],
        ]
        for tokens in bad:
            with self.assertWarns(ConfigWarning, msg=tokens):
                config = build_config(tokens)
            self.assertEqual(config, RenderConfig(), tokens)

    def test_base_config_is_not_mutated(self):
        base = RenderConfig(title="base")
        config = build_config(["frames", "5"], base)
        self.assertEqual(base.frames, 1)
        self.assertEqual(config.frames, 5)
        self.assertEqual(config.title, "base")


if __name__ == "__main__":
    unittest.main()
