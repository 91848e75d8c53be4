import random
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "core"))

from frostglass_core.config import RenderDefaultsConfig
from frostglass_core.params import (
    CONTROLS,
    ParamError,
    apply_change,
    control_for,
    default_params,
    params_from_config,
    params_to_controls,
)
from frostglass_renderer.colors import hex_to_rgb
from frostglass_renderer.models import RenderParams


class ReducerTests(unittest.TestCase):
    def setUp(self):
        self.params = RenderParams()

    def test_returns_new_snapshot_and_keeps_other_fields(self):
        updated = apply_change(self.params, "strips", 5)
        self.assertEqual(updated.strip_count, 5)
        self.assertEqual(self.params.strip_count, 10)
        self.assertEqual(updated.start_color, self.params.start_color)
        self.assertEqual(updated.wave_amplitude, self.params.wave_amplitude)

    def test_field_names_are_accepted(self):
        self.assertEqual(apply_change(self.params, "noise_scale", 3).noise_scale, 3.0)

    def test_string_values_are_coerced(self):
        updated = apply_change(self.params, "strips", "12")
        self.assertEqual(updated.strip_count, 12)
        self.assertIsInstance(updated.strip_count, int)
        self.assertEqual(apply_change(self.params, "verticalBias", "0.3").vertical_bias, 0.3)

    def test_values_are_clamped(self):
        self.assertEqual(apply_change(self.params, "strips", 99).strip_count, 50)
        self.assertEqual(apply_change(self.params, "strips", 0).strip_count, 1)
        self.assertEqual(apply_change(self.params, "noiseScale", 50).noise_scale, 20.0)
        self.assertEqual(apply_change(self.params, "waveFrequency", 0).wave_frequency, 0.1)

    def test_colors_are_normalized(self):
        self.assertEqual(apply_change(self.params, "startColor", "ABCDEF").start_color, "#abcdef")

    def test_malformed_color_keeps_snapshot(self):
        with self.assertLogs("frostglass.core", level="WARNING"):
            updated = apply_change(self.params, "midColor", "#12")
        self.assertIs(updated, self.params)

    def test_unchanged_value_returns_same_object(self):
        self.assertIs(apply_change(self.params, "strips", 10), self.params)

    def test_unknown_name_raises(self):
        with self.assertRaises(ParamError):
            apply_change(self.params, "blur", 1)
        with self.assertRaises(ValueError):
            control_for("nope")

    def test_non_numeric_range_raises(self):
        with self.assertRaises(ParamError):
            apply_change(self.params, "waveOffset", "wide")

    def test_text_field(self):
        self.assertEqual(apply_change(self.params, "text", "frost").text, "frost")
        self.assertEqual(apply_change(self.params, "text", None).text, "")


class DefaultsTests(unittest.TestCase):
    def test_controls_cover_every_field(self):
        fields = {spec.field for spec in CONTROLS}
        self.assertEqual(fields, set(RenderParams.__dataclass_fields__))
        self.assertEqual(set(params_to_controls(RenderParams())), {spec.name for spec in CONTROLS})

    def test_pastel_defaults_are_seedable(self):
        a = default_params(random.Random(3))
        b = default_params(random.Random(3))
        self.assertEqual(a, b)
        for color in (a.start_color, a.mid_color, a.end_color):
            self.assertTrue(all(128 <= c <= 229 for c in hex_to_rgb(color)))
        self.assertEqual(a.strip_count, 10)
        self.assertEqual(a.noise_scale, 0.02)
        self.assertEqual(a.vertical_bias, 0.7)
        self.assertEqual(a.text_color, "#ffffff")

    def test_overrides_go_through_reducer(self):
        params = default_params(random.Random(1), strips=200, text="hi")
        self.assertEqual(params.strip_count, 50)
        self.assertEqual(params.text, "hi")

    def test_params_from_config(self):
        params = params_from_config(RenderDefaultsConfig(strip_count=4, wave_amplitude=12.0, seed=9))
        self.assertEqual(params.strip_count, 4)
        self.assertEqual(params.wave_amplitude, 12.0)
        self.assertEqual(params, params_from_config(RenderDefaultsConfig(strip_count=4, wave_amplitude=12.0, seed=9)))


if __name__ == "__main__":
    unittest.main()
