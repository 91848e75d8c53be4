import math
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from frostglass_renderer.gradient_cache import GradientCache
from frostglass_renderer.models import RenderParams
from frostglass_renderer.strips import STOP_OFFSETS, build_strip, build_strips, strip_position, wave_offset_at


def _cache(params):
    cache = GradientCache()
    cache.sync(params)
    return cache


class StripGeometryTests(unittest.TestCase):
    def test_single_strip_position_is_zero(self):
        self.assertEqual(strip_position(0, 1), 0.0)
        self.assertFalse(math.isnan(strip_position(0, 1)))

    def test_positions_span_zero_to_one(self):
        self.assertEqual([strip_position(i, 5) for i in range(5)], [0.0, 0.25, 0.5, 0.75, 1.0])

    def test_flat_strip_edges(self):
        params = RenderParams(strip_count=1, wave_amplitude=0.0)
        strip = build_strip(0, params, width=10, height=20, cache=_cache(params))

        self.assertEqual(strip.points[0], (0.0, 0.0))
        top = strip.points[1:12]
        bottom = strip.points[13:]
        self.assertEqual(len(strip.points), 1 + 11 + 1 + 11)
        self.assertEqual([x for x, _ in top], [float(x) for x in range(11)])
        self.assertEqual([x for x, _ in bottom], [float(x) for x in range(10, -1, -1)])
        self.assertTrue(all(y == 0.0 for _, y in top))
        self.assertTrue(all(y == 20.0 for _, y in bottom))
        self.assertEqual(strip.gradient_axis, (0.0, 20.0))

    def test_wave_phase_per_strip(self):
        params = RenderParams(strip_count=4, wave_amplitude=10.0, wave_frequency=2.0, wave_offset=0.5)
        strips = build_strips(params, width=100, height=400, cache=_cache(params))

        self.assertEqual(len(strips), 4)
        self.assertEqual([s.index for s in strips], [0, 1, 2, 3])
        second = strips[1]
        self.assertEqual(second.y_offset, 100.0)
        _, y = second.points[1]
        # x=0 on strip 1: sin(0.5 * pi) * 10
        self.assertAlmostEqual(y, 100.0 + 10.0)
        self.assertAlmostEqual(wave_offset_at(50, 0.0, 2.0, 10.0), math.sin(1.0) * 10.0)

    def test_bottom_edge_follows_same_wave(self):
        params = RenderParams(strip_count=2, wave_amplitude=5.0)
        strip = build_strip(0, params, width=20, height=100, cache=_cache(params))
        top = dict(strip.points[1:22])
        bottom = dict(strip.points[23:])
        for x in range(21):
            self.assertAlmostEqual(bottom[float(x)] - top[float(x)], 50.0)

    def test_gradient_stops(self):
        params = RenderParams(strip_count=3, start_color="#000000", mid_color="#000000", end_color="#000000")
        strip = build_strip(2, params, width=4, height=30, cache=_cache(params))
        self.assertEqual(tuple(s.offset for s in strip.stops), STOP_OFFSETS)
        self.assertEqual(len(strip.stops), 6)
        self.assertTrue(all(s.color == "rgba(0,0,0,0.5)" for s in strip.stops))
        self.assertEqual(strip.position, 1.0)


if __name__ == "__main__":
    unittest.main()
