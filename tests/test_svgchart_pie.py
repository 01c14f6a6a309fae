from __future__ import annotations

import importlib.util
import math
import re
import unittest

from svgchart import PieChartOptions, Series
from svgchart.color import Gradient, RGBColor
from svgchart.errors import InvalidConfigurationError
from svgchart.pie import PieSegment, SegmentSize, build_pie_segments, layout_pie

_ARC_PATH = re.compile(r"^M0 0 (\S+) (\S+) A100 100 0 ([01]) 1 (\S+) (\S+)Z$")
_HAS_PANDAS = importlib.util.find_spec("pandas") is not None


class PieSegmentTests(unittest.TestCase):
    def test_half_segment_rotates_from_vector(self) -> None:
        segment = PieSegment(from_point=(99.0, 0.0), to_point=(-99.0, 0.0), value=1.0)
        self.assertIs(segment.angle(), SegmentSize.HALF)
        self.assertEqual(segment.large_arc_flag, 0)
        self.assertEqual(segment.arc_path(), "M0 0 99 0 A100 100 0 0 1 -99 0Z")
        self.assertEqual(segment.label_anchor(), (0.0, -1.0))

    def test_small_segment_points_at_midpoint(self) -> None:
        segment = PieSegment(from_point=(99.0, 0.0), to_point=(0.0, 99.0), value=1.0)
        self.assertIs(segment.angle(), SegmentSize.LESS_THAN_HALF)
        ax, ay = segment.label_anchor()
        self.assertAlmostEqual(ax, math.sqrt(0.5), places=12)
        self.assertAlmostEqual(ay, math.sqrt(0.5), places=12)

    def test_large_segment_flips_midpoint(self) -> None:
        segment = PieSegment(from_point=(0.0, 99.0), to_point=(99.0, 0.0), value=3.0)
        self.assertIs(segment.angle(), SegmentSize.MORE_THAN_HALF)
        self.assertEqual(segment.large_arc_flag, 1)
        self.assertEqual(segment.arc_path(), "M0 0 0 99 A100 100 0 1 1 99 0Z")
        ax, ay = segment.label_anchor()
        self.assertAlmostEqual(ax, -math.sqrt(0.5), places=12)
        self.assertAlmostEqual(ay, -math.sqrt(0.5), places=12)


class BuildPieSegmentsTests(unittest.TestCase):
    def test_segments_cover_every_non_zero_value(self) -> None:
        values = [2.0, 3.0, 1.5, 7.0, 1.0, 2.5, 9.9]
        segments = build_pie_segments(values)
        self.assertEqual(len(segments), len(values))
        self.assertAlmostEqual(math.fsum(s.value for s in segments), math.fsum(values), places=12)
        self.assertEqual([s.value for s in segments], sorted(values))
        self.assertEqual(segments[0].source_index, 4)
        self.assertEqual(segments[-1].source_index, 6)
        for segment in segments:
            match = _ARC_PATH.match(segment.arc_path())
            self.assertIsNotNone(match, segment.arc_path())
            assert match is not None
            # Every wedge here is below half of the total (9.9 / 26.9).
            self.assertEqual(match.group(3), "0")
        self.assertTrue(segments[0].arc_path().startswith("M0 0 99 0 A100 100 0 0 1 "))

    def test_segments_are_chained_around_the_circle(self) -> None:
        segments = build_pie_segments([4, 1, 2, 3])
        self.assertEqual(segments[0].from_point, (99.0, 0.0))
        for prev, nxt in zip(segments, segments[1:]):
            self.assertEqual(prev.to_point, nxt.from_point)
        end_x, end_y = segments[-1].to_point
        self.assertAlmostEqual(end_x, 99.0, places=9)
        self.assertAlmostEqual(end_y, 0.0, places=9)
        for segment in segments:
            self.assertAlmostEqual(math.hypot(*segment.to_point), 99.0, places=9)

    def test_wedge_larger_than_half_sets_large_arc_flag(self) -> None:
        small, large = build_pie_segments([1, 3])
        self.assertIs(small.angle(), SegmentSize.LESS_THAN_HALF)
        self.assertIs(large.angle(), SegmentSize.MORE_THAN_HALF)
        self.assertIn(" A100 100 0 1 1 ", large.arc_path())
        ax, ay = large.label_anchor()
        self.assertAlmostEqual(ax, -math.sqrt(0.5), places=9)
        self.assertAlmostEqual(ay, -math.sqrt(0.5), places=9)

    def test_single_value_is_a_full_circle(self) -> None:
        (segment,) = build_pie_segments([5])
        self.assertEqual(segment.large_arc_flag, 1)
        self.assertEqual(segment.value, 5.0)

    def test_zero_values_are_dropped(self) -> None:
        segments = build_pie_segments([0, 2, 0, 2])
        self.assertEqual([s.source_index for s in segments], [1, 3])

    def test_all_zero_values_yield_no_segments(self) -> None:
        self.assertEqual(build_pie_segments([0, 0.0]), [])

    def test_series_labels_follow_their_values(self) -> None:
        series = Series.from_pairs([(5, "five"), (1, "one"), (3, "three")])
        segments = build_pie_segments(series)
        self.assertEqual([s.label for s in segments], ["one", "three", "five"])
        self.assertEqual([s.source_index for s in segments], [1, 2, 0])

    def test_rejects_invalid_input(self) -> None:
        with self.assertRaisesRegex(InvalidConfigurationError, "empty"):
            build_pie_segments([])
        with self.assertRaisesRegex(InvalidConfigurationError, "non-negative"):
            build_pie_segments([1, -1])
        with self.assertRaisesRegex(InvalidConfigurationError, "labels length mismatch"):
            build_pie_segments([1, 2], labels=["a"])

    @unittest.skipUnless(_HAS_PANDAS, "pandas not installed")
    def test_segments_read_a_dataframe_column(self) -> None:
        import pandas as pd

        frame = pd.DataFrame({"share": [4, 1, 2], "name": ["a", "b", "c"]})
        segments = build_pie_segments("share", labels=list(frame["name"]), data=frame)
        self.assertEqual([s.value for s in segments], [1.0, 2.0, 4.0])
        self.assertEqual([s.label for s in segments], ["b", "c", "a"])
        layout = layout_pie("share", data=frame)
        self.assertEqual([s.segment for s in layout.slices], build_pie_segments([4, 1, 2]))


class PieLayoutTests(unittest.TestCase):
    def test_layout_assigns_palette_colors_in_segment_order(self) -> None:
        layout = layout_pie([3, 1])
        self.assertEqual([s.color for s in layout.slices], ["#dc8a78", "#8839ef"])
        self.assertEqual(layout.slices[0].path, layout.slices[0].segment.arc_path())

    def test_layout_scales_label_anchor_by_radius(self) -> None:
        layout = layout_pie([1, 3], PieChartOptions(label_radius=50.0))
        ax, ay = layout.slices[1].segment.label_anchor()
        self.assertEqual(layout.slices[1].label_position, (ax * 50.0, ay * 50.0))

    def test_layout_uses_gradient_endpoints(self) -> None:
        options = PieChartOptions(color=Gradient(from_color=RGBColor(0, 0, 0), to_color=RGBColor(255, 255, 255)))
        layout = layout_pie([1, 2, 3], options)
        self.assertEqual(layout.slices[0].color, "#000000")
        self.assertEqual(layout.slices[-1].color, "#ffffff")


if __name__ == "__main__":
    unittest.main()
