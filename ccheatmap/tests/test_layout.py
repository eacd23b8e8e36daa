"""Tests for heatmap layout geometry."""

import unittest
from datetime import date, timedelta

from ccheatmap.models.entities import Activity, ModelBreakdown, RenderConfig, StatsToggles
from ccheatmap.models.themes import THEMES
from ccheatmap.render.layout import compute_layout, build_tooltip, level_color


def make_series(start: str, costs, level: int = 2):
    first = date.fromisoformat(start)
    return [
        Activity(date=(first + timedelta(days=i)).isoformat(), cost=c, level=level if c else 0)
        for i, c in enumerate(costs)
    ]


class TestCanvasSize(unittest.TestCase):
    """Test canvas width and panel stacking."""

    def setUp(self):
        # 53 weeks: Jan 1 2024 (Mon) .. Dec 31 2024 (Tue)
        self.year = make_series("2024-01-01", [1.0] * 366)

    def test_width_grows_with_weeks(self):
        layout = compute_layout(self.year)
        # 2*16 pad + 36 labels + 53 * (16 + 4) + 4 gap
        self.assertEqual(layout.width, 32 + 36 + 53 * 20 + 4)

    def test_default_height_includes_both_panels(self):
        layout = compute_layout(self.year)
        self.assertEqual(layout.base_height, 32 + 24 + 7 * 20 + 4 + 36)
        self.assertEqual(layout.height, layout.base_height + 50 + 180)

    def test_panels_disabled_height_is_base(self):
        config = RenderConfig(stats=StatsToggles.all(False), show_weekday_distribution=False)
        layout = compute_layout(self.year, config)
        self.assertEqual(layout.height, layout.base_height)
        self.assertIsNone(layout.divider)
        self.assertEqual(layout.stat_items, [])
        self.assertEqual(layout.weekday_bars, [])
        self.assertIsNone(layout.weekday_title)

    def test_single_panel_heights(self):
        stats_only = compute_layout(self.year, RenderConfig(show_weekday_distribution=False))
        self.assertEqual(stats_only.height, stats_only.base_height + 50)

        weekday_only = compute_layout(self.year, RenderConfig(stats=StatsToggles.all(False)))
        self.assertEqual(weekday_only.height, weekday_only.base_height + 180)

    def test_cell_size_changes_geometry(self):
        layout = compute_layout(self.year, RenderConfig(cell_size=12, cell_gap=3))
        self.assertEqual(layout.width, 32 + 36 + 53 * 15 + 3)
        self.assertEqual(layout.cells[0].size, 12)

    def test_short_series_keeps_legend_on_canvas(self):
        layout = compute_layout(make_series("2024-01-01", [1.0] * 3))
        self.assertGreaterEqual(layout.legend.x, 16 + 36)
        self.assertLessEqual(layout.legend.more_x, layout.width)


class TestCells(unittest.TestCase):
    """Test cell placement and color."""

    def test_cell_positions(self):
        series = make_series("2024-01-01", [1.0] * 14)
        layout = compute_layout(series)
        by_date = {c.date: c for c in layout.cells}
        # Monday of the first (partial) week
        self.assertEqual((by_date["2024-01-01"].x, by_date["2024-01-01"].y), (52, 60))
        # Sunday opens the second column
        self.assertEqual((by_date["2024-01-07"].x, by_date["2024-01-07"].y), (72, 40))
        self.assertEqual(len(layout.cells), 14)

    def test_cell_positions_monday_start(self):
        series = make_series("2024-01-01", [1.0] * 14)
        layout = compute_layout(series, RenderConfig(week_start=1))
        by_date = {c.date: c for c in layout.cells}
        self.assertEqual(by_date["2024-01-01"].y, 40)
        self.assertEqual(by_date["2024-01-07"].y, 40 + 6 * 20)
        self.assertEqual(by_date["2024-01-08"].x, 72)

    def test_fill_follows_level(self):
        series = [Activity(date="2024-01-0%d" % (i + 1), cost=i, level=i) for i in range(5)]
        layout = compute_layout(series)
        self.assertEqual([c.fill for c in layout.cells], list(THEMES["light"]))

    def test_out_of_range_level_uses_lowest_color(self):
        palette = THEMES["light"]
        self.assertEqual(level_color(palette, 9), palette[0])
        self.assertEqual(level_color(palette, -1), palette[0])
        self.assertEqual(level_color(palette, 4), palette[4])

    def test_date_range_filters_cells(self):
        series = make_series("2024-01-01", [1.0] * 14)
        layout = compute_layout(series, RenderConfig(date_from="2024-01-05", date_to="2024-01-09"))
        self.assertEqual([c.date for c in layout.cells][0], "2024-01-05")
        self.assertEqual(len(layout.cells), 5)
        self.assertEqual(layout.stats.total_days, 5)


class TestPalette(unittest.TestCase):
    """Test palette and scheme resolution."""

    def test_theme_overrides_scheme(self):
        layout = compute_layout([], RenderConfig(color_scheme="dark", theme="blue"))
        self.assertEqual(layout.palette, THEMES["blue"])
        self.assertEqual(layout.background, "#0d1117")

    def test_unknown_theme_falls_back_to_scheme(self):
        layout = compute_layout([], RenderConfig(color_scheme="dark", theme="neon"))
        self.assertEqual(layout.palette, THEMES["dark"])

    def test_explicit_colors_win(self):
        layout = compute_layout([], RenderConfig(background="#fff", text_color="#111"))
        self.assertEqual(layout.background, "#fff")
        self.assertEqual(layout.text_color, "#111")

    def test_light_defaults(self):
        layout = compute_layout([])
        self.assertEqual(layout.background, "transparent")
        self.assertEqual(layout.text_color, "#24292f")


class TestLabels(unittest.TestCase):
    """Test month, weekday and total labels."""

    def test_month_label_per_transition(self):
        # Jan 28 2024 is a Sunday: one week in January, one in February
        layout = compute_layout(make_series("2024-01-28", [1.0] * 14))
        self.assertEqual([(m.text, m.x) for m in layout.month_labels], [("Jan", 52), ("Feb", 72)])

    def test_single_month(self):
        layout = compute_layout(make_series("2024-03-03", [1.0] * 21))
        self.assertEqual([m.text for m in layout.month_labels], ["Mar"])

    def test_month_labels_can_be_hidden(self):
        layout = compute_layout(make_series("2024-01-28", [1.0] * 14), RenderConfig(hide_month_labels=True))
        self.assertEqual(layout.month_labels, [])

    def test_weekday_row_labels(self):
        layout = compute_layout([])
        self.assertEqual([d.text for d in layout.day_labels], ["Mon", "Wed", "Fri"])
        shifted = compute_layout([], RenderConfig(week_start=1))
        self.assertEqual([d.text for d in shifted.day_labels], ["Tue", "Thu", "Sat"])

    def test_total_label(self):
        layout = compute_layout(make_series("2024-12-30", [1.5, 2.5, 0]))
        self.assertEqual(layout.total_label.text, "\N{MONEY BAG} Total: $4.00 across 3 days (2024~2025)")

    def test_total_label_hidden(self):
        layout = compute_layout([], RenderConfig(hide_total_count=True))
        self.assertIsNone(layout.total_label)


class TestTooltip(unittest.TestCase):
    """Test tooltip text."""

    def test_full_tooltip(self):
        activity = Activity(
            date="2024-01-01",
            cost=12.5,
            level=3,
            input_tokens=1234,
            output_tokens=5678,
            total_tokens=6912,
            cache_hit_rate=85.0,
            model_breakdowns=(
                ModelBreakdown("claude-sonnet-4", 10.0),
                ModelBreakdown("claude-haiku", 2.5),
            ),
        )
        self.assertEqual(build_tooltip(activity), [
            "2024-01-01 (Mon)",
            "Cost: $12.50",
            "In: 1,234 / Out: 5,678",
            "Total: 6,912",
            "Cache hit: 85%",
            "claude-sonnet-4: $10.00",
            "claude-haiku: $2.50",
        ])

    def test_zero_cost_tooltip(self):
        activity = Activity(date="2024-01-02", cost=0, level=0, input_tokens=10)
        self.assertEqual(build_tooltip(activity), ["2024-01-02 (Tue)", "No data"])

    def test_missing_output_tokens(self):
        activity = Activity(date="2024-01-07", cost=1, level=1, input_tokens=5)
        self.assertIn("In: 5 / Out: 0", build_tooltip(activity))


class TestPanels(unittest.TestCase):
    """Test statistics and weekday panels."""

    def test_stat_items_follow_toggles(self):
        series = make_series("2024-01-01", [10, 0, 30])
        config = RenderConfig(stats=StatsToggles(daily_avg=True, weekly_avg=False, peak=True, active_days=False))
        layout = compute_layout(series, config)
        self.assertEqual([s.key for s in layout.stat_items], ["daily_avg", "peak"])
        self.assertEqual(layout.stat_items[0].value, "$20.00")
        self.assertEqual(layout.stat_items[1].suffix, " (2024-01-03)")
        self.assertIsNotNone(layout.divider)

    def test_stat_grid_slots(self):
        layout = compute_layout(make_series("2024-01-01", [10, 0, 30]))
        slots = {s.key: (s.x, s.y) for s in layout.stat_items}
        self.assertEqual(slots["daily_avg"][0], slots["peak"][0])
        self.assertEqual(slots["weekly_avg"][0], slots["active_days"][0])
        self.assertEqual(slots["daily_avg"][1], slots["weekly_avg"][1])
        self.assertEqual(slots["peak"][1] - slots["daily_avg"][1], 18)

    def test_active_days_text(self):
        layout = compute_layout(make_series("2024-01-01", [10, 0, 30]))
        active = [s for s in layout.stat_items if s.key == "active_days"][0]
        self.assertEqual(active.value, "2")
        self.assertEqual(active.suffix, " / 3 days")

    def test_weekday_bars(self):
        # Mon 10, Tue 5, rest inactive
        series = make_series("2024-01-01", [10, 5])
        layout = compute_layout(series)
        bars = layout.weekday_bars
        self.assertEqual([b.day for b in bars], ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"])
        full = layout.width - 32 - 100
        self.assertEqual(bars[1].width, full)
        self.assertEqual(bars[2].width, full / 2)
        self.assertEqual(bars[0].width, 0)
        self.assertEqual(bars[1].fill, THEMES["light"][4])
        self.assertEqual(bars[2].fill, THEMES["light"][2])
        self.assertEqual(bars[0].fill, THEMES["light"][0])
        self.assertEqual(bars[1].value_text, "$10.00")
        self.assertEqual(bars[2].value_x, bars[2].x + 6 + bars[2].width)

    def test_weekday_panel_moves_up_without_stats(self):
        series = make_series("2024-01-01", [10, 5])
        with_stats = compute_layout(series)
        without = compute_layout(series, RenderConfig(stats=StatsToggles.all(False)))
        self.assertEqual(with_stats.weekday_title.y - without.weekday_title.y, 40)


class TestEmptySeries(unittest.TestCase):
    """Test rendering of an empty series."""

    def test_empty_layout(self):
        layout = compute_layout([])
        self.assertEqual(layout.cells, [])
        self.assertEqual(layout.month_labels, [])
        self.assertEqual(layout.stats.total_cost, 0)
        self.assertEqual(layout.total_label.text, "\N{MONEY BAG} Total: $0.00 across 0 days")
        self.assertEqual(len(layout.legend.swatches), 5)
        self.assertEqual(layout.height, layout.base_height + 50 + 180)
        self.assertTrue(all(b.width == 0 for b in layout.weekday_bars))
