"""Tests for regionrec.geometry and regionrec.region - selection parsing and resolution."""

import sys
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from regionrec.geometry import contains_center, parse_geometry, parse_monitor_geometry
from regionrec.region import clamp_to_bounds, enforce_even, resolve_region, snap_to_bottom
from regionrec.types import GeometryParseError, InvalidRegionError, Monitor, Rect


class TestParseGeometry:
    """Tests for parse_geometry function."""

    def test_four_values(self):
        """Parses x,y,w,h positionally."""
        assert parse_geometry("10,20,300,400") == Rect(10, 20, 300, 400)

    def test_whitespace_and_signs(self):
        """Strips whitespace around fields and accepts signs."""
        assert parse_geometry(" -5 , +7,64 , 48\n") == Rect(-5, 7, 64, 48)

    def test_too_few_values(self):
        """Three values are rejected."""
        with pytest.raises(GeometryParseError, match="expected 4 values"):
            parse_geometry("1,2,3")

    def test_too_many_values(self):
        """Five values are rejected."""
        with pytest.raises(GeometryParseError):
            parse_geometry("1,2,3,4,5")

    def test_non_numeric(self):
        """Non-numeric field is rejected."""
        with pytest.raises(GeometryParseError, match="invalid selection geometry"):
            parse_geometry("a,2,3,4")

    def test_empty_field(self):
        """Empty field is rejected."""
        with pytest.raises(GeometryParseError):
            parse_geometry("1,,3,4")

    def test_is_value_error(self):
        """Parse errors are also ValueErrors."""
        with pytest.raises(ValueError):
            parse_geometry("")

    @given(st.lists(st.integers(min_value=-10**6, max_value=10**6), min_size=4, max_size=4))
    @settings(max_examples=30)
    def test_integers_parse(self, values):
        """Property: any four integers parse back to the same rect."""
        rect = parse_geometry(",".join(str(v) for v in values))
        assert (rect.x, rect.y, rect.w, rect.h) == tuple(values)


class TestParseMonitorGeometry:
    """Tests for parse_monitor_geometry function."""

    def test_origin(self):
        assert parse_monitor_geometry("1920x1080+0+0") == Monitor(0, 0, 1920, 1080)

    def test_offsets(self):
        assert parse_monitor_geometry("2560x1440+1920+360") == Monitor(1920, 360, 2560, 1440)

    def test_negative_offsets(self):
        """Both offsets may be negative."""
        assert parse_monitor_geometry("1280x1024-1280-200") == Monitor(-1280, -200, 1280, 1024)

    def test_mixed_signs(self):
        assert parse_monitor_geometry("800x600+10-20") == Monitor(10, -20, 800, 600)

    def test_missing_second_offset(self):
        assert parse_monitor_geometry("1920x1080+0") is None

    def test_not_geometry(self):
        assert parse_monitor_geometry("(normal") is None
        assert parse_monitor_geometry("344mm") is None


class TestContainsCenter:
    """Tests for half-open containment of a rectangle's center."""

    monitor = Monitor(100, 100, 200, 200)

    def test_center_inside(self):
        assert contains_center(self.monitor, Rect(150, 150, 20, 20))

    def test_center_on_left_edge_is_inside(self):
        """Center exactly on the left edge belongs to the monitor."""
        assert contains_center(self.monitor, Rect(90, 150, 20, 20))

    def test_center_on_top_edge_is_inside(self):
        assert contains_center(self.monitor, Rect(150, 90, 20, 20))

    def test_center_on_right_edge_is_outside(self):
        """Center exactly on the right edge does not."""
        assert not contains_center(self.monitor, Rect(290, 150, 20, 20))

    def test_center_on_bottom_edge_is_outside(self):
        assert not contains_center(self.monitor, Rect(150, 290, 20, 20))

    def test_shared_edge_has_single_owner(self):
        """A point on the seam of two monitors belongs only to the right one."""
        left = Monitor(0, 0, 1920, 1080)
        right = Monitor(1920, 0, 1920, 1080)
        rect = Rect(1910, 500, 20, 20)
        assert not contains_center(left, rect)
        assert contains_center(right, rect)


class TestClampToBounds:
    """Tests for clamp_to_bounds function."""

    bounds = Monitor(0, 0, 200, 200)

    def test_inside_unchanged(self):
        """A rectangle fully inside is returned unchanged."""
        rect = Rect(10, 20, 100, 50)
        assert clamp_to_bounds(rect, self.bounds) == rect

    def test_top_left_overflow(self):
        """Overflow on the left/top shrinks from that side."""
        assert clamp_to_bounds(Rect(-10, -10, 100, 100), self.bounds) == Rect(0, 0, 90, 90)

    def test_bottom_right_overflow(self):
        assert clamp_to_bounds(Rect(150, 180, 100, 100), self.bounds) == Rect(150, 180, 50, 20)

    def test_offset_monitor(self):
        bounds = Monitor(1920, 0, 1920, 1080)
        assert clamp_to_bounds(Rect(1800, 1000, 400, 200), bounds) == Rect(1920, 1000, 280, 80)

    def test_fully_outside_goes_non_positive(self):
        assert clamp_to_bounds(Rect(-300, 10, 100, 100), self.bounds).w <= 0

    @given(
        st.integers(-500, 500), st.integers(-500, 500),
        st.integers(1, 800), st.integers(1, 800),
    )
    @settings(max_examples=50)
    def test_never_expands(self, x, y, w, h):
        """Property: clamping only shrinks."""
        clamped = clamp_to_bounds(Rect(x, y, w, h), self.bounds)
        assert clamped.w <= w
        assert clamped.h <= h


class TestSnapAndEven:
    """Tests for snap_to_bottom and enforce_even."""

    bounds = Monitor(0, 0, 1920, 1080)

    def test_small_gap_closed(self):
        """A 30px gap with margin 50 is closed exactly."""
        snapped = snap_to_bottom(Rect(0, 500, 100, 550), self.bounds, 50)
        assert snapped.y + snapped.h == 1080
        assert snapped.h == 580

    def test_gap_at_margin_closed(self):
        snapped = snap_to_bottom(Rect(0, 500, 100, 530), self.bounds, 50)
        assert snapped.y + snapped.h == 1080

    def test_large_gap_unchanged(self):
        """A 60px gap is left alone."""
        rect = Rect(0, 500, 100, 520)
        assert snap_to_bottom(rect, self.bounds, 50) == rect

    def test_no_gap_unchanged(self):
        rect = Rect(0, 500, 100, 580)
        assert snap_to_bottom(rect, self.bounds, 50) == rect

    def test_odd_width(self):
        assert enforce_even(Rect(0, 0, 101, 100)).w == 100

    def test_even_width_unchanged(self):
        assert enforce_even(Rect(0, 0, 100, 100)).w == 100

    def test_odd_height(self):
        assert enforce_even(Rect(0, 0, 100, 77)).h == 76


class TestResolveRegion:
    """Tests for resolve_region function."""

    bounds = Monitor(0, 0, 1920, 1080)

    def test_plain_selection(self):
        assert resolve_region(Rect(100, 100, 400, 300), self.bounds) == Rect(100, 100, 400, 300)

    def test_steps_run_in_order(self):
        """Clamp, then snap, then even dimensions."""
        # Clamped to x=0,w=301; bottom gap 25 closes to h=1080-700=380.
        result = resolve_region(Rect(-50, 700, 351, 355), self.bounds, 50)
        assert result == Rect(0, 700, 300, 380)

    def test_snapped_height_made_even(self):
        """An odd snapped height still loses its last pixel."""
        result = resolve_region(Rect(10, 101, 200, 940), self.bounds, 50)
        assert result.h == 978
        assert result.y + result.h == 1079

    def test_zero_width_rejected(self):
        """A region clamped to zero width never starts a session."""
        with pytest.raises(InvalidRegionError) as exc_info:
            resolve_region(Rect(1920, 100, 100, 100), self.bounds)
        assert exc_info.value.width == 0

    def test_zero_height_rejected(self):
        with pytest.raises(InvalidRegionError):
            resolve_region(Rect(100, -200, 100, 200), self.bounds, 0)

    def test_one_pixel_rejected(self):
        """One pixel rounds down to zero."""
        with pytest.raises(InvalidRegionError, match="0x"):
            resolve_region(Rect(100, 100, 1, 200), self.bounds)

    @given(
        st.integers(-3000, 3000), st.integers(-2000, 2000),
        st.integers(-100, 4000), st.integers(-100, 3000),
    )
    @settings(max_examples=100)
    def test_result_is_valid_or_rejected(self, x, y, w, h):
        """Property: result is positive, even and inside bounds."""
        try:
            result = resolve_region(Rect(x, y, w, h), self.bounds)
        except InvalidRegionError:
            return
        assert result.w > 0 and result.h > 0
        assert result.w % 2 == 0 and result.h % 2 == 0
        assert result.x >= self.bounds.x and result.y >= self.bounds.y
        assert result.x + result.w <= self.bounds.right
        assert result.y + result.h <= self.bounds.bottom
