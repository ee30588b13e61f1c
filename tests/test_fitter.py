"""
Viewport Fitter Tests
=====================

Fit scale computation and the grid-keyed fit cache.
"""

import pytest

from asciicam.models import FitState, FitTransform, GridSize
from asciicam.pipeline.fitter import ViewportFitter, fit


class TestFit:
    """Tests for fit()."""

    def test_scenario_shrink(self):
        """1200x900 block in an 800x600 viewport -> 2/3."""
        assert fit(1200, 900, 800, 600) == pytest.approx(2 / 3)

    def test_limited_by_tighter_axis(self):
        assert fit(1000, 200, 500, 400) == pytest.approx(0.5)
        assert fit(200, 1000, 400, 500) == pytest.approx(0.5)

    def test_never_upscales(self):
        assert fit(100, 50, 800, 600) == 1.0

    def test_exact_fit_is_one(self):
        assert fit(800, 600, 800, 600) == 1.0

    @pytest.mark.parametrize(
        "dims",
        [(0, 900, 800, 600), (1200, 0, 800, 600), (1200, 900, 0, 600), (1200, 900, 800, 0)],
    )
    def test_zero_dimension_not_ready(self, dims):
        assert fit(*dims) is None

    def test_never_above_one(self):
        for block in (1, 10, 100, 1000, 10000):
            for view in (1, 10, 100, 1000, 10000):
                assert 0 < fit(block, block, view, view) <= 1


class TestViewportFitter:
    """Tests for the cached fitter."""

    @staticmethod
    def _measure(block, viewport, calls):
        def measure(grid):
            calls.append(grid)
            return block, viewport
        return measure

    def test_first_grid_fits(self):
        calls = []
        fitter = ViewportFitter()
        state = fitter.update(FitState(), GridSize(120, 45), self._measure((1200, 900), (800, 600), calls))

        assert state.grid == GridSize(120, 45)
        assert state.scale == pytest.approx(2 / 3)
        assert calls == [GridSize(120, 45)]
        assert fitter.fit_count == 1

    def test_same_grid_is_cached(self):
        calls = []
        measure = self._measure((1200, 900), (800, 600), calls)
        fitter = ViewportFitter()
        state = fitter.update(FitState(), GridSize(120, 45), measure)
        again = fitter.update(state, GridSize(120, 45), measure)

        assert again is state
        assert len(calls) == 1

    def test_grid_change_refits(self):
        calls = []
        fitter = ViewportFitter()
        state = fitter.update(FitState(), GridSize(120, 45), self._measure((1200, 900), (800, 600), calls))
        state = fitter.update(state, GridSize(60, 22), self._measure((600, 440), (800, 600), calls))

        assert state.grid == GridSize(60, 22)
        assert state.scale == 1.0
        assert len(calls) == 2

    def test_not_ready_keeps_previous_scale_and_retries(self):
        calls = []
        fitter = ViewportFitter()
        previous = FitState(grid=GridSize(60, 22), transform=FitTransform(0.5))

        state = fitter.update(previous, GridSize(120, 45), self._measure((1200, 900), (0, 0), calls))
        assert state is previous
        assert state.scale == 0.5

        state = fitter.update(state, GridSize(120, 45), self._measure((1200, 900), (800, 600), calls))
        assert state.grid == GridSize(120, 45)
        assert state.scale == pytest.approx(2 / 3)

    def test_refit_uses_cached_grid(self):
        calls = []
        fitter = ViewportFitter()
        state = fitter.update(FitState(), GridSize(120, 45), self._measure((1200, 900), (800, 600), calls))
        state = fitter.refit(state, self._measure((1200, 900), (600, 450), calls))

        assert calls[-1] == GridSize(120, 45)
        assert state.scale == pytest.approx(0.5)

    def test_refit_without_grid_is_noop(self):
        calls = []
        state = FitState()
        assert ViewportFitter().refit(state, self._measure((1, 1), (1, 1), calls)) is state
        assert calls == []


class TestFitTransform:
    """Tests for FitTransform validation."""

    def test_default_is_identity(self):
        assert FitState().scale == 1.0

    @pytest.mark.parametrize("scale", [0.0, -0.5, 1.5])
    def test_out_of_range_rejected(self, scale):
        with pytest.raises(ValueError):
            FitTransform(scale)
