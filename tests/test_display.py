"""
Display Tests
=============

Canvas composition and terminal output.
"""

import io

import numpy as np

from asciicam.display import CanvasDisplay, TerminalDisplay
from asciicam.display.canvas import block_element
from asciicam.models import AsciiFrame, GridSize


def _frame(char="@", width=8, height=4):
    return AsciiFrame(lines=(char * width,) * height, width=width, height=height)


class TestCanvasDisplay:
    """Tests for CanvasDisplay."""

    def test_measure_uses_cell_size(self):
        display = CanvasDisplay(width=800, height=600)
        cell_w, cell_h = display.cell
        block, viewport = display.measure(GridSize(10, 5))

        assert block == (10 * cell_w, 5 * cell_h)
        assert viewport == (800, 600)

    def test_rasterize_natural_size(self):
        display = CanvasDisplay(width=800, height=600)
        mask = display.rasterize(_frame(width=8, height=4))
        cell_w, cell_h = display.cell

        assert mask.shape == (4 * cell_h, 8 * cell_w)
        assert mask.max() > 0

    def test_blank_ramp_draws_nothing(self):
        display = CanvasDisplay(width=200, height=100, background=(10, 10, 10))
        display.show(_frame(char=" "), scale=1.0)

        assert np.all(display.canvas == 10)
        assert display.frames_shown == 1

    def test_scaled_block_is_centered(self):
        display = CanvasDisplay(width=400, height=300, foreground=(0, 255, 0))
        display.show(_frame(width=4, height=2), scale=0.5)

        ink_rows, ink_cols = np.nonzero(display.canvas[..., 1])
        assert ink_rows.size > 0
        assert abs((ink_cols.min() + ink_cols.max()) / 2 - 200) < 20
        assert abs((ink_rows.min() + ink_rows.max()) / 2 - 150) < 20

    def test_zero_viewport_is_tolerated(self):
        display = CanvasDisplay(width=200, height=100)
        display.resize(0, 0)
        display.show(_frame(), scale=1.0)

        assert display.canvas.shape == (0, 0, 3)


class TestBlockGlyphs:
    """Tests for block element tiles on the canvas."""

    def test_shade_is_not_question_mark(self):
        display = CanvasDisplay()
        assert not np.array_equal(display._glyph("░"), display._glyph("?"))

    def test_blocks_ramp_coverage_increases(self):
        display = CanvasDisplay()
        coverage = [int(display._glyph(c).sum()) for c in " ░▒▓█"]

        assert coverage[0] == 0
        assert coverage == sorted(coverage)
        assert len(set(coverage)) == 5

    def test_full_block_fills_cell(self):
        tile = block_element("█", 8, 16)
        assert tile.shape == (16, 8)
        assert np.all(tile == 255)

    def test_half_blocks(self):
        upper = block_element("▀", 8, 16)
        lower = block_element("▄", 8, 16)
        right = block_element("▐", 8, 16)

        assert np.all(upper[:8] == 255) and np.all(upper[8:] == 0)
        assert np.all(lower[8:] == 255) and np.all(lower[:8] == 0)
        assert np.all(right[:, 4:] == 255) and np.all(right[:, :4] == 0)

    def test_quadrant(self):
        tile = block_element("▚", 8, 16)
        assert np.all(tile[:8, :4] == 255)
        assert np.all(tile[8:, 4:] == 255)
        assert np.all(tile[:8, 4:] == 0)
        assert np.all(tile[8:, :4] == 0)

    def test_ascii_is_not_a_block_element(self):
        assert block_element("#", 8, 16) is None

    def test_other_non_ascii_draws_blank(self):
        display = CanvasDisplay()
        assert not display._glyph("é").any()

    def test_blocks_frame_is_drawn(self):
        display = CanvasDisplay(width=400, height=300, foreground=(0, 255, 0))
        display.show(_frame(char="▓"), scale=1.0)

        assert display.canvas[..., 1].max() > 0


class TestTerminalDisplay:
    """Tests for TerminalDisplay."""

    def test_writes_text_verbatim(self):
        stream = io.StringIO()
        display = TerminalDisplay(stream=stream, size=(80, 24))
        frame = _frame(char="#", width=3, height=2)
        display.show(frame, scale=1.0)

        output = stream.getvalue()
        assert "###\n###\n" in output
        assert "3x2 fit=1.00" in output

    def test_measure_in_cells(self):
        display = TerminalDisplay(stream=io.StringIO(), size=(80, 24))
        assert display.measure(GridSize(120, 45)) == ((120, 45), (80, 24))

    def test_poll_reports_no_resize_for_fixed_size(self):
        display = TerminalDisplay(stream=io.StringIO(), size=(80, 24))
        assert not display.poll().resized
        assert not display.poll().resized
