"""Framebuffer tests."""

import pytest

from fishnchips.display import VIDEO_X, VIDEO_Y, Display


@pytest.fixture
def display():
    return Display()


class TestDrawSprite:

    def test_draw_row(self, display):
        assert display.draw_sprite(0, 0, b"\xFF") is False
        assert [display.pixel(x, 0) for x in range(9)] == [1] * 8 + [0]

    def test_bit_order(self, display):
        display.draw_sprite(0, 0, b"\x81")
        assert display.pixel(0, 0) == 1
        assert display.pixel(7, 0) == 1
        assert display.lit() == 2

    def test_draw_twice_restores(self, display):
        """Drawing a sprite twice leaves the screen as it was."""
        display.draw_sprite(3, 4, b"\x0F")
        before = display.rows()
        sprite = bytes([0xF0, 0x90, 0x90, 0x90, 0xF0])
        display.draw_sprite(10, 7, sprite)
        assert display.rows() != before
        assert display.draw_sprite(10, 7, sprite) is True
        assert display.rows() == before

    def test_collision(self, display):
        display.draw_sprite(0, 0, b"\x01")
        assert display.draw_sprite(0, 0, b"\x80") is False
        assert display.draw_sprite(7, 0, b"\x80") is True
        assert display.pixel(7, 0) == 0

    def test_wraps_horizontally(self, display):
        display.draw_sprite(VIDEO_X - 4, 0, b"\xFF")
        assert [display.pixel(x, 0) for x in range(4)] == [1, 1, 1, 1]
        assert display.pixel(VIDEO_X - 1, 0) == 1
        assert display.lit() == 8

    def test_wraps_vertically(self, display):
        display.draw_sprite(0, VIDEO_Y - 1, b"\x80\x80")
        assert display.pixel(0, VIDEO_Y - 1) == 1
        assert display.pixel(0, 0) == 1

    def test_start_coordinates_wrap(self, display):
        display.draw_sprite(VIDEO_X + 1, VIDEO_Y + 2, b"\x80")
        assert display.rows()[2][1] == 1

    def test_empty_sprite(self, display):
        assert display.draw_sprite(0, 0, b"") is False
        assert display.lit() == 0

    def test_too_many_rows(self, display):
        with pytest.raises(ValueError):
            display.draw_sprite(0, 0, bytes(16))


class TestClear:

    def test_clear(self, display):
        display.draw_sprite(5, 5, b"\xFF\xFF")
        display.dirty = False
        display.clear()
        assert display.lit() == 0
        assert display.dirty

    def test_rows_is_a_copy(self, display):
        rows = display.rows()
        display.draw_sprite(0, 0, b"\x80")
        assert rows[0][0] == 0
        assert len(rows) == VIDEO_Y
        assert all(len(row) == VIDEO_X for row in rows)
