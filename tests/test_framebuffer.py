import pytest

from ht32panel.errors import FramebufferSizeError
from ht32panel.framebuffer import (
    PIXEL_COUNT,
    Framebuffer,
    parse_hex_color,
    rgb565_to_rgb888,
    rgb888_to_rgb565,
)


def test_rgb565_conversion():
    assert rgb888_to_rgb565(255, 0, 0) == 0xF800
    assert rgb888_to_rgb565(0, 255, 0) == 0x07E0
    assert rgb888_to_rgb565(0, 0, 255) == 0x001F
    assert rgb888_to_rgb565(255, 255, 255) == 0xFFFF
    assert rgb888_to_rgb565(0, 0, 0) == 0x0000


def test_parse_hex_color():
    assert parse_hex_color("#FF0000") == 0xF800
    assert parse_hex_color("00FF00") == 0x07E0
    assert parse_hex_color("#000000") == 0x0000
    assert parse_hex_color("#FFFFFF") == 0xFFFF
    assert parse_hex_color("invalid") is None


def test_parse_hex_color_rejects_non_hex():
    assert parse_hex_color("#GG0000") is None
    assert parse_hex_color("#FFF") is None


def test_framebuffer_ops():
    fb = Framebuffer()
    assert fb.width == 320
    assert fb.height == 170
    fb.set_pixel(10, 20, 0xF800)
    assert fb.get_pixel(10, 20) == 0xF800
    fb.clear(0xFFFF)
    assert fb.get_pixel(0, 0) == 0xFFFF


def test_new_framebuffer_is_black():
    fb = Framebuffer()
    assert len(fb.data) == PIXEL_COUNT
    assert set(fb.data) == {0}


def test_out_of_bounds_pixels():
    fb = Framebuffer(4, 3)
    fb.set_pixel(4, 0, 0x1234)
    fb.set_pixel(-1, 0, 0x1234)
    assert set(fb.data) == {0}
    assert fb.get_pixel(4, 0) is None
    assert fb.get_pixel(0, 3) is None


@pytest.mark.parametrize("pixel", [0x0000, 0xFFFF, 0xF800, 0x07E0, 0x001F, 0x1234, 0xABCD])
def test_rgb565_round_trip(pixel):
    assert rgb888_to_rgb565(*rgb565_to_rgb888(pixel)) == pixel


def test_white_expands_to_full_scale():
    assert rgb565_to_rgb888(0xFFFF) == (255, 255, 255)


def test_resize_resets_only_on_change():
    fb = Framebuffer(4, 4)
    fb.clear(7)
    fb.resize(4, 4)
    assert set(fb.data) == {7}
    fb.resize(2, 3)
    assert (fb.width, fb.height, len(fb.data)) == (2, 3, 6)
    assert set(fb.data) == {0}


def test_fill_rect_and_extract_region():
    fb = Framebuffer(5, 5)
    fb.fill_rect(1, 1, 2, 2, 9)
    assert fb.extract_region(1, 1, 2, 2) == [9, 9, 9, 9]
    assert fb.get_pixel(0, 0) == 0
    assert fb.get_pixel(3, 3) == 0
    region = fb.extract_region(4, 4, 2, 2)
    assert region == [0, 0, 0, 0]


def test_fill_rect_clips():
    fb = Framebuffer(3, 3)
    fb.fill_rect(2, 2, 5, 5, 1)
    assert fb.data.count(1) == 1


def test_copy_from_rgb565():
    fb = Framebuffer(2, 2)
    fb.copy_from_rgb565([1, 2, 3, 4])
    assert fb.data == [1, 2, 3, 4]
    with pytest.raises(FramebufferSizeError) as info:
        fb.copy_from_rgb565([1, 2, 3])
    assert (info.value.expected, info.value.actual) == (4, 3)


def test_copy_from_rgba8_and_rgb8():
    fb = Framebuffer(2, 1)
    fb.copy_from_rgba8(bytes([255, 0, 0, 10, 0, 0, 255, 20]))
    assert fb.data == [0xF800, 0x001F]
    fb.copy_from_rgb8(bytes([0, 255, 0, 255, 255, 255]))
    assert fb.data == [0x07E0, 0xFFFF]


def test_copy_from_bytes_size_errors():
    fb = Framebuffer(2, 1)
    with pytest.raises(FramebufferSizeError) as info:
        fb.copy_from_rgba8(bytes(7))
    assert (info.value.expected, info.value.actual) == (8, 7)
    with pytest.raises(FramebufferSizeError):
        fb.copy_from_rgb8(bytes(8))


def test_rotate_180_twice_is_identity():
    fb = Framebuffer(3, 2)
    fb.copy_from_rgb565([1, 2, 3, 4, 5, 6])
    fb.rotate_180()
    assert fb.data == [6, 5, 4, 3, 2, 1]
    fb.rotate_180()
    assert fb.data == [1, 2, 3, 4, 5, 6]


def test_to_rgba8_round_trip():
    fb = Framebuffer(2, 1)
    fb.copy_from_rgb565([0xF800, 0x001F])
    rgba = fb.to_rgba8()
    assert rgba == bytes([255, 0, 0, 255, 0, 0, 255, 255])
    other = Framebuffer(2, 1)
    other.copy_from_rgba8(rgba)
    assert other.data == fb.data