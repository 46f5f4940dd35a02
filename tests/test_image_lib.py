import numpy as np
import pytest
from PIL import Image

from backend.image_lib import image_from_texture, is_grayscale, texture_from_image
from backend.texture_classes import Color, Texture


def test_grayscale_copied_to_rgb_with_opaque_alpha():
    with Image.new("L", (3, 2), 51) as image:
        texture = texture_from_image(image)

    assert texture.size == (3, 2)
    assert texture.get_pixel(2, 1) == pytest.approx((0.2, 0.2, 0.2, 1.0))


def test_rgba_channels_normalized():
    with Image.new("RGBA", (1, 1), (255, 0, 51, 102)) as image:
        texture = texture_from_image(image)
    assert texture.get_pixel(0, 0) == pytest.approx((1.0, 0.0, 0.2, 0.4))


def test_rgb_gets_opaque_alpha():
    with Image.new("RGB", (1, 1), (0, 255, 0)) as image:
        assert texture_from_image(image).get_pixel(0, 0) == pytest.approx((0.0, 1.0, 0.0, 1.0))


def test_grayscale_with_alpha():
    with Image.new("LA", (1, 1), (255, 0)) as image:
        assert texture_from_image(image).get_pixel(0, 0) == pytest.approx((1.0, 1.0, 1.0, 0.0))


def test_sixteen_bit_grayscale_keeps_range():
    with Image.new("I;16", (2, 2), 65535) as image:
        assert is_grayscale(image)
        texture = texture_from_image(image)
    assert texture.get_pixel(0, 0) == pytest.approx((1.0, 1.0, 1.0, 1.0))


def test_image_from_texture_clips_and_rounds():
    texture = Texture.from_array(np.array([[[1.5, -0.2, 0.4, 0.5]]]))
    with image_from_texture(texture) as image:
        assert image.mode == "RGBA"
        assert image.getpixel((0, 0)) == (255, 0, 102, 128)


def test_eight_bit_values_survive_export():
    original = Texture.filled(2, 2, Color(51 / 255, 102 / 255, 0.0, 204 / 255))
    with image_from_texture(original) as image:
        restored = texture_from_image(image)
    np.testing.assert_allclose(restored.pixels, original.pixels)
