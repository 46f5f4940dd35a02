import os

import numpy as np
import pytest
from PIL import Image

from backend.texture_classes import Color, Texture


def solid_texture(width: int, height: int, value: float, alpha: float = 1.0) -> Texture:
    return Texture.filled(width, height, Color(value, value, value, alpha))


@pytest.fixture
def make_texture():
    return solid_texture


@pytest.fixture
def gradient_texture() -> Texture:
    rng = np.random.default_rng(7)
    return Texture.from_array(rng.random((3, 5, 4)))


@pytest.fixture
def write_map(tmp_path):
# Writes a solid grayscale 8bit map into tmp_path and returns its path.

    def _write_map(filename: str, value: int, size=(4, 4), mode: str = "L") -> str:
        path = os.path.join(str(tmp_path), filename)
        fill = value if mode == "L" else (value, value, value) if mode == "RGB" else (value, value, value, 255)
        with Image.new(mode, size, fill) as image:
            image.save(path)
        return path

    return _write_map
