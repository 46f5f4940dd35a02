
""" Image processing backend. Currently implemented using Pillow (PIL) and NumPy. PIL exports 8bit images only."""



#                                           === Backend ===

from typing import Any, Tuple, TypeAlias

import numpy as np
from numpy.typing import NDArray
from PIL import Image as _PIL
from PIL.Image import Image as PILImage

from backend.texture_classes import Texture

ImageObject: TypeAlias = PILImage

SIXTEEN_BIT_MODES: Tuple[str, ...] = ("I;16", "I;16L", "I;16B")


def close_image(image: object) -> None:
    close = getattr(image, "close", None)
    if callable(close):
        close()


def from_array_u8(data: Any, mode: str) -> ImageObject:
# Creates an image from a uint8 numpy array; the mode is inferred from the array shape.
    image = _PIL.fromarray(data)
    return image if image.mode == mode else image.convert(mode)


def get_image_mode(image: Any) -> str:
# Return the Pillow image mode: "RGB", "RGBA", "L"
    return image.mode


def get_size(image: ImageObject) -> Tuple[int, int]:
# Returns the image size as (width, height)
    return image.size


def open_image(path: str) -> ImageObject:
    image = _PIL.open(path)
    image.load()
    return image


def save_image(image: Any, path: str, file_extension: str = "png") -> None:
    image.save(path, format=file_extension.upper())




#                                           === Utils ===


def is_grayscale(image: ImageObject) -> bool:
# Returns True if the image is of type grayscale image.

    mode = get_image_mode(image)
    return mode in ("L", "LA") or mode == "I" or str(mode).startswith("I;16")


def _grayscale_values(image: ImageObject) -> NDArray[np.float64]:
# Reads a single channel grayscale image as normalized values, keeping the full 16bit range instead of clipping it.

    mode = get_image_mode(image)
    if mode == "L":
        return np.asarray(image, dtype=np.float64) / 255.0
    if mode in SIXTEEN_BIT_MODES:
        image = image.convert("I")
    if image.mode == "I":
        return np.clip(np.asarray(image, dtype=np.float64), 0, 65535) / 65535.0
    return np.asarray(image.convert("L"), dtype=np.float64) / 255.0


def texture_from_image(image: ImageObject) -> Texture:
# Converts an opened image to a finalized normalized RGBA texture.
# Grayscale values are copied to R, G and B; images without alpha get A = 1.

    width, height = get_size(image)
    pixels: NDArray[np.float64] = np.ones((height, width, 4), dtype=np.float64)
    mode = get_image_mode(image)

    if mode == "LA":
        grayscale_alpha = np.asarray(image, dtype=np.float64) / 255.0
        pixels[..., :3] = grayscale_alpha[..., :1]
        pixels[..., 3] = grayscale_alpha[..., 1]
    elif is_grayscale(image):
        pixels[..., :3] = _grayscale_values(image)[..., None]
    else:
        rgba = image if mode == "RGBA" else image.convert("RGBA")
        pixels[...] = np.asarray(rgba, dtype=np.float64) / 255.0
        if rgba is not image:
            close_image(rgba)

    return Texture.from_array(pixels)


def image_from_texture(texture: Texture) -> ImageObject:
# Encodes a texture into an 8bit RGBA image. Out-of-range values are clipped only here, on export.

    output_image_u8: NDArray[np.uint8] = np.rint(np.clip(texture.pixels, 0.0, 1.0) * 255.0).astype("uint8")
    return from_array_u8(output_image_u8, "RGBA")
