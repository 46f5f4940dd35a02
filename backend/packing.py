""" Channel packing core: size validation, roughness inversion and RGBA packing. No file I/O or logging. """

from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from backend.errors import NoReferenceDimension, SizeMismatch
from backend.texture_classes import PackDefaults, Texture


#                                           === Size validation ===

def has_same_size(textures: Iterable[Optional[Texture]]) -> bool:
# Returns True if every present texture shares one width and height; missing textures are ignored.

    reference: Optional[Tuple[int, int]] = None
    for texture in textures:
        if texture is None:
            continue
        if reference is None:
            reference = texture.size
        elif texture.size != reference:
            return False
    return True


def reference_size(textures: Iterable[Optional[Texture]]) -> Tuple[int, int]:
# Returns the size of the first present texture.

    for texture in textures:
        if texture is not None:
            return texture.size
    raise NoReferenceDimension()


def _distinct_sizes(textures: Iterable[Optional[Texture]]) -> List[Tuple[int, int]]:
    sizes: List[Tuple[int, int]] = []
    for texture in textures:
        if texture is not None and texture.size not in sizes:
            sizes.append(texture.size)
    return sizes




#                                             === Transforms ===

def invert_texture(texture: Texture) -> Texture:
# Inverts RGB, keeps alpha. Values are not clamped, so out-of-range input stays out of range.

    if texture is None:
        raise TypeError("Cannot invert a missing texture.")

    source: NDArray[np.float64] = texture.pixels
    inverted_pixels: NDArray[np.float64] = np.empty_like(source)
    inverted_pixels[..., :3] = 1.0 - source[..., :3]
    inverted_pixels[..., 3] = source[..., 3]

    inverted_texture = Texture(texture.width, texture.height)
    inverted_texture.set_pixels(inverted_pixels)
    inverted_texture.apply()
    return inverted_texture


def pack_channels(
    metallic: Optional[Texture],
    occlusion: Optional[Texture],
    roughness: Optional[Texture],
    sizing_set: Sequence[Optional[Texture]],
    defaults: Optional[PackDefaults] = None,
) -> Texture:
# Packs R = metallic, G = occlusion, B = 0, A = smoothness (inverted roughness).
# Each sampled map contributes its red channel; a missing map is replaced by its default value.

    defaults = defaults or PackDefaults()

    width, height = reference_size(sizing_set)
    # The output resolution always comes from the caller's sizing set.

    checked_textures: List[Optional[Texture]] = list(sizing_set) + [metallic, occlusion, roughness]
    if not has_same_size(checked_textures):
        raise SizeMismatch(_distinct_sizes(checked_textures))
    # Sampled maps are validated together with the sizing set, so they can be read at identical coordinates.

    smoothness: Optional[Texture] = invert_texture(roughness) if roughness is not None else None

    packed_pixels: NDArray[np.float64] = np.zeros((height, width, 4), dtype=np.float64)
    packed_pixels[..., 0] = _red_or_default(metallic, defaults.metallic)
    packed_pixels[..., 1] = _red_or_default(occlusion, defaults.occlusion)
    packed_pixels[..., 3] = _red_or_default(smoothness, defaults.smoothness)
    # Blue stays 0, the channel is unused.

    packed_texture = Texture(width, height)
    packed_texture.set_pixels(packed_pixels)
    packed_texture.apply()
    return packed_texture


def _red_or_default(texture: Optional[Texture], default_value: float):
    if texture is None:
        return default_value
    return texture.pixels[..., 0]
