from typing import Dict, NamedTuple, Optional, Tuple, TypedDict, List, Any
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray


ROLES: Tuple[str, ...] = ("color", "metallic", "roughness", "normal", "height", "occlusion", "emission")
# Semantic texture map roles a material can be built from.


class Color(NamedTuple):
    r: float
    g: float
    b: float
    a: float = 1.0


class RoleConfig(TypedDict):
    suffixes: list[str] # Possible filename suffixes for a given role, e.g., ["ambientocclusion", "occlusion", "ao"].


class Texture:
# In-memory RGBA image with channels normalized to [0, 1].
# Rows are indexed by y, columns by x. Writable until apply() is called, immutable afterwards.

    def __init__(self, width: int, height: int, fill: Optional[Color] = None) -> None:
        for name, value in (("width", width), ("height", height)):
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)) or value <= 0:
                raise ValueError(f"Texture {name} must be a positive integer, got {value!r}")

        self._width: int = int(width)
        self._height: int = int(height)
        self._pixels: NDArray[np.float64] = np.zeros((self._height, self._width, 4), dtype=np.float64)
        if fill is not None:
            self._pixels[...] = tuple(fill)
        self._finalized: bool = False


    @classmethod
    def from_array(cls, pixels: Any) -> "Texture":
    # Builds a finalized texture from an HxWx4 array of normalized values.
        array: NDArray[np.float64] = np.asarray(pixels, dtype=np.float64)
        if array.ndim != 3 or array.shape[2] != 4:
            raise ValueError(f"Expected an array of shape (height, width, 4), got {array.shape}")
        texture = cls(array.shape[1], array.shape[0])
        texture.set_pixels(array)
        texture.apply()
        return texture

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> "Texture":
        texture = cls(width, height, fill=color)
        texture.apply()
        return texture


    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def size(self) -> Tuple[int, int]:
        return self._width, self._height

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def pixels(self) -> NDArray[np.float64]:
    # Read-only view of the pixel data, shape (height, width, 4).
        view = self._pixels.view()
        view.flags.writeable = False
        return view


    def get_pixel(self, x: int, y: int) -> Color:
        self._check_bounds(x, y)
        r, g, b, a = self._pixels[y, x]
        return Color(float(r), float(g), float(b), float(a))

    def set_pixel(self, x: int, y: int, color: Color) -> None:
        self._check_writable()
        self._check_bounds(x, y)
        self._pixels[y, x] = tuple(color)

    def set_pixels(self, pixels: Any) -> None:
    # Bulk write of the whole pixel grid.
        self._check_writable()
        array = np.asarray(pixels, dtype=np.float64)
        if array.shape != self._pixels.shape:
            raise ValueError(f"Pixel array shape {array.shape} does not match texture shape {self._pixels.shape}")
        self._pixels[...] = array

    def apply(self) -> None:
    # Finalizes the texture; no further writes are accepted.
        self._finalized = True
        self._pixels.flags.writeable = False


    def _check_writable(self) -> None:
        if self._finalized:
            raise ValueError("Texture is finalized and can no longer be modified")

    def _check_bounds(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) is outside a {self._width}x{self._height} texture")

    def __repr__(self) -> str:
        return f"Texture({self._width}x{self._height}, finalized={self._finalized})"


@dataclass(frozen=True)
class PackDefaults:
    metallic: float = 0.0 # Not metallic.
    occlusion: float = 1.0 # Fully unoccluded.
    smoothness: float = 0.5 # Neutral between rough and smooth.


@dataclass
class MaterialRequest:
    texture_paths: Dict[str, Optional[str]] = field(default_factory=dict) # Maps a role to its source file path, e.g., {"color": "Rock_BaseColor.png", "roughness": None}.
    texture_output_path: Optional[str] = None # Where the packed map is written; derived from the color map if empty.
    material_output_path: Optional[str] = None # Where the material description is written; derived from the color map if empty.
    name: Optional[str] = None # Texture set name used for default output filenames and logs.

    def path_for(self, role: str) -> Optional[str]:
        path = self.texture_paths.get(role)
        return path if path and path.strip() else None


@dataclass
class TextureBinding:
    path: str # File path of the bound texture.
    normal_map: bool = False # Tells the host to interpret the texture as a normal map.


@dataclass
class MaterialDescription:
    shader: str # Shader name the host should bind.
    textures: Dict[str, TextureBinding] = field(default_factory=dict) # Shader texture slot → bound texture.
    floats: Dict[str, float] = field(default_factory=dict) # Shader scalar parameters.
    colors: Dict[str, Tuple[float, float, float, float]] = field(default_factory=dict) # Shader color parameters.
    keywords: List[str] = field(default_factory=list) # Shader keywords to enable.
    global_illumination: Optional[str] = None # Global illumination flag, e.g., "RealtimeEmissive".

    def to_dict(self) -> Dict[str, Any]:
        return {
            "shader": self.shader,
            "textures": {slot: {"path": binding.path, "normal_map": binding.normal_map} for slot, binding in self.textures.items()},
            "floats": dict(self.floats),
            "colors": {name: list(value) for name, value in self.colors.items()},
            "keywords": list(self.keywords),
            "global_illumination": self.global_illumination,
        }


@dataclass
class TextureSet:
    texture_set_name: str # Case-sensitive texture set name after stripping role/size suffixes.
    texture_paths: Dict[str, str] = field(default_factory=dict) # Role → absolute file path.
    untyped: List[str] = field(default_factory=list) # Files whose role couldn't be recognized from the filename.


@dataclass
class ConstructionResult:
    texture_path: str # Saved packed map.
    material_path: str # Saved material description.
    material: MaterialDescription
    resolution: Tuple[int, int] # Packed map resolution.
