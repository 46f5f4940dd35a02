
""" PBR Constructor settings. """

import json
import os
from typing import Tuple

from backend.texture_classes import PackDefaults, RoleConfig


def _as_bool(v) -> bool:
# Converts .json input (bool/int/str/None) to a real bool;
# Avoids the case where a non-empty string like "False" is treated as True.

    if isinstance(v, bool): return v
    if isinstance(v, str):
        input_str = v.strip().lower()
        if input_str == "": return False
        return input_str in ("1","true","yes","on")
    return bool(v)


def _as_float(v, default: float) -> float:
# Converts .json input to float, falling back to the default for empty or invalid values.

    if v is None or (isinstance(v, str) and v.strip() == ""):
        return default
    try:
        return float(v)
    except (TypeError, ValueError):
        return default



#                                           === Loading JSON file ===

_config_path = os.path.join(os.path.dirname(__file__), "config.json")
_config_data: dict = {}
if os.path.isfile(_config_path):
    with open(_config_path, "r", encoding="utf-8") as f:
        _config_data = json.load(f)


# Assigning config values:
INPUT_FOLDER: str = (_config_data.get("INPUT_FOLDER") or "").strip() # Folder containing textures to build materials from.
FILE_TYPE: str = _config_data.get("FILE_TYPE", "png") # File type of the generated packed map.
PACKED_MAP_SUFFIX: str = _config_data.get("PACKED_MAP_SUFFIX", "PackedMap") # Appended to the texture set name for the packed map filename.
MATERIAL_SUFFIX: str = _config_data.get("MATERIAL_SUFFIX", "Material") # Appended to the texture set name for the material filename.
SHADER_NAME: str = _config_data.get("SHADER_NAME", "Universal Render Pipeline/Lit") # Shader referenced by the generated material.

DEFAULT_METALLIC: float = _as_float(_config_data.get("DEFAULT_METALLIC"), 0.0) # Packed R value when the metallic map is missing: not metallic.
DEFAULT_OCCLUSION: float = _as_float(_config_data.get("DEFAULT_OCCLUSION"), 1.0) # Packed G value when the occlusion map is missing: no occlusion.
DEFAULT_SMOOTHNESS: float = _as_float(_config_data.get("DEFAULT_SMOOTHNESS"), 0.5) # Packed A value when the roughness map is missing: balance between rough and smooth.

HEIGHT_MAP_STRENGTH: float = _as_float(_config_data.get("HEIGHT_MAP_STRENGTH"), 0.005) # Default parallax effect intensity.
OCCLUSION_STRENGTH: float = _as_float(_config_data.get("OCCLUSION_STRENGTH"), 1.0) # Default strength of the AO effect.
EMISSION_INTENSITY: float = _as_float(_config_data.get("EMISSION_INTENSITY"), 2.0) # Multiplier of the white emission color.

SHOW_DETAILS: bool = _as_bool(_config_data.get("SHOW_DETAILS", False)) # Shows details like exact resolution when printing logs.


PACK_DEFAULTS: PackDefaults = PackDefaults(metallic=DEFAULT_METALLIC, occlusion=DEFAULT_OCCLUSION, smoothness=DEFAULT_SMOOTHNESS)




#                                           === Constants ===

ALLOWED_FILE_TYPES: Tuple[str, ...] = ("png", "jpg", "jpeg", "tga")
ALPHA_FILE_TYPES: Tuple[str, ...] = ("png", "tga") # The packed map stores smoothness in alpha, so only these can be exported.
SIZE_SUFFIXES: Tuple[str, ...] = ("512", "1k", "2k", "4k", "8k")

REQUIRED_ROLES: Tuple[str, ...] = ("color",)
SIZING_ROLES: Tuple[str, ...] = ("color", "metallic", "roughness", "normal", "height", "occlusion")
# Roles checked for a common resolution before packing. Emission is only referenced by the material.

TEXTURE_CONFIG: dict[str, RoleConfig] = {
    "color": {"suffixes": ["basecolor", "albedo", "diffuse", "color", "diff", "base"]},
    "metallic": {"suffixes": ["metalness", "metallic", "metal", "m"]},
    "roughness": {"suffixes": ["roughness", "rough", "r"]},
    "normal": {"suffixes": ["normal_dx", "normal_gl", "normaldx", "normalgl", "normal", "nor_gl", "nor_dx", "norm", "nrm", "n"]},
    "height": {"suffixes": ["displacement", "height", "disp", "h"]},
    "occlusion": {"suffixes": ["ambientocclusion", "occlusion", "ambient", "ao"]},
    "emission": {"suffixes": ["emissive", "emission", "emit", "glow"]}}
# Filename suffixes used to recognize the role of each file in folder mode, e.g., "Rock_AO.png" > "occlusion".
