""" Material assembly: maps the packed map and auxiliary maps to shader parameter slots. """

import os
from typing import Dict, Optional

from backend.texture_classes import MaterialDescription, TextureBinding


def assemble_material(
    packed_map_path: str,
    texture_paths: Dict[str, Optional[str]],
    *,
    shader_name: str,
    height_map_strength: float,
    occlusion_strength: float,
    emission_intensity: float,
) -> MaterialDescription:
# Builds the material description for a lit shader.
# The packed map is bound twice: as the metallic/smoothness map and, if an occlusion map was packed, as the occlusion map.

    color_path = _normalized_path(texture_paths.get("color"))
    normal_path = _normalized_path(texture_paths.get("normal"))
    height_path = _normalized_path(texture_paths.get("height"))
    occlusion_path = _normalized_path(texture_paths.get("occlusion"))
    roughness_path = _normalized_path(texture_paths.get("roughness"))
    emission_path = _normalized_path(texture_paths.get("emission"))

    packed_map_path = _normalized_path(packed_map_path)

    material = MaterialDescription(shader=shader_name)

    if color_path:
        material.textures["_BaseMap"] = TextureBinding(color_path)

    material.textures["_MetallicGlossMap"] = TextureBinding(packed_map_path)
    if roughness_path:
        material.keywords.append("_METALLICSPECGLOSSMAP")
    # Smoothness is read from the packed map's alpha only when a roughness map was provided.

    if normal_path:
        material.textures["_BumpMap"] = TextureBinding(normal_path, normal_map=True)
        material.keywords.append("_NORMALMAP")

    if height_path:
        material.textures["_ParallaxMap"] = TextureBinding(height_path)
        material.floats["_Parallax"] = height_map_strength

    if occlusion_path:
        material.textures["_OcclusionMap"] = TextureBinding(packed_map_path)
        material.floats["_OcclusionStrength"] = occlusion_strength

    if emission_path:
        material.keywords.append("_EMISSION")
        material.global_illumination = "RealtimeEmissive"
        material.textures["_EmissionMap"] = TextureBinding(emission_path)
        material.colors["_EmissionColor"] = (emission_intensity, emission_intensity, emission_intensity, 1.0)

    return material


def _normalized_path(path: Optional[str]) -> Optional[str]:
# Absolute, forward-slashed path, matching the paths returned by the io_backend sinks.
    if not path:
        return None
    return os.path.abspath(path).replace("\\", "/")
