import os

from backend.material import assemble_material


def _absolute(path):
    return os.path.abspath(path).replace("\\", "/")


def _assemble(texture_paths):
    return assemble_material(
        "out/Rock_PackedMap.png",
        texture_paths,
        shader_name="Universal Render Pipeline/Lit",
        height_map_strength=0.005,
        occlusion_strength=1.0,
        emission_intensity=2.0,
    )


def test_color_only():
    material = _assemble({"color": "Rock_BaseColor.png"})

    assert material.shader == "Universal Render Pipeline/Lit"
    assert set(material.textures) == {"_BaseMap", "_MetallicGlossMap"}
    assert material.textures["_MetallicGlossMap"].path == _absolute("out/Rock_PackedMap.png")
    assert material.keywords == []
    assert material.floats == {}
    assert material.global_illumination is None


def test_all_maps():
    material = _assemble({
        "color": "c.png",
        "metallic": "m.png",
        "roughness": "r.png",
        "normal": "n.png",
        "height": "h.png",
        "occlusion": "ao.png",
        "emission": "e.png",
    })

    assert material.textures["_BaseMap"].path == _absolute("c.png")
    assert material.textures["_BumpMap"].path == _absolute("n.png")
    assert material.textures["_BumpMap"].normal_map
    assert not material.textures["_BaseMap"].normal_map
    assert material.textures["_ParallaxMap"].path == _absolute("h.png")
    assert material.textures["_EmissionMap"].path == _absolute("e.png")
    assert material.floats == {"_Parallax": 0.005, "_OcclusionStrength": 1.0}
    assert material.colors == {"_EmissionColor": (2.0, 2.0, 2.0, 1.0)}
    assert material.keywords == ["_METALLICSPECGLOSSMAP", "_NORMALMAP", "_EMISSION"]
    assert material.global_illumination == "RealtimeEmissive"


def test_bindings_share_one_path_format():
    material = _assemble({"color": "textures/../Rock_Color.png", "normal": os.path.join("textures", "Rock_Normal.png")})

    for binding in material.textures.values():
        assert os.path.isabs(binding.path)
        assert "\\" not in binding.path
    assert material.textures["_BaseMap"].path == _absolute("Rock_Color.png")
    assert material.textures["_BumpMap"].path == _absolute("textures/Rock_Normal.png")


def test_packed_map_reused_for_occlusion():
    material = _assemble({"color": "c.png", "occlusion": "ao.png"})
    assert material.textures["_OcclusionMap"].path == material.textures["_MetallicGlossMap"].path
    assert _absolute("ao.png") not in [binding.path for binding in material.textures.values()]


def test_metallic_alone_adds_no_keyword():
    material = _assemble({"color": "c.png", "metallic": "m.png"})
    assert "_METALLICSPECGLOSSMAP" not in material.keywords
