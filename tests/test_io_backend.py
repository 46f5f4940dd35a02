import json
import os

import pytest
from PIL import Image

from backend.io_backend import (PBRContext, context_validate_export_extension, list_initial_files, load_texture, load_textures,
                                release_images, resolve_texture_output_path, save_material, save_texture)
from backend.texture_classes import Color, MaterialDescription, Texture, TextureBinding


class TestExportExtension:

    @pytest.mark.parametrize("file_type, expected", [("png", "png"), (".PNG", "png"), (" tga ", "tga")])
    def test_valid(self, file_type, expected):
        context = PBRContext()
        assert context_validate_export_extension(context, file_type) == expected
        assert context.export_extension == expected

    @pytest.mark.parametrize("file_type", ["jpg", "jpeg", "bmp", ""])
    def test_invalid_aborts(self, file_type, capsys):
        with pytest.raises(SystemExit):
            context_validate_export_extension(PBRContext(), file_type)
        assert "Aborted" in capsys.readouterr().out


def test_list_initial_files_filters_and_sorts(tmp_path, write_map):
    write_map("b_ao.png", 10)
    write_map("a_color.tga", 10, mode="RGB")
    (tmp_path / "notes.txt").write_text("x")
    (tmp_path / "folder.png").mkdir()

    files = list_initial_files(str(tmp_path))

    assert [os.path.basename(path) for path in files] == ["a_color.tga", "b_ao.png"]
    assert all(os.path.isabs(path) for path in files)


def test_list_initial_files_without_folder():
    assert list_initial_files("") == []


def test_load_texture_closes_without_context(write_map):
    texture = load_texture(write_map("t_ao.png", 255))
    assert texture.size == (4, 4)
    assert texture.get_pixel(0, 0) == pytest.approx((1.0, 1.0, 1.0, 1.0))


def test_load_textures_tracks_and_releases_images(write_map):
    context = PBRContext()
    textures = load_textures({"color": write_map("t_color.png", 0, mode="RGB"), "normal": None}, context)

    assert textures["normal"] is None
    assert isinstance(textures["color"], Texture)
    assert len(context.opened_images) == 1

    release_images(context)
    assert context.opened_images == []


def test_save_texture_writes_rgba(tmp_path):
    texture = Texture.filled(2, 2, Color(0.2, 0.4, 0.0, 0.6))
    output_path = str(tmp_path / "nested" / "packed.png")

    saved_path = save_texture(texture, output_path)

    assert saved_path == os.path.abspath(output_path).replace("\\", "/")
    with Image.open(output_path) as image:
        assert image.format == "PNG"
        assert image.mode == "RGBA"
        assert image.getpixel((1, 1)) == (51, 102, 0, 153)


def test_save_texture_follows_tga_extension(tmp_path):
    output_path = str(tmp_path / "packed.tga")
    save_texture(Texture.filled(1, 1, Color(1.0, 0.0, 0.0, 0.5)), output_path, PBRContext(export_extension="png"))
    with Image.open(output_path) as image:
        assert image.format == "TGA"


def test_save_material_json(tmp_path):
    material = MaterialDescription(shader="Lit", textures={"_BaseMap": TextureBinding("c.png")}, floats={"_Parallax": 0.005})
    output_path = str(tmp_path / "Material.json")

    save_material(material, output_path)

    with open(output_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    assert data["shader"] == "Lit"
    assert data["textures"]["_BaseMap"] == {"path": "c.png", "normal_map": False}
    assert data["floats"] == {"_Parallax": 0.005}


@pytest.mark.parametrize("filename", ["packed.jpg", "packed.JPEG", "packed.bmp"])
def test_save_texture_rejects_file_type_without_alpha(tmp_path, filename):
    output_path = tmp_path / filename
    with pytest.raises(ValueError):
        save_texture(Texture.filled(1, 1, Color(0.0, 0.0, 0.0)), str(output_path))
    assert not output_path.exists()


def test_save_texture_adds_export_extension(tmp_path):
    saved_path = save_texture(Texture.filled(1, 1, Color(0.0, 0.0, 0.0)), str(tmp_path / "packed"), PBRContext(export_extension="tga"))

    assert saved_path.endswith("/packed.tga")
    with Image.open(saved_path) as image:
        assert image.format == "TGA"


def test_resolve_texture_output_path():
    assert resolve_texture_output_path("out/packed.PNG") == ("out/packed.PNG", "png")
    assert resolve_texture_output_path("out/packed") == ("out/packed.png", "png")
