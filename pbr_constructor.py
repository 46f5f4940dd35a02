
""" Builds PBR materials: packs metallic, occlusion and smoothness into one texture and writes a material referencing it. """

import os
import re
import sys
import time
from typing import Dict, List, Optional, Tuple

from backend.errors import MissingRequiredInput, PBRConstructorError
from backend.io_backend import (PBRContext, context_validate_export_extension, list_initial_files, load_textures,
                                release_images, resolve_texture_output_path, save_material, save_texture)
from backend.material import assemble_material
from backend.packing import pack_channels
from backend.texture_classes import (ROLES, ConstructionResult, MaterialRequest, Texture, TextureSet)

from settings import (EMISSION_INTENSITY, HEIGHT_MAP_STRENGTH, INPUT_FOLDER, MATERIAL_SUFFIX, OCCLUSION_STRENGTH, PACK_DEFAULTS,
                      PACKED_MAP_SUFFIX, REQUIRED_ROLES, SHADER_NAME, SHOW_DETAILS, SIZING_ROLES)

from utils import extract_role_from_filename, log, resolution_to_text, validate_safe_name




# Basic data flow for a single texture set:
# MaterialRequest(
#     texture_paths={"color": "textures/Rock_BaseColor.png", "roughness": "textures/Rock_Roughness.png", "occlusion": None, ...},
#     name="Rock",
# )
# > textures loaded by role > pack_channels(metallic, occlusion, roughness, sizing set)
# > textures/Rock_PackedMap.png + textures/Rock_Material.json


#                                           === Pipeline ===


def construct_material(request: MaterialRequest, context: Optional[PBRContext] = None) -> ConstructionResult:
# Packs the request's maps and writes the packed map and the material description.
# Raises MissingRequiredInput, SizeMismatch, NoReferenceDimension or ValueError (packed map file type without alpha) before anything is written.

    context = context or PBRContext()
    if not context.export_extension:
        context_validate_export_extension(context)

    texture_paths: Dict[str, Optional[str]] = {role: request.path_for(role) for role in ROLES}

    for role in REQUIRED_ROLES:
        if texture_paths[role] is None:
            raise MissingRequiredInput(role, request.name)
    # The color map also anchors default output locations.

    texture_output_path, material_output_path = _resolve_output_paths(request, texture_paths, context.export_extension)
    texture_output_path, _ = resolve_texture_output_path(texture_output_path, context)
    # Rejects an explicit output path whose file type cannot hold alpha before any texture is read.

    try:
        textures: Dict[str, Optional[Texture]] = load_textures(texture_paths, context)
        sizing_set: List[Optional[Texture]] = [textures[role] for role in SIZING_ROLES]

        packed_texture: Texture = pack_channels(
            textures["metallic"],
            textures["occlusion"],
            textures["roughness"],
            sizing_set,
            PACK_DEFAULTS,
        )
    finally:
        release_images(context)

    saved_texture_path: str = save_texture(packed_texture, texture_output_path, context)
    log(f"Texture saved to: {saved_texture_path}", "info")

    material = assemble_material(
        saved_texture_path,
        texture_paths,
        shader_name=SHADER_NAME,
        height_map_strength=HEIGHT_MAP_STRENGTH,
        occlusion_strength=OCCLUSION_STRENGTH,
        emission_intensity=EMISSION_INTENSITY,
    )
    saved_material_path: str = save_material(material, material_output_path)
    log(f"Material created at: {saved_material_path}", "info")

    return ConstructionResult(
        texture_path=saved_texture_path,
        material_path=saved_material_path,
        material=material,
        resolution=packed_texture.size,
    )


def construct_materials(input_folder: str) -> List[ConstructionResult]:
# Builds a material for every texture set found in the folder.
# Sets failing validation are logged and skipped; the remaining sets are still processed.

    context = PBRContext()
    start_time = time.time()

    _validate_config(context)

    initial_files: List[str] = list_initial_files(input_folder)
    if not initial_files:
        log(f"Aborted: No input texture files found in: {input_folder}", "error")
        raise SystemExit(1)

    texture_sets: Dict[str, TextureSet] = _build_texture_sets(initial_files)
    results: List[ConstructionResult] = []
    skipped_texture_sets: List[Tuple[str, str]] = []


    for texture_set in texture_sets.values():
        log(f"\nProcessing: {texture_set.texture_set_name}", "info")

        if texture_set.untyped and SHOW_DETAILS:
            log(f"Unrecognized files: {', '.join(texture_set.untyped)}", "warn")

        request = MaterialRequest(texture_paths=dict(texture_set.texture_paths), name=texture_set.texture_set_name)
        try:
            result = construct_material(request, context)
        except PBRConstructorError as error:
            log(f"Skipped '{texture_set.texture_set_name}': {error}", "skip")
            skipped_texture_sets.append((texture_set.texture_set_name, str(error)))
            continue
        except (OSError, ValueError) as error:
            log(f"Skipped '{texture_set.texture_set_name}': failed to process textures ({error})", "error")
            skipped_texture_sets.append((texture_set.texture_set_name, str(error)))
            continue

        results.append(result)
        if SHOW_DETAILS:
            log(f"Created: {os.path.basename(result.texture_path)} ({resolution_to_text(result.resolution)})", "complete")
        else:
            log(f"Created: {os.path.basename(result.texture_path)}", "complete")


# Printing summary logs:
    log("", "info")  # Visual separator
    for texture_set_name, reason in skipped_texture_sets:
        details = f" ({reason})" if SHOW_DETAILS else ""
        log(f"Info: Skipped '{texture_set_name}' set{details}", "info")

    log("All processing done.", "complete")

    if SHOW_DETAILS:
        elapsed_time = time.time() - start_time
        log(f"Execution time: {elapsed_time:.2f} seconds", "info")

    return results




#                                       === Validation & Setup ===

def _validate_config(context: PBRContext) -> None:
# Runs initial validation for the config before any file is touched.

    validate_safe_name(PACKED_MAP_SUFFIX, "PACKED_MAP_SUFFIX")
    validate_safe_name(MATERIAL_SUFFIX, "MATERIAL_SUFFIX")
    # Checks if output name suffixes don't contain unsupported characters.

    context_validate_export_extension(context)


def _build_texture_sets(file_paths: List[str]) -> Dict[str, TextureSet]:
# Groups files into texture sets by the name left after stripping the role/size suffix.
# Set names are matched case-insensitively; the first spelling encountered is kept for output names.

    texture_sets: Dict[str, TextureSet] = {}
    untyped_files: List[str] = []

    for file_path in file_paths:
        filename = os.path.basename(file_path)
        set_info = extract_role_from_filename(filename)
        if set_info is None:
            untyped_files.append(filename)
            continue

        texture_set_name, role = set_info
        texture_set = texture_sets.setdefault(texture_set_name.lower(), TextureSet(texture_set_name))
        if role in texture_set.texture_paths:
            log(f"Duplicate '{role}' map for '{texture_set.texture_set_name}', ignoring: {filename}", "warn")
            continue
        texture_set.texture_paths[role] = file_path

    for filename in untyped_files:
        stem = os.path.splitext(filename)[0].lower()
        owner = next((texture_set for key, texture_set in texture_sets.items() if re.match(rf"{re.escape(key)}[\._\-]", stem)), None)
        if owner is not None:
            owner.untyped.append(filename)
        else:
            log(f"Unrecognized texture file, ignoring: {filename}", "warn")
    # Attaches unrecognized files to a set for detailed logs.

    return texture_sets


def _resolve_output_paths(request: MaterialRequest, texture_paths: Dict[str, Optional[str]], file_extension: str) -> Tuple[str, str]:
# Uses explicit output paths from the request, otherwise places outputs next to the color map.

    color_path: str = texture_paths["color"]
    directory_path: str = os.path.dirname(os.path.abspath(color_path))
    name: str = request.name or ""
    prefix: str = f"{name}_" if name else ""

    texture_output_path: str = request.texture_output_path or os.path.join(directory_path, f"{prefix}{PACKED_MAP_SUFFIX}.{file_extension}")
    material_output_path: str = request.material_output_path or os.path.join(directory_path, f"{prefix}{MATERIAL_SUFFIX}.json")
    return texture_output_path, material_output_path




#                                         === CLI entry point ===

def main() -> None:
    cli_arg = " ".join(sys.argv[1:]).strip() or None
    # Allows a CLI path to override INPUT_FOLDER.
    input_folder = (cli_arg or INPUT_FOLDER or "").strip()
    if not input_folder or not os.path.isdir(input_folder):
        log("Aborted: No valid input folder provided (CLI/config).", "error")
        sys.exit(1)

    construct_materials(input_folder)

if __name__ == "__main__":
    main()
